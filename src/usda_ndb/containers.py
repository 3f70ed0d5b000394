"""Dependency container wiring for the NDB client."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace

import httpx

from usda_ndb.adapters.ndb_client import HttpxNdbClient
from usda_ndb.app_logging import configure_logging
from usda_ndb.config import Settings
from usda_ndb.services.foods import FoodDataService


@dataclass
class AppContainer:
    """Holds the configured client and services."""

    settings: Settings
    ndb_client: HttpxNdbClient
    food_data_service: FoodDataService
    close_resources: Callable[[], Awaitable[None]]


def build_food_data_service(
    ndb_client: HttpxNdbClient, settings: Settings
) -> FoodDataService:
    """Create the lookup service with page sizes taken from settings."""
    defaults = FoodDataService(ndb_client)
    return FoodDataService(
        ndb_client=ndb_client,
        list_options=replace(defaults.list_options, max=settings.list_max_results),
        nutrients_report_options=replace(
            defaults.nutrients_report_options,
            max=settings.nutrients_report_max_results,
        ),
        food_nutrients_options=replace(
            defaults.food_nutrients_options, max=settings.food_nutrients_max_results
        ),
        search_options=replace(defaults.search_options, max=settings.search_max_results),
        debug=settings.ndb_debug,
    )


def build_container(
    settings: Settings | None = None, http_client: httpx.AsyncClient | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    configure_logging(logging.DEBUG if resolved_settings.ndb_debug else logging.INFO)
    ndb_client = HttpxNdbClient.create(
        api_key=resolved_settings.ndb_api_key,
        http_client=http_client
        or httpx.AsyncClient(timeout=resolved_settings.ndb_timeout_seconds),
        entry_point=resolved_settings.ndb_entry_point,
    )
    food_data_service = build_food_data_service(ndb_client, resolved_settings)

    async def close_resources() -> None:
        await ndb_client.close()

    return AppContainer(
        settings=resolved_settings,
        ndb_client=ndb_client,
        food_data_service=food_data_service,
        close_resources=close_resources,
    )
