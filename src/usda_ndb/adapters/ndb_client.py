"""USDA Food Composition Databases (NDB) API client."""

import asyncio
import json
import logging
import re
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Protocol, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from usda_ndb.adapters.ndb_models import (
    FoodsReport,
    FoodsReportParams,
    ListParams,
    NdbList,
    NutrientReport,
    NutrientReportParams,
    SearchParams,
    SearchResult,
)
from usda_ndb.domain.errors import (
    NdbCancelledError,
    NdbConfigurationError,
    NdbDecodeError,
    NdbEncodeError,
)
from usda_ndb.domain.query import CallContext, QueryOptions

ENTRY_POINT = "api.nal.usda.gov/ndb/"

# RFC 3986 user-info: unreserved, sub-delims, ":" and percent escapes.
_USERINFO_PATTERN = re.compile(r"(?:[A-Za-z0-9\-._~!$&'()*+,;=:]|%[0-9A-Fa-f]{2})+")

_logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)
ResultT = TypeVar("ResultT")


class NdbClient(Protocol):
    """Interface for NDB API interactions."""

    async def get_list(
        self,
        params: ListParams,
        options: QueryOptions | None = None,
        context: CallContext | None = None,
    ) -> NdbList:
        """Fetch a list of foods, nutrients or food groups."""

    async def get_nutrient_report(
        self,
        params: NutrientReportParams,
        options: QueryOptions | None = None,
        context: CallContext | None = None,
    ) -> NutrientReport:
        """Fetch a nutrient report."""

    async def get_foods_report(
        self, params: FoodsReportParams, context: CallContext | None = None
    ) -> FoodsReport:
        """Fetch a V2 foods report."""

    async def search(
        self,
        params: SearchParams,
        options: QueryOptions | None = None,
        context: CallContext | None = None,
    ) -> SearchResult:
        """Search foods by name."""


def add_query_options(path: str, options: QueryOptions | None) -> str:
    """Append the provided query options to ``path``."""
    if options is None:
        return path
    try:
        url = httpx.URL(path)
    except httpx.InvalidURL as exc:
        raise NdbEncodeError(f"Invalid request path: {path!r}") from exc
    params = options.as_params()
    if not params:
        return path
    return str(url.copy_with(params=params))


def redacted_url(url: httpx.URL) -> str:
    """Render a URL without its user-info so the access key stays out of logs."""
    return f"{url.scheme}://{url.netloc.decode('ascii')}{url.raw_path.decode('ascii')}"


@dataclass(frozen=True)
class HttpxNdbClient(NdbClient):
    """HTTPX-backed NDB client."""

    base_url: httpx.URL
    http_client: httpx.AsyncClient

    @classmethod
    def create(
        cls,
        api_key: str,
        http_client: httpx.AsyncClient | None = None,
        entry_point: str = ENTRY_POINT,
    ) -> "HttpxNdbClient":
        """Create an NDB client, rejecting keys that cannot form a valid URL."""
        if not _USERINFO_PATTERN.fullmatch(api_key):
            raise NdbConfigurationError("NDB API key is not valid URL user-info")
        try:
            base_url = httpx.URL(f"https://{api_key}@{entry_point}")
        except httpx.InvalidURL as exc:
            raise NdbConfigurationError("NDB base URL is invalid") from exc
        if not base_url.host:
            raise NdbConfigurationError(f"NDB entry point has no host: {entry_point!r}")
        return cls(base_url=base_url, http_client=http_client or httpx.AsyncClient())

    async def __aenter__(self) -> "HttpxNdbClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    def build_request(self, path: str, payload: object) -> httpx.Request:
        """Build a JSON POST request for ``path`` relative to the base URL."""
        try:
            if isinstance(payload, BaseModel):
                payload = payload.model_dump(mode="json", by_alias=True, exclude_none=True)
            body = json.dumps(payload, separators=(",", ":"))
        except (TypeError, ValueError) as exc:
            raise NdbEncodeError(f"Cannot encode request body for {path}") from exc
        try:
            url = httpx.URL(str(self.base_url) + path)
        except httpx.InvalidURL as exc:
            raise NdbEncodeError(f"Invalid request URL for {path}") from exc
        return self.http_client.build_request(
            "POST",
            url,
            content=body.encode(),
            headers={"Content-Type": "application/json"},
        )

    async def dispatch(
        self,
        request: httpx.Request,
        response_model: type[ModelT],
        context: CallContext | None = None,
    ) -> ModelT:
        """Send a request and decode the JSON response into ``response_model``."""
        context = context or CallContext()
        target = redacted_url(request.url)
        if context.cancelled:
            raise NdbCancelledError(f"Call to {target} cancelled before step")

        _logger.debug("NDB request: %s %s", request.method, target)
        response = await self._race(
            self.http_client.send(request, stream=True), context, target
        )
        try:
            response.raise_for_status()
            await self._race(response.aread(), context, target)
            return response_model.model_validate_json(response.content)
        except ValidationError as exc:
            raise NdbDecodeError(
                f"Unexpected {response_model.__name__} payload from {target}"
            ) from exc
        finally:
            await response.aclose()

    async def _race(
        self, awaitable: Awaitable[ResultT], context: CallContext, target: str
    ) -> ResultT:
        """Await a transport step, abandoning it once the context fires."""
        step = asyncio.ensure_future(awaitable)
        watcher = asyncio.ensure_future(context.wait())
        try:
            done, _ = await asyncio.wait(
                {step, watcher}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            watcher.cancel()
            if not step.done():
                step.cancel()

        if step not in done:
            raise NdbCancelledError(f"Call to {target} cancelled")
        try:
            return step.result()
        except httpx.HTTPError as exc:
            if context.cancelled:
                raise NdbCancelledError(f"Call to {target} cancelled") from exc
            _logger.warning("NDB request to %s failed: %s", target, exc)
            raise

    async def get_list(
        self,
        params: ListParams,
        options: QueryOptions | None = None,
        context: CallContext | None = None,
    ) -> NdbList:
        """Fetch a list from the ``list`` endpoint."""
        request = self.build_request(add_query_options("list", options), params)
        return await self.dispatch(request, NdbList, context)

    async def get_nutrient_report(
        self,
        params: NutrientReportParams,
        options: QueryOptions | None = None,
        context: CallContext | None = None,
    ) -> NutrientReport:
        """Fetch a report from the ``nutrients`` endpoint."""
        request = self.build_request(add_query_options("nutrients", options), params)
        return await self.dispatch(request, NutrientReport, context)

    async def get_foods_report(
        self, params: FoodsReportParams, context: CallContext | None = None
    ) -> FoodsReport:
        """Fetch a report from the ``V2/reports`` endpoint."""
        request = self.build_request("V2/reports", params)
        return await self.dispatch(request, FoodsReport, context)

    async def search(
        self,
        params: SearchParams,
        options: QueryOptions | None = None,
        context: CallContext | None = None,
    ) -> SearchResult:
        """Search foods through the ``search`` endpoint."""
        request = self.build_request(add_query_options("search", options), params)
        return await self.dispatch(request, SearchResult, context)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
