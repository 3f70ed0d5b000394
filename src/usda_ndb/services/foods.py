"""Convenience lookups over the NDB client with fixed request parameters."""

import logging
from dataclasses import dataclass

from usda_ndb.adapters.ndb_client import NdbClient
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
from usda_ndb.domain.query import CallContext, QueryOptions

# Potassium, K and total lipid (fat).
DEFAULT_NUTRIENT_IDS = ("306", "204")
# Baby foods.
DEFAULT_REPORT_FOOD_GROUPS = ("0300",)
BASIC_REPORT_TYPE = "b"

_logger = logging.getLogger(__name__)


@dataclass
class FoodDataService:
    """Common NDB lookups with preset paging, sorting and nutrient selection."""

    ndb_client: NdbClient
    list_options: QueryOptions = QueryOptions(max=1500, offset=0, sort="id")
    nutrients_report_options: QueryOptions = QueryOptions(max=10, offset=0, sort="c")
    food_nutrients_options: QueryOptions = QueryOptions(max=100, offset=0, sort="c")
    search_options: QueryOptions = QueryOptions(max=100, offset=0, sort="n")
    nutrient_ids: tuple[str, ...] = DEFAULT_NUTRIENT_IDS
    report_food_groups: tuple[str, ...] = DEFAULT_REPORT_FOOD_GROUPS
    debug: bool = False

    async def get_list_by_type(
        self, list_type: str, context: CallContext | None = None
    ) -> NdbList:
        """List foods, nutrients or food groups by list type (``f``, ``n``, ``g``...)."""
        result = await self.ndb_client.get_list(
            ListParams(lt=list_type), self.list_options, context
        )
        if self.debug:
            _logger.info(
                "NDB list: type=%s items=%s", list_type, len(result.listing.item)
            )
        return result

    async def get_nutrients_report(
        self, context: CallContext | None = None
    ) -> NutrientReport:
        """Report the default nutrients across the default food groups."""
        params = NutrientReportParams(
            fg=list(self.report_food_groups), nutrients=list(self.nutrient_ids)
        )
        result = await self.ndb_client.get_nutrient_report(
            params, self.nutrients_report_options, context
        )
        if self.debug:
            _logger.info("NDB nutrients report: foods=%s", len(result.report.foods))
        return result

    async def get_food_nutrients_report(
        self, ndbno: str, context: CallContext | None = None
    ) -> NutrientReport:
        """Report the default nutrients for a single food."""
        params = NutrientReportParams(ndbno=ndbno, nutrients=list(self.nutrient_ids))
        result = await self.ndb_client.get_nutrient_report(
            params, self.food_nutrients_options, context
        )
        if self.debug:
            _logger.info("NDB food nutrients report: ndbno=%s", ndbno)
        return result

    async def get_basic_food_report(
        self, ndbno: str, context: CallContext | None = None
    ) -> FoodsReport:
        """Fetch the basic V2 report for a single food."""
        params = FoodsReportParams(ndbno=[ndbno], type=BASIC_REPORT_TYPE)
        result = await self.ndb_client.get_foods_report(params, context)
        if self.debug:
            _logger.info(
                "NDB basic report: ndbno=%s notfound=%s", ndbno, result.notfound
            )
        return result

    async def get_food_name_search(
        self, name: str, context: CallContext | None = None
    ) -> SearchResult:
        """Search foods by name, sorted by name."""
        result = await self.ndb_client.search(
            SearchParams(q=name), self.search_options, context
        )
        if self.debug:
            _logger.info("NDB search: q=%s total=%s", name, result.listing.total)
        return result
