"""Pydantic models for NDB request bodies and responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

# Some NDB fields switch between number, string and null across records.
JsonScalar = str | int | float | None


class NdbModel(BaseModel):
    """Base model for NDB payloads."""

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        """Decode JSON null as the field's zero value."""
        if value is not None or info.field_name is None:
            return value
        return cls.model_fields[info.field_name].get_default(call_default_factory=True)


# Request bodies


class ListParams(NdbModel):
    """Body for the ``list`` endpoint."""

    lt: str | None = None


class NutrientReportParams(NdbModel):
    """Body for the ``nutrients`` endpoint."""

    fg: list[str] | None = None
    ndbno: str | None = None
    nutrients: list[str] = Field(default_factory=list)
    subset: str | None = None


class FoodsReportParams(NdbModel):
    """Body for the ``V2/reports`` endpoint."""

    ndbno: list[str] = Field(default_factory=list)
    type: str | None = None


class SearchParams(NdbModel):
    """Body for the ``search`` endpoint."""

    q: str | None = None
    ds: str | None = None
    fg: str | None = None


# list


class ListItem(NdbModel):
    offset: int = 0
    id: str = ""
    name: str = ""


class ListBody(NdbModel):
    lt: str = ""
    start: int = 0
    end: int = 0
    total: int = 0
    sr: str = ""
    sort: str = ""
    item: list[ListItem] = Field(default_factory=list)


class NdbList(NdbModel):
    """Response of the ``list`` endpoint."""

    listing: ListBody = Field(default_factory=ListBody, alias="list")


# nutrients


class NutrientGroup(NdbModel):
    id: str = ""
    description: str = ""


class ReportNutrient(NdbModel):
    nutrient_id: int = 0
    nutrient: str = ""
    unit: str = ""
    value: JsonScalar = None
    gm: float = 0.0


class ReportFood(NdbModel):
    ndbno: str = ""
    name: str = ""
    weight: float = 0.0
    measure: str = ""
    nutrients: list[ReportNutrient] = Field(default_factory=list)


class NutrientReportBody(NdbModel):
    sr: str = ""
    groups: list[NutrientGroup] = Field(default_factory=list)
    subset: str = ""
    end: int = 0
    start: int = 0
    total: int = 0
    foods: list[ReportFood] = Field(default_factory=list)


class NutrientReport(NdbModel):
    """Response of the ``nutrients`` endpoint."""

    report: NutrientReportBody = Field(default_factory=NutrientReportBody)


# V2/reports


class FoodDescription(NdbModel):
    ndbno: str = ""
    name: str = ""
    sd: str = ""
    fg: str = ""
    sn: str = ""
    cn: str = ""
    manu: str = ""
    nf: float = 0.0
    cf: float = 0.0
    ff: float = 0.0
    pf: float = 0.0
    r: str = ""
    rd: str = ""
    ds: str = ""
    ru: str = ""


class Measure(NdbModel):
    label: str = ""
    eqv: float = 0.0
    eunit: str = ""
    qty: float = 0.0
    value: JsonScalar = None


class FoodNutrient(NdbModel):
    nutrient_id: JsonScalar = None
    name: str = ""
    group: str = ""
    unit: str = ""
    value: JsonScalar = None
    derivation: str = ""
    sourcecode: Any = None
    dp: JsonScalar = None
    se: str = ""
    measures: list[Measure] = Field(default_factory=list)


class FoodSource(NdbModel):
    id: int = 0
    title: str = ""
    authors: str = ""
    vol: str = ""
    iss: str = ""
    year: str = ""


class FoodRecord(NdbModel):
    sr: str = ""
    type: str = ""
    desc: FoodDescription = Field(default_factory=FoodDescription)
    nutrients: list[FoodNutrient] = Field(default_factory=list)
    sources: list[FoodSource] = Field(default_factory=list)
    footnotes: list[Any] = Field(default_factory=list)
    langual: list[Any] = Field(default_factory=list)


class FoodsReportEntry(NdbModel):
    """One requested food; ``food`` is unset when ``error`` explains why."""

    food: FoodRecord | None = None
    error: str = ""


class FoodsReport(NdbModel):
    """Response of the ``V2/reports`` endpoint."""

    foods: list[FoodsReportEntry] = Field(default_factory=list)
    count: int = 0
    notfound: int = 0
    api: float = 0.0


# search


class SearchItem(NdbModel):
    offset: int = 0
    group: str = ""
    name: str = ""
    ndbno: str = ""
    ds: str = ""
    manu: str = ""


class SearchBody(NdbModel):
    q: str = ""
    sr: str = ""
    ds: str = ""
    start: int = 0
    end: int = 0
    total: int = 0
    group: str = ""
    sort: str = ""
    item: list[SearchItem] = Field(default_factory=list)


class SearchResult(NdbModel):
    """Response of the ``search`` endpoint."""

    listing: SearchBody = Field(default_factory=SearchBody, alias="list")
