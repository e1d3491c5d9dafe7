"""Pydantic schema for source formats, column mappings and import filters."""

from enum import Enum

from pydantic import BaseModel, Field, field_validator


class SourceFormat(str, Enum):
    AUTHORITY_CODE_CSV = "authority_code_csv"
    AUTHORITY_BY_YEAR_CSV = "authority_by_year_csv"
    STATS_WALES_JSON = "stats_wales_json"


class SourceColumn(str, Enum):
    AUTH_CODE = "auth_code"
    AUTH_NAME_ENG = "auth_name_eng"
    AUTH_NAME_CYM = "auth_name_cym"
    MEASURE_CODE = "measure_code"
    MEASURE_NAME = "measure_name"
    SINGLE_MEASURE_CODE = "single_measure_code"
    SINGLE_MEASURE_NAME = "single_measure_name"
    YEAR = "year"
    VALUE = "value"


ColumnMapping = dict[SourceColumn, str]


class ImportFilters(BaseModel):
    """Inclusion rules applied while a source is imported.

    Empty code sets match everything. The year range is inclusive and
    matches everything while either endpoint is 0; the endpoints may be
    given in either order.
    """

    areas: frozenset[str] = frozenset()
    measures: frozenset[str] = frozenset()
    years: tuple[int, int] = (0, 0)

    model_config = {"frozen": True}

    @field_validator("areas", "measures", mode="before")
    @classmethod
    def _lowercase_codes(cls, codes):
        if codes is None:
            return frozenset()
        return frozenset(str(code).lower() for code in codes)

    @field_validator("years", mode="before")
    @classmethod
    def _default_years(cls, years):
        return (0, 0) if years is None else tuple(years)

    @field_validator("years")
    @classmethod
    def _non_negative_years(cls, years: tuple[int, int]) -> tuple[int, int]:
        if min(years) < 0:
            raise ValueError(f"Years must not be negative, got {years}")
        return years

    def includes_area(self, code: str) -> bool:
        return not self.areas or code.lower() in self.areas

    def includes_measure(self, code: str) -> bool:
        return not self.measures or code.lower() in self.measures

    def includes_year(self, year: int) -> bool:
        first, last = self.years
        if first == 0 or last == 0:
            return True
        return min(first, last) <= year <= max(first, last)


class InputFileSource(BaseModel):
    """A dataset the loader knows how to find and import."""

    code: str
    name: str
    file: str
    format: SourceFormat
    columns: ColumnMapping = Field(default_factory=dict)
