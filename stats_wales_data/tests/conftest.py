import io
import json

import pytest

from stats_wales_data.areas import AreaStore, SourceColumn

_METADATA_URL = "http://open.statswales.gov.wales/en-gb/dataset/$metadata"


@pytest.fixture
def store() -> AreaStore:
    return AreaStore()


@pytest.fixture
def areas_columns() -> dict:
    """Column mapping of the authority code catalogue."""
    return {
        SourceColumn.AUTH_CODE: "Local authority code",
        SourceColumn.AUTH_NAME_ENG: "Name (eng)",
        SourceColumn.AUTH_NAME_CYM: "Name (cym)",
    }


@pytest.fixture
def pop_columns() -> dict:
    """Column mapping of a single-measure year-column CSV."""
    return {
        SourceColumn.AUTH_CODE: "AuthorityCode",
        SourceColumn.SINGLE_MEASURE_CODE: "pop",
        SourceColumn.SINGLE_MEASURE_NAME: "Population",
    }


@pytest.fixture
def popden_columns() -> dict:
    """Column mapping of a multi-measure StatsWales JSON export."""
    return {
        SourceColumn.AUTH_CODE: "Localauthority_Code",
        SourceColumn.AUTH_NAME_ENG: "Localauthority_ItemName_ENG",
        SourceColumn.MEASURE_CODE: "Measure_Code",
        SourceColumn.MEASURE_NAME: "Measure_ItemName_ENG",
        SourceColumn.YEAR: "Year_Code",
        SourceColumn.VALUE: "Data",
    }


@pytest.fixture
def trains_columns() -> dict:
    """Column mapping of a single-measure StatsWales JSON export."""
    return {
        SourceColumn.AUTH_CODE: "LocalAuthority_Code",
        SourceColumn.AUTH_NAME_ENG: "LocalAuthority_ItemName_ENG",
        SourceColumn.SINGLE_MEASURE_CODE: "rail",
        SourceColumn.SINGLE_MEASURE_NAME: "Rail passenger journeys",
        SourceColumn.YEAR: "Year_Code",
        SourceColumn.VALUE: "Data",
    }


@pytest.fixture
def popden_record():
    """Build one record of the popden export."""

    def build(code, name, measure, label, year, value) -> dict:
        return {
            "Localauthority_Code": code,
            "Localauthority_ItemName_ENG": name,
            "Measure_Code": measure,
            "Measure_ItemName_ENG": label,
            "Year_Code": year,
            "Data": value,
        }

    return build


@pytest.fixture
def json_stream():
    """Wrap records the way StatsWales OData exports do."""

    def build(records: list[dict]) -> io.StringIO:
        return io.StringIO(
            json.dumps(
                {
                    "odata.metadata": _METADATA_URL,
                    "value": records,
                    "odata.nextLink": None,
                }
            )
        )

    return build
