"""Area statistics imported from StatsWales and merged in memory.

Key concepts:
- Area: a local authority, with names per language and a set of measures
- Measure: one statistical indicator, holding a value per year
- AreaStore: every imported Area, keyed case-insensitively by authority code

Importing the same area or measure again combines rather than duplicates:
newer values win year by year, and years only seen before are kept.

Example usage:
    from stats_wales_data.areas import AreaStore, SourceFormat, SourceColumn

    store = AreaStore()
    with open("datasets/areas.csv") as stream:
        store.populate(
            stream,
            SourceFormat.AUTHORITY_CODE_CSV,
            {
                SourceColumn.AUTH_CODE: "Local authority code",
                SourceColumn.AUTH_NAME_ENG: "Name (eng)",
                SourceColumn.AUTH_NAME_CYM: "Name (cym)",
            },
        )

    store.get_area("w06000023").get_name("eng")  # "Powys"
"""

from stats_wales_data.areas.exceptions import (
    ConfigurationError,
    InvalidFormatError,
    NotFoundError,
    ParseError,
    StatsWalesError,
)
from stats_wales_data.areas.models import Area, Measure
from stats_wales_data.areas.schema import (
    ImportFilters,
    InputFileSource,
    SourceColumn,
    SourceFormat,
)
from stats_wales_data.areas.store import AreaStore

__all__ = [
    "Area",
    "AreaStore",
    "ConfigurationError",
    "ImportFilters",
    "InputFileSource",
    "InvalidFormatError",
    "Measure",
    "NotFoundError",
    "ParseError",
    "SourceColumn",
    "SourceFormat",
    "StatsWalesError",
]
