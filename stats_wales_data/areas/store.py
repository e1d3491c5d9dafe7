"""In-memory store of areas, filled source by source.

Example usage:
    from stats_wales_data.areas import AreaStore, SourceFormat
    from stats_wales_data.areas.registry import get_dataset

    store = AreaStore()
    dataset = get_dataset("popden")
    with open("datasets/popu1009.json") as stream:
        store.populate(
            stream,
            dataset.format,
            dataset.columns,
            areas_filter={"W06000011"},
            years_filter=(2010, 2015),
        )

    print(store)
    print(store.to_json())
"""

import logging
from typing import Iterable, TextIO

import pandas as pd
from pydantic import ValidationError

from stats_wales_data.areas import render
from stats_wales_data.areas.exceptions import ConfigurationError, NotFoundError
from stats_wales_data.areas.models import Area, upsert
from stats_wales_data.areas.schema import (
    ColumnMapping,
    ImportFilters,
    SourceFormat,
)
from stats_wales_data.areas.sources import (
    authority_by_year,
    authority_codes,
    stats_wales_json,
)

logger = logging.getLogger(__name__)

_PARSERS = {
    SourceFormat.AUTHORITY_CODE_CSV: authority_codes.populate,
    SourceFormat.AUTHORITY_BY_YEAR_CSV: authority_by_year.populate,
    SourceFormat.STATS_WALES_JSON: stats_wales_json.populate,
}


class AreaStore:
    """Every imported Area, keyed by lowercase authority code.

    Importing an area that is already present combines the two: names and
    measures from the newer record win, anything only the stored area knows
    about is kept.
    """

    def __init__(self):
        self.areas: dict[str, Area] = {}

    # === Area operations ===

    def set_area(self, code: str, area: Area) -> None:
        upsert(
            self.areas,
            {code.lower(): area.model_copy(deep=True)},
            merge=Area.combine,
        )

    def get_area(self, code: str) -> Area:
        try:
            return self.areas[code.lower()]
        except KeyError:
            raise NotFoundError(f"No area found matching {code}") from None

    def size(self) -> int:
        return len(self.areas)

    def __len__(self) -> int:
        return len(self.areas)

    def __iter__(self):
        return iter(self.areas.values())

    # === Import ===

    def populate(
        self,
        stream: TextIO,
        source_format: SourceFormat | str,
        columns: ColumnMapping,
        areas_filter: Iterable[str] | None = None,
        measures_filter: Iterable[str] | None = None,
        years_filter: tuple[int, int] | None = None,
    ) -> None:
        """Import one source into the store.

        Args:
            stream: open text stream holding the source.
            source_format: which parser to use.
            columns: mapping of logical columns to the source's own column
                or field names.
            areas_filter: authority codes to import, all if empty or None.
            measures_filter: measure codes to import, all if empty or None.
            years_filter: inclusive (start, end) years, all if None or (0, 0).

        Raises:
            ConfigurationError: unknown format or unusable column mapping.
            ParseError: the source is malformed. Rows merged before the
                failure stay in the store.
        """
        try:
            source_format = SourceFormat(source_format)
        except ValueError:
            raise ConfigurationError(
                f"Unexpected source format: {source_format!r}"
            ) from None
        try:
            filters = ImportFilters(
                areas=areas_filter,
                measures=measures_filter,
                years=years_filter,
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid import filters: {e}") from e

        before = self.size()
        _PARSERS[source_format](self, stream, columns, filters)
        logger.debug(
            "Populated from %s: %d areas (%d new)",
            source_format.value,
            self.size(),
            self.size() - before,
        )

    # === Output ===

    def to_json(self, indent: int | None = None) -> str:
        return render.to_json(self, indent=indent)

    def to_dataframe(self) -> pd.DataFrame:
        """Export every reading as a long-format DataFrame."""
        rows = [
            {
                "area": area.code,
                "measure": measure_code,
                "year": year,
                "value": value,
            }
            for area in self.areas.values()
            for measure_code, measure in area.measures.items()
            for year, value in measure.readings()
        ]
        if not rows:
            return pd.DataFrame(columns=["area", "measure", "year", "value"])
        return pd.DataFrame(rows)

    def __str__(self) -> str:
        return render.render_store(self)
