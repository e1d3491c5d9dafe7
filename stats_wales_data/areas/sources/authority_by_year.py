"""Single-measure CSV parser with one column per year.

Used for the StatsWales "complete" downloads, e.g.
``complete-popu1009-pop.csv``:

    AuthorityCode,1991,1992,1993
    W06000001,69123,69379,69772

Each file carries one measure, named by the column mapping rather than the
file itself. Area names are not included; they come from the catalogue.
"""

import logging
from typing import TYPE_CHECKING, TextIO

from stats_wales_data.areas.exceptions import ParseError
from stats_wales_data.areas.models import Area, Measure
from stats_wales_data.areas.schema import (
    ColumnMapping,
    ImportFilters,
    SourceColumn,
)
from stats_wales_data.areas.sources._common import (
    read_csv_rows,
    require_columns,
    to_float,
    to_year,
)

if TYPE_CHECKING:
    from stats_wales_data.areas.store import AreaStore

logger = logging.getLogger(__name__)

_SOURCE = "authority by year CSV"

# Authority code plus at least one year.
_MIN_FIELDS = 3


def populate(
    store: "AreaStore",
    stream: TextIO,
    columns: ColumnMapping,
    filters: ImportFilters,
) -> None:
    require_columns(
        columns,
        SourceColumn.SINGLE_MEASURE_CODE,
        SourceColumn.SINGLE_MEASURE_NAME,
        source=_SOURCE,
    )
    measure_code = columns[SourceColumn.SINGLE_MEASURE_CODE]
    measure_label = columns[SourceColumn.SINGLE_MEASURE_NAME]
    if not filters.includes_measure(measure_code):
        logger.debug("Skipping %s, measure %s is filtered out", _SOURCE, measure_code)
        return

    rows = read_csv_rows(stream, _SOURCE)
    header, data = rows[0], rows[1:]
    if len(header) < _MIN_FIELDS:
        raise ParseError(
            f"{_SOURCE}: expected an authority code column and at least one year"
        )
    years = [to_year(token, f"{_SOURCE} header") for token in header[1:]]

    imported = 0
    for row_number, fields in enumerate(data, start=1):
        # Rows holding only an authority code are incomplete, not errors.
        if len(fields) < _MIN_FIELDS:
            continue
        area_code = fields[0]
        if not filters.includes_area(area_code):
            continue

        measure = Measure(code=measure_code, label=measure_label)
        # Cells past the last year column are ignored.
        for year, cell in zip(years, fields[1:]):
            if cell == "" or not filters.includes_year(year):
                continue
            measure.set_value(year, to_float(cell, f"{_SOURCE} row {row_number}"))

        area = Area(code=area_code)
        area.set_measure(measure_code, measure)
        store.set_area(area_code, area)
        imported += 1

    logger.debug(
        "Imported measure %s for %d of %d rows", measure_code, imported, len(data)
    )
