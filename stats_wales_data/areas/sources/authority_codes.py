"""Authority code catalogue parser.

Reads the three-column ``areas.csv`` listing every local authority code with
its English and Welsh names:

    Local authority code,Name (eng),Name (cym)
    W06000001,Isle of Anglesey,Ynys Môn
"""

import logging
from typing import TYPE_CHECKING, TextIO

from stats_wales_data.areas.exceptions import ConfigurationError, ParseError
from stats_wales_data.areas.models import Area
from stats_wales_data.areas.schema import (
    ColumnMapping,
    ImportFilters,
    SourceColumn,
)
from stats_wales_data.areas.sources._common import read_csv_rows, require_columns

if TYPE_CHECKING:
    from stats_wales_data.areas.store import AreaStore

logger = logging.getLogger(__name__)

_SOURCE = "authority code CSV"
_FIELDS_PER_ROW = 3

LANG_CODE_ENG = "eng"
LANG_CODE_CYM = "cym"


def populate(
    store: "AreaStore",
    stream: TextIO,
    columns: ColumnMapping,
    filters: ImportFilters,
) -> None:
    require_columns(
        columns,
        SourceColumn.AUTH_CODE,
        SourceColumn.AUTH_NAME_ENG,
        SourceColumn.AUTH_NAME_CYM,
        source=_SOURCE,
    )
    rows = read_csv_rows(stream, _SOURCE)
    header, data = rows[0], rows[1:]
    if len(header) > len(columns):
        raise ConfigurationError(
            f"{_SOURCE}: the file declares {len(header)} columns but the "
            f"mapping only has {len(columns)}"
        )

    imported = 0
    for row_number, fields in enumerate(data, start=1):
        if len(fields) != _FIELDS_PER_ROW:
            raise ParseError(
                f"{_SOURCE}: row {row_number} has {len(fields)} fields, "
                f"{_FIELDS_PER_ROW} expected"
            )
        code, name_eng, name_cym = fields
        if not filters.includes_area(code):
            continue

        area = Area(code=code)
        area.set_name(LANG_CODE_ENG, name_eng)
        area.set_name(LANG_CODE_CYM, name_cym)
        store.set_area(code, area)
        imported += 1

    logger.debug("Imported %d of %d authority codes", imported, len(data))
