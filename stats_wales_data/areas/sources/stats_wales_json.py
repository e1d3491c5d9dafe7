"""StatsWales OData JSON parser.

StatsWales exports hold three top-level keys: ``odata.metadata``, ``value``
and ``odata.nextLink``. ``value`` is a flat list of records, one per
area/measure/year reading, e.g.

    {"Localauthority_Code": "W06000001",
     "Localauthority_ItemName_ENG": "Isle of Anglesey",
     "Measure_Code": "pop", "Measure_ItemName_ENG": "Population",
     "Year_Code": "1991", "Data": 69123.0}

Field names differ between datasets and are taken from the column mapping.
Datasets holding a single measure name it in the mapping instead.
"""

import json
import logging
import math
from numbers import Real
from typing import TYPE_CHECKING, TextIO

from stats_wales_data.areas.exceptions import ParseError
from stats_wales_data.areas.models import Area, Measure
from stats_wales_data.areas.schema import (
    ColumnMapping,
    ImportFilters,
    SourceColumn,
)
from stats_wales_data.areas.sources._common import require_columns, to_year

if TYPE_CHECKING:
    from stats_wales_data.areas.store import AreaStore

logger = logging.getLogger(__name__)

_SOURCE = "StatsWales JSON"
RECORDS_KEY = "value"
LANG_CODE_ENG = "eng"


def _is_single_measure(columns: ColumnMapping) -> bool:
    return SourceColumn.SINGLE_MEASURE_CODE in columns


def _read_value(record: dict, field: str) -> float:
    value = record[field]
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"field {field!r} holds {value!r}, a number was expected")
    if not math.isfinite(value):
        raise ValueError(f"field {field!r} holds {value!r}, not a finite number")
    return float(value)


def _read_text(record: dict, field: str) -> str:
    value = record[field]
    if not isinstance(value, str):
        raise TypeError(f"field {field!r} holds {value!r}, a string was expected")
    return value


def populate(
    store: "AreaStore",
    stream: TextIO,
    columns: ColumnMapping,
    filters: ImportFilters,
) -> None:
    single_measure = _is_single_measure(columns)
    measure_columns = (
        (SourceColumn.SINGLE_MEASURE_CODE, SourceColumn.SINGLE_MEASURE_NAME)
        if single_measure
        else (SourceColumn.MEASURE_CODE, SourceColumn.MEASURE_NAME)
    )
    require_columns(
        columns,
        SourceColumn.AUTH_CODE,
        SourceColumn.AUTH_NAME_ENG,
        SourceColumn.YEAR,
        SourceColumn.VALUE,
        *measure_columns,
        source=_SOURCE,
    )
    area_code_field = columns[SourceColumn.AUTH_CODE]
    name_eng_field = columns[SourceColumn.AUTH_NAME_ENG]
    year_field = columns[SourceColumn.YEAR]
    value_field = columns[SourceColumn.VALUE]

    imported = 0
    index = -1
    try:
        payload = json.load(stream)
        for index, record in enumerate(payload[RECORDS_KEY]):
            area_code = _read_text(record, area_code_field)
            if not filters.includes_area(area_code):
                continue

            if single_measure:
                measure_code = columns[SourceColumn.SINGLE_MEASURE_CODE]
                measure_label = columns[SourceColumn.SINGLE_MEASURE_NAME]
            else:
                measure_code = _read_text(record, columns[SourceColumn.MEASURE_CODE])
                measure_label = _read_text(
                    record, columns[SourceColumn.MEASURE_NAME]
                )
            if not filters.includes_measure(measure_code):
                continue

            year = to_year(record[year_field], f"record {index}")
            if not filters.includes_year(year):
                continue
            value = _read_value(record, value_field)

            area = Area(code=area_code)
            area.set_name(LANG_CODE_ENG, _read_text(record, name_eng_field))
            measure = Measure(code=measure_code, label=measure_label)
            measure.set_value(year, value)
            area.set_measure(measure_code, measure)
            store.set_area(area_code, area)
            imported += 1
    except ParseError as e:
        raise ParseError(f"Failure parsing {_SOURCE} file: {e}") from e
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        where = f" at record {index}" if index >= 0 else ""
        raise ParseError(
            f"Failure parsing {_SOURCE} file{where}: "
            f"{type(e).__name__}: {e}"
        ) from e

    logger.debug("Imported %d records", imported)
