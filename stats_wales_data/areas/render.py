"""Text table and JSON renderings of imported areas."""

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stats_wales_data.areas.models import Area, Measure
    from stats_wales_data.areas.store import AreaStore

DECIMAL_PRECISION = 6
# Wide enough for the "Average" and "% Diff." headings.
MIN_COLUMN_WIDTH = 7
COLUMN_SEPARATOR = "  "
SUMMARY_COLUMNS = ("Average", "Diff.", "% Diff.")

NO_DATA = "<no data>"
NO_MEASURES = "<no measures>"
UNNAMED = "Unnamed"


def _format_value(value: float) -> str:
    return f"{value:.{DECIMAL_PRECISION}f}"


def render_measure(measure: "Measure") -> str:
    """Render a measure as a title line and a right-aligned table.

    Example:
        Population (pop)
                1991          1992          1993       Average         Diff.       % Diff.
        69123.000000  69379.000000  69772.000000  69424.666667    649.000000      0.938906
    """
    lines = [f"{measure.label} ({measure.code})"]
    readings = measure.readings()
    if not readings:
        lines.append(NO_DATA)
        return "\n".join(lines) + "\n"

    headings = [str(year) for year, _ in readings] + list(SUMMARY_COLUMNS)
    cells = [_format_value(value) for _, value in readings] + [
        _format_value(measure.get_average()),
        _format_value(measure.get_difference()),
        _format_value(measure.get_difference_as_percentage()),
    ]
    width = max(MIN_COLUMN_WIDTH, *(len(cell) for cell in cells))
    lines.append(COLUMN_SEPARATOR.join(h.rjust(width) for h in headings))
    lines.append(COLUMN_SEPARATOR.join(c.rjust(width) for c in cells))
    return "\n".join(lines) + "\n"


def area_title(area: "Area") -> str:
    name_eng = area.get_name_or_empty("eng")
    name_cym = area.get_name_or_empty("cym")
    if name_eng and name_cym:
        name = f"{name_eng} / {name_cym}"
    else:
        name = name_eng or name_cym or UNNAMED
    return f"{name} ({area.code})"


def render_area(area: "Area") -> str:
    lines = [area_title(area) + "\n"]
    if not area.measures:
        lines.append(NO_MEASURES + "\n")
    for measure in area.measures.values():
        lines.append(render_measure(measure) + "\n")
    return "".join(lines)


def render_store(store: "AreaStore") -> str:
    """All areas in authority code order, each followed by a blank line."""
    return "".join(render_area(area) + "\n" for area in store.areas.values())


def area_to_dict(area: "Area") -> dict:
    data = {}
    if area.names:
        data["names"] = dict(area.names)
    if area.measures:
        data["measures"] = {
            code: {str(year): value for year, value in measure.readings()}
            for code, measure in area.measures.items()
        }
    return data


def to_dict(store: "AreaStore") -> dict:
    return {code: area_to_dict(area) for code, area in store.areas.items()}


def to_json(store: "AreaStore", indent: int | None = None) -> str:
    """Serialise the store; an empty store gives ``{}``."""
    return json.dumps(to_dict(store), ensure_ascii=False, indent=indent)
