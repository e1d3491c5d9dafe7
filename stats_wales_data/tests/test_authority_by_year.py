"""Tests for the single-measure year-column CSV parser."""

import io

import pytest

from stats_wales_data.areas import (
    ConfigurationError,
    ParseError,
    SourceColumn,
    SourceFormat,
)

POP_CSV = (
    "AuthorityCode,1991,1992,1993\n"
    "W06000001,69123,69379,69772\n"
    "W06000002,117456,117912,118324\n"
)


def _populate(store, text, columns, **filters):
    store.populate(
        io.StringIO(text), SourceFormat.AUTHORITY_BY_YEAR_CSV, columns, **filters
    )


def test_blank_cell_records_nothing(store, pop_columns):
    _populate(store, "code,1999,2000\nW1,10.5,\n", pop_columns)
    measure = store.get_area("W1").get_measure("pop")
    assert measure.values == {1999: 10.5}
    assert measure.label == "Population"


def test_all_rows(store, pop_columns):
    _populate(store, POP_CSV, pop_columns)
    assert store.size() == 2
    assert store.get_area("W06000002").get_measure("POP").values == {
        1991: 117456.0,
        1992: 117912.0,
        1993: 118324.0,
    }


def test_areas_have_no_names(store, pop_columns):
    _populate(store, POP_CSV, pop_columns)
    assert store.get_area("W06000001").names == {}


def test_measure_filter_skips_whole_file(store, pop_columns):
    pop_columns[SourceColumn.SINGLE_MEASURE_CODE] = "area"
    # Never read, so it does not matter that this is not valid.
    _populate(store, "not,a\nvalid file", pop_columns, measures_filter={"pop"})
    assert store.size() == 0


def test_measure_filter_is_case_insensitive(store, pop_columns):
    _populate(store, POP_CSV, pop_columns, measures_filter={"POP"})
    assert store.size() == 2


def test_empty_measure_filter_imports_everything(store, pop_columns):
    _populate(store, POP_CSV, pop_columns, measures_filter=set())
    assert store.size() == 2


def test_measure_code_is_lowercased(store, pop_columns):
    pop_columns[SourceColumn.SINGLE_MEASURE_CODE] = "POP"
    _populate(store, POP_CSV, pop_columns)
    assert store.get_area("W06000001").measure_codes() == ["pop"]


def test_short_rows_are_skipped(store, pop_columns):
    _populate(store, "code,1999,2000\nW1\nW2,1\nW3,1,2\n", pop_columns)
    assert list(store.areas) == ["w3"]


def test_area_filter_applies_before_values_are_parsed(store, pop_columns):
    _populate(
        store,
        "code,1999,2000\nW1,1,2\nW2,abc,def\n",
        pop_columns,
        areas_filter={"W1"},
    )
    assert list(store.areas) == ["w1"]


@pytest.mark.parametrize(
    "years, expected",
    [
        ((0, 0), [1991, 1992, 1993]),
        ((1992, 1993), [1992, 1993]),
        ((1993, 1992), [1992, 1993]),
        ((1992, 1992), [1992]),
        ((2000, 2010), []),
    ],
)
def test_year_filter(store, pop_columns, years, expected):
    _populate(store, POP_CSV, pop_columns, years_filter=years)
    measure = store.get_area("W06000001").get_measure("pop")
    assert list(measure.values) == expected


def test_non_numeric_year_header(store, pop_columns):
    with pytest.raises(ParseError, match="year"):
        _populate(store, "code,1999,abc\nW1,1,2\n", pop_columns)


def test_header_without_years(store, pop_columns):
    with pytest.raises(ParseError):
        _populate(store, "code,1999\nW1,1\n", pop_columns)


def test_non_numeric_value(store, pop_columns):
    with pytest.raises(ParseError, match="row 2"):
        _populate(store, "code,1999,2000\nW1,1,2\nW2,1,abc\n", pop_columns)
    assert list(store.areas) == ["w1"]


def test_mapping_missing_measure(store, pop_columns):
    del pop_columns[SourceColumn.SINGLE_MEASURE_NAME]
    with pytest.raises(ConfigurationError):
        _populate(store, POP_CSV, pop_columns)


def test_overlapping_files_combine(store, pop_columns):
    _populate(store, "code,1999,2000\nW1,1,2\n", pop_columns)
    _populate(store, "code,2000,2001\nW1,20,30\n", pop_columns)
    measure = store.get_area("W1").get_measure("pop")
    assert measure.values == {1999: 1.0, 2000: 20.0, 2001: 30.0}


def test_measures_from_different_files_accumulate(store, pop_columns):
    _populate(store, "code,1999,2000\nW1,1,2\n", pop_columns)
    pop_columns[SourceColumn.SINGLE_MEASURE_CODE] = "dens"
    pop_columns[SourceColumn.SINGLE_MEASURE_NAME] = "Population density"
    _populate(store, "code,1999,2000\nW1,0.5,0.6\n", pop_columns)
    assert store.get_area("W1").measure_codes() == ["dens", "pop"]


def test_cells_past_the_last_year_are_ignored(store, pop_columns):
    _populate(store, "code,1999,2000\nW1,1,2\nW2,3,4,\nW3,5,6,7\n", pop_columns)
    assert store.get_area("W2").get_measure("pop").values == {1999: 3.0, 2000: 4.0}
    assert store.get_area("W3").get_measure("pop").values == {1999: 5.0, 2000: 6.0}


@pytest.mark.parametrize("cell", ["nan", "inf", "-Infinity"])
def test_non_finite_value(store, pop_columns, cell):
    with pytest.raises(ParseError, match="finite"):
        _populate(store, f"code,1999,2000\nW1,1,{cell}\n", pop_columns)
    assert store.to_json() == "{}"
