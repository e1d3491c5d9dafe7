import pytest

from stats_wales_data.areas.input import InputFile


def test_reads_utf8(tmp_path):
    path = tmp_path / "areas.csv"
    path.write_text("W06000001,Isle of Anglesey,Ynys Môn\n", encoding="utf-8")

    with InputFile(path) as stream:
        assert stream.read() == "W06000001,Isle of Anglesey,Ynys Môn\n"
    assert stream.closed


def test_source_is_the_path(tmp_path):
    assert InputFile(tmp_path / "x.json").source == str(tmp_path / "x.json")


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="Failed to open file"):
        with InputFile(tmp_path / "missing.csv"):
            pass


def test_directory_is_not_a_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        InputFile(tmp_path).open()


def test_closed_on_error(tmp_path):
    path = tmp_path / "areas.csv"
    path.write_text("x\n")
    source = InputFile(path)
    with pytest.raises(RuntimeError):
        with source:
            raise RuntimeError("boom")
    assert source.stream.closed


def test_open_twice_returns_same_stream(tmp_path):
    path = tmp_path / "areas.csv"
    path.write_text("x\n")
    source = InputFile(path)
    try:
        assert source.open() is source.open()
    finally:
        source.close()
