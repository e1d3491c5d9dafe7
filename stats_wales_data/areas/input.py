"""File-backed input sources.

Example usage:
    with InputFile("datasets/areas.csv") as stream:
        store.populate(stream, SourceFormat.AUTHORITY_CODE_CSV, columns)
"""

from pathlib import Path
from typing import TextIO


class InputFile:
    """A source on disk, opened as a UTF-8 text stream.

    Use as a context manager so the stream is closed however the import
    ends.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self.stream: TextIO | None = None

    @property
    def source(self) -> str:
        return str(self.path)

    def __enter__(self) -> TextIO:
        return self.open()

    def __exit__(self, exception_type, exception_value, traceback):
        self.close()

    def open(self) -> TextIO:
        if self.stream is not None and not self.stream.closed:
            return self.stream
        if not self.path.is_file():
            raise FileNotFoundError(f"Failed to open file {self.source}")
        self.stream = open(self.path, encoding="utf-8", newline="")
        return self.stream

    def close(self) -> None:
        if self.stream is not None:
            self.stream.close()
