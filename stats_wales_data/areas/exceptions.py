"""Error types raised while importing and querying area statistics."""


class StatsWalesError(Exception):
    """Base class for every error raised by this package."""


class NotFoundError(StatsWalesError, KeyError):
    """An area, measure, name or value lookup missed."""

    def __str__(self) -> str:
        # KeyError quotes its message; keep the plain text.
        return str(self.args[0]) if self.args else ""


class InvalidFormatError(StatsWalesError, ValueError):
    """A value had the wrong shape, e.g. a language code or a year range."""


class ParseError(StatsWalesError, ValueError):
    """A source row or record could not be parsed."""


class ConfigurationError(StatsWalesError, ValueError):
    """The column mapping, format tag or dataset registry is unusable."""
