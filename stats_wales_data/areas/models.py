"""Pydantic models for areas and the measures recorded against them.

Both models are mutable and keep their mappings sorted by key, so iterating
``names``, ``measures`` or ``values`` always yields a deterministic order.
Merging follows one rule everywhere: keys present in the incoming record are
written (or merged) over the existing ones, keys only present in the
existing record are kept.
"""

import math
from operator import itemgetter
from typing import Callable, Mapping

from pydantic import BaseModel, Field, field_validator

from stats_wales_data.areas.exceptions import InvalidFormatError, NotFoundError

LANG_CODE_LENGTH = 3


def _lang_code(lang: str) -> str:
    """Lowercase a language code, which must be three ASCII letters."""
    if not (
        len(lang) == LANG_CODE_LENGTH and lang.isascii() and lang.isalpha()
    ):
        raise InvalidFormatError(
            "Language code must be three alphabetical letters only, "
            f"got {lang!r}"
        )
    return lang.lower()


def upsert(
    target: dict,
    incoming: Mapping,
    merge: Callable | None = None,
) -> None:
    """Write ``incoming`` into ``target``, last writer wins per key.

    Args:
        target: mapping updated in place.
        incoming: entries to write.
        merge: if given, called as ``merge(existing, new)`` for keys already
            in ``target`` instead of replacing the existing value.
    """
    for key, value in incoming.items():
        if merge is not None and key in target:
            merge(target[key], value)
        else:
            target[key] = value
    ordered = sorted(target.items(), key=itemgetter(0))
    target.clear()
    target.update(ordered)


class Measure(BaseModel):
    """A statistical indicator with at most one value per year."""

    code: str
    label: str = ""
    values: dict[int, float] = Field(default_factory=dict)

    model_config = {"validate_assignment": True}

    @field_validator("code")
    @classmethod
    def _lowercase_code(cls, code: str) -> str:
        return code.lower()

    @field_validator("values")
    @classmethod
    def _sorted_values(cls, values: dict[int, float]) -> dict[int, float]:
        if any(year < 0 for year in values):
            raise ValueError("Years must not be negative")
        if not all(math.isfinite(value) for value in values.values()):
            raise ValueError("Values must be finite numbers")
        return dict(sorted(values.items()))

    def set_label(self, label: str) -> None:
        self.label = label

    def get_value(self, year: int) -> float:
        try:
            return self.values[year]
        except KeyError:
            raise NotFoundError(f"No value found for year {year}") from None

    def set_value(self, year: int, value: float) -> None:
        if year < 0:
            raise InvalidFormatError(f"Years must not be negative, got {year}")
        if not math.isfinite(value):
            raise InvalidFormatError(f"Value for {year} is not finite: {value}")
        upsert(self.values, {year: float(value)})

    def size(self) -> int:
        return len(self.values)

    def readings(self) -> list[tuple[int, float]]:
        """(year, value) pairs in ascending year order."""
        return list(self.values.items())

    def combine(self, other: "Measure") -> None:
        """Fold ``other`` into this measure.

        Code and label are taken from ``other``; values are upserted per
        year, so years only known to this measure are kept.
        """
        self.code = other.code
        self.label = other.label
        upsert(self.values, other.values)

    def get_average(self) -> float:
        """Mean of all values, or 0 with < 2 values."""
        if len(self.values) < 2:
            return 0.0
        return sum(self.values.values()) / len(self.values)

    def get_difference(self) -> float:
        """Last year's value minus the first year's, or 0 with < 2 values."""
        if len(self.values) < 2:
            return 0.0
        readings = self.readings()
        return readings[-1][1] - readings[0][1]

    def get_difference_as_percentage(self) -> float:
        if len(self.values) < 2:
            return 0.0
        first = self.readings()[0][1]
        if first == 0:
            return 0.0
        return self.get_difference() / first * 100

    def __str__(self) -> str:
        from stats_wales_data.areas.render import render_measure

        return render_measure(self)


class Area(BaseModel):
    """A local authority with its names and measures.

    ``code`` keeps the case it was given; ``names`` is keyed by lowercase
    three-letter language code and ``measures`` by lowercase measure code.
    """

    code: str
    names: dict[str, str] = Field(default_factory=dict)
    measures: dict[str, Measure] = Field(default_factory=dict)

    @field_validator("names")
    @classmethod
    def _normalise_names(cls, names: dict[str, str]) -> dict[str, str]:
        return dict(
            sorted(
                ((_lang_code(lang), name) for lang, name in names.items()),
                key=itemgetter(0),
            )
        )

    @field_validator("measures")
    @classmethod
    def _normalise_measures(
        cls, measures: dict[str, Measure]
    ) -> dict[str, Measure]:
        return dict(
            sorted(
                ((code.lower(), measure) for code, measure in measures.items()),
                key=itemgetter(0),
            )
        )

    def get_name(self, lang: str) -> str:
        try:
            return self.names[lang.lower()]
        except KeyError:
            raise NotFoundError(
                f"A name in language {lang} does not exist"
            ) from None

    def get_name_or_empty(self, lang: str) -> str:
        return self.names.get(lang.lower(), "")

    def set_name(self, lang: str, name: str) -> None:
        upsert(self.names, {_lang_code(lang): name})

    def get_measure(self, code: str) -> Measure:
        try:
            return self.measures[code.lower()]
        except KeyError:
            raise NotFoundError(f"No measure found matching {code}") from None

    def set_measure(self, code: str, measure: Measure) -> None:
        """Store ``measure`` under ``code``, combining with any existing one."""
        upsert(
            self.measures,
            {code.lower(): measure.model_copy(deep=True)},
            merge=Measure.combine,
        )

    def measure_codes(self) -> list[str]:
        return list(self.measures)

    def size(self) -> int:
        return len(self.measures)

    def combine(self, other: "Area") -> None:
        """Fold ``other`` into this area.

        The code is replaced by ``other``'s literal code, names are upserted
        by language and measures are combined by measure code.
        """
        self.code = other.code
        upsert(self.names, other.names)
        for code, measure in other.measures.items():
            self.set_measure(code, measure)

    def __str__(self) -> str:
        from stats_wales_data.areas.render import render_area

        return render_area(self)
