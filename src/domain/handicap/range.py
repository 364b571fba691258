"""Handicap value sequence shared by every handicap table."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_MAX_HANDICAP = 16.5
DEFAULT_STEP = 2.0


def format_handicap(value: float) -> str:
    """Render a handicap with exactly one decimal place."""
    return f"{value:.1f}"


def format_signed_handicap(value: float) -> str:
    """Render a handicap with an explicit sign for positive values."""
    label = format_handicap(value)
    if value > 0.0:
        return f"+{label}"
    return label


@dataclass(frozen=True)
class HandicapRange:
    """Ascending handicap values and their display labels, aligned by position."""

    values: tuple[float, ...]
    labels: tuple[str, ...]

    def __post_init__(self) -> None:
        if len(self.values) != len(self.labels):
            raise ValueError("values and labels must have the same length")
        if any(left >= right for left, right in zip(self.values, self.values[1:])):
            raise ValueError("handicap values must be strictly ascending")

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[float]:
        return iter(self.values)

    def index_of(self, handicap: float | str) -> int:
        """Position of a handicap given as a value or as its label."""
        if isinstance(handicap, str):
            label = handicap.lstrip("+")
            try:
                return self.labels.index(label)
            except ValueError as exc:
                raise KeyError(f"Unknown handicap label: {handicap!r}") from exc
        try:
            return self.values.index(float(handicap))
        except ValueError as exc:
            raise KeyError(f"Unknown handicap value: {handicap!r}") from exc

    def signed_label(self, index: int) -> str:
        return format_signed_handicap(self.values[index])


def validate_range_parameters(max_handicap: float, step: float) -> None:
    """Reject parameter pairs that would produce an integer or zero handicap."""
    if max_handicap <= 0.0:
        raise ValueError("max_handicap must be > 0")
    if float(max_handicap).is_integer():
        raise ValueError("max_handicap must not be a whole number")
    if step <= 0.0:
        raise ValueError("step must be > 0")
    if not float(step).is_integer():
        raise ValueError("step must be a whole number")


def build_handicap_range(
    max_handicap: float = DEFAULT_MAX_HANDICAP,
    step: float = DEFAULT_STEP,
) -> HandicapRange:
    """Build the symmetric handicap sequence around zero, excluding zero.

    Values are computed as ``-max_handicap + index * step`` rather than by
    repeated addition, so two ranges built from the same parameters always
    compare equal. The positive half mirrors the negative half exactly.
    """
    validate_range_parameters(max_handicap, step)

    negatives: list[float] = []
    index = 0
    while True:
        value = -max_handicap + index * step
        if value >= 0.0:
            break
        negatives.append(value)
        index += 1

    positives = [-value for value in reversed(negatives)]
    values = tuple(negatives + positives)
    return HandicapRange(values=values, labels=tuple(format_handicap(value) for value in values))


@lru_cache(maxsize=None)
def _cached_handicap_range(max_handicap: float, step: float) -> HandicapRange:
    return build_handicap_range(max_handicap, step)


def get_handicap_range(
    max_handicap: float = DEFAULT_MAX_HANDICAP,
    step: float = DEFAULT_STEP,
) -> HandicapRange:
    """Return the shared range for one parameter pair, building it once."""
    return _cached_handicap_range(float(max_handicap), float(step))


DEFAULT_HANDICAP_RANGE = get_handicap_range()


__all__ = [
    "DEFAULT_HANDICAP_RANGE",
    "DEFAULT_MAX_HANDICAP",
    "DEFAULT_STEP",
    "HandicapRange",
    "build_handicap_range",
    "format_handicap",
    "format_signed_handicap",
    "get_handicap_range",
    "validate_range_parameters",
]
