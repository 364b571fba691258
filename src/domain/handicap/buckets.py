"""Per-handicap coverage counting for one outcome category."""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from domain.handicap.range import HandicapRange

_HUNDREDTHS = Decimal("0.01")


def calculate_percentage(count: int, total: int) -> float:
    """Share of ``total`` as a percentage rounded half-up to 2 places; 0 for an empty total.

    Rounding applies to the exact value of the float, so ``1 / 32`` gives 3.13.
    """
    if total <= 0:
        return 0.0
    percentage = Decimal((count / total) * 100.0)
    return float(percentage.quantize(_HUNDREDTHS, rounding=ROUND_HALF_UP))


def accumulate_coverage(kill_differential: int, values: Sequence[float], counts: list[int]) -> None:
    """Increment every position whose handicap keeps the adjusted margin above zero.

    ``values`` must be ascending, so the covered positions form a suffix that
    starts right after the last value ``<= -kill_differential``.
    """
    for index in range(bisect_right(values, -kill_differential), len(values)):
        counts[index] += 1


@dataclass(frozen=True)
class HandicapBuckets:
    """Covered-match counts for one outcome category, aligned with a handicap range."""

    handicap_range: HandicapRange
    counts: tuple[int, ...]
    total: int

    @property
    def percentages(self) -> tuple[float, ...]:
        return tuple(calculate_percentage(count, self.total) for count in self.counts)

    def count_for(self, handicap: float | str) -> int:
        return self.counts[self.handicap_range.index_of(handicap)]

    def percentage_for(self, handicap: float | str) -> float:
        return calculate_percentage(self.count_for(handicap), self.total)

    def as_dict(self) -> dict[str, int]:
        return dict(zip(self.handicap_range.labels, self.counts))

    def as_rows(self) -> list[dict[str, Any]]:
        """One record per handicap value."""
        return [
            {
                "handicap": value,
                "label": label,
                "covered": count,
                "percentage": percentage,
            }
            for value, label, count, percentage in zip(
                self.handicap_range.values,
                self.handicap_range.labels,
                self.counts,
                self.percentages,
            )
        ]


class BucketCounter:
    """Mutable coverage counter for one category during a single aggregation pass."""

    def __init__(self, handicap_range: HandicapRange) -> None:
        self.handicap_range = handicap_range
        self._counts = [0] * len(handicap_range)
        self._total = 0

    @property
    def total(self) -> int:
        return self._total

    def add(self, kill_differential: int) -> None:
        self._total += 1
        accumulate_coverage(kill_differential, self.handicap_range.values, self._counts)

    def freeze(self) -> HandicapBuckets:
        return HandicapBuckets(
            handicap_range=self.handicap_range,
            counts=tuple(self._counts),
            total=self._total,
        )


__all__ = [
    "BucketCounter",
    "HandicapBuckets",
    "accumulate_coverage",
    "calculate_percentage",
]
