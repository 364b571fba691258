"""Tests for the shared handicap value sequence."""

from __future__ import annotations

import pytest

from domain.handicap.range import (
    DEFAULT_HANDICAP_RANGE,
    build_handicap_range,
    format_handicap,
    format_signed_handicap,
    get_handicap_range,
)

EXPECTED_VALUES = (
    -16.5, -14.5, -12.5, -10.5, -8.5, -6.5, -4.5, -2.5, -0.5,
    0.5, 2.5, 4.5, 6.5, 8.5, 10.5, 12.5, 14.5, 16.5,
)


def test_default_range_has_eighteen_symmetric_values() -> None:
    assert DEFAULT_HANDICAP_RANGE.values == EXPECTED_VALUES
    assert len(DEFAULT_HANDICAP_RANGE) == 18
    assert list(DEFAULT_HANDICAP_RANGE) == list(EXPECTED_VALUES)


def test_default_range_never_contains_zero_or_whole_numbers() -> None:
    for value in DEFAULT_HANDICAP_RANGE.values:
        assert value != 0.0
        assert abs(value) % 1 == pytest.approx(0.5)


def test_labels_use_one_decimal_place() -> None:
    assert DEFAULT_HANDICAP_RANGE.labels[0] == "-16.5"
    assert DEFAULT_HANDICAP_RANGE.labels[8] == "-0.5"
    assert DEFAULT_HANDICAP_RANGE.labels[9] == "0.5"
    assert DEFAULT_HANDICAP_RANGE.labels[-1] == "16.5"
    assert DEFAULT_HANDICAP_RANGE.signed_label(9) == "+0.5"
    assert DEFAULT_HANDICAP_RANGE.signed_label(0) == "-16.5"


def test_format_helpers() -> None:
    assert format_handicap(-2.5) == "-2.5"
    assert format_handicap(4.5) == "4.5"
    assert format_signed_handicap(4.5) == "+4.5"
    assert format_signed_handicap(-4.5) == "-4.5"


def test_rebuilding_the_range_is_deterministic() -> None:
    assert build_handicap_range() == build_handicap_range()
    assert build_handicap_range(16.5, 2.0) == DEFAULT_HANDICAP_RANGE


def test_shared_range_is_built_once_per_parameter_pair() -> None:
    assert get_handicap_range() is DEFAULT_HANDICAP_RANGE
    assert get_handicap_range(16.5, 2) is DEFAULT_HANDICAP_RANGE
    assert get_handicap_range(24.5, 4.0) is get_handicap_range(24.5, 4.0)


def test_custom_range_mirrors_negative_half() -> None:
    handicap_range = build_handicap_range(24.5, 4.0)
    assert handicap_range.values == (
        -24.5, -20.5, -16.5, -12.5, -8.5, -4.5, -0.5,
        0.5, 4.5, 8.5, 12.5, 16.5, 20.5, 24.5,
    )


def test_index_of_accepts_values_and_labels() -> None:
    assert DEFAULT_HANDICAP_RANGE.index_of(-0.5) == 8
    assert DEFAULT_HANDICAP_RANGE.index_of("+0.5") == 9
    assert DEFAULT_HANDICAP_RANGE.index_of("16.5") == 17
    with pytest.raises(KeyError):
        DEFAULT_HANDICAP_RANGE.index_of(1.0)
    with pytest.raises(KeyError):
        DEFAULT_HANDICAP_RANGE.index_of("3.0")


@pytest.mark.parametrize("value", [0.45, 0.54, -16.46, 2.5000001])
def test_index_of_does_not_snap_to_a_neighbouring_value(value: float) -> None:
    with pytest.raises(KeyError):
        DEFAULT_HANDICAP_RANGE.index_of(value)


@pytest.mark.parametrize(
    ("max_handicap", "step"),
    [
        (16.0, 2.0),
        (-16.5, 2.0),
        (16.5, 0.0),
        (16.5, 2.5),
    ],
)
def test_invalid_parameters_raise(max_handicap: float, step: float) -> None:
    with pytest.raises(ValueError):
        build_handicap_range(max_handicap, step)
