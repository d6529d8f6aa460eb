from decimal import Decimal

import pytest

from scenario_content.utils.rounding import format_number, round_half_up, round_int, round_one


def test_half_up():
    assert round_one(7.25) == 7.3
    assert round_one(15.75) == 15.8
    assert round_int(19.5) == 20
    assert round_int(2.4999) == 2


def test_large_values_keep_every_digit():
    assert round_int(10**40 + 0.4) == 10**40
    assert round_half_up(Decimal("123456789012345678901234567890.45"), 1) == Decimal("123456789012345678901234567890.5")
    assert round_int(6.02e54) == int(Decimal("6.02e54"))


@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
def test_non_finite_values_rejected(value):
    with pytest.raises(ValueError):
        round_int(value)


def test_format_number():
    assert format_number(7.0) == "7"
    assert format_number(Decimal("7.50")) == "7.5"
    assert format_number(0) == "0"
