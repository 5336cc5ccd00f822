"""Tests for the clean/dirty numeric classifier."""

import math

from plotgate.classifier import is_clean, to_number


class TestIsClean:
    def test_six_decimals_is_clean(self):
        assert is_clean(1.123456)

    def test_seventh_digit_is_dirty(self):
        assert not is_clean(1.1234567)

    def test_integers_and_short_decimals(self):
        assert is_clean(150)
        assert is_clean(0.1)
        assert is_clean(-2.5)

    def test_numeric_strings(self):
        assert is_clean("1.08452")
        assert not is_clean("1.084521337")

    def test_nan_is_never_clean(self):
        assert not is_clean(math.nan)
        assert not is_clean("abc")
        assert not is_clean(None)
        assert not is_clean({})


class TestToNumber:
    def test_coerces_strings(self):
        assert to_number("2.5") == 2.5

    def test_non_numeric_is_nan(self):
        assert math.isnan(to_number("n/a"))
        assert math.isnan(to_number(None))
        assert math.isnan(to_number([1]))

    def test_bool_is_not_a_price(self):
        assert math.isnan(to_number(True))
