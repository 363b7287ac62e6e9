"""Tests for amount and comment validation."""

from decimal import Decimal

import pytest

from ton_quick_transfer.shared.validation import (
    AmountValidator,
    CommentValidator,
    format_nano,
)


@pytest.mark.unit
class TestFormatNano:
    @pytest.mark.parametrize(
        "nano,expected",
        [
            (0, "0"),
            (1, "0.000000001"),
            (1_500_000_000, "1.5"),
            (2_010_000_000, "2.01"),
            (10_000_000_000, "10"),
            (-500_000_000, "-0.5"),
        ],
    )
    def test_format(self, nano, expected):
        assert format_nano(nano) == expected


@pytest.mark.unit
class TestAmountValidator:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("1", 1_000_000_000),
            ("1.5", 1_500_000_000),
            (" 0.000000001 ", 1),
            ("1,000", 1_000_000_000_000),
            (Decimal("2.25"), 2_250_000_000),
            (3, 3_000_000_000),
            (0.5, 500_000_000),
        ],
    )
    def test_valid(self, value, expected):
        result = AmountValidator.validate_full(value)
        assert result.is_valid, result.error_message
        assert result.normalized_value == expected

    @pytest.mark.parametrize(
        "value,message",
        [
            ("", "required"),
            ("   ", "required"),
            ("-1", "positive"),
            ("+1", "positive"),
            ("abc", "valid number"),
            ("NaN", "special value"),
            ("Infinity", "special value"),
            ("0", "greater than zero"),
            ("0.0000000001", "decimal places"),
            (str(2**130), "maximum"),
        ],
    )
    def test_invalid(self, value, message):
        result = AmountValidator.validate_full(value)
        assert not result.is_valid
        assert message in result.error_message

    def test_bool_is_not_a_number(self):
        assert not AmountValidator.validate_full(True).is_valid

    def test_none_is_not_a_number(self):
        assert not AmountValidator.validate_full(None).is_valid


@pytest.mark.unit
class TestCommentValidator:
    def test_empty_normalizes_to_none(self):
        assert CommentValidator.validate("").normalized_value is None
        assert CommentValidator.validate(None).normalized_value is None

    def test_limit_is_in_bytes(self):
        assert CommentValidator.validate("a" * 1023).is_valid
        assert not CommentValidator.validate("a" * 1024).is_valid
        # two bytes per character in UTF-8
        assert not CommentValidator.validate("é" * 512).is_valid
