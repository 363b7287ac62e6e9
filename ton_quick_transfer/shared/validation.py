"""Input validation utilities for transfer amounts, comments and other user inputs."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

NANO_DECIMALS = 9
NANO_PER_TON = 10**NANO_DECIMALS


@dataclass
class ValidationResult:
    is_valid: bool
    error_message: str | None = None
    normalized_value: Any = None


def format_nano(amount_nano: int) -> str:
    """Render nano-units as TON, e.g. ``1500000000 -> "1.5"``."""
    sign = "-" if amount_nano < 0 else ""
    whole, frac = divmod(abs(amount_nano), NANO_PER_TON)
    if not frac:
        return f"{sign}{whole}"
    return f"{sign}{whole}.{frac:0{NANO_DECIMALS}d}".rstrip("0")


class AmountValidator:
    # grams are serialized as VarUInteger 16
    MAX_AMOUNT = 2**120 - 1

    @staticmethod
    def parse_human_amount(value: str) -> ValidationResult:
        if not value or not value.strip():
            return ValidationResult(
                is_valid=False,
                error_message="Amount is required",
            )

        raw_amount = value.strip().replace(",", "").replace(" ", "")

        if raw_amount.startswith("-") or raw_amount.startswith("+"):
            return ValidationResult(
                is_valid=False,
                error_message="Amount must be a positive number",
            )

        try:
            amount_decimal = Decimal(raw_amount)
        except (InvalidOperation, ValueError):
            return ValidationResult(
                is_valid=False,
                error_message="Amount must be a valid number",
            )

        if not amount_decimal.is_finite():
            return ValidationResult(
                is_valid=False,
                error_message="Invalid numeric format (special value detected)",
            )

        if amount_decimal == 0:
            return ValidationResult(
                is_valid=False,
                error_message="Amount must be greater than zero",
            )

        return ValidationResult(
            is_valid=True,
            normalized_value=amount_decimal,
        )

    @staticmethod
    def validate_decimal_places(amount: Decimal) -> ValidationResult:
        exponent = amount.as_tuple().exponent
        if not isinstance(exponent, int):
            return ValidationResult(
                is_valid=False,
                error_message="Invalid numeric format",
            )

        decimal_places = max(0, -exponent)
        if decimal_places > NANO_DECIMALS:
            return ValidationResult(
                is_valid=False,
                error_message=f"Too many decimal places. Maximum {NANO_DECIMALS} allowed for TON",
            )

        return ValidationResult(is_valid=True)

    @staticmethod
    def convert_to_nano(amount: Decimal) -> ValidationResult:
        try:
            nano = int(amount * NANO_PER_TON)
        except (TypeError, ValueError, OverflowError, InvalidOperation):
            return ValidationResult(
                is_valid=False,
                error_message="Failed to convert amount to nano units",
            )

        if nano <= 0:
            return ValidationResult(
                is_valid=False,
                error_message="Amount must be greater than zero",
            )

        if nano > AmountValidator.MAX_AMOUNT:
            return ValidationResult(
                is_valid=False,
                error_message="Amount exceeds maximum allowed value",
            )

        return ValidationResult(
            is_valid=True,
            normalized_value=nano,
        )

    @classmethod
    def validate_full(cls, value: str | Decimal | int | float) -> ValidationResult:
        if isinstance(value, Decimal):
            value = format(value, "f")
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            value = str(value)
        elif not isinstance(value, str):
            return ValidationResult(
                is_valid=False,
                error_message="Amount must be a valid number",
            )

        parse_result = cls.parse_human_amount(value)
        if not parse_result.is_valid:
            return parse_result

        amount = parse_result.normalized_value

        decimal_result = cls.validate_decimal_places(amount)
        if not decimal_result.is_valid:
            return decimal_result

        return cls.convert_to_nano(amount)


class CommentValidator:
    MAX_COMMENT_BYTES = 1023

    @classmethod
    def validate(cls, value: str | None) -> ValidationResult:
        comment = value or ""
        size = len(comment.encode("utf-8"))
        if size > cls.MAX_COMMENT_BYTES:
            return ValidationResult(
                is_valid=False,
                error_message=f"Comment is too long. Maximum is {cls.MAX_COMMENT_BYTES} bytes.",
            )
        return ValidationResult(is_valid=True, normalized_value=comment or None)
