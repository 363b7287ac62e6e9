"""Transfer-specific validators for TON Quick Transfer."""

from ton_quick_transfer.shared.config import DEFAULT_FEE_MARGIN_NANO
from ton_quick_transfer.shared.errors import InsufficientFunds, ZeroBalance
from ton_quick_transfer.shared.validation import ValidationResult, format_nano


class BalanceGuard:
    """Checks that a balance covers the transfer plus a fixed fee margin."""

    def __init__(self, margin_nano: int = DEFAULT_FEE_MARGIN_NANO):
        if margin_nano < 0:
            raise ValueError("margin_nano must not be negative")
        self.margin_nano = margin_nano

    def required_for(self, amount_nano: int) -> int:
        return amount_nano + self.margin_nano

    def ensure_funded(self, balance: int) -> None:
        if balance <= 0:
            raise ZeroBalance("Sender wallet has no TON to transfer")

    def check(self, balance: int, amount_nano: int) -> None:
        self.ensure_funded(balance)
        required = self.required_for(amount_nano)
        if balance < required:
            raise InsufficientFunds(
                f"Insufficient balance. You have {format_nano(balance)} TON, "
                f"but need {format_nano(required)} TON (including fees)",
                balance=balance,
                required=required,
            )

    def validate(self, balance: int, amount_nano: int) -> ValidationResult:
        """Non-raising form used by input screens."""
        try:
            self.check(balance, amount_nano)
        except (ZeroBalance, InsufficientFunds) as e:
            return ValidationResult(is_valid=False, error_message=e.message)
        return ValidationResult(is_valid=True, normalized_value=amount_nano)
