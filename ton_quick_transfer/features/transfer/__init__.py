"""Transfer feature module for TON Quick Transfer."""

from ton_quick_transfer.features.transfer.handlers import TransferHandlersMixin
from ton_quick_transfer.features.transfer.service import (
    TransferResult,
    TransferService,
    execute_transfer,
)
from ton_quick_transfer.features.transfer.validators import BalanceGuard
from ton_quick_transfer.features.transfer.screen import (
    TransactionConfirmScreen,
    TransactionResultScreen,
    TransactionStatusScreen,
)

__all__ = [
    "TransferHandlersMixin",
    "TransferResult",
    "TransferService",
    "execute_transfer",
    "BalanceGuard",
    "TransactionConfirmScreen",
    "TransactionResultScreen",
    "TransactionStatusScreen",
]
