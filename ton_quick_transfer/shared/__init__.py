"""Shared utilities for TON Quick Transfer."""

from ton_quick_transfer.shared.address import AddressCodec, WalletAddress
from ton_quick_transfer.shared.clipboard import CopyResult, copy_text
from ton_quick_transfer.shared.config import ConfirmationConfig, TransferConfig
from ton_quick_transfer.shared.errors import TransferError, TransferErrorKind
from ton_quick_transfer.shared.logging import (
    ContextAdapter,
    LoggingConfig,
    LogLevel,
    format_error_for_user,
    get_logger,
    get_user_friendly_error,
    sanitize_dict,
    sanitize_message,
    setup_logging,
)
from ton_quick_transfer.shared.network import (
    NetworkClient,
    NetworkError,
    NetworkErrorType,
    RetryConfig,
    TimeoutConfig,
)
from ton_quick_transfer.shared.validation import (
    AmountValidator,
    CommentValidator,
    ValidationResult,
    format_nano,
)

__all__ = [
    "AddressCodec",
    "WalletAddress",
    "CopyResult",
    "copy_text",
    "ConfirmationConfig",
    "TransferConfig",
    "TransferError",
    "TransferErrorKind",
    "NetworkClient",
    "NetworkError",
    "NetworkErrorType",
    "RetryConfig",
    "TimeoutConfig",
    "AmountValidator",
    "CommentValidator",
    "ValidationResult",
    "format_nano",
    "ContextAdapter",
    "LoggingConfig",
    "LogLevel",
    "format_error_for_user",
    "get_logger",
    "get_user_friendly_error",
    "sanitize_dict",
    "sanitize_message",
    "setup_logging",
]
