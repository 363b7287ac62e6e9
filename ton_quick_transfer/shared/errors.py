"""Transfer error taxonomy for TON Quick Transfer."""

from enum import Enum


class TransferErrorKind(Enum):
    INVALID_MNEMONIC = "invalid_mnemonic"
    ZERO_BALANCE = "zero_balance"
    INVALID_DESTINATION = "invalid_destination"
    INVALID_AMOUNT = "invalid_amount"
    INVALID_COMMENT = "invalid_comment"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    SIGNING_ERROR = "signing_error"
    SUBMISSION_FAILED = "submission_failed"
    TIMED_OUT = "timed_out"
    INVALID_STATE = "invalid_state"
    NETWORK_ERROR = "network_error"


class TransferError(Exception):
    """Base class for errors surfaced by the transfer flow."""

    kind: TransferErrorKind = TransferErrorKind.NETWORK_ERROR
    retryable = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InvalidMnemonic(TransferError):
    kind = TransferErrorKind.INVALID_MNEMONIC


class ZeroBalance(TransferError):
    kind = TransferErrorKind.ZERO_BALANCE


class InvalidDestination(TransferError):
    kind = TransferErrorKind.INVALID_DESTINATION


class InvalidAmount(TransferError):
    kind = TransferErrorKind.INVALID_AMOUNT


class InvalidComment(TransferError):
    kind = TransferErrorKind.INVALID_COMMENT


class InsufficientFunds(TransferError):
    kind = TransferErrorKind.INSUFFICIENT_FUNDS

    def __init__(self, message: str, balance: int, required: int):
        super().__init__(message)
        self.balance = balance
        self.required = required


class SigningError(TransferError):
    """Signing failed on a descriptor the builder produced. Not recoverable."""

    kind = TransferErrorKind.SIGNING_ERROR


class SubmissionFailed(TransferError):
    kind = TransferErrorKind.SUBMISSION_FAILED
    retryable = True


class SubmissionStateError(TransferError):
    kind = TransferErrorKind.INVALID_STATE


__all__ = [
    "TransferErrorKind",
    "TransferError",
    "InvalidMnemonic",
    "ZeroBalance",
    "InvalidDestination",
    "InvalidAmount",
    "InvalidComment",
    "InsufficientFunds",
    "SigningError",
    "SubmissionFailed",
    "SubmissionStateError",
]
