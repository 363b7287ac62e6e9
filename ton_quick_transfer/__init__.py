"""TON Quick Transfer - send TON from a 24-word recovery phrase.

This package is organized into feature-based modules:
- features.transfer: Transfer preparation, balance guard and TUI
- features.monitoring: Submission and confirmation tracking
- shared: Shared utilities (network, config, validation, logging)
"""

from ton_quick_transfer.wallet import KeyDeriver, KeyPair, WalletIdentity
from ton_quick_transfer.transaction import (
    SignedEnvelope,
    TransferBuilder,
    TransferRequest,
    TransferSigner,
    UnsignedTransfer,
)
from ton_quick_transfer.ledger import ToncenterLedger
from ton_quick_transfer.features.monitoring import (
    OutcomeStatus,
    SubmissionOutcome,
    SubmissionTracker,
)
from ton_quick_transfer.features.transfer.service import (
    TransferResult,
    TransferService,
    execute_transfer,
)
from ton_quick_transfer.features.transfer.validators import BalanceGuard
from ton_quick_transfer.shared import (
    NetworkClient,
    NetworkError,
    NetworkErrorType,
    TransferConfig,
    TransferError,
    TransferErrorKind,
    WalletAddress,
)

__version__ = "0.1.0"
__all__ = [
    "KeyDeriver",
    "KeyPair",
    "WalletIdentity",
    "WalletAddress",
    "BalanceGuard",
    "TransferRequest",
    "UnsignedTransfer",
    "SignedEnvelope",
    "TransferBuilder",
    "TransferSigner",
    "SubmissionTracker",
    "SubmissionOutcome",
    "OutcomeStatus",
    "ToncenterLedger",
    "TransferService",
    "TransferResult",
    "execute_transfer",
    "TransferConfig",
    "TransferError",
    "TransferErrorKind",
    "NetworkClient",
    "NetworkError",
    "NetworkErrorType",
]
