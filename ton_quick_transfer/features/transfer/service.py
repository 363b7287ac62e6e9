"""Transfer business logic service for TON Quick Transfer."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from ton_quick_transfer.features.monitoring.service import (
    OutcomeStatus,
    SubmissionOutcome,
    SubmissionTracker,
)
from ton_quick_transfer.features.transfer.validators import BalanceGuard
from ton_quick_transfer.ledger import ToncenterLedger
from ton_quick_transfer.shared.address import AddressCodec, WalletAddress
from ton_quick_transfer.shared.config import TransferConfig
from ton_quick_transfer.shared.errors import (
    InvalidAmount,
    InvalidMnemonic,
    InvalidComment,
    SigningError,
    TransferError,
    TransferErrorKind,
)
from ton_quick_transfer.shared.logging import format_error_for_user, get_logger
from ton_quick_transfer.shared.network import NetworkError
from ton_quick_transfer.shared.validation import (
    AmountValidator,
    CommentValidator,
    format_nano,
)
from ton_quick_transfer.transaction import (
    TransferBuilder,
    TransferRequest,
    TransferSigner,
)
from ton_quick_transfer.wallet import KeyDeriver, UnlockedWallet, WalletIdentity

if TYPE_CHECKING:
    from ton_quick_transfer.shared.protocols import LedgerProtocol, StatusCallback

logger = get_logger(__name__)


@dataclass
class TransferResult:
    success: bool
    outcome: SubmissionOutcome | None = None
    error_message: str | None = None
    error_kind: TransferErrorKind | None = None
    sender: str | None = None
    recipient: str | None = None
    amount_nano: int | None = None
    new_balance: int | None = None

    @property
    def message_hash(self) -> str | None:
        return self.outcome.message_hash if self.outcome else None

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "status": self.outcome.status.value if self.outcome else None,
            "message_hash": self.message_hash,
            "error": self.error_message,
            "error_kind": self.error_kind.value if self.error_kind else None,
            "sender": self.sender,
            "recipient": self.recipient,
            "amount": format_nano(self.amount_nano) if self.amount_nano else None,
            "new_balance": format_nano(self.new_balance)
            if self.new_balance is not None
            else None,
        }


class TransferService:
    """Composes key derivation, balance checks, signing and confirmation.

    A single wallet must not run two transfers at once: both would read the
    same seqno and one of them would be rejected. Callers serialize transfers.
    """

    def __init__(
        self,
        config: TransferConfig | None = None,
        ledger: "LedgerProtocol | None" = None,
        key_deriver: KeyDeriver | None = None,
        builder: TransferBuilder | None = None,
    ):
        self.config = config or TransferConfig()
        self.ledger = ledger or ToncenterLedger.from_config(self.config)
        self.key_deriver = key_deriver or KeyDeriver()
        self.identity = WalletIdentity(
            workchain=self.config.workchain, revision=self.config.wallet_revision
        )
        self.codec = AddressCodec(testnet=self.config.is_testnet)
        self.guard = BalanceGuard(self.config.fee_margin_nano)
        self.builder = builder or TransferBuilder(ttl_seconds=self.config.message_ttl)
        self.signer = TransferSigner(self.identity)
        self._log = logger.with_context(network=self.config.network)

    def unlock(self, mnemonic: str | list[str]) -> UnlockedWallet:
        try:
            keypair = self.key_deriver.derive(mnemonic)
            address = self.identity.derive(keypair.public_key)
        except TransferError:
            raise
        except Exception as e:
            self._log.error("Wallet derivation failed: %s", type(e).__name__)
            raise InvalidMnemonic(f"Could not derive wallet from mnemonic: {e}") from e
        wallet = UnlockedWallet(
            keypair=keypair,
            address=address,
            network=self.config.network,
            display_address=self.codec.format(address, bounceable=False),
        )
        self._log.info("Wallet unlocked: %s (%s)", wallet.display_address, wallet.network)
        return wallet

    def get_balance(self, wallet: UnlockedWallet) -> int:
        return self.ledger.get_balance(wallet.address)

    def ensure_funded(self, wallet: UnlockedWallet) -> int:
        """Read the balance and stop early on an empty wallet."""
        balance = self.get_balance(wallet)
        self.guard.ensure_funded(balance)
        return balance

    def parse_destination(self, destination_text: str) -> WalletAddress:
        return self.codec.parse(destination_text)

    def parse_amount(self, amount: str | Decimal | int | float) -> int:
        result = AmountValidator.validate_full(amount)
        if not result.is_valid:
            raise InvalidAmount(result.error_message or "Invalid amount")
        return result.normalized_value

    def prepare_request(
        self,
        destination_text: str,
        amount: str | Decimal | int | float,
        comment: str | None = None,
    ) -> TransferRequest:
        destination = self.parse_destination(destination_text)
        amount_nano = self.parse_amount(amount)
        comment_result = CommentValidator.validate(comment)
        if not comment_result.is_valid:
            raise InvalidComment(comment_result.error_message or "Invalid comment")
        return TransferRequest(
            destination=destination,
            amount_nano=amount_nano,
            comment=comment_result.normalized_value,
            bounceable=False,
        )

    def transfer(
        self,
        wallet: UnlockedWallet,
        request: TransferRequest,
        cancel_event: threading.Event | None = None,
        on_status_update: "StatusCallback | None" = None,
    ) -> SubmissionOutcome:
        balance = self.get_balance(wallet)
        self.guard.check(balance, request.amount_nano)

        seqno = self.ledger.get_seqno(wallet.address)
        descriptor = self.builder.build(request, seqno)
        envelope = self.signer.sign(descriptor, wallet.keypair)
        self._log.info(
            "Sending %s TON to %s with seqno %s",
            format_nano(request.amount_nano),
            request.destination,
            seqno,
        )

        tracker = SubmissionTracker(
            self.ledger,
            wallet.address,
            config=self.config.confirmation,
            on_status_update=on_status_update,
        )
        return tracker.track(envelope, cancel_event)

    def refresh_balance(self, wallet: UnlockedWallet) -> int | None:
        try:
            return self.get_balance(wallet)
        except NetworkError as e:
            self._log.warning("Could not refresh balance: %s", e.message)
            return None

    def run(
        self,
        mnemonic: str | list[str],
        destination_text: str,
        amount: str | Decimal | int | float,
        comment: str | None = None,
        cancel_event: threading.Event | None = None,
        on_status_update: "StatusCallback | None" = None,
    ) -> TransferResult:
        result = TransferResult(success=False)
        try:
            wallet = self.unlock(mnemonic)
            result.sender = wallet.display_address

            request = self.prepare_request(destination_text, amount, comment)
            result.recipient = self.codec.format(request.destination)
            result.amount_nano = request.amount_nano

            outcome = self.transfer(wallet, request, cancel_event, on_status_update)
        except SigningError as e:
            self._log.exception("Signing failed")
            return self._failed(result, e.kind, e.message)
        except TransferError as e:
            self._log.warning("Transfer rejected (%s): %s", e.kind.value, e.message)
            return self._failed(result, e.kind, e.message)
        except NetworkError as e:
            self._log.error("Ledger request failed: %s", e.message)
            return self._failed(
                result,
                TransferErrorKind.NETWORK_ERROR,
                f"{e.message}. {format_error_for_user(e)}",
            )

        result.outcome = outcome
        if outcome.status == OutcomeStatus.CONFIRMED:
            result.success = True
            result.new_balance = self.refresh_balance(wallet)
        elif outcome.status == OutcomeStatus.TIMED_OUT:
            result.error_kind = TransferErrorKind.TIMED_OUT
            result.error_message = outcome.reason
        else:
            result.error_kind = TransferErrorKind.SUBMISSION_FAILED
            result.error_message = outcome.reason
        return result

    @staticmethod
    def _failed(
        result: TransferResult, kind: TransferErrorKind, message: str
    ) -> TransferResult:
        result.success = False
        result.error_kind = kind
        result.error_message = message
        return result


def execute_transfer(
    mnemonic: str | list[str],
    destination_text: str,
    amount_decimal: str | Decimal | int | float,
    comment: str | None = None,
    network: str | None = None,
    *,
    config: TransferConfig | None = None,
    ledger: "LedgerProtocol | None" = None,
    cancel_event: threading.Event | None = None,
    on_status_update: "StatusCallback | None" = None,
) -> TransferResult:
    """Send ``amount_decimal`` TON from the mnemonic's wallet and wait for it to apply.

    Validation happens before signing: mnemonic, then destination, amount and
    comment (no network), then a fresh balance read against the fee margin and
    a fresh seqno. The signed message is submitted once and confirmation is
    observed by polling the wallet seqno. A timed out result means the outcome
    is unknown; check the balance before retrying.

    Transfer, validation and ledger errors are reported through ``success``,
    ``error_kind`` and ``error_message``. Only an unknown ``network`` or an
    unreadable config file raises (ValueError).
    """
    if config is None:
        config = TransferConfig.load(network=network)
    else:
        config = config.for_network(network)

    service = TransferService(config=config, ledger=ledger)
    return service.run(
        mnemonic,
        destination_text,
        amount_decimal,
        comment,
        cancel_event=cancel_event,
        on_status_update=on_status_update,
    )
