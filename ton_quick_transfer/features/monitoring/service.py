"""Submission and confirmation tracking for signed transfers.

A TON wallet applies an external message by incrementing its seqno, so a
transfer built against seqno N is considered processed once the wallet reports
a seqno greater than N. The tracker submits the envelope once and then polls
the seqno at a fixed interval until that happens, the configured timeout
elapses or the caller cancels.

State machine::

    BUILT -> SUBMITTED -> CONFIRMED
                       -> TIMED_OUT
    BUILT -> SUBMISSION_FAILED

Terminal states are final; a tracker instance handles exactly one envelope.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

from ton_quick_transfer.shared.config import ConfirmationConfig
from ton_quick_transfer.shared.errors import SubmissionFailed, SubmissionStateError
from ton_quick_transfer.shared.logging import get_logger
from ton_quick_transfer.shared.network import NetworkError

if TYPE_CHECKING:
    from ton_quick_transfer.shared.address import WalletAddress
    from ton_quick_transfer.shared.protocols import LedgerProtocol, StatusCallback
    from ton_quick_transfer.transaction import SignedEnvelope

logger = get_logger(__name__)

VERIFY_GUIDANCE = (
    "The transfer may still be applied. Re-check the wallet balance and seqno "
    "before sending again."
)


class SubmissionState(Enum):
    BUILT = "built"
    SUBMITTED = "submitted"
    CONFIRMED = "confirmed"
    TIMED_OUT = "timed_out"
    SUBMISSION_FAILED = "submission_failed"


TERMINAL_STATES = frozenset(
    {
        SubmissionState.CONFIRMED,
        SubmissionState.TIMED_OUT,
        SubmissionState.SUBMISSION_FAILED,
    }
)


class OutcomeStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    TIMED_OUT = "timed_out"
    FAILED = "failed"


@dataclass
class SubmissionOutcome:
    status: OutcomeStatus
    message_hash: str
    seqno_before: int
    seqno_after: int | None = None
    reason: str | None = None
    polls: int = 0
    elapsed_seconds: float = 0.0
    cancelled: bool = False

    @property
    def confirmed(self) -> bool:
        return self.status == OutcomeStatus.CONFIRMED

    @property
    def needs_verification(self) -> bool:
        """The ledger may or may not have applied the transfer."""
        return self.status == OutcomeStatus.TIMED_OUT


class SubmissionTracker:
    def __init__(
        self,
        ledger: "LedgerProtocol",
        address: "WalletAddress",
        config: ConfirmationConfig | None = None,
        on_status_update: "StatusCallback | None" = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ledger = ledger
        self.address = address
        self.config = config or ConfirmationConfig()
        self.on_status_update = on_status_update
        self._clock = clock
        self._state = SubmissionState.BUILT
        self._envelope: "SignedEnvelope | None" = None
        self._lock = threading.Lock()
        self._log = logger.with_context(wallet=address.raw)

    @property
    def state(self) -> SubmissionState:
        return self._state

    def _transition(self, state: SubmissionState, detail: str) -> None:
        self._log.info("Submission %s -> %s: %s", self._state.value, state.value, detail)
        self._state = state
        self._notify(state.value, detail)

    def _notify(self, status: str, detail: str) -> None:
        if not self.on_status_update:
            return
        try:
            self.on_status_update(status, detail)
        except Exception as e:
            self._log.error("Error in status callback: %s", e)

    def submit(self, envelope: "SignedEnvelope") -> None:
        with self._lock:
            if self._state != SubmissionState.BUILT:
                raise SubmissionStateError(
                    f"Cannot submit from state '{self._state.value}'; "
                    "build and sign a new transfer instead"
                )
            self._envelope = envelope
            self._log = self._log.with_context(
                seqno=envelope.seqno, message_hash=envelope.message_hash
            )

            try:
                self.ledger.submit(envelope)
            except NetworkError as e:
                self._transition(SubmissionState.SUBMISSION_FAILED, e.message)
                raise SubmissionFailed(f"Failed to submit transfer: {e.message}") from e

            self._transition(
                SubmissionState.SUBMITTED,
                f"Transfer sent with seqno {envelope.seqno}",
            )

    def wait_for_confirmation(
        self, cancel_event: threading.Event | None = None
    ) -> SubmissionOutcome:
        if self._state != SubmissionState.SUBMITTED or self._envelope is None:
            raise SubmissionStateError(
                f"Nothing to confirm in state '{self._state.value}'"
            )

        envelope = self._envelope
        cancel = cancel_event or threading.Event()
        baseline = envelope.seqno
        started = self._clock()
        deadline = started + self.config.timeout
        polls = 0
        last_seen: int | None = None

        while True:
            remaining = deadline - self._clock()
            if remaining <= 0:
                break

            if cancel.wait(min(self.config.poll_interval, remaining)):
                self._log.info("Confirmation wait cancelled after %d polls", polls)
                return self._timed_out(
                    envelope, last_seen, polls, started, "Waiting cancelled", True
                )

            polls += 1
            try:
                current = self.ledger.get_seqno(self.address)
            except NetworkError as e:
                self._log.warning("Seqno poll %d failed, continuing: %s", polls, e.message)
                continue

            last_seen = current
            if current > baseline:
                self._transition(
                    SubmissionState.CONFIRMED,
                    f"Wallet seqno advanced from {baseline} to {current}",
                )
                return SubmissionOutcome(
                    status=OutcomeStatus.CONFIRMED,
                    message_hash=envelope.message_hash,
                    seqno_before=baseline,
                    seqno_after=current,
                    polls=polls,
                    elapsed_seconds=self._clock() - started,
                )

            self._notify(
                OutcomeStatus.PENDING.value,
                f"Waiting for confirmation (poll {polls}, seqno {current})",
            )

        return self._timed_out(
            envelope,
            last_seen,
            polls,
            started,
            f"Transfer not confirmed within {self.config.timeout:g} seconds",
            False,
        )

    def _timed_out(
        self,
        envelope: "SignedEnvelope",
        last_seen: int | None,
        polls: int,
        started: float,
        reason: str,
        cancelled: bool,
    ) -> SubmissionOutcome:
        self._transition(SubmissionState.TIMED_OUT, f"{reason}. {VERIFY_GUIDANCE}")
        return SubmissionOutcome(
            status=OutcomeStatus.TIMED_OUT,
            message_hash=envelope.message_hash,
            seqno_before=envelope.seqno,
            seqno_after=last_seen,
            reason=f"{reason}. {VERIFY_GUIDANCE}",
            polls=polls,
            elapsed_seconds=self._clock() - started,
            cancelled=cancelled,
        )

    def track(
        self,
        envelope: "SignedEnvelope",
        cancel_event: threading.Event | None = None,
    ) -> SubmissionOutcome:
        """Submit then wait; a failed submission becomes a FAILED outcome."""
        try:
            self.submit(envelope)
        except SubmissionFailed as e:
            return SubmissionOutcome(
                status=OutcomeStatus.FAILED,
                message_hash=envelope.message_hash,
                seqno_before=envelope.seqno,
                reason=e.message,
            )
        return self.wait_for_confirmation(cancel_event)
