"""Transfer event handlers for the TON Quick Transfer TUI."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, cast

from textual.containers import Container
from textual.widgets import Button, Input, Select, Static

from ton_quick_transfer.features.transfer.screen import (
    TransactionConfirmScreen,
    TransactionResultScreen,
    TransactionStatusScreen,
)
from ton_quick_transfer.features.transfer.service import TransferResult, TransferService
from ton_quick_transfer.features.monitoring.service import OutcomeStatus
from ton_quick_transfer.shared.config import TransferConfig
from ton_quick_transfer.shared.errors import TransferError, TransferErrorKind
from ton_quick_transfer.shared.logging import format_error_for_user
from ton_quick_transfer.shared.network import NetworkError
from ton_quick_transfer.shared.validation import format_nano
from ton_quick_transfer.transaction import TransferRequest
from ton_quick_transfer.wallet import UnlockedWallet

if TYPE_CHECKING:
    from ton_quick_transfer.__main__ import TransferApp

logger = logging.getLogger(__name__)


@dataclass
class TransferSession:
    """Unlocked wallet and its service for one interactive session.

    Closed on every exit path of the app; closing stops any confirmation wait.
    """

    service: TransferService
    wallet: UnlockedWallet
    balance: int
    cancel_event: threading.Event = field(default_factory=threading.Event)
    busy: bool = False

    def close(self) -> None:
        self.cancel_event.set()


class TransferHandlersMixin:
    """Mixin class providing transfer-related event handlers for TransferApp."""

    config: TransferConfig
    _session: TransferSession | None
    _status_screen: TransactionStatusScreen | None

    def _set_transfer_enabled(self: "TransferApp", enabled: bool) -> None:
        cast(Container, self.query_one("#transfer-section")).disabled = not enabled

    def _close_session(self: "TransferApp") -> None:
        if self._session is not None:
            self._session.close()
            self._session = None
        self._set_transfer_enabled(False)

    def unlock_wallet(self: "TransferApp") -> None:
        mnemonic_input = cast(Input, self.query_one("#mnemonic-input"))
        network = cast(Select, self.query_one("#network-select")).value
        info = cast(Static, self.query_one("#wallet-info"))

        if self._session is not None and self._session.busy:
            self.notify("A transfer is in progress", severity="warning")
            return

        self._close_session()
        mnemonic = mnemonic_input.value
        mnemonic_input.value = ""
        cast(Button, self.query_one("#unlock-button")).disabled = True
        info.update("[yellow]Unlocking wallet...[/yellow]")

        def worker() -> None:
            try:
                service = TransferService(config=self.config.for_network(str(network)))
                wallet = service.unlock(mnemonic)
                self.call_from_thread(
                    info.update,
                    f"Sender address: {wallet.display_address}\n"
                    "[yellow]Fetching balance...[/yellow]",
                )
                balance = service.ensure_funded(wallet)
                session = TransferSession(service=service, wallet=wallet, balance=balance)
                self.call_from_thread(self._on_unlock_finished, session, None)
            except (TransferError, NetworkError) as e:
                self.call_from_thread(self._on_unlock_finished, None, e)
            except Exception as e:
                logger.exception("Unexpected error while unlocking wallet")
                self.call_from_thread(self._on_unlock_finished, None, e)

        threading.Thread(target=worker, daemon=True).start()

    def _on_unlock_finished(
        self: "TransferApp",
        session: TransferSession | None,
        error: Exception | None,
    ) -> None:
        cast(Button, self.query_one("#unlock-button")).disabled = False
        info = cast(Static, self.query_one("#wallet-info"))

        if error is not None or session is None:
            hint = format_error_for_user(error) if error else ""
            info.update(f"[red]Error: {error}[/red]\n{hint}")
            return

        self._session = session
        info.update(
            f"Sender address: {session.wallet.display_address}\n"
            f"Current balance: {format_nano(session.balance)} TON"
        )
        self._set_transfer_enabled(True)
        self.query_one("#recipient-input").focus()

    def send_transaction(self: "TransferApp") -> None:
        session = self._session
        result = cast(Static, self.query_one("#transfer-result"))
        if session is None:
            result.update("[red]Error: Unlock a wallet first[/red]")
            return
        if session.busy:
            result.update("[yellow]A transfer is already in progress[/yellow]")
            return

        recipient = cast(Input, self.query_one("#recipient-input")).value
        amount = cast(Input, self.query_one("#amount-input")).value
        comment = cast(Input, self.query_one("#comment-input")).value

        service = session.service
        try:
            request = service.prepare_request(recipient, amount, comment)
        except TransferError as e:
            if e.kind == TransferErrorKind.INVALID_DESTINATION:
                result.update("[red]Invalid address format. Please try again.[/red]")
                self.query_one("#recipient-input").focus()
            else:
                result.update(f"[red]{e.message}[/red]")
                self.query_one("#amount-input").focus()
            return

        check = service.guard.validate(session.balance, request.amount_nano)
        if not check.is_valid:
            result.update(f"[red]{check.error_message}[/red]")
            self.query_one("#amount-input").focus()
            return

        result.update("")

        def on_confirmed(confirmed: bool | None) -> None:
            if not confirmed:
                result.update("[yellow]Transaction cancelled.[/yellow]")
                return
            self._submit_transaction_async(session, request)

        self.push_screen(
            TransactionConfirmScreen(
                sender=session.wallet.display_address,
                recipient=service.codec.format(request.destination),
                amount_nano=request.amount_nano,
                comment=request.comment,
                network=session.wallet.network,
                fee_margin_nano=service.guard.margin_nano,
            ),
            on_confirmed,
        )

    def _submit_transaction_async(
        self: "TransferApp", session: TransferSession, request: TransferRequest
    ) -> None:
        session.busy = True
        session.cancel_event = threading.Event()
        cancel_event = session.cancel_event

        status_screen = TransactionStatusScreen(on_stop_waiting=cancel_event.set)
        self._status_screen = status_screen
        self.push_screen(status_screen)

        def on_status_update(status: str, detail: str) -> None:
            self.call_from_thread(status_screen.update_status, status, detail)

        def worker() -> None:
            outcome_result = TransferResult(
                success=False,
                sender=session.wallet.display_address,
                recipient=session.service.codec.format(request.destination),
                amount_nano=request.amount_nano,
            )
            try:
                outcome = session.service.transfer(
                    session.wallet,
                    request,
                    cancel_event=cancel_event,
                    on_status_update=on_status_update,
                )
                outcome_result.outcome = outcome
                outcome_result.success = outcome.status == OutcomeStatus.CONFIRMED
                if outcome_result.success:
                    outcome_result.new_balance = session.service.refresh_balance(
                        session.wallet
                    )
                else:
                    outcome_result.error_message = outcome.reason
            except (TransferError, NetworkError) as e:
                logger.warning("Transfer failed: %s", e)
                outcome_result.error_message = str(e)
            except Exception as e:
                logger.exception("Unexpected error while sending transfer")
                outcome_result.error_message = f"Unexpected error: {e}"
            self.call_from_thread(self._on_transaction_send_finished, outcome_result)

        threading.Thread(target=worker, daemon=True).start()

    def _on_transaction_send_finished(
        self: "TransferApp", outcome_result: TransferResult
    ) -> None:
        session = self._session
        if session is not None:
            session.busy = False
            if outcome_result.new_balance is not None:
                session.balance = outcome_result.new_balance

        if self._status_screen is not None:
            self.pop_screen()
            self._status_screen = None

        result = cast(Static, self.query_one("#transfer-result"))
        if outcome_result.success:
            result.update("[green]Transaction confirmed![/green]")
            cast(Input, self.query_one("#amount-input")).value = ""
            cast(Input, self.query_one("#comment-input")).value = ""
        else:
            result.update(f"[red]{outcome_result.error_message}[/red]")

        if session is not None:
            cast(Static, self.query_one("#wallet-info")).update(
                f"Sender address: {session.wallet.display_address}\n"
                f"Current balance: {format_nano(session.balance)} TON"
            )

        network = session.wallet.network if session is not None else self.config.network
        self.push_screen(TransactionResultScreen(outcome_result, network))
