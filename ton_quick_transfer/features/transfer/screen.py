"""Transfer-related modal screens for TON Quick Transfer."""

from typing import Callable, cast

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Label, Static

from ton_quick_transfer.features.monitoring.service import OutcomeStatus
from ton_quick_transfer.features.transfer.service import TransferResult
from ton_quick_transfer.shared.clipboard import copy_text
from ton_quick_transfer.shared.logging import get_logger
from ton_quick_transfer.shared.validation import format_nano

logger = get_logger(__name__)


class BaseModalScreen(ModalScreen):
    """Base modal screen with common key bindings."""

    BINDINGS = [
        ("escape", "app.pop_screen", "Close"),
        ("tab", "focus_next", "Next"),
        ("shift+tab", "focus_previous", "Previous"),
    ]


class TransactionConfirmScreen(BaseModalScreen):
    BINDINGS = BaseModalScreen.BINDINGS + [("enter", "confirm", "Confirm")]

    def __init__(
        self,
        sender: str,
        recipient: str,
        amount_nano: int,
        comment: str | None,
        network: str,
        fee_margin_nano: int,
    ):
        super().__init__()
        self.sender = sender
        self.recipient = recipient
        self.amount_nano = amount_nano
        self.comment = comment
        self.network = network
        self.fee_margin_nano = fee_margin_nano

    def compose(self) -> ComposeResult:
        yield Label("Transaction Summary", id="confirm-title")
        yield Static(f"From: {self.sender}")
        yield Static(f"To: {self.recipient}")
        yield Static(f"Amount: {format_nano(self.amount_nano)} TON")
        yield Static(f"Reserved for fees: {format_nano(self.fee_margin_nano)} TON")
        yield Static(f"Comment: {self.comment or 'None'}")
        yield Static(f"Network: {self.network.capitalize()}")
        yield Horizontal(
            Button("Confirm", id="confirm-button", variant="primary"),
            Button("Cancel", id="cancel-button"),
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "confirm-button":
            self.dismiss(True)
        elif event.button.id == "cancel-button":
            self.dismiss(False)

    def action_confirm(self) -> None:
        self.dismiss(True)


class TransactionStatusScreen(BaseModalScreen):
    BINDINGS = []

    def __init__(self, on_stop_waiting: Callable[[], None] | None = None):
        super().__init__()
        self.on_stop_waiting = on_stop_waiting
        self._elapsed_seconds = 0
        self._loading_step = 0
        self._loading_active = False
        self._loading_timer = None
        self._elapsed_timer = None
        self._base_text = "Sending transaction..."

    def compose(self) -> ComposeResult:
        yield Label("Transaction Status", id="tx-status-title")
        yield Static(f"[yellow]{self._base_text}[/yellow]", id="tx-status-value")
        yield Static("", id="tx-status-detail")
        yield Static("Elapsed: 0s", id="tx-status-elapsed")
        yield Button("Stop waiting", id="stop-waiting-button")

    def on_mount(self) -> None:
        self._loading_active = True
        frames = ["|", "/", "-", "\\"]

        def spin() -> None:
            if not self._loading_active:
                return
            self._loading_step = (self._loading_step + 1) % len(frames)
            status_widget = cast(Static, self.query_one("#tx-status-value"))
            status_widget.update(
                f"[yellow]{self._base_text} {frames[self._loading_step]}[/yellow]"
            )

        def tick() -> None:
            self._elapsed_seconds += 1
            elapsed_widget = cast(Static, self.query_one("#tx-status-elapsed"))
            elapsed_widget.update(f"Elapsed: {self._elapsed_seconds}s")

        self._loading_timer = self.set_interval(0.15, spin)
        self._elapsed_timer = self.set_interval(1.0, tick)

    def on_unmount(self) -> None:
        self._loading_active = False
        for timer in (self._loading_timer, self._elapsed_timer):
            if timer:
                timer.stop()

    def update_status(self, status: str, detail: str = "") -> None:
        if status in ("submitted", "pending"):
            self._base_text = "Waiting for confirmation..."
        cast(Static, self.query_one("#tx-status-detail")).update(detail)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "stop-waiting-button":
            event.button.disabled = True
            self._base_text = "Stopping..."
            if self.on_stop_waiting:
                self.on_stop_waiting()


class TransactionResultScreen(BaseModalScreen):
    def __init__(self, result: TransferResult, network: str = "testnet"):
        super().__init__()
        self.result = result
        self.network = network

    def _title(self) -> str:
        outcome = self.result.outcome
        if self.result.success:
            return "[green]Transaction confirmed![/green]"
        if outcome is not None and outcome.status == OutcomeStatus.TIMED_OUT:
            return "[yellow]Confirmation not observed[/yellow]"
        return "[red]Transaction failed[/red]"

    def compose(self) -> ComposeResult:
        yield Static(self._title(), id="result-title")
        yield Static(f"Network: {self.network.capitalize()}")
        if self.result.message_hash:
            yield Label("Message Hash:")
            yield Static(self.result.message_hash, id="tx-hash-display")
        if self.result.error_message:
            yield Static(self.result.error_message, id="result-error")
        if self.result.new_balance is not None:
            yield Static(f"New balance: {format_nano(self.result.new_balance)} TON")
        if self.result.message_hash:
            yield Button("Copy Hash", id="copy-hash-button", variant="primary")
        yield Button("Close", id="close-button")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "copy-hash-button":
            result = copy_text(self.result.message_hash or "")
            if not result.success:
                logger.warning("Clipboard unavailable for message hash")
                self.notify("Clipboard is not available", severity="warning")
                return
            self.notify("Message hash copied to clipboard!", severity="information")
        elif event.button.id == "close-button":
            self.app.pop_screen()
