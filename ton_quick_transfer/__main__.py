"""Main application entry point for TON Quick Transfer."""

import logging
import sys

from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal
from textual.widgets import Button, Footer, Header, Input, Label, Select, Static

from ton_quick_transfer.features.transfer.handlers import (
    TransferHandlersMixin,
    TransferSession,
)
from ton_quick_transfer.features.transfer.screen import TransactionStatusScreen
from ton_quick_transfer.shared.config import TransferConfig
from ton_quick_transfer.shared.logging import setup_logging
from ton_quick_transfer.styles import CSS

logger = logging.getLogger(__name__)


class TransferApp(TransferHandlersMixin, App):
    CSS = CSS
    TITLE = "TON Quick Transfer"

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("ctrl+u", "focus_mnemonic", "Unlock"),
        ("tab", "focus_next", "Next"),
        ("shift+tab", "focus_previous", "Previous"),
    ]

    _session: TransferSession | None = None
    _status_screen: TransactionStatusScreen | None = None

    def __init__(self, config: TransferConfig | None = None):
        super().__init__()
        self.config = config or TransferConfig()

    def compose(self) -> ComposeResult:
        yield Header()

        with Container(id="unlock-section"):
            yield Label("Sender Wallet", id="unlock-title")
            yield Label("Network")
            yield Select(
                [("Testnet", "testnet"), ("Mainnet", "mainnet")],
                value=self.config.network,
                allow_blank=False,
                id="network-select",
            )
            yield Label("Recovery phrase (24 words)")
            yield Input(
                placeholder="word1 word2 ... word24",
                password=True,
                id="mnemonic-input",
            )
            yield Button("Unlock", id="unlock-button", variant="primary")
            yield Static("Enter the recovery phrase to unlock.", id="wallet-info")

        with Container(id="transfer-section"):
            yield Label("Transfer", id="transfer-title")
            yield Label("Recipient Address")
            yield Input(placeholder="EQ... / UQ... / 0:<hex>", id="recipient-input")
            yield Label("Amount (TON)")
            yield Input(placeholder="e.g. 1.5", id="amount-input")
            yield Label("Comment (optional)")
            yield Input(placeholder="Text comment", id="comment-input")
            yield Horizontal(
                Button("Send", id="send-button", variant="primary"),
                id="transfer-actions-row",
            )
            yield Static(id="transfer-result")

        yield Footer()

    def on_mount(self) -> None:
        logger.info(
            "Application started (network=%s, endpoint=%s)",
            self.config.network,
            self.config.base_url,
        )
        self._set_transfer_enabled(False)
        self.query_one("#mnemonic-input").focus()

    def on_unmount(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None
        logger.info("Application stopped")

    def action_focus_mnemonic(self) -> None:
        self.query_one("#mnemonic-input").focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        logger.debug("Button pressed: %s", button_id)
        if button_id == "unlock-button":
            self.unlock_wallet()
        elif button_id == "send-button":
            self.send_transaction()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "mnemonic-input":
            self.unlock_wallet()
        elif event.input.id in ("recipient-input", "amount-input", "comment-input"):
            self.send_transaction()

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id != "network-select":
            return
        if self._session is not None and self._session.wallet.network != event.value:
            logger.info("Network changed to %s; locking wallet", event.value)
            self._close_session()
            self.query_one("#wallet-info", Static).update(
                "Network changed. Unlock the wallet again."
            )


def main():
    """Entry point for the application."""
    setup_logging()
    try:
        config = TransferConfig.load()
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(2)
    app = TransferApp(config)
    app.run()


if __name__ == "__main__":
    main()
