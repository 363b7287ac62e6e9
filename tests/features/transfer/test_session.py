"""Tests for the interactive transfer session and its worker handlers."""

from collections import defaultdict
from unittest.mock import MagicMock

import pytest

from ton_quick_transfer.features.transfer import handlers
from ton_quick_transfer.features.transfer.handlers import (
    TransferHandlersMixin,
    TransferSession,
)
from ton_quick_transfer.features.transfer.service import TransferService


class InlineThread:
    """Runs the worker immediately on start()."""

    def __init__(self, target, daemon=None):
        self.target = target

    def start(self):
        self.target()


class StubApp(TransferHandlersMixin):
    def __init__(self, config):
        self.config = config
        self._session = None
        self._status_screen = None
        self.widgets = defaultdict(MagicMock)
        self.widgets["#network-select"].value = "testnet"
        self.widgets["#mnemonic-input"].value = "words"
        self.pushed = []

    def query_one(self, selector):
        return self.widgets[selector]

    def call_from_thread(self, callback, *args):
        return callback(*args)

    def push_screen(self, screen, callback=None):
        self.pushed.append(screen)

    def pop_screen(self):
        self.pushed.pop()

    def notify(self, message, severity="information"):
        pass


@pytest.fixture
def inline_threads(monkeypatch):
    monkeypatch.setattr(handlers.threading, "Thread", InlineThread)


@pytest.mark.unit
def test_close_cancels_confirmation_wait(config, fake_ledger, mnemonic):
    service = TransferService(config=config, ledger=fake_ledger)
    wallet = service.unlock(mnemonic)
    session = TransferSession(service=service, wallet=wallet, balance=1)

    assert not session.cancel_event.is_set()
    session.close()
    assert session.cancel_event.is_set()


@pytest.mark.unit
def test_unlock_reports_unexpected_errors(config, inline_threads, monkeypatch):
    def broken_service(config):
        raise RuntimeError("backend unavailable")

    monkeypatch.setattr(handlers, "TransferService", broken_service)
    app = StubApp(config)

    app.unlock_wallet()

    assert app.widgets["#unlock-button"].disabled is False
    message = app.widgets["#wallet-info"].update.call_args[0][0]
    assert "backend unavailable" in message
    assert app._session is None


@pytest.mark.unit
def test_send_releases_session_on_unexpected_errors(
    config, fake_ledger, mnemonic, inline_threads, monkeypatch
):
    monkeypatch.setattr(handlers, "TransactionStatusScreen", MagicMock())
    monkeypatch.setattr(handlers, "TransactionResultScreen", MagicMock())
    service = TransferService(config=config, ledger=fake_ledger)
    wallet = service.unlock(mnemonic)
    request = service.prepare_request("0:" + "ab" * 32, "1")

    def broken_transfer(*args, **kwargs):
        raise RuntimeError("socket closed")

    service.transfer = broken_transfer
    app = StubApp(config)
    app._session = TransferSession(service=service, wallet=wallet, balance=10**10)

    app._submit_transaction_async(app._session, request)

    assert app._session.busy is False
    result = handlers.TransactionResultScreen.call_args[0][0]
    assert result.success is False
    assert "socket closed" in result.error_message
