import pytest
from tonsdk.crypto import mnemonic_new

from ton_quick_transfer.shared.address import WalletAddress
from ton_quick_transfer.shared.config import ConfirmationConfig, TransferConfig
from ton_quick_transfer.shared.network import NetworkError, NetworkErrorType

ENV_VARS = [
    "TON_TRANSFER_NETWORK",
    "TON_TRANSFER_ENDPOINT",
    "TONCENTER_API_KEY",
    "TON_TRANSFER_POLL_INTERVAL",
    "TON_TRANSFER_CONFIRM_TIMEOUT",
    "TON_TRANSFER_FEE_MARGIN",
    "TON_TRANSFER_LOG_LEVEL",
    "TON_TRANSFER_LOG_STDOUT",
    "TON_TRANSFER_LOG_FORMAT",
]


class FakeLedger:
    """In-memory ledger that applies a submitted transfer after a number of seqno polls.

    ``seqno_errors`` is consumed one entry per ``get_seqno`` call; a non-None
    entry is raised instead of answering. Submitting an envelope whose seqno
    does not match the wallet's current seqno is rejected, as the wallet
    contract would reject a replayed message.
    """

    def __init__(
        self,
        balance: int = 5_000_000_000,
        seqno: int = 5,
        apply_after_polls: int | None = 1,
        fee_nano: int = 5_000_000,
        seqno_errors: list | None = None,
        submit_error: Exception | None = None,
    ):
        self.balance = balance
        self.seqno = seqno
        self.apply_after_polls = apply_after_polls
        self.fee_nano = fee_nano
        self.seqno_errors = list(seqno_errors or [])
        self.submit_error = submit_error
        self.calls: list[str] = []
        self.submitted: list = []
        self._pending = None

    def get_balance(self, address):
        self.calls.append("get_balance")
        return self.balance

    def get_seqno(self, address):
        self.calls.append("get_seqno")
        if self.seqno_errors:
            error = self.seqno_errors.pop(0)
            if error is not None:
                raise error
        if self._pending is not None:
            envelope, remaining = self._pending
            remaining -= 1
            if remaining <= 0:
                self._apply(envelope)
            else:
                self._pending = (envelope, remaining)
        return self.seqno

    def submit(self, envelope):
        self.calls.append("submit")
        if self.submit_error is not None:
            raise self.submit_error
        if envelope.seqno != self.seqno:
            raise NetworkError(
                error_type=NetworkErrorType.API_ERROR,
                message=f"Submit transfer: API error: seqno mismatch, wallet is at {self.seqno}",
            )
        self.submitted.append(envelope)
        if self.apply_after_polls is not None:
            self._pending = (envelope, self.apply_after_polls)
        return {"@type": "ok"}

    def _apply(self, envelope):
        self._pending = None
        self.seqno += 1
        self.balance -= envelope.request.amount_nano + self.fee_nano


def network_error(message: str = "Fetch seqno: Connection timeout") -> NetworkError:
    return NetworkError(error_type=NetworkErrorType.TIMEOUT, message=message)


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch, tmp_path):
    """Run tests without the user's config file or TON_TRANSFER_* variables."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TON_TRANSFER_CONFIG", str(tmp_path / "missing-config.json"))
    yield


@pytest.fixture(scope="session")
def mnemonic():
    """A valid 24-word TON mnemonic, generated once per run."""
    return mnemonic_new()


@pytest.fixture(scope="session")
def other_mnemonic():
    return mnemonic_new()


@pytest.fixture
def destination_raw():
    return "0:" + "ab" * 32


@pytest.fixture
def destination_address():
    return WalletAddress(workchain=0, hash_part=bytes.fromhex("ab" * 32))


@pytest.fixture
def fast_confirmation():
    return ConfirmationConfig(poll_interval=0.0, timeout=5.0)


@pytest.fixture
def config(fast_confirmation):
    """Testnet config that polls without sleeping."""
    return TransferConfig(network="testnet", confirmation=fast_confirmation)


@pytest.fixture
def fake_ledger():
    return FakeLedger()


@pytest.fixture
def make_ledger():
    return FakeLedger


@pytest.fixture
def make_network_error():
    return network_error
