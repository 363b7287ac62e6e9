"""Tests for the toncenter ledger client."""

from unittest.mock import Mock

import pytest

from ton_quick_transfer.ledger import ToncenterLedger
from ton_quick_transfer.shared.config import TransferConfig
from ton_quick_transfer.shared.network import NetworkError
from ton_quick_transfer.transaction import SignedEnvelope, TransferRequest


@pytest.fixture
def client():
    client = Mock()
    client.base_url = "https://testnet.toncenter.com/api/v2"
    return client


@pytest.fixture
def ledger(client):
    return ToncenterLedger(client)


@pytest.mark.unit
class TestToncenterLedger:
    def test_from_config(self):
        config = TransferConfig(network="mainnet", api_key="k")
        ledger = ToncenterLedger.from_config(config)
        assert ledger.base_url == "https://toncenter.com/api/v2"

    def test_balance(self, ledger, client, destination_address):
        client.get.return_value = "1500000000"
        assert ledger.get_balance(destination_address) == 1_500_000_000
        assert client.get.call_args.kwargs["params"] == {
            "address": destination_address.raw
        }

    def test_malformed_balance(self, ledger, client, destination_address):
        client.get.return_value = {"unexpected": True}
        with pytest.raises(NetworkError, match="Malformed response"):
            ledger.get_balance(destination_address)

    def test_seqno(self, ledger, client, destination_address):
        client.post.return_value = {"exit_code": 0, "stack": [["num", "0x1f"]]}
        assert ledger.get_seqno(destination_address) == 31

        _, kwargs = client.post.call_args
        assert kwargs["json"] == {
            "address": destination_address.raw,
            "method": "seqno",
            "stack": [],
        }

    def test_seqno_of_undeployed_wallet_is_zero(
        self, ledger, client, destination_address
    ):
        client.post.return_value = {"exit_code": -13, "stack": []}
        client.get.return_value = "uninitialized"
        assert ledger.get_seqno(destination_address) == 0
        assert client.get.call_args.args[0] == "/getAddressState"

    def test_failed_seqno_on_deployed_wallet_raises(
        self, ledger, client, destination_address
    ):
        client.post.return_value = {"exit_code": -14, "stack": []}
        client.get.return_value = "active"
        with pytest.raises(NetworkError, match="exit code -14"):
            ledger.get_seqno(destination_address)

    @pytest.mark.parametrize(
        "result",
        [
            {"exit_code": 0, "stack": []},
            {"exit_code": 0, "stack": [["cell", "x"]]},
            {"exit_code": 0, "stack": [["num", "zz"]]},
            "oops",
        ],
    )
    def test_malformed_seqno(self, ledger, client, destination_address, result):
        client.post.return_value = result
        with pytest.raises(NetworkError):
            ledger.get_seqno(destination_address)

    def test_state(self, ledger, client, destination_address):
        client.get.return_value = "uninitialized"
        assert ledger.get_state(destination_address) == "uninitialized"

    def test_submit_sends_base64_boc(self, ledger, client, destination_address):
        client.post.return_value = {"@type": "ok"}
        envelope = SignedEnvelope(
            boc=b"\xb5\xee\x9c\x72",
            message_hash="00" * 32,
            seqno=3,
            request=TransferRequest(destination=destination_address, amount_nano=1),
        )

        assert ledger.submit(envelope) == {"@type": "ok"}
        args, kwargs = client.post.call_args
        assert args[0] == "/sendBoc"
        assert kwargs["json"] == {"boc": "te6ccg=="}

    def test_network_errors_propagate(self, ledger, client, destination_address):
        client.get.side_effect = NetworkError(
            error_type=Mock(), message="Fetch balance: Connection timeout"
        )
        with pytest.raises(NetworkError):
            ledger.get_balance(destination_address)
