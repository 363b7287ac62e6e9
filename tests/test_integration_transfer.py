"""Live transfer tests against toncenter testnet.

Run only when TON_TEST_MNEMONIC holds a funded testnet wallet phrase.
"""

import os

import pytest

from ton_quick_transfer.features.transfer.service import (
    TransferService,
    execute_transfer,
)
from ton_quick_transfer.shared.config import TransferConfig

TEST_MNEMONIC = os.getenv("TON_TEST_MNEMONIC")
TEST_API_KEY = os.getenv("TONCENTER_API_KEY")

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(not TEST_MNEMONIC, reason="TON_TEST_MNEMONIC not set"),
]


@pytest.fixture
def live_config(monkeypatch):
    if TEST_API_KEY:
        monkeypatch.setenv("TONCENTER_API_KEY", TEST_API_KEY)
    return TransferConfig.load(network="testnet")


def test_live_balance_and_seqno(live_config):
    service = TransferService(config=live_config)
    wallet = service.unlock(TEST_MNEMONIC)

    assert service.get_balance(wallet) >= 0
    assert service.ledger.get_seqno(wallet.address) >= 0


def test_live_send_to_self_and_confirm(live_config):
    service = TransferService(config=live_config)
    wallet = service.unlock(TEST_MNEMONIC)

    result = execute_transfer(
        TEST_MNEMONIC,
        wallet.display_address,
        "0.01",
        "ton-quick-transfer integration test",
        config=live_config,
    )

    assert result.success, result.error_message
    assert result.message_hash
