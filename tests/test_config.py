"""Tests for configuration loading and precedence."""

import json

import pytest

from ton_quick_transfer.shared.config import (
    DEFAULT_FEE_MARGIN_NANO,
    ConfirmationConfig,
    TransferConfig,
    normalize_network,
)


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    monkeypatch.setenv("TON_TRANSFER_CONFIG", str(path))

    def write(data):
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return write


@pytest.mark.unit
class TestTransferConfig:
    def test_defaults(self):
        config = TransferConfig.load()
        assert config.network == "testnet"
        assert config.base_url == "https://testnet.toncenter.com/api/v2"
        assert config.fee_margin_nano == DEFAULT_FEE_MARGIN_NANO
        assert config.confirmation.poll_interval == 2.0
        assert config.confirmation.timeout == 120.0
        assert config.wallet_revision == "v4r2"
        assert config.is_testnet

    def test_file_values(self, config_file):
        config_file(
            {
                "network": "mainnet",
                "api_key": "from-file",
                "confirmation": {"poll_interval": 1, "timeout": 30},
                "retry": {"max_retries": 5},
            }
        )
        config = TransferConfig.load()
        assert config.network == "mainnet"
        assert config.api_key == "from-file"
        assert config.confirmation.timeout == 30.0
        assert config.retry_config.max_retries == 5

    def test_environment_overrides_file(self, config_file, monkeypatch):
        config_file({"network": "mainnet", "confirmation": {"timeout": 30}})
        monkeypatch.setenv("TON_TRANSFER_NETWORK", "testnet")
        monkeypatch.setenv("TON_TRANSFER_CONFIRM_TIMEOUT", "45")
        monkeypatch.setenv("TON_TRANSFER_POLL_INTERVAL", "0.5")
        monkeypatch.setenv("TON_TRANSFER_FEE_MARGIN", "20000000")
        monkeypatch.setenv("TONCENTER_API_KEY", "from-env")

        config = TransferConfig.load()
        assert config.network == "testnet"
        assert config.confirmation.timeout == 45.0
        assert config.confirmation.poll_interval == 0.5
        assert config.fee_margin_nano == 20_000_000
        assert config.api_key == "from-env"

    def test_argument_overrides_environment(self, monkeypatch):
        monkeypatch.setenv("TON_TRANSFER_NETWORK", "testnet")
        config = TransferConfig.load(network="mainnet")
        assert config.network == "mainnet"

    def test_custom_endpoint_dropped_when_network_changes(self, monkeypatch):
        monkeypatch.setenv("TON_TRANSFER_ENDPOINT", "https://my-testnet-node/api/v2")
        assert TransferConfig.load().base_url == "https://my-testnet-node/api/v2"
        assert (
            TransferConfig.load(network="mainnet").base_url
            == "https://toncenter.com/api/v2"
        )
        assert (
            TransferConfig.load(network="testnet").base_url
            == "https://my-testnet-node/api/v2"
        )

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "other.json"
        path.write_text(json.dumps({"network": "mainnet"}), encoding="utf-8")
        assert TransferConfig.load(path=path).network == "mainnet"

    def test_malformed_file_rejected(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid config file"):
            TransferConfig.load(path=path)

    def test_non_object_file_rejected(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ValueError, match="expected an object"):
            TransferConfig.load(path=path)

    def test_unknown_network(self):
        with pytest.raises(ValueError, match="Unknown network"):
            TransferConfig(network="devnet")
        with pytest.raises(ValueError):
            TransferConfig.load(network="devnet")

    def test_normalize_network(self):
        assert normalize_network(" MainNet ") == "mainnet"
        assert normalize_network(None) == "testnet"

    def test_for_network(self):
        config = TransferConfig(endpoint="https://custom/api/v2", api_key="k")
        assert config.for_network(None) is config
        assert config.for_network("testnet") is config

        mainnet = config.for_network("mainnet")
        assert mainnet.network == "mainnet"
        assert mainnet.endpoint is None
        assert mainnet.api_key == "k"
        assert not mainnet.is_testnet

    def test_negative_fee_margin_rejected(self):
        with pytest.raises(ValueError):
            TransferConfig(fee_margin_nano=-1)

    def test_confirmation_bounds(self):
        with pytest.raises(ValueError):
            ConfirmationConfig(timeout=0)
        with pytest.raises(ValueError):
            ConfirmationConfig(poll_interval=-1)
