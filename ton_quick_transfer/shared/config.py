"""Runtime configuration for TON Quick Transfer."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ton_quick_transfer.shared.network import RetryConfig, TimeoutConfig

logger = logging.getLogger(__name__)

NETWORK_ENDPOINTS = {
    "mainnet": "https://toncenter.com/api/v2",
    "testnet": "https://testnet.toncenter.com/api/v2",
}
DEFAULT_NETWORK = "testnet"
DEFAULT_FEE_MARGIN_NANO = 10_000_000
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "ton-quick-transfer" / "config.json"


@dataclass
class ConfirmationConfig:
    poll_interval: float = 2.0
    timeout: float = 120.0

    def __post_init__(self):
        if self.poll_interval < 0:
            raise ValueError("poll_interval must not be negative")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")


def normalize_network(name: str | None) -> str:
    network = (name or DEFAULT_NETWORK).strip().lower()
    if network not in NETWORK_ENDPOINTS:
        raise ValueError(
            f"Unknown network '{name}'. Expected one of: {', '.join(NETWORK_ENDPOINTS)}"
        )
    return network


@dataclass
class TransferConfig:
    network: str = DEFAULT_NETWORK
    endpoint: str | None = None
    api_key: str | None = None
    fee_margin_nano: int = DEFAULT_FEE_MARGIN_NANO
    wallet_revision: str = "v4r2"
    workchain: int = 0
    message_ttl: int = 60
    confirmation: ConfirmationConfig = field(default_factory=ConfirmationConfig)
    timeout_config: TimeoutConfig = field(default_factory=TimeoutConfig)
    retry_config: RetryConfig = field(default_factory=RetryConfig)

    def __post_init__(self):
        self.network = normalize_network(self.network)
        if self.fee_margin_nano < 0:
            raise ValueError("fee_margin_nano must not be negative")

    @property
    def base_url(self) -> str:
        return (self.endpoint or NETWORK_ENDPOINTS[self.network]).rstrip("/")

    @property
    def is_testnet(self) -> bool:
        return self.network == "testnet"

    def for_network(self, network: str | None) -> "TransferConfig":
        """Copy of this config targeting ``network``; a custom endpoint is dropped on change."""
        if network is None:
            return self
        target = normalize_network(network)
        if target == self.network:
            return self
        return TransferConfig(
            network=target,
            endpoint=None,
            api_key=self.api_key,
            fee_margin_nano=self.fee_margin_nano,
            wallet_revision=self.wallet_revision,
            workchain=self.workchain,
            message_ttl=self.message_ttl,
            confirmation=self.confirmation,
            timeout_config=self.timeout_config,
            retry_config=self.retry_config,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TransferConfig":
        confirmation_cfg = data.get("confirmation", {})
        timeout_cfg = data.get("timeout", {})
        retry_cfg = data.get("retry", {})
        return cls(
            network=data.get("network", DEFAULT_NETWORK),
            endpoint=data.get("endpoint"),
            api_key=data.get("api_key"),
            fee_margin_nano=int(data.get("fee_margin_nano", DEFAULT_FEE_MARGIN_NANO)),
            wallet_revision=data.get("wallet_revision", "v4r2"),
            workchain=int(data.get("workchain", 0)),
            message_ttl=int(data.get("message_ttl", 60)),
            confirmation=ConfirmationConfig(
                poll_interval=float(confirmation_cfg.get("poll_interval", 2.0)),
                timeout=float(confirmation_cfg.get("timeout", 120.0)),
            ),
            timeout_config=TimeoutConfig(
                connect_timeout=float(timeout_cfg.get("connect_timeout", 5.0)),
                read_timeout=float(timeout_cfg.get("read_timeout", 15.0)),
            ),
            retry_config=RetryConfig(
                max_retries=int(retry_cfg.get("max_retries", 3)),
                base_delay=float(retry_cfg.get("base_delay", 1.0)),
                max_delay=float(retry_cfg.get("max_delay", 30.0)),
            ),
        )

    @classmethod
    def load(
        cls,
        path: str | Path | None = None,
        network: str | None = None,
    ) -> "TransferConfig":
        """Defaults, then the JSON file, then environment, then ``network``."""
        config_path = Path(
            path or os.getenv("TON_TRANSFER_CONFIG") or DEFAULT_CONFIG_PATH
        ).expanduser()

        data: dict[str, Any] = {}
        if config_path.exists():
            try:
                with open(config_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid config file {config_path}: {e}") from e
            if not isinstance(data, dict):
                raise ValueError(f"Invalid config file {config_path}: expected an object")
            logger.debug("Loaded config from %s", config_path)

        env_overrides = {
            "network": os.getenv("TON_TRANSFER_NETWORK"),
            "endpoint": os.getenv("TON_TRANSFER_ENDPOINT"),
            "api_key": os.getenv("TONCENTER_API_KEY"),
            "fee_margin_nano": os.getenv("TON_TRANSFER_FEE_MARGIN"),
        }
        for key, value in env_overrides.items():
            if value:
                data[key] = value

        confirmation = dict(data.get("confirmation", {}))
        poll_interval = os.getenv("TON_TRANSFER_POLL_INTERVAL")
        if poll_interval:
            confirmation["poll_interval"] = poll_interval
        confirm_timeout = os.getenv("TON_TRANSFER_CONFIRM_TIMEOUT")
        if confirm_timeout:
            confirmation["timeout"] = confirm_timeout
        data["confirmation"] = confirmation

        if network:
            if normalize_network(data.get("network")) != normalize_network(network):
                data["endpoint"] = None
            data["network"] = network

        return cls.from_dict(data)
