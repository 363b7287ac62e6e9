"""toncenter HTTP API v2 implementation of the ledger service."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ton_quick_transfer.shared.config import TransferConfig
from ton_quick_transfer.shared.network import (
    ApiError,
    NetworkClient,
    NetworkError,
    create_network_error,
)

if TYPE_CHECKING:
    from ton_quick_transfer.shared.address import WalletAddress
    from ton_quick_transfer.transaction import SignedEnvelope

logger = logging.getLogger(__name__)

UNINITIALIZED = "uninitialized"


class ToncenterLedger:
    def __init__(self, client: NetworkClient):
        self._client = client

    @classmethod
    def from_config(cls, config: TransferConfig) -> "ToncenterLedger":
        return cls(
            NetworkClient(
                base_url=config.base_url,
                api_key=config.api_key,
                timeout_config=config.timeout_config,
                retry_config=config.retry_config,
            )
        )

    @property
    def base_url(self) -> str:
        return self._client.base_url

    def _malformed(self, context: str, result: Any) -> NetworkError:
        return create_network_error(
            ApiError(f"Malformed response: {result!r}"), self.base_url, context
        )

    def get_balance(self, address: "WalletAddress") -> int:
        context = "Fetch balance"
        result = self._client.get(
            "/getAddressBalance", context=context, params={"address": address.raw}
        )
        try:
            return int(result)
        except (TypeError, ValueError):
            raise self._malformed(context, result)

    def get_seqno(self, address: "WalletAddress") -> int:
        context = "Fetch seqno"
        result = self._client.post(
            "/runGetMethod",
            context=context,
            json={"address": address.raw, "method": "seqno", "stack": []},
        )
        if not isinstance(result, dict):
            raise self._malformed(context, result)

        exit_code = result.get("exit_code", 0)
        if exit_code != 0:
            # only an undeployed wallet has no seqno; anything else is a failed read
            state = self.get_state(address)
            logger.debug(
                "seqno get-method exit code %s for %s (%s)", exit_code, address, state
            )
            if state == UNINITIALIZED:
                return 0
            raise create_network_error(
                ApiError(f"seqno get-method failed with exit code {exit_code}"),
                self.base_url,
                context,
            )

        stack = result.get("stack") or []
        try:
            kind, value = stack[0][0], stack[0][1]
            if kind != "num":
                raise ValueError(kind)
            return int(value, 16)
        except (IndexError, TypeError, ValueError):
            raise self._malformed(context, result)

    def get_state(self, address: "WalletAddress") -> str:
        result = self._client.get(
            "/getAddressState",
            context="Fetch account state",
            params={"address": address.raw},
        )
        return str(result)

    def submit(self, envelope: "SignedEnvelope") -> dict[str, Any]:
        result = self._client.post(
            "/sendBoc",
            context="Submit transfer",
            json={"boc": envelope.boc_base64},
        )
        logger.info(
            "Transfer submitted: seqno=%s hash=%s", envelope.seqno, envelope.message_hash
        )
        return result if isinstance(result, dict) else {"result": result}
