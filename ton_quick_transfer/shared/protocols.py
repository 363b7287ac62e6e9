"""Protocol definitions for the collaborators of the transfer flow."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Protocol

if TYPE_CHECKING:
    from ton_quick_transfer.shared.address import WalletAddress
    from ton_quick_transfer.transaction import SignedEnvelope


class LedgerProtocol(Protocol):
    """Ledger RPC service. Implementations raise NetworkError on failure."""

    def get_balance(self, address: "WalletAddress") -> int: ...

    def get_seqno(self, address: "WalletAddress") -> int: ...

    def submit(self, envelope: "SignedEnvelope") -> dict[str, Any]: ...


MnemonicChecksum = Callable[[list[str]], bool]

StatusCallback = Callable[[str, str], None]
