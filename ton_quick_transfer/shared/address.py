"""TON address value type and codec built on tonsdk."""

from __future__ import annotations

from dataclasses import dataclass

from tonsdk.utils import Address

from ton_quick_transfer.shared.errors import InvalidDestination

HASH_LENGTH = 32


@dataclass(frozen=True)
class WalletAddress:
    workchain: int
    hash_part: bytes

    def __post_init__(self):
        if len(self.hash_part) != HASH_LENGTH:
            raise ValueError(
                f"Address hash must be {HASH_LENGTH} bytes, got {len(self.hash_part)}"
            )

    @property
    def raw(self) -> str:
        return f"{self.workchain}:{self.hash_part.hex()}"

    def to_tonsdk(self) -> Address:
        return Address(self.raw)

    def __str__(self) -> str:
        return self.raw


class AddressCodec:
    """Parses and formats addresses. Stateless; one instance can be shared."""

    def __init__(self, testnet: bool = False):
        self.testnet = testnet

    def parse(self, text: str) -> WalletAddress:
        value = (text or "").strip()
        if not value:
            raise InvalidDestination("Recipient address is required")
        try:
            address = Address(value)
            return WalletAddress(
                workchain=int(address.wc), hash_part=bytes(address.hash_part)
            )
        except Exception as e:
            raise InvalidDestination(f"Invalid address format: {value}") from e

    def is_valid(self, text: str) -> bool:
        try:
            self.parse(text)
        except InvalidDestination:
            return False
        return True

    def format(self, address: WalletAddress, bounceable: bool = False) -> str:
        return address.to_tonsdk().to_string(True, True, bounceable, self.testnet)
