from __future__ import annotations

import logging
from dataclasses import dataclass, field

from tonsdk.contract.wallet import Wallets, WalletVersionEnum
from tonsdk.crypto import mnemonic_is_valid, mnemonic_to_wallet_key

from ton_quick_transfer.shared.address import WalletAddress
from ton_quick_transfer.shared.errors import InvalidMnemonic
from ton_quick_transfer.shared.protocols import MnemonicChecksum

logger = logging.getLogger(__name__)

MNEMONIC_WORD_COUNT = 24
PUBLIC_KEY_LENGTH = 32
SECRET_KEY_LENGTH = 64


@dataclass(frozen=True)
class KeyPair:
    public_key: bytes
    secret_key: bytes = field(repr=False)

    def __post_init__(self):
        if len(self.public_key) != PUBLIC_KEY_LENGTH:
            raise ValueError(f"Public key must be {PUBLIC_KEY_LENGTH} bytes")
        if len(self.secret_key) != SECRET_KEY_LENGTH:
            raise ValueError(f"Secret key must be {SECRET_KEY_LENGTH} bytes")


def normalize_mnemonic(mnemonic: str | list[str]) -> list[str]:
    if isinstance(mnemonic, str):
        words = mnemonic.split()
    else:
        words = [w for word in mnemonic for w in str(word).split()]
    return [word.strip().lower() for word in words]


class KeyDeriver:
    """Turns a 24-word recovery phrase into the wallet's Ed25519 keypair."""

    def __init__(self, checksum_validator: MnemonicChecksum = mnemonic_is_valid):
        self._checksum_validator = checksum_validator

    def validate(self, mnemonic: str | list[str]) -> list[str]:
        words = normalize_mnemonic(mnemonic)
        if len(words) != MNEMONIC_WORD_COUNT:
            raise InvalidMnemonic(
                f"Mnemonic must contain exactly {MNEMONIC_WORD_COUNT} words, got {len(words)}"
            )
        if not self._checksum_validator(words):
            raise InvalidMnemonic("Invalid mnemonic phrase")
        return words

    def derive(self, mnemonic: str | list[str]) -> KeyPair:
        words = self.validate(mnemonic)
        public_key, secret_key = mnemonic_to_wallet_key(words)
        return KeyPair(public_key=bytes(public_key), secret_key=bytes(secret_key))


class WalletIdentity:
    """Derives the on-chain address of a wallet contract from its public key."""

    def __init__(self, workchain: int = 0, revision: str = "v4r2"):
        try:
            self.version = WalletVersionEnum(revision)
        except ValueError as e:
            raise ValueError(f"Unsupported wallet revision: {revision}") from e
        self.workchain = workchain
        self.revision = revision

    def contract_for(self, public_key: bytes, secret_key: bytes | None = None):
        """Return the tonsdk contract for this revision.

        tonsdk refuses to build a wallet contract without a private key even
        though the address only depends on the code and the public key. Without
        ``secret_key`` the contract carries an all-zero key and can only be used
        for address and state-init computation, never for signing.
        """
        options = {
            "public_key": public_key,
            "private_key": secret_key
            if secret_key is not None
            else bytes(SECRET_KEY_LENGTH),
            "wc": self.workchain,
        }
        return Wallets.ALL[self.version](**options)

    def derive(self, public_key: bytes) -> WalletAddress:
        if len(public_key) != PUBLIC_KEY_LENGTH:
            raise ValueError(f"Public key must be {PUBLIC_KEY_LENGTH} bytes")
        address = self.contract_for(public_key).create_state_init()["address"]
        return WalletAddress(
            workchain=int(address.wc), hash_part=bytes(address.hash_part)
        )


@dataclass(frozen=True)
class UnlockedWallet:
    """Keys and address of the sending wallet for the lifetime of one run."""

    keypair: KeyPair
    address: WalletAddress
    network: str
    display_address: str
