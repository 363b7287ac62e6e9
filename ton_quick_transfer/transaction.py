from __future__ import annotations

import base64
import logging
import time
from dataclasses import dataclass, field
from typing import Callable

from tonsdk.boc import Cell
from tonsdk.contract import Contract

from ton_quick_transfer.shared.address import WalletAddress
from ton_quick_transfer.shared.errors import InvalidAmount, InvalidComment, SigningError
from ton_quick_transfer.shared.validation import CommentValidator
from ton_quick_transfer.wallet import KeyPair, WalletIdentity

logger = logging.getLogger(__name__)

TEXT_COMMENT_OPCODE = 0
DEFAULT_SEND_MODE = 3
NO_EXPIRY = 0xFFFFFFFF


@dataclass(frozen=True)
class TransferRequest:
    destination: WalletAddress
    amount_nano: int
    comment: str | None = None
    bounceable: bool = False

    def __post_init__(self):
        if self.amount_nano <= 0:
            raise InvalidAmount("Transfer amount must be greater than zero")


@dataclass(frozen=True)
class UnsignedTransfer:
    destination: WalletAddress
    amount_nano: int
    comment: str | None
    bounceable: bool
    seqno: int
    valid_until: int
    send_mode: int
    payload_hash: bytes
    payload: Cell = field(compare=False, repr=False)


@dataclass(frozen=True)
class SignedEnvelope:
    boc: bytes
    message_hash: str
    seqno: int
    request: TransferRequest

    @property
    def boc_base64(self) -> str:
        return base64.b64encode(self.boc).decode("ascii")


def encode_comment(comment: str) -> Cell:
    """Text comment body: opcode 0 then UTF-8 bytes, overflow chained through refs."""
    data = comment.encode("utf-8")
    root = Cell()
    root.bits.write_uint(TEXT_COMMENT_OPCODE, 32)

    cell = root
    while True:
        capacity = cell.bits.get_free_bits() // 8
        cell.bits.write_bytes(data[:capacity])
        data = data[capacity:]
        if not data:
            return root
        tail = Cell()
        cell.refs.append(tail)
        cell = tail


class TransferBuilder:
    def __init__(self, clock: Callable[[], float] = time.time, ttl_seconds: int = 60):
        self._clock = clock
        self.ttl_seconds = ttl_seconds

    def _valid_until(self, seqno: int) -> int:
        if seqno == 0:
            return NO_EXPIRY
        return int(self._clock()) + self.ttl_seconds

    def build(self, request: TransferRequest, seqno: int) -> UnsignedTransfer:
        if seqno < 0:
            raise ValueError("seqno must not be negative")

        result = CommentValidator.validate(request.comment)
        if not result.is_valid:
            raise InvalidComment(result.error_message or "Invalid comment")

        comment = result.normalized_value
        payload = encode_comment(comment) if comment else Cell()

        return UnsignedTransfer(
            destination=request.destination,
            amount_nano=request.amount_nano,
            comment=comment,
            bounceable=request.bounceable,
            seqno=seqno,
            valid_until=self._valid_until(seqno),
            send_mode=DEFAULT_SEND_MODE,
            payload_hash=bytes(payload.bytes_hash()),
            payload=payload,
        )


class TransferSigner:
    def __init__(self, identity: WalletIdentity):
        self.identity = identity

    def _signing_message(self, contract, descriptor: UnsignedTransfer) -> Cell:
        message = Cell()
        message.bits.write_uint(contract.options["wallet_id"], 32)
        message.bits.write_uint(descriptor.valid_until, 32)
        message.bits.write_uint(descriptor.seqno, 32)
        if self.identity.revision.startswith("v4"):
            message.bits.write_uint(0, 8)
        message.bits.write_uint8(descriptor.send_mode)

        header = Contract.create_internal_message_header(
            descriptor.destination.to_tonsdk(),
            descriptor.amount_nano,
            bounce=descriptor.bounceable,
        )
        message.refs.append(
            Contract.create_common_msg_info(header, None, descriptor.payload)
        )
        return message

    def sign(self, descriptor: UnsignedTransfer, keypair: KeyPair) -> SignedEnvelope:
        try:
            contract = self.identity.contract_for(
                keypair.public_key, keypair.secret_key
            )
            signing_message = self._signing_message(contract, descriptor)
            query = contract.create_external_message(signing_message, descriptor.seqno)
            external = query["message"]
            boc = bytes(external.to_boc(False))
            message_hash = bytes(external.bytes_hash()).hex()
        except Exception as e:
            logger.error("Signing failed for seqno %s: %s", descriptor.seqno, e)
            raise SigningError(f"Failed to sign transfer: {e}") from e

        return SignedEnvelope(
            boc=boc,
            message_hash=message_hash,
            seqno=descriptor.seqno,
            request=TransferRequest(
                destination=descriptor.destination,
                amount_nano=descriptor.amount_nano,
                comment=descriptor.comment,
                bounceable=descriptor.bounceable,
            ),
        )
