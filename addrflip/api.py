"""
Mock chain API on top of the transcoder.

Mirrors the address half of a contract host API, which is what tests and demo
scripts actually call: validate, canonicalize, humanize, and a helper that
makes deterministic addresses out of names. Signature verification is not
provided.
"""

import hashlib
import logging
import struct
from typing import Optional

from .codec import Variant
from .errors import (
    AddressNotNormalized,
    EncodeError,
    Instantiate2AddressError,
    InvalidInput,
)
from .transcoder import Transcoder

logger = logging.getLogger("addrflip.api")

DEFAULT_PREFIX = "mockapi"


class MockApi:
    def __init__(
        self,
        prefix: str = DEFAULT_PREFIX,
        variant: Variant = Variant.BECH32,
        transcoder: Optional[Transcoder] = None,
    ):
        if transcoder is None:
            transcoder = Transcoder.new(prefix, variant)
        self.transcoder = transcoder

    @classmethod
    def from_transcoder(cls, transcoder: Transcoder) -> "MockApi":
        return cls(transcoder=transcoder)

    @property
    def prefix(self) -> str:
        return self.transcoder.prefix

    @property
    def internal_prefix(self) -> str:
        return self.transcoder.internal_prefix

    def with_prefix(self, prefix: str) -> "MockApi":
        return MockApi(
            transcoder=Transcoder.new(
                prefix, self.transcoder.variant, self.transcoder.codec
            )
        )

    def addr_canonicalize(self, human: str) -> bytes:
        return self.transcoder.canonicalize(human)

    def addr_humanize(self, canonical: bytes) -> str:
        return self.transcoder.humanize(canonical)

    def addr_validate(self, human: str) -> str:
        """Accept `human` only if a canonicalize/humanize round trip leaves it unchanged."""
        canonical = self.addr_canonicalize(human)
        normalized = self.addr_humanize(canonical)
        if normalized != human:
            logger.debug("%r normalizes to %r", human, normalized)
            raise AddressNotNormalized()
        return human

    def addr_make(self, name: str) -> str:
        """Deterministic address for `name`: SHA-256 of the name under the public prefix."""
        digest = hashlib.sha256(name.encode("utf-8")).digest()
        try:
            return self.transcoder.codec.encode(
                self.transcoder.prefix, digest, self.transcoder.variant
            )
        except EncodeError as e:
            raise InvalidInput(f"Cannot make address for {name!r}: {e}") from e


# ------------------ Predictable contract addresses ------------------

def _length_prefixed(data: bytes) -> bytes:
    return struct.pack(">Q", len(data)) + data


def _module_hash(ty: str, key: bytes) -> bytes:
    inner = hashlib.sha256(ty.encode("utf-8")).digest()
    return hashlib.sha256(inner + key).digest()


def instantiate2_address(
    checksum: bytes, creator: bytes, salt: bytes, msg: bytes = b""
) -> bytes:
    """
    Canonical address of a contract instantiated with a caller-chosen salt.

    address = sha256(sha256("module") || key)
    key     = "wasm\\0" || len|checksum || len|creator || len|salt || len|msg
    (lengths are 8-byte big-endian)
    """
    if len(checksum) != 32:
        raise Instantiate2AddressError(
            f"checksum must be 32 bytes, got {len(checksum)}"
        )
    if not 1 <= len(salt) <= 64:
        raise Instantiate2AddressError(
            f"salt must be between 1 and 64 bytes, got {len(salt)}"
        )
    key = (
        b"wasm\0"
        + _length_prefixed(bytes(checksum))
        + _length_prefixed(bytes(creator))
        + _length_prefixed(bytes(salt))
        + _length_prefixed(bytes(msg))
    )
    return _module_hash("module", key)
