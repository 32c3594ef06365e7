"""
Checksummed-text codec (bech32 / bech32m).

What it does
- encode: prefix + payload bytes + variant -> "prefix1<data><checksum>"
- decode: checksummed text -> (prefix, payload bytes, variant)

The bit-level work (charset, polymod, 8->5 bit regrouping) is delegated to the
`bech32m` package (BIP-173 / BIP-350 reference code). This module only adds
the byte-oriented interface, the limits, and typed errors on top of the
library's own DecodeError.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from bech32m.codecs import DecodeError as Bech32DecodeError
from bech32m.codecs import Encoding, bech32_decode, bech32_encode, convertbits

from .errors import DecodeError, EncodeError

MAX_LENGTH = 90
MAX_PREFIX_LENGTH = 83
CHECKSUM_LENGTH = 6
SEPARATOR = "1"


class Variant(Enum):
    BECH32 = "bech32"
    BECH32M = "bech32m"

    @classmethod
    def parse(cls, name: str) -> "Variant":
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown variant: {name!r}") from None


_TO_ENCODING = {
    Variant.BECH32: Encoding.BECH32,
    Variant.BECH32M: Encoding.BECH32M,
}
_FROM_ENCODING = {enc: var for var, enc in _TO_ENCODING.items()}


@dataclass(frozen=True)
class Decoded:
    prefix: str
    payload: bytes
    variant: Variant


class ChecksumCodec(Protocol):
    def encode(self, prefix: str, payload: bytes, variant: Variant) -> str:
        ...

    def decode(self, text: str) -> Decoded:
        ...


def check_prefix(prefix: str) -> None:
    """Raise EncodeError unless `prefix` is usable as a human-readable part."""
    if not prefix:
        raise EncodeError("prefix must not be empty")
    if len(prefix) > MAX_PREFIX_LENGTH:
        raise EncodeError(f"prefix longer than {MAX_PREFIX_LENGTH} characters")
    if any(ord(c) < 33 or ord(c) > 126 for c in prefix):
        raise EncodeError(f"prefix contains invalid characters: {prefix!r}")
    if prefix.lower() != prefix and prefix.upper() != prefix:
        raise EncodeError(f"prefix has mixed case: {prefix!r}")


class Bech32Codec:
    """Default ChecksumCodec backed by the bech32m reference implementation."""

    max_length = MAX_LENGTH

    def encode(self, prefix: str, payload: bytes, variant: Variant) -> str:
        check_prefix(prefix)
        words = bytes(convertbits(bytes(payload), 8, 5))
        text = bech32_encode(prefix.lower(), words, _TO_ENCODING[variant])
        # bech32_decode rejects anything longer
        if len(text) > self.max_length:
            raise EncodeError(
                f"encoded length {len(text)} exceeds {self.max_length} characters"
            )
        return text

    def decode(self, text: str) -> Decoded:
        try:
            prefix, words, encoding = bech32_decode(text)
        except Bech32DecodeError:
            raise DecodeError(f"not a valid checksummed string: {text!r}") from None
        try:
            payload = convertbits(words, 5, 8, False)
        except Bech32DecodeError:
            raise DecodeError(f"invalid padding in data part: {text!r}") from None
        return Decoded(prefix, bytes(payload), _FROM_ENCODING[encoding])
