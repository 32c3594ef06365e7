"""
Prefix-flip transcoder: human text <-> canonical bytes.

Two prefixes split the checksummed-text space into namespaces:

- public prefix (as configured, e.g. "juno"): real addresses. Text that
  decodes under it is passed through byte-for-byte in both directions.
- internal prefix (the public prefix reversed, e.g. "onuj"): plain text that
  canonicalize() wrapped. humanize() unwraps it again.

Anything else is plain text on the way in and raw payload (e.g. a 32-byte
hash) on the way out.

    tc = Transcoder.new("juno")
    canonical = tc.canonicalize("Shorty")    # b"onuj1..."
    tc.humanize(canonical)                   # "shorty"
"""

from dataclasses import dataclass, field
from typing import Optional

from .codec import Bech32Codec, ChecksumCodec, Variant, check_prefix
from .errors import (
    DecodeError,
    EncodeError,
    InvalidCanonicalAddress,
    InvalidInput,
)

DEFAULT_PREFIX = "cosmwasm"


def _reverse(prefix: str) -> str:
    return prefix[::-1]


@dataclass(frozen=True)
class Transcoder:
    prefix: str
    variant: Variant = Variant.BECH32
    codec: ChecksumCodec = field(default_factory=Bech32Codec, compare=False, repr=False)
    internal_prefix: str = field(init=False)

    def __post_init__(self):
        try:
            check_prefix(self.prefix)
        except EncodeError as e:
            raise InvalidInput(f"Invalid prefix: {e}") from e
        if self.prefix != self.prefix.lower():
            raise InvalidInput(f"Invalid prefix: must be lowercase: {self.prefix!r}")
        # A palindromic prefix is its own internal prefix; humanize() then
        # prefers unwrapping.
        object.__setattr__(self, "internal_prefix", _reverse(self.prefix))

    # ------------------ Constructors ------------------

    @classmethod
    def new(
        cls,
        prefix: str,
        variant: Variant = Variant.BECH32,
        codec: Optional[ChecksumCodec] = None,
    ) -> "Transcoder":
        return cls(prefix, variant, codec if codec is not None else Bech32Codec())

    @classmethod
    def new_b32(cls, prefix: str) -> "Transcoder":
        return cls.new(prefix, Variant.BECH32)

    @classmethod
    def new_b32m(cls, prefix: str) -> "Transcoder":
        return cls.new(prefix, Variant.BECH32M)

    @classmethod
    def default(cls) -> "Transcoder":
        return cls.new(DEFAULT_PREFIX)

    # ------------------ Transcoding ------------------

    def canonicalize(self, human: str) -> bytes:
        """Turn human text into canonical bytes.

        Text that already decodes under the public prefix is returned as its
        raw UTF-8 bytes. Mixed-case text whose lowercase form is such an
        address is returned lowercased. Everything else, including text that
        happens to decode under the internal prefix, is lowercased and wrapped
        under the internal prefix.
        """
        if self._is_public(human):
            return human.encode("utf-8")

        lowered = human.lower()
        if lowered != human and self._is_public(lowered):
            return lowered.encode("utf-8")

        try:
            wrapped = self.codec.encode(
                self.internal_prefix, lowered.encode("utf-8"), self.variant
            )
        except (EncodeError, UnicodeEncodeError) as e:
            raise InvalidInput(f"Invalid input: {e}") from e
        return wrapped.encode("utf-8")

    def _is_public(self, text: str) -> bool:
        try:
            return self.codec.decode(text).prefix == self.prefix
        except DecodeError:
            return False

    def humanize(self, canonical: bytes) -> str:
        """Turn canonical bytes back into human text.

        Wrapped text is unwrapped, public-prefix text is returned as-is, and
        any other bytes are encoded as a fresh public-prefix address.
        """
        canonical = bytes(canonical)
        text = canonical.decode("utf-8", errors="replace")
        try:
            decoded = self.codec.decode(text)
        except DecodeError:
            decoded = None
        if decoded is not None:
            if decoded.prefix == self.internal_prefix:
                return decoded.payload.decode("utf-8", errors="replace")
            if decoded.prefix == self.prefix:
                return text

        try:
            return self.codec.encode(self.prefix, canonical, self.variant)
        except EncodeError as e:
            raise InvalidCanonicalAddress(f"Invalid canonical address: {e}") from e
