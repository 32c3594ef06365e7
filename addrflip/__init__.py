"""
addrflip - reversible canonicalization of bech32-style addresses.

Example Usage:
    from addrflip import Transcoder

    tc = Transcoder.new("juno")
    canonical = tc.canonicalize("shorty")   # b"onuj1..."
    tc.humanize(canonical)                  # "shorty"
"""

from .api import MockApi, instantiate2_address
from .codec import Bech32Codec, ChecksumCodec, Decoded, Variant
from .errors import (
    AddrflipError,
    AddressNotNormalized,
    CodecError,
    ConfigError,
    DecodeError,
    EncodeError,
    Instantiate2AddressError,
    InvalidCanonicalAddress,
    InvalidInput,
    TranscodeError,
)
from .transcoder import DEFAULT_PREFIX, Transcoder

__version__ = "0.1.0"

__all__ = [
    "Transcoder",
    "DEFAULT_PREFIX",
    "MockApi",
    "instantiate2_address",
    # Codec
    "Bech32Codec",
    "ChecksumCodec",
    "Decoded",
    "Variant",
    # Errors
    "AddrflipError",
    "AddressNotNormalized",
    "CodecError",
    "ConfigError",
    "DecodeError",
    "EncodeError",
    "Instantiate2AddressError",
    "InvalidCanonicalAddress",
    "InvalidInput",
    "TranscodeError",
]
