"""Shared fixtures.

FakeCodec stands in for bech32 with a readable format so transcoder tests can
check the decision logic without depending on the real bit layout:

    <prefix>1<payload hex><variant tag><4 hex checksum chars>
"""

from __future__ import annotations

import hashlib

import pytest

from addrflip.codec import Bech32Codec, Decoded, Variant
from addrflip.errors import DecodeError, EncodeError
from addrflip.transcoder import Transcoder

_TAGS = {Variant.BECH32: "a", Variant.BECH32M: "m"}


class FakeCodec:
    def __init__(self, max_length: int = 90):
        self.max_length = max_length
        self.encoded: list[tuple[str, bytes, Variant]] = []

    @staticmethod
    def _check(prefix: str, body: str, tag: str) -> str:
        return hashlib.sha256(f"{prefix}|{body}|{tag}".encode()).hexdigest()[:4]

    def encode(self, prefix: str, payload: bytes, variant: Variant) -> str:
        if not prefix or "1" in prefix:
            raise EncodeError("bad prefix")
        body = bytes(payload).hex()
        tag = _TAGS[variant]
        text = f"{prefix}1{body}{tag}{self._check(prefix, body, tag)}"
        if len(text) > self.max_length:
            raise EncodeError("too long")
        self.encoded.append((prefix, bytes(payload), variant))
        return text

    def decode(self, text: str) -> Decoded:
        prefix, sep, rest = text.partition("1")
        if not sep or not prefix or len(rest) < 5:
            raise DecodeError("malformed")
        body, tag, check = rest[:-5], rest[-5], rest[-4:]
        if tag not in ("a", "m") or check != self._check(prefix, body, tag):
            raise DecodeError("bad checksum")
        try:
            payload = bytes.fromhex(body)
        except ValueError:
            raise DecodeError("bad body") from None
        variant = Variant.BECH32 if tag == "a" else Variant.BECH32M
        return Decoded(prefix, payload, variant)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in ("ADDRFLIP_PREFIX", "ADDRFLIP_VARIANT", "ADDRFLIP_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def codec():
    return Bech32Codec()


@pytest.fixture
def fake_codec():
    return FakeCodec()


@pytest.fixture
def cosmwasm():
    return Transcoder.default()


@pytest.fixture
def juno():
    return Transcoder.new_b32("juno")
