"""Exception hierarchy for addrflip.

Every failure is raised as a subclass of AddrflipError, which is itself a
ValueError, so callers that only care about "bad value" can catch that.
"""


class AddrflipError(ValueError):
    pass


class ConfigError(AddrflipError):
    pass


# ------------------ Codec ------------------

class CodecError(AddrflipError):
    pass


class EncodeError(CodecError):
    """Prefix or payload cannot be represented as checksummed text."""


class DecodeError(CodecError):
    """Text is not a well-formed checksummed string."""


# ------------------ Transcoder ------------------

class TranscodeError(AddrflipError):
    pass


class InvalidInput(TranscodeError):
    """canonicalize() could not produce canonical bytes."""

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message)


class InvalidCanonicalAddress(TranscodeError):
    """humanize() could not recover a human string."""

    def __init__(self, message: str = "Invalid canonical address"):
        super().__init__(message)


class AddressNotNormalized(TranscodeError):
    def __init__(self, message: str = "Address not normalized"):
        super().__init__(message)


class Instantiate2AddressError(AddrflipError):
    pass
