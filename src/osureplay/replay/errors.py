from __future__ import annotations


class ReplayCodecError(ValueError):
    pass


class TruncatedInputError(ReplayCodecError):
    """A read would run past the end of the replay buffer."""


class MalformedVarIntError(TruncatedInputError):
    """A ULEB128 string length ran off the end of the buffer."""


class DecompressionFailedError(ReplayCodecError):
    """The replay-data codec rejected the compressed payload."""


class HealthbarFormatError(ReplayCodecError):
    """Raised only when healthbar parsing is strict."""
