from __future__ import annotations

import datetime as dt
from typing import Final

# 100ns ticks between 0001-01-01T00:00:00Z and 1970-01-01T00:00:00Z.
EPOCH_TICKS: Final[int] = 621355968000000000
TICKS_PER_MS: Final[int] = 10000

_UNIX_EPOCH: Final[dt.datetime] = dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc)


def ticks_to_unix_ms(ticks: int) -> int:
    """Convert .NET-style 100ns ticks to milliseconds since 1970-01-01 UTC.

    Integer arithmetic throughout; the quotient truncates toward zero, also
    for instants before 1970.
    """

    delta = int(ticks) - EPOCH_TICKS
    quotient = abs(delta) // TICKS_PER_MS
    return quotient if delta >= 0 else -quotient


def unix_ms_to_datetime(ms: int) -> dt.datetime:
    """Raises `OverflowError` when `ms` is outside the range of `datetime`."""
    return _UNIX_EPOCH + dt.timedelta(milliseconds=int(ms))
