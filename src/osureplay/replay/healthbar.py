from __future__ import annotations

import math
import re
from typing import Final

from .errors import HealthbarFormatError
from .types import HealthbarPoint

_NUMBER_RE: Final = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|[+-]?Infinity")


def _to_number(text: str) -> float | None:
    # Same acceptance as JavaScript's unary plus on decimal text: blank is 0.
    stripped = text.strip()
    if not stripped:
        return 0.0
    if _NUMBER_RE.fullmatch(stripped) is None:
        return None
    return float(stripped.replace("Infinity", "inf"))


def parse_healthbar(text: str, *, strict: bool = False) -> tuple[HealthbarPoint, ...]:
    """Parse `"time|life,time|life,..."` into points, keeping source order.

    Empty segments are dropped and segments are whitespace-trimmed. Values
    that are not numeric become `nan` unless `strict` is set, in which case
    `HealthbarFormatError` is raised instead.
    """

    points: list[HealthbarPoint] = []
    for segment in text.split(","):
        if not segment:
            continue
        token = segment.strip()
        parts = token.split("|")
        values: list[float] = []
        for part in parts[:2]:
            value = _to_number(part)
            if value is None:
                if strict:
                    raise HealthbarFormatError(f"healthbar token has non-numeric value: {token!r}")
                value = math.nan
            values.append(value)
        if len(values) < 2:
            if strict:
                raise HealthbarFormatError(f"healthbar token must be 'time|life': {token!r}")
            values.append(math.nan)
        points.append(HealthbarPoint(timestamp=values[0], percentage=values[1]))
    return tuple(points)
