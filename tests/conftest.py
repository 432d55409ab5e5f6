from __future__ import annotations

import lzma
import sys
from pathlib import Path
from typing import Any, Callable

import pytest
from construct import Byte, Int16sl, Int32sl, Int64sl, Int64ul, VarInt


def pytest_configure(config: pytest.Config) -> None:
    # Ensure the local `src/` tree wins over any other editable install that may exist
    # (e.g. a different git worktree pointing at the same project).
    src_dir = Path(__file__).resolve().parents[1] / "src"
    src_str = str(src_dir)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)


EPOCH_TICKS = 621355968000000000

DEFAULT_FIELDS: dict[str, Any] = {
    "game_mode": 0,
    "version": 20200104,
    "beatmap_hash": "2857c41637b6c80d2c9c7fb5a9392635",
    "player": "minhducsun2002",
    "replay_hash": "372add2cc4e5fdf0cc6e1fbd4c56e3b5",
    "count_300": 412,
    "count_100": 23,
    "count_50": 2,
    "count_geki": 88,
    "count_katu": 15,
    "count_miss": 1,
    "score": 1673661,
    "max_combo": 313,
    "perfect": 0,
    "mods": 24,
    "healthbar": "1000|1,2500|0.92,4000|0.5,",
    "ticks": EPOCH_TICKS + 15_783_000_000_000_000,
    "replay_data": "0|256|-500|0,-1|256|-500|0,16|180.5|202.25|1,-12345|0|0|7295,",
    "score_id": None,
}


def osr_string(value: str | None) -> bytes:
    if value is None:
        return b"\x00"
    raw = value.encode("utf-8")
    return Byte.build(0x0B) + VarInt.build(len(raw)) + raw


def compress_replay_data(text: str) -> bytes:
    if not text:
        return b""
    return lzma.compress(text.encode("utf-8"), format=lzma.FORMAT_ALONE)


def build_osr(**overrides: Any) -> bytes:
    """Assemble a replay buffer field by field in file order.

    `payload=` supplies raw compressed bytes instead of compressing
    `replay_data`; `trailer=` appends bytes after the score id.
    """

    fields = {**DEFAULT_FIELDS, **overrides}
    payload = fields.get("payload")
    if payload is None:
        payload = compress_replay_data(fields["replay_data"])
    out = bytearray()
    out += Byte.build(fields["game_mode"])
    out += Int32sl.build(fields["version"])
    out += osr_string(fields["beatmap_hash"])
    out += osr_string(fields["player"])
    out += osr_string(fields["replay_hash"])
    for key in ("count_300", "count_100", "count_50", "count_geki", "count_katu", "count_miss"):
        out += Int16sl.build(fields[key])
    out += Int32sl.build(fields["score"])
    out += Int16sl.build(fields["max_combo"])
    out += Byte.build(fields["perfect"])
    out += Int32sl.build(fields["mods"])
    out += osr_string(fields["healthbar"])
    out += Int64ul.build(fields["ticks"])
    out += Int32sl.build(len(payload))
    out += payload
    if fields["score_id"] is not None:
        out += Int64sl.build(fields["score_id"])
    out += fields.get("trailer", b"")
    return bytes(out)


@pytest.fixture
def osr_bytes() -> Callable[..., bytes]:
    return build_osr
