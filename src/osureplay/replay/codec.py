from __future__ import annotations

import logging
import lzma
from pathlib import Path
from typing import Any, Callable, TypeAlias

import msgspec

from .cursor import BufferLike, ReplayCursor
from .errors import DecompressionFailedError, TruncatedInputError
from .healthbar import parse_healthbar
from .timestamps import ticks_to_unix_ms
from .types import STRING_PRESENT, AccuracyCount, Replay, mod_acronyms
from .versioning import warn_on_trailing_data, warn_on_unknown_game_mode

LOGGER = logging.getLogger(__name__)

Decompressor: TypeAlias = Callable[[bytes], bytes]


def decompress_lzma(payload: bytes) -> bytes:
    """Inflate an LZMA-alone payload whose uncompressed size may be unknown."""
    if not payload:
        return b""
    return lzma.decompress(payload, format=lzma.FORMAT_ALONE)


def _text(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


def read_osr_string(cursor: ReplayCursor) -> str:
    """Read a presence byte, then a ULEB128 length and that many UTF-8 bytes.

    Any presence byte other than 0x0B means an empty string and consumes
    nothing further.
    """

    if cursor.u8() != STRING_PRESENT:
        return ""
    size = cursor.uleb128()
    return _text(cursor.bytes(size))


class ReplayDecoder:
    """Decode one `.osr` buffer into a `Replay`.

    Fields are read in a single fixed order; the game mode and version do
    not change the layout. `decode()` always starts from offset 0, so the
    same decoder can be decoded again and yields an equal, fresh record.
    """

    def __init__(
        self,
        data: BufferLike,
        *,
        decompress: Decompressor | None = None,
        strict_healthbar: bool = False,
    ) -> None:
        self._cursor = ReplayCursor(data)
        self._decompress = decompress if decompress is not None else decompress_lzma
        self._strict_healthbar = bool(strict_healthbar)

    def _replay_data(self, payload: bytes) -> str:
        try:
            raw = self._decompress(payload)
        except DecompressionFailedError:
            raise
        except Exception as exc:
            raise DecompressionFailedError(f"failed to decompress replay data ({len(payload)} bytes): {exc}") from exc
        return _text(bytes(raw))

    def _score_id(self) -> int | None:
        cursor = self._cursor
        if not cursor.has_remaining():
            LOGGER.debug("replay ends after payload; no score id")
            return None
        score_id = cursor.i64()
        warn_on_trailing_data(cursor.remaining, offset=cursor.position)
        return score_id

    def decode(self) -> Replay:
        cursor = self._cursor
        cursor.reset()

        game_mode = cursor.u8()
        warn_on_unknown_game_mode(game_mode)
        version = cursor.i32()
        beatmap_hash = read_osr_string(cursor)
        player = read_osr_string(cursor)
        replay_hash = read_osr_string(cursor)
        accuracy = AccuracyCount(
            count_300=cursor.i16(),
            count_100=cursor.i16(),
            count_50=cursor.i16(),
            count_geki=cursor.i16(),
            count_katu=cursor.i16(),
            count_miss=cursor.i16(),
        )
        score = cursor.i32()
        max_combo = cursor.i16()
        perfect = cursor.u8()
        mods = cursor.i32()
        healthbar = parse_healthbar(read_osr_string(cursor), strict=self._strict_healthbar)
        timestamp_ms = ticks_to_unix_ms(cursor.u64())

        payload_offset = cursor.position
        payload_len = cursor.i32()
        if payload_len < 0:
            raise TruncatedInputError(f"negative replay data length {payload_len} at offset {payload_offset}")
        payload = cursor.bytes(payload_len)
        LOGGER.debug("replay data: %d compressed bytes at offset %d", payload_len, payload_offset + 4)
        score_id = self._score_id()

        replay_data = self._replay_data(payload)

        return Replay(
            game_mode=game_mode,
            version=version,
            beatmap_hash=beatmap_hash,
            player=player,
            replay_hash=replay_hash,
            accuracy=accuracy,
            score=score,
            max_combo=max_combo,
            perfect=perfect,
            mods=mods,
            healthbar=healthbar,
            timestamp_ms=timestamp_ms,
            replay_data=replay_data,
            score_id=score_id,
        )


def load_replay(
    data: BufferLike,
    *,
    decompress: Decompressor | None = None,
    strict_healthbar: bool = False,
) -> Replay:
    return ReplayDecoder(data, decompress=decompress, strict_healthbar=strict_healthbar).decode()


def load_replay_file(
    path: Path,
    *,
    decompress: Decompressor | None = None,
    strict_healthbar: bool = False,
) -> Replay:
    path = Path(path)
    return load_replay(path.read_bytes(), decompress=decompress, strict_healthbar=strict_healthbar)


def replay_to_obj(replay: Replay) -> dict[str, Any]:
    obj = msgspec.to_builtins(replay)
    try:
        obj["timestamp"] = replay.timestamp.isoformat(timespec="milliseconds")
    except OverflowError:
        obj["timestamp"] = None
    obj["mod_acronyms"] = mod_acronyms(replay.mods)
    return obj
