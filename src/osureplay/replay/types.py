from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import Final

from .timestamps import unix_ms_to_datetime

STRING_PRESENT: Final[int] = 0x0B


class GameMode(IntEnum):
    STANDARD = 0
    TAIKO = 1
    CATCH = 2
    MANIA = 3


class Mods(IntFlag):
    NONE = 0
    NO_FAIL = 1 << 0
    EASY = 1 << 1
    TOUCH_DEVICE = 1 << 2
    HIDDEN = 1 << 3
    HARD_ROCK = 1 << 4
    SUDDEN_DEATH = 1 << 5
    DOUBLE_TIME = 1 << 6
    RELAX = 1 << 7
    HALF_TIME = 1 << 8
    NIGHTCORE = 1 << 9  # always set along with DOUBLE_TIME
    FLASHLIGHT = 1 << 10
    AUTOPLAY = 1 << 11
    SPUN_OUT = 1 << 12
    AUTOPILOT = 1 << 13
    PERFECT = 1 << 14  # always set along with SUDDEN_DEATH
    KEY4 = 1 << 15
    KEY5 = 1 << 16
    KEY6 = 1 << 17
    KEY7 = 1 << 18
    KEY8 = 1 << 19
    FADE_IN = 1 << 20
    RANDOM = 1 << 21
    CINEMA = 1 << 22
    TARGET = 1 << 23
    KEY9 = 1 << 24
    KEY_COOP = 1 << 25
    KEY1 = 1 << 26
    KEY3 = 1 << 27
    KEY2 = 1 << 28
    SCORE_V2 = 1 << 29
    MIRROR = 1 << 30


MOD_ACRONYMS: Final[dict[Mods, str]] = {
    Mods.NO_FAIL: "NF",
    Mods.EASY: "EZ",
    Mods.TOUCH_DEVICE: "TD",
    Mods.HIDDEN: "HD",
    Mods.HARD_ROCK: "HR",
    Mods.SUDDEN_DEATH: "SD",
    Mods.DOUBLE_TIME: "DT",
    Mods.RELAX: "RX",
    Mods.HALF_TIME: "HT",
    Mods.NIGHTCORE: "NC",
    Mods.FLASHLIGHT: "FL",
    Mods.AUTOPLAY: "AU",
    Mods.SPUN_OUT: "SO",
    Mods.AUTOPILOT: "AP",
    Mods.PERFECT: "PF",
    Mods.KEY4: "4K",
    Mods.KEY5: "5K",
    Mods.KEY6: "6K",
    Mods.KEY7: "7K",
    Mods.KEY8: "8K",
    Mods.FADE_IN: "FI",
    Mods.RANDOM: "RD",
    Mods.CINEMA: "CN",
    Mods.TARGET: "TP",
    Mods.KEY9: "9K",
    Mods.KEY_COOP: "CO",
    Mods.KEY1: "1K",
    Mods.KEY3: "3K",
    Mods.KEY2: "2K",
    Mods.SCORE_V2: "V2",
    Mods.MIRROR: "MR",
}

_KNOWN_MODS_MASK: Final[int] = (1 << 31) - 1


def decompose_mods(value: int) -> tuple[Mods, ...]:
    """Split a mods bitmask into its single-bit flags, lowest bit first.

    Bits outside the known set are ignored.
    """

    value = int(value) & _KNOWN_MODS_MASK
    return tuple(mod for mod in MOD_ACRONYMS if value & int(mod))


def mods_from_int(value: int) -> Mods:
    return Mods(int(value) & _KNOWN_MODS_MASK)


def mod_acronyms(value: int) -> list[str]:
    return [MOD_ACRONYMS[mod] for mod in decompose_mods(value)]


class StandardKeypress(IntFlag):
    """Key bits of the 4th field of an osu!standard replay-data action."""

    MOUSE1 = 1
    MOUSE2 = 2
    KEY1 = 4
    KEY2 = 8
    SMOKE = 16


@dataclass(frozen=True, slots=True)
class AccuracyCount:
    """Judgement counts; the tiers mean different things per game mode.

    - `count_100`: 150s in taiko, 200s in mania.
    - `count_50`: small fruits in catch.
    - `count_geki`: max 300s in mania.
    - `count_katu`: 100s in mania.
    """

    count_300: int = 0
    count_100: int = 0
    count_50: int = 0
    count_geki: int = 0
    count_katu: int = 0
    count_miss: int = 0


@dataclass(frozen=True, slots=True)
class HealthbarPoint:
    timestamp: float  # ms into the song
    percentage: float  # 0.0 - 1.0


@dataclass(frozen=True, slots=True)
class Replay:
    game_mode: int
    version: int
    beatmap_hash: str
    player: str
    replay_hash: str
    accuracy: AccuracyCount
    score: int
    max_combo: int
    perfect: int
    mods: int
    healthbar: tuple[HealthbarPoint, ...]
    timestamp_ms: int
    replay_data: str
    score_id: int | None = None

    @property
    def mode(self) -> GameMode:
        return GameMode(self.game_mode)

    @property
    def mod_flags(self) -> Mods:
        return mods_from_int(self.mods)

    @property
    def is_perfect(self) -> bool:
        return self.perfect == 1

    @property
    def timestamp(self) -> dt.datetime:
        return unix_ms_to_datetime(self.timestamp_ms)
