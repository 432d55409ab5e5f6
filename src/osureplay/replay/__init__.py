from __future__ import annotations

from .codec import (
    Decompressor,
    ReplayDecoder,
    decompress_lzma,
    load_replay,
    load_replay_file,
    read_osr_string,
    replay_to_obj,
)
from .cursor import ReplayCursor, decode_uleb128
from .errors import (
    DecompressionFailedError,
    HealthbarFormatError,
    MalformedVarIntError,
    ReplayCodecError,
    TruncatedInputError,
)
from .healthbar import parse_healthbar
from .timestamps import EPOCH_TICKS, ticks_to_unix_ms, unix_ms_to_datetime
from .types import (
    MOD_ACRONYMS,
    STRING_PRESENT,
    AccuracyCount,
    GameMode,
    HealthbarPoint,
    Mods,
    Replay,
    StandardKeypress,
    decompose_mods,
    mod_acronyms,
    mods_from_int,
)
from .versioning import (
    ReplayGameModeWarning,
    ReplayTrailingDataWarning,
    warn_on_trailing_data,
    warn_on_unknown_game_mode,
)

__all__ = [
    "EPOCH_TICKS",
    "MOD_ACRONYMS",
    "STRING_PRESENT",
    "AccuracyCount",
    "DecompressionFailedError",
    "Decompressor",
    "GameMode",
    "HealthbarFormatError",
    "HealthbarPoint",
    "MalformedVarIntError",
    "Mods",
    "Replay",
    "ReplayCodecError",
    "ReplayCursor",
    "ReplayDecoder",
    "ReplayGameModeWarning",
    "ReplayTrailingDataWarning",
    "StandardKeypress",
    "TruncatedInputError",
    "decode_uleb128",
    "decompose_mods",
    "decompress_lzma",
    "load_replay",
    "load_replay_file",
    "mod_acronyms",
    "mods_from_int",
    "parse_healthbar",
    "read_osr_string",
    "replay_to_obj",
    "ticks_to_unix_ms",
    "unix_ms_to_datetime",
    "warn_on_trailing_data",
    "warn_on_unknown_game_mode",
]
