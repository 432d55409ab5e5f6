from __future__ import annotations

import warnings

from .types import GameMode


class ReplayTrailingDataWarning(UserWarning):
    """Bytes were left unread after the last known replay field."""


class ReplayGameModeWarning(UserWarning):
    """The recorded game mode is not one of the known modes."""


def warn_on_trailing_data(remaining: int, *, offset: int) -> bool:
    """Warn if `remaining` bytes follow the score id.

    Newer clients append extra fields (e.g. target practice data) that are
    not decoded. Returns True if a warning was emitted.
    """

    if remaining <= 0:
        return False
    warnings.warn(
        f"Replay has {int(remaining)} unread bytes after offset {int(offset)}; trailing fields are ignored.",
        category=ReplayTrailingDataWarning,
        stacklevel=3,
    )
    return True


def warn_on_unknown_game_mode(game_mode: int) -> bool:
    known = [int(mode) for mode in GameMode]
    if int(game_mode) in known:
        return False
    warnings.warn(
        f"Replay game mode {int(game_mode)} is not one of {known}.",
        category=ReplayGameModeWarning,
        stacklevel=3,
    )
    return True
