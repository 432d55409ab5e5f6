from __future__ import annotations

import logging
from pathlib import Path

import msgspec
import typer

from .replay import (
    GameMode,
    Replay,
    ReplayCodecError,
    decompose_mods,
    load_replay_file,
    mod_acronyms,
    replay_to_obj,
)

app = typer.Typer(add_completion=False)
replay_app = typer.Typer(add_completion=False)
app.add_typer(replay_app, name="replay")


def _load(replay_file: Path, *, strict_healthbar: bool) -> Replay:
    if not replay_file.is_file():
        typer.echo(f"replay file not found: {replay_file}", err=True)
        raise typer.Exit(code=1)
    try:
        return load_replay_file(replay_file, strict_healthbar=strict_healthbar)
    except ReplayCodecError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def _mode_label(game_mode: int) -> str:
    try:
        return GameMode(game_mode).name.lower()
    except ValueError:
        return f"unknown({game_mode})"


def _format_summary(replay: Replay) -> list[str]:
    acc = replay.accuracy
    mods = " ".join(mod_acronyms(replay.mods)) or "none"
    try:
        when = replay.timestamp.isoformat(timespec="seconds")
    except OverflowError:
        when = f"out of range ({replay.timestamp_ms} ms)"
    score_id = "-" if replay.score_id is None else str(replay.score_id)
    return [
        f"player:      {replay.player or '-'}",
        f"mode:        {_mode_label(replay.game_mode)}",
        f"version:     {replay.version}",
        f"beatmap:     {replay.beatmap_hash or '-'}",
        f"replay hash: {replay.replay_hash or '-'}",
        f"score:       {replay.score:,}",
        f"max combo:   {replay.max_combo}{' (perfect)' if replay.is_perfect else ''}",
        (
            f"hits:        300={acc.count_300} 100={acc.count_100} 50={acc.count_50} "
            f"geki={acc.count_geki} katu={acc.count_katu} miss={acc.count_miss}"
        ),
        f"mods:        {mods} ({replay.mods})",
        f"played at:   {when}",
        f"healthbar:   {len(replay.healthbar)} points",
        f"replay data: {len(replay.replay_data)} chars",
        f"score id:    {score_id}",
    ]


@replay_app.command("info")
def cmd_replay_info(
    replay_file: Path = typer.Argument(..., help="replay file path (.osr)"),
    json_output: bool = typer.Option(False, "--json", help="print the decoded record as JSON"),
    strict_healthbar: bool = typer.Option(
        False,
        "--strict-healthbar/--lenient-healthbar",
        help="fail on non-numeric healthbar values (default: lenient, values become NaN)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="log decoding details to stderr"),
) -> None:
    """Print the header fields of a replay."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    replay = _load(replay_file, strict_healthbar=strict_healthbar)
    if json_output:
        typer.echo(msgspec.json.encode(replay_to_obj(replay)).decode("utf-8"))
        return
    for line in _format_summary(replay):
        typer.echo(line)


@replay_app.command("healthbar")
def cmd_replay_healthbar(
    replay_file: Path = typer.Argument(..., help="replay file path (.osr)"),
    strict_healthbar: bool = typer.Option(
        False,
        "--strict-healthbar/--lenient-healthbar",
        help="fail on non-numeric healthbar values (default: lenient, values become NaN)",
    ),
) -> None:
    """Print one `timestamp percentage` line per healthbar point."""
    replay = _load(replay_file, strict_healthbar=strict_healthbar)
    for point in replay.healthbar:
        typer.echo(f"{point.timestamp:g} {point.percentage:g}")


@replay_app.command("mods")
def cmd_replay_mods(value: int = typer.Argument(..., help="mods bitmask, e.g. 24")) -> None:
    """Decode a mods bitmask into flag names."""
    mods = decompose_mods(value)
    if not mods:
        typer.echo("none")
        return
    for mod in mods:
        typer.echo(f"{mod.name} ({mod_acronyms(int(mod))[0]})")


def main(argv: list[str] | None = None) -> None:
    app(prog_name="osureplay", args=argv)


if __name__ == "__main__":
    main()
