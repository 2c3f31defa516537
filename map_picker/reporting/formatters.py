"""
Terminal formatters for CLI output.

All formatters take already-computed engine output and return plain
multi-line strings suitable for ``typer.echo()``.

Colour is an explicit ``use_color`` argument (normally
``config.display.use_color``) rather than process-wide state.  When it is
``False`` the output contains no ANSI escapes at all, which is what tests
and piped output rely on.

Example output of ``format_choices()``::

    Mode TD for 16 players
     (1) Harbor (16) 41.27%
     (2) Foundry (12) 30.02%
     (3) Rooftops (16) 8.11%
"""

from __future__ import annotations

from typing import Sequence

import typer

from map_picker.models.catalog import GameMap
from map_picker.taxonomy.mode_taxonomy import Mode

_MODE_STYLE: dict[Mode, dict] = {
    Mode.TD:      {"fg": typer.colors.CYAN},
    Mode.DM:      {"fg": typer.colors.RED},
    Mode.CHASER:  {"fg": typer.colors.GREEN},
    Mode.BR:      {"fg": typer.colors.MAGENTA, "dim": True},
    Mode.CAPTAIN: {"fg": typer.colors.MAGENTA},
    Mode.SIEGE:   {"fg": typer.colors.YELLOW},
}


def style_mode(mode: Mode, use_color: bool) -> str:
    """Mode name, bold and in its mode colour when ``use_color`` is set."""
    if not use_color:
        return str(mode)
    return typer.style(str(mode), bold=True, **_MODE_STYLE[mode])


def format_percent(probability: float, use_color: bool) -> str:
    """``0.4127`` → ``"41.27%"`` (italic when colour is on)."""
    text = f"{probability * 100.0:.2f}%"
    if not use_color:
        return text
    return typer.style(text, italic=True)


def _choice_label(label: str, use_color: bool) -> str:
    if not use_color:
        return label
    return typer.style(label, fg=typer.colors.WHITE, bold=True)


def _flags(game_map: GameMap) -> str:
    flags = []
    if game_map.is_gag:
        flags.append("gag")
    if game_map.disabled:
        flags.append("disabled")
    return f" [{', '.join(flags)}]" if flags else ""


def format_choices(
    mode: Mode,
    players: int,
    picks: Sequence[tuple[float, GameMap]],
    use_color: bool = False,
) -> str:
    """Numbered list of recommended maps with their probabilities.

    Numbers are right-aligned so that lists of ten or more stay in a column.
    """
    width = len(str(len(picks)))
    lines = [f"Mode {style_mode(mode, use_color)} for {players} players"]
    for idx, (probability, game_map) in enumerate(picks, start=1):
        label = _choice_label(f"{idx:>{width}}", use_color)
        lines.append(
            f" ({label}) {game_map.nickname} ({game_map.players}) "
            f"{format_percent(probability, use_color)}"
        )
    return "\n".join(lines)


def format_all_maps(
    mode: Mode,
    scores: Sequence[tuple[float, GameMap]],
    use_color: bool = False,
) -> str:
    """Every eligible map for ``mode`` with its probability, highest first."""
    lines = [f"All maps for {style_mode(mode, use_color)}"]
    for probability, game_map in scores:
        lines.append(
            f"  {game_map.nickname} ({game_map.players}) "
            f"{format_percent(probability, use_color)}{_flags(game_map)}"
        )
    return "\n".join(lines)


def format_simulation_table(rows: Sequence[dict], rounds: int) -> str:
    """Plain table of simulated play counts, one row per map."""
    lines = [f"=== Simulation: {rounds} rounds ==="]
    if not rows:
        lines.append("  (no maps played)")
        return "\n".join(lines)

    name_width = max(len(str(r["nickname"])) for r in rows)
    lines.append(f"  {'Mode':<8}  {'Map':<{name_width}}  {'Plays':>6}  {'Share':>7}")
    lines.append("  " + "-" * (8 + name_width + 6 + 7 + 6))
    for r in rows:
        share = r["count"] / rounds if rounds else 0.0
        lines.append(
            f"  {r['mode']:<8}  {r['nickname']:<{name_width}}  "
            f"{r['count']:>6}  {share:>7.2%}"
        )
    return "\n".join(lines)
