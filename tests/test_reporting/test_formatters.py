"""Tests for map_picker.reporting.formatters."""

from __future__ import annotations

import pytest

from map_picker.models.catalog import GameMap
from map_picker.reporting.formatters import (
    format_all_maps,
    format_choices,
    format_percent,
    format_simulation_table,
    style_mode,
)
from map_picker.taxonomy.mode_taxonomy import Mode


def _gm(map_id: int, nickname: str, players: int = 16, **flags) -> GameMap:
    return GameMap(
        map_id=map_id, nickname=nickname, mode=Mode.TD, players=players,
        group_id=map_id, **flags,
    )


# ── style_mode / format_percent ───────────────────────────────────────────────


def test_style_mode_plain() -> None:
    """Without colour the mode name is returned unchanged."""
    assert style_mode(Mode.CHASER, use_color=False) == "Chaser"


def test_style_mode_colour() -> None:
    """With colour the mode name is wrapped in ANSI escapes."""
    styled = style_mode(Mode.SIEGE, use_color=True)
    assert "Siege" in styled
    assert "\x1b[" in styled


@pytest.mark.parametrize("probability, expected", [
    (0.4127, "41.27%"),
    (1.0, "100.00%"),
    (0.0, "0.00%"),
    (0.00004, "0.00%"),
])
def test_format_percent(probability: float, expected: str) -> None:
    assert format_percent(probability, use_color=False) == expected


# ── format_choices ────────────────────────────────────────────────────────────


def test_format_choices_layout() -> None:
    """Header line plus one numbered line per pick."""
    picks = [(0.4127, _gm(1, "Harbor")), (0.3002, _gm(7, "Rooftops", players=12))]
    out = format_choices(Mode.TD, 16, picks)
    assert out.split("\n") == [
        "Mode TD for 16 players",
        " (1) Harbor (16) 41.27%",
        " (2) Rooftops (12) 30.02%",
    ]


def test_format_choices_right_aligns_numbers() -> None:
    """Ten or more picks pad single-digit labels."""
    picks = [(0.1, _gm(i, f"Map {i}")) for i in range(1, 11)]
    lines = format_choices(Mode.TD, 16, picks).split("\n")
    assert lines[1].startswith(" ( 1) ")
    assert lines[10].startswith(" (10) ")


def test_format_choices_no_ansi_without_colour() -> None:
    out = format_choices(Mode.DM, 12, [(1.0, _gm(1, "Harbor"))], use_color=False)
    assert "\x1b[" not in out


# ── format_all_maps ───────────────────────────────────────────────────────────


def test_format_all_maps_flags() -> None:
    """Gag and disabled maps are flagged."""
    scores = [
        (0.5, _gm(1, "Harbor")),
        (0.3, _gm(2, "Ruins", is_gag=True)),
        (0.2, _gm(3, "Arena", is_gag=True, disabled=True)),
    ]
    lines = format_all_maps(Mode.TD, scores).split("\n")
    assert lines[0] == "All maps for TD"
    assert lines[1] == "  Harbor (16) 50.00%"
    assert lines[2] == "  Ruins (16) 30.00% [gag]"
    assert lines[3] == "  Arena (16) 20.00% [gag, disabled]"


# ── format_simulation_table ───────────────────────────────────────────────────


def test_format_simulation_table_rows() -> None:
    rows = [
        {"mode": "TD", "nickname": "Harbor", "count": 30},
        {"mode": "DM", "nickname": "Foundry", "count": 30},
    ]
    out = format_simulation_table(rows, rounds=60)
    assert out.startswith("=== Simulation: 60 rounds ===")
    assert "Harbor" in out
    assert "50.00%" in out


def test_format_simulation_table_empty() -> None:
    out = format_simulation_table([], rounds=0)
    assert "(no maps played)" in out
