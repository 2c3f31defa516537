"""
Shared pytest fixtures for the map picker test suite.

Provides:
  - ``raw_catalog``: JSON-shaped catalog (list of group dicts) covering all
    six modes with at least three 16-player maps per mode.
  - ``sample_catalog``: the same catalog built into a ``Catalog``.
  - ``make_catalog``: factory building a ``Catalog`` from compact tuples.
  - ``catalog_file`` / ``config_file``: files on disk under ``tmp_path`` for
    loader and CLI tests.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable

import pytest

from map_picker.ingestion.catalog_json import build_catalog
from map_picker.models.catalog import Catalog, GameMap, MapGroup
from map_picker.taxonomy.mode_taxonomy import Mode


# ── Catalog fixtures ──────────────────────────────────────────────────────────

@pytest.fixture
def raw_catalog() -> list[dict]:
    """Eight groups, 24 maps; every mode has >= 3 maps seating 16."""
    return [
        {"gid": 1, "name": "Harbor", "variants": [
            {"id": 1, "mode": "TD", "players": 16},
            {"id": 2, "mode": "DM", "players": 12, "nickname": "Harbor Docks"},
            {"id": 3, "mode": "Captain", "players": 16},
        ]},
        {"gid": 2, "name": "Foundry", "variants": [
            {"id": 4, "mode": "TD", "players": 16},
            {"id": 5, "mode": "DM", "players": 16},
            {"id": 6, "mode": "BR", "players": 16},
        ]},
        {"gid": 3, "name": "Rooftops", "variants": [
            {"id": 7, "mode": "TD", "players": 12},
            {"id": 8, "mode": "DM", "players": 16},
            {"id": 9, "mode": "Chaser", "players": 16},
        ]},
        {"gid": 4, "name": "Canyon", "variants": [
            {"id": 10, "mode": "BR", "players": 16},
            {"id": 11, "mode": "Siege", "players": 16},
        ]},
        {"gid": 5, "name": "Citadel", "variants": [
            {"id": 13, "mode": "Siege", "players": 16},
            {"id": 14, "mode": "Captain", "players": 16},
            {"id": 15, "mode": "DM", "players": 16, "nickname": "Citadel Keep"},
        ]},
        {"gid": 6, "name": "Marsh", "variants": [
            {"id": 16, "mode": "Chaser", "players": 16},
            {"id": 17, "mode": "BR", "players": 16},
            {"id": 18, "mode": "TD", "players": 16, "nickname": "Marsh at Night"},
        ]},
        {"gid": 7, "name": "Ruins", "variants": [
            {"id": 19, "mode": "Captain", "players": 16},
            {"id": 20, "mode": "Siege", "players": 16},
            {"id": 21, "mode": "Chaser", "players": 16, "gag": True},
        ]},
        {"gid": 8, "name": "Arena", "variants": [
            {"id": 22, "mode": "DM", "players": 8},
            {"id": 23, "mode": "BR", "players": 16},
            {"id": 24, "mode": "Captain", "players": 12},
            {"id": 25, "mode": "TD", "players": 16, "disabled": True},
        ]},
    ]


@pytest.fixture
def sample_catalog(raw_catalog: list[dict]) -> Catalog:
    return build_catalog(raw_catalog)


@pytest.fixture
def make_catalog() -> Callable[..., Catalog]:
    """Build a catalog from ``(group_id, [(map_id, mode, players), ...])`` tuples."""

    def _make(*groups: tuple[int, list[tuple[int, Mode, int]]]) -> Catalog:
        map_groups: list[MapGroup] = []
        maps: list[GameMap] = []
        for gid, variants in groups:
            for map_id, mode, players in variants:
                maps.append(
                    GameMap(
                        map_id=map_id,
                        nickname=f"Map {map_id}",
                        mode=mode,
                        players=players,
                        group_id=gid,
                    )
                )
            map_groups.append(
                MapGroup(
                    group_id=gid,
                    base_name=f"Group {gid}",
                    map_ids=tuple(v[0] for v in variants),
                )
            )
        return Catalog(map_groups, maps)

    return _make


# ── On-disk fixtures ──────────────────────────────────────────────────────────

@pytest.fixture
def catalog_file(tmp_path: Path, raw_catalog: list[dict]) -> Path:
    path = tmp_path / "all_maps.json"
    path.write_text(json.dumps(raw_catalog), encoding="utf-8")
    return path


@pytest.fixture
def config_file(tmp_path: Path, catalog_file: Path) -> Path:
    """TOML config pointing at ``catalog_file`` and a play log under ``tmp_path``."""
    path = tmp_path / "config.toml"
    path.write_text(
        "\n".join([
            "[catalog]",
            f"maps_file = {json.dumps(str(catalog_file))}",
            "",
            "[play_log]",
            f"log_file = {json.dumps(str(tmp_path / 'play_log.txt'))}",
            "",
            "[display]",
            "use_color = false",
            "",
            "[simulation]",
            "rounds = 60",
            f"output_csv = {json.dumps(str(tmp_path / 'sim' / 'counts.csv'))}",
            "",
        ]),
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer env overrides out of config-dependent tests."""
    for var in (
        "MAP_PICKER_MAPS_FILE",
        "MAP_PICKER_PLAY_LOG",
        "MAP_PICKER_LOG_LEVEL",
        "MAP_PICKER_DEBUG",
        "NO_COLOR",
    ):
        monkeypatch.delenv(var, raising=False)
