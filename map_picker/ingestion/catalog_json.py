"""
JSON loader for the map catalog.

File format is a JSON array of groups::

    [
      {
        "gid": 1,
        "name": "Harbor",
        "variants": [
          {"id": 1, "mode": "TD", "players": 16},
          {"id": 2, "mode": "DM", "players": 12, "nickname": "Harbor Docks"},
          {"id": 3, "mode": "Siege", "players": 16, "gag": true, "disabled": false}
        ]
      }
    ]

Group fields (all required):
  gid       → unsigned 16-bit integer, unique across the file
  name      → non-empty string; base name of every variant
  variants  → non-empty array of variant objects

Variant fields:
  id        → unsigned 16-bit integer, unique across the file (required)
  mode      → TD, DM, Chaser, BR, Captain or Siege, case-insensitive (required)
  players   → unsigned 16-bit integer (required)
  nickname  → non-empty string; defaults to the group ``name``
  gag       → boolean; defaults to false
  disabled  → boolean; defaults to false

The first error aborts the load with a :class:`CatalogValidationError`
naming the group, the map and the field.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from map_picker.errors import CatalogValidationError
from map_picker.models.catalog import U16_MAX, Catalog, GameMap, MapGroup
from map_picker.taxonomy.mode_taxonomy import Mode

logger = logging.getLogger(__name__)


def load_catalog(path: Path) -> Catalog:
    """Read and validate a catalog JSON file.

    Args:
        path: Path to the catalog file.

    Returns:
        Fully validated :class:`Catalog`.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        CatalogValidationError: If the file is not UTF-8 JSON or any entry is malformed.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Map catalog file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as exc:
        raise CatalogValidationError("invalid JSON", value=str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise CatalogValidationError(
            "file is not valid UTF-8", value=exc.object[exc.start:exc.end]
        ) from exc

    catalog = build_catalog(raw)
    logger.info(
        "Loaded %d maps in %d groups from %s",
        len(catalog), len(catalog.all_groups()), path.name,
    )
    return catalog


def build_catalog(raw: Any) -> Catalog:
    """Validate a JSON-decoded catalog and build the :class:`Catalog` arena.

    Raises:
        CatalogValidationError: On the first malformed or duplicate entry.
    """
    if not isinstance(raw, list):
        raise CatalogValidationError("map file must be a list of groups", value=type(raw).__name__)

    groups: list[MapGroup] = []
    maps: list[GameMap] = []
    seen_gids: set[int] = set()
    seen_ids: set[int] = set()

    for g_idx, g in enumerate(raw):
        if not isinstance(g, dict):
            raise CatalogValidationError("group must be an object", group=f"index {g_idx}", value=g)

        gid = _u16(g.get("gid"))
        if gid is None:
            raise CatalogValidationError(
                "gid not a u16", group=f"index {g_idx}", field="gid", value=g.get("gid"),
            )
        if gid in seen_gids:
            raise CatalogValidationError("duplicate group gid", group=gid, field="gid", value=gid)
        seen_gids.add(gid)

        basename = g.get("name")
        if not isinstance(basename, str) or not basename:
            raise CatalogValidationError(
                "group name must be a non-empty string", group=gid, field="name", value=basename,
            )

        variants = g.get("variants")
        if not isinstance(variants, list) or not variants:
            raise CatalogValidationError(
                "group needs a non-empty list of variants",
                group=gid, field="variants", value=variants,
            )

        member_ids: list[int] = []
        for v_idx, v in enumerate(variants):
            game_map = _parse_variant(v, gid, basename, v_idx)
            if game_map.map_id in seen_ids:
                raise CatalogValidationError(
                    "duplicate map id", group=gid, map_ref=game_map.map_id,
                    field="id", value=game_map.map_id,
                )
            seen_ids.add(game_map.map_id)
            member_ids.append(game_map.map_id)
            maps.append(game_map)

        groups.append(MapGroup(group_id=gid, base_name=basename, map_ids=tuple(member_ids)))

    return Catalog(groups, maps)


# ── Private helpers ────────────────────────────────────────────────────────────

def _u16(value: Any) -> int | None:
    """Return ``value`` if it is an integer in u16 range, else ``None``."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    if not 0 <= value <= U16_MAX:
        return None
    return value


def _parse_variant(v: Any, gid: int, basename: str, v_idx: int) -> GameMap:
    """Validate one variant object of group ``gid``."""
    ref: Any = f"index {v_idx}"
    if not isinstance(v, dict):
        raise CatalogValidationError("variant must be an object", group=gid, map_ref=ref, value=v)

    map_id = _u16(v.get("id"))
    if map_id is None:
        raise CatalogValidationError(
            "map id must be a u16", group=gid, map_ref=ref, field="id", value=v.get("id"),
        )
    ref = map_id

    players = _u16(v.get("players"))
    if players is None:
        raise CatalogValidationError(
            "players must be a u16", group=gid, map_ref=ref, field="players",
            value=v.get("players"),
        )

    mode_raw = v.get("mode")
    if not isinstance(mode_raw, str):
        raise CatalogValidationError(
            "map mode must be a string", group=gid, map_ref=ref, field="mode", value=mode_raw,
        )
    try:
        mode = Mode(mode_raw)
    except ValueError:
        raise CatalogValidationError(
            "unknown map mode", group=gid, map_ref=ref, field="mode", value=mode_raw,
        ) from None

    nickname = v.get("nickname")
    if nickname is None:
        nickname = basename
    elif not isinstance(nickname, str) or not nickname:
        raise CatalogValidationError(
            "nickname must be absent or a non-empty string",
            group=gid, map_ref=ref, field="nickname", value=nickname,
        )

    is_gag = _optional_bool(v, "gag", gid, ref)
    disabled = _optional_bool(v, "disabled", gid, ref)

    return GameMap(
        map_id=map_id,
        nickname=nickname,
        mode=mode,
        players=players,
        group_id=gid,
        is_gag=is_gag,
        disabled=disabled,
    )


def _optional_bool(v: dict[str, Any], key: str, gid: int, ref: Any) -> bool:
    value = v.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise CatalogValidationError(
            f"{key} must be absent or a boolean", group=gid, map_ref=ref, field=key, value=value,
        )
    return value
