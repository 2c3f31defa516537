"""
Append-only play log: one line per committed map selection.

Line format::

    #12 (2026-10-19 20:15 Z) Harbor TD

Only the map id matters when reading back: the first run of digits on
each non-blank line is taken as the id and resolved against the catalog.
Everything after it (timestamp, nickname, mode) is informational, so older
logs with hand-edited lines still load.

The log file is created empty on first use.  A selection is written to disk
before it is added to the in-memory history (see ``commit_selection``).
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from map_picker.errors import PlayLogError
from map_picker.models.catalog import Catalog, GameMap

logger = logging.getLogger(__name__)

_MAP_ID_RE = re.compile(r"\d+")

LOG_TIME_FORMAT = "%Y-%m-%d %H:%M Z"


def load_play_log(path: Path, catalog: Catalog) -> list[GameMap]:
    """Read the play log and resolve every entry to a catalog map.

    Args:
        path:    Play log file; created empty if missing.
        catalog: Catalog used to resolve map ids.

    Returns:
        Maps in play order, oldest first.

    Raises:
        PlayLogError: If a line is not UTF-8, has no map id or references an
            unknown map.
    """
    path = Path(path)
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch()
        logger.info("Created empty play log at %s", path)
        return []

    records: list[GameMap] = []
    with open(path, "rb") as f:
        for line_no, raw_line in enumerate(f, start=1):
            try:
                line = raw_line.decode("utf-8").strip()
            except UnicodeDecodeError as exc:
                raise PlayLogError(line_no, "Invalid UTF-8", raw_line.rstrip(b"\r\n")) from exc
            if not line:
                continue

            match = _MAP_ID_RE.search(line)
            if match is None:
                raise PlayLogError(line_no, "Could not find map id", line)

            map_id = int(match.group())
            game_map = catalog.get_map(map_id)
            if game_map is None:
                raise PlayLogError(line_no, "Could not find map with id", map_id)

            records.append(game_map)

    logger.debug("Loaded %d play log entries from %s", len(records), path)
    return records


def format_log_line(game_map: GameMap, now: Optional[datetime] = None) -> str:
    """Render the log line for one selection (without trailing newline)."""
    now = now or datetime.now(tz=timezone.utc)
    return f"#{game_map.map_id} ({now.strftime(LOG_TIME_FORMAT)}) {game_map.nickname} {game_map.mode}"


def append_play_log(
    path: Path,
    game_map: GameMap,
    now: Optional[datetime] = None,
) -> None:
    """Append one selection to the play log and flush it to disk.

    If the file does not end with a newline (e.g. it was hand-edited), one is
    inserted first so the new entry always starts on its own line.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    needs_newline = False
    if path.exists() and path.stat().st_size > 0:
        with open(path, "rb") as f:
            f.seek(-1, 2)
            needs_newline = f.read(1) != b"\n"

    with open(path, "a", encoding="utf-8") as f:
        if needs_newline:
            f.write("\n")
        f.write(format_log_line(game_map, now) + "\n")
        f.flush()

    logger.info("Logged selection %s", game_map.map_info)


def commit_selection(
    path: Path,
    history: list[GameMap],
    game_map: GameMap,
    now: Optional[datetime] = None,
) -> None:
    """Persist a selection, then extend the in-memory history with it."""
    append_play_log(path, game_map, now)
    history.append(game_map)
