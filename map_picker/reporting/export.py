"""
CSV export for simulation tallies and score dumps.

Exports are flat (one row per map) so they open directly in a spreadsheet.
"""

from __future__ import annotations

import csv
from pathlib import Path


def export_to_csv(
    records: list[dict],
    path: Path,
    fieldnames: list[str] | None = None,
) -> Path:
    """Write ``records`` to a UTF-8 CSV file with a header row.

    Args:
        records:    Row dicts.
        path:       Destination file (parent dirs created if missing).
        fieldnames: Column order.  Defaults to the keys of the first record;
                    with no records and no fieldnames an empty file is written.

    Returns:
        ``path`` as written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    cols = fieldnames or (list(records[0].keys()) if records else [])
    if not cols:
        path.write_text("", encoding="utf-8")
        return path
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=cols, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(records)
    return path
