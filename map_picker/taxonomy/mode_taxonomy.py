"""
Game mode taxonomy for map rotation.

Every map is played in exactly one ``Mode``.  Modes drive three things:
  - Eligibility: only maps of the requested mode are scored.
  - Rotation: ``next_mode()`` gives the default mode for the next round
    (TD → DM → Chaser → BR → Captain → Siege → TD).
  - Cross-mode discount: ``mode_discount()`` scales the penalty a map receives
    when a group-mate of a *different* mode was played.

Cross-mode discount table (symmetric, unlisted pairs = 1.0)::

    Siege   ↔ any other   0.1     (very few Siege maps)
    Chaser  ↔ any other   0.1     (very few Chaser maps)
    TD      ↔ DM          0.6
    TD      ↔ BR          0.5
    TD      ↔ Captain     0.5
    DM      ↔ BR          0.9
    DM      ↔ Captain     0.8
    BR      ↔ Captain     0.7

Parsing is case-insensitive: ``Mode("td")`` and ``Mode("TD")`` are the same
member.

This module has NO imports from any other ``map_picker`` package.
"""

from enum import StrEnum


class Mode(StrEnum):
    """Game mode of a map.  Declaration order is the canonical ordering."""

    TD = "TD"
    """Team deathmatch."""

    DM = "DM"
    """Free-for-all deathmatch."""

    CHASER = "Chaser"
    """Chaser rounds; only a handful of maps support it."""

    BR = "BR"
    """Battle royale."""

    CAPTAIN = "Captain"
    """Protect-the-captain team mode."""

    SIEGE = "Siege"
    """Attack/defend siege; only a handful of maps support it."""

    @classmethod
    def _missing_(cls, value: object) -> "Mode | None":
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value.lower() == lowered:
                    return member
        return None


MODE_ORDER: tuple[Mode, ...] = tuple(Mode)

_SUCCESSOR: dict[Mode, Mode] = {
    mode: MODE_ORDER[(i + 1) % len(MODE_ORDER)] for i, mode in enumerate(MODE_ORDER)
}

# Modes with so few maps that a sibling of another mode barely counts.
_SPARSE_MODES: frozenset[Mode] = frozenset({Mode.SIEGE, Mode.CHASER})

_PAIR_DISCOUNT: dict[frozenset[Mode], float] = {
    frozenset({Mode.TD, Mode.DM}):       0.6,
    frozenset({Mode.TD, Mode.BR}):       0.5,
    frozenset({Mode.TD, Mode.CAPTAIN}):  0.5,
    frozenset({Mode.DM, Mode.BR}):       0.9,
    frozenset({Mode.DM, Mode.CAPTAIN}):  0.8,
    frozenset({Mode.BR, Mode.CAPTAIN}):  0.7,
}


def parse_mode(name: str) -> Mode:
    """Return the ``Mode`` for ``name`` (case-insensitive).

    Raises:
        ValueError: If ``name`` is not a known mode.
    """
    try:
        return Mode(name)
    except ValueError:
        raise ValueError(
            f"Unknown mode '{name}'. Must be one of {[m.value for m in Mode]}."
        ) from None


def next_mode(mode: Mode) -> Mode:
    """Return the mode that follows ``mode`` in the rotation cycle."""
    return _SUCCESSOR[mode]


def mode_discount(a: Mode, b: Mode) -> float:
    """Cross-mode penalty multiplier in (0, 1] for a pair of modes.

    Symmetric: ``mode_discount(a, b) == mode_discount(b, a)``.
    Identical modes always return 1.0.
    """
    if a == b:
        return 1.0
    if a in _SPARSE_MODES or b in _SPARSE_MODES:
        return 0.1
    return _PAIR_DISCOUNT.get(frozenset({a, b}), 1.0)
