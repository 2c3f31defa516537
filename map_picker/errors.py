"""
Exception types raised by the map picker.

None of these are expected runtime conditions.  They signal a malformed
catalog or play log, or a broken invariant inside the scoring engine, and
are never retried.  The CLI catches ``MapPickerError`` at the command
boundary, reports it and exits with code 1.
"""

from __future__ import annotations

from typing import Any, Optional


class MapPickerError(Exception):
    """Base class for all map picker errors."""


class CatalogValidationError(MapPickerError, ValueError):
    """Raised when the map catalog file is malformed.

    Attributes:
        group:   Group identifier (gid, or ``"index N"`` when the gid itself is bad).
        map_ref: Map identifier (id, or ``"index N"``); ``None`` for group-level errors.
        field:   Name of the offending field.
        value:   The offending raw value.
    """

    def __init__(
        self,
        reason: str,
        group: Any = None,
        map_ref: Any = None,
        field: Optional[str] = None,
        value: Any = None,
    ) -> None:
        self.reason  = reason
        self.group   = group
        self.map_ref = map_ref
        self.field   = field
        self.value   = value

        where: list[str] = []
        if group is not None:
            where.append(f"group {group}")
        if map_ref is not None:
            where.append(f"map {map_ref}")
        if field is not None:
            where.append(f"field '{field}'")
        prefix = f"({', '.join(where)}) " if where else ""
        super().__init__(f"{prefix}{reason}: {value!r}")


class EmptyCandidateSetError(MapPickerError, RuntimeError):
    """Raised when no map matches the requested mode and player count.

    Attributes:
        mode:    Requested mode.
        players: Requested minimum player capacity.
    """

    def __init__(self, mode: Any, players: int) -> None:
        self.mode    = mode
        self.players = players
        super().__init__(f"No eligible maps for mode {mode} with {players}+ players.")


class InsufficientCandidatesError(MapPickerError, RuntimeError):
    """Raised when more maps are requested than there are eligible candidates.

    Attributes:
        requested: Number of maps requested.
        available: Number of eligible candidates.
    """

    def __init__(self, requested: int, available: int) -> None:
        self.requested = requested
        self.available = available
        super().__init__(
            f"Requested {requested} maps but only {available} eligible candidate(s) exist."
        )


class NumericInvariantError(MapPickerError, ArithmeticError):
    """Raised when a computed score is not finite.

    Carries the intermediate values so the logic defect can be diagnosed.
    """

    def __init__(
        self,
        map_id: int,
        penalty: float,
        cross_penalty: float,
        age: int,
        score: float,
    ) -> None:
        self.map_id        = map_id
        self.penalty       = penalty
        self.cross_penalty = cross_penalty
        self.age           = age
        self.score         = score
        super().__init__(
            f"Non-finite score {score!r} for map {map_id} "
            f"(penalty={penalty!r}, cross_penalty={cross_penalty!r}, age={age})."
        )


class PlayLogError(MapPickerError, ValueError):
    """Raised when a play log line cannot be resolved to a catalog map.

    Attributes:
        line_no: 1-based line number in the log file.
        reason:  What went wrong.
        value:   The offending line or id.
    """

    def __init__(self, line_no: int, reason: str, value: Any) -> None:
        self.line_no = line_no
        self.reason  = reason
        self.value   = value
        super().__init__(f"Error parsing the play log at line {line_no}, {reason}: '{value}'")
