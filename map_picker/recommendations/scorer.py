"""
Map scoring: folds the full play history into a selection probability for
every eligible map of one mode.

Per-candidate state (``MapScoring``)
------------------------------------
    age            rounds since this exact map was last played (capped at 200)
    penalty        same-mode group-mate accumulator, starts at 1.0
    cross_penalty  other-mode group-mate accumulator, starts at 1.0

Fold (oldest → newest, one step per logged play)
------------------------------------------------
    penalty       *= 2^(-1/64)        # halves every 64 rounds
    cross_penalty *= 2^(-1/12)        # halves every 12 rounds
    age            = min(200, age + 1)
    same map                 → age = 1
    same group, same mode    → penalty       += 1000
    same group, other mode   → cross_penalty += mode_discount(a, b) * 1000

Final score
-----------
    combined = penalty + cross_penalty
    score    = clamp(1000 / combined^1.4 * age^0.6, 0.001, 100000)

Recently played maps and their same-mode siblings are suppressed on a slow
64-round half-life.  Siblings of another mode recover on a 12-round
half-life, scaled down further by the mode-pair discount.  The age factor
lets long-unplayed maps win out eventually however dense the history is.

Scores are then normalized to sum to 1.0 and sorted descending.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Sequence

from map_picker.errors import EmptyCandidateSetError, NumericInvariantError
from map_picker.models.catalog import GameMap
from map_picker.taxonomy.mode_taxonomy import Mode, mode_discount

logger = logging.getLogger(__name__)

AGE_CAP: int = 200
ROUND_PENALTY: float = 1000.0
ROUND_DISCOUNT: float = 2.0 ** (-1.0 / 64.0)
CROSS_ROUND_DISCOUNT: float = 2.0 ** (-1.0 / 12.0)

PENALTY_NONLINEARITY: float = 1.4   # combined penalty raised to this before inverting
AGE_POW: float = 0.6                # age raised to this before multiplying

SCORE_MIN: float = 0.001
SCORE_MAX: float = 100_000.0


@dataclass
class MapScoring:
    """Scoring state of one candidate map during a single scoring call.

    Attributes:
        game_map:      The candidate being scored.
        age:           Rounds since the candidate itself was last played.
        penalty:       Decaying penalty from same-mode group-mates (incl. itself).
        cross_penalty: Decaying penalty from other-mode group-mates.
    """

    game_map:      GameMap
    age:           int = AGE_CAP
    penalty:       float = 1.0
    cross_penalty: float = 1.0

    def map_played(self, other: GameMap) -> None:
        """Advance the state by one logged play of ``other``."""
        self.penalty       *= ROUND_DISCOUNT
        self.cross_penalty *= CROSS_ROUND_DISCOUNT
        self.age = min(AGE_CAP, self.age + 1)

        if other == self.game_map:
            self.age = 1

        if other.group_id == self.game_map.group_id:
            if other.mode == self.game_map.mode:
                self.penalty += ROUND_PENALTY
            else:
                self.cross_penalty += (
                    mode_discount(self.game_map.mode, other.mode) * ROUND_PENALTY
                )

    def final_score(self) -> float:
        """Shape the accumulated state into a clamped, strictly positive score.

        Raises:
            NumericInvariantError: If the score is not finite.
        """
        combined = self.penalty + self.cross_penalty
        if not combined > 0.0:
            weighted = math.nan
        else:
            inverted = 1000.0 / combined ** PENALTY_NONLINEARITY
            weighted = inverted * float(self.age) ** AGE_POW

        if not math.isfinite(weighted):
            raise NumericInvariantError(
                map_id=self.game_map.map_id,
                penalty=self.penalty,
                cross_penalty=self.cross_penalty,
                age=self.age,
                score=weighted,
            )
        return _clamp(weighted, SCORE_MIN, SCORE_MAX)


def eligible_maps(
    mode: Mode,
    players: int,
    all_maps: Iterable[GameMap],
) -> list[MapScoring]:
    """Fresh scoring state for every map of ``mode`` seating ``players`` or more."""
    return [
        MapScoring(game_map=m)
        for m in all_maps
        if m.mode == mode and m.players >= players
    ]


def raw_scores(
    log: Sequence[GameMap],
    mode: Mode,
    players: int,
    all_maps: Iterable[GameMap],
) -> list[tuple[float, GameMap]]:
    """Un-normalized scores in candidate (catalog) order.

    Raises:
        EmptyCandidateSetError: If no map is eligible.
    """
    candidates = eligible_maps(mode, players, all_maps)
    if not candidates:
        raise EmptyCandidateSetError(mode, players)

    for state in candidates:
        for played in log:
            state.map_played(played)

    scores = [(state.final_score(), state.game_map) for state in candidates]

    if logger.isEnabledFor(logging.DEBUG):
        for state, (score, _) in zip(candidates, scores):
            logger.debug(
                "raw score %.6f | penalty=%.3f cross=%.3f age=%d | %s",
                score, state.penalty, state.cross_penalty, state.age,
                state.game_map.map_info,
            )
    return scores


def normalize_scores(
    scores: Sequence[tuple[float, GameMap]],
) -> list[tuple[float, GameMap]]:
    """Divide every score by the total so the weights sum to 1.0."""
    total = sum(s for s, _ in scores)
    return [(s / total, m) for s, m in scores]


def build_scores(
    log: Sequence[GameMap],
    mode: Mode,
    players: int,
    all_maps: Iterable[GameMap],
) -> list[tuple[float, GameMap]]:
    """Score every eligible map against the play log.

    Args:
        log:      Play history, oldest first.
        mode:     Mode to pick a map for.
        players:  Minimum player capacity required.
        all_maps: Every map in the catalog.

    Returns:
        ``(probability, map)`` pairs summing to 1.0, highest probability first.
        Equal probabilities keep catalog order.

    Raises:
        EmptyCandidateSetError: If no map is eligible.
        NumericInvariantError:  If a score is not finite.
    """
    scores = normalize_scores(raw_scores(log, mode, players, all_maps))
    scores.sort(key=lambda pair: pair[0], reverse=True)
    logger.debug(
        "Scored %d %s maps for %d+ players over %d log entries",
        len(scores), mode, players, len(log),
    )
    return scores


# ── Helper ────────────────────────────────────────────────────────────────────

def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
