"""
Recommendation façade: the entry points the CLI and simulation call.

Usage flow
----------
1. default_mode(log)
   -> Mode  (successor of the last played map's mode; TD for an empty log)

2. recommend(log, mode, players, all_maps, k=3)
   -> list[(probability, GameMap)]  (k distinct sampled maps, desc order)

3. all_candidates(log, mode, players, all_maps)
   -> list[(probability, GameMap)]  (full distribution, desc order)

All three are pure functions of their inputs.  Only ``recommend`` is
randomized, through the ``rng`` argument.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from map_picker.models.catalog import GameMap
from map_picker.recommendations.sampler import RandomSource, sample_without_replacement
from map_picker.recommendations.scorer import build_scores
from map_picker.taxonomy.mode_taxonomy import Mode, next_mode

logger = logging.getLogger(__name__)

DEFAULT_CHOICES = 3


def recommend(
    log:      Sequence[GameMap],
    mode:     Mode,
    players:  int,
    all_maps: Iterable[GameMap],
    k:        int = DEFAULT_CHOICES,
    rng:      RandomSource | None = None,
) -> list[tuple[float, GameMap]]:
    """Sample ``k`` distinct maps for ``mode`` weighted by their scores.

    Returns:
        ``(probability, map)`` pairs, highest probability first.  The
        probability is the map's share of the full distribution.

    Raises:
        EmptyCandidateSetError:      If no map is eligible.
        InsufficientCandidatesError: If fewer than ``k`` maps are eligible.
    """
    scores = build_scores(log, mode, players, all_maps)
    picks = sample_without_replacement(scores, k, rng)
    logger.debug(
        "Recommended %s for %s (%d+ players)",
        ", ".join(str(m.map_id) for _, m in picks), mode, players,
    )
    return picks


def all_candidates(
    log:      Sequence[GameMap],
    mode:     Mode,
    players:  int,
    all_maps: Iterable[GameMap],
) -> list[tuple[float, GameMap]]:
    """Return the full normalized distribution for ``mode`` without sampling."""
    return build_scores(log, mode, players, all_maps)


def default_mode(log: Sequence[GameMap]) -> Mode:
    """Mode to offer first: the one after the most recently played map's mode."""
    if not log:
        return Mode.TD
    return next_mode(log[-1].mode)
