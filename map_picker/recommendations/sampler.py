"""
Weighted sampling without replacement over a scored map distribution.

Each draw picks ``u`` uniformly in ``[0, sum(remaining weights))`` and walks
the remaining candidates in order, subtracting weights until ``u <= 0``.
The chosen map leaves the pool before the next draw, so the remaining
weights are implicitly renormalized.  Each drawn map keeps the weight it had
in the *original* distribution (what the user sees as its percentage).
"""

from __future__ import annotations

import random
from typing import Protocol, Sequence

from map_picker.errors import InsufficientCandidatesError
from map_picker.models.catalog import GameMap


class RandomSource(Protocol):
    def random(self) -> float: ...


def sample_without_replacement(
    distribution: Sequence[tuple[float, GameMap]],
    k: int,
    rng: RandomSource | None = None,
) -> list[tuple[float, GameMap]]:
    """Draw ``k`` distinct maps from ``distribution``, proportional to weight.

    Args:
        distribution: ``(weight, map)`` pairs, e.g. from ``build_scores()``.
        k:            Number of maps to draw.
        rng:          Source of uniform floats in [0, 1); defaults to the
                      ``random`` module.  Pass a seeded ``random.Random`` for
                      reproducible draws.

    Returns:
        ``k`` ``(original_weight, map)`` pairs, highest weight first.

    Raises:
        ValueError:                  If ``k`` is negative.
        InsufficientCandidatesError: If ``k`` exceeds the number of candidates.
    """
    if k < 0:
        raise ValueError(f"k must be >= 0, got {k}.")
    if k > len(distribution):
        raise InsufficientCandidatesError(requested=k, available=len(distribution))

    source = rng if rng is not None else random
    remaining = list(distribution)
    drawn: list[tuple[float, GameMap]] = []

    while len(drawn) < k:
        total = sum(w for w, _ in remaining)
        u = source.random() * total if total > 0 else 0.0

        # Float residue can leave u slightly positive after the last weight.
        idx = len(remaining) - 1
        for i, (weight, _) in enumerate(remaining):
            u -= weight
            if u <= 0:
                idx = i
                break

        weight, game_map = remaining.pop(idx)
        assert all(m.map_id != game_map.map_id for _, m in drawn), (
            f"map {game_map.map_id} drawn twice"
        )
        drawn.append((weight, game_map))

    drawn.sort(key=lambda pair: pair[0], reverse=True)
    return drawn
