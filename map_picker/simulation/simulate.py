"""
Rotation simulation.

Starting from an empty play log and mode TD, each round:
  1. recommend ``choices`` maps for the current mode,
  2. "play" the top-ranked one (append it to the simulated log),
  3. advance to the next mode in the rotation.

The tally of plays per map shows how evenly the scoring spreads picks across
the catalog.  Nothing is written to the real play log.

Usage
-----
    result = run_simulation(catalog, rounds=10_000, players=16, rng=random.Random(7))
    rows   = simulation_rows(result, catalog)
"""

from __future__ import annotations

import logging
import random
from collections import Counter
from dataclasses import dataclass, field

from map_picker.models.catalog import Catalog, GameMap
from map_picker.recommendations.ranker import DEFAULT_CHOICES, recommend
from map_picker.recommendations.sampler import RandomSource
from map_picker.taxonomy.mode_taxonomy import MODE_ORDER, Mode, next_mode

logger = logging.getLogger(__name__)

SIMULATION_FIELDNAMES = ["mode", "nickname", "count"]


@dataclass
class SimulationResult:
    """Outcome of one simulation run.

    Attributes:
        rounds:  Number of rounds simulated.
        players: Player count used for every round.
        log:     Simulated play log, oldest first.
        counts:  Plays per map id.
    """

    rounds:  int
    players: int
    log:     list[GameMap] = field(default_factory=list)
    counts:  Counter = field(default_factory=Counter)


def run_simulation(
    catalog:    Catalog,
    rounds:     int,
    players:    int = 16,
    choices:    int = DEFAULT_CHOICES,
    rng:        RandomSource | None = None,
    start_mode: Mode = Mode.TD,
) -> SimulationResult:
    """Simulate ``rounds`` picks, always taking the top recommendation.

    Raises:
        ValueError: If ``rounds`` is negative.
        EmptyCandidateSetError / InsufficientCandidatesError: If some mode in
            the rotation has fewer than ``choices`` maps for ``players``.
    """
    if rounds < 0:
        raise ValueError(f"rounds must be >= 0, got {rounds}.")

    rng = rng if rng is not None else random.Random()
    all_maps = catalog.all_maps()
    result = SimulationResult(rounds=rounds, players=players)
    mode = start_mode

    for i in range(rounds):
        picks = recommend(result.log, mode, players, all_maps, k=choices, rng=rng)
        _, chosen = picks[0]
        result.log.append(chosen)
        result.counts[chosen.map_id] += 1
        mode = next_mode(mode)

        if (i + 1) % 1000 == 0:
            logger.info("Simulated %d/%d rounds", i + 1, rounds)

    return result


def simulation_rows(result: SimulationResult, catalog: Catalog) -> list[dict]:
    """Flatten play counts into rows for CSV export or display.

    Rows are ordered by mode (rotation order), then group and variant in
    catalog order.  Maps that were never played are omitted.
    """
    rows: list[dict] = []
    for mode in MODE_ORDER:
        for group in catalog.all_groups():
            for game_map in catalog.maps_in_group(group.group_id):
                if game_map.mode != mode:
                    continue
                count = result.counts.get(game_map.map_id)
                if count:
                    rows.append(
                        {"mode": str(mode), "nickname": game_map.nickname, "count": count}
                    )
    return rows
