"""
Map Picker CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Load the catalog (and play log where needed).
  4. Run the engine.
  5. Report result to stdout.

Install and run::

    pip install -e .
    map-picker --help
    map-picker recommend                      # 3 maps for the next mode in rotation
    map-picker recommend --mode dm --players 12
    map-picker select 17                      # record that map 17 was played
    map-picker all-maps --mode siege
    map-picker simulate --rounds 10000 --seed 7
    map-picker validate-catalog
    map-picker validate-config --full
"""

from __future__ import annotations

import json
import random
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="map-picker",
    help="Weighted map rotation picker: suggests maps that haven't been played lately.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from map_picker.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from map_picker.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_catalog_or_exit(config):
    from map_picker.errors import CatalogValidationError
    from map_picker.ingestion.catalog_json import load_catalog

    try:
        return load_catalog(Path(config.catalog.maps_file))
    except (FileNotFoundError, CatalogValidationError) as exc:
        typer.echo(f"[ERROR] Could not load map catalog: {exc}", err=True)
        raise typer.Exit(code=1)


def _load_log_or_exit(config, catalog):
    from map_picker.errors import PlayLogError
    from map_picker.ingestion.play_log import load_play_log

    try:
        return load_play_log(Path(config.play_log.log_file), catalog)
    except (OSError, PlayLogError) as exc:
        typer.echo(f"[ERROR] Could not load play log: {exc}", err=True)
        raise typer.Exit(code=1)


def _parse_mode_or_exit(mode: str):
    from map_picker.taxonomy.mode_taxonomy import parse_mode

    try:
        return parse_mode(mode)
    except ValueError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


def _check_players_or_exit(config, players: int) -> int:
    lo, hi = config.session.min_players, config.session.max_players
    if not lo <= players <= hi:
        typer.echo(f"[ERROR] players must be between {lo} and {hi}, got {players}.", err=True)
        raise typer.Exit(code=1)
    return players


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("recommend")
def recommend_cmd(
    mode: Optional[str] = typer.Option(
        None,
        "--mode",
        "-m",
        help="Mode to pick for (TD, DM, Chaser, BR, Captain, Siege). "
             "Defaults to the mode after the last played map.",
    ),
    players: Optional[int] = typer.Option(
        None,
        "--players",
        "-p",
        help="Number of players; only maps seating at least this many are offered.",
    ),
    count: Optional[int] = typer.Option(
        None,
        "--count",
        "-n",
        help="Number of maps to offer (default from config, usually 3).",
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="Seed the random draw for reproducible suggestions.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Suggest maps for the next round, weighted away from recent plays."""
    from map_picker.errors import MapPickerError
    from map_picker.recommendations.ranker import default_mode, recommend
    from map_picker.reporting.formatters import format_choices

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    target_players = _check_players_or_exit(
        config, players if players is not None else config.session.default_players
    )
    k = count if count is not None else config.session.choices
    if k < 1:
        typer.echo(f"[ERROR] --count must be >= 1, got {k}.", err=True)
        raise typer.Exit(code=1)

    catalog = _load_catalog_or_exit(config)
    log = _load_log_or_exit(config, catalog)
    target_mode = _parse_mode_or_exit(mode) if mode else default_mode(log)

    try:
        picks = recommend(
            log, target_mode, target_players, catalog.all_maps(),
            k=k, rng=random.Random(seed),
        )
    except MapPickerError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(format_choices(target_mode, target_players, picks, config.display.use_color))
    typer.echo("")
    typer.echo("Record the map you play with: map-picker select <map id>")
    for _, game_map in picks:
        typer.echo(f"  {game_map.map_id:>5}  {game_map.map_info}")


@app.command("all-maps")
def all_maps_cmd(
    mode: Optional[str] = typer.Option(
        None,
        "--mode",
        "-m",
        help="Mode to show. Defaults to the mode after the last played map.",
    ),
    players: int = typer.Option(
        0,
        "--players",
        "-p",
        help="Only include maps seating at least this many players (default: all).",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Show every map of a mode with its current selection probability."""
    from map_picker.errors import MapPickerError
    from map_picker.recommendations.ranker import all_candidates, default_mode
    from map_picker.reporting.formatters import format_all_maps

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    catalog = _load_catalog_or_exit(config)
    log = _load_log_or_exit(config, catalog)
    target_mode = _parse_mode_or_exit(mode) if mode else default_mode(log)

    try:
        scores = all_candidates(log, target_mode, players, catalog.all_maps())
    except MapPickerError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(format_all_maps(target_mode, scores, config.display.use_color))


@app.command("select")
def select_cmd(
    map_id: int = typer.Argument(..., help="Catalog id of the map that was played."),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Record a played map in the play log."""
    from map_picker.ingestion.play_log import commit_selection
    from map_picker.recommendations.ranker import default_mode
    from map_picker.reporting.formatters import style_mode

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    catalog = _load_catalog_or_exit(config)
    log = _load_log_or_exit(config, catalog)

    game_map = catalog.get_map(map_id)
    if game_map is None:
        typer.echo(f"[ERROR] No map with id {map_id} in the catalog.", err=True)
        raise typer.Exit(code=1)

    try:
        commit_selection(Path(config.play_log.log_file), log, game_map)
    except OSError as exc:
        typer.echo(f"[ERROR] Could not write play log: {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"{game_map.map_info} Selected. Have Fun!")
    typer.echo(
        f"  Next mode in rotation: {style_mode(default_mode(log), config.display.use_color)}"
    )


@app.command("simulate")
def simulate_cmd(
    rounds: Optional[int] = typer.Option(
        None,
        "--rounds",
        help="Number of rounds to simulate (default from config).",
    ),
    players: Optional[int] = typer.Option(
        None,
        "--players",
        "-p",
        help="Player count for every simulated round (default from config).",
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="Random seed for a reproducible run.",
    ),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="CSV file for per-map play counts (default from config).",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Simulate many rounds from an empty log and tally plays per map.

    \b
    Each round takes the top-ranked suggestion and moves to the next mode
    (TD → DM → Chaser → BR → Captain → Siege).  The real play log is not
    touched.
    """
    from map_picker.errors import MapPickerError
    from map_picker.reporting.export import export_to_csv
    from map_picker.reporting.formatters import format_simulation_table
    from map_picker.simulation.simulate import (
        SIMULATION_FIELDNAMES,
        run_simulation,
        simulation_rows,
    )

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    sim = config.simulation
    n_rounds = rounds if rounds is not None else sim.rounds
    n_players = _check_players_or_exit(
        config, players if players is not None else sim.players
    )
    run_seed = seed if seed is not None else sim.seed
    out_path = Path(output or sim.output_csv)

    if n_rounds < 0:
        typer.echo(f"[ERROR] --rounds must be >= 0, got {n_rounds}.", err=True)
        raise typer.Exit(code=1)

    catalog = _load_catalog_or_exit(config)

    typer.echo(f"simulate | rounds={n_rounds} | players={n_players} | seed={run_seed}")
    try:
        result = run_simulation(
            catalog,
            rounds=n_rounds,
            players=n_players,
            choices=config.session.choices,
            rng=random.Random(run_seed),
        )
    except MapPickerError as exc:
        typer.echo(f"[ERROR] Simulation failed: {exc}", err=True)
        raise typer.Exit(code=1)

    rows = simulation_rows(result, catalog)
    export_to_csv(rows, out_path, fieldnames=SIMULATION_FIELDNAMES)

    typer.echo(format_simulation_table(rows, n_rounds))
    typer.echo("")
    typer.echo(f"[OK] Counts written to {out_path}")


@app.command("validate-catalog")
def validate_catalog(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Validate the map catalog and print per-mode map counts."""
    from map_picker.taxonomy.mode_taxonomy import MODE_ORDER

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    catalog = _load_catalog_or_exit(config)

    typer.echo(f"Catalog: {config.catalog.maps_file}")
    typer.echo(f"  Groups: {len(catalog.all_groups())}")
    typer.echo(f"  Maps:   {len(catalog)}")
    for mode in MODE_ORDER:
        n = sum(1 for m in catalog if m.mode == mode)
        typer.echo(f"    {str(mode):<8} {n:>4}")
    typer.echo("")
    typer.echo("[OK] Catalog valid.")


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Map catalog:      {config.catalog.maps_file}")
    typer.echo(f"  Play log:         {config.play_log.log_file}")
    typer.echo(
        f"  Players:          {config.session.default_players} "
        f"(allowed {config.session.min_players}-{config.session.max_players})"
    )
    typer.echo(f"  Choices offered:  {config.session.choices}")
    typer.echo(f"  Colour output:    {config.display.use_color}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
