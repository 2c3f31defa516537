"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``MAP_PICKER_*`` prefix, plus ``NO_COLOR``

Entry point: ``load_config(config_path=None) -> AppConfig``

CLI commands receive an ``AppConfig`` instance; the scoring engine itself
takes no configuration (its constants live in ``recommendations/scorer.py``).
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class CatalogConfig(BaseModel):
    """Location of the map catalog."""

    model_config = ConfigDict(frozen=True)

    maps_file: str = "config/maps/all_maps.json"


class PlayLogConfig(BaseModel):
    """Location of the append-only play log."""

    model_config = ConfigDict(frozen=True)

    log_file: str = "data/play_log.txt"


class SessionConfig(BaseModel):
    """Defaults for recommendation requests."""

    model_config = ConfigDict(frozen=True)

    default_players: int = 16
    min_players: int = 8
    max_players: int = 16
    choices: int = 3

    @field_validator("choices")
    @classmethod
    def validate_choices(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"choices must be >= 1, got {v}.")
        return v

    @model_validator(mode="after")
    def validate_player_range(self) -> "SessionConfig":
        if not 0 <= self.min_players <= self.max_players:
            raise ValueError(
                f"min_players ({self.min_players}) must be between 0 and "
                f"max_players ({self.max_players})."
            )
        if not self.min_players <= self.default_players <= self.max_players:
            raise ValueError(
                f"default_players ({self.default_players}) must be within "
                f"[{self.min_players}, {self.max_players}]."
            )
        return self


class DisplayConfig(BaseModel):
    """Terminal output settings."""

    model_config = ConfigDict(frozen=True)

    use_color: bool = True


class SimulationConfig(BaseModel):
    """Parameters for the ``simulate`` command."""

    model_config = ConfigDict(frozen=True)

    rounds: int = 10_000
    players: int = 16
    seed: Optional[int] = None
    output_csv: str = "data/simulation/map_counts.csv"

    @field_validator("rounds")
    @classmethod
    def validate_rounds(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"rounds must be >= 0, got {v}.")
        return v


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "WARNING"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration."""

    model_config = ConfigDict(frozen=True)

    catalog: CatalogConfig = CatalogConfig()
    play_log: PlayLogConfig = PlayLogConfig()
    session: SessionConfig = SessionConfig()
    display: DisplayConfig = DisplayConfig()
    simulation: SimulationConfig = SimulationConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False   # forces logging.level = "DEBUG"


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.  A missing *default*
            file falls back to built-in defaults; a missing explicit file
            is an error.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the specified ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    load_dotenv(dotenv_path=root / ".env", override=False)

    raw: dict[str, Any] = {}
    if config_path is None:
        config_path = root / "config" / "default.toml"
        if config_path.exists():
            raw = _read_toml(config_path)
    else:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        raw = _read_toml(config_path)

    # Gitignored local overrides next to the main config file
    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        raw = _deep_merge(raw, _read_toml(local_config_path))

    raw = _apply_env_overrides(raw)

    return _build_app_config(raw)


def _read_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides to the raw config dict.

    Supported overrides:
      MAP_PICKER_MAPS_FILE  → raw["catalog"]["maps_file"]
      MAP_PICKER_PLAY_LOG   → raw["play_log"]["log_file"]
      MAP_PICKER_LOG_LEVEL  → raw["logging"]["level"]
      MAP_PICKER_DEBUG      → raw["debug"]
      NO_COLOR              → raw["display"]["use_color"] = False,
                              unless set to "0" or "false"
    """
    if maps_file := os.environ.get("MAP_PICKER_MAPS_FILE"):
        raw.setdefault("catalog", {})["maps_file"] = maps_file

    if log_file := os.environ.get("MAP_PICKER_PLAY_LOG"):
        raw.setdefault("play_log", {})["log_file"] = log_file

    if log_level := os.environ.get("MAP_PICKER_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("MAP_PICKER_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    no_color = os.environ.get("NO_COLOR")
    if no_color is not None and no_color.lower() not in ("0", "false"):
        raw.setdefault("display", {})["use_color"] = False

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure.

    ``debug = true`` forces the log level to DEBUG, which logs every raw
    map score.
    """
    debug = raw.get("debug", False)
    logging_raw = dict(raw.get("logging", {}))
    if debug is True:
        logging_raw["level"] = "DEBUG"

    return AppConfig(
        catalog=CatalogConfig(**raw.get("catalog", {})),
        play_log=PlayLogConfig(**raw.get("play_log", {})),
        session=SessionConfig(**raw.get("session", {})),
        display=DisplayConfig(**raw.get("display", {})),
        simulation=SimulationConfig(**raw.get("simulation", {})),
        logging=LoggingConfig(**logging_raw),
        debug=debug,
    )
