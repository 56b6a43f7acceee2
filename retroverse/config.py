"""
Arcade-wide settings.

Settings come from an optional YAML file, located by the
RETROVERSE_CONFIG environment variable or ``retroverse.yaml`` in the
working directory. Every field has a default, so no file is needed.

Example retroverse.yaml:

    fps: 60
    audio_enabled: true
    volume: 0.4
    log_level: DEBUG
    games:
      pong:
        difficulty: hard
"""
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from retroverse.logging import configure_logging, get_logger

log = get_logger('config')

CONFIG_ENV_VAR = 'RETROVERSE_CONFIG'
DEFAULT_CONFIG_FILE = 'retroverse.yaml'

_LOG_LEVELS = {'TRACE', 'DEBUG', 'INFO', 'WARNING', 'WARN', 'ERROR', 'CRITICAL', 'OFF'}


class ArcadeSettings(BaseModel):
    """Validated arcade settings.

    Attributes:
        fps: Host frame rate (render cadence, not simulation cadence)
        audio_enabled: Play tones through pygame.mixer
        volume: Tone amplitude, 0.0 - 1.0
        high_score_path: JSON high score file (None = user data directory)
        log_level: Default log level applied at startup
        games: Per-game keyword overrides, keyed by game id
    """
    fps: int = Field(default=60, gt=0, le=240)
    audio_enabled: bool = True
    volume: float = Field(default=0.3, ge=0.0, le=1.0)
    high_score_path: Optional[str] = None
    log_level: Optional[str] = None
    games: Dict[str, Dict[str, Any]] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, extra='forbid')

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if v.upper() not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level {v!r}")
        return v.upper()

    def game_options(self, game_id: str) -> Dict[str, Any]:
        """Keyword overrides for one game (empty if none configured)."""
        return dict(self.games.get(game_id, {}))

    def apply_logging(self) -> None:
        if self.log_level:
            configure_logging(level=self.log_level)


def find_config_file() -> Optional[Path]:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    default = Path.cwd() / DEFAULT_CONFIG_FILE
    if default.exists():
        return default
    return None


def load_settings(path: Optional[Union[str, Path]] = None) -> ArcadeSettings:
    """Load settings from YAML.

    Args:
        path: Explicit file; otherwise RETROVERSE_CONFIG or ./retroverse.yaml

    Returns:
        ArcadeSettings (defaults when no file is found)

    Raises:
        FileNotFoundError: If an explicitly requested file does not exist
        pydantic.ValidationError: If the file holds invalid values
    """
    config_path = Path(path) if path is not None else find_config_file()
    if config_path is None:
        return ArcadeSettings()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{config_path}: expected a mapping at top level")
    log.debug(f"Loaded settings from {config_path}")
    return ArcadeSettings(**data)
