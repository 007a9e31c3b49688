"""
Central configuration for engine tunables and logging.
Pydantic models give type-safe, validated settings.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator


class EngineSettings(BaseModel):
    """Search engine configuration settings."""

    default_depth: int = Field(default=5, ge=1, le=10, description="AI search depth")
    hint_depth: int = Field(default=3, ge=1, le=10, description="Search depth for hints and predicted replies")

    @field_validator('default_depth', 'hint_depth', mode='before')
    @classmethod
    def validate_int_fields(cls, v):
        return int(v)


class ProjectionSettings(BaseModel):
    """Future projection (lookahead narration) settings."""

    num_visions: int = Field(default=3, ge=1, description="How many projections to keep")
    depth: int = Field(default=3, ge=1, description="Follow-up plies simulated after the first move")
    search_depth: int = Field(default=2, ge=1, description="Search depth for each simulated reply")
    max_moves: int = Field(default=6, ge=2, description="Moves per projection, first move included")

    @field_validator('num_visions', 'depth', 'search_depth', 'max_moves', mode='before')
    @classmethod
    def validate_int_fields(cls, v):
        return int(v)


class GameSettings(BaseModel):
    """Session settings."""

    human_player: str = Field(default="red", description="Side played by the human (red or black)")
    visions_enabled: bool = Field(default=True, description="Compute projections when a piece is selected")
    allow_undo: bool = Field(default=True, description="Allow undoing moves")

    @field_validator('human_player', mode='before')
    @classmethod
    def validate_human_player(cls, v):
        v_lower = str(v).strip().lower()
        if v_lower not in ('red', 'black'):
            raise ValueError("human_player must be 'red' or 'black'")
        return v_lower

    @field_validator('visions_enabled', 'allow_undo', mode='before')
    @classmethod
    def validate_bool_fields(cls, v):
        if isinstance(v, str):
            return v.strip().lower() in ('1', 'true', 'yes', 'on')
        return bool(v)


class LoggingSettings(BaseModel):
    """Logging configuration."""

    log_level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
        v_upper = v.upper() if isinstance(v, str) else str(v).upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper


class CheckersConfig(BaseModel):
    """Main configuration model."""

    engine: EngineSettings = Field(default_factory=EngineSettings)
    projection: ProjectionSettings = Field(default_factory=ProjectionSettings)
    game: GameSettings = Field(default_factory=GameSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    version: str = Field(default="1.0.0", description="Configuration version")
    config_file: Optional[str] = Field(default=None, description="Path to config file")

    @classmethod
    def from_env(cls) -> 'CheckersConfig':
        """Create configuration from environment variables."""
        return cls(
            engine=EngineSettings(
                default_depth=os.getenv('CHECKERS_DEPTH', '5'),
                hint_depth=os.getenv('CHECKERS_HINT_DEPTH', '3'),
            ),
            projection=ProjectionSettings(
                num_visions=os.getenv('CHECKERS_VISIONS', '3'),
            ),
            game=GameSettings(
                human_player=os.getenv('CHECKERS_HUMAN', 'red'),
            ),
            logging=LoggingSettings(
                log_level=os.getenv('CHECKERS_LOG_LEVEL', 'INFO'),
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'engine': self.engine.model_dump(),
            'projection': self.projection.model_dump(),
            'game': self.game.model_dump(),
            'logging': self.logging.model_dump(),
            'version': self.version,
            'config_file': self.config_file,
        }

    def save_to_file(self, filepath: str) -> None:
        """Save configuration to JSON file."""
        config_dict = self.to_dict()
        config_dict['config_file'] = filepath

        with open(filepath, 'w') as f:
            json.dump(config_dict, f, indent=2)

    @classmethod
    def load_from_file(cls, filepath: str) -> 'CheckersConfig':
        """Load configuration from JSON file."""
        with open(filepath, 'r') as f:
            data = json.load(f)

        return cls(
            engine=EngineSettings(**data.get('engine', {})),
            projection=ProjectionSettings(**data.get('projection', {})),
            game=GameSettings(**data.get('game', {})),
            logging=LoggingSettings(**data.get('logging', {})),
            version=data.get('version', '1.0.0'),
            config_file=filepath,
        )


# Global configuration instance
_config: Optional[CheckersConfig] = None


def get_config() -> CheckersConfig:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = CheckersConfig.from_env()
    return _config


def load_config_from_file(filepath: str) -> CheckersConfig:
    """Load configuration from file and update global instance."""
    global _config
    _config = CheckersConfig.load_from_file(filepath)
    return _config


def reset_config() -> None:
    """Reset the global configuration to defaults."""
    global _config
    _config = None


def get_engine_settings() -> EngineSettings:
    return get_config().engine


def get_projection_settings() -> ProjectionSettings:
    return get_config().projection


def get_game_settings() -> GameSettings:
    return get_config().game


def get_logging_settings() -> LoggingSettings:
    return get_config().logging


def setup_logging() -> None:
    """Configure root logging once, at the configured level."""
    if getattr(setup_logging, "_configured", False):
        return
    level: int = getattr(logging, get_logging_settings().log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    setup_logging._configured = True  # type: ignore[attr-defined]
