"""
Configuration

Runtime settings for the tile pyramid library, read from environment
variables with sensible defaults.
"""

import os
from dataclasses import dataclass
from typing import Dict, Any, Optional, Mapping

from .exceptions import ValidationError

# Highest zoom whose value fits the 5 zoom bits of the packed encoding
MAX_ENCODABLE_ZOOM = 31

_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    value = env.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    value = env.get(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"{name} must be an integer, got {value!r}")


@dataclass
class Config:
    """Settings shared by the seeder, logging and metrics."""
    environment: str = "development"
    log_level: str = "INFO"
    log_json: bool = True
    batch_size: int = 1000
    max_zoom: int = MAX_ENCODABLE_ZOOM
    metrics_enabled: bool = True

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Config":
        """
        Build a configuration from environment variables.

        Args:
            env: Mapping to read from, defaults to ``os.environ``

        Returns:
            Validated configuration
        """
        if env is None:
            env = os.environ

        config = cls(
            environment=env.get("TILE_PYRAMID_ENV", "development"),
            log_level=env.get("TILE_PYRAMID_LOG_LEVEL", "INFO").upper(),
            log_json=_env_bool(env, "TILE_PYRAMID_LOG_JSON", True),
            batch_size=_env_int(env, "TILE_PYRAMID_BATCH_SIZE", 1000),
            max_zoom=_env_int(env, "TILE_PYRAMID_MAX_ZOOM", MAX_ENCODABLE_ZOOM),
            metrics_enabled=_env_bool(env, "TILE_PYRAMID_METRICS", True),
        )
        config.validate()
        return config

    def validate(self) -> None:
        """Raise ValidationError if any setting is out of range."""
        if self.batch_size < 1:
            raise ValidationError(f"batch_size must be at least 1, got {self.batch_size}")

        if not 0 <= self.max_zoom <= MAX_ENCODABLE_ZOOM:
            raise ValidationError(
                f"max_zoom must be between 0 and {MAX_ENCODABLE_ZOOM}, got {self.max_zoom}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'environment': self.environment,
            'log_level': self.log_level,
            'log_json': self.log_json,
            'batch_size': self.batch_size,
            'max_zoom': self.max_zoom,
            'metrics_enabled': self.metrics_enabled,
        }
