"""Data models for line-menu."""

from .match import (
    ConsecutiveRule,
    ScoreConfig,
    DEFAULT_SCORE_CONFIG,
    MatchResult,
    NO_MATCH,
    RankedItem,
)
from .exceptions import (
    MenuError,
    InputError,
    NoInputError,
    ConfigError,
    ConfigValidationError,
)

__all__ = [
    # Match models
    "ConsecutiveRule",
    "ScoreConfig",
    "DEFAULT_SCORE_CONFIG",
    "MatchResult",
    "NO_MATCH",
    "RankedItem",
    # Exceptions
    "MenuError",
    "InputError",
    "NoInputError",
    "ConfigError",
    "ConfigValidationError",
]
