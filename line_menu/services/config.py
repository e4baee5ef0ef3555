"""Configuration management for line-menu.

Single JSON file at ~/.config/line-menu/config.json holding picker and
scoring settings. Command-line flags are applied on top at runtime.

Resolution order: command line > config file > defaults
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..models.exceptions import ConfigValidationError
from ..models.match import ConsecutiveRule, ScoreConfig

logger = logging.getLogger(__name__)

DEFAULT_PLACEHOLDER = "Search..."
DEFAULT_MAX_VISIBLE = 200
DEFAULT_BACKGROUND_THRESHOLD = 20000


@dataclass
class ScoreSettings:
    """Scoring constants as stored in the config file.

    Unset values (None) fall back to the matcher defaults.
    """

    match_bonus: int | None = None
    boundary_bonus: int | None = None
    consecutive_bonus: int | None = None
    gap_start_penalty: int | None = None
    gap_extend_penalty: int | None = None
    non_contiguous_penalty: int | None = None  # kept for tuning, never applied
    consecutive_rule: ConsecutiveRule | None = None

    _INT_FIELDS = (
        "match_bonus",
        "boundary_bonus",
        "consecutive_bonus",
        "gap_start_penalty",
        "gap_extend_penalty",
        "non_contiguous_penalty",
    )

    def to_dict(self) -> dict:
        result: dict = {}
        for name in self._INT_FIELDS:
            value = getattr(self, name)
            if value is not None:
                result[name] = value
        if self.consecutive_rule is not None:
            result["consecutive_rule"] = self.consecutive_rule.value
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "ScoreSettings":
        rule = None
        if data.get("consecutive_rule"):
            try:
                rule = ConsecutiveRule(data["consecutive_rule"])
            except ValueError:
                logger.warning(f"Unknown consecutive_rule {data['consecutive_rule']!r}, using default")
        return cls(
            consecutive_rule=rule,
            **{name: data.get(name) for name in cls._INT_FIELDS},
        )

    def merge_with(self, override: "ScoreSettings") -> "ScoreSettings":
        """Return new settings with override values taking precedence."""
        merged = {
            name: getattr(override, name) if getattr(override, name) is not None else getattr(self, name)
            for name in self._INT_FIELDS
        }
        return ScoreSettings(
            consecutive_rule=override.consecutive_rule if override.consecutive_rule is not None else self.consecutive_rule,
            **merged,
        )

    def validate(self) -> None:
        """Check every set value is an integer."""
        for name in self._INT_FIELDS:
            value = getattr(self, name)
            # bool is an int subclass but never a sensible score
            if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
                raise ConfigValidationError(
                    f"scoring.{name} must be an integer, got {value!r}",
                )

    def to_score_config(self) -> ScoreConfig:
        """Build the matcher's ScoreConfig, filling in defaults."""
        values = {
            name: getattr(self, name)
            for name in self._INT_FIELDS
            if getattr(self, name) is not None
        }
        if self.consecutive_rule is not None:
            values["consecutive_rule"] = self.consecutive_rule
        return ScoreConfig(**values)


@dataclass
class MenuConfig:
    """Unified line-menu configuration.

    None means "not set at this tier" so tiers can be merged.
    """

    placeholder: str | None = None
    persistent: bool | None = None
    max_visible: int | None = None  # Rows mounted in the result list
    background_threshold: int | None = None  # Candidate count that moves ranking off the UI thread
    scoring: ScoreSettings = field(default_factory=ScoreSettings)

    @property
    def effective_placeholder(self) -> str:
        return self.placeholder if self.placeholder is not None else DEFAULT_PLACEHOLDER

    @property
    def effective_persistent(self) -> bool:
        return bool(self.persistent)

    @property
    def effective_max_visible(self) -> int:
        return self.max_visible if self.max_visible is not None else DEFAULT_MAX_VISIBLE

    @property
    def effective_background_threshold(self) -> int:
        if self.background_threshold is not None:
            return self.background_threshold
        return DEFAULT_BACKGROUND_THRESHOLD

    def to_dict(self) -> dict:
        result: dict = {}
        if self.placeholder is not None:
            result["placeholder"] = self.placeholder
        if self.persistent is not None:
            result["persistent"] = self.persistent
        if self.max_visible is not None:
            result["max_visible"] = self.max_visible
        if self.background_threshold is not None:
            result["background_threshold"] = self.background_threshold
        scoring = self.scoring.to_dict()
        if scoring:
            result["scoring"] = scoring
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "MenuConfig":
        return cls(
            placeholder=data.get("placeholder"),
            persistent=data.get("persistent"),
            max_visible=data.get("max_visible"),
            background_threshold=data.get("background_threshold"),
            scoring=ScoreSettings.from_dict(data.get("scoring", {}) or {}),
        )

    def merge_with(self, override: "MenuConfig") -> "MenuConfig":
        """Return new config with override values taking precedence."""
        return MenuConfig(
            placeholder=override.placeholder if override.placeholder is not None else self.placeholder,
            persistent=override.persistent if override.persistent is not None else self.persistent,
            max_visible=override.max_visible if override.max_visible is not None else self.max_visible,
            background_threshold=override.background_threshold if override.background_threshold is not None else self.background_threshold,
            scoring=self.scoring.merge_with(override.scoring),
        )

    def validate(self) -> None:
        """Raise ConfigValidationError for values the picker cannot use."""
        if self.placeholder is not None and not isinstance(self.placeholder, str):
            raise ConfigValidationError(f"placeholder must be a string, got {self.placeholder!r}")
        if self.persistent is not None and not isinstance(self.persistent, bool):
            raise ConfigValidationError(f"persistent must be true or false, got {self.persistent!r}")
        for name in ("max_visible", "background_threshold"):
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigValidationError(
                    f"{name} must be a positive integer, got {value!r}",
                )
        self.scoring.validate()


class ConfigManager:
    """Loads and resolves line-menu configuration."""

    def __init__(self, config_dir: Path | None = None):
        if config_dir is None:
            config_dir = Path.home() / ".config" / "line-menu"
        self._config_dir = config_dir
        self._config_file = config_dir / "config.json"
        self._config: MenuConfig | None = None

    @property
    def config_file(self) -> Path:
        return self._config_file

    @property
    def config(self) -> MenuConfig:
        if self._config is None:
            self._config = self._load_config()
        return self._config

    def _load_config(self) -> MenuConfig:
        """Load config from disk, falling back to defaults."""
        if self._config_file.exists():
            try:
                data = json.loads(self._config_file.read_text(encoding="utf-8"))
                return MenuConfig.from_dict(data)
            except (OSError, ValueError, AttributeError, TypeError) as e:
                logger.warning(f"Failed to load config {self._config_file}, using defaults: {e}")
        return MenuConfig()

    def resolve(self, overrides: MenuConfig | None = None) -> MenuConfig:
        """Resolve config through all tiers and validate the result.

        Raises:
            ConfigValidationError: a resolved value is unusable
        """
        resolved = self.config
        if overrides is not None:
            resolved = resolved.merge_with(overrides)
        resolved.validate()
        logger.debug(f"Resolved config: {resolved.to_dict()}")
        return resolved
