"""Exception hierarchy for line-menu.

Scoring and ranking never raise; these cover the plumbing around them.
"""


class MenuError(Exception):
    """Base exception for all line-menu errors.

    Carries an optional suggestion that the CLI shows next to the message.
    """

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion

    def __str__(self) -> str:
        if self.suggestion:
            return f"{self.message} ({self.suggestion})"
        return self.message


class InputError(MenuError):
    """Input stream or terminal is unusable."""

    pass


class NoInputError(InputError):
    """Nothing was piped in."""

    pass


class ConfigError(MenuError):
    """Configuration is invalid or missing."""

    pass


class ConfigValidationError(ConfigError):
    """Configuration value failed validation."""

    pass
