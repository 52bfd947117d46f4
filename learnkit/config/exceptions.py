"""Configuration exceptions."""
from typing import List, Optional


class ConfigError(Exception):
    """Raised when a configuration file cannot be found, read or parsed."""
    pass


class ConfigValidationError(Exception):
    """Raised when configuration values are invalid. All problems are listed in errors."""
    def __init__(self, errors: List[str], kind: Optional[str] = None) -> None:
        self.errors = errors
        self.kind = kind
        prefix = f"{kind} configuration" if kind else "Configuration"
        super().__init__(f"{prefix} validation failed: {errors}")
