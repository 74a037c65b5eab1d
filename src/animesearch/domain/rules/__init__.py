from .exceptions import (
    RuleError,
    RuleLoadError,
    RuleNotFoundError,
    RuleValidationError,
)

__all__ = [
    "RuleError",
    "RuleLoadError",
    "RuleNotFoundError",
    "RuleValidationError",
]
