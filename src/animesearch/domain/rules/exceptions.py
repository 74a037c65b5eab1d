"""Rule repository exceptions."""

from __future__ import annotations


class RuleError(Exception):
    """Base class for all rule-related errors."""


class RuleLoadError(RuleError):
    """Raised when a rule file cannot be read or decoded."""


class RuleValidationError(RuleError):
    """Raised when a rule file does not match the rule schema."""


class RuleNotFoundError(RuleError):
    """Raised when a rule name is not known to the registry."""

