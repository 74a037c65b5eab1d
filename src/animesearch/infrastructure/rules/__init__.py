from .loader import load_rule_file
from .registry import RuleRegistry

__all__ = [
    "RuleRegistry",
    "load_rule_file",
]
