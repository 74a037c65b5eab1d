from .http_fetcher import FetcherPort
from .rule_registry import RuleRegistryPort
from .rule_search import RuleSearchPort

__all__ = [
    "FetcherPort",
    "RuleRegistryPort",
    "RuleSearchPort",
]
