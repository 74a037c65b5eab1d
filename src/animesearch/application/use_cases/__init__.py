from .list_rules import ListRulesUseCase
from .search_stream import EventChannel, SearchStreamUseCase

__all__ = ["EventChannel", "ListRulesUseCase", "SearchStreamUseCase"]
