from .rule import KEYWORD_PLACEHOLDER, Rule
from .search import (
    BadStatusError,
    Episode,
    EpisodeRoad,
    ExtractionError,
    FetchError,
    FetchFailedError,
    FetchTimeoutError,
    PlatformSearchResult,
    SearchError,
    SearchResultItem,
)
from .stream import (
    ERROR_COLOR,
    DoneEvent,
    InitEvent,
    ProgressEvent,
    ResultEvent,
    StreamEvent,
    StreamProgress,
    StreamResult,
)

__all__ = [
    "ERROR_COLOR",
    "KEYWORD_PLACEHOLDER",
    "BadStatusError",
    "DoneEvent",
    "Episode",
    "EpisodeRoad",
    "ExtractionError",
    "FetchError",
    "FetchFailedError",
    "FetchTimeoutError",
    "InitEvent",
    "PlatformSearchResult",
    "ProgressEvent",
    "ResultEvent",
    "Rule",
    "SearchError",
    "SearchResultItem",
    "StreamEvent",
    "StreamProgress",
    "StreamResult",
]
