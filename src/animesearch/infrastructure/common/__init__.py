from .xpath_selectors import (
    normalize_selector,
    origin_of,
    parse_html,
    relativize_selector,
    resolve_url,
)

__all__ = [
    "normalize_selector",
    "origin_of",
    "parse_html",
    "relativize_selector",
    "resolve_url",
]
