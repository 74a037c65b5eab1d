"""Domain model for a search rule (Kazumi-compatible source recipe)."""

from __future__ import annotations

from dataclasses import dataclass, field

KEYWORD_PLACEHOLDER = "@keyword"


@dataclass(frozen=True)
class Rule:
    """Immutable description of one searchable source.

    Selectors are opaque XPath strings; they are not validated here.
    An invalid expression only fails when it is evaluated.
    """

    name: str
    base_url: str
    search_url: str

    use_post: bool = False

    # Search page selectors
    search_list: str = ""
    search_name: str = ""
    search_result: str = ""

    # Detail page selectors
    chapter_roads: str = ""
    chapter_result: str = ""

    # Display metadata
    color: str = "gray"
    tags: tuple[str, ...] = field(default_factory=tuple)
    version: str = ""
    magic: bool = False

    # Kazumi metadata carried through unchanged
    api: str = ""
    type: str = ""
    user_agent: str = ""
    referer: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Rule.name must not be empty")

    @property
    def has_chapter_selectors(self) -> bool:
        return bool(self.chapter_roads) and bool(self.chapter_result)
