"""Single-rule search: one outbound request plus structural extraction."""

from __future__ import annotations

from urllib.parse import parse_qsl, quote, urlsplit, urlunsplit

import structlog

from animesearch.domain.entities import (
    KEYWORD_PLACEHOLDER,
    PlatformSearchResult,
    Rule,
    SearchError,
    SearchResultItem,
)
from animesearch.domain.ports import FetcherPort
from animesearch.infrastructure.extraction import (
    extract_episodes,
    extract_search_results,
)

log = structlog.get_logger(__name__)

DEFAULT_MAX_EPISODE_ITEMS = 5


def build_search_url(rule: Rule, keyword: str) -> str:
    """Substitute the percent-encoded keyword into the rule's URL template."""
    return rule.search_url.replace(KEYWORD_PLACEHOLDER, quote(keyword, safe=""))


def split_form_request(url: str) -> tuple[str, dict[str, str]]:
    """Split a templated URL into a POST target and its form fields.

    Repeated keys keep the last value; blank values are kept.
    """
    parts = urlsplit(url)
    form = dict(parse_qsl(parts.query, keep_blank_values=True))
    target = urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))
    return target, form


class RuleSearchEngine:
    """Runs a rule's search request and extracts result items.

    Never raises for per-rule problems: transport failures, bad status
    codes and selector errors all come back as ``PlatformSearchResult.error``.

    Args:
        fetcher: Outbound page fetcher.
        max_episode_items: How many leading items get their detail page
            fetched when episodes are requested.
    """

    def __init__(
        self,
        *,
        fetcher: FetcherPort,
        max_episode_items: int = DEFAULT_MAX_EPISODE_ITEMS,
    ) -> None:
        self._fetcher = fetcher
        self._max_episode_items = max_episode_items

    async def search(
        self, rule: Rule, keyword: str, *, fetch_episodes: bool = False
    ) -> PlatformSearchResult:
        try:
            items = await self._execute_search(rule, keyword)
            if fetch_episodes and rule.has_chapter_selectors:
                await self._attach_episodes(rule, items)
        except SearchError as e:
            log.warning("rule_search_failed", rule=rule.name, error=str(e))
            return PlatformSearchResult.with_error(str(e))
        except Exception as e:
            log.error(
                "rule_search_crashed",
                rule=rule.name,
                error_type=type(e).__name__,
                error=str(e),
                exc_info=True,
            )
            return PlatformSearchResult.with_error(f"search failed: {e!s}")

        log.debug("rule_search_completed", rule=rule.name, count=len(items))
        return PlatformSearchResult.with_items(items)

    async def _execute_search(self, rule: Rule, keyword: str) -> list[SearchResultItem]:
        search_url = build_search_url(rule, keyword)
        log.debug("rule_search_url", rule=rule.name, url=search_url, post=rule.use_post)

        if rule.use_post:
            target, form = split_form_request(search_url)
            markup = await self._fetcher.post_form_text(
                target, form, referer=rule.base_url
            )
        else:
            markup = await self._fetcher.get_text(search_url, referer=rule.base_url)

        return extract_search_results(rule, markup)

    async def _attach_episodes(self, rule: Rule, items: list[SearchResultItem]) -> None:
        """Fetch detail pages for the leading items, one after another.

        Failures are logged and leave the item without ``episodes``.
        """
        for item in items[: self._max_episode_items]:
            try:
                markup = await self._fetcher.get_text(item.url, referer=rule.base_url)
                roads = extract_episodes(rule, markup, item.url)
            except SearchError as e:
                log.debug(
                    "episode_fetch_failed",
                    rule=rule.name,
                    url=item.url,
                    error=str(e),
                )
                continue

            if roads:
                item.episodes = roads
