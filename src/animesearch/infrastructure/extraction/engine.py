"""Rule-driven structural extraction.

Turns an HTML document plus a rule's XPath selectors into search result
items and per-title episode listings.  Pure transformation: no I/O, one
document per call.
"""

from __future__ import annotations

import structlog
from lxml import etree, html

from animesearch.domain.entities import (
    Episode,
    EpisodeRoad,
    ExtractionError,
    Rule,
    SearchResultItem,
)
from animesearch.infrastructure.common.xpath_selectors import (
    Node,
    evaluate,
    evaluate_or_empty,
    node_attr,
    node_text,
    normalize_selector,
    origin_of,
    parse_html,
    relativize_selector,
    resolve_url,
)

log = structlog.get_logger(__name__)

# Last resort when the href sub-query matches an element without a link.
FALLBACK_HREF_SELECTOR = ".//a/@href"

ROAD_LABEL = "线路{index}"


def _evaluate_required(
    root: html.HtmlElement, selector: str, *, rule: Rule, field: str
) -> list[Node]:
    try:
        return evaluate(root, selector)
    except etree.XPathError as e:
        raise ExtractionError(
            f"invalid {field} selector for rule '{rule.name}': {selector}"
        ) from e


def _extract_name(node: Node, selector: str) -> str:
    """Text of the first sub-match, or the list node's own text."""
    if selector:
        matches = evaluate_or_empty(node, selector)
        if matches:
            return node_text(matches[0])
    return node_text(node)


def _extract_href(node: Node, selector: str) -> str:
    """Link of the first sub-match.

    Fallback chain: ``href`` attribute, ``data-href`` attribute, then the
    first ``<a href>`` anywhere under the list node.
    """
    if not selector:
        return ""
    matches = evaluate_or_empty(node, selector)
    if not matches:
        return ""

    href = node_attr(matches[0], "href", "data-href")
    if href:
        return href

    for fallback in evaluate_or_empty(node, FALLBACK_HREF_SELECTOR):
        value = node_text(fallback)
        if value:
            return value
    return ""


def extract_search_results(rule: Rule, markup: str) -> list[SearchResultItem]:
    """Extract search result items from a search page.

    Items with an empty name or link are dropped; the rest keep document
    order.  Raises ``ExtractionError`` when ``search_list`` cannot be
    evaluated.
    """
    root = parse_html(markup)
    if root is None:
        log.warning("search_page_unparsable", rule=rule.name)
        return []

    list_selector = normalize_selector(rule.search_list)
    name_selector = relativize_selector(normalize_selector(rule.search_name))
    href_selector = relativize_selector(normalize_selector(rule.search_result))

    if not list_selector:
        raise ExtractionError(f"rule '{rule.name}' has no list selector")

    nodes = _evaluate_required(root, list_selector, rule=rule, field="list")
    log.debug(
        "search_list_matched",
        rule=rule.name,
        selector=list_selector,
        nodes=len(nodes),
    )

    items: list[SearchResultItem] = []
    for node in nodes:
        if isinstance(node, str):
            # A list selector has to yield elements to query under.
            continue

        name = _extract_name(node, name_selector)
        href = _extract_href(node, href_selector)
        if not name or not href:
            log.debug(
                "search_item_skipped",
                rule=rule.name,
                reason="missing name or href",
                name=name,
                href=href,
            )
            continue

        items.append(SearchResultItem(name=name, url=resolve_url(href, rule.base_url)))

    return items


def extract_episodes(
    rule: Rule, markup: str, source_page_url: str
) -> list[EpisodeRoad]:
    """Extract play sources and their episodes from a detail page.

    Roads without any valid episode are omitted.  When more than one road
    survives, each is labelled with its 1-based position among all road
    nodes.  Raises ``ExtractionError`` when ``chapter_roads`` cannot be
    evaluated.
    """
    if not rule.has_chapter_selectors:
        return []

    root = parse_html(markup)
    if root is None:
        log.warning("detail_page_unparsable", rule=rule.name, url=source_page_url)
        return []

    roads_selector = normalize_selector(rule.chapter_roads)
    episode_selector = relativize_selector(normalize_selector(rule.chapter_result))
    url_base = origin_of(source_page_url, rule.base_url)

    road_nodes = _evaluate_required(root, roads_selector, rule=rule, field="roads")
    log.debug(
        "chapter_roads_matched",
        rule=rule.name,
        selector=roads_selector,
        roads=len(road_nodes),
    )

    found: list[tuple[int, list[Episode]]] = []
    for index, road in enumerate(road_nodes):
        if isinstance(road, str):
            continue

        episodes: list[Episode] = []
        for ep_node in evaluate_or_empty(road, episode_selector):
            if isinstance(ep_node, str):
                continue
            name = node_text(ep_node)
            href = node_attr(ep_node, "href")
            if not name or not href:
                continue
            episodes.append(Episode(name=name, url=resolve_url(href, url_base)))

        if episodes:
            found.append((index, episodes))

    if len(found) == 1:
        return [EpisodeRoad(episodes=found[0][1])]

    return [
        EpisodeRoad(episodes=episodes, name=ROAD_LABEL.format(index=index + 1))
        for index, episodes in found
    ]
