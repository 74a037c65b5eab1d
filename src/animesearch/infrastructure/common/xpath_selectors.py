"""XPath-based HTML extraction helpers with fallback chains.

Rule selectors come from community-maintained rule files and are written in
many inconsistent ways (absolute, implicitly relative, anchored to the
current node, selecting attributes or text directly).  The helpers here
normalize them before evaluation and read values off whatever ``lxml``
returns: elements, attribute values or text nodes.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import urlsplit

import structlog
from lxml import etree, html

log = structlog.get_logger(__name__)

Node = Any  # lxml element or a smart string (attribute value / text node)


def normalize_selector(selector: str) -> str:
    """Normalize a rule selector before evaluation.

    ``//x``, ``./x`` and ``.//x`` pass through, ``/x`` stays rooted at the
    document and a bare path is made implicitly relative (``.//x``).
    Applying it twice yields the same result.
    """
    selector = selector.strip()
    if not selector:
        return selector
    if selector.startswith(("//", "./", "/")):
        return selector
    return f".//{selector}"


def relativize_selector(selector: str) -> str:
    """Anchor a normalized selector to the current context node.

    ``//x`` becomes ``.//x``; ``.``-prefixed and rooted forms are unchanged.
    """
    selector = selector.strip()
    if not selector:
        return selector
    if selector.startswith("//"):
        return f".{selector}"
    if selector.startswith((".", "/")):
        return selector
    return f".//{selector}"


def resolve_url(href: str, base_url: str) -> str:
    """Make *href* absolute against *base_url*.

    Protocol-relative links are assumed to be https.
    """
    if href.startswith(("http://", "https://")):
        return href
    if href.startswith("//"):
        return f"https:{href}"
    base = base_url.rstrip("/")
    if href.startswith("/"):
        return f"{base}{href}"
    return f"{base}/{href}"


def origin_of(url: str, fallback: str) -> str:
    """Return ``scheme://host`` of *url*, or *fallback* without trailing slash."""
    parts = urlsplit(url)
    host = parts.hostname
    if parts.scheme and host:
        if ":" in host:
            # IPv6 literal
            host = f"[{host}]"
        return f"{parts.scheme}://{host}"
    return fallback.rstrip("/")


def parse_html(markup: str) -> html.HtmlElement | None:
    """Parse an HTML document.

    Returns ``None`` (and logs a warning) when the markup cannot be turned
    into a tree at all, e.g. an empty body.
    """
    if not markup or not markup.strip():
        log.warning("html_parse_failed", reason="empty document")
        return None
    try:
        return html.document_fromstring(markup)
    except ValueError:
        # str input carrying an XML encoding declaration
        try:
            return html.document_fromstring(markup.encode("utf-8"))
        except (etree.ParserError, ValueError) as e:
            log.warning("html_parse_failed", reason=str(e))
            return None
    except etree.ParserError as e:
        log.warning("html_parse_failed", reason=str(e))
        return None


def evaluate(context: html.HtmlElement, selector: str) -> list[Node]:
    """Evaluate *selector* with *context* as the context node.

    Raises ``lxml.etree.XPathError`` for expressions lxml cannot compile
    or evaluate.  Scalar results (numbers, booleans) yield an empty list.
    """
    result = context.xpath(selector)
    if isinstance(result, list):
        return result
    if isinstance(result, str):
        return [result]
    return []


def evaluate_or_empty(context: html.HtmlElement, selector: str) -> list[Node]:
    """Like :func:`evaluate` but swallows evaluation errors."""
    try:
        return evaluate(context, selector)
    except etree.XPathError as e:
        log.debug("selector_evaluation_failed", selector=selector, error=str(e))
        return []


def node_text(node: Node) -> str:
    """Trimmed text content of an element, or the value of a string result."""
    if isinstance(node, str):
        return node.strip()
    if isinstance(node, html.HtmlElement):
        return node.text_content().strip()
    return "".join(node.itertext()).strip()


def node_attr(node: Node, *attrs: str) -> str:
    """First non-empty attribute among *attrs*.

    A string result (``@href``, ``text()``) is already the value and is
    returned as is.
    """
    if isinstance(node, str):
        return node.strip()
    for attr in attrs:
        val = node.get(attr)
        if val and val.strip():
            return val.strip()
    return ""
