# === FILE: text_scout/parser/html_parser.py ===
"""HTML parsing for TextScout.

:func:`parse_html` turns a response body into a :class:`ParsedDocument`:

* links: raw ``href`` values of every ``<a href="…">``, in document order.
* text: the main text of the page, chosen by :func:`select_main_text`.
* base_href: value of ``<base href>`` if the document declares one.

The main-text heuristic is a fixed rule set rather than a traversal-order
accident:

1. The content root is the first element matching ``content_selector``
   (``main`` by default). When nothing matches the root falls back to
   ``<body>`` (or the whole document), unless ``require_selector`` is set,
   in which case the page has no main text.
2. Text inside any tag of :data:`EXCLUDED_TAGS` is ignored.
3. Remaining text nodes are grouped by their nearest ancestor in
   :data:`BLOCK_TAGS`; words inside a block are joined by a space, blocks by
   a newline.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Optional, Union

from bs4 import BeautifulSoup
from bs4.element import (
    Comment,
    Declaration,
    Doctype,
    NavigableString,
    ProcessingInstruction,
    Tag,
)

__all__: Sequence[str] = (
    "ParsedDocument",
    "parse_html",
    "select_main_text",
    "EXCLUDED_TAGS",
    "BLOCK_TAGS",
)

EXCLUDED_TAGS = frozenset(
    {"script", "style", "noscript", "template", "nav", "iframe", "svg", "head"}
)

BLOCK_TAGS = frozenset(
    {
        "address", "article", "aside", "blockquote", "body", "caption", "dd",
        "details", "div", "dl", "dt", "fieldset", "figcaption", "figure",
        "footer", "form", "h1", "h2", "h3", "h4", "h5", "h6", "header", "hr",
        "li", "main", "ol", "p", "pre", "section", "summary", "table", "td",
        "th", "tr", "ul",
    }
)

_SKIPPED_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)


@dataclass(slots=True)
class ParsedDocument:
    """Lightweight representation of an HTML page."""

    links: list[str] = field(default_factory=list)
    text: str = ""
    title: str = ""
    base_href: Optional[str] = None


def _block_of(node: NavigableString, root: Tag) -> Optional[Tag]:
    """Nearest block ancestor of *node* below *root*, None if the node is excluded."""
    block: Optional[Tag] = None
    for parent in node.parents:
        if parent.name in EXCLUDED_TAGS:
            return None
        if block is None and parent.name in BLOCK_TAGS:
            block = parent
        if parent is root:
            break
    return block or root


def select_main_text(
    soup: BeautifulSoup,
    content_selector: Optional[str] = "main",
    *,
    require_selector: bool = False,
) -> str:
    """Apply the main-text rules to an already parsed document."""
    root: Optional[Tag] = soup.select_one(content_selector) if content_selector else None
    if root is None:
        if require_selector and content_selector:
            return ""
        root = soup.body or soup

    blocks: list[list[str]] = []
    current: Optional[Tag] = None
    for node in root.descendants:
        if not isinstance(node, NavigableString) or isinstance(node, _SKIPPED_STRINGS):
            continue
        words = " ".join(node.split())
        if not words:
            continue
        block = _block_of(node, root)
        if block is None:
            continue
        if block is not current or not blocks:
            blocks.append([])
            current = block
        blocks[-1].append(words)
    return "\n".join(" ".join(parts) for parts in blocks)


def parse_html(
    body: Union[bytes, str],
    *,
    content_selector: Optional[str] = "main",
    require_selector: bool = False,
    encoding: Optional[str] = None,
) -> ParsedDocument:
    """Parse raw HTML (bytes or str) into a :class:`ParsedDocument`.

    Parameters
    ----------
    body
        Response body. Bytes are decoded by BeautifulSoup, using *encoding*
        as a hint when the server declared one.
    content_selector
        CSS selector of the main content region, ``None`` for the whole body.
    require_selector
        Return no text when *content_selector* matches nothing.
    """
    if isinstance(body, bytes):
        soup = BeautifulSoup(body, "html.parser", from_encoding=encoding)
    else:
        soup = BeautifulSoup(body, "html.parser")

    title_tag = soup.find("title")
    title = title_tag.get_text(strip=True) if title_tag else ""

    base_tag = soup.find("base", href=True)
    base_href = base_tag.get("href") if isinstance(base_tag, Tag) else None

    links: list[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href = tag.get("href")
        if isinstance(href, str) and href.strip():
            links.append(href.strip())

    text = select_main_text(soup, content_selector, require_selector=require_selector)
    return ParsedDocument(
        links=links,
        text=text,
        title=title,
        base_href=base_href if isinstance(base_href, str) else None,
    )
