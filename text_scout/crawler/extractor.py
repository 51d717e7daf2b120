# text_scout/crawler/extractor.py
"""
Content extraction adapter: parse a fetched body, pick the main text and
return the page's outgoing links in normalized form.
"""
from __future__ import annotations

from typing import Callable, List, Optional, Set, Union

from text_scout.crawler.errors import InvalidURL, ParseFailure
from text_scout.crawler.models import PageResult
from text_scout.crawler.normalizer import normalize
from text_scout.logger import get_logger
from text_scout.parser.html_parser import ParsedDocument, parse_html

HTML_CONTENT_TYPES = frozenset({"text/html", "application/xhtml+xml"})

ParseFn = Callable[..., ParsedDocument]

_log = get_logger("extractor")


class ContentExtractor:
    """Wraps :func:`parse_html` with the crawler's content rules."""

    def __init__(
        self,
        content_selector: Optional[str] = "main",
        *,
        require_selector: bool = False,
        parse: ParseFn = parse_html,
    ) -> None:
        self.content_selector = content_selector
        self.require_selector = require_selector
        self._parse = parse

    def extract(
        self,
        body: Union[bytes, str],
        page_url: str,
        content_type: Optional[str] = None,
        encoding: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> PageResult:
        """Return the :class:`PageResult` for *body* fetched from *page_url*.

        Relative links resolve against *base_url* (the post-redirect URL) when
        given, otherwise against *page_url*; a document `<base href>` wins over both.

        Raises :class:`ParseFailure` for non-HTML content or when parsing fails.
        """
        if content_type and content_type.split(";", 1)[0].strip().lower() not in HTML_CONTENT_TYPES:
            raise ParseFailure(page_url, f"unsupported content type {content_type}")
        try:
            doc = self._parse(
                body,
                content_selector=self.content_selector,
                require_selector=self.require_selector,
                encoding=encoding,
            )
        except Exception as exc:
            raise ParseFailure(page_url, f"{type(exc).__name__}: {exc}") from exc

        base = base_url or page_url
        if doc.base_href:
            try:
                base = normalize(doc.base_href, base)
            except InvalidURL:
                _log.debug("Ignoring invalid <base href=%r> on %s", doc.base_href, page_url)

        links: List[str] = []
        seen: Set[str] = set()
        invalid = 0
        for href in doc.links:
            try:
                url = normalize(href, base)
            except InvalidURL as exc:
                invalid += 1
                _log.debug("Dropped link on %s: %s", page_url, exc)
                continue
            if url not in seen:
                seen.add(url)
                links.append(url)

        return PageResult(
            url=page_url, main_text=doc.text, links=links, invalid_links=invalid, title=doc.title
        )
