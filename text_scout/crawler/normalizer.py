# text_scout/crawler/normalizer.py
"""
URL canonicalisation used as the deduplication key of the crawler.

Rules, applied in order:

* relative references are resolved against ``base``;
* only ``http`` and ``https`` are accepted, a host is mandatory;
* scheme and host are lower-cased, default ports (80/443) are dropped;
* the fragment is removed;
* ``.`` and ``..`` path segments are collapsed, an empty path becomes ``/``,
  a trailing slash is otherwise kept as written;
* unsafe characters are percent-encoded and escapes upper-cased;
* query pieces (the ``&``-separated parts) are sorted as raw strings, so
  escapes in the query are never decoded and bare keys stay bare.

The result is stable under re-normalisation.
"""
from __future__ import annotations

import re
from typing import Dict, List, Optional
from urllib.parse import quote, urljoin, urlsplit, urlunsplit

from text_scout.crawler.errors import InvalidURL

__all__ = ("normalize", "same_host", "DEFAULT_PORTS")

DEFAULT_PORTS: Dict[str, int] = {"http": 80, "https": 443}

_PCT_RE = re.compile(r"%[0-9a-fA-F]{2}")
_PATH_SAFE = "/%:@!$&'()*+,;=~"
_QUERY_SAFE = _PATH_SAFE + "?"


def _remove_dot_segments(path: str) -> str:
    if not path:
        return "/"
    segments = path.split("/")
    output: List[str] = []
    for segment in segments[1:]:
        if segment == ".":
            continue
        if segment == "..":
            if output:
                output.pop()
            continue
        output.append(segment)
    result = "/" + "/".join(output)
    if segments[-1] in (".", "..") and not result.endswith("/"):
        result += "/"
    return result


def _encode(component: str, safe: str = _PATH_SAFE) -> str:
    quoted = quote(component, safe=safe)
    return _PCT_RE.sub(lambda m: m.group(0).upper(), quoted)


def _encode_query(query: str) -> str:
    # pieces are sorted as written, never decoded
    pieces = [_encode(piece, _QUERY_SAFE) for piece in query.split("&") if piece]
    return "&".join(sorted(pieces))


def normalize(raw: str, base: Optional[str] = None) -> str:
    """Return the canonical form of *raw*, resolved against *base* if given.

    Raises :class:`InvalidURL` for non-http(s) schemes and malformed input.
    """
    if not isinstance(raw, str):
        raise InvalidURL(repr(raw), "not a string")
    candidate = raw.strip()
    if not candidate:
        raise InvalidURL(raw, "empty URL")

    try:
        if base:
            candidate = urljoin(base, candidate)
        parts = urlsplit(candidate)
        port = parts.port
    except ValueError as exc:
        raise InvalidURL(raw, f"malformed URL ({exc})") from exc

    scheme = parts.scheme.lower()
    if scheme not in DEFAULT_PORTS:
        raise InvalidURL(raw, f"unsupported scheme {scheme or '(none)'}")

    host = parts.hostname
    if not host:
        raise InvalidURL(raw, "missing host")
    if any(ch.isspace() for ch in host) or "/" in host:
        raise InvalidURL(raw, "invalid host")
    if ":" in host:
        host = f"[{host}]"

    netloc = host
    if port is not None and port != DEFAULT_PORTS[scheme]:
        netloc = f"{host}:{port}"
    userinfo, sep, _ = parts.netloc.rpartition("@")
    if sep:
        netloc = f"{userinfo}@{netloc}"

    path = _encode(_remove_dot_segments(parts.path))
    query = _encode_query(parts.query)
    return urlunsplit((scheme, netloc, path, query, ""))


def same_host(left: str, right: str) -> bool:
    """True when both URLs point at the same host name (ports are ignored)."""
    return urlsplit(left).hostname == urlsplit(right).hostname
