"""
Search and page URL construction.

Canonical search URL:
    <base>/<percent-encoded term>;kw[?et=c1,c2,...]

Page URL:
    page 1  -> canonical URL with any pagination parameter removed
    page N  -> canonical URL with pn=N (replacing any existing pn)

Page URLs are built by editing the raw query string so every other parameter
is kept byte-for-byte. That makes build_page_url idempotent and guarantees
page 1 is exactly the canonical URL.
"""

import logging
from typing import Iterator, Sequence
from urllib.parse import quote, unquote_plus, urlencode, urlsplit, urlunsplit

from .config import DEFAULT_MARKERS, DEFAULT_SEARCH_BASE_URL, SiteMarkers
from .errors import ConfigError
from .models import CrawlTarget

logger = logging.getLogger(__name__)


def _validate_base(url: str) -> tuple:
    """Split an absolute http(s) URL or raise ConfigError."""
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise ConfigError(f"Malformed URL {url!r}: {e}") from e

    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigError(f"Malformed URL {url!r}: expected absolute http(s) URL")
    return parts


def build_search_url(
    term: str,
    filter_codes: Sequence[int] = (),
    base_url: str = DEFAULT_SEARCH_BASE_URL,
    markers: SiteMarkers = DEFAULT_MARKERS,
) -> str:
    """
    Build the canonical (page 1) search URL.

    Args:
        term: Free-text search term, percent-encoded into the path segment
        filter_codes: Filter codes, serialized as a single comma-joined param
        base_url: Absolute search path base (no trailing slash needed)
        markers: Site URL conventions

    Returns:
        Canonical search URL

    Raises:
        ConfigError: If base_url is not an absolute http(s) URL, carries a
            query or fragment, or a filter code is not an integer

    Example:
        >>> build_search_url("golang dev", [1, 3])
        'https://www.pracuj.pl/praca/golang%20dev;kw?et=1,3'
    """
    parts = _validate_base(base_url)
    if parts.query or parts.fragment:
        raise ConfigError(f"Search base URL {base_url!r} must not carry a query or fragment")

    codes = list(filter_codes or ())
    for code in codes:
        if isinstance(code, bool) or not isinstance(code, int):
            raise ConfigError(f"Filter codes must be integers, got {code!r}")

    path = f"{parts.path.rstrip('/')}/{quote(term or '', safe='')}{markers.keyword_suffix}"

    query = ""
    if codes:
        query = urlencode({markers.filter_param: ",".join(str(c) for c in codes)}, safe=",")

    url = urlunsplit((parts.scheme, parts.netloc, path, query, ""))
    logger.debug(f"build_search_url: term={term!r} codes={codes} -> {url}")
    return url


def build_page_url(canonical_url: str, page_number: int, markers: SiteMarkers = DEFAULT_MARKERS) -> str:
    """
    Derive the URL of results page N from the canonical search URL.

    Args:
        canonical_url: Page 1 URL (a URL that already carries pn is accepted)
        page_number: 1-indexed page number

    Returns:
        Page URL; for page 1 the pagination parameter is removed, for page N>1
        it is set to N in place (or appended). Other parameters are untouched.

    Raises:
        ConfigError: If canonical_url is malformed or page_number < 1
    """
    if isinstance(page_number, bool) or not isinstance(page_number, int) or page_number < 1:
        raise ConfigError(f"Page number must be an integer >= 1, got {page_number!r}")

    parts = _validate_base(canonical_url)
    page_param = markers.page_param

    segments = [s for s in parts.query.split("&") if s] if parts.query else []
    kept: list[str] = []
    inserted = False

    for segment in segments:
        key = unquote_plus(segment.split("=", 1)[0])
        if key != page_param:
            kept.append(segment)
            continue
        # Replace the first pagination param in place, drop any duplicates
        if page_number > 1 and not inserted:
            kept.append(f"{page_param}={page_number}")
            inserted = True

    if page_number > 1 and not inserted:
        kept.append(f"{page_param}={page_number}")

    return urlunsplit((parts.scheme, parts.netloc, parts.path, "&".join(kept), parts.fragment))


def iter_page_targets(
    canonical_url: str,
    page_count: int,
    start: int = 1,
    markers: SiteMarkers = DEFAULT_MARKERS,
) -> Iterator[CrawlTarget]:
    """
    Yield CrawlTargets for pages start..page_count in ascending order.

    Example:
        >>> [t.page_number for t in iter_page_targets(url, 3)]
        [1, 2, 3]
    """
    for page_number in range(start, page_count + 1):
        yield CrawlTarget(url=build_page_url(canonical_url, page_number, markers), page_number=page_number)
