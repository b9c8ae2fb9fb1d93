"""
Crawl error taxonomy.

Only two conditions ever propagate out of a crawl:
- ConfigError: the search/page URL cannot be constructed
- FetchError: the first results page could not be fetched or parsed

Every other failure (later pages, zero cards, missing pagination marker)
is absorbed by the orchestrator and shows up in the CrawlResult instead.
"""

from typing import Optional


class CrawlError(Exception):
    """Base exception for crawl failures."""


class ConfigError(CrawlError, ValueError):
    """Raised when a search or page URL cannot be constructed."""


class FetchError(CrawlError):
    """
    Raised when a load-bearing page (page 1) cannot be fetched or parsed.

    Attributes:
        url: URL that was requested
        page_number: Page the URL belongs to
        cause: Underlying transport/parse error, if any
    """

    def __init__(self, url: str, page_number: int, cause: Optional[BaseException] = None):
        self.url = url
        self.page_number = page_number
        self.cause = cause
        detail = f": {cause!r}" if cause is not None else ""
        super().__init__(f"Failed to fetch page {page_number} ({url}){detail}")
