"""
Crawl Enums

Event types emitted by the crawl orchestrator. Kept in a separate file to
avoid circular imports between events, models and the orchestrator.
"""

from enum import Enum


class CrawlEventType(str, Enum):
    """
    Progress events emitted while a crawl runs.

    Events are a side-channel: sinks observe them, they never gate the crawl.
    """
    SEARCH_URL_BUILT = "search_url_built"
    PAGE_FETCHED = "page_fetched"
    PAGE_FETCH_FAILED = "page_fetch_failed"
    PAGINATION_READ = "pagination_read"
    NO_CARDS_MATCHED = "no_cards_matched"
    PAGE_EXTRACTED = "page_extracted"
    CRAWL_FINISHED = "crawl_finished"

    @property
    def is_warning(self) -> bool:
        """True for events that signal degraded (but non-fatal) crawling."""
        return self in (CrawlEventType.PAGE_FETCH_FAILED, CrawlEventType.NO_CARDS_MATCHED)
