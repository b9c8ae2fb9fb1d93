"""
Typed structures for one crawl invocation.

Everything here is request-scoped: built when a crawl starts and discarded
once the response is produced.
"""

from dataclasses import dataclass, field, asdict
from typing import Optional

from .config import TitleFilters


@dataclass(frozen=True)
class JobRecord:
    """
    One job listing extracted from a results page.

    `link` is the dedup key (raw href, no normalization). `title` is
    whitespace-trimmed and may be empty.
    """
    title: str
    link: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class SearchQuery:
    """
    A search request.

    `is_intern` is a legacy convenience: when no explicit filter codes are
    given it implies the default intern filter code. Explicit codes win.
    """
    term: str
    filter_codes: tuple[int, ...] = ()
    is_intern: bool = False

    def effective_filter_codes(self, default_intern_code: int) -> tuple[int, ...]:
        """
        Resolve the filter codes actually sent to the site.

        Example:
            >>> SearchQuery("intern", is_intern=True).effective_filter_codes(1)
            (1,)
            >>> SearchQuery("intern", (1, 3), is_intern=True).effective_filter_codes(1)
            (1, 3)
        """
        if not self.filter_codes and self.is_intern:
            return (default_intern_code,)
        return tuple(self.filter_codes)


@dataclass(frozen=True)
class CrawlTarget:
    """Absolute URL of one results page plus its page number."""
    url: str
    page_number: int

    @property
    def is_first_page(self) -> bool:
        return self.page_number == 1


@dataclass
class PageResult:
    """
    Outcome of processing one results page (internal, not persisted).

    matched_count counts job cards found; added_count counts records that
    made it into the result after dropping empty and already-seen links.
    """
    page_number: int
    url: str
    matched_count: int = 0
    added_count: int = 0
    jobs: list[JobRecord] = field(default_factory=list)
    fetch_failed: bool = False
    error: Optional[str] = None


@dataclass
class CrawlResult:
    """
    Aggregated jobs of one crawl, ordered by first discovery.

    A returned CrawlResult is always a non-fatal outcome. Use
    `pagination_found` and `failed_pages` to tell a legitimately empty
    search from a crawl that pressed on past failures.
    """
    jobs: list[JobRecord] = field(default_factory=list)
    page_count: int = 0
    pagination_found: bool = False
    pages: list[PageResult] = field(default_factory=list)

    @property
    def total_jobs(self) -> int:
        return len(self.jobs)

    @property
    def failed_pages(self) -> list[int]:
        return [page.page_number for page in self.pages if page.fetch_failed]

    @property
    def is_partial(self) -> bool:
        return bool(self.failed_pages)

    def to_list(self, title_filters: Optional[TitleFilters] = None) -> list[dict]:
        """Serialize jobs in result order (the API response body), narrowed by title_filters when given."""
        jobs = self.jobs
        if title_filters is not None and not title_filters.is_empty:
            jobs = [job for job in jobs if title_filters.matches(job.title)]
        return [job.to_dict() for job in jobs]
