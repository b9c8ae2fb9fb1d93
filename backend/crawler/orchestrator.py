"""
Crawl orchestrator: fetch page 1, read the page count, then fetch, extract
and merge every page into one deduplicated, discovery-ordered result.

Failure semantics:
- Page 1 fetch failure is fatal (FetchError is raised)
- Any other failure degrades to "this page contributes zero jobs"
- Page count 0 (missing/non-numeric marker) returns an empty result

Page 1's document is held as a cache-of-one and reused in the loop, so page 1
is only ever requested once.

Pages 2..N are fetched one at a time by default. With max_concurrency > 1
they are fetched through a bounded pool, but extraction and merging still
run in ascending page order so the result is identical to a sequential crawl.
"""

import asyncio
import logging
from typing import AsyncIterator, Optional, Protocol, Sequence

from .config import DEFAULT_MARKERS, DEFAULT_SEARCH_BASE_URL, SiteMarkers
from .dedup import DedupIndex
from .enums import CrawlEventType
from .errors import FetchError
from .events import CrawlEvent, EventSink
from .fetcher import Document, FetchedPage, FetchFailure, FetchOutcome, PageFetcher
from .job_extractor import extract_jobs
from .models import CrawlResult, CrawlTarget, JobRecord, PageResult, SearchQuery
from .pagination import page_count as read_page_count
from .pagination import read_max_page_marker
from .url_builder import build_page_url, build_search_url, iter_page_targets

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    """Anything that can turn a URL into a FetchOutcome (PageFetcher, test fakes)."""

    async def fetch(self, url: str) -> FetchOutcome:
        ...


class CrawlOrchestrator:
    """
    Drives one crawl per crawl() call.

    The orchestrator itself is stateless between calls: the dedup index and
    the result are created inside crawl() and owned by that invocation, so
    one instance can serve concurrent requests.

    Example:
        async with PageFetcher() as fetcher:
            orchestrator = CrawlOrchestrator(fetcher)
            result = await orchestrator.crawl(SearchQuery("golang"))
            print(result.total_jobs)
    """

    def __init__(
        self,
        fetcher: Fetcher,
        *,
        base_url: str = DEFAULT_SEARCH_BASE_URL,
        default_intern_code: int = 1,
        max_concurrency: int = 1,
        markers: SiteMarkers = DEFAULT_MARKERS,
    ):
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be >= 1")
        self.fetcher = fetcher
        self.base_url = base_url
        self.default_intern_code = default_intern_code
        self.max_concurrency = max_concurrency
        self.markers = markers

    async def crawl(self, query: SearchQuery, sink: Optional[EventSink] = None) -> CrawlResult:
        """
        Crawl every results page of a search.

        Args:
            query: Search term, filter codes and intern flag
            sink: Optional event sink (e.g. CrawlLogContext, EventCollector)

        Returns:
            CrawlResult with jobs ordered by page, then document order

        Raises:
            ConfigError: If the search URL cannot be built
            FetchError: If page 1 cannot be fetched or parsed
        """
        # Step 1: Resolve filter codes and build the canonical URL
        filter_codes = query.effective_filter_codes(self.default_intern_code)
        canonical_url = build_search_url(query.term, filter_codes, self.base_url, self.markers)
        self._emit(sink, CrawlEvent(
            CrawlEventType.SEARCH_URL_BUILT,
            url=canonical_url,
            details={"term": query.term, "filter_codes": list(filter_codes), "is_intern": query.is_intern},
        ))

        # Step 2: Page 1 is load-bearing
        first_target = CrawlTarget(url=build_page_url(canonical_url, 1, self.markers), page_number=1)
        first = await self.fetcher.fetch(first_target.url)
        if isinstance(first, FetchFailure):
            self._emit_fetch_failed(sink, first_target, first)
            raise FetchError(first_target.url, 1, first.error)
        self._emit_fetched(sink, first_target, first)

        # Step 3: Page count is read once, from page 1 only
        raw_marker = read_max_page_marker(first.document, self.markers)
        total_pages = read_page_count(first.document, self.markers)
        self._emit(sink, CrawlEvent(
            CrawlEventType.PAGINATION_READ,
            page_number=1,
            url=first_target.url,
            details={"page_count": total_pages, "raw": raw_marker, "marker_found": raw_marker is not None},
        ))

        result = CrawlResult(page_count=total_pages, pagination_found=raw_marker is not None)
        if total_pages == 0:
            self._emit_finished(sink, result)
            return result

        # Step 4: Walk pages in ascending order, merging into one dedup index
        index = DedupIndex()
        self._merge_page(sink, result, index, first_target, first.document)

        remaining = list(iter_page_targets(canonical_url, total_pages, start=2, markers=self.markers))
        async for target, outcome in self._fetch_in_order(remaining):
            if isinstance(outcome, FetchFailure):
                self._emit_fetch_failed(sink, target, outcome)
                result.pages.append(PageResult(
                    page_number=target.page_number,
                    url=target.url,
                    fetch_failed=True,
                    error=outcome.reason,
                ))
                continue

            self._emit_fetched(sink, target, outcome)
            self._merge_page(sink, result, index, target, outcome.document)

        # Step 5
        self._emit_finished(sink, result)
        return result

    async def _fetch_in_order(
        self,
        targets: Sequence[CrawlTarget],
    ) -> AsyncIterator[tuple[CrawlTarget, FetchOutcome]]:
        """Yield (target, outcome) in ascending page order."""
        if self.max_concurrency <= 1:
            for target in targets:
                yield target, await self.fetcher.fetch(target.url)
            return

        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def _bounded(target: CrawlTarget) -> FetchOutcome:
            async with semaphore:
                return await self.fetcher.fetch(target.url)

        outcomes = await asyncio.gather(*(_bounded(target) for target in targets))
        for target, outcome in zip(targets, outcomes):
            yield target, outcome

    def _merge_page(
        self,
        sink: Optional[EventSink],
        result: CrawlResult,
        index: DedupIndex,
        target: CrawlTarget,
        document: Document,
    ) -> PageResult:
        """Extract one page and append its unseen, non-empty links to result."""
        records = extract_jobs(document, self.markers, url=target.url)
        if not records:
            self._emit(sink, CrawlEvent(CrawlEventType.NO_CARDS_MATCHED, target.page_number, target.url))

        added: list[JobRecord] = []
        for record in records:
            if index.admit(record.link):
                result.jobs.append(record)
                added.append(record)

        page = PageResult(
            page_number=target.page_number,
            url=target.url,
            matched_count=len(records),
            added_count=len(added),
            jobs=added,
        )
        result.pages.append(page)

        self._emit(sink, CrawlEvent(
            CrawlEventType.PAGE_EXTRACTED,
            page_number=target.page_number,
            url=target.url,
            details={"matched": page.matched_count, "added": page.added_count, "total": result.total_jobs},
        ))
        return page

    # ------------------------------------------------------------------ #
    #  Event helpers
    # ------------------------------------------------------------------ #
    def _emit(self, sink: Optional[EventSink], event: CrawlEvent) -> None:
        if sink is None:
            return
        try:
            sink(event)
        except Exception:
            # Sinks observe the crawl; a broken sink must not change its outcome
            logger.exception(f"Crawl event sink failed on {event.type.value}")

    def _emit_fetched(self, sink: Optional[EventSink], target: CrawlTarget, page: FetchedPage) -> None:
        self._emit(sink, CrawlEvent(
            CrawlEventType.PAGE_FETCHED,
            page_number=target.page_number,
            url=target.url,
            details={"status_code": page.status_code, "elapsed": page.elapsed},
        ))

    def _emit_fetch_failed(
        self,
        sink: Optional[EventSink],
        target: CrawlTarget,
        failure: FetchFailure,
    ) -> None:
        # Only page 1 is load-bearing
        self._emit(sink, CrawlEvent(
            CrawlEventType.PAGE_FETCH_FAILED,
            page_number=target.page_number,
            url=target.url,
            details={"error": failure.reason, "fatal": target.is_first_page, "status_code": failure.status_code},
        ))

    def _emit_finished(self, sink: Optional[EventSink], result: CrawlResult) -> None:
        self._emit(sink, CrawlEvent(
            CrawlEventType.CRAWL_FINISHED,
            details={
                "total": result.total_jobs,
                "page_count": result.page_count,
                "failed_pages": result.failed_pages,
            },
        ))


async def crawl(
    term: str,
    filter_codes: Sequence[int] = (),
    is_intern: bool = False,
    *,
    fetcher: Optional[Fetcher] = None,
    sink: Optional[EventSink] = None,
    settings=None,
) -> CrawlResult:
    """
    One-shot crawl using application settings.

    Opens (and closes) its own PageFetcher unless one is passed in.

    Args:
        term: Search term
        filter_codes: Explicit filter codes (win over is_intern)
        is_intern: Legacy flag implying the default intern filter code
        fetcher: Optional fetcher to reuse
        sink: Optional event sink
        settings: Settings override (defaults to config.settings.settings)
    """
    if settings is None:
        from config.settings import settings

    query = SearchQuery(term=term, filter_codes=tuple(filter_codes or ()), is_intern=is_intern)

    async def _run(active: Fetcher) -> CrawlResult:
        orchestrator = CrawlOrchestrator(
            active,
            base_url=settings.SEARCH_BASE_URL,
            default_intern_code=settings.DEFAULT_INTERN_FILTER_CODE,
            max_concurrency=settings.MAX_CONCURRENT_FETCHES,
        )
        return await orchestrator.crawl(query, sink=sink)

    if fetcher is not None:
        return await _run(fetcher)

    async with PageFetcher(timeout=settings.FETCH_TIMEOUT_SECONDS) as owned:
        return await _run(owned)


def crawl_sync(term: str, filter_codes: Sequence[int] = (), is_intern: bool = False, **kwargs) -> CrawlResult:
    """
    Synchronous wrapper for crawl (for scripts and non-async contexts).

    Example:
        >>> result = crawl_sync("golang")
        >>> print(f"Crawled {result.total_jobs} jobs")
    """
    return asyncio.run(crawl(term, filter_codes, is_intern, **kwargs))
