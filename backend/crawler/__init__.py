"""
Job listing crawler package

Crawls a paginated job search on one site and returns the deduplicated
union of (title, link) records across all result pages.

Pipeline (one crawl):
- url_builder: canonical search URL and per-page URLs
- fetcher: GET + parse into a document (failures returned as values)
- pagination: total page count from page 1
- job_extractor: job cards -> JobRecord
- dedup: per-crawl link index
- orchestrator: drives the loop, emits CrawlEvents
"""

from .config import DEFAULT_MARKERS, DEFAULT_SEARCH_BASE_URL, SiteMarkers, TitleFilters
from .dedup import DedupIndex
from .enums import CrawlEventType
from .errors import ConfigError, CrawlError, FetchError
from .events import CrawlEvent, EventCollector
from .fetcher import FetchedPage, FetchFailure, PageFetcher, parse_document
from .models import CrawlResult, CrawlTarget, JobRecord, PageResult, SearchQuery
from .orchestrator import CrawlOrchestrator, crawl, crawl_sync

__all__ = [
    'DEFAULT_MARKERS',
    'DEFAULT_SEARCH_BASE_URL',
    'SiteMarkers',
    'TitleFilters',
    'DedupIndex',
    'CrawlEventType',
    'ConfigError',
    'CrawlError',
    'FetchError',
    'CrawlEvent',
    'EventCollector',
    'FetchedPage',
    'FetchFailure',
    'PageFetcher',
    'parse_document',
    'CrawlResult',
    'CrawlTarget',
    'JobRecord',
    'PageResult',
    'SearchQuery',
    'CrawlOrchestrator',
    'crawl',
    'crawl_sync',
]
