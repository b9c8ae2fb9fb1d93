"""
Crawl logging utilities with Protocol + Mixin pattern.

Provides trait-like logging functionality for the crawler and the API layer.
Each context defines its component and context format, the mixin provides
consistent log_info/log_warning/log_error methods.

Usage:
    class CrawlLogContext(ComponentLoggerMixin):
        component = LogComponent.CRAWLER

        def __init__(self, query: str):
            self.query = query

        def _log_context(self) -> str:
            return f"query={self.query}"

    ctx = CrawlLogContext("golang")
    ctx.log_info("Processing")  # [Crawler:query=golang] Processing

CrawlLogContext is also a crawl event sink: pass it to the orchestrator and
each CrawlEvent becomes one prefixed log line.
"""

import logging
import uuid
from enum import Enum
from typing import Protocol

from crawler.enums import CrawlEventType
from crawler.events import CrawlEvent

logger = logging.getLogger("crawler.progress")

LOG_FORMAT = "%(asctime)s %(levelname)s %(filename)s:%(lineno)d %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once (timestamp + file:line in every line)."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger().setLevel(level.upper())


class LogComponent(Enum):
    """Component enum for log prefix identification."""
    API = "JobsAPI"
    CRAWLER = "Crawler"
    EXPORT = "Export"


class ComponentLoggerProtocol(Protocol):
    """
    Protocol defining what classes using ComponentLoggerMixin must provide.

    This enables type checking - mypy will error if a class uses the mixin
    but doesn't define component or _log_context().
    """
    component: LogComponent

    def _log_context(self) -> str:
        """Return context string like 'query=golang' or 'req=ab12cd34'."""
        ...


class ComponentLoggerMixin:
    """
    Mixin providing log_info/log_warning/log_error methods.

    Log format: [Component:context] message

    Examples:
    - [JobsAPI:req=ab12cd34] Request: query='golang' isintern=False et=[]
    - [Crawler:query=golang] Page 2: matched=20 added=19 total=39
    """

    def _log_prefix(self: ComponentLoggerProtocol) -> str:
        """Build log prefix from component and context."""
        return f"[{self.component.value}:{self._log_context()}]"

    def log_info(self: ComponentLoggerProtocol, message: str) -> None:
        """Log info message with component prefix."""
        logger.info(f"{self._log_prefix()} {message}")

    def log_warning(self: ComponentLoggerProtocol, message: str) -> None:
        """Log warning message with component prefix."""
        logger.warning(f"{self._log_prefix()} {message}")

    def log_error(self: ComponentLoggerProtocol, message: str) -> None:
        """Log error message with component prefix."""
        logger.error(f"{self._log_prefix()} {message}")

    def log_exception(self: ComponentLoggerProtocol, message: str) -> None:
        """Log error message with component prefix and current traceback."""
        logger.exception(f"{self._log_prefix()} {message}")


# =============================================================================
# Concrete Context Classes
# =============================================================================

class RequestLogContext(ComponentLoggerMixin):
    """
    Logging context for one /jobs request.

    Log format: [JobsAPI:req=X] message
    """
    component = LogComponent.API

    def __init__(self, request_id: str | None = None):
        self.request_id = request_id or uuid.uuid4().hex[:8]

    def _log_context(self) -> str:
        return f"req={self.request_id}"


class CrawlLogContext(ComponentLoggerMixin):
    """
    Logging context for one crawl, usable as a crawl event sink.

    Log format: [Crawler:query=X] message
    With a request id: [Crawler:req=Y:query=X] message
    """
    component = LogComponent.CRAWLER

    def __init__(self, query: str, request_id: str | None = None):
        self.query = query
        self.request_id = request_id

    def _log_context(self) -> str:
        if self.request_id:
            return f"req={self.request_id}:query={self.query}"
        return f"query={self.query}"

    def __call__(self, event: CrawlEvent) -> None:
        message = format_event(event)
        if event.type == CrawlEventType.PAGE_FETCH_FAILED and event.details.get("fatal"):
            self.log_error(message)
        elif event.type.is_warning:
            self.log_warning(message)
        else:
            self.log_info(message)


def format_event(event: CrawlEvent) -> str:
    """Render a CrawlEvent as a single human-readable log message."""
    d = event.details

    if event.type == CrawlEventType.SEARCH_URL_BUILT:
        return f"Search URL: {event.url} (et={d.get('filter_codes')})"
    if event.type == CrawlEventType.PAGE_FETCHED:
        return (
            f"Fetched page {event.page_number} in {d.get('elapsed', 0.0):.3f}s "
            f"(HTTP {d.get('status_code')}): {event.url}"
        )
    if event.type == CrawlEventType.PAGE_FETCH_FAILED:
        suffix = "aborting crawl" if d.get("fatal") else "skipping page"
        return f"Fetch failed for page {event.page_number}, {suffix}: {event.url} ({d.get('error')})"
    if event.type == CrawlEventType.PAGINATION_READ:
        return f"Total pages: {d.get('page_count')} (marker found={d.get('marker_found')})"
    if event.type == CrawlEventType.NO_CARDS_MATCHED:
        return f"Selectors matched 0 elements on page {event.page_number}: {event.url}"
    if event.type == CrawlEventType.PAGE_EXTRACTED:
        return (
            f"Page {event.page_number}: matched={d.get('matched')} "
            f"added={d.get('added')} total={d.get('total')}"
        )
    if event.type == CrawlEventType.CRAWL_FINISHED:
        return (
            f"Extraction finished. Total jobs: {d.get('total')} "
            f"(pages={d.get('page_count')}, failed={d.get('failed_pages')})"
        )
    return f"{event.type.value}: {d}"
