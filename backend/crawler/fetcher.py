"""
Page fetcher: one GET, one parsed document.

fetch() never raises for transport or parse problems. It returns either a
FetchedPage (parsed document) or a FetchFailure (the error as a value), and
the orchestrator decides whether that is fatal (page 1) or skippable.

HTTP status >= 400 does not abort: the body is still parsed and only a
warning is logged.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional, Union

import httpx
from bs4 import BeautifulSoup, ParserRejectedMarkup

logger = logging.getLogger(__name__)

# Document type handed to the pagination inspector and the job extractor
Document = BeautifulSoup

HTML_PARSER = "html.parser"


def parse_document(html: str) -> Document:
    """
    Parse an HTML body into a queryable document.

    Raises:
        ParserRejectedMarkup: If the parser refuses the markup
    """
    return BeautifulSoup(html, HTML_PARSER)


@dataclass
class FetchedPage:
    """A successfully parsed response (status may still be >= 400)."""
    url: str
    status_code: int
    document: Document
    elapsed: float  # seconds

    @property
    def is_error_status(self) -> bool:
        return self.status_code >= 400


@dataclass
class FetchFailure:
    """Transport or parse failure for one URL."""
    url: str
    error: BaseException
    elapsed: float = 0.0
    status_code: Optional[int] = None

    @property
    def reason(self) -> str:
        return f"{type(self.error).__name__}: {self.error}"


FetchOutcome = Union[FetchedPage, FetchFailure]


class PageFetcher:
    """
    GET + parse with httpx.

    Usage:
        async with PageFetcher(timeout=None) as fetcher:
            outcome = await fetcher.fetch(url)
            if isinstance(outcome, FetchFailure):
                ...

    No custom headers are sent and no response size limit is applied.
    Redirects are followed.
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None, timeout: Optional[float] = None):
        """
        Args:
            client: Existing client to reuse (not closed by this fetcher)
            timeout: Per-request timeout in seconds; None disables the timeout
        """
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
        )

    async def __aenter__(self) -> "PageFetcher":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def fetch(self, url: str) -> FetchOutcome:
        """
        Fetch and parse one page.

        Args:
            url: Absolute URL

        Returns:
            FetchedPage on success, FetchFailure on transport/parse error
        """
        start = time.perf_counter()

        try:
            response = await self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            elapsed = time.perf_counter() - start
            logger.error(f"GET {url} failed after {elapsed:.3f}s: {e!r}")
            return FetchFailure(url=url, error=e, elapsed=elapsed)

        if response.status_code >= 400:
            logger.warning(f"HTTP {response.status_code} for {url}")

        try:
            document = parse_document(response.text)
        except (ParserRejectedMarkup, ValueError) as e:
            elapsed = time.perf_counter() - start
            logger.error(f"Parse failed for {url} (HTTP {response.status_code}): {e!r}")
            return FetchFailure(url=url, error=e, elapsed=elapsed, status_code=response.status_code)

        elapsed = time.perf_counter() - start
        logger.info(f"Fetched {url} in {elapsed:.3f}s (HTTP {response.status_code})")
        return FetchedPage(url=url, status_code=response.status_code, document=document, elapsed=elapsed)
