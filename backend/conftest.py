"""
Pytest configuration and fixtures for testing.

No test touches the network:
- results_page builds results-page HTML in the live site's markup
- fake_fetcher serves those pages by page number (pn query param)
- HTTP-level fetcher tests use httpx.MockTransport directly

Run:
    cd backend
    python3 -m pytest -v
"""
import html
from typing import Optional, Union
from urllib.parse import parse_qs, urlsplit

import httpx
import pytest

from crawler.fetcher import FetchedPage, FetchFailure, parse_document


def make_results_page(
    jobs: list[tuple[str, Optional[str]]],
    max_page: Union[int, str, None] = 1,
) -> str:
    """
    Build a results page in the site's markup.

    Args:
        jobs: (title, link) pairs; link None omits the anchor entirely
        max_page: Pagination marker text; None omits the marker

    Example:
        make_results_page([("Go Developer", "https://example.com/1")], max_page=3)
    """
    cards = []
    for title, link in jobs:
        anchor = ""
        if link is not None:
            anchor = f'<a class="tiles_cnb3rfy core_n194fgoq" href="{html.escape(link)}">Zobacz</a>'
        cards.append(
            '<div class="tiles_b18pwp01 core_po9665q">'
            f'<h2 class="tiles_h1p4o5k6">  {html.escape(title)}\n</h2>{anchor}'
            '</div>'
        )

    marker = ""
    if max_page is not None:
        marker = f'<span data-test="top-pagination-max-page-number">{max_page}</span>'

    return (
        "<!DOCTYPE html><html><head><title>Oferty pracy</title></head><body>"
        f'<nav>{marker}</nav><section data-test="section-offers">{"".join(cards)}</section>'
        "</body></html>"
    )


def page_number_of(url: str, page_param: str = "pn") -> int:
    """Page number encoded in a page URL (no pn means page 1)."""
    values = parse_qs(urlsplit(url).query).get(page_param)
    return int(values[0]) if values else 1


class FakeFetcher:
    """
    Fetcher double serving canned HTML per page number.

    pages maps page number -> HTML string, or an exception to simulate a
    transport failure. Pages missing from the map fail with ConnectError.
    """

    def __init__(self, pages: dict[int, Union[str, BaseException]], status_code: int = 200):
        self.pages = pages
        self.status_code = status_code
        self.calls: list[str] = []

    async def fetch(self, url: str):
        self.calls.append(url)
        content = self.pages.get(page_number_of(url))

        if content is None:
            return FetchFailure(url=url, error=httpx.ConnectError(f"no page for {url}"))
        if isinstance(content, BaseException):
            return FetchFailure(url=url, error=content)
        return FetchedPage(url=url, status_code=self.status_code, document=parse_document(content), elapsed=0.0)

    @property
    def requested_pages(self) -> list[int]:
        return [page_number_of(url) for url in self.calls]


@pytest.fixture
def results_page():
    """Factory fixture for results-page HTML."""
    return make_results_page


@pytest.fixture
def fake_fetcher():
    """
    Factory fixture for FakeFetcher.

    Usage:
        def test_two_pages(fake_fetcher, results_page):
            fetcher = fake_fetcher({1: results_page([...], max_page=2), 2: ...})
    """
    return FakeFetcher
