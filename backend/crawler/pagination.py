"""
Pagination inspector.

Reads the total page count from the results page's max-page marker. A
missing or non-numeric marker yields 0, which the orchestrator treats as
"no pages, stop" rather than an error.
"""

import logging
import re
from typing import Optional

from .config import DEFAULT_MARKERS, SiteMarkers
from .fetcher import Document

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"\d+")


def read_max_page_marker(document: Document, markers: SiteMarkers = DEFAULT_MARKERS) -> Optional[str]:
    """Return the raw marker text, or None if the marker element is absent."""
    element = document.select_one(markers.max_page)
    if element is None:
        return None
    return element.get_text(strip=True)


def page_count(document: Document, markers: SiteMarkers = DEFAULT_MARKERS) -> int:
    """
    Total number of result pages announced by the document.

    Returns:
        Parsed page count, or 0 when the marker is missing or not a
        non-negative integer
    """
    raw = read_max_page_marker(document, markers)
    number = int(raw) if raw is not None and _DIGITS.fullmatch(raw) else 0
    logger.info(f"Pagination: raw={raw!r} parsed={number}")
    return number
