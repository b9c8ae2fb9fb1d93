"""
Job extractor: results page document -> JobRecords.

Every matched job card yields a record, including cards without a link.
Dropping empty links happens at merge time in the orchestrator, so the
matched/accepted counts logged here reflect what the page actually held.
"""

import logging

from .config import DEFAULT_MARKERS, SiteMarkers
from .fetcher import Document
from .models import JobRecord

logger = logging.getLogger(__name__)


def extract_jobs(document: Document, markers: SiteMarkers = DEFAULT_MARKERS, url: str = "") -> list[JobRecord]:
    """
    Extract (title, link) pairs from every job card in document order.

    Title is the text of the card's heading element(s), whitespace-trimmed.
    Link is the href of the first matching anchor inside the card, or ""
    when the anchor or its href is missing.

    Args:
        document: Parsed results page
        markers: Card/title/link selectors
        url: Page URL, used only for diagnostics

    Returns:
        List of JobRecord (may contain empty links)
    """
    cards = document.select(markers.job_card)
    records: list[JobRecord] = []

    for card in cards:
        title = "".join(heading.get_text() for heading in card.select(markers.job_title)).strip()

        anchor = card.select_one(markers.job_link)
        link = anchor.get("href") if anchor is not None else None

        records.append(JobRecord(title=title, link=link or ""))

    accepted = sum(1 for record in records if record.link)
    if not cards:
        logger.warning(f"Selectors matched 0 job cards (possible markup change): {url}")
    else:
        logger.info(f"Extracted matched={len(cards)} with_link={accepted}: {url}")

    return records
