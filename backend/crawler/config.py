"""
Site markers and title filtering configuration for the crawler

SiteMarkers pins down the fixed contract of the results-page template:
query parameter names, the search path marker, and the CSS selectors for
job cards and the pagination indicator.

TitleFilters is an optional post-crawl filter applied at the API boundary.

This provides:
- One place to update when the site's markup drifts
- IDE autocomplete
- Type checking
"""

from typing import Dict, List, Optional
from dataclasses import dataclass, field


DEFAULT_SEARCH_BASE_URL = "https://www.pracuj.pl/praca"


@dataclass(frozen=True)
class SiteMarkers:
    """
    Fixed URL conventions and DOM markers of the results page.

    Examples:
        # Defaults match the live site
        markers = SiteMarkers()

        # Tests can point the extractor at a simplified template
        markers = SiteMarkers(job_card="div.card", job_title="h2", job_link="a")
    """
    keyword_suffix: str = ";kw"
    filter_param: str = "et"
    page_param: str = "pn"
    max_page: str = 'span[data-test="top-pagination-max-page-number"]'
    job_card: str = "div.tiles_b18pwp01.core_po9665q"
    job_title: str = "h2.tiles_h1p4o5k6"
    job_link: str = "a.tiles_cnb3rfy.core_n194fgoq"


DEFAULT_MARKERS = SiteMarkers()


@dataclass
class TitleFilters:
    """
    Title filtering configuration.

    Examples:
        # Include all jobs, exclude senior roles
        config = TitleFilters(include=None, exclude=['senior'])

        # Only developer titles, exclude interns
        config = TitleFilters(include=['developer'], exclude=['intern'])

        # No filtering at all
        config = TitleFilters()

        # From request body dict
        config = TitleFilters.from_dict({"include": ["python"], "exclude": []})
    """
    include: Optional[List[str]] = None  # None = include all, List = OR logic (match any)
    exclude: List[str] = field(default_factory=list)  # AND logic: reject all

    @property
    def is_empty(self) -> bool:
        return self.include is None and not self.exclude

    def matches(self, title: str) -> bool:
        """
        Check a single title against the filters (case-insensitive substring).

        Exclude terms are checked first; include terms use OR logic.
        """
        title_lower = (title or "").lower()

        for term in self.exclude:
            if term.lower() in title_lower:
                return False

        if self.include is None:
            return True
        return any(term.lower() in title_lower for term in self.include)

    def to_dict(self) -> Dict[str, List[str]]:
        """Convert to dict for API response. Always returns [] instead of None."""
        return {"include": self.include or [], "exclude": self.exclude}

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> "TitleFilters":
        """
        Create from dict (request deserialization).

        Args:
            data: Dict with include/exclude keys, or None

        Returns:
            TitleFilters instance

        Raises:
            ValueError: If data structure is invalid
        """
        if data is None:
            return cls()

        if not isinstance(data, dict):
            raise ValueError("title_filters must be a dict")

        include = data.get("include")
        exclude = data.get("exclude") or []

        # Validate include
        if include is not None:
            if not isinstance(include, list):
                raise ValueError("title_filters.include must be a list or null")
            if not all(isinstance(item, str) for item in include):
                raise ValueError("title_filters.include items must be strings")
            # Normalize empty list to None (empty list = include all)
            if len(include) == 0:
                include = None

        # Validate exclude
        if not isinstance(exclude, list):
            raise ValueError("title_filters.exclude must be a list")
        if not all(isinstance(item, str) for item in exclude):
            raise ValueError("title_filters.exclude items must be strings")

        return cls(include=include, exclude=exclude)
