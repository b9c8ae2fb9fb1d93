"""
Unit tests for search/page URL construction.

Run: python3 -m pytest crawler/__tests__/test_url_builder.py -v
"""

import pytest
from urllib.parse import parse_qsl, urlsplit

from crawler.config import SiteMarkers
from crawler.errors import ConfigError
from crawler.url_builder import build_page_url, build_search_url, iter_page_targets


BASE = "https://www.pracuj.pl/praca"


def query_pairs(url: str) -> list[tuple[str, str]]:
    return parse_qsl(urlsplit(url).query, keep_blank_values=True)


class TestBuildSearchUrl:
    """Tests for the canonical (page 1) search URL."""

    def test_plain_term_no_filters(self):
        """Should append term and ;kw marker with no query string."""
        assert build_search_url("golang", [], BASE) == "https://www.pracuj.pl/praca/golang;kw"

    def test_term_is_percent_encoded(self):
        """Should percent-encode spaces, non-ASCII and slashes in the term."""
        url = build_search_url("praca zdalna/stażysta", [], BASE)
        assert url == "https://www.pracuj.pl/praca/praca%20zdalna%2Fsta%C5%BCysta;kw"

    def test_single_filter_code(self):
        """Should serialize one filter code as et=1."""
        url = build_search_url("intern", [1], BASE)
        assert url.endswith(";kw?et=1")

    def test_multiple_filter_codes_comma_joined(self):
        """Should serialize codes as a single comma-joined et parameter."""
        url = build_search_url("golang", [1, 3], BASE)
        assert "et=1,3" in url
        assert query_pairs(url) == [("et", "1,3")]

    def test_filter_code_order_preserved(self):
        """Should keep caller's filter code order."""
        assert query_pairs(build_search_url("x", [17, 3, 1], BASE)) == [("et", "17,3,1")]

    def test_trailing_slash_on_base(self):
        """Should not produce a double slash."""
        assert build_search_url("go", [], BASE + "/") == "https://www.pracuj.pl/praca/go;kw"

    def test_empty_term(self):
        """Should still build a URL (site decides what an empty search means)."""
        assert build_search_url("", [], BASE) == "https://www.pracuj.pl/praca/;kw"

    @pytest.mark.parametrize("base", ["not a url", "/praca", "ftp://www.pracuj.pl/praca", "https://"])
    def test_malformed_base_raises_config_error(self, base):
        """Should raise ConfigError for non-absolute or non-http(s) bases."""
        with pytest.raises(ConfigError):
            build_search_url("golang", [], base)

    @pytest.mark.parametrize("base", [BASE + "?sort=1", BASE + "#top"])
    def test_base_with_query_or_fragment_raises(self, base):
        """Should reject a base URL whose query or fragment would be dropped."""
        with pytest.raises(ConfigError):
            build_search_url("golang", [], base)

    def test_non_integer_filter_code_raises(self):
        """Should reject filter codes that are not ints."""
        with pytest.raises(ConfigError):
            build_search_url("golang", ["1"], BASE)

    def test_custom_markers(self):
        """Should honour alternative parameter names and suffix."""
        markers = SiteMarkers(keyword_suffix=";q", filter_param="type")
        assert build_search_url("go", [2], BASE, markers) == "https://www.pracuj.pl/praca/go;q?type=2"


class TestBuildPageUrl:
    """Tests for deriving page N from the canonical URL."""

    CANONICAL = "https://www.pracuj.pl/praca/golang;kw?et=1,3"

    def test_page_one_is_canonical(self):
        """Page 1 should be exactly the canonical URL."""
        assert build_page_url(self.CANONICAL, 1) == self.CANONICAL

    def test_page_one_without_query(self):
        """Page 1 of a URL with no query should be unchanged."""
        url = "https://www.pracuj.pl/praca/golang;kw"
        assert build_page_url(url, 1) == url

    def test_page_one_removes_existing_pn(self):
        """Page 1 should strip any pagination parameter."""
        assert build_page_url(self.CANONICAL + "&pn=4", 1) == self.CANONICAL

    def test_page_one_removes_duplicate_pn(self):
        """Page 1 should strip every pagination parameter occurrence."""
        url = "https://www.pracuj.pl/praca/golang;kw?pn=2&et=1&pn=3"
        assert build_page_url(url, 1) == "https://www.pracuj.pl/praca/golang;kw?et=1"

    def test_page_n_sets_pn(self):
        """Page N>1 should add pn=N and keep other params unchanged."""
        url = build_page_url(self.CANONICAL, 3)
        assert url == self.CANONICAL + "&pn=3"
        assert ("et", "1,3") in query_pairs(url)

    def test_page_n_without_existing_query(self):
        """Should start a query string when none exists."""
        assert build_page_url("https://www.pracuj.pl/praca/go;kw", 2) == "https://www.pracuj.pl/praca/go;kw?pn=2"

    def test_page_n_overwrites_existing_pn(self):
        """Should replace a prior pn in place rather than appending a second one."""
        url = build_page_url("https://www.pracuj.pl/praca/go;kw?pn=7&et=1", 2)
        assert url == "https://www.pracuj.pl/praca/go;kw?pn=2&et=1"
        assert [v for k, v in query_pairs(url) if k == "pn"] == ["2"]

    def test_preserves_raw_encoding_of_other_params(self):
        """Should keep other parameters byte-for-byte (including escapes)."""
        url = build_page_url("https://www.pracuj.pl/praca/go;kw?et=1%2C3&sal=1", 5)
        assert url == "https://www.pracuj.pl/praca/go;kw?et=1%2C3&sal=1&pn=5"

    @pytest.mark.parametrize("page", [1, 2, 9, 120])
    def test_idempotent(self, page):
        """Applying build_page_url twice should give the same URL."""
        once = build_page_url(self.CANONICAL, page)
        assert build_page_url(once, page) == once

    def test_round_trip_back_to_page_one(self):
        """Going to page N and back to page 1 should restore the canonical URL."""
        assert build_page_url(build_page_url(self.CANONICAL, 6), 1) == self.CANONICAL

    @pytest.mark.parametrize("page", [0, -1, True])
    def test_invalid_page_number_raises(self, page):
        """Should reject page numbers below 1 (and bools)."""
        with pytest.raises(ConfigError):
            build_page_url(self.CANONICAL, page)

    def test_malformed_url_raises(self):
        """Should raise ConfigError for a relative URL."""
        with pytest.raises(ConfigError):
            build_page_url("/praca/golang;kw", 2)


class TestIterPageTargets:
    """Tests for page target generation."""

    def test_ascending_targets(self):
        """Should yield pages start..count in order with matching URLs."""
        targets = list(iter_page_targets("https://www.pracuj.pl/praca/go;kw", 3))

        assert [t.page_number for t in targets] == [1, 2, 3]
        assert targets[0].url == "https://www.pracuj.pl/praca/go;kw"
        assert targets[0].is_first_page
        assert targets[2].url.endswith("?pn=3")

    def test_start_after_first_page(self):
        """Should skip pages before start."""
        targets = list(iter_page_targets("https://www.pracuj.pl/praca/go;kw", 3, start=2))
        assert [t.page_number for t in targets] == [2, 3]

    def test_zero_pages(self):
        """Should yield nothing for a zero page count."""
        assert list(iter_page_targets("https://www.pracuj.pl/praca/go;kw", 0)) == []
