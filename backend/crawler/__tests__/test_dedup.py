"""
Unit tests for the dedup index.

Run: python3 -m pytest crawler/__tests__/test_dedup.py -v
"""

from unittest.mock import patch

import pytest

from crawler.dedup import DedupIndex


class TestDedupIndex:
    """Tests for DedupIndex."""

    def test_admit_first_occurrence(self):
        """First occurrence of a link should be admitted."""
        index = DedupIndex()
        assert index.admit("https://x/1") is True
        assert "https://x/1" in index
        assert len(index) == 1

    def test_admit_rejects_repeat(self):
        """Second occurrence should be rejected and not counted twice."""
        index = DedupIndex()
        index.admit("https://x/1")
        assert index.admit("https://x/1") is False
        assert len(index) == 1

    def test_admit_rejects_empty_link(self):
        """Empty link should never be admitted or stored."""
        index = DedupIndex()
        assert index.admit("") is False
        assert len(index) == 0
        assert not index.contains("")

    def test_links_compared_verbatim(self):
        """No normalization: query or case differences are different keys."""
        index = DedupIndex()
        assert index.admit("https://x/1")
        assert index.admit("https://x/1?s=a")
        assert index.admit("https://X/1")
        assert len(index) == 3

    def test_insert_and_contains(self):
        """insert should make contains true."""
        index = DedupIndex()
        assert not index.contains("https://x/2")
        index.insert("https://x/2")
        assert index.contains("https://x/2")

    def test_insert_empty_raises(self):
        """insert should reject the empty string."""
        with pytest.raises(ValueError):
            DedupIndex().insert("")

    def test_indexes_are_independent(self):
        """Each crawl owns its own index."""
        first, second = DedupIndex(), DedupIndex()
        first.admit("https://x/1")
        assert "https://x/1" not in second

    def test_admit_goes_through_contains_and_insert(self):
        """admit is built on the contains/insert operations."""
        index = DedupIndex()

        with patch.object(index, "contains", wraps=index.contains) as contains, \
                patch.object(index, "insert", wraps=index.insert) as insert:
            assert index.admit("https://x/1") is True
            assert index.admit("https://x/1") is False

        assert contains.call_count == 2
        insert.assert_called_once_with("https://x/1")
