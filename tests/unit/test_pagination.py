"""
Test suite for page normalisation and sort whitelisting.

System role: Verification of the pagination contract shared by searches
"""

import pytest

from discuss_board.core.pagination import (
    PageRequest,
    build_page,
    build_pagination,
    normalize_page,
    resolve_sort,
)


class TestNormalizePage:
    """Test suite for normalize_page()."""

    def test_defaults_when_missing(self) -> None:
        assert normalize_page(None, None) == PageRequest(page=1, limit=20)

    @pytest.mark.parametrize("page", [0, -3])
    def test_non_positive_page_becomes_first(self, page: int) -> None:
        assert normalize_page(page, 10).page == 1

    @pytest.mark.parametrize("limit", [0, -1, 101, 5000])
    def test_out_of_range_limit_falls_back_to_default(self, limit: int) -> None:
        assert normalize_page(2, limit).limit == 20

    def test_custom_bounds(self) -> None:
        request = normalize_page(3, 500, default_limit=50, max_limit=1000)

        assert request == PageRequest(page=3, limit=500)
        assert request.offset == 1000


class TestBuildPagination:
    """Test suite for the pagination block."""

    def test_pages_round_up(self) -> None:
        block = build_pagination(PageRequest(page=2, limit=10), records=21)

        assert block == {"current": 2, "limit": 10, "records": 21, "pages": 3}

    def test_no_records_means_no_pages(self) -> None:
        assert build_pagination(PageRequest(page=1, limit=10), records=0)["pages"] == 0

    def test_build_page_wraps_data(self) -> None:
        page = build_page(PageRequest(page=1, limit=2), 1, [{"id": 1}])

        assert page["data"] == [{"id": 1}]
        assert page["pagination"]["records"] == 1


class TestResolveSort:
    """Test suite for resolve_sort()."""

    allowed = ("created_at", "title")

    def test_bare_field_defaults_to_descending(self) -> None:
        assert resolve_sort("title", None, self.allowed) == ("title", True)

    def test_explicit_ascending(self) -> None:
        assert resolve_sort("title", "asc", self.allowed) == ("title", False)

    def test_minus_prefix_means_descending(self) -> None:
        assert resolve_sort("-title", "asc", self.allowed) == ("title", True)

    @pytest.mark.parametrize("spelling", ["title:asc", "title asc", "title:ASC"])
    def test_embedded_direction(self, spelling: str) -> None:
        assert resolve_sort(spelling, None, self.allowed) == ("title", False)

    def test_unknown_field_falls_back_to_default(self) -> None:
        assert resolve_sort("password_hash", "asc", self.allowed) == ("created_at", False)

    def test_missing_field_uses_default(self) -> None:
        assert resolve_sort(None, None, self.allowed, default="title") == ("title", True)
