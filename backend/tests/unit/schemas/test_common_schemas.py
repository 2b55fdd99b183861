"""Pagination and result schemas."""

import pytest
from pydantic import ValidationError

from src.tsaap.core.schemas.common import (
    ErrorResponse,
    PagedResultList,
    PageRequest,
    PaginationResponse,
)


class TestPageRequest:

    def test_defaults_newest_first(self):
        page = PageRequest()
        assert (page.sort, page.order, page.max, page.offset) == ("created_at", "desc", None, 0)

    @pytest.mark.parametrize(
        "sort,column",
        [
            ("created_at", "created_at"),
            ("dateCreated", "created_at"),
            ("lastUpdated", "updated_at"),
            ("content", "content"),
        ],
    )
    def test_sort_names(self, sort, column):
        assert PageRequest(sort=sort).sort == column

    def test_unknown_sort_is_rejected(self):
        with pytest.raises(ValidationError):
            PageRequest(sort="author_id; drop table notes")

    def test_order_is_case_insensitive(self):
        assert PageRequest(order="ASC").order == "asc"

    @pytest.mark.parametrize("fields", [{"order": "up"}, {"max": 0}, {"offset": -1}])
    def test_invalid_values(self, fields):
        with pytest.raises(ValidationError):
            PageRequest(**fields)


class TestPagedResults:

    def test_empty(self):
        result = PagedResultList.empty()
        assert result.items == []
        assert result.total_count == 0

    def test_pagination_response_has_next(self):
        page = PaginationResponse.create(items=[1, 2], total=5, offset=0, max=2)
        assert page.has_next

        last = PaginationResponse.create(items=[5], total=5, offset=4, max=2)
        assert not last.has_next

    def test_error_response_is_json_ready(self):
        body = ErrorResponse(error="NotAuthorError", message="nope").model_dump(mode="json")
        assert body["error"] == "NotAuthorError"
        assert isinstance(body["timestamp"], str)
