# dental_core/common/api/pagination.py
from __future__ import annotations

from rest_framework.pagination import PageNumberPagination


class CollectionPagination(PageNumberPagination):
    """
    Page-number pagination over in-memory entity lists.

    Response contract: {count, next, previous, results}. `?page_size=` is
    honoured up to max_page_size.
    """

    page_size = 20
    page_size_query_param = "page_size"
    max_page_size = 200
