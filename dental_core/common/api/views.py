# dental_core/common/api/views.py
from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

from rest_framework import viewsets
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from dental_core.common.api.pagination import CollectionPagination
from dental_core.store.middleware import get_clinic_state
from dental_core.store.state import ClinicState


class StateViewSet(viewsets.ViewSet):
    """
    Base ViewSet over the request's ClinicState.

    Subclasses read through selectors and write through services; this class
    only provides the state handle, list pagination and 404 mapping for
    absent lookups.
    """

    not_found_message = "Not found."
    pagination_class = CollectionPagination

    @property
    def state(self) -> ClinicState:
        return get_clinic_state(self.request)

    def get_or_404(self, getter: Callable[[ClinicState, Optional[str]], Any], pk: Optional[str], message: str = ""):
        obj = getter(self.state, pk)
        if obj is None:
            raise NotFound(message or self.not_found_message)
        return obj

    def paginated_response(self, items: Sequence, serializer_class=None) -> Response:
        serializer_class = serializer_class or self.serializer_class
        paginator = self.pagination_class()
        page = paginator.paginate_queryset(list(items), self.request, view=self)
        return paginator.get_paginated_response(serializer_class(page, many=True).data)
