# dental_core/store/middleware.py
from __future__ import annotations

from django.utils.deprecation import MiddlewareMixin
from django.utils.functional import SimpleLazyObject

from dental_core.store.state import ClinicState


def get_clinic_state(request) -> ClinicState:
    """
    Per-request ClinicState.

    Falls back to opening one when the middleware did not run (e.g. a view
    called directly from a test).
    """
    state = getattr(request, "clinic_state", None)
    if state is None:
        state = ClinicState.open()
        request.clinic_state = state
    return state


class ClinicStateMiddleware(MiddlewareMixin):
    """
    Attaches request.clinic_state, loaded from the slot store on first access.

    Collections are re-read on every request, so each request starts from the
    latest durable value.
    """

    ENFORCED_PREFIXES = ("/api/",)

    def process_request(self, request):
        if request.path.startswith(self.ENFORCED_PREFIXES):
            request.clinic_state = SimpleLazyObject(ClinicState.open)
        return None
