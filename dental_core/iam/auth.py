# dental_core/iam/auth.py
from __future__ import annotations

import json
import logging
from typing import Optional

from django.conf import settings
from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed

from dental_core.common.storage import SlotStorage, StorageError, get_slot_storage, slot_key
from dental_core.iam.entities import SessionUser
from dental_core.iam.serializers import SessionUserSerializer

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MSG = "Invalid e-mail or password."


def _demo_credentials() -> dict:
    return getattr(settings, "DENTALTRACK_DEMO_CREDENTIALS", {}) or {}


def _session_key() -> str:
    return slot_key(getattr(settings, "DENTALTRACK_SESSION_SLOT", "user"))


class DemoAuthService:
    """
    Hardcoded single-credential login gate.

    A successful login writes the user marker to its own slot; every other
    endpoint only checks that the marker exists. This is a demo gate, not a
    security boundary.
    """

    def __init__(self, storage: Optional[SlotStorage] = None) -> None:
        self.storage = storage or get_slot_storage()

    def login(self, *, email: str, password: str) -> SessionUser:
        creds = _demo_credentials()
        if email != creds.get("email") or password != creds.get("password"):
            logger.info("Rejected demo login for %s", email)
            raise AuthenticationFailed(INVALID_CREDENTIALS_MSG)

        user = SessionUser(email=creds["email"], name=creds.get("name", ""), role=creds.get("role", ""))
        payload = json.dumps(SessionUserSerializer(user).data, ensure_ascii=False)
        self.storage.write(_session_key(), payload)
        logger.info("Demo login for %s", email)
        return user

    def logout(self) -> None:
        self.storage.delete(_session_key())

    def current_user(self) -> Optional[SessionUser]:
        """The logged-in marker, or None (absent, unreadable or malformed)."""
        try:
            raw = self.storage.read(_session_key())
        except StorageError:
            logger.exception("Cannot read session marker")
            return None

        if not raw:
            return None

        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Discarding malformed session marker")
            return None

        ser = SessionUserSerializer(data=data)
        if not ser.is_valid():
            logger.warning("Discarding invalid session marker: %s", ser.errors)
            return None
        return SessionUserSerializer.to_entity(ser.validated_data)


class DemoSessionAuthentication(BaseAuthentication):
    """
    Resolves request.user from the stored login marker.

    Returns None when nobody is logged in so permission classes answer 401.
    """

    def authenticate(self, request):
        user = DemoAuthService().current_user()
        if user is None:
            return None
        return user, None

    def authenticate_header(self, request) -> str:
        return 'Demo realm="api"'
