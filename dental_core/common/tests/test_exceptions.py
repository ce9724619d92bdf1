import pytest
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.test import APIRequestFactory

from dental_core.common.api.exceptions import ConflictError, api_exception_handler
from dental_core.common.storage import MemorySlotStorage, StorageError


def _handle(exc):
    request = APIRequestFactory().get("/api/v1/anything/")
    return api_exception_handler(exc, {"request": request})


def test_detail_becomes_message():
    res = _handle(NotFound("Patient not found."))

    assert res.status_code == 404
    assert res.data["error"]["code"] == "not_found"
    assert res.data["error"]["message"] == "Patient not found."
    assert res.data["error"]["details"] is None


def test_field_errors_go_to_details():
    res = _handle(ValidationError({"amount": ["Amount must be greater than zero."]}))

    assert res.status_code == 400
    assert res.data["error"]["message"] == "Request failed."
    assert res.data["error"]["details"] == {"amount": ["Amount must be greater than zero."]}


def test_conflict():
    res = _handle(ConflictError("Patient has 1 treatment(s); delete or reassign them first."))

    assert res.status_code == 409
    assert res.data["error"]["code"] == "conflict"


def test_unhandled_error_is_500():
    res = _handle(RuntimeError("boom"))
    assert res.status_code == 500
    assert res.data["error"]["code"] == "server_error"


def test_storage_error_is_503():
    res = _handle(StorageError("disk full"))
    assert res.status_code == 503
    assert res.data["error"]["code"] == "storage_unavailable"


@pytest.mark.django_db
def test_login_with_broken_storage(anon_client, demo_credentials, monkeypatch):
    def broken(self, key, payload):
        raise StorageError("read-only")

    monkeypatch.setattr(MemorySlotStorage, "write", broken)

    res = anon_client.post("/api/v1/auth/login/", demo_credentials, format="json")

    assert res.status_code == 503
    assert anon_client.get("/api/v1/me/").status_code == 401
