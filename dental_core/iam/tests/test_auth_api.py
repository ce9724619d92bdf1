import pytest

pytestmark = pytest.mark.django_db


def test_me_requires_login(anon_client):
    res = anon_client.get("/api/v1/me/")

    assert res.status_code == 401
    body = res.json()
    assert body["error"]["code"] == "not_authenticated"
    assert body["error"]["request_id"]


def test_collections_require_login(anon_client):
    assert anon_client.get("/api/v1/patients/").status_code == 401
    assert anon_client.post("/api/v1/data/reset/").status_code == 401


def test_login_me_logout(anon_client, demo_credentials):
    res = anon_client.post("/api/v1/auth/login/", demo_credentials, format="json")
    assert res.status_code == 200
    assert res.json() == {"email": "admin@dentaltrack.com", "name": "Dr. Carlos Silva", "role": "admin"}

    me = anon_client.get("/api/v1/me/")
    assert me.status_code == 200
    assert me.json()["email"] == demo_credentials["email"]

    assert anon_client.post("/api/v1/auth/logout/").status_code == 204
    assert anon_client.get("/api/v1/me/").status_code == 401


def test_login_with_wrong_password(anon_client, demo_credentials):
    res = anon_client.post(
        "/api/v1/auth/login/", {**demo_credentials, "password": "nope"}, format="json"
    )

    assert res.status_code == 401
    assert res.json()["error"]["message"] == "Invalid e-mail or password."
    assert anon_client.get("/api/v1/me/").status_code == 401


def test_login_payload_is_validated(anon_client):
    res = anon_client.post("/api/v1/auth/login/", {"email": "not-an-email"}, format="json")

    assert res.status_code == 400
    body = res.json()["error"]
    assert body["code"] == "validation_error"
    assert set(body["details"]) == {"email", "password"}


def test_users_list_and_dentists(api_client):
    res = api_client.get("/api/v1/users/", {"role": "reception"})
    assert res.status_code == 200
    assert res.json()["count"] == 2

    dentists = api_client.get("/api/v1/users/dentists/").json()
    assert [u["id"] for u in dentists] == ["1", "2", "3"]


def test_user_crud(api_client):
    res = api_client.post(
        "/api/v1/users/",
        {"name": "Paula Nunes", "role": "reception", "email": "paula@dentaltrack.com"},
        format="json",
    )
    assert res.status_code == 201
    user_id = res.json()["id"]

    res = api_client.patch(f"/api/v1/users/{user_id}/", {"role": "dentist", "specialty": "Prótese"}, format="json")
    assert res.status_code == 200
    assert res.json()["specialty"] == "Prótese"

    assert api_client.delete(f"/api/v1/users/{user_id}/").status_code == 204
    res = api_client.get(f"/api/v1/users/{user_id}/")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "not_found"
