import pytest

pytestmark = pytest.mark.django_db


def test_list_is_paginated_and_searchable(api_client):
    res = api_client.get("/api/v1/patients/")
    assert res.status_code == 200
    body = res.json()
    assert body["count"] == 6
    assert body["results"][0]["nationalId"] == "123.456.789-00"

    res = api_client.get("/api/v1/patients/", {"q": "souza"})
    assert [p["id"] for p in res.json()["results"]] == ["3"]


def test_create_update_delete(api_client):
    res = api_client.post(
        "/api/v1/patients/",
        {
            "name": "Lucas Pereira",
            "nationalId": "999.888.777-66",
            "birthDate": "2001-05-04",
            "email": "lucas@email.com",
            "insuranceName": "Unimed",
        },
        format="json",
    )
    assert res.status_code == 201
    patient = res.json()
    assert patient["birthDate"] == "2001-05-04"
    assert patient["insuranceId"] is None
    assert patient["createdAt"]

    res = api_client.patch(f"/api/v1/patients/{patient['id']}/", {"phone": "(11) 91234-5678"}, format="json")
    assert res.status_code == 200
    assert res.json()["phone"] == "(11) 91234-5678"
    assert res.json()["name"] == "Lucas Pereira"

    assert api_client.delete(f"/api/v1/patients/{patient['id']}/").status_code == 204
    assert api_client.get(f"/api/v1/patients/{patient['id']}/").status_code == 404


def test_create_requires_fields(api_client):
    res = api_client.post("/api/v1/patients/", {"name": "Sem CPF"}, format="json")
    assert res.status_code == 400
    assert {"nationalId", "birthDate"} <= set(res.json()["error"]["details"])


def test_delete_patient_with_treatments_conflicts(api_client):
    res = api_client.delete("/api/v1/patients/1/")

    assert res.status_code == 409
    assert res.json()["error"]["code"] == "conflict"
    assert api_client.get("/api/v1/patients/1/").status_code == 200


def test_patient_treatments(api_client):
    res = api_client.get("/api/v1/patients/3/treatments/")
    assert res.status_code == 200
    assert [t["id"] for t in res.json()] == ["3"]

    assert api_client.get("/api/v1/patients/404/treatments/").status_code == 404
