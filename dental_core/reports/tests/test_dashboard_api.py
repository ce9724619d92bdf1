import pytest

pytestmark = pytest.mark.django_db


def test_metrics(api_client):
    res = api_client.get("/api/v1/dashboard/metrics/")

    assert res.status_code == 200
    body = res.json()
    assert body["inProgressTreatments"] == 3
    assert [row["treatmentId"] for row in body["activeTreatments"]] == ["1", "2", "3"]
    assert {"asOf", "todayAppointments", "monthRevenue"} <= set(body)


def test_report_download(api_client):
    res = api_client.get("/api/v1/dashboard/report/")

    assert res.status_code == 200
    assert res["Content-Type"].startswith("text/plain")
    assert res["Content-Disposition"].startswith('attachment; filename="dentaltrack-dashboard-')
    assert "Treatments in progress:   3" in res.content.decode("utf-8")


def test_report_requires_login(anon_client):
    assert anon_client.get("/api/v1/dashboard/report/").status_code == 401
