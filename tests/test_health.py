"""
Tests for health and system status endpoints.
"""


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"status": "Chef Dhundo API running"}


def test_health_check(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["database"] == "connected"


def test_system_health_reports_payments(client):
    response = client.get("/system/health")

    assert response.status_code == 200
    body = response.json()
    assert body["service"] == "Chef Dhundo API"
    assert body["payments"] == "configured"
