"""
Tests for the health check endpoint.
"""


def test_health_check_returns_200(client):
    response = client.get("/health")
    assert response.status_code == 200


def test_health_check_returns_service_name(client):
    """
    Monitoring systems parse this field, so a change to it
    is a breaking change.
    """
    response = client.get("/health")
    data = response.json()
    assert data["service"] == "uae-bookkeeping"


def test_health_check_reports_database_status(client):
    response = client.get("/health")
    data = response.json()
    assert data["database"] == "healthy"
    assert data["status"] == "healthy"
