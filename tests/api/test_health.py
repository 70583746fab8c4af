import pytest
from fastapi.testclient import TestClient
from backoffice.admin.pool import Pool
from backoffice.api.main import create_app

@pytest.fixture
def client():
    app = create_app(Pool())
    return TestClient(app)

def test_health_check(client):
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Server Healthy"}
