"""
Integration tests for system endpoints
"""


class TestSystemAPI:
    """Test system status endpoints"""

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_app_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["services"]["engine"] is True

    def test_health(self, client):
        response = client.get("/api/system/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_status(self, client):
        response = client.get("/api/system/status")
        assert response.status_code == 200

        data = response.json()
        assert data["uptime"] >= 0
        assert data["memory_usage"]["process_mb"] > 0

    def test_config(self, client):
        response = client.get("/api/system/config")
        assert response.status_code == 200

        data = response.json()
        assert data["image"]["default_output_format"] == "PNG"
        assert "log_level" in data["system"]
