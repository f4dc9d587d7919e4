"""
Test health, root and metrics endpoints.
"""


def test_health_check(test_client):
    response = test_client.get("/healthz")
    
    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert data["service"] == "color-analyzer"
    assert data["processor"] == "local"
    assert "version" in data


def test_health_check_reports_mock_processor(test_client, mock_processor):
    response = test_client.get("/healthz")
    
    assert response.json()["processor"] == "mock"


def test_root(test_client):
    response = test_client.get("/")
    
    assert response.status_code == 200
    assert response.json()["docs"] == "/docs"


def test_metrics_count_requests(test_client, two_color_png):
    test_client.post("/analyze-colors", files={"file": ("a.png", two_color_png, "image/png")})
    test_client.post("/analyze-colors")
    
    response = test_client.get("/metrics")
    assert response.status_code == 200
    counters = response.json()["counters"]
    assert counters["analyze_requests_total"] == 2
    assert counters["analyze_failed_total_client"] == 1
    assert counters["processor_used_total_local"] == 1
    assert "analyze_duration_ms" in response.json()["timing_stats"]


def test_unknown_route_uses_error_shape(test_client):
    response = test_client.get("/does-not-exist")
    
    assert response.status_code == 404
    assert "error" in response.json()
