"""
Test configuration and fixtures for Color Analyzer tests.
"""
import io
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from PIL import Image
from requests.models import Response as RequestsResponse

from color_analyzer.config import config
from main import app


def make_png(size=(40, 20), blocks=None, mode="RGB", background=(255, 255, 255)):
    """
    Build a PNG in memory.
    
    Args:
        size: (width, height)
        blocks: list of ((x0, y0, x1, y1), color) rectangles, right/bottom exclusive
        mode: "RGB" or "RGBA"
        background: fill color
    """
    img = Image.new(mode, size, color=background)
    for (x0, y0, x1, y1), color in blocks or []:
        img.paste(color, (x0, y0, x1, y1))
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def make_gray16_png(size=(8, 8), value=40000):
    """Build a 16-bit grayscale PNG filled with a single sample value."""
    img = Image.new("I;16", size, color=value)
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def test_client():
    """Create test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics before each test."""
    from color_analyzer.utils.metrics import reset_metrics
    reset_metrics()


@pytest.fixture(autouse=True)
def local_processor(monkeypatch):
    """Run against the in-process processor unless a test switches to mock."""
    monkeypatch.setattr(config, "PROCESSOR", "local")


@pytest.fixture
def mock_processor(monkeypatch):
    """Switch the server to the mock processor with no artificial delay."""
    monkeypatch.setattr(config, "PROCESSOR", "mock")
    monkeypatch.setattr(config, "MOCK_ANALYZE_DELAY_MS", 0)
    monkeypatch.setattr(config, "MOCK_FILTER_DELAY_MS", 0)


@pytest.fixture
def two_color_png():
    """40x20 PNG: 30 columns red, 10 columns blue."""
    return make_png(size=(40, 20), blocks=[((0, 0, 30, 20), (255, 0, 0)),
                                           ((30, 0, 40, 20), (0, 0, 255))])


@pytest.fixture
def routed_requests(test_client):
    """
    Patch requests.post in the client module and route calls into the TestClient.
    
    Yields the mock so tests can inspect call arguments.
    """
    def convert_response(api_response):
        """Convert TestClient response to requests.Response."""
        response = RequestsResponse()
        response.status_code = api_response.status_code
        response.headers = api_response.headers
        response._content = api_response.content
        response.encoding = api_response.encoding
        response.reason = api_response.reason_phrase
        response.url = str(api_response.url)
        return response

    def post_side_effect(url, files=None, data=None, timeout=None, **kwargs):
        path = url.replace("http://testserver", "")
        api_response = test_client.post(path, files=files, data=data)
        return convert_response(api_response)

    with patch("color_analyzer.client.http.requests.post") as mock_post:
        mock_post.side_effect = post_side_effect
        yield mock_post
