"""
Tests for AnalyzerSession state handling.
"""
import pytest

from color_analyzer.client import (
    AnalyzerSession, ColorPaletteResult, FilteredImageResult, ImageUpload,
    RequestFailedError, UnexpectedResponseError
)
from color_analyzer.client.session import (
    ANALYZE_FAILED_MESSAGE, FILTER_FAILED_MESSAGE, INVALID_FILE_MESSAGE,
    UNEXPECTED_RESPONSE_MESSAGE
)


class FakeClient:
    """Records calls and returns scripted results; `on_call` sees the session mid-request."""
    
    def __init__(self, result=None, error=None, on_call=None):
        self.result = result
        self.error = error
        self.on_call = on_call
        self.calls = []
    
    def _respond(self, name, *args):
        self.calls.append((name,) + args)
        if self.on_call:
            self.on_call()
        if self.error:
            raise self.error
        return self.result
    
    def analyze_colors(self, upload):
        return self._respond("analyze", upload)
    
    def apply_filter(self, upload, filter_type):
        return self._respond("filter", upload, filter_type)


PNG = ImageUpload("cat.png", b"\x89PNG....", "image/png")


@pytest.fixture
def session():
    s = AnalyzerSession(FakeClient())
    s.select_file(PNG)
    return s


def test_select_non_image_sets_error_and_keeps_selection(session):
    accepted = session.select_file(ImageUpload("notes.txt", b"hi", "text/plain"))
    
    assert accepted is False
    assert session.error == INVALID_FILE_MESSAGE
    assert session.selected_file is PNG


def test_select_image_clears_error(session):
    session.error = "old"
    assert session.select_file(ImageUpload("b.gif", b"GIF89a", "image/gif"))
    assert session.error == ""


def test_no_file_no_request():
    client = FakeClient()
    session = AnalyzerSession(client)
    
    session.select_file(ImageUpload("notes.txt", b"hi", "text/plain"))
    session.analyze_colors()
    session.apply_filter(1)
    
    assert client.calls == []
    assert not session.actions_enabled


def test_analyze_success_single_swatch(session):
    session.client.result = ColorPaletteResult(colors=["#AAAAAA"])
    
    session.analyze_colors()
    
    assert session.client.calls == [("analyze", PNG)]
    assert session.swatches == [("#AAAAAA", "#AAAAAA")]
    assert session.error == ""
    assert session.is_loading is False


def test_analyze_failure_sets_fixed_message(session):
    session.colors = ["#123456"]
    session.client.error = RequestFailedError("boom", status_code=500)
    
    session.analyze_colors()
    
    assert session.error == ANALYZE_FAILED_MESSAGE
    assert session.colors == []
    assert session.filtered_image is None
    assert session.is_loading is False


def test_filter_success_renders_data_uri(session):
    session.client.result = FilteredImageResult(filtered="QUJD")
    
    session.apply_filter(2)
    
    assert session.client.calls == [("filter", PNG, 2)]
    assert session.filtered_image == "data:image/png;base64,QUJD"


def test_filter_unexpected_response(session):
    session.client.error = UnexpectedResponseError("no filtered field")
    
    session.apply_filter(0)
    
    assert session.error == UNEXPECTED_RESPONSE_MESSAGE
    assert session.filtered_image is None


def test_filter_request_failure(session):
    session.client.error = RequestFailedError("400", status_code=400)
    
    session.apply_filter(0)
    
    assert session.error == FILTER_FAILED_MESSAGE
    assert session.filtered_image is None


def test_new_operation_clears_results_while_loading(session):
    session.client.result = ColorPaletteResult(colors=["#111111", "#222222"])
    session.analyze_colors()
    assert session.colors
    
    seen = {}
    
    def snapshot():
        seen.update(
            colors=list(session.colors),
            filtered=session.filtered_image,
            loading=session.is_loading,
            enabled=session.actions_enabled,
        )
    
    session.client.on_call = snapshot
    session.client.result = FilteredImageResult(filtered="Zm9v")
    session.apply_filter(1)
    
    assert seen == {"colors": [], "filtered": None, "loading": True, "enabled": False}
    assert session.colors == []
    assert session.filtered_image == "data:image/png;base64,Zm9v"


def test_end_to_end_against_app(routed_requests, two_color_png):
    from color_analyzer.client import ColorAnalyzerClient
    
    session = AnalyzerSession(ColorAnalyzerClient("http://testserver"))
    session.select_file(ImageUpload("blocks.png", two_color_png, "image/png"))
    
    session.analyze_colors()
    assert [label for _, label in session.swatches] == ["#FF0000", "#0000FF"]
    
    session.apply_filter(2)
    assert session.colors == []
    assert session.filtered_image.startswith("data:image/png;base64,")
    assert routed_requests.call_count == 2
