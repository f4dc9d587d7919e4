"""
Color Analyzer Client

Python counterpart of the upload/result front-end: an HTTP client for the
processing endpoints and a headless session holding the panel state.
"""
from color_analyzer.client.errors import (
    ColorAnalyzerError, InvalidImageError, RequestFailedError, UnexpectedResponseError
)
from color_analyzer.client.http import ColorAnalyzerClient
from color_analyzer.client.models import ColorPaletteResult, FilteredImageResult, ImageUpload
from color_analyzer.client.session import AnalyzerSession

__all__ = [
    "AnalyzerSession",
    "ColorAnalyzerClient",
    "ColorAnalyzerError",
    "ColorPaletteResult",
    "FilteredImageResult",
    "ImageUpload",
    "InvalidImageError",
    "RequestFailedError",
    "UnexpectedResponseError",
]
