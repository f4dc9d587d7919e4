"""
Color Analyzer HTTP Client
Submits an image to the processing endpoints and parses their responses.
"""
from typing import Any, Dict, Optional, Union

import requests

from color_analyzer.client.errors import (
    InvalidImageError, RequestFailedError, UnexpectedResponseError
)
from color_analyzer.client.models import (
    ColorPaletteResult, FilteredImageResult, ImageUpload
)
from color_analyzer.config import config
from color_analyzer.schemas import FilterType
from color_analyzer.utils.logging import get_logger

logger = get_logger()


class ColorAnalyzerClient:
    """Client for the /analyze-colors and /apply-filter endpoints."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        """
        Initialize client.

        Args:
            base_url: Server root, e.g. "http://localhost:3333" or
                "http://localhost:3000/api" (default from config)
            timeout: Request timeout in seconds (default from config)
        """
        self.base_url = (base_url or config.API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else config.CLIENT_TIMEOUT

    def analyze_colors(self, upload: ImageUpload) -> ColorPaletteResult:
        """
        Request the palette of an image.

        Raises:
            InvalidImageError: upload is not an image, nothing was sent
            RequestFailedError: network failure or non-2xx status
            UnexpectedResponseError: body without a `colors` list
        """
        body = self._post("/analyze-colors", upload)
        colors = body.get("colors")
        if not isinstance(colors, list):
            raise UnexpectedResponseError("Response did not contain a colors list")
        return ColorPaletteResult(colors=[str(color) for color in colors])

    def apply_filter(self, upload: ImageUpload,
                     filter_type: Union[FilterType, int] = FilterType.GRAYSCALE) -> FilteredImageResult:
        """
        Request a filtered copy of an image.

        `filter_type` is sent as its integer string ("0", "1" or "2").

        Raises:
            InvalidImageError: upload is not an image, nothing was sent
            RequestFailedError: network failure or non-2xx status
            UnexpectedResponseError: body without a `filtered` payload
        """
        body = self._post("/apply-filter", upload, data={"filterType": str(int(filter_type))})
        filtered = body.get("filtered")
        if not isinstance(filtered, str) or not filtered:
            raise UnexpectedResponseError("Response did not contain a filtered image")
        return FilteredImageResult(filtered=filtered)

    def _post(self, path: str, upload: ImageUpload,
              data: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        if not upload.is_image:
            raise InvalidImageError(f"{upload.filename} is not an image ({upload.content_type})")

        url = f"{self.base_url}{path}"
        logger.debug(f"POST {url}", extra={"upload_filename": upload.filename, "bytes": upload.size})

        try:
            response = requests.post(
                url,
                files={"file": upload.as_multipart()},
                data=data,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise RequestFailedError(f"Request to {url} failed: {e}") from e

        if not response.ok:
            server_error = None
            try:
                error_body = response.json()
            except ValueError:
                error_body = None
            if isinstance(error_body, dict):
                server_error = error_body.get("error")
            raise RequestFailedError(
                f"{url} returned {response.status_code}",
                status_code=response.status_code,
                server_error=server_error
            )

        try:
            body = response.json()
        except ValueError as e:
            raise UnexpectedResponseError(f"{url} returned a non-JSON body") from e
        if not isinstance(body, dict):
            raise UnexpectedResponseError(f"{url} returned {type(body).__name__}, expected an object")
        return body
