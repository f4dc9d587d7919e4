"""
Color Analyzer Session
Headless model of the upload/result panel: file selection, loading flag,
result clearing and the fixed user-facing error strings.
"""
from typing import List, Optional, Tuple, Union

from color_analyzer.client.errors import ColorAnalyzerError, UnexpectedResponseError
from color_analyzer.client.http import ColorAnalyzerClient
from color_analyzer.client.models import ImageUpload
from color_analyzer.schemas import FilterType
from color_analyzer.utils.logging import get_logger

logger = get_logger()

INVALID_FILE_MESSAGE = "Please select a valid image file"
ANALYZE_FAILED_MESSAGE = "Failed to analyze image colors. Please try again."
FILTER_FAILED_MESSAGE = "Failed to apply filter. Please try again."
UNEXPECTED_RESPONSE_MESSAGE = "Unexpected response from server. Please try again."


class AnalyzerSession:
    """
    State for one user working with one selected image.

    Each operation runs idle -> loading -> (success | error) -> idle. Starting
    an operation clears the previous colors, image and error before the
    request is sent. Overlapping operations are not guarded against.
    """

    def __init__(self, client: Optional[ColorAnalyzerClient] = None):
        self.client = client or ColorAnalyzerClient()
        self.selected_file: Optional[ImageUpload] = None
        self.is_loading = False
        self.colors: List[str] = []
        self.filtered_image: Optional[str] = None
        self.error = ""

    @property
    def actions_enabled(self) -> bool:
        """Whether the analyze/filter actions may be triggered."""
        return self.selected_file is not None and not self.is_loading

    @property
    def swatches(self) -> List[Tuple[str, str]]:
        """(color, label) per palette entry; the label is the hex string itself."""
        return [(color, color) for color in self.colors]

    def select_file(self, upload: ImageUpload) -> bool:
        """
        Accept an image upload, or record an error and keep the previous selection.

        Returns:
            True when the file was accepted
        """
        if upload is None or not upload.is_image:
            self.error = INVALID_FILE_MESSAGE
            return False
        self.selected_file = upload
        self.error = ""
        return True

    def _begin(self):
        self.is_loading = True
        self.error = ""
        self.colors = []
        self.filtered_image = None

    def analyze_colors(self) -> None:
        if self.selected_file is None:
            return

        self._begin()
        try:
            result = self.client.analyze_colors(self.selected_file)
            self.colors = list(result.colors)
        except ColorAnalyzerError as e:
            self.error = ANALYZE_FAILED_MESSAGE
            logger.error(f"Error analyzing colors: {e}")
        finally:
            self.is_loading = False

    def apply_filter(self, filter_type: Union[FilterType, int] = FilterType.GRAYSCALE) -> None:
        if self.selected_file is None:
            return

        self._begin()
        try:
            result = self.client.apply_filter(self.selected_file, filter_type)
            self.filtered_image = result.data_uri
        except UnexpectedResponseError as e:
            self.error = UNEXPECTED_RESPONSE_MESSAGE
            logger.error(f"Unexpected filter response: {e}")
        except ColorAnalyzerError as e:
            self.error = FILTER_FAILED_MESSAGE
            logger.error(f"Error applying filter: {e}")
        finally:
            self.is_loading = False
