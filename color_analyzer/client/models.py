"""
Client-side data model: the upload and the two result shapes.
"""
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Union

from color_analyzer.config import config


@dataclass(frozen=True)
class ImageUpload:
    """An image held in memory until it is submitted."""
    filename: str
    content: bytes
    content_type: str

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def is_image(self) -> bool:
        return self.content_type.startswith(config.ACCEPTED_MIME_PREFIX)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "ImageUpload":
        """Read a file from disk, guessing its MIME type from the extension."""
        path = Path(path)
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(
            filename=path.name,
            content=path.read_bytes(),
            content_type=content_type or "application/octet-stream"
        )

    def as_multipart(self) -> Tuple[str, bytes, str]:
        """The (filename, content, type) triple `requests` expects for a file part."""
        return (self.filename, self.content, self.content_type)


@dataclass(frozen=True)
class ColorPaletteResult:
    colors: List[str]


@dataclass(frozen=True)
class FilteredImageResult:
    """Filtered image payload; the client always treats it as PNG."""
    filtered: str
    mime_type: str = "image/png"

    @property
    def data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.filtered}"
