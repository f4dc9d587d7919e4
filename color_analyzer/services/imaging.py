"""
Color Analyzer Imaging Utilities
Handles upload validation, image decoding, resizing and PNG encoding.
"""
import base64
import io
from typing import Optional

import numpy as np
from fastapi import HTTPException, UploadFile
from PIL import Image, UnidentifiedImageError

from color_analyzer.config import config


def validate_file_upload(file: Optional[UploadFile]) -> UploadFile:
    """
    Validate uploaded file presence, size and declared MIME type.
    
    Args:
        file: FastAPI UploadFile object, or None when the field was omitted
        
    Returns:
        The same upload, for chaining
        
    Raises:
        HTTPException: 400 for a missing, oversized or non-image upload
    """
    if file is None:
        raise HTTPException(status_code=400, detail="No file provided")
    
    # Check file size (file.size might be None for some clients)
    if file.size and file.size > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )
    
    # Multipart parts without an explicit type arrive as application/octet-stream;
    # those are left to the decoder
    content_type = file.content_type or ""
    if content_type and content_type != "application/octet-stream" \
            and not content_type.startswith(config.ACCEPTED_MIME_PREFIX):
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported media type: {content_type}. Please upload an image file"
        )
    
    return file


async def read_upload_bytes(file: UploadFile) -> bytes:
    """Read the whole upload, enforcing the size limit after reading."""
    file_bytes = await file.read()
    
    if not file_bytes:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")
    
    if len(file_bytes) > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )
    
    return file_bytes


def decode_image(file_bytes: bytes) -> Image.Image:
    """
    Decode raw bytes to a fully loaded PIL image.
    
    Raises:
        HTTPException: 400 when the bytes are not a decodable image
    """
    try:
        image = Image.open(io.BytesIO(file_bytes))
        image.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"Failed to decode image: {str(e)}")

    return to_8bit(image)


def to_8bit(image: Image.Image) -> Image.Image:
    """
    Scale 16-bit and 32-bit single-channel images down to 8-bit "L".

    PIL's own convert() clips these modes at 255 instead of scaling them.
    Integer modes are taken as 16-bit samples (PNG, TIFF); float images as
    0..1 intensities. Other modes are returned unchanged.
    """
    if image.mode.startswith("I;16"):
        samples = np.asarray(image).astype(np.uint32)
    elif image.mode == "I":
        samples = np.clip(np.asarray(image), 0, 65535).astype(np.uint32)
    elif image.mode == "F":
        scaled = np.clip(np.asarray(image, dtype=np.float32), 0.0, 1.0) * 255.0
        return Image.fromarray(np.rint(scaled).astype(np.uint8))
    else:
        return image

    return Image.fromarray((samples >> 8).astype(np.uint8))


def to_rgb_array(image: Image.Image) -> np.ndarray:
    """
    Convert a PIL image to an (H, W, 3) uint8 RGB array.

    Alpha is dropped here; transparency is handled separately by `alpha_mask`.
    """
    image = to_8bit(image)
    if image.mode != "RGB":
        image = image.convert("RGB")
    return np.asarray(image, dtype=np.uint8)


def alpha_mask(image: Image.Image) -> Optional[np.ndarray]:
    """Boolean (H, W) mask of non-transparent pixels, or None for opaque images."""
    if image.mode == "P" and "transparency" in image.info:
        image = image.convert("RGBA")
    if "A" not in image.getbands():
        return None
    alpha = np.asarray(image.getchannel("A"), dtype=np.uint8)
    return alpha > 0


def resize_long_edge(image: Image.Image, max_edge: int = None) -> Image.Image:
    """
    Resize image so the longest edge is at most max_edge pixels.
    
    Args:
        image: Input PIL image
        max_edge: Maximum edge size (default from config)
        
    Returns:
        Resized copy, or the input unchanged when already small enough
    """
    if max_edge is None:
        max_edge = config.MAX_EDGE
    
    width, height = image.size
    current_max = max(width, height)
    
    if current_max <= max_edge:
        return image
    
    scale = max_edge / current_max
    new_size = (max(1, int(width * scale)), max(1, int(height * scale)))
    
    # BOX averages source pixels, flat regions stay exact
    return image.resize(new_size, Image.Resampling.BOX)


def encode_png_base64(image: Image.Image) -> str:
    """Encode a PIL image as PNG and return the ASCII base64 payload."""
    image = to_8bit(image)
    if image.mode not in ("1", "L", "LA", "P", "RGB", "RGBA"):
        image = image.convert("RGBA" if "A" in image.getbands() else "RGB")
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return base64.b64encode(buffer.getvalue()).decode("ascii")
