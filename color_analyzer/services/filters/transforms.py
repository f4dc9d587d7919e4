"""
Pixel filter transforms.

All transforms take and return (H, W, 3) uint8 RGB arrays; alpha is
handled by the caller.
"""
from typing import Callable, Dict

import cv2
import numpy as np
from PIL import Image

from color_analyzer.schemas import FilterType
from color_analyzer.services.imaging import to_8bit


# Rows produce R', G', B' from (R, G, B)
SEPIA_MATRIX = np.array([
    [0.393, 0.769, 0.189],
    [0.349, 0.686, 0.168],
    [0.272, 0.534, 0.131],
], dtype=np.float32)


def grayscale(rgb: np.ndarray) -> np.ndarray:
    """BT.601 luma replicated to three equal channels."""
    gray = cv2.cvtColor(rgb, cv2.COLOR_RGB2GRAY)
    return cv2.cvtColor(gray, cv2.COLOR_GRAY2RGB)


def sepia(rgb: np.ndarray) -> np.ndarray:
    """Classic sepia tone; cv2.transform saturates at 255."""
    return cv2.transform(rgb, SEPIA_MATRIX)


def negative(rgb: np.ndarray) -> np.ndarray:
    return cv2.bitwise_not(rgb)


FILTERS: Dict[FilterType, Callable[[np.ndarray], np.ndarray]] = {
    FilterType.GRAYSCALE: grayscale,
    FilterType.SEPIA: sepia,
    FilterType.NEGATIVE: negative,
}


def apply_filter_to_image(image: Image.Image, filter_type: FilterType) -> Image.Image:
    """
    Apply a filter to a PIL image, keeping its alpha channel if it has one.
    
    Args:
        image: Decoded input image (any mode)
        filter_type: Which transform to apply
        
    Returns:
        New RGB or RGBA image
    """
    transform = FILTERS[filter_type]
    image = to_8bit(image)
    
    has_alpha = "A" in image.getbands() or (image.mode == "P" and "transparency" in image.info)
    if has_alpha:
        rgba = np.array(image.convert("RGBA"), dtype=np.uint8)
        out = np.empty_like(rgba)
        out[..., :3] = transform(np.ascontiguousarray(rgba[..., :3]))
        out[..., 3] = rgba[..., 3]
        return Image.fromarray(out)
    
    rgb = np.array(image.convert("RGB"), dtype=np.uint8)
    return Image.fromarray(transform(rgb))
