"""
Color Analyzer Processors
Interchangeable backends behind the analysis and filter endpoints.

`LocalProcessor` does the real work in-process; `MockProcessor` reproduces
the stub behaviour (fixed palettes after an artificial delay) for front-end
development.
"""
import asyncio
from typing import List, Optional

from PIL import Image
from starlette.concurrency import run_in_threadpool

from color_analyzer.config import config
from color_analyzer.schemas import FilterType
from color_analyzer.services.colors.extraction import extract_palette
from color_analyzer.services.filters.transforms import apply_filter_to_image
from color_analyzer.services.imaging import (
    alpha_mask, encode_png_base64, resize_long_edge, to_rgb_array
)


MOCK_COLORS = [
    "#FF6B6B", "#4ECDC4", "#45B7D1", "#96CEB4", "#FFEAA7", "#DDA0DD",
    "#98D8C8", "#F7DC6F", "#BB8FCE", "#85C1E9", "#F8C471", "#82E0AA",
    "#F1948A", "#85C1E9", "#F4D03F", "#A9DFBF", "#D7BDE2", "#AED6F1",
]


class LocalProcessor:
    """In-process palette extraction and pixel filters."""
    
    name = "local"
    
    def __init__(self, k: int = None, max_edge: int = None,
                 max_samples: int = None, rng_seed: int = None):
        self.k = k if k is not None else config.PALETTE_SIZE
        self.max_edge = max_edge if max_edge is not None else config.MAX_EDGE
        self.max_samples = max_samples if max_samples is not None else config.MAX_SAMPLES
        self.rng_seed = rng_seed if rng_seed is not None else config.RNG_SEED
        
        if not config.validate_palette_size(self.k):
            raise ValueError(f"Invalid palette size: {self.k}")
        if not config.validate_max_edge(self.max_edge):
            raise ValueError(f"Invalid max_edge: {self.max_edge}")
    
    def _analyze(self, image: Image.Image) -> List[str]:
        small = resize_long_edge(image, self.max_edge)
        return extract_palette(
            to_rgb_array(small),
            mask=alpha_mask(small),
            k=self.k,
            max_samples=self.max_samples,
            rng_seed=self.rng_seed
        )
    
    def _apply_filter(self, image: Image.Image, filter_type: FilterType) -> str:
        return encode_png_base64(apply_filter_to_image(image, filter_type))
    
    async def analyze(self, image: Image.Image) -> List[str]:
        """Return the image palette, ordered by dominance."""
        return await run_in_threadpool(self._analyze, image)
    
    async def apply_filter(self, image: Image.Image, filter_type: FilterType) -> str:
        """Return the filtered image as base64 PNG."""
        return await run_in_threadpool(self._apply_filter, image, filter_type)


class MockProcessor:
    """Stand-in backend returning fixed data after a delay."""
    
    name = "mock"
    
    def __init__(self, analyze_delay_ms: int = None, filter_delay_ms: int = None):
        self.analyze_delay_ms = (
            analyze_delay_ms if analyze_delay_ms is not None else config.MOCK_ANALYZE_DELAY_MS
        )
        self.filter_delay_ms = (
            filter_delay_ms if filter_delay_ms is not None else config.MOCK_FILTER_DELAY_MS
        )
    
    async def analyze(self, image: Image.Image) -> List[str]:
        await asyncio.sleep(self.analyze_delay_ms / 1000)
        return list(MOCK_COLORS)
    
    async def apply_filter(self, image: Image.Image, filter_type: FilterType) -> str:
        # The filter is not applied; the upload comes back unchanged as PNG
        await asyncio.sleep(self.filter_delay_ms / 1000)
        return await run_in_threadpool(encode_png_base64, image)


def get_processor(name: Optional[str] = None):
    """
    Build the processor selected by name or by `config.PROCESSOR`.
    
    Raises:
        ValueError: For an unknown processor name
    """
    name = name or config.PROCESSOR
    if not config.validate_processor(name):
        raise ValueError(f"Unknown processor: {name}")
    if name == "mock":
        return MockProcessor()
    return LocalProcessor()
