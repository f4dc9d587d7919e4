"""
Color Analyzer API Schemas
Pydantic models for the analysis and filter endpoints.
"""
from enum import IntEnum
from typing import List

from pydantic import BaseModel, Field


HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class FilterType(IntEnum):
    """Filter selector sent as the `filterType` form field."""
    GRAYSCALE = 0
    SEPIA = 1
    NEGATIVE = 2

    @property
    def label(self) -> str:
        return self.name.lower()


class ColorAnalysisResponse(BaseModel):
    """Palette returned by /analyze-colors."""
    colors: List[str] = Field(
        ...,
        description="Ordered hex colors in format #RRGGBB"
    )


class FilteredImageResponse(BaseModel):
    """Filtered image returned by /apply-filter."""
    filtered: str = Field(
        ...,
        description="Base64-encoded PNG of the filtered image"
    )


class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool = Field(True, description="Service health status")
    version: str = Field(..., description="Service version")
    service: str = Field("color-analyzer", description="Service name")
    processor: str = Field(..., description="Active processor ('local' or 'mock')")


class ErrorResponse(BaseModel):
    """Error response."""
    error: str = Field(..., description="Error message")
