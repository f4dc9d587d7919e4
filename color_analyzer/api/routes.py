"""
Color Analyzer API Routes
Implements /analyze-colors and /apply-filter.
"""
from typing import Optional

from fastapi import APIRouter, File, Form, UploadFile

from color_analyzer.schemas import (
    ColorAnalysisResponse, ErrorResponse, FilteredImageResponse
)
from color_analyzer.services.orchestrator import handle_analyze, handle_filter

router = APIRouter(tags=["Color Analysis"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or invalid upload"},
    500: {"model": ErrorResponse, "description": "Processing failure"},
}


@router.post("/analyze-colors",
             response_model=ColorAnalysisResponse,
             responses=ERROR_RESPONSES,
             summary="Analyze image colors")
async def analyze_colors(
    file: Optional[UploadFile] = File(None, description="Image file to analyze")
) -> ColorAnalysisResponse:
    """
    Extract the dominant colors of an uploaded image.
    
    - **file**: any `image/*` upload PIL can decode
    
    Returns `{"colors": ["#RRGGBB", ...]}` ordered by dominance.
    """
    return await handle_analyze(file)


@router.post("/apply-filter",
             response_model=FilteredImageResponse,
             responses=ERROR_RESPONSES,
             summary="Apply an image filter")
async def apply_filter(
    file: Optional[UploadFile] = File(None, description="Image file to filter"),
    filter_type: Optional[str] = Form(None, alias="filterType",
                                      description="0=grayscale, 1=sepia, 2=negative")
) -> FilteredImageResponse:
    """
    Apply grayscale, sepia or negative to an uploaded image.
    
    - **file**: any `image/*` upload PIL can decode
    - **filterType**: "0", "1" or "2" (defaults to grayscale)
    
    Returns `{"filtered": "<base64 PNG>"}`.
    """
    return await handle_filter(file, filter_type)
