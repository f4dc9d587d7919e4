"""
Color Analyzer Orchestrator
Runs one upload through validation, decoding and the active processor.
"""
import time
from typing import Optional

from fastapi import HTTPException, UploadFile

from color_analyzer.schemas import (
    ColorAnalysisResponse, FilteredImageResponse, FilterType
)
from color_analyzer.services.imaging import (
    decode_image, read_upload_bytes, validate_file_upload
)
from color_analyzer.services.processors import get_processor
from color_analyzer.utils.ids import generate_request_id
from color_analyzer.utils.logging import get_logger
from color_analyzer.utils.metrics import get_metrics


def parse_filter_type(raw: Optional[str]) -> FilterType:
    """
    Parse the `filterType` form field.
    
    A missing or blank field selects grayscale. Anything that is not one of
    "0", "1", "2" is rejected.
    
    Raises:
        HTTPException: 400 for an invalid selector
    """
    if raw is None or raw.strip() == "":
        return FilterType.GRAYSCALE
    try:
        return FilterType(int(raw.strip()))
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid filter type")


async def handle_analyze(file: Optional[UploadFile]) -> ColorAnalysisResponse:
    """
    Extract the palette of an uploaded image.
    
    Raises:
        HTTPException: 400 for client errors, 500 for processing failures
    """
    request_id = generate_request_id("analyze")
    logger = get_logger()
    metrics = get_metrics()
    start_time = time.time()
    
    metrics.increment_request_count("analyze")
    
    try:
        validate_file_upload(file)
        logger.info("Starting color analysis", extra={
            "request_id": request_id,
            "upload_filename": file.filename,
            "content_type": file.content_type
        })
        
        decode_start = time.time()
        image = decode_image(await read_upload_bytes(file))
        decode_time = (time.time() - decode_start) * 1000
        
        processor = get_processor()
        metrics.increment_processor_count(processor.name)
        
        process_start = time.time()
        colors = await processor.analyze(image)
        process_time = (time.time() - process_start) * 1000
        
        total_time = (time.time() - start_time) * 1000
        logger.info("Color analysis completed successfully", extra={
            "request_id": request_id,
            "processor": processor.name,
            "dims": f"{image.width}x{image.height}",
            "colors": len(colors),
            "ms_decode": decode_time,
            "ms_process": process_time,
            "ms_total": total_time,
            "result": "ok"
        })
        metrics.record_timing("analyze", total_time)
        
        return ColorAnalysisResponse(colors=colors)
    
    except HTTPException as e:
        logger.warning(f"Color analysis rejected: {e.detail}", extra={
            "request_id": request_id,
            "status_code": e.status_code
        })
        metrics.increment_failure_count("analyze", "client")
        raise
    except Exception as e:
        total_time = (time.time() - start_time) * 1000
        logger.error(f"Color analysis failed: {str(e)}", extra={
            "request_id": request_id,
            "ms_total": total_time,
            "result": "error",
            "error_type": type(e).__name__
        })
        metrics.increment_failure_count("analyze", type(e).__name__.lower())
        raise HTTPException(status_code=500, detail="Failed to analyze colors")


async def handle_filter(file: Optional[UploadFile], filter_type_raw: Optional[str]) -> FilteredImageResponse:
    """
    Apply the selected filter to an uploaded image.
    
    Raises:
        HTTPException: 400 for client errors, 500 for processing failures
    """
    request_id = generate_request_id("filter")
    logger = get_logger()
    metrics = get_metrics()
    start_time = time.time()
    
    metrics.increment_request_count("filter")
    
    try:
        validate_file_upload(file)
        filter_type = parse_filter_type(filter_type_raw)
        logger.info("Starting filter", extra={
            "request_id": request_id,
            "upload_filename": file.filename,
            "filter": filter_type.label
        })
        
        image = decode_image(await read_upload_bytes(file))
        
        processor = get_processor()
        metrics.increment_processor_count(processor.name)
        
        filtered = await processor.apply_filter(image, filter_type)
        metrics.increment_filter_count(filter_type.label)
        
        total_time = (time.time() - start_time) * 1000
        logger.info("Filter applied successfully", extra={
            "request_id": request_id,
            "processor": processor.name,
            "filter": filter_type.label,
            "dims": f"{image.width}x{image.height}",
            "ms_total": total_time,
            "result": "ok"
        })
        metrics.record_timing("filter", total_time)
        
        return FilteredImageResponse(filtered=filtered)
    
    except HTTPException as e:
        logger.warning(f"Filter request rejected: {e.detail}", extra={
            "request_id": request_id,
            "status_code": e.status_code
        })
        metrics.increment_failure_count("filter", "client")
        raise
    except Exception as e:
        total_time = (time.time() - start_time) * 1000
        logger.error(f"Filter failed: {str(e)}", extra={
            "request_id": request_id,
            "ms_total": total_time,
            "result": "error",
            "error_type": type(e).__name__
        })
        metrics.increment_failure_count("filter", type(e).__name__.lower())
        raise HTTPException(status_code=500, detail="Failed to apply filter")
