from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from color_analyzer import __version__
from color_analyzer.api.routes import router
from color_analyzer.config import config
from color_analyzer.schemas import HealthResponse
from color_analyzer.utils.logging import get_logger
from color_analyzer.utils.metrics import get_metrics

logger = get_logger()

app = FastAPI(
    title="Color Analyzer Backend",
    description="Palette extraction and image filters for uploaded images",
    version=__version__
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"]
)

# Same routes for external-host clients (/analyze-colors) and same-origin ones (/api/analyze-colors)
app.include_router(router)
app.include_router(router, prefix="/api", include_in_schema=False)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc: StarletteHTTPException):
    """Render every HTTP error as {"error": ...}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc: RequestValidationError):
    """Malformed form fields are client errors, not 422s."""
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query"))
    message = first.get("msg", "Invalid request")
    logger.warning("Request validation failed", extra={"path": request.url.path, "field": field})
    return JSONResponse(
        status_code=400,
        content={"error": f"{field}: {message}" if field else message}
    )


@app.get("/healthz", response_model=HealthResponse)
def health_check():
    """Health check endpoint."""
    return HealthResponse(
        ok=True,
        version=__version__,
        service="color-analyzer",
        processor=config.PROCESSOR
    )


@app.get("/metrics")
def metrics_summary():
    """In-process request counters and timing stats."""
    try:
        return get_metrics().get_summary()
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to get metrics: {str(e)}")


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": "Color Analyzer Backend API",
        "version": __version__,
        "docs": "/docs"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config.HOST, port=config.PORT)
