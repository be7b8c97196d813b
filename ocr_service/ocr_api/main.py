"""
main.py

This is the main entry point of the FastAPI application.
Here we create the FastAPI app, register all API routes
and the handlers that turn every error into {"error": "..."}.

This file does NOT contain business logic.
It only wires everything together.
"""

import logging
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

# Import API routers
from ocr_api.api.ocr import router as ocr_router
from ocr_api.api.health import router as health_router
from ocr_api.config import LOG_LEVEL

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None)
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed JSON or a wrongly typed field is a client mistake
    logger.info("Rejected request to %s: %s", request.url.path, exc.errors())

    if request.url.path == "/base64":
        message = "Invalid request body. Expected JSON like {\"image\": \"<base64>\"}."
    else:
        message = "Invalid request. Please check the submitted fields."

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": message}
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"}
    )


def create_app() -> FastAPI:
    """
    Creates and returns the FastAPI application instance.
    This function helps keep the app creation clean and testable.
    """
    logging.basicConfig(level=LOG_LEVEL)

    app = FastAPI(
        title="OCR Service",
        description="Extract text from images given by URL, base64 or file upload",
        version="1.0.0"
    )

    # Register API routes
    app.include_router(health_router, prefix="/health", tags=["Health"])
    app.include_router(ocr_router, tags=["OCR"])

    # Assets used by the HTML page
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    # Every error leaves the service as {"error": "..."}
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    return app


# Create the FastAPI app instance
app = create_app()
