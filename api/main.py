"""
FastAPI main application for the Books API.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List, Optional

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.config import config as api_config
from api.errors import BookAPIError
from api.models import ErrorDetail, ErrorResponse, HealthResponse
from api.schemas import format_errors
from api.routes import router as books_router
from storage.database import DatabaseManager
from utilities.logger import setup_logging

# Setup logging
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    setup_logging(
        log_level=api_config.log_level,
        log_format=api_config.log_format,
        log_file=api_config.log_file,
        debug=api_config.debug
    )
    logger.info("Starting Books API")

    # Initialize database connection
    db_manager = DatabaseManager(
        api_config.database_url,
        echo=api_config.database_echo,
        pool_size=api_config.database_pool_size
    )
    try:
        await db_manager.connect()
        if api_config.create_tables:
            await db_manager.create_tables()
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        await db_manager.disconnect()
        raise

    app.state.db_manager = db_manager

    yield

    # Shutdown
    logger.info("Shutting down Books API")
    await db_manager.disconnect()
    app.state.db_manager = None


# Create FastAPI application
app = FastAPI(
    title=api_config.api_title,
    description=api_config.api_description,
    version=api_config.api_version,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=api_config.cors_origins,
    allow_credentials=api_config.cors_allow_credentials,
    allow_methods=api_config.cors_allow_methods,
    allow_headers=api_config.cors_allow_headers,
)


def error_response(status_code: int, message: str, errors: Optional[List[str]] = None, headers=None) -> JSONResponse:
    """Render the uniform error body."""
    body = ErrorResponse(error=ErrorDetail(message=message, status=status_code, errors=errors))
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers
    )


# Exception handlers
@app.exception_handler(BookAPIError)
async def book_api_exception_handler(request: Request, exc: BookAPIError):
    """Handle errors raised by routes and the data access layer."""
    if exc.status_code >= 500:
        logger.error("Request failed", error=exc.message, path=request.url.path)
    return error_response(exc.status_code, exc.message, exc.errors)


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle malformed JSON bodies and query parameters."""
    return error_response(status.HTTP_400_BAD_REQUEST, "Request validation failed", format_errors(exc.errors()))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions."""
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions."""
    logger.error("Unhandled exception", error=str(exc), path=request.url.path)
    message = str(exc) if api_config.debug else "Internal server error"
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message)


# Health check endpoint
@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(request: Request):
    """Health check endpoint."""
    db_status = "unavailable"
    db_manager = getattr(request.app.state, "db_manager", None)
    if db_manager:
        health_info = await db_manager.health_check()
        db_status = health_info.get("status", "unknown")

    return HealthResponse(
        status="healthy" if db_status == "healthy" else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=api_config.api_version,
        database_status=db_status
    )


app.include_router(books_router, prefix="/books")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=api_config.host,
        port=api_config.port,
        reload=api_config.debug,
        log_level=api_config.log_level.lower()
    )
