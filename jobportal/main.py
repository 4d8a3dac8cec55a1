"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobportal.api import auth, portals
from jobportal.config import get_settings
from jobportal.database import init_db
from jobportal.errors import (
    InternalError,
    MethodError,
    PortalAppError,
    UnroutedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    init_db()
    yield


app = FastAPI(
    title="Job Portal API",
    description="Categorized job board lists with Google site-search queries",
    version="0.1.0",
    lifespan=lifespan,
)


def error_response(error: PortalAppError, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content={"error": error.message},
        headers=headers,
    )


@app.exception_handler(PortalAppError)
async def portal_error_handler(request: Request, exc: PortalAppError):
    return error_response(exc)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Render routing failures in the same ``{"error": ...}`` shape."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return error_response(UnroutedError("Endpoint not found"))
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return error_response(MethodError("Method not allowed"), headers=exc.headers)
    return JSONResponse(
        status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "Invalid request"
    return error_response(ValidationError(f"Invalid request: {message}"))


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return error_response(InternalError(str(exc)))


@app.middleware("http")
async def answer_options(request: Request, call_next):
    """Plain OPTIONS requests get an empty 200; CORS preflights never reach here.

    Unhandled errors are rendered here rather than by a server-level handler so
    the response still passes through the CORS middleware.
    """
    if request.method == "OPTIONS":
        return Response(status_code=status.HTTP_200_OK, media_type="application/json")
    try:
        return await call_next(request)
    except Exception as e:
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {e}")
        return error_response(InternalError(str(e)))


# Added last so it wraps everything else, including error responses
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Register routers
app.include_router(auth.router, prefix=settings.api_prefix)
app.include_router(portals.router, prefix=settings.api_prefix)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
