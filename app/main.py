"""FastAPI application entry point."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import (
    auth,
    brands,
    cars,
    categories,
    health,
    reviews,
    upload,
    users,
    video_testimonials,
)
from app.config import settings
from app.core.logging import setup_logging
from app.database.mongo import get_database
from app.middleware.request_logging import RequestLoggingMiddleware
from app.services.user_service import UserService

setup_logging(settings.LOG_LEVEL)

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Catalog, review and media API for the ES Rent luxury car marketplace",
    version=settings.APP_VERSION,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)


def validation_message(exc: RequestValidationError) -> str:
    """Turn the first validation error into a single readable sentence."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    error = errors[0]
    fields = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(fields)
    message = str(error.get("msg", "Invalid value")).removeprefix("Value error, ")
    if error.get("type") == "missing" and field:
        return f"Missing required field: {field}"
    if field:
        return f"Invalid value for {field}: {message}"
    return message


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": validation_message(exc)},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


app.include_router(health.router, prefix="/api", tags=["Health"])
app.include_router(auth.router, prefix="/api")
app.include_router(users.router, prefix="/api")
app.include_router(cars.router, prefix="/api")
app.include_router(brands.router, prefix="/api")
app.include_router(categories.router, prefix="/api")
app.include_router(reviews.router, prefix="/api")
app.include_router(upload.router, prefix="/api")
app.include_router(video_testimonials.router, prefix="/api")


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "message": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/api/docs",
    }


@app.on_event("startup")
def startup_event():
    if settings.DEFAULT_ADMIN_EMAIL and settings.DEFAULT_ADMIN_PASSWORD:
        UserService(get_database()).ensure_default_admin(
            settings.DEFAULT_ADMIN_EMAIL,
            settings.DEFAULT_ADMIN_PASSWORD,
            settings.DEFAULT_ADMIN_NAME,
        )
