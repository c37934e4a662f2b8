"""FastAPI application entry point."""

import hashlib
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from app.config import settings
from app.database import create_tables
from app.routes import authors, courses
from app.shaping.pagination import PAGINATION_HEADER

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events for startup/shutdown."""
    # Startup: ensure tables exist
    if settings.create_tables_on_startup:
        await create_tables()
        logger.info("Database tables ensured")

    yield  # Application runs here

    # Shutdown: nothing needed currently


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        # Prevent clickjacking
        response.headers["X-Frame-Options"] = "DENY"
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        # Referrer policy
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


class CacheHeadersMiddleware(BaseHTTPMiddleware):
    """Add Cache-Control and ETag headers to reads, answering 304 when unchanged.

    The ETag is a hash of the response body, so it changes with the
    negotiated representation and the requested fields.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        if request.method not in ("GET", "HEAD") or response.status_code != status.HTTP_200_OK:
            return response

        response.headers["Cache-Control"] = f"private, max-age={settings.cache_max_age}, must-revalidate"
        response.headers["Vary"] = "Accept"
        if request.method == "HEAD":
            return response

        body = b"".join([chunk async for chunk in response.body_iterator])
        etag = f'"{hashlib.sha256(body).hexdigest()}"'
        headers = dict(response.headers)
        headers["ETag"] = etag

        if _etag_matches(request.headers.get("If-None-Match"), etag):
            not_modified_headers = {k: v for k, v in headers.items() if k not in ("content-length", "content-type")}
            return Response(status_code=status.HTTP_304_NOT_MODIFIED, headers=not_modified_headers)

        return Response(content=body, status_code=response.status_code, headers=headers)


def _etag_matches(if_none_match: str | None, etag: str) -> bool:
    if not if_none_match:
        return False
    candidates = [tag.strip().removeprefix("W/") for tag in if_none_match.split(",")]
    return "*" in candidates or etag in candidates


app = FastAPI(
    title="Course Library",
    description="Authors and their courses, with data shaping, sorting, paging and HATEOAS",
    version="0.1.0",
    lifespan=lifespan,
)

# Security headers middleware (applied to all responses)
app.add_middleware(SecurityHeadersMiddleware)

# Cache-Control and ETag validation on reads
app.add_middleware(CacheHeadersMiddleware)

# CORS middleware for frontend
# Parse comma-separated origins from config
_cors_origins = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "HEAD", "OPTIONS", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["Accept", "Content-Type", "If-None-Match"],
    expose_headers=[PAGINATION_HEADER, "Location", "ETag"],
)

# Include API routers
app.include_router(authors.router, prefix="/api")
app.include_router(courses.router, prefix="/api")


@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API info."""
    return {
        "name": "Course Library API",
        "version": "0.1.0",
        "docs": "/docs",
    }
