import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from estatehub.api.router import router as api_router
from estatehub.core.config import settings as app_settings
from estatehub.core.database import engine
from estatehub.core.exceptions import (
    InvalidPropertyDataError,
    LeadNotFoundError,
    PropertyNotFoundError,
    RecordCreationError,
    SiteVisitNotFoundError,
)
from estatehub.core.rate_limit import limiter

# Configure logging
logging.basicConfig(
    level=getattr(logging, app_settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Release pooled database connections on shutdown."""
    logger.info("EstateHub API starting")
    yield
    await engine.dispose()
    logger.info("EstateHub API stopped")


app = FastAPI(
    title="EstateHub Marketplace API",
    description="Property catalog, lead capture and site-visit bookings",
    version="0.1.0",
    lifespan=lifespan,
)

# Attach rate limiter state so slowapi can find it
app.state.limiter = limiter

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


@app.exception_handler(PropertyNotFoundError)
async def property_not_found_handler(request: Request, exc: PropertyNotFoundError):
    logger.warning("Property not found: %s", request.url.path)
    return _error(404, exc.detail)


@app.exception_handler(LeadNotFoundError)
async def lead_not_found_handler(request: Request, exc: LeadNotFoundError):
    logger.warning("Lead not found: %s", request.url.path)
    return _error(404, exc.detail)


@app.exception_handler(SiteVisitNotFoundError)
async def site_visit_not_found_handler(request: Request, exc: SiteVisitNotFoundError):
    logger.warning("Site visit not found: %s", request.url.path)
    return _error(404, exc.detail)


@app.exception_handler(InvalidPropertyDataError)
async def invalid_property_data_handler(
    request: Request, exc: InvalidPropertyDataError
):
    return _error(400, exc.detail)


@app.exception_handler(RecordCreationError)
async def record_creation_handler(request: Request, exc: RecordCreationError):
    return _error(500, exc.detail, details=exc.details)


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    logger.warning("Rate limit exceeded on %s: %s", request.url.path, exc.detail)
    return _error(429, f"Rate limit exceeded: {exc.detail}")


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning("Request validation error: %s", exc.errors())
    return _error(
        400, "Request validation failed", details=jsonable_encoder(exc.errors())
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Catch-all handler for unexpected/unhandled exceptions.

    Returns a generic 500 response so that raw stack traces are never
    leaked to the client.
    """
    logger.error(
        "Unhandled exception on %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=True,
    )
    return _error(500, "An unexpected internal error occurred")
