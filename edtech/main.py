"""Main FastAPI application."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from edtech.config import configure_logging, get_settings
from edtech.database import dispose_engine, initialize_database, ping_database
from edtech.infrastructure.common.exception_handlers import register_exception_handlers
from edtech.infrastructure.identity.routers import users
from edtech.infrastructure.matching.routers import matching_requests, tutors

settings = get_settings()

configure_logging(settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Initialise the database on startup and release it on shutdown."""
    initialize_database(settings)
    logger.info(
        "application_started",
        project=settings.PROJECT_NAME,
        environment=settings.ENVIRONMENT,
        event_sink=settings.EVENT_SINK,
    )
    yield
    dispose_engine()
    logger.info("application_stopped")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    docs_url=f"{settings.API_V1_PREFIX}/docs",
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(users.router, prefix=settings.API_V1_PREFIX)
app.include_router(tutors.router, prefix=settings.API_V1_PREFIX)
app.include_router(matching_requests.router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "Welcome to edtech API"}


@app.get("/health", response_model=None)
def health() -> dict[str, str] | JSONResponse:
    if not ping_database():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "database": "unavailable"},
        )
    return {"status": "healthy", "database": "ok"}


@app.get(f"{settings.API_V1_PREFIX}/")
def api_root() -> dict[str, str]:
    return {
        "message": "edtech API v1",
        "version": settings.VERSION,
        "docs": f"{settings.API_V1_PREFIX}/docs",
    }
