"""
Org Hierarchy API - Main Application

Backoffice service for the organization -> brand -> business -> franchise
tree. Authentication is handled by the gateway in front of it.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import time

from org_hierarchy.api.deps import DbSession
from org_hierarchy.api.router import api_router
from org_hierarchy.config import settings
from org_hierarchy.database import init_db, ping_db
from org_hierarchy.exceptions import ServiceError, create_exception_handlers
from org_hierarchy.middleware import (
    RequestContextLogFilter,
    RequestContextMiddleware,
    RequestLoggingMiddleware,
)
# Import all models to register them with SQLAlchemy metadata before init_db()
from org_hierarchy.models import Organization, Brand, Business, Franchise  # noqa: F401

VERSION = "1.0.0"

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] [%(actor)s] %(message)s",
)
for handler in logging.getLogger().handlers:
    handler.addFilter(RequestContextLogFilter())
logger = logging.getLogger(__name__)

STARTED_AT = time.monotonic()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(f"Starting {settings.SERVICE_NAME}...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    try:
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        # SECURITY: Don't log full exception details which may contain credentials
        logger.error(f"Database initialization failed: {type(e).__name__}")
        logger.warning("App starting without database - /ready will report not ready")
    yield
    logger.info(f"Shutting down {settings.SERVICE_NAME}...")


# SECURITY: Conditionally enable docs based on settings
docs_url = "/docs" if settings.DOCS_ENABLED else None
redoc_url = "/redoc" if settings.DOCS_ENABLED else None

app = FastAPI(
    title="Org Hierarchy API",
    description="Organizations, brands, businesses and franchises",
    version=VERSION,
    docs_url=docs_url,
    redoc_url=redoc_url,
    lifespan=lifespan,
)

# Added last runs first: the request context is set before the access log line
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(RequestContextMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials="*" not in settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

handlers = create_exception_handlers()
app.add_exception_handler(ServiceError, handlers["service"])
app.add_exception_handler(StarletteHTTPException, handlers["http"])
app.add_exception_handler(RequestValidationError, handlers["validation"])
app.add_exception_handler(SQLAlchemyError, handlers["store"])
app.add_exception_handler(Exception, handlers["generic"])

app.include_router(api_router, prefix="/api")


@app.get("/health")
async def health_check():
    """Liveness: the process is up. Does not touch the database."""
    return {
        "status": "healthy",
        "service": settings.SERVICE_NAME,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - STARTED_AT, 3),
    }


@app.get("/ready")
async def readiness_check(db: DbSession):
    """Readiness: the database answers a trivial query."""
    try:
        await ping_db(db)
    except (SQLAlchemyError, OSError) as e:
        logger.warning(f"Readiness check failed: {type(e).__name__}")
        return JSONResponse(
            status_code=503,
            content={"status": "not ready", "error": "Database unavailable"},
        )
    return {"status": "ready", "service": settings.SERVICE_NAME}


# For running with uvicorn directly (development only)
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "org_hierarchy.main:app",
        host="0.0.0.0",
        port=3002,
        reload=settings.DEBUG,
    )
