"""FastAPI application entry point."""

import json
import logging
import sys
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text
from starlette.middleware.base import BaseHTTPMiddleware

from dashboard_config import __version__
from dashboard_config.api.routes import api_router
from dashboard_config.core.cache import cache
from dashboard_config.core.config import settings
from dashboard_config.core.feature_registry import list_features
from dashboard_config.core.presets import list_presets
from dashboard_config.core.rate_limit import limiter
from dashboard_config.db.base import Base
from dashboard_config.db.session import SessionLocal, engine
from dashboard_config import models  # noqa: F401  (register tables on Base.metadata)
from dashboard_config.services.feature_dispatcher import feature_dispatcher

# Configure logging - JSON in production, human-readable in dev
root_logger = logging.getLogger()
root_logger.setLevel(getattr(logging, settings.log_level))
root_logger.handlers.clear()

if settings.debug:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
else:
    class JSONFormatter(logging.Formatter):
        def format(self, record):
            return json.dumps({
                "ts": self.formatTime(record, self.datefmt),
                "level": record.levelname,
                "logger": record.name,
                "msg": record.getMessage(),
                "module": record.module,
                "line": record.lineno,
            })

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())

root_logger.addHandler(handler)
logger = logging.getLogger(__name__)
request_logger = logging.getLogger("requests")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and latency of every API request."""

    async def dispatch(self, request: Request, call_next):
        if request.url.path in ("/health", "/health/ready", "/docs", "/openapi.json"):
            return await call_next(request)

        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception as e:
            request_logger.error(
                f"Error: {request.method} {request.url.path} - {e} - "
                f"Time: {time.time() - start_time:.3f}s"
            )
            raise

        log_level = logging.WARNING if response.status_code >= 400 else logging.INFO
        request_logger.log(
            log_level,
            f"{request.method} {request.url.path} - Status: {response.status_code} - "
            f"Time: {time.time() - start_time:.3f}s",
        )
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Starting dashboard config service: %d features, %d presets, %d dispatch handlers",
        len(list_features()),
        len(list_presets()),
        len(feature_dispatcher),
    )

    # SQLite dev databases are created in place; other backends are provisioned externally
    if settings.database_url.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created (SQLite mode)")

    yield

    cache.clear()
    logger.info("Shutting down dashboard config service")


app = FastAPI(
    title="Venue Dashboard Configuration",
    description="Feature resolution, terminology and white-label theming per venue",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(RequestLoggingMiddleware)

# CORS last so it runs first (Starlette LIFO order)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "PUT", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept", "Accept-Language", "Origin"],
    max_age=600,
)

app.include_router(api_router, prefix=settings.api_v1_prefix)


@app.get("/health")
def health_check():
    """Basic liveness check endpoint."""
    return {"status": "healthy", "version": __version__}


@app.get("/health/ready")
def readiness_check():
    """Readiness check: database reachable, cache usage."""
    db = None
    try:
        db = SessionLocal()
        db.execute(text("SELECT 1"))
        database = "healthy"
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        database = "unhealthy"
    finally:
        if db:
            db.close()

    body = {
        "status": "ready" if database == "healthy" else "not_ready",
        "checks": {"database": database},
        "cache": cache.stats(),
    }
    return JSONResponse(status_code=200 if database == "healthy" else 503, content=body)
