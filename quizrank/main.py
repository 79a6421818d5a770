"""
QuizRank Backend
Quiz generation, grading and leaderboard API
"""

from contextlib import asynccontextmanager
import logging

import sentry_sdk
from fastapi import FastAPI
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from quizrank.api.v1.api import api_router
from quizrank.core.config import settings
from quizrank.core.database import init_db
from quizrank.core.exceptions import register_exception_handlers
from quizrank.core.logging import setup_logging
from quizrank.middleware import (
    LoggingMiddleware,
    RequestIDMiddleware,
    add_rate_limiting,
    setup_cors,
)
from quizrank.services.users import seed_first_admin

logger = logging.getLogger(__name__)


def init_sentry() -> None:
    """Initialize Sentry if DSN is provided"""
    if not settings.SENTRY_DSN:
        return
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
        ],
        traces_sample_rate=1.0 if settings.DEBUG else 0.1,
        environment=settings.ENVIRONMENT,
    )
    logger.info("Sentry initialized")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    setup_logging()
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    init_db()
    logger.info("Database initialized")
    seed_first_admin()

    yield

    logger.info("Shutting down application")


def create_app() -> FastAPI:
    init_sentry()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Last added runs first: CORS, request id, logging, rate limit
    if settings.RATE_LIMIT_ENABLED:
        add_rate_limiting(app)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    setup_cors(app)

    register_exception_handlers(app)

    @app.get("/")
    def root():
        """Root endpoint"""
        return {
            "message": f"Welcome to {settings.APP_NAME}",
            "version": settings.APP_VERSION,
            "docs": "/docs",
            "health": f"{settings.API_V1_STR}/health",
        }

    app.include_router(api_router, prefix=settings.API_V1_STR)

    # Prometheus metrics endpoint (debug only)
    if settings.DEBUG:
        from prometheus_client import make_asgi_app
        app.mount("/metrics", make_asgi_app())

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "quizrank.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
