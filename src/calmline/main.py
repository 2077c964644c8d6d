"""
CALMLINE FastAPI Application Entry Point

Main application initialization with:
- Lifespan management (lexicon load on startup)
- CORS configuration
- Request context middleware (access log, security headers, errors)
- Router registration
- Health and metrics endpoints

SAFETY-CRITICAL: If the lexicon cannot be loaded the lifespan
re-raises and the server refuses to start.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from calmline.config import Settings, get_settings
from calmline.config.logging_config import configure_logging, get_logger
from calmline.api.dependencies import set_detector
from calmline.api.middleware.request_context import RequestContextMiddleware
from calmline.api.v1.router import api_router
from calmline.infrastructure.metrics import metrics_router, update_system_info
from calmline.infrastructure.monitoring import init_sentry
from calmline.services.detection.lexicon_loader import LexiconConfigError
from calmline.services.safety.stress_detector import StressSignalDetector

# Initialize settings and logging
settings = get_settings()
configure_logging(settings)
logger = get_logger(__name__)


def create_application(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        app_settings: Settings override (defaults to environment settings)

    Returns:
        Configured FastAPI application
    """
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """
        Application lifespan manager.

        Loads the lexicon once; it is read-only for the life of the process.
        """
        logger.info(
            "Starting CALMLINE application",
            env=app_settings.env,
            version="0.1.0",
        )

        init_sentry(
            dsn=app_settings.sentry_dsn.get_secret_value(),
            environment=app_settings.env,
        )

        try:
            detector = StressSignalDetector.from_settings(app_settings.detector)
        except LexiconConfigError as e:
            logger.critical(
                "Lexicon failed to load, refusing to start",
                source=e.source,
                error=str(e),
            )
            raise

        set_detector(detector)
        update_system_info(
            environment=app_settings.env,
            lexicon_version=detector.lexicon.version,
        )
        logger.info("Stress-signal detector initialized")

        try:
            yield
        finally:
            logger.info("Shutting down CALMLINE application")
            set_detector(None)

    app = FastAPI(
        title="CALMLINE API",
        description="Stress-signal detection and escalation service",
        version="0.1.0",
        docs_url="/docs" if not app_settings.is_production() else None,
        redoc_url="/redoc" if not app_settings.is_production() else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(
        RequestContextMiddleware,
        enable_hsts=app_settings.is_production(),
    )

    app.include_router(
        api_router,
        prefix=f"/api/{app_settings.api_version}",
    )
    app.include_router(metrics_router)

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        """Root endpoint - basic info."""
        return {
            "name": "CALMLINE API",
            "version": "0.1.0",
            "status": "operational",
        }

    return app


# Create application instance
app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "calmline.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.env == "development",
        log_level=settings.log_level.lower(),
    )
