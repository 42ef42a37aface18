# WorkHours - Main Application
# FastAPI application factory and startup

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.config import get_settings
from app.database import check_connection
from app.errors import ApiError, api_error_handler
from app.logging_config import configure_logging


settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan events.

    Runs on startup and shutdown.
    """
    logger.info("Starting %s...", settings.app_name)

    # Verify database connection
    try:
        check_connection()
        logger.info("Database connection: OK")
    except Exception as e:
        logger.error("Database connection: FAILED - %s", e)
        if not settings.debug:
            raise

    yield

    logger.info("Shutting down %s...", settings.app_name)


def create_app() -> FastAPI:
    """
    Application factory.

    Creates and configures the FastAPI application.
    """
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Approved work hours summary for the dashboard",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_exception_handler(ApiError, api_error_handler)

    # Include routers
    from app.routes import auth, dashboard
    app.include_router(auth.router)
    app.include_router(dashboard.router)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        """Health check endpoint for monitoring."""
        try:
            check_connection()
            db_status = "healthy"
        except Exception as e:
            db_status = f"unhealthy: {e}"

        return {
            "status": "ok",
            "app": settings.app_name,
            "database": db_status,
        }

    return app


# Create the app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8001,
        reload=settings.debug,
    )
