"""
RateTheDogs HTTP API.
Builds the FastAPI application: middleware, error envelope and routers.
"""

import argparse
import sys
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from . import __version__
from .config import settings
from .db.session import init_db
from .errors import register_error_handlers
from .middleware.anon import AnonymousIdMiddleware
from .middleware.request_logging import RequestLoggingMiddleware
from .routes import (
    admin_router,
    breeds_router,
    dogs_router,
    images_router,
    leaderboard_router,
    me_router,
)


def configure_logging(level: str = None) -> None:
    """Replace the default loguru handler with one on stderr."""
    logger.remove()
    logger.add(sys.stderr, level=(level or settings.log_level).upper())


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("RateTheDogs API is starting up...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Admin secret configured: {'Yes' if settings.admin_secret else 'No'}")
    init_db()
    logger.info("Startup complete - ready to accept requests")
    yield
    logger.info("RateTheDogs API shutting down")


def create_app() -> FastAPI:
    """
    Create the FastAPI application.

    Returns:
        Configured app with CORS, anonymous identity, request logging,
        the JSON error envelope and all routers
    """
    app = FastAPI(
        title="RateTheDogs API",
        description="Rate dogs anonymously, skip dogs and track personal stats",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(AnonymousIdMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "X-Admin-Secret"],
    )

    register_error_handlers(app)

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {
            "name": "RateTheDogs API",
            "version": __version__,
            "status": "healthy",
        }

    app.include_router(dogs_router)
    app.include_router(breeds_router)
    app.include_router(leaderboard_router)
    app.include_router(me_router)
    app.include_router(admin_router)
    app.include_router(images_router)

    return app


configure_logging()
app = create_app()


def main() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    parser = argparse.ArgumentParser(description="Run the RateTheDogs API server")
    parser.add_argument("--host", default="0.0.0.0", help="Bind address")
    parser.add_argument("--port", type=int, default=8787, help="Port to listen on")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args()

    logger.info(f"Starting RateTheDogs API on {args.host}:{args.port}")
    uvicorn.run(
        "ratethedogs.api:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )


# Run with: uvicorn ratethedogs.api:app --reload --port 8787
if __name__ == "__main__":
    main()
