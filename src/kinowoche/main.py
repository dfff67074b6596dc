"""FastAPI application entry point."""

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kinowoche.api.routes import cinemas, health, movies, showtimes
from kinowoche.config import settings
from kinowoche.errors import ApiError, api_error_handler, unhandled_error_handler

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build the application with CORS, routers and error handlers."""
    app = FastAPI(
        title="KinoWoche API",
        description="Seven-day cinema showtimes for German cities",
        version="0.1.0",
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(cinemas.router, prefix="/api", tags=["cinemas"])
    app.include_router(showtimes.router, prefix="/api", tags=["showtimes"])
    app.include_router(movies.router, prefix="/api", tags=["movies"])

    logger.info(
        f"SerpApi key {'set' if settings.serpapi_key else 'missing'}, "
        f"TMDb key {'set' if settings.tmdb_key else 'missing'}"
    )
    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    uvicorn.run("kinowoche.main:app", host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    run()
