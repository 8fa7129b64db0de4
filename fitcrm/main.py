"""
FitCRM web application.

``create_app`` builds a fully wired FastAPI instance; tests call it
directly and swap dependencies through ``app.dependency_overrides``.
The module-level ``app`` is what uvicorn serves:

    uvicorn fitcrm.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .api.dependencies import get_client_store, get_key_value_store
from .api.routes import clients, exercises, health
from .config.settings import Settings, get_settings
from .core.clients.sample_data import initialize_sample_data

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)

logger = logging.getLogger(__name__)

API_DESCRIPTION = """
Client management for fitness coaches.

- Add, edit, search and delete clients
- Log workouts to each client's exercise history
- Get suggested exercises for a client's next session

Open an edit form with `GET /api/v1/clients/form?edit={client_id}`
and save it with `PUT /api/v1/clients/{client_id}`.
"""


def _seed_sample_data(settings: Settings) -> None:
    """Write the demo clients if the configured store is empty."""
    client_store = get_client_store(settings, get_key_value_store(settings))
    if initialize_sample_data(client_store):
        logger.info("Empty store seeded with demo clients", extra={"key": client_store.key})


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logging.getLogger().setLevel(settings.log_level.upper())

    logger.info(
        "Starting FitCRM",
        extra={
            "version": __version__,
            "storage_backend": settings.storage_backend,
            "catalog_mock_mode": settings.catalog_mock_mode,
        }
    )

    problems = settings.validate_required_fields()
    if problems:
        # Keep serving so /health/ready can report the problem
        logger.error("Configuration incomplete, skipping sample data", extra={"problems": problems})
    elif settings.seed_sample_data:
        _seed_sample_data(settings)

    yield

    logger.info("Stopping FitCRM")


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    """Log storage and other unexpected failures; hide the details from callers."""
    logger.error(
        "Request failed",
        extra={
            "method": request.method,
            "path": request.url.path,
            "error": str(exc),
        },
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Something went wrong. Please try again."},
    )


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.api_title,
        version=__version__,
        description=API_DESCRIPTION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router, prefix="/health", tags=["Health"])
    app.include_router(clients.router, prefix="/api/v1/clients", tags=["Clients"])
    app.include_router(exercises.router, prefix="/api/v1", tags=["Exercises"])
    app.add_exception_handler(Exception, _unhandled_error)

    @app.get("/", include_in_schema=False)
    async def index():
        return {"name": settings.api_title, "version": __version__, "docs": "/docs"}

    logger.debug("Application created", extra={"cors_origins": settings.cors_origins_list})

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "fitcrm.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
        log_level=get_settings().log_level.lower(),
    )
