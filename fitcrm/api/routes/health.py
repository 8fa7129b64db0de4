"""
Service status endpoints.

``/health`` answers as long as the process is up. ``/health/ready``
also loads the client collection, so a misconfigured or unreachable
storage backend is reported here instead of on the first client request.
The exercise catalog is not probed: it has a fallback and can't make
the service unready.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Response, status
from pydantic import BaseModel, Field

from ... import __version__
from ...config.settings import Settings
from ...infrastructure.storage.clients import JsonClientStore
from ..dependencies import ClientStoreDep, SettingsDep

logger = logging.getLogger(__name__)

router = APIRouter()

CHECK_OK = "ok"
CHECK_FAILED = "error"


class LivenessResponse(BaseModel):
    """Process status plus the backends it was configured with."""
    status: str
    version: str
    storage_backend: str
    catalog: str = Field(description="'wger' or 'mock'")


class ReadinessCheck(BaseModel):
    """Outcome of one readiness probe."""
    name: str
    status: str
    error: Optional[str] = None
    clients: Optional[int] = Field(None, description="Clients in the collection, for the storage probe")


class ReadinessResponse(BaseModel):
    """All readiness probes; ``status`` is "ready" only if every one passed."""
    status: str
    version: str
    checks: list[ReadinessCheck]


def _check_configuration(settings: Settings) -> ReadinessCheck:
    problems = settings.validate_required_fields()
    if problems:
        return ReadinessCheck(
            name="configuration",
            status=CHECK_FAILED,
            error=f"Missing or invalid settings: {', '.join(problems)}",
        )
    return ReadinessCheck(name="configuration", status=CHECK_OK)


def _check_storage(client_store: JsonClientStore) -> ReadinessCheck:
    # The store itself fails soft on bad data; only backend errors reach here
    try:
        count = len(client_store.load())
    except Exception as e:
        logger.error(
            "Client collection could not be loaded",
            extra={"key": client_store.key, "error": str(e)}
        )
        return ReadinessCheck(name="storage", status=CHECK_FAILED, error=str(e))
    return ReadinessCheck(name="storage", status=CHECK_OK, clients=count)


@router.get(
    "",
    response_model=LivenessResponse,
    summary="Liveness",
    description="200 while the process runs. Touches no backend.",
)
async def liveness(settings: SettingsDep) -> LivenessResponse:
    return LivenessResponse(
        status=CHECK_OK,
        version=__version__,
        storage_backend=settings.storage_backend,
        catalog="mock" if settings.catalog_mock_mode else "wger",
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness",
    description="200 when configuration is complete and the client collection loads, 503 otherwise.",
    responses={503: {"model": ReadinessResponse, "description": "A probe failed"}},
)
async def readiness(
    settings: SettingsDep,
    client_store: ClientStoreDep,
    response: Response,
) -> ReadinessResponse:
    checks = [_check_configuration(settings), _check_storage(client_store)]
    failed = [c.name for c in checks if c.status != CHECK_OK]

    if failed:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("Service not ready", extra={"failed_checks": failed})

    return ReadinessResponse(
        status="not_ready" if failed else "ready",
        version=__version__,
        checks=checks,
    )
