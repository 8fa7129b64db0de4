"""
Exercise suggestion API endpoints.

Suggestions come from the wger catalog and fall back to a static list
when the catalog can't be reached. The endpoints always answer 200 with
whatever the service returned; ``success: false`` plus ``error`` tells
the caller the list came from the fallback table.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel, Field

from ...core.exercises.models import SuggestionResult
from ..dependencies import ClientRepositoryDep, SettingsDep, SuggestionServiceDep

logger = logging.getLogger(__name__)

router = APIRouter()

MAX_LIMIT = 50


# ---------------------------------------------------------------------------
# Response Models
# ---------------------------------------------------------------------------

class SuggestedExerciseItem(BaseModel):
    """A single suggested exercise."""
    name: str
    category: Optional[str] = Field(None, description="Catalog category, when known")
    description: str = Field(description="Plain text, at most 200 characters")


class SuggestionResponse(BaseModel):
    """Suggested exercises for the next session."""
    success: bool = Field(description="False when the fallback list was used")
    exercises: list[SuggestedExerciseItem]
    error: Optional[str] = Field(None, description="Why the fallback list was used")


def _suggestion_response(result: SuggestionResult) -> SuggestionResponse:
    return SuggestionResponse(
        success=result.success,
        exercises=[
            SuggestedExerciseItem(
                name=e.name,
                category=e.category,
                description=e.description,
            )
            for e in result.exercises
        ],
        error=result.error,
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get(
    "/clients/{client_id}/suggestions",
    response_model=SuggestionResponse,
    status_code=status.HTTP_200_OK,
    summary="Suggested exercises for a client",
    description="Random picks from the exercise catalog, with a goal-based fallback",
)
async def suggest_for_client(
    client_id: str,
    repository: ClientRepositoryDep,
    service: SuggestionServiceDep,
    settings: SettingsDep,
    limit: Optional[int] = Query(None, ge=0, le=MAX_LIMIT),
) -> SuggestionResponse:
    client = repository.get_by_id(client_id)
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Client not found",
        )

    result = await service.suggest(
        client.goal,
        limit if limit is not None else settings.suggestion_limit,
    )

    logger.info(
        "Suggested exercises for client",
        extra={
            "client_id": client_id,
            "success": result.success,
            "count": len(result.exercises),
        }
    )

    return _suggestion_response(result)


@router.get(
    "/exercises/suggestions",
    response_model=SuggestionResponse,
    status_code=status.HTTP_200_OK,
    summary="Suggested exercises for a goal",
)
async def suggest_for_goal(
    service: SuggestionServiceDep,
    settings: SettingsDep,
    goal: Optional[str] = Query(None, description="Fitness goal, e.g. Weight Loss"),
    limit: Optional[int] = Query(None, ge=0, le=MAX_LIMIT),
) -> SuggestionResponse:
    result = await service.suggest(
        goal,
        limit if limit is not None else settings.suggestion_limit,
    )
    return _suggestion_response(result)
