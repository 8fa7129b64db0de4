"""
Client management API endpoints.

Covers the client list and search, the create/edit form, deletion and
the exercise history log. Every mutation validates first and only then
touches the repository, so a rejected form never writes anything.

Successful mutations return a short ``message`` meant to be shown to the
coach as a notification.
"""

import datetime
import logging
from typing import Any, Optional

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel, ConfigDict, Field

from ...core.clients.formatting import format_date, format_date_for_input, format_timestamp
from ...core.clients.models import Client, ExerciseEntry
from ...core.clients.validation import extract_client_fields, validate_client_form
from ..dependencies import ClientRepositoryDep

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Request/Response Models
# ---------------------------------------------------------------------------

class ClientFormRequest(BaseModel):
    """
    Raw client form submission.

    Values arrive as the form sent them and are checked by the form
    validator, not by Pydantic, so every problem is reported per field.
    """
    model_config = ConfigDict(populate_by_name=True)

    full_name: Optional[Any] = Field(None, alias="fullName")
    age: Optional[Any] = None
    gender: Optional[Any] = None
    email: Optional[Any] = None
    phone: Optional[Any] = None
    goal: Optional[Any] = None
    goal_text: Optional[Any] = Field(None, alias="goalText")
    start_date: Optional[Any] = Field(None, alias="startDate")


class ExerciseEntryRequest(BaseModel):
    """A workout to append to the client's history."""
    date: datetime.date = Field(description="Session date")
    title: str = Field(description="Session title", min_length=1, max_length=200)
    notes: str = Field("", description="Free-text notes", max_length=2000)
    tags: list[str] = Field(default_factory=list, description="Exercises or labels")


class ExerciseEntryItem(BaseModel):
    """Single entry in a client's exercise history."""
    id: str
    date: str = Field(description="Session date (YYYY-MM-DD)")
    title: str
    notes: str
    tags: list[str]


class ClientResponse(BaseModel):
    """Complete client record."""
    id: str = Field(description="Client identifier")
    full_name: str
    age: int
    gender: str
    email: str
    phone: str
    goal: str
    goal_text: str
    goal_display: str = Field(description="Free-text goal if given, else the goal category")
    start_date: str = Field(description="Membership start date (YYYY-MM-DD)")
    start_date_display: str = Field(description="Start date for display, e.g. January 5, 2025")
    created_at: str = Field(description="When the client was added (ISO format)")
    updated_at: Optional[str] = Field(None, description="Last update time (ISO format)")
    exercise_history: list[ExerciseEntryItem] = Field(description="Logged sessions, in insertion order")


class ClientMutationResponse(BaseModel):
    """A changed client plus a notification message."""
    message: str
    client: ClientResponse


class ClientListResponse(BaseModel):
    """Clients matching a search."""
    clients: list[ClientResponse]
    total: int


class ClientFormState(BaseModel):
    """
    Initial state for the client form.

    ``mode`` is "create" for a blank form and "edit" when the form was
    opened for an existing client.
    """
    mode: str
    client_id: Optional[str] = None
    values: dict[str, Any]


# ---------------------------------------------------------------------------
# Converters
# ---------------------------------------------------------------------------

def _entry_item(entry: ExerciseEntry) -> ExerciseEntryItem:
    return ExerciseEntryItem(
        id=entry.id,
        date=entry.date.isoformat(),
        title=entry.title,
        notes=entry.notes,
        tags=list(entry.tags),
    )


def client_response(client: Client) -> ClientResponse:
    return ClientResponse(
        id=client.id,
        full_name=client.full_name,
        age=client.age,
        gender=client.gender.value,
        email=client.email,
        phone=client.phone,
        goal=client.goal.value,
        goal_text=client.goal_text,
        goal_display=client.goal_display,
        start_date=client.start_date.isoformat(),
        start_date_display=format_date(client.start_date),
        created_at=format_timestamp(client.created_at),
        updated_at=format_timestamp(client.updated_at) if client.updated_at else None,
        exercise_history=[_entry_item(e) for e in client.exercise_history],
    )


def _validated_fields(request: ClientFormRequest) -> dict[str, Any]:
    """Run the form validator; 422 with the per-field messages on failure."""
    form = request.model_dump(by_alias=True)
    result = validate_client_form(form)
    if not result.valid:
        logger.info(
            "Client form rejected",
            extra={"fields": sorted(result.errors)}
        )
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "message": "Please correct the highlighted fields",
                "errors": result.errors,
            },
        )
    return extract_client_fields(form)


def _not_found(client_id: str) -> HTTPException:
    logger.info("Client not found", extra={"client_id": client_id})
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Client not found",
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get(
    "",
    response_model=ClientListResponse,
    summary="List or search clients",
    description="Case-insensitive name search. A blank query returns every client.",
)
async def list_clients(
    repository: ClientRepositoryDep,
    q: str = Query("", description="Part of the client's name"),
) -> ClientListResponse:
    clients = repository.search(q)
    return ClientListResponse(
        clients=[client_response(c) for c in clients],
        total=len(clients),
    )


@router.post(
    "",
    response_model=ClientMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a client",
)
async def create_client(
    request: ClientFormRequest,
    repository: ClientRepositoryDep,
) -> ClientMutationResponse:
    fields = _validated_fields(request)
    client = repository.add(fields)

    return ClientMutationResponse(
        message="Client added successfully",
        client=client_response(client),
    )


@router.get(
    "/form",
    response_model=ClientFormState,
    summary="Client form state",
    description="Blank form, or a form pre-filled for the client given in `edit`.",
)
async def get_client_form(
    repository: ClientRepositoryDep,
    edit: Optional[str] = Query(None, description="Id of the client to edit"),
) -> ClientFormState:
    if not edit:
        return ClientFormState(
            mode="create",
            values={
                "fullName": "",
                "age": "",
                "gender": "",
                "email": "",
                "phone": "",
                "goal": "",
                "goalText": "",
                "startDate": "",
            },
        )

    client = repository.get_by_id(edit)
    if client is None:
        raise _not_found(edit)

    return ClientFormState(
        mode="edit",
        client_id=client.id,
        values={
            "fullName": client.full_name,
            "age": client.age,
            "gender": client.gender.value,
            "email": client.email,
            "phone": client.phone,
            "goal": client.goal.value,
            "goalText": client.goal_text,
            "startDate": format_date_for_input(client.start_date),
        },
    )


@router.get(
    "/{client_id}",
    response_model=ClientResponse,
    summary="Get a client",
)
async def get_client(
    client_id: str,
    repository: ClientRepositoryDep,
) -> ClientResponse:
    client = repository.get_by_id(client_id)
    if client is None:
        raise _not_found(client_id)
    return client_response(client)


@router.put(
    "/{client_id}",
    response_model=ClientMutationResponse,
    summary="Update a client",
    description="Validates the full form, then merges it over the stored client.",
)
async def update_client(
    client_id: str,
    request: ClientFormRequest,
    repository: ClientRepositoryDep,
) -> ClientMutationResponse:
    fields = _validated_fields(request)
    client = repository.update(client_id, fields)
    if client is None:
        raise _not_found(client_id)

    return ClientMutationResponse(
        message="Client updated successfully",
        client=client_response(client),
    )


@router.delete(
    "/{client_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a client",
    description="Removes the client and their exercise history. Cannot be undone.",
)
async def delete_client(
    client_id: str,
    repository: ClientRepositoryDep,
) -> None:
    if not repository.delete(client_id):
        raise _not_found(client_id)


@router.post(
    "/{client_id}/history",
    response_model=ClientMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Log a workout",
)
async def add_history_entry(
    client_id: str,
    request: ExerciseEntryRequest,
    repository: ClientRepositoryDep,
) -> ClientMutationResponse:
    client = repository.add_history_entry(client_id, {
        "date": request.date,
        "title": request.title.strip(),
        "notes": request.notes.strip(),
        "tags": [t.strip() for t in request.tags if t.strip()],
    })
    if client is None:
        raise _not_found(client_id)

    return ClientMutationResponse(
        message="Exercise entry added",
        client=client_response(client),
    )
