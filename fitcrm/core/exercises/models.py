"""
Models for exercise suggestions.

Suggestions are transient: they are fetched fresh for every request and
never stored with the client.
"""

from dataclasses import dataclass, field
from typing import Optional

MAX_DESCRIPTION_LENGTH = 200


@dataclass(frozen=True)
class SuggestedExercise:
    """A catalog exercise recommended for a client's next session."""
    name: str
    description: str
    category: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("Exercise name cannot be empty")


@dataclass
class SuggestionResult:
    """
    What the suggestion service hands back.

    ``success`` is False when the catalog could not be used and the
    exercises came from the fallback table; ``error`` then carries a
    message fit for showing to the coach.
    """
    success: bool
    exercises: list[SuggestedExercise] = field(default_factory=list)
    error: Optional[str] = None
