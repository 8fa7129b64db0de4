"""
Exercise suggestion logic.

Contains the suggestion service, the catalog client interface and the
fallback exercise table.
"""

from .models import SuggestedExercise, SuggestionResult
from .fallback import FALLBACK_EXERCISES, get_fallback_exercises
from .suggestions import (
    CatalogUnavailableError,
    ExerciseCatalogClient,
    ExerciseSuggestionService,
    normalize_catalog_records,
    shuffle,
    strip_html,
)

__all__ = [
    "SuggestedExercise",
    "SuggestionResult",
    "FALLBACK_EXERCISES",
    "get_fallback_exercises",
    "CatalogUnavailableError",
    "ExerciseCatalogClient",
    "ExerciseSuggestionService",
    "normalize_catalog_records",
    "shuffle",
    "strip_html",
]
