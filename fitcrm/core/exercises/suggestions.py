"""
Exercise suggestions for a client's next session.

The service asks the exercise catalog for a pool of exercises, cleans
the records up and picks a random handful so repeated visits surface
different exercises. The catalog is a third-party service we don't
control, so any failure falls back to a static list for the client's
goal. Callers always get a result; they never see the catalog's errors.

Nothing is cached. Every call goes back to the catalog.
"""

import logging
import random
from html.parser import HTMLParser
from typing import Any, Optional, Protocol, Sequence, TypeVar, Union

from ..clients.models import Goal
from .fallback import get_fallback_exercises
from .models import MAX_DESCRIPTION_LENGTH, SuggestedExercise, SuggestionResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_SUGGESTION_LIMIT = 5
ENGLISH_LANGUAGE_ID = 2

PLACEHOLDER_DESCRIPTION = "A great exercise for your fitness routine."
FALLBACK_ERROR_MESSAGE = "Unable to load suggested exercises right now."


class CatalogUnavailableError(Exception):
    """Raised by catalog clients when the catalog can't be used."""
    pass


# ---------------------------------------------------------------------------
# Protocols (interfaces)
# ---------------------------------------------------------------------------

class ExerciseCatalogClient(Protocol):
    """
    Interface for exercise catalog clients.

    The service doesn't care whether the pool comes from wger, a mock or
    a test double. Implementations raise CatalogUnavailableError for
    transport errors, error statuses and undecodable bodies.
    """

    async def fetch_exercise_pool(self) -> Any:
        """Return the decoded catalog response."""
        ...


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------

class _TextExtractor(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self._parts: list[str] = []

    def handle_data(self, data: str) -> None:
        self._parts.append(data)

    @property
    def text(self) -> str:
        return "".join(self._parts)


def strip_html(markup: str) -> str:
    """Text content of an HTML fragment, entities decoded."""
    extractor = _TextExtractor()
    extractor.feed(markup)
    extractor.close()
    return extractor.text


def _pick_translation(translations: Any, language: int) -> tuple[str, str]:
    """Name and raw description, preferring the given language."""
    if not isinstance(translations, list):
        return "", ""

    candidates = [t for t in translations if isinstance(t, dict)]
    name, description = "", ""

    preferred = next((t for t in candidates if t.get("language") == language), None)
    if preferred is not None:
        name = str(preferred.get("name") or "").strip()
        description = str(preferred.get("description") or "")

    if not name and candidates:
        first = candidates[0]
        name = str(first.get("name") or "").strip()
        description = str(first.get("description") or "")

    return name, description


def normalize_catalog_records(
    payload: Any,
    language: int = ENGLISH_LANGUAGE_ID,
) -> list[SuggestedExercise]:
    """
    Turn a catalog response into suggestions.

    Records without a usable name are skipped. Anything that isn't the
    expected ``{"results": [...]}`` shape yields an empty list.
    """
    results = payload.get("results") if isinstance(payload, dict) else None
    if not isinstance(results, list):
        return []

    exercises = []
    for record in results:
        if not isinstance(record, dict):
            continue

        name, description = _pick_translation(record.get("translations"), language)
        if not name:
            continue

        text = strip_html(description).strip()[:MAX_DESCRIPTION_LENGTH] if description else ""

        category = record.get("category")
        category_name = None
        if isinstance(category, dict) and category.get("name"):
            category_name = str(category["name"])

        exercises.append(SuggestedExercise(
            name=name,
            description=text or PLACEHOLDER_DESCRIPTION,
            category=category_name,
        ))

    return exercises


def shuffle(items: Sequence[T], rng: random.Random) -> list[T]:
    """
    Fisher-Yates shuffle into a new list.

    Walks from the last index down to 1, swapping each slot with a
    uniformly chosen slot at or below it. The input is left untouched.
    """
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


# ---------------------------------------------------------------------------
# Suggestion Service
# ---------------------------------------------------------------------------

class ExerciseSuggestionService:
    """
    Picks exercises for a client's next session.

    Stateless beyond its dependencies. The random source is injectable
    so tests can pin the shuffle.
    """

    def __init__(
        self,
        catalog: ExerciseCatalogClient,
        rng: Optional[random.Random] = None,
        language: int = ENGLISH_LANGUAGE_ID,
    ) -> None:
        self._catalog = catalog
        self._rng = rng or random.Random()
        self._language = language

    async def suggest(
        self,
        goal: Union[Goal, str, None] = None,
        limit: int = DEFAULT_SUGGESTION_LIMIT,
    ) -> SuggestionResult:
        """
        Return up to ``limit`` distinct exercises.

        Draws from the catalog pool when possible, otherwise from the
        fallback table for ``goal`` with ``success=False``.
        """
        if limit < 0:
            raise ValueError("limit cannot be negative")

        try:
            payload = await self._catalog.fetch_exercise_pool()
            pool = normalize_catalog_records(payload, self._language)
            if not pool:
                raise CatalogUnavailableError("No usable exercises in catalog response")

        except CatalogUnavailableError as e:
            logger.warning(
                "Exercise catalog unavailable, using fallback exercises",
                extra={"goal": _goal_label(goal), "error": str(e)}
            )
            return self._fallback(goal, limit)
        except Exception as e:
            # A bug in the catalog client, not an outage
            logger.error(
                "Exercise catalog client failed unexpectedly, using fallback exercises",
                extra={"goal": _goal_label(goal), "error": str(e)},
                exc_info=e,
            )
            return self._fallback(goal, limit)

        selected = shuffle(pool, self._rng)[:limit]

        logger.info(
            "Selected suggested exercises",
            extra={"selected": len(selected), "pool_size": len(pool)}
        )

        return SuggestionResult(success=True, exercises=selected)

    def _fallback(self, goal: Union[Goal, str, None], limit: int) -> SuggestionResult:
        return SuggestionResult(
            success=False,
            exercises=shuffle(get_fallback_exercises(goal), self._rng)[:limit],
            error=FALLBACK_ERROR_MESSAGE,
        )

    async def fetch_exercises(
        self,
        goal: Union[Goal, str, None] = None,
        limit: int = DEFAULT_SUGGESTION_LIMIT,
    ) -> list[SuggestedExercise]:
        """Just the exercises, whichever source they came from."""
        result = await self.suggest(goal, limit)
        return result.exercises


def _goal_label(goal: Union[Goal, str, None]) -> Optional[str]:
    if isinstance(goal, Goal):
        return goal.value
    return goal
