"""
wger exercise catalog client.

This module provides a thin wrapper around the wger REST API that:
1. Implements our ExerciseCatalogClient protocol
2. Handles API-specific details (query parameters, headers)
3. Turns every failure into a CatalogError
4. Enables easy mocking for tests

The wrapper only fetches. Picking and cleaning up exercises is core
logic and lives in the suggestion service.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from ...core.exercises.suggestions import CatalogUnavailableError, ENGLISH_LANGUAGE_ID

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_BASE_URL = "https://wger.de/api/v2"
DEFAULT_POOL_SIZE = 50


class CatalogError(CatalogUnavailableError):
    """Raised when the catalog request fails or returns something unusable."""
    pass


@dataclass
class CatalogConfig:
    """
    Configuration for the catalog client.

    timeout_seconds of None keeps httpx's default timeout.
    """
    base_url: str = DEFAULT_CATALOG_BASE_URL
    language: int = ENGLISH_LANGUAGE_ID
    pool_size: int = DEFAULT_POOL_SIZE
    timeout_seconds: Optional[float] = None

    def __post_init__(self) -> None:
        if not self.base_url:
            raise ValueError("base_url is required")
        if self.pool_size < 1:
            raise ValueError("pool_size must be positive")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

    @property
    def exercise_info_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/exerciseinfo/"


class WgerCatalogClient:
    """
    Implementation of ExerciseCatalogClient for wger.

    A new httpx client is opened per call; suggestions are fetched
    rarely enough that connection reuse doesn't matter. ``transport``
    exists so tests can plug in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        config: CatalogConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config
        self._transport = transport

    async def fetch_exercise_pool(self) -> Any:
        """
        Fetch one page of exercises with their translations.

        Raises CatalogError on transport errors, non-2xx statuses and
        bodies that aren't JSON.
        """
        params = {
            "language": self._config.language,
            "limit": self._config.pool_size,
        }
        client_kwargs: dict[str, Any] = {"headers": {"Accept": "application/json"}}
        if self._config.timeout_seconds is not None:
            client_kwargs["timeout"] = self._config.timeout_seconds
        if self._transport is not None:
            client_kwargs["transport"] = self._transport

        try:
            async with httpx.AsyncClient(**client_kwargs) as client:
                response = await client.get(self._config.exercise_info_url, params=params)
                response.raise_for_status()
                payload = response.json()

        except httpx.HTTPStatusError as e:
            logger.warning(
                "Catalog returned error status",
                extra={"status": e.response.status_code, "url": self._config.exercise_info_url}
            )
            raise CatalogError(f"API request failed with status {e.response.status_code}")
        except httpx.HTTPError as e:
            logger.warning(
                "Catalog request failed",
                extra={"error": str(e), "url": self._config.exercise_info_url}
            )
            raise CatalogError(f"API request failed: {e}")
        except ValueError as e:
            logger.warning("Catalog response is not JSON", extra={"error": str(e)})
            raise CatalogError(f"Invalid catalog response: {e}")

        results = payload.get("results") if isinstance(payload, dict) else None
        logger.info(
            "Catalog returned exercises",
            extra={"count": len(results) if isinstance(results, list) else 0}
        )

        return payload


# ---------------------------------------------------------------------------
# Mock Catalog for Local Development
# ---------------------------------------------------------------------------

_MOCK_EXERCISES = [
    ("Barbell Squat", "Legs", "<p>Stand with the bar on your upper back and squat until thighs are parallel.</p>"),
    ("Bench Press", "Chest", "<p>Lower the bar to mid-chest and press it back up.</p>"),
    ("Deadlift", "Back", "<p>Lift the bar from the floor by extending hips and knees.</p>"),
    ("Pull-ups", "Back", "<p>Hang from a bar and pull your chin over it.</p>"),
    ("Overhead Press", "Shoulders", "<p>Press the bar from shoulders to overhead.</p>"),
    ("Biceps Curl", "Arms", "<p>Curl the dumbbells toward your shoulders.</p>"),
    ("Triceps Dips", "Arms", "<p>Lower your body between parallel bars and push back up.</p>"),
    ("Crunches", "Abs", "<p>Lift your shoulders off the floor by contracting the abs.</p>"),
    ("Calf Raises", "Calves", "<p>Rise onto your toes and lower slowly.</p>"),
    ("Rowing Machine", "Cardio", "<p>Steady rowing at a conversational pace.</p>"),
]


class MockCatalogClient:
    """
    Canned catalog for local development.

    Returns a payload shaped like the wger response so the whole
    normalization path runs without network access.
    """

    def __init__(self) -> None:
        logger.info("Initialized mock catalog client")

    async def fetch_exercise_pool(self) -> Any:
        return {
            "count": len(_MOCK_EXERCISES),
            "results": [
                {
                    "id": i,
                    "category": {"id": i, "name": category},
                    "translations": [
                        {"language": ENGLISH_LANGUAGE_ID, "name": name, "description": description},
                    ],
                }
                for i, (name, category, description) in enumerate(_MOCK_EXERCISES, start=1)
            ],
        }


# ---------------------------------------------------------------------------
# Factory Function
# ---------------------------------------------------------------------------

def create_catalog_client(
    config: Optional[CatalogConfig] = None,
    mock_mode: bool = False,
):
    """
    Create the catalog client.

    Args:
        config: Catalog configuration (defaults to the public wger API)
        mock_mode: If True, return the canned mock client

    Returns:
        ExerciseCatalogClient implementation (wger or mock)
    """
    if mock_mode:
        return MockCatalogClient()

    return WgerCatalogClient(config or CatalogConfig())
