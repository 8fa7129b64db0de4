"""
Wiring between the settings and the route handlers.

Routes ask for a repository, a client store or the suggestion service
through the ``*Dep`` aliases at the bottom of this module. Tests replace
any of the provider functions through ``app.dependency_overrides``.
"""

import logging
from typing import Annotated

from fastapi import Depends

from ..config.settings import Settings, get_settings
from ..core.clients.repository import ClientRepository
from ..core.exercises.suggestions import ExerciseSuggestionService
from ..infrastructure.catalog.client import CatalogConfig, create_catalog_client
from ..infrastructure.storage.client import (
    BACKEND_R2,
    KeyValueStore,
    StorageConfig,
    create_key_value_store,
)
from ..infrastructure.storage.clients import JsonClientStore

logger = logging.getLogger(__name__)

# One store per process. The memory backend only works if every request
# sees the same instance.
_key_value_store = None


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------

def get_key_value_store(
    settings: Annotated[Settings, Depends(get_settings)],
) -> KeyValueStore:
    """
    Provide the shared key-value store for the configured backend.

    Created on first use and reused for the life of the process.
    """
    global _key_value_store

    if _key_value_store is None:
        config = None
        if settings.storage_backend == BACKEND_R2:
            config = StorageConfig(
                access_key_id=settings.r2_access_key_id,
                secret_access_key=settings.r2_secret_access_key,
                bucket_name=settings.r2_bucket_name,
                endpoint_url=settings.r2_endpoint,
            )
        _key_value_store = create_key_value_store(
            backend=settings.storage_backend,
            data_dir=settings.data_dir,
            config=config,
        )
        logger.info(
            "Created shared key-value store",
            extra={"backend": settings.storage_backend}
        )

    return _key_value_store


def reset_key_value_store() -> None:
    """Drop the shared store so the next request builds a fresh one."""
    global _key_value_store
    _key_value_store = None


def get_client_store(
    settings: Annotated[Settings, Depends(get_settings)],
    store: Annotated[KeyValueStore, Depends(get_key_value_store)],
) -> JsonClientStore:
    return JsonClientStore(store, key=settings.storage_key)


# ---------------------------------------------------------------------------
# Service Dependencies
# ---------------------------------------------------------------------------

def get_client_repository(
    client_store: Annotated[JsonClientStore, Depends(get_client_store)],
) -> ClientRepository:
    """
    Provide a ClientRepository over the shared store.

    The repository keeps no state between calls (every operation re-reads
    the store), so a new instance per request is fine.
    """
    return ClientRepository(client_store)


def get_suggestion_service(
    settings: Annotated[Settings, Depends(get_settings)],
) -> ExerciseSuggestionService:
    """Provide the suggestion service with a wger or mock catalog client."""
    config = CatalogConfig(
        base_url=settings.catalog_base_url,
        language=settings.catalog_language,
        pool_size=settings.catalog_pool_size,
        timeout_seconds=settings.catalog_timeout_seconds,
    )
    catalog = create_catalog_client(config=config, mock_mode=settings.catalog_mock_mode)

    return ExerciseSuggestionService(catalog, language=settings.catalog_language)


# ---------------------------------------------------------------------------
# Convenience Type Aliases
# ---------------------------------------------------------------------------

# These type aliases make route signatures cleaner
ClientStoreDep = Annotated[JsonClientStore, Depends(get_client_store)]
ClientRepositoryDep = Annotated[ClientRepository, Depends(get_client_repository)]
SuggestionServiceDep = Annotated[ExerciseSuggestionService, Depends(get_suggestion_service)]
SettingsDep = Annotated[Settings, Depends(get_settings)]
