"""
FitCRM configuration.

Every setting comes from an environment variable of the same name (case
does not matter) or from a ``.env`` file in the working directory. The
defaults run the service against a local data directory and the public
wger catalog, with no credentials needed.

Two switches make it fully offline: ``STORAGE_BACKEND=memory`` and
``CATALOG_MOCK_MODE=true``.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..infrastructure.storage.client import BACKEND_R2, STORAGE_BACKENDS


class Settings(BaseSettings):
    """
    Typed view of the environment.

    Pydantic rejects values of the wrong type when the settings load.
    Which settings are required depends on the chosen backends and is
    checked separately by ``validate_required_fields``.
    """

    api_title: str = "FitCRM API"

    # Client collection
    storage_backend: str = Field(
        default="file",
        description="Where the client collection lives: memory, file or r2."
    )
    storage_key: str = Field(
        default="fitcrm_clients",
        description="Key holding the client collection. Part of the stored layout; change with care."
    )
    data_dir: Path = Field(
        default=Path("data"),
        description="Directory for the file backend."
    )

    # Cloudflare R2, only read when storage_backend is r2
    r2_account_id: str = Field(
        default="",
        description="Account id; used to build the endpoint when r2_endpoint_url is unset"
    )
    r2_access_key_id: str = ""
    r2_secret_access_key: str = ""
    r2_bucket_name: str = Field(
        default="fitcrm-data",
        description="Bucket holding the client collection object"
    )
    r2_endpoint_url: Optional[str] = Field(
        default=None,
        description="Explicit S3 endpoint, e.g. a local MinIO for development"
    )

    # Exercise catalog
    catalog_base_url: str = Field(
        default="https://wger.de/api/v2",
        description="Base URL of the wger REST API"
    )
    catalog_language: int = Field(
        default=2,
        description="wger language id used to pick translations. 2 is English."
    )
    catalog_pool_size: int = Field(
        default=50,
        description="Exercises fetched per request. Suggestions are drawn from this pool."
    )
    catalog_timeout_seconds: Optional[float] = Field(
        default=None,
        description="Request timeout. Unset keeps the HTTP client's default."
    )
    catalog_mock_mode: bool = Field(
        default=False,
        description="Serve a canned catalog instead of calling wger."
    )
    suggestion_limit: int = Field(
        default=5,
        description="Exercises suggested per client."
    )

    seed_sample_data: bool = Field(
        default=True,
        description="Write the demo clients at startup when the store is empty."
    )

    log_level: str = Field(
        default="INFO",
        description="Root logger level, applied at startup"
    )

    cors_origins: str = Field(
        default="http://localhost:3000",
        description="Comma-separated origins allowed to call the API; * allows any"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @property
    def cors_origins_list(self) -> list[str]:
        if self.cors_origins.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def r2_endpoint(self) -> str:
        """The explicit endpoint if set, else the account's R2 endpoint."""
        return self.r2_endpoint_url or f"https://{self.r2_account_id}.r2.cloudflarestorage.com"

    def validate_required_fields(self) -> list[str]:
        """
        Names of settings that are missing or invalid for the chosen backends.

        An empty list means the configuration is usable.
        """
        problems = []

        if self.storage_backend not in STORAGE_BACKENDS:
            problems.append(f"STORAGE_BACKEND (one of {', '.join(STORAGE_BACKENDS)})")

        if self.storage_backend == BACKEND_R2:
            credentials = [
                ("R2_ACCOUNT_ID", self.r2_account_id or self.r2_endpoint_url),
                ("R2_ACCESS_KEY_ID", self.r2_access_key_id),
                ("R2_SECRET_ACCESS_KEY", self.r2_secret_access_key),
            ]
            problems.extend(name for name, value in credentials if not value)

        if not self.catalog_mock_mode and not self.catalog_base_url:
            problems.append("CATALOG_BASE_URL")

        return problems


@lru_cache()
def get_settings() -> Settings:
    """
    Settings for this process, read once.

    Tests either override the dependency or call
    ``get_settings.cache_clear()`` after changing the environment.
    """
    return Settings()
