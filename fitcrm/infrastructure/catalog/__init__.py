"""
Exercise catalog integration (wger REST API).
"""

from .client import (
    CatalogConfig,
    CatalogError,
    MockCatalogClient,
    WgerCatalogClient,
    create_catalog_client,
)

__all__ = [
    "CatalogConfig",
    "CatalogError",
    "MockCatalogClient",
    "WgerCatalogClient",
    "create_catalog_client",
]
