"""FitCRM settings, read from the environment or a .env file."""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
