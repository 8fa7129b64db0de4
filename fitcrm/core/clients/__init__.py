"""
Client management logic.

Contains the client domain models, the repository, form validation and
the helpers they share.
"""

from .models import Client, ExerciseEntry, Gender, Goal
from .identifiers import IdGenerator
from .repository import ClientRepository, ClientStore
from .validation import ValidationResult, extract_client_fields, validate_client_form

__all__ = [
    "Client",
    "ExerciseEntry",
    "Gender",
    "Goal",
    "IdGenerator",
    "ClientRepository",
    "ClientStore",
    "ValidationResult",
    "extract_client_fields",
    "validate_client_form",
]
