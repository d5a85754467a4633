"""Domain layer module.

Contains the error types raised by the catalog service.
"""

from app.domain.exceptions import (
    ConflictError,
    DomainError,
    NotFoundError,
    StorageError,
    ValidationError,
)

__all__ = [
    "ConflictError",
    "DomainError",
    "NotFoundError",
    "StorageError",
    "ValidationError",
]
