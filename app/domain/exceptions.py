"""Domain exceptions.

All domain-level errors raised by the catalog service. The API layer
maps each class to an HTTP status code; nothing below the API layer
knows about HTTP.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""

    def __init__(self, entity_type: str, entity_id: str, message: str | None = None) -> None:
        """Initialize not found error.

        Args:
            entity_type: Type of entity (e.g., "Category", "Item").
            entity_id: ID that failed to resolve.
            message: Optional message overriding the default.
        """
        super().__init__(
            message or f"{entity_type} not found",
            details={"entity_type": entity_type, "entity_id": entity_id},
        )


class ConflictError(DomainError):
    """Raised when a unique field is already taken (e.g. category name)."""

    pass


class ValidationError(DomainError):
    """Raised when a cross-field rule is violated.

    Covers subcategory/category mismatch and a missing search term.
    Plain shape validation of request bodies is handled by pydantic.
    """

    pass


class StorageError(DomainError):
    """Raised when the underlying database operation fails."""

    def __init__(self, action: str, error: str) -> None:
        """Initialize storage error.

        Args:
            action: What was being done, e.g. "creating item".
            error: Message of the underlying driver exception.
        """
        super().__init__(f"Error {action}", details={"error": error})
        self.error = error
