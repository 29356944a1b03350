"""
Application exception hierarchy.

Every exception carries a client-safe message and a details dict. The global
handlers registered in ``trainboard.main`` render them as
``{"error": code, "message": ..., "details": {...}}`` with the class's HTTP
status code.

    TrainboardError              → 500 internal_error
    ├── ValidationError          → 400 validation_error
    ├── NotFoundError            → 404 not_found
    └── DatabaseConnectionError  → 503 database_unavailable
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional


class TrainboardError(Exception):
    """Base class for all trainboard errors."""

    status_code = 500
    code = "internal_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.code, "message": self.message, "details": self.details}


@dataclass(frozen=True)
class FieldError:
    """A single violated rule on one field of a document."""

    field: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message}


class ValidationError(TrainboardError):
    """
    Raised when a document fails its field rules at write time.

    ``errors`` lists every violated field, not only the first one.
    """

    status_code = 400
    code = "validation_error"

    def __init__(self, errors: List[FieldError], resource: Optional[str] = None):
        self.errors = list(errors)
        self.resource = resource
        fields = ", ".join(sorted({e.field for e in self.errors}))
        prefix = f"{resource} validation failed" if resource else "Validation failed"
        details: Dict[str, Any] = {"errors": [e.to_dict() for e in self.errors]}
        if resource:
            details["resource"] = resource
        super().__init__(message=f"{prefix}: {fields}", details=details)

    @property
    def fields(self) -> List[str]:
        return [e.field for e in self.errors]


class NotFoundError(TrainboardError):
    """Raised by the API layer when no document has the requested id."""

    status_code = 404
    code = "not_found"

    def __init__(self, resource: str = "resource", resource_id: Optional[str] = None):
        message = f"The requested {resource} was not found"
        details: Dict[str, Any] = {"resource": resource}
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
            details["resource_id"] = resource_id
        super().__init__(message=message, details=details)


class DatabaseConnectionError(TrainboardError):
    """Raised when MongoDB cannot be reached."""

    status_code = 503
    code = "database_unavailable"

    def __init__(self, message: str = "Database is unavailable", details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, details=details)
