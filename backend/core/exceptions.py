"""Exceptions raised by the analytics service and rendered by the API."""

from typing import Any, Dict, Iterable, Optional


class AtlasException(Exception):
    """Base exception carrying the HTTP status it maps to.

    ``details`` holds extra machine-readable fields that are added to the
    error response next to ``detail``.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AtlasException):
    def __init__(self, message: str = "Resource not found", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, 404, details)


class ValidationError(AtlasException):
    """The request is well-formed but its content cannot be analysed."""

    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, 422, details)


class DuplicateFlowIdError(ValidationError):
    """Two or more flows in one collection share an id."""

    def __init__(self, flow_ids: Iterable[str]):
        self.flow_ids = sorted(flow_ids)
        super().__init__(
            f"Duplicate flow ids: {', '.join(self.flow_ids)}",
            details={"flow_ids": self.flow_ids},
        )


class DepartmentNotFoundError(NotFoundError):
    def __init__(self, department: str):
        self.department = department
        super().__init__(
            f"Department '{department}' not found",
            details={"department": department},
        )
