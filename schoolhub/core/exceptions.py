# schoolhub/core/exceptions.py
"""Custom exceptions for the SchoolHub application."""
from fastapi import HTTPException
from typing import Any, Dict, List, Optional


class SchoolHubException(HTTPException):
    """Base exception for SchoolHub application."""
    def __init__(
        self,
        status_code: int,
        detail: str,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)

    @property
    def message(self) -> str:
        return self.detail

    def extra(self) -> Dict[str, Any]:
        """Additional fields rendered next to the message."""
        return {}


class NotFoundError(SchoolHubException):
    """Resource not found."""
    def __init__(self, resource: str, id: Any = None):
        message = f"{resource} not found"
        if id is not None:
            message += f" with id: {id}"
        super().__init__(status_code=404, detail=message)


class PermissionDenied(SchoolHubException):
    """The role claim does not allow the operation."""
    def __init__(self, message: str = "Permission denied"):
        super().__init__(status_code=403, detail=message)


class AuthenticationError(SchoolHubException):
    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(
            status_code=401,
            detail=message,
            headers={"WWW-Authenticate": "Bearer"}
        )


class ValidationError(SchoolHubException):
    """Exception raised for validation errors."""
    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(status_code=422, detail=message)

    def extra(self) -> Dict[str, Any]:
        return {"field": self.field} if self.field else {}


class DuplicateRecord(SchoolHubException):
    def __init__(self, message: str = "This record already exists (duplicate)."):
        super().__init__(status_code=409, detail=message)


class CapacityExceeded(SchoolHubException):
    """Raised when a class has no free places left."""
    def __init__(self, class_name: str, capacity: int):
        super().__init__(
            status_code=409,
            detail=f"Class {class_name} is full (capacity {capacity})"
        )


class ScheduleConflict(SchoolHubException):
    """Raised when a teacher already has a lesson in the requested interval."""
    def __init__(self, conflicts: List[Dict[str, Any]]):
        self.conflicts = conflicts
        super().__init__(
            status_code=409,
            detail="The teacher already has a lesson scheduled in this interval"
        )

    def extra(self) -> Dict[str, Any]:
        return {"conflicts": self.conflicts}
