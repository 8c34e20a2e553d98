# app/core/exceptions.py
"""
Domain errors.

Services raise these; ``app.main`` turns them into JSON bodies of the form
``{"code": ..., "message": ..., "details": ...}`` with the matching status.
"""
from typing import Any, Dict, Optional


class AchivaError(Exception):
    """Base for every error the API reports to its callers."""

    status_code = 500

    def __init__(self, message: str, code: str = "INTERNAL_ERROR", details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}


class ValidationError(AchivaError):
    """Required field missing or malformed; raised before any write."""

    status_code = 422

    def __init__(self, message: str = "Invalid data", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class AuthenticationError(AchivaError):
    status_code = 401

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="AUTH_FAILED")


class AuthorizationError(AchivaError):
    status_code = 403

    def __init__(self, message: str = "Not authorized", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="NOT_AUTHORIZED", details=details)


class NotFoundError(AchivaError):
    status_code = 404

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(
            f"{entity} not found",
            code="NOT_FOUND",
            details={"entity": entity, "id": str(entity_id)},
        )


class TransportError(AchivaError):
    """The record store could not be reached or failed mid-call."""

    status_code = 503

    def __init__(self, message: str = "Record store unavailable", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="STORE_UNAVAILABLE", details=details)


class ConflictError(AchivaError):
    status_code = 409

    def __init__(self, message: str = "Conflicting record", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONFLICT", details=details)
