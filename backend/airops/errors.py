"""
Service Errors

Every failure the services raise is a ServiceError carrying a short
machine-readable code, an HTTP status and a detail payload.
"""
from typing import Any, Dict, Optional


class ServiceError(Exception):
    """Typed error surfaced to API clients."""

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        code: str = "invalid_data",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "details": self.details,
        }

    def __repr__(self):
        return f"<ServiceError {self.status_code} {self.code}: {self.message}>"


def invalid_data(message: str, description: str, **fields: Any) -> ServiceError:
    return ServiceError(
        message,
        status_code=400,
        code="invalid_data",
        details={**fields, "description": description},
    )


def not_found(message: str, **fields: Any) -> ServiceError:
    return ServiceError(
        message,
        status_code=404,
        code="not_found",
        details={**fields, "description": message},
    )


def db_error(message: str) -> ServiceError:
    # Storage internals are never echoed back to the client
    return ServiceError(message, status_code=500, code="db_error")
