"""
Shared helpers: identifiers, names and timestamps.
"""
import re
import uuid
from datetime import datetime, timezone

from airops.errors import ServiceError, invalid_data

_UUID_RE = re.compile(r"^[a-f\d]{8}(-[a-f\d]{4}){3}-[a-f\d]{12}$", re.IGNORECASE)


def generate_uuid() -> str:
    """Generate a new opaque identifier."""
    return str(uuid.uuid4())


def is_valid_uuid(value) -> bool:
    return isinstance(value, str) and bool(_UUID_RE.match(value))


def ensure_uuid(value: str, field: str = "id", code: str = "invalid_uuid") -> str:
    """Raise a 400 when value is not a canonical UUID string."""
    if not is_valid_uuid(value):
        raise ServiceError(
            "Invalid id",
            status_code=400,
            code=code,
            details={field: value, "description": f"{field} must be a valid UUID"},
        )
    return value


def validate_name(value: str, field: str, min_length: int = 1, max_length: int = 255) -> str:
    """
    Trim and length-check a free-text name.

    Returns:
        The trimmed value
    """
    if value is None:
        raise invalid_data(f"Invalid {field}", f"{field} is required", **{field: value})
    trimmed = value.strip()
    if len(trimmed) < min_length or len(trimmed) > max_length:
        raise invalid_data(
            f"Invalid {field}",
            f"{field} must be between {min_length} and {max_length} characters",
            **{field: value},
        )
    return trimmed


def parse_timestamp(value, field: str) -> datetime:
    """
    Parse an ISO 8601 timestamp into a naive UTC datetime.

    Inputs without an offset are taken as UTC. Stored timestamps are naive UTC
    so they compare directly with what the database returns.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).strip())
        except (TypeError, ValueError):
            raise invalid_data(
                "Invalid times",
                f"{field} must be a valid ISO 8601 date-time",
                **{field: value},
            )
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def to_iso(value: datetime) -> str:
    """Render a naive UTC datetime as ISO 8601 with a Z suffix."""
    return value.replace(tzinfo=timezone.utc).isoformat().replace("+00:00", "Z")
