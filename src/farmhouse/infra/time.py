"""Time utilities for consistent timestamp handling."""

from datetime import datetime, timezone

from farmhouse.domain.errors import ValidationError


def utc_now() -> datetime:
    """Return current UTC timestamp (timezone-aware)."""
    return datetime.now(timezone.utc)


def parse_timestamp(value: datetime | str) -> datetime:
    """Parse an ISO-8601 timestamp, assuming UTC when no offset is given.

    Accepts the trailing ``Z`` that browsers emit.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValidationError(f"invalid timestamp {value!r}", field="created_at")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
