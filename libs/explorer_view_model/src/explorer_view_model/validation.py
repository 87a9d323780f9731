"""Input checks the UI runs before issuing a gateway request."""

from __future__ import annotations

from datetime import date, datetime, timezone

FUTURE_DATE_MESSAGE = "Cannot select future dates"


class InputValidationError(ValueError):
    """User input rejected before any request is made; ``str()`` is user-facing."""


def today_utc() -> date:
    return datetime.now(timezone.utc).date()


def validate_not_future(value: str | date, today: date | None = None) -> str:
    """Return ``value`` as ``YYYY-MM-DD`` if it is not after ``today`` (UTC).

    Raises:
        InputValidationError: The date is malformed or in the future
    """
    if isinstance(value, str):
        try:
            parsed = date.fromisoformat(value)
        except ValueError as e:
            raise InputValidationError(f"Invalid date: {value}") from e
    else:
        parsed = value
    if parsed > (today or today_utc()):
        raise InputValidationError(FUTURE_DATE_MESSAGE)
    return parsed.isoformat()
