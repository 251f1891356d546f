import math
from datetime import datetime, timezone
from typing import Any, Optional, Union

from errors import ValidationError


def text(value: Any) -> Optional[str]:
    """Stripped string, or None when the value is missing, not text or blank."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def number(value: Any) -> Optional[Union[int, float]]:
    """Numeric value of a JSON number or numeric string, None otherwise."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def pickup_date(value: Any) -> datetime:
    if value is None or value == "":
        raise ValidationError("Pickup date is required")
    try:
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            # epoch milliseconds
            parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        elif isinstance(value, str):
            parsed = datetime.fromisoformat(value.strip())
        else:
            raise ValueError(value)
    except (ValueError, OverflowError, OSError):
        raise ValidationError("Valid pickup date is required")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
