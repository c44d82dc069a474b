"""Reusable input validators shared by the service layer.

Every helper raises ``ValidationError`` with a user-facing message instead of
returning a flag, so services can chain them without branching.
"""

import math
import re
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Type, TypeVar
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dineops.core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
URL_RE = re.compile(r"^https?://.+")


def is_missing(value: Any) -> bool:
    """True for None, blank strings and empty collections."""
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    if isinstance(value, (list, tuple, dict)) and not value:
        return True
    return False


def first_missing(data: Dict[str, Any], fields: Iterable[str]) -> Optional[str]:
    """Return the first field in *fields* that is missing from *data*."""
    for field in fields:
        if is_missing(data.get(field)):
            return field
    return None


def positive_number(value: Any, field: str, message: Optional[str] = None) -> float:
    """Coerce *value* to a float that is strictly greater than zero."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(message or f"{field} must be a positive number")
    if math.isnan(number) or math.isinf(number) or number <= 0:
        raise ValidationError(message or f"{field} must be a positive number")
    return number


def positive_int(value: Any, field: str, message: Optional[str] = None) -> int:
    """Coerce *value* to an int that is strictly greater than zero.

    Accepts ints, integral floats and numeric strings; rejects booleans.
    """
    if isinstance(value, bool):
        raise ValidationError(message or f"{field} must be a positive integer")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(message or f"{field} must be a positive integer")
    if isinstance(value, float) and value != number:
        raise ValidationError(message or f"{field} must be a positive integer")
    if number <= 0:
        raise ValidationError(message or f"{field} must be a positive integer")
    return number


def number_in_range(value: Any, low: float, high: float, message: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(message)
    if math.isnan(number) or number < low or number > high:
        raise ValidationError(message)
    return number


def choice(value: Any, enum_cls: Type[E], message: str) -> E:
    """Map *value* onto a member of *enum_cls*."""
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(message)


def valid_email(value: Any) -> str:
    if not isinstance(value, str) or not EMAIL_RE.match(value):
        raise ValidationError("Invalid email format")
    return value


def optional_url(value: Any, field: str = "imgurl") -> Optional[str]:
    """Accept an empty value or an http(s) URL."""
    if is_missing(value):
        return None
    if not isinstance(value, str) or not URL_RE.match(value):
        raise ValidationError(f"{field} must be a valid URL")
    return value


def to_utc_naive(value: datetime) -> datetime:
    """Normalize to naive UTC; naive input is assumed to already be UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO 8601 string or datetime into naive UTC; None if unparsable."""
    if isinstance(value, datetime):
        return to_utc_naive(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return to_utc_naive(datetime.fromisoformat(text))
    except ValueError:
        return None


def future_datetime(value: Any, message: str) -> datetime:
    """Parse *value* and require it to be strictly later than now."""
    parsed = parse_datetime(value)
    if parsed is None or parsed <= utc_now():
        raise ValidationError(message)
    return parsed


def local_day_bounds(value: Any, tz_name: str) -> Optional[tuple[datetime, datetime]]:
    """Expand a date (or datetime) to its calendar day in *tz_name*.

    Returns naive-UTC (start, end) covering 00:00:00.000 to 23:59:59.999
    local time, or None when *value* does not parse.
    """
    try:
        tz = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        tz = timezone.utc

    if isinstance(value, datetime):
        moment = value if value.tzinfo else value.replace(tzinfo=timezone.utc)
        day = moment.astimezone(tz).date()
    elif isinstance(value, date):
        day = value
    else:
        text = str(value).strip() if value is not None else ""
        try:
            day = date.fromisoformat(text)
        except ValueError:
            parsed = parse_datetime(text)
            if parsed is None:
                return None
            day = parsed.replace(tzinfo=timezone.utc).astimezone(tz).date()

    start = datetime.combine(day, time.min, tzinfo=tz)
    end = start + timedelta(days=1) - timedelta(milliseconds=1)
    return to_utc_naive(start), to_utc_naive(end)
