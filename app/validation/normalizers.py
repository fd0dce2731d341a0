import re
from datetime import date, datetime, timezone
from typing import Optional, Union


_SLUG_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE_RUN = re.compile(r"\s+")
_HYPHEN_RUN = re.compile(r"-+")

# Hours take one or two digits, minutes and seconds exactly two.
_TIME_PATTERN = re.compile(r"^([0-9]{1,2}):([0-9]{2})(?::([0-9]{2}))?$")

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Textual forms accepted in addition to ISO 8601.
_DATE_FORMATS = (
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)


def is_blank(value) -> bool:
    return not isinstance(value, str) or not value.strip()


def slugify(value: str) -> str:
    """
    Turn a title into a URL-safe slug.

    "My Awesome Dev Meetup!!" -> "my-awesome-dev-meetup"
    """
    slug = value.lower().strip()
    slug = _SLUG_DISALLOWED.sub("", slug)
    slug = _WHITESPACE_RUN.sub("-", slug)
    slug = _HYPHEN_RUN.sub("-", slug)
    return slug.strip("-")


def _parse_iso(text: str) -> Optional[Union[date, datetime]]:
    candidate = text[:-1] + "+00:00" if text[-1] in "Zz" else text
    try:
        return datetime.fromisoformat(candidate)
    except ValueError:
        pass
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def normalize_date(value: str) -> str:
    """
    Parse a calendar date and return it as YYYY-MM-DD.

    Datetimes carrying an offset are converted to UTC before the date is
    taken, so "2024-03-05T23:30:00-05:00" becomes "2024-03-06".

    Raises:
        ValueError: If the value cannot be parsed as a date
    """
    text = value.strip() if isinstance(value, str) else ""
    if not text:
        raise ValueError("Invalid event date. Please provide a valid date value.")

    parsed = _parse_iso(text)
    if parsed is None:
        for fmt in _DATE_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue

    if parsed is None:
        raise ValueError("Invalid event date. Please provide a valid date value.")

    if isinstance(parsed, datetime):
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc)
        parsed = parsed.date()

    return parsed.isoformat()


def normalize_time(value: str) -> str:
    """
    Validate a 24-hour time (H:MM, HH:MM or HH:MM:SS) and return HH:MM.

    Seconds are checked and then dropped.

    Raises:
        ValueError: If the pattern does not match or a component is out of range
    """
    text = value.strip() if isinstance(value, str) else ""
    match = _TIME_PATTERN.match(text)
    if not match:
        raise ValueError("Invalid event time. Expected format HH:MM or HH:MM:SS (24-hour).")

    hours = int(match.group(1))
    minutes = int(match.group(2))
    seconds = int(match.group(3)) if match.group(3) is not None else 0

    if hours > 23 or minutes > 59 or seconds > 59:
        raise ValueError("Invalid event time. Hour must be 0-23 and minutes 0-59.")

    return f"{hours:02d}:{minutes:02d}"


def is_valid_email(value: str) -> bool:
    if not isinstance(value, str):
        return False
    return bool(_EMAIL_PATTERN.match(value.strip()))
