"""Built-in validation rules for sitemap meta tags.

Each rule is a callable with the signature::

    def rule(value: object) -> str | None:
        '''Return error message, or None if valid.'''

``normalize_lastmod`` is the one exception: it converts accepted date
values to a W3C date-time string and raises ``ValueError`` otherwise.
"""

import math
import re
from collections.abc import Callable, Mapping
from datetime import UTC, date, datetime

# Type alias for a rule function
type Rule = Callable[[object], str | None]

META_TAGS: tuple[str, ...] = ("lastmod", "changefreq", "priority")

CHANGEFREQS: frozenset[str] = frozenset(
    {"always", "hourly", "daily", "weekly", "monthly", "yearly", "never"}
)


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------


def is_number(value: object) -> bool:
    """True for ``int`` and ``float``, but not ``bool``."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_scalar(value: object) -> bool:
    """True for strings and numbers, the only values a slug can carry."""
    return isinstance(value, str) or is_number(value)


# ---------------------------------------------------------------------------
# Meta tags
# ---------------------------------------------------------------------------


def changefreq(value: object) -> str | None:
    """Value must be one of the sitemap protocol's change frequencies."""
    if not isinstance(value, str) or value not in CHANGEFREQS:
        options = ", ".join(sorted(CHANGEFREQS))
        return f"'changefreq' must be one of: {options} (got {value!r})"
    return None


def priority(value: object) -> str | None:
    """Value must be a number between 0.0 and 1.0, in steps of 0.1."""
    if not is_number(value) or not math.isfinite(value):  # type: ignore[arg-type]
        return f"'priority' must be a number (got {value!r})"
    if not 0.0 <= value <= 1.0:  # type: ignore[operator]
        return f"'priority' must be between 0.0 and 1.0 (got {value!r})"
    tenths = value * 10  # type: ignore[operator]
    if abs(tenths - round(tenths)) > 1e-3:
        return f"'priority' must be a multiple of 0.1 (got {value!r})"
    return None


def lastmod(value: object) -> str | None:
    """Value must be convertible to a W3C date-time."""
    try:
        normalize_lastmod(value)
    except ValueError as exc:
        return str(exc)
    return None


RULES: dict[str, Rule] = {
    "lastmod": lastmod,
    "changefreq": changefreq,
    "priority": priority,
}


def check_meta_tags(meta: Mapping[str, object]) -> list[str]:
    """Run every meta-tag rule present in *meta*, returning error messages."""
    errors: list[str] = []
    for tag in META_TAGS:
        if tag in meta:
            error = RULES[tag](meta[tag])
            if error is not None:
                errors.append(error)
    return errors


# ---------------------------------------------------------------------------
# W3C dates
# ---------------------------------------------------------------------------

# YYYY, YYYY-MM, YYYY-MM-DD, YYYY-MM-DDThh:mmTZD, YYYY-MM-DDThh:mm:ssTZD,
# YYYY-MM-DDThh:mm:ss.sTZD (https://www.w3.org/TR/NOTE-datetime)
_YYYY = r"[12]\d{3}"
_MM = r"(?:0[1-9]|1[0-2])"
_DD = r"(?:0[1-9]|[12]\d|3[01])"
_HH = r"(?:[01]\d|2[0-3])"
_MIN = r"[0-5]\d"
_SS = r"[0-5]\d"
_TZD = rf"(?:Z|[+-]{_HH}:{_MIN})"
W3C_DATE_RE = re.compile(
    rf"^{_YYYY}(?:-{_MM}(?:-{_DD}(?:T{_HH}:{_MIN}(?::{_SS}(?:\.\d+)?)?{_TZD})?)?)?$"
)


def _format_datetime(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    value = value.astimezone(UTC)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def normalize_lastmod(value: object) -> str:
    """Convert a date-ish value to a W3C date-time string.

    - W3C-formatted strings pass through unchanged.
    - ``datetime`` → ``YYYY-MM-DDThh:mm:ss.sssZ`` in UTC (naive is UTC).
    - ``date`` → ``YYYY-MM-DD``.
    - ``int`` / ``float`` → POSIX timestamp in seconds.
    - Other strings are parsed with ``datetime.fromisoformat``.

    Raises ``ValueError`` if the value cannot be converted.
    """
    if isinstance(value, datetime):
        return _format_datetime(value)
    if isinstance(value, date):
        return value.isoformat()
    if is_number(value):
        try:
            return _format_datetime(datetime.fromtimestamp(value, tz=UTC))  # type: ignore[arg-type]
        except (OverflowError, OSError, ValueError) as exc:
            msg = f"'lastmod' is not a valid timestamp (got {value!r})"
            raise ValueError(msg) from exc
    if isinstance(value, str):
        if W3C_DATE_RE.fullmatch(value):
            return value
        try:
            return _format_datetime(datetime.fromisoformat(value))
        except ValueError as exc:
            msg = f"'lastmod' is not a valid date (got {value!r})"
            raise ValueError(msg) from exc
    msg = (
        "'lastmod' must be a date, a datetime, a string following the "
        f"W3C date format or a numeric timestamp (got {value!r})"
    )
    raise ValueError(msg)
