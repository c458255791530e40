"""Pure transform / reverse-transform pairs for property definitions.

Every function here passes ``None`` through unchanged, so each pair satisfies
``reverse(transform(x)) == x`` for ``None`` as well as for regular values.

Usage:
    PropertyDefinition(transform=to_int, reverse_transform=from_int)
    PropertyDefinition(transform=to_datetime, reverse_transform=from_datetime)
    PropertyDefinition(transform=nullable(Decimal), reverse_transform=nullable(str))
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any


def identity(value: Any) -> Any:
    """Return value unchanged.

    Args:
        value: Any value.

    Returns:
        The same value.
    """
    return value


def nullable[T, R](fn: Callable[[T], R]) -> Callable[[T | None], R | None]:
    """Wrap a conversion so that ``None`` is passed through instead of converted.

    Args:
        fn: Single-argument conversion.

    Returns:
        Conversion that maps None to None and applies fn otherwise.
    """

    def convert(value: T | None) -> R | None:
        if value is None:
            return None
        return fn(value)

    convert.__name__ = f"nullable_{getattr(fn, '__name__', 'fn')}"
    return convert


to_int = nullable(int)
from_int = nullable(int)
to_float = nullable(float)
to_str = nullable(str)


def to_bool(value: Any) -> bool | None:
    """Convert common raw boolean spellings to bool.

    Strings "true"/"1"/"yes"/"on" (any case) are True, "false"/"0"/"no"/"off"/"" are False.

    Args:
        value: Raw value.

    Returns:
        Converted bool, or None for None.

    Raises:
        ValueError: If a string is not a recognized boolean spelling.
    """
    if value is None:
        return None
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off", ""):
            return False
        raise ValueError(f"Not a boolean: {value!r}")
    return bool(value)


def to_datetime(value: str | datetime | None) -> datetime | None:
    """Parse an ISO-8601 string into a datetime. Datetimes pass through."""
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def from_datetime(value: datetime | None) -> str | None:
    """Format a datetime as ISO-8601."""
    if value is None:
        return None
    return value.isoformat()
