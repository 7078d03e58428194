"""Named value formats applied by the Formatted reader.

Registry convention:
    register_format("money", lambda value: f"{value:.2f}")
    map("total", format="money")
"""

from __future__ import annotations

import datetime
from collections.abc import Callable
from decimal import Decimal
from typing import Any

from form_map.core.exceptions import FormatError

FormatFunc = Callable[[Any], Any]


def _iso8601(value: Any) -> Any:
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    return value


def _date(value: Any) -> Any:
    if isinstance(value, datetime.datetime):
        return value.date().isoformat()
    return _iso8601(value)


def _decimal(value: Any) -> Any:
    if isinstance(value, Decimal):
        return value
    # str() first so floats keep their short repr
    return Decimal(str(value))


_FORMATS: dict[str, FormatFunc] = {
    "iso8601": _iso8601,
    "date": _date,
    "decimal": _decimal,
    "str": str,
    "upper": lambda value: str(value).upper(),
    "lower": lambda value: str(value).lower(),
    "strip": lambda value: str(value).strip(),
}


def register_format(name: str, func: FormatFunc) -> None:
    """Register (or replace) a named format."""
    _FORMATS[name] = func


def get_format(name: str) -> FormatFunc:
    """Look up a named format.

    Raises:
        FormatError: If no format is registered under *name*.
    """
    try:
        return _FORMATS[name]
    except KeyError:
        raise FormatError(name) from None


def has_format(name: str) -> bool:
    return name in _FORMATS


def format_names() -> list[str]:
    """List registered format names, sorted alphabetically."""
    return sorted(_FORMATS)
