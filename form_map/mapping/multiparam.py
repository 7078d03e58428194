"""Multiparam assembly.

Form helpers split composite values over several params sharing a prefix:

    {"dob(1i)": "1999", "dob(2i)": "1", "dob(3i)": "2"} -> date(1999, 1, 2)

The part suffix letter coerces the part: ``i`` -> int, ``f`` -> float,
no letter -> the raw value.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any

from form_map.mapping.mapping import Mapping

_PART_PATTERN = re.compile(r"^(?P<name>.+)\((?P<index>\d+)(?P<kind>[a-z]?)\)$")

_COERCIONS = {"i": int, "f": float}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def assemble_multiparams(params: dict[str, Any], mappings: Iterable[Mapping]) -> dict[str, Any]:
    """Return a copy of *params* with multiparam parts combined.

    A composite whose parts are all blank becomes ``None``. Keys already
    present under a mapping's full name are left untouched. Exceptions from
    the multiparam constructor propagate.
    """
    multiparams = {m.full_name: m for m in mappings if m.is_multiparam()}
    if not multiparams:
        return params

    parts: dict[str, list[tuple[int, str, Any]]] = {}
    for key, value in params.items():
        if not isinstance(key, str):
            continue
        match = _PART_PATTERN.match(key)
        if match is None or match["name"] not in multiparams:
            continue
        parts.setdefault(match["name"], []).append((int(match["index"]), match["kind"], value))

    if not parts:
        return params

    result = dict(params)
    for full_name, entries in parts.items():
        if full_name in result:
            continue
        entries.sort(key=lambda entry: entry[0])
        if all(_is_blank(value) for _, _, value in entries):
            result[full_name] = None
            continue
        values = [
            _COERCIONS[kind](value) if kind in _COERCIONS else value
            for _, kind, value in entries
        ]
        result[full_name] = multiparams[full_name].multiparam(*values)  # type: ignore[misc]
    return result
