"""Shared base for reader and writer strategies."""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from form_map.mapping.mapping import Mapping


def positional_arity(func: Callable[..., Any]) -> int:
    """Count the positional parameters *func* accepts.

    Functions taking ``*args`` report a large arity so callers pass the
    richest argument list. Builtins without a signature count as one.
    """
    try:
        sig = inspect.signature(func)
    except (ValueError, TypeError):
        return 1

    count = 0
    for param in sig.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return 99
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            count += 1
    return count


class Strategy:
    """Value access strategy bound to one mapping."""

    def __init__(self, mapping: Mapping) -> None:
        self.mapping = mapping

    @property
    def mapper(self) -> Any:
        return self.mapping.mapper

    @property
    def target(self) -> Any:
        return self.mapping.target

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.mapping.full_name!r})"
