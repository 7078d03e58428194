"""Writer strategies: how a mapping pushes a value into the target."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from form_map.core.protocol import Writable
from form_map.mapping.strategy import Strategy, positional_arity

if TYPE_CHECKING:
    from form_map.mapping.mapping import Mapping


class BasicWriter(Strategy):
    """Assigns the value to ``target_attribute``."""

    def write(self, value: Any) -> Any:
        target = self.target
        if isinstance(target, Writable):
            target.write_attribute(self.mapping.target_attribute, value)
        else:
            setattr(target, self.mapping.target_attribute, value)
        return value


class MethodWriter(Strategy):
    """Writes through a named accessor resolved at call time.

    A mapper (or trait) method receives the value. Otherwise a callable
    attribute of the target is called with the value, and a plain
    attribute of that name is assigned.
    """

    def __init__(self, mapping: Mapping, method: str) -> None:
        super().__init__(mapping)
        self.method = method

    def write(self, value: Any) -> Any:
        bound = self.mapper.find_method(self.method)
        if bound is not None:
            bound(value)
            return value

        target = self.target
        accessor = getattr(target, self.method, None)
        if callable(accessor):
            accessor(value)
        else:
            setattr(target, self.method, value)
        return value


class ProcWriter(Strategy):
    """Writes by calling a user function.

    One-argument functions receive the value, two-argument functions
    receive ``(target, value)`` and three-argument functions receive
    ``(mapping, target, value)``.
    """

    def __init__(self, mapping: Mapping, func: Callable[..., Any]) -> None:
        super().__init__(mapping)
        self.func = func
        self._arity = min(positional_arity(func), 3)

    def write(self, value: Any) -> Any:
        if self._arity >= 3:
            self.func(self.mapping, self.target, value)
        elif self._arity == 2:
            self.func(self.target, value)
        else:
            self.func(value)
        return value
