"""Reader strategies: how a mapping obtains its value from the target."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from form_map.core.formats import get_format
from form_map.core.protocol import Readable
from form_map.mapping.strategy import Strategy, positional_arity

if TYPE_CHECKING:
    from form_map.mapping.mapping import Mapping


class BasicReader(Strategy):
    """Reads ``target_attribute`` straight from the target."""

    def read(self) -> Any:
        target = self.target
        if isinstance(target, Readable):
            return target.read_attribute(self.mapping.target_attribute)
        return getattr(target, self.mapping.target_attribute)


class MethodReader(Strategy):
    """Reads through a named accessor.

    The name is resolved on every read: a method defined on the mapper (or
    one of its traits) wins, otherwise the target's attribute of that name
    is used, and called if it is callable.
    """

    def __init__(self, mapping: Mapping, method: str) -> None:
        super().__init__(mapping)
        self.method = method

    def read(self) -> Any:
        bound = self.mapper.find_method(self.method)
        if bound is not None:
            return bound()
        value = getattr(self.target, self.method)
        return value() if callable(value) else value


class ProcReader(Strategy):
    """Reads by calling a user function.

    One-argument functions receive the target; two-argument functions
    receive ``(mapping, target)``.
    """

    def __init__(self, mapping: Mapping, func: Callable[..., Any]) -> None:
        super().__init__(mapping)
        self.func = func
        self._with_mapping = positional_arity(func) >= 2

    def read(self) -> Any:
        if self._with_mapping:
            return self.func(self.mapping, self.target)
        return self.func(self.target)


class FormattedReader(BasicReader):
    """Basic read followed by a format.

    *fmt* is a callable, the name of a mapper method, or a name registered
    in :mod:`form_map.core.formats`. ``None`` values are returned as is.
    """

    def __init__(self, mapping: Mapping, fmt: str | Callable[..., Any]) -> None:
        super().__init__(mapping)
        self.format = fmt

    def read(self) -> Any:
        value = super().read()
        if value is None:
            return None
        return self._formatter()(value)

    def _formatter(self) -> Callable[[Any], Any]:
        if callable(self.format):
            return self.format
        bound = self.mapper.find_method(self.format)
        if bound is not None:
            return bound
        return get_format(self.format)
