"""Mapping: one external field bound to one target attribute."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from form_map.mapping.options import MappingOptions
from form_map.mapping.reader import BasicReader, FormattedReader, MethodReader, ProcReader
from form_map.mapping.writer import BasicWriter, MethodWriter, ProcWriter

if TYPE_CHECKING:
    from form_map.mapper.base import OpenMapper

Reader = BasicReader | MethodReader | ProcReader | FormattedReader
Writer = BasicWriter | MethodWriter | ProcWriter


class Mapping:
    """Binding of an external field name to an attribute of the target.

    Each mapping belongs to exactly one mapper, which is the gateway to the
    actual target. ``full_name`` is the key used in params: the plain
    ``name``, or ``f"{name}_{suffix}"`` when the mapper is suffixed.

    Args:
        mapper: Owning mapper instance.
        name: External field name.
        target_attribute: Attribute name on the target.
        options: Validated mapping options.
    """

    def __init__(
        self,
        mapper: OpenMapper,
        name: str,
        target_attribute: str,
        options: MappingOptions | None = None,
    ) -> None:
        options = options or MappingOptions()
        self.mapper = mapper
        self.name = name
        self.target_attribute = target_attribute
        self.full_name = f"{name}_{mapper.suffix}" if mapper.suffixed else name
        self.multiparam: Callable[..., Any] | None = options.multiparam
        self.reader: Reader | None = self._fetch_reader(options)
        self.writer: Writer | None = self._fetch_writer(options)

    @property
    def target(self) -> Any:
        return self.mapper.target

    def is_multiparam(self) -> bool:
        return self.multiparam is not None

    def read(self) -> Any:
        return self.reader.read() if self.reader is not None else None

    def write(self, value: Any) -> Any:
        return self.writer.write(value) if self.writer is not None else None

    def write_from_params(self, params: dict[str, Any]) -> Any:
        """Write ``params[full_name]`` if the key is present and writing is enabled."""
        if self.full_name in params and self.writer is not None:
            return self.write(params[self.full_name])
        return None

    def read_as_params(self) -> dict[str, Any]:
        """Return ``{full_name: value}``, or ``{}`` when reading is disabled."""
        if self.reader is None:
            return {}
        return {self.full_name: self.read()}

    def _fetch_reader(self, options: MappingOptions) -> Reader | None:
        reader = options.reader
        if reader is False:
            return None
        if isinstance(reader, str):
            return MethodReader(self, reader)
        if callable(reader):
            return ProcReader(self, reader)
        if options.format is not None:
            return FormattedReader(self, options.format)
        return BasicReader(self)

    def _fetch_writer(self, options: MappingOptions) -> Writer | None:
        writer = options.writer
        if writer is False:
            return None
        if isinstance(writer, str):
            return MethodWriter(self, writer)
        if callable(writer):
            return ProcWriter(self, writer)
        return BasicWriter(self)

    def __repr__(self) -> str:
        return f"Mapping({self.full_name!r} -> {self.target_attribute!r})"
