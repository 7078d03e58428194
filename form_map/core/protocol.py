"""Target capability protocols.

Targets are arbitrary attribute-bearing objects. Those that need custom
attribute access, persistence or validation opt in by implementing one of
these protocols; everything else falls back to plain attribute access.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Readable(Protocol):
    """Target that exposes attribute values through an explicit reader."""

    def read_attribute(self, name: str) -> Any:
        """Return the value of attribute *name*."""
        ...


@runtime_checkable
class Writable(Protocol):
    """Target that accepts attribute values through an explicit writer."""

    def write_attribute(self, name: str, value: Any) -> None:
        """Assign *value* to attribute *name*."""
        ...


@runtime_checkable
class Saveable(Protocol):
    """Target that can persist itself."""

    def save(self) -> Any:
        """Persist the target. Returning False means failure."""
        ...


@runtime_checkable
class Validatable(Protocol):
    """Target that can report its own validation errors."""

    def validate(self) -> dict[str, list[str]] | None:
        """Return a mapping of attribute name to error messages."""
        ...


@runtime_checkable
class Findable(Protocol):
    """Target class that can load an existing record by identifier."""

    def find(self, identifier: Any) -> Any:
        """Return the record identified by *identifier*."""
        ...
