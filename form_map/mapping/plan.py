"""Mapper plan data classes.

Frozen dataclasses describing a mapper definition. A plan is built once
by MapperBuilder and shared read-only by every mapper instance created
from it.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from form_map.mapping.options import MappingOptions

if TYPE_CHECKING:
    from form_map.mapping.factory import MountingFactory


@dataclass(frozen=True)
class MappingSpec:
    """Declaration of a single mapping."""

    name: str
    target_attribute: str
    options: MappingOptions = field(default_factory=MappingOptions)


@dataclass(frozen=True)
class MapperPlan:
    """Compiled mapper definition: own mappings, mountings and methods."""

    name: str
    mappings: tuple[MappingSpec, ...] = ()
    mountings: tuple[MountingFactory, ...] = ()
    methods: dict[str, Callable[..., Any]] = field(default_factory=dict)
    target_class: type | None = None

    @property
    def trait_names(self) -> list[str]:
        """Names of the traits declared directly on this plan."""
        return [f.trait_name for f in self.mountings if f.trait_name is not None]

    def trait_factory(self, trait_name: str) -> MountingFactory | None:
        for factory in self.mountings:
            if factory.trait_name == trait_name:
                return factory
        return None

    def __repr__(self) -> str:
        return f"MapperPlan({self.name!r})"
