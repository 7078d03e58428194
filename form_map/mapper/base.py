"""OpenMapper: mappings plus the mounting/trait composition tree.

A mapper binds a MapperPlan to a target object. The tree of mounted
mappers is composed once, in the constructor, from the plan's factories
filtered by the active traits; it never changes afterwards.
"""

from __future__ import annotations

import logging
import types
from collections.abc import Callable, Iterator
from typing import Any

from form_map.core.errors import Errors
from form_map.core.exceptions import DuplicateFieldError
from form_map.mapping.builder import EXTENSION_TRAIT, extension_factory
from form_map.mapping.mapping import Mapping
from form_map.mapping.multiparam import assemble_multiparams
from form_map.mapping.plan import MapperPlan

logger = logging.getLogger(__name__)


class OpenMapper:
    """Mapper without persistence.

    Args:
        plan: The mapper definition.
        target: Object the mappings read from and write to.
        *traits: Names of the traits activated for this instance.
        extension: Inline definition composed as the ``extension`` trait
            of this instance only (a MapperPlan, MapperBuilder, or a
            callable receiving a fresh builder).
        owner: Host mapper, for traits.
        host: Host mapper, for independently mounted mappers.
        suffix: Suffix appended to every full name of this mapper.
        save_order: ``"before"`` or ``"after"`` the host target is saved.
        name: Mounting name; defaults to the plan name.
        trait_name: Trait this mapper implements, if any.

    Raises:
        DuplicateFieldError: If two composed mappings share a full name.
        MountingError: If a mounted mapper's target cannot be resolved.
    """

    def __init__(
        self,
        plan: MapperPlan,
        target: Any,
        *traits: str,
        extension: Any = None,
        owner: OpenMapper | None = None,
        host: OpenMapper | None = None,
        suffix: str | None = None,
        save_order: str = "after",
        name: str | None = None,
        trait_name: str | None = None,
    ) -> None:
        self.plan = plan
        self.target = target
        self.traits: tuple[str, ...] = tuple(dict.fromkeys(traits))
        self.owner = owner
        self.host = host
        self.suffix = suffix
        self.save_order = save_order
        self.name = name or plan.name
        self.trait_name = trait_name
        self.errors = owner.errors if owner is not None else Errors()

        self.mappings: tuple[Mapping, ...] = tuple(
            Mapping(self, spec.name, spec.target_attribute, spec.options)
            for spec in plan.mappings
        )
        self.mountings: tuple[OpenMapper, ...] = self._compose(extension)
        self._check_full_names()

    # --- Composition ---

    def _compose(self, extension: Any) -> tuple[OpenMapper, ...]:
        factories = [f for f in self.plan.mountings if f.required_for_any_trait(self.traits)]
        if extension is not None:
            factories.append(extension_factory(self.plan, extension))

        logger.debug(
            "Composing %s with traits %s: %s",
            self.name,
            list(self.traits),
            [f.name for f in factories],
        )
        return tuple(factory.create(self, *self.traits) for factory in factories)

    def _check_full_names(self) -> None:
        seen: dict[str, Mapping] = {}
        for mapping in self.all_mappings():
            other = seen.get(mapping.full_name)
            if other is not None:
                raise DuplicateFieldError(
                    mapping.full_name, other.mapper.name, mapping.mapper.name
                )
            seen[mapping.full_name] = mapping

    # --- Properties ---

    @property
    def owned(self) -> bool:
        return self.owner is not None

    @property
    def hosted(self) -> bool:
        return self.host is not None

    @property
    def suffixed(self) -> bool:
        return self.suffix is not None

    @property
    def is_extension(self) -> bool:
        """True if this mapper is the inline extension of its owner."""
        return self.owned and self.trait_name == EXTENSION_TRAIT

    # --- Mounting views ---

    @property
    def self_mountings(self) -> list[OpenMapper]:
        """This mapper and every owned trait below it, depth first, self last."""
        result: list[OpenMapper] = []
        for mount in self.__dict__.get("mountings", ()):
            if mount.owned:
                result.extend(mount.self_mountings)
        result.append(self)
        return result

    @property
    def trait_mountings(self) -> list[OpenMapper]:
        """Owned mountings; the extension, if last, is moved to the front."""
        result = [mount for mount in self.mountings if mount.owned]
        if len(result) > 1 and result[-1].is_extension:
            result.insert(0, result.pop())
        return result

    @property
    def mapper_mountings(self) -> list[OpenMapper]:
        """Mountings of independent mappers."""
        return [mount for mount in self.mountings if not mount.owned]

    def trait(self, trait_name: str) -> OpenMapper | None:
        """Find the composed trait named *trait_name*, including nested ones."""
        for mount in self.self_mountings:
            if mount.owned and mount.trait_name == trait_name:
                return mount
        return None

    @property
    def extension(self) -> OpenMapper | None:
        return self.trait(EXTENSION_TRAIT)

    def mounting(self, name: str) -> OpenMapper | None:
        """Find a composed mapper by mounting name, searching depth first."""
        for mount in self.mountings:
            if mount.name == name:
                return mount
            found = mount.mounting(name)
            if found is not None:
                return found
        return None

    def _ordered_mountings(self) -> list[OpenMapper]:
        return self.trait_mountings + self.mapper_mountings

    # --- Mappings ---

    def all_mappings(self) -> Iterator[Mapping]:
        """Own mappings, then those of traits and mounted mappers."""
        yield from self.mappings
        for mount in self._ordered_mountings():
            yield from mount.all_mappings()

    def mapping(self, full_name: str) -> Mapping | None:
        """Find a mapping anywhere in the tree by its full name."""
        for mapping in self.all_mappings():
            if mapping.full_name == full_name:
                return mapping
        return None

    # --- Reading and writing ---

    def read(self) -> dict[str, Any]:
        """Read every mapping in the tree into a ``{full_name: value}`` dict."""
        result: dict[str, Any] = {}
        for mapping in self.mappings:
            result.update(mapping.read_as_params())
        for mount in self._ordered_mountings():
            result.update(mount.read())
        return result

    def write(self, params: dict[str, Any]) -> dict[str, Any]:
        """Write *params* into every matching mapping in the tree.

        Keys that match no mapping are ignored. Returns *params*.
        """
        self._write(assemble_multiparams(params, self.all_mappings()))
        return params

    def _write(self, params: dict[str, Any]) -> None:
        for mapping in self.mappings:
            mapping.write_from_params(params)
        for mount in self._ordered_mountings():
            mount._write(params)

    # --- Methods ---

    def find_method(self, name: str) -> Callable[..., Any] | None:
        """Return plan method *name* bound to the mapper defining it.

        Lookup order: this mapper's plan, the plans of its composed traits,
        then (for traits) the owner.
        """
        mounts = self.self_mountings
        for mount in (mounts[-1], *mounts[:-1]):
            func = mount.plan.methods.get(name)
            if func is not None:
                return types.MethodType(func, mount)
        owner = self.__dict__.get("owner")
        if owner is not None:
            return owner.find_method(name)
        return None

    def __getattr__(self, name: str) -> Any:
        if not name.startswith("_") and "plan" in self.__dict__:
            bound = self.find_method(name)
            if bound is not None:
                return bound
        raise AttributeError(
            f"{type(self).__name__} '{self.__dict__.get('name')}' has no attribute '{name}'"
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, traits={list(self.traits)!r})"
