"""Mounting factory.

A MountingFactory is registered on a MapperPlan (explicitly via mount(), or
through trait registration) and creates the mounted mapper for each host
mapper instance.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from form_map.core.exceptions import MountingError
from form_map.core.targets import new_target
from form_map.mapping.plan import MapperPlan

if TYPE_CHECKING:
    from form_map.mapper.base import OpenMapper

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MountingFactory:
    """Declarative description of a mounted mapper.

    Attributes:
        plan: Plan of the mapper to mount.
        name: Identifier used by ``OpenMapper.mounting(name)``.
        target: Target resolution rule, checked in this order: any callable
            (functions, but also classes and objects defining ``__call__``)
            is called with the host mapper; a string names an accessor,
            either a plan method of the host or an attribute of the host
            target, called when callable; any other object is the target
            itself. ``None`` uses the accessor named after the mounting.
            Wrap a callable fixed target as ``lambda host: obj``.
        trait_name: Set for factories registered through trait().
        required_for: Trait names whose activation requires this factory.
        traits: Traits always activated on the mounted mapper.
        suffix: Suffix for the mounted mapper's full names.
        save: Save order relative to the host target.
        extension: Inline extension passed to the mounted mapper.
        owned: True for traits, which share the host's target and errors.
    """

    plan: MapperPlan
    name: str
    target: Any = None
    trait_name: str | None = None
    required_for: frozenset[str] = frozenset()
    traits: tuple[str, ...] = ()
    suffix: str | None = None
    save: str = "after"
    extension: Any = None
    owned: bool = False

    @property
    def traited(self) -> bool:
        return self.trait_name is not None

    @property
    def conditional(self) -> bool:
        """True if composition of this factory depends on active traits."""
        return self.traited or bool(self.required_for)

    def required_for_any_trait(self, traits: Iterable[str]) -> bool:
        """Check whether this factory has to be composed for *traits*.

        Unconditional factories are always required. Otherwise the factory
        is required when its own trait is active, when one of its
        ``required_for`` traits is active, or, for traits, when any trait
        nested inside it is required.
        """
        if not self.conditional:
            return True

        active = set(traits)
        if self.trait_name in active or self.required_for & active:
            return True

        return self.traited and any(
            factory.traited and factory.required_for_any_trait(active)
            for factory in self.plan.mountings
        )

    def resolve_target(self, host: OpenMapper) -> Any:
        """Resolve the target object for the mapper mounted on *host*.

        Raises:
            MountingError: If an accessor name matches nothing on the host,
                or the rule yields None and the mounted plan has no
                target_class to build a blank target from.
        """
        if self.owned:
            return host.target

        rule = self.target
        if callable(rule):
            target = rule(host)
        elif isinstance(rule, str):
            target = self._accessor_target(host, rule)
        elif rule is not None:
            target = rule
        else:
            target = self._accessor_target(host, self.name)

        if target is None:
            if self.plan.target_class is None:
                raise MountingError(
                    self.name,
                    "target resolved to None and the mounted plan has no target_class",
                )
            target = new_target(self.plan.target_class)
            logger.debug(
                "Built blank %s target for mounting '%s'",
                self.plan.target_class.__name__,
                self.name,
            )
        return target

    def _accessor_target(self, host: OpenMapper, accessor: str) -> Any:
        bound = host.find_method(accessor)
        if bound is not None:
            return bound()
        if not hasattr(host.target, accessor):
            raise MountingError(
                self.name,
                f"{type(host.target).__name__} has no accessor '{accessor}'",
            )
        value = getattr(host.target, accessor)
        return value() if callable(value) else value

    def create(self, host: OpenMapper, *traits: str) -> OpenMapper:
        """Instantiate the mounted mapper for *host*.

        The mounted mapper is of the same kind as the host and receives the
        factory's own traits followed by the host's active *traits*.
        """
        target = self.resolve_target(host)
        mapper_traits = tuple(dict.fromkeys((*self.traits, *traits)))
        context: dict[str, Any] = {
            "extension": self.extension,
            "save_order": self.save,
            "name": self.name,
            "trait_name": self.trait_name,
        }
        if self.owned:
            context.update(owner=host, suffix=host.suffix)
        else:
            context.update(host=host, suffix=self.suffix)

        logger.debug("Mounting '%s' (%s) on %s", self.name, self.plan.name, host.name)
        return type(host)(self.plan, target, *mapper_traits, **context)
