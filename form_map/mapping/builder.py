"""Mapper definition DSL builder.

Provides a fluent builder for defining mapper plans:

    customer = mapper("CustomerMapper").map("name").map("email", "email_address").build()

    order = (
        mapper("OrderMapper")
        .map("number")
        .mount(customer, target=lambda host: host.target.customer)
        .trait("with_notes", lambda t: t.map("notes"))
        .build()
    )
"""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Callable
from typing import Any

from form_map.core.exceptions import PlanCompilationError
from form_map.mapping.factory import MountingFactory
from form_map.mapping.options import MappingOptions, MountOptions, parse_options
from form_map.mapping.plan import MapperPlan, MappingSpec

EXTENSION_TRAIT = "extension"

TraitBody = Callable[["MapperBuilder"], "MapperBuilder | None"]

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def camelize(name: str) -> str:
    """``"trait_one"`` -> ``"TraitOne"``."""
    return "".join(part[:1].upper() + part[1:] for part in name.split("_") if part)


def underscore(name: str) -> str:
    """``"CustomerMapper"`` -> ``"customer_mapper"``."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def _as_tuple(value: Any) -> Any:
    if isinstance(value, str):
        return (value,)
    return value


def mapper(name: str, target_class: type | None = None) -> MapperBuilder:
    """Entry point for the mapper definition DSL.

    Args:
        name: Mapper name. CamelCase names ending in ``Mapper`` give the
              nicest defaults for mount names and trait plan names.
        target_class: Optional class used to build blank targets.

    Returns:
        A builder for chaining mapping declarations.
    """
    return MapperBuilder(name, target_class)


class MapperBuilder:
    """Fluent builder for mapper definitions."""

    def __init__(self, name: str, target_class: type | None = None) -> None:
        self._name = name
        self._target_class = target_class
        self._mappings: list[MappingSpec] = []
        self._mountings: list[MountingFactory] = []
        self._methods: dict[str, Callable[..., Any]] = {}
        self._requires: dict[str, tuple[str, ...]] = {}

    @property
    def name(self) -> str:
        return self._name

    def target_class(self, cls: type) -> MapperBuilder:
        """Set the class used to build blank targets."""
        self._target_class = cls
        return self

    def map(self, name: str, target_attribute: str | None = None, **options: Any) -> MapperBuilder:
        """Map external field *name* to *target_attribute* (defaults to *name*).

        Options: ``reader``, ``writer``, ``format``, ``multiparam``.
        """
        if any(spec.name == name for spec in self._mappings):
            raise PlanCompilationError(f"Field '{name}' is already mapped on {self._name}")
        self._mappings.append(
            MappingSpec(
                name=name,
                target_attribute=target_attribute or name,
                options=parse_options(MappingOptions, name, **options),
            )
        )
        return self

    def map_fields(self, *names: str, **options: Any) -> MapperBuilder:
        """Map several fields to same-named attributes with shared options."""
        for name in names:
            self.map(name, **options)
        return self

    def mount(self, plan: MapperPlan | MapperBuilder, **options: Any) -> MapperBuilder:
        """Mount another mapper.

        Options: ``name``, ``target``, ``traits``, ``required_for``,
        ``suffix``, ``save`` (``"before"`` / ``"after"``), ``extension``.
        """
        if isinstance(plan, MapperBuilder):
            plan = plan.build()
        for key in ("traits", "required_for"):
            if key in options:
                options[key] = _as_tuple(options[key])

        opts = parse_options(MountOptions, options.get("name") or plan.name, **options)
        self._add_mounting(
            MountingFactory(
                plan=plan,
                name=opts.name or underscore(plan.name).removesuffix("_mapper"),
                target=opts.target,
                required_for=frozenset(opts.required_for),
                traits=opts.traits,
                suffix=opts.suffix,
                save=opts.save,
                extension=opts.extension,
            )
        )
        return self

    def trait(
        self,
        name: str,
        body: TraitBody | None = None,
        *,
        requires: tuple[str, ...] | str = (),
    ) -> Any:
        """Define a trait: an optional set of mappings, mountings and methods.

        The trait is compiled into its own plan, named
        ``f"{host}{Name}Trait"``, and registered as an owned mounting that
        is only composed when the trait is activated. *requires* lists
        sibling traits composed together with this one.

        Without *body* this returns a decorator:

            @builder.trait("with_notes")
            def with_notes(t):
                t.map("notes")
        """
        if body is None:

            def decorator(func: TraitBody) -> TraitBody:
                self.trait(name, func, requires=requires)
                return func

            return decorator

        if name == EXTENSION_TRAIT:
            raise PlanCompilationError(
                f"'{EXTENSION_TRAIT}' is reserved for inline extensions on {self._name}"
            )
        if any(f.trait_name == name for f in self._mountings):
            raise PlanCompilationError(f"Trait '{name}' is already defined on {self._name}")

        plan = _run_body(MapperBuilder(trait_plan_name(self._name, name), self._target_class), body)
        self._add_mounting(
            MountingFactory(plan=plan, name=f"{name}_trait", trait_name=name, owned=True)
        )
        requires = _as_tuple(requires)
        if requires:
            self._requires[name] = tuple(requires)
        return self

    def method(self, name: str, func: Callable[..., Any] | None = None) -> Any:
        """Attach a method to the mapper. Also usable as a decorator.

        The function receives the mapper instance as its first argument.
        """
        if func is None:

            def decorator(f: Callable[..., Any]) -> Callable[..., Any]:
                self.method(name, f)
                return f

            return decorator

        self._methods[name] = func
        return self

    def build(self) -> MapperPlan:
        """Compile and validate the definition into a MapperPlan."""
        mountings = list(self._mountings)

        for trait_name, required in self._requires.items():
            for required_name in required:
                index = next(
                    (i for i, f in enumerate(mountings) if f.trait_name == required_name),
                    None,
                )
                if index is None:
                    raise PlanCompilationError(
                        f"Trait '{trait_name}' requires unknown trait '{required_name}' "
                        f"on {self._name}"
                    )
                factory = mountings[index]
                mountings[index] = dataclasses.replace(
                    factory, required_for=factory.required_for | {trait_name}
                )

        return MapperPlan(
            name=self._name,
            mappings=tuple(self._mappings),
            mountings=tuple(mountings),
            methods=dict(self._methods),
            target_class=self._target_class,
        )

    def _add_mounting(self, factory: MountingFactory) -> None:
        if any(f.name == factory.name for f in self._mountings):
            raise PlanCompilationError(
                f"Duplicate mounting name '{factory.name}' on {self._name}"
            )
        self._mountings.append(factory)


def trait_plan_name(host_name: str, trait_name: str) -> str:
    return f"{host_name}{camelize(trait_name)}Trait"


def _run_body(builder: MapperBuilder, body: TraitBody) -> MapperPlan:
    result = body(builder)
    return (result if isinstance(result, MapperBuilder) else builder).build()


def extension_factory(host: MapperPlan, extension: Any) -> MountingFactory:
    """Wrap an inline extension into an owned ``extension`` trait factory.

    *extension* may be a MapperPlan, a MapperBuilder, or a callable that
    receives a fresh builder (like a trait body).
    """
    plan_name = trait_plan_name(host.name, EXTENSION_TRAIT)
    if isinstance(extension, MapperPlan):
        plan = dataclasses.replace(extension, name=plan_name)
    elif isinstance(extension, MapperBuilder):
        plan = dataclasses.replace(extension.build(), name=plan_name)
    elif callable(extension):
        plan = _run_body(MapperBuilder(plan_name, host.target_class), extension)
    else:
        raise PlanCompilationError(
            f"Extension for {host.name} must be a MapperPlan, MapperBuilder or callable, "
            f"got {type(extension).__name__}"
        )
    return MountingFactory(
        plan=plan,
        name=f"{EXTENSION_TRAIT}_trait",
        trait_name=EXTENSION_TRAIT,
        owned=True,
    )
