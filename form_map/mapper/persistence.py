"""Mapper with persistence.

Persistence is delegated to the targets: a target that implements
``Saveable`` is saved, one that implements ``Validatable`` (or is a
Pydantic model) is validated. The mapper only orders the calls across its
composed tree and wraps saving in an optional transaction.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import AbstractContextManager, nullcontext
from typing import Any

from pydantic import BaseModel, ValidationError

from form_map.core.exceptions import SaveError, TargetClassError
from form_map.core.protocol import Findable, Saveable, Validatable
from form_map.core.targets import new_target
from form_map.mapper.base import OpenMapper
from form_map.mapping.plan import MapperPlan

logger = logging.getLogger(__name__)

TransactionFactory = Callable[[], AbstractContextManager[Any]]


class Mapper(OpenMapper):
    """OpenMapper that can validate and save its targets.

    Save order for a tree: mounted mappers with ``save="before"``, then
    this mapper's target, then traits (extension first), then mounted
    mappers with ``save="after"``.
    """

    @property
    def persisted(self) -> bool:
        """True if the target reports itself as persisted."""
        value = getattr(self.target, "persisted", False)
        return bool(value() if callable(value) else value)

    @property
    def id(self) -> Any:
        return getattr(self.target, "id", None)

    # --- Validation ---

    def valid(self) -> bool:
        """Validate every target in the tree and collect errors.

        Errors recorded with ``errors.preserve`` are kept; everything else
        is recomputed.
        """
        self.errors.clear()
        self._collect_errors()
        if self.errors:
            logger.info("%s is invalid: %s", self.name, self.errors.to_dict())
        return not self.errors

    def _collect_errors(self) -> None:
        if not self.owned:
            for attribute, messages in _target_errors(self.target).items():
                field = self._field_for(attribute)
                for message in messages:
                    self.errors.add(field, message)

        for mount in self.mountings:
            if mount.owned:
                mount._collect_errors()  # type: ignore[attr-defined]
            elif not mount.valid():  # type: ignore[attr-defined]
                self.errors.merge(mount.errors)

    def _field_for(self, attribute: str) -> str:
        for mapper in self.self_mountings:
            for mapping in mapper.mappings:
                if mapping.target_attribute == attribute:
                    return mapping.full_name
        return attribute

    # --- Saving ---

    def save_target(self) -> bool:
        """Save this mapper's own target.

        Traits share their owner's target and always succeed. Targets that
        cannot save themselves count as saved.
        """
        if self.owned:
            return True
        if isinstance(self.target, Saveable):
            return self.target.save() is not False
        return True

    def shallow_save(self) -> bool:
        """Save the target without touching mounted mappers."""
        saved = self.save_target()
        logger.debug("Saved target of %s: %s", self.name, saved)
        return saved

    def save(self) -> bool:
        """Save the whole tree, stopping at the first failure."""
        before = [m for m in self.mapper_mountings if m.save_order == "before"]
        after = [m for m in self.mapper_mountings if m.save_order != "before"]

        steps: list[Callable[[], bool]] = [m.save for m in before]  # type: ignore[attr-defined]
        steps.append(self.shallow_save)
        steps.extend(m.save for m in self.trait_mountings)  # type: ignore[attr-defined]
        steps.extend(m.save for m in after)  # type: ignore[attr-defined]

        for step in steps:
            if not step():
                logger.info("Save of %s stopped at a failing target", self.name)
                return False
        return True

    def apply(self, params: dict[str, Any], transaction: TransactionFactory | None = None) -> bool:
        """Write *params*, validate, and save.

        Saving runs inside ``transaction()`` when given. A failed save
        raises SaveError inside the transaction so it rolls back, and
        apply returns False.
        """
        self.write(params)
        if not self.valid():
            return False

        try:
            with transaction() if transaction is not None else nullcontext():
                if not self.save():
                    raise SaveError(self.name)
        except SaveError as e:
            logger.info("%s", e)
            return False
        return True


def _target_errors(target: Any) -> dict[str, list[str]]:
    # BaseModel carries a legacy validate() classmethod, so check it first
    if isinstance(target, BaseModel):
        model = type(target)
        names = _field_names_by_alias(model)
        try:
            model.model_validate(target.model_dump(by_alias=True))
        except ValidationError as e:
            errors: dict[str, list[str]] = {}
            for err in e.errors():
                key = str(err["loc"][0]) if err["loc"] else "base"
                attribute = names.get(key, key)
                errors.setdefault(attribute, []).append(err["msg"])
            return errors
        return {}
    if isinstance(target, Validatable):
        return dict(target.validate() or {})
    return {}


def _field_names_by_alias(model: type[BaseModel]) -> dict[str, str]:
    names: dict[str, str] = {}
    for name, info in model.model_fields.items():
        for alias in (info.alias, info.serialization_alias, info.validation_alias):
            if isinstance(alias, str):
                names[alias] = name
    return names


def build(plan: MapperPlan, *traits: str, **kwargs: Any) -> Mapper:
    """Create a mapper over a blank target of ``plan.target_class``.

    Raises:
        TargetClassError: If the plan has no target class.
    """
    if plan.target_class is None:
        raise TargetClassError(plan.name, "no target_class to build a target from")
    return Mapper(plan, new_target(plan.target_class), *traits, **kwargs)


def find(plan: MapperPlan, identifier: Any, *traits: str, **kwargs: Any) -> Mapper:
    """Create a mapper over the record ``plan.target_class.find(identifier)``.

    Raises:
        TargetClassError: If the target class is missing or cannot find.
    """
    target_class = plan.target_class
    if target_class is None or not isinstance(target_class, Findable):
        raise TargetClassError(plan.name, "target_class does not implement find()")
    return Mapper(plan, target_class.find(identifier), *traits, **kwargs)
