"""Option models for mapping and mount declarations.

Options are validated once, when a plan is defined, so that mapper
instances never see a malformed declaration.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from form_map.core.exceptions import MappingOptionsError

M = TypeVar("M", bound=BaseModel)


class MappingOptions(BaseModel):
    """Options accepted by ``MapperBuilder.map``.

    ``reader`` / ``writer``:
        str      -> Method strategy (accessor name)
        callable -> Proc strategy
        False    -> direction disabled
        None     -> Basic strategy (Formatted reader when ``format`` is set)
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    reader: str | Callable[..., Any] | bool | None = None
    writer: str | Callable[..., Any] | bool | None = None
    format: str | Callable[..., Any] | None = None
    multiparam: Callable[..., Any] | None = None

    @field_validator("reader", "writer")
    @classmethod
    def _only_false_disables(cls, value: Any) -> Any:
        if value is True:
            raise ValueError("use False to disable, or an accessor name or callable")
        return value


class MountOptions(BaseModel):
    """Options accepted by ``MapperBuilder.mount``."""

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    name: str | None = None
    target: Any = None
    traits: tuple[str, ...] = ()
    required_for: tuple[str, ...] = ()
    suffix: str | None = None
    save: Literal["before", "after"] = "after"
    extension: Any = None

    @field_validator("suffix")
    @classmethod
    def _non_empty_suffix(cls, value: str | None) -> str | None:
        if value is not None and not value:
            raise ValueError("suffix must be a non-empty string")
        return value


def parse_options(model: type[M], label: str, /, **options: Any) -> M:
    """Validate *options* against *model*.

    Raises:
        MappingOptionsError: If validation fails.
    """
    try:
        return model.model_validate(options)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc']) or 'options'}: {err['msg']}"
            for err in e.errors()
        )
        raise MappingOptionsError(label, details) from e
