"""Target class helpers.

Supports dataclasses, Pydantic models, and plain classes.
"""

from __future__ import annotations

import dataclasses
import inspect
from typing import Any

from pydantic import BaseModel


def is_pydantic_model(cls: type) -> bool:
    """Check if a class is a Pydantic BaseModel."""
    return isinstance(cls, type) and issubclass(cls, BaseModel)


def required_field_names(cls: type) -> list[str]:
    """Extract the names of fields that have no default value."""
    # Pydantic model
    if is_pydantic_model(cls):
        fields = cls.model_fields  # type: ignore[attr-defined]
        return [name for name, info in fields.items() if info.is_required()]

    # Dataclass
    if dataclasses.is_dataclass(cls):
        return [
            f.name
            for f in dataclasses.fields(cls)
            if f.init
            and f.default is dataclasses.MISSING
            and f.default_factory is dataclasses.MISSING
        ]

    # Plain class - use __init__ parameters
    try:
        sig = inspect.signature(cls.__init__)  # type: ignore[misc]
        return [
            name
            for name, param in sig.parameters.items()
            if name != "self"
            and param.default is inspect.Parameter.empty
            and param.kind
            in (inspect.Parameter.POSITIONAL_OR_KEYWORD, inspect.Parameter.KEYWORD_ONLY)
        ]
    except (ValueError, TypeError):
        return []


def new_target(cls: type) -> Any:
    """Instantiate a blank target, filling required fields with None.

    Detection order:
    1. Pydantic BaseModel -> model_construct() (no validation)
    2. dataclass / plain class -> cls(**{required: None})
    """
    blanks = {name: None for name in required_field_names(cls)}
    if is_pydantic_model(cls):
        return cls.model_construct(**blanks)  # type: ignore[attr-defined]
    return cls(**blanks)
