"""FormMap - declarative form-object mapping with mountings and traits."""

from __future__ import annotations

from form_map.core.errors import Errors
from form_map.core.exceptions import (
    DuplicateFieldError,
    FormatError,
    FormMapError,
    MappingError,
    MappingOptionsError,
    MountingError,
    PersistenceError,
    PlanCompilationError,
    SaveError,
    TargetClassError,
)
from form_map.core.formats import register_format
from form_map.core.log import configure_logging
from form_map.core.protocol import Findable, Readable, Saveable, Validatable, Writable
from form_map.mapper import Mapper, OpenMapper, build, find
from form_map.mapping import Mapping, MapperBuilder, MapperPlan, MountingFactory, mapper

__all__ = [
    # Definition
    "mapper",
    "MapperBuilder",
    "MapperPlan",
    "MountingFactory",
    "Mapping",
    # Mappers
    "OpenMapper",
    "Mapper",
    "build",
    "find",
    # Target capabilities
    "Readable",
    "Writable",
    "Saveable",
    "Validatable",
    "Findable",
    # Support
    "Errors",
    "register_format",
    "configure_logging",
    # Exceptions
    "FormMapError",
    "MappingError",
    "DuplicateFieldError",
    "MappingOptionsError",
    "PlanCompilationError",
    "FormatError",
    "MountingError",
    "PersistenceError",
    "TargetClassError",
    "SaveError",
]
