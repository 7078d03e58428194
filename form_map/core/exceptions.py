"""FormMap exception hierarchy.

Strategy callables supplied by users (Proc readers/writers, mapper methods)
are never wrapped: their exceptions reach the caller unchanged.
"""

from __future__ import annotations


class FormMapError(Exception):
    """Base exception for all FormMap errors."""


# --- Mapping ---


class MappingError(FormMapError):
    """Base for mapping definition errors."""


class DuplicateFieldError(MappingError):
    """Raised when two composed mappings expose the same full name."""

    def __init__(self, full_name: str, mapper_a: str, mapper_b: str) -> None:
        self.full_name = full_name
        super().__init__(
            f"Duplicate field '{full_name}': mapped by both {mapper_a} and {mapper_b}"
        )


class MappingOptionsError(MappingError):
    """Raised when mapping or mount options fail validation."""

    def __init__(self, name: str, detail: str) -> None:
        self.name = name
        super().__init__(f"Invalid options for '{name}': {detail}")


class PlanCompilationError(MappingError):
    """Raised when a MapperPlan fails validation during build()."""


class FormatError(MappingError):
    """Raised when a named format cannot be resolved."""

    def __init__(self, format_name: str) -> None:
        self.format_name = format_name
        super().__init__(f"Unknown format: '{format_name}'")


# --- Mounting ---


class MountingError(FormMapError):
    """Raised when a mounted mapper's target cannot be resolved."""

    def __init__(self, mounting_name: str, detail: str) -> None:
        self.mounting_name = mounting_name
        super().__init__(f"Cannot mount '{mounting_name}': {detail}")


# --- Persistence ---


class PersistenceError(FormMapError):
    """Base for persistence collaborator errors."""


class TargetClassError(PersistenceError):
    """Raised when a plan has no usable target class for build/find."""

    def __init__(self, plan_name: str, detail: str) -> None:
        self.plan_name = plan_name
        super().__init__(f"Target class error for '{plan_name}': {detail}")


class SaveError(PersistenceError):
    """Raised inside a save transaction when a target refuses to save."""

    def __init__(self, mapper_name: str) -> None:
        self.mapper_name = mapper_name
        super().__init__(f"Saving '{mapper_name}' failed")
