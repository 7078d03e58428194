"""Mapping layer - field bindings, strategies and mapper plans."""

from __future__ import annotations

from form_map.mapping.builder import MapperBuilder, mapper
from form_map.mapping.factory import MountingFactory
from form_map.mapping.mapping import Mapping
from form_map.mapping.options import MappingOptions, MountOptions
from form_map.mapping.plan import MapperPlan, MappingSpec
from form_map.mapping.reader import BasicReader, FormattedReader, MethodReader, ProcReader
from form_map.mapping.writer import BasicWriter, MethodWriter, ProcWriter

__all__ = [
    "mapper",
    "MapperBuilder",
    "MapperPlan",
    "MappingSpec",
    "MountingFactory",
    "Mapping",
    "MappingOptions",
    "MountOptions",
    "BasicReader",
    "MethodReader",
    "ProcReader",
    "FormattedReader",
    "BasicWriter",
    "MethodWriter",
    "ProcWriter",
]
