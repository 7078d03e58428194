"""Mapper instances - composition, reading/writing and persistence."""

from __future__ import annotations

from form_map.mapper.base import OpenMapper
from form_map.mapper.persistence import Mapper, build, find

__all__ = ["OpenMapper", "Mapper", "build", "find"]
