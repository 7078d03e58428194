"""Shared test fixtures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest

from form_map.mapping.builder import mapper
from form_map.mapping.plan import MapperPlan


@dataclass
class HostTarget:
    attr_a: Any = None
    attr_b: Any = None


@dataclass
class MountTarget:
    attr_c: Any = None
    attr_d: Any = None


@pytest.fixture
def target() -> HostTarget:
    return HostTarget("a", "b")


@pytest.fixture
def mount_target() -> MountTarget:
    return MountTarget("c", "d")


@pytest.fixture
def mount_plan() -> MapperPlan:
    return mapper("MountMapper").map_fields("attr_c", "attr_d").build()


@pytest.fixture
def host_plan(mount_plan: MapperPlan, mount_target: MountTarget) -> MapperPlan:
    """Host mapper with two traits; the first one mounts another mapper.

    HostMapper
      attr_a
      trait_one: attr_b, extra_mount (attr_c, attr_d), method_one
        trait_one_nested: method_one_nested
      trait_two: method_two (calls method_one)
    """

    def trait_one(t):
        t.map("attr_b")
        t.mount(mount_plan, name="extra_mount", target=lambda _: mount_target)
        t.method("method_one", lambda self: "one")
        t.trait(
            "trait_one_nested",
            lambda n: n.method("method_one_nested", lambda self: "nested_one"),
        )

    return (
        mapper("HostMapper")
        .map("attr_a")
        .trait("trait_one", trait_one)
        .trait("trait_two", lambda t: t.method("method_two", lambda self: self.method_one()))
        .build()
    )
