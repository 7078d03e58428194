"""Contract tests for target capability protocol compliance."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest
from pydantic import BaseModel

from form_map.core.protocol import Findable, Readable, Saveable, Validatable, Writable
from form_map.mapper.persistence import Mapper
from form_map.mapping.builder import mapper


class AttributeStore:
    """Target that keeps its attributes in a dict behind explicit accessors."""

    def __init__(self, **values: Any) -> None:
        self.values = dict(values)
        self.reads: list[str] = []

    def read_attribute(self, name: str) -> Any:
        self.reads.append(name)
        return self.values.get(name)

    def write_attribute(self, name: str, value: Any) -> None:
        self.values[name] = value


class Repository:
    saved: list[Any] = []

    def __init__(self, key: int) -> None:
        self.key = key

    @classmethod
    def find(cls, identifier: Any) -> Repository:
        return cls(identifier)

    def save(self) -> bool:
        Repository.saved.append(self.key)
        return True

    def validate(self) -> dict[str, list[str]] | None:
        return None


@dataclass
class Plain:
    name: Any = None


class Profile(BaseModel):
    name: str = ""


class TestProtocolDetection:
    def test_attribute_store(self) -> None:
        store = AttributeStore()
        assert isinstance(store, Readable)
        assert isinstance(store, Writable)
        assert not isinstance(store, Saveable)

    def test_repository(self) -> None:
        record = Repository(1)
        assert isinstance(record, Saveable)
        assert isinstance(record, Validatable)
        assert isinstance(Repository, Findable)

    @pytest.mark.parametrize("protocol", [Readable, Writable, Saveable, Validatable, Findable])
    def test_plain_target_implements_nothing(self, protocol: type) -> None:
        assert not isinstance(Plain(), protocol)

    def test_pydantic_target_is_not_readable(self) -> None:
        assert not isinstance(Profile(), Readable)
        assert not isinstance(Profile(), Writable)


class TestBasicStrategiesUseProtocols:
    def test_read_uses_read_attribute(self) -> None:
        store = AttributeStore(first="Ada", last="Lovelace")
        plan = mapper("StoreMapper").map("given", "first").map("last").build()
        assert Mapper(plan, store).read() == {"given": "Ada", "last": "Lovelace"}
        assert store.reads == ["first", "last"]

    def test_write_uses_write_attribute(self) -> None:
        store = AttributeStore()
        plan = mapper("StoreMapper").map("given", "first").build()
        Mapper(plan, store).write({"given": "Grace"})
        assert store.values == {"first": "Grace"}
        assert not hasattr(store, "first")

    def test_pydantic_target_uses_attributes(self) -> None:
        profile = Profile(name="ada")
        m = Mapper(mapper("ProfileMapper").map("name").build(), profile)
        m.write({"name": "grace"})
        assert profile.name == "grace"
        assert m.read() == {"name": "grace"}

    def test_saveable_target_is_saved(self) -> None:
        Repository.saved.clear()
        m = Mapper(mapper("RepositoryMapper").build(), Repository(7))
        assert m.valid() is True
        assert m.save() is True
        assert Repository.saved == [7]
