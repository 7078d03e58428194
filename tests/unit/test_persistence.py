"""Unit tests for Mapper validation and saving."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

import pytest
from pydantic import BaseModel, Field

from form_map.core.exceptions import TargetClassError
from form_map.mapper.persistence import Mapper, build, find
from form_map.mapping.builder import mapper


@dataclass
class Record:
    """Saveable, Validatable target recording save calls into a shared log."""

    label: str
    log: list[str]
    value: Any = None
    refuse: bool = False
    problems: dict[str, list[str]] = field(default_factory=dict)

    def save(self) -> bool:
        self.log.append(self.label)
        return not self.refuse

    def validate(self) -> dict[str, list[str]]:
        return self.problems


@dataclass
class Order:
    record: Record
    before: Record
    after: Record


class Profile(BaseModel):
    nickname: str = Field(min_length=2)
    age: int = 0


class Account(BaseModel):
    email: str = Field(alias="emailAddress", pattern=r"^[^@\s]+@[^@\s]+$")


@pytest.fixture
def log() -> list[str]:
    return []


@pytest.fixture
def order(log) -> Order:
    return Order(Record("order", log), Record("before", log), Record("after", log))


@pytest.fixture
def order_plan():
    record_plan = mapper("RecordMapper").map("value").build()
    return (
        mapper("OrderMapper")
        .map(
            "value",
            reader=lambda t: t.record.value,
            writer=lambda t, v: setattr(t.record, "value", v),
        )
        .mount(record_plan, name="before", suffix="before", save="before")
        .mount(record_plan, name="after", suffix="after")
        .trait("noted", lambda t: t.map("note", reader=False, writer=False))
        .build()
    )


class _OrderTarget:
    """Delegates save/validate to the order's main record."""

    def __init__(self, order: Order) -> None:
        self.order = order
        self.before = order.before
        self.after = order.after
        self.record = order.record

    def save(self) -> bool:
        return self.record.save()

    def validate(self) -> dict[str, list[str]]:
        return self.record.validate()


@pytest.fixture
def order_mapper(order_plan, order) -> Mapper:
    return Mapper(order_plan, _OrderTarget(order), "noted")


class TestSave:
    def test_save_order(self, order_mapper, log) -> None:
        assert order_mapper.save() is True
        assert log == ["before", "order", "after"]

    def test_save_stops_at_first_failure(self, order_mapper, order, log) -> None:
        order.record.refuse = True
        assert order_mapper.save() is False
        assert log == ["before", "order"]

    def test_failing_before_mount_stops_everything(self, order_mapper, order, log) -> None:
        order.before.refuse = True
        assert order_mapper.save() is False
        assert log == ["before"]

    def test_trait_save_target_always_succeeds(self, order_mapper) -> None:
        trait = order_mapper.trait("noted")
        assert trait.save_target() is True

    def test_target_without_save_counts_as_saved(self) -> None:
        @dataclass
        class Plain:
            value: Any = None

        m = Mapper(mapper("PlainMapper").map("value").build(), Plain())
        assert m.save() is True

    def test_save_returning_none_counts_as_saved(self) -> None:
        class Quiet:
            value = None

            def save(self) -> None:
                return None

        assert Mapper(mapper("QuietMapper").map("value").build(), Quiet()).save() is True


class TestValidation:
    def test_valid_tree(self, order_mapper) -> None:
        assert order_mapper.valid() is True
        assert not order_mapper.errors

    def test_errors_mapped_to_full_names(self, order_mapper, order) -> None:
        order.after.problems = {"value": ["is required"]}
        assert order_mapper.valid() is False
        assert order_mapper.errors["value_after"] == ["is required"]

    def test_host_errors_use_target_attribute(self, log) -> None:
        plan = mapper("RecordMapper").map("heading", "title").build()
        record = Record("solo", log, problems={"title": ["is blank"]})
        m = Mapper(plan, record)
        assert m.valid() is False
        assert m.errors["heading"] == ["is blank"]

    def test_unmapped_attribute_keeps_its_name(self, log) -> None:
        record = Record("solo", log, problems={"base": ["is locked"]})
        m = Mapper(mapper("RecordMapper").map("value").build(), record)
        m.valid()
        assert m.errors["base"] == ["is locked"]

    def test_errors_are_recomputed(self, order_mapper, order) -> None:
        order.after.problems = {"value": ["is required"]}
        order_mapper.valid()
        order.after.problems = {}
        assert order_mapper.valid() is True

    def test_preserved_errors_survive_validation(self, order_mapper) -> None:
        order_mapper.errors.preserve("note", "could not parse")
        assert order_mapper.valid() is False
        assert order_mapper.errors["note"] == ["could not parse"]

    def test_traits_share_errors(self, order_mapper) -> None:
        assert order_mapper.trait("noted").errors is order_mapper.errors

    def test_pydantic_target(self) -> None:
        plan = mapper("ProfileMapper", Profile).map("name", "nickname").map("age").build()
        m = build(plan)
        m.write({"name": "x", "age": 7})
        assert m.valid() is False
        assert list(m.errors) == ["name"]

    def test_pydantic_target_valid(self) -> None:
        plan = mapper("ProfileMapper", Profile).map("name", "nickname").build()
        m = Mapper(plan, Profile(nickname="ada"))
        assert m.valid() is True

    def test_aliased_pydantic_target_valid(self) -> None:
        plan = mapper("AccountMapper", Account).map("contact", "email").build()
        assert Mapper(plan, Account(emailAddress="a@b.c")).valid() is True

    def test_aliased_pydantic_errors_use_full_name(self) -> None:
        plan = mapper("AccountMapper", Account).map("contact", "email").build()
        m = Mapper(plan, Account(emailAddress="a@b.c"))
        m.write({"contact": "nobody"})
        assert m.valid() is False
        assert list(m.errors) == ["contact"]



class TestApply:
    @staticmethod
    def _transaction(events: list[str]):
        @contextmanager
        def transaction():
            events.append("begin")
            try:
                yield
            except Exception:
                events.append("rollback")
                raise
            events.append("commit")

        return transaction

    def test_apply_writes_validates_and_saves(self, order_mapper, order, log) -> None:
        events: list[str] = []
        assert order_mapper.apply({"value": 1, "value_after": 2}, self._transaction(events))
        assert order.record.value == 1
        assert order.after.value == 2
        assert log == ["before", "order", "after"]
        assert events == ["begin", "commit"]

    def test_apply_without_transaction(self, order_mapper, log) -> None:
        assert order_mapper.apply({"value": 1}) is True
        assert log == ["before", "order", "after"]

    def test_invalid_apply_does_not_save(self, order_mapper, order, log) -> None:
        events: list[str] = []
        order.record.problems = {"value": ["is wrong"]}
        assert order_mapper.apply({"value": 1}, self._transaction(events)) is False
        assert log == []
        assert events == []
        assert order_mapper.errors["value"] == ["is wrong"]

    def test_failed_save_rolls_back(self, order_mapper, order) -> None:
        events: list[str] = []
        order.after.refuse = True
        assert order_mapper.apply({}, self._transaction(events)) is False
        assert events == ["begin", "rollback"]

    def test_strategy_errors_propagate(self, order_mapper) -> None:
        plan = mapper("BrokenMapper").map("value", writer=lambda v: 1 / 0).build()
        with pytest.raises(ZeroDivisionError):
            Mapper(plan, order_mapper.target).apply({"value": 1})


class TestPersistedState:
    def test_id_and_persisted(self) -> None:
        @dataclass
        class Stored:
            id: int
            persisted: bool = True

        m = Mapper(mapper("StoredMapper").build(), Stored(5))
        assert m.id == 5
        assert m.persisted is True

    def test_callable_persisted(self) -> None:
        class Stored:
            id = None

            def persisted(self) -> bool:
                return False

        m = Mapper(mapper("StoredMapper").build(), Stored())
        assert m.id is None
        assert m.persisted is False

    def test_plain_target_is_not_persisted(self, order_mapper) -> None:
        assert order_mapper.persisted is False


class TestBuildAndFind:
    def test_build_uses_blank_target(self) -> None:
        @dataclass
        class Note:
            body: Any
            pinned: bool = False

        plan = mapper("NoteMapper", Note).map("body").build()
        m = build(plan)
        assert isinstance(m, Mapper)
        assert m.target == Note(body=None)

    def test_build_passes_traits(self) -> None:
        @dataclass
        class Note:
            body: Any = None

        plan = mapper("NoteMapper", Note).trait("t", lambda t: t.map("body")).build()
        assert build(plan, "t").read() == {"body": None}

    def test_build_without_target_class(self) -> None:
        with pytest.raises(TargetClassError, match="NoteMapper"):
            build(mapper("NoteMapper").build())

    def test_find(self) -> None:
        @dataclass
        class Note:
            id: int
            body: str

            @classmethod
            def find(cls, identifier: int) -> Note:
                return cls(identifier, f"note {identifier}")

        m = find(mapper("NoteMapper", Note).map("body").build(), 3)
        assert m.id == 3
        assert m.read() == {"body": "note 3"}

    def test_find_requires_findable_class(self) -> None:
        @dataclass
        class Note:
            body: Any = None

        with pytest.raises(TargetClassError, match="find"):
            find(mapper("NoteMapper", Note).build(), 1)
