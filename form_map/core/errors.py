"""Field-level error collection shared by a mapper and its traits."""

from __future__ import annotations

from collections.abc import Iterator


class Errors:
    """Ordered collection of error messages keyed by field name.

    Messages added with :meth:`preserve` survive :meth:`clear`, so errors
    recorded while writing params are still reported after validation
    resets the collection.
    """

    def __init__(self) -> None:
        self._messages: dict[str, list[str]] = {}
        self._preserved: dict[str, list[str]] = {}

    def add(self, field: str, message: str) -> None:
        """Record *message* for *field*, skipping exact duplicates."""
        messages = self._messages.setdefault(field, [])
        if message not in messages:
            messages.append(message)

    def preserve(self, field: str, message: str) -> None:
        """Record *message* for *field* and keep it across clear()."""
        preserved = self._preserved.setdefault(field, [])
        if message not in preserved:
            preserved.append(message)
        self.add(field, message)

    def merge(self, other: Errors) -> None:
        for field, messages in other.items():
            for message in messages:
                self.add(field, message)

    def clear(self) -> None:
        """Drop all messages except preserved ones."""
        self._messages = {field: list(messages) for field, messages in self._preserved.items()}

    def __getitem__(self, field: str) -> list[str]:
        return list(self._messages.get(field, []))

    def __contains__(self, field: object) -> bool:
        return field in self._messages

    def __iter__(self) -> Iterator[str]:
        return iter(self._messages)

    def __len__(self) -> int:
        return sum(len(messages) for messages in self._messages.values())

    def __bool__(self) -> bool:
        return len(self) > 0

    def items(self) -> Iterator[tuple[str, list[str]]]:
        for field, messages in self._messages.items():
            yield field, list(messages)

    def to_dict(self) -> dict[str, list[str]]:
        return {field: list(messages) for field, messages in self._messages.items()}

    def __repr__(self) -> str:
        return f"Errors({self.to_dict()!r})"
