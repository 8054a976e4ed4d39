"""Builder for MongoDB update specifications."""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Iterator, Mapping


class Position(int, Enum):
    """End of an array `pop` removes from."""
    FIRST = -1
    LAST = 1


class Update(Mapping[str, Mapping[str, Any]]):
    """Collects update operations keyed by operator, in call order.

    An `Update` is itself a read-only mapping of operator to
    ``{field path: value}`` and can be passed anywhere a specification is
    expected::

        Update().set("name", "foo").push("tags", "bar")
        # {"$set": {"name": "foo"}, "$push": {"tags": "bar"}}
    """

    def __init__(self) -> None:
        self._modifiers: dict[str, dict[str, Any]] = {}

    @classmethod
    def update(cls, key: str, value: Any) -> Update:
        """Shortcut for ``Update().set(key, value)``."""
        return cls().set(key, value)

    @classmethod
    def from_specification(cls, specification: Mapping[str, Mapping[str, Any]]) -> Update:
        update = cls()
        for operator, fields in specification.items():
            for key, value in fields.items():
                update.add(operator, key, value)
        return update

    def add(self, operator: str, key: str, value: Any) -> Update:
        """Add a raw operation. Setting the same key twice keeps the last value."""
        self._modifiers.setdefault(operator, {})[key] = value
        return self

    def set(self, key: str, value: Any) -> Update:
        return self.add("$set", key, value)

    def set_on_insert(self, key: str, value: Any) -> Update:
        return self.add("$setOnInsert", key, value)

    def unset(self, key: str) -> Update:
        return self.add("$unset", key, 1)

    def inc(self, key: str, amount: int | float = 1) -> Update:
        return self.add("$inc", key, amount)

    def push(self, key: str, value: Any) -> Update:
        return self.add("$push", key, value)

    def push_each(self, key: str, values: Iterable[Any]) -> Update:
        return self.add("$push", key, {"$each": list(values)})

    def add_to_set(self, key: str, value: Any) -> Update:
        return self.add("$addToSet", key, value)

    def add_to_set_each(self, key: str, values: Iterable[Any]) -> Update:
        return self.add("$addToSet", key, {"$each": list(values)})

    def pop(self, key: str, position: Position = Position.LAST) -> Update:
        return self.add("$pop", key, int(position))

    def pull(self, key: str, value: Any) -> Update:
        return self.add("$pull", key, value)

    def pull_all(self, key: str, values: Iterable[Any]) -> Update:
        return self.add("$pullAll", key, list(values))

    def rename(self, old_name: str, new_name: str) -> Update:
        return self.add("$rename", old_name, new_name)

    def modifies(self, key: str) -> bool:
        """Whether any operator touches ``key``."""
        return any(key in fields for fields in self._modifiers.values())

    def to_specification(self) -> dict[str, dict[str, Any]]:
        return {operator: dict(fields) for operator, fields in self._modifiers.items()}

    def __getitem__(self, operator: str) -> Mapping[str, Any]:
        return self._modifiers[operator]

    def __iter__(self) -> Iterator[str]:
        return iter(self._modifiers)

    def __len__(self) -> int:
        return len(self._modifiers)

    def __repr__(self) -> str:
        return f"Update({self._modifiers!r})"
