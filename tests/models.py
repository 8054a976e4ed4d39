"""Entity classes shared by the tests."""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Annotated, ClassVar, Dict, List, Optional

from pydantic import BaseModel, Field

from dmk import DocumentField


class AbstractChild(ABC):
    id: str
    value: str

    def __init__(self, id: str, value: str) -> None:
        self.id = id
        self.value = value


class ConcreteChild(AbstractChild):
    pass


class AliasedChild(AbstractChild):
    __type_alias__ = "child"


class ColoredChild(AbstractChild):
    def __init__(self, id: str, value: str, color: str) -> None:
        super().__init__(id, value)
        self.color = color


class Parent:
    id: str
    list: List[AbstractChild]


class Model(ABC):
    pass


class ModelImpl(Model):
    value: int

    def __init__(self, value: int = 0) -> None:
        self.value = value


class ModelWrapper:
    model: Model


class Status(Enum):
    ACTIVE = "active"
    RETIRED = "retired"


@dataclass
class Shape:
    name: str


@dataclass
class Circle(Shape):
    radius: float = 1.0


@dataclass
class Square(Shape):
    side: float = 1.0


@dataclass
class Drawing:
    title: str
    main: Optional[Shape] = None
    shapes: List[Shape] = field(default_factory=list)
    by_layer: Dict[str, Shape] = field(default_factory=dict)
    created: Optional[datetime] = None
    status: Status = Status.ACTIVE
    owner: Annotated[Optional[str], DocumentField("owner_id")] = None
    notes: str = field(default="", metadata={"key": "n"})


class Canvas:
    drawing: Drawing
    items: List[Drawing]
    revision: ClassVar[int] = 3
    _cache: dict


class Address(BaseModel):
    street: str
    city: str = Field(alias="town")


class Customer(BaseModel):
    name: str
    address: Optional[Address] = None
    tags: List[str] = []


class Node:
    label: str
    next: Optional[Node]

    def __init__(self, label: str, next: Optional[Node] = None) -> None:
        self.label = label
        self.next = next


class Tagged:
    __type_key__ = "_t"

    payload: Model


class SelfDescribing:
    kind: Annotated[str, DocumentField("_class")]
    size: int

    def __init__(self, kind: str, size: int) -> None:
        self.kind = kind
        self.size = size


class Money:
    amount: int
    currency: str

    def __init__(self, amount: int, currency: str) -> None:
        self.amount = amount
        self.currency = currency


class Account:
    balance: Money
    holder: Model


class Slotted:
    __slots__ = ("x",)

    def __init__(self, x: int) -> None:
        self.x = x


class Untyped:
    def __init__(self, a, b) -> None:
        self.a = a
        self.b = b
        self._hidden = True


class SlottedCircle(Circle):
    __slots__ = ("label",)

    def __init__(self, name: str, label: str) -> None:
        super().__init__(name)
        self.label = label
