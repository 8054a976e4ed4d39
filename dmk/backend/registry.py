"""Default type registry: terminal types and type identifiers."""

from __future__ import annotations

from typing import Iterable, Literal, Mapping

from .conversions import ConversionRegistry
from .interface import DEFAULT_TYPE_KEY, TerminalValueConverter, TypeRegistry

TypeNaming = Literal["simple", "qualified"]


class SimpleTypeRegistry(TypeRegistry):
    """Answers terminality from the conversion registry plus configured simple types.

    Type identifiers are looked up in this order: the explicit alias map, a
    ``__type_alias__`` attribute on the class, then the naming strategy
    (``simple`` uses the class ``__qualname__``, ``qualified`` prefixes the
    module).
    """

    def __init__(
        self,
        conversions: TerminalValueConverter | None = None,
        type_key: str = DEFAULT_TYPE_KEY,
        naming: TypeNaming = "simple",
        simple_types: Iterable[type] = (),
        aliases: Mapping[type, str] | None = None,
    ) -> None:
        super().__init__(type_key=type_key)
        self.conversions = conversions or ConversionRegistry()
        self.naming = naming
        self.simple_types: tuple[type, ...] = tuple(simple_types)
        self.aliases: dict[type, str] = dict(aliases or {})

    def is_terminal(self, type_: type) -> bool:
        if self.simple_types and issubclass(type_, self.simple_types):
            return True
        return self.conversions.has_conversion(type_)

    def identifier_for_type(self, type_: type) -> str:
        alias = self.aliases.get(type_)
        if alias:
            return alias
        # only the class's own alias, not one inherited from a base
        alias = type_.__dict__.get("__type_alias__")
        if alias:
            return alias
        if self.naming == "qualified":
            return f"{type_.__module__}.{type_.__qualname__}"
        return type_.__qualname__
