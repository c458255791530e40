"""Class-level accessors materialized from a schema at registration time."""

from __future__ import annotations

from typing import Any

from entitymap.core.errors import SchemaError
from entitymap.core.schema.models import PropertyDefinition


class PropertyAccessor:
    """Data descriptor exposing one schema property of an entity.

    Reads return the transformed value. Writes mark the entity dirty and store
    ``transform(value)``; raw input is left untouched.
    """

    __slots__ = ("name", "definition")

    def __init__(self, name: str, definition: PropertyDefinition) -> None:
        self.name = name
        self.definition = definition

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        if not self.definition.readable:
            raise AttributeError(
                f"Property {self.name!r} of {type(instance).__name__} is not readable"
            )
        return instance._values[self.name]

    def __set__(self, instance: Any, value: Any) -> None:
        if not self.definition.writable:
            raise AttributeError(
                f"Property {self.name!r} of {type(instance).__name__} is not writable"
            )
        transform = self.definition.transform
        if transform is None:
            raise SchemaError(
                f"transform is mandatory: property {self.name!r} of "
                f"{type(instance).__name__} has none"
            )
        instance._dirty = True
        instance._values[self.name] = transform(value)

    def __repr__(self) -> str:
        return f"PropertyAccessor({self.name!r})"
