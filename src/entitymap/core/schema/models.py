"""Schema models: property definitions, schemas and entity type metadata.

Usage:
    class UserSchema(Schema):
        id = PropertyDefinition(transform=to_int, persistable=True)
        name = PropertyDefinition(transform=to_str, writable=True, persistable=True)

    # Or without a subclass:
    schema = Schema(id=PropertyDefinition(transform=to_int, persistable=True))
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from entitymap.core.schema.transforms import identity
from entitymap.core.types import Transform


@dataclass(frozen=True, slots=True)
class PropertyDefinition:
    """Per-property contract supplied by a schema author.

    ``transform`` is mandatory for construction but may be left unset here;
    the entity manager reports a missing transform when it builds an entity.
    """

    transform: Transform | None = None
    reverse_transform: Transform = field(default=identity)
    readable: bool = True
    writable: bool = False
    persistable: bool = False


class Schema(Mapping[str, PropertyDefinition]):
    """Ordered, read-only mapping of property name to definition.

    Subclasses may declare properties as class attributes. Declarations are
    collected in definition order, inherited by further subclasses, and removed
    from the class namespace so they cannot shadow mapping methods.
    """

    _declared: ClassVar[dict[str, PropertyDefinition]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        declared = dict(cls._declared)
        for name, value in list(vars(cls).items()):
            if isinstance(value, PropertyDefinition):
                declared[name] = value
                delattr(cls, name)
        cls._declared = declared

    def __init__(
        self,
        properties: Mapping[str, PropertyDefinition] | None = None,
        /,
        **kwargs: PropertyDefinition,
    ) -> None:
        self._properties: dict[str, PropertyDefinition] = {
            **self._declared,
            **(properties or {}),
            **kwargs,
        }

    def __getitem__(self, name: str) -> PropertyDefinition:
        return self._properties[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._properties)

    def __len__(self) -> int:
        return len(self._properties)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(self._properties)})"


@dataclass(slots=True, frozen=True)
class EntityTypeMeta:
    """Metadata for registered entity types."""

    type_name: str
    schema: Schema
