"""Entity base class.

Entity types subclass Entity and are registered with the @entity decorator:

    @entity("User", schema=UserSchema())
    class User(Entity):
        def on_construct(self) -> None:
            self.sessions = []

Instances are created only by EntityManager.construct().
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, ClassVar, Self

from entitymap.core.identity import RefKind

if TYPE_CHECKING:
    from entitymap.core.schema.models import EntityTypeMeta


class Entity:
    """One loaded record of a registered entity type.

    Attributes exposed read-only:
        id: Identity assigned from raw data, immutable after construction.
        raw: Last-seen untransformed input per property.
        values: Current transformed value per property.
        dirty: True once any writable property has been assigned.
    """

    __entity_meta__: ClassVar[EntityTypeMeta]

    _id: Hashable
    _raw: dict[str, Any]
    _values: dict[str, Any]
    _dirty: bool

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        raise TypeError(
            f"{type(self).__name__} instances are created by EntityManager.construct(), "
            f"not by calling the class"
        )

    @classmethod
    def _blank(cls) -> Self:
        """Allocate an instance with empty state, bypassing __init__."""
        instance = cls.__new__(cls)
        instance._id = None
        instance._raw = {}
        instance._values = {}
        instance._dirty = False
        return instance

    @property
    def id(self) -> Hashable:
        return self._id

    @property
    def raw(self) -> Mapping[str, Any]:
        return MappingProxyType(self._raw)

    @property
    def values(self) -> Mapping[str, Any]:
        return MappingProxyType(self._values)

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def ref_kind(self) -> RefKind:
        return RefKind.REAL

    def on_construct(self) -> None:
        """Initialization hook run once the object becomes tracked or resolved.

        Override in entity types. Runs on a new real entity when it is first
        registered, and on a proxy both when it is created and when it is resolved.
        """

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self._id!r}{' dirty' if self._dirty else ''}>"
