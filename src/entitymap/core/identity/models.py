"""Entity identity models.

Usage:
    key = EntityKey(type_name="User", id=7)
    if ref.ref_kind is RefKind.PROXY and ref.proxy_state is ProxyState.CREATED:
        ...
"""

from collections.abc import Hashable
from dataclasses import dataclass
from enum import Enum, auto


@dataclass(frozen=True, slots=True)
class EntityKey:
    """Identity of one logical record: entity type name plus record id.

    An identity map holds at most one tracked object per key.
    """

    type_name: str
    id: Hashable

    def __str__(self) -> str:
        return f"{self.type_name}#{self.id}"


class RefKind(Enum):
    """Discriminator carried by every tracked object."""

    REAL = auto()  # Entity instance built from raw data
    PROXY = auto()  # Stand-in for an entity that may not be loaded yet


class ProxyState(Enum):
    """Lifecycle of a proxy. Entering either state runs the type's on_construct hook."""

    CREATED = auto()  # No delegate, property access fails
    RESOLVED = auto()  # Delegate bound, access is forwarded
