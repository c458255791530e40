"""Identity map protocol for swappable backends.

The identity map is plain bookkeeping: one tracked object per EntityKey.
It never builds entities or proxies; the entity manager does.

Usage:
    identity_map = LocalIdentityMap()
    manager = EntityManager(identity_map=identity_map)
"""

from __future__ import annotations

from typing import Any, Protocol

from entitymap.core.identity import EntityKey


class IdentityMap(Protocol):
    """Abstract identity map interface."""

    def add(self, key: EntityKey, obj: Any) -> None:
        """Track obj under key. Re-adding the same object is a no-op."""
        ...

    def find(self, key: EntityKey) -> Any | None:
        """Get the tracked object for key, or None."""
        ...

    def all(self, type_name: str) -> list[Any]:
        """Get every tracked object of an entity type."""
        ...

    def __contains__(self, key: object) -> bool:
        """Check if anything is tracked under key."""
        ...

    def __len__(self) -> int:
        """Count tracked objects across all entity types."""
        ...
