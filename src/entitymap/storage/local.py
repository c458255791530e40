"""Local in-memory identity map implementation.

Simple dict-based map suitable for a single-threaded session. Callers that
share one map across threads must hold their own lock around every call.

Usage:
    identity_map = LocalIdentityMap()
    manager = EntityManager(identity_map=identity_map)
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from typing import Any

from entitymap.core.errors import IdentityConflictError
from entitymap.core.identity import EntityKey

logger = logging.getLogger(__name__)


class LocalIdentityMap:
    """In-memory identity map using nested dicts.

    Structure:
        _objects[type_name][id] = tracked_object
    """

    def __init__(self) -> None:
        """Initialize empty identity map."""
        self._objects: dict[str, dict[Hashable, Any]] = {}

    def add(self, key: EntityKey, obj: Any) -> None:
        """Track an object under its key.

        Args:
            key: Entity type name and id.
            obj: Entity or proxy to track.

        Raises:
            IdentityConflictError: If a different object is already tracked under key.
        """
        by_id = self._objects.setdefault(key.type_name, {})
        existing = by_id.get(key.id)
        if existing is obj:
            return
        if key.id in by_id:
            raise IdentityConflictError(f"{key} is already tracked by {existing!r}")
        by_id[key.id] = obj
        logger.debug("Tracking %s as %r", key, obj)

    def find(self, key: EntityKey) -> Any | None:
        """Get the tracked object for a key.

        Args:
            key: Entity type name and id.

        Returns:
            Tracked entity or proxy, or None if nothing is tracked.
        """
        return self._objects.get(key.type_name, {}).get(key.id)

    def all(self, type_name: str) -> list[Any]:
        """Get every tracked object of an entity type, in insertion order.

        Args:
            type_name: Entity type name.

        Returns:
            New list of tracked entities and proxies (empty if none).
        """
        return list(self._objects.get(type_name, {}).values())

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, EntityKey):
            return False
        return key.id in self._objects.get(key.type_name, {})

    def __len__(self) -> int:
        return sum(len(by_id) for by_id in self._objects.values())
