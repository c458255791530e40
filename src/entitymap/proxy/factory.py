"""Proxy factory: builds and caches one proxy type per entity type.

Usage:
    factory = get_proxy_factory()
    proxy = factory.create_proxy(User, 7)
    assert isinstance(proxy, User) and proxy.id == 7
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from typing import Any, cast

from entitymap.core.entity import Entity
from entitymap.core.schema import entity_meta
from entitymap.proxy.models import EntityProxy, ProxyAccessor

logger = logging.getLogger(__name__)

PROXY_SUFFIX = "Proxy"


class ProxyFactory:
    """Creates proxy types lazily and keeps them for the life of the factory.

    A proxy type is never rebuilt, so ``type(proxy)`` is stable across calls
    and can be used in isinstance checks.
    """

    def __init__(self) -> None:
        """Initialize factory with an empty proxy type cache."""
        self._proxy_types: dict[type[Entity], type[Any]] = {}

    def get_proxy_type[E: Entity](self, entity_type: type[E]) -> type[E]:
        """Get the proxy type for an entity type, building it on first request.

        Args:
            entity_type: Registered entity class.

        Returns:
            Proxy class that subclasses both EntityProxy and entity_type.

        Raises:
            TypeError: If entity_type is not registered or is itself a proxy type.
        """
        proxy_type = self._proxy_types.get(entity_type)
        if proxy_type is None:
            proxy_type = self._build_proxy_type(entity_type)
            self._proxy_types[entity_type] = proxy_type
        return cast(type[E], proxy_type)

    def _build_proxy_type(self, entity_type: type[Entity]) -> type[Any]:
        """Assemble a proxy class with one forwarding accessor per non-id property."""
        if issubclass(entity_type, EntityProxy):
            raise TypeError(f"{entity_type.__name__} is already a proxy type")
        meta = entity_meta(entity_type)

        namespace: dict[str, Any] = {
            name: ProxyAccessor(name) for name in meta.schema if name != "id"
        }
        namespace["__module__"] = entity_type.__module__
        namespace["__qualname__"] = f"{entity_type.__qualname__}{PROXY_SUFFIX}"
        namespace["__doc__"] = f"Lazy reference to a {meta.type_name} entity."

        proxy_type = type(
            f"{entity_type.__name__}{PROXY_SUFFIX}", (EntityProxy, entity_type), namespace
        )
        logger.debug("Built proxy type %s for entity type %s", proxy_type.__name__, meta.type_name)
        return proxy_type

    def create_proxy[E: Entity](self, entity_type: type[E], entity_id: Hashable) -> E:
        """Create an unresolved proxy for an entity id and run the type's hook on it.

        Args:
            entity_type: Registered entity class.
            entity_id: Id the proxy stands for.

        Returns:
            New proxy instance in the CREATED state.
        """
        proxy = self.get_proxy_type(entity_type)(entity_id)  # type: ignore[call-arg]
        proxy.on_construct()
        logger.debug("Created proxy %r", proxy)
        return proxy

    def is_proxy_type(self, cls: type) -> bool:
        """Check if a class is one of this factory's proxy types.

        Args:
            cls: Class to check.

        Returns:
            True if cls was built by this factory.
        """
        return cls in self._proxy_types.values()


# Module-level factory instance
_factory = ProxyFactory()


def get_proxy_factory() -> ProxyFactory:
    """Access the global proxy factory.

    Returns:
        The process-local ProxyFactory instance.
    """
    return _factory
