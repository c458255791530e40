"""Proxy models: the proxy mixin and its forwarding accessors.

A proxy type is built per entity type as ``type("UserProxy", (EntityProxy, User), ...)``
so that ``isinstance(proxy, User)`` holds while EntityProxy's members take
precedence over the entity's own.
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from typing import TYPE_CHECKING, Any

from entitymap.core.errors import NotLoadableError
from entitymap.core.identity import ProxyState, RefKind

if TYPE_CHECKING:
    from entitymap.core.entity import Entity


class EntityProxy:
    """Stand-in for an entity whose data may not be loaded yet.

    The id is captured at construction and never depends on the delegate.
    Every other property access goes through _ensure_loaded() and is then
    forwarded to the delegate, which is bound exactly once on resolution.
    """

    def __init__(self, entity_id: Hashable) -> None:
        self._proxy_id = entity_id
        self._delegate: Entity | None = None

    @property
    def id(self) -> Hashable:
        return self._proxy_id

    @property
    def delegate(self) -> Entity | None:
        return self._delegate

    @property
    def proxy_state(self) -> ProxyState:
        return ProxyState.CREATED if self._delegate is None else ProxyState.RESOLVED

    @property
    def ref_kind(self) -> RefKind:
        return RefKind.PROXY

    @property
    def raw(self) -> Mapping[str, Any]:
        return self._ensure_loaded().raw

    @property
    def values(self) -> Mapping[str, Any]:
        return self._ensure_loaded().values

    @property
    def dirty(self) -> bool:
        return self._ensure_loaded().dirty

    def _ensure_loaded(self) -> Entity:
        """Return the delegate, failing if the proxy was never resolved.

        Raises:
            NotLoadableError: If no delegate is bound.
        """
        if self._delegate is None:
            raise NotLoadableError(
                f"{type(self).__name__} id={self._proxy_id!r} cannot be loaded: "
                f"no data has been constructed for it"
            )
        return self._delegate

    def _resolve(self, delegate: Entity) -> None:
        """Bind the delegate. Transition CREATED -> RESOLVED.

        Raises:
            RuntimeError: If the proxy is already resolved.
        """
        if self._delegate is not None:
            raise RuntimeError(f"{type(self).__name__} id={self._proxy_id!r} is already resolved")
        self._delegate = delegate

    def _unresolve(self) -> None:
        """Drop the delegate. Transition RESOLVED -> CREATED after a failed hook."""
        self._delegate = None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self._proxy_id!r} {self.proxy_state.name.lower()}>"


class ProxyAccessor:
    """Data descriptor forwarding one schema property to the proxy's delegate."""

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __get__(self, instance: EntityProxy | None, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return getattr(instance._ensure_loaded(), self.name)

    def __set__(self, instance: EntityProxy, value: Any) -> None:
        setattr(instance._ensure_loaded(), self.name, value)

    def __repr__(self) -> str:
        return f"ProxyAccessor({self.name!r})"
