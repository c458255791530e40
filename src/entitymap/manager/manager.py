"""EntityManager: identity map owner and entity construction.

Usage:
    manager = EntityManager()

    # Reference a record that has not arrived yet
    author = manager.get_reference(User, 7)

    # Construct it later; the earlier reference becomes live in place
    same = manager.construct(User, {"id": 7, "name": "Ann"})
    assert same is author and author.name == "Ann"

    manager.to_dict(author)  # {"id": 7, "name": "Ann"}
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Hashable
from typing import Any, cast

from entitymap.config import EntityManagerSettings
from entitymap.core.entity import Entity
from entitymap.core.errors import (
    IdentityConflictError,
    MissingIdError,
    NotLoadedError,
    SchemaError,
)
from entitymap.core.identity import EntityKey, ProxyState, RefKind
from entitymap.core.schema import EntityTypeMeta, PropertyDefinition, entity_meta
from entitymap.core.types import RawRecord
from entitymap.proxy import EntityProxy, ProxyFactory, get_proxy_factory
from entitymap.storage import IdentityMap, LocalIdentityMap

logger = logging.getLogger(__name__)


def unwrap(ref: Entity) -> Entity:
    """Get the real entity behind a reference.

    Args:
        ref: Entity or proxy.

    Returns:
        ref itself for a real entity, the delegate for a resolved proxy.

    Raises:
        NotLoadableError: If ref is an unresolved proxy.
    """
    if ref.ref_kind is RefKind.PROXY:
        return cast(EntityProxy, ref)._ensure_loaded()
    return ref


class EntityManager:
    """Guarantees one live object per (entity type, id) within a session.

    Owns an identity map and builds entities from raw data. References to
    records not seen yet are handed out as proxies and resolved in place once
    the record is constructed, so earlier references stay valid.

    Not thread-safe: a host sharing one manager across threads must serialize
    every call itself.

    Args:
        settings: Manager configuration (default loads from environment).
        identity_map: Backend tracking objects (default new LocalIdentityMap).
        proxy_factory: Factory for proxy types (default the process-wide factory).
    """

    def __init__(
        self,
        settings: EntityManagerSettings | None = None,
        identity_map: IdentityMap | None = None,
        proxy_factory: ProxyFactory | None = None,
    ):
        self._settings = settings if settings is not None else EntityManagerSettings()
        self._identity_map = identity_map if identity_map is not None else LocalIdentityMap()
        self._proxy_factory = proxy_factory if proxy_factory is not None else get_proxy_factory()

    @property
    def settings(self) -> EntityManagerSettings:
        return self._settings

    @property
    def identity_map(self) -> IdentityMap:
        return self._identity_map

    @property
    def proxy_factory(self) -> ProxyFactory:
        return self._proxy_factory

    def _meta(self, entity_type: type[Entity]) -> EntityTypeMeta:
        if issubclass(entity_type, EntityProxy):
            raise TypeError(
                f"{entity_type.__name__} is a proxy type; pass the entity type it stands for"
            )
        return entity_meta(entity_type)

    def _key(self, meta: EntityTypeMeta, entity_id: Hashable) -> EntityKey:
        """Key a caller-supplied id the same way construct() keys raw data.

        When the schema declares an ``id`` property its transform is applied, so
        ``get_reference(User, "7")`` and ``construct(User, {"id": "7"})`` agree.
        """
        definition = meta.schema.get("id")
        if definition is not None and definition.transform is not None:
            entity_id = definition.transform(entity_id)
        return EntityKey(meta.type_name, entity_id)

    def _build[E: Entity](
        self, entity_type: type[E], meta: EntityTypeMeta, raw_data: RawRecord
    ) -> E:
        """Create an untracked entity with every property loaded from raw_data.

        Raises:
            SchemaError: If any property definition lacks a transform.
        """
        for name, definition in meta.schema.items():
            if definition.transform is None:
                raise SchemaError(
                    f"transform is mandatory: property {name!r} of {meta.type_name} has none"
                )

        instance = entity_type._blank()
        for name, definition in meta.schema.items():
            self.load_property_value(instance, name, definition, raw_data)
        instance._id = instance._values["id"] if "id" in meta.schema else raw_data.get("id")
        return instance

    def construct[E: Entity](self, entity_type: type[E], raw_data: RawRecord | None = None) -> E:
        """Build an entity from raw data, reusing whatever is already tracked for its id.

        - Nothing tracked: the new entity is tracked, its hook runs, and it is returned.
        - Real entity tracked: it is updated from raw_data and returned; no duplicate.
        - Unresolved proxy tracked: the new entity becomes its delegate, the hook runs
          on the proxy, and the proxy is returned.
        - Resolved proxy tracked: its delegate is updated and the proxy is returned.

        Args:
            entity_type: Registered entity class.
            raw_data: Untransformed property values, including ``id``.

        Returns:
            The single tracked object for the record's id.

        Raises:
            SchemaError: If a property definition lacks a transform.
            MissingIdError: If raw_data has no id and require_id is enabled.
        """
        meta = self._meta(entity_type)
        raw_data = raw_data or {}

        if self._settings.require_id and raw_data.get("id") is None:
            raise MissingIdError(f"Cannot construct {meta.type_name} without an 'id'")

        built = self._build(entity_type, meta, raw_data)

        if built.id is None:
            if self._settings.require_id:
                raise MissingIdError(f"Property 'id' of {meta.type_name} transformed to None")
            warnings.warn(
                f"Constructed {meta.type_name} without an id; it will not be tracked.",
                stacklevel=2,
            )
            built.on_construct()
            return built

        key = EntityKey(meta.type_name, built.id)
        existing = self._identity_map.find(key)

        if existing is None:
            built.on_construct()
            self._identity_map.add(key, built)
            logger.debug("Constructed %s", key)
            return built

        if existing.ref_kind is RefKind.REAL:
            self.update(existing, raw_data)
            return existing

        if existing.proxy_state is ProxyState.RESOLVED:
            self.update(existing, raw_data)
            return existing

        existing._resolve(built)
        try:
            existing.on_construct()
        except Exception:
            existing._unresolve()
            raise
        logger.debug("Resolved proxy for %s", key)
        return existing

    def update(self, existing: Entity, raw_data: RawRecord) -> None:
        """Reload every property of a tracked entity from raw data.

        Each property is re-transformed, never reused from an earlier load.
        The id never changes: an ``id`` in raw_data must map to the entity's
        own id and otherwise only refreshes the stored raw id. Values are
        staged first so a failing transform leaves the entity untouched.

        Args:
            existing: Real entity or resolved proxy.
            raw_data: Untransformed property values.

        Raises:
            NotLoadableError: If existing is an unresolved proxy.
            IdentityConflictError: If raw_data carries a different id.
        """
        target = unwrap(existing)
        meta = entity_meta(type(target))

        properties = {name: d for name, d in meta.schema.items() if name != "id"}
        if "id" in meta.schema and raw_data.get("id") is not None:
            properties["id"] = meta.schema["id"]

        staged = type(target)._blank()
        for name, definition in properties.items():
            self.load_property_value(staged, name, definition, raw_data)

        if "id" in staged._values and staged._values["id"] != target.id:
            raise IdentityConflictError(
                f"Cannot update {meta.type_name} id={target.id!r} "
                f"with data for id={staged._values['id']!r}"
            )

        target._raw.update(staged._raw)
        target._values.update(staged._values)
        if self._settings.reset_dirty_on_update:
            target._dirty = False
        logger.debug("Updated %s id=%r", meta.type_name, target.id)

    def load_property_value(
        self,
        entity: Entity,
        name: str,
        definition: PropertyDefinition,
        raw_data: RawRecord,
    ) -> None:
        """Store the raw value of one property and its transformed value.

        A property missing from raw_data is loaded as None.

        Args:
            entity: Real entity or resolved proxy to load into.
            name: Property name.
            definition: Property definition supplying the transform.
            raw_data: Untransformed property values.

        Raises:
            SchemaError: If the definition lacks a transform.
            NotLoadableError: If entity is an unresolved proxy.
        """
        if definition.transform is None:
            raise SchemaError(f"transform is mandatory: property {name!r} has none")
        target = unwrap(entity)
        value = raw_data.get(name)
        target._raw[name] = value
        target._values[name] = definition.transform(value)

    def get[E: Entity](self, entity_type: type[E], entity_id: Hashable) -> E:
        """Get the tracked object for an id. Never creates anything.

        Args:
            entity_type: Registered entity class.
            entity_id: Record id.

        Returns:
            Tracked entity or proxy.

        Raises:
            NotLoadedError: If nothing is tracked for the id.
        """
        meta = self._meta(entity_type)
        key = self._key(meta, entity_id)
        found = self._identity_map.find(key)
        if found is None:
            raise NotLoadedError(f"{meta.type_name} id={key.id!r} is not loaded")
        return found

    def get_reference[E: Entity](self, entity_type: type[E], entity_id: Hashable) -> E:
        """Get the tracked object for an id, tracking a new proxy if there is none.

        Args:
            entity_type: Registered entity class.
            entity_id: Record id.

        Returns:
            Tracked entity or proxy.
        """
        meta = self._meta(entity_type)
        key = self._key(meta, entity_id)
        found = self._identity_map.find(key)
        if found is not None:
            return found

        proxy = self._proxy_factory.create_proxy(entity_type, key.id)
        self._identity_map.add(key, proxy)
        return proxy

    def get_all[E: Entity](self, entity_type: type[E]) -> list[E]:
        """Get every tracked object of an entity type, real and proxy alike.

        Args:
            entity_type: Registered entity class.

        Returns:
            Tracked entities and proxies in the order they were first tracked.
        """
        return self._identity_map.all(self._meta(entity_type).type_name)

    def to_dict(self, entity: Entity) -> dict[str, Any]:
        """Convert an entity to a plain record of its persistable properties.

        Each value is ``reverse_transform`` applied to the current value, so the
        output round-trips through construct(). Keys follow schema order.

        Args:
            entity: Real entity or resolved proxy.

        Returns:
            Dict mapping property name to raw representation.

        Raises:
            NotLoadableError: If entity is an unresolved proxy.
        """
        target = unwrap(entity)
        schema = entity_meta(type(target)).schema
        return {
            name: definition.reverse_transform(target._values[name])
            for name, definition in schema.items()
            if definition.persistable
        }
