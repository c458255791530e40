"""Core functionalities: identity, schema contracts and the entity base class.

Architecture Note:
    core/ holds the contracts shared by the stateful layers. Type-level state
    (the entity type registry) lives here; per-session state (identity maps)
    lives in storage/ and manager/.
"""

from entitymap.core.entity import Entity
from entitymap.core.errors import (
    EntityMapError,
    IdentityConflictError,
    MissingIdError,
    NotLoadableError,
    NotLoadedError,
    SchemaError,
)
from entitymap.core.identity import EntityKey, ProxyState, RefKind
from entitymap.core.schema import (
    EntityTypeMeta,
    EntityTypeRegistry,
    PropertyDefinition,
    Schema,
    entity,
    entity_meta,
    get_registry,
    transforms,
)
from entitymap.core.types import RawRecord, Transform

__all__ = [
    # Types
    "RawRecord",
    "Transform",
    # Identity
    "EntityKey",
    "RefKind",
    "ProxyState",
    # Entity
    "Entity",
    # Schema
    "entity",
    "entity_meta",
    "get_registry",
    "EntityTypeRegistry",
    "EntityTypeMeta",
    "PropertyDefinition",
    "Schema",
    "transforms",
    # Errors
    "EntityMapError",
    "SchemaError",
    "NotLoadedError",
    "NotLoadableError",
    "MissingIdError",
    "IdentityConflictError",
]
