"""entitymap: in-memory identity map with lazy-loading entity proxies.

Usage:
    from entitymap import Entity, EntityManager, PropertyDefinition, Schema, entity
    from entitymap.core.schema.transforms import to_int, to_str

    class UserSchema(Schema):
        id = PropertyDefinition(transform=to_int, persistable=True)
        name = PropertyDefinition(transform=to_str, writable=True, persistable=True)

    @entity("User", schema=UserSchema())
    class User(Entity):
        pass

    manager = EntityManager()
    ref = manager.get_reference(User, 7)       # proxy, nothing loaded yet
    manager.construct(User, {"id": 7, "name": "Ann"})
    assert ref.name == "Ann"
"""

__version__ = "0.1.0"

# Configuration
from entitymap.config import EntityManagerSettings

# Core primitives
from entitymap.core import (
    Entity,
    EntityKey,
    EntityMapError,
    IdentityConflictError,
    MissingIdError,
    NotLoadableError,
    NotLoadedError,
    PropertyDefinition,
    ProxyState,
    RefKind,
    Schema,
    SchemaError,
    entity,
    transforms,
)

# Manager
from entitymap.manager import EntityManager, unwrap

# Proxies
from entitymap.proxy import EntityProxy, ProxyFactory, get_proxy_factory

# Storage
from entitymap.storage import IdentityMap, LocalIdentityMap

__all__ = [
    # Version
    "__version__",
    # Core
    "Entity",
    "entity",
    "PropertyDefinition",
    "Schema",
    "transforms",
    "EntityKey",
    "RefKind",
    "ProxyState",
    # Errors
    "EntityMapError",
    "SchemaError",
    "NotLoadedError",
    "NotLoadableError",
    "MissingIdError",
    "IdentityConflictError",
    # Manager
    "EntityManager",
    "EntityManagerSettings",
    "unwrap",
    # Proxies
    "EntityProxy",
    "ProxyFactory",
    "get_proxy_factory",
    # Storage
    "IdentityMap",
    "LocalIdentityMap",
]
