"""Entity type registry and decorator.

Usage:
    class UserSchema(Schema):
        id = PropertyDefinition(transform=to_int, persistable=True)
        name = PropertyDefinition(transform=to_str, writable=True, persistable=True)

    @entity("User", schema=UserSchema())
    class User(Entity):
        pass
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from entitymap.core.entity import Entity
from entitymap.core.errors import SchemaError
from entitymap.core.schema.accessors import PropertyAccessor
from entitymap.core.schema.models import EntityTypeMeta, Schema

logger = logging.getLogger(__name__)

RESERVED_NAMES = frozenset(
    {"raw", "values", "dirty", "ref_kind", "on_construct", "delegate", "proxy_state"}
)


def validate_schema(type_name: str, schema: Schema) -> None:
    """Check property names and flags that would break the entity contract.

    Missing transforms are not checked here; they are reported when an entity
    of the type is constructed.

    Args:
        type_name: Name of the entity type owning the schema.
        schema: Schema to check.

    Raises:
        SchemaError: If a property name is reserved or the id property is writable.
    """
    for name, definition in schema.items():
        if name in RESERVED_NAMES or name.startswith("_"):
            raise SchemaError(f"Property name {name!r} of {type_name} is reserved")
        if name == "id" and definition.writable:
            raise SchemaError(f"Property 'id' of {type_name} cannot be writable")


class EntityTypeRegistry:
    """Process-local registry mapping stable type names to entity classes."""

    def __init__(self) -> None:
        """Initialize empty entity type registry."""
        self._by_name: dict[str, type[Entity]] = {}

    def register(self, cls: type[Entity], type_name: str, schema: Schema) -> EntityTypeMeta:
        """Register an entity type and materialize its property accessors.

        Args:
            cls: Entity subclass to register.
            type_name: Stable name identifying the entity type.
            schema: Property definitions for the type.

        Returns:
            Entity type metadata.

        Raises:
            RuntimeError: If another class is already registered under type_name.
            SchemaError: If the schema fails validation.
        """
        existing = self._by_name.get(type_name)
        if existing is cls:
            return cls.__entity_meta__
        if existing is not None:
            raise RuntimeError(
                f"Entity type name collision: {cls} and {existing} both use {type_name!r}"
            )

        validate_schema(type_name, schema)

        for name, definition in schema.items():
            if name == "id":
                continue
            setattr(cls, name, PropertyAccessor(name, definition))

        meta = EntityTypeMeta(type_name=type_name, schema=schema)
        cls.__entity_meta__ = meta
        self._by_name[type_name] = cls
        logger.debug("Registered entity type %s with properties %s", type_name, list(schema))
        return meta

    def get_type(self, type_name: str) -> type[Entity] | None:
        """Get entity class by its type name.

        Args:
            type_name: Name to look up.

        Returns:
            Entity class if registered, None otherwise.
        """
        return self._by_name.get(type_name)

    def is_registered(self, cls: type) -> bool:
        """Check if a class is registered as an entity type.

        Args:
            cls: Class to check.

        Returns:
            True if class is registered, False otherwise.
        """
        meta = getattr(cls, "__entity_meta__", None)
        return meta is not None and self._by_name.get(meta.type_name) is cls


# Module-level registry instance
_registry = EntityTypeRegistry()


def get_registry() -> EntityTypeRegistry:
    """Access the global entity type registry.

    Returns:
        The process-local EntityTypeRegistry instance.
    """
    return _registry


def entity[E: Entity](type_name: str, *, schema: Schema) -> Callable[[type[E]], type[E]]:
    """Register an Entity subclass under a stable type name with its schema.

    Args:
        type_name: Stable name for the entity type.
        schema: Property definitions, fixed for the lifetime of the type.

    Returns:
        Decorator returning the registered class.

    Raises:
        TypeError: If the decorated class does not subclass Entity.
    """

    def decorator(cls: type[E]) -> type[E]:
        if not (isinstance(cls, type) and issubclass(cls, Entity)):
            raise TypeError(
                f"Entity type {getattr(cls, '__name__', cls)!r} must subclass Entity. "
                f"Did you forget the base class?"
            )
        _registry.register(cls, type_name, schema)
        return cls

    return decorator


def entity_meta(entity_type: type) -> EntityTypeMeta:
    """Get metadata for a registered entity type (or a proxy type built from one).

    Args:
        entity_type: Class to look up.

    Returns:
        Entity type metadata.

    Raises:
        TypeError: If entity_type was never registered with @entity.
    """
    meta = getattr(entity_type, "__entity_meta__", None)
    if meta is None:
        name = getattr(entity_type, "__name__", entity_type)
        raise TypeError(f"{name} is not a registered entity type")
    return meta
