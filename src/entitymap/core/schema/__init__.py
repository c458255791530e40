"""Schema functionality: property definitions, registry, decorator, and transforms."""

from entitymap.core.schema.models import EntityTypeMeta, PropertyDefinition, Schema
from entitymap.core.schema.accessors import PropertyAccessor
from entitymap.core.schema.core import (
    EntityTypeRegistry,
    entity,
    entity_meta,
    get_registry,
    validate_schema,
)
from entitymap.core.schema import transforms

__all__ = [
    # Models
    "PropertyDefinition",
    "Schema",
    "EntityTypeMeta",
    "PropertyAccessor",
    # Core
    "entity",
    "entity_meta",
    "get_registry",
    "validate_schema",
    "EntityTypeRegistry",
    # Transforms
    "transforms",
]
