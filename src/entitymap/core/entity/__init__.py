"""Entity base class for registered entity types."""

from entitymap.core.entity.models import Entity

__all__ = [
    "Entity",
]
