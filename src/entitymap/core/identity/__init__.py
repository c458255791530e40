"""Entity identity functionality: keys and reference discriminators."""

from entitymap.core.identity.models import EntityKey, ProxyState, RefKind

__all__ = [
    "EntityKey",
    "ProxyState",
    "RefKind",
]
