"""Lazy references: proxy types impersonating not-yet-loaded entities."""

from entitymap.proxy.factory import ProxyFactory, get_proxy_factory
from entitymap.proxy.models import EntityProxy, ProxyAccessor

__all__ = [
    "EntityProxy",
    "ProxyAccessor",
    "ProxyFactory",
    "get_proxy_factory",
]
