"""Entity manager: the identity map owner for one session or unit of work.

Architecture Note:
    manager/ is the stateful service layer. It owns an identity map from
    storage/ and a proxy factory from proxy/, and is the only supported way
    to obtain entity instances.
"""

from entitymap.manager.manager import EntityManager, unwrap

__all__ = [
    "EntityManager",
    "unwrap",
]
