"""Identity map backends."""

from entitymap.storage.local import LocalIdentityMap
from entitymap.storage.protocol import IdentityMap

__all__ = [
    "IdentityMap",
    "LocalIdentityMap",
]
