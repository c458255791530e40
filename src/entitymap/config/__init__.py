"""Configuration module using Pydantic Settings.

Usage:
    from entitymap.config import EntityManagerSettings

    settings = EntityManagerSettings(reset_dirty_on_update=True)
"""

from entitymap.config.settings import EntityManagerSettings

__all__ = [
    "EntityManagerSettings",
]
