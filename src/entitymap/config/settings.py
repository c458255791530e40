"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support for the entity manager.

Usage:
    from entitymap.config import EntityManagerSettings

    # Load from environment variables (ENTITYMAP_*)
    settings = EntityManagerSettings()

    # Or override with explicit values
    settings = EntityManagerSettings(require_id=False)
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EntityManagerSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for EntityManager.

    Attributes:
        require_id: Reject raw data without an ``id`` when constructing. When
            disabled, such entities are built and returned but never tracked.
        reset_dirty_on_update: Clear the dirty flag when update() reloads an
            entity from raw data.

    Environment Variables:
        ENTITYMAP_REQUIRE_ID
        ENTITYMAP_RESET_DIRTY_ON_UPDATE
    """

    model_config = SettingsConfigDict(
        env_prefix="ENTITYMAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    require_id: bool = Field(default=True, description="Reject raw data without an id")
    reset_dirty_on_update: bool = Field(
        default=False, description="Clear the dirty flag when update() reloads an entity"
    )
