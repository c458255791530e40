"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from entitymap import (
    Entity,
    EntityManager,
    EntityManagerSettings,
    LocalIdentityMap,
    PropertyDefinition,
    Schema,
    entity,
)
from entitymap.core.schema.transforms import from_int, to_int, to_str


class FixtureUserSchema(Schema):
    id = PropertyDefinition(transform=to_int, reverse_transform=from_int, persistable=True)
    name = PropertyDefinition(transform=to_str, writable=True, persistable=True)
    email = PropertyDefinition(transform=to_str, writable=True)
    age = PropertyDefinition(transform=to_int, persistable=True)


@entity("FixtureUser", schema=FixtureUserSchema())
class FixtureUser(Entity):
    """Counts how often the construction hook runs on each object."""

    def on_construct(self) -> None:
        self.construct_calls = getattr(self, "construct_calls", 0) + 1


@pytest.fixture
def user_cls():
    return FixtureUser


@pytest.fixture
def manager():
    """Fresh EntityManager with its own identity map and default settings."""
    return EntityManager(settings=EntityManagerSettings(), identity_map=LocalIdentityMap())
