"""End-to-end workflows: references, late construction, and persistence.

Critical Invariants:
- Identity uniqueness across any sequence of construct / get_reference
- Reference stability under resolution
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from entitymap import (
    Entity,
    EntityManager,
    LocalIdentityMap,
    PropertyDefinition,
    RefKind,
    Schema,
    entity,
)
from entitymap.core.schema.transforms import from_datetime, identity, to_datetime, to_str


class AuthorSchema(Schema):
    id = PropertyDefinition(transform=identity, persistable=True)
    name = PropertyDefinition(transform=identity, writable=True, persistable=True)


@entity("WorkflowAuthor", schema=AuthorSchema())
class Author(Entity):
    pass


class PostSchema(Schema):
    id = PropertyDefinition(transform=identity, persistable=True)
    title = PropertyDefinition(transform=to_str, writable=True, persistable=True)
    published = PropertyDefinition(
        transform=to_datetime, reverse_transform=from_datetime, persistable=True
    )
    author_id = PropertyDefinition(transform=identity, persistable=True)


@entity("WorkflowPost", schema=PostSchema())
class Post(Entity):
    """Resolves its author lazily through the manager that built it."""

    manager: EntityManager

    @property
    def author(self) -> Author:
        return self.manager.get_reference(Author, self.author_id)


def test_reference_then_construct_scenario():
    """get_reference -> construct returns the same proxy, now live."""
    manager = EntityManager(identity_map=LocalIdentityMap())

    ref = manager.get_reference(Author, 7)
    assert ref.id == 7

    result = manager.construct(Author, {"id": 7, "name": "Ann"})

    assert result is ref
    assert ref.name == "Ann"
    assert manager.to_dict(ref) == {"id": 7, "name": "Ann"}


def test_posts_share_one_author_reference():
    manager = EntityManager(identity_map=LocalIdentityMap())
    Post.manager = manager

    first = manager.construct(
        Post, {"id": 1, "title": "Hello", "published": "2024-05-01T12:00:00", "author_id": 7}
    )
    second = manager.construct(Post, {"id": 2, "title": "Again", "author_id": 7})

    assert first.author is second.author
    assert first.author.ref_kind is RefKind.PROXY

    manager.construct(Author, {"id": 7, "name": "Ann"})

    assert first.author.name == "Ann"
    assert manager.to_dict(first) == {
        "id": 1,
        "title": "Hello",
        "published": "2024-05-01T12:00:00",
        "author_id": 7,
    }
    assert manager.to_dict(second)["published"] is None


def test_edit_through_proxy_persists():
    manager = EntityManager(identity_map=LocalIdentityMap())
    ref = manager.get_reference(Author, 3)
    manager.construct(Author, {"id": 3, "name": "Ann"})

    ref.name = "Bea"

    assert ref.dirty
    assert manager.to_dict(ref) == {"id": 3, "name": "Bea"}
    assert ref.raw["name"] == "Ann"


operation = st.tuples(
    st.sampled_from(["construct", "reference"]),
    st.integers(min_value=0, max_value=5),
    st.text(max_size=5),
)


@settings(max_examples=50)
@given(st.lists(operation, max_size=30))
def test_identity_uniqueness(operations):
    """CRITICAL: any sequence of construct / get_reference tracks one object per id.

    Every call for an id returns the very object first handed out for it.
    """
    manager = EntityManager(identity_map=LocalIdentityMap())
    first_seen: dict[int, Author] = {}
    last_name: dict[int, str] = {}

    for op, entity_id, name in operations:
        if op == "construct":
            result = manager.construct(Author, {"id": entity_id, "name": name})
            last_name[entity_id] = name
        else:
            result = manager.get_reference(Author, entity_id)

        assert first_seen.setdefault(entity_id, result) is result

    tracked = manager.get_all(Author)
    assert len(tracked) == len(first_seen)
    assert len({id(obj) for obj in tracked}) == len(tracked)
    for entity_id, name in last_name.items():
        assert manager.get(Author, entity_id).name == name


@given(st.none() | st.text())
def test_persistable_round_trip(name):
    manager = EntityManager(identity_map=LocalIdentityMap())
    author = manager.construct(Author, {"id": 1, "name": name})

    assert manager.to_dict(author) == {"id": 1, "name": name}
