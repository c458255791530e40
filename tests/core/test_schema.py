"""Tests for schema declaration, validation and entity type registration.

Critical Invariants:
- Each registered property gets exactly one class-level accessor
- Reserved names and writable ids are rejected at registration
- One class per type name
- Entities cannot be instantiated directly
"""

import pytest

from entitymap import Entity, PropertyDefinition, Schema, SchemaError, entity
from entitymap.core.schema import PropertyAccessor, entity_meta, get_registry
from entitymap.core.schema.transforms import identity, to_int, to_str


class BaseSchema(Schema):
    id = PropertyDefinition(transform=to_int, persistable=True)
    title = PropertyDefinition(transform=to_str)


class ExtendedSchema(BaseSchema):
    body = PropertyDefinition(transform=to_str, writable=True)


# Schema declaration


def test_declared_properties_keep_definition_order():
    assert list(BaseSchema()) == ["id", "title"]


def test_subclass_inherits_and_extends_declarations():
    schema = ExtendedSchema()

    assert list(schema) == ["id", "title", "body"]
    assert schema["body"].writable


def test_declarations_do_not_shadow_mapping_methods():
    """Declared attributes are moved off the class so Mapping methods keep working."""

    class TrickySchema(Schema):
        keys = PropertyDefinition(transform=identity)
        items = PropertyDefinition(transform=identity)

    schema = TrickySchema()

    assert list(schema.keys()) == ["keys", "items"]
    assert len(schema.items()) == 2


def test_schema_from_mapping_and_keywords():
    schema = Schema(
        {"id": PropertyDefinition(transform=to_int)},
        name=PropertyDefinition(transform=to_str),
    )

    assert list(schema) == ["id", "name"]
    assert len(schema) == 2


def test_property_definition_defaults():
    definition = PropertyDefinition()

    assert definition.transform is None
    assert definition.reverse_transform("x") == "x"
    assert definition.readable
    assert not definition.writable
    assert not definition.persistable


# Registration


def test_registration_installs_accessors_except_for_id():
    @entity("SchemaTestArticle", schema=ExtendedSchema())
    class Article(Entity):
        pass

    assert isinstance(Article.__dict__["title"], PropertyAccessor)
    assert isinstance(Article.__dict__["body"], PropertyAccessor)
    assert "id" not in Article.__dict__
    assert entity_meta(Article).type_name == "SchemaTestArticle"
    assert get_registry().get_type("SchemaTestArticle") is Article
    assert get_registry().is_registered(Article)


def test_reregistering_same_class_is_noop():
    class Note(Entity):
        pass

    schema = BaseSchema()
    first = get_registry().register(Note, "SchemaTestNote", schema)
    second = get_registry().register(Note, "SchemaTestNote", schema)

    assert first is second


def test_type_name_collision_raises():
    @entity("SchemaTestDuplicate", schema=BaseSchema())
    class First(Entity):
        pass

    class Second(Entity):
        pass

    with pytest.raises(RuntimeError, match="name collision"):
        entity("SchemaTestDuplicate", schema=BaseSchema())(Second)


def test_decorating_non_entity_raises():
    class Plain:
        pass

    with pytest.raises(TypeError, match="must subclass Entity"):
        entity("SchemaTestPlain", schema=BaseSchema())(Plain)


@pytest.mark.parametrize(
    "name",
    ["raw", "values", "dirty", "ref_kind", "on_construct", "delegate", "proxy_state", "_secret"],
)
def test_reserved_property_names_rejected(name):
    class Reserved(Entity):
        pass

    schema = Schema({name: PropertyDefinition(transform=identity)})

    with pytest.raises(SchemaError, match="reserved"):
        entity(f"SchemaTestReserved_{name}", schema=schema)(Reserved)


def test_write_without_transform_raises_schema_error():
    class Draft(Entity):
        pass

    entity("SchemaTestDraft", schema=Schema(body=PropertyDefinition(writable=True)))(Draft)
    draft = Draft._blank()

    with pytest.raises(SchemaError, match="transform is mandatory"):
        draft.body = "x"

    assert not draft.dirty
    assert "body" not in draft.values


def test_writable_id_rejected():
    class Mutable(Entity):
        pass

    schema = Schema(id=PropertyDefinition(transform=to_int, writable=True))

    with pytest.raises(SchemaError, match="cannot be writable"):
        entity("SchemaTestMutableId", schema=schema)(Mutable)


def test_missing_transform_is_accepted_at_registration():
    """A missing transform is reported when an entity is constructed, not before."""

    @entity("SchemaTestLazyFailure", schema=Schema(id=PropertyDefinition()))
    class LazyFailure(Entity):
        pass

    assert get_registry().is_registered(LazyFailure)


def test_unregistered_type_has_no_meta():
    class Unregistered(Entity):
        pass

    with pytest.raises(TypeError, match="not a registered entity type"):
        entity_meta(Unregistered)


def test_direct_instantiation_raises(user_cls):
    with pytest.raises(TypeError, match="EntityManager.construct"):
        user_cls()
