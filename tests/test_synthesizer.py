"""Tests for synthesizing schema definitions from entities."""

import pytest
from zodgen.errors import UnknownEntityKindError
from zodgen.emit.zod import ZodRenderer
from zodgen.ir.rules import NumberGTE, StringMinLength, StringPattern
from zodgen.schema.entities import (
    EnumEntity,
    MapExtension,
    Member,
    ParameterBagEntity,
    RecordEntity,
    UnionEntity,
)
from zodgen.schema.expression import KeyCountCheck, KeyPatternCheck
from zodgen.schema.synthesizer import PRIMITIVE_UNION_NOTE, synthesize


def prim(name, type_name="string", **kwargs):
    return Member(name=name, type_name=type_name, is_primitive=True, **kwargs)


def ref(name, type_name, **kwargs):
    return Member(name=name, type_name=type_name, is_primitive=False, **kwargs)


def map_ext(value_type="string", key_rules=(), required_keys=(), key_type="string"):
    return MapExtension(
        key=Member(
            name="",
            type_name=key_type,
            is_primitive=key_type[:1].islower(),
            role="map_key",
            rules=key_rules,
        ),
        value=Member(
            name="",
            type_name=value_type,
            is_primitive=value_type[:1].islower(),
            role="map_value",
        ),
        required_keys=required_keys,
    )


def fields(expr):
    return dict(expr.constructor.args[0])


def test_record_object_fields_in_order():
    """Test a record becomes an object of its members in declared order."""
    entity = RecordEntity(
        name="User",
        members=(prim("id", "integer"), prim("name", rules=(StringMinLength(length=1),))),
    )
    definition = synthesize(entity)
    assert definition.name == "User"
    assert definition.kind == "record"
    assert definition.expr.op_names() == ["object"]
    keys = [key for key, _ in definition.expr.constructor.args[0]]
    assert keys == ["id", "name"]
    assert fields(definition.expr)["id"].op_names() == ["number", "int"]
    assert fields(definition.expr)["name"].op_names() == ["string", "nonempty"]


def test_pure_map_is_record_of_values():
    """Test a map with no declared members is a keyed collection."""
    definition = synthesize(RecordEntity(name="Labels", map_extension=map_ext("string")))
    expr = definition.expr
    assert expr.op_names() == ["record"]
    key_expr, value_expr = expr.constructor.args
    assert key_expr.op_names() == ["string"]
    assert value_expr.op_names() == ["string"]


def test_open_record_without_members_or_map():
    """Test an empty type is an unconstrained open-keyed collection."""
    expr = synthesize(RecordEntity(name="Anything")).expr
    assert expr.op_names() == ["record"]
    assert [e.op_names() for e in expr.constructor.args] == [["string"], ["any"]]


def test_members_with_map_get_catchall():
    """Test declared members plus a map extension add a catch-all."""
    entity = RecordEntity(name="Env", members=(prim("name"),), map_extension=map_ext("integer"))
    expr = synthesize(entity).expr
    assert expr.op_names() == ["object", "catchall"]
    assert expr.ops[1].args[0].op_names() == ["number", "int"]


def test_required_keys_follow_members():
    """Test required map keys become fields after the declared members."""
    entity = RecordEntity(
        name="Headers",
        members=(prim("name"),),
        map_extension=map_ext("string", required_keys=("x-trace",)),
    )
    expr = synthesize(entity).expr
    assert [key for key, _ in expr.constructor.args[0]] == ["name", "x-trace"]
    assert fields(expr)["x-trace"].op_names() == ["string"]


def test_required_keys_alone_make_an_object():
    """Test required keys without members still produce an object."""
    entity = RecordEntity(name="Headers", map_extension=map_ext(required_keys=("a",)))
    assert synthesize(entity).expr.op_names() == ["object", "catchall"]


def test_catchall_dropped_when_max_keys_reached():
    """Test no catch-all when declared fields already reach the key limit."""
    entity = RecordEntity(
        name="Pair",
        members=(prim("a"), prim("b")),
        map_extension=map_ext(),
        max_keys=2,
    )
    expr = synthesize(entity).expr
    assert "catchall" not in expr.op_names()


def test_catchall_kept_below_max_keys():
    """Test a catch-all remains while room for extra keys is left."""
    entity = RecordEntity(
        name="Pair", members=(prim("a"),), map_extension=map_ext(), max_keys=3
    )
    assert synthesize(entity).expr.op_names() == ["object", "catchall", "refine"]


def test_key_count_refinements():
    """Test min/max key counts become refinements with messages."""
    entity = RecordEntity(name="Bag", map_extension=map_ext(), min_keys=1, max_keys=4)
    expr = synthesize(entity).expr
    assert expr.op_names() == ["record", "refine", "refine"]
    assert expr.ops[1].args[0] == KeyCountCheck(">=", 1, "Must have at least 1 properties")
    assert expr.ops[2].args[0] == KeyCountCheck("<=", 4, "Must have at most 4 properties")


def test_key_rules_add_key_validation():
    """Test key-level rules validate keys not covered by declared fields."""
    entity = RecordEntity(
        name="Env",
        members=(prim("name"),),
        map_extension=map_ext(key_rules=(StringPattern(pattern="^[A-Z_]+$"),)),
    )
    expr = synthesize(entity).expr
    assert expr.op_names() == ["object", "catchall", "superRefine"]
    check = expr.ops[2].args[0]
    assert isinstance(check, KeyPatternCheck)
    assert check.declared_keys == ("name",)
    assert check.key_schema.op_names() == ["string", "regex"]


def test_non_primitive_key_adds_key_validation():
    """Test a key typed by another entity is validated against it."""
    entity = RecordEntity(name="ByColor", map_extension=map_ext("integer", key_type="Color"))
    expr = synthesize(entity).expr
    assert expr.op_names() == ["record", "superRefine"]
    assert expr.ops[1].args[0].key_schema.references() == {"Color"}


def test_numeric_key_is_coerced_from_the_key_string():
    """Test rule-bearing integer keys parse the key string as a number."""
    entity = RecordEntity(
        name="ScoresByRank",
        map_extension=map_ext("integer", key_rules=(NumberGTE(value=0),), key_type="integer"),
    )
    expr = synthesize(entity).expr
    key_schema = expr.ops[1].args[0].key_schema
    assert key_schema.op_names() == ["number", "int", "nonnegative"]
    assert key_schema.constructor.coerce is True
    source = ZodRenderer().render(expr)
    assert "const result = z.coerce.number().int().nonnegative().safeParse(key);" in source


def test_required_key_matching_a_member_is_not_duplicated():
    """Test a required key already declared as a member yields one field."""
    entity = RecordEntity(
        name="Tagged",
        members=(prim("id"),),
        map_extension=map_ext(required_keys=("id", "region")),
        max_keys=3,
    )
    expr = synthesize(entity).expr
    assert [key for key, _ in expr.constructor.args[0]] == ["id", "region"]
    assert expr.op_names() == ["object", "catchall", "refine"]
    source = ZodRenderer().render(expr)
    assert source.count("  id: ") == 1


def test_required_key_overlap_leaves_room_for_catchall():
    """Test overlapping required keys do not count twice against the key limit."""
    entity = RecordEntity(
        name="Single",
        members=(prim("id"),),
        map_extension=map_ext(required_keys=("id",), key_rules=(StringMinLength(length=2),)),
        max_keys=2,
    )
    expr = synthesize(entity).expr
    assert expr.op_names() == ["object", "catchall", "refine", "superRefine"]
    assert expr.ops[3].args[0].declared_keys == ("id",)


def test_plain_string_key_has_no_key_validation():
    """Test unconstrained string keys need no key pass."""
    expr = synthesize(RecordEntity(name="Labels", map_extension=map_ext())).expr
    assert "superRefine" not in expr.op_names()


def test_parameter_bag_is_object():
    """Test parameters become an object schema."""
    entity = ParameterBagEntity(
        name="GetWidgetsParams",
        members=(
            prim("limit", "integer", role="parameter", location="query", is_required=False),
            ref("filter", "Filter", role="parameter", location="body"),
        ),
    )
    definition = synthesize(entity)
    assert definition.kind == "parameters"
    limit = fields(definition.expr)["limit"]
    assert limit.op_names() == ["number", "int", "optional"]
    assert limit.constructor.coerce is True
    assert fields(definition.expr)["filter"].op_names() == ["ref"]


def test_single_variant_union_is_alias():
    """Test a union with one non-primitive variant aliases it directly."""
    expr = synthesize(UnionEntity(name="Pet", variants=(ref("", "Dog", role="variant"),))).expr
    assert expr.op_names() == ["ref"]
    assert expr.constructor.args == ("Dog",)


def test_union_of_references():
    """Test a plain union lists its variants in order."""
    entity = UnionEntity(
        name="Shape",
        variants=(ref("", "Square", role="variant"), ref("", "Circle", role="variant")),
    )
    expr = synthesize(entity).expr
    assert expr.op_names() == ["union"]
    assert [v.constructor.args for v in expr.constructor.args[0]] == [("Square",), ("Circle",)]


def test_discriminated_union():
    """Test a discriminator yields a discriminated union keyed on it."""
    entity = UnionEntity(
        name="Shape",
        variants=(ref("", "Square", role="variant"), ref("", "Circle", role="variant")),
        discriminator="type",
    )
    expr = synthesize(entity).expr
    assert expr.op_names() == ["discriminatedUnion"]
    assert expr.constructor.args[0] == "type"


def test_mixed_union_primitive_variants_stay_required():
    """Test inline primitive variants are never optional."""
    entity = UnionEntity(
        name="IdOrUser",
        variants=(
            prim("", role="variant", is_required=False),
            ref("", "User", role="variant", is_required=False),
        ),
    )
    variants = synthesize(entity).expr.constructor.args[0]
    assert [v.op_names() for v in variants] == [["string"], ["ref"]]


def test_primitive_union_is_marked_unsupported():
    """Test all-primitive unions emit a limitation marker instead of failing."""
    entity = UnionEntity(
        name="StringOrNumber",
        variants=(prim("", role="variant"), prim("", "number", role="variant")),
    )
    definition = synthesize(entity)
    assert definition.is_unsupported
    assert definition.expr.constructor.args == ("union", PRIMITIVE_UNION_NOTE)


def test_enum_keeps_declared_order():
    """Test enum values keep their declared order."""
    expr = synthesize(EnumEntity(name="Size", values=("small", "large", "medium"))).expr
    assert expr.op_names() == ["enum"]
    assert expr.constructor.args == (("small", "large", "medium"),)


def test_cyclic_members_use_lazy_references():
    """Test members pointing into the circular group are lazy."""
    a = RecordEntity(name="A", members=(ref("b", "B"), ref("c", "C")))
    expr = synthesize(a, circular_names={"A", "B"}).expr
    assert fields(expr)["b"].op_names() == ["lazy"]
    assert fields(expr)["c"].op_names() == ["ref"]


def test_unknown_entity_kind_raises():
    """Test an unrecognised entity aborts synthesis."""
    with pytest.raises(UnknownEntityKindError):
        synthesize("not an entity")
