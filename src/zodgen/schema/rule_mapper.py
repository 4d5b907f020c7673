"""Rule mapping: one member's type and rules to a schema expression."""

from typing import AbstractSet
from .entities import Member
from .expression import SchemaExpr, construct, lazy, ref

NUMERIC_TYPES = frozenset({"number", "integer", "long", "float", "double"})
INTEGER_TYPES = frozenset({"integer", "long"})

# (rule id, chained op, op used when the bound is exactly zero)
_RANGE_RULES = (
    ("NumberGT", "gt", "positive"),
    ("NumberGTE", "gte", "nonnegative"),
    ("NumberLT", "lt", "negative"),
    ("NumberLTE", "lte", "nonpositive"),
)


def _map_string(member: Member) -> SchemaExpr:
    if member.constant is not None:
        return construct("literal", member.constant)

    enum_rule = member.rule("StringEnum")
    if enum_rule is not None:
        return construct("enum", tuple(enum_rule.values))

    expr = construct("string")
    exact_rule = member.rule("StringLength")
    min_rule = member.rule("StringMinLength")
    max_rule = member.rule("StringMaxLength")

    if exact_rule is not None:
        expr = expr.then("length", exact_rule.length)
    elif min_rule is not None and max_rule is not None and min_rule.length == max_rule.length:
        expr = expr.then("length", min_rule.length)
    else:
        if min_rule is not None:
            expr = expr.then("nonempty") if min_rule.length == 1 else expr.then("min", min_rule.length)
        if max_rule is not None:
            expr = expr.then("max", max_rule.length)

    pattern_rule = member.rule("StringPattern")
    if pattern_rule is not None:
        expr = expr.then("regex", pattern_rule.pattern)
    return expr


def _map_number(member: Member) -> SchemaExpr:
    # TODO: coerce numeric literals once constants can arrive from query strings
    if member.constant is not None:
        return construct("literal", member.constant)

    expr = construct("number", coerce=member.coerces)
    if member.type_name in INTEGER_TYPES:
        expr = expr.then("int")

    for rule_id, op_name, zero_op_name in _RANGE_RULES:
        rule = member.rule(rule_id)
        if rule is None:
            continue
        expr = expr.then(zero_op_name) if rule.value == 0 else expr.then(op_name, rule.value)

    multiple_rule = member.rule("NumberMultipleOf")
    if multiple_rule is not None:
        expr = expr.then("multipleOf", multiple_rule.value)
    return expr


def _map_boolean(member: Member) -> SchemaExpr:
    if member.constant is not None:
        return construct("literal", member.constant)
    return construct("boolean", coerce=member.coerces)


def map_primitive(member: Member) -> SchemaExpr:
    """
    Map a primitive member to its base schema and value constraints.

    Array wrapping and optionality are not applied here.

    Raises:
        ValueError: If the member's type is not a known primitive
    """
    type_name = member.type_name
    if type_name == "null":
        return construct("null")
    if type_name == "string":
        return _map_string(member)
    if type_name in NUMERIC_TYPES:
        return _map_number(member)
    if type_name == "boolean":
        return _map_boolean(member)
    if type_name in ("date", "date-time"):
        # Dates always arrive as strings
        return construct("date", coerce=True)
    if type_name in ("binary", "untyped"):
        return construct("any")
    raise ValueError(f"Unknown primitive type '{type_name}'")


def _takes_default(member: Member) -> bool:
    if member.default is None or member.constant is not None:
        return False
    return member.type_name == "string" or member.type_name == "boolean" or member.type_name in NUMERIC_TYPES


def map_member(
    member: Member,
    owner_name: str,
    circular_names: AbstractSet[str] = frozenset(),
    allow_optional: bool = True,
) -> SchemaExpr:
    """
    Map a member to a complete schema expression.

    Operations are applied in a fixed order: base constructor, value
    constraints, array wrapper and item bounds, default, optional.

    Args:
        member: Member to map
        owner_name: Name of the entity that owns the member
        circular_names: Names of entities that could not be ordered; references
            to them (and to ``owner_name``) are deferred
        allow_optional: False for union variants, which stay required

    Returns:
        Schema expression for the member
    """
    if member.is_primitive:
        expr = map_primitive(member)
    elif member.type_name == owner_name or member.type_name in circular_names:
        expr = lazy(member.type_name)
    else:
        expr = ref(member.type_name)

    if member.is_array:
        expr = expr.then("array")
        min_rule = member.rule("ArrayMinItems")
        max_rule = member.rule("ArrayMaxItems")
        if min_rule is not None:
            expr = expr.then("nonempty") if min_rule.min == 1 else expr.then("min", min_rule.min)
        if max_rule is not None:
            expr = expr.then("max", max_rule.max)

    if _takes_default(member):
        expr = expr.then("default", member.default)

    if (
        allow_optional
        and not member.is_required
        and member.role not in ("map_key", "map_value")
        and not expr.has("default")
    ):
        expr = expr.then("optional")

    return expr
