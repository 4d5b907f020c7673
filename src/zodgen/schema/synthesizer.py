"""Schema synthesis: one complete schema expression per entity."""

from dataclasses import dataclass
from typing import AbstractSet, List, Tuple
from zodgen.errors import UnknownEntityKindError
from .entities import (
    Entity,
    EnumEntity,
    ParameterBagEntity,
    RecordEntity,
    UnionEntity,
)
from .expression import KeyCountCheck, KeyPatternCheck, SchemaExpr, construct
from .rule_mapper import map_member

PRIMITIVE_UNION_NOTE = "Primitive unions are not yet supported"


@dataclass(frozen=True)
class SchemaDefinition:
    """Named schema ready to be emitted."""

    name: str
    kind: str  # record, parameters, union or enum
    expr: SchemaExpr

    @property
    def is_unsupported(self) -> bool:
        return self.expr.constructor.name == "unsupported"


def _object_fields(entity, circular_names: AbstractSet[str]) -> List[Tuple[str, SchemaExpr]]:
    return [(m.name, map_member(m, entity.name, circular_names)) for m in entity.members]


def _synthesize_record(entity: RecordEntity, circular_names: AbstractSet[str]) -> SchemaExpr:
    ext = entity.map_extension
    fields = _object_fields(entity, circular_names)
    value_expr = None
    if ext is not None:
        value_expr = map_member(ext.value, entity.name, circular_names)
        declared_names = {name for name, _ in fields}
        for key in ext.required_keys:
            # A declared member already covers the key
            if key not in declared_names:
                fields.append((key, value_expr))
                declared_names.add(key)

    if fields:
        expr = construct("object", tuple(fields))
        if ext is not None and (entity.max_keys is None or len(fields) < entity.max_keys):
            expr = expr.then("catchall", value_expr)
    elif ext is not None:
        expr = construct("record", construct("string"), value_expr)
    else:
        expr = construct("record", construct("string"), construct("any"))

    if entity.min_keys is not None:
        expr = expr.then(
            "refine",
            KeyCountCheck(">=", entity.min_keys, f"Must have at least {entity.min_keys} properties"),
        )
    if entity.max_keys is not None:
        expr = expr.then(
            "refine",
            KeyCountCheck("<=", entity.max_keys, f"Must have at most {entity.max_keys} properties"),
        )

    if ext is not None and (ext.key.rules or not ext.key.is_primitive):
        key_expr = map_member(ext.key, entity.name, circular_names)
        declared = tuple(name for name, _ in fields)
        expr = expr.then("superRefine", KeyPatternCheck(key_expr, declared))

    return expr


def _synthesize_union(entity: UnionEntity, circular_names: AbstractSet[str]) -> SchemaExpr:
    if entity.is_single_member and not entity.variants[0].is_primitive:
        # Alias the only variant instead of wrapping it
        return map_member(entity.variants[0], entity.name, circular_names, allow_optional=False)

    if entity.is_all_primitive:
        return construct("unsupported", "union", PRIMITIVE_UNION_NOTE)

    variants = tuple(
        map_member(v, entity.name, circular_names, allow_optional=False) for v in entity.variants
    )
    if entity.discriminator:
        return construct("discriminatedUnion", entity.discriminator, variants)
    return construct("union", variants)


def synthesize(entity: Entity, circular_names: AbstractSet[str] = frozenset()) -> SchemaDefinition:
    """
    Build the schema definition of a single entity.

    Args:
        entity: Entity to synthesize
        circular_names: Names of entities that could not be ordered

    Returns:
        SchemaDefinition for the entity

    Raises:
        UnknownEntityKindError: If ``entity`` is not a known entity kind
    """
    if isinstance(entity, RecordEntity):
        expr = _synthesize_record(entity, circular_names)
    elif isinstance(entity, ParameterBagEntity):
        expr = construct("object", tuple(_object_fields(entity, circular_names)))
    elif isinstance(entity, UnionEntity):
        expr = _synthesize_union(entity, circular_names)
    elif isinstance(entity, EnumEntity):
        expr = construct("enum", tuple(entity.values))
    else:
        raise UnknownEntityKindError(f"Unknown entity kind: {type(entity).__name__}")

    return SchemaDefinition(name=entity.name, kind=entity.kind, expr=expr)
