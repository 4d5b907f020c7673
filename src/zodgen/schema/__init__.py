"""Schema generation core: collection, dependency resolution and synthesis."""

from .entities import (
    Member,
    MapExtension,
    RecordEntity,
    ParameterBagEntity,
    UnionEntity,
    EnumEntity,
    complex_dependencies,
)
from .expression import Op, SchemaExpr, KeyCountCheck, KeyPatternCheck
from .collector import collect_entities
from .resolver import Resolution, resolve
from .rule_mapper import map_member
from .synthesizer import SchemaDefinition, synthesize
from .pipeline import GenerationResult, generate_schemas

__all__ = [
    "Member",
    "MapExtension",
    "RecordEntity",
    "ParameterBagEntity",
    "UnionEntity",
    "EnumEntity",
    "complex_dependencies",
    "Op",
    "SchemaExpr",
    "KeyCountCheck",
    "KeyPatternCheck",
    "collect_entities",
    "Resolution",
    "resolve",
    "map_member",
    "SchemaDefinition",
    "synthesize",
    "GenerationResult",
    "generate_schemas",
]
