"""Schema-worthy entities collected from a service description."""

from dataclasses import dataclass, field
from typing import Any, FrozenSet, Literal, Optional, Tuple
from zodgen.errors import UnknownEntityKindError

MemberRole = Literal["property", "parameter", "map_key", "map_value", "variant"]

# Transport locations whose values arrive as strings and must be coerced
COERCING_LOCATIONS = frozenset({"header", "query", "path"})


@dataclass(frozen=True)
class Member:
    """A field, parameter, map key, map value or union variant."""

    name: str  # camelCase key; empty for map keys/values and variants
    type_name: str  # primitive name, or the Name of another entity
    is_primitive: bool
    role: MemberRole = "property"
    is_array: bool = False
    is_required: bool = True
    constant: Optional[Any] = None
    default: Optional[Any] = None
    rules: Tuple[Any, ...] = ()
    location: Optional[str] = None  # HTTP location, parameters only

    def rule(self, rule_id: str):
        """Return the first rule with the given id, or None."""
        return next((r for r in self.rules if r.id == rule_id), None)

    @property
    def coerces(self) -> bool:
        """Whether the value arrives as a string: map keys and transport-bound parameters."""
        if self.role == "map_key":
            return True
        return self.role == "parameter" and self.location in COERCING_LOCATIONS


@dataclass(frozen=True)
class MapExtension:
    """Arbitrary keys of a record that share one value schema."""

    key: Member
    value: Member
    required_keys: Tuple[str, ...] = ()


@dataclass(frozen=True)
class RecordEntity:
    """Object type, optionally with a map extension."""

    name: str
    members: Tuple[Member, ...] = ()
    map_extension: Optional[MapExtension] = None
    min_keys: Optional[int] = None
    max_keys: Optional[int] = None
    kind: Literal["record"] = field(default="record", init=False)


@dataclass(frozen=True)
class ParameterBagEntity:
    """Parameters of a single method."""

    name: str
    members: Tuple[Member, ...] = ()
    kind: Literal["parameters"] = field(default="parameters", init=False)


@dataclass(frozen=True)
class UnionEntity:
    """Union of variants, optionally discriminated."""

    name: str
    variants: Tuple[Member, ...] = ()
    discriminator: Optional[str] = None
    kind: Literal["union"] = field(default="union", init=False)

    @property
    def is_single_member(self) -> bool:
        return len(self.variants) == 1

    @property
    def is_all_primitive(self) -> bool:
        return bool(self.variants) and all(v.is_primitive for v in self.variants)


@dataclass(frozen=True)
class EnumEntity:
    """Closed set of string literals."""

    name: str
    values: Tuple[str, ...] = ()
    kind: Literal["enum"] = field(default="enum", init=False)


Entity = RecordEntity | ParameterBagEntity | UnionEntity | EnumEntity


def complex_dependencies(entity) -> FrozenSet[str]:
    """
    Names of the other entities an entity references.

    Collects the non-primitive types of members, variants, map keys and map
    values. Self-references are excluded.

    Raises:
        UnknownEntityKindError: If ``entity`` is not a known entity kind
    """
    if isinstance(entity, (RecordEntity, ParameterBagEntity)):
        members = list(entity.members)
        if isinstance(entity, RecordEntity) and entity.map_extension is not None:
            members += [entity.map_extension.key, entity.map_extension.value]
    elif isinstance(entity, UnionEntity):
        members = list(entity.variants)
    elif isinstance(entity, EnumEntity):
        members = []
    else:
        raise UnknownEntityKindError(f"Unknown entity kind: {type(entity).__name__}")

    return frozenset(
        m.type_name for m in members if not m.is_primitive and m.type_name != entity.name
    )
