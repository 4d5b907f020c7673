"""Syntax-agnostic schema expressions: a constructor followed by chained operations."""

from dataclasses import dataclass
from typing import Any, Iterator, List, Set, Tuple

# Constructors that open an expression
CONSTRUCTORS = frozenset({
    "string",
    "number",
    "boolean",
    "date",
    "any",
    "null",
    "literal",
    "enum",
    "ref",
    "lazy",
    "object",
    "record",
    "union",
    "discriminatedUnion",
    "unsupported",
})

# Operations chained onto a constructor
CHAINED_OPS = frozenset({
    "int",
    "length",
    "min",
    "max",
    "nonempty",
    "regex",
    "gt",
    "gte",
    "lt",
    "lte",
    "positive",
    "nonnegative",
    "negative",
    "nonpositive",
    "multipleOf",
    "array",
    "default",
    "optional",
    "catchall",
    "refine",
    "superRefine",
})


@dataclass(frozen=True)
class Op:
    """Single schema operation."""

    name: str
    args: Tuple[Any, ...] = ()
    coerce: bool = False  # constructors only: parse from string input


@dataclass(frozen=True)
class KeyCountCheck:
    """Post-construction assertion on the number of keys of an object."""

    comparator: str  # ">=" or "<="
    bound: int
    message: str


@dataclass(frozen=True)
class KeyPatternCheck:
    """Validation of every key not covered by a declared field."""

    key_schema: "SchemaExpr"
    declared_keys: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SchemaExpr:
    """Constructor plus ordered chained operations."""

    ops: Tuple[Op, ...]

    def __post_init__(self):
        if not self.ops:
            raise ValueError("A schema expression needs a constructor")
        if self.ops[0].name not in CONSTRUCTORS:
            raise ValueError(f"'{self.ops[0].name}' is not a schema constructor")
        for op in self.ops[1:]:
            if op.name not in CHAINED_OPS:
                raise ValueError(f"'{op.name}' cannot be chained onto a schema")

    @property
    def constructor(self) -> Op:
        return self.ops[0]

    @property
    def chain(self) -> Tuple[Op, ...]:
        return self.ops[1:]

    def op_names(self) -> List[str]:
        return [op.name for op in self.ops]

    def then(self, name: str, *args: Any) -> "SchemaExpr":
        """Return a copy with one more chained operation."""
        return SchemaExpr(self.ops + (Op(name, tuple(args)),))

    def has(self, name: str) -> bool:
        return any(op.name == name for op in self.ops)

    def references(self) -> Set[str]:
        """Names of all entities referenced, directly or lazily, anywhere in the expression."""
        names: Set[str] = set()
        for op in self.ops:
            if op.name in ("ref", "lazy"):
                names.add(op.args[0])
            for nested in _nested(op.args):
                names |= nested.references()
        return names

    def lazy_references(self) -> Set[str]:
        """Names referenced through deferred evaluation."""
        names: Set[str] = set()
        for op in self.ops:
            if op.name == "lazy":
                names.add(op.args[0])
            for nested in _nested(op.args):
                names |= nested.lazy_references()
        return names


def _nested(args: Any) -> Iterator[SchemaExpr]:
    """Yield schema expressions nested anywhere inside operation arguments."""
    for arg in args:
        if isinstance(arg, SchemaExpr):
            yield arg
        elif isinstance(arg, KeyPatternCheck):
            yield arg.key_schema
        elif isinstance(arg, tuple):
            yield from _nested(arg)


def construct(name: str, *args: Any, coerce: bool = False) -> SchemaExpr:
    """Start an expression with a constructor."""
    return SchemaExpr((Op(name, tuple(args), coerce),))


def ref(name: str) -> SchemaExpr:
    """Direct reference to another entity's schema."""
    return construct("ref", name)


def lazy(name: str) -> SchemaExpr:
    """Reference resolved at use time rather than at definition time."""
    return construct("lazy", name)
