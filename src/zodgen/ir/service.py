"""Service type model: types, methods, unions, enums and their HTTP bindings."""

from typing import Any, List, Literal, Optional
from pydantic import BaseModel, Field, field_validator, model_validator
from .rules import ValueRule, ObjectRule

PrimitiveTypeName = Literal[
    "string",
    "number",
    "integer",
    "long",
    "float",
    "double",
    "boolean",
    "date",
    "date-time",
    "binary",
    "untyped",
    "null",
]

PRIMITIVE_TYPE_NAMES = frozenset(PrimitiveTypeName.__args__)

HttpLocation = Literal["header", "query", "path", "body", "formData"]


class TypedValue(BaseModel):
    """Type of a property, parameter, map key/value or union member."""

    type_name: str  # primitive name or the name of a type, union or enum
    is_primitive: Optional[bool] = None  # inferred from type_name when omitted
    is_array: bool = False
    is_optional: bool = False
    constant: Optional[Any] = None
    default: Optional[Any] = None
    rules: List[ValueRule] = Field(default_factory=list)

    @model_validator(mode="after")
    def infer_primitive(self) -> "TypedValue":
        """Infer ``is_primitive`` from the type name and reject unknown primitives."""
        if self.is_primitive is None:
            self.is_primitive = self.type_name in PRIMITIVE_TYPE_NAMES
        elif self.is_primitive and self.type_name not in PRIMITIVE_TYPE_NAMES:
            raise ValueError(f"Unknown primitive type '{self.type_name}'")
        return self

    @property
    def is_required(self) -> bool:
        return not self.is_optional


class Property(BaseModel):
    """Named property of a type."""

    name: str
    value: TypedValue
    description: Optional[str] = None


class Parameter(BaseModel):
    """Named parameter of a method."""

    name: str
    value: TypedValue
    description: Optional[str] = None


class MapProperties(BaseModel):
    """Map-like extension of a type: arbitrary keys sharing one value schema."""

    key: TypedValue = Field(default_factory=lambda: TypedValue(type_name="string"))
    value: TypedValue
    required_keys: List[str] = Field(default_factory=list)


class Type(BaseModel):
    """Object type."""

    name: str
    properties: List[Property] = Field(default_factory=list)
    map_properties: Optional[MapProperties] = None
    rules: List[ObjectRule] = Field(default_factory=list)
    description: Optional[str] = None


class Method(BaseModel):
    """Interface method."""

    name: str
    parameters: List[Parameter] = Field(default_factory=list)
    description: Optional[str] = None


class Interface(BaseModel):
    """Group of methods."""

    name: str
    methods: List[Method] = Field(default_factory=list)


class Union(BaseModel):
    """Union of values, optionally discriminated by a property name."""

    name: str
    members: List[TypedValue]
    discriminator: Optional[str] = None

    @field_validator("members")
    @classmethod
    def validate_members(cls, v: List[TypedValue]) -> List[TypedValue]:
        """Ensure the union has at least one member."""
        if not v:
            raise ValueError("union must have at least one member")
        return v


class Enum(BaseModel):
    """Closed set of string literals."""

    name: str
    values: List[str]

    @field_validator("values")
    @classmethod
    def validate_values(cls, v: List[str]) -> List[str]:
        """Ensure the enum has at least one value."""
        if not v:
            raise ValueError("enum must have at least one value")
        return v


class HttpParameter(BaseModel):
    """Transport binding of a single method parameter."""

    name: str
    location: HttpLocation


class HttpMethod(BaseModel):
    """Transport binding of a method."""

    name: str  # name of the bound interface method
    verb: Literal["get", "post", "put", "patch", "delete", "head", "options", "trace"] = "get"
    parameters: List[HttpParameter] = Field(default_factory=list)


class HttpPath(BaseModel):
    """URL path and the methods bound to it."""

    path: str
    methods: List[HttpMethod] = Field(default_factory=list)


class Service(BaseModel):
    """Complete service description."""

    title: str = "service"
    types: List[Type] = Field(default_factory=list)
    interfaces: List[Interface] = Field(default_factory=list)
    unions: List[Union] = Field(default_factory=list)
    enums: List[Enum] = Field(default_factory=list)
    http_paths: List[HttpPath] = Field(default_factory=list)

    def http_method(self, method_name: str) -> Optional[HttpMethod]:
        """Return the HTTP binding of an interface method, if any."""
        for http_path in self.http_paths:
            for http_method in http_path.methods:
                if http_method.name == method_name:
                    return http_method
        return None
