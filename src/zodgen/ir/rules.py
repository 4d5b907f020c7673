"""Validation rule models attached to values and types."""

from typing import List, Literal, Union, Annotated
from pydantic import BaseModel, Discriminator, field_validator


class StringMinLength(BaseModel):
    """Minimum string length."""

    id: Literal["StringMinLength"] = "StringMinLength"
    length: int


class StringMaxLength(BaseModel):
    """Maximum string length."""

    id: Literal["StringMaxLength"] = "StringMaxLength"
    length: int


class StringLength(BaseModel):
    """Exact string length."""

    id: Literal["StringLength"] = "StringLength"
    length: int


class StringPattern(BaseModel):
    """Regular expression the string must match."""

    id: Literal["StringPattern"] = "StringPattern"
    pattern: str


class StringEnum(BaseModel):
    """Closed set of allowed string values."""

    id: Literal["StringEnum"] = "StringEnum"
    values: List[str]

    @field_validator("values")
    @classmethod
    def validate_values(cls, v: List[str]) -> List[str]:
        """Ensure at least one value is allowed."""
        if not v:
            raise ValueError("StringEnum requires at least one value")
        return v


class NumberGT(BaseModel):
    """Exclusive lower bound."""

    id: Literal["NumberGT"] = "NumberGT"
    value: int | float


class NumberGTE(BaseModel):
    """Inclusive lower bound."""

    id: Literal["NumberGTE"] = "NumberGTE"
    value: int | float


class NumberLT(BaseModel):
    """Exclusive upper bound."""

    id: Literal["NumberLT"] = "NumberLT"
    value: int | float


class NumberLTE(BaseModel):
    """Inclusive upper bound."""

    id: Literal["NumberLTE"] = "NumberLTE"
    value: int | float


class NumberMultipleOf(BaseModel):
    """Value must be a multiple of ``value``."""

    id: Literal["NumberMultipleOf"] = "NumberMultipleOf"
    value: int | float


class ArrayMinItems(BaseModel):
    """Minimum number of array items."""

    id: Literal["ArrayMinItems"] = "ArrayMinItems"
    min: int


class ArrayMaxItems(BaseModel):
    """Maximum number of array items."""

    id: Literal["ArrayMaxItems"] = "ArrayMaxItems"
    max: int


class ObjectMinProperties(BaseModel):
    """Minimum number of keys on an object."""

    id: Literal["ObjectMinProperties"] = "ObjectMinProperties"
    min: int


class ObjectMaxProperties(BaseModel):
    """Maximum number of keys on an object."""

    id: Literal["ObjectMaxProperties"] = "ObjectMaxProperties"
    max: int


ValueRule = Annotated[
    Union[
        StringMinLength,
        StringMaxLength,
        StringLength,
        StringPattern,
        StringEnum,
        NumberGT,
        NumberGTE,
        NumberLT,
        NumberLTE,
        NumberMultipleOf,
        ArrayMinItems,
        ArrayMaxItems,
    ],
    Discriminator("id"),
]

ObjectRule = Annotated[
    Union[ObjectMinProperties, ObjectMaxProperties],
    Discriminator("id"),
]
