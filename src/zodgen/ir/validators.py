"""Validators for the service type model."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterator, List, Literal, Tuple
from .service import Service, TypedValue
from zodgen.naming import pascal, params_name
from zodgen.config.logging import get_logger

logger = get_logger(__name__)


@dataclass
class SchemaIssue:
    """Issue found while validating or generating schemas."""

    stage: Literal["ServiceModel", "Resolution", "Synthesis"]
    code: str  # e.g., "UNKNOWN_REFERENCE", "CIRCULAR_DEPENDENCY"
    location: str  # e.g., "Widget" or "Widget.owner"
    message: str
    details: dict = field(default_factory=dict)


def _typed_values(service: Service) -> Iterator[Tuple[str, TypedValue]]:
    """Yield every typed value of the service with a readable location."""
    for t in service.types:
        for p in t.properties:
            yield f"{t.name}.{p.name}", p.value
        if t.map_properties is not None:
            yield f"{t.name}[key]", t.map_properties.key
            yield f"{t.name}[value]", t.map_properties.value
    for interface in service.interfaces:
        for method in interface.methods:
            for p in method.parameters:
                yield f"{interface.name}.{method.name}({p.name})", p.value
    for union in service.unions:
        for i, member in enumerate(union.members):
            yield f"{union.name}[{i}]", member


def referenceable_names(service: Service) -> List[str]:
    """Names that a member may use as its type: types, unions and enums."""
    return (
        [pascal(t.name) for t in service.types]
        + [pascal(u.name) for u in service.unions]
        + [pascal(e.name) for e in service.enums]
    )


def validate_references(service: Service) -> List[SchemaIssue]:
    """
    Validate that every non-primitive type reference names an entity.

    Also reports entity Names produced more than once, since each Name
    identifies exactly one emitted schema.

    Args:
        service: Service to validate

    Returns:
        List of SchemaIssue objects (empty if validation passes)
    """
    issues: List[SchemaIssue] = []
    known = set(referenceable_names(service))

    for location, value in _typed_values(service):
        if value.is_primitive:
            continue
        name = pascal(value.type_name)
        if name not in known:
            issues.append(
                SchemaIssue(
                    stage="ServiceModel",
                    code="UNKNOWN_REFERENCE",
                    location=location,
                    message=f"{location}: type '{value.type_name}' is not defined by the service",
                    details={"type_name": value.type_name, "name": name},
                )
            )

    all_names = referenceable_names(service) + [
        params_name(m.name)
        for interface in service.interfaces
        for m in interface.methods
        if m.parameters
    ]
    for name, count in sorted(Counter(all_names).items()):
        if count > 1:
            issues.append(
                SchemaIssue(
                    stage="ServiceModel",
                    code="DUPLICATE_NAME",
                    location=name,
                    message=f"Schema name '{name}' is produced by {count} definitions",
                    details={"name": name, "count": count},
                )
            )

    if issues:
        logger.warning(f"Service validation found {len(issues)} issues")
    else:
        logger.info("Service validation passed")

    return issues
