"""Main pipeline for service → schema definitions."""

from dataclasses import dataclass, field
from typing import List, Optional
from zodgen.ir.service import Service
from zodgen.ir.validators import SchemaIssue, validate_references
from zodgen.errors import UnknownReferenceError
from zodgen.config.logging import get_logger
from zodgen.config.settings import get_settings
from .collector import collect_entities
from .resolver import resolve
from .synthesizer import PRIMITIVE_UNION_NOTE, SchemaDefinition, synthesize

logger = get_logger(__name__)


@dataclass
class GenerationResult:
    """Schema definitions in emission order."""

    definitions: List[SchemaDefinition] = field(default_factory=list)
    circular_definitions: List[SchemaDefinition] = field(default_factory=list)
    issues: List[SchemaIssue] = field(default_factory=list)

    @property
    def names(self) -> List[str]:
        return [d.name for d in self.definitions]

    @property
    def circular_names(self) -> List[str]:
        return [d.name for d in self.circular_definitions]

    def all_definitions(self) -> List[SchemaDefinition]:
        return self.definitions + self.circular_definitions


def generate_schemas(
    service: Service, strict_references: Optional[bool] = None
) -> GenerationResult:
    """
    Generate schema definitions from a service description.

    Args:
        service: Service description
        strict_references: Raise on types that name no entity. Defaults to
            the ``strict_references`` setting. When disabled, entities with
            unknown references end up in the circular group.

    Returns:
        GenerationResult with ordered and circular definitions plus issues

    Raises:
        UnknownReferenceError: If strict and a member names an undefined type
    """
    if strict_references is None:
        strict_references = get_settings().strict_references

    logger.info(f"Generating schemas for service '{service.title}'")
    issues = validate_references(service)

    unknown = [i.details["name"] for i in issues if i.code == "UNKNOWN_REFERENCE"]
    if unknown and strict_references:
        raise UnknownReferenceError(unknown)

    entities = collect_entities(service)
    resolution = resolve(entities)
    circular_names = resolution.circular_names
    logger.debug(
        f"Resolved {len(resolution.ordered)} ordered and "
        f"{len(resolution.circular)} circular entities"
    )

    if circular_names:
        issues.append(
            SchemaIssue(
                stage="Resolution",
                code="CIRCULAR_DEPENDENCY",
                location=", ".join(sorted(circular_names)),
                message="Possible circular dependency; these schemas use lazy references",
                details={"names": sorted(circular_names)},
            )
        )

    definitions = [synthesize(e, circular_names) for e in resolution.ordered]
    circular_definitions = [synthesize(e, circular_names) for e in resolution.circular]

    for definition in definitions + circular_definitions:
        if definition.is_unsupported:
            logger.warning(f"{definition.name}: {PRIMITIVE_UNION_NOTE}")
            issues.append(
                SchemaIssue(
                    stage="Synthesis",
                    code="UNSUPPORTED_PRIMITIVE_UNION",
                    location=definition.name,
                    message=f"{definition.name}: {PRIMITIVE_UNION_NOTE}",
                    details={"name": definition.name},
                )
            )

    logger.info(
        f"Generated {len(definitions) + len(circular_definitions)} schema definitions"
    )
    return GenerationResult(
        definitions=definitions,
        circular_definitions=circular_definitions,
        issues=issues,
    )
