"""Entity collection: flatten a service description into a named worklist."""

from typing import Dict, List, Optional
from zodgen.ir.service import Service, TypedValue, Method
from zodgen.naming import camel, pascal, params_name
from zodgen.config.logging import get_logger
from .entities import (
    Entity,
    EnumEntity,
    MapExtension,
    Member,
    MemberRole,
    ParameterBagEntity,
    RecordEntity,
    UnionEntity,
)

logger = get_logger(__name__)


def build_member(
    value: TypedValue,
    name: str = "",
    role: MemberRole = "property",
    location: Optional[str] = None,
) -> Member:
    """
    Build a Member view of a typed value.

    Args:
        value: Typed value from the service description
        name: Property or parameter name (normalised to camelCase)
        role: What the member is within its owning entity
        location: HTTP location of a parameter

    Returns:
        Immutable Member
    """
    return Member(
        name=camel(name) if name else "",
        type_name=value.type_name if value.is_primitive else pascal(value.type_name),
        is_primitive=bool(value.is_primitive),
        role=role,
        is_array=value.is_array,
        is_required=value.is_required,
        constant=value.constant,
        default=value.default,
        rules=tuple(value.rules),
        location=location,
    )


def _parameter_locations(service: Service, method: Method) -> Dict[str, str]:
    """Map camelCase parameter names of a method to their HTTP location."""
    http_method = service.http_method(method.name)
    if http_method is None:
        return {}
    return {camel(p.name): p.location for p in http_method.parameters}


def collect_entities(service: Service) -> List[Entity]:
    """
    Collect every schema-worthy entity of a service.

    Order: types, then parameter bags of methods with at least one
    parameter, then unions, then enums.

    Args:
        service: Service description

    Returns:
        Flat list of entities with assigned Names
    """
    entities: List[Entity] = []

    for t in service.types:
        map_extension = None
        if t.map_properties is not None:
            map_extension = MapExtension(
                key=build_member(t.map_properties.key, role="map_key"),
                value=build_member(t.map_properties.value, role="map_value"),
                required_keys=tuple(t.map_properties.required_keys),
            )
        min_rule = next((r for r in t.rules if r.id == "ObjectMinProperties"), None)
        max_rule = next((r for r in t.rules if r.id == "ObjectMaxProperties"), None)
        entities.append(
            RecordEntity(
                name=pascal(t.name),
                members=tuple(build_member(p.value, p.name) for p in t.properties),
                map_extension=map_extension,
                min_keys=min_rule.min if min_rule else None,
                max_keys=max_rule.max if max_rule else None,
            )
        )

    for interface in service.interfaces:
        for method in interface.methods:
            if not method.parameters:
                continue
            locations = _parameter_locations(service, method)
            entities.append(
                ParameterBagEntity(
                    name=params_name(method.name),
                    members=tuple(
                        build_member(
                            p.value,
                            p.name,
                            role="parameter",
                            location=locations.get(camel(p.name)),
                        )
                        for p in method.parameters
                    ),
                )
            )

    for union in service.unions:
        entities.append(
            UnionEntity(
                name=pascal(union.name),
                variants=tuple(build_member(m, role="variant") for m in union.members),
                discriminator=union.discriminator,
            )
        )

    for enum in service.enums:
        entities.append(EnumEntity(name=pascal(enum.name), values=tuple(enum.values)))

    logger.debug(f"Collected {len(entities)} entities from service '{service.title}'")
    return entities
