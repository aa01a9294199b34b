"""
Schema generation pipeline.

Generation runs in two stages over one database snapshot:

1. ``collect_resources`` resolves every resource and records which type
   definitions each resource references, producing a ``ReferenceTable``.
2. ``resolve_property_types`` resolves every type definition, attributing
   it to its owning resource through the reference table.

Property types are only attributable once every resource has been seen,
so stage 2 takes the frozen table produced by stage 1 as input.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ...logging_config import get_logger
from .config import GeneratorConfig, load_config
from .naming import NamingBuilder
from .resolver import TypeResolver
from .schema import (
    FieldSpec,
    PropertyTypeSpec,
    ResourceSpec,
    SchemaGenerationError,
    Specification,
)

if TYPE_CHECKING:
    from ...database import (
        PropertyRecord,
        ResourceRecord,
        ServiceRecord,
        SpecDatabase,
        TypeDefinitionRecord,
    )

logger = get_logger(__name__)


class ServiceResolutionError(SchemaGenerationError):
    """Raised when a namespace matches zero or several services."""

    pass


class OwnerResolutionError(SchemaGenerationError):
    """Raised when a type definition cannot be attributed to any resource."""

    pass


class ReferenceTable:
    """Type definition id -> ``"<ResourceType>.<TypeName>"``, frozen after stage 1."""

    def __init__(self, entries: Mapping[str, str]):
        self._entries = MappingProxyType(dict(entries))

    def __contains__(self, type_id: str) -> bool:
        return type_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, type_id: str) -> Optional[str]:
        return self._entries.get(type_id)

    def owner_of(self, type_id: str) -> Optional[str]:
        """The qualified resource type that references ``type_id``, if any."""
        entry = self._entries.get(type_id)
        if entry is None:
            return None
        return entry.split(".")[0]

    def as_dict(self) -> Dict[str, str]:
        return dict(self._entries)


class ReferenceTableBuilder:
    """Write-once accumulator for the reference table."""

    def __init__(self):
        self._entries: Dict[str, str] = {}

    def add(self, resource_type: str, referenced_ids: Mapping[str, str]) -> None:
        for type_id, type_name in referenced_ids.items():
            entry = f"{resource_type}.{type_name}"
            existing = self._entries.setdefault(type_id, entry)
            if existing != entry:
                logger.debug(
                    "Type %s already attributed to %s, ignoring %s",
                    type_id,
                    existing,
                    entry,
                )

    def freeze(self) -> ReferenceTable:
        return ReferenceTable(self._entries)


@dataclass
class ResourcePass:
    """Output of stage 1."""

    resources: Dict[str, ResourceSpec]
    reference_table: ReferenceTable


@dataclass
class PropertyTypePass:
    """Output of stage 2."""

    property_types: Dict[str, PropertyTypeSpec]
    property_type_keys: Dict[str, str]
    carried_forward: List[str] = field(default_factory=list)


def resolve_service(db: "SpecDatabase", namespace: str) -> "ServiceRecord":
    """
    Find the single service owning a CloudFormation namespace.

    Raises:
        ServiceResolutionError: If zero or several services match
    """
    try:
        return db.lookup("service", "cloudFormationNamespace", "equals", namespace).only()
    except LookupError as e:
        raise ServiceResolutionError(
            f"Cannot resolve service for namespace {namespace}: {e}"
        ) from e


def resolve_field(
    resolver: TypeResolver,
    name: str,
    prop: "PropertyRecord",
    scope: str,
    required: Optional[bool] = None,
) -> Tuple[FieldSpec, Dict[str, str]]:
    """
    Resolve an attribute or property.

    The last declared previous type, when there is one, is the effective
    value type; the current type is only used when none are declared.
    References are collected from the current type.

    Returns:
        The resolved field and the type definitions its current type references
    """
    current = resolver.resolve(prop.type, scope)
    previous = [resolver.resolve(t, scope).value_type for t in prop.previous_types]
    value_type = previous[-1] if previous else current.value_type
    return FieldSpec(name, value_type, required), current.referenced_ids


def collect_resources(
    db: "SpecDatabase", naming: NamingBuilder, resolver: TypeResolver
) -> ResourcePass:
    """Stage 1: resolve every resource and build the reference table."""
    references = ReferenceTableBuilder()
    resources: Dict[str, ResourceSpec] = {}

    for resource in db.all("resource"):
        resource_type = resource.cloudformation_type
        service = resolve_service(db, resource.namespace)

        spec = ResourceSpec(
            construct=naming.build_construct_names(service, resource.name)
        )

        for name, attribute in resource.attributes.items():
            spec.attributes[name], ids = resolve_field(
                resolver, name, attribute, resource_type
            )
            references.add(resource_type, ids)

        for name, prop in resource.properties.items():
            spec.properties[name], ids = resolve_field(
                resolver, name, prop, resource_type, required=prop.required
            )
            references.add(resource_type, ids)

        resources[resource_type] = spec
        logger.debug(
            "Resolved resource %s (%d attributes, %d properties)",
            resource_type,
            len(spec.attributes),
            len(spec.properties),
        )

    reference_table = references.freeze()
    logger.info(
        "Collected %d resources referencing %d type definitions",
        len(resources),
        len(reference_table),
    )
    return ResourcePass(resources, reference_table)


def resolve_owner(
    reference_table: ReferenceTable, type_id: str, last_owner: Optional[str]
) -> Optional[str]:
    """
    Owner of a type definition.

    A type definition no resource references directly belongs to the
    owner of the type definition before it.
    """
    return reference_table.owner_of(type_id) or last_owner


def assign_owners(
    definitions: Iterable["TypeDefinitionRecord"], reference_table: ReferenceTable
) -> List[Tuple["TypeDefinitionRecord", str, bool]]:
    """
    Attribute each type definition to a resource type, in order.

    Returns:
        ``(definition, owner, carried_forward)`` triples

    Raises:
        OwnerResolutionError: If a definition precedes every referenced one
    """
    assigned = []
    last_owner: Optional[str] = None

    for definition in definitions:
        owner = resolve_owner(reference_table, definition.id, last_owner)
        if owner is None:
            raise OwnerResolutionError(
                f"Type definition {definition.name} ({definition.id}) is not "
                "referenced by any resource and has no preceding owner"
            )
        assigned.append((definition, owner, definition.id not in reference_table))
        last_owner = owner

    return assigned


def resolve_property_types(
    db: "SpecDatabase",
    reference_table: ReferenceTable,
    naming: NamingBuilder,
    resolver: TypeResolver,
) -> PropertyTypePass:
    """Stage 2: resolve every type definition under its owning resource."""
    property_types: Dict[str, PropertyTypeSpec] = {}
    property_type_keys: Dict[str, str] = {}
    carried_forward: List[str] = []

    for definition, owner, carried in assign_owners(
        db.all("typeDefinition"), reference_table
    ):
        namespace, _, resource_name = owner.rpartition("::")
        service = resolve_service(db, namespace)

        full_name = f"{owner}.{definition.name}Property"
        spec = PropertyTypeSpec(
            name=naming.build_property_type_names(service, resource_name, definition.name)
        )

        for name, prop in definition.properties.items():
            spec.properties[name], _ = resolve_field(
                resolver, name, prop, owner, required=prop.required
            )

        property_types[full_name] = spec
        property_type_keys[definition.id] = full_name
        if carried:
            carried_forward.append(full_name)
            logger.debug("Attributed %s to %s by position", definition.id, owner)

    logger.info(
        "Resolved %d property types (%d attributed by position)",
        len(property_types),
        len(carried_forward),
    )
    return PropertyTypePass(property_types, property_type_keys, carried_forward)


def build_module_map(db: "SpecDatabase") -> Dict[str, List[str]]:
    """Service name -> resource types it contains."""
    return {
        service.name: [
            resource.cloudformation_type
            for resource in db.follow("hasResource", service)
        ]
        for service in db.all("service")
    }


def generate_schema(
    db: "SpecDatabase",
    config: Optional[GeneratorConfig] = None,
    naming: Optional[NamingBuilder] = None,
) -> Specification:
    """
    Generate the resource and property type schemas.

    Args:
        db: Specification database snapshot
        config: Generator configuration (defaults if omitted)
        naming: Naming builder (built from the global registry if omitted)

    Returns:
        The complete Specification

    Raises:
        SchemaGenerationError: On any resolution failure; nothing partial
            is returned
    """
    config = config or load_config()
    if naming is None:
        from ..registry import get_naming_builder

        naming = get_naming_builder(config)
    resolver = TypeResolver(db, tag_type_name=config.tag_type_name)

    resource_pass = collect_resources(db, naming, resolver)
    type_pass = resolve_property_types(
        db, resource_pass.reference_table, naming, resolver
    )

    return Specification(
        cdk_resources=resource_pass.resources,
        cdk_types=type_pass.property_types,
        property_type_keys=type_pass.property_type_keys,
        modules=build_module_map(db),
    )


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        specification: Optional[Specification],
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
    ):
        self.specification = specification
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(specification=None)
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def run_generation(
    db: "SpecDatabase", config: Optional[GeneratorConfig] = None
) -> GenerationResult:
    """
    Generate the schema with error handling.

    Returns:
        GenerationResult with the specification, warnings and metadata, or
        a failed result carrying the error
    """
    from ..registry import get_naming_builder

    try:
        config = config or load_config()
        naming = get_naming_builder(config)
        specification = generate_schema(db, config, naming)
    except Exception as e:
        logger.error("Schema generation failed: %s", e)
        return GenerationResult.error(f"Schema generation failed: {e}", exception=e)

    metadata = {
        "service_count": len(specification.modules),
        "resource_count": len(specification.cdk_resources),
        "property_type_count": len(specification.cdk_types),
        "substitution_policy": config.substitution_policy,
    }
    return GenerationResult(specification, naming.warnings, metadata)
