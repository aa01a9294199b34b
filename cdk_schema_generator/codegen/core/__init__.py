"""
Core schema generation components.

Provides the type model, type resolution, naming and the two-stage
generation pipeline used by the package.
"""

from .schema import (
    PropertyType,
    PropertyTypeKind,
    ValueType,
    ValueKind,
    FieldSpec,
    ResourceSpec,
    PropertyTypeSpec,
    Specification,
    SchemaGenerationError,
    UnknownPropertyTypeError,
)
from .resolver import TypeResolver, Resolution
from .templates import TemplateEngine, TemplateError, substitute
from .naming import NamingBuilder, NamingContext, NamingConvention
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .generator import (
    ReferenceTable,
    ResourcePass,
    PropertyTypePass,
    GenerationResult,
    ServiceResolutionError,
    OwnerResolutionError,
    assign_owners,
    collect_resources,
    generate_schema,
    resolve_owner,
    resolve_property_types,
    run_generation,
)

__all__ = [
    # Type model
    "PropertyType",
    "PropertyTypeKind",
    "ValueType",
    "ValueKind",
    "FieldSpec",
    "ResourceSpec",
    "PropertyTypeSpec",
    "Specification",
    # Type resolution
    "TypeResolver",
    "Resolution",
    # Naming
    "NamingBuilder",
    "NamingContext",
    "NamingConvention",
    "TemplateEngine",
    "TemplateError",
    "substitute",
    # Configuration
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Pipeline
    "ReferenceTable",
    "ResourcePass",
    "PropertyTypePass",
    "GenerationResult",
    "assign_owners",
    "collect_resources",
    "generate_schema",
    "resolve_owner",
    "resolve_property_types",
    "run_generation",
    # Errors
    "SchemaGenerationError",
    "UnknownPropertyTypeError",
    "ServiceResolutionError",
    "OwnerResolutionError",
]
