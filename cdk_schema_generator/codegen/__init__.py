"""
CDK schema generation.

Resolves resources and property types from a specification database
and names them for every CDK target language.
"""

from .registry import (
    NamingRegistry,
    RegistryError,
    get_naming_builder,
    get_language_info,
    list_supported_languages,
)
from .core.generator import (
    GenerationResult,
    generate_schema,
    run_generation,
)
from .core.schema import Specification, SchemaGenerationError
from .core.config import GeneratorConfig, ConfigManager, load_config

__all__ = [
    "NamingRegistry",
    "RegistryError",
    "GenerationResult",
    "Specification",
    "SchemaGenerationError",
    "GeneratorConfig",
    "ConfigManager",
    "generate_schema",
    "run_generation",
    "load_config",
    "get_naming_builder",
    "get_language_info",
    "list_supported_languages",
]
