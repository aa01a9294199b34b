"""
CDK schema generator.

Builds the consolidated, cross-language CDK schema (resource constructs
and nested property types) from a service specification database.
"""

from .codegen import (
    GenerationResult,
    GeneratorConfig,
    Specification,
    SchemaGenerationError,
    generate_schema,
    load_config,
    run_generation,
)
from .database import SpecDatabase
from .utils import DatabaseLoadError, load_database

__version__ = "0.1.0"


def generate_from_source(file_path=None, url=None, config=None):
    """
    Load a database snapshot and generate the schema from it.

    Args:
        file_path: Local snapshot path (mutually exclusive with url)
        url: URL of the snapshot
        config: GeneratorConfig, config file path or dict of overrides

    Returns:
        GenerationResult for the loaded snapshot
    """
    if isinstance(config, dict):
        config = load_config(custom_config=config)
    elif config is not None and not isinstance(config, GeneratorConfig):
        config = load_config(config_file=config)

    _, db = load_database(file_path, url)
    return run_generation(db, config)


__all__ = [
    "GenerationResult",
    "GeneratorConfig",
    "Specification",
    "SchemaGenerationError",
    "SpecDatabase",
    "DatabaseLoadError",
    "generate_schema",
    "generate_from_source",
    "load_config",
    "load_database",
    "run_generation",
]
