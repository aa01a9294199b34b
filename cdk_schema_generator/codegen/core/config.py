"""
Configuration management for schema generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import copy
import json
from pathlib import Path
from typing import Dict, Any, Optional, Union
from dataclasses import asdict, dataclass, field, fields

from .templates import SUBSTITUTION_POLICIES


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class GeneratorConfig:
    """Configuration for the schema generator."""

    # Output settings
    resources_file: str = "cdk-resources.json"
    types_file: str = "cdk-types.json"
    indent: int = 2

    # Naming settings
    construct_prefix: str = "Cfn"
    substitution_policy: str = "first"  # first, all
    # language -> output field -> template, e.g. {"java": {"package": "..."}}
    naming_templates: Dict[str, Dict[str, str]] = field(default_factory=dict)

    # Type handling
    tag_type_name: str = "CfnTag"

    # Custom settings
    custom: Dict[str, Any] = field(default_factory=dict)


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        self._defaults: Dict[str, Any] = asdict(GeneratorConfig())

    def get_config(
        self,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration.

        Args:
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        base_config = copy.deepcopy(self._defaults)

        if config_file:
            base_config.update(self._load_config_file(config_file))

        if custom_config:
            base_config.update(
                {k: v for k, v in custom_config.items() if v is not None}
            )

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        # Unknown keys are kept in the custom dict
        if custom_args:
            existing_custom = dict(config_args.get("custom") or {})
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = asdict(config)
        custom = config_dict.pop("custom")
        config_dict.update(custom)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def validate_config(self, config: GeneratorConfig) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings/errors
        """
        warnings = []

        if config.substitution_policy not in SUBSTITUTION_POLICIES:
            warnings.append(
                f"Invalid substitution_policy: {config.substitution_policy}"
            )

        if not isinstance(config.indent, int) or config.indent < 0:
            warnings.append(f"Invalid indent: {config.indent}")

        if not config.construct_prefix:
            warnings.append("construct_prefix is empty")

        if config.resources_file == config.types_file:
            warnings.append(
                f"resources_file and types_file are both {config.resources_file}"
            )

        if not isinstance(config.naming_templates, dict):
            warnings.append("naming_templates must be an object")
        else:
            for language, templates in config.naming_templates.items():
                if not isinstance(templates, dict):
                    warnings.append(f"naming_templates.{language} must be an object")

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    config_file: Optional[Union[str, Path]] = None,
    custom_config: Optional[Dict[str, Any]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        config_file: Path to JSON configuration file
        custom_config: Custom configuration overrides

    Returns:
        Merged configuration
    """
    manager = get_config_manager()
    return manager.get_config(custom_config, config_file)


# Example configuration file for reference
EXAMPLE_CONFIG = {
    "substitution_policy": "all",
    "resources_file": "resources.json",
    "types_file": "types.json",
    "naming_templates": {
        "typescript": {"module": "aws-cdk-lib/{{ service.name }}"},
    },
}
