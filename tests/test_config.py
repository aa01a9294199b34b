"""Tests for configuration loading."""

import json

import pytest

from cdk_schema_generator.codegen.core.config import (
    EXAMPLE_CONFIG,
    ConfigError,
    ConfigManager,
    GeneratorConfig,
    load_config,
)


def test_defaults():
    config = load_config()
    assert config.resources_file == "cdk-resources.json"
    assert config.types_file == "cdk-types.json"
    assert config.indent == 2
    assert config.substitution_policy == "first"
    assert config.tag_type_name == "CfnTag"


def test_file_then_overrides(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(EXAMPLE_CONFIG), encoding="utf-8")

    config = load_config(config_file=path)
    assert config.substitution_policy == "all"
    assert config.resources_file == "resources.json"

    config = load_config(
        config_file=path,
        custom_config={"substitution_policy": "first", "indent": None},
    )
    assert config.substitution_policy == "first"
    assert config.indent == 2


def test_unknown_keys_go_to_custom():
    config = load_config(custom_config={"owner": "platform-team"})
    assert config.custom == {"owner": "platform-team"}


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(config_file=tmp_path / "missing.json")


def test_non_json_extension(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("a: 1", encoding="utf-8")
    with pytest.raises(ConfigError, match="must be JSON"):
        load_config(config_file=path)


def test_invalid_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid JSON"):
        load_config(config_file=path)


def test_non_object_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ConfigError, match="JSON object"):
        load_config(config_file=path)


def test_save_and_reload(tmp_path):
    manager = ConfigManager()
    config = GeneratorConfig(indent=4, custom={"owner": "me"})
    path = tmp_path / "saved.json"
    manager.save_config(config, path)

    saved = json.loads(path.read_text(encoding="utf-8"))
    assert saved["indent"] == 4
    assert saved["owner"] == "me"
    assert "custom" not in saved

    assert manager.get_config(config_file=path) == config


def test_validate_config():
    manager = ConfigManager()
    assert manager.validate_config(GeneratorConfig()) == []

    warnings = manager.validate_config(
        GeneratorConfig(
            substitution_policy="some",
            indent=-1,
            types_file="cdk-resources.json",
            naming_templates={"go": "x"},
        )
    )
    assert len(warnings) == 4
