"""Tests for the command line interface."""

import json

import pytest
from rich.console import Console

from cdk_schema_generator.cli import CLIHandler, create_parser, main


@pytest.fixture
def snapshot_file(tmp_path, nested_snapshot):
    path = tmp_path / "db.json"
    path.write_text(json.dumps(nested_snapshot), encoding="utf-8")
    return path


def run_cli(argv):
    console = Console(record=True, width=200)
    args = create_parser().parse_args(argv)
    code = CLIHandler(console).run(args)
    return code, console.export_text()


def test_generates_both_documents(tmp_path, snapshot_file):
    out = tmp_path / "out"
    out.mkdir()

    code, output = run_cli(["--file", str(snapshot_file), "--output-path", str(out)])

    assert code == 0
    assert "Schemas generated successfully" in output
    resources = json.loads((out / "cdk-resources.json").read_text(encoding="utf-8"))
    types = json.loads((out / "cdk-types.json").read_text(encoding="utf-8"))
    assert list(resources) == ["AWS::S3::Bucket", "AWS::Lambda::Function"]
    assert list(types) == [
        "AWS::S3::Bucket.CorsConfigurationProperty",
        "AWS::S3::Bucket.CorsRuleProperty",
        "AWS::Lambda::Function.CodeProperty",
    ]


def test_config_file_names_outputs(tmp_path, snapshot_file):
    out = tmp_path / "out"
    out.mkdir()
    config = tmp_path / "config.json"
    config.write_text(
        json.dumps({"resources_file": "r.json", "types_file": "t.json"}),
        encoding="utf-8",
    )

    code, _ = run_cli(
        [
            "--file",
            str(snapshot_file),
            "--output-path",
            str(out),
            "--config",
            str(config),
        ]
    )

    assert code == 0
    assert sorted(p.name for p in out.iterdir()) == ["r.json", "t.json"]


def test_failed_generation_writes_nothing(tmp_path, nested_snapshot):
    nested_snapshot["service"] = nested_snapshot["service"][:1]
    path = tmp_path / "db.json"
    path.write_text(json.dumps(nested_snapshot), encoding="utf-8")
    out = tmp_path / "out"
    out.mkdir()

    code, output = run_cli(["--file", str(path), "--output-path", str(out)])

    assert code == 1
    assert "AWS::Lambda" in output
    assert list(out.iterdir()) == []


def test_failed_write_leaves_no_partial_output(tmp_path, snapshot_file):
    out = tmp_path / "out"
    out.mkdir()
    (out / "cdk-types.json").mkdir()

    code, output = run_cli(["--file", str(snapshot_file), "--output-path", str(out)])

    assert code == 1
    assert "Failed to write schemas" in output
    assert [p.name for p in out.iterdir()] == ["cdk-types.json"]
    assert (out / "cdk-types.json").is_dir()


def test_missing_database(tmp_path):
    code, output = run_cli(
        ["--file", str(tmp_path / "nope.json"), "--output-path", str(tmp_path)]
    )
    assert code == 1
    assert "Failed to load database" in output


def test_requires_source_and_output(tmp_path, snapshot_file):
    assert run_cli(["--output-path", str(tmp_path)])[0] == 1
    assert run_cli(["--file", str(snapshot_file)])[0] == 1
    assert (
        run_cli(["--file", str(snapshot_file), "--output-path", str(snapshot_file)])[0]
        == 1
    )


def test_list_languages():
    code, output = run_cli(["--list-languages"])
    assert code == 0
    for language in ["typescript", "csharp", "golang", "java", "python"]:
        assert language in output


def test_main_entry_point(tmp_path, snapshot_file):
    out = tmp_path / "out"
    out.mkdir()
    assert main(["--file", str(snapshot_file), "--output-path", str(out)]) == 0
    assert (out / "cdk-resources.json").exists()
