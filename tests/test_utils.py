"""Tests for loading database snapshots and writing documents."""

import gzip
import json

import pytest
import requests

from cdk_schema_generator import utils
from cdk_schema_generator.utils import (
    DatabaseLoadError,
    load_database,
    write_json,
)


class FakeResponse:
    def __init__(self, content=b"", status_code=200):
        self.content = content
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(response=self)


class TestLoadFromFile:
    def test_plain_json(self, tmp_path, s3_snapshot):
        path = tmp_path / "db.json"
        path.write_text(json.dumps(s3_snapshot), encoding="utf-8")
        source, db = load_database(file_path=path)
        assert source == str(path)
        assert [r.name for r in db.all("resource")] == ["Bucket"]

    def test_gzipped_json(self, tmp_path, nested_snapshot):
        path = tmp_path / "db.json.gz"
        path.write_bytes(gzip.compress(json.dumps(nested_snapshot).encode("utf-8")))
        _, db = load_database(file_path=path)
        assert len(db.all("typeDefinition")) == 3

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_database(file_path=tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "db.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(DatabaseLoadError, match="Invalid JSON"):
            load_database(file_path=path)

    def test_corrupt_gzip(self, tmp_path):
        path = tmp_path / "db.json.gz"
        path.write_bytes(b"\x1f\x8bnot really gzip")
        with pytest.raises(DatabaseLoadError, match="Corrupt gzip"):
            load_database(file_path=path)

    def test_invalid_snapshot(self, tmp_path, s3_snapshot):
        s3_snapshot["resource"][0]["attributes"]["Arn"]["type"] = {"type": "blob"}
        path = tmp_path / "db.json"
        path.write_text(json.dumps(s3_snapshot), encoding="utf-8")
        with pytest.raises(DatabaseLoadError, match="Invalid database snapshot"):
            load_database(file_path=path)

    def test_malformed_snapshot_structure(self, tmp_path, s3_snapshot):
        s3_snapshot["resource"][0]["properties"] = ["BucketName"]
        path = tmp_path / "db.json"
        path.write_text(json.dumps(s3_snapshot), encoding="utf-8")
        with pytest.raises(DatabaseLoadError, match="Invalid database snapshot"):
            load_database(file_path=path)


class TestLoadFromUrl:
    def test_success(self, monkeypatch, s3_snapshot):
        calls = []

        def fake_get(url, timeout):
            calls.append((url, timeout))
            return FakeResponse(json.dumps(s3_snapshot).encode("utf-8"))

        monkeypatch.setattr(utils.requests, "get", fake_get)
        source, db = load_database(url="https://example.com/db.json", timeout=5)
        assert source == "https://example.com/db.json"
        assert calls == [("https://example.com/db.json", 5)]
        assert db.get("service", "svc-s3").name == "aws-s3"

    def test_http_error(self, monkeypatch):
        monkeypatch.setattr(
            utils.requests, "get", lambda url, timeout: FakeResponse(status_code=404)
        )
        with pytest.raises(DatabaseLoadError, match="HTTP error 404"):
            load_database(url="https://example.com/db.json")

    def test_timeout(self, monkeypatch):
        def fake_get(url, timeout):
            raise requests.exceptions.Timeout()

        monkeypatch.setattr(utils.requests, "get", fake_get)
        with pytest.raises(DatabaseLoadError, match="timeout"):
            load_database(url="https://example.com/db.json")

    def test_invalid_url(self):
        with pytest.raises(DatabaseLoadError, match="Invalid URL"):
            load_database(url="not-a-url")


class TestArguments:
    def test_requires_a_source(self):
        with pytest.raises(DatabaseLoadError):
            load_database()

    def test_rejects_both_sources(self, tmp_path):
        with pytest.raises(DatabaseLoadError):
            load_database(file_path=tmp_path / "db.json", url="https://example.com")


def test_write_json_keeps_order(tmp_path):
    document = {"b": 1, "a": {"z": 1, "y": "ü"}}
    path = write_json(document, tmp_path / "out.json", indent=2)
    text = path.read_text(encoding="utf-8")
    assert text.index('"b"') < text.index('"a"')
    assert text.index('"z"') < text.index('"y"')
    assert "ü" in text
    assert json.loads(text) == document
