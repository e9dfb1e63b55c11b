"""Tests for clapi.parser.loader -- files, YAML, stdin, and read errors."""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from clapi.exceptions import MalformedSpecError, MissingFieldError, SpecNotFoundError
from clapi.exit_codes import EXIT_GENERIC_FAILURE
from clapi.models import APISpec
from clapi.parser import load_spec, load_spec_text

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


class TestLoadSpec:
    def test_json_file(self, blog_spec: APISpec) -> None:
        assert load_spec(str(FIXTURES_DIR / "blog.json")) == blog_spec

    def test_yaml_file_matches_json(self, blog_spec: APISpec) -> None:
        assert load_spec(str(FIXTURES_DIR / "blog.yaml")) == blog_spec

    def test_unknown_extension_is_parsed_as_json(self, tmp_path: Path, blog_raw: dict) -> None:
        path = tmp_path / "spec.txt"
        path.write_text(json.dumps(blog_raw))
        assert load_spec(str(path)).name == "Blog API"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SpecNotFoundError, match="File not found") as exc_info:
            load_spec(str(tmp_path / "nope.json"))
        assert exc_info.value.exit_code == EXIT_GENERIC_FAILURE

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.json"
        path.write_text("  \n")
        with pytest.raises(MalformedSpecError, match="empty"):
            load_spec(str(path))

    def test_invalid_json_file(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{'name': 1")
        with pytest.raises(MalformedSpecError, match="Invalid JSON"):
            load_spec(str(path))

    def test_invalid_yaml_file(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("name: [unclosed\n")
        with pytest.raises(MalformedSpecError, match="Invalid YAML"):
            load_spec(str(path))

    def test_yaml_missing_field(self, tmp_path: Path) -> None:
        path = tmp_path / "spec.yml"
        path.write_text("name: Todo\nroutes: []\n")
        with pytest.raises(MissingFieldError, match="baseUrl"):
            load_spec(str(path))

    def test_yaml_scalar_document(self, tmp_path: Path) -> None:
        path = tmp_path / "spec.yaml"
        path.write_text("just a string\n")
        with pytest.raises(MalformedSpecError, match="str"):
            load_spec(str(path))


class TestStdin:
    def test_reads_stdin(self, monkeypatch: pytest.MonkeyPatch, blog_raw: dict) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(blog_raw)))
        assert load_spec("-").name == "Blog API"

    def test_empty_stdin(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(""))
        with pytest.raises(MalformedSpecError, match="stdin"):
            load_spec_text("-")
