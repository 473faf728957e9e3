"""
Tests for loading rustdoc JSON.

Tests cover:
- RustdocParser on files, strings and decoded data
- Fatal and non-fatal document problems
- load_json error reporting
- Cargo.toml helpers and the rustdoc invocation
"""

import json
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from fixtures import UNKNOWN_KINDS_CRATE

from rust2rdf.rustdoc_models import UnknownItem
from rust2rdf.rustdoc_parser import (
    ParseError,
    ParseResult,
    RustdocParseError,
    RustdocParser,
    RustdocToolError,
    extract_crate_name,
    extract_crate_version,
    load_crate,
    load_json,
    run_rustdoc,
)


@pytest.mark.unit
class TestRustdocParser:
    """Tests for RustdocParser."""

    @pytest.fixture
    def parser(self):
        return RustdocParser()

    def test_parse_file(self, parser, temp_rustdoc_file):
        result = parser.parse_file(temp_rustdoc_file)

        assert result.success
        assert result.files_parsed == 1
        assert result.crate.name == "fixture_crate"
        assert result.warnings == []

    def test_parse_string(self, parser, fixture_crate_data):
        result = parser.parse_string(json.dumps(fixture_crate_data))
        assert result.success
        assert result.crate.crate_version == "0.1.0"

    def test_parse_data(self, parser, minimal_crate_data):
        result = parser.parse_data(minimal_crate_data)
        assert result.success
        assert result.crate.name == "empty_crate"
        assert result.crate.crate_version is None

    def test_file_not_found(self, parser, tmp_path):
        result = parser.parse_file(tmp_path / "missing.json")
        assert not result.success
        assert result.crate is None
        assert "File not found" in result.errors[0].message

    def test_directory_is_not_a_file(self, parser, tmp_path):
        result = parser.parse_file(tmp_path)
        assert not result.success
        assert "Not a file" in result.errors[0].message

    def test_invalid_json(self, parser):
        result = parser.parse_string("{not json", source_name="broken.json")
        assert not result.success
        assert result.errors[0].source == "broken.json"
        assert "Invalid JSON" in result.errors[0].message

    def test_top_level_array(self, parser):
        result = parser.parse_string("[]")
        assert not result.success
        assert "top level" in result.errors[0].message

    def test_missing_root(self, parser):
        result = parser.parse_data({"index": {}})
        assert not result.success
        assert "root" in result.errors[0].message

    def test_unexpected_extension_warns(self, parser, tmp_path, fixture_crate_data):
        path = tmp_path / "crate.txt"
        path.write_text(json.dumps(fixture_crate_data), encoding='utf-8')
        result = parser.parse_file(path)
        assert result.success
        assert any(".txt" in w for w in result.warnings)

    def test_unknown_item_kinds_warn(self, parser):
        result = parser.parse_data(UNKNOWN_KINDS_CRATE)
        assert result.success
        assert len(result.warnings) == 1
        assert "extern_type" in result.warnings[0]
        assert "2 item(s)" in result.warnings[0]

    def test_unknown_item_kinds_strict(self):
        result = RustdocParser(strict_mode=True).parse_data(UNKNOWN_KINDS_CRATE)
        assert not result.success
        assert result.crate is not None
        assert "extern_type" in result.errors[0].message

    def test_root_missing_from_index_warns(self, parser):
        result = parser.parse_data({"root": 9, "index": {}})
        assert result.success
        assert any("Root item 9" in w for w in result.warnings)

    def test_lone_surrogate_is_fatal(self, parser, fixture_crate_data):
        fixture_crate_data["index"]["1"]["name"] = "S\ud800"
        result = parser.parse_string(json.dumps(fixture_crate_data), source_name="surrogate.json")
        assert not result.success
        assert result.crate is None
        assert "Invalid Unicode" in result.errors[0].message

    def test_non_bmp_characters_accepted(self, parser, fixture_crate_data):
        fixture_crate_data["index"]["1"]["name"] = "S\U0001F600"
        result = parser.parse_string(json.dumps(fixture_crate_data))
        assert result.success
        assert result.crate.index["1"].name == "S\U0001F600"

    def test_non_object_index_entry_becomes_unknown_item(self, parser):
        result = parser.parse_data({"root": 0, "index": {"0": {"name": "c", "inner": {"module": {"items": [1]}}}, "1": 7}})
        assert result.success
        assert result.crate.index["1"].inner == UnknownItem()
        assert any("<missing>" in w for w in result.warnings)


@pytest.mark.unit
class TestParseResult:

    def test_summary_with_crate(self, parsed_fixture_crate):
        result = ParseResult(crate=parsed_fixture_crate, files_parsed=1)
        summary = result.get_summary()
        assert "Crate: fixture_crate v0.1.0" in summary
        assert "Format version: 39" in summary

    def test_summary_truncates_errors(self):
        result = ParseResult(errors=[ParseError("f.json", f"problem {i}") for i in range(8)])
        summary = result.get_summary()
        assert "Errors: 8" in summary
        assert "... and 3 more" in summary
        assert not result.success

    def test_parse_error_str(self):
        assert str(ParseError("a.json", "bad")) == "a.json: bad"


@pytest.mark.unit
class TestLoadJson:

    def test_loads_crate(self, temp_rustdoc_file):
        crate = load_json(temp_rustdoc_file)
        assert crate.name == "fixture_crate"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_json(tmp_path / "nonexistent.json")

    def test_lone_surrogate_raises_parse_error(self, tmp_path):
        path = tmp_path / "surrogate.json"
        path.write_text('{"root": 0, "index": {"0": {"name": "\\ud800"}}}', encoding='utf-8')
        with pytest.raises(RustdocParseError, match="Invalid Unicode"):
            load_json(path)

    def test_invalid_json_raises_parse_error(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{", encoding='utf-8')
        with pytest.raises(RustdocParseError) as exc_info:
            load_json(path)
        assert exc_info.value.source == str(path)
        assert isinstance(exc_info.value, ValueError)

    def test_missing_root_raises_parse_error(self, tmp_path):
        path = tmp_path / "no_root.json"
        path.write_text(json.dumps({"index": {}}), encoding='utf-8')
        with pytest.raises(RustdocParseError, match="root"):
            load_json(path)


@pytest.mark.unit
class TestCargoToml:

    def test_extract_name(self):
        toml = '[package]\nname = "my-crate"\nversion = "1.2.3"\n'
        assert extract_crate_name(toml) == "my-crate"

    def test_extract_version(self):
        toml = '\n[package]\nname = "my-crate"\nversion = "1.2.3"\nedition = "2021"\n'
        assert extract_crate_version(toml) == "1.2.3"

    def test_version_outside_package_ignored(self):
        toml = '[dependencies]\nserde = "1"\n\n[workspace.package]\nversion = "9.9.9"\n'
        assert extract_crate_version(toml) is None

    def test_single_quotes(self):
        assert extract_crate_name("[package]\nname = 'quoted'\n") == "quoted"

    def test_no_name(self):
        assert extract_crate_name("[dependencies]\n") is None


@pytest.mark.unit
class TestRunRustdoc:
    """Tests for the cargo invocation, with subprocess mocked out."""

    @pytest.fixture
    def crate_dir(self, tmp_path):
        (tmp_path / "Cargo.toml").write_text('[package]\nname = "my-crate"\nversion = "0.3.0"\n', encoding='utf-8')
        return tmp_path

    def _completed(self, returncode=0, stderr=""):
        return subprocess.CompletedProcess(args=[], returncode=returncode, stdout="", stderr=stderr)

    def test_missing_cargo_toml(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Cargo.toml"):
            run_rustdoc(tmp_path)

    def test_success_returns_json_path(self, crate_dir):
        out = crate_dir / "target" / "doc"
        out.mkdir(parents=True)
        (out / "my_crate.json").write_text("{}", encoding='utf-8')

        with patch("rust2rdf.rustdoc_parser.subprocess.run", return_value=self._completed()) as mock_run:
            path = run_rustdoc(crate_dir)

        assert path == Path(crate_dir) / "target" / "doc" / "my_crate.json"
        cmd = mock_run.call_args[0][0]
        assert cmd[:3] == ["cargo", "+nightly", "rustdoc"]
        assert cmd[-2:] == ["--output-format", "json"]
        assert mock_run.call_args[1]["cwd"] == crate_dir

    def test_failure_raises_tool_error(self, crate_dir):
        with patch("rust2rdf.rustdoc_parser.subprocess.run", return_value=self._completed(1, "error[E0433]")):
            with pytest.raises(RustdocToolError, match="E0433"):
                run_rustdoc(crate_dir)

    def test_missing_output_raises_tool_error(self, crate_dir):
        with patch("rust2rdf.rustdoc_parser.subprocess.run", return_value=self._completed()):
            with pytest.raises(RustdocToolError, match="not found"):
                run_rustdoc(crate_dir)

    def test_load_crate_parses_generated_json(self, crate_dir, fixture_crate_data):
        out = crate_dir / "target" / "doc"
        out.mkdir(parents=True)
        (out / "my_crate.json").write_text(json.dumps(fixture_crate_data), encoding='utf-8')

        with patch("rust2rdf.rustdoc_parser.subprocess.run", return_value=self._completed()):
            crate = load_crate(crate_dir)

        assert crate.name == "fixture_crate"

    def test_load_crate_takes_version_from_cargo_toml(self, crate_dir, minimal_crate_data):
        out = crate_dir / "target" / "doc"
        out.mkdir(parents=True)
        (out / "my_crate.json").write_text(json.dumps(minimal_crate_data), encoding='utf-8')

        with patch("rust2rdf.rustdoc_parser.subprocess.run", return_value=self._completed()):
            crate = load_crate(crate_dir)

        assert crate.crate_version == "0.3.0"

    def test_load_crate_keeps_rustdoc_version(self, crate_dir, fixture_crate_data):
        out = crate_dir / "target" / "doc"
        out.mkdir(parents=True)
        (out / "my_crate.json").write_text(json.dumps(fixture_crate_data), encoding='utf-8')

        with patch("rust2rdf.rustdoc_parser.subprocess.run", return_value=self._completed()):
            crate = load_crate(crate_dir)

        assert crate.crate_version == "0.1.0"
