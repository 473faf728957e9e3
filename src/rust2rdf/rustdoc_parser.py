"""
Rustdoc JSON Parser

This module loads rustdoc's JSON output into the structured ``Crate`` model.

Supports:
- Pre-generated rustdoc JSON files (``cargo rustdoc -- --output-format json``)
- JSON strings and already-decoded dictionaries
- Running the nightly toolchain on a crate directory to produce the JSON
"""

import json
import logging
import subprocess
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Union

from .rustdoc_models import Crate, UnknownItem

logger = logging.getLogger(__name__)


class RustdocParseError(ValueError):
    """Raised when a rustdoc document cannot be loaded."""

    def __init__(self, source: str, message: str):
        self.source = source
        self.message = message
        super().__init__(f"{source}: {message}")


class RustdocToolError(RuntimeError):
    """Raised when ``cargo rustdoc`` fails or produces no output."""


@dataclass
class ParseError:
    """Represents a parsing error."""
    source: str
    message: str

    def __str__(self) -> str:
        return f"{self.source}: {self.message}"


@dataclass
class ParseResult:
    """Result of parsing a rustdoc document."""
    crate: Optional[Crate] = None
    errors: List[ParseError] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    files_parsed: int = 0

    @property
    def success(self) -> bool:
        """Check if parsing was successful (a crate and no errors)."""
        return self.crate is not None and len(self.errors) == 0

    def get_summary(self) -> str:
        """Generate human-readable summary."""
        lines = [
            "Parse Summary:",
            f"  Files parsed: {self.files_parsed}",
        ]
        if self.crate is not None:
            lines.append(f"  Crate: {self.crate.name} v{self.crate.crate_version or '?'}")
            lines.append(f"  Format version: {self.crate.format_version}")
            lines.append(f"  Items: {len(self.crate.index)}")
        if self.errors:
            lines.append(f"  Errors: {len(self.errors)}")
            for err in self.errors[:5]:
                lines.append(f"    - {err}")
            if len(self.errors) > 5:
                lines.append(f"    ... and {len(self.errors) - 5} more")
        if self.warnings:
            lines.append(f"  Warnings: {len(self.warnings)}")
        return "\n".join(lines)


class RustdocParser:
    """
    Parse rustdoc JSON into a ``Crate``.

    Fatal problems (bad JSON, a non-object document, a missing root) become
    ``ParseError`` entries. Item kinds this model does not know are kept as
    ``UnknownItem`` values and reported as warnings.

    Example usage:
        parser = RustdocParser()
        result = parser.parse_file("target/doc/my_crate.json")
        if result.success:
            print(f"Loaded {result.crate.name}")
    """

    # Valid file extensions for rustdoc output
    RUSTDOC_EXTENSIONS = {".json"}

    def __init__(self, strict_mode: bool = False):
        """
        Initialize the parser.

        Args:
            strict_mode: If True, treat warnings as errors
        """
        self.strict_mode = strict_mode

    def parse_file(self, file_path: Union[str, Path]) -> ParseResult:
        """
        Parse a single rustdoc JSON file.

        Args:
            file_path: Path to the JSON file

        Returns:
            ParseResult with the crate and any errors
        """
        path = Path(file_path)
        result = ParseResult()

        if not path.exists():
            result.errors.append(ParseError(str(path), "File not found"))
            return result

        if not path.is_file():
            result.errors.append(ParseError(str(path), "Not a file"))
            return result

        if path.suffix.lower() not in self.RUSTDOC_EXTENSIONS:
            result.warnings.append(f"Unexpected file extension: {path.suffix}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            result.errors.append(ParseError(str(path), f"Invalid JSON: {e}"))
            return result
        except UnicodeDecodeError as e:
            result.errors.append(ParseError(str(path), f"Encoding error: {e}"))
            return result
        except OSError as e:
            result.errors.append(ParseError(str(path), f"Error reading file: {e}"))
            return result

        result.files_parsed = 1
        self._parse_document(data, str(path), result)
        return result

    def parse_string(self, content: str, source_name: str = "<string>") -> ParseResult:
        """
        Parse rustdoc JSON from a string.

        Args:
            content: JSON text
            source_name: Name to use for error messages

        Returns:
            ParseResult with the crate and any errors
        """
        result = ParseResult()

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            result.errors.append(ParseError(source_name, f"Invalid JSON: {e}"))
            return result

        result.files_parsed = 1
        self._parse_document(data, source_name, result)
        return result

    def parse_data(self, data: Any, source_name: str = "<data>") -> ParseResult:
        """Parse an already-decoded JSON document."""
        result = ParseResult(files_parsed=1)
        self._parse_document(data, source_name, result)
        return result

    def _parse_document(self, data: Any, source: str, result: ParseResult) -> None:
        # Lone surrogate escapes decode fine but cannot be written as UTF-8.
        try:
            json.dumps(data, ensure_ascii=False).encode('utf-8')
        except UnicodeEncodeError as e:
            result.errors.append(ParseError(source, f"Invalid Unicode in string value: {e.reason}"))
            return

        try:
            crate = Crate.from_json(data)
        except ValueError as e:
            result.errors.append(ParseError(source, str(e)))
            return

        unknown_kinds = Counter(
            item.inner.tag or "<missing>" for item in crate.index.values()
            if isinstance(item.inner, UnknownItem)
        )
        for tag, count in sorted(unknown_kinds.items()):
            msg = f"Unrecognized item kind '{tag}' ({count} item(s)); left unextracted"
            logger.warning(f"{source}: {msg}")
            if self.strict_mode:
                result.errors.append(ParseError(source, msg))
            else:
                result.warnings.append(msg)

        if crate.root not in crate.index:
            result.warnings.append(f"Root item {crate.root} not present in index")

        result.crate = crate
        logger.info(
            f"Parsed {source}: crate {crate.name} v{crate.crate_version or '?'}, "
            f"format version {crate.format_version}, {len(crate.index)} items"
        )


def load_json(file_path: Union[str, Path]) -> Crate:
    """
    Load a rustdoc JSON file, raising on failure.

    Args:
        file_path: Path to the JSON file

    Returns:
        The parsed Crate

    Raises:
        FileNotFoundError: If the file does not exist
        RustdocParseError: If the file is not a usable rustdoc document
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Rustdoc JSON not found: {path}")

    result = RustdocParser().parse_file(path)
    for warning in result.warnings:
        logger.debug(f"{path}: {warning}")
    if result.crate is None:
        message = "; ".join(err.message for err in result.errors) or "no crate parsed"
        raise RustdocParseError(str(path), message)
    return result.crate


def _toml_value(line: str) -> str:
    return line.split("=", 1)[1].strip().strip('"').strip("'")


def extract_crate_name(cargo_toml: str) -> Optional[str]:
    """Return the first ``name = ...`` value in a Cargo.toml, or None."""
    for line in cargo_toml.splitlines():
        line = line.strip()
        if line.startswith("name") and "=" in line:
            return _toml_value(line)
    return None


def extract_crate_version(cargo_toml: str) -> Optional[str]:
    """Return ``version`` from the ``[package]`` table of a Cargo.toml, or None."""
    in_package = False
    for line in cargo_toml.splitlines():
        line = line.strip()
        if line == "[package]":
            in_package = True
            continue
        if line.startswith("["):
            in_package = False
            continue
        if in_package and line.startswith("version") and "=" in line:
            return _toml_value(line)
    return None


def run_rustdoc(crate_dir: Union[str, Path]) -> Path:
    """
    Generate rustdoc JSON for a crate with the nightly toolchain.

    Args:
        crate_dir: Directory containing Cargo.toml

    Returns:
        Path to the generated ``target/doc/<crate>.json``

    Raises:
        FileNotFoundError: If Cargo.toml or cargo itself is missing
        RustdocToolError: If rustdoc fails or writes no JSON
    """
    crate_path = Path(crate_dir)
    cargo_toml = crate_path / "Cargo.toml"
    if not cargo_toml.is_file():
        raise FileNotFoundError(f"Cargo.toml not found in {crate_path}")

    crate_name = extract_crate_name(cargo_toml.read_text(encoding='utf-8'))
    if not crate_name:
        raise RustdocToolError(f"Could not determine crate name from {cargo_toml}")

    cmd = ["cargo", "+nightly", "rustdoc", "--", "-Z", "unstable-options", "--output-format", "json"]
    logger.info(f"Running {' '.join(cmd)} in {crate_path}")
    completed = subprocess.run(cmd, cwd=crate_path, capture_output=True, text=True)
    if completed.returncode != 0:
        raise RustdocToolError(f"rustdoc failed: {completed.stderr.strip()}")

    json_path = crate_path / "target" / "doc" / f"{crate_name.replace('-', '_')}.json"
    if not json_path.exists():
        raise RustdocToolError(f"rustdoc JSON output not found at: {json_path}")
    return json_path


def load_crate(crate_dir: Union[str, Path]) -> Crate:
    """
    Run rustdoc on a crate directory and load the generated JSON.

    When the JSON carries no ``crate_version``, the ``[package]`` version
    from Cargo.toml is used instead.
    """
    crate = load_json(run_rustdoc(crate_dir))
    if crate.crate_version is None:
        cargo_toml = Path(crate_dir) / "Cargo.toml"
        crate.crate_version = extract_crate_version(cargo_toml.read_text(encoding='utf-8'))
        if crate.crate_version:
            logger.debug(f"Using Cargo.toml version {crate.crate_version} for {crate.name}")
    return crate
