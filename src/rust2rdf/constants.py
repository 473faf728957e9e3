"""
Centralized configuration constants for the rustdoc to RDF converter.

This module provides a single source of truth for exit codes, output formats
and default values used throughout the application.
"""

from enum import Enum, IntEnum
from typing import Final

# ============================================================================
# Exit Codes
# ============================================================================

class ExitCode(IntEnum):
    """Standard exit codes for CLI commands.

    Following Unix conventions:
    - 0: Success
    - 1: General error
    - 2: Validation/syntax error
    - 3+: Specific error categories
    """
    SUCCESS = 0
    ERROR = 1
    VALIDATION_ERROR = 2
    CONFIG_ERROR = 3
    FILE_NOT_FOUND = 5


# ============================================================================
# Output Formats
# ============================================================================

class OutputFormat(str, Enum):
    """Supported RDF serializations."""
    NTRIPLES = "ntriples"
    TURTLE = "turtle"

    @classmethod
    def from_name(cls, name: str) -> 'OutputFormat':
        """
        Resolve a format name or alias.

        Raises:
            ValueError: If the name is not a known format.
        """
        normalized = name.strip().lower()
        fmt = _FORMAT_ALIASES.get(normalized)
        if fmt is None:
            raise ValueError(f"Unknown format: {name}. Use 'ntriples' or 'turtle'.")
        return fmt


_FORMAT_ALIASES = {
    "ntriples": OutputFormat.NTRIPLES,
    "nt": OutputFormat.NTRIPLES,
    "turtle": OutputFormat.TURTLE,
    "ttl": OutputFormat.TURTLE,
}

FORMAT_CHOICES: Final = tuple(_FORMAT_ALIASES)


# ============================================================================
# Extraction Defaults
# ============================================================================

class ExtractionDefaults:
    """Defaults used when the document or the caller leaves a value unset."""

    BASE_URI: Final[str] = "http://rust.example"
    """Base address for minted IRIs."""

    UNKNOWN_CRATE_NAME: Final[str] = "unknown"
    """Crate name when the root item has none."""

    UNKNOWN_VERSION: Final[str] = "0.0.0"
    """Crate version when rustdoc did not record one."""

    EXTERNAL_CRATE_VERSION: Final[str] = "0.0.0"
    """Placeholder version for dependency stub nodes; rustdoc JSON carries none."""

    SOURCE_LANGUAGE: Final[str] = "rust"
    """Value of ``tg:language`` on the crate node."""

    PATH_SEPARATOR: Final[str] = "::"
    """Separator for module and type paths."""

    PROGRESS_THRESHOLD: Final[int] = 50
    """Impl counts below this never show a progress bar."""


# ============================================================================
# Logging
# ============================================================================

class LoggingConfig:
    """Logging configuration."""

    DEFAULT_LOG_LEVEL: Final[str] = "WARNING"
    """Default logging level; stdout may carry RDF, so the CLI stays quiet."""

    LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    """Default log format string."""

    DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
    """Default date format for logs."""
