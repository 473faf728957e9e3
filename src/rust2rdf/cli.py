"""
Command-line entry point for rust2rdf.

Usage:
    rust2rdf path/to/crate [-o out.nt] [-f turtle]
    rust2rdf target/doc/my_crate.json --json [--config rust2rdf.json]
"""

import argparse
import json
import logging
import sys
from contextlib import ExitStack
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import __version__
from .constants import FORMAT_CHOICES, ExitCode, LoggingConfig, OutputFormat
from .emitters import create_emitter
from .extractor import CrateExtractor, ExtractionOptions
from .rustdoc_parser import RustdocParseError, RustdocToolError, load_crate, load_json

logger = logging.getLogger(__name__)


def setup_logging(level: str = LoggingConfig.DEFAULT_LOG_LEVEL, log_file: Optional[str] = None) -> None:
    """
    Setup logging configuration.

    Log records go to stderr so that RDF written to stdout stays clean.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path. If None, logs to console only.
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, encoding='utf-8'))
        except OSError as e:
            print(f"Warning: Could not create log file {log_file}: {e}", file=sys.stderr)

    logging.basicConfig(
        level=log_level,
        format=LoggingConfig.LOG_FORMAT,
        datefmt=LoggingConfig.DATE_FORMAT,
        handlers=handlers,
        force=True,
    )


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load configuration from a JSON file.

    Raises:
        FileNotFoundError: If the configuration file doesn't exist.
        ValueError: If the file is not valid JSON or not a JSON object.
    """
    path = Path(config_path)
    if not path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in configuration file {config_path}: {e}")
    if not isinstance(config, dict):
        raise ValueError(f"Configuration file {config_path} must contain a JSON object")
    return config


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="rust2rdf",
        description="Extract Rust crate type graphs to RDF",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s ./my-crate -o my-crate.nt
    %(prog)s ./my-crate -f turtle -b http://example.org/rust
    %(prog)s target/doc/my_crate.json --json --exclude-impls
        """,
    )
    parser.add_argument('input', help='Path to crate directory or rustdoc JSON file')
    parser.add_argument('--output', '-o', metavar='FILE', help='Output file path (default: stdout)')
    parser.add_argument(
        '--format', '-f',
        type=str.lower,
        choices=FORMAT_CHOICES,
        default=OutputFormat.NTRIPLES.value,
        help='Output format (default: ntriples)',
    )
    parser.add_argument('--base-uri', '-b', metavar='URI', help='Base URI for IRIs')
    parser.add_argument('--exclude-impls', action='store_true', help='Exclude impl blocks')
    parser.add_argument('--exclude-attributes', action='store_true', help='Exclude attribute information')
    parser.add_argument('--no-error-types', action='store_true', help="Don't extract Result<T, E> error types")
    parser.add_argument('--no-derives', action='store_true', help="Don't extract derive macros")
    parser.add_argument('--json', action='store_true', help='Input is a pre-generated rustdoc JSON file')
    parser.add_argument('--config', '-c', help='Path to JSON configuration file')
    parser.add_argument('--progress', action='store_true', help='Show a progress bar while processing impls')
    parser.add_argument('--log-file', help='Also write log records to this file')

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('--verbose', '-v', action='store_true', help='Verbose output')
    verbosity.add_argument('--quiet', '-q', action='store_true', help='Quiet output')

    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    return parser


def build_options(args: argparse.Namespace, config: Optional[Dict[str, Any]] = None) -> ExtractionOptions:
    """Combine configuration file values with command-line overrides."""
    options = ExtractionOptions.from_dict(config or {})
    if args.base_uri:
        options.base_uri = args.base_uri
    if args.exclude_impls:
        options.include_impls = False
    if args.exclude_attributes:
        options.include_attributes = False
    if args.no_error_types:
        options.extract_error_types = False
    if args.no_derives:
        options.extract_derives = False
    return options


def run(args: argparse.Namespace) -> int:
    """Execute an extraction for parsed arguments and return an exit code."""
    config: Dict[str, Any] = {}
    if args.config:
        try:
            config = load_config(args.config)
            options = build_options(args, config)
        except (FileNotFoundError, ValueError) as e:
            print(f"Configuration error: {e}", file=sys.stderr)
            return ExitCode.CONFIG_ERROR
    else:
        options = build_options(args)

    logger.debug(f"Extraction options: {options.to_dict()}")
    logger.info(f"Loading input from: {args.input}")

    try:
        crate = load_json(args.input) if args.json else load_crate(args.input)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return ExitCode.FILE_NOT_FOUND
    except RustdocParseError as e:
        print(f"Error: invalid rustdoc JSON: {e}", file=sys.stderr)
        return ExitCode.VALIDATION_ERROR
    except (RustdocToolError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return ExitCode.ERROR

    try:
        with ExitStack() as stack:
            if args.output:
                writer = stack.enter_context(open(args.output, 'w', encoding='utf-8', newline='\n'))
            else:
                writer = sys.stdout
            emitter = create_emitter(args.format, writer)
            extractor = CrateExtractor(emitter, crate, options, show_progress=args.progress)
            stats = extractor.extract()
            emitter.flush()
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        return ExitCode.ERROR

    logger.info(stats.get_summary())
    if not args.quiet:
        print(
            f"Extracted {emitter.triple_count} triples from "
            f"{extractor.crate_name} v{extractor.crate_version}",
            file=sys.stderr,
        )
    return ExitCode.SUCCESS


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        level = "DEBUG"
    elif args.quiet:
        level = "ERROR"
    else:
        level = LoggingConfig.DEFAULT_LOG_LEVEL
    setup_logging(level, args.log_file)

    return int(run(args))


if __name__ == "__main__":
    sys.exit(main())
