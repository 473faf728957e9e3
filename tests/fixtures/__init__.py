"""
Centralized test fixtures for the rust2rdf test suite.

This package provides reusable rustdoc JSON documents:
- FIXTURE_CRATE: a representative library covering every item kind
- MINIMAL_CRATE: a crate with an empty root module
- LEGACY_STRING_ID_CRATE: older format with string IDs and renamed kinds
- UNKNOWN_KINDS_CRATE: item and type kinds the model does not know

Usage:
    from fixtures import FIXTURE_CRATE, generate_large_crate

Or use the pytest fixtures in conftest.py which import from here.
"""

from .rustdoc_fixtures import (
    FIXTURE_CRATE,
    MINIMAL_CRATE,
    LEGACY_STRING_ID_CRATE,
    UNKNOWN_KINDS_CRATE,
    fixture_crate,
    forward_reference_crate,
    generate_large_crate,
)

__all__ = [
    'FIXTURE_CRATE',
    'MINIMAL_CRATE',
    'LEGACY_STRING_ID_CRATE',
    'UNKNOWN_KINDS_CRATE',
    'fixture_crate',
    'forward_reference_crate',
    'generate_large_crate',
]
