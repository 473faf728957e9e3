"""
Pytest configuration and fixtures for the test suite.

Defines markers for selective test execution:
    pytest -m unit          # Fast unit tests
    pytest -m integration   # End-to-end extraction over complete documents

Fixtures are centralized in tests/fixtures/ for reuse across all test modules.
"""

import json
import os
import sys

import pytest

# Add src to path for imports
src_dir = os.path.join(os.path.dirname(__file__), '..', 'src')
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

# Add tests directory to path for fixtures import
tests_dir = os.path.dirname(__file__)
if tests_dir not in sys.path:
    # Ensure src directory stays ahead of tests for module resolution
    sys.path.insert(1, tests_dir)

from fixtures import (
    MINIMAL_CRATE,
    fixture_crate,
    generate_large_crate,
)

from fixtures.extraction_helpers import extract_ntriples, output_lines
from rust2rdf.rustdoc_models import Crate


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "integration: End-to-end tests over complete rustdoc documents")


# =============================================================================
# Rustdoc document fixtures
# =============================================================================

@pytest.fixture
def fixture_crate_data():
    """Decoded rustdoc JSON for the fixture library (fresh copy)."""
    return fixture_crate()


@pytest.fixture
def parsed_fixture_crate(fixture_crate_data):
    """The fixture library parsed into a Crate."""
    return Crate.from_json(fixture_crate_data)


@pytest.fixture
def minimal_crate_data():
    """Rustdoc JSON for a crate with an empty root module."""
    return json.loads(json.dumps(MINIMAL_CRATE))


@pytest.fixture
def large_crate_data():
    """A crate with enough impls to cross the progress bar threshold."""
    return generate_large_crate(num_structs=60)


@pytest.fixture
def temp_rustdoc_file(tmp_path, fixture_crate_data):
    """Write the fixture library to a temporary JSON file."""
    json_file = tmp_path / "fixture_crate.json"
    json_file.write_text(json.dumps(fixture_crate_data), encoding='utf-8')
    return str(json_file)


@pytest.fixture
def fixture_ntriples(parsed_fixture_crate):
    """N-Triples output for the fixture library with default options."""
    return extract_ntriples(parsed_fixture_crate)


@pytest.fixture
def fixture_lines(fixture_ntriples):
    """Set of stripped output lines, for exact triple membership checks."""
    return output_lines(fixture_ntriples)
