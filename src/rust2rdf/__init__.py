"""
rust2rdf - extract Rust crate type graphs to RDF.

Reads the JSON emitted by ``rustdoc --output-format json`` and writes a
language-neutral type graph (N-Triples or Turtle) using the shared ``tg:``
ontology with Rust-specific ``rt:`` extensions.

Components:
- rustdoc_models: Typed model of the rustdoc JSON document
- rustdoc_parser: Loading rustdoc JSON and running the toolchain
- iri_minter: Deterministic IRIs for every graph entity
- emitters: N-Triples, Turtle and rdflib Graph sinks
- extractor: Crate walker that emits the triples
"""

__version__ = "0.1.0"

from .emitters import GraphEmitter, NTriplesEmitter, TriplesEmitter, TurtleEmitter, create_emitter
from .extractor import CrateExtractor, ExtractionOptions, ExtractionStats
from .iri_minter import IriMinter
from .rustdoc_models import Crate
from .rustdoc_parser import ParseResult, RustdocParseError, RustdocParser, load_crate, load_json

__all__ = [
    '__version__',
    'Crate',
    'CrateExtractor',
    'ExtractionOptions',
    'ExtractionStats',
    'GraphEmitter',
    'IriMinter',
    'NTriplesEmitter',
    'ParseResult',
    'RustdocParseError',
    'RustdocParser',
    'TriplesEmitter',
    'TurtleEmitter',
    'create_emitter',
    'load_crate',
    'load_json',
]
