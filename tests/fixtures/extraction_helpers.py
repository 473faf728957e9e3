"""
Helpers for asserting on extraction output.

Triples are compared as whole N-Triples lines, so a helper builds the exact
line expected for an IRI, plain literal, boolean or integer object.
"""

import io
from typing import Optional

from rust2rdf.emitters import NTriplesEmitter
from rust2rdf.extractor import CrateExtractor, ExtractionOptions
from rust2rdf.rustdoc_models import Crate

BASE = "http://rust.example"
RDF_TYPE = "http://www.w3.org/1999/02/22-rdf-syntax-ns#type"
XSD_BOOLEAN = "http://www.w3.org/2001/XMLSchema#boolean"
XSD_INTEGER = "http://www.w3.org/2001/XMLSchema#integer"
TG_NS = "http://typegraph.example/ontology/"
RT_NS = "http://rust.example/ontology/"

CRATE_NAME = "fixture_crate"
CRATE_VERSION = "0.1.0"


def tg(local: str) -> str:
    return TG_NS + local


def rt(local: str) -> str:
    return RT_NS + local


def crate_iri(name: str = CRATE_NAME, version: str = CRATE_VERSION) -> str:
    return f"{BASE}/crate/{name}/{version}"


def module_iri(path: str) -> str:
    return f"{BASE}/module/{CRATE_NAME}/{CRATE_VERSION}/{path.replace('::', '%3A%3A')}"


def type_iri(path: str) -> str:
    return f"{BASE}/type/{CRATE_NAME}/{CRATE_VERSION}/{path.replace('::', '%3A%3A')}"


def impl_iri(impl_id: str) -> str:
    return f"{BASE}/impl/{CRATE_NAME}/{CRATE_VERSION}/{impl_id}"


def primitive_iri(name: str) -> str:
    return f"{BASE}/type/_primitive_/{name}"


def iri_line(subject: str, predicate: str, obj: str) -> str:
    return f"<{subject}> <{predicate}> <{obj}> ."


def literal_line(subject: str, predicate: str, value: str) -> str:
    return f"<{subject}> <{predicate}> \"{value}\" ."


def bool_line(subject: str, predicate: str, value: bool = True) -> str:
    return f"<{subject}> <{predicate}> \"{'true' if value else 'false'}\"^^<{XSD_BOOLEAN}> ."


def int_line(subject: str, predicate: str, value: int) -> str:
    return f"<{subject}> <{predicate}> \"{value}\"^^<{XSD_INTEGER}> ."


def extract_ntriples(crate: Crate, options: Optional[ExtractionOptions] = None) -> str:
    """Run an extraction into an in-memory N-Triples buffer and return the text."""
    buf = io.StringIO()
    emitter = NTriplesEmitter(buf)
    CrateExtractor(emitter, crate, options or ExtractionOptions()).extract()
    emitter.flush()
    return buf.getvalue()


def output_lines(output: str) -> set:
    """Set of non-comment output lines."""
    return {line.strip() for line in output.splitlines() if line.strip() and not line.startswith("#")}
