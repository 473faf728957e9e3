"""
In-memory emitter backed by an rdflib Graph.

Useful for querying extraction results with SPARQL or re-serializing them to
any format rdflib supports. Duplicate statements collapse in the graph, so
``triple_count`` reports emission calls rather than ``len(graph)``.
"""

from typing import Optional

from rdflib import Graph, Literal, URIRef
from rdflib.namespace import XSD

from .base import TriplesEmitter


class GraphEmitter(TriplesEmitter):
    """Collects emitted triples into an ``rdflib.Graph``."""

    def __init__(self, graph: Optional[Graph] = None):
        self.graph = graph if graph is not None else Graph()
        self._count = 0

    def emit_iri(self, subject: str, predicate: str, obj: str) -> None:
        self.graph.add((URIRef(subject), URIRef(predicate), URIRef(obj)))
        self._count += 1

    def emit_literal(self, subject: str, predicate: str, value: str) -> None:
        self.graph.add((URIRef(subject), URIRef(predicate), Literal(value)))
        self._count += 1

    def emit_typed_literal(self, subject: str, predicate: str, value: str, datatype: str) -> None:
        self.graph.add((URIRef(subject), URIRef(predicate), Literal(value, datatype=URIRef(datatype))))
        self._count += 1

    def emit_bool(self, subject: str, predicate: str, value: bool) -> None:
        self.graph.add((URIRef(subject), URIRef(predicate), Literal(value, datatype=XSD.boolean)))
        self._count += 1

    def emit_int(self, subject: str, predicate: str, value: int) -> None:
        self.graph.add((URIRef(subject), URIRef(predicate), Literal(value, datatype=XSD.integer)))
        self._count += 1

    def add_prefix(self, prefix: str, iri: str) -> None:
        self.graph.bind(prefix, iri, override=True)

    def flush(self) -> None:
        pass

    @property
    def triple_count(self) -> int:
        return self._count

    def serialize(self, format: str = "turtle") -> str:
        """Serialize the collected graph with any rdflib serializer."""
        return self.graph.serialize(format=format)
