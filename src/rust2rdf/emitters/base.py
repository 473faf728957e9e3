"""
Triple emitter protocol.

Emitters receive ``(subject, predicate, object)`` statements from the
extractor one at a time and render them to their destination immediately.
The extractor never reads anything back from an emitter.
"""

from abc import ABC, abstractmethod


class TriplesEmitter(ABC):
    """
    Abstract base class for RDF triple sinks.

    Subclasses implement the three primitive emission calls, prefix
    registration, flushing and the running triple count. Boolean and integer
    emission are expressed as typed literals by default.
    """

    XSD_BOOLEAN = "http://www.w3.org/2001/XMLSchema#boolean"
    XSD_INTEGER = "http://www.w3.org/2001/XMLSchema#integer"

    @abstractmethod
    def emit_iri(self, subject: str, predicate: str, obj: str) -> None:
        """Emit a triple with an IRI object."""

    @abstractmethod
    def emit_literal(self, subject: str, predicate: str, value: str) -> None:
        """Emit a triple with a plain string literal object."""

    @abstractmethod
    def emit_typed_literal(self, subject: str, predicate: str, value: str, datatype: str) -> None:
        """Emit a triple with a typed literal object."""

    def emit_bool(self, subject: str, predicate: str, value: bool) -> None:
        self.emit_typed_literal(subject, predicate, "true" if value else "false", self.XSD_BOOLEAN)

    def emit_int(self, subject: str, predicate: str, value: int) -> None:
        self.emit_typed_literal(subject, predicate, str(value), self.XSD_INTEGER)

    @abstractmethod
    def add_prefix(self, prefix: str, iri: str) -> None:
        """Register a namespace prefix."""

    @abstractmethod
    def flush(self) -> None:
        """Flush any buffered output."""

    @property
    @abstractmethod
    def triple_count(self) -> int:
        """Number of triples emitted so far."""
