"""
RDF emitters - serializers for extracted triples.

Components:
- base: TriplesEmitter abstract base class
- ntriples: Line-oriented N-Triples writer
- turtle: Turtle writer with sorted prefixes and IRI compaction
- graph: rdflib Graph sink for in-memory use
"""

from typing import TextIO

from .base import TriplesEmitter
from .ntriples import NTriplesEmitter, escape_ntriples_literal
from .turtle import TurtleEmitter, escape_turtle_literal
from .graph import GraphEmitter

from ..constants import OutputFormat


def create_emitter(output_format: str, writer: TextIO) -> TriplesEmitter:
    """
    Create a streaming emitter for the given format name.

    Args:
        output_format: ``ntriples``/``nt`` or ``turtle``/``ttl`` (case-insensitive)
        writer: Text stream the emitter writes to

    Raises:
        ValueError: If the format name is not recognized.
    """
    fmt = OutputFormat.from_name(output_format)
    if fmt is OutputFormat.NTRIPLES:
        return NTriplesEmitter(writer)
    return TurtleEmitter(writer)


__all__ = [
    'TriplesEmitter',
    'NTriplesEmitter',
    'TurtleEmitter',
    'GraphEmitter',
    'create_emitter',
    'escape_ntriples_literal',
    'escape_turtle_literal',
]
