"""
N-Triples emitter.

Streams one ``<s> <p> o .`` line per triple. N-Triples has no prefix
mechanism, so registered prefixes are written as comments for readability.
"""

from typing import TextIO

from .base import TriplesEmitter

_LITERAL_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def escape_ntriples_literal(value: str) -> str:
    """
    Escape a string for an N-Triples literal.

    Backslash, quote, newline, carriage return and tab get two-character
    escapes; other characters below U+0020 become ``\\uXXXX``. Everything
    else, non-ASCII included, is written as is.
    """
    out = []
    for ch in value:
        escaped = _LITERAL_ESCAPES.get(ch)
        if escaped is not None:
            out.append(escaped)
        elif ord(ch) < 0x20:
            out.append(f"\\u{ord(ch):04X}")
        else:
            out.append(ch)
    return "".join(out)


class NTriplesEmitter(TriplesEmitter):
    """Line-oriented N-Triples writer."""

    def __init__(self, writer: TextIO):
        self.writer = writer
        self._count = 0

    def emit_iri(self, subject: str, predicate: str, obj: str) -> None:
        self.writer.write(f"<{subject}> <{predicate}> <{obj}> .\n")
        self._count += 1

    def emit_literal(self, subject: str, predicate: str, value: str) -> None:
        self.writer.write(f"<{subject}> <{predicate}> \"{escape_ntriples_literal(value)}\" .\n")
        self._count += 1

    def emit_typed_literal(self, subject: str, predicate: str, value: str, datatype: str) -> None:
        self.writer.write(
            f"<{subject}> <{predicate}> \"{escape_ntriples_literal(value)}\"^^<{datatype}> .\n"
        )
        self._count += 1

    def add_prefix(self, prefix: str, iri: str) -> None:
        self.writer.write(f"# @prefix {prefix}: <{iri}> .\n")

    def flush(self) -> None:
        self.writer.flush()

    @property
    def triple_count(self) -> int:
        return self._count
