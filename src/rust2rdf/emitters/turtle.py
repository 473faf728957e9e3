"""
Turtle emitter with prefix compaction.

Prefixes registered before the first triple are written, sorted by prefix
name, ahead of the first statement. Every IRI is then compacted to
``prefix:local`` using the longest matching namespace when the local part is
a plain identifier, and written in full ``<...>`` form otherwise.
"""

from typing import Dict, TextIO

from .base import TriplesEmitter

_LITERAL_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def escape_turtle_literal(value: str) -> str:
    """Escape backslash, quote, newline, carriage return and tab."""
    return "".join(_LITERAL_ESCAPES.get(ch, ch) for ch in value)


def _is_local_name(local: str) -> bool:
    return bool(local) and all(ch.isalnum() or ch == "_" for ch in local)


class TurtleEmitter(TriplesEmitter):
    """Flat Turtle writer: one statement per line, no predicate lists."""

    def __init__(self, writer: TextIO):
        self.writer = writer
        self._count = 0
        self.prefixes: Dict[str, str] = {}
        self._prefixes_written = False

    def _write_prefixes(self) -> None:
        if self._prefixes_written:
            return
        self._prefixes_written = True
        for prefix in sorted(self.prefixes):
            self.writer.write(f"@prefix {prefix}: <{self.prefixes[prefix]}> .\n")
        if self.prefixes:
            self.writer.write("\n")

    def compact_iri(self, iri: str) -> str:
        """Return ``prefix:local`` for ``iri`` if possible, else ``<iri>``."""
        best_prefix = None
        best_ns = ""
        for prefix, ns in self.prefixes.items():
            if iri.startswith(ns) and (best_prefix is None or len(ns) > len(best_ns)):
                best_prefix, best_ns = prefix, ns
        if best_prefix is not None:
            local = iri[len(best_ns):]
            if _is_local_name(local):
                return f"{best_prefix}:{local}"
        return f"<{iri}>"

    def emit_iri(self, subject: str, predicate: str, obj: str) -> None:
        self._write_prefixes()
        s = self.compact_iri(subject)
        p = self.compact_iri(predicate)
        o = self.compact_iri(obj)
        self.writer.write(f"{s} {p} {o} .\n")
        self._count += 1

    def emit_literal(self, subject: str, predicate: str, value: str) -> None:
        self._write_prefixes()
        s = self.compact_iri(subject)
        p = self.compact_iri(predicate)
        self.writer.write(f"{s} {p} \"{escape_turtle_literal(value)}\" .\n")
        self._count += 1

    def emit_typed_literal(self, subject: str, predicate: str, value: str, datatype: str) -> None:
        self._write_prefixes()
        s = self.compact_iri(subject)
        p = self.compact_iri(predicate)
        dt = self.compact_iri(datatype)
        self.writer.write(f"{s} {p} \"{escape_turtle_literal(value)}\"^^{dt} .\n")
        self._count += 1

    def add_prefix(self, prefix: str, iri: str) -> None:
        self.prefixes[prefix] = iri

    def flush(self) -> None:
        self.writer.flush()

    @property
    def triple_count(self) -> int:
        return self._count
