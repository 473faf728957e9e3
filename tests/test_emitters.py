"""
Tests for the triple emitters.

Tests cover:
- N-Triples literal escaping and line format
- Turtle prefix block, IRI compaction and escaping
- Typed boolean/integer literals
- rdflib parse-back of serialized output
- The rdflib Graph sink and the emitter factory
"""

import io

import pytest
from rdflib import Graph, Literal, URIRef
from rdflib.namespace import XSD

from fixtures.extraction_helpers import extract_ntriples
from rust2rdf.emitters import (
    GraphEmitter,
    NTriplesEmitter,
    TurtleEmitter,
    create_emitter,
    escape_ntriples_literal,
    escape_turtle_literal,
)
from rust2rdf.extractor import CrateExtractor, ExtractionOptions

TG = "http://typegraph.example/ontology/"
RT = "http://rust.example/ontology/"
S = "http://rust.example/type/c/1/c%3A%3AS"


@pytest.mark.unit
class TestNTriplesEscaping:

    def test_plain_text_unchanged(self):
        assert escape_ntriples_literal("hello world") == "hello world"

    def test_two_character_escapes(self):
        assert escape_ntriples_literal('a"b\\c\nd\re\tf') == 'a\\"b\\\\c\\nd\\re\\tf'

    def test_other_controls_use_u_escape(self):
        assert escape_ntriples_literal("\x00\x1f") == "\\u0000\\u001F"

    def test_non_ascii_kept(self):
        assert escape_ntriples_literal("naïve → ok") == "naïve → ok"


@pytest.mark.unit
class TestNTriplesEmitter:

    @pytest.fixture
    def buf(self):
        return io.StringIO()

    @pytest.fixture
    def emitter(self, buf):
        return NTriplesEmitter(buf)

    def test_iri_triple(self, emitter, buf):
        emitter.emit_iri(S, TG + "implements", "http://x/T")
        assert buf.getvalue() == f"<{S}> <{TG}implements> <http://x/T> .\n"
        assert emitter.triple_count == 1

    def test_literal_triple(self, emitter, buf):
        emitter.emit_literal(S, TG + "name", 'say "hi"')
        assert buf.getvalue() == f"<{S}> <{TG}name> \"say \\\"hi\\\"\" .\n"

    def test_bool_and_int(self, emitter, buf):
        emitter.emit_bool(S, TG + "isGeneric", True)
        emitter.emit_int(S, TG + "ordinal", 3)
        lines = buf.getvalue().splitlines()
        assert lines[0] == f"<{S}> <{TG}isGeneric> \"true\"^^<http://www.w3.org/2001/XMLSchema#boolean> ."
        assert lines[1] == f"<{S}> <{TG}ordinal> \"3\"^^<http://www.w3.org/2001/XMLSchema#integer> ."
        assert emitter.triple_count == 2

    def test_prefix_is_comment_and_not_counted(self, emitter, buf):
        emitter.add_prefix("tg", TG)
        assert buf.getvalue() == f"# @prefix tg: <{TG}> .\n"
        assert emitter.triple_count == 0


@pytest.mark.unit
class TestTurtleEmitter:

    @pytest.fixture
    def buf(self):
        return io.StringIO()

    @pytest.fixture
    def emitter(self, buf):
        emitter = TurtleEmitter(buf)
        emitter.add_prefix("tg", TG)
        emitter.add_prefix("rt", RT)
        emitter.add_prefix("xsd", str(XSD))
        return emitter

    def test_escape(self):
        assert escape_turtle_literal('a"b\\c\nd') == 'a\\"b\\\\c\\nd'
        # Only the five characters are escaped.
        assert escape_turtle_literal("\x01") == "\x01"

    def test_prefixes_sorted_before_first_triple(self, emitter, buf):
        assert buf.getvalue() == ""
        emitter.emit_iri(S, TG + "implements", RT + "Trait")
        lines = buf.getvalue().splitlines()
        assert lines[0] == f"@prefix rt: <{RT}> ."
        assert lines[1] == f"@prefix tg: <{TG}> ."
        assert lines[2] == f"@prefix xsd: <{XSD}> ."
        assert lines[3] == ""
        assert lines[4] == f"<{S}> tg:implements rt:Trait ."

    def test_prefixes_written_once(self, emitter, buf):
        emitter.emit_literal(S, TG + "name", "S")
        emitter.emit_literal(S, TG + "fullName", "c::S")
        assert buf.getvalue().count("@prefix") == 3

    def test_compact_iri_longest_namespace_wins(self):
        emitter = TurtleEmitter(io.StringIO())
        emitter.add_prefix("base", "http://rust.example/")
        emitter.add_prefix("rt", RT)
        assert emitter.compact_iri(RT + "Crate") == "rt:Crate"

    def test_compact_iri_nested_namespaces(self):
        emitter = TurtleEmitter(io.StringIO())
        emitter.add_prefix("y", "http://x/y/")
        emitter.add_prefix("x", "http://x/")
        assert emitter.compact_iri("http://x/y/Foo") == "y:Foo"
        assert emitter.compact_iri("http://x/Bar_1") == "x:Bar_1"
        assert emitter.compact_iri("http://x/y/Foo.bar") == "<http://x/y/Foo.bar>"

    def test_compact_iri_falls_back_for_non_local_names(self, emitter):
        assert emitter.compact_iri(TG) == f"<{TG}>"
        assert emitter.compact_iri(TG + "a/b") == f"<{TG}a/b>"
        assert emitter.compact_iri("http://elsewhere/x") == "<http://elsewhere/x>"

    def test_typed_literal_datatype_compacted(self, emitter, buf):
        emitter.emit_bool(S, TG + "isAbstract", True)
        assert buf.getvalue().splitlines()[-1] == f'<{S}> tg:isAbstract "true"^^xsd:boolean .'
        assert emitter.triple_count == 1

    def test_no_prefixes_no_blank_line(self, buf):
        emitter = TurtleEmitter(buf)
        emitter.emit_iri("http://a/s", "http://a/p", "http://a/o")
        assert buf.getvalue() == "<http://a/s> <http://a/p> <http://a/o> .\n"


@pytest.mark.integration
class TestSerializedOutputParses:
    """Extraction output must be valid RDF for a standard parser."""

    def _extract(self, crate, fmt):
        buf = io.StringIO()
        emitter = create_emitter(fmt, buf)
        CrateExtractor(emitter, crate, ExtractionOptions()).extract()
        emitter.flush()
        return buf.getvalue(), emitter.triple_count

    def test_ntriples_parses(self, parsed_fixture_crate):
        text, count = self._extract(parsed_fixture_crate, "ntriples")
        graph = Graph().parse(data=text, format="nt")
        assert len(graph) > 0
        assert len(graph) <= count

    def test_turtle_parses_to_same_graph(self, parsed_fixture_crate):
        nt_text, _ = self._extract(parsed_fixture_crate, "nt")
        ttl_text, _ = self._extract(parsed_fixture_crate, "ttl")
        nt_graph = Graph().parse(data=nt_text, format="nt")
        ttl_graph = Graph().parse(data=ttl_text, format="turtle")
        assert set(nt_graph) == set(ttl_graph)

    def test_escaped_literals_round_trip(self):
        buf = io.StringIO()
        emitter = NTriplesEmitter(buf)
        value = 'line1\nline2\t"quoted" \\ \x02'
        emitter.emit_literal(S, TG + "name", value)
        graph = Graph().parse(data=buf.getvalue(), format="nt")
        assert graph.value(URIRef(S), URIRef(TG + "name")) == Literal(value)


@pytest.mark.unit
class TestGraphEmitter:

    def test_collects_triples(self):
        emitter = GraphEmitter()
        emitter.add_prefix("tg", TG)
        emitter.emit_iri(S, TG + "implements", "http://x/T")
        emitter.emit_literal(S, TG + "name", "S")
        emitter.emit_bool(S, TG + "isGeneric", True)
        emitter.emit_int(S, TG + "ordinal", 0)

        g = emitter.graph
        assert emitter.triple_count == 4
        assert len(g) == 4
        assert (URIRef(S), URIRef(TG + "name"), Literal("S")) in g
        assert g.value(URIRef(S), URIRef(TG + "isGeneric")) == Literal(True, datatype=XSD.boolean)
        assert "tg: <http://typegraph.example/ontology/>" in emitter.serialize("turtle")

    def test_duplicate_statements_collapse(self):
        emitter = GraphEmitter()
        emitter.emit_literal(S, TG + "name", "S")
        emitter.emit_literal(S, TG + "name", "S")
        assert emitter.triple_count == 2
        assert len(emitter.graph) == 1

    def test_matches_ntriples_output(self, parsed_fixture_crate):
        emitter = GraphEmitter()
        CrateExtractor(emitter, parsed_fixture_crate).extract()
        nt_graph = Graph().parse(data=extract_ntriples(parsed_fixture_crate), format="nt")
        assert set(emitter.graph) == set(nt_graph)


@pytest.mark.unit
class TestCreateEmitter:

    @pytest.mark.parametrize("name,cls", [
        ("ntriples", NTriplesEmitter),
        ("nt", NTriplesEmitter),
        ("NT", NTriplesEmitter),
        ("turtle", TurtleEmitter),
        ("ttl", TurtleEmitter),
        (" Turtle ", TurtleEmitter),
    ])
    def test_aliases(self, name, cls):
        assert isinstance(create_emitter(name, io.StringIO()), cls)

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unknown format"):
            create_emitter("rdfxml", io.StringIO())
