"""
Tests for prefix mappings, IRI compaction and query parsing.
"""

import pytest

from rdf_manager import MalformedInputError, MalformedQueryError, PrefixMapping
from rdf_manager.query.prefixes import extract_prefixes, parse_query


class TestPrefixMapping:

    def test_compact_known_namespace(self):
        mapping = PrefixMapping({"ex": "http://example.org/"})
        assert mapping.compact("http://example.org/thing") == "ex:thing"

    def test_unknown_namespace_is_unchanged(self):
        mapping = PrefixMapping({"ex": "http://example.org/"})
        assert mapping.compact("http://other.org/thing") == "http://other.org/thing"

    def test_empty_mapping(self):
        assert PrefixMapping.empty().compact("http://example.org/a") == "http://example.org/a"
        assert len(PrefixMapping.empty()) == 0

    def test_longest_namespace_wins(self):
        mapping = PrefixMapping({
            "ex": "http://example.org/",
            "exv": "http://example.org/vocab#",
        })
        assert mapping.compact("http://example.org/vocab#term") == "exv:term"
        assert mapping.compact("http://example.org/other") == "ex:other"

    def test_default_prefix(self):
        mapping = PrefixMapping({"": "http://example.org/"})
        assert mapping.compact("http://example.org/a") == ":a"

    @pytest.mark.parametrize("iri", [
        "http://example.org/a",
        "http://example.org/vocab#term",
        "http://other.org/x",
        "urn:isbn:123",
    ])
    def test_compaction_is_idempotent(self, iri):
        mapping = PrefixMapping({
            "ex": "http://example.org/",
            "exv": "http://example.org/vocab#",
        })
        once = mapping.compact(iri)
        assert mapping.compact(once) == once

    def test_split(self):
        mapping = PrefixMapping({"ex": "http://example.org/"})
        assert mapping.split("http://example.org/a") == ("ex", "a")
        assert mapping.split("http://other.org/a") is None

    def test_is_a_read_only_mapping(self):
        mapping = PrefixMapping({"ex": "http://example.org/"})
        assert dict(mapping) == {"ex": "http://example.org/"}
        assert "ex" in mapping
        with pytest.raises(TypeError):
            mapping["ex"] = "http://other.org/"


class TestParseQuery:

    def test_declared_prefixes_in_order(self):
        parsed = parse_query(
            "PREFIX ex: <http://example.org/>\n"
            "PREFIX foaf: <http://xmlns.com/foaf/0.1/>\n"
            "SELECT ?s WHERE { ?s a foaf:Person }"
        )
        assert list(parsed.prefixes.items()) == [
            ("ex", "http://example.org/"),
            ("foaf", "http://xmlns.com/foaf/0.1/"),
        ]

    def test_no_prefixes(self):
        parsed = parse_query("SELECT * WHERE { ?s ?p ?o }")
        assert len(parsed.prefixes) == 0
        assert parsed.text == "SELECT * WHERE { ?s ?p ?o }"

    def test_default_prefix_declaration(self):
        parsed = parse_query("PREFIX : <http://example.org/> SELECT ?s WHERE { ?s :p ?o }")
        assert parsed.prefixes[""] == "http://example.org/"

    def test_syntax_error(self):
        with pytest.raises(MalformedQueryError, match="Query is not correct"):
            parse_query("SELEKT * WHERE { ?s ?p ?o }")

    def test_undeclared_prefix(self):
        with pytest.raises(MalformedQueryError):
            parse_query("SELECT ?s WHERE { ?s ex:p ?o }")

    def test_query_errors_are_input_errors(self):
        with pytest.raises(MalformedInputError):
            parse_query("not sparql")


class TestExtractPrefixes:

    def test_parsed_query(self):
        extraction = extract_prefixes("PREFIX ex: <http://example.org/> SELECT ?s WHERE { ?s ?p ?o }")
        assert extraction.parsed is True
        assert dict(extraction.mapping) == {"ex": "http://example.org/"}
        assert extraction.error is None

    def test_unparsable_query_gives_empty_mapping(self):
        extraction = extract_prefixes("this is { not sparql")
        assert extraction.parsed is False
        assert len(extraction.mapping) == 0
        assert extraction.error

    def test_missing_query_gives_empty_mapping(self):
        extraction = extract_prefixes(None)
        assert extraction.parsed is False
        assert len(extraction.mapping) == 0
        assert extraction.error is None
