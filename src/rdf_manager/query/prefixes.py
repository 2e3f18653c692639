"""
Prefix mappings taken from SPARQL queries, and compaction of IRIs with them.

Components:
- PrefixMapping: prefix to namespace table that shortens IRIs
- PrefixExtraction: outcome of a best-effort extraction
- ParsedQuery: a parsed SPARQL query together with its declared prefixes
- parse_query / extract_prefixes: parsing entry points
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, Mapping, Optional, Tuple

from pyparsing import ParseException
from rdflib.plugins.sparql.algebra import translateQuery
from rdflib.plugins.sparql.parser import parseQuery
from rdflib.plugins.sparql.sparql import Query

from ..exceptions import MalformedQueryError

logger = logging.getLogger(__name__)


class PrefixMapping(Mapping[str, str]):
    """
    Read-only mapping from short prefix to namespace IRI.

    Example:
        >>> mapping = PrefixMapping({"ex": "http://example.org/"})
        >>> mapping.compact("http://example.org/a")
        'ex:a'
    """

    def __init__(self, namespaces: Optional[Mapping[str, str]] = None):
        self._namespaces: Dict[str, str] = dict(namespaces or {})

    @classmethod
    def empty(cls) -> 'PrefixMapping':
        return cls()

    def __getitem__(self, prefix: str) -> str:
        return self._namespaces[prefix]

    def __iter__(self) -> Iterator[str]:
        return iter(self._namespaces)

    def __len__(self) -> int:
        return len(self._namespaces)

    def __repr__(self) -> str:
        return f"PrefixMapping({self._namespaces!r})"

    def split(self, iri: str) -> Optional[Tuple[str, str]]:
        """Return (prefix, local name) for the longest matching namespace."""
        best = None
        for prefix, namespace in self._namespaces.items():
            if namespace and iri.startswith(namespace):
                if best is None or len(namespace) > len(self._namespaces[best]):
                    best = prefix
        if best is None:
            return None
        return best, iri[len(self._namespaces[best]):]

    def compact(self, iri: str) -> str:
        """Shorten an IRI to ``prefix:local``; unmatched values are returned as-is."""
        parts = self.split(iri)
        if parts is None:
            return iri
        return f"{parts[0]}:{parts[1]}"


@dataclass(frozen=True)
class PrefixExtraction:
    """Result of a best-effort prefix extraction.

    Attributes:
        mapping: Prefixes declared by the query, empty when it did not parse
        parsed: Whether the query text parsed
        error: Parser diagnostic when it did not
    """
    mapping: PrefixMapping = field(default_factory=PrefixMapping.empty)
    parsed: bool = False
    error: Optional[str] = None


@dataclass(frozen=True)
class ParsedQuery:
    """A SPARQL query ready for evaluation, with the prefixes it declares."""
    text: str
    query: Query
    prefixes: PrefixMapping


def _declared_prefixes(parse_tree) -> PrefixMapping:
    namespaces = {}
    for decl in parse_tree[0]:
        if getattr(decl, "name", None) == "PrefixDecl":
            namespaces[decl.prefix or ""] = str(decl.iri)
    return PrefixMapping(namespaces)


def parse_query(query_text: str) -> ParsedQuery:
    """
    Parse and translate a SPARQL query.

    Raises:
        MalformedQueryError: If the text is not valid SPARQL, or uses a
            prefix it does not declare.
    """
    try:
        parse_tree = parseQuery(query_text)
    except ParseException as e:
        raise MalformedQueryError(f"Query is not correct: {e}") from e

    try:
        query = translateQuery(parse_tree)
    except Exception as e:
        # rdflib reports undeclared prefixes with a bare Exception
        raise MalformedQueryError(f"Query is not correct: {e}") from e

    return ParsedQuery(text=query_text, query=query, prefixes=_declared_prefixes(parse_tree))


def extract_prefixes(query_text: Optional[str]) -> PrefixExtraction:
    """
    Read the prefixes a query declares, if it parses.

    Never raises: a missing or unparsable query gives an empty mapping.
    """
    if query_text is None:
        return PrefixExtraction()

    try:
        parse_tree = parseQuery(query_text)
    except ParseException as e:
        logger.debug(f"Could not parse query for namespaces: {e}")
        return PrefixExtraction(error=str(e))

    return PrefixExtraction(mapping=_declared_prefixes(parse_tree), parsed=True)
