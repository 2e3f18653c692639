"""
RDF Import Module

This module reads RDF serializations into graph stores and translates
parser failures into the manager's error types.

Components:
- FormatImporter: stream, string, workspace file and URL imports
"""

import io
import logging
from pathlib import Path
from typing import BinaryIO, Dict, Optional, TextIO, Union
from xml.sax import SAXParseException

import requests
from rdflib import Graph, URIRef
from rdflib.exceptions import ParserError
from rdflib.plugins.parsers.notation3 import BadSyntax

from ..config import IMPORT_FORMATS, ManagerConfig
from ..core.http_client import RequestHandler
from ..exceptions import (
    BackendMismatchError,
    MalformedInputError,
    UnsupportedFormatError,
)
from ..stores import GraphStore

logger = logging.getLogger(__name__)

# Failures the rdflib parsers raise for content that does not match its format
PARSE_ERRORS = (BadSyntax, ParserError, SAXParseException, UnicodeDecodeError)

# The notation3 parsers also fail with bare IndexError on truncated input
# and AssertionError on unterminated literals
NOTATION3_PARSERS = ("turtle", "n3")
NOTATION3_ERRORS = (IndexError, AssertionError)

# Characters never allowed in an IRI reference
INVALID_IRI_CHARS = frozenset('<>" {}|\\^`')


def _find_invalid_iri(graph: Graph) -> Optional[str]:
    for triple in graph:
        for term in triple:
            if isinstance(term, URIRef) and not INVALID_IRI_CHARS.isdisjoint(term):
                return str(term)
    return None


class FormatImporter:
    """
    Imports RDF content into graph stores.

    Supported serializations are named the way users know them and mapped
    onto rdflib parser plugins.
    """

    RDFLIB_FORMATS = {
        "RDF/XML": "xml",
        "N-TRIPLE": "nt",
        "TURTLE": "turtle",
        "N3": "n3",
    }

    def __init__(self, config: Optional[ManagerConfig] = None):
        self.config = config or ManagerConfig()

    def resolve_format(self, rdf_format: Optional[str]) -> str:
        """Map a serialization name onto the rdflib parser name.

        Raises:
            UnsupportedFormatError: If the name is not a supported import format.
        """
        name = rdf_format if rdf_format is not None else self.config.default_import_format
        try:
            return self.RDFLIB_FORMATS[name]
        except KeyError:
            raise UnsupportedFormatError(name, IMPORT_FORMATS) from None

    def import_from_stream(
        self,
        store: GraphStore,
        stream: Union[BinaryIO, TextIO],
        rdf_format: Optional[str] = None,
    ) -> GraphStore:
        """
        Parse a stream into the store.

        Triples parsed before a failure may stay in the store.

        Args:
            store: Target store, must expose a native model
            stream: Binary or text stream holding the serialization
            rdf_format: Serialization name, RDF/XML when None

        Returns:
            The same store, for chaining

        Raises:
            BackendMismatchError: If the store has no native model
            UnsupportedFormatError: If the format name is unknown
            MalformedInputError: If the content does not parse
        """
        if not store.supports_native_model:
            raise BackendMismatchError("Can only handle native-model stores for now.")

        format_name = self.resolve_format(rdf_format)
        label = rdf_format or self.config.default_import_format
        graph = store.as_native_model()

        # Parsed into memory first: the in-memory store is formula-aware, so
        # N3 reads into any backend, and IRIs are checked before commit.
        parsed = Graph()
        logger.info(f"Parsing RDF content ({label})...")
        try:
            if isinstance(stream, io.TextIOBase):
                parsed.parse(data=stream.read(), format=format_name)
            else:
                parsed.parse(source=stream, format=format_name)
        except PARSE_ERRORS as e:
            logger.error(f"Failed to parse RDF content: {e}")
            self._commit(graph, parsed)
            raise self._malformed(format_name, e, structural=isinstance(e, BadSyntax)) from e
        except NOTATION3_ERRORS as e:
            if format_name not in NOTATION3_PARSERS:
                raise
            logger.error(f"Failed to parse RDF content: {e!r}")
            self._commit(graph, parsed)
            raise self._malformed(format_name, e) from e

        invalid = _find_invalid_iri(parsed)
        if invalid is not None:
            logger.error(f"Rejected RDF content with invalid IRI <{invalid}>")
            raise self._malformed(format_name, f"Invalid IRI <{invalid}>")

        before = len(graph)
        self._commit(graph, parsed)
        logger.info(f"Successfully parsed {len(graph) - before} triples ({len(graph)} in store)")
        return store

    @staticmethod
    def _commit(graph: Graph, parsed: Graph) -> None:
        for prefix, namespace in parsed.namespaces():
            graph.bind(prefix, namespace, override=False)
        graph += parsed

    @staticmethod
    def _malformed(format_name: str, error, structural: bool = True) -> MalformedInputError:
        if structural and format_name == "turtle":
            detail = str(error) or type(error).__name__
            return MalformedInputError(f"Error while parsing file: {detail}")
        return MalformedInputError("File format is not correct.")

    def import_from_string(
        self,
        store: GraphStore,
        content: str,
        rdf_format: Optional[str] = None,
    ) -> GraphStore:
        """Import RDF held in a string."""
        return self.import_from_stream(store, io.BytesIO(content.encode("utf-8")), rdf_format)

    def import_from_file(
        self,
        store: GraphStore,
        relative_path: str,
        rdf_format: Optional[str] = None,
    ) -> GraphStore:
        """
        Import an RDF file that lives under the workspace root.

        Args:
            store: Target store
            relative_path: Path relative to the workspace root; a leading
                separator is allowed
            rdf_format: Serialization name, RDF/XML when None

        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        path = Path(self.config.workspace_root) / relative_path.lstrip("/\\")
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")

        logger.info(f"Importing {path}")
        with open(path, "rb") as stream:
            return self.import_from_stream(store, stream, rdf_format)

    def import_from_url(
        self,
        store: GraphStore,
        url: str,
        extra_headers: Optional[Dict[str, str]] = None,
    ) -> GraphStore:
        """
        Download RDF/XML from a URL into the store.

        Args:
            store: Target store
            url: Document URL
            extra_headers: Headers added after the Accept header; a caller
                value replaces the default for the same header

        Raises:
            NetworkError: If the host is unknown, unresponsive or answers
                with an error status
            MalformedInputError: If the body is not valid RDF/XML
        """
        headers = {"Accept": self.config.rdf_accept_header}
        if extra_headers:
            headers.update(extra_headers)

        timeout = (self.config.connect_timeout, self.config.read_timeout)
        with requests.Session() as session:
            handler = RequestHandler(session, timeout=timeout)
            with handler.execute("GET", url, "Import RDF", headers=headers) as response:
                body = response.content

        logger.info(f"Downloaded {len(body)} bytes from {url}")
        return self.import_from_stream(store, io.BytesIO(body), None)
