"""
RDF manager entry point.

RDFManager ties the store factory, importer, executors and serializer
together behind one object bound to a workspace root and a configuration.

Usage:
    from rdf_manager import RDFManager

    manager = RDFManager("/path/to/workspace")
    store = manager.create_in_memory_store()
    manager.import_from_string(store, "@prefix ex: <http://example.org/> . ex:a ex:b ex:c .", "TURTLE")
    table = manager.sparql(store, "SELECT * WHERE { ?s ?p ?o }")
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import BinaryIO, Dict, Optional, TextIO, Union

from .config import ManagerConfig
from .formats.importer import FormatImporter
from .formats.serializer import Serializer
from .query.local import LocalQueryExecutor
from .query.remote import RemoteQueryExecutor
from .query.results import ResultTable
from .stores import GraphStore, StoreFactory

logger = logging.getLogger(__name__)


class RDFManager:
    """
    Creates, fills, queries and exports RDF stores.

    Args:
        workspace_root: Directory that ``import_file`` paths are resolved
            against; overrides ``config.workspace_root`` when given
        config: Timeouts and headers, defaults when None
    """

    def __init__(
        self,
        workspace_root: Optional[str] = None,
        config: Optional[ManagerConfig] = None,
    ):
        config = config or ManagerConfig()
        if workspace_root is not None:
            config = replace(config, workspace_root=workspace_root)
        self.config = config
        self.importer = FormatImporter(config)
        self.local = LocalQueryExecutor()
        self.remote = RemoteQueryExecutor(config)
        self.serializer = Serializer()
        logger.debug(f"RDF manager ready (workspace root: {config.workspace_root!r})")

    @property
    def workspace_root(self) -> str:
        return self.config.workspace_root

    # Stores

    def create_in_memory_store(self, ontology_model: bool = False) -> GraphStore:
        return StoreFactory.create_ephemeral_store(ontology_aware=ontology_model)

    def create_store(self, triple_store_directory_path: Union[str, Path]) -> GraphStore:
        return StoreFactory.create_persistent_store(triple_store_directory_path)

    # Imports

    def import_from_stream(
        self,
        store: GraphStore,
        stream: Union[BinaryIO, TextIO],
        rdf_format: Optional[str] = None,
    ) -> GraphStore:
        return self.importer.import_from_stream(store, stream, rdf_format)

    def import_from_string(
        self,
        store: GraphStore,
        content: str,
        rdf_format: Optional[str] = None,
    ) -> GraphStore:
        return self.importer.import_from_string(store, content, rdf_format)

    def import_file(
        self,
        store: GraphStore,
        rdf_file: str,
        rdf_format: Optional[str] = None,
    ) -> GraphStore:
        return self.importer.import_from_file(store, rdf_file, rdf_format)

    def import_url(
        self,
        store: GraphStore,
        url: str,
        extra_headers: Optional[Dict[str, str]] = None,
    ) -> GraphStore:
        return self.importer.import_from_url(store, url, extra_headers)

    # Queries

    def sparql(self, store: GraphStore, query: str) -> ResultTable:
        return self.local.query(store, query)

    def sparql_remote(self, service_url: str, query: str) -> ResultTable:
        return self.remote.query_remote(service_url, query)

    def process_sparql_xml(
        self,
        query_results: Union[bytes, str],
        original_query: Optional[str] = None,
    ) -> ResultTable:
        return self.remote.parse_result_document(query_results, original_query)

    def size(self, store: GraphStore) -> int:
        return self.local.size(store)

    # Export

    def serialize(self, store: GraphStore, rdf_format: str) -> str:
        return self.serializer.serialize(store, rdf_format)

    def as_turtle(self, store: GraphStore) -> str:
        return self.serializer.as_turtle(store)

    def as_rdf_n3(self, store: GraphStore) -> str:
        return self.serializer.as_n3(store)
