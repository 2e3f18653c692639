"""Triple store management: stores, RDF import/export and SPARQL queries."""

__version__ = "1.0.0"

from .config import ManagerConfig, load_config, setup_logging
from .exceptions import (
    BackendMismatchError,
    MalformedInputError,
    MalformedQueryError,
    NetworkError,
    QueryError,
    RDFManagerError,
    SerializationError,
    StorageError,
    UnsupportedFormatError,
)
from .formats import FormatImporter, Serializer
from .manager import RDFManager
from .query import (
    LocalQueryExecutor,
    PrefixMapping,
    RemoteQueryExecutor,
    ResultTable,
    ResultTableConverter,
)
from .stores import EphemeralStore, GraphStore, PersistentStore, StoreFactory

__all__ = [
    # Entry point
    "RDFManager",
    # Stores
    "GraphStore",
    "EphemeralStore",
    "PersistentStore",
    "StoreFactory",
    # Import / export
    "FormatImporter",
    "Serializer",
    # Queries
    "LocalQueryExecutor",
    "RemoteQueryExecutor",
    "PrefixMapping",
    "ResultTable",
    "ResultTableConverter",
    # Configuration
    "ManagerConfig",
    "load_config",
    "setup_logging",
    # Errors
    "RDFManagerError",
    "MalformedInputError",
    "MalformedQueryError",
    "UnsupportedFormatError",
    "NetworkError",
    "SerializationError",
    "QueryError",
    "StorageError",
    "BackendMismatchError",
]
