"""
Graph store variants and the factory that creates them.

Components:
- GraphStore: base class with the native-model capability accessor
- EphemeralStore: in-memory rdflib graph, optionally ontology-aware
- PersistentStore: rdflib graph on the Oxigraph on-disk store
- StoreFactory: creates either variant
"""

import logging
from pathlib import Path
from typing import Union

import owlrl
from rdflib import Graph
from rdflib.graph import DATASET_DEFAULT_GRAPH_ID

from .exceptions import BackendMismatchError, StorageError

logger = logging.getLogger(__name__)

# rdflib store plugin registered by the oxrdflib distribution
PERSISTENT_BACKEND = "Oxigraph"


class GraphStore:
    """
    A container of triples.

    Stores that can expose an rdflib Graph override ``as_native_model``.
    Every import, query, size and serialize operation goes through that
    accessor, so a store without the capability fails them all the same way.
    """

    @property
    def supports_native_model(self) -> bool:
        return False

    def as_native_model(self) -> Graph:
        """Return the rdflib Graph backing this store.

        Raises:
            BackendMismatchError: If the store has no native model.
        """
        raise BackendMismatchError(
            f"{type(self).__name__} does not expose a native graph model"
        )

    def query_model(self) -> Graph:
        """Return the graph that queries are evaluated against."""
        return self.as_native_model()

    def __len__(self) -> int:
        return len(self.as_native_model())


class EphemeralStore(GraphStore):
    """In-memory store; content is lost when the process ends."""

    def __init__(self, ontology_aware: bool = False):
        self._ontology_aware = bool(ontology_aware)
        self._graph = Graph()

    @property
    def ontology_aware(self) -> bool:
        """Whether queries see RDFS entailments of the asserted triples."""
        return self._ontology_aware

    @property
    def supports_native_model(self) -> bool:
        return True

    def as_native_model(self) -> Graph:
        return self._graph

    def query_model(self) -> Graph:
        if not self._ontology_aware:
            return self._graph

        # Entailments go into a copy so size() and serialization only
        # ever report asserted triples.
        inferred = Graph()
        for prefix, namespace in self._graph.namespaces():
            inferred.bind(prefix, namespace, override=False)
        inferred += self._graph
        owlrl.DeductiveClosure(
            owlrl.RDFS_Semantics,
            axiomatic_triples=False,
            datatype_axioms=False,
        ).expand(inferred)
        logger.debug(
            f"RDFS closure expanded {len(self._graph)} asserted triples to {len(inferred)}"
        )
        return inferred

    def __repr__(self) -> str:
        return f"EphemeralStore(ontology_aware={self._ontology_aware}, size={len(self._graph)})"


class PersistentStore(GraphStore):
    """Store whose content is kept in a directory and survives restarts."""

    def __init__(self, directory_path: Union[str, Path]):
        self._path = Path(directory_path)
        # A fixed graph name, so a reopened store sees the same triples.
        self._graph = Graph(store=PERSISTENT_BACKEND, identifier=DATASET_DEFAULT_GRAPH_ID)
        # The backend refuses create=True for a directory that already exists.
        create = not self._path.exists()
        try:
            self._graph.open(str(self._path), create=create)
        except (OSError, ValueError) as e:
            logger.error(f"Could not open triple store at {self._path}: {e}")
            raise StorageError(f"Could not open triple store at {self._path}: {e}") from e

    @property
    def path(self) -> Path:
        return self._path

    @property
    def supports_native_model(self) -> bool:
        return True

    def as_native_model(self) -> Graph:
        return self._graph

    def close(self) -> None:
        """Release the on-disk storage. The store is unusable afterwards."""
        self._graph.close()

    def __repr__(self) -> str:
        return f"PersistentStore(path='{self._path}')"


class StoreFactory:
    """Creates ephemeral and persistent graph stores."""

    @staticmethod
    def create_ephemeral_store(ontology_aware: bool = False) -> GraphStore:
        """
        Create an empty in-memory store.

        Args:
            ontology_aware: If True, queries on the store see RDFS entailments.

        Returns:
            A new, empty EphemeralStore.
        """
        store = EphemeralStore(ontology_aware=ontology_aware)
        logger.debug(f"Created {store!r}")
        return store

    @staticmethod
    def create_persistent_store(directory_path: Union[str, Path]) -> GraphStore:
        """
        Open, or create, a persistent store bound to a directory.

        Args:
            directory_path: Directory the storage engine keeps its files in.

        Returns:
            A PersistentStore bound to the directory.

        Raises:
            StorageError: If the backend cannot open or create the storage.
        """
        store = PersistentStore(directory_path)
        logger.info(f"Opened persistent triple store at {store.path} ({len(store)} triples)")
        return store
