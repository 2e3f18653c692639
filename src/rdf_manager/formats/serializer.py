"""Renders a store's content back into text."""

import logging

from ..config import EXPORT_FORMATS
from ..exceptions import BackendMismatchError, SerializationError, UnsupportedFormatError
from ..stores import GraphStore

logger = logging.getLogger(__name__)


class Serializer:
    """Serializes native-model stores to N3 or Turtle."""

    RDFLIB_FORMATS = {
        "N3": "n3",
        "TURTLE": "turtle",
    }

    def serialize(self, store: GraphStore, rdf_format: str) -> str:
        """
        Render the full content of a store.

        Args:
            store: Store to render, must expose a native model
            rdf_format: "N3" or "TURTLE"

        Returns:
            The serialized document

        Raises:
            BackendMismatchError: If the store has no native model
            UnsupportedFormatError: If the format is not an export format
            SerializationError: If writing the document fails
        """
        if not store.supports_native_model:
            raise BackendMismatchError("Only supporting native-model stores!")
        if rdf_format not in self.RDFLIB_FORMATS:
            raise UnsupportedFormatError(rdf_format, EXPORT_FORMATS)

        graph = store.as_native_model()
        try:
            text = graph.serialize(format=self.RDFLIB_FORMATS[rdf_format], encoding="utf-8")
            result = text.decode("utf-8")
        except (OSError, UnicodeError) as e:
            logger.error(f"Failed to serialize store as {rdf_format}: {e}")
            raise SerializationError("Error while writing RDF.") from e

        logger.info(f"Serialized {len(graph)} triples as {rdf_format}")
        return result

    def as_turtle(self, store: GraphStore) -> str:
        return self.serialize(store, "TURTLE")

    def as_n3(self, store: GraphStore) -> str:
        return self.serialize(store, "N3")
