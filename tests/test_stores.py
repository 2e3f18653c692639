"""
Tests for store creation and the native-model capability.
"""

import pytest
from rdflib import Graph

from rdf_manager import (
    BackendMismatchError,
    EphemeralStore,
    FormatImporter,
    GraphStore,
    PersistentStore,
    StorageError,
    StoreFactory,
)
from conftest import MINIMAL_TURTLE


class TestEphemeralStore:

    def test_created_empty(self):
        store = StoreFactory.create_ephemeral_store()
        assert isinstance(store, EphemeralStore)
        assert len(store) == 0
        assert store.ontology_aware is False

    def test_ontology_flag_is_read_only(self):
        store = StoreFactory.create_ephemeral_store(ontology_aware=True)
        assert store.ontology_aware is True
        with pytest.raises(AttributeError):
            store.ontology_aware = False

    def test_native_model(self):
        store = StoreFactory.create_ephemeral_store()
        assert store.supports_native_model
        assert isinstance(store.as_native_model(), Graph)
        assert store.query_model() is store.as_native_model()

    def test_stores_are_independent(self):
        first = StoreFactory.create_ephemeral_store()
        second = StoreFactory.create_ephemeral_store()
        FormatImporter().import_from_string(first, MINIMAL_TURTLE, "TURTLE")
        assert len(first) == 1
        assert len(second) == 0

    def test_ontology_query_model_is_a_copy(self):
        store = StoreFactory.create_ephemeral_store(ontology_aware=True)
        FormatImporter().import_from_string(store, MINIMAL_TURTLE, "TURTLE")
        assert store.query_model() is not store.as_native_model()
        assert len(store) == 1


class TestGraphStoreBase:

    def test_base_store_has_no_native_model(self):
        store = GraphStore()
        assert store.supports_native_model is False
        with pytest.raises(BackendMismatchError, match="GraphStore does not expose"):
            store.as_native_model()
        with pytest.raises(BackendMismatchError):
            store.query_model()


@pytest.mark.integration
class TestPersistentStore:

    def test_content_survives_reopen(self, tmp_path):
        directory = tmp_path / "tdb"

        store = StoreFactory.create_persistent_store(str(directory))
        assert isinstance(store, PersistentStore)
        assert store.path == directory
        FormatImporter().import_from_string(store, MINIMAL_TURTLE, "TURTLE")
        assert len(store) == 1
        store.close()

        reopened = StoreFactory.create_persistent_store(directory)
        try:
            assert len(reopened) == 1
        finally:
            reopened.close()

    def test_reopen_twice(self, tmp_path):
        directory = tmp_path / "tdb"
        for expected in (1, 2):
            store = StoreFactory.create_persistent_store(directory)
            try:
                FormatImporter().import_from_string(
                    store,
                    f"<http://example.org/s{expected}> <http://example.org/p> <http://example.org/o> .\n",
                    "N-TRIPLE",
                )
                assert len(store) == expected
            finally:
                store.close()

    def test_existing_empty_directory(self, tmp_path):
        directory = tmp_path / "empty"
        directory.mkdir()

        store = StoreFactory.create_persistent_store(directory)
        try:
            assert len(store) == 0
        finally:
            store.close()

    def test_n3_import(self, tmp_path):
        store = StoreFactory.create_persistent_store(tmp_path / "tdb")
        try:
            FormatImporter().import_from_string(
                store, "@prefix ex: <http://example.org/> . ex:a ex:b ex:c .", "N3"
            )
            assert len(store) == 1
        finally:
            store.close()

    def test_path_is_a_file(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        with pytest.raises(StorageError):
            StoreFactory.create_persistent_store(blocker)

    def test_native_model(self, tmp_path):
        store = StoreFactory.create_persistent_store(tmp_path / "tdb")
        try:
            assert store.supports_native_model
            assert isinstance(store.as_native_model(), Graph)
        finally:
            store.close()

    def test_unusable_location(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        with pytest.raises(StorageError) as excinfo:
            StoreFactory.create_persistent_store(blocker / "tdb")
        assert isinstance(excinfo.value, IOError)
