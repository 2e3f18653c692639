"""
Pytest configuration and fixtures for the test suite.

Defines markers for selective test execution:
    pytest -m unit          # Fast unit tests
    pytest -m integration   # Tests touching disk-backed stores
    pytest -m slow          # Tests that take >1s
"""

import io
import os
import sys

import pytest
import requests

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from rdf_manager import ManagerConfig, RDFManager, StoreFactory


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "integration: Tests touching disk-backed stores")
    config.addinivalue_line("markers", "slow: Tests that take more than 1 second")


MINIMAL_TURTLE = "@prefix ex: <http://example.org/> . ex:a ex:b ex:c ."

MINIMAL_N3 = "@prefix ex: <http://example.org/> . ex:a ex:b ex:c ."

MINIMAL_NTRIPLES = "<http://example.org/a> <http://example.org/b> <http://example.org/c> .\n"

MINIMAL_RDFXML = """<?xml version="1.0"?>
<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"
         xmlns:ex="http://example.org/">
  <rdf:Description rdf:about="http://example.org/a">
    <ex:b rdf:resource="http://example.org/c"/>
  </rdf:Description>
</rdf:RDF>
"""

PEOPLE_TURTLE = """
@prefix ex: <http://example.org/> .
@prefix foaf: <http://xmlns.com/foaf/0.1/> .
@prefix xsd: <http://www.w3.org/2001/XMLSchema#> .

ex:alice a foaf:Person ;
    foaf:name "Alice" ;
    foaf:nick "Ali"@en ;
    foaf:age "42"^^xsd:integer ;
    foaf:knows ex:bob .

ex:bob a foaf:Person ;
    foaf:name "Bob" .

ex:carol a foaf:Person ;
    foaf:name "Carol" ;
    foaf:knows [ foaf:name "Dave" ] .
"""


@pytest.fixture
def manager(tmp_path):
    """Manager whose workspace root is a temporary directory."""
    return RDFManager(str(tmp_path))


@pytest.fixture
def store():
    """Empty in-memory store."""
    return StoreFactory.create_ephemeral_store()


@pytest.fixture
def people_store(manager, store):
    """In-memory store holding a small FOAF graph."""
    return manager.import_from_string(store, PEOPLE_TURTLE, "TURTLE")


@pytest.fixture
def config():
    return ManagerConfig()


def make_response(body, status_code=200, content_type="application/rdf+xml", url="http://example.org/"):
    """Build a requests Response without touching the network."""
    if isinstance(body, str):
        body = body.encode("utf-8")
    response = requests.Response()
    response.status_code = status_code
    response.reason = "OK" if status_code < 400 else "Error"
    response.url = url
    response.headers["Content-Type"] = content_type
    response._content = body
    response.raw = io.BytesIO(body)
    return response
