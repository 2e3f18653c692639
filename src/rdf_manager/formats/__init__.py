"""
RDF serialization support.

- importer: FormatImporter reads RDF/XML, N-Triples, Turtle and N3 into stores
- serializer: Serializer writes stores as N3 or Turtle
"""

from .importer import FormatImporter
from .serializer import Serializer

__all__ = ['FormatImporter', 'Serializer']
