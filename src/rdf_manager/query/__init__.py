"""
SPARQL query execution and result shaping.

- prefixes: prefix mappings declared by queries, IRI compaction
- results: ResultTable and the converter from rdflib results
- local: queries against in-process stores
- remote: queries against SPARQL endpoints and result documents
"""

from .local import LocalQueryExecutor, QueryExecution
from .prefixes import PrefixExtraction, PrefixMapping, extract_prefixes, parse_query
from .remote import RemoteQueryExecution, RemoteQueryExecutor
from .results import ResultTable, ResultTableConverter

__all__ = [
    'LocalQueryExecutor',
    'QueryExecution',
    'RemoteQueryExecutor',
    'RemoteQueryExecution',
    'PrefixMapping',
    'PrefixExtraction',
    'extract_prefixes',
    'parse_query',
    'ResultTable',
    'ResultTableConverter',
]
