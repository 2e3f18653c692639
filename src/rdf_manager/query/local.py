"""
SPARQL evaluation against in-process stores.

Components:
- QueryExecution: scoped evaluation handle, closed on every exit path
- LocalQueryExecutor: query and size operations on a GraphStore
"""

import logging
from typing import Optional

from rdflib import Graph
from rdflib.query import Result

from ..exceptions import BackendMismatchError, QueryError
from ..stores import GraphStore
from .prefixes import ParsedQuery, parse_query
from .results import ResultTable, ResultTableConverter

logger = logging.getLogger(__name__)

NATIVE_MODEL_REQUIRED = "Can only handle native-model stores for now."


class QueryExecution:
    """
    Evaluation of one parsed query over one graph.

    Use it as a context manager; results must be consumed before it closes.

    Example:
        >>> with QueryExecution(parsed, graph) as execution:
        ...     table = converter.convert(execution.exec_select())
    """

    def __init__(self, parsed: ParsedQuery, graph: Graph):
        self.parsed = parsed
        self._graph: Optional[Graph] = graph
        self._result: Optional[Result] = None

    @property
    def closed(self) -> bool:
        return self._graph is None

    def exec_select(self) -> Result:
        """Evaluate the query; only SELECT queries are accepted."""
        if self._graph is None:
            raise RuntimeError("Query execution is closed")
        result = self._graph.query(self.parsed.query)
        if result.type != "SELECT":
            raise QueryError(f"Only SELECT queries can be shown as a table, got {result.type}")
        self._result = result
        return result

    def close(self) -> None:
        self._result = None
        self._graph = None
        logger.debug("Closed local query execution")

    def __enter__(self) -> 'QueryExecution':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class LocalQueryExecutor:
    """Runs SPARQL SELECT queries against native-model stores."""

    def query(self, store: GraphStore, query_text: str) -> ResultTable:
        """
        Execute a SELECT query and tabulate its solutions.

        Args:
            store: Store to query, must expose a native model
            query_text: SPARQL query

        Returns:
            One row per solution, one column per projected variable

        Raises:
            BackendMismatchError: If the store has no native model
            MalformedQueryError: If the query does not parse
            QueryError: If the query is not a SELECT query
        """
        if not store.supports_native_model:
            raise BackendMismatchError(NATIVE_MODEL_REQUIRED)

        parsed = parse_query(query_text)
        converter = ResultTableConverter(parsed.prefixes)

        with QueryExecution(parsed, store.query_model()) as execution:
            table = converter.convert(execution.exec_select())

        logger.info(f"Query returned {table.row_count} rows")
        return table

    def size(self, store: GraphStore) -> int:
        """Return the number of triples in a native-model store."""
        if not store.supports_native_model:
            raise BackendMismatchError(NATIVE_MODEL_REQUIRED)
        return len(store.as_native_model())
