"""
SPARQL over HTTP.

Components:
- RemoteQueryExecution: one request to an endpoint, owning its HTTP session
- RemoteQueryExecutor: remote SELECT queries and parsing of result documents
"""

import io
import logging
from typing import Optional, Union

import requests
from rdflib.exceptions import ParserError
from rdflib.query import Result, ResultException

from ..config import ManagerConfig
from ..core.http_client import RequestHandler
from ..exceptions import MalformedInputError, QueryError
from .prefixes import ParsedQuery, extract_prefixes, parse_query
from .results import ResultTable, ResultTableConverter

logger = logging.getLogger(__name__)

# rdflib result parser names, by marker found in the response content type
RESULT_FORMATS = {
    "json": "json",
    "xml": "xml",
    "csv": "csv",
    "tab-separated-values": "tsv",
}


def _result_format_for(content_type: Optional[str]) -> str:
    content_type = (content_type or "").lower()
    for marker, result_format in RESULT_FORMATS.items():
        if marker in content_type:
            return result_format
    return "xml"


def _parse_result(data: bytes, result_format: str) -> Result:
    try:
        return Result.parse(io.BytesIO(data), format=result_format)
    # ElementTree and lxml both report broken XML as SyntaxError subclasses
    except (SyntaxError, ParserError, ResultException, ValueError, KeyError) as e:
        logger.error(f"Failed to parse SPARQL {result_format} results: {e}")
        raise MalformedInputError(f"Could not read SPARQL {result_format} results: {e}") from e


class RemoteQueryExecution:
    """
    A query sent to a SPARQL endpoint.

    The HTTP session is created on construction and closed on exit, so
    connections are released whether the request succeeds or fails.
    """

    def __init__(self, endpoint_url: str, parsed: ParsedQuery, config: ManagerConfig):
        self.endpoint_url = endpoint_url
        self.parsed = parsed
        self.config = config
        # The server is told the connect timeout; no client read timeout is set.
        self.params = {
            "query": parsed.text,
            "timeout": str(config.connect_timeout_ms),
        }
        self._session: Optional[requests.Session] = requests.Session()

    def exec_select(self) -> Result:
        if self._session is None:
            raise RuntimeError("Remote query execution is closed")

        handler = RequestHandler(self._session, timeout=(self.config.connect_timeout, None))
        headers = {"Accept": self.config.sparql_accept_header}
        with handler.execute(
            "GET", self.endpoint_url, "SPARQL query", headers=headers, params=self.params
        ) as response:
            result_format = _result_format_for(response.headers.get("Content-Type"))
            data = response.content

        result = _parse_result(data, result_format)
        if result.type != "SELECT":
            raise QueryError(f"Only SELECT queries can be shown as a table, got {result.type}")
        return result

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None
            logger.debug(f"Closed remote query execution for {self.endpoint_url}")

    def __enter__(self) -> 'RemoteQueryExecution':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class RemoteQueryExecutor:
    """Runs SELECT queries on SPARQL endpoints and reads result documents."""

    def __init__(self, config: Optional[ManagerConfig] = None):
        self.config = config or ManagerConfig()

    def query_remote(self, endpoint_url: str, query_text: str) -> ResultTable:
        """
        Execute a SELECT query on a remote endpoint.

        Args:
            endpoint_url: SPARQL endpoint URL
            query_text: SPARQL query

        Returns:
            One row per solution, one column per projected variable

        Raises:
            MalformedQueryError: If the query does not parse
            NetworkError: If the endpoint is unreachable or answers with an error
            MalformedInputError: If the response is not a SPARQL result document
        """
        parsed = parse_query(query_text)
        converter = ResultTableConverter(parsed.prefixes)

        with RemoteQueryExecution(endpoint_url, parsed, self.config) as execution:
            table = converter.convert(execution.exec_select())

        logger.info(f"Remote query on {endpoint_url} returned {table.row_count} rows")
        return table

    def parse_result_document(
        self,
        data: Union[bytes, str],
        original_query: Optional[str] = None,
        result_format: str = "xml",
    ) -> ResultTable:
        """
        Tabulate a serialized SPARQL result document.

        Args:
            data: The document, SPARQL XML unless result_format says otherwise
            original_query: Query that produced the document; its prefixes
                are used for compaction when it parses
            result_format: rdflib result parser name (xml, json, csv, tsv)

        Raises:
            MalformedInputError: If the document cannot be read
            QueryError: If the document holds no SELECT results
        """
        if isinstance(data, str):
            data = data.encode("utf-8")

        extraction = extract_prefixes(original_query)
        if original_query is not None and not extraction.parsed:
            logger.warning(f"Could not read namespaces from the original query: {extraction.error}")

        result = _parse_result(data, result_format)
        if result.type != "SELECT":
            raise QueryError(f"Only SELECT results can be shown as a table, got {result.type}")
        return ResultTableConverter(extraction.mapping).convert(result)
