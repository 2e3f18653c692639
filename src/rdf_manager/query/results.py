"""
Tabular query results.

Components:
- ResultTable: string table with named columns, one row per solution
- ResultTableConverter: turns rdflib SELECT results into a ResultTable
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence

from rdflib import BNode, Literal, URIRef, XSD
from rdflib.query import Result
from rdflib.term import Identifier, Variable

from .prefixes import PrefixMapping

logger = logging.getLogger(__name__)


@dataclass
class ResultTable:
    """Query solutions as rows of strings aligned to a column header."""
    columns: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.columns)

    def get(self, row: int, column: str) -> str:
        """Return the cell of a row (0-based) in the named column."""
        return self.rows[row][self.columns.index(column)]

    def column(self, name: str) -> List[str]:
        """Return all cells of the named column, in row order."""
        index = self.columns.index(name)
        return [row[index] for row in self.rows]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "columns": list(self.columns),
            "rows": [list(row) for row in self.rows],
        }

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[List[str]]:
        return iter(self.rows)


class ResultTableConverter:
    """
    Converts query solutions into a ResultTable.

    IRIs are compacted with the prefix mapping of the query; blank nodes,
    literals and unbound variables are rendered as plain text.
    """

    def __init__(self, prefixes: Optional[PrefixMapping] = None):
        self.prefixes = prefixes if prefixes is not None else PrefixMapping.empty()

    def render(self, term: Optional[Identifier]) -> str:
        """Render one bound value as a cell."""
        if term is None:
            return ""
        if isinstance(term, URIRef):
            return self.prefixes.compact(str(term))
        if isinstance(term, BNode):
            return f"_:{term}"
        if isinstance(term, Literal):
            if term.language:
                return f"{term}@{term.language}"
            if term.datatype is not None and term.datatype != XSD.string:
                return f"{term}^^{term.datatype}"
            return str(term)
        return str(term)

    def convert(self, result: Result) -> ResultTable:
        """
        Convert a SELECT result.

        Args:
            result: rdflib SELECT result, from a graph or a parsed document

        Returns:
            Table whose columns are the result variables, in result order
        """
        variables: Sequence[Variable] = result.vars or []
        table = ResultTable(columns=[str(var) for var in variables])
        for binding in result.bindings:
            table.rows.append([self.render(binding.get(var)) for var in variables])

        logger.debug(f"Converted {table.row_count} solutions over {table.column_count} variables")
        return table
