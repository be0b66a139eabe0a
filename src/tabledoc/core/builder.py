"""Row to document conversion.

A document starts from the row's own cells keyed by column name. Each relation
leaving the row's table then adds one key: a nested document (or null) for
single relations, a list of nested documents for array relations. Nested
documents are built the same way from the matched child rows.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from tabledoc.exceptions import CycleDetectedError, NullInputError
from tabledoc.models import Cardinality, Relation, Row

if TYPE_CHECKING:
    from tabledoc.core.registry import RelationRegistry


logger = logging.getLogger(__name__)

Document = Dict[str, Any]


def _unique_key(document: Document, key: str, suffix: int) -> str:
    """Return ``key``, or ``key_col<suffix>`` when ``key`` is already taken."""
    if key not in document:
        return key

    candidate = f"{key}_col{suffix}"
    # the suffixed name can itself be a real column name
    while candidate in document:
        candidate = f"{candidate}_col{len(document) + 1}"
    return candidate


class DocumentBuilder:
    """Builds nested documents for rows using a registry's relations."""

    def __init__(self, registry: "RelationRegistry", max_depth: Optional[int] = None):
        self.registry = registry
        self.max_depth = max_depth

    def build(self, row: Row) -> Document:
        """Build the document for ``row`` and, recursively, its related rows."""
        if row is None:
            raise NullInputError("Row cannot be None")
        return self._build(row, 0)

    def _build(self, row: Row, depth: int) -> Document:
        if self.max_depth is not None and depth > self.max_depth:
            raise CycleDetectedError(
                f"Document nesting exceeded {self.max_depth} levels at table "
                f"'{row.table.name}'"
            )

        document: Document = {}

        for column in row.table.columns:
            key = _unique_key(document, column.name, column.ordinal)
            document[key] = row[column]

        for relation in self.registry.relations_from(row.table):
            value = self._embed(relation, row, depth)
            key = _unique_key(document, relation.output_key, len(document) + 1)
            document[key] = value

        return document

    def _embed(self, relation: Relation, row: Row, depth: int) -> Any:
        matches = relation.get_relational_rows(row)
        logger.debug(
            f"'{relation.output_key}': {len(matches)} row(s) of "
            f"'{relation.child_table.name}' matched"
        )

        if relation.cardinality == Cardinality.SINGLE:
            if not matches:
                return None
            return self._build(matches[0], depth + 1)

        children: List[Document] = [self._build(m, depth + 1) for m in matches]
        return children
