"""Relation registry for tabledoc."""

import logging
from typing import List, Literal, Optional, Tuple

from tabledoc.core.builder import Document, DocumentBuilder
from tabledoc.exceptions import (
    CycleDetectedError,
    InvalidReferenceError,
    NullInputError,
)
from tabledoc.models import Relation, Table


logger = logging.getLogger(__name__)

# "full" rejects any relation closing a cycle, "reverse" only rejects the
# exact reverse of a registered relation.
CycleCheck = Literal["full", "reverse"]


class RelationRegistry:
    """Holds the participating tables and the relations between them.

    Every relation's endpoints are registered tables: relations can only be
    added between registered tables, and removing a table removes the relations
    touching it.
    """

    def __init__(self, cycle_check: CycleCheck = "full", max_depth: Optional[int] = None):
        """Initialize an empty registry.

        Args:
            cycle_check: "full" to reject every relation closing a cycle, "reverse"
                to only reject the exact reverse of a registered relation
            max_depth: Optional nesting limit enforced while building documents
        """
        if cycle_check not in ("full", "reverse"):
            raise ValueError(f"Unknown cycle check mode: {cycle_check}")

        self.cycle_check = cycle_check
        self.max_depth = max_depth
        self._tables: List[Table] = []
        self._relations: List[Relation] = []

    @property
    def tables(self) -> Tuple[Table, ...]:
        return tuple(self._tables)

    @property
    def relations(self) -> Tuple[Relation, ...]:
        return tuple(self._relations)

    def has_table(self, table: Table) -> bool:
        return any(t is table for t in self._tables)

    def has_relation(self, relation: Relation) -> bool:
        return any(r is relation for r in self._relations)

    def get_table(self, name: str) -> Table:
        """Return the first registered table called ``name``.

        Raises:
            KeyError: If no registered table has that name
        """
        for table in self._tables:
            if table.name == name:
                return table
        raise KeyError(f"No registered table named '{name}'")

    def relations_from(self, table: Table) -> List[Relation]:
        """Relations whose parent is ``table``, in registration order."""
        return [r for r in self._relations if r.parent_table is table]

    def add_table(self, table: Optional[Table]) -> None:
        """Register a table. None and already registered tables are ignored."""
        if table is None or self.has_table(table):
            return

        self._tables.append(table)
        logger.info(f"Registered table '{table.name}'")

    def remove_table(self, table: Table) -> None:
        """Unregister a table and every relation it takes part in."""
        if not self.has_table(table):
            return

        self._tables = [t for t in self._tables if t is not table]

        removed = [
            r
            for r in self._relations
            if r.parent_table is table or r.child_table is table
        ]
        self._relations = [
            r
            for r in self._relations
            if r.parent_table is not table and r.child_table is not table
        ]

        logger.info(
            f"Removed table '{table.name}' and {len(removed)} dependent relation(s)"
        )

    def add_relation(self, relation: Relation) -> None:
        """Register a relation between two registered tables.

        Raises:
            NullInputError: If relation is None
            InvalidReferenceError: If either endpoint table is not registered
            CycleDetectedError: If the relation would close a cycle
        """
        if relation is None:
            raise NullInputError("Relation cannot be None")

        if self.has_relation(relation):
            return

        parent, child = relation.parent_table, relation.child_table
        if not self.has_table(parent) or not self.has_table(child):
            raise InvalidReferenceError(
                f"Relation '{relation.output_key}' references a table that is not "
                f"registered ('{parent.name}' -> '{child.name}')"
            )

        if any(
            r.parent_table is child and r.child_table is parent for r in self._relations
        ):
            raise CycleDetectedError(
                f"Relation '{parent.name}' -> '{child.name}' reverses an existing relation"
            )

        if self.cycle_check == "full" and self._reachable(child, parent):
            raise CycleDetectedError(
                f"Relation '{parent.name}' -> '{child.name}' would create a cycle"
            )

        self._relations.append(relation)
        logger.info(
            f"Registered {relation.cardinality.value} relation "
            f"'{parent.name}' -> '{child.name}' as '{relation.output_key}'"
        )

    def remove_relation(self, relation: Relation) -> None:
        """Unregister a relation. Does nothing if it is not registered."""
        if not self.has_relation(relation):
            return

        self._relations = [r for r in self._relations if r is not relation]
        logger.info(f"Removed relation '{relation.output_key}'")

    def _reachable(self, start: Table, target: Table) -> bool:
        """Check whether ``target`` can be reached from ``start`` along relations."""
        seen = set()
        stack = [start]

        while stack:
            table = stack.pop()
            if table is target:
                return True
            if table in seen:
                continue
            seen.add(table)
            stack.extend(r.child_table for r in self.relations_from(table))

        return False

    def resolve(self, root_table: Table) -> List[Document]:
        """Build one document per row of ``root_table``, in row order.

        Raises:
            NullInputError: If root_table is None
        """
        if root_table is None:
            raise NullInputError("Root table cannot be None")

        if not self.has_table(root_table):
            logger.debug(
                f"Resolving unregistered table '{root_table.name}'; no relations apply"
            )

        for relation in self._relations:
            if not relation.join_keys:
                logger.warning(
                    f"Relation '{relation.output_key}' has no join columns; every row "
                    f"of '{relation.child_table.name}' matches"
                )

        builder = DocumentBuilder(self, max_depth=self.max_depth)
        documents = [builder.build(row) for row in root_table.rows]

        logger.debug(
            f"Resolved {len(documents)} document(s) from table '{root_table.name}'"
        )
        return documents
