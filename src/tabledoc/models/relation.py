"""Relation models for tabledoc.

A relation joins each row of a parent table to the rows of a child table whose
join columns hold equal values, and embeds them either as a single nested
document or as an array of documents.
"""

from enum import Enum
from typing import Any, List, Optional, Tuple

from pydantic import ConfigDict, Field, PrivateAttr

from tabledoc.exceptions import (
    DuplicateJoinKeyError,
    InvalidReferenceError,
    NullInputError,
)
from .base import TableDocBaseModel, TableDocEntityModel
from .table import Column, Row, Table


class Cardinality(str, Enum):
    """Shape of a relation's resolved value."""

    # at most one nested document, null when nothing matches
    SINGLE = "single"
    # list of nested documents, empty when nothing matches
    ARRAY = "array"


class JoinKey(TableDocBaseModel):
    """A (parent column, child column) pair tested for equality."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    parent_column: Column = Field(description="Column of the parent table")
    child_column: Column = Field(description="Column of the child table")

    def matches(self, parent_row: Optional[Row], child_row: Optional[Row]) -> bool:
        """Check whether both rows hold the same non-null value in the key columns.

        Values of different runtime types never match, so an integer 1 and the
        text "1" are simply unrelated.
        """
        if parent_row is None or child_row is None:
            return False

        parent_value = parent_row[self.parent_column]
        child_value = child_row[self.child_column]

        if parent_value is None or child_value is None:
            return False

        return type(parent_value) is type(child_value) and parent_value == child_value


class Relation(TableDocEntityModel):
    """Directed parent -> child join embedded under ``output_key``."""

    parent_table: Table = Field(frozen=True, description="Table the join starts from")
    child_table: Table = Field(frozen=True, description="Table embedded in the parent")
    output_key: str = Field(description="Document key holding the embedded value")
    cardinality: Cardinality = Field(
        default=Cardinality.ARRAY,
        frozen=True,
        description="Single document or array of documents"
    )

    _join_keys: List[JoinKey] = PrivateAttr(default_factory=list)

    def __init__(
        self,
        parent_table: Table,
        child_table: Table,
        output_key: str,
        cardinality: Cardinality = Cardinality.ARRAY,
        **data: Any,
    ):
        if parent_table is None or child_table is None:
            raise NullInputError("Relation tables cannot be None")
        if output_key is None:
            raise NullInputError("Relation output key cannot be None")

        super().__init__(
            parent_table=parent_table,
            child_table=child_table,
            output_key=output_key,
            cardinality=cardinality,
            **data,
        )

    @classmethod
    def single(cls, parent_table: Table, child_table: Table, output_key: str) -> "Relation":
        """Create a relation embedding the first matching child row or null."""
        return cls(parent_table, child_table, output_key, Cardinality.SINGLE)

    @classmethod
    def array(cls, parent_table: Table, child_table: Table, output_key: str) -> "Relation":
        """Create a relation embedding every matching child row."""
        return cls(parent_table, child_table, output_key, Cardinality.ARRAY)

    @property
    def join_keys(self) -> Tuple[JoinKey, ...]:
        return tuple(self._join_keys)

    def add_join_column(self, parent_column: Column, child_column: Column) -> JoinKey:
        """Add a join column pair.

        Args:
            parent_column: Column of ``parent_table``
            child_column: Column of ``child_table``

        Returns:
            The registered JoinKey

        Raises:
            NullInputError: If either column is None
            InvalidReferenceError: If a column is owned by the wrong table
            DuplicateJoinKeyError: If the pair is already registered
        """
        if parent_column is None or child_column is None:
            raise NullInputError("Join columns cannot be None")

        if parent_column.table is not self.parent_table:
            raise InvalidReferenceError(
                f"Column '{parent_column.name}' does not belong to parent table "
                f"'{self.parent_table.name}'"
            )
        if child_column.table is not self.child_table:
            raise InvalidReferenceError(
                f"Column '{child_column.name}' does not belong to child table "
                f"'{self.child_table.name}'"
            )

        join_key = JoinKey(parent_column=parent_column, child_column=child_column)
        if join_key in self._join_keys:
            raise DuplicateJoinKeyError(
                f"Join columns '{parent_column.name}' -> '{child_column.name}' "
                f"are already registered on '{self.output_key}'"
            )

        self._join_keys.append(join_key)
        return join_key

    def remove_join_column(self, parent_column: Column, child_column: Column) -> None:
        """Remove a join column pair. Does nothing if the pair is not registered."""
        self._join_keys = [
            key
            for key in self._join_keys
            if not (
                key.parent_column is parent_column and key.child_column is child_column
            )
        ]

    def is_match(self, parent_row: Row, child_row: Row) -> bool:
        """Check a candidate child row against every join key."""
        return all(key.matches(parent_row, child_row) for key in self._join_keys)

    def get_relational_rows(self, row: Row) -> List[Row]:
        """Collect the child rows joined to ``row``, in child table order.

        A relation without join keys matches every child row.

        Returns:
            At most one row for SINGLE relations, every match for ARRAY relations
        """
        if row is None:
            raise NullInputError("Row cannot be None")

        if row.table is not self.parent_table:
            raise InvalidReferenceError(
                f"Row does not belong to parent table '{self.parent_table.name}'"
            )

        matches = (
            child_row
            for child_row in self.child_table.rows
            if self.is_match(row, child_row)
        )

        if self.cardinality == Cardinality.SINGLE:
            first = next(matches, None)
            return [] if first is None else [first]
        elif self.cardinality == Cardinality.ARRAY:
            return list(matches)

        raise ValueError(f"Unknown cardinality: {self.cardinality}")
