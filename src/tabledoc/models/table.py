"""Table, Column and Row models for tabledoc."""

from typing import Any, List, Literal, Mapping, Optional, Sequence, Union

from pydantic import Field, PrivateAttr

from tabledoc.exceptions import InvalidReferenceError, NullInputError
from .base import TableDocEntityModel


# Declared column types. Join matching compares runtime value types instead.
ColumnType = Literal["TEXT", "INTEGER", "REAL", "BLOB", "NUMERIC", "BOOLEAN", "ANY"]


class Column(TableDocEntityModel):
    """Represents a column in a table."""

    name: str = Field(description="Column name")
    type: ColumnType = Field(default="ANY", description="Declared value type")
    description: Optional[str] = Field(
        default=None, description="Free form column description"
    )

    _table: Any = PrivateAttr(default=None)
    _ordinal: int = PrivateAttr(default=-1)

    @property
    def table(self) -> Optional["Table"]:
        """Table owning this column, or None while unattached."""
        return self._table

    @property
    def ordinal(self) -> int:
        """Position of the column in its table, -1 while unattached."""
        return self._ordinal

    def _attach(self, table: "Table", ordinal: int) -> None:
        if self._table is not None:
            raise InvalidReferenceError(
                f"Column '{self.name}' already belongs to table '{self._table.name}'"
            )
        self._table = table
        self._ordinal = ordinal


class Row(TableDocEntityModel):
    """A single record of a table, one value per column.

    ``None`` is the null marker for a cell.
    """

    values: List[Any] = Field(default_factory=list, description="Cell values")

    _table: Any = PrivateAttr(default=None)

    @property
    def table(self) -> Optional["Table"]:
        """Table owning this row."""
        return self._table

    def _ordinal_of(self, key: Union["Column", int, str]) -> int:
        if isinstance(key, Column):
            if key.table is None or key.table is not self._table:
                raise InvalidReferenceError(
                    f"Column '{key.name}' does not belong to the row's table"
                )
            return key.ordinal

        if isinstance(key, str):
            if self._table is None:
                raise KeyError(key)
            return self._table.column(key).ordinal

        if isinstance(key, int) and not isinstance(key, bool):
            if not 0 <= key < len(self.values):
                raise IndexError(f"Column ordinal {key} out of range")
            return key

        raise TypeError(f"Rows are indexed by Column, ordinal or name, not {type(key)}")

    def __getitem__(self, key: Union["Column", int, str]) -> Any:
        return self.values[self._ordinal_of(key)]

    def get(self, key: Union["Column", int, str], default: Any = None) -> Any:
        """Return the cell for ``key``, or ``default`` if the key is unknown."""
        try:
            return self[key]
        except (KeyError, IndexError):
            return default


class Table(TableDocEntityModel):
    """Represents an in-memory table: ordered columns and ordered rows."""

    name: str = Field(default="", description="Table name")
    columns: List[Column] = Field(default_factory=list, description="Table columns")
    rows: List[Row] = Field(default_factory=list, description="Table rows")

    def __init__(self, name: str = "", **data):
        """Initialize the table and take ownership of the given columns and rows."""
        super().__init__(name=name, **data)

        for ordinal, column in enumerate(self.columns):
            column._attach(self, ordinal)

        for row in self.rows:
            self._adopt_row(row)

    def _adopt_row(self, row: Row) -> None:
        if row.table is not None:
            raise InvalidReferenceError("Row already belongs to another table")

        if len(row.values) > len(self.columns):
            raise ValueError(
                f"Row has {len(row.values)} values but table '{self.name}' "
                f"has {len(self.columns)} columns"
            )

        row.values.extend([None] * (len(self.columns) - len(row.values)))
        row._table = self

    def add_column(
        self, column: Union[Column, str], type: ColumnType = "ANY"
    ) -> Column:
        """Append a column to the table.

        Existing rows get a null cell for the new column.

        Args:
            column: Column object or the name of a new column
            type: Declared type when a name is given

        Returns:
            The attached Column object
        """
        if column is None:
            raise NullInputError("Column cannot be None")

        if isinstance(column, str):
            column = Column(name=column, type=type)

        column._attach(self, len(self.columns))
        self.columns.append(column)

        for row in self.rows:
            row.values.append(None)

        return column

    def add_row(self, values: Union[Sequence[Any], Mapping[str, Any]] = ()) -> Row:
        """Append a row built from a sequence of cells or a name to value mapping.

        Missing cells are null.
        """
        if isinstance(values, Mapping):
            cells = [None] * len(self.columns)
            for name, value in values.items():
                cells[self.column(name).ordinal] = value
        elif isinstance(values, (str, bytes, bytearray)):
            raise TypeError(
                f"Row values must be a sequence of cells or a mapping, not {type(values).__name__}"
            )
        else:
            cells = list(values)

        row = Row(values=cells)
        self._adopt_row(row)
        self.rows.append(row)
        return row

    def column(self, name: str) -> Column:
        """Return the first column called ``name``.

        Raises:
            KeyError: If the table has no such column
        """
        for column in self.columns:
            if column.name == name:
                return column
        raise KeyError(f"Table '{self.name}' has no column '{name}'")

    @property
    def column_names(self) -> List[str]:
        return [column.name for column in self.columns]
