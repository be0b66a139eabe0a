"""tabledoc - turn related in-memory tables into nested JSON documents."""

from tabledoc.core import (
    Document,
    DocumentBuilder,
    JsonSerializer,
    RelationRegistry,
    SerializerOptions,
)
from tabledoc.exceptions import (
    CycleDetectedError,
    DuplicateJoinKeyError,
    InvalidReferenceError,
    NullInputError,
    TableDocError,
)
from tabledoc.io import load_csv
from tabledoc.models import Cardinality, Column, JoinKey, Relation, Row, Table

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("tabledoc")
except PackageNotFoundError:
    # Package metadata is not available when running from a source checkout
    __version__ = "0.1.0"

__all__ = [
    "Cardinality",
    "Column",
    "CycleDetectedError",
    "Document",
    "DocumentBuilder",
    "DuplicateJoinKeyError",
    "InvalidReferenceError",
    "JoinKey",
    "JsonSerializer",
    "NullInputError",
    "Relation",
    "RelationRegistry",
    "Row",
    "SerializerOptions",
    "Table",
    "TableDocError",
    "load_csv",
]
