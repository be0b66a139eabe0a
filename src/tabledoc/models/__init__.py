"""Core data models for tabledoc."""

from .base import TableDocBaseModel, TableDocEntityModel
from .table import Column, ColumnType, Row, Table
from .relation import Cardinality, JoinKey, Relation

__all__ = [
    "TableDocBaseModel",
    "TableDocEntityModel",
    "Column",
    "ColumnType",
    "Row",
    "Table",
    "Cardinality",
    "JoinKey",
    "Relation",
]
