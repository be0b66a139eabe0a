"""Pytest configuration and shared fixtures."""

import pytest

from tabledoc import Relation, RelationRegistry, Table


@pytest.fixture
def orders():
    """Orders table with Id and CustomerId columns."""
    table = Table("Orders")
    table.add_column("Id", "INTEGER")
    table.add_column("CustomerId", "INTEGER")
    table.add_row([1, 9])
    return table


@pytest.fixture
def items():
    """Items table; two items belong to order 1, one to order 2."""
    table = Table("Items")
    table.add_column("OrderId", "INTEGER")
    table.add_column("Sku", "TEXT")
    table.add_row([1, "A"])
    table.add_row([1, "B"])
    table.add_row([2, "C"])
    return table


@pytest.fixture
def registry(orders, items):
    """Registry with Orders -> Items registered as an array relation."""
    registry = RelationRegistry()
    registry.add_table(orders)
    registry.add_table(items)

    relation = Relation.array(orders, items, "items")
    relation.add_join_column(orders.column("Id"), items.column("OrderId"))
    registry.add_relation(relation)
    return registry
