#!/usr/bin/env python3
"""
Basic tabledoc usage example.

This example demonstrates:
- Building tables in memory
- Declaring array and single relations
- Resolving a root table into nested documents
- Serializing them to JSON
"""

from tabledoc import JsonSerializer, Relation, RelationRegistry, SerializerOptions, Table


def main():
    customers = Table("customers")
    customers.add_column("id", "INTEGER")
    customers.add_column("name", "TEXT")
    customers.add_row([9, "Alice"])

    orders = Table("orders")
    orders.add_column("id", "INTEGER")
    orders.add_column("customer_id", "INTEGER")
    orders.add_row([1, 9])

    items = Table("items")
    items.add_column("order_id", "INTEGER")
    items.add_column("sku", "TEXT")
    items.add_row([1, "A"])
    items.add_row([1, "B"])
    items.add_row([2, "C"])

    registry = RelationRegistry()
    for table in (customers, orders, items):
        registry.add_table(table)

    # Each order embeds its items
    order_items = Relation.array(orders, items, "items")
    order_items.add_join_column(orders.column("id"), items.column("order_id"))
    registry.add_relation(order_items)

    # Each order embeds its customer, or null
    order_customer = Relation.single(orders, customers, "customer")
    order_customer.add_join_column(orders.column("customer_id"), customers.column("id"))
    registry.add_relation(order_customer)

    print("Documents:")
    for document in registry.resolve(orders):
        print(f"  {document}")

    print("\nJSON:")
    print(JsonSerializer(SerializerOptions(indent=2)).serialize(registry, orders))


if __name__ == "__main__":
    main()
