"""Create and seed sample DynamoDB tables for local runs of the read-only server.

Usage:
    python scripts/seed_dynamodb.py --endpoint-url http://localhost:4566
"""

from __future__ import annotations

import argparse
from decimal import Decimal
from typing import Any

import boto3

ORDERS_TABLE = "orders"
CUSTOMERS_TABLE = "customers"

TABLE_DEFINITIONS: list[dict[str, Any]] = [
    {
        "TableName": ORDERS_TABLE,
        "KeySchema": [
            {"AttributeName": "PK", "KeyType": "HASH"},
            {"AttributeName": "SK", "KeyType": "RANGE"},
        ],
        "AttributeDefinitions": [
            {"AttributeName": "PK", "AttributeType": "S"},
            {"AttributeName": "SK", "AttributeType": "S"},
            {"AttributeName": "orderStatus", "AttributeType": "S"},
            {"AttributeName": "createdAt", "AttributeType": "S"},
        ],
        "GlobalSecondaryIndexes": [
            {
                "IndexName": "status-index",
                "KeySchema": [
                    {"AttributeName": "orderStatus", "KeyType": "HASH"},
                    {"AttributeName": "createdAt", "KeyType": "RANGE"},
                ],
                "Projection": {"ProjectionType": "ALL"},
            },
        ],
        "LocalSecondaryIndexes": [
            {
                "IndexName": "created-index",
                "KeySchema": [
                    {"AttributeName": "PK", "KeyType": "HASH"},
                    {"AttributeName": "createdAt", "KeyType": "RANGE"},
                ],
                "Projection": {"ProjectionType": "ALL"},
            },
        ],
    },
    {
        "TableName": CUSTOMERS_TABLE,
        "KeySchema": [{"AttributeName": "customerId", "KeyType": "HASH"}],
        "AttributeDefinitions": [{"AttributeName": "customerId", "AttributeType": "S"}],
    },
]


def create_tables(ddb: Any, suffix: str = "") -> None:
    """Create the sample tables. Skips any that already exist."""
    client = ddb.meta.client
    existing = client.list_tables().get("TableNames", [])

    for defn in TABLE_DEFINITIONS:
        table_name = f"{defn['TableName']}{suffix}"
        if table_name in existing:
            print(f"  Table {table_name} already exists, skipping")
            continue
        client.create_table(**{**defn, "TableName": table_name}, BillingMode="PAY_PER_REQUEST")
        print(f"  Created table {table_name}")


def sample_orders(customers: int = 3, per_customer: int = 25) -> list[dict[str, Any]]:
    orders = []
    for c in range(customers):
        for n in range(per_customer):
            orders.append({
                "PK": f"CUSTOMER#{c:03d}",
                "SK": f"ORDER#{n:04d}",
                "orderStatus": "SHIPPED" if n % 3 else "PENDING",
                "createdAt": f"2024-01-{(n % 28) + 1:02d}T10:00:00Z",
                "orderTotal": Decimal(f"{10 + n}.50"),
                "qty": n + 1,
            })
    return orders


def seed_sample_data(ddb: Any, suffix: str = "") -> None:
    """Seed customers and their orders."""
    orders = sample_orders()
    tbl = ddb.Table(f"{ORDERS_TABLE}{suffix}")
    with tbl.batch_writer() as batch:
        for order in orders:
            batch.put_item(Item=order)
    print(f"  Seeded {len(orders)} orders")

    customers = {order["PK"].split("#", 1)[1] for order in orders}
    tbl = ddb.Table(f"{CUSTOMERS_TABLE}{suffix}")
    with tbl.batch_writer() as batch:
        for customer_id in sorted(customers):
            batch.put_item(Item={"customerId": customer_id, "displayName": f"Customer {customer_id}"})
    print(f"  Seeded {len(customers)} customers")


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed sample DynamoDB tables")
    parser.add_argument("--endpoint-url", default=None, help="DynamoDB endpoint (e.g. LocalStack)")
    parser.add_argument("--region", default="us-east-1")
    parser.add_argument("--suffix", default="", help="Table name suffix (e.g. '-dev')")
    args = parser.parse_args()

    kwargs: dict = {"region_name": args.region}
    if args.endpoint_url:
        kwargs["endpoint_url"] = args.endpoint_url
    ddb = boto3.resource("dynamodb", **kwargs)

    print("Creating tables...")
    create_tables(ddb, suffix=args.suffix)
    print("Seeding data...")
    seed_sample_data(ddb, suffix=args.suffix)
    print("Done.")


if __name__ == "__main__":
    main()
