#!/usr/bin/env python3
"""Demonstration of exploring a GraphQL endpoint without the MCP server.

This script shows how to:
1. Introspect an endpoint and list its tables
2. Describe one table's columns
3. Preview rows and count them

Set GRAPHQL_ENDPOINT (and optionally GRAPHQL_HEADERS as a JSON object)
before running. The table/aggregate calls assume Hasura-style roots.
"""

import asyncio
import json
import os
import sys

from gql_explorer.core import ExplorerError, GraphQLExecutor, Operations, load_headers_json


async def explore(endpoint: str, headers: dict[str, str]):
    async with GraphQLExecutor(endpoint, headers) as executor:
        operations = Operations(executor)

        print(await operations.health_check())

        print("\n1. Tables")
        tables = await operations.list_tables()
        for schema_name, entries in tables["schemas"].items():
            print(f"   {schema_name}: {', '.join(t['name'] for t in entries)}")

        first = next((t["name"] for entries in tables["schemas"].values() for t in entries), None)
        if first is None:
            print("   No tables found.")
            return

        print(f"\n2. Columns of {first}")
        description = await operations.describe_table(first)
        for column in description["table"]["columns"]:
            print(f"   {column['name']}: {column['type']}")

        print(f"\n3. Sample rows of {first}")
        print(json.dumps(await operations.preview_table_data(first, 3), indent=2))

        try:
            count = await operations.aggregate_data(first, "count")
            print(f"   Row count: {count}")
        except ExplorerError as e:
            print(f"   Aggregate not available: {e}")


def main():
    endpoint = os.environ.get("GRAPHQL_ENDPOINT")
    if not endpoint:
        print("Set GRAPHQL_ENDPOINT to a GraphQL endpoint URL.")
        sys.exit(1)

    print("=== GraphQL Explorer Demo ===\n")
    asyncio.run(explore(endpoint, load_headers_json(os.environ.get("GRAPHQL_HEADERS"))))


if __name__ == "__main__":
    main()
