"""MCP server exposing the explorer operations as tools and the schema as a resource."""

import json
import logging
from typing import Any, Literal

from mcp.server.fastmcp import FastMCP

from .core.config import ServerConfig
from .core.executor import GraphQLExecutor
from .core.operations import Operations

logger = logging.getLogger(__name__)

SCHEMA_RESOURCE_URI = "graphql://schema"
SCHEMA_RESOURCE_NAME = "GraphQL Schema (via Introspection)"
SCHEMA_MIME_TYPE = "application/json"

OperationType = Literal["QUERY", "MUTATION", "SUBSCRIPTION"]
AggregateName = Literal["count", "sum", "avg", "min", "max"]


def _dump(payload: Any) -> str:
    return json.dumps(payload, indent=2)


def create_server(config: ServerConfig, operations: Operations | None = None) -> FastMCP:
    """Build a FastMCP server bound to one GraphQL endpoint."""
    if operations is None:
        executor = GraphQLExecutor(config.endpoint, config.headers, timeout=config.timeout)
        operations = Operations(executor)

    logger.info("Initializing server for GraphQL endpoint: %s", config.endpoint)
    mcp = FastMCP(config.server_name)

    @mcp.resource(SCHEMA_RESOURCE_URI, name=SCHEMA_RESOURCE_NAME, mime_type=SCHEMA_MIME_TYPE)
    async def graphql_schema() -> str:
        """The full introspected schema as JSON."""
        return await operations.schema_json()

    @mcp.tool()
    async def list_root_fields(field_type: OperationType | None = None) -> str:
        """List top-level query, mutation or subscription fields with descriptions, sorted by name."""
        return _dump(await operations.list_root_fields(field_type))

    @mcp.tool()
    async def list_mutations() -> str:
        """List all top-level mutation fields with descriptions."""
        return _dump(await operations.list_mutations())

    @mcp.tool()
    async def list_tables() -> str:
        """List table-like query fields grouped by database schema (best-effort)."""
        return _dump(await operations.list_tables())

    @mcp.tool()
    async def describe_root_field(field_name: str, operation_type: OperationType = "QUERY") -> str:
        """Describe a top-level field: its arguments, return type and immediate sub-fields.

        To explore deeper, pass a returned type name to describe_graphql_type.
        """
        return _dump(await operations.describe_root_field(field_name, operation_type))

    @mcp.tool()
    async def describe_graphql_type(type_name: str) -> str:
        """Describe a named type: fields, input fields, enum values or possible types."""
        return _dump(await operations.describe_graphql_type(type_name))

    @mcp.tool()
    async def preview_table_data(table_name: str, limit: int = 5) -> str:
        """Fetch sample rows of a table, selecting only its scalar columns."""
        return _dump(await operations.preview_table_data(table_name, limit))

    @mcp.tool()
    async def aggregate_data(
        table_name: str,
        aggregate_function: AggregateName,
        field: str | None = None,
        filter: dict[str, Any] | None = None,
    ) -> str:
        """Compute count, sum, avg, min or max over a table, with an optional where filter.

        ``field`` is required for everything except count.
        """
        return _dump(await operations.aggregate_data(table_name, aggregate_function, field, filter))

    @mcp.tool()
    async def describe_table(table_name: str, schema_name: str = "public") -> str:
        """Describe a table's columns, their types and arguments."""
        return _dump(await operations.describe_table(table_name, schema_name))

    @mcp.tool()
    async def run_graphql_query(query: str, variables: dict[str, Any] | None = None) -> str:
        """Execute a read-only GraphQL query (and optional variables) and return JSON."""
        return _dump(await operations.run_graphql_query(query, variables))

    @mcp.tool()
    async def run_graphql_mutation(mutation: str, variables: dict[str, Any] | None = None) -> str:
        """Execute a GraphQL mutation (and optional variables) and return JSON."""
        return _dump(await operations.run_graphql_mutation(mutation, variables))

    @mcp.tool()
    async def health_check(health_endpoint_url: str | None = None) -> str:
        """Check that the GraphQL endpoint (or a given health URL) is reachable."""
        return await operations.health_check(health_endpoint_url)

    return mcp
