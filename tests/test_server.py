"""Tests for the MCP server wiring."""

import pytest

from gql_explorer.core.config import ServerConfig
from gql_explorer.core.operations import Operations
from gql_explorer.server import SCHEMA_RESOURCE_URI, create_server

EXPECTED_TOOLS = {
    "list_root_fields",
    "list_mutations",
    "list_tables",
    "describe_root_field",
    "describe_graphql_type",
    "preview_table_data",
    "aggregate_data",
    "describe_table",
    "run_graphql_query",
    "run_graphql_mutation",
    "health_check",
}


@pytest.fixture
def server(introspection, fake_executor_cls):
    executor = fake_executor_cls(introspection=introspection)
    config = ServerConfig(endpoint=executor.url)
    return create_server(config, Operations(executor))


class TestCreateServer:
    """Tests for create_server."""

    @pytest.mark.asyncio
    async def test_registers_tools(self, server):
        tools = await server.list_tools()
        assert {t.name for t in tools} == EXPECTED_TOOLS

    @pytest.mark.asyncio
    async def test_registers_schema_resource(self, server):
        resources = await server.list_resources()
        assert len(resources) == 1
        assert str(resources[0].uri).startswith(SCHEMA_RESOURCE_URI)
        assert resources[0].mimeType == "application/json"

    @pytest.mark.asyncio
    async def test_tool_argument_schema(self, server):
        tools = {t.name: t for t in await server.list_tools()}
        schema = tools["aggregate_data"].inputSchema
        assert set(schema["required"]) == {"table_name", "aggregate_function"}
