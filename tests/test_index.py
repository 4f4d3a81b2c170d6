"""Tests for SchemaIndex lookups."""

import pytest

from gql_explorer.core.errors import NotFoundError
from gql_explorer.core.index import SchemaIndex
from gql_explorer.core.ir import OperationKind, Schema
from gql_explorer.core.parser import parse_introspection


@pytest.fixture
def index(schema):
    return SchemaIndex(schema)


class TestFindRootField:
    """Tests for find_root_field."""

    def test_query_field(self, index):
        found = index.find_root_field(OperationKind.QUERY, "orders")
        assert found is not None
        assert found.name == "orders"

    def test_mutation_field(self, index):
        assert index.find_root_field(OperationKind.MUTATION, "insert_orders") is not None

    def test_missing_field(self, index):
        assert index.find_root_field(OperationKind.QUERY, "customers") is None

    def test_missing_root(self, index):
        assert index.find_root_field(OperationKind.SUBSCRIPTION, "orders") is None


class TestListRootFields:
    """Tests for list_root_fields."""

    def test_sorted_by_name(self, index):
        names = [e.name for e in index.list_root_fields(OperationKind.QUERY)]
        assert names == sorted(names)
        assert names == ["empty", "orders", "orders_aggregate", "orders_by_pk", "version"]

    def test_all_roots_grouped_by_origin(self, index):
        entries = index.list_root_fields()
        origins = [e.operation for e in entries]
        assert origins == [OperationKind.QUERY] * 5 + [OperationKind.MUTATION] * 2
        assert [e.name for e in entries[5:]] == ["delete_orders", "insert_orders"]

    def test_no_mutation_root(self, introspection):
        introspection["__schema"]["mutationType"] = None
        index = SchemaIndex(parse_introspection(introspection))
        assert index.list_root_fields(OperationKind.MUTATION) == []

    def test_empty_schema(self):
        assert SchemaIndex(Schema()).list_root_fields() == []


class TestDescribeType:
    """Tests for describe_type."""

    def test_object(self, index):
        payload = index.describe_type("orders")
        assert payload["kind"] == "OBJECT"
        assert payload["description"] == "Customer orders"
        types = {f["name"]: f["type"] for f in payload["fields"]}
        assert types == {
            "id": "Int!",
            "name": "String",
            "tags": "[String!]!",
            "profile": "Profile",
            "status": "order_status",
        }

    def test_object_field_arguments(self, index):
        payload = index.describe_type("query_root")
        by_pk = next(f for f in payload["fields"] if f["name"] == "orders_by_pk")
        assert by_pk["args"] == [{"name": "id", "description": None, "type": "Int!", "default_value": None}]

    def test_argument_default_value(self, index):
        payload = index.describe_type("query_root")
        orders = next(f for f in payload["fields"] if f["name"] == "orders")
        assert orders["args"][0]["default_value"] == "10"

    def test_deprecated_field(self, index):
        payload = index.describe_type("query_root")
        fields = {f["name"]: f for f in payload["fields"]}
        assert fields["version"]["is_deprecated"] is True
        assert fields["version"]["deprecation_reason"] == "Use server_info"
        assert fields["orders"]["is_deprecated"] is False
        assert fields["orders"]["deprecation_reason"] is None

    def test_input_object(self, index):
        payload = index.describe_type("orders_bool_exp")
        assert payload["input_fields"] == [
            {"name": "status", "description": "Status filter", "type": "String_comparison_exp", "default_value": None},
        ]

    def test_enum(self, index):
        payload = index.describe_type("order_status")
        assert payload["enum_values"] == [
            {"name": "paid", "description": "Settled", "is_deprecated": False, "deprecation_reason": None},
            {"name": "open", "description": None, "is_deprecated": True, "deprecation_reason": "Use paid"},
        ]

    def test_union(self, index):
        payload = index.describe_type("SearchResult")
        assert payload["possible_types"] == ["orders", "Profile"]

    def test_scalar_has_no_fields(self, index):
        payload = index.describe_type("Int")
        assert "no traversable fields" in payload["info"]

    def test_not_found(self, index):
        with pytest.raises(NotFoundError, match="Customers"):
            index.describe_type("Customers")


class TestListTables:
    """Tests for the table listing heuristic.

    The rules target Hasura-style naming and may not generalize to other
    endpoints.
    """

    def test_excludes_helper_roots_and_scalars(self, index):
        names = [t.name for t in index.list_tables()]
        assert names == ["empty", "orders"]
        assert "orders_aggregate" not in names
        assert "orders_by_pk" not in names
        assert "version" not in names

    def test_schema_hint_from_description(self, index):
        tables = {t.name: t for t in index.list_tables()}
        assert tables["orders"].schema == "sales"
        assert tables["orders"].type_name == "orders"
        assert tables["empty"].schema == "public"
