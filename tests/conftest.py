"""Shared fixtures: a small introspection payload modelled on a Hasura endpoint."""

import copy

import pytest


def named(kind, name):
    return {"kind": kind, "name": name, "ofType": None}


def non_null(of_type):
    return {"kind": "NON_NULL", "name": None, "ofType": of_type}


def list_of(of_type):
    return {"kind": "LIST", "name": None, "ofType": of_type}


def field(name, type_ref, description=None, args=(), deprecation_reason=None):
    return {
        "name": name,
        "description": description,
        "args": list(args),
        "type": type_ref,
        "isDeprecated": deprecation_reason is not None,
        "deprecationReason": deprecation_reason,
    }


def arg(name, type_ref, description=None, default_value=None):
    return {"name": name, "description": description, "type": type_ref, "defaultValue": default_value}


def object_type(name, fields, description=None):
    return {
        "kind": "OBJECT",
        "name": name,
        "description": description,
        "fields": fields,
        "inputFields": None,
        "interfaces": [],
        "enumValues": None,
        "possibleTypes": None,
    }


def scalar(name):
    return {"kind": "SCALAR", "name": name, "description": None}


INT = named("SCALAR", "Int")
STRING = named("SCALAR", "String")
FLOAT = named("SCALAR", "Float")

INTROSPECTION = {
    "__schema": {
        "queryType": {"name": "query_root"},
        "mutationType": {"name": "mutation_root"},
        "subscriptionType": None,
        "types": [
            scalar("Int"),
            scalar("String"),
            scalar("Float"),
            scalar("Boolean"),
            {
                "kind": "ENUM",
                "name": "order_status",
                "description": "Order lifecycle",
                "enumValues": [
                    {"name": "paid", "description": "Settled", "isDeprecated": False, "deprecationReason": None},
                    {"name": "open", "description": None, "isDeprecated": True, "deprecationReason": "Use paid"},
                ],
            },
            object_type("orders", [
                field("id", non_null(INT)),
                field("name", STRING),
                field("tags", non_null(list_of(non_null(STRING)))),
                field("profile", named("OBJECT", "Profile")),
                field("status", named("ENUM", "order_status")),
            ], description="Customer orders"),
            object_type("Profile", [
                field("bio", STRING),
            ]),
            object_type("Empty", [
                field("profile", named("OBJECT", "Profile")),
            ]),
            {
                "kind": "INPUT_OBJECT",
                "name": "orders_bool_exp",
                "description": None,
                "inputFields": [
                    {"name": "status", "description": "Status filter", "type": named("INPUT_OBJECT", "String_comparison_exp"), "defaultValue": None},
                ],
            },
            {
                "kind": "UNION",
                "name": "SearchResult",
                "description": None,
                "possibleTypes": [named("OBJECT", "orders"), named("OBJECT", "Profile")],
            },
            object_type("query_root", [
                field(
                    "orders",
                    non_null(list_of(non_null(named("OBJECT", "orders")))),
                    description="fetch data from the table: \"orders\" schema: sales",
                    args=[arg("limit", INT, "limit the number of rows returned", default_value="10")],
                ),
                field("orders_aggregate", non_null(named("OBJECT", "orders_aggregate"))),
                field("orders_by_pk", named("OBJECT", "orders"), args=[arg("id", non_null(INT))]),
                field("empty", list_of(named("OBJECT", "Empty"))),
                field("version", STRING, description="API version", deprecation_reason="Use server_info"),
            ]),
            object_type("orders_aggregate", [
                field("aggregate", named("OBJECT", "orders_aggregate_fields")),
            ]),
            object_type("orders_aggregate_fields", [
                field("count", non_null(INT)),
            ]),
            object_type("mutation_root", [
                field("insert_orders", named("OBJECT", "orders"), description="insert data into the table: \"orders\""),
                field("delete_orders", named("OBJECT", "orders")),
            ]),
        ],
        "directives": [],
    }
}


@pytest.fixture
def introspection():
    """A fresh copy of the sample introspection ``data`` object."""
    return copy.deepcopy(INTROSPECTION)


@pytest.fixture
def schema(introspection):
    from gql_explorer.core.parser import parse_introspection

    return parse_introspection(introspection)


class FakeExecutor:
    """Records documents and answers from a queue of responses.

    A response that is an exception instance is raised instead of returned.
    """

    url = "https://example.com/graphql"

    def __init__(self, *responses, introspection=None):
        self.responses = list(responses)
        self.introspection = introspection
        self.calls = []
        self.checked_urls = []

    async def execute(self, query, variables=None, headers=None):
        self.calls.append((query, variables))
        if self.introspection is not None and "__schema" in query:
            return copy.deepcopy(self.introspection)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def check_health(self, url):
        self.checked_urls.append(url)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def data_calls(self):
        return [c for c in self.calls if "__schema" not in c[0]]


@pytest.fixture
def fake_executor_cls():
    return FakeExecutor
