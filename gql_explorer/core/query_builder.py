"""Query builder for ad-hoc table queries.

Synthesizes GraphQL documents from schema metadata: sample-row previews,
aggregates and single-type introspection. Every name spliced into a
document passes through ``check_identifier`` first.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import ArgumentError, NotFoundError
from .ir import ObjectType, OperationKind, Schema, TypeRef
from .type_walker import is_scalar_like, unwrap_to_named

# Selectable on every object type
TYPENAME_FIELD = "__typename"

# Wrapper levels unrolled in the table description query; enough for [[T!]!]!
TYPE_REF_DEPTH = 6

_IDENTIFIER = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")


class AggregateFunction(str, Enum):
    """Aggregate functions understood by ``<table>_aggregate`` roots."""
    COUNT = "count"
    SUM = "sum"
    AVG = "avg"
    MIN = "min"
    MAX = "max"


@dataclass(frozen=True)
class QueryDocument:
    """A synthesized query and its variables."""
    query: str
    variables: dict[str, Any] = field(default_factory=dict)


def check_identifier(name: str, what: str = "name") -> str:
    """Return ``name`` if it is a valid GraphQL name, else raise ArgumentError."""
    if not isinstance(name, str) or not _IDENTIFIER.match(name):
        raise ArgumentError(f"Invalid GraphQL {what}: {name!r}")
    return name


def type_ref_selection(depth: int = TYPE_REF_DEPTH) -> str:
    """Selection for a type reference with ``depth`` nested ofType levels."""
    selection = "kind name"
    for _ in range(depth):
        selection = f"kind name ofType {{ {selection} }}"
    return selection


class QueryBuilder:
    """Builds GraphQL query documents for table-shaped root fields."""

    def __init__(self, schema: Schema | None = None):
        """Initialize with the schema used for field lookups.

        Only ``build_preview`` needs a schema.
        """
        self.schema = schema

    def build_preview(self, table_name: str, limit: int) -> QueryDocument:
        """Build a query selecting the scalar-like columns of a table.

        Fields are kept in schema order. A table without scalar-like fields
        selects ``__typename`` only.
        """
        check_identifier(table_name, "table name")
        if limit <= 0:
            raise ArgumentError(f"limit must be a positive integer, got {limit}")

        table_type = self._table_type(table_name)
        columns = [f.name for f in table_type.fields if self._is_scalar_like_field(f.type)]
        if not columns:
            columns = [TYPENAME_FIELD]

        query = (
            f"query PreviewTable($limit: Int!) {{\n"
            f"  {table_name}(limit: $limit) {{\n"
            f"    {' '.join(columns)}\n"
            f"  }}\n"
            f"}}"
        )
        return QueryDocument(query=query, variables={"limit": limit})

    @staticmethod
    def build_aggregate(
        table_name: str,
        function: AggregateFunction | str,
        field_name: str | None = None,
        filter: dict[str, Any] | None = None,
    ) -> QueryDocument:
        """Build a ``<table>_aggregate`` query.

        ``field_name`` is required for every function except count, which
        ignores it.
        """
        check_identifier(table_name, "table name")
        try:
            function = AggregateFunction(function)
        except ValueError:
            choices = ", ".join(f.value for f in AggregateFunction)
            raise ArgumentError(f"Unknown aggregate function {function!r}; expected one of {choices}") from None

        if function is AggregateFunction.COUNT:
            selection = "count"
        else:
            if not field_name:
                raise ArgumentError(f"The 'field' argument is required for the '{function.value}' aggregate.")
            check_identifier(field_name, "field name")
            selection = f"{function.value} {{ {field_name} }}"

        root = f"{table_name}_aggregate"
        variables: dict[str, Any] = {}
        var_decls = ""
        root_args = ""
        if filter is not None:
            var_decls = f"($filter: {table_name}_bool_exp!)"
            root_args = "(where: $filter)"
            variables["filter"] = filter

        query = (
            f"query AggregateTable{var_decls} {{\n"
            f"  {root}{root_args} {{\n"
            f"    aggregate {{ {selection} }}\n"
            f"  }}\n"
            f"}}"
        )
        return QueryDocument(query=query, variables=variables)

    @staticmethod
    def build_table_description(type_name: str) -> QueryDocument:
        """Build an introspection query for one type and its fields."""
        check_identifier(type_name, "type name")
        type_ref = type_ref_selection()
        query = (
            "query DescribeTable($typeName: String!) {\n"
            "  __type(name: $typeName) {\n"
            "    kind\n"
            "    name\n"
            "    description\n"
            "    fields {\n"
            "      name\n"
            "      description\n"
            f"      type {{ {type_ref} }}\n"
            f"      args {{ name description type {{ {type_ref} }} }}\n"
            "    }\n"
            "  }\n"
            "}"
        )
        return QueryDocument(query=query, variables={"typeName": type_name})

    def _table_type(self, table_name: str) -> ObjectType:
        """Resolve a table to its row type via the query root, then by type name."""
        if self.schema is None:
            raise RuntimeError("Schema not initialized. Pass a schema to QueryBuilder.")

        type_name = table_name
        root_name = self.schema.root_type_name(OperationKind.QUERY)
        root = self.schema.get_type_by_name(root_name) if root_name else None
        if isinstance(root, ObjectType):
            for root_field in root.fields:
                if root_field.name == table_name:
                    type_name = unwrap_to_named(root_field.type)
                    break

        type_def = self.schema.get_type_by_name(type_name)
        if type_def is None:
            raise NotFoundError(f"Table '{table_name}' not found in the schema.")
        if not isinstance(type_def, ObjectType):
            raise ArgumentError(f"Table '{table_name}' resolves to {type_def.kind.value} '{type_name}', not an object type.")
        return type_def

    def _is_scalar_like_field(self, ref: TypeRef) -> bool:
        type_def = self.schema.get_type_by_name(unwrap_to_named(ref))
        return type_def is not None and is_scalar_like(type_def.kind)
