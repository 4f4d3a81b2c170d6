"""Read-only lookups over an introspected schema."""

import re
from dataclasses import dataclass
from typing import Any

from .errors import NotFoundError
from .ir import (
    EnumType,
    Field,
    InputObjectType,
    InputValue,
    InterfaceType,
    NamedType,
    ObjectType,
    OperationKind,
    Schema,
    UnionType,
)
from .type_walker import render_type_syntax, unwrap_to_named

# Root fields generated next to each table by Hasura-style endpoints
TABLE_HELPER_SUFFIXES = ("_aggregate", "_by_pk", "_stream")
DEFAULT_TABLE_SCHEMA = "public"
_SCHEMA_HINT = re.compile(r"schema\s*:\s*\"?([A-Za-z_][A-Za-z0-9_]*)", re.IGNORECASE)


@dataclass(frozen=True)
class RootFieldEntry:
    name: str
    description: str | None
    operation: OperationKind


@dataclass(frozen=True)
class TableEntry:
    name: str
    schema: str
    description: str | None
    type_name: str


class SchemaIndex:
    """Query surface over a Schema value. Holds no state of its own."""

    def __init__(self, schema: Schema):
        self.schema = schema

    def find_type(self, name: str) -> NamedType | None:
        return self.schema.get_type_by_name(name)

    def root_type(self, operation: OperationKind) -> ObjectType | None:
        """Return the root object type for an operation kind, if the schema has one."""
        name = self.schema.root_type_name(operation)
        if name is None:
            return None
        root = self.find_type(name)
        return root if isinstance(root, ObjectType) else None

    def find_root_field(self, operation: OperationKind, field_name: str) -> Field | None:
        root = self.root_type(operation)
        if root is None:
            return None
        for root_field in root.fields:
            if root_field.name == field_name:
                return root_field
        return None

    def list_root_fields(self, operation: OperationKind | None = None) -> list[RootFieldEntry]:
        """List root fields sorted by name.

        With no operation kind, every existing root is listed, grouped by
        origin in query, mutation, subscription order.
        """
        operations = [operation] if operation is not None else list(OperationKind)
        entries = []
        for op in operations:
            root = self.root_type(op)
            if root is None:
                continue
            fields = sorted(root.fields, key=lambda f: f.name)
            entries.extend(RootFieldEntry(f.name, f.description, op) for f in fields)
        return entries

    def list_tables(self) -> list[TableEntry]:
        """Best-effort list of queryable tables.

        A table is a query root field returning (a list of) an object type
        that is not one of the ``_aggregate``/``_by_pk``/``_stream`` helper
        roots. The owning database schema is read from a ``schema: name``
        hint in the field description. Both rules follow the naming habits
        of Hasura-style endpoints and will not hold for every API.
        """
        root = self.root_type(OperationKind.QUERY)
        if root is None:
            return []

        tables = []
        for root_field in root.fields:
            if root_field.name.endswith(TABLE_HELPER_SUFFIXES):
                continue
            type_name = unwrap_to_named(root_field.type)
            if not isinstance(self.find_type(type_name), ObjectType):
                continue
            tables.append(TableEntry(
                name=root_field.name,
                schema=self._schema_hint(root_field.description),
                description=root_field.description,
                type_name=type_name,
            ))
        return sorted(tables, key=lambda t: (t.schema, t.name))

    @staticmethod
    def _schema_hint(description: str | None) -> str:
        match = _SCHEMA_HINT.search(description or "")
        return match.group(1) if match else DEFAULT_TABLE_SCHEMA

    def describe_field(self, field: Field) -> dict[str, Any]:
        """Describe a field with its return type and arguments in GraphQL syntax."""
        return {
            "name": field.name,
            "description": field.description,
            "type": render_type_syntax(field.type),
            "args": [self.describe_input_value(arg) for arg in field.args],
            "is_deprecated": field.is_deprecated,
            "deprecation_reason": field.deprecation_reason,
        }

    @staticmethod
    def describe_input_value(value: InputValue) -> dict[str, Any]:
        return {
            "name": value.name,
            "description": value.description,
            "type": render_type_syntax(value.type),
            "default_value": value.default_value,
        }

    def describe_type(self, name: str) -> dict[str, Any]:
        """Return a structured description of a named type.

        Raises:
            NotFoundError: If the type does not exist
        """
        type_def = self.find_type(name)
        if type_def is None:
            raise NotFoundError(f"Type '{name}' not found in the schema.")

        payload: dict[str, Any] = {
            "name": type_def.name,
            "kind": type_def.kind.value,
            "description": type_def.description,
        }

        if isinstance(type_def, ObjectType):
            payload["fields"] = [self.describe_field(f) for f in type_def.fields]
            payload["interfaces"] = list(type_def.interfaces)
        elif isinstance(type_def, InterfaceType):
            payload["fields"] = [self.describe_field(f) for f in type_def.fields]
            payload["possible_types"] = list(type_def.possible_types)
        elif isinstance(type_def, UnionType):
            payload["possible_types"] = list(type_def.possible_types)
        elif isinstance(type_def, InputObjectType):
            payload["input_fields"] = [self.describe_input_value(v) for v in type_def.input_fields]
        elif isinstance(type_def, EnumType):
            payload["enum_values"] = [
                {
                    "name": v.name,
                    "description": v.description,
                    "is_deprecated": v.is_deprecated,
                    "deprecation_reason": v.deprecation_reason,
                }
                for v in type_def.values
            ]
        else:
            payload["info"] = f"Type '{name}' is a {type_def.kind.value} and has no traversable fields."

        return payload
