"""Named operations exposed to an agent.

Each handler validates its arguments, loads the schema when it needs it,
builds or forwards a GraphQL document, and shapes the result into plain
JSON-compatible data.
"""

import json
import logging
from typing import Any, TypeVar

from pydantic import BaseModel, Field, ValidationError, field_validator

from .cache import SchemaCache
from .errors import ArgumentError, NotFoundError
from .executor import GraphQLExecutor
from .index import DEFAULT_TABLE_SCHEMA, SchemaIndex
from .ir import InterfaceType, ObjectType, OperationKind
from .parser import parse_type_ref
from .query_builder import AggregateFunction, QueryBuilder
from .type_walker import render_type_syntax, unwrap_to_named

logger = logging.getLogger(__name__)

NO_DESCRIPTION = "No description."
MUTATION_KEYWORD = "mutation"
HEALTH_CHECK_QUERY = "query HealthCheck { __typename }"

M = TypeVar("M", bound=BaseModel)


# =============================================================================
# Argument models
# =============================================================================


class ListRootFieldsArgs(BaseModel):
    field_type: OperationKind | None = None

    @field_validator("field_type", mode="before")
    @classmethod
    def normalize_kind(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


class RootFieldArgs(BaseModel):
    field_name: str = Field(min_length=1)
    operation_type: OperationKind = OperationKind.QUERY

    @field_validator("operation_type", mode="before")
    @classmethod
    def normalize_kind(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


class TypeNameArgs(BaseModel):
    type_name: str = Field(min_length=1)


class PreviewTableArgs(BaseModel):
    table_name: str = Field(min_length=1)
    limit: int = Field(default=5, gt=0)


class AggregateArgs(BaseModel):
    table_name: str = Field(min_length=1)
    aggregate_function: AggregateFunction
    field: str | None = None
    filter: dict[str, Any] | None = None

    @field_validator("aggregate_function", mode="before")
    @classmethod
    def normalize_function(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value


class DescribeTableArgs(BaseModel):
    table_name: str = Field(min_length=1)
    schema_name: str = DEFAULT_TABLE_SCHEMA


class DocumentArgs(BaseModel):
    document: str = Field(min_length=1)
    variables: dict[str, Any] | None = None


class HealthCheckArgs(BaseModel):
    health_endpoint_url: str | None = None

    @field_validator("health_endpoint_url")
    @classmethod
    def check_url(cls, value: str | None) -> str | None:
        if value is not None and not value.startswith(("http://", "https://")):
            raise ValueError(f"Health endpoint must be an http(s) URL, got {value!r}")
        return value


def validate_args(model: type[M], **kwargs: Any) -> M:
    """Instantiate an argument model, turning validation failures into ArgumentError."""
    try:
        return model(**kwargs)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'arguments'}: {err['msg']}"
            for err in e.errors()
        )
        raise ArgumentError(f"Invalid arguments: {details}") from e


def looks_like_mutation(document: str) -> bool:
    """Syntactic prefix check, not a parse: does the text start with ``mutation``?

    Shorthand queries, comments before the keyword and multi-operation
    documents are not recognised.
    """
    return document.strip().lower().startswith(MUTATION_KEYWORD)


def _describe_root(name: str, description: str | None) -> dict[str, Any]:
    return {"name": name, "description": description or NO_DESCRIPTION}


def _column_type(data: dict[str, Any] | None) -> str:
    """Render a type from the depth-limited table query; deeper chains end in ``?``."""
    return render_type_syntax(parse_type_ref(data, partial=True), partial=True)


# =============================================================================
# Handlers
# =============================================================================


class Operations:
    """The named operations, sharing one executor and one schema cache."""

    def __init__(self, executor: GraphQLExecutor, cache: SchemaCache | None = None):
        self.executor = executor
        self.cache = cache if cache is not None else SchemaCache(executor)

    async def _index(self) -> SchemaIndex:
        return SchemaIndex(await self.cache.ensure_loaded())

    async def schema_json(self) -> str:
        """The raw introspection ``__schema`` object as pretty-printed JSON."""
        schema = await self.cache.ensure_loaded()
        return json.dumps(schema.raw, indent=2)

    async def list_root_fields(self, field_type: str | None = None) -> list[dict[str, Any]]:
        """List root fields, optionally only those of one operation kind."""
        args = validate_args(ListRootFieldsArgs, field_type=field_type)
        index = await self._index()
        entries = index.list_root_fields(args.field_type)
        if args.field_type is not None:
            return [_describe_root(e.name, e.description) for e in entries]
        return [
            {**_describe_root(e.name, e.description), "operation": e.operation.value}
            for e in entries
        ]

    async def list_mutations(self) -> dict[str, Any]:
        index = await self._index()
        if index.root_type(OperationKind.MUTATION) is None:
            return {"mutations": [], "info": "No mutations defined in the schema."}
        entries = index.list_root_fields(OperationKind.MUTATION)
        return {"mutations": [_describe_root(e.name, e.description) for e in entries]}

    async def list_tables(self) -> dict[str, Any]:
        """Tables grouped by database schema (best-effort, see SchemaIndex.list_tables)."""
        index = await self._index()
        schemas: dict[str, list[dict[str, Any]]] = {}
        for table in index.list_tables():
            schemas.setdefault(table.schema, []).append(
                {"name": table.name, "type": table.type_name, "description": table.description}
            )
        return {"schemas": schemas}

    async def describe_root_field(self, field_name: str, operation_type: str = "QUERY") -> dict[str, Any]:
        """Arguments, return type and immediate sub-fields of a root field."""
        args = validate_args(RootFieldArgs, field_name=field_name, operation_type=operation_type)
        index = await self._index()
        root_field = index.find_root_field(args.operation_type, args.field_name)
        if root_field is None:
            raise NotFoundError(f"Field '{args.field_name}' not found in '{args.operation_type.value.lower()}'.")

        payload = index.describe_field(root_field)
        return_type = index.find_type(unwrap_to_named(root_field.type))
        if isinstance(return_type, (ObjectType, InterfaceType)):
            payload["nested_fields"] = [index.describe_field(f) for f in return_type.fields]
        return payload

    async def describe_graphql_type(self, type_name: str) -> dict[str, Any]:
        args = validate_args(TypeNameArgs, type_name=type_name)
        index = await self._index()
        return index.describe_type(args.type_name)

    async def preview_table_data(self, table_name: str, limit: int = 5) -> dict[str, Any]:
        """Fetch a few rows of a table, selecting its scalar-like columns."""
        args = validate_args(PreviewTableArgs, table_name=table_name, limit=limit)
        schema = await self.cache.ensure_loaded()
        document = QueryBuilder(schema).build_preview(args.table_name, args.limit)
        return await self.executor.execute(document.query, document.variables)

    async def aggregate_data(
        self,
        table_name: str,
        aggregate_function: str,
        field: str | None = None,
        filter: dict[str, Any] | None = None,
    ) -> Any:
        """Run count/sum/avg/min/max over a table through its ``_aggregate`` root."""
        args = validate_args(
            AggregateArgs,
            table_name=table_name,
            aggregate_function=aggregate_function,
            field=field,
            filter=filter,
        )
        target = args.field
        if args.aggregate_function is AggregateFunction.COUNT and target:
            logger.warning("Ignoring field '%s' for count aggregate on '%s'", target, args.table_name)
            target = None

        document = QueryBuilder.build_aggregate(
            args.table_name, args.aggregate_function, target, args.filter
        )
        result = await self.executor.execute(document.query, document.variables)

        root = result.get(f"{args.table_name}_aggregate") if isinstance(result, dict) else None
        if isinstance(root, dict) and root.get("aggregate") is not None:
            return root["aggregate"]
        logger.warning("Unexpected aggregate response shape for '%s'; returning raw result", args.table_name)
        return result

    async def describe_table(self, table_name: str, schema_name: str = DEFAULT_TABLE_SCHEMA) -> dict[str, Any]:
        """Describe a table's columns via a targeted introspection query.

        When the exact name is unknown the lookup is retried once with the
        first letter upper-cased. That fallback is a naming-convention guess
        and may not match every endpoint.
        """
        args = validate_args(DescribeTableArgs, table_name=table_name, schema_name=schema_name)

        type_data = await self._fetch_type(args.table_name)
        if type_data is None:
            retry_name = args.table_name[:1].upper() + args.table_name[1:]
            logger.info("Type '%s' not found, retrying as '%s'", args.table_name, retry_name)
            type_data = await self._fetch_type(retry_name)
        if type_data is None:
            raise NotFoundError(f"Table '{args.table_name}' not found in the schema.")

        columns = [
            {
                "name": f["name"],
                "type": _column_type(f.get("type")),
                "description": f.get("description"),
                "args": [
                    {
                        "name": a["name"],
                        "description": a.get("description"),
                        "type": _column_type(a.get("type")),
                    }
                    for a in f.get("args") or []
                ],
            }
            for f in type_data.get("fields") or []
        ]
        return {
            "table": {
                "name": type_data.get("name"),
                "schema": args.schema_name,
                "description": type_data.get("description"),
                "columns": sorted(columns, key=lambda c: c["name"]),
            }
        }

    async def _fetch_type(self, type_name: str) -> dict[str, Any] | None:
        document = QueryBuilder.build_table_description(type_name)
        result = await self.executor.execute(document.query, document.variables)
        return result.get("__type")

    async def run_graphql_query(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Execute a read-only document. Documents starting with ``mutation`` are refused."""
        args = validate_args(DocumentArgs, document=query, variables=variables)
        if looks_like_mutation(args.document):
            raise ArgumentError("Mutations are not allowed here; use run_graphql_mutation instead.")
        return await self.executor.execute(args.document, args.variables)

    async def run_graphql_mutation(self, mutation: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Execute a mutation. The document must start with ``mutation``."""
        args = validate_args(DocumentArgs, document=mutation, variables=variables)
        if not looks_like_mutation(args.document):
            raise ArgumentError("Document does not start with 'mutation'; use run_graphql_query for queries.")
        return await self.executor.execute(args.document, args.variables)

    async def health_check(self, health_endpoint_url: str | None = None) -> str:
        """Report endpoint reachability as text. Never raises."""
        try:
            args = validate_args(HealthCheckArgs, health_endpoint_url=health_endpoint_url)
            if args.health_endpoint_url:
                response = await self.executor.check_health(args.health_endpoint_url)
                return f"Health check passed: {args.health_endpoint_url} responded with HTTP {response.status_code}."
            await self.executor.execute(HEALTH_CHECK_QUERY)
            return f"Health check passed: GraphQL endpoint {self.executor.url} is reachable."
        except Exception as e:
            logger.warning("Health check failed: %s", e)
            return f"Health check failed: {e}"
