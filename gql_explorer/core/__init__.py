"""Core modules for GraphQL schema exploration."""

from .cache import SchemaCache
from .config import ServerConfig, build_headers, load_headers_json, parse_header
from .errors import (
    ArgumentError,
    ExplorerError,
    GraphQLError,
    NotFoundError,
    SchemaIntegrityError,
    SchemaUnavailableError,
    TransportError,
)
from .executor import GraphQLExecutor
from .index import RootFieldEntry, SchemaIndex, TableEntry
from .ir import (
    EnumType,
    EnumValue,
    Field,
    InputObjectType,
    InputValue,
    InterfaceType,
    NamedType,
    ObjectType,
    OperationKind,
    ScalarType,
    Schema,
    TypeKind,
    TypeRef,
    UnionType,
)
from .operations import Operations, looks_like_mutation
from .parser import INTROSPECTION_QUERY, IntrospectionParser, parse_introspection, parse_type_ref
from .query_builder import AggregateFunction, QueryBuilder, QueryDocument, check_identifier
from .type_walker import is_scalar_like, render_type_syntax, unwrap_to_named

__all__ = [
    # Errors
    "ExplorerError",
    "TransportError",
    "GraphQLError",
    "SchemaIntegrityError",
    "SchemaUnavailableError",
    "NotFoundError",
    "ArgumentError",
    # IR types
    "TypeKind",
    "OperationKind",
    "TypeRef",
    "Field",
    "InputValue",
    "EnumValue",
    "NamedType",
    "ScalarType",
    "ObjectType",
    "InterfaceType",
    "UnionType",
    "EnumType",
    "InputObjectType",
    "Schema",
    # Parser
    "INTROSPECTION_QUERY",
    "IntrospectionParser",
    "parse_introspection",
    "parse_type_ref",
    # Type walker
    "unwrap_to_named",
    "is_scalar_like",
    "render_type_syntax",
    # Schema access
    "SchemaCache",
    "SchemaIndex",
    "RootFieldEntry",
    "TableEntry",
    # Query Builder
    "AggregateFunction",
    "QueryBuilder",
    "QueryDocument",
    "check_identifier",
    # Executor
    "GraphQLExecutor",
    # Operations
    "Operations",
    "looks_like_mutation",
    # Config
    "ServerConfig",
    "build_headers",
    "load_headers_json",
    "parse_header",
]
