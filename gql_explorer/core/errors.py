"""Exception hierarchy for schema exploration and query execution."""

from typing import Any


class ExplorerError(Exception):
    """Base class for all errors raised by gql-explorer."""


class TransportError(ExplorerError):
    """The endpoint could not be reached or returned an unusable response."""


class GraphQLError(ExplorerError):
    """Exception raised for GraphQL errors."""

    def __init__(self, message: str, errors: list[dict[str, Any]]):
        self.message = message
        self.errors = errors
        super().__init__(message)

    @property
    def messages(self) -> list[str]:
        return [e.get("message", str(e)) if isinstance(e, dict) else str(e) for e in self.errors]


class SchemaIntegrityError(ExplorerError):
    """Introspection data is missing its root object or has a broken type chain."""


class SchemaUnavailableError(ExplorerError):
    """The schema could not be fetched; the cause is chained."""


class NotFoundError(ExplorerError):
    """A named type, field or table does not exist."""


class ArgumentError(ExplorerError, ValueError):
    """A caller-supplied argument violates a documented precondition."""
