"""In-process cache for the introspected schema.

The cache is either empty or holds one fully parsed ``Schema``. The first
caller to find it empty fetches the schema while holding a lock; callers
arriving meanwhile wait for that fetch instead of issuing their own. A
failed fetch leaves the cache empty so the next call starts from scratch.
There is no expiry: once loaded the schema is kept for the life of the
process.
"""

import asyncio
import logging
from typing import Any, Protocol

from .errors import ExplorerError, SchemaUnavailableError
from .ir import Schema
from .parser import INTROSPECTION_QUERY, parse_introspection

logger = logging.getLogger(__name__)


class Executor(Protocol):
    """Anything that can run a GraphQL document and return its ``data``."""

    async def execute(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        ...


class SchemaCache:
    """Owns the single cached copy of the endpoint's schema."""

    def __init__(self, executor: Executor):
        self._executor = executor
        self._schema: Schema | None = None
        self._lock = asyncio.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._schema is not None

    async def ensure_loaded(self) -> Schema:
        """Return the cached schema, fetching it on first use.

        Raises:
            SchemaUnavailableError: If the fetch or parse fails
        """
        schema = self._schema
        if schema is not None:
            return schema

        async with self._lock:
            # Another caller may have finished loading while we waited
            if self._schema is not None:
                return self._schema

            logger.info("Fetching GraphQL schema via introspection...")
            try:
                result = await self._executor.execute(INTROSPECTION_QUERY)
                schema = parse_introspection(result)
            except ExplorerError as e:
                logger.error("Failed to fetch or cache introspection schema: %s", e)
                self._schema = None
                raise SchemaUnavailableError(f"Failed to get GraphQL schema: {e}") from e

            self._schema = schema
            logger.info("Introspection successful, schema cached (%d types).", len(schema.types))
            return schema
