"""GraphQL executor for executing queries against a GraphQL endpoint.

Handles HTTP communication, error mapping, and response parsing.
"""

import logging
from typing import Any

import httpx

from .errors import GraphQLError, TransportError

logger = logging.getLogger(__name__)


class GraphQLExecutor:
    """Executes GraphQL documents against an endpoint.

    Examples:
        executor = GraphQLExecutor(url)
        executor = GraphQLExecutor(url, headers={"Authorization": "Bearer ..."})
        data = await executor.execute("{ __typename }")
    """

    def __init__(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the executor.

        Args:
            url: GraphQL endpoint URL
            headers: Headers sent with every request
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.url = url
        self.timeout = timeout
        self._headers = dict(headers or {})
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            headers = {"Content-Type": "application/json", "Accept": "application/json"}
            headers.update(self._headers)

            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers=headers,
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "GraphQLExecutor":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def execute(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Execute a GraphQL document.

        Args:
            query: GraphQL document text
            variables: Query variables
            headers: Extra headers for this request only

        Returns:
            The 'data' portion of the response

        Raises:
            TransportError: If the endpoint cannot be reached or answers with
                something other than a GraphQL JSON response
            GraphQLError: If the response contains errors
        """
        client = await self._get_client()

        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        try:
            response = await client.post(self.url, json=payload, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error("GraphQL request to %s failed: %s", self.url, e)
            raise TransportError(f"Request to {self.url} failed: {e}") from e

        try:
            result = response.json()
        except ValueError:
            result = None

        if isinstance(result, dict) and result.get("errors"):
            error_messages = ", ".join(
                e.get("message", str(e)) if isinstance(e, dict) else str(e) for e in result["errors"]
            )
            logger.error("GraphQL request failed: %s", error_messages)
            raise GraphQLError(f"GraphQL operation failed: {error_messages}", result["errors"])

        if response.is_error:
            raise TransportError(f"HTTP {response.status_code} from {self.url}: {response.text[:200]}")
        if not isinstance(result, dict):
            raise TransportError(f"Endpoint {self.url} did not return a JSON object")

        return result.get("data") or {}

    async def check_health(self, url: str) -> httpx.Response:
        """GET an arbitrary URL (e.g. a health endpoint) with the configured headers.

        Raises:
            TransportError: On network failure or an HTTP error status
        """
        client = await self._get_client()
        try:
            response = await client.get(url)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(f"Request to {url} failed: {e}") from e
        return response
