"""Runtime configuration for the explorer server."""

import json

import httpx
from pydantic import BaseModel, Field, field_validator

DEFAULT_SERVER_NAME = "gql-explorer"


class ServerConfig(BaseModel):
    """Settings for one GraphQL endpoint."""
    endpoint: str
    headers: dict[str, str] = Field(default_factory=dict)
    timeout: float = Field(default=30.0, gt=0)
    server_name: str = DEFAULT_SERVER_NAME

    @field_validator("endpoint")
    @classmethod
    def check_endpoint(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"Endpoint must be an http(s) URL, got {value!r}")
        try:
            url = httpx.URL(value)
        except httpx.InvalidURL as e:
            raise ValueError(f"Invalid endpoint URL {value!r}: {e}") from e
        if not url.host:
            raise ValueError(f"Endpoint URL has no host: {value!r}")
        return value


def parse_header(raw: str) -> tuple[str, str]:
    """Parse a ``Name: Value`` header string."""
    if ":" not in raw:
        raise ValueError(f"Invalid header (expected 'Name: Value'): {raw}")
    name, value = raw.split(":", 1)
    name = name.strip()
    if not name:
        raise ValueError(f"Invalid header name in: {raw}")
    return name, value.strip()


def load_headers_json(raw: str | None) -> dict[str, str]:
    """Parse a JSON object of headers, as given in ``GRAPHQL_HEADERS``."""
    if not raw:
        return {}
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError("GRAPHQL_HEADERS must be valid JSON") from exc
    if not isinstance(parsed, dict):
        raise ValueError("GRAPHQL_HEADERS must be a JSON object")
    return {str(key): str(val) for key, val in parsed.items()}


def build_headers(headers_json: str | None, header_options: list[str] | tuple[str, ...] = ()) -> dict[str, str]:
    """Merge JSON headers with ``--header`` options; options win."""
    headers = load_headers_json(headers_json)
    for raw in header_options:
        name, value = parse_header(raw)
        headers[name] = value
    return headers
