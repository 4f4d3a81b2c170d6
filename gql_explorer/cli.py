"""Command-line interface for gql-explorer."""

import asyncio
import json
import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from .core.cache import SchemaCache
from .core.config import ServerConfig, build_headers
from .core.errors import ExplorerError
from .core.executor import GraphQLExecutor
from .server import create_server


def configure_logging(verbose: bool) -> None:
    """Log to stderr; stdout carries the stdio transport."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def endpoint_options(func):
    """Options shared by every command that talks to an endpoint."""
    options = [
        click.option(
            "--endpoint",
            "-e",
            required=True,
            envvar="GRAPHQL_ENDPOINT",
            help="GraphQL endpoint URL (env: GRAPHQL_ENDPOINT).",
        ),
        click.option(
            "--headers-json",
            envvar="GRAPHQL_HEADERS",
            help="Extra request headers as a JSON object (env: GRAPHQL_HEADERS).",
        ),
        click.option(
            "--header",
            "-H",
            "header_options",
            multiple=True,
            help="Extra request header as 'Name: Value'. Repeatable.",
        ),
        click.option(
            "--timeout",
            type=float,
            default=30.0,
            show_default=True,
            envvar="GRAPHQL_TIMEOUT",
            help="Request timeout in seconds (env: GRAPHQL_TIMEOUT).",
        ),
        click.option(
            "--verbose",
            "-v",
            is_flag=True,
            help="Enable debug logging.",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def load_config(endpoint: str, headers_json: str | None, header_options: tuple[str, ...], timeout: float) -> ServerConfig:
    """Build a ServerConfig, reporting bad values as click usage errors."""
    try:
        headers = build_headers(headers_json, header_options)
        return ServerConfig(endpoint=endpoint, headers=headers, timeout=timeout)
    except (ValueError, ValidationError) as e:
        raise click.BadParameter(str(e)) from e


@click.group()
@click.version_option(package_name="gql-explorer")
def main():
    """Explore and query a GraphQL API through introspection.

    Serves discovery and execution tools over the Model Context Protocol.
    """
    pass


@main.command()
@endpoint_options
@click.option(
    "--transport",
    "-t",
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    default="stdio",
    show_default=True,
    envvar="MCP_TRANSPORT",
    help="MCP transport to serve on (env: MCP_TRANSPORT).",
)
def serve(endpoint, headers_json, header_options, timeout, verbose, transport):
    """Start the MCP server.

    Examples:

        gql-explorer serve --endpoint https://example.com/v1/graphql

        gql-explorer serve -e http://localhost:8080/v1/graphql -H "x-hasura-admin-secret: s3cret"
    """
    configure_logging(verbose)
    config = load_config(endpoint, headers_json, header_options, timeout)
    server = create_server(config)
    server.run(transport=transport)


@main.command()
@endpoint_options
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the schema to this file instead of stdout.",
)
def schema(endpoint, headers_json, header_options, timeout, verbose, output):
    """Fetch the schema by introspection and print it as JSON.

    Examples:

        gql-explorer schema -e https://example.com/graphql -o schema.json
    """
    configure_logging(verbose)
    config = load_config(endpoint, headers_json, header_options, timeout)

    async def fetch():
        async with GraphQLExecutor(config.endpoint, config.headers, timeout=config.timeout) as executor:
            return await SchemaCache(executor).ensure_loaded()

    try:
        loaded = asyncio.run(fetch())
    except ExplorerError as e:
        raise click.ClickException(str(e)) from e

    text = json.dumps(loaded.raw, indent=2)
    if output is None:
        click.echo(text)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text)
    if verbose:
        click.echo(f"  Types: {len(loaded.types)}", err=True)
    click.echo(f"Done! Wrote schema to {output}", err=True)


if __name__ == "__main__":
    main()
