"""Command-line interface for gql-codec."""

import importlib
import json
import logging

import click
from graphql import GraphQLSyntaxError, parse
from pydantic_core import to_jsonable_python

from .core.errors import DecodeError, GraphQLClientError, GraphQLError, HttpError
from .core.executor import send
from .core.operation import Operation
from .core.transport import HttpxTransport


def load_operation(target: str) -> Operation:
    """Import `package.module:attribute` and check it is an Operation."""
    module_name, _, attribute = target.partition(":")
    if not module_name or not attribute:
        raise click.BadParameter(f"Expected MODULE:ATTRIBUTE, got {target!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"Cannot import {module_name}: {e}") from e
    operation = getattr(module, attribute, None)
    if not isinstance(operation, Operation):
        raise click.BadParameter(f"{target} is not an Operation")
    return operation


def parse_variables(pairs: tuple[str, ...]) -> dict:
    """Parse `name=JSON` pairs; values that are not JSON are taken as strings."""
    variables = {}
    for pair in pairs:
        name, sep, raw = pair.partition("=")
        if not sep:
            raise click.BadParameter(f"Expected name=value, got {pair!r}")
        try:
            variables[name] = json.loads(raw)
        except json.JSONDecodeError:
            variables[name] = raw
    return variables


def parse_headers(pairs: tuple[str, ...]) -> dict[str, str]:
    headers = {}
    for pair in pairs:
        name, sep, value = pair.partition(":")
        if not sep:
            raise click.BadParameter(f"Expected Name: value, got {pair!r}")
        headers[name.strip()] = value.strip()
    return headers


@click.group()
@click.version_option(package_name="gql-codec")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """Render and send GraphQL operations built with gql-codec."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


@main.command()
@click.argument("target")
@click.option(
    "--check",
    is_flag=True,
    help="Parse the rendered text with graphql-core and fail on syntax errors.",
)
def render(target: str, check: bool):
    """Print the text of an operation.

    Examples:

        gql-codec render myapp.queries:GET_COUNTRY

        gql-codec render myapp.queries:GET_COUNTRY --check
    """
    operation = load_operation(target)
    if check:
        try:
            parse(operation.text)
        except GraphQLSyntaxError as e:
            raise click.ClickException(f"Invalid GraphQL: {e.message}") from e
    click.echo(operation.text)


@main.command(name="send")
@click.argument("target")
@click.option("--url", "-u", required=True, help="GraphQL endpoint URL.")
@click.option(
    "--var",
    "variables",
    multiple=True,
    help="Variable as name=JSON (repeatable), e.g. --var code='\"US\"'.",
)
@click.option(
    "--header",
    "-H",
    "headers",
    multiple=True,
    help="Extra request header as 'Name: value' (repeatable).",
)
@click.option("--timeout", default=30.0, show_default=True, help="Request timeout in seconds.")
def send_command(target: str, url: str, variables: tuple, headers: tuple, timeout: float):
    """Send an operation and print the decoded result as JSON.

    Examples:

        gql-codec send myapp.queries:GET_COUNTRY -u https://countries.trevorblades.com/graphql --var code='"US"'
    """
    operation = load_operation(target)
    with HttpxTransport(url, headers=parse_headers(headers), timeout=timeout) as transport:
        try:
            result = send(operation, transport, parse_variables(variables))
        except GraphQLError as e:
            for error in e.errors:
                click.echo(f"error: {error.message}", err=True)
            raise click.ClickException("Server returned GraphQL errors") from e
        except HttpError as e:
            raise click.ClickException(f"HTTP {e.status}: {e.body[:200]}") from e
        except DecodeError as e:
            for failure in e.failures:
                click.echo(f"decode: {failure}", err=True)
            raise click.ClickException("Response did not match the selection") from e
        except GraphQLClientError as e:
            raise click.ClickException(str(e)) from e

    click.echo(json.dumps(to_jsonable_python(result), indent=2))


if __name__ == "__main__":
    main()
