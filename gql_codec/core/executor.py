"""Sending operations and classifying their responses.

`send` makes exactly one transport call and turns the outcome into either
the decoded value or one GraphQLClientError subclass:

    NetworkError      the transport raised instead of returning a response
    HttpError         non-2xx status without a GraphQL `errors` array
    GraphQLError      the server reported errors (2xx or not)
    InvalidJsonError  a 2xx body that is not JSON
    DecodeError       valid JSON that does not match the selection

A 2xx response whose `data` is null returns None rather than raising.
"""

import json
import logging
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from .errors import (
    DecodeError,
    GraphQLError,
    HttpError,
    InvalidJsonError,
    NetworkError,
    ServerError,
)
from .operation import Operation
from .transport import AsyncTransport, HttpRequest, HttpResponse, Transport

logger = logging.getLogger(__name__)

T = TypeVar("T")

_server_errors = TypeAdapter(list[ServerError])


def build_request(operation: Operation[Any], variables: dict[str, Any] | None = None) -> HttpRequest:
    """Serialize `{"query": ..., "variables": ...}` into a POST request."""
    return HttpRequest(body=json.dumps(operation.payload(variables)))


def _parse_errors(body: Any) -> list[ServerError] | None:
    """Return the `errors` array if present and well-formed, else None.

    An empty array is treated as no errors.
    """
    if not isinstance(body, dict) or not body.get("errors"):
        return None
    try:
        return _server_errors.validate_python(body["errors"])
    except ValidationError:
        return None


def classify_response(operation: Operation[T], response: HttpResponse) -> T | None:
    """Decode a response or raise the matching GraphQLClientError.

    Args:
        operation: The operation the response answers
        response: The raw HTTP response

    Returns:
        The decoded value, or None when the server returned `"data": null`

    Raises:
        HttpError: Non-2xx status without parsable GraphQL errors
        GraphQLError: The body carries a GraphQL `errors` array
        InvalidJsonError: A 2xx body that is not valid JSON
        DecodeError: The body's shape does not match the operation
    """
    if not response.is_success:
        try:
            body = json.loads(response.body)
        except ValueError:
            body = None
        errors = _parse_errors(body)
        if errors is not None:
            logger.debug("HTTP %s with %d GraphQL errors", response.status, len(errors))
            raise GraphQLError(errors, body.get("data"))
        raise HttpError(response.status, response.body)

    try:
        body = json.loads(response.body)
    except ValueError as e:
        # JSONDecodeError, or an integer literal over the int conversion limit
        raise InvalidJsonError(e, response.body) from e

    errors = _parse_errors(body)
    if errors is not None:
        logger.debug("GraphQL errors in successful response: %d", len(errors))
        raise GraphQLError(errors, body.get("data"))

    try:
        return operation.decoder.decode(body)
    except DecodeError as e:
        if isinstance(body, dict) and "data" in body and body["data"] is None:
            logger.debug("Response data is null")
            return None
        raise e.with_body(response.body) from e


def send(
    operation: Operation[T],
    transport: Transport,
    variables: dict[str, Any] | None = None,
) -> T | None:
    """Send an operation and decode the response.

    Args:
        operation: The operation to send
        transport: Callable turning an HttpRequest into an HttpResponse
        variables: Values for the operation's variables

    Returns:
        The decoded value, or None when the server returned `"data": null`

    Raises:
        NetworkError: The transport raised
        GraphQLClientError: Any other classified failure (see classify_response)
    """
    request = build_request(operation, variables)
    logger.debug("Sending %s %s", operation.kind.value, operation.name or "<anonymous>")
    try:
        response = transport(request)
    except Exception as e:
        raise NetworkError(e) from e
    return classify_response(operation, response)


async def send_async(
    operation: Operation[T],
    transport: AsyncTransport,
    variables: dict[str, Any] | None = None,
) -> T | None:
    """Async `send`: awaits exactly one transport call."""
    request = build_request(operation, variables)
    logger.debug("Sending %s %s", operation.kind.value, operation.name or "<anonymous>")
    try:
        response = await transport(request)
    except Exception as e:
        raise NetworkError(e) from e
    return classify_response(operation, response)
