"""Error taxonomy for sending operations and decoding responses.

Every failure `send` can produce is one subclass of GraphQLClientError,
so callers can catch the whole family or a single kind.
"""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

PathSegment = str | int


@dataclass(frozen=True)
class DecodeFailure:
    """A single place where a response did not have the expected shape."""
    expected: str
    found: str
    path: tuple[PathSegment, ...] = ()

    def __str__(self) -> str:
        location = ".".join(str(p) for p in self.path) or "<root>"
        return f"expected {self.expected}, found {self.found} at {location}"


class ErrorLocation(BaseModel):
    line: int
    column: int


class ServerError(BaseModel):
    """One entry of the `errors` array of a GraphQL response."""
    message: str
    path: list[str | int] | None = None
    locations: list[ErrorLocation] | None = None
    extensions: Any = None


class GraphQLClientError(Exception):
    """Base exception for every classified failure."""
    pass


class NetworkError(GraphQLClientError):
    """Raised when the transport itself failed to produce a response."""

    def __init__(self, error: Exception):
        self.error = error
        super().__init__(f"Transport failed: {error}")


class HttpError(GraphQLClientError):
    """Raised for a non-2xx response without a GraphQL `errors` array."""

    def __init__(self, status: int, body: str):
        self.status = status
        self.body = body
        super().__init__(f"Unexpected HTTP status {status}")


class GraphQLError(GraphQLClientError):
    """Raised when the server reported GraphQL errors.

    All reported errors are kept, in server order. `data` holds the raw
    `data` value when the server sent partial data alongside the errors.
    """

    def __init__(self, errors: list[ServerError], data: Any = None):
        self.errors = errors
        self.data = data
        messages = "; ".join(e.message for e in errors)
        super().__init__(f"GraphQL errors: {messages}")


class InvalidJsonError(GraphQLClientError):
    """Raised when a response body is not valid JSON."""

    def __init__(self, error: Exception, body: str):
        self.error = error
        self.body = body
        super().__init__(f"Invalid JSON in response: {error}")


class DecodeError(GraphQLClientError):
    """Raised when valid JSON does not match the selection's shape.

    Decoders raise it without a body; `send` re-raises it with the raw
    response body attached.
    """

    def __init__(self, failures: list[DecodeFailure], body: str | None = None):
        self.failures = failures
        self.body = body
        details = "; ".join(str(f) for f in failures)
        super().__init__(f"Failed to decode response: {details}")

    def with_body(self, body: str) -> "DecodeError":
        return DecodeError(self.failures, body)
