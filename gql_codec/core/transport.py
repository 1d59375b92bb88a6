"""HTTP transport contract and httpx-based implementations.

The executor only needs one capability: turn an HttpRequest into an
HttpResponse, raising if no response could be obtained. Anything callable
that way works; HttpxTransport and AsyncHttpxTransport are ready-made
implementations on top of httpx.

Examples:
    transport = HttpxTransport("https://countries.trevorblades.com/graphql")
    transport = HttpxTransport(url, headers={"Authorization": f"Bearer {token}"})
    transport = HttpxTransport(url, auth=httpx.BasicAuth("user", "pass"))

    # Custom transport for tests
    def fake(request: HttpRequest) -> HttpResponse:
        return HttpResponse(200, '{"data": {"country": null}}')
"""

import logging
from dataclasses import dataclass, field
from typing import Awaitable, Protocol

import httpx

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpRequest:
    body: str
    headers: dict[str, str] = field(default_factory=lambda: {"Content-Type": "application/json"})
    method: str = "POST"


@dataclass(frozen=True)
class HttpResponse:
    status: int
    body: str
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300


class Transport(Protocol):
    def __call__(self, request: HttpRequest) -> HttpResponse:
        ...


class AsyncTransport(Protocol):
    def __call__(self, request: HttpRequest) -> Awaitable[HttpResponse]:
        ...


def _to_response(response: httpx.Response) -> HttpResponse:
    return HttpResponse(
        status=response.status_code,
        body=response.text,
        headers=dict(response.headers),
    )


class HttpxTransport:
    """Sends requests to one GraphQL endpoint with a blocking httpx client.

    The client is created on first use and reused until `close()`.
    """

    def __init__(
        self,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        auth: httpx.Auth | None = None,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ):
        """Initialize the transport.

        Args:
            url: GraphQL endpoint URL
            headers: Extra headers sent with every request
            auth: httpx authentication handler
            timeout: Request timeout in seconds
            client: Preconfigured client to use instead of creating one
        """
        self.url = url
        self.headers = headers or {}
        self.auth = auth
        self.timeout = timeout
        self._client = client

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                timeout=self.timeout,
                headers=self.headers,
                auth=self.auth,
            )
        return self._client

    def __call__(self, request: HttpRequest) -> HttpResponse:
        client = self._get_client()
        logger.debug("%s %s", request.method, self.url)
        response = client.request(
            request.method,
            self.url,
            content=request.body.encode(),
            headers=request.headers,
        )
        return _to_response(response)

    def close(self):
        """Close the HTTP client."""
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class AsyncHttpxTransport:
    """Async counterpart of HttpxTransport."""

    def __init__(
        self,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        auth: httpx.Auth | None = None,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.url = url
        self.headers = headers or {}
        self.auth = auth
        self.timeout = timeout
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers=self.headers,
                auth=self.auth,
            )
        return self._client

    async def __call__(self, request: HttpRequest) -> HttpResponse:
        client = await self._get_client()
        logger.debug("%s %s", request.method, self.url)
        response = await client.request(
            request.method,
            self.url,
            content=request.body.encode(),
            headers=request.headers,
        )
        return _to_response(response)

    async def aclose(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
