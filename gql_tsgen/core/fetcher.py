"""Fetch a federated service's SDL over HTTP.

Federation-aware servers expose their full schema, directives included,
through ``{ _service { sdl } }``. That SDL can be fed straight into
:meth:`SchemaParser.from_sdl`.
"""

from typing import Any

import httpx
from pydantic import BaseModel, Field

from .auth import Auth, NoAuth

SERVICE_SDL_QUERY = "query __ApolloGetServiceDefinition__ { _service { sdl } }"


class GraphQLError(Exception):
    """Exception raised when the service answers with GraphQL errors."""

    def __init__(self, message: str, errors: list[dict[str, Any]]):
        self.message = message
        self.errors = errors
        super().__init__(message)


class _Service(BaseModel):
    sdl: str


class _ServiceData(BaseModel):
    service: _Service | None = Field(default=None, alias="_service")


class _ServiceResponse(BaseModel):
    data: _ServiceData | None = None
    errors: list[dict[str, Any]] | None = None


class ServiceSDLFetcher:
    """Downloads SDL from a GraphQL endpoint.

    Examples:
        sdl = ServiceSDLFetcher("http://localhost:4001/graphql").fetch()
        sdl = ServiceSDLFetcher(url, auth=BearerAuth(token)).fetch()
    """

    def __init__(
        self,
        url: str,
        auth: Auth | None = None,
        *,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the fetcher.

        Args:
            url: GraphQL endpoint URL
            auth: Authentication handler (implements Auth protocol)
            timeout: Request timeout in seconds
            transport: Optional httpx transport, mostly for tests
        """
        self.url = url
        self.timeout = timeout
        self._auth = auth or NoAuth()
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        headers.update(self._auth.get_headers())
        return headers

    def fetch(self) -> str:
        """Fetch the SDL synchronously.

        Raises:
            httpx.HTTPStatusError: On a non-2xx response
            GraphQLError: If the response contains errors or no SDL
        """
        with httpx.Client(
            timeout=self.timeout, headers=self._headers(), transport=self._transport
        ) as client:
            response = client.post(self.url, json={"query": SERVICE_SDL_QUERY})
            response.raise_for_status()
            return self._extract_sdl(response.json())

    async def fetch_async(self) -> str:
        """Fetch the SDL with an async client."""
        async with httpx.AsyncClient(
            timeout=self.timeout, headers=self._headers(), transport=self._transport
        ) as client:
            response = await client.post(self.url, json={"query": SERVICE_SDL_QUERY})
            response.raise_for_status()
            return self._extract_sdl(response.json())

    def _extract_sdl(self, payload: dict[str, Any]) -> str:
        result = _ServiceResponse.model_validate(payload)

        if result.errors:
            error_messages = "; ".join(e.get("message", str(e)) for e in result.errors)
            raise GraphQLError(f"GraphQL errors: {error_messages}", result.errors)

        if result.data is None or result.data.service is None:
            raise GraphQLError(
                f"{self.url} did not return _service.sdl; is it a federated service?", []
            )
        return result.data.service.sdl
