"""Authentication for fetching SDL from a running GraphQL service.

Anything with a ``get_headers()`` method satisfies the Auth protocol.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Auth(Protocol):
    """Protocol for authentication handlers.

    Example:
        class GatewayAuth:
            def __init__(self, secret: str):
                self.secret = secret

            def get_headers(self) -> dict[str, str]:
                return {"apollographql-client-name": "codegen", "x-gateway-secret": self.secret}
    """

    def get_headers(self) -> dict[str, str]:
        """Return headers to send with the SDL request."""
        ...


class BearerAuth:
    """``Authorization: Bearer <token>``."""

    def __init__(self, token: str):
        self.token = token

    def get_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


class ApiKeyAuth:
    """API key sent in a single header (``x-api-key`` unless told otherwise)."""

    def __init__(self, api_key: str, header_name: str = "x-api-key"):
        self.api_key = api_key
        self.header_name = header_name

    def get_headers(self) -> dict[str, str]:
        return {self.header_name: self.api_key}


class HeaderAuth:
    """Arbitrary static headers, e.g. from repeated ``--header`` options."""

    def __init__(self, headers: dict[str, str]):
        self._headers = dict(headers)

    @classmethod
    def from_pairs(cls, pairs: list[str]) -> "HeaderAuth":
        """Build from ``"Name: value"`` strings."""
        headers = {}
        for pair in pairs:
            name, sep, value = pair.partition(":")
            if not sep or not name.strip():
                raise ValueError(f"Invalid header '{pair}', expected 'Name: value'")
            headers[name.strip()] = value.strip()
        return cls(headers)

    def merged(self, other: Auth) -> "HeaderAuth":
        """Return a new HeaderAuth with ``other``'s headers layered on top."""
        return HeaderAuth({**self._headers, **other.get_headers()})

    def get_headers(self) -> dict[str, str]:
        return self._headers.copy()


class NoAuth:
    """No authentication (local development services)."""

    def get_headers(self) -> dict[str, str]:
        return {}
