"""HTTP related utilities."""

from typing import Any

import httpx

from .version import __version__

HTTPStatusError = httpx.HTTPStatusError
HTTPTransportError = httpx.TransportError
HTTPResponse = httpx.Response
HTTPRequest = httpx.Request

USER_AGENT = f"davmount/{__version__}"


class Method:
    """HTTP methods, trying to prevent mistakes with this."""

    PROPFIND = "PROPFIND"
    MKCOL = "MKCOL"
    COPY = "COPY"
    MOVE = "MOVE"
    DELETE = "DELETE"
    GET = "GET"
    PUT = "PUT"


class Client(httpx.AsyncClient):
    """Async HTTP client shared by the requests of the mounts."""

    def __init__(self, **kwargs: Any) -> None:
        """Pass-through to httpx, identifying ourselves to the server."""
        headers = {"User-Agent": USER_AGENT}
        headers.update(kwargs.pop("headers", None) or {})
        super().__init__(headers=headers, **kwargs)
