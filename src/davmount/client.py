"""Sending requests to the webdav server of a mount."""
import logging
from typing import TYPE_CHECKING, Any, Dict, Union

from .auth import authorization_header
from .http import HTTPStatusError
from .multistatus import parse_xml

if TYPE_CHECKING:
    from httpx._types import RequestContent

    from .config import ConnectionSettings
    from .http import Client as HTTPClient
    from .http import HTTPResponse
    from .multistatus import ParseResult

logger = logging.getLogger(__name__)


class Client:
    """Issues a single request per call, authorized for the mount."""

    def __init__(
        self, settings: "ConnectionSettings", http_client: "HTTPClient"
    ) -> None:
        """Instantiate with resolved settings and a shared http client."""
        self.settings = settings
        self.http = http_client

    def headers(self, headers: Dict[str, str] = None) -> Dict[str, str]:
        """Merge the headers with the authorization for the mount."""
        return {
            **(headers or {}),
            "Authorization": authorization_header(self.settings),
        }

    async def request(
        self,
        method: str,
        url: str,
        headers: Dict[str, str] = None,
        content: "RequestContent" = None,
        binary: bool = False,
        **kwargs: Any,
    ) -> Union["HTTPResponse", "ParseResult"]:
        """Sends request to the server.

        Args:
            method: http method to use
            url: fully qualified url of the resource
            headers: additional headers, sent along with the Authorization
            content: body of the request
            binary: if True, the response is returned unread, and it is up
                to the caller to stream and close it. Otherwise, the body is
                read and parsed as xml.

        Raises:
            HTTPStatusError: if the server responded with an error status.
        """
        logger.debug("%s %s", method, url)
        req = self.http.build_request(
            method,
            url,
            headers=self.headers(headers),
            content=content,
            **kwargs,
        )
        http_resp = await self.http.send(req, stream=binary)
        try:
            http_resp.raise_for_status()
        except HTTPStatusError:
            if binary:
                await http_resp.aclose()
            raise

        if binary:
            return http_resp
        return parse_xml(http_resp.text)

