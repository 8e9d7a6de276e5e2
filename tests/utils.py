"""Test utilities here."""
from typing import List, Optional

import httpx


class Recorder:
    """Mock transport handler, records requests and replies from a queue.

    Replies with an empty 200 response if nothing is queued.
    """

    def __init__(self) -> None:
        """Start with no requests and no replies."""
        self.requests: List[httpx.Request] = []
        self.responses: List[httpx.Response] = []

    def reply(self, status_code: int = 200, **kwargs) -> None:
        """Queue a response for the next request."""
        self.responses.append(httpx.Response(status_code, **kwargs))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        """Record the request and reply."""
        self.requests.append(request)
        if self.responses:
            return self.responses.pop(0)
        return httpx.Response(200)

    @property
    def methods(self) -> List[str]:
        """Methods of the requests received so far."""
        return [request.method for request in self.requests]


def dav_response(
    href: str,
    etag: Optional[str] = None,
    length: Optional[str] = None,
    content_type: Optional[str] = None,
    modified: Optional[str] = None,
    prefix: str = "d",
) -> str:
    """Builds a <response> element for the multistatus document."""
    props = []
    if etag is not None:
        props.append(f"<{prefix}:getetag>{etag}</{prefix}:getetag>")
    if length is not None:
        props.append(
            f"<{prefix}:getcontentlength>{length}</{prefix}:getcontentlength>"
        )
    if content_type is not None:
        props.append(
            f"<{prefix}:getcontenttype>{content_type}"
            f"</{prefix}:getcontenttype>"
        )
    if modified is not None:
        props.append(
            f"<{prefix}:getlastmodified>{modified}</{prefix}:getlastmodified>"
        )
    return f"""
    <{prefix}:response>
      <{prefix}:href>{href}</{prefix}:href>
      <{prefix}:propstat>
        <{prefix}:prop>{"".join(props)}</{prefix}:prop>
        <{prefix}:status>HTTP/1.1 200 OK</{prefix}:status>
      </{prefix}:propstat>
    </{prefix}:response>"""


def multistatus(*responses: str, ns: str = "DAV:", prefix: str = "d") -> str:
    """Wraps responses in a <multistatus> document."""
    body = "".join(responses)
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        f'<{prefix}:multistatus xmlns:{prefix}="{ns}">{body}'
        f"</{prefix}:multistatus>"
    )
