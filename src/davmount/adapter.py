"""Virtual filesystem adapter for the webdav mounts."""
# pylint: disable=unused-argument
import asyncio
import logging
from typing import (
    TYPE_CHECKING,
    Any,
    AsyncIterator,
    Awaitable,
    Callable,
    Dict,
    List,
    Optional,
    Type,
    cast,
)

from .client import Client
from .config import ConnectionSettings, ensure_ready
from .http import Client as HTTPClient
from .http import Method as HTTPMethod
from .multistatus import transform_listing
from .stream import iter_response
from .urls import dav_url

if TYPE_CHECKING:
    from asyncio import AbstractEventLoop
    from types import TracebackType

    from httpx._types import RequestContent

    from .http import HTTPResponse
    from .multistatus import DirectoryEntry, ParseResult

logger = logging.getLogger(__name__)

OPERATIONS = (
    "readfile",
    "writefile",
    "unlink",
    "copy",
    "rename",
    "exists",
    "mkdir",
    "readdir",
)


class WebdavAdapter:
    """Provides filesystem operations for a single webdav mount.

    Paths are virtual paths, prefixed with the mount id, eg: `mount:/dir/foo`.
    The host passes options to every operation, those are accepted and
    ignored.
    """

    def __init__(
        self,
        mount: Any,
        http_client: HTTPClient = None,
        **client_opts: Any,
    ) -> None:
        """Instantiate adapter for the mount.

        Args:
            mount: mount from the host filesystem, with
                `attributes.connection` on it.
            http_client: http client to use instead, useful in mocking or
                for sharing a connection pool between mounts. It is not
                closed by the adapter.

        All of the other keyword arguments are passed along to the
        `httpx.AsyncClient` if the adapter has to create one.
        """
        self.mount = mount
        self.settings = ConnectionSettings.from_mount(mount)
        self._owns_http = http_client is None
        self.http: HTTPClient = http_client or HTTPClient(**client_opts)
        self.client = Client(self.settings, self.http)

    async def __aenter__(self) -> "WebdavAdapter":
        """Use the adapter as an async context manager."""
        return self

    async def __aexit__(
        self,
        exc_type: Optional["Type[BaseException]"],
        exc_value: Optional[BaseException],
        traceback: Optional["TracebackType"],
    ) -> None:
        """Close http client, if we created it."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close http client, if we created it."""
        if self._owns_http:
            await self.http.aclose()

    def url(self, path: str) -> str:
        """Url of the resource with the virtual path."""
        return dav_url(self.settings, path)

    async def _xml(
        self,
        method: str,
        path: str,
        headers: Dict[str, str] = None,
        content: "RequestContent" = None,
    ) -> "ParseResult":
        ensure_ready(self.settings)
        result = await self.client.request(
            method, self.url(path), headers=headers, content=content
        )
        return cast("ParseResult", result)

    async def readfile(
        self, path: str, options: Dict[str, Any] = None
    ) -> AsyncIterator[bytes]:
        """Returns chunks of the file content."""
        ensure_ready(self.settings)
        response = await self.client.request(
            HTTPMethod.GET, self.url(path), binary=True
        )
        return iter_response(cast("HTTPResponse", response))

    async def writefile(
        self,
        path: str,
        data: "RequestContent",
        options: Dict[str, Any] = None,
    ) -> "ParseResult":
        """Uploads data to the file."""
        return await self._xml(HTTPMethod.PUT, path, content=data)

    async def unlink(
        self, path: str, options: Dict[str, Any] = None
    ) -> "ParseResult":
        """Removes a resource."""
        return await self._xml(HTTPMethod.DELETE, path)

    async def copy(
        self, src: str, dest: str, options: Dict[str, Any] = None
    ) -> "ParseResult":
        """Copies resource to the destination."""
        headers = {"Destination": self.url(dest)}
        return await self._xml(HTTPMethod.COPY, src, headers=headers)

    async def rename(
        self, src: str, dest: str, options: Dict[str, Any] = None
    ) -> "ParseResult":
        """Moves resource to the destination."""
        headers = {"Destination": self.url(dest)}
        return await self._xml(HTTPMethod.MOVE, src, headers=headers)

    async def exists(
        self, path: str, options: Dict[str, Any] = None
    ) -> bool:
        """Checks whether the resource exists.

        This never returns False, failure to check raises instead.
        """
        await self._xml(HTTPMethod.PROPFIND, path)
        return True

    async def mkdir(
        self, path: str, options: Dict[str, Any] = None
    ) -> "ParseResult":
        """Creates a collection."""
        return await self._xml(HTTPMethod.MKCOL, path)

    async def readdir(
        self, root: str, options: Dict[str, Any] = None
    ) -> List["DirectoryEntry"]:
        """Lists immediate children of the directory."""
        document = await self._xml(HTTPMethod.PROPFIND, root)
        entries = transform_listing(self.settings, root, document)
        logger.debug("%d entries in %s", len(entries), root)
        return entries

    def __repr__(self) -> str:
        """Repr for the adapter."""
        return f"WebdavAdapter({self.settings.uri}{self.settings.prefix})"


Operation = Callable[..., Awaitable[Any]]


class SharedHTTPClient:
    """Http client shared by the mounts, one for each event loop.

    Pooled connections of a client are tied to the loop they were opened
    in, so a host running the operations in separate loops (eg: separate
    `asyncio.run()` calls) gets a fresh client for each of those loops.
    """

    def __init__(self, **client_opts: Any) -> None:
        """Instantiate with the options passed along to the http client."""
        self.client_opts = client_opts
        self._clients: Dict["AbstractEventLoop", HTTPClient] = {}

    def get(self) -> HTTPClient:
        """Returns http client for the running event loop."""
        loop = asyncio.get_running_loop()
        for other in [other for other in self._clients if other.is_closed()]:
            # their connections went away with the loop
            logger.debug("dropping http client of a closed event loop")
            del self._clients[other]

        if loop not in self._clients:
            self._clients[loop] = HTTPClient(**self.client_opts)
        return self._clients[loop]

    async def aclose(self) -> None:
        """Close http client of the running event loop, if there is one."""
        client = self._clients.pop(asyncio.get_running_loop(), None)
        if client is not None:
            await client.aclose()


class Operations(Dict[str, Callable[[Any], Operation]]):
    """Operations registered with the host filesystem, by their name."""

    def __init__(
        self,
        operations: Dict[str, Callable[[Any], Operation]],
        shared: SharedHTTPClient = None,
    ) -> None:
        """Instantiate with the operations and the http client they share."""
        super().__init__(operations)
        self.shared = shared

    async def aclose(self) -> None:
        """Close http client, if the factory has created it."""
        if self.shared is not None:
            await self.shared.aclose()


def adapter(core: Any = None, http_client: HTTPClient = None) -> Operations:
    """Our adapter, as registered with the host filesystem.

    Returns a mapping of operation names to functions that take the mount
    and return the operation bound to it. All of the mounts share the same
    http client, one for each event loop unless it is given. That one is
    left to the caller to close, otherwise use `await ops.aclose()`.

    Args:
        core: the host core, not used.
        http_client: http client to share between the mounts.
    """
    shared = None if http_client is not None else SharedHTTPClient()

    def bind(name: str) -> Callable[[Any], Operation]:
        def bound(mount: Any) -> Operation:
            if shared is None:
                dav = WebdavAdapter(mount, http_client=http_client)
                return cast(Operation, getattr(dav, name))

            async def operation(*args: Any, **kwargs: Any) -> Any:
                dav = WebdavAdapter(mount, http_client=shared.get())
                return await getattr(dav, name)(*args, **kwargs)

            operation.__name__ = name
            return operation

        bound.__name__ = name
        return bound

    return Operations({name: bind(name) for name in OPERATIONS}, shared)
