"""Test fixtures."""

from pathlib import Path
from typing import Any, Dict, Tuple

import httpx
import pytest
import pytest_asyncio
from cheroot import wsgi

from davmount.adapter import WebdavAdapter
from davmount.http import Client as HTTPClient

from .server import AUTH, get_server_address, run_server
from .utils import Recorder

BASE_URI = "https://example.org"


@pytest.fixture
def recorder() -> Recorder:
    """Records requests sent through the mocked http client."""
    return Recorder()


@pytest.fixture
def mount() -> Dict[str, Any]:
    """Mount with basic authentication and the default prefix."""
    return {
        "attributes": {
            "connection": {
                "uri": BASE_URI,
                "username": "user",
                "password": "password",
            }
        }
    }


@pytest_asyncio.fixture
async def http_client(recorder: Recorder) -> HTTPClient:
    """Http client that never leaves the process."""
    async with HTTPClient(transport=httpx.MockTransport(recorder)) as client:
        yield client


@pytest.fixture
def dav(mount: Dict[str, Any], http_client: HTTPClient) -> WebdavAdapter:
    """Adapter for the mount, replying from the recorder."""
    return WebdavAdapter(mount, http_client=http_client)


@pytest.fixture
def auth() -> Tuple[str, str]:
    """Auth for the server."""
    return AUTH


@pytest.fixture
def storage_dir(tmp_path_factory) -> Path:
    """Storage for webdav server to keep files in."""
    return tmp_path_factory.mktemp("webdav")


@pytest.fixture
def server(storage_dir: Path, auth: Tuple[str, str]) -> wsgi.Server:
    """Creates a server fixture for testing purpose."""
    with run_server("localhost", 0, str(storage_dir), auth) as (httpd, _):
        yield httpd


@pytest.fixture
def server_address(server: wsgi.Server) -> str:
    """Address of the server to contact."""
    return get_server_address(server)


@pytest.fixture
def server_mount(server_address: str, auth: Tuple[str, str]) -> Dict[str, Any]:
    """Mount pointing to the running server."""
    user, password = auth
    return {
        "attributes": {
            "connection": {
                "uri": server_address,
                "username": user,
                "password": password,
            }
        }
    }
