"""Testing url building from virtual paths."""

import pytest

from davmount.config import ConnectionSettings
from davmount.urls import dav_url, strip_mount_id


@pytest.mark.parametrize(
    "path, expected",
    [
        ("m:/a/b", "/a/b"),
        ("m:/a/b/", "/a/b/"),
        ("m:/", "/"),
        ("m:", "/"),
        ("m:/dir", "/dir"),
        ("home:/foo bar.txt", "/foo bar.txt"),
        ("m://a", "/a"),
    ],
)
def test_strip_mount_id(path: str, expected: str):
    """Mount id is dropped and the remainder starts with a single slash."""
    assert strip_mount_id(path) == expected


@pytest.mark.parametrize(
    "prefix, path, expected",
    [
        (None, "m:/a/b", "https://h/webdav/a/b?"),
        (None, "m:/", "https://h/webdav/?"),
        ("/remote.php/dav", "m:/a", "https://h/remote.php/dav/a?"),
        ("", "m:/a", "https://h/webdav/a?"),
    ],
)
def test_dav_url(prefix, path: str, expected: str):
    """Url is composed of uri, prefix and the stripped path."""
    conn = {"uri": "https://h"}
    if prefix is not None:
        conn["prefix"] = prefix
    mount = {"attributes": {"connection": conn}}
    settings = ConnectionSettings.from_mount(mount)
    assert dav_url(settings, path) == expected


def test_dav_url_params():
    """Params are joined into the query string."""
    settings = ConnectionSettings(uri="https://h")
    url = dav_url(settings, "m:/a", ["x=1", "y=2"])
    assert url == "https://h/webdav/a?x=1&y=2"
