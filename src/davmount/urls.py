"""Building request urls from virtual paths."""
from re import sub
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from .config import ConnectionSettings


def strip_mount_id(path: str) -> str:
    """Removes mount id segment from the virtual path.

    The remainder always starts with a single slash.
    """
    rest = "/".join(path.split("/")[1:])
    return sub("^/?", "/", rest)


def dav_url(
    settings: "ConnectionSettings", path: str, params: Iterable[str] = ()
) -> str:
    """Gets a WebDAV url for the virtual path.

    Query string is always terminated with `?`, even if there are no params.
    """
    suffix = strip_mount_id(path)
    return f"{settings.uri}{settings.prefix}{suffix}?" + "&".join(params)
