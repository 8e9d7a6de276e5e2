"""Parsing timestamps of the webdav properties."""

from email.utils import parsedate_to_datetime
from typing import TYPE_CHECKING

from dateutil.parser import parse

if TYPE_CHECKING:
    from datetime import datetime


def fromisoformat(datetime_string: str) -> "datetime":
    """Convert ISO 8601 datetime string to datetime object.

    Lenient, most of the other formats are understood as well.
    """
    return parse(datetime_string)


def from_rfc1123(datetime_string: str) -> "datetime":
    """Convert rfc1123 datetime string to datetime object.

    getlastmodified is in this format, but not every server follows it.
    """
    try:
        parsed = parsedate_to_datetime(datetime_string)
    except Exception:  # noqa:E722, pylint: disable=broad-except
        parsed = None
    if parsed is not None:
        return parsed
    # fallback in case ^ is unable to parse the datetime string
    return fromisoformat(datetime_string)
