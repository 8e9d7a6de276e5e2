"""Parsing propfind response into directory entries."""

import logging
from dataclasses import dataclass, field
from re import sub
from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    Iterator,
    List,
    NamedTuple,
    Optional,
    Union,
)
from urllib.parse import unquote
from xml.etree.ElementTree import Element, ParseError
from xml.etree.ElementTree import fromstring as str2xml

from httpx import URL

from .date_utils import from_rfc1123

if TYPE_CHECKING:
    from datetime import datetime

    from .config import ConnectionSettings

logger = logging.getLogger(__name__)

DEFAULT_MIME = "application/octet-stream"


class XMLDocument(NamedTuple):
    """Successfully parsed response body."""

    root: Element


class XMLParseError(NamedTuple):
    """Response body that could not be parsed as xml.

    Servers reply with an empty body to most of the methods, where only the
    status code matters, so this is not treated as a failure of the request.
    """

    content: str
    error: Exception


ParseResult = Union[XMLDocument, XMLParseError]


def parse_xml(content: str) -> ParseResult:
    """Parse the body received from the server."""
    try:
        return XMLDocument(str2xml(content))
    except ParseError as exc:
        if content.strip():
            logger.warning("could not parse xml response: %s", exc)
        else:
            logger.debug("empty response body, nothing to parse")
        return XMLParseError(content, exc)


def prop(node: Element, ns: str, name: str) -> Optional[str]:
    """Returns text of the first descendant with the name in namespace."""
    return node.findtext(f".//{{{ns}}}{name}")


def parse_size(value: Optional[str]) -> int:
    """Parse getcontentlength as base-10 integer, falling back to 0."""
    if not value:
        return 0
    try:
        return max(int(value.strip(), 10), 0)
    except ValueError:
        logger.debug("invalid content length %r, using 0", value)
        return 0


def parse_modified(value: Optional[str]) -> Optional["datetime"]:
    """Convert rfc1123 datetime string of getlastmodified to datetime."""
    if not value:
        return None
    try:
        return from_rfc1123(value)
    except (ValueError, OverflowError):
        logger.debug("invalid last modified date %r", value)
        return None


def href_path(href: str) -> str:
    """Url-decoded path from the href, which could be an absolute url."""
    if "://" in href:
        href = URL(href).raw_path.decode("ascii").split("?", 1)[0]
    return unquote(href)


@dataclass(frozen=True)
class DirectoryEntry:  # pylint: disable=too-many-instance-attributes
    """Immediate child of a listed directory."""

    is_directory: bool
    id: Optional[str]  # pylint: disable=invalid-name
    size: int
    mime: Optional[str]
    path: str
    filename: str
    modified: Optional["datetime"] = None
    stat: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_file(self) -> bool:
        """Everything that is not a collection is a file."""
        return not self.is_directory

    def as_dict(self) -> Dict[str, Any]:
        """Returns the entry in the shape the host filesystem expects."""
        return {
            "isDirectory": self.is_directory,
            "isFile": self.is_file,
            "id": self.id,
            "size": self.size,
            "mime": self.mime,
            "path": self.path,
            "filename": self.filename,
            "modified": self.modified,
            "stat": dict(self.stat),
        }


def iter_responses(document: ParseResult, ns: str) -> Iterator[Element]:
    """Iterate over <response> elements in document order."""
    if isinstance(document, XMLParseError):
        return iter(())
    return document.root.iter(f"{{{ns}}}response")


def transform_listing(
    settings: "ConnectionSettings", root: str, document: ParseResult
) -> List[DirectoryEntry]:
    """Transforms a PROPFIND result into entries of the immediate children.

    Args:
        settings: settings of the mount that was listed
        root: virtual path of the directory that was listed
        document: parsed multistatus response

    Servers may return the directory itself and, depending on how they
    treat a missing `Depth` header, descendants of any depth. Both are
    filtered out here.
    """
    ns = settings.ns
    directory = root.split(":")[-1]
    prefix = settings.prefix + directory

    entries = []
    for child in iter_responses(document, ns):
        path = href_path(prop(child, ns, "href") or "")
        is_directory = path.endswith("/")
        relative = path[len(prefix) :]
        filename = relative[:-1] if is_directory else relative
        if not filename:
            continue
        if len([part for part in relative.split("/") if part]) != 1:
            continue

        mime = None
        if not is_directory:
            mime = prop(child, ns, "getcontenttype")
            mime = DEFAULT_MIME if mime is None else mime

        entries.append(
            DirectoryEntry(
                is_directory=is_directory,
                id=prop(child, ns, "getetag"),
                size=parse_size(prop(child, ns, "getcontentlength")),
                mime=mime,
                path=root + filename,
                filename=sub("^/", "", filename),
                modified=parse_modified(prop(child, ns, "getlastmodified")),
            )
        )
    return entries
