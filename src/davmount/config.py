"""Connection settings of a WebDAV mount."""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

DEFAULT_PREFIX = "/webdav"
DEFAULT_NAMESPACE = "DAV:"


class ClientError(Exception):
    """Base exception raised by davmount."""

    def __init__(self, msg: str) -> None:
        """Instantiate exception with a msg."""
        self.msg: str = msg
        super().__init__(msg)

    def __str__(self) -> str:
        """Provide str repr of the msg."""
        return self.msg


class ConfigurationError(ClientError):
    """Raised when the mount cannot be used to make a request."""

    def __init__(
        self, msg: str = "Missing configuration from webdav mountpoint"
    ) -> None:
        """Instantiate exception with a default message."""
        super().__init__(msg)


def connection_of(mount: Any) -> Mapping[str, Any]:
    """Returns `attributes.connection` of the mount, or an empty mapping.

    The mount may either be a mapping or an object with an `attributes`
    mapping, whichever the host filesystem hands out.
    """
    if mount is None:
        return {}
    if isinstance(mount, Mapping):
        attributes = mount.get("attributes")
    else:
        attributes = getattr(mount, "attributes", None)
    connection = (attributes or {}).get("connection")
    return connection or {}


@dataclass(frozen=True)
class ConnectionSettings:
    """Resolved connection settings, built once per mount."""

    uri: Optional[str] = None
    prefix: str = DEFAULT_PREFIX
    ns: str = DEFAULT_NAMESPACE
    username: Optional[str] = None
    password: Optional[str] = None
    access_token: Optional[str] = None

    @classmethod
    def from_mount(cls, mount: Any) -> "ConnectionSettings":
        """Resolve settings from the mount, filling in the defaults."""
        conn = connection_of(mount)
        return cls(
            uri=conn.get("uri") or None,
            prefix=conn.get("prefix") or DEFAULT_PREFIX,
            ns=conn.get("ns") or DEFAULT_NAMESPACE,
            username=conn.get("username"),
            password=conn.get("password"),
            access_token=conn.get("access_token") or None,
        )

    @property
    def ready(self) -> bool:
        """Whether we have enough to make a request."""
        return bool(self.uri)


def ensure_ready(settings: ConnectionSettings) -> None:
    """Makes sure we can make a request with what we have."""
    if not settings.ready:
        raise ConfigurationError
