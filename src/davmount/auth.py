"""Authorization header for the mount."""
from base64 import b64encode
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import ConnectionSettings


def authorization_header(settings: "ConnectionSettings") -> str:
    """Gets authorization header value, token takes precedence."""
    if settings.access_token:
        return f"Bearer {settings.access_token}"

    credentials = f"{settings.username}:{settings.password}".encode()
    return "Basic " + b64encode(credentials).decode("ascii")
