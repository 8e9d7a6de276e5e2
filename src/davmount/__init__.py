"""Webdav backend for virtual filesystems."""

from .adapter import WebdavAdapter, adapter
from .config import ClientError, ConfigurationError, ConnectionSettings
from .multistatus import DirectoryEntry
from .version import __version__

__all__ = [
    "ClientError",
    "ConfigurationError",
    "ConnectionSettings",
    "DirectoryEntry",
    "WebdavAdapter",
    "__version__",
    "adapter",
]
