"""Version of the library."""
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("davmount")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "UNKNOWN"
