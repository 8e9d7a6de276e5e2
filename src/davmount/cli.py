"""CLI for the webdav mounts."""

import argparse
import asyncio
import logging
import os
import sys
from argparse import Namespace
from contextlib import contextmanager
from datetime import datetime, timedelta
from pathlib import Path
from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    Iterator,
    List,
    Optional,
    Tuple,
    cast,
)

from httpx import URL

from .adapter import WebdavAdapter
from .config import DEFAULT_NAMESPACE, DEFAULT_PREFIX
from .http import HTTPStatusError
from .stream import read_all
from .version import __version__

if TYPE_CHECKING:
    from argparse import ArgumentParser

    from .multistatus import DirectoryEntry

logger = logging.getLogger(__name__)

PACKAGE = "davmount"
MOUNT_ID = "cli"

ENV_VARS = {
    "uri": "DAVMOUNT_URI",
    "prefix": "DAVMOUNT_PREFIX",
    "ns": "DAVMOUNT_NS",
    "username": "DAVMOUNT_USER",
    "password": "DAVMOUNT_PASSWORD",
    "access_token": "DAVMOUNT_TOKEN",
}


def virtual_path(path: str) -> str:
    """Turn the path given on the command line into a virtual path."""
    return f"{MOUNT_ID}:/" + path.lstrip("/")


def split_userinfo(uri: str) -> Tuple[str, Optional[str], Optional[str]]:
    """Take user and password out of the uri, if they are in there."""
    url = URL(uri)
    if not (url.username or url.password):
        return uri, None, None

    netloc = url.netloc.decode("ascii")
    path = url.path.rstrip("/")
    return f"{url.scheme}://{netloc}{path}", url.username, url.password


def prepare_mount(args: Namespace) -> Dict[str, Any]:
    """Build the mount from the arguments or from the envvars."""
    connection = {
        key: getattr(args, key, None) or os.getenv(envvar)
        for key, envvar in ENV_VARS.items()
    }

    uri = connection["uri"]
    if uri:
        uri, user, password = split_userinfo(uri)
        connection["uri"] = uri
        connection["username"] = connection["username"] or user
        connection["password"] = connection["password"] or password

    return {"attributes": {"connection": connection}}


def format_datetime(mtime: Optional[datetime]) -> str:
    """Converts mtime to ls-compatible output."""
    if not isinstance(mtime, datetime):
        return "-"
    fmt = "%b %d %H:%M"
    # it's mostly for presentation, so we don't care much about tz
    if mtime.replace(tzinfo=None) < datetime.today() - timedelta(days=180):
        fmt = "%b %d %Y"
    return mtime.strftime(fmt)


def format_entry(entry: "DirectoryEntry") -> str:
    """Single line for the entry in `ls` output."""
    size = "-" if entry.is_directory else str(entry.size)
    name = entry.filename + ("/" if entry.is_directory else "")
    return f"{size:>12}  {format_datetime(entry.modified):<12}  {name}"


class Command:
    """Base class for all commands."""

    def __init__(self, args: Namespace, dav: WebdavAdapter) -> None:
        """Pass the arguments and the adapter for the mount."""
        self.args = args
        self.dav = dav

    async def run(self) -> Optional[int]:
        """Override this function to do some operations."""
        raise NotImplementedError


class CommandLS(Command):
    """Command for ls."""

    async def run(self) -> Optional[int]:
        """List immediate children of the directory."""
        entries = await self.dav.readdir(virtual_path(self.args.path))
        for entry in entries:
            print(format_entry(entry))
        return 0


class CommandCat(Command):
    """Command for cat."""

    async def run(self) -> Optional[int]:
        """Write the content of the file to the stdout."""
        chunks = await self.dav.readfile(virtual_path(self.args.path))
        sys.stdout.buffer.write(await read_all(chunks))
        sys.stdout.flush()
        return 0


class CommandPut(Command):
    """Command for put."""

    async def run(self) -> Optional[int]:
        """Upload local file to the remote path."""
        data = Path(self.args.src).read_bytes()
        await self.dav.writefile(virtual_path(self.args.dest), data)
        return 0


class CommandRemove(Command):
    """Command for rm."""

    async def run(self) -> Optional[int]:
        """Remove file/directory in the remote."""
        await self.dav.unlink(virtual_path(self.args.path))
        return 0


class CommandCopy(Command):
    """Command for cp."""

    async def run(self) -> Optional[int]:
        """Copy file/directory in the remote."""
        await self.dav.copy(
            virtual_path(self.args.path1), virtual_path(self.args.path2)
        )
        return 0


class CommandMove(Command):
    """Command for mv."""

    async def run(self) -> Optional[int]:
        """Move file/directory in the remote."""
        await self.dav.rename(
            virtual_path(self.args.path1), virtual_path(self.args.path2)
        )
        return 0


class CommandMkdir(Command):
    """Command for mkdir."""

    async def run(self) -> Optional[int]:
        """Create directory."""
        await self.dav.mkdir(virtual_path(self.args.path))
        return 0


class CommandExists(Command):
    """Command for exists."""

    async def run(self) -> Optional[int]:
        """Exit with 0 if the resource exists, 1 if it does not."""
        try:
            await self.dav.exists(virtual_path(self.args.path))
        except HTTPStatusError as exc:
            logger.debug("%s", exc)
            logger.info("%s does not exist", self.args.path)
            return 1
        return 0


def get_parser() -> "ArgumentParser":
    """Returns the parser for the command line arguments."""
    parser = argparse.ArgumentParser(prog="davmount")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show more information",
        default=False,
    )
    parser.add_argument(
        "--uri",
        help="Base url of the server. "
        f"Can also be specified through {ENV_VARS['uri']} envvar.",
        metavar="URL",
        default=None,
    )
    parser.add_argument(
        "--prefix",
        help="Path of the webdav root on the server "
        f"(default: {DEFAULT_PREFIX})",
        default=None,
    )
    parser.add_argument(
        "--namespace",
        dest="ns",
        help=f"Namespace of the properties (default: {DEFAULT_NAMESPACE})",
        default=None,
    )
    parser.add_argument(
        "--user", "-u", dest="username", help="Account Username", default=None
    )
    parser.add_argument(
        "--password", "-p", help="Account Password", default=None
    )
    parser.add_argument(
        "--token",
        dest="access_token",
        help="Bearer token, used instead of username and password",
        default=None,
    )

    subparsers = parser.add_subparsers(title="commands", dest="command")
    subparsers.required = True

    ls_parser = subparsers.add_parser("ls", help="List files in the remote")
    ls_parser.add_argument("path", nargs="?", default="/", help="Path to list")
    ls_parser.set_defaults(func=CommandLS)

    cat_parser = subparsers.add_parser("cat", help="Print remote file content")
    cat_parser.add_argument("path", metavar="FILE", help="File to read")
    cat_parser.set_defaults(func=CommandCat)

    put_parser = subparsers.add_parser(
        "put", help="Upload local file to the remote"
    )
    put_parser.add_argument("src", help="Local file to upload")
    put_parser.add_argument("dest", help="Remote path to upload to")
    put_parser.set_defaults(func=CommandPut)

    rm_parser = subparsers.add_parser(
        "rm", help="Remove files/directories in the remote"
    )
    rm_parser.add_argument("path", help="Path to remove")
    rm_parser.set_defaults(func=CommandRemove)

    cp_parser = subparsers.add_parser(
        "cp", help="Copy files/directories in the remote"
    )
    cp_parser.add_argument("path1", help="Path to copy from")
    cp_parser.add_argument("path2", help="Path to copy to")
    cp_parser.set_defaults(func=CommandCopy)

    mv_parser = subparsers.add_parser(
        "mv", help="Move files/directories in the remote"
    )
    mv_parser.add_argument("path1", help="Path to move from")
    mv_parser.add_argument("path2", help="Path to move to")
    mv_parser.set_defaults(func=CommandMove)

    mkdir_parser = subparsers.add_parser(
        "mkdir", help="Creates a directory/collection in the remote server."
    )
    mkdir_parser.add_argument("path", help="Path to create")
    mkdir_parser.set_defaults(func=CommandMkdir)

    exists_parser = subparsers.add_parser(
        "exists", help="Check whether the file/directory exists"
    )
    exists_parser.add_argument("path", help="Path to check")
    exists_parser.set_defaults(func=CommandExists)

    return parser


@contextmanager
def log_to_stderr(verbose: bool = False) -> Iterator[None]:
    """Show logs of the package on stderr while the command runs."""
    package_logger = logging.getLogger(PACKAGE)
    level = package_logger.level
    handler = logging.StreamHandler()
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    try:
        yield
    finally:
        package_logger.removeHandler(handler)
        package_logger.setLevel(level)


async def _run(args: Namespace, dav: WebdavAdapter = None) -> Optional[int]:
    if dav is not None:
        return await args.func(args, dav).run()

    async with WebdavAdapter(prepare_mount(args)) as owned:
        return await args.func(args, owned).run()


def run_cmd(args: Namespace, dav: WebdavAdapter = None) -> Optional[int]:
    """Run cmd from given args."""
    return cast(Optional[int], asyncio.run(_run(args, dav)))


def main(argv: List[str] = None) -> Optional[int]:
    """Command line entrypoint."""
    parser = get_parser()
    args = parser.parse_args(argv)

    with log_to_stderr(args.verbose):
        try:
            return run_cmd(args)
        except Exception as exc:  # pylint: disable=broad-except
            logger.error(
                "%s: %s", type(exc).__name__, exc, exc_info=args.verbose
            )
            return 1


if __name__ == "__main__":
    sys.exit(main())
