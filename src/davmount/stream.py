"""Handle streaming response for file."""
from typing import TYPE_CHECKING, AsyncIterator

if TYPE_CHECKING:
    from .http import HTTPResponse


async def iter_response(
    response: "HTTPResponse", chunk_size: int = None
) -> AsyncIterator[bytes]:
    """Iterate over chunks of a streamed response.

    The response is closed once exhausted, or when the iterator is closed.
    """
    try:
        async for chunk in response.aiter_bytes(chunk_size=chunk_size):
            yield chunk
    finally:
        await response.aclose()


async def read_all(chunks: AsyncIterator[bytes]) -> bytes:
    """Read every chunk into a single bytes object."""
    return b"".join([chunk async for chunk in chunks])
