"""
Helpers shared by the token and content requests.

Both endpoints answer with JSON bodies that must be size-capped before
parsing. Bodies may arrive gzip-compressed even when the response carries
no Content-Encoding header, so the gzip magic is checked explicitly.
"""

import zlib
from http.cookiejar import DefaultCookiePolicy
from typing import List, Optional

import requests

# Upper bound on any response body we are willing to hold in memory
MAX_BODY_BYTES = 1 << 20

_GZIP_MAGIC = b"\x1f\x8b"
_CHUNK_SIZE = 64 * 1024


class BodyReadError(Exception):
    """Raised when a response body cannot be read within the size cap."""

    def __init__(self, message: str, too_large: bool = False) -> None:
        self.too_large = too_large
        super().__init__(message)


def media_type(response: requests.Response) -> Optional[str]:
    """
    Extract the media type from the Content-Type header.

    Returns:
        Lower-cased ``type/subtype`` without parameters, or None when the
        header is missing or unparsable
    """
    header = response.headers.get("Content-Type", "")
    mtype = header.split(";", 1)[0].strip().lower()
    if not mtype or mtype.count("/") != 1:
        return None
    return mtype


def read_body(response: requests.Response, limit: int = MAX_BODY_BYTES) -> bytes:
    """
    Read a streamed response body, decompressing gzip, capped at ``limit``.

    Args:
        response: Response obtained with ``stream=True``
        limit: Maximum number of (decompressed) bytes accepted

    Returns:
        Body bytes

    Raises:
        BodyReadError: On read failure, corrupt gzip data or oversize body
    """
    chunks: List[bytes] = []
    size = 0
    try:
        for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
            size += len(chunk)
            if size > limit:
                raise BodyReadError(
                    f"response body exceeds {limit} bytes", too_large=True
                )
            chunks.append(chunk)
    except requests.RequestException as e:
        raise BodyReadError(f"cannot read body of response: {e}") from e

    body = b"".join(chunks)
    if not body.startswith(_GZIP_MAGIC):
        return body

    # A gzip stream may hold several concatenated members
    data = b""
    remaining = body
    while remaining:
        decompressor = zlib.decompressobj(16 + zlib.MAX_WBITS)
        try:
            data += decompressor.decompress(remaining, limit + 1 - len(data))
        except zlib.error as e:
            raise BodyReadError(f"cannot decompress body of response: {e}") from e

        if len(data) > limit:
            raise BodyReadError(
                f"decompressed response body exceeds {limit} bytes", too_large=True
            )
        if not decompressor.eof:
            raise BodyReadError("truncated gzip body")
        remaining = decompressor.unused_data

    return data


def detach_cookie_jar(session: requests.Session) -> None:
    """
    Empty the session cookie jar and stop it from storing new cookies.

    Cookies are then only sent when passed explicitly per request, and
    ``response.cookies`` still exposes what each response set.
    """
    session.cookies.clear()
    session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))
