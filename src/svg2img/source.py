"""Resolve an SVG source to its content.

A source is one of inline markup, a base64 data URI, an http(s) URL, a local
file path, or raw bytes. `classify_source` decides which, and
`load_svg_content` produces the SVG markup or bytes.
"""

import asyncio
import base64
import enum
import gzip
import logging
import os
from typing import NamedTuple, Union

import httpx

from svg2img.resource_limits import ResourceLimits

logger = logging.getLogger(__name__)

BASE64_PREFIX = "data:image/svg+xml;base64,"
GZIP_MAGIC = b"\x1f\x8b"

Source = Union[str, bytes, bytearray, memoryview, "os.PathLike[str]"]


class SourceKind(enum.Enum):
    BASE64 = "base64"
    MARKUP = "markup"
    URL = "url"
    FILE = "file"
    BYTES = "bytes"


class SvgSource(NamedTuple):
    kind: SourceKind
    payload: Union[str, bytes]


def classify_source(source: Source) -> SvgSource:
    """Determine the form of an SVG source.

    Rules are applied in order, first match wins:

    1. Contains ``data:image/svg+xml;base64,`` and does not start with ``<svg``:
       base64 data URI. The guard keeps markup that merely mentions the
       prefix (e.g. in an ``<image>`` href) classified as markup.
    2. Contains ``<svg``: inline markup.
    3. Contains ``http://`` or ``https://``: remote URL.
    4. Anything else: local file path.

    Bytes-like values are raw content, path-like objects are file paths.

    Raises:
        TypeError: If the source is not a string, bytes-like or path-like value.
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        return SvgSource(SourceKind.BYTES, bytes(source))
    if isinstance(source, os.PathLike):
        return SvgSource(SourceKind.FILE, os.fspath(source))
    if not isinstance(source, str):
        raise TypeError(f"Unsupported SVG source type: {type(source).__name__}")

    if BASE64_PREFIX in source and not source.startswith("<svg"):
        return SvgSource(SourceKind.BASE64, source.partition(BASE64_PREFIX)[2])
    if "<svg" in source:
        return SvgSource(SourceKind.MARKUP, source)
    if "http://" in source or "https://" in source:
        return SvgSource(SourceKind.URL, source)
    return SvgSource(SourceKind.FILE, source)


def decode_base64_svg(payload: str) -> bytes:
    """Decode the base64 payload of an SVG data URI.

    Missing trailing padding is accepted. The result is left as bytes so the
    XML parser honors the document's encoding declaration.

    Raises:
        binascii.Error: If the payload is not valid base64.
    """
    payload = "".join(payload.split())
    return base64.b64decode(payload + "=" * (-len(payload) % 4))


def read_file(path: str, limits: ResourceLimits) -> bytes:
    """Read a local file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file exceeds the size limit.
    """
    logger.debug(f"Opening {path}")
    with open(path, "rb") as f:
        if limits.is_file_size_limited():
            size = os.fstat(f.fileno()).st_size
            if size > limits.max_file_size:
                raise ValueError(
                    f"File size {size} bytes exceeds maximum allowed size "
                    f"{limits.max_file_size} bytes: {path}"
                )
        return f.read()


async def fetch_url(
    client: httpx.AsyncClient, url: str, limits: ResourceLimits
) -> tuple[bytes, str]:
    """GET a URL and return its body and declared content type.

    Raises:
        httpx.HTTPError: On transport errors or HTTP error responses.
        ValueError: If the response exceeds the size limit.
    """
    logger.debug(f"Fetching {url}")
    async with client.stream("GET", url) as response:
        response.raise_for_status()
        content_type = response.headers.get("content-type", "")
        chunks = []
        size = 0
        async for chunk in response.aiter_bytes():
            size += len(chunk)
            if limits.is_response_size_limited() and size > limits.max_response_size:
                raise ValueError(
                    f"Response from {url} exceeds maximum allowed size "
                    f"{limits.max_response_size} bytes"
                )
            chunks.append(chunk)
    return b"".join(chunks), content_type


def create_client(limits: ResourceLimits) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=limits.http_timeout(), follow_redirects=True)


async def load_svg_content(
    source: Source,
    client: httpx.AsyncClient | None = None,
    limits: ResourceLimits | None = None,
) -> Union[str, bytes]:
    """Load the SVG markup or bytes for a source.

    Args:
        source: SVG markup, base64 data URI, URL, file path or raw bytes.
        client: HTTP client for remote sources. A temporary client is created
            and closed when omitted.
        limits: Resource limits, defaults to `ResourceLimits.default()`.

    Returns:
        SVG content as string or bytes. Gzip-compressed bytes (svgz) are
        decompressed.

    Raises:
        FileNotFoundError: If a local file does not exist.
        httpx.HTTPError: If a remote source cannot be fetched.
        binascii.Error: If a base64 data URI is malformed.
    """
    if limits is None:
        limits = ResourceLimits.default()

    kind, payload = classify_source(source)
    logger.debug(f"Loading SVG from {kind.value} source")
    content: Union[str, bytes]
    if kind is SourceKind.BASE64:
        assert isinstance(payload, str)
        content = decode_base64_svg(payload)
    elif kind is SourceKind.MARKUP:
        return payload
    elif kind is SourceKind.URL:
        assert isinstance(payload, str)
        if client is None:
            async with create_client(limits) as temporary_client:
                content, _ = await fetch_url(temporary_client, payload, limits)
        else:
            content, _ = await fetch_url(client, payload, limits)
    elif kind is SourceKind.FILE:
        assert isinstance(payload, str)
        content = await asyncio.to_thread(read_file, payload, limits)
    else:
        content = payload

    assert isinstance(content, bytes)
    if content.startswith(GZIP_MAGIC):
        content = gzip.decompress(content)
    return content
