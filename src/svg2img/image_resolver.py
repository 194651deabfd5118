"""Resolve external images referenced by an SVG document.

resvg does not fetch ``http(s)`` image references. Each URL reported by the
rasterizer is downloaded concurrently and handed back to it. Referenced SVG
images are rendered to PNG first, since the rasterizer only accepts raster
substitutes. Downloaded bytes are decoded in worker threads. A failure for
one URL is logged and that image is left out; it never aborts the other
downloads or the render.
"""

import asyncio
import logging
from typing import Awaitable, Callable

import httpx

from svg2img.rasterizer import BaseRasterizer
from svg2img.resource_limits import ResourceLimits
from svg2img.source import fetch_url

logger = logging.getLogger(__name__)

SvgRenderer = Callable[[bytes], Awaitable[bytes]]


async def fetch_image(
    url: str,
    client: httpx.AsyncClient,
    render_svg: SvgRenderer,
    limits: ResourceLimits,
) -> bytes:
    """Download an image, rendering it to PNG if it is an SVG.

    Args:
        url: Image URL.
        client: HTTP client.
        render_svg: Coroutine function converting SVG content to PNG bytes.
        limits: Resource limits for the download.

    Returns:
        Raster image bytes.
    """
    data, content_type = await fetch_url(client, url, limits)
    if "svg" in content_type.lower():
        logger.debug(f"Rendering SVG image {url}")
        return await render_svg(data)
    return data


async def _resolve_one(
    rasterizer: BaseRasterizer,
    url: str,
    client: httpx.AsyncClient,
    render_svg: SvgRenderer,
    limits: ResourceLimits,
) -> Exception | None:
    try:
        data = await fetch_image(url, client, render_svg, limits)
        await asyncio.to_thread(rasterizer.resolve_image, url, data)
    except Exception as e:
        logger.warning(f"Error loading {url}: {e}")
        return e
    return None


async def resolve_images(
    rasterizer: BaseRasterizer,
    client: httpx.AsyncClient,
    render_svg: SvgRenderer,
    limits: ResourceLimits | None = None,
) -> dict[str, Exception | None]:
    """Fetch every unresolved image of a rasterizer concurrently.

    Returns once all downloads have settled, successfully or not.

    Returns:
        Mapping of URL to the exception that prevented its resolution, or
        None if it was resolved.
    """
    if limits is None:
        limits = ResourceLimits.default()

    urls = rasterizer.images_to_resolve()
    if not urls:
        return {}
    logger.debug(f"Resolving {len(urls)} image(s)")
    outcomes = await asyncio.gather(
        *(_resolve_one(rasterizer, url, client, render_svg, limits) for url in urls)
    )
    return dict(zip(urls, outcomes))
