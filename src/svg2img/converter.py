"""Convert SVG sources to PNG or JPEG images.

Example usage::

    from svg2img import convert, svg2img

    png_bytes = convert('<svg xmlns="http://www.w3.org/2000/svg" ...>...</svg>')
    jpeg_bytes = convert("https://example.com/logo.svg", {"format": "jpg"})

    def on_done(error, result):
        ...

    svg2img("drawing.svg", {"resvg": {"width": 512}}, on_done)
"""

import asyncio
import concurrent.futures
import logging
from typing import Any, Callable, Coroutine, Mapping, Optional, TypeVar, Union

import httpx

from svg2img import image_utils
from svg2img.image_resolver import resolve_images
from svg2img.options import RenderOptions
from svg2img.rasterizer import BaseRasterizer, RenderedImage, ResvgRasterizer
from svg2img.resource_limits import ResourceLimits
from svg2img.source import Source, create_client, load_svg_content

logger = logging.getLogger(__name__)

T = TypeVar("T")

Options = Union[RenderOptions, Mapping[str, Any], None]
Callback = Callable[[Optional[BaseException], Optional[bytes]], Any]


class Completion:
    """Single-fire completion channel for callback-style results.

    Delivers exactly one of an error or a result to the callback. A second
    delivery raises RuntimeError instead of invoking the callback again.
    """

    def __init__(self, callback: Callback) -> None:
        self._callback = callback
        self._done = False

    @property
    def done(self) -> bool:
        return self._done

    def succeed(self, result: bytes) -> None:
        self._deliver(None, result)

    def fail(self, error: BaseException) -> None:
        self._deliver(error, None)

    def _deliver(
        self, error: Optional[BaseException], result: Optional[bytes]
    ) -> None:
        if self._done:
            raise RuntimeError("Completion has already been delivered")
        self._done = True
        self._callback(error, result)


def _rasterize(rasterizer: BaseRasterizer, depth: int) -> RenderedImage:
    rendered = rasterizer.render()
    if logger.isEnabledFor(logging.DEBUG):
        width, height = rendered.size
        logger.debug(f"Rendered {width}x{height} image at depth {depth}")
    return rendered


async def render_content(
    content: Union[str, bytes],
    options: RenderOptions,
    client: httpx.AsyncClient,
    limits: ResourceLimits,
    depth: int = 0,
) -> bytes:
    """Rasterize loaded SVG content and encode it in the requested format.

    External images are resolved before rendering starts; nested SVG images
    go through this function again with default options.

    Args:
        content: SVG markup or bytes.
        options: Normalized render options.
        client: HTTP client used for external images.
        limits: Resource limits.
        depth: Nesting level of the document, 0 for the top-level source.

    Returns:
        PNG or JPEG bytes.
    """
    rasterizer = ResvgRasterizer(content, options.rasterizer_options())

    async def render_svg(data: bytes) -> bytes:
        if limits.is_recursion_limited() and depth + 1 > limits.max_recursion_depth:
            raise RecursionError(
                f"SVG image nesting exceeds {limits.max_recursion_depth} levels"
            )
        return await render_content(data, RenderOptions(), client, limits, depth + 1)

    await resolve_images(rasterizer, client, render_svg, limits)

    rendered = await asyncio.to_thread(_rasterize, rasterizer, depth)
    png_bytes = rendered.as_png()
    if options.is_jpeg:
        return await asyncio.to_thread(
            image_utils.png_to_jpeg, png_bytes, options.quality
        )
    return png_bytes


async def convert_async(
    source: Source,
    options: Options = None,
    *,
    client: httpx.AsyncClient | None = None,
    limits: ResourceLimits | None = None,
) -> bytes:
    """Convert an SVG source to a PNG or JPEG image.

    Args:
        source: SVG markup, ``data:image/svg+xml;base64,`` URI, http(s) URL,
            local file path, or raw bytes.
        options: `RenderOptions` or a mapping with ``format``, ``quality`` and
            ``resvg`` keys.
        client: Optional HTTP client. When omitted, a client is created for
            this call and closed when it finishes; a given client is left open.
        limits: Resource limits, defaults to `ResourceLimits.default()`.

    Returns:
        Image bytes in the requested format.

    Raises:
        ValueError: If options are invalid or the SVG cannot be rendered.
        FileNotFoundError: If a local source file does not exist.
        httpx.HTTPError: If a remote source cannot be fetched.
        xml.etree.ElementTree.ParseError: If the SVG is malformed.
    """
    render_options = RenderOptions.from_value(options)
    if limits is None:
        limits = ResourceLimits.default()

    if client is None:
        async with create_client(limits) as own_client:
            return await _convert(source, render_options, own_client, limits)
    return await _convert(source, render_options, client, limits)


async def _convert(
    source: Source,
    options: RenderOptions,
    client: httpx.AsyncClient,
    limits: ResourceLimits,
) -> bytes:
    content = await load_svg_content(source, client=client, limits=limits)
    return await render_content(content, options, client, limits)


def _run_sync(coro: Coroutine[Any, Any, T]) -> T:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    # Inside a running event loop (e.g., Jupyter), run in a dedicated thread.
    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as executor:
        return executor.submit(asyncio.run, coro).result()


def convert(source: Source, options: Options = None, **kwargs: Any) -> bytes:
    """Blocking version of `convert_async`."""
    return _run_sync(convert_async(source, options, **kwargs))


def svg2img(
    source: Source,
    options: Union[Options, Callback] = None,
    callback: Optional[Callback] = None,
    **kwargs: Any,
) -> None:
    """Convert an SVG source and deliver the result to a callback.

    The callback is invoked exactly once, as ``callback(error, None)`` on
    failure or ``callback(None, image_bytes)`` on success. The options may be
    omitted by passing the callback in their place.

    Args:
        source: SVG markup, base64 data URI, URL, file path, or bytes.
        options: Render options, see `convert_async`.
        callback: Completion callback.
        **kwargs: Passed to `convert_async` (``client``, ``limits``).

    Raises:
        TypeError: If no callback is given.
    """
    if callback is None and callable(options):
        callback, options = options, None
    if callback is None:
        raise TypeError("svg2img() requires a callback; use convert() instead")

    completion = Completion(callback)
    try:
        result = convert(source, options, **kwargs)  # type: ignore[arg-type]
    except Exception as e:
        logger.debug(f"Conversion failed: {e}")
        completion.fail(e)
        return
    completion.succeed(result)


async def svg2img_async(
    source: Source, options: Options = None, **kwargs: Any
) -> bytes:
    """Awaitable counterpart of `svg2img`, returning the image bytes."""
    return await convert_async(source, options, **kwargs)
