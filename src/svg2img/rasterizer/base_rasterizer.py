import logging
from abc import ABC, abstractmethod

from PIL import Image

from svg2img import image_utils

logger = logging.getLogger(__name__)


class RenderedImage:
    """Rendered surface produced by a rasterizer.

    Wraps the PNG-encoded pixels returned by the rendering engine. The
    content cannot be changed after rendering.
    """

    __slots__ = ("_png",)

    def __init__(self, png: bytes) -> None:
        if not image_utils.is_png(png):
            raise ValueError("Rasterizer output is not a PNG image")
        self._png = png

    def as_png(self) -> bytes:
        """Return the rendered image as PNG bytes."""
        return self._png

    def to_pil(self) -> Image.Image:
        """Decode the rendered image to a PIL Image in RGBA mode."""
        return image_utils.decode_image(self._png, mode="RGBA")

    @property
    def size(self) -> tuple[int, int]:
        return self.to_pil().size

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({len(self._png)} bytes)"


class BaseRasterizer(ABC):
    """Base class for SVG rasterizer implementations.

    A rasterizer instance is bound to one SVG document. After construction it
    reports the external images it cannot load itself through
    `images_to_resolve`; the caller fetches them and hands the bytes back with
    `resolve_image` before calling `render`.
    """

    @abstractmethod
    def images_to_resolve(self) -> list[str]:
        """Return the distinct external image URLs that need to be resolved.

        Returns:
            List of URLs, in document order.
        """
        raise NotImplementedError

    @abstractmethod
    def resolve_image(self, url: str, data: bytes) -> None:
        """Supply the raw bytes of an external image.

        Args:
            url: URL previously returned by `images_to_resolve`.
            data: Raster image bytes for that URL.
        """
        raise NotImplementedError

    @abstractmethod
    def render(self) -> RenderedImage:
        """Render the document.

        Returns:
            RenderedImage holding the rasterized SVG.
        """
        raise NotImplementedError
