from logging import getLogger

from svg2img.converter import (
    Completion,
    convert,
    convert_async,
    svg2img,
    svg2img_async,
)
from svg2img.options import RenderOptions
from svg2img.resource_limits import ResourceLimits
from svg2img.source import SourceKind, classify_source, load_svg_content
from svg2img.version import __version__ as __version__

logger = getLogger(__name__)

__all__ = [
    "Completion",
    "RenderOptions",
    "ResourceLimits",
    "SourceKind",
    "classify_source",
    "convert",
    "convert_async",
    "load_svg_content",
    "svg2img",
    "svg2img_async",
]
