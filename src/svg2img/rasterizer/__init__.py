"""Rasterizer module for converting SVG to raster images.

This module provides the ResvgRasterizer, which renders SVG documents with the
resvg engine and lets the caller supply external images the engine cannot
fetch on its own.
"""

from .base_rasterizer import BaseRasterizer, RenderedImage
from .resvg_rasterizer import ResvgRasterizer

__all__ = ["BaseRasterizer", "RenderedImage", "ResvgRasterizer"]
