"""Resvg-based rasterizer module.

This module provides SVG rasterization using the resvg library via resvg-py,
offering fast and accurate rendering with no external dependencies.
"""

import logging
import re
import xml.etree.ElementTree as ET
from typing import Any, Union

import resvg_py

from svg2img import image_utils

from .base_rasterizer import BaseRasterizer, RenderedImage

logger = logging.getLogger(__name__)

NAMESPACE = "http://www.w3.org/2000/svg"
XLINK_NAMESPACE = "http://www.w3.org/1999/xlink"

HREF_ATTRIBUTES = ("href", f"{{{XLINK_NAMESPACE}}}href")
REMOTE_SCHEMES = ("http://", "https://")

ET.register_namespace("", NAMESPACE)
ET.register_namespace("xlink", XLINK_NAMESPACE)


class ResvgRasterizer(BaseRasterizer):
    """SVG rasterizer using resvg.

    The document is parsed once at construction to find ``<image>`` elements
    that point at ``http://`` or ``https://`` URLs, which resvg never fetches.
    Bytes supplied through `resolve_image` are embedded as data URIs right
    before rendering; unresolved references are left as they are and resvg
    renders without them.

    Note:
        Resvg does not support CSS @font-face rules with embedded fonts (data URIs).
        When ``font_files`` is not given in the options, font file paths are
        extracted from @font-face src: url("file://...") declarations and passed
        to resvg's native font loading API.

    Example:
        >>> rasterizer = ResvgRasterizer(svg_content, {"width": 200})
        >>> for url in rasterizer.images_to_resolve():
        ...     rasterizer.resolve_image(url, download(url))
        >>> png_bytes = rasterizer.render().as_png()
    """

    def __init__(
        self, content: Union[str, bytes], options: dict[str, Any] | None = None
    ) -> None:
        """Parse the SVG document.

        Args:
            content: SVG content as string or bytes.
            options: Keyword arguments forwarded to ``resvg_py.svg_to_bytes``.

        Raises:
            xml.etree.ElementTree.ParseError: If the content is not well-formed XML.
            ValueError: If the root element is not ``<svg>``.
        """
        self.options = dict(options or {})
        if isinstance(content, bytes):
            # Parse bytes directly so the XML encoding declaration is honored.
            self._root = ET.fromstring(content)
            try:
                self.svg_string = content.decode("utf-8-sig")
            except UnicodeDecodeError:
                self.svg_string = ET.tostring(self._root, encoding="unicode")
        else:
            self.svg_string = content
            self._root = ET.fromstring(content)
        if _local_name(self._root.tag) != "svg":
            raise ValueError(
                f"Root element must be <svg>, got <{_local_name(self._root.tag)}>"
            )
        self._references = self._find_image_references(self._root)
        self._resolved: dict[str, tuple[bytes, str]] = {}
        if self._references:
            logger.debug(f"Found {len(self._references)} external image(s)")

    @staticmethod
    def _find_image_references(
        root: ET.Element,
    ) -> dict[str, list[tuple[ET.Element, str]]]:
        references: dict[str, list[tuple[ET.Element, str]]] = {}
        for node in root.iter():
            if not isinstance(node.tag, str) or _local_name(node.tag) != "image":
                continue
            for attribute in HREF_ATTRIBUTES:
                href = (node.get(attribute) or "").strip()
                if href.startswith(REMOTE_SCHEMES):
                    references.setdefault(href, []).append((node, attribute))
        return references

    @staticmethod
    def _extract_font_file_paths(svg_content: str) -> list[str]:
        """Extract font file paths from @font-face CSS rules in SVG.

        Args:
            svg_content: SVG content as string.

        Returns:
            List of font file paths found in src: url("file://...") declarations.
        """
        pattern = re.compile(r'src:\s*url\(["\']?(file://[^"\')]+)["\']?\)')
        return [match.replace("file://", "") for match in pattern.findall(svg_content)]

    def images_to_resolve(self) -> list[str]:
        return [url for url in self._references if url not in self._resolved]

    def resolve_image(self, url: str, data: bytes) -> None:
        """Supply the raw bytes of an external image.

        Raises:
            KeyError: If the URL is not referenced by the document.
            PIL.UnidentifiedImageError: If the data is not a recognizable image.
        """
        if url not in self._references:
            raise KeyError(f"Image is not referenced by the document: {url}")
        self._resolved[url] = image_utils.to_resvg_image(data)
        logger.debug(f"Resolved {url} ({len(data)} bytes)")

    def _substituted_svg(self) -> str:
        if not self._resolved:
            return self.svg_string
        for url, (data, mime_type) in self._resolved.items():
            data_uri = image_utils.encode_data_uri(data, mime_type)
            for node, attribute in self._references[url]:
                node.set(attribute, data_uri)
        return ET.tostring(self._root, encoding="unicode")

    def render(self) -> RenderedImage:
        """Render the document with resvg.

        Raises:
            ValueError: If resvg cannot render the content.
        """
        options = dict(self.options)
        # Auto-extract font files from @font-face CSS if not provided
        if options.get("font_files") is None:
            font_files = self._extract_font_file_paths(self.svg_string)
            if font_files:
                logger.debug(f"Extracted {len(font_files)} font file(s) from SVG")
                options["font_files"] = font_files

        png_bytes = resvg_py.svg_to_bytes(
            svg_string=self._substituted_svg(), **options
        )
        return RenderedImage(bytes(png_bytes))


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]
