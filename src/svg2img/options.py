"""Render configuration."""

import dataclasses
import logging
from typing import Any, Mapping, Union

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "png"
DEFAULT_QUALITY = 75
JPEG_FORMATS = ("jpg", "jpeg")
SUPPORTED_FORMATS = (DEFAULT_FORMAT,) + JPEG_FORMATS

# resvg renders on a transparent canvas, which turns black once flattened to JPEG.
JPEG_DEFAULT_BACKGROUND = "#fff"


@dataclasses.dataclass
class RenderOptions:
    """Options for a single conversion.

    Attributes:
        format: Output format, ``"png"`` (default), ``"jpg"`` or ``"jpeg"``.
        quality: JPEG quality between 0 and 100, default 75. Ignored for PNG.
        resvg: Keyword arguments forwarded verbatim to ``resvg_py.svg_to_bytes``,
            e.g. ``width``, ``height``, ``zoom``, ``dpi``, ``background``,
            ``font_files`` or ``font_dirs``.

    Example:
        >>> options = RenderOptions.from_value({"format": "JPG", "quality": "90"})
        >>> options.format, options.quality, options.is_jpeg
        ('jpg', 90, True)
    """

    format: str = DEFAULT_FORMAT
    quality: int = DEFAULT_QUALITY
    resvg: dict[str, Any] = dataclasses.field(default_factory=dict)

    def __post_init__(self) -> None:
        self.format = (self.format or DEFAULT_FORMAT).lower()
        if self.format not in SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported format: {self.format!r}. "
                f"Expected one of {', '.join(SUPPORTED_FORMATS)}."
            )
        self.quality = _parse_quality(self.quality)
        self.resvg = dict(self.resvg or {})

    @classmethod
    def from_value(
        cls, options: Union["RenderOptions", Mapping[str, Any], None] = None
    ) -> "RenderOptions":
        """Normalize user-provided options.

        The given mapping is never modified; unknown keys are ignored with a
        debug message.

        Raises:
            TypeError: If options is neither None, a mapping, nor RenderOptions.
            ValueError: If format or quality is invalid.
        """
        if options is None:
            return cls()
        if isinstance(options, RenderOptions):
            return dataclasses.replace(options)
        if not isinstance(options, Mapping):
            raise TypeError(f"Unsupported options type: {type(options).__name__}")

        known = {field.name for field in dataclasses.fields(cls)}
        unknown = set(options) - known
        if unknown:
            logger.debug(f"Ignoring unknown options: {sorted(unknown)}")
        return cls(
            format=options.get("format") or DEFAULT_FORMAT,
            quality=options.get("quality"),
            resvg=options.get("resvg") or {},
        )

    @property
    def is_jpeg(self) -> bool:
        return self.format in JPEG_FORMATS

    def rasterizer_options(self) -> dict[str, Any]:
        """Return a copy of the resvg options with the JPEG background default."""
        options = dict(self.resvg)
        if self.is_jpeg and options.get("background") is None:
            options["background"] = JPEG_DEFAULT_BACKGROUND
        return options


def _parse_quality(value: Any) -> int:
    if value is None or value == "":
        return DEFAULT_QUALITY
    if isinstance(value, bool):
        raise ValueError(f"Invalid quality: {value!r}")
    try:
        quality = int(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid quality: {value!r}") from e
    if not 0 <= quality <= 100:
        raise ValueError(f"Quality must be between 0 and 100, got {quality}")
    return quality
