import base64
import io
import logging

from PIL import Image

logger = logging.getLogger(__name__)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

# Raster formats resvg decodes natively, keyed by Pillow format name.
RESVG_MIME_TYPES = {
    "PNG": "image/png",
    "JPEG": "image/jpeg",
    "GIF": "image/gif",
    "WEBP": "image/webp",
}


def encode_image(
    image: Image.Image, format: str = "PNG", quality: int | None = None
) -> bytes:
    """Encode a PIL image to bytes in the specified format.

    For JPEG format, RGBA images are automatically converted to RGB with a white background.
    """
    format = format.upper()
    if format == "JPG":
        format = "JPEG"
    if format == "JPEG" and image.mode in ("RGBA", "LA", "P"):
        image = image.convert("RGBA")
        rgb_image = Image.new("RGB", image.size, (255, 255, 255))
        rgb_image.paste(image, mask=image.split()[3])  # Use alpha as mask
        image = rgb_image
    elif format == "JPEG" and image.mode != "RGB":
        image = image.convert("RGB")

    params = {}
    if quality is not None:
        params["quality"] = quality
    with io.BytesIO() as output:
        image.save(output, format=format, **params)
        return output.getvalue()


def decode_image(data: bytes, mode: str | None = None) -> Image.Image:
    """Decode image data from bytes to a PIL image."""
    with io.BytesIO(data) as input:
        image = Image.open(input)
        image.load()
    if mode is not None:
        return image.convert(mode)
    return image


def encode_data_uri(data: bytes, mime_type: str) -> str:
    """Encode raw bytes as a base64 data URI."""
    base64_data = base64.b64encode(data).decode("utf-8")
    return f"data:{mime_type};base64,{base64_data}"


def to_resvg_image(data: bytes) -> tuple[bytes, str]:
    """Validate image bytes and return them in a format resvg can decode.

    Formats resvg reads natively are returned untouched; anything else Pillow
    understands (BMP, TIFF, ICO, ...) is re-encoded as PNG.

    Returns:
        Tuple of (image bytes, MIME type).

    Raises:
        PIL.UnidentifiedImageError: If the data is not a recognizable image.
    """
    with io.BytesIO(data) as input:
        image = Image.open(input)
        format = image.format
        mime_type = RESVG_MIME_TYPES.get(format or "")
        if mime_type is not None:
            return data, mime_type
        logger.debug(f"Re-encoding {format} image as PNG")
        image.load()
    return encode_image(image, "PNG"), RESVG_MIME_TYPES["PNG"]


def png_to_jpeg(png_bytes: bytes, quality: int) -> bytes:
    """Transcode PNG bytes to JPEG at the given quality (0-100)."""
    image = decode_image(png_bytes)
    return encode_image(image, "JPEG", quality=quality)


def is_png(data: bytes) -> bool:
    return data.startswith(PNG_SIGNATURE)
