import argparse
import logging
import os
from typing import Any

from svg2img import convert

logger = logging.getLogger(__name__)

EXTENSION_FORMATS = {".png": "png", ".jpg": "jpg", ".jpeg": "jpeg"}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Convert SVG to PNG or JPEG")
    parser.add_argument(
        "input",
        metavar="INPUT",
        type=str,
        help="SVG file path, URL, inline markup or base64 data URI",
    )
    parser.add_argument(
        "--output",
        metavar="PATH",
        default="output.png",
        help="Output file. default output.png",
    )
    parser.add_argument(
        "--format",
        metavar="FORMAT",
        type=str,
        choices=["png", "jpg", "jpeg"],
        default=None,
        help="Output format (png, jpg, jpeg). Default: from the output extension",
    )
    parser.add_argument(
        "--quality",
        metavar="N",
        type=int,
        default=75,
        help="JPEG quality (0-100). Default: 75",
    )
    parser.add_argument("--width", metavar="PX", type=int, default=None)
    parser.add_argument("--height", metavar="PX", type=int, default=None)
    parser.add_argument("--zoom", metavar="FACTOR", type=float, default=None)
    parser.add_argument(
        "--dpi",
        metavar="DPI",
        type=int,
        default=None,
        help="Dots per inch for physical units. Default: 96",
    )
    parser.add_argument(
        "--background",
        metavar="COLOR",
        type=str,
        default=None,
        help="Background color, e.g. '#fff'. Default: transparent (white for JPEG)",
    )
    parser.add_argument(
        "--loglevel",
        metavar="LEVEL",
        default="WARNING",
        help="Logging level, default WARNING",
    )
    return parser.parse_args(argv)


def build_options(args: argparse.Namespace) -> dict[str, Any]:
    image_format = args.format
    if image_format is None:
        extension = os.path.splitext(args.output)[1].lower()
        image_format = EXTENSION_FORMATS.get(extension, "png")

    resvg = {
        key: getattr(args, key)
        for key in ("width", "height", "zoom", "dpi", "background")
        if getattr(args, key) is not None
    }
    return {"format": image_format, "quality": args.quality, "resvg": resvg}


def main(argv: list[str] | None = None) -> None:
    """Main function to convert SVG to a raster image."""
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.loglevel.upper(), "WARNING"))
    image_bytes = convert(args.input, build_options(args))
    logger.info(f"Saving {args.output}")
    with open(args.output, "wb") as f:
        f.write(image_bytes)


if __name__ == "__main__":
    main()
