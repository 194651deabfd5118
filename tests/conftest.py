import io
import logging
from typing import Callable

import httpx
import pytest
from PIL import Image

logger = logging.getLogger(__name__)

Handler = Callable[[httpx.Request], httpx.Response]


def make_png(color: tuple[int, ...], size: tuple[int, int] = (4, 4)) -> bytes:
    """Create PNG bytes filled with a single color."""
    mode = "RGBA" if len(color) == 4 else "RGB"
    with io.BytesIO() as output:
        Image.new(mode, size, color).save(output, format="PNG")
        return output.getvalue()


def make_image_svg(*urls: str, size: int = 40) -> str:
    """Create an SVG placing one <image> per URL side by side."""
    images = "\n".join(
        f'    <image x="{i * size}" y="0" width="{size}" height="{size}" href="{url}"/>'
        for i, url in enumerate(urls)
    )
    width = size * max(len(urls), 1)
    return f"""<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{size}">
{images}
</svg>"""


def is_jpeg(data: bytes) -> bool:
    return data.startswith(b"\xff\xd8\xff")


def mock_client(handler: Handler) -> httpx.AsyncClient:
    """Create an AsyncClient answering requests with the given handler."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def simple_svg() -> str:
    """Simple SVG for basic testing."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="100" height="100" viewBox="0 0 100 100">
    <rect x="10" y="10" width="80" height="80" fill="red"/>
</svg>"""


@pytest.fixture
def svg_with_gradient() -> str:
    """SVG with gradient fill."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="200" height="200" viewBox="0 0 200 200">
    <defs>
        <linearGradient id="grad1" x1="0%" y1="0%" x2="100%" y2="100%">
            <stop offset="0%" style="stop-color:rgb(255,255,0);stop-opacity:1" />
            <stop offset="100%" style="stop-color:rgb(255,0,0);stop-opacity:1" />
        </linearGradient>
    </defs>
    <circle cx="100" cy="100" r="90" fill="url(#grad1)" />
    <path d="M10 180 Q 60 20 190 150" stroke="navy" stroke-width="3" fill="none"/>
</svg>"""


@pytest.fixture
def red_png() -> bytes:
    return make_png((255, 0, 0, 255))


@pytest.fixture
def blue_png() -> bytes:
    return make_png((0, 0, 255, 255))
