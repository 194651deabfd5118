import io

import pytest
from PIL import Image, UnidentifiedImageError

from svg2img import image_utils
from conftest import is_jpeg, make_png


def test_png_to_jpeg_flattens_on_white() -> None:
    png = make_png((0, 0, 0, 0), size=(8, 8))
    jpeg = image_utils.png_to_jpeg(png, quality=90)

    assert is_jpeg(jpeg)
    image = image_utils.decode_image(jpeg)
    assert image.mode == "RGB"
    pixel = image.getpixel((4, 4))
    assert isinstance(pixel, tuple)
    assert all(channel >= 250 for channel in pixel)


def test_png_to_jpeg_invalid_data() -> None:
    with pytest.raises(UnidentifiedImageError):
        image_utils.png_to_jpeg(b"not a png", quality=75)


@pytest.mark.parametrize("format", ["JPEG", "jpg", "jpeg"])
def test_encode_image_jpeg_aliases(format: str) -> None:
    image = Image.new("RGBA", (2, 2), (10, 20, 30, 255))
    assert is_jpeg(image_utils.encode_image(image, format))


def test_encode_data_uri() -> None:
    assert image_utils.encode_data_uri(b"abc", "image/png") == (
        "data:image/png;base64,YWJj"
    )


class TestToResvgImage:
    def test_png_passthrough(self) -> None:
        png = make_png((1, 2, 3))
        assert image_utils.to_resvg_image(png) == (png, "image/png")

    def test_jpeg_passthrough(self) -> None:
        jpeg = image_utils.encode_image(Image.new("RGB", (2, 2)), "JPEG")
        assert image_utils.to_resvg_image(jpeg) == (jpeg, "image/jpeg")

    def test_tiff_is_converted_to_png(self) -> None:
        with io.BytesIO() as output:
            Image.new("RGB", (2, 2), (0, 255, 0)).save(output, format="TIFF")
            tiff = output.getvalue()
        data, mime_type = image_utils.to_resvg_image(tiff)
        assert mime_type == "image/png"
        assert image_utils.is_png(data)
        assert image_utils.decode_image(data, mode="RGB").getpixel((0, 0)) == (
            0,
            255,
            0,
        )

    def test_unrecognized(self) -> None:
        with pytest.raises(UnidentifiedImageError):
            image_utils.to_resvg_image(b"<html></html>")
