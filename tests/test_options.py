"""Tests for RenderOptions."""

import pytest

from svg2img.options import JPEG_DEFAULT_BACKGROUND, RenderOptions


class TestRenderOptionsDefaults:
    def test_none(self) -> None:
        options = RenderOptions.from_value(None)
        assert options.format == "png"
        assert options.quality == 75
        assert options.resvg == {}
        assert not options.is_jpeg

    def test_empty_mapping(self) -> None:
        assert RenderOptions.from_value({}) == RenderOptions()

    def test_falsy_values_use_defaults(self) -> None:
        options = RenderOptions.from_value({"format": "", "quality": None, "resvg": None})
        assert options == RenderOptions()


class TestRenderOptionsParsing:
    @pytest.mark.parametrize("value", ["jpg", "JPG", "jpeg", "Jpeg"])
    def test_jpeg_formats(self, value: str) -> None:
        options = RenderOptions.from_value({"format": value})
        assert options.format == value.lower()
        assert options.is_jpeg

    def test_unsupported_format(self) -> None:
        with pytest.raises(ValueError, match="Unsupported format"):
            RenderOptions.from_value({"format": "gif"})

    @pytest.mark.parametrize(
        "value, expected", [("90", 90), (10, 10), (0, 0), (100, 100)]
    )
    def test_quality(self, value: object, expected: int) -> None:
        assert RenderOptions.from_value({"quality": value}).quality == expected

    @pytest.mark.parametrize("value", [-1, 101, "high", True])
    def test_invalid_quality(self, value: object) -> None:
        with pytest.raises(ValueError):
            RenderOptions.from_value({"quality": value})

    def test_unsupported_type(self) -> None:
        with pytest.raises(TypeError):
            RenderOptions.from_value(["png"])  # type: ignore[arg-type]

    def test_copy_of_render_options(self) -> None:
        original = RenderOptions(format="jpg", resvg={"width": 10})
        copied = RenderOptions.from_value(original)
        assert copied == original
        assert copied is not original


class TestRasterizerOptions:
    def test_png_has_no_background(self) -> None:
        options = RenderOptions.from_value({"resvg": {"width": 100}})
        assert options.rasterizer_options() == {"width": 100}

    def test_jpeg_defaults_to_white_background(self) -> None:
        options = RenderOptions.from_value({"format": "jpg", "resvg": {"width": 100}})
        assert options.rasterizer_options() == {
            "width": 100,
            "background": JPEG_DEFAULT_BACKGROUND,
        }

    def test_jpeg_keeps_explicit_background(self) -> None:
        options = RenderOptions.from_value(
            {"format": "jpeg", "resvg": {"background": "red"}}
        )
        assert options.rasterizer_options() == {"background": "red"}

    def test_caller_options_not_mutated(self) -> None:
        resvg = {"width": 100}
        user_options = {"format": "jpg", "resvg": resvg}
        RenderOptions.from_value(user_options).rasterizer_options()
        assert user_options == {"format": "jpg", "resvg": {"width": 100}}
        assert resvg == {"width": 100}
