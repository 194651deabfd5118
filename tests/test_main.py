"""Tests for the command line interface."""

from pathlib import Path

import pytest

from svg2img.__main__ import build_options, main, parse_args
from svg2img.image_utils import is_png
from conftest import is_jpeg


def test_build_options_defaults() -> None:
    args = parse_args(["input.svg"])
    assert build_options(args) == {"format": "png", "quality": 75, "resvg": {}}


@pytest.mark.parametrize(
    "output, expected", [("out.jpg", "jpg"), ("out.JPEG", "jpeg"), ("out.bin", "png")]
)
def test_build_options_format_from_extension(output: str, expected: str) -> None:
    args = parse_args(["input.svg", "--output", output])
    assert build_options(args)["format"] == expected


def test_build_options_resvg() -> None:
    args = parse_args(
        [
            "input.svg",
            "--format",
            "jpg",
            "--quality",
            "40",
            "--width",
            "300",
            "--background",
            "#000",
        ]
    )
    assert build_options(args) == {
        "format": "jpg",
        "quality": 40,
        "resvg": {"width": 300, "background": "#000"},
    }


def test_main_png(tmp_path: Path, simple_svg: str) -> None:
    source = tmp_path / "input.svg"
    source.write_text(simple_svg, encoding="utf-8")
    output = tmp_path / "output.png"
    main([str(source), "--output", str(output)])
    assert is_png(output.read_bytes())


def test_main_jpeg(tmp_path: Path, simple_svg: str) -> None:
    source = tmp_path / "input.svg"
    source.write_text(simple_svg, encoding="utf-8")
    output = tmp_path / "output.jpg"
    main([str(source), "--output", str(output), "--quality", "60"])
    assert is_jpeg(output.read_bytes())


def test_main_missing_input(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        main([str(tmp_path / "missing.svg"), "--output", str(tmp_path / "o.png")])
