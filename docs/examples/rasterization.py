"""Rasterization examples - converting SVG to PNG and JPEG images."""

import asyncio

from svg2img import ResourceLimits, convert, svg2img, svg2img_async

SVG = """<svg xmlns="http://www.w3.org/2000/svg" width="200" height="200">
    <circle cx="100" cy="100" r="80" fill="teal"/>
    <image x="60" y="60" width="80" height="80"
           href="https://upload.wikimedia.org/wikipedia/commons/0/02/SVG_logo.svg"/>
</svg>"""

# Example 1: PNG from markup
print("Example 1: PNG from markup")
with open("output.png", "wb") as f:
    f.write(convert(SVG))
print("✓ Created output.png")

# Example 2: JPEG with custom size and quality
print("\nExample 2: JPEG with custom size")
jpeg = convert(SVG, {"format": "jpg", "quality": 90, "resvg": {"width": 800}})
with open("output.jpg", "wb") as f:
    f.write(jpeg)
print("✓ Created output.jpg")


# Example 3: Callback style
print("\nExample 3: Callback style")


def on_done(error, result):
    if error is not None:
        print(f"⚠ Conversion failed: {error}")
        return
    with open("callback.png", "wb") as f:
        f.write(result)
    print("✓ Created callback.png")


svg2img("missing.svg", on_done)
svg2img(SVG, {"format": "png"}, on_done)

# Example 4: Awaitable, with tighter limits
print("\nExample 4: asyncio")
limits = ResourceLimits(timeout=5, max_recursion_depth=2)
png = asyncio.run(svg2img_async(SVG, limits=limits))
print(f"✓ Rendered {len(png)} bytes")
