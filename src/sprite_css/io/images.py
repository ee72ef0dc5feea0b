"""Image loading and encoding."""

from __future__ import annotations

import io
from typing import Optional, Tuple

import numpy as np
from PIL import Image

from sprite_css.data import ImageFormat
from sprite_css.io.resources import ResourceHandler


def image_to_rgba(image: Image.Image) -> np.ndarray:
    """Convert a PIL image to an RGBA uint8 array of shape (H, W, 4)."""

    return np.asarray(image.convert("RGBA"), dtype=np.uint8).copy()


def load_image(resources: ResourceHandler, path: str) -> np.ndarray:
    """Load a member image as RGBA uint8."""

    with Image.open(io.BytesIO(resources.read_bytes(path))) as image:
        return image_to_rgba(image)


def flatten_on_matte(rgba: np.ndarray, color: Tuple[int, int, int]) -> np.ndarray:
    """Composite an RGBA image onto an opaque background color."""

    alpha = rgba[..., 3:4].astype(np.float32) / 255.0
    background = np.asarray(color, dtype=np.float32).reshape(1, 1, 3)
    rgb = rgba[..., :3].astype(np.float32) * alpha + background * (1.0 - alpha)
    out = np.empty_like(rgba)
    out[..., :3] = np.clip(np.rint(rgb), 0, 255).astype(np.uint8)
    out[..., 3] = 255
    return out


DEFAULT_MATTE_COLOR = (255, 255, 255)
TRANSPARENT_INDEX = 255


def quantize_with_transparency(rgba: np.ndarray, matte_color: Tuple[int, int, int]) -> Image.Image:
    """Build a palette image where fully transparent pixels share one index.

    Partially transparent pixels are flattened onto the matte color.
    """

    transparent = rgba[..., 3] == 0
    flat = np.ascontiguousarray(flatten_on_matte(rgba, matte_color)[..., :3])
    quantized = Image.fromarray(flat, mode="RGB").quantize(colors=TRANSPARENT_INDEX)

    indices = np.asarray(quantized, dtype=np.uint8).copy()
    indices[transparent] = TRANSPARENT_INDEX
    palette = list(quantized.getpalette() or [])[: 3 * TRANSPARENT_INDEX]
    palette += [0] * (768 - len(palette))

    image = Image.frombytes("P", (rgba.shape[1], rgba.shape[0]), indices.tobytes())
    image.putpalette(palette)
    return image


def encode_image(
    rgba: np.ndarray,
    image_format: ImageFormat,
    matte_color: Optional[Tuple[int, int, int]] = None,
    optimize: bool = False,
) -> bytes:
    """Encode an RGBA array in the requested output format.

    PNG keeps full alpha and ignores the matte color. GIF keeps binary
    transparency; JPG is flattened completely.
    """

    matte = matte_color or DEFAULT_MATTE_COLOR
    options = {"optimize": optimize}
    if image_format is ImageFormat.PNG:
        image = Image.fromarray(rgba, mode="RGBA")
    elif not image_format.has_alpha:
        image = Image.fromarray(np.ascontiguousarray(flatten_on_matte(rgba, matte)[..., :3]), mode="RGB")
    else:
        image = quantize_with_transparency(rgba, matte)
        options["transparency"] = TRANSPARENT_INDEX

    buf = io.BytesIO()
    image.save(buf, format=image_format.pil_format, **options)
    return buf.getvalue()
