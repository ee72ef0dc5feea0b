"""Render member images onto the sprite canvas."""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from sprite_css.data import Placement, SpriteAlignment, SpriteImage, SpriteLayout

# Cross-axis interpretation of each alignment, independent of orientation.
_CROSS_ANCHOR = {
    SpriteAlignment.LEFT: "start",
    SpriteAlignment.TOP: "start",
    SpriteAlignment.RIGHT: "end",
    SpriteAlignment.BOTTOM: "end",
    SpriteAlignment.CENTER: "center",
    SpriteAlignment.REPEAT: "repeat",
}


def member_origins(sprite: SpriteImage, placement: Placement) -> List[Tuple[int, int]]:
    """Return the (x, y) positions a member image is drawn at.

    A repeated member yields one origin per tile across the cross axis.
    """

    props = placement.occurrence.directive.layout_properties
    if sprite.layout is SpriteLayout.VERTICAL:
        along = placement.offset + props.margin_top
        lead, trail = props.margin_left, props.margin_right
        size, extent = placement.width, sprite.width
    else:
        along = placement.offset + props.margin_left
        lead, trail = props.margin_top, props.margin_bottom
        size, extent = placement.height, sprite.height

    anchor = _CROSS_ANCHOR[props.alignment]
    if anchor == "start":
        across = [lead]
    elif anchor == "end":
        across = [extent - trail - size]
    elif anchor == "center":
        across = [(extent - size) // 2]
    else:
        across = list(range(0, extent, max(size, 1)))

    if sprite.layout is SpriteLayout.VERTICAL:
        return [(x, along) for x in across]
    return [(along, y) for y in across]


def composite_image(canvas: np.ndarray, image: np.ndarray, x: int, y: int) -> np.ndarray:
    """Draw an RGBA image onto the canvas at (x, y) using source-over blending.

    Parts falling outside the canvas are clipped. Pixels drawn over fully
    transparent canvas are copied unchanged.
    """

    height, width = image.shape[:2]
    x0, y0 = max(x, 0), max(y, 0)
    x1, y1 = min(x + width, canvas.shape[1]), min(y + height, canvas.shape[0])
    if x1 <= x0 or y1 <= y0:
        return canvas

    src = image[y0 - y:y1 - y, x0 - x:x1 - x]
    dst = canvas[y0:y1, x0:x1]

    src_a = src[..., 3:4].astype(np.float32) / 255.0
    dst_a = dst[..., 3:4].astype(np.float32) / 255.0
    out_a = src_a + dst_a * (1.0 - src_a)
    safe_a = np.where(out_a <= 1e-6, 1.0, out_a)
    out_rgb = (
        src[..., :3].astype(np.float32) * src_a
        + dst[..., :3].astype(np.float32) * dst_a * (1.0 - src_a)
    ) / safe_a

    blended = np.empty_like(dst)
    blended[..., :3] = np.clip(np.rint(out_rgb), 0, 255).astype(np.uint8)
    blended[..., 3:4] = np.clip(np.rint(out_a * 255.0), 0, 255).astype(np.uint8)

    copy_src = (src[..., 3:4] == 255) | (dst[..., 3:4] == 0)
    keep_dst = src[..., 3:4] == 0
    blended = np.where(copy_src, src, blended)
    blended = np.where(keep_dst & ~copy_src, dst, blended)
    canvas[y0:y1, x0:x1] = blended
    return canvas


def render_sprite(sprite: SpriteImage, images: Sequence[np.ndarray]) -> np.ndarray:
    """Render all members, given their images in placement order."""

    if len(images) != len(sprite.placements):
        raise ValueError("Expected one image per sprite member.")

    canvas = np.zeros((sprite.height, sprite.width, 4), dtype=np.uint8)
    for placement, image in zip(sprite.placements, images):
        for x, y in member_origins(sprite, placement):
            composite_image(canvas, image, x, y)
    return canvas
