"""Tests for sprite compositing."""

import numpy as np
import pytest

from conftest import solid_rgba
from sprite_css.compositor import composite_image, member_origins, render_sprite
from sprite_css.data import SpriteAlignment, SpriteLayout
from sprite_css.layout import compute_layout
from test_layout import image_occurrence, reference


def random_rgba(width, height, seed):
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)


def test_canvas_matches_layout_and_is_transparent():
    sprite = compute_layout(image_occurrence(), [(reference(), 3, 2)])

    canvas = render_sprite(sprite, [np.zeros((2, 3, 4), dtype=np.uint8)])

    assert canvas.shape == (2, 3, 4)
    assert canvas.dtype == np.uint8
    assert not canvas.any()


@pytest.mark.parametrize("layout", [SpriteLayout.VERTICAL, SpriteLayout.HORIZONTAL])
def test_crop_round_trip_reproduces_members(layout):
    """Cropping each member at its drawing origin returns its exact pixels."""
    start, end = (
        (SpriteAlignment.LEFT, SpriteAlignment.RIGHT)
        if layout is SpriteLayout.VERTICAL
        else (SpriteAlignment.TOP, SpriteAlignment.BOTTOM)
    )
    images = [random_rgba(7, 5, 1), random_rgba(4, 9, 2), random_rgba(6, 6, 3), random_rgba(3, 3, 4)]
    refs = [
        reference(start, top=1, left=2, bottom=3, right=1),
        reference(end, top=2, right=3),
        reference(SpriteAlignment.CENTER),
        reference(start),
    ]
    sprite = compute_layout(
        image_occurrence(layout),
        [(ref, img.shape[1], img.shape[0]) for ref, img in zip(refs, images)],
    )

    canvas = render_sprite(sprite, images)

    for placement, image in zip(sprite.placements, images):
        ((x, y),) = member_origins(sprite, placement)
        crop = canvas[y:y + placement.height, x:x + placement.width]
        assert np.array_equal(crop, image)


def test_vertical_alignment_origins():
    refs = [
        reference(SpriteAlignment.LEFT, left=2, top=1),
        reference(SpriteAlignment.RIGHT, right=3),
        reference(SpriteAlignment.CENTER),
    ]
    sprite = compute_layout(image_occurrence(), [(refs[0], 10, 4), (refs[1], 4, 4), (refs[2], 6, 4)])

    origins = [member_origins(sprite, p) for p in sprite.placements]

    assert sprite.width == 12
    assert origins == [[(2, 1)], [(12 - 3 - 4, 5)], [((12 - 6) // 2, 9)]]


def test_horizontal_alignment_origins():
    refs = [
        reference(SpriteAlignment.TOP, top=2, left=1),
        reference(SpriteAlignment.BOTTOM, bottom=1),
    ]
    sprite = compute_layout(
        image_occurrence(SpriteLayout.HORIZONTAL), [(refs[0], 3, 8), (refs[1], 5, 4)]
    )

    origins = [member_origins(sprite, p) for p in sprite.placements]

    assert sprite.height == 10
    assert origins == [[(1, 2)], [(4, 10 - 1 - 4)]]


def test_repeat_tiles_across_full_extent():
    red = solid_rgba(4, 2, (255, 0, 0, 255))
    blue = solid_rgba(10, 3, (0, 0, 255, 255))
    sprite = compute_layout(
        image_occurrence(),
        [(reference(SpriteAlignment.REPEAT, top=1), 4, 2), (reference(), 10, 3)],
    )

    canvas = render_sprite(sprite, [red, blue])

    assert member_origins(sprite, sprite.placements[0]) == [(0, 1), (4, 1), (8, 1)]
    assert np.all(canvas[1:3, :, :] == (255, 0, 0, 255))
    assert not canvas[0].any()
    # the repeated member does not push the next member beyond its own slot
    assert sprite.placements[1].offset == 3
    assert np.all(canvas[3:6, :, :] == (0, 0, 255, 255))


def test_composite_blends_over_existing_pixels():
    canvas = solid_rgba(1, 1, (0, 0, 255, 255))
    half_red = solid_rgba(1, 1, (255, 0, 0, 128))

    composite_image(canvas, half_red, 0, 0)

    r, g, b, a = canvas[0, 0]
    assert a == 255
    assert g == 0
    assert 120 <= r <= 135
    assert 120 <= b <= 135


def test_composite_clips_outside_canvas():
    canvas = np.zeros((2, 2, 4), dtype=np.uint8)

    composite_image(canvas, solid_rgba(3, 3, (9, 9, 9, 255)), 1, 1)

    assert np.all(canvas[1, 1] == (9, 9, 9, 255))
    assert not canvas[0].any()


def test_render_requires_one_image_per_member():
    sprite = compute_layout(image_occurrence(), [(reference(), 1, 1)])

    with pytest.raises(ValueError):
        render_sprite(sprite, [])
