"""Build background-position replacements for laid out sprite members."""

from __future__ import annotations

from typing import List

from sprite_css.data import (
    Placement,
    ReferenceReplacement,
    SpriteAlignment,
    SpriteImage,
    SpriteLayout,
)

# Named cross-axis anchor per layout; alignments not listed use the default.
_ANCHORS = {
    SpriteLayout.VERTICAL: {SpriteAlignment.RIGHT: "right", SpriteAlignment.CENTER: "center"},
    SpriteLayout.HORIZONTAL: {SpriteAlignment.BOTTOM: "bottom", SpriteAlignment.CENTER: "center"},
}
_DEFAULT_ANCHOR = {SpriteLayout.VERTICAL: "left", SpriteLayout.HORIZONTAL: "top"}


def build_replacement(sprite: SpriteImage, placement: Placement) -> ReferenceReplacement:
    occurrence = placement.occurrence
    anchor = _ANCHORS[sprite.layout].get(occurrence.alignment, _DEFAULT_ANCHOR[sprite.layout])
    position = f"-{placement.offset}px"

    if sprite.layout is SpriteLayout.VERTICAL:
        horizontal, vertical = anchor, position
        horizontal_offset, vertical_offset = None, placement.offset
    else:
        horizontal, vertical = position, anchor
        horizontal_offset, vertical_offset = placement.offset, None

    return ReferenceReplacement(
        occurrence=occurrence,
        horizontal_position=horizontal,
        vertical_position=vertical,
        horizontal_offset=horizontal_offset,
        vertical_offset=vertical_offset,
        image_width=placement.width,
        image_height=placement.height,
        include_dimensions=sprite.directive.include_dimensions,
    )


def build_replacements(sprite: SpriteImage) -> List[ReferenceReplacement]:
    """Return one replacement per member, in packing order."""

    return [build_replacement(sprite, placement) for placement in sprite.placements]
