"""Computes packing offsets and canvas size for a sprite."""

from __future__ import annotations

from itertools import accumulate
from typing import List, Sequence, Tuple

from sprite_css.data import (
    ImageOccurrence,
    Placement,
    ReferenceOccurrence,
    SpriteImage,
    SpriteLayout,
)

Member = Tuple[ReferenceOccurrence, int, int]


def _footprints(member: Member, layout: SpriteLayout) -> Tuple[int, int]:
    """Return (packing-axis, cross-axis) footprint of a member."""

    occurrence, width, height = member
    required_width = occurrence.required_width(width, layout)
    required_height = occurrence.required_height(height, layout)
    if layout is SpriteLayout.VERTICAL:
        return required_height, required_width
    return required_width, required_height


def compute_layout(image_occurrence: ImageOccurrence, members: Sequence[Member]) -> SpriteImage:
    """Lay out members (occurrence, width, height) in order along the packing axis.

    Each member's offset is the sum of the packing-axis footprints before it.
    """

    if not members:
        raise ValueError(f"Sprite '{image_occurrence.directive.sprite_id}' has no members to lay out.")

    layout = image_occurrence.directive.layout
    footprints = [_footprints(member, layout) for member in members]
    packing = [footprint[0] for footprint in footprints]
    offsets = [0, *accumulate(packing)]

    placements: List[Placement] = [
        Placement(occurrence=occurrence, offset=offset, width=width, height=height)
        for (occurrence, width, height), offset in zip(members, offsets)
    ]
    length = offsets[-1]
    extent = max(footprint[1] for footprint in footprints)

    width, height = (extent, length) if layout is SpriteLayout.VERTICAL else (length, extent)
    return SpriteImage(
        directive_occurrence=image_occurrence,
        layout=layout,
        width=width,
        height=height,
        placements=tuple(placements),
    )
