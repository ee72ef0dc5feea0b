"""Group collected occurrences by sprite id."""

from __future__ import annotations

from typing import Dict, List, Mapping, Sequence

from sprite_css.data import ImageDirective, ImageOccurrence, ReferenceOccurrence
from sprite_css.diagnostics import MessageLog, MessageType


def merge_image_occurrences(
    occurrences_by_file: Mapping[str, Sequence[ImageOccurrence]],
    log: MessageLog,
) -> Dict[str, ImageOccurrence]:
    """Map sprite id to its first image occurrence; later ones are reported and dropped."""

    merged: Dict[str, ImageOccurrence] = {}
    for occurrences in occurrences_by_file.values():
        for occurrence in occurrences:
            sprite_id = occurrence.directive.sprite_id
            if sprite_id in merged:
                log.warning(
                    MessageType.IGNORING_SPRITE_IMAGE_REDEFINITION,
                    sprite_id,
                    css_file=occurrence.css_file,
                    line=occurrence.line,
                )
                continue
            merged[sprite_id] = occurrence
    return merged


def merge_reference_occurrences(
    occurrences_by_file: Mapping[str, Sequence[ReferenceOccurrence]],
) -> Dict[str, List[ReferenceOccurrence]]:
    """Map sprite id to its references, keeping scan order."""

    merged: Dict[str, List[ReferenceOccurrence]] = {}
    for occurrences in occurrences_by_file.values():
        for occurrence in occurrences:
            merged.setdefault(occurrence.directive.sprite_ref, []).append(occurrence)
    return merged


def image_directives(occurrences: Mapping[str, ImageOccurrence]) -> Dict[str, ImageDirective]:
    return {sprite_id: occurrence.directive for sprite_id, occurrence in occurrences.items()}
