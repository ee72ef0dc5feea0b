"""Directive occurrence collection and aggregation."""

from sprite_css.collector.aggregate import (
    image_directives,
    merge_image_occurrences,
    merge_reference_occurrences,
)
from sprite_css.collector.occurrences import (
    collect_image_occurrences,
    collect_image_occurrences_from_files,
    collect_reference_occurrences,
    collect_reference_occurrences_from_files,
    extract_image_directive_string,
    extract_reference_directive_string,
    extract_reference_property,
)

__all__ = [
    "collect_image_occurrences",
    "collect_image_occurrences_from_files",
    "collect_reference_occurrences",
    "collect_reference_occurrences_from_files",
    "extract_image_directive_string",
    "extract_reference_directive_string",
    "extract_reference_property",
    "image_directives",
    "merge_image_occurrences",
    "merge_reference_occurrences",
]
