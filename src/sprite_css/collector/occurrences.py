"""Collect sprite directive occurrences from stylesheets."""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from sprite_css.css import extract_properties, unpack_url
from sprite_css.data import CssProperty, ImageDirective, ImageOccurrence, ReferenceOccurrence
from sprite_css.diagnostics import MessageLog, MessageType
from sprite_css.directives import parse_image_directive, parse_reference_directive
from sprite_css.io.resources import ResourceHandler

SPRITE_IMAGE_DIRECTIVE = re.compile(r"/\*+\s+(sprite:[^*]*)\*+/")
SPRITE_REFERENCE_DIRECTIVE = re.compile(r"/\*+\s+(sprite-ref:[^*]*)\*+/")


def extract_image_directive_string(css_line: str) -> Optional[str]:
    """Return the trimmed `sprite:` directive text on a line, if any."""

    match = SPRITE_IMAGE_DIRECTIVE.search(css_line)
    return match.group(1).strip() if match else None


def extract_reference_directive_string(css_line: str) -> Optional[str]:
    """Return the trimmed `sprite-ref:` directive text on a line, if any."""

    match = SPRITE_REFERENCE_DIRECTIVE.search(css_line)
    return match.group(1).strip() if match else None


def extract_reference_property(
    css_line: str,
    previous_line: Optional[str],
    log: MessageLog,
    css_file: Optional[str] = None,
    line: Optional[int] = None,
) -> Optional[Tuple[CssProperty, bool]]:
    """Find the `background-image` declaration a reference directive applies to.

    The declaration is looked up on the directive's own line first, then on the
    line immediately before it. Returns the property and whether it came from
    the previous line.
    """

    in_previous_line = False
    properties = extract_properties(SPRITE_REFERENCE_DIRECTIVE.sub("", css_line).strip())

    if not properties:
        if previous_line is None:
            log.warning(
                MessageType.NO_BACKGROUND_IMAGE_RULE_NEXT_TO_SPRITE_REFERENCE_DIRECTIVE,
                css_line,
                css_file=css_file,
                line=line,
            )
            return None

        properties = extract_properties(SPRITE_REFERENCE_DIRECTIVE.sub("", previous_line).strip())
        if not properties:
            log.warning(
                MessageType.NO_BACKGROUND_IMAGE_RULE_NEXT_TO_SPRITE_REFERENCE_DIRECTIVE,
                previous_line,
                css_file=css_file,
                line=line - 1 if line is not None else None,
            )
            log.warning(
                MessageType.NO_BACKGROUND_IMAGE_RULE_NEXT_TO_SPRITE_REFERENCE_DIRECTIVE,
                css_line,
                css_file=css_file,
                line=line,
            )
            return None
        in_previous_line = True

    if len(properties) > 1:
        log.warning(
            MessageType.MORE_THAN_ONE_RULE_NEXT_TO_SPRITE_REFERENCE_DIRECTIVE,
            previous_line if in_previous_line else css_line,
            css_file=css_file,
            line=line,
        )
        return None

    background_image = properties[0]
    if background_image.name != "background-image":
        log.warning(
            MessageType.NO_BACKGROUND_IMAGE_RULE_NEXT_TO_SPRITE_REFERENCE_DIRECTIVE,
            previous_line if in_previous_line else css_line,
            css_file=css_file,
            line=line,
        )
        return None

    return background_image, in_previous_line


def collect_image_occurrences(
    css_file: str,
    resources: ResourceHandler,
    log: MessageLog,
) -> List[ImageOccurrence]:
    """Collect image directive occurrences from a single stylesheet."""

    text = resources.read_text(css_file)
    log.info(MessageType.READING_SPRITE_IMAGE_DIRECTIVES, css_file)

    occurrences: List[ImageOccurrence] = []
    for line_number, css_line in enumerate(text.splitlines(), start=1):
        directive_string = extract_image_directive_string(css_line)
        if directive_string is None:
            continue
        directive = parse_image_directive(directive_string, log, css_file=css_file, line=line_number)
        if directive is None:
            continue
        occurrences.append(ImageOccurrence(directive=directive, css_file=css_file, line=line_number))
    return occurrences


def collect_reference_occurrences(
    css_file: str,
    image_directives: Mapping[str, ImageDirective],
    resources: ResourceHandler,
    log: MessageLog,
) -> List[ReferenceOccurrence]:
    """Collect reference directive occurrences from a single stylesheet."""

    text = resources.read_text(css_file)
    log.info(MessageType.READING_SPRITE_REFERENCE_DIRECTIVES, css_file)

    occurrences: List[ReferenceOccurrence] = []
    previous_line: Optional[str] = None
    for line_number, css_line in enumerate(text.splitlines(), start=1):
        directive_string = extract_reference_directive_string(css_line)
        if directive_string is None:
            previous_line = css_line
            continue

        extracted = extract_reference_property(
            css_line, previous_line, log, css_file=css_file, line=line_number
        )
        previous_line = css_line
        if extracted is None:
            continue
        background_image, dual_line = extracted
        effective_line = line_number - 1 if dual_line else line_number

        image_url = unpack_url(background_image.value, log, css_file=css_file, line=effective_line)
        if image_url is None:
            continue

        directive = parse_reference_directive(
            directive_string, image_directives, log, css_file=css_file, line=line_number
        )
        if directive is None:
            continue

        occurrences.append(
            ReferenceOccurrence(
                directive=directive,
                image_path=image_url,
                css_file=css_file,
                line=effective_line,
                important=background_image.important,
                dual_line=dual_line,
            )
        )
    return occurrences


def collect_image_occurrences_from_files(
    css_files: Iterable[str],
    resources: ResourceHandler,
    log: MessageLog,
) -> Dict[str, List[ImageOccurrence]]:
    """Collect image directive occurrences from every stylesheet, in file order."""

    return {css_file: collect_image_occurrences(css_file, resources, log) for css_file in css_files}


def collect_reference_occurrences_from_files(
    css_files: Iterable[str],
    image_directives: Mapping[str, ImageDirective],
    resources: ResourceHandler,
    log: MessageLog,
) -> Dict[str, List[ReferenceOccurrence]]:
    """Collect reference directive occurrences from every stylesheet, in file order."""

    return {
        css_file: collect_reference_occurrences(css_file, image_directives, resources, log)
        for css_file in css_files
    }
