"""Batch pipeline building every sprite declared in a set of stylesheets."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np
from PIL import Image

from sprite_css.collector import (
    collect_image_occurrences_from_files,
    collect_reference_occurrences_from_files,
    image_directives,
    merge_image_occurrences,
    merge_reference_occurrences,
)
from sprite_css.compositor import render_sprite
from sprite_css.config.schema import Config
from sprite_css.data import ImageOccurrence, ReferenceOccurrence, ReferenceReplacement, SpriteImage
from sprite_css.diagnostics import MessageLog, MessageType
from sprite_css.io import FileSystemResourceHandler, ResourceHandler, encode_image, load_image
from sprite_css.layout import compute_layout
from sprite_css.replacement import build_replacements
from sprite_css.rewriter import output_css_path, output_path, rewrite_css, sprite_url_for
from sprite_css.scheduler.control import RunControl


@dataclass
class BuiltSprite:
    """A rendered sprite and the replacements for its references."""

    sprite: SpriteImage
    path: Path
    canvas: np.ndarray
    replacements: List[ReferenceReplacement]


def resolve_css_files(config: Config) -> List[str]:
    """Explicit stylesheets first, then every stylesheet under the root directory.

    Stylesheets produced by an earlier run are skipped.
    """

    files: List[str] = []
    seen = set()

    def _add(path: Path) -> None:
        key = os.path.abspath(path)
        if key not in seen:
            seen.add(key)
            files.append(str(path))

    for css_file in config.css_files:
        _add(css_file)

    if config.root_dir is not None:
        output_root = os.path.abspath(config.output_dir) if config.output_dir else None
        for path in sorted(config.root_dir.rglob("*.css")):
            if config.css_file_suffix and path.stem.endswith(config.css_file_suffix):
                continue
            if output_root and os.path.abspath(path).startswith(output_root + os.sep):
                continue
            _add(path)
    return files


def build_sprite(
    image_occurrence: ImageOccurrence,
    references: Sequence[ReferenceOccurrence],
    config: Config,
    resources: ResourceHandler,
    log: MessageLog,
    image_cache: Optional[Dict[str, np.ndarray]] = None,
) -> Optional[BuiltSprite]:
    """Load, lay out, render and write one sprite.

    References whose image cannot be loaded are reported and left out.
    """

    directive = image_occurrence.directive
    cache = image_cache if image_cache is not None else {}
    members = []
    images = []
    for reference in references:
        try:
            path = resources.resolve(reference.css_file, reference.image_path)
            if path not in cache:
                cache[path] = load_image(resources, path)
        except (OSError, ValueError, Image.DecompressionBombError) as exc:
            log.warning(
                MessageType.CANNOT_LOAD_IMAGE,
                reference.image_path,
                exc,
                css_file=reference.css_file,
                line=reference.line,
            )
            continue
        image = cache[path]
        members.append((reference, image.shape[1], image.shape[0]))
        images.append(image)

    if not members:
        return None

    try:
        source_path = Path(resources.resolve(image_occurrence.css_file, directive.image_url))
    except ValueError as exc:
        log.warning(
            MessageType.CANNOT_WRITE_SPRITE_IMAGE,
            directive.image_url,
            exc,
            css_file=image_occurrence.css_file,
            line=image_occurrence.line,
        )
        return None

    sprite = compute_layout(image_occurrence, members)
    canvas = render_sprite(sprite, images)
    sprite_path = output_path(source_path, config)
    log.info(
        MessageType.WRITING_SPRITE_IMAGE,
        directive.sprite_id,
        sprite.width,
        sprite.height,
        sprite_path,
        css_file=image_occurrence.css_file,
        line=image_occurrence.line,
    )
    resources.write_bytes(
        str(sprite_path),
        encode_image(canvas, directive.format, directive.matte_color, optimize=config.png_optimize),
    )
    return BuiltSprite(sprite=sprite, path=sprite_path, canvas=canvas, replacements=build_replacements(sprite))


def build_sprites(
    config: Config,
    resources: Optional[ResourceHandler] = None,
    log: Optional[MessageLog] = None,
    control: Optional[RunControl] = None,
    status_callback: Optional[Callable[[Dict[str, object]], None]] = None,
) -> Dict[str, object]:
    """Run the full build and write sprite images and rewritten stylesheets."""

    config.validate()
    if resources is None:
        resources = FileSystemResourceHandler(config.document_root_dir, config.css_file_encoding)
    if log is None:
        log = MessageLog(min_level=config.log_level)

    css_files = resolve_css_files(config)

    image_occurrences = merge_image_occurrences(
        collect_image_occurrences_from_files(css_files, resources, log), log
    )
    reference_occurrences = merge_reference_occurrences(
        collect_reference_occurrences_from_files(
            css_files, image_directives(image_occurrences), resources, log
        )
    )

    built: Dict[str, BuiltSprite] = {}
    image_cache: Dict[str, np.ndarray] = {}
    for index, (sprite_id, image_occurrence) in enumerate(image_occurrences.items()):
        if control and control.should_stop():
            log.info(MessageType.BUILD_STOPPED, sprite_id)
            break
        references = reference_occurrences.get(sprite_id, [])
        if not references:
            log.info(
                MessageType.NO_REFERENCES_FOR_SPRITE,
                sprite_id,
                css_file=image_occurrence.css_file,
                line=image_occurrence.line,
            )
            continue

        result = build_sprite(image_occurrence, references, config, resources, log, image_cache)
        if result is None:
            continue
        built[sprite_id] = result
        if status_callback:
            status_callback(
                {
                    "sprite": sprite_id,
                    "done": index + 1,
                    "total": len(image_occurrences),
                    "preview": str(result.path),
                    "message": f"Sprite {sprite_id} | {result.sprite.width}x{result.sprite.height} "
                    f"| {len(result.replacements)} images",
                }
            )

    replacements_by_file: Dict[str, List[ReferenceReplacement]] = {}
    for result in built.values():
        for replacement in result.replacements:
            replacements_by_file.setdefault(replacement.occurrence.css_file, []).append(replacement)

    stylesheets: List[str] = []
    for css_file in css_files:
        replacements = replacements_by_file.get(css_file)
        if not replacements:
            continue
        css_out = output_css_path(Path(css_file), config)
        sprite_urls = {
            sprite_id: sprite_url_for(css_out, result.path) for sprite_id, result in built.items()
        }
        rewritten = rewrite_css(resources.read_text(css_file), replacements, sprite_urls)
        log.info(MessageType.WRITING_CSS, css_out)
        resources.write_text(str(css_out), rewritten)
        stylesheets.append(str(css_out))

    log.export(config.message_output)

    return {
        "sprites": {
            sprite_id: {
                "path": str(result.path),
                "width": result.sprite.width,
                "height": result.sprite.height,
                "members": len(result.sprite.placements),
            }
            for sprite_id, result in built.items()
        },
        "stylesheets": stylesheets,
        "replacements": [
            replacement for result in built.values() for replacement in result.replacements
        ],
        "messages": list(log.messages),
        "warnings": len(log.warnings()),
    }
