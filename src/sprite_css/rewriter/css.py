"""Rewrite stylesheets so sprite references point into the sprite images."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Dict, List, Mapping, Sequence

from sprite_css.collector.occurrences import SPRITE_REFERENCE_DIRECTIVE
from sprite_css.config.schema import Config
from sprite_css.data import ReferenceReplacement

BACKGROUND_IMAGE_RE = re.compile(r"background-image\s*:\s*url\([^)]*\)[^;}]*;?", re.IGNORECASE)
DIRECTIVE_RE = re.compile(r"\s*" + SPRITE_REFERENCE_DIRECTIVE.pattern)


def output_path(path: Path, config: Config) -> Path:
    """Map a source-tree path into the output directory, if one is configured.

    Paths outside the root directory are left where they are.
    """

    if config.output_dir is None or config.root_dir is None:
        return path
    try:
        relative = Path(os.path.abspath(path)).relative_to(os.path.abspath(config.root_dir))
    except ValueError:
        return path
    return config.output_dir / relative


def output_css_path(css_file: Path, config: Config) -> Path:
    """Path of the rewritten stylesheet for a source stylesheet."""

    renamed = css_file.with_name(f"{css_file.stem}{config.css_file_suffix}{css_file.suffix}")
    return output_path(renamed, config)


def sprite_url_for(css_out: Path, sprite_path: Path) -> str:
    """URL of a sprite image relative to the stylesheet that uses it."""

    relative = os.path.relpath(os.path.abspath(sprite_path), os.path.abspath(css_out.parent))
    return relative.replace(os.sep, "/")


def _line_ending(line: str) -> str:
    stripped = line.rstrip("\r\n")
    return line[len(stripped):]


def rewrite_css(
    text: str,
    replacements: Sequence[ReferenceReplacement],
    sprite_urls: Mapping[str, str],
) -> str:
    """Apply replacements to stylesheet text.

    `sprite_urls` maps sprite ids to the URL the rewritten stylesheet uses.
    When two replacements target the same line, the first one is applied.
    """

    lines = text.splitlines(keepends=True)
    dropped: set[int] = set()
    by_line: Dict[int, ReferenceReplacement] = {}
    for replacement in replacements:
        # one background-image declaration per line: the first reference to claim it wins
        by_line.setdefault(replacement.occurrence.line - 1, replacement)

    for index, replacement in by_line.items():
        occurrence = replacement.occurrence
        sprite_url = sprite_urls[occurrence.directive.sprite_ref]
        declarations = " ".join(replacement.declarations(sprite_url))

        line = lines[index]
        ending = _line_ending(line)
        body = DIRECTIVE_RE.sub("", line[: len(line) - len(ending)])
        body = BACKGROUND_IMAGE_RE.sub(lambda _match: declarations, body, count=1)
        lines[index] = body.rstrip() + ending

        if occurrence.dual_line and index + 1 < len(lines):
            directive_line = lines[index + 1]
            directive_ending = _line_ending(directive_line)
            remaining = DIRECTIVE_RE.sub(
                "", directive_line[: len(directive_line) - len(directive_ending)]
            ).rstrip()
            if remaining.strip():
                lines[index + 1] = remaining + directive_ending
            else:
                dropped.add(index + 1)

    kept: List[str] = [line for index, line in enumerate(lines) if index not in dropped]
    return "".join(kept)
