"""Core data structures used throughout the pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath
from typing import Optional, Tuple


class SpriteLayout(Enum):
    """Direction in which member images are stacked."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class SpriteAlignment(Enum):
    """Cross-axis placement of a member image."""

    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"
    CENTER = "center"
    REPEAT = "repeat"


class ImageFormat(Enum):
    """Output formats a sprite image can be written in."""

    PNG = "png"
    GIF = "gif"
    JPG = "jpg"

    @property
    def has_alpha(self) -> bool:
        return self is not ImageFormat.JPG

    @property
    def pil_format(self) -> str:
        return "JPEG" if self is ImageFormat.JPG else self.name

    @classmethod
    def from_path(cls, path: str) -> Optional["ImageFormat"]:
        """Infer the format from a file name or URL extension."""

        suffix = PurePosixPath(path.split("?", 1)[0]).suffix.lower().lstrip(".")
        if suffix == "jpeg":
            suffix = "jpg"
        for image_format in cls:
            if image_format.value == suffix:
                return image_format
        return None


@dataclass(frozen=True)
class CssProperty:
    """A single `name: value` CSS declaration."""

    name: str
    value: str
    important: bool = False


@dataclass(frozen=True)
class ImageDirective:
    """Parsed `sprite:` directive describing one sprite image."""

    sprite_id: str
    image_url: str
    layout: SpriteLayout
    format: ImageFormat
    matte_color: Optional[Tuple[int, int, int]] = None
    include_dimensions: bool = False


@dataclass(frozen=True)
class ImageOccurrence:
    """An image directive found at a specific stylesheet line."""

    directive: ImageDirective
    css_file: str
    line: int


@dataclass(frozen=True)
class LayoutProperties:
    """Per-reference alignment and margins."""

    alignment: SpriteAlignment
    margin_top: int = 0
    margin_right: int = 0
    margin_bottom: int = 0
    margin_left: int = 0


@dataclass(frozen=True)
class ReferenceDirective:
    """Parsed `sprite-ref:` directive."""

    sprite_ref: str
    layout_properties: LayoutProperties


@dataclass(frozen=True)
class ReferenceOccurrence:
    """A request to place one image into a sprite.

    When `dual_line` is set, the `background-image` declaration sits on `line`
    and the directive comment on the line after it.
    """

    directive: ReferenceDirective
    image_path: str
    css_file: str
    line: int
    important: bool = False
    dual_line: bool = False

    @property
    def alignment(self) -> SpriteAlignment:
        return self.directive.layout_properties.alignment

    def required_width(self, width: int, layout: SpriteLayout) -> int:
        """Width the image occupies in the sprite, margins included."""

        props = self.directive.layout_properties
        if props.alignment is SpriteAlignment.REPEAT and layout is SpriteLayout.VERTICAL:
            # left/right margins are meaningless for an image tiled horizontally
            return width
        return width + props.margin_left + props.margin_right

    def required_height(self, height: int, layout: SpriteLayout) -> int:
        """Height the image occupies in the sprite, margins included."""

        props = self.directive.layout_properties
        if props.alignment is SpriteAlignment.REPEAT and layout is SpriteLayout.HORIZONTAL:
            return height
        return height + props.margin_top + props.margin_bottom


@dataclass(frozen=True)
class Placement:
    """A member image with the packing-axis offset assigned by the layout."""

    occurrence: ReferenceOccurrence
    offset: int
    width: int
    height: int


@dataclass(frozen=True)
class SpriteImage:
    """Logical composite for one sprite id."""

    directive_occurrence: ImageOccurrence
    layout: SpriteLayout
    width: int
    height: int
    placements: Tuple[Placement, ...]

    @property
    def directive(self) -> ImageDirective:
        return self.directive_occurrence.directive

    @property
    def sprite_id(self) -> str:
        return self.directive.sprite_id


@dataclass(frozen=True)
class ReferenceReplacement:
    """Values needed to rewrite one sprite reference in its stylesheet.

    Exactly one of `horizontal_offset` / `vertical_offset` is set: the one on
    the packing axis. The other position is a named anchor.
    """

    occurrence: ReferenceOccurrence
    horizontal_position: str
    vertical_position: str
    horizontal_offset: Optional[int]
    vertical_offset: Optional[int]
    image_width: int
    image_height: int
    include_dimensions: bool

    def declarations(self, sprite_url: str) -> list[str]:
        """Render the CSS declarations that replace the original property."""

        suffix = " !important" if self.occurrence.important else ""
        lines = [
            f"background-image: url('{sprite_url}'){suffix};",
            f"background-position: {self.horizontal_position} {self.vertical_position}{suffix};",
        ]
        if self.include_dimensions:
            lines.append(f"width: {self.image_width}px;")
            lines.append(f"height: {self.image_height}px;")
        return lines
