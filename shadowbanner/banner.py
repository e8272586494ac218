"""
Banner generation: text in, multi-line Unicode art out.

generate() splits the text into lines, runs each line through
rasterize -> assemble -> composite, and joins the blocks with one blank
line in between.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .color import RGB, Painter, parse_color
from .errors import ColorError
from .font import FontFace
from .grid import assemble, grid_width
from .shadow import ShadowStyle, glyph_set, render_grid

logger = logging.getLogger(__name__)


@dataclass
class RenderOptions:
    """
    Attributes:
        shadow: shadow style
        color: color spec (preset, hex or "r,g,b"); None renders monochrome
        gradient: sweep hue from left to right across each line
        on: string for ink pixels; None uses the style default
        off: string for empty pixels; None uses the style default
    """
    shadow: ShadowStyle = ShadowStyle.NONE
    color: Optional[str] = None
    gradient: bool = False
    on: Optional[str] = None
    off: Optional[str] = None

    def __post_init__(self):
        self.shadow = ShadowStyle.parse(self.shadow)


def resolve_color(spec: Optional[str]) -> Optional[RGB]:
    """Parsed color, or None when spec is empty or invalid"""
    if not spec:
        return None
    try:
        return parse_color(spec)
    except ColorError as e:
        logger.warning("%s; rendering without color", e)
        return None


def trim_blank_lines(lines: Sequence[str]) -> str:
    """Join lines after dropping leading and trailing whitespace-only lines"""
    start, end = 0, len(lines)
    while end > start and not lines[end - 1].strip():
        end -= 1
    while start < end and not lines[start].strip():
        start += 1
    return "\n".join(lines[start:end])


def render_line(face: FontFace, line: str, options: RenderOptions,
                base: Optional[RGB] = None) -> List[str]:
    """Render a single line of text (no newlines) to rows of glyph strings"""
    if not line:
        return []

    bitmaps = [face.rune_bitmap(ch) for ch in line]
    grid = assemble(bitmaps, face.height)

    glyphs = glyph_set(options.shadow, options.on, options.off)
    painter = Painter(base, options.gradient, grid_width(grid))
    return render_grid(grid, options.shadow, glyphs, painter.paint)


def generate(face: FontFace, text: str, options: Optional[RenderOptions] = None) -> str:
    """Render text as a banner"""
    if options is None:
        options = RenderOptions()
    base = resolve_color(options.color)

    blocks = []
    for segment in text.split("\n"):
        if not segment:
            continue
        block = trim_blank_lines(render_line(face, segment, options, base))
        if block:
            blocks.append(block)

    return trim_blank_lines("\n\n".join(blocks).split("\n"))
