"""
Shadow compositing.

Every empty cell of the canvas is classified from three neighbors: left
(y, x-1), above (y-1, x) and diagonal (y-1, x-1). The first matching rule
picks the shadow glyph and the neighbor whose color it borrows:

    left and above    corner              color from left
    left              vertical(-through)  color from left
    above             horizontal(-through) color from above
    diagonal          diagonal            color from diagonal
    otherwise         off glyph

The -through variants are used when the diagonal neighbor is also on.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, List, NamedTuple, Optional

from .grid import Grid, grid_width

# paint(text, y, x) -> text, possibly wrapped in color escapes
Paint = Callable[[str, int, int], str]

# ==================== STYLES ====================

class ShadowStyle(Enum):
    NONE = "none"
    OUTLINE = "outline"
    SOLID = "solid"

    @classmethod
    def parse(cls, value: Optional[str]) -> "ShadowStyle":
        """Style from its name; empty or None selects NONE"""
        if isinstance(value, cls):
            return value
        if not value:
            return cls.NONE
        try:
            return cls(value.lower())
        except ValueError:
            names = ", ".join(s.value for s in cls)
            raise ValueError(f"unknown shadow mode: {value} (use {names})") from None


class ShadowKind(Enum):
    CORNER = "corner"
    VERTICAL_THROUGH = "vertical_through"
    VERTICAL = "vertical"
    HORIZONTAL_THROUGH = "horizontal_through"
    HORIZONTAL = "horizontal"
    DIAGONAL = "diagonal"


@dataclass(frozen=True)
class GlyphSet:
    """Strings emitted for each cell class; all should share one width"""
    on: str
    off: str
    corner: str = ""
    vertical_through: str = ""
    vertical: str = ""
    horizontal_through: str = ""
    horizontal: str = ""
    diagonal: str = ""

    def shadow(self, kind: ShadowKind) -> str:
        return getattr(self, kind.value)


DEFAULT_ON = "██"
DEFAULT_OFF = "  "

GLYPH_SETS: Dict[ShadowStyle, GlyphSet] = {
    ShadowStyle.NONE: GlyphSet(on=DEFAULT_ON, off=DEFAULT_OFF),
    ShadowStyle.OUTLINE: GlyphSet(
        on=DEFAULT_ON,
        off=DEFAULT_OFF,
        corner="╔═",
        vertical_through="║ ",
        vertical="╗ ",
        horizontal_through="══",
        horizontal="╚═",
        diagonal="╝ ",
    ),
    ShadowStyle.SOLID: GlyphSet(
        on="░░",
        off=DEFAULT_OFF,
        corner="█▀",
        vertical_through="█ ",
        vertical="▄ ",
        horizontal_through="▀▀",
        horizontal=" ▀",
        diagonal="▀ ",
    ),
}


def glyph_set(style: ShadowStyle, on: Optional[str] = None,
              off: Optional[str] = None) -> GlyphSet:
    """Glyph set for style with optional on/off overrides"""
    glyphs = GLYPH_SETS[style]
    if on is not None:
        glyphs = replace(glyphs, on=on)
    if off is not None:
        glyphs = replace(glyphs, off=off)
    return glyphs


# ==================== CLASSIFICATION ====================

class ShadowCell(NamedTuple):
    """Shadow glyph kind plus the offset of the neighbor it takes color from"""
    kind: ShadowKind
    dy: int
    dx: int


def classify_shadow(left: bool, above: bool, diagonal: bool) -> Optional[ShadowCell]:
    if left and above:
        return ShadowCell(ShadowKind.CORNER, 0, -1)
    if left:
        kind = ShadowKind.VERTICAL_THROUGH if diagonal else ShadowKind.VERTICAL
        return ShadowCell(kind, 0, -1)
    if above:
        kind = ShadowKind.HORIZONTAL_THROUGH if diagonal else ShadowKind.HORIZONTAL
        return ShadowCell(kind, -1, 0)
    if diagonal:
        return ShadowCell(ShadowKind.DIAGONAL, -1, -1)
    return None


# ==================== RENDERING ====================

def _no_paint(text: str, y: int, x: int) -> str:
    return text


def render_plain(grid: Grid, glyphs: GlyphSet, paint: Paint = _no_paint) -> List[str]:
    """One string per grid row using only the on and off glyphs"""
    lines = []
    for y, row in enumerate(grid):
        parts = [paint(glyphs.on, y, x) if on else glyphs.off
                 for x, on in enumerate(row)]
        lines.append("".join(parts))
    return lines


def render_shadow(grid: Grid, glyphs: GlyphSet, paint: Paint = _no_paint) -> List[str]:
    """
    Render grid with a drop shadow cast down and to the right.

    The output has one more row and one more column than the grid.
    """
    height = len(grid)
    width = grid_width(grid)

    def is_on(y: int, x: int) -> bool:
        if y < 0 or y >= height or x < 0 or x >= width:
            return False
        return grid[y][x]

    lines = []
    for y in range(height + 1):
        parts = []
        for x in range(width + 1):
            if is_on(y, x):
                parts.append(paint(glyphs.on, y, x))
                continue

            cell = classify_shadow(is_on(y, x - 1), is_on(y - 1, x), is_on(y - 1, x - 1))
            if cell is None:
                parts.append(glyphs.off)
            else:
                parts.append(paint(glyphs.shadow(cell.kind), y + cell.dy, x + cell.dx))
        lines.append("".join(parts))
    return lines


def render_grid(grid: Grid, style: ShadowStyle, glyphs: Optional[GlyphSet] = None,
                paint: Paint = _no_paint) -> List[str]:
    """Render grid in the given style"""
    if glyphs is None:
        glyphs = GLYPH_SETS[style]
    if style is ShadowStyle.NONE:
        return render_plain(grid, glyphs, paint)
    return render_shadow(grid, glyphs, paint)
