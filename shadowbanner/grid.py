"""Assembly of per-character bitmaps into one pixel grid per line of text."""
from __future__ import annotations

from typing import List, Sequence

Bitmap = List[List[bool]]
Grid = List[List[bool]]


def bitmap_width(bitmap: Sequence[Sequence[bool]]) -> int:
    """Recorded width of a bitmap: the length of its first row"""
    if not bitmap:
        return 0
    return len(bitmap[0])


def grid_width(grid: Grid) -> int:
    return len(grid[0]) if grid else 0


def _cell(bitmap: Sequence[Sequence[bool]], y: int, x: int) -> bool:
    if y >= len(bitmap):
        return False
    row = bitmap[y]
    return x < len(row) and bool(row[x])


def assemble(bitmaps: Sequence[Sequence[Sequence[bool]]], height: int) -> Grid:
    """
    Concatenate bitmaps left to right into a grid `height` rows tall.

    Each bitmap starts where the previous one ended. Missing rows and short
    rows read as off.
    """
    widths = [bitmap_width(bm) for bm in bitmaps]
    total = sum(widths)

    grid = [[False] * total for _ in range(height)]
    offset = 0
    for bm, w in zip(bitmaps, widths):
        for y in range(height):
            row = grid[y]
            for x in range(w):
                if _cell(bm, y, x):
                    row[offset + x] = True
        offset += w
    return grid
