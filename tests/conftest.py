"""Shared fixtures: a synthetic TrueType font built in memory.

The font uses 800 units per em and is rasterized at 8 pixels per em, so
100 font units map to exactly one pixel. Ascent is 700 and descent 100,
giving an 8 pixel tall face with the baseline on row 7.

Glyphs (x ranges in pixels, rows counted from the top):
  A  filled block, x 1..5, rows 1..6, advance 6
  B  filled block, x 0..3, rows 0..7 (full height), advance 4
  I  single column x 2, full height, advance 5
  space  no outline, advance 4
"""
from __future__ import annotations

import io

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from shadowbanner.font import FontConfig, FontFace, FontSpec, bytes_loader

UNITS = 100  # font units per pixel


def _rect_glyph(x0, y0, x1, y1):
    pen = TTGlyphPen(None)
    pen.moveTo((x0 * UNITS, y0 * UNITS))
    pen.lineTo((x0 * UNITS, y1 * UNITS))
    pen.lineTo((x1 * UNITS, y1 * UNITS))
    pen.lineTo((x1 * UNITS, y0 * UNITS))
    pen.closePath()
    return pen.glyph()


def _empty_glyph():
    return TTGlyphPen(None).glyph()


def build_test_font() -> bytes:
    glyphs = {
        ".notdef": _rect_glyph(0, 0, 4, 6),
        "space": _empty_glyph(),
        "A": _rect_glyph(1, 0, 6, 6),
        "B": _rect_glyph(0, -1, 4, 7),
        "I": _rect_glyph(2, -1, 3, 7),
    }
    metrics = {
        ".notdef": (5 * UNITS, 0),
        "space": (4 * UNITS, 0),
        "A": (6 * UNITS, 1 * UNITS),
        "B": (4 * UNITS, 0),
        "I": (5 * UNITS, 2 * UNITS),
    }

    fb = FontBuilder(8 * UNITS, isTTF=True)
    fb.setupGlyphOrder(list(glyphs))
    fb.setupCharacterMap({ord(" "): "space", ord("A"): "A", ord("B"): "B", ord("I"): "I"})
    fb.setupGlyf(glyphs)
    fb.setupHorizontalMetrics(metrics)
    fb.setupHorizontalHeader(ascent=7 * UNITS, descent=-1 * UNITS)
    fb.setupNameTable({"familyName": "BlockTest", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=7 * UNITS, sTypoDescender=-1 * UNITS, sTypoLineGap=0,
                usWinAscent=7 * UNITS, usWinDescent=1 * UNITS)
    fb.setupPost()

    buf = io.BytesIO()
    fb.save(buf)
    return buf.getvalue()


@pytest.fixture(scope="session")
def font_bytes() -> bytes:
    return build_test_font()


@pytest.fixture(scope="session")
def font_spec(font_bytes) -> FontSpec:
    return FontSpec("blocktest", bytes_loader(font_bytes), size=8)


@pytest.fixture(scope="session")
def face(font_spec) -> FontFace:
    return FontFace(font_spec)


@pytest.fixture
def font_config(font_spec) -> FontConfig:
    config = FontConfig(default="blocktest")
    config.add(font_spec)
    return config


@pytest.fixture
def font_file(tmp_path, font_bytes):
    path = tmp_path / "blocktest.ttf"
    path.write_bytes(font_bytes)
    return path
