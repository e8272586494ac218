"""
Terminal color handling.

 - parse_color: preset names, RRGGBB / #RRGGBB hex and "r,g,b" triples
 - RGB <-> HSL conversion and hue/lightness shifting
 - Painter: wraps glyph strings in 24-bit SGR escapes, optionally with a
   left-to-right hue gradient
"""
from __future__ import annotations

import math
import re
from typing import Dict, NamedTuple, Optional

from .errors import ColorError

# ==================== CONSTANTS ====================

RESET = "\033[0m"

# Hue offset at the left edge of a gradient; the right edge gets the negation.
GRADIENT_HUE_SWING = 18.0

# Lightness offset applied by the gradient. Kept flat so brightness stays
# stable across the text.
GRADIENT_LIGHTNESS = 0.0

_HEX_RE = re.compile(r"[0-9a-fA-F]{6}")
_TRIPLE_RE = re.compile(r"[ \t]*([+-]?[0-9]+)[ \t]*,[ \t]*([+-]?[0-9]+)[ \t]*,[ \t]*([+-]?[0-9]+)[ \t]*")
_ANSI_RE = re.compile(r"\033\[[0-9;]*m")


# ==================== TYPES ====================

class RGB(NamedTuple):
    """24-bit color"""
    r: int
    g: int
    b: int

    def ansi(self) -> str:
        """Foreground SGR escape for this color"""
        return f"\033[38;2;{self.r};{self.g};{self.b}m"

    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


class HSL(NamedTuple):
    h: float  # [0, 360)
    s: float  # [0, 1]
    l: float  # [0, 1]


COLOR_PRESETS: Dict[str, RGB] = {
    "c": RGB(0, 255, 255),
    "m": RGB(255, 0, 255),
    "y": RGB(255, 255, 0),
    "cyan": RGB(0, 255, 255),
    "magenta": RGB(255, 0, 255),
    "yellow": RGB(255, 255, 0),
}


# ==================== PARSING ====================

def parse_color(spec: str) -> RGB:
    """Parse a preset name, RRGGBB / #RRGGBB hex or "r,g,b" decimal triple"""
    if spec.startswith("#"):
        spec = spec[1:]

    preset = COLOR_PRESETS.get(spec.lower())
    if preset is not None:
        return preset

    if _HEX_RE.fullmatch(spec):
        value = int(spec, 16)
        return RGB((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)

    match = _TRIPLE_RE.fullmatch(spec)
    if match is None:
        raise ColorError(
            f"invalid color format: {spec!r} (use 'RRGGBB', 'r,g,b' or preset name)"
        )

    channels = [int(v) for v in match.groups()]
    if any(c < 0 or c > 255 for c in channels):
        raise ColorError(f"RGB values must be 0-255: {spec!r}")
    return RGB(*channels)


def strip_ansi(text: str) -> str:
    """Remove ANSI color codes from text"""
    return _ANSI_RE.sub("", text)


# ==================== HSL ====================

def _to_channel(value: float) -> int:
    # round half away from zero, then clamp into a byte
    v = int(math.floor(value * 255.0 + 0.5))
    return max(0, min(255, v))


def rgb_to_hsl(c: RGB) -> HSL:
    r, g, b = c.r / 255.0, c.g / 255.0, c.b / 255.0
    hi = max(r, g, b)
    lo = min(r, g, b)
    l = (hi + lo) / 2.0

    if hi == lo:
        return HSL(0.0, 0.0, l)

    d = hi - lo
    s = d / (1.0 - abs(2.0 * l - 1.0))

    if hi == r:
        h = math.fmod((g - b) / d + 6.0, 6.0)
    elif hi == g:
        h = (b - r) / d + 2.0
    else:
        h = (r - g) / d + 4.0

    return HSL((h * 60.0) % 360.0, s, l)


def hsl_to_rgb(c: HSL) -> RGB:
    if c.s == 0:
        v = _to_channel(c.l)
        return RGB(v, v, v)

    chroma = (1.0 - abs(2.0 * c.l - 1.0)) * c.s
    x = chroma * (1.0 - abs(math.fmod(c.h / 60.0, 2.0) - 1.0))
    m = c.l - chroma / 2.0

    if c.h < 60:
        r, g, b = chroma, x, 0.0
    elif c.h < 120:
        r, g, b = x, chroma, 0.0
    elif c.h < 180:
        r, g, b = 0.0, chroma, x
    elif c.h < 240:
        r, g, b = 0.0, x, chroma
    elif c.h < 300:
        r, g, b = x, 0.0, chroma
    else:
        r, g, b = chroma, 0.0, x

    return RGB(_to_channel(r + m), _to_channel(g + m), _to_channel(b + m))


def shift_color(base: RGB, hue_delta: float, lightness_delta: float) -> RGB:
    """
    Rotate hue by hue_delta degrees and blend lightness.

    A positive lightness_delta moves lightness toward white by that fraction
    of the remaining headroom; zero or negative moves it toward black.
    """
    h, s, l = rgb_to_hsl(base)

    h = (h + hue_delta) % 360.0

    if lightness_delta > 0:
        l += (1.0 - l) * lightness_delta
    else:
        l += l * lightness_delta
    l = min(1.0, max(0.0, l))

    return hsl_to_rgb(HSL(h, s, l))


def gradient_color(base: RGB, x: int, width: int) -> RGB:
    """Color for column x of a line `width` pixels wide"""
    if width <= 1:
        return base
    t = min(1.0, max(0.0, x / float(width - 1)))
    hue_delta = GRADIENT_HUE_SWING - 2.0 * GRADIENT_HUE_SWING * t
    return shift_color(base, hue_delta, GRADIENT_LIGHTNESS)


# ==================== PAINTER ====================

class Painter:
    """Wraps glyph strings in color escapes for one rendered line of text."""

    def __init__(self, base: Optional[RGB] = None, gradient: bool = False,
                 width: int = 0):
        self.base = base
        self.gradient = gradient
        self.width = width
        self._columns: Dict[int, RGB] = {}

    @property
    def enabled(self) -> bool:
        return self.base is not None

    def color_at(self, y: int, x: int) -> Optional[RGB]:
        """Color of the pixel at (y, x); rows do not affect the gradient"""
        if self.base is None:
            return None
        if not self.gradient:
            return self.base
        color = self._columns.get(x)
        if color is None:
            color = gradient_color(self.base, x, self.width)
            self._columns[x] = color
        return color

    def paint(self, text: str, y: int, x: int) -> str:
        color = self.color_at(y, x)
        if color is None:
            return text
        return color.ansi() + text + RESET

    __call__ = paint
