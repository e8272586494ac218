"""
Font loading and glyph rasterization.

Fonts are described by FontSpec entries collected in a FontConfig that is
handed to load_face(). A FontFace parses the outline font bytes once and
then turns single characters into trimmed monochrome bitmaps.
"""
from __future__ import annotations

import io
import logging
import math
import os
from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, List, Optional

from fontTools.ttLib import TTFont, TTLibError
from PIL import Image, ImageDraw, ImageFont

from .errors import FontError, UnknownFontError

logger = logging.getLogger(__name__)

Bitmap = List[List[bool]]
FontLoader = Callable[[], bytes]

# ==================== CONSTANTS ====================

DEFAULT_FONT = "default"

# Luminance below this counts as ink
INK_THRESHOLD = 128

DEJAVU_MONO_CANDIDATES = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/TTF/DejaVuSansMono.ttf",
    "/usr/share/fonts/dejavu/DejaVuSansMono.ttf",
    "/usr/local/share/fonts/DejaVuSansMono.ttf",
    "/Library/Fonts/DejaVuSansMono.ttf",
    "C:\\Windows\\Fonts\\DejaVuSansMono.ttf",
]

MISAKI_FONT_DIRS = [
    "~/.local/share/fonts",
    "~/.fonts",
    "/usr/share/fonts/truetype/misaki",
    "/usr/share/fonts/misaki",
    "/usr/local/share/fonts",
    "~/Library/Fonts",
    "/Library/Fonts",
    "C:\\Windows\\Fonts",
]

# name -> file name of the Misaki 8x8 pixel fonts
MISAKI_FONTS = {
    "misaki_gothic": "misaki_gothic.ttf",
    "misaki_gothic_2nd": "misaki_gothic_2nd.ttf",
    "misaki_mincho": "misaki_mincho.ttf",
}
MISAKI_SIZE = 8

# ==================== FONT SOURCES ====================

def bytes_loader(data: bytes) -> FontLoader:
    """Loader returning in-memory font bytes"""
    return lambda: data


def file_loader(*candidates: str) -> FontLoader:
    """Loader reading the first existing file among candidates"""
    paths = [os.path.expanduser(c) for c in candidates]

    def load() -> bytes:
        for path in paths:
            if os.path.isfile(path):
                logger.debug("loading font file %s", path)
                with open(path, "rb") as fh:
                    return fh.read()
        raise FontError(f"font file not found (tried: {', '.join(paths)})")

    return load


def pillow_default_loader(size: int = 12) -> FontLoader:
    """Loader for the outline font bundled with Pillow"""

    def load() -> bytes:
        font = ImageFont.load_default(size=size)
        data = getattr(font, "font_bytes", None)
        if not data:
            raise FontError("Pillow was built without FreeType support; "
                            "the bundled outline font is unavailable")
        return data

    return load


# ==================== CONFIGURATION ====================

@dataclass(frozen=True)
class FontSpec:
    """
    One selectable font.

    Attributes:
        name: identifier used on the command line
        loader: returns the raw TrueType/OpenType bytes
        size: pixels per em used when rasterizing
        height: fixed pixel height; None means ascent + descent
    """
    name: str
    loader: FontLoader = field(compare=False)
    size: int = 8
    height: Optional[int] = None


@dataclass
class FontConfig:
    """Explicit set of fonts available to a renderer"""
    fonts: Dict[str, FontSpec] = field(default_factory=dict)
    default: str = DEFAULT_FONT

    def names(self) -> List[str]:
        return sorted(self.fonts)

    def get(self, name: Optional[str] = None) -> FontSpec:
        key = name if name is not None else self.default
        spec = self.fonts.get(key)
        if spec is None:
            raise UnknownFontError(key, self.names())
        return spec

    def add(self, spec: FontSpec) -> None:
        self.fonts[spec.name] = spec

    def merged(self, other: "FontConfig") -> "FontConfig":
        """New config with other's fonts layered over these"""
        fonts = dict(self.fonts)
        fonts.update(other.fonts)
        return FontConfig(fonts=fonts, default=other.default)


def default_font_config() -> FontConfig:
    """
    Built-in fonts: Pillow's bundled font, system DejaVu Sans Mono and the
    Misaki 8x8 pixel fonts when installed in a common font directory.
    """
    config = FontConfig()
    config.add(FontSpec(DEFAULT_FONT, pillow_default_loader(12), size=12))
    config.add(FontSpec("dejavu_sans_mono", file_loader(*DEJAVU_MONO_CANDIDATES),
                        size=12))
    for name, filename in MISAKI_FONTS.items():
        candidates = [os.path.join(d, filename) for d in MISAKI_FONT_DIRS]
        config.add(FontSpec(name, file_loader(*candidates),
                            size=MISAKI_SIZE, height=MISAKI_SIZE))
    return config


# ==================== FACE ====================

class FontFace:
    """Parsed font ready for rasterization. Immutable once constructed."""

    def __init__(self, spec: FontSpec):
        self.name = spec.name
        self.size = spec.size
        data = spec.loader()

        try:
            self._font = ImageFont.truetype(io.BytesIO(data), size=spec.size)
        except (OSError, ValueError) as e:
            raise FontError(f"failed to parse font {spec.name}: {e}") from e

        self._coverage = _read_coverage(spec.name, data)

        ascent, descent = self._font.getmetrics()
        self.ascent = ascent
        self.height = spec.height or (ascent + descent)
        if self.height <= 0:
            raise FontError(f"font {spec.name} has no usable pixel height")

        logger.debug("built face %s: size=%d ascent=%d height=%d glyphs=%s",
                     self.name, self.size, self.ascent, self.height,
                     "?" if self._coverage is None else len(self._coverage))

    def covers(self, char: str) -> bool:
        """Whether the character map has a glyph for char"""
        if self._coverage is None:
            return True
        return ord(char) in self._coverage

    def advance(self, char: str) -> int:
        """Horizontal advance for char in whole pixels"""
        if not self.covers(char):
            return self.height
        return int(math.ceil(self._font.getlength(char)))

    def rune_bitmap(self, char: str) -> Bitmap:
        """
        Monochrome bitmap for a single character.

        Columns without ink are trimmed from both sides and one blank column
        is prepended, so bitmaps placed edge to edge keep a one pixel gap.
        A character without ink yields a single blank column.
        """
        height = self.height
        adv = self.advance(char)

        img = Image.new("L", (max(adv, height), height), 255)
        draw = ImageDraw.Draw(img)
        draw.text((0, self.ascent), char, font=self._font, fill=0, anchor="ls")
        pixels = img.load()

        raw = [[pixels[x, y] < INK_THRESHOLD for x in range(adv)]
               for y in range(height)]

        ink_columns = [x for x in range(adv) if any(row[x] for row in raw)]
        if not ink_columns:
            return [[False] for _ in range(height)]

        lo, hi = ink_columns[0], ink_columns[-1]
        return [[False] + row[lo:hi + 1] for row in raw]


def _read_coverage(name: str, data: bytes) -> Optional[FrozenSet[int]]:
    try:
        cmap = TTFont(io.BytesIO(data), lazy=True).getBestCmap()
    except (TTLibError, OSError, ValueError, KeyError) as e:
        raise FontError(f"failed to read character map of {name}: {e}") from e
    if cmap is None:
        return None
    return frozenset(cmap)


def load_face(name: Optional[str] = None,
              config: Optional[FontConfig] = None) -> FontFace:
    """Build the face for name (or the config default)"""
    if config is None:
        config = default_font_config()
    return FontFace(config.get(name))
