"""
shadowbanner renders text as large pixel-font banners for the terminal.

Features:
 - any TrueType/OpenType font rasterized at a fixed pixel height
 - outline (box-drawing) and solid (shading) drop shadows
 - 24-bit ANSI colors with an optional hue gradient
 - CLI with preview, batch rendering and configurable fonts
"""
from __future__ import annotations

__version__ = "1.0.0"

from .banner import RenderOptions, generate, render_line, trim_blank_lines
from .color import RGB, parse_color, shift_color
from .errors import BannerError, ColorError, ConfigError, FontError, UnknownFontError
from .font import FontConfig, FontFace, FontSpec, default_font_config, load_face
from .shadow import ShadowStyle

__all__ = [
    "__version__",
    "BannerError",
    "ColorError",
    "ConfigError",
    "FontConfig",
    "FontError",
    "FontFace",
    "FontSpec",
    "RGB",
    "RenderOptions",
    "ShadowStyle",
    "UnknownFontError",
    "default_font_config",
    "generate",
    "load_face",
    "parse_color",
    "render_line",
    "shift_color",
    "trim_blank_lines",
]
