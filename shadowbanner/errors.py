"""Exception types raised by shadowbanner."""
from __future__ import annotations


class BannerError(Exception):
    """Base exception for all shadowbanner errors"""


class FontError(BannerError):
    """Font data could not be loaded or parsed"""


class UnknownFontError(FontError, KeyError):
    """Font name is not present in the font configuration"""

    def __init__(self, name: str, available: list):
        self.name = name
        self.available = list(available)
        super().__init__(
            f"unknown font: {name} (available: {', '.join(self.available)})"
        )

    def __str__(self) -> str:
        # KeyError would repr() the message otherwise
        return self.args[0]


class ColorError(BannerError, ValueError):
    """Color specification could not be parsed"""


class ConfigError(BannerError):
    """Configuration or batch file is malformed"""
