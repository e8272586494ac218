"""Tests for color parsing, HSL conversion and the gradient painter."""

import pytest

from shadowbanner.color import (
    COLOR_PRESETS,
    HSL,
    RESET,
    RGB,
    Painter,
    gradient_color,
    hsl_to_rgb,
    parse_color,
    rgb_to_hsl,
    shift_color,
    strip_ansi,
)
from shadowbanner.errors import ColorError

SAMPLE_COLORS = [
    RGB(0, 0, 0),
    RGB(255, 255, 255),
    RGB(255, 0, 0),
    RGB(0, 255, 255),
    RGB(18, 52, 86),
    RGB(200, 120, 40),
    RGB(128, 128, 128),
    RGB(250, 5, 130),
]


@pytest.mark.parametrize("spec,expected", [
    ("c", RGB(0, 255, 255)),
    ("m", RGB(255, 0, 255)),
    ("y", RGB(255, 255, 0)),
    ("cyan", RGB(0, 255, 255)),
    ("#ff0000", RGB(255, 0, 0)),
    ("00FF80", RGB(0, 255, 128)),
    ("255,0,0", RGB(255, 0, 0)),
    ("12, 34, 56", RGB(12, 34, 56)),
])
def test_parse_color_valid(spec, expected):
    assert parse_color(spec) == expected


@pytest.mark.parametrize("spec", ["256,0,0", "zzzzzz", "", "#", "1,2", "-1,0,0", "red", "#12345"])
def test_parse_color_invalid(spec):
    with pytest.raises(ColorError):
        parse_color(spec)


def test_color_error_is_value_error():
    with pytest.raises(ValueError):
        parse_color("nope")


def test_ansi_escape_format():
    assert RGB(1, 2, 3).ansi() == "\033[38;2;1;2;3m"


def test_rgb_to_hsl_primaries():
    h, s, l = rgb_to_hsl(RGB(255, 0, 0))
    assert (h, s, l) == (0.0, 1.0, 0.5)
    h, _, _ = rgb_to_hsl(RGB(0, 255, 0))
    assert h == pytest.approx(120.0)
    h, _, _ = rgb_to_hsl(RGB(0, 0, 255))
    assert h == pytest.approx(240.0)


def test_rgb_to_hsl_gray_has_no_saturation():
    h, s, l = rgb_to_hsl(RGB(128, 128, 128))
    assert h == 0.0
    assert s == 0.0
    assert l == pytest.approx(128 / 255)


def test_hsl_to_rgb_known_values():
    assert hsl_to_rgb(HSL(0.0, 1.0, 0.5)) == RGB(255, 0, 0)
    assert hsl_to_rgb(HSL(180.0, 1.0, 0.5)) == RGB(0, 255, 255)
    assert hsl_to_rgb(HSL(0.0, 0.0, 1.0)) == RGB(255, 255, 255)


def _close(a, b, tol=1):
    return all(abs(x - y) <= tol for x, y in zip(a, b))


@pytest.mark.parametrize("color", SAMPLE_COLORS)
def test_hsl_round_trip(color):
    assert _close(hsl_to_rgb(rgb_to_hsl(color)), color)


@pytest.mark.parametrize("color", SAMPLE_COLORS)
def test_shift_color_identity(color):
    assert _close(shift_color(color, 0, 0), color)
    assert _close(shift_color(color, 360, 0), color)
    assert _close(shift_color(color, -360, 0), color)


def test_shift_color_hue_rotation():
    assert _close(shift_color(RGB(255, 0, 0), 120, 0), RGB(0, 255, 0))
    assert _close(shift_color(RGB(255, 0, 0), -120, 0), RGB(0, 0, 255))


def test_shift_color_lightness():
    assert shift_color(RGB(255, 0, 0), 0, 1.0) == RGB(255, 255, 255)
    assert shift_color(RGB(255, 0, 0), 0, -1.0) == RGB(0, 0, 0)
    lighter = shift_color(RGB(100, 50, 50), 0, 0.5)
    darker = shift_color(RGB(100, 50, 50), 0, -0.5)
    assert sum(lighter) > sum(RGB(100, 50, 50)) > sum(darker)


def test_gradient_color_edges():
    base = COLOR_PRESETS["c"]
    assert gradient_color(base, 0, 1) == base
    left = gradient_color(base, 0, 10)
    right = gradient_color(base, 9, 10)
    assert left != right
    assert _close(left, shift_color(base, 18, 0))
    assert _close(right, shift_color(base, -18, 0))
    # midpoint of an odd width carries no hue shift
    assert _close(gradient_color(base, 5, 11), base)


def test_gradient_color_clamps_outside_line():
    base = RGB(200, 40, 40)
    assert gradient_color(base, 50, 10) == gradient_color(base, 9, 10)
    assert gradient_color(base, -3, 10) == gradient_color(base, 0, 10)


def test_painter_monochrome_passthrough():
    painter = Painter(None)
    assert not painter.enabled
    assert painter.paint("██", 0, 0) == "██"


def test_painter_single_color():
    painter = Painter(RGB(1, 2, 3), gradient=False, width=20)
    assert painter.paint("██", 0, 0) == "\033[38;2;1;2;3m██" + RESET
    assert painter.paint("██", 5, 19) == painter.paint("██", 0, 0)


def test_painter_gradient_varies_by_column_only():
    painter = Painter(COLOR_PRESETS["m"], gradient=True, width=20)
    assert painter.color_at(0, 0) != painter.color_at(0, 19)
    assert painter.color_at(0, 7) == painter.color_at(6, 7)


def test_strip_ansi():
    assert strip_ansi("\033[38;2;0;255;255m██\033[0m  ") == "██  "


@pytest.mark.parametrize("spec", ["ff0000\n", "1,2,3\n", "١,2,3", "１２,0,0"])
def test_parse_color_rejects_trailing_newline_and_non_ascii_digits(spec):
    with pytest.raises(ColorError):
        parse_color(spec)
