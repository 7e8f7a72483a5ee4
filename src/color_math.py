"""
Color model & conversions.

Hex <-> RGB <-> HSL conversion, relative luminance and WCAG contrast checks.
Every function here fails closed: malformed hex yields ``None`` (or a
sentinel value) instead of raising.
"""
from __future__ import annotations

import math
import re
from colorsys import hls_to_rgb, rgb_to_hls
from dataclasses import dataclass
from typing import Literal, Optional, Tuple

ColorTemperature = Literal["warm", "cool", "neutral"]

_HEX_RE = re.compile(r"#?([0-9A-Fa-f]{6}|[0-9A-Fa-f]{3})")

WCAG_AA_NORMAL = 4.5
WCAG_AA_LARGE = 3.0
WCAG_AAA_NORMAL = 7.0

COLOR_TEMPERATURE = {
    "warm":    (0, 60),     # red .. yellow
    "cool":    (180, 300),  # cyan .. magenta
    "neutral": (60, 180),   # yellow-green .. cyan
}


@dataclass(frozen=True)
class HSLColor:
    h: int  # 0-359
    s: int  # 0-100
    l: int  # 0-100


def _round(x: float) -> int:
    # half-up, so 0.5 steps don't flip between neighbours like round() does
    return int(math.floor(x + 0.5))


# ── Hex parsing ───────────────────────────────────────────────────────────────
def is_valid_hex(value: str) -> bool:
    """True for #rgb / #rrggbb literals, with or without the leading '#'."""
    return isinstance(value, str) and bool(_HEX_RE.fullmatch(value))


def normalize_hex(value: str) -> str:
    """Expand #rgb to #RRGGBB, upper-case and prefix. Does not validate."""
    h = value.lstrip("#").upper()
    if len(h) == 3:
        h = h[0]*2 + h[1]*2 + h[2]*2
    return f"#{h}"


def hex_to_rgb(hex_color: str) -> Optional[Tuple[int, int, int]]:
    """Parse a hex literal into (r, g, b) ints 0-255, or None when malformed."""
    if not is_valid_hex(hex_color):
        return None
    h = normalize_hex(hex_color)
    return int(h[1:3], 16), int(h[3:5], 16), int(h[5:7], 16)


def rgb_to_hex(r: float, g: float, b: float) -> str:
    r, g, b = (max(0, min(255, _round(c))) for c in (r, g, b))
    return f"#{r:02X}{g:02X}{b:02X}"


# ── HSL ───────────────────────────────────────────────────────────────────────
def hex_to_hsl(hex_color: str) -> Optional[HSLColor]:
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return None
    r, g, b = rgb
    h, l, s = rgb_to_hls(r / 255, g / 255, b / 255)
    return HSLColor(h=_round(h * 360) % 360, s=_round(s * 100), l=_round(l * 100))


def hsl_hex(h: float, s: float, l: float) -> str:
    """Build #RRGGBB from HSL where h is degrees and s, l are percentages (floats allowed)."""
    s = max(0.0, min(100.0, s)) / 100
    l = max(0.0, min(100.0, l)) / 100
    r, g, b = hls_to_rgb((h % 360) / 360, l, s)
    return rgb_to_hex(r * 255, g * 255, b * 255)


def hsl_to_hex(hsl: HSLColor) -> str:
    return hsl_hex(hsl.h, hsl.s, hsl.l)


def get_color_temperature(hue: float) -> ColorTemperature:
    lo, hi = COLOR_TEMPERATURE["warm"]
    if lo <= hue <= hi:
        return "warm"
    lo, hi = COLOR_TEMPERATURE["cool"]
    if lo <= hue <= hi:
        return "cool"
    return "neutral"


def color_distance(hex1: str, hex2: str) -> Optional[float]:
    """Euclidean distance in 0-255 RGB space."""
    a, b = hex_to_rgb(hex1), hex_to_rgb(hex2)
    if a is None or b is None:
        return None
    return math.sqrt(sum((x - y) ** 2 for x, y in zip(a, b)))


# ── WCAG accessibility ────────────────────────────────────────────────────────
def _linearize(c: float) -> float:
    c /= 255
    return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4


def relative_luminance(r: int, g: int, b: int) -> float:
    return 0.2126 * _linearize(r) + 0.7152 * _linearize(g) + 0.0722 * _linearize(b)


def luminance_of(hex_color: str) -> Optional[float]:
    rgb = hex_to_rgb(hex_color)
    return None if rgb is None else relative_luminance(*rgb)


def contrast_ratio(color1: str, color2: str) -> float:
    """Return the WCAG 2.1 contrast ratio (1-21), or 0.0 if either color is malformed."""
    l1, l2 = luminance_of(color1), luminance_of(color2)
    if l1 is None or l2 is None:
        return 0.0
    bright, dark = max(l1, l2), min(l1, l2)
    return (bright + 0.05) / (dark + 0.05)


def meets_wcag_aa(foreground: str, background: str) -> bool:
    return contrast_ratio(foreground, background) >= WCAG_AA_NORMAL


def meets_wcag_aa_large(foreground: str, background: str) -> bool:
    return contrast_ratio(foreground, background) >= WCAG_AA_LARGE


def wcag_grade(ratio: float) -> str:
    if ratio >= WCAG_AAA_NORMAL:  return "AAA"
    if ratio >= WCAG_AA_NORMAL:   return "AA"
    if ratio >= WCAG_AA_LARGE:    return "AA-Large"
    return "Fail"


def text_color_for(background: str) -> str:
    """Black on light backgrounds, white on dark ones."""
    lum = luminance_of(background)
    if lum is None:
        return "#000000"
    return "#000000" if lum > 0.5 else "#FFFFFF"
