"""
Harmony generator.

Derives related hues from a base color, builds shade/tint ramps and scores
how closely a set of hues follows one of the canonical harmony patterns.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Literal, Optional

from color_math import (
    HSLColor, contrast_ratio, hex_to_hsl, hex_to_rgb, hsl_hex, hsl_to_hex,
    normalize_hex, rgb_to_hex, WCAG_AA_LARGE,
)

logger = logging.getLogger(__name__)

HarmonyType = Literal[
    "complementary", "analogous", "triadic",
    "tetradic", "splitComplementary", "monochromatic",
]

# Offsets from the base hue, base itself excluded
_HARMONY_OFFSETS: Dict[str, List[int]] = {
    "complementary":      [180],
    "analogous":          [30, -30],
    "triadic":            [120, 240],
    "tetradic":           [90, 180, 270],
    "splitComplementary": [150, 210],
}
HARMONY_TYPES: List[str] = list(_HARMONY_OFFSETS) + ["monochromatic"]

# Lightness span used for monochromatic ramps; 0 and 100 collapse to black/white
MONO_LIGHTNESS_RANGE = (15, 90)

# Ranges the professional variants are pulled into
_UI_SATURATION = (35, 85)
_UI_LIGHTNESS = (35, 60)
_UI_MIN_LIGHTNESS = 25


def _clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def _hue_delta(a: float, b: float) -> float:
    d = abs(a - b) % 360
    return min(d, 360 - d)


# ── Basic hue operations ──────────────────────────────────────────────────────
def rotate_hue(hex_color: str, degrees: float) -> Optional[str]:
    hsl = hex_to_hsl(hex_color)
    if hsl is None:
        return None
    return hsl_hex(hsl.h + degrees, hsl.s, hsl.l)


def adjust_color_lightness(hex_color: str, delta: float) -> Optional[str]:
    hsl = hex_to_hsl(hex_color)
    if hsl is None:
        return None
    return hsl_hex(hsl.h, hsl.s, _clamp(hsl.l + delta, 0, 100))


def adjust_color_saturation(hex_color: str, delta: float) -> Optional[str]:
    hsl = hex_to_hsl(hex_color)
    if hsl is None:
        return None
    return hsl_hex(hsl.h, _clamp(hsl.s + delta, 0, 100), hsl.l)


def blend_colors(hex1: str, hex2: str, ratio: float = 0.5) -> Optional[str]:
    """Linear blend – ratio=0 → hex1, ratio=1 → hex2."""
    a, b = hex_to_rgb(hex1), hex_to_rgb(hex2)
    if a is None or b is None:
        return None
    t = _clamp(ratio, 0.0, 1.0)
    return rgb_to_hex(*(x + (y - x) * t for x, y in zip(a, b)))


# ── Harmony generators ────────────────────────────────────────────────────────
def generate_harmony_colors(base_hex: str, harmony_type: str) -> List[str]:
    """Rotate the base hue by the offsets of ``harmony_type``, keeping S and L.

    The base color itself never appears in the result. Invalid input or an
    unknown type gives an empty list.
    """
    base = hex_to_hsl(base_hex)
    if base is None or harmony_type not in _HARMONY_OFFSETS:
        return []
    base_norm = normalize_hex(base_hex)
    colors = [
        hsl_to_hex(HSLColor((base.h + offset) % 360, base.s, base.l))
        for offset in _HARMONY_OFFSETS[harmony_type]
    ]
    return [c for c in colors if c != base_norm]


def _nudge_for_ui(hue: int, s: float, l: float, surface: str) -> str:
    s = _clamp(s, *_UI_SATURATION)
    l = _clamp(l, *_UI_LIGHTNESS)
    color = hsl_hex(hue, s, l)
    # darken until it reads against the light surface as large text / UI chrome
    while contrast_ratio(color, surface) < WCAG_AA_LARGE and l > _UI_MIN_LIGHTNESS:
        l -= 5
        color = hsl_hex(hue, s, l)
    return color


def generate_professional_ui_harmony(
    base_hex: str, harmony_type: str, enforce_accessibility: bool = True,
) -> List[str]:
    """Harmony colors usable as a UI palette: base first, then its harmony partners.

    With ``enforce_accessibility`` the saturation/lightness of each color is
    pulled into a UI-safe band (hue untouched) and a light surface plus a dark
    text companion are appended.
    """
    if harmony_type == "monochromatic":
        return generate_monochromatic_palette(base_hex, 8)
    base = hex_to_hsl(base_hex)
    if base is None or harmony_type not in _HARMONY_OFFSETS:
        return []

    hues = [base.h] + [(base.h + o) % 360 for o in _HARMONY_OFFSETS[harmony_type]]
    if not enforce_accessibility:
        colors = [hsl_hex(h, base.s, base.l) for h in hues]
    else:
        surface = hsl_hex(base.h, min(base.s, 20), 96)
        colors = [_nudge_for_ui(h, base.s, base.l, surface) for h in hues]
        colors += [
            surface,
            hsl_hex(base.h, min(base.s, 15), 88),
            hsl_hex(base.h, min(base.s, 25), 15),
        ]

    seen, out = set(), []
    for c in colors:
        if c not in seen:
            seen.add(c)
            out.append(c)
    logger.debug("professional %s harmony for %s -> %s", harmony_type, base_hex, out)
    return out


def generate_monochromatic_palette(base_hex: str, count: int = 5) -> List[str]:
    """Fixed hue/saturation, lightness spread evenly over L15..L90, dark to light."""
    base = hex_to_hsl(base_hex)
    if base is None or count <= 0:
        return []
    if count == 1:
        return [hsl_to_hex(base)]
    lo, hi = MONO_LIGHTNESS_RANGE
    step = (hi - lo) / (count - 1)
    return [hsl_hex(base.h, base.s, lo + i * step) for i in range(count)]


def generate_shades(hex_color: str, count: int = 5) -> List[str]:
    """Lightness stepped linearly from 0 to 100."""
    hsl = hex_to_hsl(hex_color)
    if hsl is None or count <= 0:
        return []
    if count == 1:
        return [hsl_hex(hsl.h, hsl.s, 0)]
    step = 100 / (count - 1)
    return [hsl_hex(hsl.h, hsl.s, i * step) for i in range(count)]


def generate_tints(hex_color: str, count: int = 5) -> List[str]:
    """Lightness stepped linearly from the color's own lightness up to 100."""
    hsl = hex_to_hsl(hex_color)
    if hsl is None or count <= 0:
        return []
    if count == 1:
        return [hsl_to_hex(hsl)]
    step = (100 - hsl.l) / (count - 1)
    return [hsl_hex(hsl.h, hsl.s, min(100, hsl.l + i * step)) for i in range(count)]


# ── Harmony detection / scoring ───────────────────────────────────────────────
def _relative_hues(hexes: List[str]) -> Optional[List[float]]:
    hsls = [hex_to_hsl(h) for h in hexes]
    hsls = [h for h in hsls if h is not None]
    if len(hsls) < 2:
        return None
    base = hsls[0].h
    return [(h.h - base) % 360 for h in hsls[1:]]


def _near(angle: float, target: float, tol: float = 15) -> bool:
    return _hue_delta(angle, target) < tol


def detect_harmony_type(hexes: List[str]) -> Optional[str]:
    """Name the harmony the hues follow relative to the first color, if any."""
    angles = _relative_hues(hexes)
    if not angles:
        return None
    if any(_near(a, 180) for a in angles):
        return "complementary"
    if any(_near(a, 120) for a in angles) and any(_near(a, 240) for a in angles):
        return "triadic"
    if all(15 < _hue_delta(a, 0) < 45 for a in angles):
        return "analogous"
    if len(angles) >= 3 and all(a % 90 < 15 for a in angles):
        return "tetradic"
    if any(_near(a, 150) for a in angles) and any(_near(a, 210) for a in angles):
        return "splitComplementary"
    return None


def _pattern_error(angles: List[float], offsets: List[int]) -> float:
    targets = [0] + [o % 360 for o in offsets]
    return sum(min(_hue_delta(a, t) for t in targets) for a in angles) / len(angles)


def calculate_color_harmony_score(hexes: List[str]) -> float:
    """Score 0..1: how well hues fit the closest canonical pattern, plus a small count bonus.

    The fit term is 1 at a perfect match and falls linearly to 0 at a mean
    error of 45°; it carries 0.8 of the score. Fewer than 2 colors score 0.
    """
    if len(hexes) < 2:
        return 0.0
    angles = _relative_hues(hexes)
    if not angles:
        return 0.0
    best = min(_pattern_error(angles, offs) for offs in _HARMONY_OFFSETS.values())
    fit = max(0.0, 1.0 - best / 45)
    count_bonus = min(len(angles), 4) / 4
    return round(min(1.0, 0.8 * fit + 0.2 * count_bonus), 4)
