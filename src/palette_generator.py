"""
Algorithmic palette generator.

Seeded procedural palettes (professional / cosine-gradient / pattern based)
and role assignment that turns a candidate color list plus the caller's
locked colors into a structured UIPalette.
"""
from __future__ import annotations

import logging
import math
import secrets
import time
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, TypeVar

from color_math import (
    COLOR_TEMPERATURE, color_distance, get_color_temperature, hex_to_hsl,
    hsl_hex, is_valid_hex, meets_wcag_aa, meets_wcag_aa_large, normalize_hex,
    rgb_to_hex, text_color_for,
)
from harmony import generate_monochromatic_palette, generate_professional_ui_harmony
from palette_models import AlgorithmicConfig, Color, UIPalette

logger = logging.getLogger(__name__)

T = TypeVar("T")
Vec3 = Tuple[float, float, float]

SIMILARITY_THRESHOLD = 30.0
DEFAULT_TARGET_COUNT = 12

SATURATION_RANGES: Dict[str, Tuple[float, float]] = {
    "vibrant":  (70, 100),
    "moderate": (40, 70),
    "muted":    (20, 40),
    "neutral":  (0, 20),
}
LIGHTNESS_RANGES: Dict[str, Tuple[float, float]] = {
    "dark":        (0, 30),
    "medium_dark": (30, 50),
    "medium":      (50, 70),
    "light":       (70, 90),
    "very_light":  (90, 100),
}

# keyword sets checked in this order; first hit wins ("Accent Border" -> brand)
ROLE_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("brand",    ("primary", "secondary", "accent")),
    ("surface",  ("background", "surface")),
    ("text",     ("text", "border")),
    ("feedback", ("success", "error", "warning", "info")),
)

SEMANTIC_HUES: Dict[str, int] = {"success": 140, "warning": 45, "error": 0, "info": 210}

PROFESSIONAL_COLOR_PATTERNS: Dict[str, dict] = {
    "CORPORATE": {
        "description": "Professional, trustworthy, conservative",
        "temperature": "cool", "saturation": "moderate", "harmony": "analogous",
        "primary_hues": [200, 220, 240],
    },
    "CREATIVE": {
        "description": "Bold, innovative, artistic",
        "temperature": "warm", "saturation": "vibrant", "harmony": "triadic",
        "primary_hues": [0, 30, 60],
    },
    "MINIMALIST": {
        "description": "Clean, simple, sophisticated",
        "temperature": "neutral", "saturation": "muted", "harmony": "monochromatic",
        "primary_hues": list(range(0, 360, 30)),
    },
    "TECH": {
        "description": "Modern, innovative, digital",
        "temperature": "cool", "saturation": "moderate", "harmony": "complementary",
        "primary_hues": [200, 220],
    },
    "HEALTHCARE": {
        "description": "Calming, trustworthy, healing",
        "temperature": "cool", "saturation": "muted", "harmony": "analogous",
        "primary_hues": [120, 140, 160],
    },
}


# ── Seeded PRNG ───────────────────────────────────────────────────────────────
class SeededRandom:
    """mulberry32: 32-bit state, independent per instance."""

    _MASK = 0xFFFFFFFF

    def __init__(self, seed: int) -> None:
        self._state = int(seed) & self._MASK

    @classmethod
    def from_entropy(cls) -> "SeededRandom":
        return cls(secrets.randbits(32))

    @classmethod
    def from_clock(cls) -> "SeededRandom":
        return cls(int(time.time() * 1000))

    @staticmethod
    def _imul(a: int, b: int) -> int:
        return (a * b) & SeededRandom._MASK

    def next(self) -> float:
        """Uniform float in [0, 1)."""
        m = self._MASK
        self._state = (self._state + 0x6D2B79F5) & m
        a = self._state
        t = self._imul(a ^ (a >> 15), a | 1)
        t = ((t + self._imul(t ^ (t >> 7), t | 61)) & m) ^ t
        return ((t ^ (t >> 14)) & m) / 4294967296

    def next_float(self, lo: float, hi: float) -> float:
        return lo + self.next() * (hi - lo)

    def next_int(self, lo: int, hi: int) -> int:
        """Uniform int in [lo, hi], both ends inclusive."""
        return lo + int(self.next() * (hi - lo + 1))

    def choice(self, seq: Sequence[T]) -> T:
        return seq[int(self.next() * len(seq))]


# ── Procedural palettes ───────────────────────────────────────────────────────
def generate_professional_palette(
    rng: SeededRandom,
    base_hue: Optional[float] = None,
    temperature: Optional[str] = None,
    saturation_level: str = "moderate",
    lightness_level: str = "medium",
) -> List[str]:
    """Base color plus a random harmony variation and two balancing neutrals (max 8)."""
    if base_hue is not None:
        hue = base_hue
    elif temperature in COLOR_TEMPERATURE:
        hue = rng.next_float(*COLOR_TEMPERATURE[temperature])
    else:
        hue = float(int(rng.next() * 360))

    sat = rng.next_float(*SATURATION_RANGES.get(saturation_level, SATURATION_RANGES["moderate"]))
    light = rng.next_float(*LIGHTNESS_RANGES.get(lightness_level, LIGHTNESS_RANGES["medium"]))

    colors = [hsl_hex(hue, sat, light)]
    harmony = rng.choice(["complementary", "analogous", "triadic"])
    if harmony == "complementary":
        colors += [
            hsl_hex(hue + 180, sat * 0.8, light),
            hsl_hex(hue + 30, sat * 0.6, light + 10),
            hsl_hex(hue - 30, sat * 0.6, light - 10),
        ]
    elif harmony == "analogous":
        colors += [
            hsl_hex(hue + 30, sat, light),
            hsl_hex(hue - 30, sat, light),
            hsl_hex(hue + 60, sat * 0.7, light + 15),
        ]
    else:
        colors += [
            hsl_hex(hue + 120, sat * 0.8, light),
            hsl_hex(hue + 240, sat * 0.8, light),
            hsl_hex(hue, sat * 0.5, light + 20),
        ]

    # cool neutral for warm bases, warm neutral otherwise
    neutral_hue = 200 if get_color_temperature(hue % 360) == "warm" else 30
    colors += [hsl_hex(neutral_hue, 20, 50), hsl_hex(neutral_hue, 10, 80)]
    logger.debug("professional palette hue=%.1f harmony=%s", hue, harmony)
    return colors[:8]


def _seeded_palette(rng: SeededRandom, temperature: Optional[str], saturation_level: str) -> List[str]:
    if temperature in COLOR_TEMPERATURE:
        hue = rng.next_float(*COLOR_TEMPERATURE[temperature])
    else:
        hue = rng.next_float(0, 360)
    return generate_professional_palette(rng, hue, temperature, saturation_level)


def generate_seeded_palette(
    seed: int, temperature: Optional[str] = None, saturation_level: str = "moderate",
) -> List[str]:
    """Reproducible professional palette: same seed, same colors."""
    return _seeded_palette(SeededRandom(seed), temperature, saturation_level)


def generate_cosine_palette(
    a: Vec3 = (0.5, 0.5, 0.5),
    b: Vec3 = (0.5, 0.5, 0.5),
    c: Vec3 = (1.0, 1.0, 1.0),
    d: Vec3 = (0.0, 0.33, 0.67),
    steps: int = 8,
) -> List[str]:
    """color(t) = a + b * cos(2π(c*t + d)) per channel, t evenly over [0, 1]."""
    colors: List[str] = []
    for i in range(max(0, steps)):
        t = i / (steps - 1) if steps > 1 else 0.0
        rgb = [
            255 * max(0.0, min(1.0, a[k] + b[k] * math.cos(2 * math.pi * (c[k] * t + d[k]))))
            for k in range(3)
        ]
        colors.append(rgb_to_hex(*rgb))
    return colors


def random_cosine_palette(rng: SeededRandom, steps: int) -> List[str]:
    """Cosine palette with bias/amplitude kept mid-range so channels stay off the rails."""
    def vec(lo: float, hi: float) -> Vec3:
        return (rng.next_float(lo, hi), rng.next_float(lo, hi), rng.next_float(lo, hi))
    return generate_cosine_palette(vec(0.3, 0.7), vec(0.3, 0.7), vec(0.5, 2.0), vec(0.0, 1.0), steps)


def generate_pattern_based_palette(pattern: str, rng: SeededRandom) -> List[str]:
    cfg = PROFESSIONAL_COLOR_PATTERNS.get(pattern.upper())
    if cfg is None:
        return []
    hue = rng.choice(cfg["primary_hues"])
    sat = rng.next_float(*SATURATION_RANGES[cfg["saturation"]])
    light = 50 + (rng.next() - 0.5) * 20

    colors = [hsl_hex(hue, sat, light)]
    harmony = cfg["harmony"]
    if harmony == "analogous":
        colors += [hsl_hex(hue + 30, sat * 0.8, light), hsl_hex(hue - 30, sat * 0.8, light)]
    elif harmony == "complementary":
        colors += [hsl_hex(hue + 180, sat * 0.8, light), hsl_hex(hue + 150, sat * 0.6, light + 10)]
    elif harmony == "triadic":
        colors += [hsl_hex(hue + 120, sat * 0.8, light), hsl_hex(hue + 240, sat * 0.8, light)]
    else:
        colors += [hsl_hex(hue, sat * 0.6, light + 20), hsl_hex(hue, sat * 0.4, light - 20)]

    neutral_hue = 30 if cfg["temperature"] == "warm" else 200
    colors += [hsl_hex(neutral_hue, 15, 50), hsl_hex(neutral_hue, 10, 85)]
    return colors


# ── Locked colors ─────────────────────────────────────────────────────────────
def classify_role(role: str, is_custom: bool = False) -> str:
    """Bucket a free-text role by keyword. Heuristic: ambiguous roles take the first match."""
    lowered = role.lower()
    for category, keywords in ROLE_KEYWORDS:
        if any(k in lowered for k in keywords):
            return category
    return "custom" if is_custom else "extended"


def classify_locked_colors(locked: Iterable[Color]) -> UIPalette:
    palette = UIPalette()
    for color in locked:
        palette.category(classify_role(color.role, color.is_custom)).append(replace(color))
    return palette


def is_too_similar_to_locked(
    hex_color: str, locked: Iterable[Color], threshold: float = SIMILARITY_THRESHOLD,
) -> bool:
    for color in locked:
        d = color_distance(hex_color, color.hex)
        if d is not None and d < threshold:
            return True
    return False


# ── Role selection ────────────────────────────────────────────────────────────
def _contrast_score(candidate: str, text_colors: Iterable[Color]) -> int:
    score = 0
    for text in text_colors:
        if meets_wcag_aa(text.hex, candidate):
            score += 2
        elif meets_wcag_aa_large(text.hex, candidate):
            score += 1
    return score


def find_best_background(candidates: Iterable[str], text_colors: Sequence[Color]) -> str:
    best, best_score = None, -1.0
    for hex_color in candidates:
        hsl = hex_to_hsl(hex_color)
        if hsl is None or hsl.l < 85:
            continue
        score = hsl.l + _contrast_score(hex_color, text_colors) * 10
        if score > best_score:
            best, best_score = hex_color, score
    if best is None:
        logger.debug("no light background candidate, using neutral fallback")
        return hsl_hex(0, 0, 95)
    return best


def find_best_surface(candidates: Iterable[str], text_colors: Sequence[Color]) -> str:
    best, best_score = None, -1.0
    for hex_color in candidates:
        hsl = hex_to_hsl(hex_color)
        if hsl is None or not 75 <= hsl.l <= 95:
            continue
        score = (90 - abs(hsl.l - 85)) + _contrast_score(hex_color, text_colors) * 10
        if score > best_score:
            best, best_score = hex_color, score
    if best is None:
        logger.debug("no surface candidate, using neutral fallback")
        return hsl_hex(0, 5, 90)
    return best


def find_best_text_color(candidates: Iterable[str], background: str) -> str:
    best, best_score = None, -1.0
    for hex_color in candidates:
        hsl = hex_to_hsl(hex_color)
        if hsl is None or hsl.l > 40:
            continue
        if meets_wcag_aa(hex_color, background):
            score = 100
        elif meets_wcag_aa_large(hex_color, background):
            score = 50
        else:
            continue
        score += 30 - hsl.l
        if score > best_score:
            best, best_score = hex_color, score
    return best if best is not None else text_color_for(background)


def find_or_create_semantic_color(kind: str, candidates: Iterable[str]) -> str:
    target = SEMANTIC_HUES[kind]
    for hex_color in candidates:
        hsl = hex_to_hsl(hex_color)
        if hsl is None:
            continue
        diff = abs(hsl.h - target)
        if min(diff, 360 - diff) < 30 and hsl.s > 40 and 35 < hsl.l < 70:
            return hex_color
    return hsl_hex(target, 65, 50)


# ── Palette assembly ──────────────────────────────────────────────────────────
def assign_colors_to_palette(
    candidates: Sequence[str],
    locked: Sequence[Color],
    target_count: int,
    similarity_threshold: float = SIMILARITY_THRESHOLD,
) -> UIPalette:
    """Fill role slots brand → surface → text → feedback → extended.

    Locked colors are placed first and never replaced. Later stages look at the
    colors earlier stages picked, so the order is fixed. The palette never grows
    past ``target_count`` (locked colors alone may exceed it).
    """
    palette = classify_locked_colors(locked)
    pool = [normalize_hex(c) for c in candidates if is_valid_hex(c)
            and not is_too_similar_to_locked(c, locked, similarity_threshold)]
    logger.debug("%d/%d candidates left after locked-similarity filter", len(pool), len(candidates))

    def room() -> bool:
        return palette.total() < target_count

    def take_next() -> Optional[str]:
        return pool.pop(0) if pool else None

    def take(hex_color: str) -> str:
        if hex_color in pool:
            pool.remove(hex_color)
        return hex_color

    def place(category: str, hex_color: Optional[str], role: str) -> None:
        if hex_color is not None:
            palette.category(category).append(Color(hex=hex_color, role=role))

    # brand
    if not palette.brand and room():
        place("brand", take_next(), "Primary")
    if len(palette.brand) < 2 and room():
        place("brand", take_next(), "Secondary")
    if len(palette.brand) < 3 and target_count >= 10 and room():
        place("brand", take_next(), "Accent")

    # surface
    if not palette.surface and room():
        place("surface", take(find_best_background(pool, palette.text)), "Background")
    if len(palette.surface) < 2 and room():
        place("surface", take(find_best_surface(pool, palette.text)), "Surface")
    if len(palette.surface) < 3 and target_count >= 12 and room():
        place("surface", take_next(), "Surface Variant")

    # text
    if not palette.text and palette.surface and room():
        place("text", take(find_best_text_color(pool, palette.surface[0].hex)), "Text Primary")
    if len(palette.text) < 2 and room():
        place("text", take_next(), "Text Secondary")
    if len(palette.text) < 3 and target_count >= 14 and room():
        place("text", take_next(), "Text Tertiary")
    if len(palette.text) < 4 and target_count >= 16 and room():
        place("text", take_next(), "Border")

    # feedback
    for slot, (kind, min_target) in enumerate(
        (("success", 0), ("warning", 0), ("error", 0), ("info", 14))
    ):
        if len(palette.feedback) <= slot and target_count >= min_target and room():
            place("feedback", take(find_or_create_semantic_color(kind, pool)), kind.title())

    # extended
    while pool and room():
        place("extended", take_next(), f"Extended {len(palette.extended) + 1}")

    return palette


def _candidates_from_base(base_color: str, harmony_type: str) -> List[str]:
    if harmony_type == "monochromatic":
        return generate_monochromatic_palette(base_color, 8)
    return generate_professional_ui_harmony(base_color, harmony_type, True)


def generate_ui_palette(
    config: AlgorithmicConfig,
    locked_colors: Sequence[Color] = (),
    target_count: int = DEFAULT_TARGET_COUNT,
    rng: Optional[SeededRandom] = None,
    similarity_threshold: float = SIMILARITY_THRESHOLD,
) -> UIPalette:
    """Generate a complete UIPalette from ``config`` around the locked colors.

    Candidate strategy, first match wins: ``base_color`` harmony expansion,
    ``seed`` procedural palette, unseeded procedural palette. A non-null seed
    makes the result reproducible; otherwise randomness comes from ``rng``
    (or fresh entropy when none is passed).
    """
    if config.seed is not None:
        rng = SeededRandom(config.seed)
    elif rng is None:
        rng = SeededRandom.from_entropy()
    saturation = config.saturation_level or "moderate"

    if config.base_color:
        candidates = _candidates_from_base(config.base_color, config.harmony_type)
        strategy = "base_color"
    elif config.seed is not None:
        candidates = _seeded_palette(rng, config.temperature, saturation)
        strategy = "seeded"
    else:
        candidates = generate_professional_palette(rng, None, config.temperature, saturation)
        strategy = "professional"

    needed = target_count - len(locked_colors)
    if len(candidates) < needed:
        candidates = candidates + random_cosine_palette(rng, needed - len(candidates))
    logger.debug("strategy=%s candidates=%d target=%d locked=%d",
                 strategy, len(candidates), target_count, len(locked_colors))

    return assign_colors_to_palette(candidates, locked_colors, target_count, similarity_threshold)
