"""
Palette scoring and color psychology.
"""
from __future__ import annotations

import logging
from itertools import combinations
from typing import Dict, List, Sequence

from color_math import contrast_ratio, get_color_temperature, hex_to_hsl, meets_wcag_aa, wcag_grade
from palette_models import UIPalette

logger = logging.getLogger(__name__)

COLOR_PSYCHOLOGY: Dict[str, dict] = {
    "RED": {
        "emotions": ["energy", "passion", "urgency", "danger", "power"],
        "associations": ["fire", "blood", "stop", "warning", "love"],
        "temperature": "warm",
        "use_cases": ["call-to-action", "error states", "urgent notifications", "passion brands"],
    },
    "ORANGE": {
        "emotions": ["enthusiasm", "creativity", "warmth", "energy", "fun"],
        "associations": ["fire", "sunset", "autumn", "vibrance", "playfulness"],
        "temperature": "warm",
        "use_cases": ["fun brands", "creative tools", "energetic interfaces", "playful applications"],
    },
    "YELLOW": {
        "emotions": ["optimism", "creativity", "warmth", "caution", "energy"],
        "associations": ["sun", "gold", "warning", "happiness", "light"],
        "temperature": "warm",
        "use_cases": ["attention-grabbing", "creative brands", "warning states", "optimistic messaging"],
    },
    "GREEN": {
        "emotions": ["growth", "success", "harmony", "nature", "balance"],
        "associations": ["nature", "money", "go", "health", "environment"],
        "temperature": "cool",
        "use_cases": ["success states", "eco-friendly brands", "financial apps", "health interfaces"],
    },
    "BLUE": {
        "emotions": ["trust", "calm", "stability", "professionalism", "security"],
        "associations": ["sky", "water", "ocean", "technology", "reliability"],
        "temperature": "cool",
        "use_cases": ["primary actions", "trust indicators", "professional brands", "calming interfaces"],
    },
    "PURPLE": {
        "emotions": ["luxury", "creativity", "mystery", "sophistication", "spirituality"],
        "associations": ["royalty", "magic", "premium", "artistic", "wisdom"],
        "temperature": "cool",
        "use_cases": ["luxury brands", "creative platforms", "premium products", "artistic interfaces"],
    },
    "PINK": {
        "emotions": ["compassion", "playfulness", "romance", "gentleness", "care"],
        "associations": ["flowers", "femininity", "love", "softness", "nurturing"],
        "temperature": "warm",
        "use_cases": ["feminine brands", "healthcare", "romance apps", "gentle interfaces"],
    },
}

# (upper bound exclusive, family); anything from 330 wraps back to red
_HUE_BANDS = [(30, "RED"), (60, "ORANGE"), (90, "YELLOW"), (150, "GREEN"),
              (210, "BLUE"), (270, "PURPLE"), (330, "PINK"), (360, "RED")]


def hue_family(hue: int) -> str:
    for upper, family in _HUE_BANDS:
        if hue < upper:
            return family
    return "RED"


def analyze_color_psychology(hex_color: str) -> dict:
    """Emotional profile of the hue family a color belongs to.

    The dominant emotion is always the family's first one; saturation and
    lightness do not change it.
    """
    hsl = hex_to_hsl(hex_color)
    if hsl is None:
        return {"family": None, "dominant_emotion": "neutral", "temperature": "neutral",
                "associations": ["unknown"], "use_cases": ["general"]}
    family = hue_family(hsl.h)
    info = COLOR_PSYCHOLOGY[family]
    return {
        "family": family,
        "dominant_emotion": info["emotions"][0],
        "temperature": info["temperature"],
        "associations": list(info["associations"]),
        "use_cases": list(info["use_cases"]),
    }


def accessibility_score(hexes: Sequence[str]) -> float:
    """Fraction of color pairs that meet WCAG AA for normal text."""
    pairs = list(combinations(hexes, 2))
    if not pairs:
        return 0.0
    return sum(1 for a, b in pairs if meets_wcag_aa(a, b)) / len(pairs)


def calculate_palette_harmony_score(hexes: Sequence[str]) -> dict:
    if len(hexes) < 2:
        return {"score": 0.0, "harmony_type": None, "strengths": [],
                "improvements": ["Add more colors to create a proper palette"]}

    hsls = [h for h in (hex_to_hsl(x) for x in hexes) if h is not None]
    if len(hsls) < 2:
        return {"score": 0.0, "harmony_type": None, "strengths": [],
                "improvements": ["Invalid color values detected"]}

    score = 0.0
    strengths: List[str] = []
    improvements: List[str] = []

    base = hsls[0].h
    raw = [(c.h - base) % 360 for c in hsls[1:]]
    folded = [min(d, 360 - d) for d in raw]

    harmony_type = None
    if any(150 <= d <= 210 for d in folded):
        harmony_type = "complementary"
        score += 0.3
        strengths.append("Strong complementary contrast")
    elif all(d <= 60 for d in folded):
        harmony_type = "analogous"
        score += 0.25
        strengths.append("Harmonious analogous colors")
    elif any(110 <= d <= 130 for d in raw) and any(230 <= d <= 250 for d in raw):
        harmony_type = "triadic"
        score += 0.2
        strengths.append("Balanced triadic harmony")

    avg_sat = sum(c.s for c in hsls) / len(hsls)
    sat_spread = sum(abs(c.s - avg_sat) for c in hsls) / len(hsls)
    if sat_spread < 20:
        score += 0.2
        strengths.append("Consistent saturation levels")
    else:
        improvements.append("Consider more consistent saturation levels")

    lightness = sorted(c.l for c in hsls)
    light_range = lightness[-1] - lightness[0]
    if 40 <= light_range <= 80:
        score += 0.2
        strengths.append("Good lightness distribution")
    elif light_range < 40:
        improvements.append("Add more lightness variation for better contrast")
    else:
        improvements.append("Consider reducing lightness range for better cohesion")

    if accessibility_score(list(hexes)) >= 0.8:
        score += 0.2
        strengths.append("Good accessibility contrast")
    else:
        improvements.append("Improve contrast ratios for better accessibility")

    if 5 <= len(hexes) <= 8:
        score += 0.1
        strengths.append("Appropriate color count")
    elif len(hexes) < 5:
        improvements.append("Consider adding more colors for a complete palette")
    else:
        improvements.append("Consider reducing colors for better focus")

    logger.debug("harmony score %.2f type=%s for %d colors", score, harmony_type, len(hexes))
    return {"score": round(min(1.0, score), 4), "harmony_type": harmony_type,
            "strengths": strengths, "improvements": improvements}


def suggest_palette_improvements(hexes: Sequence[str]) -> List[str]:
    analysis = calculate_palette_harmony_score(hexes)
    suggestions = list(analysis["improvements"])
    if analysis["score"] < 0.5:
        suggestions.append("Consider using established color harmony principles "
                           "(complementary, analogous, triadic)")
    if analysis["harmony_type"] is None:
        suggestions.append("Establish a clear color harmony relationship between your colors")

    temperatures = set()
    for hex_color in hexes:
        hsl = hex_to_hsl(hex_color)
        temperatures.add(get_color_temperature(hsl.h) if hsl else "neutral")
    if len(temperatures) > 2:
        suggestions.append("Consider focusing on either warm or cool colors for better cohesion")
    return suggestions


def a11y_check(palette: UIPalette) -> dict:
    """WCAG audit of every text color against every surface color."""
    foregrounds = palette.text or palette.brand
    backgrounds = palette.surface

    checks: List[dict] = []
    for fg in foregrounds:
        for bg in backgrounds:
            ratio = round(contrast_ratio(fg.hex, bg.hex), 2)
            checks.append({
                "fg": {"role": fg.role, "hex": fg.hex},
                "bg": {"role": bg.role, "hex": bg.hex},
                "ratio": ratio,
                "grade": wcag_grade(ratio),
                "aa_normal": ratio >= 4.5,
                "aa_large":  ratio >= 3.0,
            })

    passed = sum(1 for c in checks if c["aa_normal"])
    return {
        "checks": checks,
        "summary": {
            "total": len(checks),
            "pass_aa": passed,
            "fail_aa": len(checks) - passed,
            "pass_rate": round(passed / max(1, len(checks)) * 100, 1),
        },
    }
