"""
Harmony suggestions derived from the locked colors of a palette.

Suggestions are ephemeral: recompute them whenever the locked set changes.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from color_math import hex_to_hsl, hsl_hex
from harmony import adjust_color_lightness, generate_harmony_colors, generate_shades, generate_tints
from palette_analyzer import accessibility_score
from palette_models import Color, HarmonySuggestion, UIPalette

logger = logging.getLogger(__name__)

SUGGESTION_TYPES = ["complementary", "analogous", "triadic", "tetradic", "splitComplementary"]

_TYPE_WEIGHTS: Dict[str, float] = {
    "complementary": 0.9,
    "analogous": 0.8,
    "triadic": 0.7,
    "tetradic": 0.6,
    "splitComplementary": 0.75,
}
_DISPLAY: Dict[str, tuple] = {
    "complementary":      ("Complementary", "High contrast colors for emphasis and callouts"),
    "analogous":          ("Analogous", "Harmonious colors for cohesive design"),
    "triadic":            ("Triadic", "Balanced colors for vibrant interfaces"),
    "tetradic":           ("Tetradic", "Rich variety for complex designs"),
    "splitComplementary": ("Split Complementary", "Subtle contrast with harmony"),
}
_ROLES: Dict[str, List[str]] = {
    "complementary": ["Primary", "Secondary"],
    "tetradic":      ["Primary", "Secondary", "Accent", "Tertiary"],
}


def _role_for(harmony_type: str, index: int) -> str:
    roles = _ROLES.get(harmony_type, ["Primary", "Secondary", "Accent"])
    return roles[index] if index < len(roles) else "Accent"


def _averages(palette: UIPalette) -> Dict[str, float]:
    hsls = [hex_to_hsl(c.hex) for c in palette.all_colors()]
    n = len(hsls) or 1
    return {
        "saturation": round(sum(h.s for h in hsls if h) / n),
        "lightness": round(sum(h.l for h in hsls if h) / n),
    }


def _surface_colors(base_hex: str, avg_lightness: float) -> List[Color]:
    hsl = hex_to_hsl(base_hex)
    if hsl is None:
        return []
    bg = hsl_hex(hsl.h, hsl.s, 95 if avg_lightness > 50 else 15)
    return [Color(bg, "Background"), Color(adjust_color_lightness(bg, -10), "Surface")]


def _text_colors(base_hex: str, avg_lightness: float) -> List[Color]:
    hsl = hex_to_hsl(base_hex)
    if hsl is None:
        return []
    text = hsl_hex(hsl.h, hsl.s, 10 if avg_lightness > 50 else 90)
    return [Color(text, "Text Primary"), Color(adjust_color_lightness(text, 20), "Text Secondary")]


def _feedback_colors(base_hex: str) -> List[Color]:
    hsl = hex_to_hsl(base_hex)
    if hsl is None:
        return []
    s = min(hsl.s + 20, 100)
    return [Color(hsl_hex(120, s, 50), "Success"),
            Color(hsl_hex(45, s, 50), "Warning"),
            Color(hsl_hex(0, s, 50), "Error")]


def _confidence(base: Color, harmony_colors: Sequence[str], harmony_type: str, avg_sat: float) -> float:
    confidence = 0.3 + _TYPE_WEIGHTS[harmony_type] * 0.3
    confidence += min(len(harmony_colors) * 0.05, 0.2)
    hsl = hex_to_hsl(base.hex)
    if hsl is not None:
        confidence += (100 - abs(hsl.s - avg_sat)) / 100 * 0.2
    confidence += accessibility_score(harmony_colors) * 0.2
    return round(min(confidence, 1.0), 4)


def _reasoning(harmony_type: str, confidence: float, a11y: float, avgs: Dict[str, float]) -> str:
    reasons = []
    if confidence > 0.8:           reasons.append("High color harmony match")
    if a11y > 0.7:                 reasons.append("Good accessibility")
    if avgs["saturation"] > 70:    reasons.append("Vibrant color scheme")
    if avgs["lightness"] > 60:     reasons.append("Light theme friendly")
    extra = {"complementary": "High contrast for emphasis",
             "analogous": "Harmonious and calming",
             "triadic": "Balanced and energetic"}.get(harmony_type)
    if extra:
        reasons.append(extra)
    return " • ".join(reasons) or "Good color combination"


def build_suggestion(
    base: Color, harmony_type: str, avgs: Dict[str, float],
    include_shades: bool = True, include_tints: bool = True,
) -> Optional[HarmonySuggestion]:
    harmony_colors = generate_harmony_colors(base.hex, harmony_type)
    if not harmony_colors:
        return None
    colors = [Color(h, _role_for(harmony_type, i)) for i, h in enumerate(harmony_colors)]

    extended: List[Color] = []
    if include_shades:
        extended += [Color(h, "Shade") for h in generate_shades(base.hex, 3)]
    if include_tints:
        extended += [Color(h, "Tint") for h in generate_tints(base.hex, 3)]

    anchor = colors[0].hex
    preview = UIPalette(
        brand=colors[:3],
        surface=_surface_colors(anchor, avgs["lightness"]),
        text=_text_colors(anchor, avgs["lightness"]),
        feedback=_feedback_colors(anchor),
        extended=extended[:6],
    )
    confidence = _confidence(base, harmony_colors, harmony_type, avgs["saturation"])
    a11y = round(accessibility_score(preview.hexes()), 4)
    name, description = _DISPLAY[harmony_type]
    return HarmonySuggestion(
        harmony_type=harmony_type,
        base_color=base.hex,
        colors=colors,
        confidence=confidence,
        accessibility_score=a11y,
        preview_palette=preview,
        reasoning=_reasoning(harmony_type, confidence, a11y, avgs),
        name=name,
        description=description,
    )


def suggest_harmonies(
    palette: UIPalette,
    harmony_types: Sequence[str] = tuple(SUGGESTION_TYPES),
    include_shades: bool = True,
    include_tints: bool = True,
    limit: int = 8,
) -> List[HarmonySuggestion]:
    """One suggestion per (locked color, harmony type), deduplicated, best confidence first."""
    locked = palette.locked_colors()
    if not locked:
        return []
    avgs = _averages(palette)

    out: List[HarmonySuggestion] = []
    seen = set()
    for base in locked:
        for harmony_type in harmony_types:
            if harmony_type not in _TYPE_WEIGHTS:
                continue
            s = build_suggestion(base, harmony_type, avgs, include_shades, include_tints)
            if s is None:
                continue
            key = (harmony_type, tuple(c.hex for c in s.colors))
            if key in seen:
                continue
            seen.add(key)
            out.append(s)

    out.sort(key=lambda s: s.confidence, reverse=True)
    logger.debug("%d harmony suggestions from %d locked colors", len(out), len(locked))
    return out[:limit]
