"""Serializers for UIPalette: CSS custom properties, 0xRRGGBB lists, SVG strips, JSON."""
from __future__ import annotations

import json
import re
from typing import Dict, List, Tuple
from xml.sax.saxutils import escape

from color_math import contrast_ratio, wcag_grade
from palette_analyzer import a11y_check
from palette_models import Color, UIPalette


def _selected(palette: UIPalette, locked_only: bool) -> List[Tuple[str, Color]]:
    return [(name, c) for name, colors in palette.items() for c in colors
            if not locked_only or c.locked]


def _slug(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")


def to_css_vars(palette: UIPalette, locked_only: bool = False) -> str:
    lines = [f"  --color-{category}-{_slug(c.role)}: {c.hex};"
             for category, c in _selected(palette, locked_only)]
    return ":root {\n" + "\n".join(lines) + "\n}"


def to_ff_hex(palette: UIPalette, locked_only: bool = False) -> str:
    return ", ".join(f"0x{c.hex[1:]}" for _, c in _selected(palette, locked_only))


def to_svg(palette: UIPalette, locked_only: bool = False) -> str:
    colors = [c for _, c in _selected(palette, locked_only)]
    height = 120
    if not colors:
        return f'<svg width="0" height="{height}" xmlns="http://www.w3.org/2000/svg"></svg>'
    width = min(len(colors) * 120, 1200)
    card = width / len(colors)

    parts = [f'<svg width="{width}" height="{height}" xmlns="http://www.w3.org/2000/svg">',
             f'<rect width="{width}" height="{height}" fill="#1a1a1a"/>']
    for i, c in enumerate(colors):
        x = i * card
        cx = x + card / 2
        parts.append(f'<rect x="{x:g}" y="0" width="{card:g}" height="{height * 0.7:g}" fill="{c.hex}"/>')
        parts.append(f'<text x="{cx:g}" y="{height * 0.8:g}" text-anchor="middle" fill="#ffffff" '
                     f'font-family="Inter, sans-serif" font-size="10">{c.hex}</text>')
        parts.append(f'<text x="{cx:g}" y="{height * 0.9:g}" text-anchor="middle" fill="#cccccc" '
                     f'font-family="Inter, sans-serif" font-size="8">{escape(c.role)}</text>')
    parts.append("</svg>")
    return "".join(parts)


def export_json(palette: UIPalette) -> str:
    data: Dict[str, object] = {"palette": palette.to_dict(), "preview": palette.preview()}
    matrix: Dict[str, dict] = {}
    colors = palette.all_colors()
    for c1 in colors:
        row = matrix.setdefault(c1.role, {})
        for c2 in colors:
            if c1 is not c2:
                ratio = round(contrast_ratio(c1.hex, c2.hex), 2)
                row[c2.role] = {"ratio": ratio, "grade": wcag_grade(ratio)}
    data["contrast_matrix"] = matrix
    data["a11y"] = a11y_check(palette)["summary"]
    return json.dumps(data, indent=2)


EXPORTERS = {"css": to_css_vars, "ff_hex": to_ff_hex, "svg": to_svg}
