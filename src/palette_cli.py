#!/usr/bin/env python3
"""
Command line front end for the palette engine.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from color_math import contrast_ratio, is_valid_hex, normalize_hex, wcag_grade
from harmony import (
    HARMONY_TYPES, generate_harmony_colors, generate_monochromatic_palette,
    generate_professional_ui_harmony,
    generate_shades, generate_tints,
)
from palette_analyzer import analyze_color_psychology, calculate_palette_harmony_score
from palette_export import EXPORTERS, export_json
from palette_generator import SeededRandom, generate_ui_palette
from palette_models import AlgorithmicConfig, Color, PaletteError, UIPalette
from palette_settings import load_settings
from suggestions import suggest_harmonies

logger = logging.getLogger(__name__)


def _hex_arg(value: str) -> str:
    if not is_valid_hex(value):
        raise argparse.ArgumentTypeError(f"invalid hex color: {value!r}")
    return normalize_hex(value)


def _lock_arg(value: str) -> Color:
    role, sep, hex_color = value.rpartition("=")
    if not sep or not role:
        raise argparse.ArgumentTypeError(f"expected ROLE=HEX, got {value!r}")
    return Color(hex=_hex_arg(hex_color), role=role, locked=True)


def _load_palette(path: str) -> UIPalette:
    try:
        return UIPalette.from_dict(json.loads(Path(path).read_text()))
    except FileNotFoundError:
        sys.exit(f"❌ not found: {path}")
    except (json.JSONDecodeError, PaletteError) as exc:
        sys.exit(f"❌ bad palette file {path}: {exc}")


def _pretty(p: UIPalette) -> None:
    for category, colors in p.items():
        if not colors:
            continue
        print(f"\n  {category}")
        for c in colors:
            lock = "🔒" if c.locked else "  "
            print(f"    {lock} {c.hex}  {c.role}")
    print(f"\n  total: {p.total()}")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="palette",
        description="UI palette generator – harmony, WCAG contrast and role assignment",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  palette generate --base '#3b82f6' --harmony triadic --count 12
  palette generate --seed 42 --temperature warm --lock 'Primary=#0055ff'
  palette harmony '#ff0000' triadic
  palette contrast '#ffffff' '#1e293b'
  palette score '#ff0000' '#00ffff'
  palette export palette.json --format css
""",
    )
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_gen = sub.add_parser("generate", help="Generate a UI palette")
    p_gen.add_argument("--base", type=_hex_arg)
    p_gen.add_argument("--harmony", choices=HARMONY_TYPES, default="complementary")
    p_gen.add_argument("--seed", type=int)
    p_gen.add_argument("--temperature", choices=["warm", "cool", "neutral"])
    p_gen.add_argument("--saturation", choices=["moderate", "vibrant", "muted", "neutral"])
    p_gen.add_argument("--count", type=int)
    p_gen.add_argument("--lock", type=_lock_arg, action="append", default=[],
                       metavar="ROLE=HEX")
    p_gen.add_argument("--json", dest="as_json", action="store_true")

    p_har = sub.add_parser("harmony", help="Harmony colors for a base color")
    p_har.add_argument("base_color", type=_hex_arg)
    p_har.add_argument("harmony", choices=HARMONY_TYPES)
    p_har.add_argument("--professional", action="store_true")

    p_con = sub.add_parser("contrast", help="Contrast ratio between two colours")
    p_con.add_argument("color1", type=_hex_arg)
    p_con.add_argument("color2", type=_hex_arg)

    p_sc = sub.add_parser("score", help="Harmony score of a list of colors")
    p_sc.add_argument("colors", nargs="+", type=_hex_arg)

    p_psy = sub.add_parser("psychology", help="Emotional profile of a color")
    p_psy.add_argument("color", type=_hex_arg)

    p_sh = sub.add_parser("shades", help="Shade or tint ramp")
    p_sh.add_argument("color", type=_hex_arg)
    p_sh.add_argument("--count", type=int, default=5)
    p_sh.add_argument("--tints", action="store_true")

    p_ex = sub.add_parser("export", help="Export a palette JSON file")
    p_ex.add_argument("palette_file")
    p_ex.add_argument("--format", choices=sorted(EXPORTERS) + ["json"], default="css")
    p_ex.add_argument("--locked-only", action="store_true")

    p_sug = sub.add_parser("suggest", help="Harmony suggestions for a palette's locked colors")
    p_sug.add_argument("palette_file")
    p_sug.add_argument("--limit", type=int, default=8)

    return ap


def main(argv: Optional[List[str]] = None) -> None:
    settings = load_settings()
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.WARNING),
                        format="%(levelname)s %(name)s: %(message)s")
    args = build_parser().parse_args(argv)

    if args.cmd == "generate":
        count = args.count or settings.target_count
        seed = args.seed if args.seed is not None else settings.seed
        if count < 1: sys.exit("❌ --count must be positive")
        config = AlgorithmicConfig(
            harmony_type=args.harmony, base_color=args.base,
            temperature=args.temperature, saturation_level=args.saturation, seed=seed,
        )
        # unseeded runs draw from the clock here, never inside the generator
        rng = None if seed is not None else SeededRandom.from_clock()
        pal = generate_ui_palette(config, args.lock, count, rng=rng,
                                  similarity_threshold=settings.similarity_threshold)
        logger.info("generated %d/%d colors (%d locked)", pal.total(), count, len(args.lock))
        if args.as_json:
            print(json.dumps(pal.to_dict(), indent=2))
        else:
            _pretty(pal)

    elif args.cmd == "harmony":
        if args.professional:
            colors = generate_professional_ui_harmony(args.base_color, args.harmony, True)
        elif args.harmony == "monochromatic":
            colors = generate_monochromatic_palette(args.base_color, 5)
        else:
            colors = generate_harmony_colors(args.base_color, args.harmony)
        for c in colors:
            print(f"  {c}")

    elif args.cmd == "contrast":
        ratio = contrast_ratio(args.color1, args.color2)
        print(f"ratio {ratio:.2f}:1  grade={wcag_grade(ratio)}")
        print(f"AA-normal  (≥4.5): {'✅' if ratio>=4.5 else '❌'}")
        print(f"AA-large   (≥3.0): {'✅' if ratio>=3.0 else '❌'}")
        print(f"AAA-normal (≥7.0): {'✅' if ratio>=7.0 else '❌'}")

    elif args.cmd == "score":
        print(json.dumps(calculate_palette_harmony_score(args.colors), indent=2))

    elif args.cmd == "psychology":
        print(json.dumps(analyze_color_psychology(args.color), indent=2))

    elif args.cmd == "shades":
        ramp = generate_tints if args.tints else generate_shades
        for c in ramp(args.color, args.count):
            print(f"  {c}")

    elif args.cmd == "export":
        pal = _load_palette(args.palette_file)
        if args.format == "json":
            print(export_json(pal))
        else:
            print(EXPORTERS[args.format](pal, args.locked_only))

    elif args.cmd == "suggest":
        pal = _load_palette(args.palette_file)
        found = suggest_harmonies(pal, limit=args.limit)
        if not found: print("(no locked colors – lock a color to get suggestions)")
        for s in found:
            hexes = " ".join(c.hex for c in s.colors)
            print(f"  {s.name:<20} {s.base_color}  conf={s.confidence:.2f}  "
                  f"a11y={s.accessibility_score:.2f}  {hexes}")
            print(f"    {s.reasoning}")


if __name__ == "__main__":
    main()
