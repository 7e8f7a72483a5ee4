"""Tests for palette_generator.py"""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest
from color_math import color_distance, hex_to_hsl, hsl_hex, is_valid_hex
from palette_generator import (
    PROFESSIONAL_COLOR_PATTERNS, SeededRandom, assign_colors_to_palette,
    classify_locked_colors, classify_role, find_best_background, find_best_surface,
    find_best_text_color, find_or_create_semantic_color, generate_cosine_palette,
    generate_pattern_based_palette, generate_professional_palette,
    generate_seeded_palette, generate_ui_palette, is_too_similar_to_locked,
)
from palette_models import AlgorithmicConfig, Color


def hue_gap(a, b):
    d = abs(a - b) % 360
    return min(d, 360 - d)


# ── SeededRandom ──────────────────────────────────────────────────────────────
def test_seeded_random_deterministic():
    a, b = SeededRandom(42), SeededRandom(42)
    assert [a.next() for _ in range(20)] == [b.next() for _ in range(20)]

def test_seeded_random_seeds_differ():
    a, b = SeededRandom(1), SeededRandom(2)
    assert [a.next() for _ in range(5)] != [b.next() for _ in range(5)]

def test_seeded_random_instances_independent():
    a, b, c = SeededRandom(7), SeededRandom(7), SeededRandom(7)
    for _ in range(10):
        c.next()  # advancing one instance must not move another
    assert a.next() == b.next()

def test_seeded_random_unit_interval():
    rng = SeededRandom(123)
    values = [rng.next() for _ in range(2000)]
    assert all(0.0 <= v < 1.0 for v in values)
    assert 0.4 < sum(values) / len(values) < 0.6

def test_next_float_range():
    rng = SeededRandom(9)
    assert all(0.3 <= rng.next_float(0.3, 0.7) < 0.7 for _ in range(500))

def test_next_int_inclusive():
    rng = SeededRandom(5)
    draws = {rng.next_int(1, 6) for _ in range(1000)}
    assert draws == {1, 2, 3, 4, 5, 6}

def test_negative_seed_ok():
    assert 0.0 <= SeededRandom(-17).next() < 1.0


# ── Procedural palettes ───────────────────────────────────────────────────────
def test_cosine_default_first_color():
    colors = generate_cosine_palette()
    assert len(colors) == 8
    assert colors[0] == "#FF4242"
    assert all(is_valid_hex(c) for c in colors)

def test_cosine_edge_steps():
    assert generate_cosine_palette(steps=0) == []
    assert len(generate_cosine_palette(steps=1)) == 1

def test_seeded_palette_reproducible():
    assert generate_seeded_palette(42) == generate_seeded_palette(42)
    assert generate_seeded_palette(1) != generate_seeded_palette(2)

def test_seeded_palette_shape():
    colors = generate_seeded_palette(99, "cool", "vibrant")
    assert 1 <= len(colors) <= 8
    assert all(is_valid_hex(c) for c in colors)

@pytest.mark.parametrize("seed", [1, 2, 3, 10, 500])
def test_seeded_palette_warm_base(seed):
    h = hex_to_hsl(generate_seeded_palette(seed, "warm")[0]).h
    assert h <= 61 or h >= 359

def test_professional_palette_base_hue_and_neutrals():
    colors = generate_professional_palette(SeededRandom(1), base_hue=200)
    assert hue_gap(hex_to_hsl(colors[0]).h, 200) <= 2
    # cool base -> warm neutrals
    assert colors[-2:] == [hsl_hex(30, 20, 50), hsl_hex(30, 10, 80)]

def test_professional_palette_warm_base_uses_cool_neutrals():
    colors = generate_professional_palette(SeededRandom(1), base_hue=20)
    assert colors[-2:] == [hsl_hex(200, 20, 50), hsl_hex(200, 10, 80)]

@pytest.mark.parametrize("pattern", list(PROFESSIONAL_COLOR_PATTERNS))
def test_pattern_palettes(pattern):
    colors = generate_pattern_based_palette(pattern, SeededRandom(3))
    assert len(colors) == 5
    assert all(is_valid_hex(c) for c in colors)

def test_pattern_unknown():
    assert generate_pattern_based_palette("GOTHIC", SeededRandom(3)) == []


# ── Locked color classification ───────────────────────────────────────────────
@pytest.mark.parametrize("role,is_custom,expected", [
    ("Primary", False, "brand"),
    ("accent border", False, "brand"),
    ("Page Background", False, "surface"),
    ("Text Muted", False, "text"),
    ("Border", False, "text"),
    ("Info Banner", False, "feedback"),
    ("Mascot", False, "extended"),
    ("Mascot", True, "custom"),
    ("Primary", True, "brand"),
])
def test_classify_role(role, is_custom, expected):
    assert classify_role(role, is_custom) == expected

def test_classify_locked_colors_copies():
    locked = [Color("#0055FF", "Primary", locked=True)]
    palette = classify_locked_colors(locked)
    assert palette.brand == locked
    assert palette.brand[0] is not locked[0]

def test_too_similar_to_locked():
    locked = [Color("#F51010", "Primary", locked=True)]
    assert is_too_similar_to_locked("#FF0000", locked)
    assert not is_too_similar_to_locked("#00FF00", locked)


# ── Role selection ────────────────────────────────────────────────────────────
def test_best_background_prefers_lightest():
    assert find_best_background(["#333333", "#F0F0F0", "#FAFAFA"], []) == "#FAFAFA"

def test_best_background_fallback():
    assert find_best_background(["#333333"], []) == hsl_hex(0, 0, 95)

def test_best_surface_targets_85():
    assert find_best_surface(["#FFFFFF", "#D9D9D9", "#E6E6E6"], []) == "#D9D9D9"

def test_best_surface_fallback():
    assert find_best_surface(["#000000", "#FFFFFF"], []) == hsl_hex(0, 5, 90)

def test_best_text_prefers_dark_accessible():
    assert find_best_text_color(["#555555", "#222222", "#EEEEEE"], "#FFFFFF") == "#222222"

def test_best_text_fallbacks():
    assert find_best_text_color(["#EEEEEE"], "#FFFFFF") == "#000000"
    assert find_best_text_color(["#222222"], "#111111") == "#FFFFFF"

def test_semantic_finds_candidate():
    assert find_or_create_semantic_color("success", ["#FF0000", "#33CC55"]) == "#33CC55"
    assert find_or_create_semantic_color("error", ["#FF0000"]) == "#FF0000"

def test_semantic_synthesizes():
    assert find_or_create_semantic_color("info", ["#FF0000"]) == hsl_hex(210, 65, 50)


# ── Palette assembly ──────────────────────────────────────────────────────────
CANDIDATES = [
    "#3B82F6", "#F59E0B", "#FAFAFA", "#E0E0E0", "#1F2937", "#6B7280",
    "#22C55E", "#EAB308", "#EF4444", "#8B5CF6", "#06B6D4", "#EC4899",
]

def test_assign_roles_in_order():
    p = assign_colors_to_palette(CANDIDATES, [], 12)
    assert [(c.hex, c.role) for c in p.brand] == [
        ("#3B82F6", "Primary"), ("#F59E0B", "Secondary"), ("#FAFAFA", "Accent")]
    assert [c.role for c in p.surface] == ["Background", "Surface", "Surface Variant"]
    assert p.surface[0].hex == "#E0E0E0"
    assert p.surface[1].hex == hsl_hex(0, 5, 90)
    assert p.surface[2].hex == "#1F2937"
    assert [(c.hex, c.role) for c in p.text] == [
        ("#000000", "Text Primary"), ("#6B7280", "Text Secondary")]
    assert [(c.hex, c.role) for c in p.feedback] == [
        ("#22C55E", "Success"), ("#EAB308", "Warning"), ("#EF4444", "Error")]
    assert [(c.hex, c.role) for c in p.extended] == [("#8B5CF6", "Extended 1")]
    assert p.total() == 12

def test_assign_skips_malformed_candidates():
    p = assign_colors_to_palette(["#3b82f6", "nope", "#abc\n"], [], 2)
    assert p.brand[0].hex == "#3B82F6"
    assert p.total() == 2
    assert all(is_valid_hex(h) for h in p.hexes())

def test_assign_never_overfills():
    p = assign_colors_to_palette(CANDIDATES * 3, [], 12)
    assert p.total() == 12

def test_assign_small_target():
    p = assign_colors_to_palette(CANDIDATES, [], 4)
    assert [c.role for c in p.brand] == ["Primary", "Secondary"]
    assert [c.role for c in p.surface] == ["Background", "Surface"]
    assert p.total() == 4

def test_assign_filters_near_locked():
    locked = [Color("#3C83F5", "Hero", locked=True)]
    p = assign_colors_to_palette(CANDIDATES, locked, 12)
    assert "#3B82F6" not in p.hexes()
    assert p.extended[0].hex == "#3C83F5"

def test_assign_keeps_locked_slots():
    locked = [Color("#0055FF", "Primary", locked=True),
              Color("#FFFFFF", "Background", locked=True)]
    p = assign_colors_to_palette(CANDIDATES, locked, 12)
    assert p.brand[0].hex == "#0055FF"
    assert p.brand[1].role == "Secondary"
    assert p.surface[0].hex == "#FFFFFF"
    assert [c.role for c in p.surface][:2] == ["Background", "Surface"]


# ── generate_ui_palette ───────────────────────────────────────────────────────
LOCKED = [
    Color("#0055FF", "Primary", locked=True),
    Color("#FAFAFA", "Page Background", locked=True),
    Color("#123456", "Mascot", locked=True, is_custom=True),
]

@pytest.mark.parametrize("config", [
    AlgorithmicConfig(seed=7),
    AlgorithmicConfig(seed=7, temperature="warm", saturation_level="vibrant"),
    AlgorithmicConfig(harmony_type="triadic", base_color="#3B82F6", seed=7),
    AlgorithmicConfig(harmony_type="monochromatic", base_color="#10B981", seed=7),
])
def test_locked_colors_preserved(config):
    p = generate_ui_palette(config, LOCKED, 12)
    assert p.brand[0].hex == "#0055FF" and p.brand[0].role == "Primary"
    assert p.surface[0].hex == "#FAFAFA" and p.surface[0].role == "Page Background"
    assert [(c.hex, c.role) for c in p.custom] == [("#123456", "Mascot")]
    assert len(LOCKED) <= p.total() <= 12

def test_extended_colors_not_near_locked():
    p = generate_ui_palette(AlgorithmicConfig(seed=11), LOCKED, 20)
    for c in p.extended:
        assert all(color_distance(c.hex, l.hex) >= 30 for l in LOCKED)

@pytest.mark.parametrize("target", [1, 4, 8, 10, 12, 14, 16, 20])
def test_palette_size_bounds(target):
    p = generate_ui_palette(AlgorithmicConfig(seed=3), [], target)
    assert p.total() <= target
    assert all(is_valid_hex(h) for h in p.hexes())

def test_target_16_fills_optional_roles():
    p = generate_ui_palette(AlgorithmicConfig(seed=3), [], 16)
    assert [c.role for c in p.text] == ["Text Primary", "Text Secondary", "Text Tertiary", "Border"]
    assert [c.role for c in p.feedback] == ["Success", "Warning", "Error", "Info"]
    assert p.total() == 16

def test_locked_beyond_target():
    p = generate_ui_palette(AlgorithmicConfig(seed=3), LOCKED, 2)
    assert p.total() == len(LOCKED)

def test_seeded_generation_deterministic():
    cfg = AlgorithmicConfig(seed=42, temperature="cool")
    assert generate_ui_palette(cfg, LOCKED, 14).to_dict() == generate_ui_palette(cfg, LOCKED, 14).to_dict()

def test_base_color_generation_deterministic():
    cfg = AlgorithmicConfig(harmony_type="tetradic", base_color="#E11D48", seed=5)
    assert generate_ui_palette(cfg, [], 12).to_dict() == generate_ui_palette(cfg, [], 12).to_dict()

def test_injected_rng_reproducible():
    cfg = AlgorithmicConfig()
    a = generate_ui_palette(cfg, [], 12, rng=SeededRandom(8))
    b = generate_ui_palette(cfg, [], 12, rng=SeededRandom(8))
    assert a.to_dict() == b.to_dict()

def test_base_color_primary_follows_base():
    cfg = AlgorithmicConfig(harmony_type="triadic", base_color="#3B82F6", seed=1)
    p = generate_ui_palette(cfg, [], 12)
    assert hue_gap(hex_to_hsl(p.brand[0].hex).h, hex_to_hsl("#3B82F6").h) <= 15

def test_invalid_base_color_still_completes():
    cfg = AlgorithmicConfig(base_color="not-a-color", seed=1)
    p = generate_ui_palette(cfg, [], 12)
    assert 0 < p.total() <= 12
    assert all(is_valid_hex(h) for h in p.hexes())

def test_unseeded_generation_runs():
    p = generate_ui_palette(AlgorithmicConfig(), [], 10)
    assert p.total() <= 10
    assert p.brand and p.surface and p.feedback
