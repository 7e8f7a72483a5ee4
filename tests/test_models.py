"""Tests for palette_models.py"""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest
from palette_models import CATEGORIES, Color, PaletteError, SavedPalette, UIPalette


def make():
    return UIPalette(
        brand=[Color("#3B82F6", "Primary", locked=True), Color("#F59E0B", "Secondary")],
        surface=[Color("#FAFAFA", "Background")],
        custom=[Color("#123456", "Mascot", locked=True, is_custom=True)],
    )


# ── Color ─────────────────────────────────────────────────────────────────────
def test_color_from_dict_normalizes():
    c = Color.from_dict({"hex": "#3b8", "role": "Primary", "isCustom": True})
    assert c.hex == "#33BB88"
    assert c.is_custom and not c.locked

def test_color_from_dict_rejects_bad_hex():
    with pytest.raises(PaletteError):
        Color.from_dict({"hex": "blue", "role": "Primary"})

def test_color_normalizes_on_construction():
    assert Color("#abc", "Primary").hex == "#AABBCC"
    assert Color("3b82f6", "Primary").hex == "#3B82F6"

@pytest.mark.parametrize("value", ["blue", "#abc\n", None])
def test_color_rejects_bad_hex(value):
    with pytest.raises(PaletteError):
        Color(value, "Primary")

def test_color_to_dict_keys():
    assert Color("#000000", "Text Primary").to_dict() == {
        "hex": "#000000", "role": "Text Primary", "locked": False, "isCustom": False}


# ── UIPalette ─────────────────────────────────────────────────────────────────
def test_category_order():
    p = make()
    assert [name for name, _ in p.items()] == list(CATEGORIES)
    assert p.hexes() == ["#3B82F6", "#F59E0B", "#FAFAFA", "#123456"]

def test_total_and_locked():
    p = make()
    assert p.total() == 4
    assert [c.role for c in p.locked_colors()] == ["Primary", "Mascot"]

def test_preview_limit():
    assert make().preview(2) == ["#3B82F6", "#F59E0B"]

def test_unknown_category():
    with pytest.raises(PaletteError):
        make().category("chrome")

def test_dict_round_trip():
    p = make()
    assert UIPalette.from_dict(p.to_dict()) == p

def test_from_dict_missing_categories():
    p = UIPalette.from_dict({"brand": [{"hex": "#fff", "role": "Primary"}]})
    assert p.brand[0].hex == "#FFFFFF"
    assert p.total() == 1

@pytest.mark.parametrize("data", [[], {"brand": "oops"}, {"text": [{"hex": "#12"}]}])
def test_from_dict_rejects(data):
    with pytest.raises(PaletteError):
        UIPalette.from_dict(data)

def test_set_hex_and_toggle():
    p = make()
    p.set_hex("brand", 1, "#abc")
    assert p.brand[1].hex == "#AABBCC"
    assert p.toggle_lock("brand", 1) is True
    with pytest.raises(PaletteError):
        p.set_hex("brand", 1, "#abcd")

def test_reassign_and_remove():
    p = make()
    p.reassign("brand", 1, "extended")
    assert [c.role for c in p.brand] == ["Primary"]
    assert p.extended[0].hex == "#F59E0B"
    removed = p.remove("extended", 0)
    assert removed.role == "Secondary" and not p.extended

def test_copy_is_independent():
    p = make()
    q = p.copy()
    q.brand[0].hex = "#000000"
    q.add("extended", Color("#111111", "Extra"))
    assert p.brand[0].hex == "#3B82F6"
    assert p.extended == []


# ── SavedPalette ──────────────────────────────────────────────────────────────
def test_saved_palette():
    saved = SavedPalette.create(make(), "Brand kit")
    data = saved.to_dict()
    assert data["name"] == "Brand kit"
    assert data["preview"] == make().preview(8)
    assert set(data) == {"id", "name", "palette", "createdAt", "preview"}

def test_saved_palette_unique_ids():
    assert SavedPalette.create(make(), "a").id != SavedPalette.create(make(), "a").id
