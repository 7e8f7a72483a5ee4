"""Palette data model: colors, the six-category UI palette and generation config."""
from __future__ import annotations

import datetime
import uuid
from dataclasses import dataclass, field, replace
from typing import Dict, Iterator, List, Optional, Tuple

from color_math import is_valid_hex, normalize_hex

# Fixed iteration order; previews and exports depend on it
CATEGORIES: Tuple[str, ...] = ("brand", "surface", "text", "feedback", "extended", "custom")


class PaletteError(ValueError):
    """Malformed palette data arriving from outside the core."""


@dataclass
class Color:
    hex: str
    role: str
    locked: bool = False
    is_custom: bool = False

    def __post_init__(self) -> None:
        if not is_valid_hex(self.hex):
            raise PaletteError(f"Invalid hex color: {self.hex!r}")
        self.hex = normalize_hex(self.hex)

    def to_dict(self) -> dict:
        return {"hex": self.hex, "role": self.role,
                "locked": self.locked, "isCustom": self.is_custom}

    @classmethod
    def from_dict(cls, data: dict) -> "Color":
        return cls(
            hex=data.get("hex"),
            role=str(data.get("role", "")),
            locked=bool(data.get("locked", False)),
            is_custom=bool(data.get("isCustom", data.get("is_custom", False))),
        )


@dataclass
class UIPalette:
    brand: List[Color] = field(default_factory=list)
    surface: List[Color] = field(default_factory=list)
    text: List[Color] = field(default_factory=list)
    feedback: List[Color] = field(default_factory=list)
    extended: List[Color] = field(default_factory=list)
    custom: List[Color] = field(default_factory=list)

    def category(self, name: str) -> List[Color]:
        if name not in CATEGORIES:
            raise PaletteError(f"Unknown palette category: {name!r}")
        return getattr(self, name)

    def items(self) -> Iterator[Tuple[str, List[Color]]]:
        for name in CATEGORIES:
            yield name, getattr(self, name)

    def all_colors(self) -> List[Color]:
        return [c for _, colors in self.items() for c in colors]

    def hexes(self) -> List[str]:
        return [c.hex for c in self.all_colors()]

    def total(self) -> int:
        return sum(len(colors) for _, colors in self.items())

    def locked_colors(self) -> List[Color]:
        return [c for c in self.all_colors() if c.locked]

    def preview(self, n: int = 8) -> List[str]:
        return self.hexes()[:n]

    # ── editing ──────────────────────────────────────────────────────────────
    def add(self, category: str, color: Color) -> None:
        self.category(category).append(color)

    def remove(self, category: str, index: int) -> Color:
        return self.category(category).pop(index)

    def set_hex(self, category: str, index: int, hex_color: str) -> None:
        if not is_valid_hex(hex_color):
            raise PaletteError(f"Invalid hex color: {hex_color!r}")
        self.category(category)[index].hex = normalize_hex(hex_color)

    def toggle_lock(self, category: str, index: int) -> bool:
        color = self.category(category)[index]
        color.locked = not color.locked
        return color.locked

    def reassign(self, category: str, index: int, target: str) -> None:
        self.category(target).append(self.remove(category, index))

    def copy(self) -> "UIPalette":
        return UIPalette(**{name: [replace(c) for c in colors] for name, colors in self.items()})

    def to_dict(self) -> Dict[str, List[dict]]:
        return {name: [c.to_dict() for c in colors] for name, colors in self.items()}

    @classmethod
    def from_dict(cls, data: dict) -> "UIPalette":
        """Parse the boundary JSON shape; missing categories are empty."""
        if not isinstance(data, dict):
            raise PaletteError("Palette must be a JSON object")
        out = cls()
        for name in CATEGORIES:
            entries = data.get(name) or []
            if not isinstance(entries, list):
                raise PaletteError(f"Category {name!r} must be a list")
            out.category(name).extend(Color.from_dict(e) for e in entries)
        return out


@dataclass
class AlgorithmicConfig:
    harmony_type: str = "complementary"
    base_color: Optional[str] = None
    temperature: Optional[str] = None       # warm | cool | neutral
    saturation_level: Optional[str] = None  # moderate | vibrant | muted | neutral
    seed: Optional[int] = None


@dataclass
class HarmonySuggestion:
    harmony_type: str
    base_color: str
    colors: List[Color]
    confidence: float
    accessibility_score: float
    preview_palette: UIPalette
    reasoning: str
    name: str = ""
    description: str = ""


@dataclass
class SavedPalette:
    id: str
    name: str
    palette: UIPalette
    created_at: str
    preview: List[str] = field(default_factory=list)

    @classmethod
    def create(cls, palette: UIPalette, name: str) -> "SavedPalette":
        return cls(
            id=str(uuid.uuid4()),
            name=name,
            palette=palette,
            created_at=datetime.datetime.now(datetime.timezone.utc).isoformat(),
            preview=palette.preview(8),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "palette": self.palette.to_dict(),
            "createdAt": self.created_at,
            "preview": self.preview,
        }
