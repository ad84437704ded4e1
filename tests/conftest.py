# tests/conftest.py
"""
Shared fixtures: a deterministic fake font handle, a provider with no font,
and a lookup for an installed TrueType font (tests needing one skip otherwise).
"""

from __future__ import annotations

from pathlib import Path

import pytest

from fitsvg.core.fonts import FontProvider

SYSTEM_FONT_CANDIDATES = (
    "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    "/usr/share/fonts/truetype/liberation2/LiberationSans-Regular.ttf",
    "/usr/share/fonts/liberation-sans/LiberationSans-Regular.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/Library/Fonts/Arial.ttf",
    "C:/Windows/Fonts/arial.ttf",
)


class FakeFont:
    """
    Font handle stand-in: every glyph advances advance_em and inks bbox_em;
    ink height is 0.9 em. Metrics in 1000 units per em.
    """

    def __init__(
        self,
        family_name: str = "FakeSans",
        advance_em: float = 0.5,
        bbox_em: float = 0.48,
        supported: bool = True,
    ) -> None:
        self.family_name = family_name
        self.units_per_em = 1000
        self.ascender = 800
        self.descender = -200
        self.advance_em = advance_em
        self.bbox_em = bbox_em
        self.supported = supported
        self.fail = False

    def advance_width(self, text: str, font_size: float) -> float:
        if self.fail:
            raise RuntimeError("glyph lookup failed")
        return len(text) * self.advance_em * font_size

    def bounding_box(self, text: str, font_size: float) -> tuple[float, float, float, float]:
        if self.fail:
            raise RuntimeError("glyph lookup failed")
        if not text:
            return (0.0, 0.0, 0.0, 0.0)
        return (0.0, 0.0, len(text) * self.bbox_em * font_size, 0.9 * font_size)

    def supports(self, text: str) -> bool:
        return self.supported


@pytest.fixture
def fake_font():
    """Factory for FakeFont instances."""
    return FakeFont


@pytest.fixture
def no_font_provider() -> FontProvider:
    """Provider with no source: always unavailable, heuristic measurement only."""
    return FontProvider(None)


@pytest.fixture
def system_font_path() -> Path:
    for candidate in SYSTEM_FONT_CANDIDATES:
        p = Path(candidate)
        if p.is_file():
            return p
    pytest.skip("No TrueType font installed")
