# fitsvg/core/types.py
"""
Dataclasses for measurements, script profiles, fit results, layout and scene.
All are value objects built and consumed within a single render call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from fitsvg.core.config import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_FONT_FAMILY,
    DEFAULT_GRADIENT_END,
    DEFAULT_GRADIENT_START,
    DEFAULT_TEXT_COLOR,
    MAX_FONT_SIZE,
    MIN_FONT_SIZE,
    SAFETY_MARGIN_DEFAULT,
)


TextAnchor = Literal["start", "middle"]
Baseline = Literal["alphabetic", "central"]
StyleMode = Literal["generic", "badge"]
BackgroundKind = Literal["flat", "gradient", "image"]
Color = tuple[int, int, int, float] | str


@dataclass(frozen=True)
class TextMeasurement:
    """Estimated extents of a string at one font size (px)."""
    width: float
    height: float
    ascent: float
    descent: float
    is_accurate: bool
    confidence: float | None = None  # heuristic path only
    font_name: str | None = None


@dataclass(frozen=True)
class ScriptProfile:
    """Classification of a string's Unicode content relevant to width estimation."""
    has_complex_script: bool = False
    has_cjk: bool = False
    has_emoji: bool = False
    has_many_digits: bool = False
    is_long: bool = False
    digit_count: int = 0
    recommended_safety_margin: float = SAFETY_MARGIN_DEFAULT

    @property
    def needs_high_precision(self) -> bool:
        return self.has_emoji or self.has_complex_script


@dataclass(frozen=True)
class FitResult:
    """
    Largest font size that fits, plus the measurement taken at that size.
    fits is False when even min_font_size overflowed (best-effort floor).
    """
    font_size: int
    metrics: TextMeasurement
    profile: ScriptProfile
    fits: bool = True


@dataclass(frozen=True)
class LayoutSpec:
    """Canvas, text area and anchor for one render."""
    canvas_width: int
    canvas_height: int
    text_area_width: float
    text_area_height: float
    anchor_x: float
    anchor_y: float
    text_anchor: TextAnchor = "middle"
    baseline: Baseline = "alphabetic"

    @property
    def padding_x(self) -> float:
        return (self.canvas_width - self.text_area_width) / 2.0

    @property
    def padding_y(self) -> float:
        return (self.canvas_height - self.text_area_height) / 2.0


@dataclass
class RenderOptions:
    """Normalized request options. Defaults are filled in by options.parse_options."""
    text: str
    width: int
    height: int
    style: StyleMode = "generic"
    text_color: Color = DEFAULT_TEXT_COLOR
    background_color: Color = DEFAULT_BACKGROUND_COLOR
    gradient_start: Color = DEFAULT_GRADIENT_START
    gradient_end: Color = DEFAULT_GRADIENT_END
    use_gradient: bool = True
    background_image_url: str | None = None
    text_x: float | None = None
    text_y: float | None = None
    max_text_width: float | None = None
    font_size: int | None = None
    auto_font_size: bool = True
    min_font_size: int = MIN_FONT_SIZE
    max_font_size: int = MAX_FONT_SIZE
    font_family: str = DEFAULT_FONT_FAMILY
    font_base64: str | None = None
    font_source: str | None = None


@dataclass(frozen=True)
class Background:
    """Flat fill, two-stop linear gradient, or full-bleed image (href is an embeddable payload)."""
    kind: BackgroundKind
    fill: str = "rgb(255, 255, 255)"
    stops: tuple[str, str] | None = None
    href: str | None = None
    corner_radius: int = 0


@dataclass(frozen=True)
class TextRun:
    """A single positioned line of text."""
    text: str
    x: float
    y: float
    font_size: int
    font_family: str
    fill: str
    text_anchor: TextAnchor = "middle"
    baseline: Baseline = "alphabetic"
    font_weight: str | None = None
    style: str | None = None


@dataclass(frozen=True)
class FontFace:
    """Embedded @font-face declaration."""
    family: str
    data_base64: str
    mime_type: str = "font/ttf"
    format: str = "truetype"


@dataclass
class Scene:
    """Renderable vector scene: background, text run, optional font, annotations."""
    width: int
    height: int
    background: Background
    text_run: TextRun
    font_face: FontFace | None = None
    annotations: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
