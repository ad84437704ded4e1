# fitsvg/core/layout.py
"""
Layout composition: text area sizing, anchor policy, background choice, and
assembly of the renderable Scene from a FitResult.
"""

from __future__ import annotations

import logging

from fitsvg.core.config import (
    BADGE_BASELINE_FROM_BOTTOM,
    BADGE_CORNER_RADIUS,
    BADGE_FONT_STACK,
    BADGE_FONT_WEIGHT,
    BADGE_TEXT_SHADOW,
    DEBUG_COMMENTS,
    GENERIC_FONT_STACK,
    TEXT_AREA_HEIGHT_FRACTION,
    TEXT_AREA_WIDTH_FRACTION,
    TEXT_AREA_WIDTH_FRACTION_COMPLEX,
)
from fitsvg.core.geometry import canvas_polygon, overflow_area, polygon_contains_with_tol, text_box
from fitsvg.core.types import (
    Background,
    Baseline,
    Color,
    FitResult,
    FontFace,
    LayoutSpec,
    RenderOptions,
    Scene,
    ScriptProfile,
    TextAnchor,
    TextRun,
)

logger = logging.getLogger(__name__)


def color_to_css(color: Color) -> str:
    """RGBA sequence -> rgb()/rgba(); strings pass through as CSS colors."""
    if isinstance(color, str):
        return color
    r, g, b = (int(round(float(c))) for c in color[:3])
    alpha = float(color[3]) if len(color) > 3 else 1.0
    if alpha >= 1.0:
        return f"rgb({r}, {g}, {b})"
    return f"rgba({r}, {g}, {b}, {alpha:g})"


def text_area_size(
    canvas_width: int,
    canvas_height: int,
    profile: ScriptProfile,
    max_text_width: float | None = None,
) -> tuple[float, float]:
    """
    (width, height) available for text before fitting.
    Complex scripts and emoji get a narrower default width.
    """
    if max_text_width is not None and max_text_width > 0:
        width = float(max_text_width)
    elif profile.has_complex_script or profile.has_emoji:
        width = canvas_width * TEXT_AREA_WIDTH_FRACTION_COMPLEX
    else:
        width = canvas_width * TEXT_AREA_WIDTH_FRACTION
    return width, canvas_height * TEXT_AREA_HEIGHT_FRACTION


def resolve_position(
    canvas_width: int,
    canvas_height: int,
    badge_style: bool,
    text_x: float | None = None,
    text_y: float | None = None,
) -> tuple[float, float, TextAnchor, Baseline]:
    """
    Anchor policy: explicit (x, y) wins; badge style sits near the bottom edge;
    otherwise centered with a central baseline.
    """
    if text_x is not None and text_y is not None:
        return float(text_x), float(text_y), "middle", "alphabetic"
    if badge_style:
        return canvas_width / 2.0, canvas_height * (1.0 - BADGE_BASELINE_FROM_BOTTOM), "middle", "alphabetic"
    return canvas_width / 2.0, canvas_height / 2.0, "middle", "central"


def build_layout_spec(options: RenderOptions, profile: ScriptProfile) -> LayoutSpec:
    area_w, area_h = text_area_size(options.width, options.height, profile, options.max_text_width)
    x, y, anchor, baseline = resolve_position(
        options.width,
        options.height,
        options.style == "badge",
        options.text_x,
        options.text_y,
    )
    return LayoutSpec(
        canvas_width=options.width,
        canvas_height=options.height,
        text_area_width=area_w,
        text_area_height=area_h,
        anchor_x=x,
        anchor_y=y,
        text_anchor=anchor,
        baseline=baseline,
    )


def build_background(options: RenderOptions, image_href: str | None = None) -> Background:
    """Image (full-bleed cover) if a payload is available, else gradient or flat fill."""
    radius = BADGE_CORNER_RADIUS if options.style == "badge" else 0
    if image_href:
        return Background(kind="image", href=image_href, corner_radius=radius)
    if options.use_gradient:
        return Background(
            kind="gradient",
            stops=(color_to_css(options.gradient_start), color_to_css(options.gradient_end)),
            corner_radius=radius,
        )
    return Background(kind="flat", fill=color_to_css(options.background_color), corner_radius=radius)


def _font_family_css(family: str, badge_style: bool) -> str:
    name = f"'{family}'" if " " in family else family
    stack = BADGE_FONT_STACK if badge_style else GENERIC_FONT_STACK
    return f"{name}, {stack}"


def compose(
    text: str,
    fit: FitResult,
    layout: LayoutSpec,
    options: RenderOptions,
    background: Background,
    font_face: FontFace | None = None,
) -> Scene:
    """Build the Scene: background, positioned text run, optional embedded font and annotations."""
    badge = options.style == "badge"
    run = TextRun(
        text=text,
        x=layout.anchor_x,
        y=layout.anchor_y,
        font_size=fit.font_size,
        font_family=_font_family_css(options.font_family, badge),
        fill=color_to_css(options.text_color),
        text_anchor=layout.text_anchor,
        baseline=layout.baseline,
        font_weight=BADGE_FONT_WEIGHT if badge else None,
        style=BADGE_TEXT_SHADOW if badge else None,
    )
    scene = Scene(
        width=layout.canvas_width,
        height=layout.canvas_height,
        background=background,
        text_run=run,
        font_face=font_face,
    )

    canvas = canvas_polygon(layout.canvas_width, layout.canvas_height)
    rect = text_box(layout.anchor_x, layout.anchor_y, fit.metrics, layout.text_anchor, layout.baseline)
    if not rect.is_empty and not polygon_contains_with_tol(canvas, rect):
        area = overflow_area(canvas, rect)
        scene.warnings.append(f"text overflows canvas by {area:.1f}px^2")
        logger.info(f"Text {text[:30]!r} overflows canvas at {fit.font_size}px (area={area:.1f})")

    if DEBUG_COMMENTS:
        m = fit.metrics
        confidence = f"{m.confidence:.2f}" if m.confidence is not None else "n/a"
        scene.annotations.extend([
            f"Text metrics: width={m.width:.1f}px, height={m.height:.1f}px, fontSize={fit.font_size}px, "
            f"font={m.font_name or 'fallback'}, accurate={str(m.is_accurate).lower()}, confidence={confidence}",
            f"Layout: textArea={layout.text_area_width:g}x{layout.text_area_height:g}, "
            f"padding={layout.padding_x:g}x{layout.padding_y:g}, textPos={layout.anchor_x:g},{layout.anchor_y:g}",
            f"Style: mode={options.style}, anchor={layout.text_anchor}, baseline={layout.baseline}, "
            f"fits={str(fit.fits).lower()}",
        ])
        scene.annotations.extend(f"Warning: {w}" for w in scene.warnings)
    return scene
