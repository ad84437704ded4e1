# fitsvg/core/geometry.py
"""
Geometry helpers for positioned text: text box from anchor and metrics,
canvas rectangle, containment and overflow.
SVG coordinates: origin top-left, y grows downward.
"""

from __future__ import annotations

from shapely.geometry import Polygon, box
from shapely.geometry.base import BaseGeometry

from fitsvg.core.config import CONTAINMENT_TOLERANCE_PX
from fitsvg.core.types import Baseline, TextAnchor, TextMeasurement


def canvas_polygon(width: float, height: float) -> Polygon:
    return box(0.0, 0.0, float(width), float(height))


def text_box(
    x: float,
    y: float,
    metrics: TextMeasurement,
    text_anchor: TextAnchor = "middle",
    baseline: Baseline = "alphabetic",
) -> Polygon:
    """
    Axis-aligned box covering a text run anchored at (x, y).
    middle anchor centers horizontally; central baseline centers vertically on
    ascent + descent, alphabetic puts y on the baseline.
    """
    if metrics.width <= 0:
        return Polygon()
    if text_anchor == "middle":
        min_x = x - metrics.width / 2.0
    else:
        min_x = x
    if baseline == "central":
        half = (metrics.ascent + metrics.descent) / 2.0
        min_y, max_y = y - half, y + half
    else:
        min_y, max_y = y - metrics.ascent, y + metrics.descent
    return box(min_x, min_y, min_x + metrics.width, max_y)


def polygon_contains_with_tol(
    poly: BaseGeometry,
    rect: BaseGeometry,
    tolerance_px: float = CONTAINMENT_TOLERANCE_PX,
) -> bool:
    """True if rect is fully inside poly, allowing rect to exceed it by tolerance_px."""
    if poly is None or rect is None or poly.is_empty or rect.is_empty:
        return False
    grown = poly.buffer(tolerance_px, join_style="mitre") if tolerance_px > 0 else poly
    return grown.covers(rect)


def overflow_area(container: BaseGeometry, rect: BaseGeometry) -> float:
    """Area of rect lying outside container (0 when contained or empty)."""
    if rect is None or rect.is_empty:
        return 0.0
    if container is None or container.is_empty:
        return float(rect.area)
    return float(rect.difference(container).area)
