# fitsvg/core/fitting.py
"""
Font-size fitting: largest integer size whose measured width fits the
available width after the script-dependent safety margin.
"""

from __future__ import annotations

import logging

from fitsvg.core.config import DEFAULT_FONT_FAMILY, MAX_FONT_SIZE, MIN_FONT_SIZE
from fitsvg.core.fonts import FontHandle
from fitsvg.core.scripts import classify
from fitsvg.core.text_metrics import measure
from fitsvg.core.types import FitResult, TextMeasurement

logger = logging.getLogger(__name__)


def fits_within(
    metrics: TextMeasurement,
    safe_width: float,
    max_height: float | None,
) -> bool:
    """Fit predicate: width within safe_width and, if given, height within max_height."""
    if metrics.width > safe_width:
        return False
    return max_height is None or metrics.height <= max_height


def fit_font_size(
    text: str,
    max_width: float,
    max_height: float | None = None,
    min_font_size: int = MIN_FONT_SIZE,
    max_font_size: int = MAX_FONT_SIZE,
    font_family: str | None = DEFAULT_FONT_FAMILY,
    font: FontHandle | None = None,
) -> FitResult:
    """
    Linear descent from max_font_size to min_font_size (inclusive, step -1);
    returns the first size that fits. If none fits, returns min_font_size with
    its own measurement and fits=False.
    Width grows linearly with size, so the first hit is the largest fitting size.
    """
    min_size = int(min_font_size)
    max_size = max(int(max_font_size), min_size)
    profile = classify(text)
    safe_width = max_width * (1.0 - profile.recommended_safety_margin)

    for size in range(max_size, min_size - 1, -1):
        metrics = measure(text, size, font_family, font=font, profile=profile)
        logger.debug(
            f"Font size {size}: measured={metrics.width:.1f}, safe_width={safe_width:.1f}, "
            f"max_width={max_width:.1f}, complex={profile.has_complex_script}"
        )
        if fits_within(metrics, safe_width, max_height):
            return FitResult(font_size=size, metrics=metrics, profile=profile, fits=True)

    # Range is never empty, so metrics was last measured at min_size
    logger.debug(f"No size in [{min_size}, {max_size}] fits {max_width:.1f}px; using floor {min_size}")
    return FitResult(font_size=min_size, metrics=metrics, profile=profile, fits=False)
