# fitsvg/core/text_metrics.py
"""
Measure text width/height in px at a given font size.
measure() picks the strategy: glyph metrics from a FontHandle when one is
available and the text has no emoji, otherwise the per-character heuristic.
"""

from __future__ import annotations

import logging
import warnings

from fitsvg.core.config import (
    ADVANCE_WIDTH_FLOOR,
    CHAR_WIDTHS_EM,
    COMPLEX_SCRIPT_KERNING,
    CONFIDENCE_BASE,
    CONFIDENCE_COMPLEX_PENALTY,
    CONFIDENCE_LIGATURE_BONUS,
    CONFIDENCE_MAX,
    CONFIDENCE_MIN,
    CONFIDENCE_SHORT_MAX_CHARS,
    CONFIDENCE_SHORT_PENALTY,
    DEFAULT_FONT_FAMILY,
    DIGIT_PADDING_EM,
    DIGIT_RUN_CORRECTION,
    FAMILY_METRICS,
    FAMILY_WIDTH_CORRECTION,
    LATIN_ORIENTED_FAMILIES,
    LIGATURE_PAIRS,
    LIGATURE_REDUCTION,
    LINE_HEIGHT_FACTOR,
    LONG_TEXT_KERNING,
    LONG_TEXT_KERNING_MIN_CHARS,
    MANY_DIGITS_THRESHOLD,
    MONOSPACE_FAMILIES,
    UNKNOWN_CHAR_FACTOR,
    UNSUPPORTED_SCRIPT_WIDTH_FACTOR,
    WIDTH_ARABIC_EM,
    WIDTH_CYRILLIC_EM,
    WIDTH_EMOJI_EM,
    WIDTH_FULLWIDTH_EM,
    WIDTH_GEORGIAN_EM,
    WIDTH_GREEK_EM,
    WIDTH_HEBREW_EM,
    WIDTH_INDIC_EM,
    WIDTH_THAI_EM,
)
from fitsvg.core.error_codes import MEASUREMENT_FAILED
from fitsvg.core.fonts import FontHandle
from fitsvg.core.scripts import (
    ARABIC_RANGES,
    CYRILLIC_RANGES,
    EMOJI_WIDTH_RANGES,
    FULLWIDTH_RANGES,
    GEORGIAN_RANGES,
    GREEK_RANGES,
    HEBREW_RANGES,
    INDIC_RANGES,
    THAI_RANGES,
    classify,
    count_ascii_digits,
    in_ranges,
)
from fitsvg.core.types import ScriptProfile, TextMeasurement

logger = logging.getLogger(__name__)

_family_warning_emitted: set[str] = set()

# (ranges, em width, counts as complex script); first match wins
_BLOCK_WIDTHS = (
    (FULLWIDTH_RANGES, WIDTH_FULLWIDTH_EM, True),
    (EMOJI_WIDTH_RANGES, WIDTH_EMOJI_EM, False),
    (ARABIC_RANGES, WIDTH_ARABIC_EM, True),
    (HEBREW_RANGES, WIDTH_HEBREW_EM, True),
    (INDIC_RANGES, WIDTH_INDIC_EM, True),
    (THAI_RANGES, WIDTH_THAI_EM, True),
    (GEORGIAN_RANGES, WIDTH_GEORGIAN_EM, True),
    (GREEK_RANGES, WIDTH_GREEK_EM, False),
    (CYRILLIC_RANGES, WIDTH_CYRILLIC_EM, False),
)


def normalize_family(font_family: str | None) -> str:
    """First family of a CSS font-family list, quotes stripped."""
    if not font_family:
        return DEFAULT_FONT_FAMILY
    name = font_family.split(",")[0].strip().strip("'\"").strip()
    return name or DEFAULT_FONT_FAMILY


def _family_metrics(family: str) -> dict[str, float]:
    """Base metrics for family; default entry with a one-time warning if unknown."""
    metrics = FAMILY_METRICS.get(family)
    if metrics is not None:
        return metrics
    if family not in _family_warning_emitted and family not in MONOSPACE_FAMILIES:
        _family_warning_emitted.add(family)
        warnings.warn(f"No heuristic metrics for font family {family!r}; using default.", UserWarning)
    return FAMILY_METRICS["default"]


def char_width_em(ch: str, avg_char: float) -> tuple[float, bool]:
    """Return (width_em, is_complex_script) for one code point."""
    width = CHAR_WIDTHS_EM.get(ch)
    if width is not None:
        return width, False
    cp = ord(ch)
    for ranges, em, is_complex in _BLOCK_WIDTHS:
        if in_ranges(cp, ranges):
            return em, is_complex
    if cp <= 0x7F:
        return avg_char, False
    return avg_char * UNKNOWN_CHAR_FACTOR, False


def count_ligatures(text: str) -> int:
    """Adjacent pairs among fi/fl/ff; 'ffi' counts as two."""
    return sum(1 for a, b in zip(text, text[1:]) if a + b in LIGATURE_PAIRS)


def measure_fallback(
    text: str,
    font_size: float = 48,
    font_family: str | None = DEFAULT_FONT_FAMILY,
) -> TextMeasurement:
    """
    Heuristic measurement from per-character em widths and per-script multipliers.
    Deterministic, no I/O. Width is 0 for empty text.
    """
    family = normalize_family(font_family)
    metrics = _family_metrics(family)
    avg_char = metrics["avg_char"]

    total_em = 0.0
    complex_script = False
    for ch in text:
        em, is_complex = char_width_em(ch, avg_char)
        total_em += em
        complex_script = complex_script or is_complex

    ligatures = count_ligatures(text)
    many_digits = count_ascii_digits(text) > MANY_DIGITS_THRESHOLD

    kerning = 1.0
    if complex_script:
        kerning = COMPLEX_SCRIPT_KERNING
    elif len(text) > LONG_TEXT_KERNING_MIN_CHARS:
        kerning = LONG_TEXT_KERNING
    if many_digits and family not in MONOSPACE_FAMILIES:
        kerning *= DIGIT_RUN_CORRECTION
    if ligatures:
        kerning *= 1.0 - ligatures * LIGATURE_REDUCTION
    kerning *= FAMILY_WIDTH_CORRECTION.get(family, 1.0)

    confidence = CONFIDENCE_BASE
    if complex_script:
        confidence -= CONFIDENCE_COMPLEX_PENALTY
    if len(text) < CONFIDENCE_SHORT_MAX_CHARS:
        confidence -= CONFIDENCE_SHORT_PENALTY
    if ligatures:
        confidence += CONFIDENCE_LIGATURE_BONUS

    return TextMeasurement(
        width=max(0.0, total_em * font_size * kerning),
        height=font_size * LINE_HEIGHT_FACTOR,
        ascent=font_size * metrics["baseline"],
        descent=font_size * metrics["descent"],
        is_accurate=False,
        confidence=max(CONFIDENCE_MIN, min(CONFIDENCE_MAX, confidence)),
    )


def font_lacks_script(font: FontHandle, text: str, profile: ScriptProfile) -> bool:
    """
    Coarse coverage check: complex-script text the cmap cannot map, or CJK
    requested from a Latin-oriented family.
    """
    if not profile.has_complex_script:
        return False
    if profile.has_cjk and normalize_family(font.family_name) in LATIN_ORIENTED_FAMILIES:
        return True
    return not font.supports(text)


def measure_accurate(
    text: str,
    font_size: float,
    font: FontHandle,
    profile: ScriptProfile | None = None,
) -> TextMeasurement:
    """Glyph-metric measurement with script-aware corrections. Raises if the font query fails."""
    profile = profile or classify(text)
    advance = font.advance_width(text, font_size)
    left, top, right, bottom = font.bounding_box(text, font_size)
    bbox_w = max(0.0, right - left)
    bbox_h = max(0.0, bottom - top)

    if profile.has_many_digits:
        width = (bbox_w if bbox_w > 0 else advance) + profile.digit_count * font_size * DIGIT_PADDING_EM
    else:
        width = max(bbox_w, advance * ADVANCE_WIDTH_FLOOR)

    is_accurate = True
    if font_lacks_script(font, text, profile):
        width *= UNSUPPORTED_SCRIPT_WIDTH_FACTOR
        is_accurate = False

    scale = font_size / font.units_per_em
    ascent = font.ascender * scale
    descent = abs(font.descender) * scale
    return TextMeasurement(
        width=width,
        height=max(bbox_h, ascent + descent),
        ascent=ascent,
        descent=descent,
        is_accurate=is_accurate,
        font_name=font.family_name,
    )


def measure(
    text: str,
    font_size: float,
    font_family: str | None = DEFAULT_FONT_FAMILY,
    font: FontHandle | None = None,
    profile: ScriptProfile | None = None,
) -> TextMeasurement:
    """
    Measure text at font_size. Emoji always take the heuristic path; a failing
    font query degrades to the heuristic for this call only.
    """
    profile = profile or classify(text)
    if font is None or profile.has_emoji:
        return measure_fallback(text, font_size, font_family)
    try:
        return measure_accurate(text, font_size, font, profile)
    except Exception as e:
        logger.warning(f"{MEASUREMENT_FAILED}: {type(e).__name__}: {e}; using heuristic")
        return measure_fallback(text, font_size, font_family)
