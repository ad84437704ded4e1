# fitsvg/core/scripts.py
"""
Script classification: which Unicode blocks a string touches and how much
safety margin the font-size fitter should reserve for it.
Python strings iterate by code point, so astral characters (emoji, CJK Ext B+)
are always one logical character here.
"""

from __future__ import annotations

from fitsvg.core.config import (
    LONG_TEXT_MIN_CHARS,
    MANY_DIGITS_THRESHOLD,
    SAFETY_MARGIN_COMPLEX,
    SAFETY_MARGIN_DEFAULT,
)
from fitsvg.core.types import ScriptProfile

Ranges = tuple[tuple[int, int], ...]

# Blocks that set the complex-script flag
CJK_RANGES: Ranges = (
    (0x3040, 0x309F),  # Hiragana
    (0x30A0, 0x30FF),  # Katakana
    (0x3400, 0x4DBF),  # CJK Extension A
    (0x4E00, 0x9FFF),  # CJK Unified Ideographs
    (0xAC00, 0xD7AF),  # Hangul Syllables
)
ARABIC_RANGES: Ranges = (
    (0x0600, 0x06FF),  # Arabic
    (0x0750, 0x077F),  # Arabic Supplement
    (0xFB50, 0xFDFF),  # Presentation Forms-A
    (0xFE70, 0xFEFF),  # Presentation Forms-B
)
HEBREW_RANGES: Ranges = ((0x0590, 0x05FF),)
INDIC_RANGES: Ranges = (
    (0x0900, 0x097F),  # Devanagari
    (0x0980, 0x09FF),  # Bengali
    (0x0A00, 0x0A7F),  # Gurmukhi
    (0x0A80, 0x0AFF),  # Gujarati
)
THAI_RANGES: Ranges = ((0x0E00, 0x0E7F),)
GEORGIAN_RANGES: Ranges = ((0x10A0, 0x10FF),)
COMPLEX_RANGES: Ranges = (
    CJK_RANGES + ARABIC_RANGES + HEBREW_RANGES + INDIC_RANGES + THAI_RANGES + GEORGIAN_RANGES
)

# Full-width blocks for heuristic widths (wider than CJK_RANGES)
FULLWIDTH_RANGES: Ranges = (
    (0x1100, 0x11FF),  # Hangul Jamo
    (0x2E80, 0x2FDF),  # CJK Radicals
    (0x3000, 0x303F),  # CJK Symbols and Punctuation
    (0x3040, 0x309F),  # Hiragana
    (0x30A0, 0x30FF),  # Katakana
    (0x3100, 0x312F),  # Bopomofo
    (0x3130, 0x318F),  # Hangul Compatibility Jamo
    (0x3200, 0x32FF),  # Enclosed CJK Letters
    (0x3400, 0x4DBF),  # CJK Extension A
    (0x4E00, 0x9FFF),  # CJK Unified Ideographs
    (0xAC00, 0xD7AF),  # Hangul Syllables
    (0xF900, 0xFAFF),  # CJK Compatibility Ideographs
    (0xFE30, 0xFE4F),  # CJK Compatibility Forms
    (0xFF00, 0xFFEF),  # Halfwidth and Fullwidth Forms
    (0x20000, 0x2A6DF),  # CJK Extension B
    (0x2A700, 0x2B73F),  # CJK Extension C
    (0x2B740, 0x2B81F),  # CJK Extension D
    (0x2B820, 0x2CEAF),  # CJK Extension E
)

EMOJI_RANGES: Ranges = (
    (0x1F000, 0x1FFFF),  # Emoji, pictographs, regional indicators, skin tones
    (0x2600, 0x26FF),  # Miscellaneous Symbols
    (0x2700, 0x27BF),  # Dingbats
)
# Code points that only occur inside compound emoji sequences
EMOJI_SEQUENCE_MARKERS: Ranges = (
    (0xFE0F, 0xFE0F),  # emoji presentation selector
    (0x20E3, 0x20E3),  # combining enclosing keycap
    (0xE0020, 0xE007F),  # tag characters (subdivision flags)
)
# Heuristic width table treats all variation selectors as emoji-width
EMOJI_WIDTH_RANGES: Ranges = EMOJI_RANGES + ((0xFE00, 0xFE0F),)

GREEK_RANGES: Ranges = ((0x0370, 0x03FF),)
CYRILLIC_RANGES: Ranges = (
    (0x0400, 0x04FF),  # Cyrillic
    (0x0500, 0x052F),  # Cyrillic Supplement
)


def in_ranges(cp: int, ranges: Ranges) -> bool:
    """True if code point cp falls in any (lo, hi) inclusive range."""
    for lo, hi in ranges:
        if lo <= cp <= hi:
            return True
    return False


def _any_in(text: str, ranges: Ranges) -> bool:
    return any(in_ranges(ord(ch), ranges) for ch in text)


def has_complex_script(text: str) -> bool:
    return _any_in(text, COMPLEX_RANGES)


def has_cjk(text: str) -> bool:
    return _any_in(text, CJK_RANGES)


def has_emoji(text: str) -> bool:
    """
    True for any emoji-block code point or compound-emoji marker.
    ZWJ alone does not count: Arabic and Indic text use it outside emoji.
    """
    return _any_in(text, EMOJI_RANGES) or _any_in(text, EMOJI_SEQUENCE_MARKERS)


def count_ascii_digits(text: str) -> int:
    return sum(1 for ch in text if "0" <= ch <= "9")


def classify(text: str) -> ScriptProfile:
    """
    Build the ScriptProfile for text. Pure and total: empty text gives the
    neutral profile with the default safety margin.
    """
    if not text:
        return ScriptProfile()
    complex_script = has_complex_script(text)
    digits = count_ascii_digits(text)
    return ScriptProfile(
        has_complex_script=complex_script,
        has_cjk=has_cjk(text),
        has_emoji=has_emoji(text),
        has_many_digits=digits > MANY_DIGITS_THRESHOLD,
        is_long=len(text) > LONG_TEXT_MIN_CHARS,
        digit_count=digits,
        recommended_safety_margin=SAFETY_MARGIN_COMPLEX if complex_script else SAFETY_MARGIN_DEFAULT,
    )
