# fitsvg/core/config.py
"""
Central configuration for text measurement, font-size fitting and SVG layout.
All tunable values live here; no magic numbers in other modules.
"""

from __future__ import annotations
import os

# ----- Environment -----
DEFAULT_FONT_SOURCE: str | None = os.environ.get("FITSVG_FONT_SOURCE") or None
"""Font source (URL, data URI, base64 or path) loaded lazily by the font provider. None = heuristic only."""

HTTP_TIMEOUT_S: float = float(os.environ.get("FITSVG_HTTP_TIMEOUT_S", "10"))
"""Timeout (s) for font and background image fetches."""

DEBUG_COMMENTS: bool = os.environ.get("FITSVG_DEBUG_COMMENTS", "1").lower() in ("1", "true", "yes")
"""Emit metrics/layout comments in generated SVG. Set env FITSVG_DEBUG_COMMENTS=0 to disable."""

# ----- Heuristic character widths (em units, Arial-derived) -----
CHAR_WIDTHS_EM: dict[str, float] = {
    # Latin lowercase
    "a": 0.56, "b": 0.56, "c": 0.5, "d": 0.56, "e": 0.56, "f": 0.28, "g": 0.56, "h": 0.56, "i": 0.22, "j": 0.22,
    "k": 0.5, "l": 0.22, "m": 0.83, "n": 0.56, "o": 0.56, "p": 0.56, "q": 0.56, "r": 0.33, "s": 0.5, "t": 0.28,
    "u": 0.56, "v": 0.5, "w": 0.72, "x": 0.5, "y": 0.5, "z": 0.5,
    # Latin uppercase
    "A": 0.67, "B": 0.67, "C": 0.72, "D": 0.72, "E": 0.67, "F": 0.61, "G": 0.78, "H": 0.72, "I": 0.28, "J": 0.5,
    "K": 0.67, "L": 0.56, "M": 0.83, "N": 0.72, "O": 0.78, "P": 0.67, "Q": 0.78, "R": 0.72, "S": 0.67, "T": 0.61,
    "U": 0.72, "V": 0.67, "W": 0.94, "X": 0.67, "Y": 0.67, "Z": 0.61,
    # Digits (tabular in most fonts)
    "0": 0.56, "1": 0.56, "2": 0.56, "3": 0.56, "4": 0.56, "5": 0.56, "6": 0.56, "7": 0.56, "8": 0.56, "9": 0.56,
    # Punctuation and symbols
    " ": 0.28, ".": 0.28, ",": 0.28, ";": 0.28, ":": 0.28, "!": 0.28, "?": 0.56, "'": 0.19, '"': 0.35, "`": 0.33,
    "-": 0.33, "–": 0.56, "—": 1.0, "_": 0.56, "(": 0.33, ")": 0.33, "[": 0.28, "]": 0.28, "{": 0.33,
    "}": 0.33, "/": 0.28, "\\": 0.28, "|": 0.26, "@": 1.0, "#": 0.56, "$": 0.56, "%": 0.89, "&": 0.67, "*": 0.39,
    "+": 0.58, "=": 0.58, "<": 0.58, ">": 0.58, "^": 0.47, "~": 0.58,
}

FAMILY_METRICS: dict[str, dict[str, float]] = {
    "Arial": {"avg_char": 0.56, "baseline": 0.8, "descent": 0.2},
    "Helvetica": {"avg_char": 0.56, "baseline": 0.8, "descent": 0.2},
    "Times": {"avg_char": 0.5, "baseline": 0.75, "descent": 0.25},
    "Georgia": {"avg_char": 0.52, "baseline": 0.75, "descent": 0.25},
    "Verdana": {"avg_char": 0.6, "baseline": 0.8, "descent": 0.2},
    "Satoshi": {"avg_char": 0.54, "baseline": 0.8, "descent": 0.2},
    "default": {"avg_char": 0.56, "baseline": 0.8, "descent": 0.2},
}
"""Per-family base metrics: average char width (em), ascent and descent ratios."""

FAMILY_WIDTH_CORRECTION: dict[str, float] = {
    "Satoshi": 0.96,
    "Times": 1.02,
}
"""Family-specific width multiplier applied after all other heuristic adjustments."""

MONOSPACE_FAMILIES: tuple[str, ...] = ("Courier",)
"""Families exempt from the digit-run correction."""

# ----- Heuristic script widths (em per character) -----
WIDTH_FULLWIDTH_EM: float = 1.2
WIDTH_EMOJI_EM: float = 1.1
WIDTH_ARABIC_EM: float = 0.65
WIDTH_HEBREW_EM: float = 0.6
WIDTH_INDIC_EM: float = 0.7
WIDTH_THAI_EM: float = 0.8
WIDTH_GEORGIAN_EM: float = 0.65
WIDTH_GREEK_EM: float = 0.6
WIDTH_CYRILLIC_EM: float = 0.58
UNKNOWN_CHAR_FACTOR: float = 1.1
"""Non-ASCII characters outside known blocks: family average * this factor."""

# ----- Heuristic adjustments -----
COMPLEX_SCRIPT_KERNING: float = 0.95
LONG_TEXT_KERNING: float = 0.98
LONG_TEXT_KERNING_MIN_CHARS: int = 20
"""Text longer than this gets LONG_TEXT_KERNING (unless complex-script kerning applies)."""

DIGIT_RUN_CORRECTION: float = 1.08
LIGATURE_PAIRS: frozenset[str] = frozenset({"fi", "fl", "ff"})
LIGATURE_REDUCTION: float = 0.05
"""Width reduction per detected ligature pair."""

LINE_HEIGHT_FACTOR: float = 1.2
"""Heuristic height = font_size * LINE_HEIGHT_FACTOR."""

# ----- Heuristic confidence -----
CONFIDENCE_BASE: float = 0.85
CONFIDENCE_COMPLEX_PENALTY: float = 0.10
CONFIDENCE_SHORT_PENALTY: float = 0.05
CONFIDENCE_SHORT_MAX_CHARS: int = 5
"""Text shorter than this is treated as short (harder to predict)."""
CONFIDENCE_LIGATURE_BONUS: float = 0.05
CONFIDENCE_MIN: float = 0.5
CONFIDENCE_MAX: float = 0.95

# ----- Script classification -----
MANY_DIGITS_THRESHOLD: int = 2
"""More than this many ASCII digits counts as digit-heavy."""

LONG_TEXT_MIN_CHARS: int = 50
"""Text longer than this is classified as long."""

SAFETY_MARGIN_DEFAULT: float = 0.10
SAFETY_MARGIN_COMPLEX: float = 0.15

# ----- Accurate measurement -----
ADVANCE_WIDTH_FLOOR: float = 0.95
"""Accurate width is at least advance_width * this factor."""

DIGIT_PADDING_EM: float = 0.05
"""Per-digit padding (em) for digit-heavy text on the accurate path."""

UNSUPPORTED_SCRIPT_WIDTH_FACTOR: float = 1.5
"""Width penalty when the loaded font cannot render the requested script."""

LATIN_ORIENTED_FAMILIES: tuple[str, ...] = (
    "Arial", "Helvetica", "Times", "Times New Roman", "Georgia", "Verdana", "Satoshi", "Roboto", "Inter",
)
"""Families assumed to lack CJK coverage regardless of cmap."""

# ----- Font-size fitting -----
MIN_FONT_SIZE: int = 12
MAX_FONT_SIZE: int = 100
MAX_FONT_SIZE_LIMIT: int = 1000
"""Hard cap on requested font sizes; bounds the fitter loop and the per-size font cache."""
PIL_FONT_CACHE_SIZE: int = 64
"""Pillow fonts kept per FontHandle, keyed by pixel size."""
DEFAULT_FONT_SIZE: int = 48
"""Used when auto font sizing is off and no explicit size is given."""

# ----- Layout -----
GENERIC_CANVAS: tuple[int, int] = (800, 600)
BADGE_CANVAS: tuple[int, int] = (270, 270)
TEXT_AREA_WIDTH_FRACTION: float = 0.8
TEXT_AREA_WIDTH_FRACTION_COMPLEX: float = 0.6
"""Narrower text area when the text has complex scripts or emoji."""
TEXT_AREA_HEIGHT_FRACTION: float = 0.6
BADGE_BASELINE_FROM_BOTTOM: float = 0.15
"""Badge style: baseline sits this fraction of canvas height above the bottom edge."""
BADGE_CORNER_RADIUS: int = 20
BADGE_FONT_WEIGHT: str = "700"
BADGE_FONT_STACK: str = "-apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif"
BADGE_TEXT_SHADOW: str = "filter: drop-shadow(0px 2px 4px rgba(0,0,0,0.3));"
GENERIC_FONT_STACK: str = "sans-serif"

# ----- Default option values -----
DEFAULT_TEXT: str = "Hello World"
DEFAULT_FONT_FAMILY: str = "Arial"
DEFAULT_BADGE_FONT_FAMILY: str = "Satoshi"
DEFAULT_TEXT_COLOR: tuple[int, int, int, float] = (255, 255, 255, 1)
DEFAULT_BACKGROUND_COLOR: tuple[int, int, int, float] = (255, 255, 255, 1)
DEFAULT_GRADIENT_START: tuple[int, int, int, float] = (102, 126, 234, 1)
DEFAULT_GRADIENT_END: tuple[int, int, int, float] = (118, 75, 162, 1)
GRADIENT_ID: str = "bg-gradient"

# ----- Network -----
FONT_CSS_USER_AGENT: str = (
    "Mozilla/5.0 (Windows NT 6.1; WOW64) AppleWebKit/537.1 (KHTML, like Gecko) Chrome/22.0.1207.1 Safari/537.1"
)
"""Older browser UA so web-font stylesheets serve TTF/WOFF rather than WOFF2."""

# ----- Overflow detection -----
CONTAINMENT_TOLERANCE_PX: float = 0.5
"""Text box may exceed the canvas by this much before it counts as overflow."""
