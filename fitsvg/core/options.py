# fitsvg/core/options.py
"""
Parse request options (JSON text, bytes, or a mapping of JSON / form-style
values) into RenderOptions. Bad individual fields fall back to defaults;
only an unparseable payload raises InvalidOptionsError. Unknown keys are ignored.
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Mapping
from typing import Any

from fitsvg.core.config import (
    BADGE_CANVAS,
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_BADGE_FONT_FAMILY,
    DEFAULT_FONT_FAMILY,
    DEFAULT_GRADIENT_END,
    DEFAULT_GRADIENT_START,
    DEFAULT_TEXT,
    DEFAULT_TEXT_COLOR,
    GENERIC_CANVAS,
    MAX_FONT_SIZE,
    MAX_FONT_SIZE_LIMIT,
    MIN_FONT_SIZE,
)
from fitsvg.core.error_codes import InvalidOptionsError
from fitsvg.core.types import Color, RenderOptions, StyleMode

_LEADING_NUMBER_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?)")
_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


def _as_mapping(raw: Any) -> dict[str, Any]:
    if raw is None:
        return {}
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidOptionsError(f"Options are not UTF-8: {e}") from e
    if isinstance(raw, str):
        if not raw.strip():
            return {}
        try:
            raw = json.loads(raw)
        except ValueError as e:
            raise InvalidOptionsError(f"Options are not valid JSON: {e}") from e
    if not isinstance(raw, Mapping):
        raise InvalidOptionsError(f"Options must be an object, got {type(raw).__name__}")
    return dict(raw)


def _number(value: Any) -> float | None:
    """Numbers and form strings ('300', '300px', '12.5'); None if not a finite number."""
    if isinstance(value, bool) or value is None:
        return None
    n: float | None = None
    if isinstance(value, (int, float)):
        try:
            n = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        m = _LEADING_NUMBER_RE.match(value)
        if m:
            n = float(m.group(1))
    if n is None or not math.isfinite(n):
        return None
    return n


def _positive_int(value: Any, default: int | None, limit: int | None = None) -> int | None:
    n = _number(value)
    if n is None or n <= 0:
        return default
    if limit is not None:
        n = min(n, limit)
    return int(n)


def _bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        v = value.strip().lower()
        if v in _TRUE:
            return True
        if v in _FALSE:
            return False
    return default


def _color(value: Any, default: Color) -> Color:
    """RGBA list/tuple, JSON-encoded list, or CSS color string."""
    if isinstance(value, str):
        s = value.strip()
        if s.startswith("["):
            try:
                value = json.loads(s)
            except ValueError:
                return default
        elif s:
            return s
        else:
            return default
    if isinstance(value, (list, tuple)) and len(value) >= 3:
        channels = [_number(c) for c in value[:4]]
        if any(c is None for c in channels):
            return default
        r, g, b = (max(0, min(255, int(c))) for c in channels[:3])
        a = max(0.0, min(1.0, channels[3])) if len(channels) > 3 else 1.0
        return (r, g, b, a)
    return default


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def join_surrogates(text: str) -> str:
    """Combine UTF-16 surrogate pairs left in a str (e.g. from form decoding) into code points."""
    if not any("\ud800" <= ch <= "\udfff" for ch in text):
        return text
    return text.encode("utf-16", "surrogatepass").decode("utf-16", "replace")


def _style(opts: Mapping[str, Any]) -> StyleMode:
    style = opts.get("style")
    if isinstance(style, str) and style.strip().lower() in ("badge", "generic"):
        return style.strip().lower()  # type: ignore[return-value]
    if "badgeStyle" in opts:
        return "badge" if _bool(opts["badgeStyle"], False) else "generic"
    return "generic"


def parse_options(raw: Any) -> RenderOptions:
    """Normalize raw request options into RenderOptions with documented defaults."""
    opts = _as_mapping(raw)
    style = _style(opts)
    default_w, default_h = BADGE_CANVAS if style == "badge" else GENERIC_CANVAS

    text = opts.get("text")
    text = DEFAULT_TEXT if text is None else join_surrogates(str(text))

    family = _optional_str(opts.get("fontFamily"))
    if family is None:
        family = DEFAULT_BADGE_FONT_FAMILY if style == "badge" else DEFAULT_FONT_FAMILY

    max_text_width = _number(opts.get("maxTextWidth"))

    return RenderOptions(
        text=text,
        width=_positive_int(opts.get("width"), default_w),
        height=_positive_int(opts.get("height"), default_h),
        style=style,
        text_color=_color(opts.get("textColor"), DEFAULT_TEXT_COLOR),
        background_color=_color(opts.get("backgroundColor"), DEFAULT_BACKGROUND_COLOR),
        gradient_start=_color(opts.get("gradientStart"), DEFAULT_GRADIENT_START),
        gradient_end=_color(opts.get("gradientEnd"), DEFAULT_GRADIENT_END),
        use_gradient=_bool(opts.get("useGradient"), True),
        background_image_url=_optional_str(opts.get("backgroundImageUrl")),
        text_x=_number(opts.get("textX")),
        text_y=_number(opts.get("textY")),
        max_text_width=max_text_width if max_text_width and max_text_width > 0 else None,
        font_size=_positive_int(opts.get("fontSize"), None, MAX_FONT_SIZE_LIMIT),
        auto_font_size=_bool(opts.get("autoFontSize"), True),
        min_font_size=_positive_int(opts.get("minFontSize"), MIN_FONT_SIZE, MAX_FONT_SIZE_LIMIT),
        max_font_size=_positive_int(opts.get("maxFontSize"), MAX_FONT_SIZE, MAX_FONT_SIZE_LIMIT),
        font_family=family,
        font_base64=_optional_str(opts.get("fontBase64")),
        font_source=_optional_str(opts.get("fontSource")),
    )
