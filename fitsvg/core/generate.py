# fitsvg/core/generate.py
"""
Render entry point: options -> classify -> measure/fit -> compose -> SVG bytes.
Recoverable failures (font, measurement, background image) degrade silently;
anything else surfaces as RenderError with no partial output.
"""

from __future__ import annotations

import base64
import logging
from typing import Any

from fitsvg.core.config import DEFAULT_FONT_SIZE
from fitsvg.core.error_codes import RenderError
from fitsvg.core.fitting import fit_font_size, fits_within
from fitsvg.core.fonts import FontHandle, FontProvider, get_font_provider
from fitsvg.core.images import background_image_href
from fitsvg.core.layout import build_background, build_layout_spec, compose
from fitsvg.core.options import parse_options
from fitsvg.core.render_svg import scene_to_bytes
from fitsvg.core.scripts import classify
from fitsvg.core.text_metrics import measure
from fitsvg.core.types import FitResult, FontFace, RenderOptions, Scene

logger = logging.getLogger(__name__)

# Leading base64 of each font container's magic bytes -> (mime type, CSS format)
_FONT_SIGNATURES: tuple[tuple[str, str, str], ...] = (
    ("d09GMg", "font/woff2", "woff2"),
    ("d09GRg", "font/woff", "woff"),
    ("T1RUTw", "font/otf", "opentype"),
)


def _strip_data_uri(payload: str) -> str:
    if payload.startswith("data:"):
        return payload.partition(",")[2]
    return payload


def font_face_for(options: RenderOptions) -> FontFace | None:
    """@font-face declaration for an embedded font payload, if one was supplied."""
    if not options.font_base64:
        return None
    data = _strip_data_uri(options.font_base64).strip()
    for prefix, mime, fmt in _FONT_SIGNATURES:
        if data.startswith(prefix):
            return FontFace(family=options.font_family, data_base64=data, mime_type=mime, format=fmt)
    return FontFace(family=options.font_family, data_base64=data)


def resolve_font(options: RenderOptions, provider: FontProvider) -> FontHandle | None:
    """Provider's handle; a new embedded payload or source replaces the current font first."""
    source = options.font_base64 or options.font_source
    if source and source != provider.source:
        provider.replace(source)
    return provider.get()


def render_scene(options: RenderOptions, provider: FontProvider | None = None) -> Scene:
    provider = provider or get_font_provider()
    text = options.text
    profile = classify(text)
    layout = build_layout_spec(options, profile)
    font = resolve_font(options, provider)

    if options.auto_font_size and text.strip():
        fit = fit_font_size(
            text,
            layout.text_area_width,
            layout.text_area_height,
            min_font_size=options.min_font_size,
            max_font_size=options.max_font_size,
            font_family=options.font_family,
            font=font,
        )
        logger.info(
            f"Auto-calculated font size: {fit.font_size}px for text {text[:50]!r} "
            f"({'font' if fit.metrics.is_accurate else 'fallback'} measurement)"
        )
    else:
        size = options.font_size or DEFAULT_FONT_SIZE
        metrics = measure(text, size, options.font_family, font=font, profile=profile)
        safe_width = layout.text_area_width * (1.0 - profile.recommended_safety_margin)
        fit = FitResult(
            font_size=size,
            metrics=metrics,
            profile=profile,
            fits=fits_within(metrics, safe_width, layout.text_area_height),
        )

    background = build_background(options, background_image_href(options.background_image_url))
    return compose(text, fit, layout, options, background, font_face_for(options))


def generate(raw_options: Any = None, provider: FontProvider | None = None) -> bytes:
    """
    Render options (mapping, JSON text or bytes) to UTF-8 SVG bytes.
    Raises InvalidOptionsError for an unparseable payload, RenderError otherwise.
    """
    options = parse_options(raw_options)
    try:
        return scene_to_bytes(render_scene(options, provider))
    except Exception as e:
        logger.error(f"Error generating image: {type(e).__name__}: {e}")
        raise RenderError(f"Image generation failed: {type(e).__name__}: {e}") from e


def generate_data_uri(raw_options: Any = None, provider: FontProvider | None = None) -> str:
    data = generate(raw_options, provider)
    return f"data:image/svg+xml;base64,{base64.b64encode(data).decode('ascii')}"
