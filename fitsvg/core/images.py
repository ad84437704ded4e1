# fitsvg/core/images.py
"""
Background image provider: fetch a URL and return an embeddable data URI.
Per request, not memoized. Failures return None so the caller keeps the default fill.
"""

from __future__ import annotations

import base64
import logging

import requests

from fitsvg.core.config import HTTP_TIMEOUT_S
from fitsvg.core.error_codes import BACKGROUND_UNAVAILABLE

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_TYPE = "image/png"


def fetch_image(url: str, timeout_s: float = HTTP_TIMEOUT_S) -> tuple[bytes, str] | None:
    """Return (bytes, content_type) or None on network error / non-2xx status."""
    try:
        resp = requests.get(url, timeout=timeout_s)
    except requests.RequestException as e:
        logger.warning(f"{BACKGROUND_UNAVAILABLE}: {url}: {type(e).__name__}: {e}")
        return None
    if not resp.ok:
        logger.warning(f"{BACKGROUND_UNAVAILABLE}: {url}: HTTP {resp.status_code}")
        return None
    content_type = resp.headers.get("Content-Type", DEFAULT_IMAGE_TYPE).split(";")[0].strip()
    return resp.content, content_type or DEFAULT_IMAGE_TYPE


def to_data_uri(data: bytes, content_type: str) -> str:
    return f"data:{content_type};base64,{base64.b64encode(data).decode('ascii')}"


def background_image_href(url: str | None) -> str | None:
    """Embeddable href for url. data: URIs pass through untouched."""
    if not url:
        return None
    if url.startswith("data:"):
        return url
    fetched = fetch_image(url)
    if fetched is None:
        return None
    data, content_type = fetched
    return to_data_uri(data, content_type)
