# fitsvg/core/fonts.py
"""
Font handle and process-wide font provider.
FontHandle wraps one parsed font: fontTools for metrics, cmap and advances;
Pillow for glyph bounding boxes at a pixel size.
FontProvider loads a font source once, memoizes the handle (or the unavailable
state) and only reloads on an explicit replace().
"""

from __future__ import annotations

import base64
import functools
import logging
import re
import threading
import unicodedata
from io import BytesIO
from pathlib import Path
from typing import Literal

import requests
from fontTools.ttLib import TTFont
from PIL import ImageFont

from fitsvg.core.config import DEFAULT_FONT_SOURCE, FONT_CSS_USER_AGENT, HTTP_TIMEOUT_S, PIL_FONT_CACHE_SIZE
from fitsvg.core.error_codes import FONT_UNAVAILABLE

logger = logging.getLogger(__name__)

FontSource = str | bytes

_CSS_URL_RE = re.compile(r"url\(([^)]+)\)")
_MAX_PATH_LEN = 1024


class FontHandle:
    """Queryable metrics of one parsed TrueType/OpenType font."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        tt = TTFont(BytesIO(data))
        self.units_per_em: int = int(tt["head"].unitsPerEm)
        self.ascender: int = int(tt["hhea"].ascent)
        self.descender: int = int(tt["hhea"].descent)
        self.family_name: str = tt["name"].getBestFamilyName() or "Unknown"
        self._cmap: dict[int, str] = tt.getBestCmap() or {}
        self._advances: dict[str, int] = {name: adv for name, (adv, _lsb) in tt["hmtx"].metrics.items()}
        # At most PIL_FONT_CACHE_SIZE pixel sizes kept per handle
        self._pil_font = functools.lru_cache(maxsize=PIL_FONT_CACHE_SIZE)(self._load_pil_font)

    def _load_pil_font(self, size_px: int) -> ImageFont.FreeTypeFont:
        return ImageFont.truetype(BytesIO(self._data), size=size_px)

    def advance_width(self, text: str, font_size: float) -> float:
        """Sum of glyph advances (px) from hmtx; unmapped code points use .notdef."""
        notdef = self._advances.get(".notdef", 0)
        units = 0
        for ch in text:
            glyph = self._cmap.get(ord(ch))
            units += self._advances.get(glyph, notdef) if glyph else notdef
        return units * font_size / self.units_per_em

    def bounding_box(self, text: str, font_size: float) -> tuple[float, float, float, float]:
        """
        Tight ink box (left, top, right, bottom) in px, origin at the left/ascender anchor.
        Pillow rasterizes at integer sizes; the box is rescaled to font_size.
        """
        size_px = max(1, int(round(font_size)))
        left, top, right, bottom = self._pil_font(size_px).getbbox(text)
        scale = font_size / size_px
        return (left * scale, top * scale, right * scale, bottom * scale)

    def supports(self, text: str) -> bool:
        """True if every visible code point has a glyph in the cmap."""
        for ch in text:
            if ch.isspace() or unicodedata.category(ch) in ("Cf", "Mn"):
                continue
            if ord(ch) not in self._cmap:
                return False
        return True


def _fetch_font_url(url: str) -> bytes:
    """GET a font file; stylesheet responses are followed to their first url(...)."""
    headers = {"User-Agent": FONT_CSS_USER_AGENT}
    resp = requests.get(url, headers=headers, timeout=HTTP_TIMEOUT_S)
    resp.raise_for_status()
    if "text/css" in resp.headers.get("Content-Type", ""):
        match = _CSS_URL_RE.search(resp.text)
        if not match:
            raise ValueError(f"No font URL found in stylesheet: {url}")
        font_url = match.group(1).strip().strip("'\"")
        resp = requests.get(font_url, headers=headers, timeout=HTTP_TIMEOUT_S)
        resp.raise_for_status()
    return resp.content


def read_font_source(source: FontSource) -> bytes:
    """
    Resolve a font source to raw bytes: http(s) URL, data URI, file path,
    raw base64 text, or bytes. Raises on fetch/decode failure.
    """
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    s = source.strip()
    if s.startswith(("http://", "https://")):
        return _fetch_font_url(s)
    if s.startswith("data:"):
        header, _, payload = s.partition(",")
        if ";base64" not in header:
            raise ValueError("Font data URI must be base64-encoded")
        return base64.b64decode(payload, validate=True)
    if len(s) < _MAX_PATH_LEN and "\n" not in s and Path(s).is_file():
        return Path(s).read_bytes()
    return base64.b64decode(s, validate=True)


def load_font_source(source: FontSource) -> FontHandle | None:
    """Load and parse a font; None if it cannot be fetched or parsed. Never raises."""
    try:
        handle = FontHandle(read_font_source(source))
    except Exception as e:
        logger.warning(f"{FONT_UNAVAILABLE}: {type(e).__name__}: {e}")
        return None
    logger.info(f"Font loaded: {handle.family_name}")
    return handle


ProviderState = Literal["uninitialized", "loaded", "unavailable"]


class FontProvider:
    """
    Lazily loaded, process-wide font handle.
    First get() loads the configured source; later calls see the same handle or
    the same unavailable state until replace() or reset().
    """

    def __init__(self, source: FontSource | None = None) -> None:
        self._source = source
        self._handle: FontHandle | None = None
        self._state: ProviderState = "uninitialized"
        self._lock = threading.Lock()

    @property
    def state(self) -> ProviderState:
        return self._state

    @property
    def source(self) -> FontSource | None:
        return self._source

    def _load(self) -> None:
        self._handle = load_font_source(self._source) if self._source else None
        self._state = "loaded" if self._handle is not None else "unavailable"

    def get(self) -> FontHandle | None:
        if self._state == "uninitialized":
            with self._lock:
                if self._state == "uninitialized":
                    self._load()
        return self._handle

    def replace(self, source: FontSource | None) -> FontHandle | None:
        """Load a new source now; last writer wins."""
        with self._lock:
            self._source = source
            self._load()
        return self._handle

    def reset(self) -> None:
        with self._lock:
            self._handle = None
            self._state = "uninitialized"


_provider: FontProvider | None = None
_provider_lock = threading.Lock()


def get_font_provider() -> FontProvider:
    """Process-wide provider for DEFAULT_FONT_SOURCE (FITSVG_FONT_SOURCE)."""
    global _provider
    if _provider is None:
        with _provider_lock:
            if _provider is None:
                _provider = FontProvider(DEFAULT_FONT_SOURCE)
    return _provider
