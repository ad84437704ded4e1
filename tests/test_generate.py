# tests/test_generate.py
"""
End-to-end render: SVG structure, style modes, background fallback,
embedded fonts, and error surfacing. No network: requests.get is monkeypatched.
"""

from __future__ import annotations

import base64
import xml.etree.ElementTree as ET

import pytest

from fitsvg.core import generate as generate_mod
from fitsvg.core import images
from fitsvg.core.error_codes import InvalidOptionsError, RenderError
from fitsvg.core.generate import generate, generate_data_uri, render_scene
from fitsvg.core.options import parse_options

NS = "{http://www.w3.org/2000/svg}"


def _parse(data: bytes) -> ET.Element:
    assert data.startswith(b'<?xml version="1.0" encoding="UTF-8"?>')
    return ET.fromstring(data)


def test_generate_default_document(no_font_provider) -> None:
    root = _parse(generate({"text": "Hello"}, provider=no_font_provider))
    assert root.tag == f"{NS}svg"
    assert root.get("width") == "800"
    assert root.get("height") == "600"
    text = root.find(f"{NS}text")
    assert text is not None
    assert text.text == "Hello"
    assert text.get("font-size") == "100"
    assert text.get("text-anchor") == "middle"
    assert text.get("dominant-baseline") == "central"
    rect = root.find(f"{NS}rect")
    assert rect.get("fill") == "url(#bg-gradient)"
    assert root.find(f"{NS}defs/{NS}linearGradient") is not None


def test_generate_metrics_comments(no_font_provider) -> None:
    svg = generate({"text": "Hello"}, provider=no_font_provider).decode("utf-8")
    assert "<!-- Text metrics:" in svg
    assert "font=fallback" in svg
    assert "accurate=false" in svg


def test_generate_escapes_text(no_font_provider) -> None:
    root = _parse(generate({"text": "<b>Tom & Jerry</b>"}, provider=no_font_provider))
    assert root.find(f"{NS}text").text == "<b>Tom & Jerry</b>"


def test_generate_badge_style(no_font_provider) -> None:
    root = _parse(generate({"text": "vitalik.eth", "style": "badge"}, provider=no_font_provider))
    assert root.get("width") == "270"
    assert root.find(f"{NS}rect").get("rx") == "20"
    text = root.find(f"{NS}text")
    assert text.get("font-weight") == "700"
    assert text.get("dominant-baseline") == "alphabetic"
    assert float(text.get("y")) == pytest.approx(270 * 0.85)


def test_generate_flat_background(no_font_provider) -> None:
    root = _parse(generate(
        {"text": "Hi", "useGradient": False, "backgroundColor": [10, 20, 30, 1]},
        provider=no_font_provider,
    ))
    assert root.find(f"{NS}rect").get("fill") == "rgb(10, 20, 30)"
    assert root.find(f"{NS}defs") is None


def test_generate_explicit_position_and_fixed_size(no_font_provider) -> None:
    root = _parse(generate(
        {"text": "Hi", "textX": 40, "textY": 70, "autoFontSize": False, "fontSize": 30},
        provider=no_font_provider,
    ))
    text = root.find(f"{NS}text")
    assert text.get("x") == "40"
    assert text.get("y") == "70"
    assert text.get("font-size") == "30"


def test_generate_cjk_fits_narrower_area(no_font_provider) -> None:
    scene = render_scene(parse_options({"text": "你好世界"}), no_font_provider)
    # text area 480 * 0.85 safety = 408; 4.56 em per size
    assert scene.text_run.font_size == 89
    assert scene.warnings == []


def test_generate_background_image_failure_falls_back(no_font_provider, monkeypatch) -> None:
    def boom(url, timeout=None):
        raise images.requests.ConnectionError("unreachable")

    monkeypatch.setattr(images.requests, "get", boom)
    root = _parse(generate(
        {"text": "Hi", "backgroundImageUrl": "https://example.com/bg.png"},
        provider=no_font_provider,
    ))
    assert root.find(f"{NS}image") is None
    assert root.find(f"{NS}rect") is not None


def test_generate_background_image_non_success_falls_back(no_font_provider, monkeypatch) -> None:
    class _Resp:
        ok = False
        status_code = 404
        headers: dict = {}
        content = b""

    monkeypatch.setattr(images.requests, "get", lambda url, timeout=None: _Resp())
    root = _parse(generate(
        {"text": "Hi", "backgroundImageUrl": "https://example.com/missing.png"},
        provider=no_font_provider,
    ))
    assert root.find(f"{NS}image") is None


def test_generate_background_image_embedded(no_font_provider, monkeypatch) -> None:
    class _Resp:
        ok = True
        status_code = 200
        headers = {"Content-Type": "image/jpeg; charset=binary"}
        content = b"\xff\xd8\xff"

    monkeypatch.setattr(images.requests, "get", lambda url, timeout=None: _Resp())
    root = _parse(generate(
        {"text": "Hi", "backgroundImageUrl": "https://example.com/bg.jpg"},
        provider=no_font_provider,
    ))
    image = root.find(f"{NS}image")
    assert image is not None
    assert image.get("href") == "data:image/jpeg;base64," + base64.b64encode(b"\xff\xd8\xff").decode("ascii")
    assert image.get("preserveAspectRatio") == "xMidYMid slice"


def test_generate_embedded_font_declared_even_if_unparseable(no_font_provider) -> None:
    svg = generate(
        {"text": "Hi", "fontFamily": "Satoshi", "fontBase64": "AAAA"},
        provider=no_font_provider,
    ).decode("utf-8")
    assert "@font-face" in svg
    assert "font-family: 'Satoshi'" in svg
    assert no_font_provider.state == "unavailable"


def test_generate_embedded_real_font_used_for_measurement(no_font_provider, system_font_path) -> None:
    payload = base64.b64encode(system_font_path.read_bytes()).decode("ascii")
    svg = generate({"text": "Hello", "fontBase64": payload}, provider=no_font_provider).decode("utf-8")
    assert no_font_provider.state == "loaded"
    assert "accurate=true" in svg


def test_generate_invalid_payload_raises(no_font_provider) -> None:
    with pytest.raises(InvalidOptionsError):
        generate("{broken", provider=no_font_provider)


def test_generate_unexpected_failure_raises_render_error(no_font_provider, monkeypatch) -> None:
    def broken(*args, **kwargs):
        raise ValueError("bad scene")

    monkeypatch.setattr(generate_mod, "compose", broken)
    with pytest.raises(RenderError) as exc_info:
        generate({"text": "Hi"}, provider=no_font_provider)
    assert "bad scene" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, ValueError)


def test_generate_data_uri(no_font_provider) -> None:
    uri = generate_data_uri({"text": "Hi"}, provider=no_font_provider)
    assert uri.startswith("data:image/svg+xml;base64,")
    decoded = base64.b64decode(uri.split(",", 1)[1])
    assert b"<svg" in decoded


def test_generate_empty_text_renders(no_font_provider) -> None:
    root = _parse(generate({"text": ""}, provider=no_font_provider))
    assert root.find(f"{NS}text").get("font-size") == "48"


def test_generate_strips_xml_illegal_characters(no_font_provider) -> None:
    root = _parse(generate(
        {"text": "a\x01b\x0bc\x1f", "fontFamily": "Odd\x00Font", "backgroundColor": "red\x08"},
        provider=no_font_provider,
    ))
    text = root.find(f"{NS}text")
    assert text.text == "abc"
    assert text.get("font-family").startswith("OddFont")


def test_generate_keeps_tabs_and_newlines(no_font_provider) -> None:
    root = _parse(generate({"text": "a\tb"}, provider=no_font_provider))
    assert root.find(f"{NS}text").text == "a\tb"


def test_generate_oversized_font_range_is_bounded(no_font_provider) -> None:
    scene = render_scene(parse_options({"text": "x" * 200, "maxFontSize": 300_000}), no_font_provider)
    assert scene.text_run.font_size == 12
