# fitsvg/core/render_svg.py
"""
Serialize a Scene as a self-contained SVG document: optional metrics comments,
gradient and @font-face definitions, background, and the text element.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET

from fitsvg.core.config import GRADIENT_ID
from fitsvg.core.types import Background, FontFace, Scene, TextRun

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

# Code points XML 1.0 cannot carry, even escaped
_XML_ILLEGAL_RE = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def _fmt(value: float) -> str:
    """Compact number: integers without decimals, otherwise up to 2 places."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")


def xml_safe(text: str) -> str:
    return _XML_ILLEGAL_RE.sub("", text)


def _comment_text(text: str) -> str:
    # "--" is not allowed inside XML comments
    return " " + xml_safe(text).replace("--", "- -") + " "


def font_face_css(face: FontFace) -> str:
    return (
        f"@font-face {{ font-family: '{face.family}'; "
        f"src: url(data:{face.mime_type};base64,{face.data_base64}) format('{face.format}'); }}"
    )


def _add_background(root: ET.Element, defs: ET.Element, bg: Background, width: int, height: int) -> None:
    if bg.kind == "image" and bg.href:
        ET.SubElement(
            root,
            "image",
            {
                "href": bg.href,
                "xlink:href": bg.href,
                "x": "0",
                "y": "0",
                "width": str(width),
                "height": str(height),
                "preserveAspectRatio": "xMidYMid slice",
            },
        )
        return

    rect_attrs = {"width": str(width), "height": str(height), "rx": str(bg.corner_radius)}
    if bg.kind == "gradient" and bg.stops:
        grad = ET.SubElement(
            defs,
            "linearGradient",
            {"id": GRADIENT_ID, "x1": "0%", "y1": "0%", "x2": "100%", "y2": "100%"},
        )
        start, end = bg.stops
        ET.SubElement(grad, "stop", {"offset": "0%", "style": f"stop-color:{xml_safe(start)};stop-opacity:1"})
        ET.SubElement(grad, "stop", {"offset": "100%", "style": f"stop-color:{xml_safe(end)};stop-opacity:1"})
        rect_attrs["fill"] = f"url(#{GRADIENT_ID})"
    else:
        rect_attrs["fill"] = xml_safe(bg.fill)
    ET.SubElement(root, "rect", rect_attrs)


def _add_text(root: ET.Element, run: TextRun) -> None:
    attrs = {
        "x": _fmt(run.x),
        "y": _fmt(run.y),
        "font-family": xml_safe(run.font_family),
        "font-size": str(run.font_size),
        "fill": xml_safe(run.fill),
        "text-anchor": run.text_anchor,
        "dominant-baseline": run.baseline,
    }
    if run.font_weight:
        attrs["font-weight"] = run.font_weight
    if run.style:
        attrs["style"] = run.style
    el = ET.SubElement(root, "text", attrs)
    el.text = xml_safe(run.text)


def scene_to_svg(scene: Scene) -> str:
    """
    Build the SVG document as text. ElementTree escapes the user text.
    Uses plain tag names with xmlns set once so the output has no ns0: prefixes.
    """
    root = ET.Element(
        "svg",
        {
            "xmlns": SVG_NS,
            "xmlns:xlink": XLINK_NS,
            "width": str(scene.width),
            "height": str(scene.height),
            "viewBox": f"0 0 {scene.width} {scene.height}",
        },
    )
    for note in scene.annotations:
        root.append(ET.Comment(_comment_text(note)))

    defs = ET.SubElement(root, "defs")
    if scene.font_face is not None:
        style = ET.SubElement(defs, "style", {"type": "text/css"})
        style.text = xml_safe(font_face_css(scene.font_face))

    _add_background(root, defs, scene.background, scene.width, scene.height)
    _add_text(root, scene.text_run)

    if len(defs) == 0:
        root.remove(defs)
    return XML_DECLARATION + ET.tostring(root, encoding="unicode", method="xml")


def scene_to_bytes(scene: Scene) -> bytes:
    return scene_to_svg(scene).encode("utf-8")
