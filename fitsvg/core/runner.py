# fitsvg/core/runner.py
"""
CLI entrypoint: build options from flags and/or a JSON file, render the SVG,
write it to --out (or stdout with --out -).
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from fitsvg.core.error_codes import InvalidOptionsError, RenderError
from fitsvg.core.generate import generate

# Flag dest -> wire option name
_FLAG_OPTIONS = {
    "text": "text",
    "width": "width",
    "height": "height",
    "style": "style",
    "font_family": "fontFamily",
    "font_size": "fontSize",
    "max_font_size": "maxFontSize",
    "min_font_size": "minFontSize",
    "max_text_width": "maxTextWidth",
    "text_x": "textX",
    "text_y": "textY",
    "background_image_url": "backgroundImageUrl",
    "font_source": "fontSource",
}


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Render text into an SVG at a size that fits the canvas.")
    p.add_argument("--text", type=str, default=None, help="Text to render")
    p.add_argument("--width", type=int, default=None, help="Canvas width (px)")
    p.add_argument("--height", type=int, default=None, help="Canvas height (px)")
    p.add_argument("--style", choices=("generic", "badge"), default=None, help="Layout style")
    p.add_argument("--font-family", type=str, default=None, dest="font_family", help="Font family name")
    p.add_argument("--font-size", type=int, default=None, dest="font_size", help="Fixed font size (disables auto)")
    p.add_argument("--min-font-size", type=int, default=None, dest="min_font_size", help="Smallest size to try")
    p.add_argument("--max-font-size", type=int, default=None, dest="max_font_size", help="Largest size to try")
    p.add_argument("--max-text-width", type=float, default=None, dest="max_text_width", help="Text area width (px)")
    p.add_argument("--text-x", type=float, default=None, dest="text_x", help="Explicit anchor x")
    p.add_argument("--text-y", type=float, default=None, dest="text_y", help="Explicit anchor y")
    p.add_argument("--background-image-url", type=str, default=None, dest="background_image_url",
                   help="Background image URL")
    p.add_argument("--font-source", type=str, default=None, dest="font_source",
                   help="Font URL, data URI, base64 or file path used for measurement")
    p.add_argument("--options-json", type=str, default=None, dest="options_json",
                   help="JSON file with request options; flags override it")
    p.add_argument("--out", type=str, default="out.svg", help="Output path, or '-' for stdout")
    return p.parse_args(argv)


def build_options(args: argparse.Namespace) -> dict:
    """Merge --options-json with explicit flags (flags win)."""
    options: dict = {}
    if args.options_json:
        path = Path(args.options_json)
        if not path.exists():
            raise FileNotFoundError(f"Options file not found: {path}")
        try:
            options = json.loads(path.read_text(encoding="utf-8"))
        except ValueError as e:
            raise InvalidOptionsError(f"Options file is not valid JSON: {path}: {e}") from e
        if not isinstance(options, dict):
            raise InvalidOptionsError(f"Options file must hold a JSON object: {path}")
    for dest, key in _FLAG_OPTIONS.items():
        value = getattr(args, dest)
        if value is not None:
            options[key] = value
    if args.font_size is not None:
        options["autoFontSize"] = False
    return options


def main(argv: list[str] | None = None) -> int:
    log_level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=getattr(logging, log_level_name, logging.INFO))

    args = _parse_args(argv)
    try:
        data = generate(build_options(args))
    except (FileNotFoundError, InvalidOptionsError, RenderError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.out == "-":
        sys.stdout.write(data.decode("utf-8"))
        return 0
    out = Path(args.out)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(data)
    print(out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
