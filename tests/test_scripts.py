# tests/test_scripts.py
"""Deterministic tests for script classification and safety margins."""

from __future__ import annotations

import pytest

from fitsvg.core.scripts import classify, count_ascii_digits, has_emoji


def test_classify_empty_is_neutral() -> None:
    p = classify("")
    assert not p.has_complex_script
    assert not p.has_emoji
    assert not p.has_many_digits
    assert not p.is_long
    assert p.recommended_safety_margin == pytest.approx(0.10)


def test_classify_latin() -> None:
    p = classify("Hello World")
    assert not p.has_complex_script
    assert not p.has_cjk
    assert not p.needs_high_precision
    assert p.recommended_safety_margin == pytest.approx(0.10)


@pytest.mark.parametrize(
    "text",
    [
        "你好世界",  # CJK ideographs
        "ひらがな",  # Hiragana
        "カタカナ",  # Katakana
        "안녕하세요",  # Hangul
        "مرحبا",  # Arabic
        "ﻣﺮﺣﺒﺎ",  # Arabic presentation forms-B
        "שלום",  # Hebrew
        "नमस्ते",  # Devanagari
        "সালাম",  # Bengali
        "สวัสดี",  # Thai
        "გამარჯობა",  # Georgian
    ],
)
def test_classify_complex_scripts(text: str) -> None:
    p = classify(text)
    assert p.has_complex_script
    assert p.recommended_safety_margin == pytest.approx(0.15)


def test_classify_cjk_flag_only_for_cjk() -> None:
    assert classify("你好").has_cjk
    assert classify("안녕").has_cjk
    assert not classify("مرحبا").has_cjk


@pytest.mark.parametrize("text", ["Привет", "Γειά σου", "café"])
def test_classify_cyrillic_greek_latin1_not_complex(text: str) -> None:
    p = classify(text)
    assert not p.has_complex_script
    assert p.recommended_safety_margin == pytest.approx(0.10)


@pytest.mark.parametrize(
    "text",
    [
        "party 🎉",
        "☀ sunny",  # Misc Symbols
        "✂",  # Dingbats
        "❤️",  # heart + emoji presentation selector
        "1️⃣",  # keycap sequence
        "👍🏽",  # skin tone modifier
        "🇯🇵",  # regional indicator flag
        "👩‍💻",  # ZWJ sequence
    ],
)
def test_classify_emoji(text: str) -> None:
    assert classify(text).has_emoji
    assert has_emoji(text)


def test_zwj_in_indic_text_is_not_emoji() -> None:
    text = "क्‍ष"  # Devanagari conjunct with ZWJ
    p = classify(text)
    assert not p.has_emoji
    assert p.has_complex_script


def test_many_digits_threshold() -> None:
    assert not classify("ab12").has_many_digits
    p = classify("2024")
    assert p.has_many_digits
    assert p.digit_count == 4
    assert count_ascii_digits("a1b2c3") == 3


def test_fullwidth_digits_are_not_ascii_digits() -> None:
    assert count_ascii_digits("１２３") == 0


def test_is_long() -> None:
    assert not classify("a" * 50).is_long
    assert classify("a" * 51).is_long


def test_classify_deterministic() -> None:
    assert classify("Hello 你好 🎉 123") == classify("Hello 你好 🎉 123")
