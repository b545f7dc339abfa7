"""
Script/language classification of arbitrary input strings.

``classify`` is a pure function: it holds no state, needs no dictionary, and
returns one of the four ``ClassificationResult`` members for any input.
"""

from __future__ import annotations

import re
from enum import Enum

from zhdict.data import CJK_RANGES, ENGLISH_PUNCTUATION
from zhdict.pinyin import is_pinyin_token


class ClassificationResult(Enum):
    """What kind of text a string is."""

    PY = "PY"  # Pinyin
    EN = "EN"  # English
    ZH = "ZH"  # Chinese characters
    UN = "UN"  # Uncertain


# ════════════════════════════════════════════════════════════════════════════════
# COMPILED REGEX PATTERNS
# ════════════════════════════════════════════════════════════════════════════════

_CJK_PATTERN = re.compile("[" + "".join(f"{chr(start)}-{chr(end)}" for start, end in CJK_RANGES) + "]")


def contains_cjk(text: str) -> bool:
    return _CJK_PATTERN.search(text) is not None


def _is_english_char(ch: str) -> bool:
    return ch.isascii() and (ch.isalnum() or ch.isspace() or ch in ENGLISH_PUNCTUATION)


def classify(text: str) -> ClassificationResult:
    """
    Classify a string as Pinyin, English, Chinese characters, or uncertain.

    Checks, in order, on the trimmed text:
    1. empty -> UN
    2. any CJK ideograph anywhere -> ZH (so mixed "红色favorite" is ZH)
    3. every whitespace-separated token reads as pinyin syllables -> PY
    4. only ASCII letters, digits, whitespace and punctuation -> EN
    5. anything else -> UN

    Examples:
        classify("你好")        # ZH
        classify("nǐ hǎo")      # PY
        classify("fan2ti3zi4")  # PY
        classify("hello")       # EN
    """
    stripped = text.strip()
    if not stripped:
        return ClassificationResult.UN

    if contains_cjk(stripped):
        return ClassificationResult.ZH

    if all(is_pinyin_token(token) for token in stripped.split()):
        return ClassificationResult.PY

    if all(_is_english_char(ch) for ch in stripped):
        return ClassificationResult.EN

    return ClassificationResult.UN
