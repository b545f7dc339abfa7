"""
Pinyin syllable splitting and lookup-key normalization.

Pinyin reaches the dictionary in three spellings: tone marks ("nǐ hǎo"), tone
numbers ("ni3 hao3") and no tones at all ("nihao"), with or without spaces
between syllables. The helpers here reduce all of them to comparable keys:

- ``normalize_key``: tone information kept, spacing and case removed
- ``toneless_key``: tone marks and digits stripped as well
- ``split_syllables``: the syllable structure of a single token, used by the
  classifier to decide whether a token is pinyin at all
"""

from __future__ import annotations

import re
import unicodedata
from typing import List, Optional, Tuple

from pypinyin.contrib.tone_convert import to_normal

from zhdict.data import (
    MAX_SYLLABLE_LENGTH,
    PINYIN_SYLLABLES,
    SYLLABLE_SEPARATORS,
    TONE_DIGITS,
    TONE_MARKS,
)

_WHITESPACE_PATTERN = re.compile(r"\s+")
_DIGITS_PATTERN = re.compile(r"\d")
_SEPARATOR_TRANSLATION = str.maketrans("", "", "".join(SYLLABLE_SEPARATORS))


def _canonical(text: str) -> str:
    """NFC, lower-case, and the CEDICT/keyboard spellings of ü ("u:", "v") folded to "ü"."""
    text = unicodedata.normalize("NFC", text).lower()
    return text.replace("u:", "ü").replace("v", "ü")


def _plain_char(ch: str) -> str:
    mapped = TONE_MARKS.get(ch)
    return mapped[0] if mapped else ch


def split_syllables(token: str) -> Optional[Tuple[str, ...]]:
    """
    Split a whitespace-free token into pinyin syllables.

    Each syllable must be in the Mandarin inventory once its tone mark is removed,
    may carry at most one tone mark, and may be followed by a tone digit 1-5 when
    it carries no mark. Apostrophes between syllables are accepted and dropped.

    Returns the syllables as written (lower-cased, marks and digits kept), or None
    when the token cannot be read as pinyin. Longer syllables are preferred, with
    backtracking when the remainder does not parse ("xian" -> "xian", "xi'an" ->
    "xi", "an").
    """
    text = _canonical(token)
    if not text:
        return None
    plain = "".join(_plain_char(ch) for ch in text)
    n = len(text)

    # Filled right to left: next_stop[i] is where the syllable starting at i ends
    # (-1: text[i:] does not parse, i: separator skipped). Iterative, so token
    # length is not bounded by the recursion limit.
    parses: List[bool] = [False] * (n + 1)
    next_stop: List[int] = [-1] * (n + 1)
    parses[n] = True

    for start in range(n - 1, -1, -1):
        if text[start] in SYLLABLE_SEPARATORS:
            if 0 < start < n - 1 and parses[start + 1]:
                parses[start] = True
                next_stop[start] = start
            continue

        for length in range(min(MAX_SYLLABLE_LENGTH, n - start), 0, -1):
            end = start + length
            if plain[start:end] not in PINYIN_SYLLABLES:
                continue
            marks = sum(1 for ch in text[start:end] if ch in TONE_MARKS)
            if marks > 1:
                continue

            # Prefer consuming a trailing tone digit when the syllable is unmarked
            ends = [end]
            if marks == 0 and end < n and text[end] in TONE_DIGITS:
                ends.insert(0, end + 1)

            stop = next((stop for stop in ends if parses[stop]), None)
            if stop is not None:
                parses[start] = True
                next_stop[start] = stop
                break

    if not parses[0]:
        return None

    syllables = []
    cursor = 0
    while cursor < n:
        stop = next_stop[cursor]
        if stop == cursor:
            cursor += 1
            continue
        syllables.append(text[cursor:stop])
        cursor = stop
    return tuple(syllables)


def is_pinyin_token(token: str) -> bool:
    """Check whether a whitespace-free token reads completely as pinyin."""
    return split_syllables(token) is not None


def normalize_key(text: str) -> str:
    """
    Normalize pinyin for the tone-marked and tone-numbered lookup maps.

    Tones are preserved; case, whitespace and syllable apostrophes are not, so
    "Hán lěng", "hánlěng" and "hán'lěng" share one key.
    """
    text = _WHITESPACE_PATTERN.sub("", _canonical(text))
    return text.translate(_SEPARATOR_TRANSLATION)


def strip_tone(text: str) -> str:
    """Strip tone marks and digits from text that is not necessarily valid pinyin."""
    normalized = unicodedata.normalize("NFKD", text)
    return _DIGITS_PATTERN.sub("", "".join(c for c in normalized if not unicodedata.combining(c))).lower()


def toneless_key(text: str) -> str:
    """
    Normalize pinyin for the toneless lookup map.

    Every whitespace-separated token that splits into syllables is reduced with
    pypinyin's tone converter, syllable by syllable; anything else (letters in
    loanwords such as "kǎ lā O K") falls back to plain diacritic stripping.
    """
    parts = []
    for token in _canonical(text).split():
        syllables = split_syllables(token)
        if syllables is None:
            parts.append(strip_tone(token.translate(_SEPARATOR_TRANSLATION)))
            continue
        parts.extend(to_normal(syllable, v_to_u=True) for syllable in syllables)
    return "".join(parts)


def syllable_count(pinyin_numbers: str) -> int:
    """Number of syllables in a space-separated, tone-numbered reading."""
    return len(pinyin_numbers.split())
