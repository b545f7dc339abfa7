"""
Dictionary-driven forward maximum matching.
"""

from __future__ import annotations

from typing import List

from zhdict.index import DictionaryIndex


class Segmenter:
    """
    Greedy left-to-right tokenizer over the dictionary's character keys.

    At each position the longest dictionary word starting there is taken; when
    none matches, the single character is emitted and the cursor moves on. The
    choice is never revisited: with 研究, 研究生 and 生命 in the dictionary,
    "研究生命" becomes 研究生 / 命, not 研究 / 生命.

    A word is a traditional or simplified headword exactly as written, so
    mixed-script text ("电腦") falls apart into the characters that are keys.
    """

    def __init__(self, index: DictionaryIndex):
        self._keys = index.character_keys
        self._max_length = index.max_key_length

    @property
    def max_key_length(self) -> int:
        return self._max_length

    def tokenize(self, text: str) -> List[str]:
        """Split text into tokens whose concatenation is exactly ``text``."""
        tokens: List[str] = []
        cursor = 0
        n = len(text)

        while cursor < n:
            step = 1
            for length in range(min(self._max_length, n - cursor), 1, -1):
                if text[cursor : cursor + length] in self._keys:
                    step = length
                    break
            tokens.append(text[cursor : cursor + step])
            cursor += step

        return tokens

    def segment(self, text: str) -> List[str]:
        """Dictionary words of ``text`` in order; characters no entry covers are dropped."""
        return [token for token in self.tokenize(text) if token in self._keys]
