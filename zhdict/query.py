"""
Lookup across every representation the index knows about.

Queries are routed by the classifier: Chinese text probes the character maps,
pinyin probes the three pinyin maps, English probes the gloss map, and text the
classifier is unsure about probes everything. Results are ranked so that entries
matching the whole query in some representation come before entries reached
through an alternate form (toneless pinyin, the other script, a segment of the
query, part of an English phrase).
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from zhdict.classifier import ClassificationResult, classify
from zhdict.config import DictionaryConfig
from zhdict.converter import CharacterConverter
from zhdict.entries import MAX_HSK, EntryStore, WordEntry
from zhdict.index import MAP_NAMES, DictionaryIndex, normalize_gloss
from zhdict.pinyin import normalize_key, toneless_key
from zhdict.segmenter import Segmenter

EXACT = 0
PARTIAL = 1

# Unclassified entries (hsk 0) sort after every graded level
_UNGRADED_RANK = MAX_HSK + 1


class _Hits:
    """Collects matched ids, keeping the best rank each id was reached with."""

    __slots__ = ("ranks",)

    def __init__(self):
        self.ranks: Dict[int, int] = {}

    def add(self, word_ids: Iterable[int], rank: int) -> None:
        for word_id in word_ids:
            previous = self.ranks.get(word_id)
            if previous is None or rank < previous:
                self.ranks[word_id] = rank

    def __bool__(self) -> bool:
        return bool(self.ranks)


class QueryEngine:
    """Serves lookups against a frozen index; holds no per-query state."""

    def __init__(
        self,
        store: EntryStore,
        index: DictionaryIndex,
        converter: CharacterConverter,
        segmenter: Segmenter,
        config: Optional[DictionaryConfig] = None,
    ):
        self._store = store
        self._index = index
        self._converter = converter
        self._segmenter = segmenter
        self._config = config or DictionaryConfig.create_default()

    # Public API methods
    def query(self, text: str, exact: bool = False) -> Optional[List[WordEntry]]:
        """
        Look up text in whichever representation it is written in.

        Args:
            text: Chinese characters, pinyin (marks, numbers or toneless) or English
            exact: only whole-key matches; no toneless, converted, segmented or
                partial English fallbacks

        Returns:
            Matching entries, best first, or None when nothing matched.
        """
        stripped = text.strip()
        if not stripped:
            return None

        hits = _Hits()
        kind = classify(stripped)
        # Headwords without ideographs ("OK", "DNA") are only reachable through the character maps
        if kind is not ClassificationResult.ZH:
            hits.add(self._index.lookup("traditional", stripped), EXACT)
            hits.add(self._index.lookup("simplified", stripped), EXACT)

        if kind is ClassificationResult.ZH:
            self._probe_chinese(stripped, exact, hits)
        elif kind is ClassificationResult.PY:
            self._probe_pinyin(stripped, exact, hits)
            # Short English words often spell valid syllables ("run", "long", "pan")
            if not hits:
                self._probe_english(stripped, exact, hits)
        elif kind is ClassificationResult.EN:
            self._probe_english(stripped, exact, hits)
        else:
            self._probe_all(stripped, exact, hits)

        return self._rank(hits) if hits else None

    def query_by_chinese(self, text: str, exact: bool = False) -> List[WordEntry]:
        """Query the character maps only, whatever the text looks like."""
        hits = _Hits()
        if text.strip():
            self._probe_chinese(text.strip(), exact, hits)
        return self._rank(hits)

    def query_by_pinyin(self, text: str, exact: bool = False) -> List[WordEntry]:
        """Query the pinyin maps only; tone marks, tone numbers and toneless input all work."""
        hits = _Hits()
        if text.strip():
            self._probe_pinyin(text.strip(), exact, hits)
        return self._rank(hits)

    def query_by_english(self, text: str, exact: bool = False) -> List[WordEntry]:
        """Query the gloss map only."""
        hits = _Hits()
        if text.strip():
            self._probe_english(text.strip(), exact, hits)
        return self._rank(hits)

    # Probes
    def _probe_chinese(self, text: str, exact: bool, hits: _Hits) -> None:
        index = self._index
        hits.add(index.lookup("traditional", text), EXACT)
        hits.add(index.lookup("simplified", text), EXACT)
        if exact:
            return

        simplified = self._converter.convert_to_simplified(text)
        hits.add(index.lookup("simplified", simplified), PARTIAL)
        hits.add(index.lookup("traditional", self._converter.convert_to_traditional(text)), PARTIAL)

        # Mixed-script text only segments into words once converted to one script
        for source in dict.fromkeys((text, simplified)):
            for word in self._segmenter.segment(source):
                if word in (text, simplified):
                    continue
                hits.add(index.lookup("traditional", word), PARTIAL)
                hits.add(index.lookup("simplified", word), PARTIAL)

    def _probe_pinyin(self, text: str, exact: bool, hits: _Hits) -> None:
        index = self._index
        key = normalize_key(text)
        marked = index.lookup("pinyin_marks", key)
        numbered = index.lookup("pinyin_numbers", key)

        if exact:
            hits.add(marked or numbered, EXACT)
            return

        hits.add(marked, EXACT)
        hits.add(numbered, EXACT)
        hits.add(index.lookup("toneless", toneless_key(text)), PARTIAL)

    def _probe_english(self, text: str, exact: bool, hits: _Hits) -> None:
        index = self._index
        gloss = normalize_gloss(text, self._config)
        hits.add(index.lookup("english", gloss), EXACT)
        if exact:
            return

        # Largest-first window match: try the widest run of words at each position,
        # shrink it until a gloss matches, then continue after the matched run.
        words = gloss.split(" ")
        width = min(len(words), self._config.english_window)
        skip = 0
        take = width
        while skip < len(words):
            phrase = " ".join(words[skip : skip + take])
            matched = index.lookup("english", phrase) if phrase != gloss else ()
            if matched:
                hits.add(matched, PARTIAL)
                skip += take
                take = width
            elif take > 1:
                take -= 1
            else:
                skip += 1
                take = width

    def _probe_all(self, text: str, exact: bool, hits: _Hits) -> None:
        keys = {
            "traditional": text,
            "simplified": text,
            "pinyin_marks": normalize_key(text),
            "pinyin_numbers": normalize_key(text),
            "toneless": toneless_key(text),
            "english": normalize_gloss(text, self._config),
        }
        for map_name in MAP_NAMES:
            if map_name == "toneless":
                if not exact:
                    hits.add(self._index.lookup(map_name, keys[map_name]), PARTIAL)
                continue
            hits.add(self._index.lookup(map_name, keys[map_name]), EXACT)

    # Ranking
    def _rank(self, hits: _Hits) -> List[WordEntry]:
        entries = [(rank, self._store.get(word_id)) for word_id, rank in hits.ranks.items()]
        entries.sort(key=lambda item: (item[0], item[1].hsk or _UNGRADED_RANK, item[1].word_id))
        return [entry for _, entry in entries]
