"""
Key -> entry-id mappings derived once from the entry store.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from zhdict.config import DictionaryConfig
from zhdict.entries import EntryStore
from zhdict.pinyin import normalize_key, toneless_key

logger = logging.getLogger("zhdict")

IdMap = Mapping[str, Tuple[int, ...]]

# Lookup maps in the order the "probe everything" path visits them
MAP_NAMES = ("traditional", "simplified", "pinyin_marks", "pinyin_numbers", "toneless", "english")


def normalize_gloss(text: str, config: DictionaryConfig) -> str:
    """Lower-case an English gloss and collapse its whitespace."""
    return config.whitespace_pattern.sub(" ", text).strip().lower()


def _freeze(mapping: Mapping[str, Iterable[int]]) -> IdMap:
    return MappingProxyType({key: tuple(ids) for key, ids in mapping.items()})


@dataclass(frozen=True)
class DictionaryIndex:
    """Immutable lookup maps; every value is a tuple of word ids in load order."""

    traditional: IdMap
    simplified: IdMap
    pinyin_marks: IdMap
    pinyin_numbers: IdMap
    toneless: IdMap
    english: IdMap

    # Segmentation support: all character keys and the longest of them (L_max)
    character_keys: FrozenSet[str]
    max_key_length: int

    @classmethod
    def from_maps(cls, maps: Mapping[str, Mapping[str, Iterable[int]]]) -> "DictionaryIndex":
        """Freeze plain key -> ids dicts (fresh from a build or from the disk cache)."""
        frozen = {name: _freeze(maps[name]) for name in MAP_NAMES}
        character_keys = frozenset(frozen["traditional"]) | frozenset(frozen["simplified"])
        return cls(
            **frozen,
            character_keys=character_keys,
            max_key_length=max((len(key) for key in character_keys), default=0),
        )

    def to_maps(self) -> Dict[str, Dict[str, List[int]]]:
        """Plain, picklable copy of the six lookup maps."""
        return {name: {key: list(ids) for key, ids in getattr(self, name).items()} for name in MAP_NAMES}

    def lookup(self, map_name: str, key: str) -> Tuple[int, ...]:
        return getattr(self, map_name).get(key, ())

    def stats(self) -> Dict[str, Any]:
        counts: Dict[str, Any] = {name: len(getattr(self, name)) for name in MAP_NAMES}
        counts["max_key_length"] = self.max_key_length
        return counts


class IndexBuilder:
    """Builds the six lookup maps from an entry store."""

    def __init__(self, config: Optional[DictionaryConfig] = None):
        self._config = config or DictionaryConfig.create_default()

    def build(self, store: EntryStore) -> DictionaryIndex:
        start_time = time.perf_counter()
        maps: Dict[str, Dict[str, List[int]]] = {name: {} for name in MAP_NAMES}

        for entry in store:
            self._add(maps["traditional"], entry.traditional, entry.word_id)
            self._add(maps["simplified"], entry.simplified, entry.word_id)

            if entry.pinyin_marks.strip():
                self._add(maps["pinyin_marks"], normalize_key(entry.pinyin_marks), entry.word_id)
            if entry.pinyin_numbers.strip():
                self._add(maps["pinyin_numbers"], normalize_key(entry.pinyin_numbers), entry.word_id)

            reading = entry.pinyin_numbers if entry.pinyin_numbers.strip() else entry.pinyin_marks
            if reading.strip():
                self._add(maps["toneless"], toneless_key(reading), entry.word_id)

            for gloss in entry.english:
                self._add(maps["english"], normalize_gloss(gloss, self._config), entry.word_id)

        index = DictionaryIndex.from_maps(maps)
        build_time = time.perf_counter() - start_time
        logger.info(f"Built lookup index for {len(store)} entries in {build_time:.3f}s")
        return index

    @staticmethod
    def _add(mapping: Dict[str, List[int]], key: str, word_id: int) -> None:
        if not key:
            return
        ids = mapping.setdefault(key, [])
        # Entries are visited once each, so a repeat can only be the newest id
        if not ids or ids[-1] != word_id:
            ids.append(word_id)
