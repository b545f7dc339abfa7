"""
ChineseDictionary: the one object callers construct and pass around.

Construction is a single blocking phase (validate records, build or load the
index and conversion tables); afterwards every structure is frozen and all
methods are read-only, so one instance can be shared across threads.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Union

from zhdict.cache import CacheInfo, IndexCacheService, store_fingerprint
from zhdict.classifier import ClassificationResult, classify
from zhdict.config import DictionaryConfig
from zhdict.converter import CharacterConverter
from zhdict.entries import EntryStore, WordEntry
from zhdict.index import DictionaryIndex, IndexBuilder
from zhdict.loader import iter_records
from zhdict.query import QueryEngine
from zhdict.segmenter import Segmenter

logger = logging.getLogger("zhdict")


class ChineseDictionary:
    """Offline Chinese <-> English dictionary: lookup, classification, conversion and segmentation."""

    def __init__(self, records: Iterable[Mapping[str, Any]], config: Optional[DictionaryConfig] = None):
        """
        Build a dictionary from raw records.

        Args:
            records: One mapping per dictionary sense (see ``zhdict.entries.RECORD_FIELDS``)
            config: Optional configuration; the default has no disk cache

        Raises:
            LoadError: a record is malformed or repeats a word_id
        """
        start_time = time.perf_counter()
        self._config = config or DictionaryConfig.create_default()
        self._cache_service = IndexCacheService(self._config)

        self._store = EntryStore.load(records)
        self._index, self._converter = self._build_structures()
        self._segmenter = Segmenter(self._index)
        self._engine = QueryEngine(self._store, self._index, self._converter, self._segmenter, self._config)

        init_time = time.perf_counter() - start_time
        logger.info(f"Dictionary ready with {len(self._store)} entries in {init_time:.3f}s")

    @classmethod
    def from_records(
        cls, records: Iterable[Mapping[str, Any]], config: Optional[DictionaryConfig] = None
    ) -> "ChineseDictionary":
        return cls(records, config)

    @classmethod
    def from_jsonl(cls, path: Union[str, Path], config: Optional[DictionaryConfig] = None) -> "ChineseDictionary":
        """Build a dictionary from a JSON-lines record file."""
        return cls(iter_records(path), config)

    def _build_structures(self):
        """Load the index and conversion tables from the disk cache, or build and cache them."""
        if not self._cache_service.enabled:
            return IndexBuilder(self._config).build(self._store), CharacterConverter.build(self._store)

        fingerprint = store_fingerprint(self._store)
        cached = self._cache_service.load(fingerprint)
        if cached is not None:
            return cached

        index = IndexBuilder(self._config).build(self._store)
        converter = CharacterConverter.build(self._store)
        self._cache_service.save(fingerprint, index, converter)
        return index, converter

    # Public API methods
    def query(self, text: str, exact: bool = False) -> Optional[List[WordEntry]]:
        """
        Look up text in whichever representation the classifier says it is in.

        Returns matching entries, best first, or None when nothing matched.
        """
        return self._engine.query(text, exact)

    def query_by_chinese(self, text: str, exact: bool = False) -> List[WordEntry]:
        return self._engine.query_by_chinese(text, exact)

    def query_by_pinyin(self, text: str, exact: bool = False) -> List[WordEntry]:
        return self._engine.query_by_pinyin(text, exact)

    def query_by_english(self, text: str, exact: bool = False) -> List[WordEntry]:
        return self._engine.query_by_english(text, exact)

    @staticmethod
    def classify(text: str) -> ClassificationResult:
        return classify(text)

    def convert_to_simplified(self, text: str) -> str:
        return self._converter.convert_to_simplified(text)

    def convert_to_traditional(self, text: str) -> str:
        return self._converter.convert_to_traditional(text)

    def is_traditional(self, text: str) -> bool:
        return self._converter.is_traditional(text)

    def is_simplified(self, text: str) -> bool:
        return self._converter.is_simplified(text)

    def tokenize(self, text: str) -> List[str]:
        """Forward-maximum-matching tokens; their concatenation is always ``text``."""
        return self._segmenter.tokenize(text)

    def segment(self, text: str) -> List[str]:
        """Dictionary words found in ``text``, in order."""
        return self._segmenter.segment(text)

    def get(self, word_id: int) -> WordEntry:
        return self._store.get(word_id)

    def __len__(self) -> int:
        return len(self._store)

    @property
    def index(self) -> DictionaryIndex:
        return self._index

    @property
    def config(self) -> DictionaryConfig:
        return self._config

    def get_cache_info(self) -> CacheInfo:
        """Get cache information."""
        return self._cache_service.get_cache_info()

    def clear_cache(self) -> None:
        """Delete the on-disk index cache; the in-memory structures are unaffected."""
        self._cache_service.clear_cache()
