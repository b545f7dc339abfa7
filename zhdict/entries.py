"""
Word entries and the immutable store that owns them.

The store is built once from the raw records a data loader supplies (one mapping
per dictionary sense, see ``RECORD_FIELDS``). Every record is validated before any
entry is created, so a bad record aborts construction without leaving a partial
store behind.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from zhdict.pinyin import syllable_count

logger = logging.getLogger("zhdict")

RECORD_FIELDS = (
    "traditional",
    "simplified",
    "pinyin_marks",
    "pinyin_numbers",
    "english",
    "tone_marks",
    "hash",
    "measure_words",
    "hsk",
    "word_id",
)

MAX_TONE = 5
MAX_HSK = 6


# ════════════════════════════════════════════════════════════════════════════════
# ERRORS
# ════════════════════════════════════════════════════════════════════════════════


class ZhdictError(Exception):
    """Base class for errors raised by this package."""


class LoadError(ZhdictError, ValueError):
    """
    A raw record could not be loaded; no dictionary is produced.

    ``position`` is the 0-based index of the record in load order, ``line`` the
    1-based line of a record file; either is None when it does not apply.
    """

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        word_id: Optional[int] = None,
        line: Optional[int] = None,
    ):
        self.position = position
        self.word_id = word_id
        self.line = line
        where = []
        if line is not None:
            where.append(f"line {line}")
        if position is not None:
            where.append(f"record {position}")
        if word_id is not None:
            where.append(f"word_id {word_id}")
        super().__init__(f"{message} ({', '.join(where)})" if where else message)


# ════════════════════════════════════════════════════════════════════════════════
# ENTRY TYPES
# ════════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class MeasureWord:
    """Classifier used when counting the entry's noun; embedded, has no id of its own."""

    traditional: str
    simplified: str
    pinyin_marks: str
    pinyin_numbers: str


@dataclass(frozen=True)
class WordEntry:
    """One dictionary sense."""

    word_id: int
    traditional: str
    simplified: str
    pinyin_marks: str
    pinyin_numbers: str
    tone_marks: Tuple[int, ...]
    english: Tuple[str, ...]
    measure_words: Tuple[MeasureWord, ...]
    hsk: int
    hash: int


# ════════════════════════════════════════════════════════════════════════════════
# RECORD VALIDATION
# ════════════════════════════════════════════════════════════════════════════════


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _require_str(record: Mapping[str, Any], name: str, position: int, word_id: int, non_empty: bool = False) -> str:
    value = record[name]
    if not isinstance(value, str):
        raise LoadError(f"field '{name}' must be a string, got {type(value).__name__}", position, word_id)
    if non_empty and not value.strip():
        raise LoadError(f"field '{name}' must not be empty", position, word_id)
    return value


def _require_sequence(record: Mapping[str, Any], name: str, position: int, word_id: int) -> Sequence[Any]:
    value = record[name]
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise LoadError(f"field '{name}' must be a list, got {type(value).__name__}", position, word_id)
    return value


def _parse_measure_words(record: Mapping[str, Any], position: int, word_id: int) -> Tuple[MeasureWord, ...]:
    measure_words = []
    for item in _require_sequence(record, "measure_words", position, word_id):
        if isinstance(item, (str, bytes)) or not isinstance(item, Sequence) or len(item) != 4:
            raise LoadError("measure word must be a 4-tuple of strings", position, word_id)
        if not all(isinstance(part, str) for part in item):
            raise LoadError("measure word must be a 4-tuple of strings", position, word_id)
        measure_words.append(MeasureWord(*item))
    return tuple(measure_words)


def _parse_english(record: Mapping[str, Any], position: int, word_id: int) -> Tuple[str, ...]:
    glosses = []
    seen = set()
    for gloss in _require_sequence(record, "english", position, word_id):
        if not isinstance(gloss, str):
            raise LoadError("English glosses must be strings", position, word_id)
        if gloss not in seen:
            seen.add(gloss)
            glosses.append(gloss)
    return tuple(glosses)


def parse_record(record: Mapping[str, Any], position: int) -> WordEntry:
    """Validate one raw record and turn it into a WordEntry."""
    if not isinstance(record, Mapping):
        raise LoadError(f"record must be a mapping, got {type(record).__name__}", position)

    missing = [name for name in RECORD_FIELDS if name not in record]
    word_id = record.get("word_id")
    if not _is_int(word_id) or word_id < 0:
        if "word_id" in missing:
            raise LoadError("missing required field 'word_id'", position)
        raise LoadError(f"word_id must be a non-negative integer, got {word_id!r}", position)
    if missing:
        raise LoadError(f"missing required fields: {', '.join(missing)}", position, word_id)

    # Queries are trimmed before lookup, so padded headwords would be unreachable
    traditional = _require_str(record, "traditional", position, word_id, non_empty=True).strip()
    simplified = _require_str(record, "simplified", position, word_id, non_empty=True).strip()
    pinyin_marks = _require_str(record, "pinyin_marks", position, word_id)
    pinyin_numbers = _require_str(record, "pinyin_numbers", position, word_id)

    tone_marks = tuple(_require_sequence(record, "tone_marks", position, word_id))
    if not all(_is_int(tone) and 0 <= tone <= MAX_TONE for tone in tone_marks):
        raise LoadError(f"tone marks must be integers 0-{MAX_TONE}, got {list(tone_marks)}", position, word_id)
    if pinyin_numbers.strip() and len(tone_marks) != syllable_count(pinyin_numbers):
        raise LoadError(
            f"{len(tone_marks)} tone marks for {syllable_count(pinyin_numbers)} syllables in '{pinyin_numbers}'",
            position,
            word_id,
        )

    hsk = record["hsk"]
    if not _is_int(hsk) or not 0 <= hsk <= MAX_HSK:
        raise LoadError(f"hsk must be an integer 0-{MAX_HSK}, got {hsk!r}", position, word_id)

    content_hash = record["hash"]
    if not _is_int(content_hash) or content_hash < 0:
        raise LoadError(f"hash must be a non-negative integer, got {content_hash!r}", position, word_id)

    return WordEntry(
        word_id=word_id,
        traditional=traditional,
        simplified=simplified,
        pinyin_marks=pinyin_marks,
        pinyin_numbers=pinyin_numbers,
        tone_marks=tone_marks,
        english=_parse_english(record, position, word_id),
        measure_words=_parse_measure_words(record, position, word_id),
        hsk=hsk,
        hash=content_hash,
    )


# ════════════════════════════════════════════════════════════════════════════════
# ENTRY STORE
# ════════════════════════════════════════════════════════════════════════════════


class EntryStore:
    """Immutable, id-addressed collection of word entries in load order."""

    __slots__ = ("_entries", "_order")

    def __init__(self, entries: Iterable[WordEntry]):
        by_id = {}
        order: List[int] = []
        for position, entry in enumerate(entries):
            if entry.word_id in by_id:
                raise LoadError("duplicate word_id", position, entry.word_id)
            by_id[entry.word_id] = entry
            order.append(entry.word_id)
        self._entries = MappingProxyType(by_id)
        self._order = tuple(order)

    @classmethod
    def load(cls, records: Iterable[Mapping[str, Any]]) -> "EntryStore":
        """
        Build a store from raw loader records.

        Raises:
            LoadError: a record is malformed or repeats a word_id. Nothing is kept.
        """
        entries = [parse_record(record, position) for position, record in enumerate(records)]
        store = cls(entries)
        logger.info(f"Loaded {len(store)} dictionary entries")
        return store

    def get(self, word_id: int) -> WordEntry:
        """Entry for an id obtained from this store; unknown ids raise KeyError."""
        return self._entries[word_id]

    def ids(self) -> Tuple[int, ...]:
        return self._order

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[WordEntry]:
        for word_id in self._order:
            yield self._entries[word_id]

    def __contains__(self, word_id: object) -> bool:
        return word_id in self._entries
