"""
Traditional <-> Simplified character conversion derived from dictionary content.

Every entry whose two forms differ (and have the same length) contributes its
differing character pairs, aligned by position. The first pair seen for a
character wins; later entries never overwrite it.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Set

from zhdict.entries import EntryStore

logger = logging.getLogger("zhdict")


def _settle(table: Dict[str, str]) -> Dict[str, str]:
    """
    Collapse chains so that conversion is idempotent.

    A table holding both a -> b and b -> c would turn "a" into "b" on one pass and
    into "c" on the next. Each source is mapped straight to the end of its chain.
    Characters that sit on a cycle (a -> b -> a) have no stable target and are
    dropped, which leaves them to pass through unchanged.
    """
    cyclic: Set[str] = set()
    for source in table:
        seen = {source}
        current = table[source]
        while current in table and current not in seen:
            seen.add(current)
            current = table[current]
        if current == source:
            cyclic.add(source)

    acyclic = {source: target for source, target in table.items() if source not in cyclic}
    settled = {}
    for source, target in acyclic.items():
        while target in acyclic:
            target = acyclic[target]
        if target != source:
            settled[source] = target
    return settled


@dataclass(frozen=True)
class CharacterConverter:
    """Immutable per-character conversion tables with identity fallback."""

    to_simplified: Mapping[str, str]
    to_traditional: Mapping[str, str]

    # Characters that only ever appear in one script's forms
    traditional_only: FrozenSet[str]
    simplified_only: FrozenSet[str]

    @classmethod
    def build(cls, store: EntryStore) -> "CharacterConverter":
        """Derive conversion tables from the store, in store iteration order."""
        start_time = time.perf_counter()
        to_simplified: Dict[str, str] = {}
        to_traditional: Dict[str, str] = {}
        traditional_chars: Set[str] = set()
        simplified_chars: Set[str] = set()
        seen_hashes: Set[int] = set()
        skipped = 0

        for entry in store:
            traditional_chars.update(entry.traditional)
            simplified_chars.update(entry.simplified)

            if entry.hash in seen_hashes:
                continue
            seen_hashes.add(entry.hash)

            if entry.traditional == entry.simplified:
                continue
            if len(entry.traditional) != len(entry.simplified):
                skipped += 1
                continue

            for trad_char, simp_char in zip(entry.traditional, entry.simplified):
                if trad_char == simp_char:
                    continue
                to_simplified.setdefault(trad_char, simp_char)
                to_traditional.setdefault(simp_char, trad_char)

        if skipped:
            logger.warning(f"Skipped {skipped} entries whose traditional and simplified forms differ in length")

        converter = cls.from_tables(
            to_simplified,
            to_traditional,
            traditional_chars - simplified_chars,
            simplified_chars - traditional_chars,
        )
        build_time = time.perf_counter() - start_time
        logger.info(
            f"Built conversion tables ({len(converter.to_simplified)} T->S, "
            f"{len(converter.to_traditional)} S->T) in {build_time:.3f}s"
        )
        return converter

    @classmethod
    def from_tables(cls, to_simplified, to_traditional, traditional_only, simplified_only) -> "CharacterConverter":
        """Freeze plain tables (fresh from a build or from the disk cache)."""
        return cls(
            to_simplified=MappingProxyType(_settle(dict(to_simplified))),
            to_traditional=MappingProxyType(_settle(dict(to_traditional))),
            traditional_only=frozenset(traditional_only),
            simplified_only=frozenset(simplified_only),
        )

    def to_tables(self) -> Dict[str, object]:
        """Plain, picklable copy of the tables."""
        return {
            "to_simplified": dict(self.to_simplified),
            "to_traditional": dict(self.to_traditional),
            "traditional_only": set(self.traditional_only),
            "simplified_only": set(self.simplified_only),
        }

    def convert_to_simplified(self, text: str) -> str:
        table = self.to_simplified
        return "".join(table.get(ch, ch) for ch in text)

    def convert_to_traditional(self, text: str) -> str:
        table = self.to_traditional
        return "".join(table.get(ch, ch) for ch in text)

    def is_traditional(self, text: str) -> bool:
        """True unless the text holds a character only ever seen in simplified forms."""
        return not any(ch in self.simplified_only for ch in text)

    def is_simplified(self, text: str) -> bool:
        """True unless the text holds a character only ever seen in traditional forms."""
        return not any(ch in self.traditional_only for ch in text)
