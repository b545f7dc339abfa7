"""
Configuration for dictionary construction and lookup.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class DictionaryConfig:
    """Immutable configuration shared by every component of one dictionary instance."""

    # Optional pickle cache of the built index and conversion tables; None disables it
    cache_dir: Optional[Path]
    cache_file_name: str

    # Precompiled regex patterns (immutable)
    whitespace_pattern: re.Pattern[str]

    # Widest run of English words tried as one gloss during partial matching
    english_window: int

    @classmethod
    def create_default(cls) -> "DictionaryConfig":
        """Factory method for the default configuration (no disk cache)."""
        return cls(
            cache_dir=None,
            cache_file_name="zhdict_index.pkl",
            whitespace_pattern=re.compile(r"\s+"),
            english_window=4,
        )

    @property
    def cache_file(self) -> Optional[Path]:
        if self.cache_dir is None:
            return None
        return self.cache_dir / self.cache_file_name

    def with_cache_dir(self, new_cache_dir: Optional[Path]) -> "DictionaryConfig":
        """Immutable update method; the directory is created on first write."""
        return replace(self, cache_dir=Path(new_cache_dir) if new_cache_dir is not None else None)

    def with_english_window(self, window: int) -> "DictionaryConfig":
        """Immutable update method for the English partial-match window."""
        if window < 1:
            raise ValueError(f"English window must be at least 1, got {window}")
        return replace(self, english_window=window)
