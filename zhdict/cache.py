"""
Optional on-disk pickle cache of the built lookup index and conversion tables.

The cache is keyed by a fingerprint of the loaded entries, so a cache written for
a different dataset (or by an incompatible payload version) is ignored and
rebuilt. Every failure here is logged and treated as a cache miss.
"""

from __future__ import annotations

import hashlib
import logging
import pickle
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from zhdict.config import DictionaryConfig
from zhdict.converter import CharacterConverter
from zhdict.entries import EntryStore
from zhdict.index import DictionaryIndex

logger = logging.getLogger("zhdict")

# Bump when the pickled payload layout changes
PAYLOAD_VERSION = 1


@dataclass(frozen=True)
class CacheInfo:
    """Immutable cache information structure."""

    cache_enabled: bool
    cache_loaded: bool
    pickle_file_exists: bool
    pickle_file_size: Optional[int] = None
    pickle_file_mtime: Optional[float] = None


def store_fingerprint(store: EntryStore) -> str:
    """Digest of every field the index and converter are derived from."""
    digest = hashlib.sha256()
    for entry in store:
        fields = (
            entry.word_id,
            entry.traditional,
            entry.simplified,
            entry.pinyin_marks,
            entry.pinyin_numbers,
            entry.english,
            entry.hash,
        )
        digest.update(repr(fields).encode("utf-8"))
        digest.update(b"\n")
    return digest.hexdigest()


class IndexCacheService:
    """Isolated cache management service - no global state mutations."""

    def __init__(self, config: DictionaryConfig):
        self._config = config
        self._loaded = False

    @property
    def enabled(self) -> bool:
        return self._config.cache_file is not None

    def get_cache_info(self) -> CacheInfo:
        """Get immutable cache information."""
        cache_file = self._config.cache_file
        info_dict: Dict[str, Any] = {
            "cache_enabled": cache_file is not None,
            "cache_loaded": self._loaded,
            "pickle_file_exists": cache_file is not None and cache_file.exists(),
        }

        if cache_file is not None and info_dict["pickle_file_exists"]:
            try:
                stat = cache_file.stat()
                info_dict["pickle_file_size"] = stat.st_size
                info_dict["pickle_file_mtime"] = stat.st_mtime
            except OSError:
                pass

        return CacheInfo(**info_dict)

    def clear_cache(self) -> None:
        """Delete the pickle file if there is one."""
        self._loaded = False
        cache_file = self._config.cache_file
        if cache_file is None or not cache_file.exists():
            return
        try:
            cache_file.unlink()
            logger.info("Index cache cleared successfully")
        except OSError as e:
            logger.warning(f"Could not delete cache file: {e}")

    def load(self, fingerprint: str) -> Optional[Tuple[DictionaryIndex, CharacterConverter]]:
        """Cached structures for this fingerprint, or None on any kind of miss."""
        cache_file = self._config.cache_file
        if cache_file is None or not cache_file.exists():
            return None

        try:
            start_time = time.perf_counter()
            with cache_file.open("rb") as f:
                payload = pickle.load(f)
        except (pickle.PickleError, OSError, EOFError) as e:
            logger.warning(f"Failed to load index cache: {e}. Rebuilding...")
            return None

        if not isinstance(payload, dict) or payload.get("version") != PAYLOAD_VERSION:
            logger.warning(f"Ignoring index cache with unsupported layout: {cache_file}")
            return None
        if payload.get("fingerprint") != fingerprint:
            logger.warning("Index cache was built from different entries. Rebuilding...")
            return None

        try:
            index = DictionaryIndex.from_maps(payload["index"])
            converter = CharacterConverter.from_tables(**payload["converter"])
        except (KeyError, TypeError, AttributeError) as e:
            logger.warning(f"Index cache is incomplete ({e!r}). Rebuilding...")
            return None
        load_time = time.perf_counter() - start_time
        self._loaded = True
        logger.info(f"Loaded index cache from {cache_file} in {load_time:.3f}s")
        return index, converter

    def save(self, fingerprint: str, index: DictionaryIndex, converter: CharacterConverter) -> bool:
        """Write the structures to disk. Returns True if successful."""
        cache_file = self._config.cache_file
        if cache_file is None:
            return False

        payload = {
            "version": PAYLOAD_VERSION,
            "fingerprint": fingerprint,
            "index": index.to_maps(),
            "converter": converter.to_tables(),
        }
        try:
            cache_file.parent.mkdir(parents=True, exist_ok=True)
            with cache_file.open("wb") as f:
                pickle.dump(payload, f, protocol=pickle.HIGHEST_PROTOCOL)
        except (pickle.PickleError, OSError) as e:
            logger.warning(f"Failed to save index cache: {e}")
            return False
        return True
