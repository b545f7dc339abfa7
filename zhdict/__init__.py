"""
zhdict: an offline Chinese <-> English dictionary engine.

Example:
    from zhdict import ChineseDictionary

    dictionary = ChineseDictionary.from_jsonl("cedict.jsonl")
    dictionary.query("nǐ hǎo")
    dictionary.tokenize("今天天气不错")
"""

from zhdict.cache import CacheInfo
from zhdict.classifier import ClassificationResult, classify
from zhdict.config import DictionaryConfig
from zhdict.dictionary import ChineseDictionary
from zhdict.entries import LoadError, MeasureWord, WordEntry, ZhdictError

__version__ = "0.1.0"

__all__ = [
    "CacheInfo",
    "ChineseDictionary",
    "ClassificationResult",
    "DictionaryConfig",
    "LoadError",
    "MeasureWord",
    "WordEntry",
    "ZhdictError",
    "classify",
]
