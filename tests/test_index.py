"""
Lookup index construction.
"""

import sys
from pathlib import Path

import pytest

# Add the parent directory to path to import zhdict
sys.path.insert(0, str(Path(__file__).parent.parent))

from conftest import make_record

from zhdict.config import DictionaryConfig
from zhdict.entries import EntryStore
from zhdict.index import MAP_NAMES, DictionaryIndex, IndexBuilder, normalize_gloss


@pytest.fixture(scope="module")
def index(records):
    return IndexBuilder().build(EntryStore.load(records))


# (map, key, expected ids)
INDEX_KEY_CASES = [
    ("traditional", "電腦", (15,)),
    ("simplified", "电脑", (15,)),
    ("traditional", "今天", (1,)),
    ("simplified", "今天", (1,)),
    ("pinyin_marks", "diànnǎo", (15,)),
    ("pinyin_numbers", "dian4nao3", (15,)),
    ("toneless", "diannao", (15,)),
    ("toneless", "jin", (4,)),
    ("english", "computer", (15,)),
    ("english", "today", (1, 4)),
    ("english", "traditional chinese character", (13,)),
    ("english", "café", (18,)),
]


def test_index_keys(index):
    failed = []
    for map_name, key, expected in INDEX_KEY_CASES:
        result = index.lookup(map_name, key)
        if result != expected:
            failed.append(f"{map_name}['{key}']: expected {expected}, got {result}")
    assert not failed, "\n".join(failed)


def test_lookup_miss_is_empty(index):
    assert index.lookup("simplified", "天气不") == ()
    assert index.lookup("english", "Computer") == ()


def test_character_keys_and_max_length(index, records):
    expected_keys = {r["traditional"] for r in records} | {r["simplified"] for r in records}
    assert index.character_keys == frozenset(expected_keys)
    assert index.max_key_length == 3


def test_ids_are_unique_per_key():
    store = EntryStore.load(
        [
            make_record(1, "好", "好", "hǎo", "hao3", ["good", "Good", "well"]),
            make_record(2, "好", "好", "hào", "hao4", ["to be fond of"]),
        ]
    )
    index = IndexBuilder().build(store)

    assert index.lookup("english", "good") == (1,)
    assert index.lookup("simplified", "好") == (1, 2)
    assert index.lookup("toneless", "hao") == (1, 2)


def test_index_is_immutable(index):
    with pytest.raises(TypeError):
        index.english["new"] = (1,)
    with pytest.raises(AttributeError):
        index.max_key_length = 10


def test_maps_survive_a_plain_copy(index):
    rebuilt = DictionaryIndex.from_maps(index.to_maps())

    assert rebuilt.to_maps() == index.to_maps()
    assert rebuilt.character_keys == index.character_keys
    assert set(index.stats()) == set(MAP_NAMES) | {"max_key_length"}


def test_normalize_gloss():
    config = DictionaryConfig.create_default()
    assert normalize_gloss("  To\tRun  ", config) == "to run"
    assert normalize_gloss("cold (climate)", config) == "cold (climate)"
