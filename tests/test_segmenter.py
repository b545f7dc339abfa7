"""
Forward-maximum-matching segmentation.
"""

import sys
from pathlib import Path

# Add the parent directory to path to import zhdict
sys.path.insert(0, str(Path(__file__).parent.parent))

from conftest import make_record

from zhdict import ChineseDictionary

TOKENIZE_TEST_CASES = [
    ("今天天气不错", ["今天", "天气", "不错"]),
    ("今天天氣不錯", ["今天", "天氣", "不錯"]),
    ("我今天用電腦", ["我", "今天", "用", "電腦"]),
    ("电腦很好", ["电", "腦", "很", "好"]),
    ("西瓜", ["西瓜"]),
    ("今", ["今"]),
    ("", []),
]


def test_tokenize(dictionary):
    passed = 0
    failed = 0
    for text, expected in TOKENIZE_TEST_CASES:
        result = dictionary.tokenize(text)
        if result == expected:
            passed += 1
        else:
            failed += 1
            print(f"FAILED: '{text}': expected {expected}, got {result}")

    assert failed == 0, f"Tokenize tests: {failed} failures out of {len(TOKENIZE_TEST_CASES)} tests"


def test_tokens_concatenate_to_input(dictionary):
    samples = ["今天天气不错", "abc今天xyz", "   ", "我們去吃西瓜吧!", "😀今天😀", "天" * 50]
    for text in samples:
        assert "".join(dictionary.tokenize(text)) == text, f"Failed for '{text}'"


def test_segment_drops_unknown_characters(dictionary):
    assert dictionary.segment("我今天很好") == ["今天"]
    assert dictionary.segment("今天天气不错") == ["今天", "天气", "不错"]
    assert dictionary.segment("hello") == []


def test_matching_is_greedy_without_backtracking():
    dictionary = ChineseDictionary(
        [
            make_record(1, "研究", "研究", "yán jiū", "yan2 jiu1", ["research"]),
            make_record(2, "研究生", "研究生", "yán jiū shēng", "yan2 jiu1 sheng1", ["graduate student"]),
            make_record(3, "生命", "生命", "shēng mìng", "sheng1 ming4", ["life"]),
        ]
    )
    assert dictionary.tokenize("研究生命") == ["研究生", "命"]


def test_tokens_are_headwords_as_written():
    dictionary = ChineseDictionary(
        [
            make_record(1, "發", "发", "fā", "fa1", ["to send out"]),
            make_record(2, "頭髮", "头发", "tóu fa", "tou2 fa5", ["hair (on the head)"]),
        ]
    )
    keys = dictionary.index.character_keys

    # 头發 converts to 头发, but neither script spells it that way
    assert dictionary.tokenize("头發") == ["头", "發"]
    assert dictionary.tokenize("头发") == ["头发"]
    assert dictionary.segment("头發") == ["發"]
    for text in ["头發", "頭发", "头发頭髮"]:
        assert all(word in keys for word in dictionary.segment(text))


def test_empty_dictionary_emits_single_characters():
    dictionary = ChineseDictionary([])
    assert dictionary.tokenize("今天") == ["今", "天"]
    assert dictionary.segment("今天") == []
