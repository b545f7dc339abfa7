"""
Pinyin syllable splitting and lookup-key normalization.
"""

import sys
from pathlib import Path

# Add the parent directory to path to import zhdict
sys.path.insert(0, str(Path(__file__).parent.parent))

from zhdict.pinyin import is_pinyin_token, normalize_key, split_syllables, strip_tone, toneless_key

# token -> expected syllables (None: not pinyin)
SPLIT_TEST_CASES = [
    ("nihao", ("ni", "hao")),
    ("NiHao", ("ni", "hao")),
    ("xian", ("xian",)),
    ("xi'an", ("xi", "an")),
    ("ni3hao3", ("ni3", "hao3")),
    ("nǐhǎo", ("nǐ", "hǎo")),
    ("zhuang", ("zhuang",)),
    ("lv4", ("lü4",)),
    ("nu:3", ("nü3",)),
    ("fan2ti3zi4", ("fan2", "ti3", "zi4")),
    ("hello", None),
    ("watermelon", None),
    ("to", None),
    ("'an", None),
    ("", None),
]

NORMALIZE_KEY_CASES = [
    ("Hán lěng", "hánlěng"),
    ("hán'lěng", "hánlěng"),
    ("han2  leng3", "han2leng3"),
    ("lu:4", "lü4"),
    ("nv3", "nü3"),
]

TONELESS_KEY_CASES = [
    ("dian4 nao3", "diannao"),
    ("diàn nǎo", "diannao"),
    ("Diàn Nǎo", "diannao"),
    ("diannao", "diannao"),
    ("nǚ", "nü"),
    ("lv4", "lü"),
    ("xi'an", "xian"),
    ("kǎ lā O K", "kalaok"),
]


def test_split_syllables():
    failed = []
    for token, expected in SPLIT_TEST_CASES:
        result = split_syllables(token)
        if result != expected:
            failed.append(f"'{token}': expected {expected}, got {result}")
    assert not failed, "\n".join(failed)


def test_split_syllables_keeps_tone_marks():
    assert split_syllables("zhōngguó") == ("zhōng", "guó")
    assert split_syllables("Xī'ān") == ("xī", "ān")


def test_is_pinyin_token():
    assert is_pinyin_token("zhōngguó")
    assert is_pinyin_token("ng")
    assert not is_pinyin_token("café")


def test_normalize_key():
    for text, expected in NORMALIZE_KEY_CASES:
        assert normalize_key(text) == expected, f"Failed for '{text}'"


def test_toneless_key():
    for text, expected in TONELESS_KEY_CASES:
        assert toneless_key(text) == expected, f"Failed for '{text}'"


def test_marked_and_numbered_readings_share_a_toneless_key():
    assert toneless_key("jīn tiān") == toneless_key("jin1 tian1") == "jintian"


def test_strip_tone():
    assert strip_tone("Lǚ4") == "lu"
    assert strip_tone("Ō K") == "o k"
