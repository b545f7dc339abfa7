"""
Shared fixtures: a small CEDICT-shaped record set and a dictionary built from it.
"""

import sys
from pathlib import Path

import pytest

# Add the parent directory to path to import zhdict
sys.path.insert(0, str(Path(__file__).parent.parent))

from zhdict import ChineseDictionary


def make_record(word_id, traditional, simplified, pinyin_marks, pinyin_numbers, english, hsk=0, measure_words=()):
    """Raw record in loader schema; tone marks and hash are derived from the reading and id."""
    tones = [int(syllable[-1]) if syllable[-1].isdigit() else 0 for syllable in pinyin_numbers.split()]
    return {
        "traditional": traditional,
        "simplified": simplified,
        "pinyin_marks": pinyin_marks,
        "pinyin_numbers": pinyin_numbers,
        "english": list(english),
        "tone_marks": tones,
        "hash": 1000 + word_id,
        "measure_words": [list(mw) for mw in measure_words],
        "hsk": hsk,
        "word_id": word_id,
    }


SAMPLE_RECORDS = [
    make_record(1, "今天", "今天", "jīn tiān", "jin1 tian1", ["today", "at the present"], hsk=1),
    make_record(2, "天氣", "天气", "tiān qì", "tian1 qi4", ["weather"], hsk=1),
    make_record(3, "不錯", "不错", "bù cuò", "bu4 cuo4", ["correct", "not bad"], hsk=2),
    make_record(4, "今", "今", "jīn", "jin1", ["today", "modern"]),
    make_record(5, "天", "天", "tiān", "tian1", ["day", "sky"], hsk=1),
    make_record(6, "氣", "气", "qì", "qi4", ["gas", "air"], hsk=5),
    make_record(7, "不", "不", "bù", "bu4", ["no", "not"], hsk=1),
    make_record(8, "錯", "错", "cuò", "cuo4", ["mistake", "wrong"], hsk=2),
    make_record(9, "執行", "执行", "zhí xíng", "zhi2 xing2", ["to run", "to execute"], hsk=4),
    make_record(10, "跑", "跑", "pǎo", "pao3", ["to run (of people)", "to flee"], hsk=2),
    make_record(11, "跑步", "跑步", "pǎo bù", "pao3 bu4", ["run", "jogging"], hsk=2),
    make_record(12, "你好", "你好", "nǐ hǎo", "ni3 hao3", ["hello", "hi"], hsk=1),
    make_record(13, "繁體字", "繁体字", "fán tǐ zì", "fan2 ti3 zi4", ["traditional Chinese character"]),
    make_record(14, "簡體字", "简体字", "jiǎn tǐ zì", "jian3 ti3 zi4", ["simplified Chinese character"]),
    make_record(
        15,
        "電腦",
        "电脑",
        "diàn nǎo",
        "dian4 nao3",
        ["computer"],
        hsk=1,
        measure_words=[("臺", "台", "tái", "tai2")],
    ),
    make_record(16, "寒冷", "寒冷", "hán lěng", "han2 leng3", ["cold (climate)", "frigid"], hsk=4),
    make_record(17, "西瓜", "西瓜", "xī guā", "xi1 gua1", ["watermelon"], hsk=2),
    make_record(18, "咖啡館", "咖啡馆", "kā fēi guǎn", "ka1 fei1 guan3", ["café", "coffeehouse"]),
]


@pytest.fixture(scope="session")
def records():
    return [dict(record) for record in SAMPLE_RECORDS]


@pytest.fixture(scope="session")
def dictionary(records):
    """Create and return a dictionary built from the sample records."""
    return ChineseDictionary(records)
