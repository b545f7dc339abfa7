# ═════════════════════════════════════════════════════════════════════════════════
# STATIC PINYIN AND SCRIPT TABLES
# ═════════════════════════════════════════════════════════════════════════════════
#
# Tables used by the classifier and the pinyin key normalizer:
# 1. PINYIN_SYLLABLES: every toneless Mandarin syllable (ü spelled as "ü")
# 2. TONE_MARKS: marked vowel -> (plain vowel, tone number)
# 3. CJK_RANGES: codepoint ranges treated as Chinese characters
#
# All tables are immutable and validated at import time.
# ═════════════════════════════════════════════════════════════════════════════════

from types import MappingProxyType

# Syllables grouped by initial. Zero-initial syllables are spelled with y-/w-.
_SYLLABLES_BY_INITIAL = {
    "": ("a ai an ang ao e ei en eng er o ou ê "
         "yi ya yo yao ye you yan yin yang ying yong yu yue yuan yun "
         "wu wa wo wai wei wan wen wang weng"),
    "b": "ba bo bai bei bao ban ben bang beng bi biao bie bian bin bing bu",
    "p": "pa po pai pei pao pou pan pen pang peng pi piao pie pian pin ping pu",
    "m": "ma mo me mai mei mao mou man men mang meng mi miao mie miu mian min ming mu",
    "f": "fa fo fei fou fan fen fang feng fu",
    "d": ("da de dai dei dao dou dan den dang deng dong di dia diao die diu dian ding "
          "du duo dui duan dun"),
    "t": "ta te tai tao tou tan tang teng tong ti tiao tie tian ting tu tuo tui tuan tun",
    "n": ("na ne nai nei nao nou nan nen nang neng nong ni niao nie niu nian nin niang ning "
          "nu nuo nuan nü nüe"),
    "l": ("la lo le lai lei lao lou lan lang leng long li lia liao lie liu lian lin liang ling "
          "lu luo luan lun lü lüe"),
    "g": "ga ge gai gei gao gou gan gen gang geng gong gu gua guo guai gui guan gun guang",
    "k": "ka ke kai kei kao kou kan ken kang keng kong ku kua kuo kuai kui kuan kun kuang",
    "h": "ha he hai hei hao hou han hen hang heng hong hu hua huo huai hui huan hun huang",
    "j": "ji jia jiao jie jiu jian jin jiang jing jiong ju jue juan jun",
    "q": "qi qia qiao qie qiu qian qin qiang qing qiong qu que quan qun",
    "x": "xi xia xiao xie xiu xian xin xiang xing xiong xu xue xuan xun",
    "zh": ("zha zhe zhi zhai zhei zhao zhou zhan zhen zhang zheng zhong "
           "zhu zhua zhuo zhuai zhui zhuan zhun zhuang"),
    "ch": ("cha che chi chai chao chou chan chen chang cheng chong "
           "chu chua chuo chuai chui chuan chun chuang"),
    "sh": ("sha she shi shai shei shao shou shan shen shang sheng "
           "shu shua shuo shuai shui shuan shun shuang"),
    "r": "re ri rao rou ran ren rang reng rong ru rua ruo rui ruan run",
    "z": "za ze zi zai zei zao zou zan zen zang zeng zong zu zuo zui zuan zun",
    "c": "ca ce ci cai cao cou can cen cang ceng cong cu cuo cui cuan cun",
    "s": "sa se si sai sao sou san sen sang seng song su suo sui suan sun",
}

# Syllabic nasal interjections. Bare "m", "n" and the erhua "r" are left out: as
# single letters they would let ordinary English words ("watermelon") split as pinyin.
INTERJECTION_SYLLABLES = frozenset({"ng", "hm", "hng"})

PINYIN_SYLLABLES = frozenset(
    syllable for group in _SYLLABLES_BY_INITIAL.values() for syllable in group.split()
) | INTERJECTION_SYLLABLES

# Longest syllable length, bounds the splitter's look-ahead
MAX_SYLLABLE_LENGTH = max(len(s) for s in PINYIN_SYLLABLES)

# Marked vowel -> (plain vowel, tone). Tone 5 (neutral) is unmarked.
TONE_MARKS = {
    "ā": ("a", 1), "á": ("a", 2), "ǎ": ("a", 3), "à": ("a", 4),
    "ē": ("e", 1), "é": ("e", 2), "ě": ("e", 3), "è": ("e", 4),
    "ī": ("i", 1), "í": ("i", 2), "ǐ": ("i", 3), "ì": ("i", 4),
    "ō": ("o", 1), "ó": ("o", 2), "ǒ": ("o", 3), "ò": ("o", 4),
    "ū": ("u", 1), "ú": ("u", 2), "ǔ": ("u", 3), "ù": ("u", 4),
    "ǖ": ("ü", 1), "ǘ": ("ü", 2), "ǚ": ("ü", 3), "ǜ": ("ü", 4),
    "ḿ": ("m", 2), "ń": ("n", 2), "ň": ("n", 3), "ǹ": ("n", 4),
    "ế": ("ê", 2), "ề": ("ê", 4),
}

TONE_DIGITS = frozenset("12345")

# Syllable separators allowed inside a pinyin token ("xi'an")
SYLLABLE_SEPARATORS = frozenset("'’")

# ═════════════════════════════════════════════════════════════════════════════════
# CJK CODEPOINT RANGES
# ═════════════════════════════════════════════════════════════════════════════════

CJK_RANGES = (
    (0x2E80, 0x2FDF),  # CJK radicals supplement, Kangxi radicals
    (0x3400, 0x4DBF),  # Extension A
    (0x4E00, 0x9FFF),  # Unified ideographs
    (0xF900, 0xFAFF),  # Compatibility ideographs
    (0x20000, 0x2A6DF),  # Extension B
    (0x2A700, 0x2EBEF),  # Extensions C-F
    (0x2F800, 0x2FA1F),  # Compatibility supplement
    (0x30000, 0x323AF),  # Extensions G-H
)

# Punctuation accepted in English text besides ASCII letters, digits and whitespace
ENGLISH_PUNCTUATION = frozenset("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~")


# ═════════════════════════════════════════════════════════════════════════════════
# VALIDATION AND IMMUTABLE CREATION
# ═════════════════════════════════════════════════════════════════════════════════


def _assert_lowercase_syllables(syllables):
    """Validate that the inventory is lower-case and free of tone marks."""
    for syllable in syllables:
        if syllable != syllable.lower() or any(ch in TONE_MARKS for ch in syllable):
            raise ValueError(f"Malformed pinyin syllable in inventory: {syllable}")


def _assert_sorted_ranges(ranges):
    """Validate that CJK ranges are ordered and disjoint."""
    previous_end = -1
    for start, end in ranges:
        if start > end or start <= previous_end:
            raise ValueError(f"Overlapping or inverted CJK range: {start:#x}-{end:#x}")
        previous_end = end


_assert_lowercase_syllables(PINYIN_SYLLABLES)
_assert_sorted_ranges(CJK_RANGES)

TONE_MARKS = MappingProxyType(TONE_MARKS)
