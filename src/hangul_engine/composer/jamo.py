"""Jamo classification, combination tables and syllable assembly."""

from __future__ import annotations

from typing import Dict, Tuple

SYLLABLE_BASE = 0xAC00
CHOSEONG_BASE = 0x1100
JUNGSEONG_BASE = 0x1161
JONGSEONG_BASE = 0x11A7

_CHOSEONG_COMPAT = "ㄱㄲㄴㄷㄸㄹㅁㅂㅃㅅㅆㅇㅈㅉㅊㅋㅌㅍㅎ"
_JUNGSEONG_COMPAT = "ㅏㅐㅑㅒㅓㅔㅕㅖㅗㅘㅙㅚㅛㅜㅝㅞㅟㅠㅡㅢㅣ"
_JONGSEONG_COMPAT = "ㄱㄲㄳㄴㄵㄶㄷㄹㄺㄻㄼㄽㄾㄿㅀㅁㅂㅄㅅㅆㅇㅈㅊㅋㅌㅍㅎ"

# 2-set key -> conjoining jamo
DUBEOLSIK: Dict[str, str] = {
    "q": "ᄇ", "Q": "ᄈ",
    "w": "ᄌ", "W": "ᄍ",
    "e": "ᄃ", "E": "ᄄ",
    "r": "ᄀ", "R": "ᄁ",
    "t": "ᄉ", "T": "ᄊ",
    "y": "ᅭ", "u": "ᅧ", "i": "ᅣ",
    "o": "ᅢ", "O": "ᅤ",
    "p": "ᅦ", "P": "ᅨ",
    "a": "ᄆ", "s": "ᄂ", "d": "ᄋ", "f": "ᄅ", "g": "ᄒ",
    "h": "ᅩ", "j": "ᅥ", "k": "ᅡ", "l": "ᅵ",
    "z": "ᄏ", "x": "ᄐ", "c": "ᄎ", "v": "ᄑ",
    "b": "ᅲ", "n": "ᅮ", "m": "ᅳ",
}
for _key in "YUIASDFGHJKLZXCVBNM":
    DUBEOLSIK[_key] = DUBEOLSIK[_key.lower()]

_CHOSEONG_TO_JONGSEONG: Dict[str, str] = {
    "ᄀ": "ᆨ", "ᄁ": "ᆩ", "ᄂ": "ᆫ", "ᄃ": "ᆮ",
    "ᄅ": "ᆯ", "ᄆ": "ᆷ", "ᄇ": "ᆸ", "ᄉ": "ᆺ",
    "ᄊ": "ᆻ", "ᄋ": "ᆼ", "ᄌ": "ᆽ", "ᄎ": "ᆾ",
    "ᄏ": "ᆿ", "ᄐ": "ᇀ", "ᄑ": "ᇁ", "ᄒ": "ᇂ",
}
_JONGSEONG_TO_CHOSEONG = {jong: cho for cho, jong in _CHOSEONG_TO_JONGSEONG.items()}

_JUNGSEONG_PAIRS: Dict[Tuple[str, str], str] = {
    ("ᅩ", "ᅡ"): "ᅪ",  # ㅘ
    ("ᅩ", "ᅢ"): "ᅫ",  # ㅙ
    ("ᅩ", "ᅵ"): "ᅬ",  # ㅚ
    ("ᅮ", "ᅥ"): "ᅯ",  # ㅝ
    ("ᅮ", "ᅦ"): "ᅰ",  # ㅞ
    ("ᅮ", "ᅵ"): "ᅱ",  # ㅟ
    ("ᅳ", "ᅵ"): "ᅴ",  # ㅢ
}

_JONGSEONG_PAIRS: Dict[Tuple[str, str], str] = {
    ("ᆨ", "ᆺ"): "ᆪ",  # ㄳ
    ("ᆫ", "ᆽ"): "ᆬ",  # ㄵ
    ("ᆫ", "ᇂ"): "ᆭ",  # ㄶ
    ("ᆯ", "ᆨ"): "ᆰ",  # ㄺ
    ("ᆯ", "ᆷ"): "ᆱ",  # ㄻ
    ("ᆯ", "ᆸ"): "ᆲ",  # ㄼ
    ("ᆯ", "ᆺ"): "ᆳ",  # ㄽ
    ("ᆯ", "ᇀ"): "ᆴ",  # ㄾ
    ("ᆯ", "ᇁ"): "ᆵ",  # ㄿ
    ("ᆯ", "ᇂ"): "ᆶ",  # ㅀ
    ("ᆸ", "ᆺ"): "ᆹ",  # ㅄ
}
_JONGSEONG_SPLITS = {combined: pair for pair, combined in _JONGSEONG_PAIRS.items()}


def is_choseong(jamo: str) -> bool:
    return bool(jamo) and 0x1100 <= ord(jamo) <= 0x1112


def is_jungseong(jamo: str) -> bool:
    return bool(jamo) and 0x1161 <= ord(jamo) <= 0x1175


def is_jongseong(jamo: str) -> bool:
    return bool(jamo) and 0x11A8 <= ord(jamo) <= 0x11C2


def choseong_to_jongseong(jamo: str) -> str:
    return _CHOSEONG_TO_JONGSEONG.get(jamo, "")


def jongseong_to_choseong(jamo: str) -> str:
    return _JONGSEONG_TO_CHOSEONG.get(jamo, "")


def combine_jungseong(first: str, second: str) -> str:
    return _JUNGSEONG_PAIRS.get((first, second), "")


def combine_jongseong(first: str, second: str) -> str:
    return _JONGSEONG_PAIRS.get((first, second), "")


def split_jongseong(jamo: str) -> Tuple[str, str]:
    """``(kept, moved)`` for a compound final, ``("", jamo)`` for a simple one."""

    if jamo in _JONGSEONG_SPLITS:
        return _JONGSEONG_SPLITS[jamo]
    return "", jamo


def to_compatibility(jamo: str) -> str:
    code = ord(jamo)
    if is_choseong(jamo):
        return _CHOSEONG_COMPAT[code - CHOSEONG_BASE]
    if is_jungseong(jamo):
        return _JUNGSEONG_COMPAT[code - JUNGSEONG_BASE]
    if is_jongseong(jamo):
        return _JONGSEONG_COMPAT[code - JONGSEONG_BASE - 1]
    return jamo


def compose_syllable(choseong: str, jungseong: str, jongseong: str = "") -> str:
    """Render a (possibly partial) syllable as display text."""

    if choseong and jungseong:
        index = (ord(choseong) - CHOSEONG_BASE) * 21 + (ord(jungseong) - JUNGSEONG_BASE)
        final = ord(jongseong) - JONGSEONG_BASE if jongseong else 0
        return chr(SYLLABLE_BASE + index * 28 + final)
    return "".join(to_compatibility(j) for j in (choseong, jungseong, jongseong) if j)
