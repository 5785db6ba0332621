from __future__ import annotations

from typing import List, Tuple

from hangul_engine.composer import (
    DubeolsikComposer,
    allow_all,
    strict_order,
    transition_predicate,
)
from hangul_engine.composer.jamo import (
    compose_syllable,
    split_jongseong,
    to_compatibility,
)


def make_composer(*, auto_reorder: bool = True) -> DubeolsikComposer:
    return DubeolsikComposer(transition=transition_predicate(auto_reorder))


def type_keys(composer: DubeolsikComposer, keys: str) -> List[Tuple[str, str]]:
    """Feed ``keys`` and collect ``(commit, preedit)`` after each one."""

    trace = []
    for key in keys:
        assert composer.process(ord(key))
        trace.append((composer.commit_string(), composer.preedit_string()))
    return trace


def test_two_keys_make_a_syllable() -> None:
    composer = make_composer()

    trace = type_keys(composer, "rk")

    assert trace == [("", "ㄱ"), ("", "가")]
    assert composer.has_choseong() and composer.has_jungseong()
    assert not composer.has_jongseong()


def test_final_consonant_moves_to_next_syllable() -> None:
    composer = make_composer()

    trace = type_keys(composer, "dkssud")

    assert [commit for commit, _ in trace] == ["", "", "", "안", "", ""]
    assert composer.preedit_string() == "녕"


def test_compound_vowel_and_final() -> None:
    composer = make_composer()

    type_keys(composer, "rhk")
    assert composer.preedit_string() == "과"

    composer.reset()
    type_keys(composer, "dlfr")
    assert composer.preedit_string() == "읽"


def test_compound_final_splits_before_a_vowel() -> None:
    composer = make_composer()

    trace = type_keys(composer, "dlfrk")

    assert trace[-1] == ("일", "가")


def test_shifted_keys_give_double_consonants() -> None:
    composer = make_composer()

    type_keys(composer, "Rk")

    assert composer.preedit_string() == "까"


def test_backspace_removes_one_jamo_at_a_time() -> None:
    composer = make_composer()
    type_keys(composer, "gks")

    assert composer.backspace()
    assert composer.preedit_string() == "하"
    assert composer.backspace()
    assert composer.preedit_string() == "ㅎ"
    assert composer.backspace()
    assert composer.is_empty()
    assert not composer.backspace()


def test_non_letter_commits_syllable_and_itself() -> None:
    composer = make_composer()
    type_keys(composer, "rk")

    assert composer.process(ord("1"))
    assert composer.commit_string() == "가1"
    assert composer.preedit_string() == ""


def test_space_is_not_consumed_but_ends_the_syllable() -> None:
    composer = make_composer()
    type_keys(composer, "rk")

    assert not composer.process(0x20)
    assert composer.commit_string() == "가"
    assert composer.is_empty()


def test_flush_returns_preedit_and_clears() -> None:
    composer = make_composer()
    type_keys(composer, "gks")

    assert composer.flush() == "한"
    assert composer.is_empty()
    assert composer.commit_string() == ""
    assert composer.flush() == ""


def test_vowel_first_reorders_when_allowed() -> None:
    composer = make_composer(auto_reorder=True)

    trace = type_keys(composer, "kr")

    assert trace[-1] == ("", "가")


def test_strict_order_commits_out_of_order_jamo() -> None:
    composer = make_composer(auto_reorder=False)

    trace = type_keys(composer, "kr")

    assert trace[-1] == ("ㅏ", "ㄱ")


def test_strict_order_still_accepts_a_final_consonant() -> None:
    composer = make_composer(auto_reorder=False)

    type_keys(composer, "rks")

    assert composer.preedit_string() == "간"


def test_transition_predicate_receives_the_incoming_jamo() -> None:
    seen: List[str] = []

    def spy(composer, jamo, preedit):
        seen.append(jamo)
        return allow_all(composer, jamo, preedit)

    composer = DubeolsikComposer(transition=spy)
    type_keys(composer, "rks")

    # the final arrives as a jongseong, not the key's choseong
    assert seen == ["ᅡ", "ᆫ"]


def test_unknown_keyboard_falls_back_to_default() -> None:
    composer = DubeolsikComposer("3f")

    assert composer.keyboard == "2"


def test_jamo_helpers() -> None:
    assert compose_syllable("ᄒ", "ᅡ", "ᆫ") == "한"
    assert compose_syllable("ᄀ", "") == "ㄱ"
    assert to_compatibility("ᆫ") == "ㄴ"
    assert split_jongseong("ᆰ") == ("ᆯ", "ᆨ")
    assert split_jongseong("ᆫ") == ("", "ᆫ")


def test_strict_order_rejects_choseong_after_vowel() -> None:
    composer = make_composer()
    type_keys(composer, "k")

    assert not strict_order(composer, "ᄀ", composer.preedit_string())
    assert strict_order(composer, "ᆨ", composer.preedit_string())
