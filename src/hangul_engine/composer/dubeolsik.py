"""Standard 2-set (dubeolsik) composer."""

from __future__ import annotations

from typing import List, Tuple

from hangul_engine.runtime import telemetry

from .base import TransitionPredicate, allow_all
from .jamo import (
    DUBEOLSIK,
    choseong_to_jongseong,
    combine_jongseong,
    combine_jungseong,
    compose_syllable,
    is_choseong,
    is_jungseong,
    jongseong_to_choseong,
    split_jongseong,
)

DEFAULT_KEYBOARD = "2"
SUPPORTED_KEYBOARDS = frozenset({DEFAULT_KEYBOARD})

_Syllable = Tuple[str, str, str]
_EMPTY: _Syllable = ("", "", "")


class DubeolsikComposer:
    """Composes one syllable at a time from 2-set key presses.

    Every change to the in-progress syllable pushes the previous state onto
    ``_history`` so backspace removes one jamo at a time.
    """

    def __init__(
        self,
        keyboard: str = DEFAULT_KEYBOARD,
        *,
        transition: TransitionPredicate = allow_all,
    ) -> None:
        self.transition = transition
        self.keyboard = DEFAULT_KEYBOARD
        self._choseong = ""
        self._jungseong = ""
        self._jongseong = ""
        self._history: List[_Syllable] = []
        self._commit = ""
        self.select_keyboard(keyboard)

    # -- state -------------------------------------------------------------

    def has_choseong(self) -> bool:
        return bool(self._choseong)

    def has_jungseong(self) -> bool:
        return bool(self._jungseong)

    def has_jongseong(self) -> bool:
        return bool(self._jongseong)

    def is_empty(self) -> bool:
        return not (self._choseong or self._jungseong or self._jongseong)

    def commit_string(self) -> str:
        return self._commit

    def preedit_string(self) -> str:
        return compose_syllable(self._choseong, self._jungseong, self._jongseong)

    def is_transliteration(self) -> bool:
        return False

    def select_keyboard(self, keyboard_id: str) -> None:
        if keyboard_id not in SUPPORTED_KEYBOARDS:
            telemetry.record_event(
                "composer.keyboard_fallback",
                level="warning",
                data={"requested": keyboard_id, "using": DEFAULT_KEYBOARD},
                logger_name="hangul_engine.composer",
            )
            keyboard_id = DEFAULT_KEYBOARD
        self.keyboard = keyboard_id

    # -- operations --------------------------------------------------------

    def process(self, keyval: int) -> bool:
        self._commit = ""
        if not 0x21 <= keyval <= 0x7E:
            self._commit_current()
            return False

        char = chr(keyval)
        jamo = DUBEOLSIK.get(char)
        if jamo is None:
            self._commit_current()
            self._commit += char
            return True

        if is_choseong(jamo):
            self._feed_choseong(jamo)
        elif is_jungseong(jamo):
            self._feed_jungseong(jamo)
        return True

    def backspace(self) -> bool:
        self._commit = ""
        if not self._history:
            return False
        self._set(self._history.pop())
        return True

    def flush(self) -> str:
        text = self.preedit_string()
        self.reset()
        return text

    def reset(self) -> None:
        self._set(_EMPTY)
        self._history.clear()
        self._commit = ""

    # -- composition rules -------------------------------------------------

    def _feed_choseong(self, jamo: str) -> None:
        if self._jongseong:
            compound = combine_jongseong(self._jongseong, choseong_to_jongseong(jamo))
            if compound and self._accepts(compound):
                self._push((self._choseong, self._jungseong, compound))
            else:
                self._start_new((jamo, "", ""))
        elif self._choseong and self._jungseong:
            final = choseong_to_jongseong(jamo)
            if final and self._accepts(final):
                self._push((self._choseong, self._jungseong, final))
            else:
                self._start_new((jamo, "", ""))
        elif self._jungseong:
            if self._accepts(jamo):
                self._push((jamo, self._jungseong, ""))
            else:
                self._start_new((jamo, "", ""))
        else:
            self._start_new((jamo, "", ""))

    def _feed_jungseong(self, jamo: str) -> None:
        if self._jongseong:
            kept, moved = split_jongseong(self._jongseong)
            self._jongseong = kept
            self._commit_current()
            next_choseong = jongseong_to_choseong(moved)
            self._history = [_EMPTY, (next_choseong, "", "")]
            self._set((next_choseong, jamo, ""))
        elif self._jungseong:
            compound = combine_jungseong(self._jungseong, jamo)
            if compound and self._accepts(compound):
                self._push((self._choseong, compound, ""))
            else:
                self._start_new(("", jamo, ""))
        elif self._accepts(jamo):
            self._push((self._choseong, jamo, ""))
        else:
            self._start_new(("", jamo, ""))

    def _accepts(self, jamo: str) -> bool:
        return self.transition(self, jamo, self.preedit_string())

    def _push(self, state: _Syllable) -> None:
        self._history.append((self._choseong, self._jungseong, self._jongseong))
        self._set(state)

    def _start_new(self, state: _Syllable) -> None:
        self._commit_current()
        self._history = [_EMPTY]
        self._set(state)

    def _commit_current(self) -> None:
        self._commit += self.preedit_string()
        self._set(_EMPTY)
        self._history.clear()

    def _set(self, state: _Syllable) -> None:
        self._choseong, self._jungseong, self._jongseong = state


__all__ = ["DEFAULT_KEYBOARD", "DubeolsikComposer", "SUPPORTED_KEYBOARDS"]
