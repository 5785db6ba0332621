"""Composer protocol and the transition predicate injected at construction."""

from __future__ import annotations

from typing import Callable, Protocol

from .jamo import is_choseong, is_jungseong


class Composer(Protocol):
    """Holds at most one in-progress syllable.

    ``commit_string`` and ``preedit_string`` describe the outcome of the most
    recent ``process``/``backspace`` call; the commit string is cleared at the
    start of each of those calls.
    """

    def process(self, keyval: int) -> bool:
        """Feed one keysym; ``False`` means the key is not part of the script."""
        ...

    def backspace(self) -> bool:
        ...

    def flush(self) -> str:
        """Return the pending syllable as plain text and clear all state."""
        ...

    def reset(self) -> None:
        ...

    def commit_string(self) -> str:
        ...

    def preedit_string(self) -> str:
        ...

    def is_transliteration(self) -> bool:
        ...

    def select_keyboard(self, keyboard_id: str) -> None:
        ...

    def has_choseong(self) -> bool:
        ...

    def has_jungseong(self) -> bool:
        ...

    def has_jongseong(self) -> bool:
        ...


# (composer, incoming jamo, current preedit) -> accept
TransitionPredicate = Callable[[Composer, str, str], bool]


def allow_all(composer: Composer, jamo: str, preedit: str) -> bool:
    del composer, jamo, preedit
    return True


def strict_order(composer: Composer, jamo: str, preedit: str) -> bool:
    """Reject a jamo that would land in front of components already typed."""

    del preedit
    if is_choseong(jamo):
        if composer.has_jungseong() or composer.has_jongseong():
            return False
    if is_jungseong(jamo):
        if composer.has_jongseong():
            return False
    return True


def transition_predicate(auto_reorder: bool) -> TransitionPredicate:
    return allow_all if auto_reorder else strict_order


__all__ = [
    "Composer",
    "TransitionPredicate",
    "allow_all",
    "strict_order",
    "transition_predicate",
]
