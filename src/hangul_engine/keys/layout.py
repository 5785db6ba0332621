"""Fixed US-qwerty keymap used to normalize key events before composition.

Korean layouts are positional: the composer cares which physical key was
pressed, not what the active system layout prints on it. Hardware codes are
looked up here as if the keyboard were a plain US qwerty board.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple

from .keysyms import ModifierType, is_ascii_letter
from .models import KeyEvent

# evdev keycode -> (unshifted, shifted)
_US_ROWS: Tuple[Tuple[int, str, str], ...] = (
    (2, "1234567890-=", "!@#$%^&*()_+"),
    (16, "qwertyuiop[]", "QWERTYUIOP{}"),
    (30, "asdfghjkl;'`", 'ASDFGHJKL:"~'),
    (43, "\\", "|"),
    (44, "zxcvbnm,./", "ZXCVBNM<>?"),
)


def _build_us_table() -> Dict[int, Tuple[int, int]]:
    table: Dict[int, Tuple[int, int]] = {}
    for start, plain, shifted in _US_ROWS:
        for offset, (low, high) in enumerate(zip(plain, shifted)):
            table[start + offset] = (ord(low), ord(high))
    table[57] = (0x20, 0x20)
    return table


@dataclass(frozen=True, slots=True)
class Keymap:
    """Keycode to keysym table with a shift level."""

    name: str
    table: Mapping[int, Tuple[int, int]] = field(default_factory=dict)

    def lookup_keysym(self, keycode: int, modifiers: int) -> Optional[int]:
        entry = self.table.get(keycode)
        if entry is None:
            return None
        plain, shifted = entry
        shift = bool(modifiers & ModifierType.SHIFT)
        if is_ascii_letter(plain) and modifiers & ModifierType.LOCK:
            shift = not shift
        return shifted if shift else plain

    def keycode_for(self, char: str) -> Optional[Tuple[int, bool]]:
        """Reverse lookup: ``(keycode, needs_shift)`` for a printable char."""

        value = ord(char)
        for keycode, (plain, shifted) in self.table.items():
            if plain == value:
                return keycode, False
            if shifted == value:
                return keycode, True
        return None


US_KEYMAP = Keymap(name="us", table=_build_us_table())


def normalize_keyval(
    event: KeyEvent, keymap: Optional[Keymap], *, transliteration: bool
) -> int:
    """Return the keysym the composer should see for ``event``.

    Unless the composer transliterates, the keysym is re-derived from the
    hardware code. Caps lock never changes the result for ASCII letters.
    Unknown hardware codes keep the event's own keysym.
    """

    keyval = event.keyval
    if not transliteration and keymap is not None:
        mapped = keymap.lookup_keysym(event.keycode, event.modifiers)
        if mapped is not None:
            keyval = mapped

    if event.caps_lock and is_ascii_letter(keyval):
        keyval = ord(chr(keyval).swapcase())
    return keyval


__all__ = ["Keymap", "US_KEYMAP", "normalize_keyval"]
