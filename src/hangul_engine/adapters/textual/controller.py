"""Textual adapter that turns terminal key presses into engine key events."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence

from hangul_engine.buffer.document import HostDocument
from hangul_engine.config import InputMode
from hangul_engine.keys import keysyms as ks
from hangul_engine.keys.keysyms import ModifierType
from hangul_engine.keys.layout import US_KEYMAP, Keymap
from hangul_engine.keys.models import KeyEvent
from hangul_engine.pipeline.base import DispatchResult
from hangul_engine.runtime import telemetry
from hangul_engine.session import INPUT_MODE_SYMBOLS, Session


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


# textual key name -> (keysym, evdev keycode)
TEXTUAL_KEYS: Dict[str, tuple[int, int]] = {
    "backspace": (ks.KEY_BackSpace, 14),
    "tab": (ks.KEY_Tab, 15),
    "enter": (ks.KEY_Return, 28),
    "escape": (ks.KEY_Escape, 1),
    "space": (ks.KEY_space, 57),
    "home": (ks.KEY_Home, 102),
    "up": (ks.KEY_Up, 103),
    "pageup": (ks.KEY_Page_Up, 104),
    "left": (ks.KEY_Left, 105),
    "right": (ks.KEY_Right, 106),
    "end": (ks.KEY_End, 107),
    "down": (ks.KEY_Down, 108),
    "pagedown": (ks.KEY_Page_Down, 109),
    "insert": (ks.KEY_Insert, 110),
    "delete": (ks.KEY_Delete, 111),
}
TEXTUAL_KEYS.update({f"f{n}": (ks.KEY_F1 + n - 1, 58 + n) for n in range(1, 11)})
TEXTUAL_KEYS.update({"f11": (ks.KEY_F1 + 10, 87), "f12": (ks.KEY_F1 + 11, 88)})

TEXTUAL_MODIFIERS: Dict[str, ModifierType] = {
    "shift": ModifierType.SHIFT,
    "ctrl": ModifierType.CONTROL,
    "alt": ModifierType.MOD1,
    "meta": ModifierType.MOD1,
    "super": ModifierType.SUPER,
}


def key_event_from_textual(
    key: str,
    character: Optional[str] = None,
    *,
    keymap: Optional[Keymap] = US_KEYMAP,
) -> Optional[KeyEvent]:
    """Build a ``KeyEvent`` from Textual's ``key``/``character`` pair.

    Textual reports ``"shift+space"``, ``"ctrl+a"`` or ``"A"``; the keysym is
    taken from the printed character when there is one, and the hardware code
    is recovered from the keymap so positional layouts keep working.
    """

    *prefixes, name = key.split("+")
    modifiers = 0
    for prefix in prefixes:
        flag = TEXTUAL_MODIFIERS.get(prefix.lower())
        if flag is None:
            return None
        modifiers |= flag

    if name in TEXTUAL_KEYS:
        keyval, keycode = TEXTUAL_KEYS[name]
        return KeyEvent(keyval=keyval, keycode=keycode, modifiers=modifiers)

    char = None
    if character and len(character) == 1 and 0x20 < ord(character) < 0x7F:
        char = character
    elif len(name) == 1 and 0x20 < ord(name) < 0x7F:
        char = name
    if char is None:
        return None

    keycode = 0
    located = keymap.keycode_for(char) if keymap is not None else None
    if located is not None:
        keycode, needs_shift = located
        if needs_shift:
            modifiers |= ModifierType.SHIFT
    return KeyEvent(keyval=ord(char), keycode=keycode, modifiers=modifiers)


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_document: Callable[[str], None]
    update_status: Callable[[str], None] = _noop
    show_candidates: Callable[[Sequence[str], int, str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualHangulAdapter:
    """Feeds Textual key presses to a session editing a ``HostDocument``."""

    def __init__(
        self,
        session: Session,
        document: HostDocument,
        hooks: TextualUIHooks,
    ) -> None:
        self.session = session
        self.document = document
        self.hooks = hooks
        self.session.focus_in()
        self._refresh()

    def handle_textual_key(
        self, key: str, *, character: Optional[str] = None
    ) -> Optional[DispatchResult]:
        """Dispatch one Textual key; ``None`` when it maps to no key event."""

        event = key_event_from_textual(key, character, keymap=self.session.keymap)
        if event is None:
            self.hooks.log(f"key -> {key!r} unmapped")
            telemetry.record_event(
                "adapter.unmapped_key", level="debug", data={"key": key}
            )
            return None

        self.hooks.log(f"key -> {event.token}")
        result = self.session.dispatch(event)
        if not result.consumed:
            self.document.apply_key(event.keyval, event.modifiers)
        self.hooks.log(
            f"result <- stage={result.stage.value} consumed={result.consumed} "
            f"forwarded={result.forwarded}"
        )
        self._refresh()
        return result

    def click_candidate(self, index: int) -> None:
        self.session.candidate_clicked(index)
        self._refresh()

    def focus_out(self) -> None:
        self.session.focus_out()
        self._refresh()

    def status_text(self) -> str:
        session = self.session
        parts = [INPUT_MODE_SYMBOLS[session.input_mode]]
        if session.hanja_lock:
            parts.append("漢")
        parts.append(session.preedit_mode.value)
        if session.input_mode is InputMode.HANGUL and session.has_preedit():
            parts.append("composing")
        return " | ".join(parts)

    def _refresh(self) -> None:
        self.hooks.update_document(self.document.display())
        self.hooks.update_status(self.status_text())
        if self.document.lookup_visible:
            self.hooks.show_candidates(
                self.document.lookup_candidates,
                self.document.lookup_cursor,
                self.document.auxiliary,
            )
        else:
            self.hooks.show_candidates((), 0, "")


__all__ = [
    "TEXTUAL_KEYS",
    "TextualHangulAdapter",
    "TextualUIHooks",
    "key_event_from_textual",
]
