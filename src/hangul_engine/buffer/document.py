"""In-memory text client used by tests and the terminal demo."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Tuple

from hangul_engine.keys.keysyms import (
    KEY_BackSpace,
    KEY_Delete,
    KEY_End,
    KEY_Home,
    KEY_KP_Enter,
    KEY_Left,
    KEY_Return,
    KEY_Right,
    KEY_Tab,
    ModifierType,
    keyval_to_char,
)

from .sync import EngineProperty, PreeditText, SurroundingText

if TYPE_CHECKING:  # pragma: no cover
    from hangul_engine.candidates.table import LookupTable


@dataclass(slots=True)
class HostDocument:
    """Single-line-agnostic text buffer with a caret, a selection anchor and a
    log of everything the engine asked it to do.

    ``supports_surrounding`` mimics hosts that cannot report surrounding text;
    ``apply_forwarded`` controls whether forwarded keys edit the text the way
    a plain text widget would.
    """

    text: str = ""
    cursor: int = 0
    anchor: int = 0
    supports_surrounding: bool = True
    apply_forwarded: bool = True
    version: int = 0
    preedit: Optional[PreeditText] = None
    lookup_visible: bool = False
    lookup_candidates: Tuple[str, ...] = ()
    lookup_cursor: int = 0
    auxiliary: str = ""
    commits: List[str] = field(default_factory=list)
    deletions: List[Tuple[int, int]] = field(default_factory=list)
    forwarded: List[Tuple[int, int, int]] = field(default_factory=list)
    properties: Dict[str, EngineProperty] = field(default_factory=dict)
    surrounding_requests: int = 0

    @classmethod
    def from_text(cls, text: str, *, cursor: Optional[int] = None) -> "HostDocument":
        position = len(text) if cursor is None else cursor
        return cls(text=text, cursor=position, anchor=position)

    # -- HostClient --------------------------------------------------------

    def get_surrounding_text(self) -> Optional[SurroundingText]:
        self.surrounding_requests += 1
        if not self.supports_surrounding:
            return None
        return SurroundingText.coerce(self.text, self.cursor, self.anchor)

    def delete_surrounding_text(self, offset: int, length: int) -> None:
        self.deletions.append((offset, length))
        start = max(0, min(len(self.text), self.cursor + offset))
        end = max(start, min(len(self.text), start + max(0, length)))
        self._splice(start, end, "")

    def commit_text(self, text: str) -> None:
        self.commits.append(text)
        start, end = sorted((self.cursor, self.anchor))
        self._splice(start, end, text)

    def update_preedit_text(self, preedit: PreeditText) -> None:
        self.preedit = preedit if preedit.visible and preedit.text else None

    def hide_preedit_text(self) -> None:
        self.preedit = None

    def forward_key_event(self, keyval: int, keycode: int, modifiers: int) -> None:
        self.forwarded.append((keyval, keycode, modifiers))
        if self.apply_forwarded and not modifiers & ModifierType.RELEASE:
            self.apply_key(keyval, modifiers)

    def update_lookup_table(self, table: "LookupTable", visible: bool) -> None:
        self.lookup_candidates = tuple(table.page_values())
        self.lookup_cursor = table.cursor_in_page
        self.lookup_visible = visible

    def hide_lookup_table(self) -> None:
        self.lookup_visible = False

    def update_auxiliary_text(self, text: str, visible: bool) -> None:
        self.auxiliary = text if visible else ""

    def register_properties(self, properties: Sequence[EngineProperty]) -> None:
        for prop in properties:
            self.properties[prop.key] = prop

    def update_property(self, prop: EngineProperty) -> None:
        self.properties[prop.key] = prop

    # -- editing outside the engine ----------------------------------------

    def apply_key(self, keyval: int, modifiers: int = 0) -> None:
        """Edit the text the way a plain widget would for an unhandled key."""

        if modifiers & (ModifierType.CONTROL | ModifierType.MOD1 | ModifierType.SUPER):
            return
        start, end = sorted((self.cursor, self.anchor))
        if keyval == KEY_BackSpace:
            if start == end:
                start = max(0, start - 1)
            self._splice(start, end, "")
        elif keyval == KEY_Delete:
            if start == end:
                end = min(len(self.text), end + 1)
            self._splice(start, end, "")
        elif keyval in (KEY_Return, KEY_KP_Enter):
            self._splice(start, end, "\n")
        elif keyval == KEY_Tab:
            self._splice(start, end, "\t")
        elif keyval == KEY_Left:
            self.move_cursor(self.cursor - 1)
        elif keyval == KEY_Right:
            self.move_cursor(self.cursor + 1)
        elif keyval == KEY_Home:
            self.move_cursor(0)
        elif keyval == KEY_End:
            self.move_cursor(len(self.text))
        else:
            char = keyval_to_char(keyval)
            if char is not None:
                self._splice(start, end, char)

    def move_cursor(self, position: int) -> None:
        self.cursor = self.anchor = max(0, min(len(self.text), position))

    def select(self, anchor: int, cursor: int) -> None:
        self.anchor = max(0, min(len(self.text), anchor))
        self.cursor = max(0, min(len(self.text), cursor))

    def insert_external(self, text: str) -> None:
        """Insert at the caret without going through the engine."""

        start, end = sorted((self.cursor, self.anchor))
        self._splice(start, end, text)

    def display(self) -> str:
        """Document text with any visible preedit drawn at the caret."""

        if self.preedit is None:
            return self.text
        return self.text[: self.cursor] + self.preedit.text + self.text[self.cursor :]

    def _splice(self, start: int, end: int, replacement: str) -> None:
        self.text = self.text[:start] + replacement + self.text[end:]
        self.cursor = self.anchor = start + len(replacement)
        self.version += 1


__all__ = ["HostDocument"]
