"""Boundary types shared between the engine and the host text client."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum, IntFlag
from typing import TYPE_CHECKING, Optional, Protocol, Sequence

if TYPE_CHECKING:  # pragma: no cover
    from hangul_engine.candidates.table import LookupTable


class Capability(IntFlag):
    """Features the host advertises for a context."""

    NONE = 0
    PREEDIT_TEXT = 1 << 0
    AUXILIARY_TEXT = 1 << 1
    LOOKUP_TABLE = 1 << 2
    FOCUS = 1 << 3
    PROPERTY = 1 << 4
    SURROUNDING_TEXT = 1 << 5


class InputPurpose(IntEnum):
    FREE_FORM = 0
    ALPHA = 1
    DIGITS = 2
    NUMBER = 3
    PHONE = 4
    URL = 5
    EMAIL = 6
    NAME = 7
    PASSWORD = 8
    PIN = 9


class PreeditFocusMode(Enum):
    """What the host does with visible preedit when the context loses focus."""

    COMMIT = "commit"
    CLEAR = "clear"


class PreeditStyle(Enum):
    UNDERLINE = "underline"
    HIGHLIGHT = "highlight"


@dataclass(frozen=True, slots=True)
class PreeditRange:
    start: int
    end: int
    style: PreeditStyle


@dataclass(frozen=True, slots=True)
class PreeditText:
    text: str
    ranges: tuple[PreeditRange, ...] = ()
    cursor: int = 0
    visible: bool = True
    mode: PreeditFocusMode = PreeditFocusMode.COMMIT


@dataclass(frozen=True, slots=True)
class SurroundingText:
    """Host text around the caret. Offsets are codepoint indexes into ``text``."""

    text: str
    cursor: int
    anchor: int

    @classmethod
    def coerce(
        cls, text: Optional[str], cursor: Optional[int], anchor: Optional[int]
    ) -> Optional["SurroundingText"]:
        """Build a snapshot, or ``None`` when the host reply is unusable."""

        if text is None or cursor is None:
            return None
        if anchor is None:
            anchor = cursor
        if not 0 <= cursor <= len(text) or not 0 <= anchor <= len(text):
            return None
        return cls(text=text, cursor=cursor, anchor=anchor)

    @property
    def has_selection(self) -> bool:
        return self.anchor != self.cursor

    def selection(self) -> str:
        start, end = sorted((self.cursor, self.anchor))
        return self.text[start:end]

    def before_cursor(self, limit: int) -> str:
        return self.text[max(0, self.cursor - limit) : self.cursor]


@dataclass(frozen=True, slots=True)
class EngineProperty:
    """A toggle the host may show in its panel or menu."""

    key: str
    active: bool = False
    label: str = ""
    symbol: str = ""
    visible: bool = True


class HostClient(Protocol):
    """Operations the engine issues against the focused text client."""

    def get_surrounding_text(self) -> Optional[SurroundingText]:
        ...

    def delete_surrounding_text(self, offset: int, length: int) -> None:
        """Delete ``length`` codepoints starting ``offset`` from the caret."""
        ...

    def commit_text(self, text: str) -> None:
        ...

    def update_preedit_text(self, preedit: PreeditText) -> None:
        ...

    def hide_preedit_text(self) -> None:
        ...

    def forward_key_event(self, keyval: int, keycode: int, modifiers: int) -> None:
        ...

    def update_lookup_table(self, table: "LookupTable", visible: bool) -> None:
        ...

    def hide_lookup_table(self) -> None:
        ...

    def update_auxiliary_text(self, text: str, visible: bool) -> None:
        ...

    def register_properties(self, properties: Sequence[EngineProperty]) -> None:
        ...

    def update_property(self, prop: EngineProperty) -> None:
        ...


__all__ = [
    "Capability",
    "EngineProperty",
    "HostClient",
    "InputPurpose",
    "PreeditFocusMode",
    "PreeditRange",
    "PreeditStyle",
    "PreeditText",
    "SurroundingText",
]
