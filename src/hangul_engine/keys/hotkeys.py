"""Hotkey lists parsed from configured key-binding specifications."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from hangul_engine.runtime.telemetry import record_event, span

from .keysyms import MODIFIER_KEYSYMS
from .models import Hotkey


@dataclass(frozen=True, slots=True)
class HotkeyList:
    """Immutable binding group (``switch``, ``hanja``, ``on`` or ``off``).

    ``all_modifiers`` is the union of every binding's modifier mask. It lets
    the dispatcher pass a lone modifier press through untouched when that
    modifier starts one of the configured combinations.
    """

    keys: tuple[Hotkey, ...] = ()
    all_modifiers: int = 0

    @classmethod
    def from_keys(cls, keys: Iterable[Hotkey]) -> "HotkeyList":
        unique = tuple(dict.fromkeys(keys))
        mask = 0
        for key in unique:
            mask |= key.modifiers
        return cls(keys=unique, all_modifiers=mask)

    @classmethod
    def from_string(
        cls, spec: Optional[str], *, group: str = "", logger_name: str | None = None
    ) -> "HotkeyList":
        """Parse a comma separated list such as ``"Hangul,Shift+space"``.

        Entries that cannot be parsed are skipped.
        """

        if not spec:
            return cls()
        with span(
            "hotkeys::parse",
            logger_name=logger_name,
            component="hotkeys",
            metadata={"group": group or "?", "spec": spec},
        ) as handle:
            parsed: list[Hotkey] = []
            for item in spec.split(","):
                if not item.strip():
                    continue
                hotkey = Hotkey.parse(item)
                if hotkey is None:
                    record_event(
                        "hotkeys.skipped",
                        level="warning",
                        data={"group": group, "entry": item.strip()},
                        logger_name=logger_name,
                    )
                    continue
                parsed.append(hotkey)
            handle.add_metadata("count", len(parsed))
            return cls.from_keys(parsed)

    def match(self, keyval: int, modifiers: int) -> bool:
        return any(key.matches(keyval, modifiers) for key in self.keys)

    def has_modifier(self, keyval: int) -> bool:
        """True when ``keyval`` is a modifier key used by some binding here."""

        for flag, keysyms in MODIFIER_KEYSYMS.items():
            if self.all_modifiers & flag and keyval in keysyms:
                return True
        return False

    def __iter__(self) -> Iterator[Hotkey]:
        return iter(self.keys)

    def __len__(self) -> int:
        return len(self.keys)

    def to_string(self) -> str:
        return ",".join(key.token for key in self.keys)


@dataclass(frozen=True, slots=True)
class HotkeyBindings:
    """The four binding groups consulted by the dispatcher."""

    switch: HotkeyList = HotkeyList()
    hanja: HotkeyList = HotkeyList()
    force_on: HotkeyList = HotkeyList()
    force_off: HotkeyList = HotkeyList()

    @classmethod
    def parse(
        cls,
        *,
        switch: Optional[str] = None,
        hanja: Optional[str] = None,
        force_on: Optional[str] = None,
        force_off: Optional[str] = None,
    ) -> "HotkeyBindings":
        return cls(
            switch=HotkeyList.from_string(switch, group="switch"),
            hanja=HotkeyList.from_string(hanja, group="hanja"),
            force_on=HotkeyList.from_string(force_on, group="on"),
            force_off=HotkeyList.from_string(force_off, group="off"),
        )


__all__ = ["HotkeyList", "HotkeyBindings"]
