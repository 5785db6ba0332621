"""Dataclasses describing key events and hotkey bindings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from .keysyms import (
    IGNORED_HOTKEY_MODIFIERS,
    ModifierType,
    keyval_from_name,
    keyval_name,
)

MODIFIER_NAMES: Dict[str, ModifierType] = {
    "shift": ModifierType.SHIFT,
    "lock": ModifierType.LOCK,
    "control": ModifierType.CONTROL,
    "ctrl": ModifierType.CONTROL,
    "alt": ModifierType.MOD1,
    "mod1": ModifierType.MOD1,
    "mod2": ModifierType.MOD2,
    "mod3": ModifierType.MOD3,
    "mod4": ModifierType.MOD4,
    "mod5": ModifierType.MOD5,
    "super": ModifierType.SUPER,
    "hyper": ModifierType.HYPER,
    "meta": ModifierType.META,
    "release": ModifierType.RELEASE,
}


def strip_ignored(modifiers: int) -> int:
    return int(modifiers) & ~int(IGNORED_HOTKEY_MODIFIERS)


@dataclass(frozen=True, slots=True)
class KeyEvent:
    """Single key event as received from the host."""

    keyval: int
    keycode: int = 0
    modifiers: int = 0

    @property
    def is_release(self) -> bool:
        return bool(self.modifiers & ModifierType.RELEASE)

    @property
    def caps_lock(self) -> bool:
        return bool(self.modifiers & ModifierType.LOCK)

    def has_any(self, mask: int) -> bool:
        return bool(self.modifiers & mask)

    @property
    def token(self) -> str:
        names = [
            name.capitalize()
            for name, flag in MODIFIER_NAMES.items()
            if name not in {"ctrl", "alt"} and self.modifiers & flag
        ]
        return "+".join([*names, keyval_name(self.keyval)])


@dataclass(frozen=True, slots=True)
class Hotkey:
    """A ``(keyval, modifiers)`` pair with capslock/numlock already stripped."""

    keyval: int
    modifiers: int = 0

    def __post_init__(self) -> None:
        if self.keyval <= 0:
            raise ValueError("keyval must be positive")
        object.__setattr__(self, "modifiers", strip_ignored(self.modifiers))

    @classmethod
    def parse(cls, spec: str) -> Optional["Hotkey"]:
        """Parse ``"Control+Shift+F9"`` style text; ``None`` when unparseable."""

        parts = [part.strip() for part in spec.strip().split("+")]
        if not parts or not parts[-1]:
            # "Control++" names the plus key itself
            if spec.strip().endswith("++") or spec.strip() == "+":
                parts = [*parts[:-2], "+"]
            else:
                return None

        keyval = keyval_from_name(parts[-1])
        if keyval is None:
            return None

        modifiers = 0
        for name in parts[:-1]:
            flag = MODIFIER_NAMES.get(name.lower())
            if flag is None:
                return None
            modifiers |= flag
        return cls(keyval=keyval, modifiers=modifiers)

    def matches(self, keyval: int, modifiers: int) -> bool:
        return self.keyval == keyval and self.modifiers == strip_ignored(modifiers)

    @property
    def token(self) -> str:
        return KeyEvent(self.keyval, 0, self.modifiers).token


__all__ = ["KeyEvent", "Hotkey", "MODIFIER_NAMES", "strip_ignored"]
