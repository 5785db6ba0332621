"""X11 keysym values, modifier masks and keysym name lookup."""

from __future__ import annotations

from enum import IntFlag
from typing import Dict, Optional


class ModifierType(IntFlag):
    """Modifier bits as delivered by the host with each key event."""

    NONE = 0
    SHIFT = 1 << 0
    LOCK = 1 << 1
    CONTROL = 1 << 2
    MOD1 = 1 << 3
    MOD2 = 1 << 4
    MOD3 = 1 << 5
    MOD4 = 1 << 6
    MOD5 = 1 << 7
    SUPER = 1 << 26
    HYPER = 1 << 27
    META = 1 << 28
    RELEASE = 1 << 30


ALT = ModifierType.MOD1
NUM_LOCK = ModifierType.MOD2

# capslock and numlock never take part in hotkey comparison
IGNORED_HOTKEY_MODIFIERS = ModifierType.LOCK | ModifierType.MOD2

# any of these on a key event ends composition
NON_SHIFT_MODIFIERS = (
    ModifierType.CONTROL
    | ModifierType.MOD1
    | ModifierType.MOD3
    | ModifierType.MOD4
    | ModifierType.MOD5
    | ModifierType.SUPER
    | ModifierType.HYPER
    | ModifierType.META
)

KEY_space = 0x020
KEY_1 = 0x031
KEY_9 = 0x039
KEY_h = 0x068
KEY_j = 0x06A
KEY_k = 0x06B
KEY_l = 0x06C

KEY_BackSpace = 0xFF08
KEY_Tab = 0xFF09
KEY_Return = 0xFF0D
KEY_Escape = 0xFF1B
KEY_Hangul = 0xFF31
KEY_Hangul_Hanja = 0xFF34
KEY_Home = 0xFF50
KEY_Left = 0xFF51
KEY_Up = 0xFF52
KEY_Right = 0xFF53
KEY_Down = 0xFF54
KEY_Page_Up = 0xFF55
KEY_Page_Down = 0xFF56
KEY_End = 0xFF57
KEY_Insert = 0xFF63
KEY_Menu = 0xFF67
KEY_KP_Enter = 0xFF8D
KEY_F1 = 0xFFBE
KEY_Shift_L = 0xFFE1
KEY_Shift_R = 0xFFE2
KEY_Control_L = 0xFFE3
KEY_Control_R = 0xFFE4
KEY_Caps_Lock = 0xFFE5
KEY_Meta_L = 0xFFE7
KEY_Meta_R = 0xFFE8
KEY_Alt_L = 0xFFE9
KEY_Alt_R = 0xFFEA
KEY_Super_L = 0xFFEB
KEY_Super_R = 0xFFEC
KEY_Hyper_L = 0xFFED
KEY_Hyper_R = 0xFFEE
KEY_Delete = 0xFFFF
KEY_VoidSymbol = 0xFFFFFF

SHIFT_KEYS = frozenset({KEY_Shift_L, KEY_Shift_R})

# modifier bit -> the keysyms that press it
MODIFIER_KEYSYMS: Dict[ModifierType, frozenset[int]] = {
    ModifierType.CONTROL: frozenset({KEY_Control_L, KEY_Control_R}),
    ModifierType.MOD1: frozenset({KEY_Alt_L, KEY_Alt_R}),
    ModifierType.SUPER: frozenset({KEY_Super_L, KEY_Super_R}),
    ModifierType.HYPER: frozenset({KEY_Hyper_L, KEY_Hyper_R}),
    ModifierType.META: frozenset({KEY_Meta_L, KEY_Meta_R}),
}

_ASCII_NAMES: Dict[str, int] = {
    "space": 0x20,
    "exclam": 0x21,
    "quotedbl": 0x22,
    "numbersign": 0x23,
    "dollar": 0x24,
    "percent": 0x25,
    "ampersand": 0x26,
    "apostrophe": 0x27,
    "parenleft": 0x28,
    "parenright": 0x29,
    "asterisk": 0x2A,
    "plus": 0x2B,
    "comma": 0x2C,
    "minus": 0x2D,
    "period": 0x2E,
    "slash": 0x2F,
    "colon": 0x3A,
    "semicolon": 0x3B,
    "less": 0x3C,
    "equal": 0x3D,
    "greater": 0x3E,
    "question": 0x3F,
    "at": 0x40,
    "bracketleft": 0x5B,
    "backslash": 0x5C,
    "bracketright": 0x5D,
    "asciicircum": 0x5E,
    "underscore": 0x5F,
    "grave": 0x60,
    "braceleft": 0x7B,
    "bar": 0x7C,
    "braceright": 0x7D,
    "asciitilde": 0x7E,
}

_FUNCTION_NAMES: Dict[str, int] = {
    "BackSpace": KEY_BackSpace,
    "Tab": KEY_Tab,
    "Return": KEY_Return,
    "Escape": KEY_Escape,
    "Hangul": KEY_Hangul,
    "Hangul_Hanja": KEY_Hangul_Hanja,
    "Home": KEY_Home,
    "Left": KEY_Left,
    "Up": KEY_Up,
    "Right": KEY_Right,
    "Down": KEY_Down,
    "Page_Up": KEY_Page_Up,
    "Prior": KEY_Page_Up,
    "Page_Down": KEY_Page_Down,
    "Next": KEY_Page_Down,
    "End": KEY_End,
    "Insert": KEY_Insert,
    "Menu": KEY_Menu,
    "KP_Enter": KEY_KP_Enter,
    "Shift_L": KEY_Shift_L,
    "Shift_R": KEY_Shift_R,
    "Control_L": KEY_Control_L,
    "Control_R": KEY_Control_R,
    "Caps_Lock": KEY_Caps_Lock,
    "Meta_L": KEY_Meta_L,
    "Meta_R": KEY_Meta_R,
    "Alt_L": KEY_Alt_L,
    "Alt_R": KEY_Alt_R,
    "Super_L": KEY_Super_L,
    "Super_R": KEY_Super_R,
    "Hyper_L": KEY_Hyper_L,
    "Hyper_R": KEY_Hyper_R,
    "Delete": KEY_Delete,
    "VoidSymbol": KEY_VoidSymbol,
}
_FUNCTION_NAMES.update({f"F{n}": KEY_F1 + n - 1 for n in range(1, 25)})

_NAMES_BY_KEYVAL: Dict[int, str] = {}
for _name, _value in (*_ASCII_NAMES.items(), *_FUNCTION_NAMES.items()):
    _NAMES_BY_KEYVAL.setdefault(_value, _name)


def keyval_from_name(name: str) -> Optional[int]:
    """Resolve an X keysym name (``"F9"``, ``"space"``, ``"a"``) to its value."""

    if not name:
        return None
    if len(name) == 1 and 0x21 <= ord(name) <= 0x7E:
        return ord(name)
    if name in _FUNCTION_NAMES:
        return _FUNCTION_NAMES[name]
    if name in _ASCII_NAMES:
        return _ASCII_NAMES[name]
    if name.startswith("0x"):
        try:
            return int(name, 16)
        except ValueError:
            return None
    return None


def keyval_name(keyval: int) -> str:
    if keyval in _NAMES_BY_KEYVAL:
        return _NAMES_BY_KEYVAL[keyval]
    if 0x21 <= keyval <= 0x7E:
        return chr(keyval)
    return f"0x{keyval:x}"


def keyval_to_char(keyval: int) -> Optional[str]:
    """Printable text produced by ``keyval`` or ``None`` for function keys."""

    if 0x20 <= keyval <= 0x7E:
        return chr(keyval)
    return None


def is_ascii_letter(keyval: int) -> bool:
    return ord("A") <= keyval <= ord("Z") or ord("a") <= keyval <= ord("z")
