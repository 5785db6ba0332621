"""Key events, hotkey lists and keyboard normalization."""

from .hotkeys import HotkeyBindings, HotkeyList
from .keysyms import ModifierType, keyval_from_name, keyval_name
from .layout import US_KEYMAP, Keymap, normalize_keyval
from .models import Hotkey, KeyEvent

__all__ = [
    "Hotkey",
    "HotkeyBindings",
    "HotkeyList",
    "KeyEvent",
    "Keymap",
    "ModifierType",
    "US_KEYMAP",
    "keyval_from_name",
    "keyval_name",
    "normalize_keyval",
]
