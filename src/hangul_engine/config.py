"""Engine settings: an immutable snapshot and a versioned store that swaps it."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from hangul_engine.candidates.table import Orientation
from hangul_engine.keys.hotkeys import HotkeyBindings
from hangul_engine.runtime.telemetry import ENV_PREFIX, record_event


class InputMode(str, Enum):
    HANGUL = "hangul"
    LATIN = "latin"


class PreeditMode(str, Enum):
    NONE = "none"
    SYLLABLE = "syllable"
    WORD = "word"


DEFAULT_SWITCH_KEYS = "Hangul,Shift+space"
DEFAULT_HANJA_KEYS = "Hangul_Hanja,F9"

# setting name -> dataclass field
SETTING_FIELDS: Dict[str, str] = {
    "hangul-keyboard": "keyboard",
    "switch-keys": "switch_keys",
    "hanja-keys": "hanja_keys",
    "on-keys": "on_keys",
    "off-keys": "off_keys",
    "word-commit": "word_commit",
    "auto-reorder": "auto_reorder",
    "disable-latin-mode": "disable_latin_mode",
    "initial-input-mode": "initial_input_mode",
    "use-event-forwarding": "use_event_forwarding",
    "preedit-mode": "preedit_mode",
    "lookup-table-orientation": "lookup_table_orientation",
}

_TRUE_WORDS = {"1", "true", "yes", "on"}
_FALSE_WORDS = {"0", "false", "no", "off", ""}


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    raise ValueError(f"not a boolean: {value!r}")


def _parse_preedit_mode(value: Any) -> PreeditMode:
    text = str(getattr(value, "value", value)).strip().lower()
    if text == "none":
        return PreeditMode.NONE
    if text == "word":
        return PreeditMode.WORD
    return PreeditMode.SYLLABLE


def _parse_input_mode(value: Any, current: InputMode) -> InputMode:
    text = str(getattr(value, "value", value)).strip().lower()
    if text == "hangul":
        return InputMode.HANGUL
    if text == "latin":
        return InputMode.LATIN
    return current


_PARSERS: Dict[str, Callable[[Any, "EngineConfig"], Any]] = {
    "keyboard": lambda value, _: str(value).strip() or "2",
    "switch_keys": lambda value, _: str(value or ""),
    "hanja_keys": lambda value, _: str(value or ""),
    "on_keys": lambda value, _: str(value or ""),
    "off_keys": lambda value, _: str(value or ""),
    "word_commit": lambda value, _: _parse_bool(value),
    "auto_reorder": lambda value, _: _parse_bool(value),
    "disable_latin_mode": lambda value, _: _parse_bool(value),
    "initial_input_mode": lambda value, cfg: _parse_input_mode(
        value, cfg.initial_input_mode
    ),
    "use_event_forwarding": lambda value, _: _parse_bool(value),
    "preedit_mode": lambda value, _: _parse_preedit_mode(value),
    "lookup_table_orientation": lambda value, _: Orientation.coerce(value),
}


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Every setting the engine reads, with hotkey lists parsed once.

    ``word_commit`` selects word preedit unless ``preedit-mode`` was given
    explicitly.
    """

    keyboard: str = "2"
    switch_keys: str = DEFAULT_SWITCH_KEYS
    hanja_keys: str = DEFAULT_HANJA_KEYS
    on_keys: str = ""
    off_keys: str = ""
    word_commit: bool = False
    auto_reorder: bool = True
    disable_latin_mode: bool = False
    initial_input_mode: InputMode = InputMode.LATIN
    use_event_forwarding: bool = True
    preedit_mode: PreeditMode = PreeditMode.SYLLABLE
    preedit_mode_explicit: bool = False
    lookup_table_orientation: Orientation = Orientation.HORIZONTAL
    hotkeys: HotkeyBindings = field(init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "hotkeys",
            HotkeyBindings.parse(
                switch=self.switch_keys,
                hanja=self.hanja_keys,
                force_on=self.on_keys,
                force_off=self.off_keys,
            ),
        )

    @property
    def effective_preedit_mode(self) -> PreeditMode:
        if self.word_commit and not self.preedit_mode_explicit:
            return PreeditMode.WORD
        return self.preedit_mode

    @classmethod
    def from_mapping(
        cls, values: Mapping[str, Any], *, strict: bool = False
    ) -> "EngineConfig":
        config = cls()
        for key, value in values.items():
            config = config.with_setting(key, value, strict=strict)
        return config

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        """Read settings from ``HANGUL_ENGINE_<KEY>`` variables."""

        source = os.environ if environ is None else environ
        values: Dict[str, str] = {}
        for key in SETTING_FIELDS:
            env_key = f"{ENV_PREFIX}{key.upper().replace('-', '_')}"
            if env_key in source:
                values[key] = source[env_key]
        return cls.from_mapping(values)

    def with_setting(
        self, key: str, value: Any, *, strict: bool = False
    ) -> "EngineConfig":
        """Return a copy with one setting changed.

        Unknown keys raise ``KeyError`` when ``strict``; otherwise they are
        logged and the snapshot is returned unchanged. Values that cannot be
        parsed are handled the same way with ``ValueError``.
        """

        name = SETTING_FIELDS.get(key)
        if name is None:
            if strict:
                raise KeyError(f"Unknown setting '{key}'")
            record_event("settings.unknown", level="warning", data={"key": key})
            return self

        try:
            parsed = _PARSERS[name](value, self)
        except ValueError:
            if strict:
                raise
            record_event(
                "settings.invalid",
                level="warning",
                data={"key": key, "value": value},
            )
            return self

        changes: Dict[str, Any] = {name: parsed}
        if name == "preedit_mode":
            changes["preedit_mode_explicit"] = True
        return replace(self, **changes)

    def as_mapping(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for key, name in SETTING_FIELDS.items():
            value = getattr(self, name)
            out[key] = value.value if isinstance(value, Enum) else value
        return out

    def changed_keys(self, other: "EngineConfig") -> Tuple[str, ...]:
        return tuple(
            key
            for key, name in SETTING_FIELDS.items()
            if getattr(self, name) != getattr(other, name)
        )


class ConfigStore:
    """Process-wide reference to the current snapshot.

    Every change builds a new ``EngineConfig`` and swaps it in with one
    assignment, bumping ``revision`` so sessions notice at dispatch time.
    """

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self._config = config or EngineConfig()
        self._revision = 0

    @property
    def current(self) -> EngineConfig:
        return self._config

    def revision(self) -> int:
        return self._revision

    def update(self, key: str, value: Any, *, strict: bool = False) -> EngineConfig:
        return self.swap(self._config.with_setting(key, value, strict=strict))

    def replace(
        self, values: Mapping[str, Any], *, strict: bool = False
    ) -> EngineConfig:
        return self.swap(EngineConfig.from_mapping(values, strict=strict))

    def swap(self, config: EngineConfig) -> EngineConfig:
        if config is self._config:
            return config
        changed = config.changed_keys(self._config)
        self._config = config
        self._revision += 1
        record_event(
            "settings.changed",
            data={"revision": self._revision, "keys": ",".join(changed)},
        )
        return config


_VERSION_RE = re.compile(r"[ \t]+(\d+)(?:\.(\d+))?(?:\.(\d+))?")
DEFAULT_HOST_VERSION: Tuple[int, int, int] = (1, 5, 0)
CLIENT_COMMIT_VERSION: Tuple[int, int, int] = (1, 5, 20)


def parse_host_version(text: Optional[str]) -> Tuple[int, int, int]:
    """``"IBus 1.5.22"`` -> ``(1, 5, 22)``; anything unusable -> the default."""

    if not text:
        return DEFAULT_HOST_VERSION
    match = _VERSION_RE.search(text)
    if match is None:
        return DEFAULT_HOST_VERSION
    version = tuple(int(part) if part else 0 for part in match.groups())
    if version == (0, 0, 0):
        return DEFAULT_HOST_VERSION
    return version  # type: ignore[return-value]


def supports_client_commit(version: Tuple[int, int, int]) -> bool:
    return tuple(version) >= CLIENT_COMMIT_VERSION


__all__ = [
    "CLIENT_COMMIT_VERSION",
    "ConfigStore",
    "DEFAULT_HOST_VERSION",
    "EngineConfig",
    "InputMode",
    "PreeditMode",
    "SETTING_FIELDS",
    "parse_host_version",
    "supports_client_commit",
]
