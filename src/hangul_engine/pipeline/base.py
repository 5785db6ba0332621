"""Results and the session surface the key pipeline drives."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:  # pragma: no cover
    from hangul_engine.buffer.reconcile import Reconciler
    from hangul_engine.buffer.sync import HostClient, InputPurpose, PreeditFocusMode
    from hangul_engine.candidates.resolver import CandidateSet
    from hangul_engine.composer.base import Composer
    from hangul_engine.config import EngineConfig, InputMode
    from hangul_engine.keys.layout import Keymap


class Stage(str, Enum):
    """Pipeline step that decided the outcome of a key event."""

    RELEASE = "release"
    SHIFT = "shift"
    PASSWORD = "password"
    CANDIDATE = "candidate"
    SWITCH_MODIFIER = "switch_modifier"
    SWITCH = "switch"
    FORCE_ON = "force_on"
    LATIN = "latin"
    FORCE_OFF = "force_off"
    HANJA_MODIFIER = "hanja_modifier"
    HANJA = "hanja"
    MODIFIER_FLUSH = "modifier_flush"
    COMPOSE = "compose"


@dataclass(slots=True)
class DispatchResult:
    """Outcome of one key event.

    ``consumed`` is what the host is told. ``forwarded`` records that the raw
    event was re-sent to the client because composition did not use it.
    """

    consumed: bool
    stage: Stage
    forwarded: bool = False
    message: Optional[str] = None


class SessionControl(Protocol):
    """What the dispatcher and candidate navigator need from a session."""

    host: "HostClient"
    composer: "Composer"
    keymap: Optional["Keymap"]
    input_mode: "InputMode"
    input_purpose: "InputPurpose"
    hanja_lock: bool
    candidates: Optional["CandidateSet"]

    @property
    def config(self) -> "EngineConfig":
        ...

    @property
    def reconciler(self) -> "Reconciler":
        ...

    @property
    def focus_mode(self) -> "PreeditFocusMode":
        ...

    def sync_config(self) -> None:
        ...

    def switch_input_mode(self) -> None:
        ...

    def set_input_mode(self, mode: "InputMode") -> None:
        ...

    def flush(self) -> None:
        ...

    def has_preedit(self) -> bool:
        ...

    def render_preedit(self) -> None:
        ...

    def update_lookup_table(self) -> None:
        ...

    def hide_lookup_table(self) -> None:
        ...

    def update_lookup_table_ui(self) -> None:
        ...

    def commit_current_candidate(self) -> None:
        ...

    def after_candidate_commit(self) -> None:
        ...


__all__ = ["DispatchResult", "SessionControl", "Stage"]
