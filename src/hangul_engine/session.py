"""Per-context input session: mode state, lifecycle and candidate handling."""

from __future__ import annotations

from typing import Any, Callable, Optional

from hangul_engine.buffer.pending import PendingBuffer
from hangul_engine.buffer.reconcile import ReconcileMode, Reconciler, select_reconciler
from hangul_engine.buffer.sync import (
    Capability,
    EngineProperty,
    HostClient,
    InputPurpose,
    PreeditFocusMode,
)
from hangul_engine.candidates.resolver import (
    CandidateResolver,
    CandidateSet,
    LookupMethod,
    derive_lookup_key,
)
from hangul_engine.composer.base import Composer, transition_predicate
from hangul_engine.composer.dubeolsik import DubeolsikComposer
from hangul_engine.config import ConfigStore, EngineConfig, InputMode, PreeditMode
from hangul_engine.keys.layout import US_KEYMAP, Keymap
from hangul_engine.keys.models import KeyEvent
from hangul_engine.pipeline.base import DispatchResult
from hangul_engine.pipeline.dispatcher import KeyDispatcher
from hangul_engine.runtime import telemetry

PROP_INPUT_MODE = "InputMode"
PROP_HANJA_MODE = "hanja_mode"
PROP_SETUP = "setup"

INPUT_MODE_SYMBOLS = {InputMode.HANGUL: "한", InputMode.LATIN: "EN"}

ComposerFactory = Callable[["Session"], Composer]


class Session:
    """State for one editing context.

    The session owns its composer and pending buffer. Settings come from the
    shared ``ConfigStore``; the snapshot is re-read whenever the store's
    revision moved since the last key event.
    """

    def __init__(
        self,
        host: HostClient,
        *,
        store: ConfigStore,
        resolver: CandidateResolver,
        keymap: Optional[Keymap] = US_KEYMAP,
        session_id: int = 0,
        use_client_commit: bool = False,
        composer_factory: Optional[ComposerFactory] = None,
        logger_name: str | None = None,
    ) -> None:
        self.id = session_id
        self.host = host
        self.store = store
        self.resolver = resolver
        self.keymap = keymap
        self.use_client_commit = use_client_commit
        self._logger_name = logger_name or "hangul_engine.session"

        self._config = store.current
        self._revision = store.revision()

        if composer_factory is None:
            self.composer: Composer = DubeolsikComposer(
                self._config.keyboard, transition=self._accept_transition
            )
        else:
            self.composer = composer_factory(self)
        self.pending = PendingBuffer()

        self.capabilities = Capability.NONE
        self.input_purpose = InputPurpose.FREE_FORM
        self.input_mode = self._config.initial_input_mode
        if self._config.disable_latin_mode:
            self.input_mode = InputMode.HANGUL
        self.hanja_lock = False
        self.candidates: Optional[CandidateSet] = None
        self.last_lookup_method = LookupMethod.PREFIX
        self.preedit_mode = PreeditMode.SYLLABLE
        self._reconciler: Optional[Reconciler] = None
        self.update_preedit_mode()

        self.dispatcher = KeyDispatcher(self)
        self._event(
            "session.created",
            input_mode=self.input_mode.value,
            preedit_mode=self.preedit_mode.value,
        )

    def _event(self, name: str, *, level: str = "info", **data: Any) -> None:
        telemetry.record_event(
            name,
            level=level,
            data={"session": self.id, **data},
            logger_name=self._logger_name,
        )

    # -- configuration -----------------------------------------------------

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def reconciler(self) -> Reconciler:
        assert self._reconciler is not None
        return self._reconciler

    @property
    def focus_mode(self) -> PreeditFocusMode:
        # visible candidates must not be committed by a focus change
        if self.candidates is not None:
            return PreeditFocusMode.CLEAR
        return PreeditFocusMode.COMMIT

    def _accept_transition(self, composer: Composer, jamo: str, preedit: str) -> bool:
        return transition_predicate(self._config.auto_reorder)(composer, jamo, preedit)

    def sync_config(self) -> None:
        revision = self.store.revision()
        if revision == self._revision:
            return
        previous = self._config
        self._config = self.store.current
        self._revision = revision
        if self._config.keyboard != previous.keyboard:
            self.composer.select_keyboard(self._config.keyboard)
        self.update_preedit_mode()

    def update_preedit_mode(self) -> None:
        mode = self._config.effective_preedit_mode
        has_surrounding = bool(self.capabilities & Capability.SURROUNDING_TEXT)
        if mode is PreeditMode.NONE and not has_surrounding:
            # without surrounding text the composing syllable would be invisible
            mode = PreeditMode.SYLLABLE
        self.preedit_mode = mode
        self._rebuild_reconciler()

    def _rebuild_reconciler(self) -> None:
        updated = select_reconciler(
            self.host,
            self.composer,
            self.pending,
            preedit_mode=self.preedit_mode,
            hanja_lock=self.hanja_lock,
        )
        current = self._reconciler
        if (
            current is not None
            and current.has_preedit()
            and (
                current.mode is not updated.mode
                or current.accumulates != updated.accumulates
            )
        ):
            current.flush(focus_mode=self.focus_mode)
        self._reconciler = updated

    # -- key events --------------------------------------------------------

    def dispatch(self, event: KeyEvent) -> DispatchResult:
        return self.dispatcher.dispatch(event)

    def process_key_event(
        self, keyval: int, keycode: int = 0, modifiers: int = 0
    ) -> bool:
        event = KeyEvent(keyval=keyval, keycode=keycode, modifiers=modifiers)
        return self.dispatch(event).consumed

    # -- text --------------------------------------------------------------

    def has_preedit(self) -> bool:
        return self.reconciler.has_preedit()

    def render_preedit(self) -> None:
        self.reconciler.render_preedit(focus_mode=self.focus_mode)

    def flush(self) -> None:
        self.hide_lookup_table()
        strategy = self.reconciler.mode.value
        text = self.reconciler.flush(focus_mode=self.focus_mode)
        if text:
            self._event("session.flush", level="debug", text=text, strategy=strategy)

    # -- candidates --------------------------------------------------------

    def update_lookup_table(self) -> None:
        reconciler = self.reconciler
        request = derive_lookup_key(
            pending=self.pending.text,
            live=self.composer.preedit_string(),
            buffered=reconciler.mode is ReconcileMode.BUFFERED,
            accumulate=reconciler.accumulates,
            surrounding=self.host.get_surrounding_text(),
        )
        if request is not None:
            self.last_lookup_method = request.method
        found = self.resolver.lookup(
            request, orientation=self._config.lookup_table_orientation
        )
        if found is None:
            self.hide_lookup_table()
            return
        self.candidates = found
        self.render_preedit()
        self.update_lookup_table_ui()

    def update_lookup_table_ui(self) -> None:
        if self.candidates is None:
            return
        self.host.update_auxiliary_text(self.candidates.comment(), True)
        self.host.update_lookup_table(self.candidates.table, True)

    def hide_lookup_table(self) -> None:
        candidates = self.candidates
        self.candidates = None
        if candidates is not None and candidates.table.visible:
            candidates.table.visible = False
            self.host.hide_lookup_table()
            self.host.update_auxiliary_text("", False)

    def commit_current_candidate(self) -> None:
        if self.candidates is None:
            return
        candidate = self.candidates.current()
        if candidate is None:
            return
        excision = self.reconciler.commit_candidate(
            candidate.value,
            len(candidate.key),
            self.last_lookup_method,
            focus_mode=self.focus_mode,
        )
        self._event(
            "candidates.commit",
            key=candidate.key,
            value=candidate.value,
            method=self.last_lookup_method.value,
            pending_erased=excision.pending_erased,
            host_deleted=excision.host_deleted,
        )

    def after_candidate_commit(self) -> None:
        if self.hanja_lock and self.has_preedit():
            self.update_lookup_table()
        else:
            self.hide_lookup_table()
            self.render_preedit()

    def candidate_clicked(self, index: int, button: int = 0, state: int = 0) -> None:
        """``index`` counts from the first candidate of the visible page."""

        del button, state
        if self.candidates is None or not self.candidates.select_in_page(index):
            return
        self.commit_current_candidate()
        self.after_candidate_commit()

    def _move_candidates(self, name: str) -> None:
        if self.candidates is None:
            return
        getattr(self.candidates.table, name)()
        self.update_lookup_table_ui()

    def cursor_up(self) -> None:
        self._move_candidates("cursor_up")

    def cursor_down(self) -> None:
        self._move_candidates("cursor_down")

    def page_up(self) -> None:
        self._move_candidates("page_up")

    def page_down(self) -> None:
        self._move_candidates("page_down")

    # -- modes and properties ----------------------------------------------

    def switch_input_mode(self) -> None:
        if self.input_mode is InputMode.HANGUL:
            self.set_input_mode(InputMode.LATIN)
        else:
            self.set_input_mode(InputMode.HANGUL)

    def set_input_mode(self, mode: InputMode) -> None:
        self.flush()
        if self._config.disable_latin_mode:
            return
        self.input_mode = mode
        self._event("session.input_mode", mode=mode.value)
        self.host.update_property(self.input_mode_property())

    def set_hanja_lock(self, enabled: bool) -> None:
        self.flush()
        self.hanja_lock = enabled
        self._rebuild_reconciler()
        self.host.update_property(self.hanja_mode_property())
        self.flush()

    def input_mode_property(self) -> EngineProperty:
        return EngineProperty(
            key=PROP_INPUT_MODE,
            active=self.input_mode is InputMode.HANGUL,
            label="Hangul mode",
            symbol=INPUT_MODE_SYMBOLS[self.input_mode],
        )

    def hanja_mode_property(self) -> EngineProperty:
        return EngineProperty(
            key=PROP_HANJA_MODE, active=self.hanja_lock, label="Hanja lock"
        )

    def properties(self) -> tuple[EngineProperty, ...]:
        return (
            self.input_mode_property(),
            self.hanja_mode_property(),
            EngineProperty(key=PROP_SETUP, label="Setup"),
        )

    def property_activate(self, name: str, state: int = 0) -> None:
        del state
        if name == PROP_INPUT_MODE:
            self.switch_input_mode()
        elif name == PROP_HANJA_MODE:
            self.set_hanja_lock(not self.hanja_lock)
        elif name == PROP_SETUP:
            self._event("session.setup_requested")

    # -- lifecycle ---------------------------------------------------------

    def focus_in(self) -> None:
        self.update_preedit_mode()
        self.host.register_properties(self.properties())
        self.render_preedit()
        self.update_lookup_table_ui()

    def focus_out(self) -> None:
        self.flush()

    def reset(self) -> None:
        if self.reconciler.mode is ReconcileMode.IMMEDIATE or self.use_client_commit:
            # the host already holds this text
            self.reconciler.discard()
        self.flush()

    def enable(self) -> None:
        # asking once makes the host start tracking surrounding text
        self.host.get_surrounding_text()

    def disable(self) -> None:
        self.focus_out()

    def set_capabilities(self, capabilities: int) -> None:
        self.capabilities = Capability(capabilities)
        self.update_preedit_mode()

    def set_content_type(self, purpose: int, hints: int = 0) -> None:
        del hints
        try:
            self.input_purpose = InputPurpose(purpose)
        except ValueError:
            self.input_purpose = InputPurpose.FREE_FORM

    def destroy(self) -> None:
        self.hide_lookup_table()
        self.reconciler.discard()
        self._event("session.destroyed")


__all__ = [
    "INPUT_MODE_SYMBOLS",
    "PROP_HANJA_MODE",
    "PROP_INPUT_MODE",
    "PROP_SETUP",
    "Session",
]
