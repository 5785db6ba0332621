"""Priority-ordered key event routing.

Each key-down event passes these stages in order and stops at the first one
that claims it: candidate navigation, mode hotkeys, Latin pass-through,
the hanja hotkey, modifier combinations, and finally composition.
"""

from __future__ import annotations

from hangul_engine.buffer.sync import InputPurpose
from hangul_engine.config import InputMode
from hangul_engine.keys import keysyms as ks
from hangul_engine.keys.layout import normalize_keyval
from hangul_engine.keys.models import KeyEvent
from hangul_engine.runtime import telemetry

from .base import DispatchResult, SessionControl, Stage
from .navigation import CandidateNavigator


class KeyDispatcher:
    def __init__(self, session: SessionControl) -> None:
        self.session = session
        self.navigator = CandidateNavigator(session)
        self._logger_name = "hangul_engine.pipeline"

    def dispatch(self, event: KeyEvent) -> DispatchResult:
        if event.is_release:
            return DispatchResult(consumed=False, stage=Stage.RELEASE)
        if event.keyval in ks.SHIFT_KEYS:
            # a lone shift must not end the syllable before the shifted key
            return DispatchResult(consumed=False, stage=Stage.SHIFT)

        self.session.sync_config()
        with telemetry.span(
            "pipeline::dispatch",
            logger_name=self._logger_name,
            component="pipeline",
            metadata={"key": event.token, "mode": self.session.input_mode.value},
        ) as handle:
            result = self._route(event)
            handle.add_metadata("stage", result.stage.value)
            handle.add_metadata("consumed", result.consumed)
            return result

    def _route(self, event: KeyEvent) -> DispatchResult:
        session = self.session
        keyval, modifiers = event.keyval, event.modifiers

        if session.input_purpose is InputPurpose.PASSWORD:
            return DispatchResult(consumed=False, stage=Stage.PASSWORD)

        # candidates see keys before hotkeys so Escape closes the list
        if session.candidates is not None:
            handled = self.navigator.handle(keyval)
            if handled or not session.hanja_lock:
                return DispatchResult(consumed=True, stage=Stage.CANDIDATE)

        hotkeys = session.config.hotkeys
        if hotkeys.switch.has_modifier(keyval):
            return DispatchResult(consumed=False, stage=Stage.SWITCH_MODIFIER)

        if hotkeys.switch.match(keyval, modifiers):
            session.switch_input_mode()
            return DispatchResult(consumed=True, stage=Stage.SWITCH)

        if hotkeys.force_on.match(keyval, modifiers):
            session.set_input_mode(InputMode.HANGUL)
            return DispatchResult(consumed=False, stage=Stage.FORCE_ON)

        if session.input_mode is InputMode.LATIN:
            return DispatchResult(consumed=False, stage=Stage.LATIN)

        if hotkeys.force_off.match(keyval, modifiers):
            session.set_input_mode(InputMode.LATIN)
            return DispatchResult(consumed=False, stage=Stage.FORCE_OFF)

        if hotkeys.hanja.has_modifier(keyval):
            return DispatchResult(consumed=False, stage=Stage.HANJA_MODIFIER)

        if hotkeys.hanja.match(keyval, modifiers):
            if session.candidates is None:
                session.update_lookup_table()
            else:
                session.hide_lookup_table()
            return DispatchResult(consumed=True, stage=Stage.HANJA)

        if event.has_any(ks.NON_SHIFT_MODIFIERS):
            session.flush()
            return DispatchResult(consumed=False, stage=Stage.MODIFIER_FLUSH)

        return self._compose(event)

    def _compose(self, event: KeyEvent) -> DispatchResult:
        session = self.session
        reconciler = session.reconciler
        reconciler.check_caret()

        if event.keyval == ks.KEY_BackSpace:
            consumed = session.composer.backspace()
            if not consumed and reconciler.pending:
                reconciler.pending.erase_tail(1)
                consumed = True
            reconciler.after_backspace(focus_mode=session.focus_mode)
            if session.hanja_lock:
                if session.has_preedit():
                    session.update_lookup_table()
                else:
                    session.hide_lookup_table()
        else:
            keyval = normalize_keyval(
                event,
                session.keymap,
                transliteration=session.composer.is_transliteration(),
            )
            consumed = session.composer.process(keyval)
            reconciler.reconcile(focus_mode=session.focus_mode)
            if session.hanja_lock:
                session.update_lookup_table()
            if not consumed:
                session.flush()

        if session.config.use_event_forwarding:
            if not consumed:
                session.host.forward_key_event(
                    event.keyval, event.keycode, event.modifiers
                )
            return DispatchResult(
                consumed=True, stage=Stage.COMPOSE, forwarded=not consumed
            )
        return DispatchResult(consumed=consumed, stage=Stage.COMPOSE)


__all__ = ["KeyDispatcher"]
