"""Keeps composer output, the pending buffer and host text consistent.

Two strategies exist. ``ImmediateReconciler`` is used when preedit display is
disabled: composed text is written straight into the document and the
pending buffer shadows the part of the document that is still being
composed. ``BufferedReconciler`` renders real preedit and commits either per
syllable or per word.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from hangul_engine.candidates.resolver import LookupMethod
from hangul_engine.composer.base import Composer
from hangul_engine.config import PreeditMode
from hangul_engine.runtime import telemetry

from .pending import PendingBuffer
from .sync import (
    HostClient,
    PreeditFocusMode,
    PreeditRange,
    PreeditStyle,
    PreeditText,
)


class ReconcileMode(Enum):
    IMMEDIATE = "immediate"
    BUFFERED = "buffered"


@dataclass(frozen=True, slots=True)
class Excision:
    """How a candidate's key was removed before its value was committed."""

    pending_erased: int = 0
    live_reset: bool = False
    host_deleted: int = 0


class Reconciler:
    """Shared plumbing; subclasses decide what reaches the host."""

    mode: ReconcileMode

    def __init__(
        self, host: HostClient, composer: Composer, pending: PendingBuffer
    ) -> None:
        self.host = host
        self.composer = composer
        self.pending = pending

    @property
    def accumulates(self) -> bool:
        return False

    def logical_preedit(self) -> str:
        return self.pending.text + self.composer.preedit_string()

    def has_preedit(self) -> bool:
        return bool(self.pending) or bool(self.composer.preedit_string())

    def discard(self) -> None:
        """Drop composer and pending state without touching the host."""

        self.composer.reset()
        self.pending.clear()

    def check_caret(self) -> bool:
        return False

    def reconcile(
        self, *, focus_mode: PreeditFocusMode = PreeditFocusMode.COMMIT
    ) -> None:
        raise NotImplementedError

    def after_backspace(
        self, *, focus_mode: PreeditFocusMode = PreeditFocusMode.COMMIT
    ) -> None:
        raise NotImplementedError

    def flush(self, *, focus_mode: PreeditFocusMode = PreeditFocusMode.COMMIT) -> str:
        raise NotImplementedError

    def render_preedit(
        self, *, focus_mode: PreeditFocusMode = PreeditFocusMode.COMMIT
    ) -> None:
        del focus_mode

    def excise(self, key_length: int, method: LookupMethod) -> Excision:
        raise NotImplementedError

    def commit_candidate(
        self,
        value: str,
        key_length: int,
        method: LookupMethod,
        *,
        focus_mode: PreeditFocusMode = PreeditFocusMode.COMMIT,
    ) -> Excision:
        excision = self.excise(key_length, method)
        self.clear_preedit()
        self.host.commit_text(value)
        self.render_preedit(focus_mode=focus_mode)
        return excision

    def clear_preedit(self) -> None:
        self.host.update_preedit_text(PreeditText(text="", visible=False))

    def _delete_from_host(self, length: int, method: LookupMethod) -> int:
        if length <= 0:
            return 0
        offset = -length
        if method is LookupMethod.EXACT:
            surrounding = self.host.get_surrounding_text()
            if surrounding is not None and surrounding.anchor > surrounding.cursor:
                offset = 0
        self.host.delete_surrounding_text(offset, length)
        return length


class ImmediateReconciler(Reconciler):
    """Fakes preedit with delete+commit pairs against real document text."""

    mode = ReconcileMode.IMMEDIATE

    def check_caret(self) -> bool:
        """Reset when the text before the caret no longer ends with the shadow.

        Only the text starting one codepoint before the caret is compared, as
        a UTF-8 prefix. Returns ``True`` when state was reset.
        """

        if not self.pending:
            return False
        surrounding = self.host.get_surrounding_text()
        if surrounding is None or surrounding.cursor == 0:
            return False

        on_cursor = surrounding.text[surrounding.cursor - 1 :].encode("utf-8")
        if on_cursor.startswith(self.pending.text.encode("utf-8")):
            return False

        telemetry.record_event(
            "reconcile.desync_reset",
            level="debug",
            data={"shadow": self.pending.text, "cursor": surrounding.cursor},
        )
        self.discard()
        return True

    def reconcile(
        self, *, focus_mode: PreeditFocusMode = PreeditFocusMode.COMMIT
    ) -> None:
        del focus_mode
        preedit = self.composer.preedit_string()
        state = self.composer.commit_string() + preedit
        if state != self.pending.text:
            shown = len(self.pending)
            if shown:
                self.host.delete_surrounding_text(-shown, shown)
            if state:
                self.host.commit_text(state)
        self.pending.replace(preedit)

    def after_backspace(
        self, *, focus_mode: PreeditFocusMode = PreeditFocusMode.COMMIT
    ) -> None:
        self.reconcile(focus_mode=focus_mode)

    def flush(self, *, focus_mode: PreeditFocusMode = PreeditFocusMode.COMMIT) -> str:
        # the shadowed text is already in the document
        del focus_mode
        text = self.pending.text
        self.discard()
        return text

    def excise(self, key_length: int, method: LookupMethod) -> Excision:
        shown = len(self.pending)
        self.discard()
        deleted = self._delete_from_host(max(0, key_length), method)
        return Excision(pending_erased=shown, live_reset=True, host_deleted=deleted)

    def clear_preedit(self) -> None:
        pass


class BufferedReconciler(Reconciler):
    """Renders preedit; in word mode or hanja lock whole words are committed."""

    mode = ReconcileMode.BUFFERED

    def __init__(
        self,
        host: HostClient,
        composer: Composer,
        pending: PendingBuffer,
        *,
        accumulate: bool = False,
    ) -> None:
        super().__init__(host, composer, pending)
        self.accumulate = accumulate

    @property
    def accumulates(self) -> bool:
        return self.accumulate

    def reconcile(
        self, *, focus_mode: PreeditFocusMode = PreeditFocusMode.COMMIT
    ) -> None:
        commit = self.composer.commit_string()
        if self.accumulate:
            self.pending.append(commit)
            if not self.composer.preedit_string() and self.pending:
                self.clear_preedit()
                self.host.commit_text(self.pending.text)
                self.pending.clear()
        elif commit:
            self.clear_preedit()
            self.host.commit_text(commit)
        self.render_preedit(focus_mode=focus_mode)

    def after_backspace(
        self, *, focus_mode: PreeditFocusMode = PreeditFocusMode.COMMIT
    ) -> None:
        self.render_preedit(focus_mode=focus_mode)

    def flush(self, *, focus_mode: PreeditFocusMode = PreeditFocusMode.COMMIT) -> str:
        self.pending.append(self.composer.flush())
        text = self.pending.text
        if text:
            self.clear_preedit()
            self.host.commit_text(text)
            self.pending.clear()
        self.render_preedit(focus_mode=focus_mode)
        return text

    def render_preedit(
        self, *, focus_mode: PreeditFocusMode = PreeditFocusMode.COMMIT
    ) -> None:
        settled = len(self.pending)
        text = self.logical_preedit()
        if not text:
            self.clear_preedit()
            return

        ranges = []
        if settled:
            ranges.append(PreeditRange(0, settled, PreeditStyle.UNDERLINE))
        if len(text) > settled:
            ranges.append(PreeditRange(settled, len(text), PreeditStyle.HIGHLIGHT))
        self.host.update_preedit_text(
            PreeditText(
                text=text,
                ranges=tuple(ranges),
                cursor=len(text),
                visible=True,
                mode=focus_mode,
            )
        )

    def excise(self, key_length: int, method: LookupMethod) -> Excision:
        remaining = max(0, key_length)
        live = len(self.composer.preedit_string())
        live_reset = False

        if method is LookupMethod.SUFFIX:
            if live and remaining > 0:
                self.composer.reset()
                live_reset = True
                remaining = max(0, remaining - live)
            erased = self.pending.erase_tail(remaining)
        else:
            erased = self.pending.erase_head(remaining)
        remaining -= erased

        if method is not LookupMethod.SUFFIX and live and remaining > 0:
            self.composer.reset()
            live_reset = True
            remaining = max(0, remaining - live)

        deleted = self._delete_from_host(remaining, method)
        return Excision(
            pending_erased=erased, live_reset=live_reset, host_deleted=deleted
        )


def select_reconciler(
    host: HostClient,
    composer: Composer,
    pending: PendingBuffer,
    *,
    preedit_mode: PreeditMode,
    hanja_lock: bool,
) -> Reconciler:
    if preedit_mode is PreeditMode.NONE and not hanja_lock:
        return ImmediateReconciler(host, composer, pending)
    return BufferedReconciler(
        host,
        composer,
        pending,
        accumulate=preedit_mode is PreeditMode.WORD or hanja_lock,
    )


__all__ = [
    "BufferedReconciler",
    "Excision",
    "ImmediateReconciler",
    "ReconcileMode",
    "Reconciler",
    "select_reconciler",
]
