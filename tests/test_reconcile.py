from __future__ import annotations

from hangul_engine.buffer import (
    BufferedReconciler,
    Excision,
    HostDocument,
    ImmediateReconciler,
    PendingBuffer,
    PreeditStyle,
    ReconcileMode,
    select_reconciler,
)
from hangul_engine.candidates import LookupMethod
from hangul_engine.composer import DubeolsikComposer
from hangul_engine.config import PreeditMode


def make_buffered(
    text: str = "", *, pending: str = "", accumulate: bool = True
) -> BufferedReconciler:
    return BufferedReconciler(
        HostDocument.from_text(text),
        DubeolsikComposer(),
        PendingBuffer.from_text(pending),
        accumulate=accumulate,
    )


def make_immediate(text: str = "") -> ImmediateReconciler:
    return ImmediateReconciler(
        HostDocument.from_text(text), DubeolsikComposer(), PendingBuffer()
    )


def feed(reconciler, keys: str) -> None:
    for key in keys:
        reconciler.composer.process(ord(key))
        reconciler.reconcile()


def test_select_reconciler_by_preedit_mode_and_lock() -> None:
    host, composer, pending = HostDocument(), DubeolsikComposer(), PendingBuffer()

    none = select_reconciler(
        host, composer, pending, preedit_mode=PreeditMode.NONE, hanja_lock=False
    )
    locked = select_reconciler(
        host, composer, pending, preedit_mode=PreeditMode.NONE, hanja_lock=True
    )
    syllable = select_reconciler(
        host, composer, pending, preedit_mode=PreeditMode.SYLLABLE, hanja_lock=False
    )
    word = select_reconciler(
        host, composer, pending, preedit_mode=PreeditMode.WORD, hanja_lock=False
    )

    assert none.mode is ReconcileMode.IMMEDIATE
    assert locked.mode is ReconcileMode.BUFFERED and locked.accumulates
    assert syllable.mode is ReconcileMode.BUFFERED and not syllable.accumulates
    assert word.accumulates


def test_immediate_writes_composition_into_the_document() -> None:
    reconciler = make_immediate()
    host = reconciler.host

    feed(reconciler, "rk")

    assert host.text == "가"
    assert host.preedit is None
    assert reconciler.pending.text == "가"
    assert host.deletions == [(-1, 1)]


def test_immediate_flush_does_not_duplicate_text() -> None:
    reconciler = make_immediate()
    feed(reconciler, "gks")

    assert reconciler.flush() == "한"
    assert reconciler.host.text == "한"
    assert not reconciler.has_preedit()


def test_immediate_resets_when_caret_text_diverges() -> None:
    reconciler = make_immediate()
    feed(reconciler, "r")
    reconciler.host.insert_external("x")

    assert reconciler.check_caret()
    assert not reconciler.has_preedit()

    feed(reconciler, "k")
    assert reconciler.host.text == "ㄱxㅏ"


def test_immediate_keeps_state_when_caret_text_matches() -> None:
    reconciler = make_immediate("abc")
    feed(reconciler, "r")

    assert not reconciler.check_caret()
    assert reconciler.pending.text == "ㄱ"


def test_buffered_syllable_commits_each_finished_syllable() -> None:
    reconciler = make_buffered(accumulate=False)

    feed(reconciler, "dkssud")

    assert reconciler.host.text == "안"
    assert reconciler.host.preedit is not None
    assert reconciler.host.preedit.text == "녕"


def test_buffered_word_keeps_syllables_until_flush() -> None:
    reconciler = make_buffered()

    feed(reconciler, "gksrmf")

    preedit = reconciler.host.preedit
    assert reconciler.host.text == ""
    assert preedit is not None and preedit.text == "한글"
    assert [r.style for r in preedit.ranges] == [
        PreeditStyle.UNDERLINE,
        PreeditStyle.HIGHLIGHT,
    ]
    assert (preedit.ranges[0].start, preedit.ranges[0].end) == (0, 1)
    assert preedit.cursor == 2

    assert reconciler.flush() == "한글"
    assert reconciler.host.text == "한글"
    assert reconciler.host.preedit is None


def test_prefix_excision_spills_into_host_text() -> None:
    reconciler = make_buffered("xy", pending="대한민")

    excision = reconciler.excise(5, LookupMethod.PREFIX)

    assert excision == Excision(pending_erased=3, live_reset=False, host_deleted=2)
    assert reconciler.pending.text == ""
    assert reconciler.host.deletions == [(-2, 2)]
    assert reconciler.host.text == ""


def test_prefix_excision_takes_pending_before_live_syllable() -> None:
    reconciler = make_buffered(pending="한")
    reconciler.composer.process(ord("r"))
    reconciler.composer.process(ord("n"))

    excision = reconciler.excise(2, LookupMethod.PREFIX)

    assert excision == Excision(pending_erased=1, live_reset=True, host_deleted=0)
    assert reconciler.composer.is_empty()


def test_suffix_excision_takes_live_syllable_first() -> None:
    reconciler = make_buffered("문", pending="대한")
    reconciler.composer.process(ord("a"))
    reconciler.composer.process(ord("l"))

    excision = reconciler.excise(3, LookupMethod.SUFFIX)

    assert excision == Excision(pending_erased=2, live_reset=True, host_deleted=0)
    assert reconciler.host.text == "문"


def test_suffix_excision_reaches_document_text() -> None:
    reconciler = make_buffered("대한", accumulate=False)
    reconciler.composer.process(ord("a"))
    reconciler.composer.process(ord("l"))

    excision = reconciler.excise(3, LookupMethod.SUFFIX)

    assert excision.host_deleted == 2
    assert reconciler.host.text == ""


def test_exact_excision_with_backward_selection_deletes_forward() -> None:
    reconciler = make_immediate("한국어")
    reconciler.host.select(anchor=2, cursor=0)

    excision = reconciler.excise(2, LookupMethod.EXACT)

    assert excision.host_deleted == 2
    assert reconciler.host.deletions == [(0, 2)]
    assert reconciler.host.text == "어"


def test_commit_candidate_replaces_key_with_value() -> None:
    reconciler = make_buffered(accumulate=False)
    feed(reconciler, "gks")

    reconciler.commit_candidate("韓", 1, LookupMethod.SUFFIX)

    assert reconciler.host.text == "韓"
    assert reconciler.host.preedit is None
    assert not reconciler.has_preedit()
