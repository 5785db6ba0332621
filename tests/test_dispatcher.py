from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from hangul_engine.buffer import Capability, HostDocument, InputPurpose
from hangul_engine.candidates import CandidateResolver, HanjaTable
from hangul_engine.config import ConfigStore, EngineConfig, InputMode
from hangul_engine.keys import KeyEvent
from hangul_engine.keys import keysyms as ks
from hangul_engine.keys.keysyms import ModifierType
from hangul_engine.pipeline import DispatchResult, Stage
from hangul_engine.session import PROP_INPUT_MODE, Session

HANJA_LINES = [
    "한:韓:나라 이름 한",
    "한:漢:한수 한",
    "한:寒:찰 한",
    "한:恨:한할 한",
    "한국:韓國:나라 이름",
    "국:國:나라 국",
]
KEY_F9 = ks.KEY_F1 + 8


def make_session(
    text: str = "",
    settings: Optional[Dict[str, Any]] = None,
    *,
    capabilities: int = Capability.PREEDIT_TEXT | Capability.SURROUNDING_TEXT,
) -> Tuple[Session, HostDocument]:
    values: Dict[str, Any] = {"initial-input-mode": "hangul"}
    values.update(settings or {})
    store = ConfigStore(EngineConfig.from_mapping(values, strict=True))
    resolver = CandidateResolver(HanjaTable.from_lines(HANJA_LINES))
    document = HostDocument.from_text(text)
    session = Session(document, store=store, resolver=resolver)
    session.set_capabilities(capabilities)
    return session, document


def press(session: Session, keyval: int, modifiers: int = 0) -> DispatchResult:
    return session.dispatch(KeyEvent(keyval=keyval, modifiers=modifiers))


def type_keys(session: Session, keys: str) -> List[DispatchResult]:
    return [press(session, ord(key)) for key in keys]


def preedit_text(document: HostDocument) -> str:
    return document.preedit.text if document.preedit is not None else ""


def test_release_and_lone_shift_do_nothing() -> None:
    session, document = make_session()
    type_keys(session, "r")

    release = press(session, ord("k"), ModifierType.RELEASE)
    shift = press(session, ks.KEY_Shift_L)

    assert (release.consumed, release.stage) == (False, Stage.RELEASE)
    assert (shift.consumed, shift.stage) == (False, Stage.SHIFT)
    assert preedit_text(document) == "ㄱ"


def test_typing_composes_into_preedit() -> None:
    session, document = make_session()

    results = type_keys(session, "rk")

    assert all(r.consumed and r.stage is Stage.COMPOSE for r in results)
    assert preedit_text(document) == "가"
    assert document.text == ""


def test_finished_syllables_are_committed() -> None:
    session, document = make_session()

    type_keys(session, "dkssud")

    assert document.text == "안"
    assert preedit_text(document) == "녕"


def test_unused_key_flushes_then_is_forwarded() -> None:
    session, document = make_session()
    type_keys(session, "rk")

    result = press(session, ks.KEY_space)

    assert result.consumed and result.forwarded
    assert document.text == "가 "
    assert document.forwarded == [(ks.KEY_space, 0, 0)]


def test_without_forwarding_the_host_handles_unused_keys() -> None:
    session, document = make_session(settings={"use-event-forwarding": False})
    type_keys(session, "rk")

    result = press(session, ks.KEY_space)

    assert not result.consumed and not result.forwarded
    assert document.text == "가"
    assert document.forwarded == []


def test_backspace_edits_composition_then_forwards() -> None:
    session, document = make_session("ab")
    type_keys(session, "rk")

    assert press(session, ks.KEY_BackSpace).forwarded is False
    assert preedit_text(document) == "ㄱ"
    press(session, ks.KEY_BackSpace)
    assert preedit_text(document) == ""

    result = press(session, ks.KEY_BackSpace)
    assert result.forwarded
    assert document.text == "a"


def test_password_fields_bypass_the_engine() -> None:
    session, document = make_session()
    session.set_content_type(InputPurpose.PASSWORD)

    result = press(session, ord("r"))

    assert (result.consumed, result.stage) == (False, Stage.PASSWORD)
    assert document.preedit is None


def test_switch_hotkey_toggles_latin_mode() -> None:
    session, document = make_session()
    type_keys(session, "rk")

    result = press(session, ks.KEY_space, ModifierType.SHIFT)

    assert (result.consumed, result.stage) == (True, Stage.SWITCH)
    assert session.input_mode is InputMode.LATIN
    assert document.text == "가"
    assert document.properties[PROP_INPUT_MODE].symbol == "EN"

    latin = press(session, ord("r"))
    assert (latin.consumed, latin.stage) == (False, Stage.LATIN)


def test_disable_latin_mode_keeps_hangul() -> None:
    session, _ = make_session(settings={"disable-latin-mode": True})

    press(session, ks.KEY_Hangul)

    assert session.input_mode is InputMode.HANGUL


def test_force_on_and_off_are_not_consumed() -> None:
    session, _ = make_session(settings={"on-keys": "F1", "off-keys": "Escape"})

    off = press(session, ks.KEY_Escape)
    assert (off.consumed, off.stage) == (False, Stage.FORCE_OFF)
    assert session.input_mode is InputMode.LATIN

    on = press(session, ks.KEY_F1)
    assert (on.consumed, on.stage) == (False, Stage.FORCE_ON)
    assert session.input_mode is InputMode.HANGUL


def test_lone_hotkey_modifier_keeps_composition() -> None:
    session, document = make_session(settings={"hanja-keys": "Control+F9"})
    type_keys(session, "gks")

    control = press(session, ks.KEY_Control_L)
    assert (control.consumed, control.stage) == (False, Stage.HANJA_MODIFIER)
    assert preedit_text(document) == "한"

    hanja = press(session, KEY_F9, ModifierType.CONTROL)
    assert (hanja.consumed, hanja.stage) == (True, Stage.HANJA)
    assert session.candidates is not None


def test_modifier_combination_flushes_composition() -> None:
    session, document = make_session()
    type_keys(session, "rk")

    result = press(session, ord("c"), ModifierType.CONTROL)

    assert (result.consumed, result.stage) == (False, Stage.MODIFIER_FLUSH)
    assert document.text == "가"
    assert document.preedit is None


def test_hanja_key_opens_candidates_for_current_syllable() -> None:
    session, document = make_session()
    type_keys(session, "gks")

    press(session, KEY_F9)

    assert document.lookup_visible
    assert document.lookup_candidates == ("韓", "漢", "寒", "恨")
    assert document.auxiliary == "나라 이름 한"
    assert preedit_text(document) == "한"

    # while the list is open it sees keys before any hotkey
    again = press(session, KEY_F9)
    assert (again.consumed, again.stage) == (True, Stage.CANDIDATE)
    assert document.lookup_visible


def test_digit_commits_candidate() -> None:
    session, document = make_session("대")
    type_keys(session, "gks")
    press(session, KEY_F9)

    result = press(session, ord("2"))

    assert (result.consumed, result.stage) == (True, Stage.CANDIDATE)
    assert document.text == "대漢"
    assert document.preedit is None
    assert not document.lookup_visible


def test_out_of_range_digit_is_swallowed() -> None:
    session, document = make_session()
    type_keys(session, "gks")
    press(session, KEY_F9)

    result = press(session, ord("9"))

    assert result.consumed
    assert session.candidates is not None
    assert document.text == ""


def test_navigation_keys_move_the_cursor() -> None:
    session, document = make_session()
    type_keys(session, "gks")
    press(session, KEY_F9)

    press(session, ks.KEY_Right)
    assert document.lookup_cursor == 1
    press(session, ord("l"))
    assert document.lookup_cursor == 2
    press(session, ord("h"))
    assert document.lookup_cursor == 1

    press(session, ks.KEY_Return)
    assert document.text == "漢"


def test_vertical_orientation_uses_up_and_down() -> None:
    session, document = make_session(settings={"lookup-table-orientation": 1})
    type_keys(session, "gks")
    press(session, KEY_F9)

    press(session, ks.KEY_Down)

    assert document.lookup_cursor == 1


def test_escape_closes_candidates_and_keeps_preedit() -> None:
    session, document = make_session()
    type_keys(session, "gks")
    press(session, KEY_F9)

    result = press(session, ks.KEY_Escape)

    assert result.stage is Stage.CANDIDATE
    assert session.candidates is None
    assert preedit_text(document) == "한"


def test_suffix_lookup_includes_text_before_caret() -> None:
    session, document = make_session("한")
    type_keys(session, "rnr")
    press(session, KEY_F9)

    assert document.lookup_candidates == ("韓國", "國")

    press(session, ks.KEY_Return)
    assert document.text == "韓國"


def test_selection_is_converted_exactly() -> None:
    session, document = make_session("한국")
    document.select(0, 2)

    press(session, KEY_F9)
    assert document.lookup_candidates == ("韓國",)

    press(session, ks.KEY_Return)
    assert document.text == "韓國"


def test_caret_lookup_in_immediate_mode_replaces_document_text() -> None:
    session, document = make_session("국", settings={"preedit-mode": "none"})

    press(session, KEY_F9)
    press(session, ks.KEY_Return)

    assert document.text == "國"
