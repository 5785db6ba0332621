from __future__ import annotations

from typing import Any, Dict, List, Sequence, Tuple

from hangul_engine.adapters.textual import (
    TextualHangulAdapter,
    TextualUIHooks,
    key_event_from_textual,
)
from hangul_engine.buffer import Capability, HostDocument
from hangul_engine.candidates import HanjaTable
from hangul_engine.config import ConfigStore, EngineConfig
from hangul_engine.engine import HangulEngine
from hangul_engine.keys import keysyms as ks
from hangul_engine.keys.keysyms import ModifierType
from hangul_engine.pipeline import Stage


def make_adapter(
    **hook_overrides: Any,
) -> Tuple[TextualHangulAdapter, HostDocument, Dict[str, List[Any]]]:
    config = EngineConfig.from_mapping({"initial-input-mode": "hangul"})
    engine = HangulEngine(
        store=ConfigStore(config),
        hanja_table=HanjaTable.from_lines(["한:韓:나라 이름 한", "한:漢:한수 한"]),
    )
    document = HostDocument()
    session = engine.create_session(document)
    session.set_capabilities(Capability.PREEDIT_TEXT | Capability.SURROUNDING_TEXT)

    seen: Dict[str, List[Any]] = {"document": [], "status": [], "candidates": []}

    def show_candidates(values: Sequence[str], cursor: int, comment: str) -> None:
        seen["candidates"].append((tuple(values), cursor, comment))

    hooks = TextualUIHooks(
        update_document=seen["document"].append,
        update_status=seen["status"].append,
        show_candidates=show_candidates,
        **hook_overrides,
    )
    return TextualHangulAdapter(session, document, hooks), document, seen


def test_textual_keys_map_to_key_events() -> None:
    space = key_event_from_textual("shift+space", " ")
    letter = key_event_from_textual("A", "A")
    control = key_event_from_textual("ctrl+a", "\x01")
    function = key_event_from_textual("f9")

    assert space is not None and space.keyval == ks.KEY_space
    assert space.modifiers == ModifierType.SHIFT
    assert letter is not None and letter.keycode == 30
    assert letter.modifiers == ModifierType.SHIFT
    assert control is not None and control.keyval == ord("a")
    assert control.modifiers == ModifierType.CONTROL
    assert function is not None and function.keyval == ks.KEY_F1 + 8
    assert key_event_from_textual("hyper+x") is None
    assert key_event_from_textual("unknown_key") is None


def test_adapter_updates_document_and_status() -> None:
    adapter, document, seen = make_adapter()

    adapter.handle_textual_key("r", character="r")
    adapter.handle_textual_key("k", character="k")

    assert seen["document"][-1] == "가"
    assert seen["status"][-1].startswith("한")
    assert "composing" in seen["status"][-1]
    assert document.text == ""


def test_unconsumed_keys_edit_the_document() -> None:
    adapter, document, seen = make_adapter()

    adapter.handle_textual_key("r", character="r")
    adapter.handle_textual_key("k", character="k")
    adapter.handle_textual_key("space", character=" ")
    adapter.handle_textual_key("shift+space", character=" ")
    result = adapter.handle_textual_key("x", character="x")

    assert result is not None and result.stage is Stage.LATIN
    assert document.text == "가 x"
    assert seen["status"][-1].startswith("EN")


def test_adapter_shows_and_commits_candidates() -> None:
    adapter, document, seen = make_adapter()

    adapter.handle_textual_key("g", character="g")
    adapter.handle_textual_key("k", character="k")
    adapter.handle_textual_key("s", character="s")
    adapter.handle_textual_key("f9")

    assert seen["candidates"][-1] == (("韓", "漢"), 0, "나라 이름 한")

    adapter.click_candidate(1)

    assert document.text == "漢"
    assert seen["candidates"][-1] == ((), 0, "")


def test_adapter_emits_log_lines() -> None:
    logs: List[str] = []
    adapter, _, _ = make_adapter(log=logs.append)

    adapter.handle_textual_key("r", character="r")
    adapter.handle_textual_key("unknown_key")

    assert any(line.startswith("key ->") for line in logs)
    assert any(line.startswith("result <-") for line in logs)
    assert any("unmapped" in line for line in logs)


def test_focus_out_commits_preedit() -> None:
    adapter, document, seen = make_adapter()
    adapter.handle_textual_key("r", character="r")
    adapter.handle_textual_key("k", character="k")

    adapter.focus_out()

    assert document.text == "가"
    assert seen["document"][-1] == "가"


def test_render_document_styles_preedit_ranges() -> None:
    from hangul_engine.adapters.textual.app import render_document

    config = EngineConfig.from_mapping(
        {"initial-input-mode": "hangul", "preedit-mode": "word"}
    )
    engine = HangulEngine(
        store=ConfigStore(config), hanja_table=HanjaTable.from_lines([])
    )
    document = HostDocument.from_text("ab")
    session = engine.create_session(document)
    session.set_capabilities(Capability.PREEDIT_TEXT | Capability.SURROUNDING_TEXT)
    for key in "gksrmf":
        session.process_key_event(ord(key))

    rendered = render_document(document)

    assert rendered.plain == "ab한글"
    styles = {(span.start, span.end, str(span.style)) for span in rendered.spans}
    assert styles == {(2, 3, "underline"), (3, 4, "reverse")}
