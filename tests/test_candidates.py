from __future__ import annotations

from pathlib import Path

import pytest

from hangul_engine.buffer import SurroundingText
from hangul_engine.candidates import (
    CandidateResolver,
    HanjaTable,
    LookupMethod,
    LookupRequest,
    LookupTable,
    Orientation,
    derive_lookup_key,
    load_default_tables,
)
from hangul_engine.candidates.dictionary import parse_line
from hangul_engine.candidates.resolver import LOOKBACK
from hangul_engine.keys import keysyms as ks
from hangul_engine.pipeline import digit_to_position

HANJA_LINES = [
    "# comment",
    "",
    "한:韓:나라 이름 한",
    "한:漢:한수 한",
    "한국:韓國:나라 이름",
    "국:國:나라 국",
    "대한민국:大韓民國:",
    "broken line",
]
SYMBOL_LINES = ["ㅁ:※:REFERENCE MARK", "ㅁ:☆:WHITE STAR"]


def make_resolver() -> CandidateResolver:
    return CandidateResolver(
        HanjaTable.from_lines(HANJA_LINES),
        HanjaTable.from_lines(SYMBOL_LINES, name="symbol"),
    )


def make_table(count: int, *, page_size: int = 9) -> LookupTable:
    table = LookupTable(page_size=page_size)
    table.extend(f"c{index}" for index in range(count))
    return table


def test_parse_line_skips_comments_and_junk() -> None:
    assert parse_line("# note") is None
    assert parse_line("   ") is None
    assert parse_line("nokey") is None
    assert parse_line(":value:") is None

    entry = parse_line("한:韓:나라 이름: 한\n")
    assert entry is not None
    assert (entry.key, entry.value, entry.comment) == ("한", "韓", "나라 이름: 한")


def test_table_matches_keep_file_order_and_longest_first() -> None:
    table = HanjaTable.from_lines(HANJA_LINES)

    assert len(table) == 5
    assert "한국" in table
    assert [c.value for c in table.match_exact("한")] == ["韓", "漢"]
    assert [c.value for c in table.match_prefix("한국어")] == ["韓國", "韓", "漢"]
    assert [c.value for c in table.match_suffix("대한국")] == ["韓國", "國"]
    assert table.match_exact("") == []


def test_load_reads_file_and_missing_file_raises(tmp_path: Path) -> None:
    path = tmp_path / "mine.txt"
    path.write_text("학교:學校:배움터\n", encoding="utf-8")

    table = HanjaTable.load(path)
    assert table.name == "mine"
    assert [c.value for c in table.match_exact("학교")] == ["學校"]

    with pytest.raises(OSError):
        HanjaTable.load(tmp_path / "absent.txt")


def test_packaged_tables_load() -> None:
    hanja, symbol = load_default_tables()

    assert [c.value for c in hanja.match_exact("국")][0] == "國"
    assert "韓" in [c.value for c in hanja.match_exact("한")]
    assert len(symbol.match_exact("ㅁ")) >= 9


def test_derive_key_for_buffered_word_uses_prefix() -> None:
    request = derive_lookup_key(
        pending="대한",
        live="민",
        buffered=True,
        accumulate=True,
        surrounding=SurroundingText("xyz", 3, 3),
    )

    assert request == LookupRequest("대한민", LookupMethod.PREFIX)


def test_derive_key_for_syllable_prepends_document_text() -> None:
    before = "a" * 40 + "대"
    request = derive_lookup_key(
        pending="",
        live="한",
        buffered=True,
        accumulate=False,
        surrounding=SurroundingText(before, len(before), len(before)),
    )

    assert request is not None
    assert request.method is LookupMethod.SUFFIX
    assert request.key == before[-LOOKBACK:] + "한"


def test_derive_key_without_composition_uses_selection_or_caret() -> None:
    selected = derive_lookup_key(
        pending="",
        live="",
        buffered=True,
        accumulate=False,
        surrounding=SurroundingText("한국어", 0, 2),
    )
    caret = derive_lookup_key(
        pending="",
        live="",
        buffered=False,
        accumulate=False,
        surrounding=SurroundingText("한국어", 2, 2),
    )
    blind = derive_lookup_key(
        pending="", live="", buffered=False, accumulate=False, surrounding=None
    )

    assert selected == LookupRequest("한국", LookupMethod.EXACT)
    assert caret == LookupRequest("한국", LookupMethod.SUFFIX)
    assert blind is None


def test_symbols_take_priority_over_hanja() -> None:
    resolver = make_resolver()

    found = resolver.lookup(LookupRequest("ㅁ", LookupMethod.SUFFIX))

    assert found is not None
    assert found.table.candidates == ("※", "☆")
    assert found.comment() == "REFERENCE MARK"
    assert found.table.visible


def test_lookup_returns_none_without_hits() -> None:
    resolver = make_resolver()

    assert resolver.lookup(LookupRequest("없", LookupMethod.PREFIX)) is None
    assert resolver.lookup(None) is None
    assert resolver.lookup(LookupRequest("", LookupMethod.EXACT)) is None


def test_lookup_applies_orientation() -> None:
    resolver = make_resolver()

    found = resolver.lookup(
        LookupRequest("한", LookupMethod.EXACT), orientation=Orientation.VERTICAL
    )

    assert found is not None
    assert found.table.orientation is Orientation.VERTICAL
    assert found.current() is not None and found.current().key == "한"


def test_table_cursor_never_wraps() -> None:
    table = make_table(3)

    assert not table.cursor_up()
    assert table.cursor_down() and table.cursor_down()
    assert not table.cursor_down()
    assert table.current() == "c2"
    assert not table.set_cursor_pos(3)
    assert table.cursor_pos == 2


def test_table_pages() -> None:
    table = make_table(12)

    assert table.page_values() == [f"c{i}" for i in range(9)]
    assert table.page_down()
    assert table.cursor_pos == 9
    assert table.page_values() == ["c9", "c10", "c11"]
    assert not table.page_down()
    assert table.page_up()
    assert table.cursor_pos == 0


def test_digit_selects_within_current_page() -> None:
    table = make_table(12)
    table.page_down()

    assert digit_to_position(table, ks.KEY_1 + 2) == 11
    assert digit_to_position(table, ks.KEY_1) == 9


def test_select_in_page_is_relative_to_page_start() -> None:
    resolver = CandidateResolver(
        HanjaTable.from_lines(f"가:{chr(0x4E00 + i)}" for i in range(12)),
        page_size=9,
    )
    found = resolver.lookup(LookupRequest("가", LookupMethod.EXACT))
    assert found is not None
    found.table.page_down()

    assert found.select_in_page(1)
    assert found.table.cursor_pos == 10
    assert not found.select_in_page(5)
    assert not found.select_in_page(-1)


def test_page_size_must_be_positive() -> None:
    with pytest.raises(ValueError):
        LookupTable(page_size=0)
    assert Orientation.coerce("1") is Orientation.VERTICAL
    assert Orientation.coerce("sideways") is Orientation.HORIZONTAL
