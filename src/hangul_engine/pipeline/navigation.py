"""Key handling while a candidate list is open."""

from __future__ import annotations

from typing import Callable, Dict

from hangul_engine.candidates.table import LookupTable, Orientation
from hangul_engine.keys import keysyms as ks

from .base import SessionControl

_Move = Callable[[LookupTable], bool]

_CURSOR_UP: _Move = LookupTable.cursor_up
_CURSOR_DOWN: _Move = LookupTable.cursor_down
_PAGE_UP: _Move = LookupTable.page_up
_PAGE_DOWN: _Move = LookupTable.page_down

# horizontal lists move along Left/Right and page with Up/Down; vertical swaps
ARROW_MOVES: Dict[Orientation, Dict[int, _Move]] = {
    Orientation.HORIZONTAL: {
        ks.KEY_Left: _CURSOR_UP,
        ks.KEY_Right: _CURSOR_DOWN,
        ks.KEY_Up: _PAGE_UP,
        ks.KEY_Down: _PAGE_DOWN,
    },
    Orientation.VERTICAL: {
        ks.KEY_Left: _PAGE_UP,
        ks.KEY_Right: _PAGE_DOWN,
        ks.KEY_Up: _CURSOR_UP,
        ks.KEY_Down: _CURSOR_DOWN,
    },
}

VIM_MOVES: Dict[Orientation, Dict[int, _Move]] = {
    Orientation.HORIZONTAL: {
        ks.KEY_h: _CURSOR_UP,
        ks.KEY_l: _CURSOR_DOWN,
        ks.KEY_k: _PAGE_UP,
        ks.KEY_j: _PAGE_DOWN,
    },
    Orientation.VERTICAL: {
        ks.KEY_h: _PAGE_UP,
        ks.KEY_l: _PAGE_DOWN,
        ks.KEY_k: _CURSOR_UP,
        ks.KEY_j: _CURSOR_DOWN,
    },
}

PAGE_MOVES: Dict[int, _Move] = {
    ks.KEY_Page_Up: _PAGE_UP,
    ks.KEY_Page_Down: _PAGE_DOWN,
}


def digit_to_position(table: LookupTable, keyval: int) -> int:
    """Absolute candidate index selected by digit key ``1``..``9``."""

    return table.page_index * table.page_size + (keyval - ks.KEY_1)


class CandidateNavigator:
    """Moves through, selects from, or closes the open candidate list.

    ``handle`` returns ``True`` when the key meant something to the list.
    h/j/k/l only move the list while hanja lock is off, since with the lock
    on those letters are ordinary input.
    """

    def __init__(self, session: SessionControl) -> None:
        self.session = session

    def handle(self, keyval: int) -> bool:
        session = self.session
        candidates = session.candidates
        if candidates is None:
            return False
        table = candidates.table

        if keyval == ks.KEY_Escape:
            session.hide_lookup_table()
            session.render_preedit()
            return True

        if keyval == ks.KEY_Return:
            self._commit()
            return True

        if ks.KEY_1 <= keyval <= ks.KEY_9:
            if table.set_cursor_pos(digit_to_position(table, keyval)):
                self._commit()
            return True

        orientation = session.config.lookup_table_orientation
        move = PAGE_MOVES.get(keyval) or ARROW_MOVES[orientation].get(keyval)
        if move is None and not session.hanja_lock:
            move = VIM_MOVES[orientation].get(keyval)
        if move is None:
            return False

        move(table)
        session.update_lookup_table_ui()
        return True

    def _commit(self) -> None:
        self.session.commit_current_candidate()
        self.session.after_candidate_commit()


__all__ = ["ARROW_MOVES", "CandidateNavigator", "VIM_MOVES", "digit_to_position"]
