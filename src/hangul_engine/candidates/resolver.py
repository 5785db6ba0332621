"""Lookup key derivation and candidate set construction."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from hangul_engine.runtime.telemetry import record_event, span

from .dictionary import Candidate, HanjaTable
from .table import DEFAULT_PAGE_SIZE, LookupTable, Orientation

if TYPE_CHECKING:  # pragma: no cover
    from hangul_engine.buffer.sync import SurroundingText

# codepoints of document text read back from the caret
LOOKBACK = 32


class LookupMethod(Enum):
    EXACT = "exact"
    PREFIX = "prefix"
    SUFFIX = "suffix"


@dataclass(frozen=True, slots=True)
class LookupRequest:
    key: str
    method: LookupMethod


def derive_lookup_key(
    *,
    pending: str,
    live: str,
    buffered: bool,
    accumulate: bool,
    surrounding: Optional["SurroundingText"],
) -> Optional[LookupRequest]:
    """Pick the text to look up and how to match it.

    With buffered input in progress, word accumulation looks up the whole
    pending word by prefix while syllable mode prepends document text and
    matches by suffix. Otherwise a document selection is matched exactly, or
    the text before the caret by suffix.
    """

    combined = pending + live
    if buffered and combined:
        if accumulate:
            return LookupRequest(combined, LookupMethod.PREFIX)
        before = surrounding.before_cursor(LOOKBACK) if surrounding is not None else ""
        return LookupRequest(before + combined, LookupMethod.SUFFIX)

    if surrounding is None:
        return None
    if surrounding.has_selection:
        return LookupRequest(surrounding.selection(), LookupMethod.EXACT)
    return LookupRequest(surrounding.before_cursor(LOOKBACK), LookupMethod.SUFFIX)


@dataclass(slots=True)
class CandidateSet:
    """Matches for one lookup plus the paged table shown to the user."""

    request: LookupRequest
    entries: tuple[Candidate, ...]
    table: LookupTable = field(default_factory=LookupTable)

    @property
    def method(self) -> LookupMethod:
        return self.request.method

    def current(self) -> Optional[Candidate]:
        if not self.entries:
            return None
        return self.entries[self.table.cursor_pos]

    def comment(self) -> str:
        candidate = self.current()
        return candidate.comment if candidate is not None else ""

    def select_in_page(self, index: int) -> bool:
        """Move the cursor to ``index`` within the current page."""

        if index < 0 or index >= self.table.page_size:
            return False
        return self.table.set_cursor_pos(self.table.page_start + index)


class CandidateResolver:
    """Queries the symbol table, then the hanja table; symbols win when found."""

    def __init__(
        self,
        hanja: HanjaTable,
        symbol: Optional[HanjaTable] = None,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        logger_name: str | None = None,
    ) -> None:
        self.hanja = hanja
        self.symbol = symbol
        self.page_size = page_size
        self._logger_name = logger_name

    def query(self, request: LookupRequest) -> List[Candidate]:
        if not request.key:
            return []
        for table in (self.symbol, self.hanja):
            if table is None:
                continue
            matches = _match(table, request)
            if matches:
                return matches
        return []

    def lookup(
        self,
        request: Optional[LookupRequest],
        *,
        orientation: Orientation = Orientation.HORIZONTAL,
    ) -> Optional[CandidateSet]:
        if request is None or not request.key:
            return None
        with span(
            "candidates::lookup",
            logger_name=self._logger_name,
            component="candidates",
            metadata={"method": request.method.value},
        ) as handle:
            matches = self.query(request)
            handle.add_metadata("hits", len(matches))
            record_event(
                "candidates.lookup",
                level="debug",
                data={
                    "key": request.key,
                    "method": request.method.value,
                    "hits": len(matches),
                },
                logger_name=self._logger_name,
            )
            if not matches:
                return None
            table = LookupTable(page_size=self.page_size, orientation=orientation)
            table.extend(candidate.value for candidate in matches)
            table.visible = True
            return CandidateSet(request=request, entries=tuple(matches), table=table)


def _match(table: HanjaTable, request: LookupRequest) -> List[Candidate]:
    if request.method is LookupMethod.EXACT:
        return table.match_exact(request.key)
    if request.method is LookupMethod.PREFIX:
        return table.match_prefix(request.key)
    return table.match_suffix(request.key)


__all__ = [
    "CandidateResolver",
    "CandidateSet",
    "LOOKBACK",
    "LookupMethod",
    "LookupRequest",
    "derive_lookup_key",
]
