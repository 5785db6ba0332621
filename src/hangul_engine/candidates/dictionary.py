"""Plain-text hanja and symbol tables."""

from __future__ import annotations

from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from hangul_engine.runtime.telemetry import record_event

DATA_PACKAGE = "hangul_engine.data"
HANJA_FILE = "hanja.txt"
SYMBOL_FILE = "symbol.txt"


@dataclass(frozen=True, slots=True)
class Candidate:
    key: str
    value: str
    comment: str = ""


def parse_line(line: str) -> Optional[Candidate]:
    """``key:value:comment``; ``None`` for blanks, comments and junk."""

    stripped = line.rstrip("\r\n")
    if not stripped.strip() or stripped.lstrip().startswith("#"):
        return None
    parts = stripped.split(":", 2)
    if len(parts) < 2 or not parts[0] or not parts[1]:
        return None
    comment = parts[2] if len(parts) == 3 else ""
    return Candidate(key=parts[0], value=parts[1], comment=comment)


class HanjaTable:
    """Keyed candidate table with exact, prefix and suffix matching.

    Entries sharing a key keep file order. Prefix and suffix matches list the
    longest matching key first.
    """

    def __init__(
        self, entries: Iterable[Candidate] = (), *, name: str = "hanja"
    ) -> None:
        self.name = name
        self._entries: Dict[str, List[Candidate]] = {}
        self._longest = 0
        for entry in entries:
            self._entries.setdefault(entry.key, []).append(entry)
            self._longest = max(self._longest, len(entry.key))

    @classmethod
    def from_lines(cls, lines: Iterable[str], *, name: str = "hanja") -> "HanjaTable":
        parsed: List[Candidate] = []
        skipped = 0
        for line in lines:
            entry = parse_line(line)
            if entry is None:
                if line.strip() and not line.lstrip().startswith("#"):
                    skipped += 1
                continue
            parsed.append(entry)
        table = cls(parsed, name=name)
        record_event(
            "candidates.table_loaded",
            level="debug",
            data={"table": name, "entries": len(parsed), "skipped": skipped},
        )
        return table

    @classmethod
    def load(cls, path: str | Path, *, name: Optional[str] = None) -> "HanjaTable":
        """Read a table file. ``OSError`` propagates to the caller."""

        source = Path(path)
        with source.open(encoding="utf-8") as handle:
            return cls.from_lines(handle, name=name or source.stem)

    def __len__(self) -> int:
        return sum(len(group) for group in self._entries.values())

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def match_exact(self, key: str) -> List[Candidate]:
        if not key:
            return []
        return list(self._entries.get(key, ()))

    def match_prefix(self, key: str) -> List[Candidate]:
        """Entries whose key is a prefix of ``key``."""

        matches: List[Candidate] = []
        for size in range(min(len(key), self._longest), 0, -1):
            matches.extend(self._entries.get(key[:size], ()))
        return matches

    def match_suffix(self, key: str) -> List[Candidate]:
        """Entries whose key is a suffix of ``key``."""

        matches: List[Candidate] = []
        for size in range(min(len(key), self._longest), 0, -1):
            matches.extend(self._entries.get(key[-size:], ()))
        return matches


def load_packaged_table(filename: str, *, name: Optional[str] = None) -> HanjaTable:
    source = resources.files(DATA_PACKAGE).joinpath(filename)
    with source.open("r", encoding="utf-8") as handle:
        return HanjaTable.from_lines(handle, name=name or filename.rsplit(".", 1)[0])


def load_default_tables() -> Tuple[HanjaTable, HanjaTable]:
    """``(hanja, symbol)`` tables shipped with the package."""

    return load_packaged_table(HANJA_FILE), load_packaged_table(SYMBOL_FILE)


__all__ = [
    "Candidate",
    "HanjaTable",
    "load_default_tables",
    "load_packaged_table",
    "parse_line",
]
