"""Paged candidate list mirroring what the host panel shows."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, List, Optional

DEFAULT_PAGE_SIZE = 9


class Orientation(IntEnum):
    HORIZONTAL = 0
    VERTICAL = 1

    @classmethod
    def coerce(cls, value: object) -> "Orientation":
        try:
            return cls(int(value))  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return cls.HORIZONTAL


@dataclass(slots=True)
class LookupTable:
    """Candidate strings with a cursor. Movement never wraps around."""

    page_size: int = DEFAULT_PAGE_SIZE
    orientation: Orientation = Orientation.HORIZONTAL
    cursor_pos: int = 0
    visible: bool = False
    _candidates: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError("page_size must be at least 1")

    def __len__(self) -> int:
        return len(self._candidates)

    @property
    def candidates(self) -> tuple[str, ...]:
        return tuple(self._candidates)

    def clear(self) -> None:
        self._candidates.clear()
        self.cursor_pos = 0

    def extend(self, values: Iterable[str]) -> None:
        self._candidates.extend(values)

    def append(self, value: str) -> None:
        self._candidates.append(value)

    def current(self) -> Optional[str]:
        if not self._candidates:
            return None
        return self._candidates[self.cursor_pos]

    @property
    def page_index(self) -> int:
        return self.cursor_pos // self.page_size

    @property
    def page_start(self) -> int:
        return self.page_index * self.page_size

    @property
    def cursor_in_page(self) -> int:
        return self.cursor_pos - self.page_start

    def page_values(self) -> List[str]:
        return self._candidates[self.page_start : self.page_start + self.page_size]

    def set_cursor_pos(self, position: int) -> bool:
        if not 0 <= position < len(self._candidates):
            return False
        self.cursor_pos = position
        return True

    def cursor_up(self) -> bool:
        if self.cursor_pos == 0:
            return False
        self.cursor_pos -= 1
        return True

    def cursor_down(self) -> bool:
        if self.cursor_pos + 1 >= len(self._candidates):
            return False
        self.cursor_pos += 1
        return True

    def page_up(self) -> bool:
        if self.page_index == 0:
            return False
        self.cursor_pos -= self.page_size
        return True

    def page_down(self) -> bool:
        if self.page_start + self.page_size >= len(self._candidates):
            return False
        last = len(self._candidates) - 1
        self.cursor_pos = min(self.cursor_pos + self.page_size, last)
        return True


__all__ = ["DEFAULT_PAGE_SIZE", "LookupTable", "Orientation"]
