"""Word-level text the engine has not committed yet."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(slots=True)
class PendingBuffer:
    """Ordered codepoints; offsets and lengths are counted in codepoints."""

    _chars: List[str] = field(default_factory=list)

    @classmethod
    def from_text(cls, text: str) -> "PendingBuffer":
        return cls(_chars=list(text))

    @property
    def text(self) -> str:
        return "".join(self._chars)

    def __len__(self) -> int:
        return len(self._chars)

    def __bool__(self) -> bool:
        return bool(self._chars)

    def append(self, text: str) -> None:
        self._chars.extend(text)

    def erase_head(self, count: int) -> int:
        """Drop up to ``count`` leading codepoints; return how many went."""

        count = max(0, min(count, len(self._chars)))
        del self._chars[:count]
        return count

    def erase_tail(self, count: int) -> int:
        count = max(0, min(count, len(self._chars)))
        if count:
            del self._chars[-count:]
        return count

    def replace(self, text: str) -> None:
        self._chars[:] = list(text)

    def clear(self) -> None:
        self._chars.clear()


__all__ = ["PendingBuffer"]
