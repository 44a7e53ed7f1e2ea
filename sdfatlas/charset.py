"""Sets of Unicode codepoints."""

from __future__ import annotations

from typing import Iterable, Iterator


class Charset:
    """A set of Unicode codepoints, iterated in ascending order."""

    def __init__(self, codepoints: Iterable[int] = ()) -> None:
        self._codepoints: set[int] = set(codepoints)

    @classmethod
    def ascii(cls) -> "Charset":
        """Return the set of the 95 printable ASCII characters."""
        return cls(range(0x20, 0x7F))

    def add(self, cp: int) -> None:
        """Add a codepoint."""
        self._codepoints.add(cp)

    def remove(self, cp: int) -> None:
        """Remove a codepoint if present."""
        self._codepoints.discard(cp)

    def __len__(self) -> int:
        return len(self._codepoints)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._codepoints))

    def __contains__(self, cp: object) -> bool:
        return cp in self._codepoints

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Charset):
            return NotImplemented
        return self._codepoints == other._codepoints

    def __repr__(self) -> str:
        return f"Charset({sorted(self._codepoints)!r})"