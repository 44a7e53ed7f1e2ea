"""Guillotine packing of rectangles into a single bin."""

from __future__ import annotations

from typing import Sequence

from .geometry import OrientedRectangle, Rectangle

WORST_FIT = 0x7FFFFFFF


def _remove_unordered(items: list, index: int) -> None:
    last = len(items) - 1
    if index != last:
        items[index], items[last] = items[last], items[index]
    items.pop()


class RectanglePacker:
    """Guillotine 2D single bin packer."""

    def __init__(self, width: int = 0, height: int = 0) -> None:
        self._spaces: list[Rectangle] = []
        if width > 0 and height > 0:
            self._spaces.append(Rectangle(0, 0, width, height))

    def expand(self, width: int, height: int) -> None:
        """Grow the packing area; neither dimension may shrink."""
        if width > 0 and height > 0:
            old_width = max((s.x + s.w for s in self._spaces), default=0)
            old_height = max((s.y + s.h for s in self._spaces), default=0)
            self._spaces.append(Rectangle(0, 0, width, height))
            self._split_space(len(self._spaces) - 1, old_width, old_height)

    def _split_space(self, index: int, w: int, h: int) -> None:
        space = self._spaces[index]
        _remove_unordered(self._spaces, index)
        a = Rectangle(space.x, space.y + h, w, space.h - h)
        b = Rectangle(space.x + w, space.y, space.w - w, h)
        if w * (space.h - h) < h * (space.w - w):
            a.w = space.w
        else:
            b.h = space.h
        if a.w > 0 and a.h > 0:
            self._spaces.append(a)
        if b.w > 0 and b.h > 0:
            self._spaces.append(b)

    def _best_fit(
        self, rectangles: Sequence[Rectangle], remaining: list[int], rotate: bool
    ) -> tuple[int, int, bool] | None:
        best_fit = WORST_FIT
        best: tuple[int, int, bool] | None = None
        for i, space in enumerate(self._spaces):
            for j, idx in enumerate(remaining):
                rect = rectangles[idx]
                if rect.w == space.w and rect.h == space.h:
                    return i, j, False
                if rotate and rect.h == space.w and rect.w == space.h:
                    return i, j, True
                if rect.w <= space.w and rect.h <= space.h:
                    fit = min(space.w - rect.w, space.h - rect.h)
                    if fit < best_fit:
                        best, best_fit = (i, j, False), fit
                if rotate and rect.h <= space.w and rect.w <= space.h:
                    fit = min(space.w - rect.h, space.h - rect.w)
                    if fit < best_fit:
                        best, best_fit = (i, j, True), fit
        return best

    def _pack(self, rectangles: Sequence[Rectangle], rotate: bool) -> int:
        remaining = list(range(len(rectangles)))
        while remaining:
            choice = self._best_fit(rectangles, remaining, rotate)
            if choice is None:
                break
            space_index, slot, rotated = choice
            rect = rectangles[remaining[slot]]
            space = self._spaces[space_index]
            rect.x, rect.y = space.x, space.y
            if rotate:
                rect.rotated = rotated  # type: ignore[attr-defined]
            if rotated:
                self._split_space(space_index, rect.h, rect.w)
            else:
                self._split_space(space_index, rect.w, rect.h)
            _remove_unordered(remaining, slot)
        return len(remaining)

    def pack(self, rectangles: Sequence[Rectangle]) -> int:
        """Place the rectangles in place; return how many did not fit."""
        return self._pack(rectangles, rotate=False)

    def pack_oriented(self, rectangles: Sequence[OrientedRectangle]) -> int:
        """Place the rectangles, rotating where it helps; return how many did not fit."""
        return self._pack(rectangles, rotate=True)