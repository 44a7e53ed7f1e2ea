"""Small geometric value types: bounds, distance ranges, paddings and rectangles."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned bounds given by left, bottom, right and top edges."""

    l: float = 0.0
    b: float = 0.0
    r: float = 0.0
    t: float = 0.0


@dataclass(frozen=True)
class DistanceRange:
    """A range of representable signed distances."""

    lower: float = 0.0
    upper: float = 0.0

    @classmethod
    def symmetric(cls, width: float) -> "DistanceRange":
        """Return a range of the given total width centred on zero."""
        return cls(-0.5 * width, 0.5 * width)

    def __add__(self, other: "DistanceRange") -> "DistanceRange":
        if not isinstance(other, DistanceRange):
            return NotImplemented
        return DistanceRange(self.lower + other.lower, self.upper + other.upper)

    def __mul__(self, factor: float) -> "DistanceRange":
        if isinstance(factor, DistanceRange):
            return NotImplemented
        return DistanceRange(self.lower * factor, self.upper * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> "DistanceRange":
        if isinstance(divisor, DistanceRange):
            return NotImplemented
        return DistanceRange(self.lower / divisor, self.upper / divisor)


@dataclass(frozen=True)
class Padding:
    """Padding widths on the left, bottom, right and top sides."""

    l: float = 0.0
    b: float = 0.0
    r: float = 0.0
    t: float = 0.0

    @classmethod
    def uniform(cls, value: float) -> "Padding":
        """Return the same padding on all four sides."""
        return cls(value, value, value, value)

    def __neg__(self) -> "Padding":
        return Padding(-self.l, -self.b, -self.r, -self.t)

    def __add__(self, other: "Padding") -> "Padding":
        if not isinstance(other, Padding):
            return NotImplemented
        return Padding(self.l + other.l, self.b + other.b, self.r + other.r, self.t + other.t)

    def __sub__(self, other: "Padding") -> "Padding":
        if not isinstance(other, Padding):
            return NotImplemented
        return Padding(self.l - other.l, self.b - other.b, self.r - other.r, self.t - other.t)

    def __mul__(self, factor: float) -> "Padding":
        if isinstance(factor, Padding):
            return NotImplemented
        return Padding(self.l * factor, self.b * factor, self.r * factor, self.t * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> "Padding":
        if isinstance(divisor, Padding):
            return NotImplemented
        return Padding(self.l / divisor, self.b / divisor, self.r / divisor, self.t / divisor)


def pad(bounds: Bounds, padding: Padding) -> Bounds:
    """Return the bounds grown outwards by the padding."""
    return Bounds(
        bounds.l - padding.l,
        bounds.b - padding.b,
        bounds.r + padding.r,
        bounds.t + padding.t,
    )


@dataclass
class Rectangle:
    """An integer rectangle; its position is filled in by packing."""

    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0


@dataclass
class OrientedRectangle(Rectangle):
    """A rectangle that a packer may place rotated by 90 degrees."""

    rotated: bool = False


@dataclass(frozen=True)
class Remap:
    """The repositioning of a subsection of the atlas."""

    index: int
    source: tuple[int, int] = field(default=(0, 0))
    target: tuple[int, int] = field(default=(0, 0))
    width: int = 0
    height: int = 0