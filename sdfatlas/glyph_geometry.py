"""Geometry and atlas box layout of a single glyph."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

from .geometry import Bounds, DistanceRange, Padding, Rectangle, pad
from .types import GlyphIdentifierType


def _half_toward_zero(value: int) -> int:
    """Halve an integer, truncating toward zero."""
    return int(value / 2) if value >= 0 else -((-value) // 2)


@dataclass
class GlyphAttributes:
    """Settings used to compute a glyph's box."""

    scale: float = 0.0
    range: DistanceRange = field(default_factory=DistanceRange)
    inner_padding: Padding = field(default_factory=Padding)
    outer_padding: Padding = field(default_factory=Padding)
    miter_limit: float = 0.0
    px_align_origin_x: bool = False
    px_align_origin_y: bool = False


@dataclass
class GlyphBox:
    """The simplified layout of a glyph: its quad bounds and place in the atlas."""

    index: int = 0
    advance: float = 0.0
    bounds: Bounds = field(default_factory=Bounds)
    rect: Rectangle = field(default_factory=Rectangle)


@dataclass
class _Box:
    rect: Rectangle = field(default_factory=Rectangle)
    range: DistanceRange = field(default_factory=DistanceRange)
    scale: float = 0.0
    translate: tuple[float, float] = (0.0, 0.0)
    outer_padding: Padding = field(default_factory=Padding)


class GlyphGeometry:
    """The shape geometry of one glyph together with its box in the atlas.

    The shape is a sequence of contours; an empty shape is whitespace. If the
    shape has a ``bound_miters(l, b, r, t, border, miter_limit, polarity)``
    method returning new ``(l, b, r, t)``, it is used to widen the box for
    miters when a positive miter limit is set.
    """

    def __init__(
        self,
        index: int = 0,
        codepoint: int = 0,
        geometry_scale: float = 1.0,
        bounds: Bounds | None = None,
        advance: float = 0.0,
        shape: Sequence[Any] = (),
    ) -> None:
        self.index = index
        self.codepoint = codepoint
        self.geometry_scale = geometry_scale
        self.bounds = bounds if bounds is not None else Bounds()
        self.advance = advance
        self.shape = shape
        self._box = _Box()

    def is_whitespace(self) -> bool:
        """Return true if the glyph has no geometry."""
        return len(self.shape) == 0

    def edge_coloring(self, fn: Callable[[Any, float, int], None], angle_threshold: float, seed: int) -> None:
        """Apply an edge coloring function to the glyph's shape."""
        fn(self.shape, angle_threshold, seed)

    def _outer_bounds(self, attributes: GlyphAttributes, range_: DistanceRange) -> tuple[float, float, float, float]:
        full_padding = (attributes.inner_padding + attributes.outer_padding) / self.geometry_scale
        l = self.bounds.l + range_.lower
        b = self.bounds.b + range_.lower
        r = self.bounds.r - range_.lower
        t = self.bounds.t - range_.lower
        bound_miters = getattr(self.shape, "bound_miters", None)
        if attributes.miter_limit > 0 and bound_miters is not None:
            l, b, r, t = bound_miters(l, b, r, t, -range_.lower, attributes.miter_limit, 1)
        padded = pad(Bounds(l, b, r, t), full_padding)
        return padded.l, padded.b, padded.r, padded.t

    def wrap_box(self, attributes: GlyphAttributes) -> None:
        """Compute the box dimensions and the transformation for generating the glyph."""
        scale = attributes.scale * self.geometry_scale
        range_ = attributes.range / self.geometry_scale
        box = self._box
        box.range = range_
        box.scale = scale
        bounds = self.bounds
        if bounds.l < bounds.r and bounds.b < bounds.t:
            l, b, r, t = self._outer_bounds(attributes, range_)
            if attributes.px_align_origin_x:
                sl = math.floor(scale * l - 0.5)
                sr = math.ceil(scale * r + 0.5)
                box.rect.w = sr - sl
                tx = -sl / scale
            else:
                w = scale * (r - l)
                box.rect.w = math.ceil(w) + 1
                tx = -l + 0.5 * (box.rect.w - w) / scale
            if attributes.px_align_origin_y:
                sb = math.floor(scale * b - 0.5)
                st = math.ceil(scale * t + 0.5)
                box.rect.h = st - sb
                ty = -sb / scale
            else:
                h = scale * (t - b)
                box.rect.h = math.ceil(h) + 1
                ty = -b + 0.5 * (box.rect.h - h) / scale
            box.translate = (tx, ty)
            box.outer_padding = attributes.scale * attributes.outer_padding
        else:
            box.rect.w = 0
            box.rect.h = 0
            box.translate = (0.0, 0.0)

    def frame_box(
        self,
        attributes: GlyphAttributes,
        width: int,
        height: int,
        fixed_x: float | None = None,
        fixed_y: float | None = None,
    ) -> None:
        """Compute the transformation placing the glyph in a box of given dimensions.

        A fixed origin coordinate, where given, replaces centering in that axis.
        """
        scale = attributes.scale * self.geometry_scale
        range_ = attributes.range / self.geometry_scale
        box = self._box
        box.range = range_
        box.scale = scale
        box.rect.w = width
        box.rect.h = height
        if fixed_x is not None and fixed_y is not None:
            box.translate = (fixed_x / self.geometry_scale, fixed_y / self.geometry_scale)
        else:
            l, b, r, t = self._outer_bounds(attributes, range_)
            if fixed_x is not None:
                tx = fixed_x / self.geometry_scale
            elif attributes.px_align_origin_x:
                sl = math.floor(scale * l - 0.5)
                sr = math.ceil(scale * r + 0.5)
                tx = (-sl + _half_toward_zero(box.rect.w - (sr - sl))) / scale
            else:
                w = scale * (r - l)
                tx = -l + 0.5 * (box.rect.w - w) / scale
            if fixed_y is not None:
                ty = fixed_y / self.geometry_scale
            elif attributes.px_align_origin_y:
                sb = math.floor(scale * b - 0.5)
                st = math.ceil(scale * t + 0.5)
                ty = (-sb + _half_toward_zero(box.rect.h - (st - sb))) / scale
            else:
                h = scale * (t - b)
                ty = -b + 0.5 * (box.rect.h - h) / scale
            box.translate = (tx, ty)
        box.outer_padding = attributes.scale * attributes.outer_padding

    def place_box(self, x: int, y: int) -> None:
        """Set the position of the glyph's box in the atlas."""
        self._box.rect.x = x
        self._box.rect.y = y

    @property
    def box_rect(self) -> Rectangle:
        """A copy of the glyph's box in the atlas."""
        rect = self._box.rect
        return Rectangle(rect.x, rect.y, rect.w, rect.h)

    @box_rect.setter
    def box_rect(self, rect: Rectangle) -> None:
        self._box.rect = Rectangle(rect.x, rect.y, rect.w, rect.h)

    @property
    def box_range(self) -> DistanceRange:
        """The distance range needed to generate the glyph's field."""
        return self._box.range

    @property
    def box_scale(self) -> float:
        """The scale needed to generate the glyph's bitmap."""
        return self._box.scale

    @property
    def box_translate(self) -> tuple[float, float]:
        """The translation needed to generate the glyph's bitmap."""
        return self._box.translate

    def get_identifier(self, identifier_type: GlyphIdentifierType) -> int:
        """Return the glyph index or codepoint, as chosen."""
        if identifier_type is GlyphIdentifierType.GLYPH_INDEX:
            return self.index
        if identifier_type is GlyphIdentifierType.UNICODE_CODEPOINT:
            return self.codepoint
        return 0

    def quad_plane_bounds(self) -> Bounds:
        """Return the glyph's quad as placed on the baseline."""
        box = self._box
        if box.rect.w > 0 and box.rect.h > 0:
            inv = 1 / box.scale
            tx, ty = box.translate
            pad_ = box.outer_padding
            gs = self.geometry_scale
            return Bounds(
                gs * (-tx + (pad_.l + 0.5) * inv),
                gs * (-ty + (pad_.b + 0.5) * inv),
                gs * (-tx + (-pad_.r + box.rect.w - 0.5) * inv),
                gs * (-ty + (-pad_.t + box.rect.h - 0.5) * inv),
            )
        return Bounds()

    def quad_atlas_bounds(self) -> Bounds:
        """Return the glyph's quad in atlas pixel coordinates."""
        box = self._box
        rect = box.rect
        if rect.w > 0 and rect.h > 0:
            pad_ = box.outer_padding
            return Bounds(
                rect.x + pad_.l + 0.5,
                rect.y + pad_.b + 0.5,
                rect.x - pad_.r + rect.w - 0.5,
                rect.y - pad_.t + rect.h - 0.5,
            )
        return Bounds()

    def to_glyph_box(self) -> GlyphBox:
        """Simplify to a GlyphBox."""
        return GlyphBox(
            index=self.index,
            advance=self.advance,
            bounds=self.quad_plane_bounds(),
            rect=self.box_rect,
        )