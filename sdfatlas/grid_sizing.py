"""Sizing rules and scale fitting used to lay out a uniform grid atlas."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

from .geometry import Bounds, DistanceRange, Padding, pad
from .glyph_geometry import GlyphGeometry
from .types import DimensionsConstraint

_LARGE_VALUE = 1e240
_BIG_CELL = 1 << 28

_SQUARE_CONSTRAINTS = frozenset({
    DimensionsConstraint.SQUARE,
    DimensionsConstraint.EVEN_SQUARE,
    DimensionsConstraint.MULTIPLE_OF_FOUR_SQUARE,
    DimensionsConstraint.POWER_OF_TWO_SQUARE,
})

_POWER_OF_TWO_CONSTRAINTS = frozenset({
    DimensionsConstraint.POWER_OF_TWO_RECTANGLE,
    DimensionsConstraint.POWER_OF_TWO_SQUARE,
})


@dataclass
class FitSettings:
    """The grid settings that affect how large glyph cells must be."""

    spacing: int = 0
    unit_range: DistanceRange = field(default_factory=DistanceRange)
    px_range: DistanceRange = field(default_factory=DistanceRange)
    miter_limit: float = 0.0
    h_fixed: bool = False
    v_fixed: bool = False
    px_align_origin_x: bool = False
    px_align_origin_y: bool = False
    inner_unit_padding: Padding = field(default_factory=Padding)
    outer_unit_padding: Padding = field(default_factory=Padding)
    inner_px_padding: Padding = field(default_factory=Padding)
    outer_px_padding: Padding = field(default_factory=Padding)
    scale_maximization_tolerance: float = 0.001


def _floor_to_pot(value: int) -> int:
    return 1 << (value.bit_length() - 1)


def _ceil_to_pot(value: int) -> int:
    return 1 << (value - 1).bit_length()


def lower_to_constraint(width: int, height: int, constraint: DimensionsConstraint) -> tuple[int, int]:
    """Return the largest dimensions not above the given ones that satisfy the constraint."""
    if constraint in _SQUARE_CONSTRAINTS:
        width = height = min(width, height)
    if constraint is DimensionsConstraint.EVEN_SQUARE:
        width &= ~1
        height &= ~1
    elif constraint is DimensionsConstraint.MULTIPLE_OF_FOUR_SQUARE:
        width &= ~3
        height &= ~3
    elif constraint in _POWER_OF_TWO_CONSTRAINTS:
        if width > 0:
            width = _floor_to_pot(width)
        if height > 0:
            height = _floor_to_pot(height)
    return width, height


def raise_to_constraint(width: int, height: int, constraint: DimensionsConstraint) -> tuple[int, int]:
    """Return the smallest dimensions not below the given ones that satisfy the constraint."""
    if constraint in _SQUARE_CONSTRAINTS:
        width = height = max(width, height)
    if constraint is DimensionsConstraint.EVEN_SQUARE:
        width += width & 1
        height += height & 1
    elif constraint is DimensionsConstraint.MULTIPLE_OF_FOUR_SQUARE:
        width += -width & 3
        height += -height & 3
    elif constraint in _POWER_OF_TWO_CONSTRAINTS:
        if width > 0:
            width = _ceil_to_pot(width)
        if height > 0:
            height = _ceil_to_pot(height)
    return width, height


def dimensions_rating(width: int, height: int, aligned: bool, aligned_columns_bias: float) -> float:
    """Rate atlas dimensions; lower is better, aligned columns get a bonus."""
    rating = float(width) * width + float(height) * height
    return rating * (1 - aligned_columns_bias if aligned else 1)


def max_bounds(
    glyphs: Sequence[GlyphGeometry],
    scale: float,
    outer_range: float,
    settings: FitSettings,
) -> tuple[Bounds, float, float]:
    """Return the union of the glyphs' scaled bounds and the largest glyph width and height.

    All values are in pixels and include the configured paddings. Whitespace
    glyphs are ignored.
    """
    l_min = b_min = _LARGE_VALUE
    r_max = t_max = -_LARGE_VALUE
    max_width = 0.0
    max_height = 0.0
    for glyph in glyphs:
        if glyph.is_whitespace():
            continue
        geometry_scale = glyph.geometry_scale
        shape_outer_range = outer_range / geometry_scale
        geometry_scale *= scale
        bounds = glyph.bounds
        l = bounds.l - shape_outer_range
        b = bounds.b - shape_outer_range
        r = bounds.r + shape_outer_range
        t = bounds.t + shape_outer_range
        bound_miters = getattr(glyph.shape, "bound_miters", None)
        if settings.miter_limit > 0 and bound_miters is not None:
            l, b, r, t = bound_miters(l, b, r, t, shape_outer_range, settings.miter_limit, 1)
        l *= geometry_scale
        b *= geometry_scale
        r *= geometry_scale
        t *= geometry_scale
        l_min = min(l_min, l)
        b_min = min(b_min, b)
        r_max = max(r_max, r)
        t_max = max(t_max, t)
        max_width = max(max_width, r - l)
        max_height = max(max_height, t - b)
    result = Bounds(l_min, b_min, r_max, t_max)
    if result.l >= result.r or result.b >= result.t:
        result = Bounds()
    full_padding = (
        scale * (settings.inner_unit_padding + settings.outer_unit_padding)
        + settings.inner_px_padding
        + settings.outer_px_padding
    )
    result = pad(result, full_padding)
    max_width += full_padding.l + full_padding.r
    max_height += full_padding.b + full_padding.t
    # A pixel-aligned but unfixed origin may need a shift of under one pixel.
    if settings.h_fixed:
        max_width = result.r - result.l
    elif settings.px_align_origin_x:
        max_width += 1
    if settings.v_fixed:
        max_height = result.t - result.b
    elif settings.px_align_origin_y:
        max_height += 1
    return result, max_width, max_height


def scale_to_fit(
    glyphs: Sequence[GlyphGeometry],
    cell_width: int,
    cell_height: int,
    settings: FitSettings,
) -> tuple[float, Bounds, float, float]:
    """Find the largest scale at which every glyph fits a cell of the given size.

    Returns the scale (0 if none was found) with the bounds, width and height
    that max_bounds gives at that scale. A non-positive cell dimension is
    treated as unlimited.
    """
    if cell_width <= 0:
        cell_width = _BIG_CELL
    if cell_height <= 0:
        cell_height = _BIG_CELL
    # Half a pixel on each side keeps representable values within pixel centers.
    cell_width -= 1 + settings.spacing
    cell_height -= 1 + settings.spacing

    last: tuple[Bounds, float, float] = (Bounds(), 0.0, 0.0)
    last_result = False

    def fits(scale: float) -> bool:
        nonlocal last, last_result
        outer = -(settings.unit_range.lower + settings.px_range.lower / scale)
        last = max_bounds(glyphs, scale, outer, settings)
        last_result = last[1] <= cell_width and last[2] <= cell_height
        return last_result

    min_scale = max_scale = 1.0
    if fits(1.0):
        while max_scale < 1e32:
            max_scale = 2 * min_scale
            if not fits(max_scale):
                break
            min_scale = max_scale
    else:
        while min_scale > 1e-32:
            min_scale = 0.5 * max_scale
            if fits(min_scale):
                break
            max_scale = min_scale
    if min_scale == max_scale:
        return 0.0, *last
    while min_scale / max_scale < 1 - settings.scale_maximization_tolerance:
        mid_scale = 0.5 * (min_scale + max_scale)
        if fits(mid_scale):
            min_scale = mid_scale
        else:
            max_scale = mid_scale
    if not last_result:
        fits(min_scale)
    return min_scale, *last