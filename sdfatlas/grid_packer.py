"""Layout of a static uniform grid atlas."""

from __future__ import annotations

import copy
import math
from typing import Sequence

from .geometry import Bounds, DistanceRange, Padding
from .glyph_geometry import GlyphAttributes, GlyphGeometry
from .grid_sizing import (
    FitSettings,
    dimensions_rating,
    lower_to_constraint,
    max_bounds,
    raise_to_constraint,
    scale_to_fit,
)
from .types import DimensionsConstraint


def _ceil_div(numerator: int, divisor: int) -> int:
    return (numerator + divisor - 1) // divisor


def _div_toward_zero(value: int, divisor: int) -> int:
    quotient = abs(value) // abs(divisor)
    return quotient if (value >= 0) == (divisor > 0) else -quotient


def _fdiv(a: float, b: float) -> float:
    """Floating division that yields infinities or NaN on a zero divisor."""
    if b != 0:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


class GridAtlasPacker:
    """Computes the layout of a uniform grid atlas.

    Unset values (negative dimensions, columns, rows or scale) are determined
    by ``pack``, which may also find the largest glyph scale that fits. After
    packing, the attributes hold the final layout; ``cutoff`` is true if the
    explicitly constrained cells are too small to hold every glyph fully.
    """

    def __init__(self) -> None:
        self.columns = -1
        self.rows = -1
        self.width = -1
        self.height = -1
        self.cell_width = -1
        self.cell_height = -1
        self.spacing = 0
        self.dimensions_constraint = DimensionsConstraint.NONE
        self.cell_dimensions_constraint = DimensionsConstraint.NONE
        self.h_fixed = False
        self.v_fixed = False
        self.scale = -1.0
        self.min_scale = 1.0
        self.fixed_x = 0.0
        self.fixed_y = 0.0
        self.unit_range = DistanceRange()
        self.px_range = DistanceRange()
        self.miter_limit = 0.0
        self.px_align_origin_x = False
        self.px_align_origin_y = False
        self.inner_unit_padding = Padding()
        self.outer_unit_padding = Padding()
        self.inner_px_padding = Padding()
        self.outer_px_padding = Padding()
        self.scale_maximization_tolerance = 0.001
        self.aligned_columns_bias = 0.125
        self.cutoff = False

    def _settings(self) -> FitSettings:
        return FitSettings(
            spacing=self.spacing,
            unit_range=self.unit_range,
            px_range=self.px_range,
            miter_limit=self.miter_limit,
            h_fixed=self.h_fixed,
            v_fixed=self.v_fixed,
            px_align_origin_x=self.px_align_origin_x,
            px_align_origin_y=self.px_align_origin_y,
            inner_unit_padding=self.inner_unit_padding,
            outer_unit_padding=self.outer_unit_padding,
            inner_px_padding=self.inner_px_padding,
            outer_px_padding=self.outer_px_padding,
            scale_maximization_tolerance=self.scale_maximization_tolerance,
        )

    def _outer_range(self, scale: float) -> float:
        return -(self.unit_range.lower + self.px_range.lower / scale)

    def _candidate_columns(self, cell_count: int, q: int) -> tuple[int, int]:
        return q, _ceil_div(cell_count, q)

    def pack(self, glyphs: Sequence[GlyphGeometry]) -> int:
        """Lay out the glyphs; return how many glyphs did not fit (0 on success).

        Raises ValueError if no layout can be found, for instance when the
        cells are too small to hold the distance range.
        """
        glyphs = list(glyphs)
        if not glyphs:
            return 0
        initial = copy.copy(self)
        settings = self._settings()

        if self.columns > 0 and self.rows > 0:
            cell_count = self.columns * self.rows
        else:
            cell_count = sum(1 for glyph in glyphs if not glyph.is_whitespace())
            if self.columns > 0:
                self.rows = _ceil_div(cell_count, self.columns)
            elif self.rows > 0:
                self.columns = _ceil_div(cell_count, self.rows)
            elif self.width > 0 and self.cell_width > 0:
                self.columns = (self.width + self.spacing) // self.cell_width
                if self.columns <= 0:
                    raise ValueError("cells are wider than the atlas")
                self.rows = _ceil_div(cell_count, self.columns)

        if self.width < 0 and self.cell_width > 0 and self.columns > 0:
            self.width = self.columns * self.cell_width
        if self.height < 0 and self.cell_height > 0 and self.rows > 0:
            self.height = self.rows * self.cell_height
        if self.width != initial.width or self.height != initial.height:
            self.width, self.height = raise_to_constraint(self.width, self.height, self.dimensions_constraint)

        if self.cell_width < 0 and self.width > 0 and self.columns > 0:
            self.cell_width = (self.width + self.spacing) // self.columns
        if self.cell_height < 0 and self.height > 0 and self.rows > 0:
            self.cell_height = (self.height + self.spacing) // self.rows
        if self.cell_width != initial.cell_width or self.cell_height != initial.cell_height:
            positive_w, positive_h = self.cell_width > 0, self.cell_height > 0
            self.cell_width, self.cell_height = lower_to_constraint(
                self.cell_width, self.cell_height, self.cell_dimensions_constraint)
            if (self.cell_width == 0 and positive_w) or (self.cell_height == 0 and positive_h):
                raise ValueError("cell dimensions cannot satisfy the constraint")

        min_cell = -2 * self.px_range.lower
        if ((self.cell_width > 0 and self.cell_width - self.spacing - 1 <= min_cell)
                or (self.cell_height > 0 and self.cell_height - self.spacing - 1 <= min_cell)):
            raise ValueError("cells are too small for the pixel range")

        bounds = Bounds()
        max_w = max_h = 0.0

        if self.scale <= 0:
            if self.px_range.lower != self.px_range.upper and self.miter_limit > 0:
                bounds, max_w, max_h = self._fit_with_miters(glyphs, settings, cell_count, initial)
            else:
                bounds, max_w, max_h = self._fit_linear(glyphs, settings, cell_count, initial)
        else:
            bounds, max_w, max_h = max_bounds(glyphs, self.scale, self._outer_range(self.scale), settings)
            optimal_w = math.ceil(max_w) + self.spacing + 1
            optimal_h = math.ceil(max_h) + self.spacing + 1
            if self.cell_width < 0 or self.cell_height < 0:
                self.cell_width, self.cell_height = raise_to_constraint(
                    optimal_w, optimal_h, self.cell_dimensions_constraint)
            elif self.cell_width < optimal_w or self.cell_height < optimal_h:
                self.cutoff = True

        if self.h_fixed:
            if self.px_align_origin_x:
                sl = math.floor(bounds.l - 0.5)
                sr = math.ceil(bounds.r + 0.5)
                free = self.cell_width - self.spacing - (sr - sl)
                self.fixed_x = (-sl + _div_toward_zero(free, 2)) / self.scale
            else:
                self.fixed_x = (-bounds.l + 0.5 * (self.cell_width - self.spacing - max_w)) / self.scale
        if self.v_fixed:
            if self.px_align_origin_y:
                sb = math.floor(bounds.b - 0.5)
                st = math.ceil(bounds.t + 0.5)
                free = self.cell_height - self.spacing - (st - sb)
                self.fixed_y = (-sb + _div_toward_zero(free, 2)) / self.scale
            else:
                self.fixed_y = (-bounds.b + 0.5 * (self.cell_height - self.spacing - max_h)) / self.scale

        if self.width < 0 or self.height < 0:
            if self.columns <= 0:
                best_rating = -1.0
                for q in range(math.isqrt(cell_count) + 1, 0, -1):
                    candidates = ((q, _ceil_div(cell_count, q)), (_ceil_div(cell_count, q), q))
                    for cols, rows in candidates:
                        if cols <= 0:
                            continue
                        rows = _ceil_div(cell_count, cols) if (cols, rows) == candidates[0] else rows
                        cur_w, cur_h = raise_to_constraint(
                            cols * self.cell_width, rows * self.cell_height, self.dimensions_constraint)
                        rating = dimensions_rating(
                            cur_w, cur_h, cols * self.cell_width == cur_w, self.aligned_columns_bias)
                        if rating < best_rating or best_rating < 0:
                            best_rating = rating
                            self.columns = cols
                self.rows = _ceil_div(cell_count, self.columns)
            self.width, self.height = raise_to_constraint(
                self.columns * self.cell_width, self.rows * self.cell_height, self.dimensions_constraint)
            if (self.dimensions_constraint is not DimensionsConstraint.NONE
                    and initial.cell_width < 0 and initial.cell_height < 0):
                # The constraint may have grown the atlas; refit the cells to it.
                self.cell_width = initial.cell_width
                self.cell_height = initial.cell_height
                self.columns = initial.columns
                self.rows = initial.rows
                self.scale = initial.scale
                return self.pack(glyphs)

        if self.columns < 0:
            self.columns = (self.width + self.spacing) // self.cell_width
            if self.columns <= 0:
                raise ValueError("cells are wider than the atlas")
            self.rows = _ceil_div(cell_count, self.columns)
        if self.rows * self.cell_height > self.height:
            self.rows = self.height // self.cell_height

        attributes = GlyphAttributes(
            scale=self.scale,
            range=self.unit_range + self.px_range / self.scale,
            inner_padding=self.inner_unit_padding + 1 / self.scale * self.inner_px_padding,
            outer_padding=self.outer_unit_padding + 1 / self.scale * self.outer_px_padding,
            miter_limit=self.miter_limit,
            px_align_origin_x=self.px_align_origin_x,
            px_align_origin_y=self.px_align_origin_y,
        )
        col = row = 0
        for position, glyph in enumerate(glyphs):
            if glyph.is_whitespace():
                continue
            glyph.frame_box(
                attributes,
                self.cell_width - self.spacing,
                self.cell_height - self.spacing,
                self.fixed_x if self.h_fixed else None,
                self.fixed_y if self.v_fixed else None,
            )
            glyph.place_box(col * self.cell_width, self.height - (row + 1) * self.cell_height)
            col += 1
            if col >= self.columns:
                row += 1
                if row >= self.rows:
                    return len(glyphs) - position - 1
                col = 0
        return 0

    def _fit_with_miters(self, glyphs, settings, cell_count, initial):
        bounds, max_w, max_h = Bounds(), 0.0, 0.0
        if self.cell_width > 0 or self.cell_height > 0:
            self.scale, bounds, max_w, max_h = scale_to_fit(glyphs, self.cell_width, self.cell_height, settings)
            if self.scale < self.min_scale:
                self.scale = self.min_scale
                self.cutoff = True
                bounds, max_w, max_h = max_bounds(glyphs, self.scale, self._outer_range(self.scale), settings)
        elif self.width > 0 and self.height > 0:
            best_aligned_scale = 0.0
            best_cols = best_aligned_cols = 0
            for q in range(math.isqrt(cell_count) + 1, 0, -1):
                for cols in (q, _ceil_div(cell_count, q)):
                    if cols <= 0:
                        continue
                    rows = _ceil_div(cell_count, cols)
                    if rows <= 0:
                        continue
                    tw, th = lower_to_constraint(
                        (self.width + self.spacing) // cols,
                        (self.height + self.spacing) // rows,
                        self.cell_dimensions_constraint)
                    if tw > 0 and th > 0:
                        current, bounds, max_w, max_h = scale_to_fit(glyphs, tw, th, settings)
                        if current > self.scale:
                            self.scale = current
                            best_cols = cols
                        if cols * tw == self.width and current > best_aligned_scale:
                            best_aligned_scale = current
                            best_aligned_cols = cols
            if not best_cols:
                raise ValueError("no grid arrangement fits the atlas dimensions")
            if (best_aligned_scale >= self.min_scale
                    and (self.aligned_columns_bias + 1) * best_aligned_scale >= self.scale):
                self.scale = best_aligned_scale
                best_cols = best_aligned_cols
            self.columns = best_cols
            self.rows = _ceil_div(cell_count, self.columns)
            self.cell_width, self.cell_height = lower_to_constraint(
                (self.width + self.spacing) // self.columns,
                (self.height + self.spacing) // self.rows,
                self.cell_dimensions_constraint)
            self.scale, bounds, max_w, max_h = scale_to_fit(glyphs, self.cell_width, self.cell_height, settings)
            if self.scale < self.min_scale:
                self.scale = -1.0

        if self.scale <= 0:
            bounds, max_w, max_h = max_bounds(glyphs, self.min_scale, self._outer_range(self.min_scale), settings)
            self.cell_width, self.cell_height = raise_to_constraint(
                math.ceil(max_w) + self.spacing + 1,
                math.ceil(max_h) + self.spacing + 1,
                self.cell_dimensions_constraint)
            self.scale, bounds, max_w, max_h = scale_to_fit(glyphs, self.cell_width, self.cell_height, settings)
            if self.scale < self.min_scale:
                self.scale = self.min_scale
                bounds, max_w, max_h = max_bounds(glyphs, self.min_scale, self._outer_range(self.min_scale), settings)

        if initial.rows < 0 and initial.cell_height < 0:
            optimal_w, optimal_h = raise_to_constraint(
                self.cell_width, math.ceil(max_h) + self.spacing + 1, self.cell_dimensions_constraint)
            if optimal_h < self.cell_height and optimal_w <= self.cell_width:
                self.cell_width, self.cell_height = optimal_w, optimal_h
        return bounds, max_w, max_h

    def _fit_linear(self, glyphs, settings, cell_count, initial):
        px_padding = self.inner_px_padding + self.outer_px_padding
        bounds, max_w, max_h = max_bounds(glyphs, 1.0, -self.unit_range.lower, settings)
        # Pixel padding is only known in pixels; remove it until the scale is known.
        bounds = Bounds(bounds.l + px_padding.l, bounds.b + px_padding.b,
                        bounds.r - px_padding.r, bounds.t - px_padding.t)
        max_w -= px_padding.l + px_padding.r
        max_h -= px_padding.b + px_padding.t
        h_slack = v_slack = 0
        if self.px_align_origin_x and not self.h_fixed:
            max_w -= 1
            h_slack = 1
        if self.px_align_origin_y and not self.v_fixed:
            max_h -= 1
            v_slack = 1

        extra_w = -2 * self.px_range.lower + px_padding.l + px_padding.r
        extra_h = -2 * self.px_range.lower + px_padding.b + px_padding.t

        def h_scale_for(cell_w: int) -> float:
            return _fdiv(cell_w - h_slack - self.spacing - extra_w - 1, max_w)

        def v_scale_for(cell_h: int) -> float:
            return _fdiv(cell_h - v_slack - self.spacing - extra_h - 1, max_h)

        h_scale = h_scale_for(self.cell_width) if self.cell_width > 0 else 0.0
        v_scale = v_scale_for(self.cell_height) if self.cell_height > 0 else 0.0
        if h_scale or v_scale:
            self.scale = min(h_scale, v_scale) if h_scale and v_scale else h_scale + v_scale
            if self.scale < self.min_scale:
                self.scale = self.min_scale
                self.cutoff = True
        elif self.width > 0 and self.height > 0:
            best_aligned_scale = 0.0
            best_cols = best_aligned_cols = 0
            for cols in range(1, self.width):
                rows = _ceil_div(cell_count, cols)
                if rows <= 0:
                    continue
                tw, th = lower_to_constraint(
                    (self.width + self.spacing) // cols,
                    (self.height + self.spacing) // rows,
                    self.cell_dimensions_constraint)
                if tw > 0 and th > 0:
                    current = min(h_scale_for(tw), v_scale_for(th))
                    if current > self.scale:
                        self.scale = current
                        best_cols = cols
                    if cols * tw == self.width and current > best_aligned_scale:
                        best_aligned_scale = current
                        best_aligned_cols = cols
            if not best_cols:
                raise ValueError("no grid arrangement fits the atlas dimensions")
            if (best_aligned_scale >= self.min_scale
                    and (self.aligned_columns_bias + 1) * best_aligned_scale >= self.scale):
                self.scale = best_aligned_scale
                best_cols = best_aligned_cols
            self.columns = best_cols
            self.rows = _ceil_div(cell_count, self.columns)
            self.cell_width, self.cell_height = lower_to_constraint(
                (self.width + self.spacing) // self.columns,
                (self.height + self.spacing) // self.rows,
                self.cell_dimensions_constraint)
            if self.scale < self.min_scale:
                self.scale = -1.0

        if self.scale <= 0:
            self.cell_width, self.cell_height = raise_to_constraint(
                math.ceil(self.min_scale * max_w + extra_w) + h_slack + self.spacing + 1,
                math.ceil(self.min_scale * max_h + extra_h) + v_slack + self.spacing + 1,
                self.cell_dimensions_constraint)
            self.scale = min(h_scale_for(self.cell_width), v_scale_for(self.cell_height))

        if initial.rows < 0 and initial.cell_height < 0:
            optimal_w, optimal_h = raise_to_constraint(
                self.cell_width,
                math.ceil(self.scale * max_h + extra_h) + v_slack + self.spacing + 1,
                self.cell_dimensions_constraint)
            if optimal_h < self.cell_height and optimal_w <= self.cell_width:
                self.cell_width, self.cell_height = optimal_w, optimal_h

        s = self.scale
        bounds = Bounds(bounds.l * s - px_padding.l, bounds.b * s - px_padding.b,
                        bounds.r * s + px_padding.r, bounds.t * s + px_padding.t)
        max_w = max_w * s + px_padding.l + px_padding.r
        max_h = max_h * s + px_padding.b + px_padding.t
        return bounds, max_w, max_h

    def pixel_range(self) -> DistanceRange:
        """Return the combined pixel range, including the converted unit range."""
        return self.px_range + self.scale * self.unit_range

    def fixed_origin(self) -> tuple[float, float]:
        """Return the origin's position within each cell; valid only in fixed axes."""
        return self.fixed_x - 0.5 / self.scale, self.fixed_y - 0.5 / self.scale