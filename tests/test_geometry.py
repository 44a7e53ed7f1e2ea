import pytest

from sdfatlas.geometry import (
    Bounds,
    DistanceRange,
    OrientedRectangle,
    Padding,
    Rectangle,
    Remap,
    pad,
)


def test_symmetric_range_width_and_centre():
    r = DistanceRange.symmetric(4.0)
    assert r.upper - r.lower == pytest.approx(4.0)
    assert r.lower == -r.upper


def test_default_range_is_empty():
    r = DistanceRange()
    assert r.lower == r.upper


def test_range_arithmetic_round_trip():
    r = DistanceRange(-3.0, 5.0)
    assert (r * 2.0) / 2.0 == r
    assert 2.0 * r == r * 2.0
    assert (r + DistanceRange(1.0, 1.0)).lower == r.lower + 1.0


def test_padding_uniform():
    assert Padding.uniform(2.5) == Padding(2.5, 2.5, 2.5, 2.5)


def test_padding_negation_and_addition_cancel():
    p = Padding(1.0, 2.0, 3.0, 4.0)
    q = Padding(0.5, -1.0, 2.0, 7.0)
    assert -(-p) == p
    assert p + (-p) == Padding()
    assert (p + q) - q == p


def test_padding_scaling():
    p = Padding(1.0, 2.0, 3.0, 4.0)
    assert 3.0 * p == p * 3.0
    assert (p * 3.0) / 3.0 == p


def test_pad_grows_and_negative_padding_reverts():
    bounds = Bounds(0.0, 0.0, 10.0, 5.0)
    p = Padding(1.0, 2.0, 3.0, 4.0)
    padded = pad(bounds, p)
    assert padded.l == bounds.l - p.l
    assert padded.t == bounds.t + p.t
    assert pad(padded, -p) == bounds


def test_rectangles_are_mutable_positions():
    rect = Rectangle(w=3, h=4)
    rect.x, rect.y = 7, 8
    assert (rect.x, rect.y, rect.w, rect.h) == (7, 8, 3, 4)
    oriented = OrientedRectangle(w=2, h=5)
    assert oriented.rotated is False
    assert isinstance(oriented, Rectangle)


def test_remap_fields():
    remap = Remap(index=3, source=(1, 2), target=(5, 6), width=7, height=8)
    assert remap.source == (1, 2)
    assert remap.target == (5, 6)
    assert (remap.width, remap.height) == (7, 8)