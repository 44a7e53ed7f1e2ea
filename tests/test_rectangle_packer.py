import itertools

from sdfatlas.geometry import OrientedRectangle, Rectangle
from sdfatlas.rectangle_packer import RectanglePacker


def _extent(rect):
    if getattr(rect, "rotated", False):
        return rect.h, rect.w
    return rect.w, rect.h


def _overlap(a, b):
    aw, ah = _extent(a)
    bw, bh = _extent(b)
    return a.x < b.x + bw and b.x < a.x + aw and a.y < b.y + bh and b.y < a.y + ah


def _inside(rect, width, height):
    w, h = _extent(rect)
    return rect.x >= 0 and rect.y >= 0 and rect.x + w <= width and rect.y + h <= height


def test_exact_fit_at_origin():
    packer = RectanglePacker(10, 6)
    rect = Rectangle(w=10, h=6)
    assert packer.pack([rect]) == 0
    assert (rect.x, rect.y) == (0, 0)


def test_too_large_does_not_fit():
    packer = RectanglePacker(4, 4)
    assert packer.pack([Rectangle(w=5, h=1)]) == 1


def test_empty_packer_fits_nothing():
    rects = [Rectangle(w=1, h=1), Rectangle(w=2, h=2)]
    assert RectanglePacker().pack(rects) == len(rects)


def test_many_rectangles_do_not_overlap():
    width, height = 32, 32
    rects = [Rectangle(w=w, h=h) for w, h in [(8, 8), (4, 12), (16, 4), (5, 5), (10, 3), (7, 9), (3, 3)]]
    packer = RectanglePacker(width, height)
    assert packer.pack(rects) == 0
    assert all(_inside(r, width, height) for r in rects)
    assert not any(_overlap(a, b) for a, b in itertools.combinations(rects, 2))


def test_partial_failure_counts_leftovers():
    rects = [Rectangle(w=4, h=4) for _ in range(5)]
    packer = RectanglePacker(8, 8)
    left = packer.pack(rects)
    assert left == 1
    placed = rects[:4]
    assert not any(_overlap(a, b) for a, b in itertools.combinations(placed, 2))


def test_oriented_rotates_to_fit():
    packer = RectanglePacker(2, 6)
    rect = OrientedRectangle(w=6, h=2)
    assert packer.pack_oriented([rect]) == 0
    assert rect.rotated is True
    assert _inside(rect, 2, 6)


def test_oriented_without_rotation_when_exact():
    packer = RectanglePacker(6, 2)
    rect = OrientedRectangle(w=6, h=2, rotated=True)
    assert packer.pack_oriented([rect]) == 0
    assert rect.rotated is False


def test_oriented_many_no_overlap():
    width, height = 20, 20
    rects = [OrientedRectangle(w=w, h=h) for w, h in [(15, 4), (4, 15), (6, 6), (3, 8), (8, 3)]]
    packer = RectanglePacker(width, height)
    assert packer.pack_oriented(rects) == 0
    assert all(_inside(r, width, height) for r in rects)
    assert not any(_overlap(a, b) for a, b in itertools.combinations(rects, 2))


def test_expand_adds_space():
    packer = RectanglePacker(4, 4)
    first = Rectangle(w=4, h=4)
    assert packer.pack([first]) == 0
    second = Rectangle(w=4, h=4)
    assert packer.pack([second]) == 1
    packer.expand(8, 8)
    third = Rectangle(w=4, h=4)
    assert packer.pack([third]) == 0
    assert _inside(third, 8, 8)
    assert not _overlap(first, third)