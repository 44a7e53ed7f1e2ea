import pytest

from sdfatlas.font_geometry import FontGeometry, FontMetrics
from sdfatlas.glyph_geometry import GlyphGeometry
from sdfatlas.types import GlyphIdentifierType


def make_glyph(index, codepoint=0, advance=0.5):
    return GlyphGeometry(index=index, codepoint=codepoint, advance=advance)


def test_default_em_size_used_when_missing():
    font = FontGeometry()
    font.load_metrics(FontMetrics(em_size=0.0), 1.0)
    assert font.geometry_scale == pytest.approx(1 / 2048.0)
    assert font.metrics.em_size == pytest.approx(1.0)


def test_metrics_scaled_by_geometry_scale():
    font = FontGeometry()
    raw = FontMetrics(1000, 800, -200, 1200, -100, 50)
    font.load_metrics(raw, 32.0)
    s = font.geometry_scale
    assert font.metrics.em_size == pytest.approx(32.0)
    assert font.metrics.ascender_y == pytest.approx(800 * s)
    assert font.metrics.descender_y == pytest.approx(-200 * s)
    assert font.metrics.line_height == pytest.approx(1200 * s)
    assert font.metrics.underline_y == pytest.approx(-100 * s)
    assert font.metrics.underline_thickness == pytest.approx(50 * s)


def test_add_and_lookup_glyphs():
    font = FontGeometry()
    a = make_glyph(3, 65)
    space = make_glyph(4, 0)
    font.add_glyph(a)
    font.add_glyph(space)
    assert font.glyphs() == (a, space)
    assert font.glyph_by_index(3) is a
    assert font.glyph_by_index(4) is space
    assert font.glyph_by_codepoint(65) is a
    assert font.glyph_by_codepoint(0) is None
    assert font.glyph_by_index(99) is None


def test_first_glyph_with_index_wins():
    font = FontGeometry()
    first = make_glyph(7, 66)
    second = make_glyph(7, 66)
    font.add_glyph(first)
    font.add_glyph(second)
    assert font.glyph_by_index(7) is first
    assert font.glyph_by_codepoint(66) is first
    assert len(font.glyphs()) == 2


def test_shared_storage_ranges():
    storage = []
    font1 = FontGeometry(storage)
    g1 = make_glyph(1, 65)
    font1.add_glyph(g1)
    font2 = FontGeometry(storage)
    g2 = make_glyph(1, 65)
    font2.add_glyph(g2)
    assert storage == [g1, g2]
    assert font1.glyphs() == (g1,)
    assert font2.glyphs() == (g2,)
    assert font2.glyph_by_index(1) is g2
    with pytest.raises(ValueError):
        font1.add_glyph(make_glyph(2, 66))
    assert font1.glyphs() == (g1,)


def test_kerning_scaled_and_zero_ignored():
    font = FontGeometry()
    font.load_metrics(FontMetrics(em_size=1000), 2.0)
    assert font.add_kerning(1, 2, -50) is True
    assert font.add_kerning(2, 1, 0) is False
    assert font.kerning[(1, 2)] == pytest.approx(-50 * font.geometry_scale)
    assert (2, 1) not in font.kerning


def test_advance_by_index():
    font = FontGeometry()
    font.load_metrics(FontMetrics(em_size=1000), 1.0)
    font.add_glyph(make_glyph(1, 65, advance=0.6))
    font.add_glyph(make_glyph(2, 86, advance=0.7))
    font.add_kerning(1, 2, -100)
    assert font.advance_by_index(1, 2) == pytest.approx(0.6 - 100 * font.geometry_scale)
    assert font.advance_by_index(2, 1) == pytest.approx(0.7)
    assert font.advance_by_index(1, 99) == pytest.approx(0.6)
    assert font.advance_by_index(99, 1) is None


def test_advance_by_codepoint_requires_both():
    font = FontGeometry()
    font.load_metrics(FontMetrics(em_size=1000), 1.0)
    font.add_glyph(make_glyph(1, 65, advance=0.6))
    font.add_glyph(make_glyph(2, 86, advance=0.7))
    font.add_kerning(1, 2, -100)
    assert font.advance_by_codepoint(65, 86) == font.advance_by_index(1, 2)
    assert font.advance_by_codepoint(86, 65) == pytest.approx(0.7)
    assert font.advance_by_codepoint(65, 90) is None


def test_name_and_identifier_type():
    font = FontGeometry()
    assert font.name is None
    assert font.preferred_identifier_type is GlyphIdentifierType.UNICODE_CODEPOINT
    font.name = "Sans"
    assert font.name == "Sans"
    font.name = None
    assert font.name is None


def test_kerning_mapping_is_read_only():
    font = FontGeometry()
    font.add_kerning(1, 2, 10)
    with pytest.raises(TypeError):
        font.kerning[(3, 4)] = 1.0  # type: ignore[index]
    assert (3, 4) not in font.kerning