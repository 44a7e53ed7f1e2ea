"""Geometry of all glyphs of one font or font variant."""

from __future__ import annotations

from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Mapping

from .glyph_geometry import GlyphGeometry
from .types import GlyphIdentifierType

DEFAULT_FONT_UNITS_PER_EM = 2048.0


@dataclass(frozen=True)
class FontMetrics:
    """Global metrics of a font."""

    em_size: float = 0.0
    ascender_y: float = 0.0
    descender_y: float = 0.0
    line_height: float = 0.0
    underline_y: float = 0.0
    underline_thickness: float = 0.0


class FontGeometry:
    """The glyphs of a font, their lookup tables and kerning.

    Glyphs are appended to a storage list, which may be shared between several
    fonts so that all their glyphs lie in one sequence. A font can only add
    glyphs while its own glyphs are the last ones in the storage.
    """

    def __init__(self, glyph_storage: list[GlyphGeometry] | None = None) -> None:
        self._glyphs: list[GlyphGeometry] = glyph_storage if glyph_storage is not None else []
        self._range_start = len(self._glyphs)
        self._range_end = len(self._glyphs)
        self._geometry_scale = 1.0
        self._metrics = FontMetrics()
        self.preferred_identifier_type = GlyphIdentifierType.UNICODE_CODEPOINT
        self._by_index: dict[int, int] = {}
        self._by_codepoint: dict[int, int] = {}
        self._kerning: dict[tuple[int, int], float] = {}
        self._name = ""

    @property
    def geometry_scale(self) -> float:
        """The scale converting font units to the font's geometry units."""
        return self._geometry_scale

    @property
    def metrics(self) -> FontMetrics:
        """The processed font metrics."""
        return self._metrics

    @property
    def name(self) -> str | None:
        """The name associated with the font, or None if not set."""
        return self._name or None

    @name.setter
    def name(self, value: str | None) -> None:
        self._name = value or ""

    @property
    def kerning(self) -> Mapping[tuple[int, int], float]:
        """Kerning advances keyed by pairs of glyph indices."""
        return MappingProxyType(self._kerning)

    def load_metrics(self, metrics: FontMetrics, font_scale: float) -> None:
        """Set the geometry scale and metrics from raw metrics in font units."""
        em_size = metrics.em_size if metrics.em_size > 0 else DEFAULT_FONT_UNITS_PER_EM
        scale = font_scale / em_size
        self._geometry_scale = scale
        self._metrics = replace(
            metrics,
            em_size=em_size * scale,
            ascender_y=metrics.ascender_y * scale,
            descender_y=metrics.descender_y * scale,
            line_height=metrics.line_height * scale,
            underline_y=metrics.underline_y * scale,
            underline_thickness=metrics.underline_thickness * scale,
        )

    def add_glyph(self, glyph: GlyphGeometry) -> None:
        """Append a loaded glyph.

        Raises ValueError if another font has appended glyphs to the shared
        storage since this font's last glyph.
        """
        if len(self._glyphs) != self._range_end:
            raise ValueError("glyph storage has been extended by another font")
        self._by_index.setdefault(glyph.index, self._range_end)
        if glyph.codepoint:
            self._by_codepoint.setdefault(glyph.codepoint, self._range_end)
        self._glyphs.append(glyph)
        self._range_end += 1

    def add_kerning(self, index1: int, index2: int, advance: float) -> bool:
        """Record a kerning advance, given in font units, between two glyph indices.

        Zero advances are not stored. Returns true if the pair was stored.
        """
        if not advance:
            return False
        self._kerning[(index1, index2)] = self._geometry_scale * advance
        return True

    def glyphs(self) -> tuple[GlyphGeometry, ...]:
        """Return the glyphs of this font in the order they were added."""
        return tuple(self._glyphs[self._range_start:self._range_end])

    def glyph_by_index(self, index: int) -> GlyphGeometry | None:
        """Find a glyph by its glyph index."""
        position = self._by_index.get(index)
        return None if position is None else self._glyphs[position]

    def glyph_by_codepoint(self, codepoint: int) -> GlyphGeometry | None:
        """Find a glyph by the Unicode codepoint it represents."""
        position = self._by_codepoint.get(codepoint)
        return None if position is None else self._glyphs[position]

    def advance_by_index(self, index1: int, index2: int) -> float | None:
        """Return the advance from the first glyph to the second, kerning included.

        Returns None if the first glyph is not present.
        """
        glyph1 = self.glyph_by_index(index1)
        if glyph1 is None:
            return None
        return glyph1.advance + self._kerning.get((index1, index2), 0.0)

    def advance_by_codepoint(self, codepoint1: int, codepoint2: int) -> float | None:
        """Return the advance between two characters, kerning included.

        Returns None unless both characters are present.
        """
        glyph1 = self.glyph_by_codepoint(codepoint1)
        glyph2 = self.glyph_by_codepoint(codepoint2)
        if glyph1 is None or glyph2 is None:
            return None
        return glyph1.advance + self._kerning.get((glyph1.index, glyph2.index), 0.0)