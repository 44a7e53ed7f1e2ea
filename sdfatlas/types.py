"""Enumerations used by the atlas packers, glyph geometry and exporters."""

from __future__ import annotations

from enum import Enum


class ImageType(Enum):
    """What each pixel of the atlas image represents.

    ``HARD_MASK`` is a binary coverage mask, ``SOFT_MASK`` an anti-aliased
    coverage mask, ``SDF`` a true signed distance field, ``PSDF`` a
    perpendicular signed distance field, ``MSDF`` a multi-channel distance
    field and ``MTSDF`` a multi-channel field with a true distance in alpha.
    """

    HARD_MASK = "hardmask"
    SOFT_MASK = "softmask"
    SDF = "sdf"
    PSDF = "psdf"
    MSDF = "msdf"
    MTSDF = "mtsdf"


class ImageFormat(Enum):
    """File encoding used when the atlas image is written out."""

    UNSPECIFIED = "unspecified"
    PNG = "png"
    BMP = "bmp"
    TIFF = "tiff"
    RGBA = "rgba"
    FL32 = "fl32"
    TEXT = "text"
    TEXT_FLOAT = "textfloat"
    BINARY = "bin"
    BINARY_FLOAT = "binfloat"
    BINARY_FLOAT_BE = "binfloatbe"


class GlyphIdentifierType(Enum):
    """Whether glyphs are keyed by their font index or by Unicode value."""

    GLYPH_INDEX = "index"
    UNICODE_CODEPOINT = "unicode"


class YDirection(Enum):
    """Orientation of rows in exported images and coordinates."""

    BOTTOM_UP = "bottom-up"
    TOP_DOWN = "top-down"


class PackingStyle(Enum):
    """Layout strategy: arbitrary tight packing or a uniform grid."""

    TIGHT = "tight"
    GRID = "grid"


class DimensionsConstraint(Enum):
    """Restriction applied when choosing atlas or cell dimensions."""

    NONE = "none"
    SQUARE = "square"
    EVEN_SQUARE = "evensquare"
    MULTIPLE_OF_FOUR_SQUARE = "mult4square"
    POWER_OF_TWO_RECTANGLE = "pot"
    POWER_OF_TWO_SQUARE = "potsquare"