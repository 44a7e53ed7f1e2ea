"""Glyph box layout, grid and rectangle packing, and bitmap helpers for SDF glyph atlases."""

__version__ = "0.1.0"

__all__ = [
    "types",
    "geometry",
    "rectangle_packer",
    "charset",
    "bitmap",
    "workload",
    "glyph_geometry",
    "font_geometry",
    "grid_sizing",
    "grid_packer",
]