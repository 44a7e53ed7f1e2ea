# sdfatlas

Helpers for laying out glyph atlases for signed distance field (SDF, PSDF,
MSDF and MTSDF) font rendering. The package works on glyph geometry you
supply: glyph bounds, advances and shapes. It computes each glyph's box in
the atlas, lays glyphs out on a uniform grid, packs rectangles into a single
bin, and copies pixel data between numpy bitmaps.

## Installation

```
pip install .
```

To run the tests, install the `test` extra and run `pytest`:

```
pip install .[test]
pytest
```

## Building blocks

- `sdfatlas.types` holds the enumerations `ImageType`, `ImageFormat`,
  `GlyphIdentifierType`, `YDirection`, `PackingStyle` and
  `DimensionsConstraint`.
- `sdfatlas.geometry` holds the small value types `Bounds`,
  `DistanceRange`, `Padding`, `Rectangle`, `OrientedRectangle` and `Remap`.
  It also has `pad()`, which returns bounds grown by a padding.
  `DistanceRange.symmetric(width)` gives a range centred on zero, and
  `Padding.uniform(value)` gives the same padding on all four sides.
- `sdfatlas.charset.Charset` is a set of Unicode codepoints that iterates
  in ascending order. `Charset.ascii()` returns the 95 printable ASCII
  characters.
- `sdfatlas.rectangle_packer.RectanglePacker` is a guillotine packer for a
  single bin. `pack()` places `Rectangle`s and `pack_oriented()` places
  `OrientedRectangle`s, rotating them where that fits better. Both set the
  positions in place and return how many rectangles did not fit. `expand()`
  grows the bin.
- `sdfatlas.bitmap` has `blit()`, which copies a clipped rectangle between
  numpy bitmaps. It converts float pixels to bytes when the destination is
  `uint8`. The module also has `pixel_float_to_byte()` and
  `BitmapAtlasStorage`, an atlas image held in memory. `BitmapAtlasStorage`
  offers `put`, `get`, `resized`, `remapped` and `from_bitmap`. Bitmaps
  have shape `(height, width, channels)`, and row 0 is the bottom row.
- `sdfatlas.workload.Workload` runs a job split into numbered chunks. It
  runs on one thread or spreads the chunks over several threads, and stops
  when a chunk fails.
- `sdfatlas.glyph_geometry.GlyphGeometry` holds one glyph. `wrap_box()`
  sizes the glyph's box to fit the glyph. `frame_box()` fits the glyph into
  a box of given dimensions. `place_box()` positions the box in the atlas.
  `quad_plane_bounds()` and `quad_atlas_bounds()` return the glyph's quad.
  `to_glyph_box()` returns a `GlyphBox`. Box settings are passed as
  `GlyphAttributes`.
- `sdfatlas.font_geometry.FontGeometry` gathers the glyphs of one font. It
  keeps lookups by glyph index and by codepoint, the font's `FontMetrics`
  scaled by `load_metrics()`, and kerning added with `add_kerning()`.
  Several fonts can share one glyph storage list.
- `sdfatlas.grid_sizing` holds the sizing rules used by the grid layout:
  `lower_to_constraint`, `raise_to_constraint`, `dimensions_rating`,
  `max_bounds` and `scale_to_fit`. Their settings are passed as
  `FitSettings`.
- `sdfatlas.grid_packer.GridAtlasPacker` lays glyphs out on a uniform grid.
  Leave any of the atlas dimensions, cell dimensions, columns, rows or scale
  unset (negative), and `pack()` determines them. `pack()` raises
  `ValueError` when no layout can be found.

## Example: packing rectangles

```python
from sdfatlas.geometry import Rectangle
from sdfatlas.rectangle_packer import RectanglePacker

rects = [Rectangle(0, 0, 10, 20), Rectangle(0, 0, 30, 5)]
packer = RectanglePacker(64, 64)
left_over = packer.pack(rects)   # 0 when every rectangle fit
for r in rects:
    print(r.x, r.y, r.w, r.h)
```

## Example: a character set

```python
from sdfatlas.charset import Charset

chars = Charset.ascii()
chars.add(0x00E9)
print(len(chars), ord("A") in chars)
```

## Example: a grid atlas

```python
from sdfatlas.geometry import Bounds, DistanceRange
from sdfatlas.glyph_geometry import GlyphGeometry
from sdfatlas.grid_packer import GridAtlasPacker

glyphs = [
    GlyphGeometry(index=i, codepoint=65 + i, geometry_scale=1.0,
                  bounds=Bounds(0.0, 0.0, 0.6, 0.7), advance=0.65,
                  shape=["contour"])
    for i in range(10)
]
packer = GridAtlasPacker()
packer.cell_width = packer.cell_height = 32
packer.px_range = DistanceRange.symmetric(4)
packer.pack(glyphs)
print(packer.width, packer.height, packer.columns, packer.rows, packer.scale)
print(glyphs[0].box_rect, glyphs[0].quad_plane_bounds())
```

## Example: copying into an atlas

```python
import numpy as np
from sdfatlas.bitmap import BitmapAtlasStorage

atlas = BitmapAtlasStorage(128, 128, 3, np.float32)
glyph = np.ones((16, 16, 3), dtype=np.float32)
atlas.put(10, 20, glyph)
patch = atlas.get(10, 20, 16, 16)
```

## What this package does not do

The package is a library only and has no command-line program. It does not
read font or SVG files, so glyph shapes, bounds, advances, metrics and
kerning must come from elsewhere. It does not color edges, generate
distance fields or render glyphs. The `bound_miters` hook and
`GlyphGeometry.edge_coloring()` only call what you supply. It does not
write image files, and it has no JSON, CSV or other layout exporters. The
`ImageFormat` and `ImageType` enumerations only name these options. For
tight layouts, `RectanglePacker` packs into a bin whose size you choose; no
search for the smallest atlas or the largest glyph scale is provided for
that style.