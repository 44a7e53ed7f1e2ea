"""Bitmap copying and an in-memory atlas storage backed by numpy arrays.

Bitmaps are arrays of shape (height, width, channels); two-dimensional
arrays are treated as single-channel. Row 0 is the bottom row.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np

from .geometry import Remap


def pixel_float_to_byte(values) -> np.ndarray:
    """Convert float pixel values in [0, 1] to bytes, clamping out-of-range values."""
    scaled = np.asarray(values, dtype=np.float32) * np.float32(256.0)
    with np.errstate(invalid="ignore"):
        clamped = np.where(scaled >= 0, np.minimum(scaled, np.float32(255.0)), np.float32(0.0))
    return clamped.astype(np.uint8)


def _channel_view(bitmap: np.ndarray) -> np.ndarray:
    if bitmap.ndim == 2:
        return bitmap[:, :, np.newaxis]
    if bitmap.ndim == 3:
        return bitmap
    raise ValueError(f"bitmap must have 2 or 3 dimensions, not {bitmap.ndim}")


def blit(dst: np.ndarray, src, dx: int, dy: int, sx: int, sy: int, w: int, h: int) -> None:
    """Copy a w by h section of src at (sx, sy) into dst at (dx, dy), clipped to both."""
    if not isinstance(dst, np.ndarray):
        raise TypeError("destination bitmap must be a numpy array")
    d = _channel_view(dst)
    s = _channel_view(np.asarray(src))
    if d.shape[2] != s.shape[2]:
        raise ValueError(f"channel count mismatch: {d.shape[2]} and {s.shape[2]}")
    if dx < 0:
        w += dx
        sx -= dx
        dx = 0
    if dy < 0:
        h += dy
        sy -= dy
        dy = 0
    if sx < 0:
        w += sx
        dx -= sx
        sx = 0
    if sy < 0:
        h += sy
        dy -= sy
        sy = 0
    w = max(0, min(w, d.shape[1] - dx, s.shape[1] - sx))
    h = max(0, min(h, d.shape[0] - dy, s.shape[0] - sy))
    region = s[sy:sy + h, sx:sx + w]
    if d.dtype == s.dtype:
        converted = region
    elif d.dtype == np.uint8 and s.dtype.kind == "f":
        converted = pixel_float_to_byte(region)
    else:
        raise TypeError(f"cannot blit {s.dtype} pixels into {d.dtype} bitmap")
    if w and h:
        d[dy:dy + h, dx:dx + w] = converted


class BitmapAtlasStorage:
    """Atlas storage held as a bitmap in memory."""

    def __init__(self, width: int = 0, height: int = 0, channels: int = 1, dtype=np.float32) -> None:
        self._bitmap = np.zeros((height, width, channels), dtype=dtype)

    @classmethod
    def from_bitmap(cls, bitmap) -> "BitmapAtlasStorage":
        """Create storage holding a copy of the given bitmap."""
        data = _channel_view(np.array(bitmap, copy=True))
        storage = cls(0, 0, data.shape[2], data.dtype)
        storage._bitmap = data
        return storage

    @property
    def bitmap(self) -> np.ndarray:
        return self._bitmap

    @property
    def width(self) -> int:
        return self._bitmap.shape[1]

    @property
    def height(self) -> int:
        return self._bitmap.shape[0]

    @property
    def channels(self) -> int:
        return self._bitmap.shape[2]

    def _empty(self, width: int, height: int) -> "BitmapAtlasStorage":
        return BitmapAtlasStorage(width, height, self.channels, self._bitmap.dtype)

    def resized(self, width: int, height: int) -> "BitmapAtlasStorage":
        """Return new storage of the given size holding the overlapping content."""
        result = self._empty(width, height)
        blit(result._bitmap, self._bitmap, 0, 0, 0, 0, min(width, self.width), min(height, self.height))
        return result

    def remapped(self, width: int, height: int, remapping: Iterable[Remap]) -> "BitmapAtlasStorage":
        """Return new storage of the given size with sections moved as remapped."""
        result = self._empty(width, height)
        for remap in remapping:
            blit(
                result._bitmap, self._bitmap,
                remap.target[0], remap.target[1],
                remap.source[0], remap.source[1],
                remap.width, remap.height,
            )
        return result

    def put(self, x: int, y: int, sub_bitmap) -> None:
        """Copy a bitmap into the storage at (x, y)."""
        sub = _channel_view(np.asarray(sub_bitmap))
        blit(self._bitmap, sub, x, y, 0, 0, sub.shape[1], sub.shape[0])

    def get(self, x: int, y: int, width: int, height: int) -> np.ndarray:
        """Return a copy of the width by height section at (x, y)."""
        out = np.zeros((height, width, self.channels), dtype=self._bitmap.dtype)
        blit(out, self._bitmap, 0, 0, x, y, width, height)
        return out