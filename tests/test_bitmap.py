import numpy as np
import pytest

from sdfatlas.bitmap import BitmapAtlasStorage, blit, pixel_float_to_byte
from sdfatlas.geometry import Remap


def _ramp(h, w, c=1):
    return np.arange(h * w * c, dtype=np.float32).reshape(h, w, c)


def test_pixel_float_to_byte_clamps():
    out = pixel_float_to_byte([-1.0, 0.0, 1.0, 2.0, float("nan")])
    assert out.dtype == np.uint8
    assert out.tolist() == [0, 0, 255, 255, 0]


def test_pixel_float_to_byte_midpoint():
    assert int(pixel_float_to_byte(0.5)) == 128


def test_blit_same_type_copies_region():
    src = _ramp(4, 4)
    dst = np.zeros((6, 6, 1), dtype=np.float32)
    blit(dst, src, 2, 1, 1, 0, 3, 2)
    assert np.array_equal(dst[1:3, 2:5], src[0:2, 1:4])
    assert dst.sum() == src[0:2, 1:4].sum()


def test_blit_clips_negative_destination():
    src = _ramp(4, 4)
    dst = np.zeros((4, 4, 1), dtype=np.float32)
    blit(dst, src, -1, 0, 0, 0, 4, 4)
    assert np.array_equal(dst[:, :3], src[:, 1:])
    assert not dst[:, 3].any()


def test_blit_clips_to_bounds():
    src = _ramp(3, 3)
    dst = np.zeros((2, 2, 1), dtype=np.float32)
    blit(dst, src, 0, 0, 0, 0, 10, 10)
    assert np.array_equal(dst, src[:2, :2])


def test_blit_two_dimensional_arrays():
    src = np.ones((2, 2), dtype=np.float32)
    dst = np.zeros((3, 3), dtype=np.float32)
    blit(dst, src, 1, 1, 0, 0, 2, 2)
    assert np.array_equal(dst[1:, 1:], src)
    assert dst.sum() == src.sum()


def test_blit_float_to_byte():
    src = np.full((2, 2, 3), 1.0, dtype=np.float32)
    dst = np.zeros((2, 2, 3), dtype=np.uint8)
    blit(dst, src, 0, 0, 0, 0, 2, 2)
    assert (dst == 255).all()


def test_blit_channel_mismatch():
    with pytest.raises(ValueError):
        blit(np.zeros((2, 2, 3), np.float32), np.zeros((2, 2, 1), np.float32), 0, 0, 0, 0, 2, 2)


def test_blit_byte_to_float_rejected():
    with pytest.raises(TypeError):
        blit(np.zeros((2, 2, 1), np.float32), np.zeros((2, 2, 1), np.uint8), 0, 0, 0, 0, 2, 2)


def test_storage_starts_zeroed():
    storage = BitmapAtlasStorage(5, 3, 4, np.uint8)
    assert storage.bitmap.shape == (3, 5, 4)
    assert not storage.bitmap.any()


def test_put_get_round_trip():
    storage = BitmapAtlasStorage(8, 8, 3)
    sub = _ramp(2, 3, 3)
    storage.put(4, 5, sub)
    assert np.array_equal(storage.get(4, 5, 3, 2), sub)


def test_put_float_into_byte_storage():
    storage = BitmapAtlasStorage(2, 2, 1, np.uint8)
    storage.put(0, 0, np.full((2, 2, 1), 1.0, np.float32))
    assert (storage.bitmap == 255).all()


def test_from_bitmap_copies():
    data = _ramp(3, 3)
    storage = BitmapAtlasStorage.from_bitmap(data)
    data[0, 0, 0] = -7.0
    assert storage.bitmap[0, 0, 0] != data[0, 0, 0]
    assert (storage.width, storage.height, storage.channels) == (3, 3, 1)


def test_resized_keeps_overlap():
    storage = BitmapAtlasStorage.from_bitmap(_ramp(4, 4))
    bigger = storage.resized(6, 2)
    assert bigger.bitmap.shape == (2, 6, 1)
    assert np.array_equal(bigger.bitmap[:, :4], storage.bitmap[:2, :])
    assert not bigger.bitmap[:, 4:].any()


def test_remapped_moves_sections():
    storage = BitmapAtlasStorage.from_bitmap(_ramp(4, 4))
    remap = Remap(index=0, source=(0, 0), target=(2, 2), width=2, height=2)
    moved = storage.remapped(4, 4, [remap])
    assert np.array_equal(moved.bitmap[2:4, 2:4], storage.bitmap[0:2, 0:2])
    assert moved.bitmap.sum() == storage.bitmap[0:2, 0:2].sum()