import numpy as np
import pytest

from mandelbands import RasterBounds, partition, pixel_to_point, rows_per_band, split_buffer

UPPER_LEFT = complex(-2.0, 1.25)
LOWER_RIGHT = complex(0.5, -1.25)


def _layout(bands):
    return [(band.start_row, band.row_count) for band in bands]


def test_rows_per_band_rounds_up():
    assert rows_per_band(10, 4) == 3
    assert rows_per_band(12, 4) == 4
    assert rows_per_band(3, 5) == 1


def test_last_band_is_shorter():
    bands = partition(RasterBounds(8, 10), UPPER_LEFT, LOWER_RIGHT, 4)
    assert _layout(bands) == [(0, 3), (3, 3), (6, 3), (9, 1)]


def test_last_band_may_be_empty():
    bands = partition(RasterBounds(8, 9), UPPER_LEFT, LOWER_RIGHT, 4)
    assert _layout(bands) == [(0, 3), (3, 3), (6, 3), (9, 0)]


def test_more_workers_than_rows():
    bands = partition(RasterBounds(8, 3), UPPER_LEFT, LOWER_RIGHT, 5)
    assert _layout(bands) == [(0, 1), (1, 1), (2, 1), (3, 0), (3, 0)]
    assert bands[-1].sub_bounds == RasterBounds(8, 0)


@pytest.mark.parametrize("height", [1, 2, 7, 10, 64])
@pytest.mark.parametrize("worker_count", [1, 2, 3, 4, 7, 16, 100])
def test_bands_tile_the_raster(height, worker_count):
    bands = partition(RasterBounds(5, height), UPPER_LEFT, LOWER_RIGHT, worker_count)

    assert len(bands) == worker_count
    next_row = 0
    for band in bands:
        assert band.row_count >= 0
        assert band.start_row == next_row
        assert band.sub_bounds == RasterBounds(5, band.row_count)
        next_row = band.stop_row
    assert next_row == height


def test_band_viewports_come_from_the_full_raster():
    bounds = RasterBounds(40, 20)
    bands = partition(bounds, UPPER_LEFT, LOWER_RIGHT, 3)

    assert bands[0].sub_viewport.upper_left == UPPER_LEFT
    assert bands[-1].sub_viewport.lower_right == LOWER_RIGHT
    for band in bands:
        assert band.sub_viewport.upper_left == pixel_to_point(bounds, (0, band.start_row), UPPER_LEFT, LOWER_RIGHT)
        assert band.sub_viewport.lower_right == pixel_to_point(bounds, (40, band.stop_row), UPPER_LEFT, LOWER_RIGHT)
    for upper, lower in zip(bands, bands[1:]):
        assert upper.sub_viewport.lower_right.imag == lower.sub_viewport.upper_left.imag


@pytest.mark.parametrize("worker_count", [0, -1])
def test_worker_count_must_be_positive(worker_count):
    with pytest.raises(ValueError):
        partition(RasterBounds(8, 8), UPPER_LEFT, LOWER_RIGHT, worker_count)


@pytest.mark.parametrize("bounds", [RasterBounds(0, 8), RasterBounds(8, 0)])
def test_empty_raster_is_rejected(bounds):
    with pytest.raises(ValueError):
        partition(bounds, UPPER_LEFT, LOWER_RIGHT, 2)


def test_byte_range():
    band = partition(RasterBounds(8, 10), UPPER_LEFT, LOWER_RIGHT, 4)[1]
    assert band.byte_range(8) == (24, 48)


def test_split_buffer_lends_disjoint_views():
    bounds = RasterBounds(6, 10)
    pixels = np.zeros(bounds.size, dtype=np.uint8)
    bands = partition(bounds, UPPER_LEFT, LOWER_RIGHT, 4)

    regions = split_buffer(pixels, bands, bounds.width)

    assert [len(region) for region in regions] == [18, 18, 18, 6]
    for index, region in enumerate(regions):
        assert np.shares_memory(region, pixels)
        region[:] = index + 1
    expected = np.repeat(np.arange(1, 5, dtype=np.uint8), [18, 18, 18, 6])
    np.testing.assert_array_equal(pixels, expected)


def test_split_buffer_with_empty_bands():
    bounds = RasterBounds(4, 2)
    pixels = np.zeros(bounds.size, dtype=np.uint8)
    bands = partition(bounds, UPPER_LEFT, LOWER_RIGHT, 6)

    regions = split_buffer(pixels, bands, bounds.width)

    assert [len(region) for region in regions] == [4, 4, 0, 0, 0, 0]


def test_split_buffer_rejects_mismatched_buffer():
    bands = partition(RasterBounds(4, 4), UPPER_LEFT, LOWER_RIGHT, 2)
    with pytest.raises(ValueError):
        split_buffer(np.zeros(20, dtype=np.uint8), bands, 4)


def test_split_buffer_rejects_gaps():
    bands = partition(RasterBounds(4, 4), UPPER_LEFT, LOWER_RIGHT, 2)
    with pytest.raises(ValueError):
        split_buffer(np.zeros(16, dtype=np.uint8), [bands[1], bands[0]], 4)
