import numpy as np

from texture_memory.memory.training import (
    build_training_set,
    sample_stride,
    sampled_coordinates,
)


def test_interleaved_stripes_cover_more_than_single_stride(striped_image):
    width, height = striped_image.shape[:2]
    total = width * height
    stride = sample_stride(width, height, 10)
    assert stride == 4
    single = [(i, j) for i in range(width) for j in range(height) if (i * height + j) % stride == 0]
    coords = list(sampled_coordinates(width, height, 10))
    assert len(coords) >= total // stride
    assert len(coords) > len(single)
    assert len(coords) == 16


def test_square_image_meets_minimum_coverage():
    coords = list(sampled_coordinates(10, 10, 10))
    assert len(coords) >= 100 // sample_stride(10, 10, 10)


def test_pairs_hold_area_context_and_center_target(striped_image):
    pairs = build_training_set(striped_image, 10)
    coords = list(sampled_coordinates(8, 5, 10))
    assert len(pairs) == len(coords)
    for pair, (i, j) in zip(pairs, coords):
        assert pair.context.shape == (24,)
        assert np.allclose(pair.target, striped_image[i, j] / 255.0)
        # left neighbour (row 1, column 0) occupies slots 9..11
        assert np.allclose(pair.context[9:12], striped_image[(i - 1) % 8, j] / 255.0)


def test_builder_is_deterministic(striped_image):
    first = build_training_set(striped_image, 10)
    second = build_training_set(striped_image, 10)
    assert len(first) == len(second)
    for a, b in zip(first, second):
        assert np.array_equal(a.context, b.context)
        assert np.array_equal(a.target, b.target)


def test_tiny_image_keeps_every_pixel():
    image = np.zeros((2, 2, 3), dtype=np.uint8)
    assert sample_stride(2, 2, 10) == 1
    assert len(build_training_set(image, 10)) == 4
