"""LAB centroid averaging."""

from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from average import AverageMethod, chunked, combine, lab_centroid, lab_sum
from color_space import srgb_to_lab


def test_identical_lab_colors():
    result = lab_centroid([(1.0, 2.0, 3.0), (1.0, 2.0, 3.0)], 'lab')
    np.testing.assert_array_equal(result, [1.0, 2.0, 3.0])


def test_lab_midpoint():
    result = lab_centroid([(1.0, 2.0, 3.0), (2.0, 3.0, 4.0)], 'lab')
    np.testing.assert_allclose(result, [1.5, 2.5, 3.5])


def test_empty_input_is_none():
    assert lab_centroid([], 'lab') is None
    assert lab_centroid(np.empty((0, 3))) is None
    assert AverageMethod.LAB_CENTROID.average([]) is None


def test_identical_srgb_colors():
    color = (0.2, 0.6, 0.4)
    np.testing.assert_allclose(lab_centroid([color] * 5), color, atol=1e-5)


def test_average_happens_in_lab_space():
    rgb = np.array([[0.6, 0.4, 0.3], [0.3, 0.5, 0.6]])
    expected_lab = srgb_to_lab(rgb).mean(axis=0)
    result = lab_centroid(rgb)
    np.testing.assert_allclose(srgb_to_lab(result.reshape(1, 3))[0], expected_lab, atol=1e-3)


def test_black_and_white_average_to_mid_lightness_grey():
    # L = 50 grey, darker than the naive RGB mean of 0.5
    result = lab_centroid([(0.0, 0.0, 0.0), (1.0, 1.0, 1.0)])
    np.testing.assert_allclose(result, [0.4663] * 3, atol=1e-3)


def test_order_invariant(random_srgb):
    forward = lab_centroid(random_srgb)
    backward = lab_centroid(random_srgb[::-1])
    np.testing.assert_allclose(forward, backward, atol=1e-9)


@pytest.mark.parametrize('chunk_size', [1, 7, 64, 10_000])
def test_chunking_does_not_change_result(random_srgb, chunk_size):
    whole = lab_centroid(random_srgb, chunk_size=len(random_srgb))
    np.testing.assert_allclose(lab_centroid(random_srgb, chunk_size=chunk_size), whole, atol=1e-9)


def test_executor_matches_serial(random_srgb):
    serial = lab_centroid(random_srgb, chunk_size=50)
    with ThreadPoolExecutor(max_workers=4) as pool:
        parallel = lab_centroid(random_srgb, chunk_size=50, executor=pool)
    np.testing.assert_allclose(parallel, serial, atol=1e-12)


def test_partials_divide_once():
    # Unequal chunks: averaging per-chunk means would give 2.0, not 1.5
    lab = np.array([[1.0, 0.0, 0.0], [1.0, 0.0, 0.0], [1.0, 0.0, 0.0], [3.0, 0.0, 0.0]])
    partials = [lab_sum(part, 'lab') for part in chunked(lab, 3)]
    total, count = combine(*partials)
    assert count == 4
    np.testing.assert_allclose(total / count, [1.5, 0.0, 0.0])
    np.testing.assert_allclose(lab_centroid(lab, 'lab', chunk_size=3), [1.5, 0.0, 0.0])


def test_chunked_rejects_bad_size():
    with pytest.raises(ValueError):
        chunked(np.zeros((3, 3)), 0)


def test_method_dispatch(random_srgb):
    method = AverageMethod.LAB_CENTROID
    np.testing.assert_allclose(method.average(random_srgb), lab_centroid(random_srgb))
    partials = [method.partial(part) for part in chunked(random_srgb, 100)]
    np.testing.assert_allclose(method.finish(partials), lab_centroid(random_srgb), atol=1e-9)


def test_hsl_encoding_round_trips():
    hsl = np.array([[200.0, 0.6, 0.4]] * 3)
    np.testing.assert_allclose(lab_centroid(hsl, 'hsl'), [200.0, 0.6, 0.4], atol=1e-3)
