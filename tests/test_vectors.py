"""
Test vector math primitives
"""

import numpy as np
import pytest

from spkmeans_lib.constants import DEGENERATE_SIMILARITY
from spkmeans_lib.exceptions import DegenerateVectorError
from spkmeans_lib.utils.vectors import vec_norm, vec_dot, vec_sum, vec_multiply, vec_divide, vec_normalize, cosine_similarity


def test_norm_and_dot():
    assert vec_norm(np.array([3.0, 4.0])) == pytest.approx(5.0)
    assert vec_norm(np.zeros(3)) == 0.0
    assert vec_dot(np.array([1.0, 2.0, 3.0]), np.array([4.0, 5.0, 6.0])) == pytest.approx(32.0)


def test_dot_rejects_length_mismatch():
    with pytest.raises(ValueError):
        vec_dot(np.ones(2), np.ones(3))


def test_sum_allocates_new_vector():
    vectors = np.array([[1.0, 2.0], [3.0, 4.0]])
    total = vec_sum(vectors, 2)
    np.testing.assert_array_equal(total, [4.0, 6.0])
    total[0] = 100
    assert vectors[0, 0] == 1.0, "sum must not alias its inputs"


def test_sum_of_no_vectors_is_zero_vector():
    np.testing.assert_array_equal(vec_sum(np.zeros((0, 4)), 4), np.zeros(4))
    np.testing.assert_array_equal(vec_sum([], 2), np.zeros(2))


def test_multiply_divide_in_place():
    v = np.array([2.0, 4.0])
    assert vec_multiply(v, 0.5) is v
    np.testing.assert_array_equal(v, [1.0, 2.0])
    vec_divide(v, 2.0)
    np.testing.assert_array_equal(v, [0.5, 1.0])


def test_divide_by_zero_propagates_inf_and_nan():
    v = np.array([1.0, 0.0])
    vec_divide(v, 0.0)
    assert np.isinf(v[0])
    assert np.isnan(v[1])


def test_normalize():
    v = np.array([3.0, 0.0, 4.0])
    vec_normalize(v)
    assert vec_norm(v) == pytest.approx(1.0)
    np.testing.assert_allclose(v, [0.6, 0.0, 0.8])


def test_normalize_zero_vector():
    v = np.zeros(3)
    vec_normalize(v)
    np.testing.assert_array_equal(v, np.zeros(3))
    with pytest.raises(DegenerateVectorError):
        vec_normalize(v, strict=True)


def test_cosine_similarity_self_and_symmetry():
    rng = np.random.default_rng(0)
    a, b = rng.random(6), rng.random(6)
    vec_normalize(a)
    assert cosine_similarity(a, a) == pytest.approx(1.0)
    assert cosine_similarity(a, b) == cosine_similarity(b, a)


def test_cosine_similarity_degenerate():
    assert cosine_similarity(np.zeros(3), np.ones(3)) == DEGENERATE_SIMILARITY
    assert cosine_similarity(np.ones(3), np.zeros(3)) == DEGENERATE_SIMILARITY
