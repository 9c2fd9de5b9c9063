import numpy as np
import pytest

from admittance_models import DimensionMismatchError, exact_nullbasis, numeric_nullbasis
from admittance_models.linear_algebra import block_diagonal, canonical_gauge_transform


@pytest.mark.parametrize("nullbasis", [numeric_nullbasis, exact_nullbasis])
def test_nullbasis_spans_kernel(nullbasis):
    A = np.array([[1.0, -1.0, 0.0, 0.0], [0.0, 0.0, 1.0, 0.0]])
    N = nullbasis(A)
    assert N.shape == (4, 2)
    assert np.allclose(A @ N, 0)
    assert np.linalg.matrix_rank(N) == 2


@pytest.mark.parametrize("nullbasis", [numeric_nullbasis, exact_nullbasis])
def test_nullbasis_of_full_column_rank_matrix_is_empty(nullbasis):
    N = nullbasis(np.eye(3))
    assert N.shape == (3, 0)


@pytest.mark.parametrize("nullbasis", [numeric_nullbasis, exact_nullbasis])
def test_nullbasis_without_constraints_is_identity(nullbasis):
    N = nullbasis(np.zeros((0, 3)))
    assert np.array_equal(N, np.eye(3))


def test_exact_nullbasis_keeps_coordinate_vectors():
    N = exact_nullbasis(np.array([[0.0, 0.0, 1.0]]))
    assert np.array_equal(N, np.array([[1.0, 0.0], [0.0, 1.0], [0.0, 0.0]]))


def test_block_diagonal_handles_empty_blocks():
    D = block_diagonal([np.ones((2, 1)), np.zeros((1, 0)), 2 * np.ones((1, 2))])
    assert D.shape == (4, 3)
    assert np.array_equal(D[:2, :1], np.ones((2, 1)))
    assert np.array_equal(D[3:, 1:], 2 * np.ones((1, 2)))
    assert D[2].sum() == 0


def test_canonical_gauge_transform_maps_P_to_identity_block():
    P = np.array([[1.0, 2.0], [0.0, 1.0], [3.0, 0.0]])
    M = canonical_gauge_transform(P)
    assert np.allclose(M.T @ P, np.vstack([np.eye(2), np.zeros((1, 2))]))


def test_canonical_gauge_transform_rejects_rank_deficient_P():
    P = np.array([[1.0, 1.0], [0.0, 0.0], [0.0, 0.0]])
    with pytest.raises(DimensionMismatchError):
        canonical_gauge_transform(P)
