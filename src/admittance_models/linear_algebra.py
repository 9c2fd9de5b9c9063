"""Linear-algebra primitives used by the model algebra.

The null-space primitive is pluggable: every function that needs one accepts a
``nullbasis`` callable with the contract

    nullbasis(A) -> N

where ``A`` is r×c and the columns of the c×(c - rank A) matrix ``N`` form a
basis of {v : A v ≈ 0}. Two backends are provided:

- `numeric_nullbasis`: SVD based (`scipy.linalg.null_space`), suited to
  floating-point models;
- `exact_nullbasis`: SymPy's exact `Matrix.nullspace`, suited to matrices with
  exactly representable entries (integers, simple fractions).
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

import numpy as np
import scipy.linalg
import sympy as sp

from .config import DEFAULT_TOLERANCES
from .errors import DimensionMismatchError

logger = logging.getLogger(__name__)

NullBasis = Callable[[np.ndarray], np.ndarray]


def _as_2d(A) -> np.ndarray:
    A = np.asarray(A)
    if A.ndim != 2:
        raise DimensionMismatchError(f"Expected a 2-D matrix; got shape {A.shape}")
    return A


def numeric_nullbasis(A, *, rcond: Optional[float] = None) -> np.ndarray:
    """Return an orthonormal basis of ker(A) as a c×(c - rank A) array."""
    A = _as_2d(A)
    r, c = A.shape
    if r == 0:
        # No constraints: everything is in the kernel.
        return np.eye(c, dtype=A.dtype if np.issubdtype(A.dtype, np.inexact) else float)
    if c == 0:
        return np.zeros((0, 0), dtype=float)
    if rcond is None:
        rcond = DEFAULT_TOLERANCES.rcond
    return scipy.linalg.null_space(A, rcond=rcond)


def exact_nullbasis(A) -> np.ndarray:
    """Return a basis of ker(A) computed exactly with SymPy.

    Entries are rationalized before elimination, so this backend is only
    meaningful for matrices whose entries are exactly representable.
    """
    A = _as_2d(A)
    r, c = A.shape
    if r == 0:
        return np.eye(c, dtype=float)
    if c == 0:
        return np.zeros((0, 0), dtype=float)

    M = sp.Matrix(A.tolist()).applyfunc(lambda v: sp.nsimplify(v, rational=True))
    null = M.nullspace()
    if not null:
        return np.zeros((c, 0), dtype=float)
    N = sp.Matrix.hstack(*null)
    dtype = complex if np.iscomplexobj(A) else float
    return np.array(N.tolist(), dtype=dtype)


def resolve_nullbasis(nullbasis: Optional[NullBasis]) -> NullBasis:
    """Return the given backend, or the default numeric one."""
    return numeric_nullbasis if nullbasis is None else nullbasis


def block_diagonal(blocks: Sequence[np.ndarray]) -> np.ndarray:
    """Join 2-D blocks (possibly with zero rows or columns) along the diagonal."""
    blocks = [_as_2d(b) for b in blocks]
    if not blocks:
        return np.zeros((0, 0))
    return scipy.linalg.block_diag(*blocks)


def canonical_gauge_transform(P, nullbasis: Optional[NullBasis] = None) -> np.ndarray:
    """Return M such that Mᵀ P = [I ; 0].

    With N a basis of ker(Pᵀ), W = [P N] is square and invertible whenever P
    has full column rank, and M = W⁻ᵀ.
    """
    P = _as_2d(P)
    n, k = P.shape
    N = resolve_nullbasis(nullbasis)(P.T)
    W = np.hstack([P, N])
    if W.shape != (n, n):
        raise DimensionMismatchError(
            f"P must have full column rank for a canonical gauge; got rank {n - N.shape[1]} of {k}"
        )
    logger.debug("canonical gauge: n=%d, k=%d", n, k)
    return np.linalg.inv(W).T


def stack_rows(rows: List[np.ndarray], n_cols: int) -> np.ndarray:
    """Stack 1-D vectors as the rows of a matrix with `n_cols` columns."""
    if not rows:
        return np.zeros((0, n_cols))
    return np.vstack([np.asarray(r).reshape(1, n_cols) for r in rows])
