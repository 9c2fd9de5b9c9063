"""Numeric tolerance settings shared by the model algebra."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Tolerances:
    """Tunable knobs for approximate comparisons and numeric null spaces.

    Parameters
    ----------
    rtol, atol:
        Relative and absolute tolerances used by `isapprox` (same meaning as in
        `numpy.allclose`).
    rcond:
        Relative singular-value cutoff for `numeric_nullbasis`. ``None`` lets
        SciPy pick ``eps * max(shape)``.
    """

    rtol: float = 1e-5
    atol: float = 1e-8
    rcond: Optional[float] = None


DEFAULT_TOLERANCES = Tolerances()
