from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pytest


# Allow `pytest` to import the package directly from the src layout
# without requiring an editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from admittance_models import Blackbox, PSOModel, identity_model  # noqa: E402


@pytest.fixture
def three_port() -> PSOModel:
    return identity_model(["1", "2", "3"])


@pytest.fixture
def random_pso() -> PSOModel:
    """A dense 4-state, 3-port PSO model with symmetric matrices."""
    rng = np.random.default_rng(1234)

    def sym(n):
        A = rng.normal(size=(n, n))
        return A + A.T

    P = rng.normal(size=(4, 3))
    return PSOModel(K=sym(4), G=sym(4), C=sym(4), P=P, Q=P, ports=["a", "b", "c"])


@pytest.fixture
def omega() -> np.ndarray:
    return np.linspace(0.5, 2.0, 4)


@pytest.fixture
def random_blackbox(random_pso, omega) -> Blackbox:
    return Blackbox.from_pso(omega, random_pso)
