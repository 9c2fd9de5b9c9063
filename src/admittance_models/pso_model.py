from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Optional, Sequence, Tuple

import numpy as np

from .errors import DimensionMismatchError
from .linear_algebra import NullBasis, canonical_gauge_transform
from .model import AdmittanceModel, _check_shapes, _frozen_array, apply_transform


@dataclass(frozen=True, eq=False)
class PSOModel(AdmittanceModel):
    """A positive second order model.

    Parameters
    ----------
    K:
        Inverse inductance matrix (n×n).
    G:
        Conductance matrix (n×n).
    C:
        Capacitance matrix (n×n).
    P, Q:
        Input and output port matrices (n×k).
    ports:
        k unique port identifiers.

    Notes
    -----
    The admittance matrices are ``Y = (K, G, C)``; any number of PSO models
    may be cascaded together.
    """

    K: np.ndarray
    G: np.ndarray
    C: np.ndarray
    P: np.ndarray
    Q: np.ndarray
    ports: Tuple[Hashable, ...]

    def __post_init__(self) -> None:
        for name in ("K", "G", "C", "P", "Q"):
            object.__setattr__(self, name, _frozen_array(getattr(self, name), name=name))
        object.__setattr__(self, "ports", tuple(self.ports))
        _check_shapes(self.get_Y(), self.P, self.Q, self.ports)

    def get_Y(self) -> Tuple[np.ndarray, ...]:
        return (self.K, self.G, self.C)

    def get_P(self) -> np.ndarray:
        return self.P

    def get_Q(self) -> np.ndarray:
        return self.Q

    def get_ports(self) -> Tuple[Hashable, ...]:
        return self.ports

    def get_K(self) -> np.ndarray:
        return self.K

    def get_G(self) -> np.ndarray:
        return self.G

    def get_C(self) -> np.ndarray:
        return self.C

    def partial_copy(
        self,
        *,
        Y: Optional[Sequence[np.ndarray]] = None,
        P: Optional[np.ndarray] = None,
        Q: Optional[np.ndarray] = None,
        ports: Optional[Sequence[Hashable]] = None,
    ) -> "PSOModel":
        if Y is None:
            K, G, C = self.K, self.G, self.C
        else:
            Y = list(Y)
            if len(Y) != 3:
                raise DimensionMismatchError(f"A PSOModel needs exactly 3 Y matrices (K, G, C); got {len(Y)}")
            K, G, C = Y
        return PSOModel(
            K=K,
            G=G,
            C=C,
            P=self.P if P is None else P,
            Q=self.Q if Q is None else Q,
            ports=self.ports if ports is None else ports,
        )

    @classmethod
    def compatible(cls, models: Sequence["PSOModel"]) -> bool:
        return True

    def canonical_gauge(self, *, nullbasis: Optional[NullBasis] = None) -> "PSOModel":
        return apply_transform(self, canonical_gauge_transform(self.P, nullbasis))
