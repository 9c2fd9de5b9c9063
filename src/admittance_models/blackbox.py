from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Optional, Sequence, Tuple

import numpy as np

from .errors import DimensionMismatchError
from .linear_algebra import NullBasis, canonical_gauge_transform
from .model import AdmittanceModel, _check_shapes, _frozen_array, apply_transform
from .pso_model import PSOModel


@dataclass(frozen=True, eq=False)
class Blackbox(AdmittanceModel):
    """A model sampled on a grid of angular frequencies.

    Parameters
    ----------
    omega:
        1-D grid of angular frequencies.
    Y:
        One n×n admittance matrix per entry of `omega`.
    P, Q:
        Input and output port matrices (n×k).
    ports:
        k unique port identifiers.

    Notes
    -----
    Blackboxes can only be cascaded with blackboxes sampled on the identical
    grid.
    """

    omega: np.ndarray
    Y: Tuple[np.ndarray, ...]
    P: np.ndarray
    Q: np.ndarray
    ports: Tuple[Hashable, ...]

    def __post_init__(self) -> None:
        omega = np.array(self.omega, dtype=float, copy=True)
        if omega.ndim != 1:
            raise DimensionMismatchError(f"omega must be 1-D; got shape {omega.shape}")
        omega.setflags(write=False)
        object.__setattr__(self, "omega", omega)
        object.__setattr__(
            self, "Y", tuple(_frozen_array(m, name=f"Y[{i}]") for i, m in enumerate(self.Y))
        )
        if len(self.Y) != len(self.omega):
            raise DimensionMismatchError(
                f"Need one Y matrix per frequency; got {len(self.Y)} for {len(self.omega)} frequencies"
            )
        object.__setattr__(self, "P", _frozen_array(self.P, name="P"))
        object.__setattr__(self, "Q", _frozen_array(self.Q, name="Q"))
        object.__setattr__(self, "ports", tuple(self.ports))
        _check_shapes(self.Y, self.P, self.Q, self.ports)

    @classmethod
    def from_pso(cls, omega, pso: PSOModel) -> "Blackbox":
        """Sample a `PSOModel` as ``Y(ω) = K + iωG - ω²C``."""
        omega = np.asarray(omega, dtype=float)
        Y = [pso.K + 1j * w * pso.G - w ** 2 * pso.C for w in omega]
        return cls(omega=omega, Y=Y, P=pso.P, Q=pso.Q, ports=pso.ports)

    def get_Y(self) -> Tuple[np.ndarray, ...]:
        return self.Y

    def get_P(self) -> np.ndarray:
        return self.P

    def get_Q(self) -> np.ndarray:
        return self.Q

    def get_ports(self) -> Tuple[Hashable, ...]:
        return self.ports

    def get_omega(self) -> np.ndarray:
        return self.omega

    def partial_copy(
        self,
        *,
        Y: Optional[Sequence[np.ndarray]] = None,
        P: Optional[np.ndarray] = None,
        Q: Optional[np.ndarray] = None,
        ports: Optional[Sequence[Hashable]] = None,
    ) -> "Blackbox":
        return Blackbox(
            omega=self.omega,
            Y=self.Y if Y is None else Y,
            P=self.P if P is None else P,
            Q=self.Q if Q is None else Q,
            ports=self.ports if ports is None else ports,
        )

    @classmethod
    def compatible(cls, models: Sequence["Blackbox"]) -> bool:
        """True iff all blackboxes share the same frequency grid."""
        models = list(models)
        if not models:
            return True
        omega = models[0].omega
        return all(np.array_equal(m.omega, omega) for m in models[1:])

    def canonical_gauge(self, *, nullbasis: Optional[NullBasis] = None) -> "Blackbox":
        return apply_transform(self, canonical_gauge_transform(self.P, nullbasis))
