from __future__ import annotations

from typing import Hashable, Sequence

import numpy as np

from .model import cascade_and_unite
from .pso_model import PSOModel


def identity_model(ports: Sequence[Hashable] = ("1", "2", "3")) -> PSOModel:
    """A k-port model with ``K = P = Q = I`` and ``G = C = 0``.

    Each port drives its own internal coordinate; shorting or opening ports on
    this model gives easily predicted results.
    """
    k = len(ports)
    eye = np.eye(k)
    zero = np.zeros((k, k))
    return PSOModel(K=eye, G=zero, C=zero, P=eye, Q=eye, ports=list(ports))


def lc_resonator(inductance: float, capacitance: float, port: Hashable = "port") -> PSOModel:
    """One-node shunt LC resonator with a single port on its node.

    Node order: [node]
    """
    K = np.array([[1.0 / inductance]])
    G = np.zeros((1, 1))
    C = np.array([[capacitance]])
    P = np.array([[1.0]])
    return PSOModel(K=K, G=G, C=C, P=P, Q=P, ports=[port])


def series_capacitor(capacitance: float, ports: Sequence[Hashable] = ("a", "b")) -> PSOModel:
    """Two-node capacitor between two ports.

    Node order: [a, b]
    """
    if len(ports) != 2:
        raise ValueError("series_capacitor needs exactly two ports")
    zero = np.zeros((2, 2))
    C = capacitance * np.array([[1.0, -1.0], [-1.0, 1.0]])
    P = np.eye(2)
    return PSOModel(K=zero, G=zero, C=C, P=P, Q=P, ports=list(ports))


def coupled_resonators(
    inductances: Sequence[float] = (1.0, 1.0),
    capacitances: Sequence[float] = (1.0, 1.0),
    coupling_capacitance: float = 0.1,
    ports: Sequence[Hashable] = ("r1", "r2"),
) -> PSOModel:
    """Two shunt LC resonators coupled through a capacitor.

    Built by joining two `lc_resonator` models and a `series_capacitor` at
    shared port names, so the internal coordinates are whatever basis the
    null-space backend returns.
    """
    r1, r2 = ports
    return cascade_and_unite(
        lc_resonator(inductances[0], capacitances[0], r1),
        lc_resonator(inductances[1], capacitances[1], r2),
        series_capacitor(coupling_capacitance, (r1, r2)),
    )
