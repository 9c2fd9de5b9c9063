"""Top-level package API for admittance_models.

This package implements an algebra over linear network models of the form

    Y Φ = P x,    y = Qᵀ Φ

where ``x`` and ``y`` are port inputs and outputs and ``Φ`` is an internal
state. Models can be cascaded, transformed to new coordinates, and have their
ports opened, shorted or united; `cascade_and_unite` joins models through
ports that share a name.

Public API:
- AdmittanceModel, PSOModel, Blackbox
- apply_transform, ports_to_indices, cascade, cascade_and_unite
- open_ports, open_ports_except, short_ports, short_ports_except, unite_ports
- numeric_nullbasis, exact_nullbasis
- Built-in example models
"""

from .errors import (
    AdmittanceModelError,
    IncompatibleModelsError,
    DimensionMismatchError,
    PortNotFoundError,
)
from .config import Tolerances, DEFAULT_TOLERANCES
from .logging_config import setup_logging
from .linear_algebra import numeric_nullbasis, exact_nullbasis
from .model import (
    AdmittanceModel,
    get_Y,
    get_P,
    get_Q,
    get_ports,
    partial_copy,
    compatible,
    canonical_gauge,
    isapprox,
    apply_transform,
    ports_to_indices,
    cascade,
    unite_ports,
    open_ports,
    open_ports_except,
    short_ports,
    short_ports_except,
    cascade_and_unite,
)
from .pso_model import PSOModel
from .blackbox import Blackbox
from .examples import (
    identity_model,
    lc_resonator,
    series_capacitor,
    coupled_resonators,
)

__all__ = [
    "AdmittanceModelError",
    "IncompatibleModelsError",
    "DimensionMismatchError",
    "PortNotFoundError",
    "Tolerances",
    "DEFAULT_TOLERANCES",
    "setup_logging",
    "numeric_nullbasis",
    "exact_nullbasis",
    "AdmittanceModel",
    "get_Y",
    "get_P",
    "get_Q",
    "get_ports",
    "partial_copy",
    "compatible",
    "canonical_gauge",
    "isapprox",
    "apply_transform",
    "ports_to_indices",
    "cascade",
    "unite_ports",
    "open_ports",
    "open_ports_except",
    "short_ports",
    "short_ports_except",
    "cascade_and_unite",
    "PSOModel",
    "Blackbox",
    "identity_model",
    "lc_resonator",
    "series_capacitor",
    "coupled_resonators",
]
