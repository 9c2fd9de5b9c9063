"""The admittance model contract and the algebra built on it.

An admittance model is a linear relation between port inputs ``x`` and port
outputs ``y`` through an internal state ``Φ``:

    Y Φ = P x,    y = Qᵀ Φ

Concrete variants (`PSOModel`, `Blackbox`) subclass `AdmittanceModel` and
implement the accessors plus `partial_copy`, `compatible` and
`canonical_gauge`. Everything else in this module (transforms, cascading,
opening/shorting/uniting ports) only goes through that contract and never
mutates its arguments.
"""

from __future__ import annotations

import dataclasses
import logging
from abc import ABC, abstractmethod
from typing import Any, Hashable, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .config import DEFAULT_TOLERANCES
from .errors import (
    DimensionMismatchError,
    IncompatibleModelsError,
    PortNotFoundError,
)
from .linear_algebra import NullBasis, block_diagonal, resolve_nullbasis, stack_rows

logger = logging.getLogger(__name__)

Port = Hashable


def _frozen_array(a, *, name: str) -> np.ndarray:
    """Copy `a` into a read-only 2-D array."""
    arr = np.array(a, copy=True)
    if arr.ndim != 2:
        raise DimensionMismatchError(f"{name} must be a 2-D matrix; got shape {arr.shape}")
    arr.setflags(write=False)
    return arr


def _check_shapes(Y: Sequence[np.ndarray], P: np.ndarray, Q: np.ndarray, ports: Tuple[Port, ...]) -> None:
    n, k = P.shape
    for i, m in enumerate(Y):
        if m.shape != (n, n):
            raise DimensionMismatchError(f"Y[{i}] must be {n}×{n} to match P; got {m.shape}")
    if Q.shape != (n, k):
        raise DimensionMismatchError(f"Q must be {n}×{k} to match P; got {Q.shape}")
    if len(ports) != k:
        raise DimensionMismatchError(f"Expected {k} ports to match P; got {len(ports)}")


def _values_equal(a: Any, b: Any) -> bool:
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return np.array_equal(a, b)
    if isinstance(a, tuple) and isinstance(b, tuple):
        return len(a) == len(b) and all(_values_equal(x, y) for x, y in zip(a, b))
    return a == b


def _values_close(a: Any, b: Any, rtol: float, atol: float) -> bool:
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        a, b = np.asarray(a), np.asarray(b)
        if a.shape != b.shape:
            return False
        if not (np.issubdtype(a.dtype, np.number) and np.issubdtype(b.dtype, np.number)):
            return np.array_equal(a, b)
        return bool(np.allclose(a, b, rtol=rtol, atol=atol))
    if isinstance(a, tuple) and isinstance(b, tuple):
        return len(a) == len(b) and all(_values_close(x, y, rtol, atol) for x, y in zip(a, b))
    # Port identifiers and other non-numeric values compare exactly.
    return a == b


class AdmittanceModel(ABC):
    """Abstract representation of the linear map ``YΦ = Px``, ``y = QᵀΦ``.

    Subclasses are frozen dataclasses and must implement

        get_Y(), get_P(), get_Q(), get_ports()
        partial_copy(*, Y=None, P=None, Q=None, ports=None)
        compatible(models)          (classmethod)
        canonical_gauge(*, nullbasis=None)

    Equality compares every dataclass field by value after checking that both
    operands are the same concrete type.
    """

    __hash__ = None  # value semantics over array fields

    @abstractmethod
    def get_Y(self) -> Tuple[np.ndarray, ...]:
        """Return the sequence of admittance matrices."""

    @abstractmethod
    def get_P(self) -> np.ndarray:
        """Return the input port matrix."""

    @abstractmethod
    def get_Q(self) -> np.ndarray:
        """Return the output port matrix."""

    @abstractmethod
    def get_ports(self) -> Tuple[Port, ...]:
        """Return the port identifiers."""

    @abstractmethod
    def partial_copy(
        self,
        *,
        Y: Optional[Sequence[np.ndarray]] = None,
        P: Optional[np.ndarray] = None,
        Q: Optional[np.ndarray] = None,
        ports: Optional[Sequence[Port]] = None,
    ) -> "AdmittanceModel":
        """Create a new model with the same fields except those given."""

    @classmethod
    @abstractmethod
    def compatible(cls, models: Sequence["AdmittanceModel"]) -> bool:
        """Check if the models can be cascaded."""

    @abstractmethod
    def canonical_gauge(self, *, nullbasis: Optional[NullBasis] = None) -> "AdmittanceModel":
        """Change to coordinates in which ``P`` is ``[I ; 0]``. The result is dense."""

    @property
    def n_states(self) -> int:
        """Internal dimension n."""
        return self.get_P().shape[0]

    @property
    def n_ports(self) -> int:
        return len(self.get_ports())

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return False if isinstance(other, AdmittanceModel) else NotImplemented
        return all(
            _values_equal(getattr(self, f.name), getattr(other, f.name))
            for f in dataclasses.fields(self)
        )

    def isapprox(self, other: object, *, rtol: Optional[float] = None, atol: Optional[float] = None) -> bool:
        """Approximate equality: numeric fields within tolerance, the rest exact."""
        if type(other) is not type(self):
            return False
        rtol = DEFAULT_TOLERANCES.rtol if rtol is None else rtol
        atol = DEFAULT_TOLERANCES.atol if atol is None else atol
        return all(
            _values_close(getattr(self, f.name), getattr(other, f.name), rtol, atol)
            for f in dataclasses.fields(self)
        )

    def summary(self) -> str:
        """Human-readable summary."""
        lines = []
        lines.append(
            f"{type(self).__name__}(n_states={self.n_states}, n_ports={self.n_ports}, "
            f"n_Y={len(self.get_Y())})"
        )
        lines.append("Ports: " + ", ".join(repr(p) for p in self.get_ports()))
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Contract as free functions


def get_Y(am: AdmittanceModel) -> Tuple[np.ndarray, ...]:
    return am.get_Y()


def get_P(am: AdmittanceModel) -> np.ndarray:
    return am.get_P()


def get_Q(am: AdmittanceModel) -> np.ndarray:
    return am.get_Q()


def get_ports(am: AdmittanceModel) -> Tuple[Port, ...]:
    return am.get_ports()


def partial_copy(am: AdmittanceModel, **overrides) -> AdmittanceModel:
    return am.partial_copy(**overrides)


def compatible(models: Sequence[AdmittanceModel]) -> bool:
    """Check if the models can be cascaded.

    Always true for `PSOModel` and true for `Blackbox` models sharing the same
    frequency grid. Models of different concrete types are never compatible.
    """
    models = list(models)
    if not models:
        return True
    t = type(models[0])
    if any(type(m) is not t for m in models):
        return False
    return t.compatible(models)


def canonical_gauge(am: AdmittanceModel, *, nullbasis: Optional[NullBasis] = None) -> AdmittanceModel:
    return am.canonical_gauge(nullbasis=nullbasis)


def isapprox(am1: AdmittanceModel, am2: AdmittanceModel, **kwargs) -> bool:
    return am1.isapprox(am2, **kwargs)


# ---------------------------------------------------------------------------
# Argument helpers


def _collect(args: Tuple[Any, ...]) -> List[Any]:
    """Accept either a single list/set of items or the items themselves.

    Tuples are treated as single port identifiers, not as collections.
    """
    if len(args) == 1 and isinstance(args[0], (list, set, frozenset, np.ndarray)):
        return list(args[0])
    return list(args)


def _require_ports(am: AdmittanceModel, ports: Sequence[Port]) -> List[int]:
    inds = ports_to_indices(am, ports)
    missing = [p for p, i in zip(ports, inds) if i is None]
    if missing:
        raise PortNotFoundError(missing)
    return inds


def _drop_ports(am: AdmittanceModel, drop_inds: Iterable[int]) -> AdmittanceModel:
    drop = set(drop_inds)
    keep = [i for i in range(am.n_ports) if i not in drop]
    ports = am.get_ports()
    return am.partial_copy(
        P=am.get_P()[:, keep],
        Q=am.get_Q()[:, keep],
        ports=[ports[i] for i in keep],
    )


# ---------------------------------------------------------------------------
# Algebra


def apply_transform(am: AdmittanceModel, transform) -> AdmittanceModel:
    """Apply a linear transformation `transform` (n×n') to the coordinates of the model."""
    M = np.asarray(transform)
    if M.ndim != 2 or M.shape[0] != am.n_states:
        raise DimensionMismatchError(
            f"Transform must have {am.n_states} rows; got shape {M.shape}"
        )
    Mt = M.T
    Y = [Mt @ m @ M for m in am.get_Y()]
    P = Mt @ am.get_P()
    Q = Mt @ am.get_Q()
    return am.partial_copy(Y=Y, P=P, Q=Q)


def ports_to_indices(am: AdmittanceModel, *ports: Port) -> List[Optional[int]]:
    """Find the indices corresponding to given ports (``None`` where absent)."""
    wanted = _collect(ports)
    am_ports = am.get_ports()
    first = {}
    for i, p in enumerate(am_ports):
        first.setdefault(p, i)
    return [first.get(p) for p in wanted]


def cascade(*models: AdmittanceModel) -> AdmittanceModel:
    """Cascade the models into one larger block diagonal model.

    Accepts the models either as positional arguments or as one list.
    """
    ams = _collect(models)
    if not ams:
        raise ValueError("cascade requires at least one model")
    if len(ams) == 1:
        return ams[0]
    if not compatible(ams):
        raise IncompatibleModelsError(
            "Models cannot be cascaded: " + ", ".join(type(am).__name__ for am in ams)
        )
    n_Y = {len(am.get_Y()) for am in ams}
    if len(n_Y) != 1:
        raise DimensionMismatchError(f"All models must have the same number of Y matrices; got {sorted(n_Y)}")

    Y = [block_diagonal(ms) for ms in zip(*[am.get_Y() for am in ams])]
    P = block_diagonal([am.get_P() for am in ams])
    Q = block_diagonal([am.get_Q() for am in ams])
    ports: List[Port] = []
    for am in ams:
        ports.extend(am.get_ports())
    logger.debug("cascade: %d models -> n_states=%d, n_ports=%d", len(ams), P.shape[0], P.shape[1])
    return ams[0].partial_copy(Y=Y, P=P, Q=Q, ports=ports)


def unite_ports(am: AdmittanceModel, *ports: Port, nullbasis: Optional[NullBasis] = None) -> AdmittanceModel:
    """Unite the given ports into one port (the first one given)."""
    ports = list(dict.fromkeys(_collect(ports)))
    if len(ports) <= 1:
        return am
    port_inds = _require_ports(am, ports)

    P = am.get_P()
    first_vector = P[:, port_inds[0]]
    constraint_mat = stack_rows([first_vector - P[:, i] for i in port_inds[1:]], am.n_states)
    basis = resolve_nullbasis(nullbasis)(constraint_mat)
    logger.debug("unite_ports %r: n_states %d -> %d", ports, am.n_states, basis.shape[1])
    # keep the first port
    return _drop_ports(apply_transform(am, basis), port_inds[1:])


def open_ports(am: AdmittanceModel, *ports: Port) -> AdmittanceModel:
    """Remove the given ports."""
    ports = _collect(ports)
    if len(ports) == 0:
        return am
    return _drop_ports(am, _require_ports(am, ports))


def open_ports_except(am: AdmittanceModel, *ports: Port) -> AdmittanceModel:
    """Remove all ports except those specified."""
    ports = _collect(ports)
    _require_ports(am, ports)
    return open_ports(am, [p for p in am.get_ports() if p not in ports])


def short_ports(am: AdmittanceModel, *ports: Port, nullbasis: Optional[NullBasis] = None) -> AdmittanceModel:
    """Replace the given ports by short circuits."""
    ports = _collect(ports)
    if len(ports) == 0:
        return am
    port_inds = _require_ports(am, ports)

    P = am.get_P()
    constraint_mat = stack_rows([P[:, i] for i in port_inds], am.n_states)
    basis = resolve_nullbasis(nullbasis)(constraint_mat)
    logger.debug("short_ports %r: n_states %d -> %d", ports, am.n_states, basis.shape[1])
    return _drop_ports(apply_transform(am, basis), port_inds)


def short_ports_except(am: AdmittanceModel, *ports: Port, nullbasis: Optional[NullBasis] = None) -> AdmittanceModel:
    """Replace all ports with short circuits, except those specified."""
    ports = _collect(ports)
    _require_ports(am, ports)
    return short_ports(am, [p for p in am.get_ports() if p not in ports], nullbasis=nullbasis)


def cascade_and_unite(*models: AdmittanceModel, nullbasis: Optional[NullBasis] = None) -> AdmittanceModel:
    """Cascade all models and unite ports with the same name."""
    ams = _collect(models)
    if not ams:
        raise ValueError("cascade_and_unite requires at least one model")
    if len(ams) == 1:
        return ams[0]

    # tag the ports so that the names are all distinct and then cascade
    tagged = [am.partial_copy(ports=[(i, p) for p in am.get_ports()]) for i, am in enumerate(ams)]
    model = cascade(tagged)

    # merge all ports with the same name, in order of first appearance
    original_ports = list(dict.fromkeys(p for am in ams for p in am.get_ports()))
    for port in original_ports:
        same = [p for p in model.get_ports() if p[1] == port]
        model = unite_ports(model, same, nullbasis=nullbasis)

    # remove tags
    return model.partial_copy(ports=[p[1] for p in model.get_ports()])
