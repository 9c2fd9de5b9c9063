"""Exceptions raised by the model algebra.

All errors derive from `AdmittanceModelError`, itself a `ValueError`, so that
callers catching `ValueError` keep working.
"""

from __future__ import annotations

from typing import Hashable, Sequence, Tuple


class AdmittanceModelError(ValueError):
    """Base class for errors raised by admittance_models."""


class IncompatibleModelsError(AdmittanceModelError):
    """The models cannot be cascaded together."""


class DimensionMismatchError(AdmittanceModelError):
    """Matrix shapes are inconsistent."""


class PortNotFoundError(AdmittanceModelError, KeyError):
    """One or more requested ports are absent from a model.

    Attributes
    ----------
    ports:
        The missing port identifiers, in request order.
    """

    def __init__(self, ports: Sequence[Hashable]) -> None:
        self.ports: Tuple[Hashable, ...] = tuple(ports)
        names = ", ".join(repr(p) for p in self.ports)
        super().__init__(f"Port(s) not found: {names}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return str(self.args[0])
