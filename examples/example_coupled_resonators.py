"""Join resonators through shared port names and look at the result.

Two shunt LC resonators are connected by a coupling capacitor. The pieces are
joined with `cascade_and_unite`, then the coupling port "r2" is shorted, and
finally the model is sampled on a frequency grid as a `Blackbox`.
"""

import numpy as np

from admittance_models import (
    Blackbox,
    canonical_gauge,
    cascade_and_unite,
    exact_nullbasis,
    lc_resonator,
    series_capacitor,
    setup_logging,
    short_ports,
)


def main() -> None:
    setup_logging()

    pieces = [
        lc_resonator(inductance=2.0, capacitance=1.0, port="r1"),
        lc_resonator(inductance=4.0, capacitance=3.0, port="r2"),
        series_capacitor(0.5, ("r1", "r2")),
    ]
    joined = cascade_and_unite(pieces, nullbasis=exact_nullbasis)
    print(joined.summary())
    print("K =\n", joined.K)
    print("C =\n", joined.C)

    shorted = short_ports(joined, "r2", nullbasis=exact_nullbasis)
    print("\nWith r2 shorted:")
    print(shorted.summary())
    print("K =", shorted.K.ravel(), " C =", shorted.C.ravel())

    gauged = canonical_gauge(joined)
    print("\nCanonical gauge P =\n", np.round(gauged.P, 12))

    omega = np.linspace(0.1, 1.0, 5)
    bbox = Blackbox.from_pso(omega, joined)
    print("\nSampled on", len(bbox.omega), "frequencies; Y(ω0) =\n", bbox.Y[0])


if __name__ == "__main__":
    main()
