"""Open, short and unite ports of a small model.

Starts from a three-port identity model (each port drives its own internal
coordinate) and shows how each port operation changes the internal dimension
and the port list.
"""

import numpy as np

from admittance_models import (
    exact_nullbasis,
    identity_model,
    open_ports,
    ports_to_indices,
    short_ports,
    unite_ports,
)


def show(title, model) -> None:
    print(f"\n{title}")
    print(model.summary())
    print("K =")
    print(np.array2string(model.K, precision=3))
    print("P =")
    print(np.array2string(model.P, precision=3))


def main() -> None:
    m = identity_model(["1", "2", "3"])
    show("Original model:", m)

    print("\nports_to_indices(m, '2', '1') =", ports_to_indices(m, "2", "1"))

    show("Port 3 opened:", open_ports(m, "3"))
    show("Port 3 shorted:", short_ports(m, "3", nullbasis=exact_nullbasis))
    show("Ports 1 and 2 united:", unite_ports(m, "1", "2", nullbasis=exact_nullbasis))


if __name__ == "__main__":
    main()
