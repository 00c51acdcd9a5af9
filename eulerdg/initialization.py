"""Initial condition selection and free stream initialisation."""

from __future__ import annotations

from enum import Enum
from typing import Tuple

import numpy as np

from eulerdg.fluids import FreeStream


class InitType(Enum):
    """Kinds of initial solution."""

    FREESTREAM = 0
    IVORTEX = 1
    SHOCKTUBE = 2

    def describe(self) -> str:
        return _PRINT_NAMES[self]


_PRINT_NAMES = {
    InitType.FREESTREAM: "Freestream",
    InitType.IVORTEX: "Inviscid Vortex Analytic Solution",
    InitType.SHOCKTUBE: "Shock Tube",
}

INIT_NAMES = {
    "freestream": InitType.FREESTREAM,
    "ivortex": InitType.IVORTEX,
    "shocktube": InitType.SHOCKTUBE,
}


def parse_init_type(label: str) -> InitType:
    """Look up an initial condition by name, ignoring case."""
    if not label:
        raise ValueError(f"empty init type, must be one of {sorted(INIT_NAMES)}")
    key = label.lower()
    try:
        return INIT_NAMES[key]
    except KeyError:
        raise ValueError(f"unable to use init type named {key}") from None


def freestream_solution(free_stream: FreeStream, np_points: int, kmax: int) -> Tuple[np.ndarray, ...]:
    """Four (np_points x kmax) arrays, each filled with one free stream component."""
    if np_points < 0 or kmax < 0:
        raise ValueError(f"dimensions must not be negative, got ({np_points}, {kmax})")
    return tuple(np.full((np_points, kmax), q, dtype=float) for q in free_stream.qinf)