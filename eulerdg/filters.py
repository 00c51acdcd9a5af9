"""Modal filters, the Barth-Jespersen limiter function and a modal shock sensor."""

from __future__ import annotations

import math
from enum import Enum

import numpy as np

# Machine epsilon used to set the strength of the exponential filter.
_FILTER_EPS = 2.2204e-16
# Sensor values below this mark an element as troubled.
SHOCK_THRESHOLD = 0.99


class LimiterType(Enum):
    """Ways of controlling oscillations in the solution."""

    NONE = 0
    MODE_FILTER = 1
    BARTH_JESPERSON = 2
    PERSSON_C0 = 3

    def describe(self) -> str:
        return _PRINT_NAMES.get(self, "None")


_PRINT_NAMES = {
    LimiterType.MODE_FILTER: "Modal Filter",
    LimiterType.BARTH_JESPERSON: "Barth Jesperson",
    LimiterType.PERSSON_C0: "Persson, C0 viscosity",
}

LIMITER_NAMES = {
    "modefilter": LimiterType.MODE_FILTER,
    "mode filter": LimiterType.MODE_FILTER,
    "barthjesperson": LimiterType.BARTH_JESPERSON,
    "barth jesperson": LimiterType.BARTH_JESPERSON,
    "perssonc0": LimiterType.PERSSON_C0,
    "persson c0": LimiterType.PERSSON_C0,
}


def parse_limiter_type(label: str) -> LimiterType:
    """Look up a limiter by name, ignoring case and surrounding blanks.

    An empty label selects no limiter.
    """
    if not label:
        return LimiterType.NONE
    key = label.strip().lower()
    try:
        return LIMITER_NAMES[key]
    except KeyError:
        raise ValueError(f"unable to use limiter named [{key}]") from None


def _mode_orders(n: int):
    """Total polynomial order of each mode, in the basis ordering."""
    for i in range(n + 1):
        for j in range(n - i + 1):
            yield i + j


def _check_order(n: int) -> int:
    if n < 0:
        raise ValueError(f"polynomial order must not be negative, got {n}")
    return (n + 1) * (n + 2) // 2


def cutoff_filter(n: int, n_cutoff: int, frac: float) -> np.ndarray:
    """Diagonal filter that scales every mode of order ``>= n_cutoff`` by ``frac``."""
    _check_order(n)
    data = [frac if order >= n_cutoff else 1.0 for order in _mode_orders(n)]
    return np.diag(np.array(data, dtype=float))


def exponential_filter(n: int, n_cutoff: int, sp: float) -> np.ndarray:
    """Diagonal exponential filter acting on modes of order ``>= n_cutoff``.

    The top mode is damped down to machine epsilon; ``sp`` sets how sharply
    the damping rises between the cutoff and the top mode.
    """
    np_modes = _check_order(n)
    if n == n_cutoff:
        return np.eye(np_modes)
    alpha = -math.log(_FILTER_EPS)
    data = []
    for order in _mode_orders(n):
        if order >= n_cutoff:
            data.append(math.exp(-alpha * math.pow((order - n_cutoff) / (n - n_cutoff), sp)))
        else:
            data.append(1.0)
    return np.diag(np.array(data, dtype=float))


def clipper_matrix(v, vinv, filter_diag) -> np.ndarray:
    """Nodal operator ``V @ F @ Vinv`` applying a modal filter to nodal values.

    ``filter_diag`` may be the diagonal matrix or its diagonal as a vector.
    """
    v = np.asarray(v, dtype=float)
    vinv = np.asarray(vinv, dtype=float)
    f = np.asarray(filter_diag, dtype=float)
    if f.ndim == 1:
        f = np.diag(f)
    return v @ f @ vinv


def _mass_diagonal(mass) -> np.ndarray:
    mass = np.asarray(mass, dtype=float)
    if mass.ndim == 2:
        return np.diag(mass).copy()
    if mass.ndim == 1:
        return mass
    raise ValueError(f"mass must be a matrix or its diagonal, got shape {mass.shape}")


def element_average(values, mass_diag):
    """Mass weighted average over the nodes of an element.

    ``values`` is a vector of node values, or a (nodes x elements) matrix in
    which case one average per element is returned.
    """
    weights = _mass_diagonal(mass_diag)
    values = np.asarray(values, dtype=float)
    if values.shape[0] != weights.shape[0]:
        raise ValueError(f"{values.shape[0]} node values for {weights.shape[0]} mass weights")
    total = np.tensordot(weights, values, axes=(0, 0)) / weights.sum()
    return float(total) if np.ndim(total) == 0 else total


def limiter_psi(corner: int, u_min: float, u_max: float, u_ave: float, dudr: float, duds: float) -> float:
    """Barth-Jespersen limiting factor for one corner of the reference triangle.

    The corner is reached from the centroid along (-2/3, -2/3), (4/3, -2/3)
    or (-2/3, 4/3) for corners 0, 1 and 2.
    """
    if corner == 0:
        del2 = -2.0 / 3.0 * (dudr + duds)
    elif corner == 1:
        del2 = (4.0 / 3.0) * dudr - (2.0 / 3.0) * duds
    elif corner == 2:
        del2 = -(2.0 / 3.0) * dudr + (4.0 / 3.0) * duds
    else:
        raise ValueError(f"corner must be 0, 1 or 2, got {corner}")
    if del2 > 0:
        return min(1.0, (u_max - u_ave) / del2)
    if del2 < 0:
        return min(1.0, (u_min - u_ave) / del2)
    return 1.0


class ModeAliasShockFinder:
    """Persson's modal decay sensor for detecting troubled elements.

    The energy in the top polynomial mode, relative to the whole solution,
    is mapped smoothly onto a value between 1 (smooth) and 0 (shocked).
    """

    def __init__(self, order: int, v, vinv, mass_matrix, kappa: float):
        if order < 1:
            raise ValueError(f"shock finder needs polynomial order of at least 1, got {order}")
        self.order = order
        self.np = _check_order(order)
        self.kappa = float(kappa)
        self.mass_diag = _mass_diagonal(mass_matrix)
        if self.mass_diag.shape[0] != self.np:
            raise ValueError(f"mass matrix has {self.mass_diag.shape[0]} nodes, expected {self.np}")
        self.clipper = clipper_matrix(v, vinv, cutoff_filter(order, order, 0.0))

    def moment(self, q) -> float:
        """Mass weighted energy of the top mode relative to the whole solution."""
        q = np.asarray(q, dtype=float)
        if q.shape != (self.np,):
            raise ValueError(f"element values must have {self.np} entries, got shape {q.shape}")
        diff = q - self.clipper @ q
        numerator = float(np.sum(self.mass_diag * diff * diff))
        denominator = float(np.sum(self.mass_diag * q * q))
        return numerator / denominator

    def shock_indicator(self, q) -> float:
        """Smoothness of the element: 1 when smooth, falling to 0 at a shock."""
        m = self.moment(q)
        se = math.log10(m) if m > 0 else -math.inf
        s0 = 4.0 / math.pow(self.order, 4)
        left, right = s0 - self.kappa, s0 + self.kappa
        if se < left:
            return 1.0
        if se > right:
            return 0.0
        return 0.5 * (1.0 - math.sin(0.5 * math.pi / self.kappa * (se - s0)))

    def has_shock(self, q) -> bool:
        """Whether the element counts as troubled."""
        return self.shock_indicator(q) < SHOCK_THRESHOLD