"""Physical and numerical fluxes for the two dimensional Euler equations.

States are arrays whose last axis holds the four conserved variables
``(rho, rho*u, rho*v, E)``; any leading axes are treated point by point.
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence, Tuple

import numpy as np

from eulerdg.fluids import FreeStream


class FluxType(Enum):
    """Numerical flux schemes for shared element faces."""

    AVERAGE = 0
    LAX_FRIEDRICHS = 1
    ROE = 2
    ROE_ER = 3

    def describe(self) -> str:
        return _PRINT_NAMES[self]


_PRINT_NAMES = {
    FluxType.AVERAGE: "Average",
    FluxType.LAX_FRIEDRICHS: "Lax Friedrichs",
    FluxType.ROE: "Roe",
    FluxType.ROE_ER: "Roe-ER",
}

FLUX_NAMES = {
    "average": FluxType.AVERAGE,
    "lax": FluxType.LAX_FRIEDRICHS,
    "roe": FluxType.ROE,
    "roe-er": FluxType.ROE_ER,
}


def parse_flux_type(label: str) -> FluxType:
    """Look up a flux scheme by name, ignoring case."""
    key = label.lower()
    try:
        return FLUX_NAMES[key]
    except KeyError:
        raise ValueError(f"unable to use flux named {key}") from None


def _as_state(q) -> np.ndarray:
    q = np.asarray(q, dtype=float)
    if q.shape[-1:] != (4,):
        raise ValueError(f"state must have 4 components on its last axis, got shape {q.shape}")
    return q


def _primitives(gamma: float, q: np.ndarray):
    rho, rho_u, rho_v, energy = (q[..., n] for n in range(4))
    u = rho_u / rho
    v = rho_v / rho
    p = (gamma - 1.0) * (energy - 0.5 * rho * (u * u + v * v))
    return rho, rho_u, rho_v, energy, u, v, p


def _sound_speed(gamma: float, rho, p):
    return np.sqrt(np.abs(gamma * p / rho))


def euler_flux(free_stream: FreeStream, q) -> Tuple[np.ndarray, np.ndarray]:
    """Return the x and y physical fluxes ``(Fx, Fy)`` of state ``q``."""
    q = _as_state(q)
    _, rho_u, rho_v, energy, u, v, p = _primitives(free_stream.gamma, q)
    fx = np.stack([rho_u, rho_u * u + p, rho_u * v, u * (energy + p)], axis=-1)
    fy = np.stack([rho_v, rho_v * u, rho_v * v + p, v * (energy + p)], axis=-1)
    return fx, fy


def transform_flux(jdet: float, jinv: Sequence[float], fx, fy) -> Tuple[np.ndarray, np.ndarray]:
    """Project physical fluxes onto the reference ``(r, s)`` directions.

    ``jinv`` holds the four entries of the inverse Jacobian in row order.
    """
    j0, j1, j2, j3 = (float(v) for v in jinv)
    fx = np.asarray(fx, dtype=float)
    fy = np.asarray(fy, dtype=float)
    fr = jdet * (j0 * fx + j1 * fy)
    fs = jdet * (j2 * fx + j3 * fy)
    return fr, fs


def flux_jacobian(gamma: float, q: Sequence[float]) -> Tuple[np.ndarray, np.ndarray]:
    """Return the 4x4 Jacobians ``dF/dQ`` and ``dG/dQ`` at a single state."""
    rho, rho_u, rho_v, energy = (float(v) for v in q)
    oorho = 1.0 / rho
    u, v = rho_u * oorho, rho_v * oorho
    u2, v2 = u * u, v * v
    gm1 = gamma - 1.0
    e0 = energy * gamma * oorho
    h0 = (u2 + v2) * gm1
    h1 = h0 - e0
    h2a = e0 - 0.5 * h0
    h2 = h2a - gm1 * u2
    h3 = h2a - gm1 * v2
    fx = np.array(
        [
            [0.0, 1.0, 0.0, 0.0],
            [0.5 * h0 - u2, u * (3.0 - gamma), -v * gm1, gm1],
            [-u * v, v, u, 0.0],
            [u * h1, h2, -u * v * gm1, gamma * u],
        ]
    )
    gy = np.array(
        [
            [0.0, 0.0, 1.0, 0.0],
            [-u * v, v, u, 0.0],
            [0.5 * h0 - v2, -u * gm1, v * (3.0 - gamma), gm1],
            [v * h1, -u * v * gm1, h3, gamma * v],
        ]
    )
    return fx, gy


def _normal_flux(fx, fy, normal) -> np.ndarray:
    nx, ny = (float(c) for c in normal)
    return nx * fx + ny * fy


def average_flux(free_stream: FreeStream, q_left, q_right, normal) -> np.ndarray:
    """Normal component of the mean of the left and right physical fluxes."""
    fxl, fyl = euler_flux(free_stream, q_left)
    fxr, fyr = euler_flux(free_stream, q_right)
    return _normal_flux(0.5 * (fxl + fxr), 0.5 * (fyl + fyr), normal)


def _max_wave_speed(gamma: float, q_left: np.ndarray, q_right: np.ndarray):
    rho_l, _, _, _, ul, vl, pl = _primitives(gamma, q_left)
    rho_r, _, _, _, ur, vr, pr = _primitives(gamma, q_right)
    speed_l = np.sqrt(ul * ul + vl * vl) + _sound_speed(gamma, rho_l, pl)
    speed_r = np.sqrt(ur * ur + vr * vr) + _sound_speed(gamma, rho_r, pr)
    return np.maximum(speed_l, speed_r)


def lax_flux(free_stream: FreeStream, q_left, q_right, normal) -> np.ndarray:
    """Local Lax-Friedrichs flux computed from the face states."""
    q_left = _as_state(q_left)
    q_right = _as_state(q_right)
    max_v = _max_wave_speed(free_stream.gamma, q_left, q_right)
    central = average_flux(free_stream, q_left, q_right, normal)
    return central + 0.5 * max_v[..., None] * (q_left - q_right)


def lax_flux_interpolated(
    free_stream: FreeStream, q_left, q_right, flux_left, flux_right, normal
) -> np.ndarray:
    """Local Lax-Friedrichs flux using fluxes already interpolated to the face.

    ``flux_left`` and ``flux_right`` are ``(Fx, Fy)`` pairs.
    """
    q_left = _as_state(q_left)
    q_right = _as_state(q_right)
    max_v = _max_wave_speed(free_stream.gamma, q_left, q_right)
    n_left = _normal_flux(np.asarray(flux_left[0], float), np.asarray(flux_left[1], float), normal)
    n_right = _normal_flux(np.asarray(flux_right[0], float), np.asarray(flux_right[1], float), normal)
    return 0.5 * (n_left + n_right + max_v[..., None] * (q_left - q_right))