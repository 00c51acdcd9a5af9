"""Roe-type approximate Riemann solvers for shared element faces.

States are arrays whose last axis holds ``(rho, rho*u, rho*v, E)``; any
leading axes are treated point by point. ``normal`` is the unit face normal
pointing from the left state towards the right state.
"""

from __future__ import annotations

import numpy as np

from eulerdg.fluids import FreeStream


def _state(q) -> np.ndarray:
    q = np.asarray(q, dtype=float)
    if q.shape[-1:] != (4,):
        raise ValueError(f"state must have 4 components on its last axis, got shape {q.shape}")
    return q


def _pressure(gamma: float, q: np.ndarray) -> np.ndarray:
    rho, rho_u, rho_v, energy = (q[..., n] for n in range(4))
    return (gamma - 1.0) * (energy - 0.5 * (rho_u * rho_u + rho_v * rho_v) / rho)


def _rotate(q: np.ndarray, nx: float, ny: float):
    """Momentum components along and across the face normal."""
    rho_u, rho_v = q[..., 1], q[..., 2]
    return rho_u * nx + rho_v * ny, -rho_u * ny + rho_v * nx


def _roe_dissipation(gamma: float, q_left: np.ndarray, q_right: np.ndarray, nx: float, ny: float):
    """Upwind dissipation of the Roe flux in face-normal coordinates.

    Returns the dissipation terms (already negated and halved) together with
    the rotated momenta, normal velocities and pressures of both sides.
    """
    gm1 = gamma - 1.0
    rho_ul_r, rho_vl_r = _rotate(q_left, nx, ny)
    rho_ur_r, rho_vr_r = _rotate(q_right, nx, ny)
    rho_l, rho_r = q_left[..., 0], q_right[..., 0]
    ul, vl = rho_ul_r / rho_l, rho_vl_r / rho_l
    ur, vr = rho_ur_r / rho_r, rho_vr_r / rho_r
    pl, pr = _pressure(gamma, q_left), _pressure(gamma, q_right)
    hl = (q_left[..., 3] + pl) / rho_l
    hr = (q_right[..., 3] + pr) / rho_r

    rho_ls, rho_rs = np.sqrt(rho_l), np.sqrt(rho_r)
    rho_lsrs = rho_ls + rho_rs
    rho = rho_ls * rho_rs
    u = (rho_ls * ul + rho_rs * ur) / rho_lsrs
    v = (rho_ls * vl + rho_rs * vr) / rho_lsrs
    h = (rho_ls * hl + rho_rs * hr) / rho_lsrs
    c2 = gm1 * (h - 0.5 * (u * u + v * v))
    c = np.sqrt(c2)

    dp = pr - pl
    dw1 = -0.5 * (rho * (ur - ul)) / c + 0.5 * dp / c2
    dw2 = (rho_r - rho_l) - dp / c2
    dw3 = rho * (vr - vl)
    dw4 = 0.5 * (rho * (ur - ul)) / c + 0.5 * dp / c2
    dw1 = np.abs(u - c) * dw1
    dw2 = np.abs(u) * dw2
    dw3 = np.abs(u) * dw3
    dw4 = np.abs(u + c) * dw4

    diss = np.stack(
        [
            -0.5 * (dw1 + dw2 + dw4),
            -0.5 * (dw1 * (u - c) + dw2 * u + dw4 * (u + c)),
            -0.5 * (dw1 * v + dw2 * v + dw3 + dw4 * v),
            -0.5 * (dw1 * (h - u * c) + 0.5 * dw2 * (u * u + v * v) + dw3 * v + dw4 * (h + u * c)),
        ],
        axis=-1,
    )
    sides = (rho_ul_r, rho_vl_r, ul, pl), (rho_ur_r, rho_vr_r, ur, pr)
    return diss, sides


def _rotate_back(flux: np.ndarray, nx: float, ny: float) -> np.ndarray:
    out = flux.copy()
    f1, f2 = flux[..., 1], flux[..., 2]
    out[..., 1] = nx * f1 - ny * f2
    out[..., 2] = ny * f1 + nx * f2
    return out


def roe_flux(free_stream: FreeStream, q_left, q_right, normal) -> np.ndarray:
    """Roe flux computed entirely from the two face states."""
    q_left, q_right = _state(q_left), _state(q_right)
    nx, ny = (float(c) for c in normal)
    diss, (left, right) = _roe_dissipation(free_stream.gamma, q_left, q_right, nx, ny)
    rho_ul_r, rho_vl_r, ul, pl = left
    rho_ur_r, rho_vr_r, ur, pr = right
    central = np.stack(
        [
            0.5 * (rho_ul_r + rho_ur_r),
            0.5 * (rho_ul_r * ul + rho_ur_r * ur + pl + pr),
            0.5 * (rho_vl_r * ul + rho_vr_r * ur),
            0.5 * ((pl + q_left[..., 3]) * ul + (pr + q_right[..., 3]) * ur),
        ],
        axis=-1,
    )
    return _rotate_back(central + diss, nx, ny)


def roe_flux_interpolated(
    free_stream: FreeStream, q_left, q_right, flux_left, flux_right, normal
) -> np.ndarray:
    """Roe flux whose central part uses fluxes already interpolated to the face.

    ``flux_left`` and ``flux_right`` are ``(Fx, Fy)`` pairs.
    """
    q_left, q_right = _state(q_left), _state(q_right)
    nx, ny = (float(c) for c in normal)
    diss, _ = _roe_dissipation(free_stream.gamma, q_left, q_right, nx, ny)
    flux = _rotate_back(diss, nx, ny)
    n_left = nx * np.asarray(flux_left[0], float) + ny * np.asarray(flux_left[1], float)
    n_right = nx * np.asarray(flux_right[0], float) + ny * np.asarray(flux_right[1], float)
    return flux + 0.5 * (n_left + n_right)


def roe_er_flux(free_stream: FreeStream, q_left, q_right, normal) -> np.ndarray:
    """Roe-ER flux: Roe averaging with a rotated, entropy-fixed upwind term."""
    q_left, q_right = _state(q_left), _state(q_right)
    nx, ny = (float(c) for c in normal)
    gamma = free_stream.gamma
    gm1 = gamma - 1.0

    rho_l, rho_r = q_left[..., 0], q_right[..., 0]
    rho_ls, rho_rs = np.sqrt(rho_l), np.sqrt(rho_r)
    ul, vl = q_left[..., 1] / rho_l, q_left[..., 2] / rho_l
    ur, vr = q_right[..., 1] / rho_r, q_right[..., 2] / rho_r
    el, er = q_left[..., 3], q_right[..., 3]
    un_l, un_r = nx * ul + ny * vl, nx * ur + ny * vr
    pl, pr = _pressure(gamma, q_left), _pressure(gamma, q_right)
    hl, hr = el + pl, er + pr

    oors = 1.0 / (rho_ls + rho_rs)
    u = (rho_ls * ul + rho_rs * ur) * oors
    v = (rho_ls * vl + rho_rs * vr) * oors
    h = (hl + hr) * oors
    rho = rho_ls * rho_rs
    big_h = h * rho
    un = nx * u + ny * v
    c2 = gm1 * (h - 0.5 * (u * u + v * v))
    c = np.sqrt(c2)
    ooc = 1.0 / c
    un_abs = np.abs(un)

    flux = np.stack(
        [
            0.5 * (un_l * rho_l + un_r * rho_r),
            0.5 * (un_l * rho_l * ul + pl * nx + un_r * rho_r * ur + pr * nx),
            0.5 * (un_l * rho_l * vl + pl * ny + un_r * rho_r * vr + pr * ny),
            0.5 * (un_l * hl + un_r * hr),
        ],
        axis=-1,
    )

    u_ef = 0.05 * c
    du, dv = ur - ul, vr - vl
    delta_v2 = du * du + dv * dv
    with np.errstate(divide="ignore", invalid="ignore"):
        oo_vmag = 1.0 / np.sqrt(u * u + v * v)
        small = delta_v2 < 0.01 * c2
        n1x = np.where(small, nx, oo_vmag * du)
        n1y = np.where(small, ny, oo_vmag * dv)
    cross = nx * n1y - n1x * ny
    n2x, n2y = n1y * cross, -n1x * cross
    alp1 = nx * n1x + ny * n1y
    alp2 = nx * n2x + ny * n2y
    u1x, u1y = n1x * u, n1y * v
    u2x, u2y = n2x * u, n2y * v
    u_rot = np.sqrt(alp1 * alp1 * (u1x * u1x + u1y * u1y)) + np.sqrt(alp2 * alp2 * (u2x * u2x + u2y * u2y))
    sigma = np.maximum(un_abs, np.minimum(u_ef, u_rot))

    un_abs_prime = un_abs - 0.25 * np.maximum(0.0, un_r - un_l) * (np.abs(un + c) - np.abs(un - c))
    d_un = un_r - un_l
    d_p = pr - pl
    d_rho = rho_r - rho_l
    d_rho_u = rho_r * ur - rho_l * ul
    d_rho_v = rho_r * vr - rho_l * vl
    d_e = er - el
    dpu = rho * d_un * np.maximum(0.0, c - un_abs_prime)
    swt = np.abs(un) * np.minimum(un_abs_prime, c)
    dpp = swt * d_p * ooc
    duu = swt * d_un * ooc

    upwind = np.stack(
        [
            0.5 * (sigma * d_rho + duu * rho),
            0.5 * (sigma * d_rho_u + (dpu + dpp) * nx + duu * rho * u),
            0.5 * (sigma * d_rho_v + (dpu + dpp) * ny + duu * rho * v),
            0.5 * (sigma * d_e + (dpu + dpp) * ny + duu * big_h),
        ],
        axis=-1,
    )
    return flux - upwind