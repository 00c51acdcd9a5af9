"""Boundary conditions for far field and solid wall faces."""

from __future__ import annotations

import math
from typing import Sequence, Tuple

import numpy as np

from eulerdg.fluids import FlowFunction, FreeStream

State = Tuple[float, float, float, float]


def riemann_bc(free_stream: FreeStream, q_interior: Sequence[float], q_inf: Sequence[float], normal) -> State:
    """Boundary state from Riemann invariants normal to the face.

    Subsonic faces combine the outgoing and incoming invariants and take
    entropy and tangential velocity from the upwind side. Supersonic faces
    copy the whole upwind state.
    """
    rho_i, rho_u_i, rho_v_i, e_i = (float(v) for v in q_interior)
    rho_f, rho_u_f, rho_v_f, e_f = (float(v) for v in q_inf)
    nx, ny = (float(c) for c in normal)
    tx, ty = -ny, nx

    u_int, v_int = rho_u_i / rho_i, rho_v_i / rho_i
    vnorm_int = nx * u_int + ny * v_int

    if free_stream.minf > 1.0:
        if vnorm_int < 0:
            return (rho_f, rho_u_f, rho_v_f, e_f)
        return (rho_i, rho_u_i, rho_v_i, e_i)

    gamma = free_stream.gamma
    gm1 = gamma - 1.0
    oogm1 = 1.0 / gm1
    p_int = free_stream.flow_function(rho_i, rho_u_i, rho_v_i, e_i, FlowFunction.STATIC_PRESSURE)
    c_int = free_stream.flow_function(rho_i, rho_u_i, rho_v_i, e_i, FlowFunction.SOUND_SPEED)
    u_inf, v_inf = rho_u_f / rho_f, rho_v_f / rho_f

    vnorm_inf = nx * u_inf + ny * v_inf
    r_inf = vnorm_inf - 2.0 * free_stream.cinf * oogm1
    r_int = vnorm_int + 2.0 * c_int * oogm1
    vnorm = 0.5 * (r_int + r_inf)
    c = 0.25 * gm1 * (r_int - r_inf)

    if vnorm_int < 0:  # inflow
        vtang = tx * u_inf + ty * v_inf
        beta = free_stream.pinf / math.pow(rho_f, gamma)
    else:  # outflow
        vtang = tx * u_int + ty * v_int
        beta = p_int / math.pow(rho_i, gamma)

    u = vnorm * nx + vtang * tx
    v = vnorm * ny + vtang * ty
    rho = math.pow(c * c / (gamma * beta), oogm1)
    p = beta * math.pow(rho, gamma)
    return (rho, rho * u, rho * v, p * oogm1 + 0.5 * rho * (u * u + v * v))


def _edge_states(q_edge) -> np.ndarray:
    q = np.asarray(q_edge, dtype=float)
    if q.ndim == 1:
        q = q[None, :]
    if q.ndim != 2 or q.shape[1] != 4:
        raise ValueError(f"edge states must have shape (n, 4), got {q.shape}")
    return q


def far_field_bc(free_stream: FreeStream, q_edge, normal) -> np.ndarray:
    """Replace each edge state with the Riemann boundary state against the free stream."""
    states = _edge_states(q_edge)
    return np.array([riemann_bc(free_stream, q, free_stream.qinf, normal) for q in states])


def wall_flux(free_stream: FreeStream, q_edge, normal) -> np.ndarray:
    """Normal flux through a slip wall: only the pressure force on momentum."""
    states = _edge_states(q_edge)
    nx, ny = (float(c) for c in normal)
    flux = np.zeros_like(states)
    for row, q in zip(flux, states):
        p = free_stream.flow_function_state(q, FlowFunction.STATIC_PRESSURE)
        row[1] = nx * p
        row[2] = ny * p
    return flux