"""Artificial dissipation support: vertex aggregation, interpolation and viscosity.

The element viscosity follows Persson's modal sensor. Element values are
aggregated onto mesh vertices by taking the maximum over the surrounding
elements, then interpolated linearly inside each element to give a
continuous (C0) viscosity field.
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

from eulerdg.partition import PartitionMap

# Default width of the sensor ramp.
DEFAULT_KAPPA = 5.0

VertexEntry = Tuple[int, int, int]

# Reference triangle vertices (-1,-1), (1,-1), (-1,1), in the form used to
# solve for the barycentric weights: rows are [1, r, s] of the vertices.
_REFERENCE_VERTICES = np.array(
    [
        [1.0, 1.0, 1.0],
        [-1.0, 1.0, -1.0],
        [-1.0, -1.0, 1.0],
    ]
)


def _etov_array(etov) -> np.ndarray:
    etov = np.asarray(etov)
    if etov.ndim != 2 or etov.shape[1] != 3:
        shape = etov.shape if etov.ndim == 2 else (etov.size,)
        raise ValueError(f"element to vertex map should have shape (K, 3), got {shape}")
    return etov.astype(int)


def build_vertex_to_element(etov) -> List[VertexEntry]:
    """List ``(vertex, element, 0)`` for every element corner, grouped by vertex."""
    etov = _etov_array(etov)
    entries = [(int(vert), k, 0) for k, tri in enumerate(etov) for vert in tri]
    entries.sort(key=lambda entry: entry[0])
    return entries


def shard_vertex_to_element(vtoe: Sequence[VertexEntry], partitions: PartitionMap) -> List[List[VertexEntry]]:
    """Split a vertex-to-element list into shards without splitting a vertex group.

    Each entry of the result is ``(vertex, local element, shard number)``,
    where the element is addressed within the partition that owns it.
    """
    npar = partitions.parallel_degree
    entries = list(vtoe)
    total = len(entries)
    approx_size = PartitionMap(npar, total).bucket_dimension(0)
    shards: List[List[VertexEntry]] = [[] for _ in range(npar)]

    def sharded(entry: VertexEntry) -> VertexEntry:
        vert, k, _ = entry
        k_local, _, bucket_num = partitions.local_k(int(k))
        return int(vert), k_local, bucket_num

    ib = 0
    for shard in shards:
        for _ in range(approx_size):
            if ib == total:
                return shards
            shard.append(sharded(entries[ib]))
            ib += 1
        if ib == total:
            return shards
        vnum = entries[ib][0]
        while ib < total and entries[ib][0] == vnum:
            shard.append(sharded(entries[ib]))
            ib += 1
    return shards


def shard_etov(etov, partitions: PartitionMap) -> List[np.ndarray]:
    """Split an element-to-vertex map into per-partition row blocks."""
    etov = _etov_array(etov)
    if etov.shape[0] != partitions.max_index:
        raise ValueError(
            f"element to vertex map has {etov.shape[0]} elements, partition map covers {partitions.max_index}"
        )
    return [etov[lo:hi].copy() for lo, hi in partitions.partitions]


def propagate_max_to_vertices(vtoe_shard: Sequence[VertexEntry], epsilon_scalar, eps_vertex) -> np.ndarray:
    """Set each vertex in the shard to the maximum viscosity of its elements.

    ``epsilon_scalar`` holds one array of element values per shard.
    ``eps_vertex`` is updated in place and returned.
    """
    old_vert = None
    for vert, k, thread in vtoe_shard:
        value = epsilon_scalar[thread][k]
        if vert == old_vert:
            eps_vertex[vert] = max(eps_vertex[vert], value)
        else:
            eps_vertex[vert] = value
            old_vert = vert
    return eps_vertex


def barycentric_coordinates(r, s) -> np.ndarray:
    """Barycentric weights of reference points, one row ``(l0, l1, l2)`` per point."""
    r = np.atleast_1d(np.asarray(r, dtype=float))
    s = np.atleast_1d(np.asarray(s, dtype=float))
    if r.shape != s.shape or r.ndim != 1:
        raise ValueError(f"r and s must be vectors of the same length, got {r.shape} and {s.shape}")
    rhs = np.vstack([np.ones_like(r), r, s])
    return np.linalg.solve(_REFERENCE_VERTICES, rhs).T


def linear_interpolate(r, s, values) -> np.ndarray:
    """Linear interpolation of three vertex values at reference points ``(r, s)``."""
    f0, f1, f2 = (float(v) for v in values)
    r = np.asarray(r, dtype=float)
    s = np.asarray(s, dtype=float)
    return (f1 - f0) * (r + 1.0) / 2.0 + (f2 - f0) * (s + 1.0) / 2.0 + f0


def persson_moment(u, clipper, mass_diag) -> float:
    """Mass weighted energy of ``u - clipper @ u`` relative to that of ``u``."""
    u = np.asarray(u, dtype=float)
    clipper = np.asarray(clipper, dtype=float)
    weights = np.asarray(mass_diag, dtype=float)
    if weights.ndim == 2:
        weights = np.diag(weights)
    if u.ndim != 1 or clipper.shape != (u.size, u.size) or weights.shape != u.shape:
        raise ValueError(
            f"inconsistent shapes: values {u.shape}, clipper {clipper.shape}, mass {weights.shape}"
        )
    diff = u - clipper @ u
    return float(np.sum(weights * diff * diff)) / float(np.sum(weights * u * u))


def element_viscosity(
    sensor: float,
    max_edge_length: float,
    order: int,
    s0: Optional[float] = None,
    kappa: float = DEFAULT_KAPPA,
) -> float:
    """Viscosity of one element from the log10 of its Persson moment.

    The viscosity ramps smoothly from 0 to ``0.75 * max_edge_length / order``
    across ``[s0 - kappa, s0 + kappa]``; ``s0`` defaults to ``4 / order**4``.
    """
    if order < 1:
        raise ValueError(f"polynomial order must be at least 1, got {order}")
    if kappa <= 0:
        raise ValueError(f"kappa must be positive, got {kappa}")
    if s0 is None:
        s0 = 4.0 / math.pow(order, 4)
    eps0 = 0.75 * max_edge_length / order
    left, right = s0 - kappa, s0 + kappa
    if sensor < left:
        return 0.0
    if sensor > right:
        return eps0
    return 0.5 * eps0 * (1.0 + math.sin(math.pi * (0.5 / kappa) * (sensor - s0)))