"""Sampling along a line and point location within a triangle mesh."""

from __future__ import annotations

from typing import Tuple

import numpy as np

# Offset keeping the end samples strictly inside the [0, 1] domain.
END_OFFSET = 0.00001


def sample_locations(n_points: int) -> np.ndarray:
    """Equally spaced samples across [0, 1], with the ends nudged inwards."""
    if n_points < 2:
        raise ValueError(f"need at least 2 sample points, got {n_points}")
    locations = np.arange(n_points, dtype=float) / float(n_points - 1)
    locations[0] += END_OFFSET
    locations[-1] -= END_OFFSET
    return locations


def locate_in_triangles(x: float, y: float, vx, vy, etov) -> Tuple[int, float, float]:
    """Find the first triangle holding point ``(x, y)``.

    Returns ``(element, r, s)`` where the point is ``A + r*(C - A) + s*(B - A)``
    for the element's vertices ``A, B, C`` in order.
    """
    vx = np.asarray(vx, dtype=float)
    vy = np.asarray(vy, dtype=float)
    etov = np.asarray(etov)
    if etov.ndim != 2 or etov.shape[1] != 3:
        raise ValueError(f"element to vertex map must have shape (K, 3), got {etov.shape}")
    for k, tri in enumerate(etov.astype(int)):
        ax, ay = vx[tri[0]], vy[tri[0]]
        v0 = (vx[tri[2]] - ax, vy[tri[2]] - ay)
        v1 = (vx[tri[1]] - ax, vy[tri[1]] - ay)
        v2 = (x - ax, y - ay)
        dot00 = v0[0] * v0[0] + v0[1] * v0[1]
        dot01 = v0[0] * v1[0] + v0[1] * v1[1]
        dot02 = v0[0] * v2[0] + v0[1] * v2[1]
        dot11 = v1[0] * v1[0] + v1[1] * v1[1]
        dot12 = v1[0] * v2[0] + v1[1] * v2[1]
        denom = dot00 * dot11 - dot01 * dot01
        if denom == 0:
            continue
        r = (dot11 * dot02 - dot01 * dot12) / denom
        s = (dot00 * dot12 - dot01 * dot02) / denom
        if r >= 0 and s >= 0 and r + s <= 1.0:
            return k, float(r), float(s)
    raise ValueError(f"unable to find point within elements: [{x:5.3f},{y:5.3f}]")