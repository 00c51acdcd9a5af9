import math

import numpy as np
import pytest

from eulerdg.dissipation import (
    barycentric_coordinates,
    build_vertex_to_element,
    element_viscosity,
    linear_interpolate,
    persson_moment,
    propagate_max_to_vertices,
    shard_etov,
    shard_vertex_to_element,
)
from eulerdg.partition import PartitionMap

# Ten element mesh over ten vertices.
ETOV = np.array(
    [
        [0, 3, 4],
        [0, 1, 4],
        [1, 4, 5],
        [1, 2, 5],
        [2, 5, 6],
        [3, 4, 7],
        [4, 7, 8],
        [4, 5, 8],
        [5, 8, 9],
        [5, 6, 9],
    ]
)

EXPECTED_VTOE = [
    (0, 0, 0), (0, 1, 0), (1, 3, 0), (1, 1, 0), (1, 2, 0), (2, 4, 0), (2, 3, 0), (3, 5, 0),
    (3, 0, 0), (4, 2, 0), (4, 5, 0), (4, 6, 0), (4, 1, 0), (4, 0, 0), (4, 7, 0), (5, 4, 0),
    (5, 3, 0), (5, 9, 0), (5, 8, 0), (5, 2, 0), (5, 7, 0), (6, 4, 0), (6, 9, 0), (7, 5, 0),
    (7, 6, 0), (8, 8, 0), (8, 6, 0), (8, 7, 0), (9, 8, 0), (9, 9, 0),
]


def test_vertex_to_element_matches_mesh():
    vtoe = build_vertex_to_element(ETOV)
    assert sorted(vtoe) == sorted(EXPECTED_VTOE)
    verts = [entry[0] for entry in vtoe]
    assert verts == sorted(verts)


def test_vertex_to_element_rejects_bad_shape():
    with pytest.raises(ValueError):
        build_vertex_to_element(np.zeros((4, 2)))


@pytest.mark.parametrize("npar", [1, 3, 5, 7, 9])
def test_shard_keeps_vertex_groups(npar):
    pm = PartitionMap(npar, len(ETOV))
    vtoe = build_vertex_to_element(ETOV)
    shards = shard_vertex_to_element(vtoe, pm)
    assert len(shards) == npar
    flat = [entry for shard in shards for entry in shard]
    assert flat[-1][0] == 9
    assert [e[0] for e in flat] == [e[0] for e in vtoe]
    assert [pm.global_k(k, bn) for _, k, bn in flat] == [e[1] for e in vtoe]
    owners = {}
    for num, shard in enumerate(shards):
        for vert, _, _ in shard:
            assert owners.setdefault(vert, num) == num


@pytest.mark.parametrize("npar", [1, 2, 3, 4])
def test_propagate_max_to_vertices(npar):
    pm = PartitionMap(npar, len(ETOV))
    shards = shard_vertex_to_element(build_vertex_to_element(ETOV), pm)
    epsilon_scalar = [
        np.array([float(pm.global_k(k, np_)) for k in range(pm.bucket_dimension(np_))])
        for np_ in range(npar)
    ]
    eps_vertex = np.zeros(10)
    for shard in shards:
        propagate_max_to_vertices(shard, epsilon_scalar, eps_vertex)
    assert eps_vertex.tolist() == [1, 3, 4, 5, 7, 9, 9, 6, 8, 9]


def test_shard_etov_round_trip():
    pm = PartitionMap(3, len(ETOV))
    shards = shard_etov(ETOV, pm)
    assert [len(s) for s in shards] == [pm.bucket_dimension(n) for n in range(3)]
    assert np.array_equal(np.vstack(shards), ETOV)


def test_shard_etov_rejects_mismatch():
    with pytest.raises(ValueError):
        shard_etov(ETOV, PartitionMap(2, 7))


def test_barycentric_coordinates_at_vertices_and_invariants():
    lam = barycentric_coordinates([-1.0, 1.0, -1.0], [-1.0, -1.0, 1.0])
    assert np.allclose(lam, np.eye(3))
    r = np.array([-1.0 / 3.0, 0.2, -0.5])
    s = np.array([-1.0 / 3.0, -0.7, 0.1])
    lam = barycentric_coordinates(r, s)
    assert np.allclose(lam.sum(axis=1), 1.0)
    assert np.allclose(lam @ np.array([-1.0, 1.0, -1.0]), r)
    assert np.allclose(lam @ np.array([-1.0, -1.0, 1.0]), s)


def test_barycentric_rejects_mismatched_lengths():
    with pytest.raises(ValueError):
        barycentric_coordinates([0.0, 0.1], [0.0])


def test_linear_interpolate_agrees_with_barycentric():
    values = (2.0, 5.0, -1.0)
    assert np.allclose(linear_interpolate([-1.0, 1.0, -1.0], [-1.0, -1.0, 1.0], values), values)
    r = np.array([-0.3, 0.4, -0.9])
    s = np.array([0.1, -0.8, 0.5])
    expected = barycentric_coordinates(r, s) @ np.array(values)
    assert np.allclose(linear_interpolate(r, s, values), expected)


def test_persson_moment_limits():
    u = np.array([1.0, 2.0, 3.0])
    mass = np.array([1.0, 2.0, 1.0])
    assert persson_moment(u, np.eye(3), mass) == pytest.approx(0.0)
    assert persson_moment(u, np.zeros((3, 3)), np.diag(mass)) == pytest.approx(1.0)
    half = persson_moment(u, 0.5 * np.eye(3), mass)
    assert half == pytest.approx(0.25)


def test_persson_moment_rejects_bad_shapes():
    with pytest.raises(ValueError):
        persson_moment([1.0, 2.0], np.eye(3), [1.0, 1.0])


def test_element_viscosity_ramp():
    order, length, kappa = 2, 0.5, 1.0
    s0 = 4.0 / order**4
    eps0 = 0.75 * length / order
    assert element_viscosity(s0 - 2.0, length, order, s0, kappa) == 0.0
    assert element_viscosity(s0 + 2.0, length, order, s0, kappa) == pytest.approx(eps0)
    assert element_viscosity(s0, length, order, s0, kappa) == pytest.approx(0.5 * eps0)
    assert element_viscosity(s0, length, order) == pytest.approx(0.5 * eps0)
    samples = [element_viscosity(x, length, order, s0, kappa) for x in np.linspace(s0 - 1, s0 + 1, 21)]
    assert all(a <= b + 1e-15 for a, b in zip(samples, samples[1:]))
    assert samples[0] == pytest.approx(0.0) and samples[-1] == pytest.approx(eps0)


def test_element_viscosity_rejects_bad_order():
    with pytest.raises(ValueError):
        element_viscosity(-math.inf, 1.0, 0)