import math

import numpy as np
import pytest

from eulerdg.fluids import new_free_stream
from eulerdg.fluxes import euler_flux
from eulerdg.riemann import roe_er_flux, roe_flux, roe_flux_interpolated

FS = new_free_stream(0.5, 1.4, 0.0)
NORMAL = (math.cos(0.3), math.sin(0.3))


def _state(rho, u, v, p, gamma=1.4):
    return np.array([rho, rho * u, rho * v, p / (gamma - 1.0) + 0.5 * rho * (u * u + v * v)])


def _normal_flux(q, normal):
    fx, fy = euler_flux(FS, q)
    return normal[0] * fx + normal[1] * fy


QL = _state(1.0, 0.4, 0.1, 1.0)
QR = _state(0.8, 0.2, -0.1, 0.7)


@pytest.mark.parametrize("solver", [roe_flux, roe_er_flux])
def test_consistent_with_physical_flux(solver):
    got = solver(FS, QL, QL, NORMAL)
    assert np.allclose(got, _normal_flux(QL, NORMAL), atol=1e-12)


def test_interpolated_consistent_with_physical_flux():
    flux = euler_flux(FS, QL)
    got = roe_flux_interpolated(FS, QL, QL, flux, flux, NORMAL)
    assert np.allclose(got, _normal_flux(QL, NORMAL), atol=1e-12)


def test_interpolated_matches_state_form_for_exact_fluxes():
    direct = roe_flux(FS, QL, QR, NORMAL)
    interp = roe_flux_interpolated(FS, QL, QR, euler_flux(FS, QL), euler_flux(FS, QR), NORMAL)
    assert np.allclose(direct, interp, atol=1e-12)


def test_roe_supersonic_upwinds_left_state():
    normal = (1.0, 0.0)
    ql = _state(1.0, 3.0, 0.2, 1.0)
    qr = _state(1.2, 3.2, 0.1, 1.1)
    got = roe_flux(FS, ql, qr, normal)
    assert np.allclose(got, _normal_flux(ql, normal), atol=1e-10)


def test_roe_adds_dissipation_for_different_states():
    got = roe_flux(FS, QL, QR, NORMAL)
    central = 0.5 * (_normal_flux(QL, NORMAL) + _normal_flux(QR, NORMAL))
    assert not np.allclose(got, central)


@pytest.mark.parametrize("solver", [roe_flux, roe_er_flux])
def test_vectorised_rows_match_single_points(solver):
    ql = np.stack([QL, QR, QL])
    qr = np.stack([QR, QL, QL])
    batch = solver(FS, ql, qr, NORMAL)
    assert batch.shape == (3, 4)
    for row, a, b in zip(batch, ql, qr):
        assert np.allclose(row, solver(FS, a, b, NORMAL))


@pytest.mark.parametrize("solver", [roe_flux, roe_er_flux])
def test_bad_state_shape_raises(solver):
    with pytest.raises(ValueError):
        solver(FS, [1.0, 0.0, 0.0], QR, NORMAL)