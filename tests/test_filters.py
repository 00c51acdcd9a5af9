import numpy as np
import pytest

from eulerdg.filters import (
    LimiterType,
    ModeAliasShockFinder,
    clipper_matrix,
    cutoff_filter,
    element_average,
    exponential_filter,
    limiter_psi,
    parse_limiter_type,
)


@pytest.mark.parametrize(
    "label, expected",
    [
        ("modefilter", LimiterType.MODE_FILTER),
        ("Mode Filter", LimiterType.MODE_FILTER),
        ("  BarthJesperson ", LimiterType.BARTH_JESPERSON),
        ("barth jesperson", LimiterType.BARTH_JESPERSON),
        ("PerssonC0", LimiterType.PERSSON_C0),
        ("persson c0", LimiterType.PERSSON_C0),
        ("", LimiterType.NONE),
    ],
)
def test_parse_limiter_type(label, expected):
    assert parse_limiter_type(label) is expected


def test_parse_limiter_type_unknown():
    with pytest.raises(ValueError):
        parse_limiter_type("bogus")


def test_limiter_describe():
    assert LimiterType.MODE_FILTER.describe() == "Modal Filter"
    assert LimiterType.BARTH_JESPERSON.describe() == "Barth Jesperson"
    assert LimiterType.PERSSON_C0.describe() == "Persson, C0 viscosity"
    assert LimiterType.NONE.describe() == "None"


def test_cutoff_filter_top_mode_order_two():
    diag = np.diag(cutoff_filter(2, 2, 0.0))
    assert diag.tolist() == [1.0, 1.0, 0.0, 1.0, 0.0, 0.0]


def test_cutoff_filter_frac_applies_from_cutoff():
    f = cutoff_filter(3, 2, 0.25)
    assert f.shape == (10, 10)
    diag = np.diag(f)
    assert set(diag.tolist()) == {1.0, 0.25}
    assert np.count_nonzero(f - np.diag(diag)) == 0


def test_exponential_filter_identity_when_no_range():
    assert np.array_equal(exponential_filter(3, 3, 2.0), np.eye(10))


def test_exponential_filter_damps_top_mode_to_eps():
    diag = np.diag(exponential_filter(4, 2, 4.0))
    assert diag[0] == 1.0
    assert diag[-1] == pytest.approx(2.2204e-16, rel=1e-6)
    assert np.all(diag <= 1.0) and np.all(diag > 0.0)


def test_clipper_matrix_identity_basis_gives_filter():
    f = cutoff_filter(2, 2, 0.0)
    c = clipper_matrix(np.eye(6), np.eye(6), np.diag(f))
    assert np.array_equal(c, f)


def test_clipper_matrix_cutoff_is_projection():
    rng = np.random.default_rng(3)
    v = rng.normal(size=(6, 6)) + 6 * np.eye(6)
    c = clipper_matrix(v, np.linalg.inv(v), cutoff_filter(2, 2, 0.0))
    assert np.allclose(c @ c, c)


def test_element_average_constant_and_columns():
    mass = np.array([1.0, 2.0, 3.0])
    assert element_average([4.0, 4.0, 4.0], mass) == pytest.approx(4.0)
    values = np.array([[1.0, 2.0], [1.0, 2.0], [1.0, 2.0]])
    assert np.allclose(element_average(values, np.diag(mass)), [1.0, 2.0])


def test_element_average_size_mismatch():
    with pytest.raises(ValueError):
        element_average([1.0, 2.0], [1.0, 1.0, 1.0])


def test_limiter_psi_flat_gradient_is_one():
    for corner in range(3):
        assert limiter_psi(corner, 0.0, 2.0, 1.0, 0.0, 0.0) == 1.0


def test_limiter_psi_limits_overshoot():
    assert limiter_psi(0, 0.0, 2.0, 1.0, -1.5, -1.5) == pytest.approx(0.5)


def test_limiter_psi_never_above_one():
    for corner in range(3):
        assert limiter_psi(corner, -100.0, 100.0, 0.0, 0.3, -0.2) == 1.0


def test_limiter_psi_bad_corner():
    with pytest.raises(ValueError):
        limiter_psi(3, 0.0, 1.0, 0.5, 1.0, 1.0)


def _finder(order=2, kappa=0.5, scale=1.0):
    npts = (order + 1) * (order + 2) // 2
    return ModeAliasShockFinder(order, scale * np.eye(npts), np.eye(npts), np.eye(npts), kappa)


def test_smooth_element_has_no_shock():
    sf = _finder()
    q = [1.0, 1.0, 0.0, 1.0, 0.0, 0.0]
    assert sf.moment(q) == 0.0
    assert sf.shock_indicator(q) == 1.0
    assert sf.has_shock(q) is False


def test_strong_top_mode_is_a_shock():
    sf = _finder(scale=10.0)
    q = [1.0, 0.0, 0.0, 0.0, 0.0, 0.0]
    assert sf.shock_indicator(q) == 0.0
    assert sf.has_shock(q) is True


def test_indicator_in_unit_interval_and_consistent():
    sf = _finder(order=1, kappa=5.0)
    rng = np.random.default_rng(7)
    for _ in range(20):
        q = rng.normal(size=3)
        sigma = sf.shock_indicator(q)
        assert 0.0 <= sigma <= 1.0
        assert sf.has_shock(q) == (sigma < 0.99)


def test_shock_finder_rejects_bad_input():
    with pytest.raises(ValueError):
        _finder(order=0)
    sf = _finder()
    with pytest.raises(ValueError):
        sf.moment([1.0, 2.0])