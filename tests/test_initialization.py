import numpy as np
import pytest

from eulerdg.fluids import new_free_stream
from eulerdg.initialization import InitType, freestream_solution, parse_init_type


@pytest.mark.parametrize(
    "label, expected",
    [
        ("freestream", InitType.FREESTREAM),
        ("Freestream", InitType.FREESTREAM),
        ("IVortex", InitType.IVORTEX),
        ("SHOCKTUBE", InitType.SHOCKTUBE),
    ],
)
def test_parse_init_type(label, expected):
    assert parse_init_type(label) is expected


def test_parse_empty_label_raises():
    with pytest.raises(ValueError, match="empty init type"):
        parse_init_type("")


def test_parse_unknown_label_raises():
    with pytest.raises(ValueError, match="unable to use init type named vortex"):
        parse_init_type("Vortex")


def test_describe():
    assert InitType.FREESTREAM.describe() == "Freestream"
    assert InitType.SHOCKTUBE.describe() == "Shock Tube"
    assert InitType.IVORTEX.describe() == "Inviscid Vortex Analytic Solution"


def test_freestream_solution_fills_each_component():
    fs = new_free_stream(0.8, 1.4, 2.0)
    q = freestream_solution(fs, 6, 9)
    assert len(q) == 4
    for component, value in zip(q, fs.qinf):
        assert component.shape == (6, 9)
        assert np.all(component == value)


def test_freestream_components_are_independent():
    fs = new_free_stream(0.5, 1.4, 0.0)
    q = freestream_solution(fs, 3, 2)
    q[0][0, 0] = -1.0
    assert q[1][0, 0] == fs.qinf[1]
    assert q[0][1, 1] == fs.qinf[0]


def test_freestream_negative_dimension_raises():
    fs = new_free_stream(0.5, 1.4, 0.0)
    with pytest.raises(ValueError):
        freestream_solution(fs, -1, 3)