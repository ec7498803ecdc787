import pytest

from histofractal.iterators import pick_recurrence
from histofractal.utils import clamp, parse_complex


@pytest.mark.parametrize(
    "s, expected",
    [
        ("-0.787+0.25j", complex(-0.787, 0.25)),
        ("0.3-0.5j", complex(0.3, -0.5)),
        (" -0.787 , 0.25 ", complex(-0.787, 0.25)),
        ("(1.5, -2)", complex(1.5, -2.0)),
        ("2j", complex(0.0, 2.0)),
        ("-1.25", complex(-1.25, 0.0)),
        ("1e-3", complex(0.001, 0.0)),
    ],
)
def test_parse_complex(s, expected):
    assert parse_complex(s) == expected


def test_clamp():
    assert clamp(300, 0, 255) == 255
    assert clamp(-4, 0, 255) == 0
    assert clamp(17, 0, 255) == 17


def test_pick_recurrence():
    assert pick_recurrence("Mandelbrot")(1 + 1j, 0.5) == (1 + 1j) ** 2 + 0.5
    assert pick_recurrence("tricorn")(1 + 1j, 0) == -2j
    assert pick_recurrence("exp")(0j, 1j) == 1 + 1j
    with pytest.raises(ValueError):
        pick_recurrence("julia")
