import math
from decimal import Decimal

import pytest

from cmforge.core.requests import RawMatrix, Rotate, Scale, Skew, Translate


def test_rotate_90():
    assert Rotate(90).matrix() == pytest.approx((0, 1, -1, 0, 0, 0), abs=1e-12)


def test_rotate_is_periodic():
    assert Rotate(390).matrix() == pytest.approx(Rotate(30).matrix(), abs=1e-12)
    assert Rotate(-330).matrix() == pytest.approx(Rotate(30).matrix(), abs=1e-12)


def test_rotate_non_finite_angle_gives_non_finite_matrix():
    assert not Rotate(math.inf).matrix().is_finite()
    assert not Rotate(math.nan).matrix().is_finite()


def test_translate():
    assert Translate(10, -20).matrix() == (1, 0, 0, 1, 10, -20)


@pytest.mark.parametrize("factor", [2, 0, -1.5])
def test_scale_is_uniform(factor):
    assert Scale(factor).matrix() == (factor, 0, 0, factor, 0, 0)


def test_skew():
    m = Skew(45, 0).matrix()
    assert m == pytest.approx((1, 1, 0, 1, 0, 0))


@pytest.mark.parametrize("angle", [90, -90, 270, 450])
def test_skew_asymptote_is_infinite(angle):
    assert Skew(angle, 0).matrix()[1] == math.inf
    assert Skew(0, angle).matrix()[2] == math.inf


def test_raw_matrix_passthrough():
    assert RawMatrix(1, 2, 3, 4, 5, 6).matrix() == (1, 2, 3, 4, 5, 6)


def test_requests_are_immutable():
    with pytest.raises(AttributeError):
        Rotate(30).angle = 45


@pytest.mark.parametrize("angle", [1.8e20, 180, -360, 10**400 * 180])
def test_skew_at_multiples_of_180_is_flat(angle):
    assert Skew(angle, 0).matrix()[1] == pytest.approx(0, abs=1e-6)


@pytest.mark.parametrize("angle", [Decimal(-90), Decimal("270"), 10**400 * 180 + 90])
def test_skew_asymptote_for_exact_angles(angle):
    assert Skew(angle, 0).matrix()[1] == math.inf


def test_rotate_huge_exact_angles_reduce_exactly():
    assert Rotate(10**400 * 360 + 90).matrix() == pytest.approx((0, 1, -1, 0, 0, 0), abs=1e-12)
    # 10**400 is 280 modulo 360
    assert Rotate(Decimal("1e400")).matrix() == pytest.approx(Rotate(280).matrix(), abs=1e-12)
