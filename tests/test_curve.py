import pytest

from bfibe.curve import (affine_point, complex_affine_point, elliptic_curve,
                         type_one_curve)
from bfibe.fp2 import gfp_2
from bfibe.generation import mod3_generation_strategy

from conftest import TOY_COFACTOR, TOY_P, TOY_Q


def random_points(curve, rng, n):
    strategy = mod3_generation_strategy(curve, rng)
    return [strategy.generate(10) for i in range(n)]


def test_type_one_curve_requires_p_11_mod_12():
    curve = type_one_curve.of_order(83)
    assert (curve.a, curve.b, curve.p) == (0, 1, 83)

    for p in [7, 13, 97, 84000253]:
        with pytest.raises(ValueError):
            type_one_curve.of_order(p)


def test_type_one_curve_requires_positive_order():
    # -1 % 12 == 11 and -13 % 12 == 11
    for p in [-1, -13, 0]:
        with pytest.raises(ValueError):
            type_one_curve.of_order(p)
    with pytest.raises(AssertionError):
        type_one_curve.of_order(83.0)


def test_curve_equality():
    assert type_one_curve(83) == elliptic_curve(0, 1, 83)
    assert type_one_curve(83) != type_one_curve(107)


def test_infinity_is_a_distinct_variant():
    assert affine_point.INFINITY == affine_point.INFINITY
    assert affine_point.INFINITY == affine_point(5, 7, True)
    assert affine_point.INFINITY != affine_point(0, 0)
    assert affine_point(0, 0) != affine_point.INFINITY
    assert affine_point(1, 2) == affine_point(1, 2)
    assert affine_point.INFINITY.is_infinite()
    assert not affine_point(1, 2).is_infinite()


def test_points_are_immutable():
    with pytest.raises(AttributeError):
        affine_point(1, 2).x = 3


def test_small_curve_points(toy_curve):
    # (2, 3): 3^3 = 2^3 + 1
    pt = affine_point(2, 3)
    assert toy_curve.is_on_curve(pt)
    assert not toy_curve.is_on_curve(affine_point(2, 4))
    assert toy_curve.is_on_curve(affine_point.INFINITY)

    # (2, 3) has order 6 on y^2 = x^3 + 1
    assert pt.scalar_mul(6, toy_curve).is_infinite()
    assert not pt.scalar_mul(3, toy_curve).is_infinite()
    assert not pt.scalar_mul(2, toy_curve).is_infinite()


def test_two_torsion(toy_curve):
    # y = 0 gives a vertical tangent
    pt = affine_point(TOY_P - 1, 0)
    assert toy_curve.is_on_curve(pt)
    assert pt.double(toy_curve).is_infinite()


def test_group_laws(toy_curve, rng):
    a, b, c = random_points(toy_curve, rng, 3)
    inf = affine_point.INFINITY

    assert a.add(inf, toy_curve) == a
    assert inf.add(a, toy_curve) == a
    assert a.add(b, toy_curve) == b.add(a, toy_curve)
    assert a.add(b, toy_curve).add(c, toy_curve) == a.add(b.add(c, toy_curve), toy_curve)
    assert a.add(a, toy_curve) == a.double(toy_curve)
    assert a.add(a.negate(toy_curve), toy_curve).is_infinite()
    assert toy_curve.is_on_curve(a.add(b, toy_curve))
    assert toy_curve.is_on_curve(a.double(toy_curve))


def test_group_order(toy_curve, rng):
    for pt in random_points(toy_curve, rng, 5):
        assert pt.scalar_mul(TOY_P + 1, toy_curve).is_infinite()
        assert pt.scalar_mul(TOY_COFACTOR, toy_curve).scalar_mul(TOY_Q, toy_curve).is_infinite()


def test_scalar_mul(toy_curve, rng):
    pt, = random_points(toy_curve, rng, 1)

    assert pt.scalar_mul(0, toy_curve).is_infinite()
    assert pt.scalar_mul(1, toy_curve) == pt
    assert pt.scalar_mul(2, toy_curve) == pt.double(toy_curve)
    assert pt.scalar_mul(-5, toy_curve) == pt.scalar_mul(5, toy_curve).negate(toy_curve)
    assert affine_point.INFINITY.scalar_mul(12345, toy_curve).is_infinite()

    r = affine_point.INFINITY
    for k in range(40):
        assert pt.scalar_mul(k, toy_curve) == r
        r = r.add(pt, toy_curve)


def test_scalar_mul_distributes(toy_curve, rng):
    pt, = random_points(toy_curve, rng, 1)
    for i in range(10):
        a = rng.randrange(1, TOY_P)
        b = rng.randrange(1, TOY_P)
        lhs = pt.scalar_mul(a + b, toy_curve)
        rhs = pt.scalar_mul(a, toy_curve).add(pt.scalar_mul(b, toy_curve), toy_curve)
        assert lhs == rhs
        assert pt.scalar_mul(a * b, toy_curve) == pt.scalar_mul(a, toy_curve).scalar_mul(b, toy_curve)


def test_wnaf_matches_double_and_add(toy_curve, rng):
    pt, = random_points(toy_curve, rng, 1)

    assert pt.wnaf_mul(0, toy_curve).is_infinite()
    assert affine_point.INFINITY.wnaf_mul(7, toy_curve).is_infinite()

    scalars = list(range(1, 64)) + [rng.randrange(1, 1 << 64) for i in range(20)]
    for k in scalars:
        expected = pt.scalar_mul(k, toy_curve)
        assert pt.wnaf_mul(k, toy_curve) == expected
        for w in [2, 3, 5]:
            assert pt.wnaf_mul(k, toy_curve, w) == expected


def test_complex_points(toy_curve, rng):
    p = toy_curve.p
    pt, = random_points(toy_curve, rng, 1)
    c = complex_affine_point(gfp_2(pt.x), gfp_2(pt.y))
    inf = complex_affine_point.INFINITY

    assert inf == inf
    assert c != inf
    assert toy_curve.is_on_curve(c)
    assert not toy_curve.is_on_curve(complex_affine_point(gfp_2(pt.x), gfp_2(pt.y + 1)))

    # the real subgroup behaves exactly like the base field points
    for k in [2, 3, 17, 1000]:
        expected = pt.scalar_mul(k, toy_curve)
        got = c.scalar_mul(k, toy_curve)
        assert got == complex_affine_point(gfp_2(expected.x), gfp_2(expected.y))

    assert c.add(c.negate(toy_curve), toy_curve).is_infinite()
    assert c.add(inf, toy_curve) == c
    assert c.scalar_mul(0, toy_curve).is_infinite()
    assert c.negate(toy_curve).y == gfp_2(p - pt.y)
