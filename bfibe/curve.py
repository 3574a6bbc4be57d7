"""Affine points on short Weierstrass curves y^2 = x^3 + ax + b over F_p and F_p^2
(C) 2017 Jack Lloyd <jack@randombit.net>

Redistribution and use in source and binary forms, with or without
modification, are permitted provided that the following conditions are
met:

1. Redistributions of source code must retain the above copyright
notice, this list of conditions and the following disclaimer.

2. Redistributions in binary form must reproduce the above copyright
notice, this list of conditions and the following disclaimer in the
documentation and/or other materials provided with the distribution.

THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS
"AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT
LIMITED TO, THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR
A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT
HOLDER OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL,
SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT
LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE,
DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY
THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT
(INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE
OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
"""

from bfibe.fp2 import gfp_2
from bfibe.util import bits_of, inverse_mod, is_integer_type, to_naf

WNAF_WINDOW = 4

class elliptic_curve:
    def __init__(self, a, b, p):
        assert is_integer_type(a) and is_integer_type(b) and is_integer_type(p)
        self.a = a
        self.b = b
        self.p = p

    def __repr__(self):
        return "y^2 = x^3 + %dx + %d mod %d" % (self.a, self.b, self.p)

    def __eq__(self, other):
        if not isinstance(other, elliptic_curve):
            return NotImplemented
        return (self.a, self.b, self.p) == (other.a, other.b, other.p)

    def __hash__(self):
        return hash((self.a, self.b, self.p))

    def is_on_curve(self, point):
        if point.is_infinite():
            return True

        p = self.p
        if isinstance(point, complex_affine_point):
            yy = point.y.mod_square(p)
            xxx = point.x.mod_square(p).mod_mul(point.x, p)
            rhs = xxx.mod_add(point.x.mod_mul_scalar(self.a, p), p).mod_add_scalar(self.b, p)
            return yy == rhs

        yy = (point.y * point.y) % p
        xxx = (point.x * point.x * point.x + self.a * point.x + self.b) % p
        return yy == xxx

class type_one_curve(elliptic_curve):
    """
    The supersingular curve y^2 = x^3 + 1 over F_p with p = 11 mod 12,
    which has embedding degree 2
    """
    def __init__(self, p):
        assert is_integer_type(p)
        if p <= 0 or p % 12 != 11:
            raise ValueError("The field order must be congruent to 11 modulo 12")
        super().__init__(0, 1, p)

    @classmethod
    def of_order(cls, p):
        return cls(p)

class affine_point:
    """
    Either a finite point (x, y) in F_p x F_p or the point at infinity.

    The point at infinity is a distinct variant: it equals itself and no
    finite point, whatever coordinates it is stored with.
    """
    __slots__ = ('x', 'y', 'inf')

    def __init__(self, x, y, inf = False):
        assert is_integer_type(x) and is_integer_type(y)
        object.__setattr__(self, 'x', x)
        object.__setattr__(self, 'y', y)
        object.__setattr__(self, 'inf', inf)

    def __setattr__(self, name, value):
        raise AttributeError("affine_point is immutable")

    def __repr__(self):
        if self.inf:
            return "(inf)"
        return "(%d, %d)" % (self.x, self.y)

    def __eq__(self, other):
        if not isinstance(other, affine_point):
            return NotImplemented
        if self.inf or other.inf:
            return self.inf and other.inf
        return self.x == other.x and self.y == other.y

    def __ne__(self, other):
        r = self.__eq__(other)
        return r if r is NotImplemented else not r

    def __hash__(self):
        if self.inf:
            return hash(None)
        return hash((self.x, self.y))

    def is_infinite(self):
        return self.inf

    def negate(self, curve):
        if self.inf:
            return self
        return affine_point(self.x, -self.y % curve.p)

    def add(a, b, curve):
        return point_add(a, b, curve)

    def double(a, curve):
        return point_double(a, curve)

    def scalar_mul(self, k, curve):
        return point_scalar_mul(self, k, curve)

    def wnaf_mul(self, k, curve, w = WNAF_WINDOW):
        return point_wnaf_mul(self, k, curve, w)

affine_point.INFINITY = affine_point(0, 0, True)

def point_add(a, b, curve):
    if a.is_infinite():
        return b
    if b.is_infinite():
        return a

    p = curve.p

    # Equal points have to be checked before equal x coordinates,
    # otherwise P + P would come out as infinity
    if a == b:
        return point_double(a, curve)

    if a.x == b.x:
        return affine_point.INFINITY

    # m = (y_2 - y_1) / (x_2 - x_1)
    m = ((b.y - a.y) * inverse_mod(b.x - a.x, p)) % p

    c_x = (m * m - a.x - b.x) % p
    c_y = (m * (a.x - c_x) - a.y) % p
    return affine_point(c_x, c_y)

def point_double(a, curve):
    if a.is_infinite():
        return a

    # vertical tangent
    if a.y == 0:
        return affine_point.INFINITY

    p = curve.p

    # m = (3x^2 + a) / 2y
    m = ((3 * a.x * a.x + curve.a) * inverse_mod(2 * a.y, p)) % p

    c_x = (m * m - 2 * a.x) % p
    c_y = (m * (a.x - c_x) - a.y) % p
    return affine_point(c_x, c_y)

def point_scalar_mul(pt, k, curve):
    assert is_integer_type(k)

    if k < 0:
        return point_scalar_mul(pt.negate(curve), -k, curve)

    if k == 0 or pt.is_infinite():
        return pt.__class__.INFINITY

    R = pt.__class__.INFINITY
    for kb in bits_of(k):
        R = R.double(curve)
        if kb == 1:
            R = R.add(pt, curve)
    return R

def point_wnaf_mul(pt, k, curve, w = WNAF_WINDOW):
    """
    Window NAF scalar multiplication. The table holds the odd multiples
    +-1P, +-3P, ..., +-(2^(w-1) - 1)P, which is exactly the digit range
    produced by to_naf with the same width.
    """
    assert is_integer_type(k) and k >= 0

    if k == 0 or pt.is_infinite():
        return affine_point.INFINITY

    table = {}
    twice = pt.double(curve)
    odd = pt
    for d in range(1, 1 << (w - 1), 2):
        table[d] = odd
        table[-d] = odd.negate(curve)
        odd = odd.add(twice, curve)

    R = affine_point.INFINITY
    for digit in reversed(to_naf(k, w)):
        R = R.double(curve)
        if digit != 0:
            R = R.add(table[digit], curve)
    return R

class complex_affine_point:
    """
    Point with coordinates in F_p^2, used as the second pairing argument
    """
    __slots__ = ('x', 'y', 'inf')

    def __init__(self, x, y, inf = False):
        assert type(x) == gfp_2 and type(y) == gfp_2
        object.__setattr__(self, 'x', x)
        object.__setattr__(self, 'y', y)
        object.__setattr__(self, 'inf', inf)

    def __setattr__(self, name, value):
        raise AttributeError("complex_affine_point is immutable")

    def __repr__(self):
        if self.inf:
            return "(inf)"
        return "(%s, %s)" % (self.x, self.y)

    def __eq__(self, other):
        if not isinstance(other, complex_affine_point):
            return NotImplemented
        if self.inf or other.inf:
            return self.inf and other.inf
        return self.x == other.x and self.y == other.y

    def __ne__(self, other):
        r = self.__eq__(other)
        return r if r is NotImplemented else not r

    def __hash__(self):
        if self.inf:
            return hash(None)
        return hash((self.x, self.y))

    def is_infinite(self):
        return self.inf

    def negate(self, curve):
        if self.inf:
            return self
        return complex_affine_point(self.x, self.y.additive_inverse(curve.p))

    def add(a, b, curve):
        return complex_point_add(a, b, curve)

    def double(a, curve):
        return complex_point_double(a, curve)

    def scalar_mul(self, k, curve):
        return point_scalar_mul(self, k, curve)

complex_affine_point.INFINITY = complex_affine_point(gfp_2.ZERO, gfp_2.ZERO, True)

def complex_point_add(a, b, curve):
    if a.is_infinite():
        return b
    if b.is_infinite():
        return a

    if a == b:
        return complex_point_double(a, curve)

    if a.x == b.x:
        return complex_affine_point.INFINITY

    p = curve.p

    # m = (y_2 - y_1) / (x_2 - x_1)
    denom = b.x.mod_sub(a.x, p).inverse(p)
    m = b.y.mod_sub(a.y, p).mod_mul(denom, p)

    return _complex_chord(a, b.x, m, p)

def complex_point_double(a, curve):
    if a.is_infinite():
        return a

    if a.y.reduce(curve.p).is_zero():
        return complex_affine_point.INFINITY

    p = curve.p

    # m = (3x^2 + a) / 2y
    denom = a.y.mod_mul_scalar(2, p).inverse(p)
    num = a.x.mod_square(p).mod_mul_scalar(3, p).mod_add_scalar(curve.a, p)
    m = num.mod_mul(denom, p)

    return _complex_chord(a, a.x, m, p)

def _complex_chord(a, other_x, m, p):
    # x = m^2 - x_1 - x_2
    c_x = m.mod_square(p).mod_sub(a.x, p).mod_sub(other_x, p)
    # y = m(x_1 - x) - y_1
    c_y = m.mod_mul(a.x.mod_sub(c_x, p), p).mod_sub(a.y, p)
    return complex_affine_point(c_x, c_y)
