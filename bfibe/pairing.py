"""Modified Tate pairing on Type-1 curves (RFC 5091 section 4.5)
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

import logging
from collections import namedtuple
from functools import reduce

from bfibe.curve import affine_point, complex_affine_point, type_one_curve
from bfibe.errors import ComponentConstructionError
from bfibe.fp2 import gfp_2

logger = logging.getLogger(__name__)

EMBEDDING_DEGREE = 2
MINIMAL_EMBEDDING_DEGREE = 2

class xi_distortion_map:
    """
    phi(x, y) = (xi * x, y) where xi is a primitive cube root of unity in
    F_p^2, mapping E(F_p) onto a linearly independent subgroup
    """
    def __init__(self, curve):
        self.curve = curve
        self.xi = self._precompute_xi()

    def _precompute_xi(self):
        p = self.curve.p
        # xi = (p - 1)/2 * (1 + 3^((p + 1)/4) i), i.e. (-1 + sqrt(-3))/2
        a_xi = (p - 1) // 2
        b_xi = pow(3, (p + 1) // 4, p)
        return gfp_2(1, b_xi).mod_mul_scalar(a_xi, p)

    def apply(self, point):
        if point.is_infinite():
            return complex_affine_point.INFINITY

        x = self.xi.mod_mul_scalar(point.x, self.curve.p)
        return complex_affine_point(x, gfp_2(point.y))

def evaluate_vertical(curve, a, b):
    """ Vertical line through a, evaluated at b: x_B - x_A """
    if a.is_infinite():
        return gfp_2.ONE
    return b.x.mod_add_scalar(-a.x % curve.p, curve.p)

def evaluate_tangent(curve, a, b):
    """ Tangent to the curve at a, evaluated at b """
    if b.is_infinite():
        raise ValueError("B must not be infinity")

    if a.is_infinite():
        return gfp_2.ONE

    if a.y == 0:
        return evaluate_vertical(curve, a, b)

    p = curve.p

    # l_a = -3 x_A^2 - a (the curve coefficient)
    l_a = (-3 * a.x * a.x - curve.a) % p
    # l_b = 2 y_A
    l_b = (2 * a.y) % p
    # l_c = -l_b y_A - l_a x_A
    l_c = (-l_b * a.y - l_a * a.x) % p

    # l_a x_B + l_b y_B + l_c
    a_x = b.x.mod_mul_scalar(l_a, p)
    b_y = b.y.mod_mul_scalar(l_b, p)
    return a_x.mod_add(b_y, p).mod_add_scalar(l_c, p)

def evaluate_line(curve, a, a2, b):
    """ Line through a and a2, evaluated at b """
    if b.is_infinite():
        raise ValueError("B must not be infinity")

    if a.is_infinite():
        return evaluate_vertical(curve, a2, b)

    if a2.is_infinite():
        return evaluate_vertical(curve, a, b)

    # tangent covers a == a2, including the 2-torsion case y = 0
    if a == a2:
        return evaluate_tangent(curve, a, b)

    # a2 = -a, the line is vertical
    if a.x == a2.x:
        return evaluate_vertical(curve, a, b)

    p = curve.p

    # l_a = y_A - y_A2
    l_a = (a.y - a2.y) % p
    # l_b = x_A2 - x_A
    l_b = (a2.x - a.x) % p
    # l_c = -l_b y_A - l_a x_A
    l_c = (-l_b * a.y - l_a * a.x) % p

    a_x = b.x.mod_mul_scalar(l_a, p)
    b_y = b.y.mod_mul_scalar(l_b, p)
    return a_x.mod_add(b_y.mod_add_scalar(l_c, p), p)

miller_state = namedtuple('miller_state', ['f', 'v'])

class type_one_miller:
    """
    Miller's algorithm in the affine formulation of the Stanford notes
    http://crypto.stanford.edu/pbc/notes/ep/miller.html

    V starts at P, which accounts for the leading bit of q; the remaining
    bits are consumed from most to least significant, each one doubling
    V and adding P when the bit is set. Every step produces a fresh
    (f, V) state.
    """
    def __init__(self, curve, q):
        self.curve = curve
        self.q = q
        self.bits = [(self.q >> i) & 1 for i in range(self.q.bit_length() - 2, -1, -1)]

    def _double_step(self, state, point_p, point_q):
        # f = f^2 * g_{V,V}(Q) / g_{2V,-2V}(Q)
        p = self.curve.p
        v2 = state.v.double(self.curve)
        num = evaluate_tangent(self.curve, state.v, point_q)
        den = evaluate_vertical(self.curve, v2, point_q)
        f = state.f.mod_square(p).mod_mul(num.mod_mul(den.inverse(p), p), p)
        return miller_state(f, v2)

    def _add_step(self, state, point_p, point_q):
        # f = f * g_{V,P}(Q) / g_{V+P,-(V+P)}(Q)
        p = self.curve.p
        vp = state.v.add(point_p, self.curve)
        num = evaluate_line(self.curve, state.v, point_p, point_q)
        den = evaluate_vertical(self.curve, vp, point_q)
        f = state.f.mod_mul(num.mod_mul(den.inverse(p), p), p)
        return miller_state(f, vp)

    def evaluate(self, point_p, point_q):
        assert type(point_p) == affine_point
        assert type(point_q) == complex_affine_point

        def step(state, bit):
            state = self._double_step(state, point_p, point_q)
            if bit == 1:
                state = self._add_step(state, point_p, point_q)
            return state

        return reduce(step, self.bits, miller_state(gfp_2.ONE, point_p)).f

class tate_pairing:
    def __init__(self, miller, distortion_map, embedding_degree):
        if miller.curve != distortion_map.curve:
            raise ComponentConstructionError(
                "The Miller algorithm and the distortion map must use the same curve")

        if embedding_degree < MINIMAL_EMBEDDING_DEGREE:
            raise ComponentConstructionError(
                "The embedding degree must be at least %d" % (MINIMAL_EMBEDDING_DEGREE))

        self.miller = miller
        self.distortion_map = distortion_map
        self.embedding_degree = embedding_degree
        self.curve = miller.curve
        self.q = miller.q
        self.final_exponent = (pow(self.curve.p, embedding_degree) - 1) // self.q

    def perform_pairing(self, a, b):
        b_prime = self.distortion_map.apply(b)

        if b_prime.is_infinite():
            return gfp_2.ONE

        f = self.miller.evaluate(a, b_prime)
        return self.final_exponentiation(f)

    def final_exponentiation(self, f):
        return f.mod_pow(self.final_exponent, self.curve.p)

def type_one_tate_pairing(curve, q):
    if not isinstance(curve, type_one_curve):
        raise ComponentConstructionError("A Type-1 curve is required, got %r" % (curve,))

    if (pow(curve.p, EMBEDDING_DEGREE) - 1) % q != 0:
        raise ComponentConstructionError(
            "The subgroup of order %d does not have embedding degree %d" % (q, EMBEDDING_DEGREE))

    logger.debug("Tate pairing over %d-bit field, %d-bit subgroup",
                 curve.p.bit_length(), q.bit_length())

    return tate_pairing(type_one_miller(curve, q), xi_distortion_map(curve), EMBEDDING_DEGREE)
