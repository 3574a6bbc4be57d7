"""Arithmetic in the quadratic extension F_p^2 = F_p[i], i^2 = -1
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

from bfibe.errors import NoInverseError
from bfibe.util import bits_of, inverse_mod, is_integer_type

class gfp_2:
    """
    Represented as real + i*imag

    Elements are immutable and carry no modulus; every modular operation
    takes the field order p explicitly. The unbounded operators (+, -, *,
    //, %, **) work on the integer pair without any reduction.
    """
    __slots__ = ('real', 'imag')

    def __init__(self, real, imag = 0):
        assert is_integer_type(real) and is_integer_type(imag)
        object.__setattr__(self, 'real', real)
        object.__setattr__(self, 'imag', imag)

    def __setattr__(self, name, value):
        raise AttributeError("gfp_2 is immutable")

    def __repr__(self):
        return "(%d,%d)" % (self.real, self.imag)

    def __eq__(self, other):
        if not isinstance(other, gfp_2):
            return NotImplemented
        return self.real == other.real and self.imag == other.imag

    def __ne__(self, other):
        if not isinstance(other, gfp_2):
            return NotImplemented
        return self.real != other.real or self.imag != other.imag

    def __hash__(self):
        return hash((self.real, self.imag))

    def is_zero(self):
        return self.real == 0 and self.imag == 0

    def is_one(self):
        return self.real == 1 and self.imag == 0

    def reduce(self, p):
        return gfp_2(self.real % p, self.imag % p)

    def mod_add(self, other, p):
        return gfp_2((self.real + other.real) % p, (self.imag + other.imag) % p)

    def additive_inverse(self, p):
        return gfp_2(-self.real % p, -self.imag % p)

    def mod_sub(self, other, p):
        return self.mod_add(other.additive_inverse(p), p)

    def mod_add_scalar(self, s, p):
        # the imaginary part is left as is
        return gfp_2((self.real + s) % p, self.imag)

    def mod_mul_scalar(self, s, p):
        return gfp_2((self.real * s) % p, (self.imag * s) % p)

    def mod_mul(a, b, p):
        # (a + bi)(c + di) = (ac - bd) + (ad + bc)i
        r = a.real * b.real - a.imag * b.imag
        i = a.imag * b.real + a.real * b.imag
        return gfp_2(r % p, i % p)

    def mod_square(a, p):
        # Complex squaring
        t1 = a.real - a.imag
        t2 = a.real + a.imag
        return gfp_2((t1 * t2) % p, (2 * a.real * a.imag) % p)

    def conjugate(self, p):
        """
        For gamma = A + iB in F_p^2
        gamma^p = A - iB
        """
        return gfp_2(self.real % p, -self.imag % p)

    def mod_pow(self, k, p):
        assert is_integer_type(k)

        if k < 0:
            return self.inverse(p).mod_pow(-k, p)

        # the identity for every modulus, p == 1 included
        if k == 0:
            return gfp_2(1, 0)

        R = gfp_2(1, 0)
        base = self.reduce(p)
        for kb in bits_of(k):
            R = R.mod_square(p)
            if kb == 1:
                R = R.mod_mul(base, p)
        return R

    def inverse(self, p):
        c_r = self.real % p
        c_i = self.imag % p

        if c_r == 0 and c_i == 0:
            raise NoInverseError("(0, 0) does not have a multiplicative inverse")

        if c_i == 0:
            return gfp_2(inverse_mod(c_r, p))

        if c_r == 0:
            return gfp_2(0, -inverse_mod(c_i, p) % p)

        # y = -(c_i / c_r) * (c_r + c_i^2 / c_r)^-1
        # x = 1 / c_r + y * c_i / c_r
        r_inv = inverse_mod(c_r, p)
        t = (r_inv * -c_i) % p
        aux = (c_r + r_inv * c_i * c_i) % p

        if aux == 0:
            raise NoInverseError("%r does not have a multiplicative inverse" % (self,))

        y = (t * inverse_mod(aux, p)) % p
        x = (r_inv + y * r_inv * c_i) % p
        return gfp_2(x, y)

    def norm(self):
        return self.real * self.real + self.imag * self.imag

    def compare_to(self, other):
        """ Orders elements by real^2 + imag^2 """
        a = self.norm()
        b = other.norm()
        return (a > b) - (a < b)

    def __lt__(self, other):
        return self.compare_to(other) < 0

    def __neg__(self):
        return gfp_2(-self.real, -self.imag)

    def __add__(a, b):
        return gfp_2(a.real + b.real, a.imag + b.imag)

    def __sub__(a, b):
        return gfp_2(a.real - b.real, a.imag - b.imag)

    def __mul__(a, b):
        r = a.real * b.real - a.imag * b.imag
        i = a.imag * b.real + a.real * b.imag
        return gfp_2(r, i)

    def __floordiv__(a, b):
        # a * conj(b) / |b|^2, each part rounded towards -infinity
        denom = b.norm()
        if denom == 0:
            raise ZeroDivisionError("division by (0, 0)")
        r = a.real * b.real + a.imag * b.imag
        i = a.imag * b.real - a.real * b.imag
        return gfp_2(r // denom, i // denom)

    def __mod__(a, b):
        return a - (a // b) * b

    def __pow__(self, k):
        assert is_integer_type(k) and k >= 0
        R = gfp_2(1, 0)
        for i in range(k):
            R = R * self
        return R

gfp_2.ZERO = gfp_2(0, 0)
gfp_2.ONE = gfp_2(1, 0)
