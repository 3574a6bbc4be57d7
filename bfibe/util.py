"""Integer and byte helpers shared by the field, curve and protocol code
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

from random import SystemRandom

import gmpy2

from bfibe.errors import NoInverseError

# Miller-Rabin rounds, error probability at most 4^-50
PRIME_CERTAINTY = 50

def default_rng():
    return SystemRandom()

def is_integer_type(x):
    return isinstance(x, int) and not isinstance(x, bool)

def byte_length(i):
    return (i.bit_length() // 8) + (1 if (i.bit_length() % 8) > 0 else 0)

def int_to_bytes(i, length):
    """
    Big-endian encoding of a non-negative integer, left padded with
    zero octets to exactly length bytes
    """
    if i < 0:
        raise ValueError("Only non-negative integers can be encoded")
    if byte_length(i) > length:
        raise ValueError("%d does not fit into %d bytes" % (i, length))
    return i.to_bytes(length, 'big')

def bytes_to_int(b):
    return int.from_bytes(b, 'big')

def random_int(lo, hi, rng):
    """ Uniform integer in [lo, hi) """
    if hi <= lo:
        raise ValueError("Empty range [%d, %d)" % (lo, hi))
    return rng.randrange(lo, hi)

def random_bytes(n, rng):
    if n == 0:
        return b''
    return rng.getrandbits(8 * n).to_bytes(n, 'big')

def xor_bytes(a, b):
    assert len(a) == len(b)
    return bytes(x ^ y for (x, y) in zip(a, b))

def bits_of(k):
    return [int(c) for c in "{0:b}".format(k)]

def to_naf(x, w = 2):
    """
    Width-w non-adjacent form of x, least significant digit first.
    Non-zero digits are odd and lie in (-2^(w-1), 2^(w-1)).
    """
    assert w >= 2
    mod = 1 << w
    half = 1 << (w - 1)
    z = []
    while x > 0:
        if x % 2 == 0:
            z.append(0)
        else:
            zi = x % mod
            if zi >= half:
                zi -= mod
            x -= zi
            z.append(zi)
        x = x // 2
    return z

def inverse_mod(a, n):
    try:
        return int(gmpy2.invert(a % n, n))
    except ZeroDivisionError as e:
        raise NoInverseError("%d has no inverse modulo %d" % (a, n)) from e

def is_probable_prime(n, certainty = PRIME_CERTAINTY):
    if n < 2:
        return False
    return bool(gmpy2.is_prime(n, certainty))
