"""Hashing and encoding primitives of RFC 5091 section 4
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

import enum
import hashlib

from bfibe.curve import affine_point
from bfibe.errors import ComponentConstructionError
from bfibe.fp2 import gfp_2
from bfibe.util import byte_length, bytes_to_int, int_to_bytes

class digest_factory:
    """
    A validated hash function name. Each call to new() or digest() uses a
    fresh hashlib object, so one factory can be shared between threads.
    """
    def __init__(self, name):
        self.name = name
        self._hashlib_name = _resolve(name)
        self.digest_size = hashlib.new(self._hashlib_name).digest_size
        if self.digest_size == 0:
            raise ValueError("Variable length hash functions are not supported")

    @classmethod
    def for_algorithm(cls, name):
        try:
            return cls(name)
        except ValueError as e:
            raise ComponentConstructionError("Unsupported hash function %r" % (name,)) from e

    def __repr__(self):
        return "digest_factory(%r)" % (self.name)

    def new(self, data = b''):
        return hashlib.new(self._hashlib_name, data)

    def digest(self, data):
        return self.new(data).digest()

def _resolve(name):
    # RFC spelling (SHA-256) or hashlib spelling (sha256)
    if not isinstance(name, str) or not name:
        raise ValueError("Hash function name must be a non-empty string")
    candidate = name.lower().replace('-', '')
    for n in (candidate, name.lower(), name):
        if n in hashlib.algorithms_available:
            return n
    # Let hashlib decide, it raises ValueError for unknown names
    hashlib.new(name)
    return name

def hash_to_range(s, n, hashfcn):
    """
    Algorithm 4.1.1 (HashToRange), an integer in [0, n)
    """
    hash_len = hashfcn.digest_size
    v = 0
    h = bytes(hash_len)
    for i in range(2):
        h = hashfcn.digest(h + s)
        a = bytes_to_int(h)
        v = pow(256, hash_len) * v + a
    return v % n

def hash_bytes(b, p, hashfcn):
    """
    Algorithm 4.2.1 (HashBytes), b pseudo-random octets from the seed p
    """
    k = hashfcn.digest(p)
    h = bytes(hashfcn.digest_size)
    r = b''
    while len(r) < b:
        h = hashfcn.digest(h)
        r += hashfcn.digest(h + k)
    return r[:b]

def hash_to_point(curve, p, q, identity, hashfcn):
    """
    Algorithm 4.4.1 (HashToPoint), a point of order q in E(F_p)
    """
    if isinstance(identity, str):
        identity = identity.encode('utf-8')

    y = hash_to_range(identity, p, hashfcn)
    # the unique cube root of y^2 - 1, since p = 2 mod 3
    x = pow((y * y - 1) % p, (2 * p - 1) // 3, p)
    q_prime = affine_point(x, y)
    return q_prime.scalar_mul((p + 1) // q, curve)

class canonical_ordering(enum.Enum):
    REAL_FIRST = 0
    IMAGINARY_FIRST = 1

def canonical(p, ordering, v):
    """
    Algorithm 4.3.1 (Canonical), fixed length big-endian encoding of an
    element of F_p^2
    """
    l = byte_length(p)
    real = int_to_bytes(v.real, l)
    imag = int_to_bytes(v.imag, l)

    if ordering == canonical_ordering.REAL_FIRST:
        return real + imag
    return imag + real

def canonical_decode(p, ordering, data):
    l = byte_length(p)
    if len(data) != 2 * l:
        raise ValueError("Expected %d bytes, got %d" % (2 * l, len(data)))

    first = bytes_to_int(data[:l])
    second = bytes_to_int(data[l:])

    if ordering == canonical_ordering.REAL_FIRST:
        return gfp_2(first, second)
    return gfp_2(second, first)
