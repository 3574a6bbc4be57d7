"""Random primes and curve points for system setup
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

from bfibe.curve import affine_point
from bfibe.util import default_rng, is_probable_prime, random_int

logger = logging.getLogger(__name__)

class solinas_prime_factory:
    """
    Searches for primes of the form 2^n - 2^i - 1.

    Each attempt picks a random end for the next scan window above the
    previous one and tries every i in the window, top down.
    """
    def __init__(self, rng = None):
        self.rng = rng if rng is not None else default_rng()

    def generate(self, bits, attempts):
        if bits < 3:
            raise ValueError("The number of bits must be at least 3")
        if attempts < 1:
            raise ValueError("Attempt limit must be at least 1")

        top = 1
        for attempt in range(attempts):
            last = top
            # i = bits - 1 would leave a (bits - 1)-bit number
            top = random_int(last, bits - 1, self.rng)

            for i in range(top, last - 1, -1):
                candidate = pow(2, bits) - pow(2, i) - 1
                if is_probable_prime(candidate):
                    logger.debug("Solinas prime 2^%d - 2^%d - 1 found after %d attempts",
                                 bits, i, attempt + 1)
                    return candidate

        logger.warning("No %d-bit Solinas prime found in %d attempts", bits, attempts)
        return None

class point_generation_strategy:
    """
    Produces random points of E(F_p). Subclasses supply next_point(), which
    may return a candidate that is not on the curve; generate() filters
    those out.
    """
    def __init__(self, curve, rng = None):
        self.curve = curve
        self.rng = rng if rng is not None else default_rng()

    def next_point(self):
        raise NotImplementedError

    def random_field_element(self):
        return random_int(0, self.curve.p, self.rng)

    def generate(self, attempts):
        if attempts < 1:
            raise ValueError("Attempt limit must be at least 1")

        for attempt in range(attempts):
            point = self.next_point()
            if point is not None and self.curve.is_on_curve(point):
                return point
            logger.debug("Candidate point rejected (attempt %d)", attempt + 1)

        logger.warning("No curve point found in %d attempts", attempts)
        return None

class mod3_generation_strategy(point_generation_strategy):
    """
    For p = 2 mod 3 every element has a unique cube root, so a random y
    determines x = (y^2 - b)^((2p - 1)/3)
    """
    def next_point(self):
        p = self.curve.p
        y = self.random_field_element()
        x = pow((y * y - self.curve.b) % p, (2 * p - 1) // 3, p)
        return affine_point(x, y)
