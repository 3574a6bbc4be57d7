"""Boneh-Franklin identity based encryption, RFC 5091 sections 5 and 6
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

from bfibe.curve import type_one_curve
from bfibe.domain import ciphertext_tuple, ibe_setup, private_key, public_parameters
from bfibe.errors import ComponentConstructionError, SetupError
from bfibe.generation import mod3_generation_strategy, solinas_prime_factory
from bfibe.hashing import (canonical, canonical_ordering, digest_factory,
                           hash_bytes, hash_to_point, hash_to_range)
from bfibe.pairing import type_one_tate_pairing
from bfibe.util import (default_rng, is_probable_prime, random_bytes,
                        random_int, xor_bytes)

logger = logging.getLogger(__name__)

PRIME_GENERATION_ATTEMPTS = 100
FIELD_PRIME_ATTEMPTS = 100000
POINT_GENERATION_ATTEMPTS = 100
GENERATOR_ATTEMPTS = 100

class boneh_franklin_initializer:
    """
    Generates a Type-1 curve E: y^2 = x^3 + 1 over F_p with p = 12rq - 1,
    a point P of prime order q, the master secret s and P_pub = [s]P
    """
    def __init__(self, rng = None, prime_factory = None, strategy_factory = None,
                 prime_attempts = PRIME_GENERATION_ATTEMPTS,
                 field_prime_attempts = FIELD_PRIME_ATTEMPTS,
                 point_attempts = POINT_GENERATION_ATTEMPTS,
                 generator_attempts = GENERATOR_ATTEMPTS):
        self.rng = rng if rng is not None else default_rng()
        self.prime_factory = prime_factory if prime_factory is not None else solinas_prime_factory(self.rng)
        if strategy_factory is None:
            strategy_factory = lambda curve: mod3_generation_strategy(curve, self.rng)
        self.strategy_factory = strategy_factory
        self.prime_attempts = prime_attempts
        self.field_prime_attempts = field_prime_attempts
        self.point_attempts = point_attempts
        self.generator_attempts = generator_attempts

    def setup(self, level):
        q_length = level.q_length
        p_length = level.p_length

        if p_length - q_length < 5:
            raise ValueError("The field must be at least 5 bits longer than the subgroup")

        # Select a random n_q-bit Solinas prime q
        q = self.prime_factory.generate(q_length, self.prime_attempts)
        if q is None:
            raise SetupError("Could not generate a %d-bit Solinas prime" % (q_length))

        # Select a random r such that p = 12rq - 1 is an n_p-bit prime
        r, p = self._field_prime(q, p_length)

        curve = type_one_curve.of_order(p)
        result = self.build_setup(curve, q, level.hash_function, 12 * r)

        logger.info("Setup complete: %d-bit field, %d-bit subgroup, %s",
                    p.bit_length(), q.bit_length(), level.hash_function)
        return result

    def _field_prime(self, q, p_length):
        lo = (pow(2, p_length - 1) + 12 * q) // (12 * q)
        hi = pow(2, p_length) // (12 * q)

        for attempt in range(self.field_prime_attempts):
            r = random_int(lo, hi + 1, self.rng)
            p = 12 * r * q - 1
            if p.bit_length() == p_length and is_probable_prime(p):
                logger.debug("Field prime found after %d attempts", attempt + 1)
                return r, p

        logger.warning("No %d-bit prime 12rq - 1 found in %d attempts",
                       p_length, self.field_prime_attempts)
        raise SetupError("Could not generate a %d-bit field prime" % (p_length))

    def build_setup(self, curve, q, hash_function, cofactor = None):
        """
        Completes setup over an already chosen curve and subgroup order:
        picks P of order q, the master secret and P_pub
        """
        if cofactor is None:
            cofactor = (curve.p + 1) // q

        strategy = self.strategy_factory(curve)

        for attempt in range(self.generator_attempts):
            point = strategy.generate(self.point_attempts)
            if point is None:
                raise SetupError("Could not generate a random curve point")

            point_p = point.scalar_mul(cofactor, curve)
            if not point_p.is_infinite():
                break
        else:
            logger.warning("Every generated point had order dividing the cofactor")
            raise SetupError("Could not generate a point of order %d" % (q))

        s = random_int(2, q, self.rng)
        point_p_public = point_p.scalar_mul(s, curve)

        params = public_parameters(curve, q, point_p, point_p_public, hash_function)
        return ibe_setup(params, s)

class boneh_franklin_client:
    def __init__(self, params, rng, digest, pairing):
        self.public_parameters = params
        self.rng = rng
        self.digest = digest
        self.pairing = pairing

    def encrypt(self, message, identity):
        """
        Algorithm 5.4.1 (BFencrypt), returns the ciphertext (U, V, W)
        """
        if message is None or identity is None:
            raise ValueError("Message and identity are required")
        if not message:
            raise ValueError("The message must not be empty")
        if not identity:
            raise ValueError("The identity must not be empty")

        params = self.public_parameters
        curve = params.curve
        p = curve.p
        hash_len = self.digest.digest_size

        m = message.encode('utf-8')

        q_id = hash_to_point(curve, p, params.q, identity, self.digest)

        rho = random_bytes(hash_len, self.rng)
        t = self.digest.digest(m)
        l = hash_to_range(rho + t, params.q, self.digest)

        u = params.point_p.scalar_mul(l, curve)

        theta = self.pairing.perform_pairing(params.point_p_public, q_id)
        theta_prime = theta.mod_pow(l, p)

        z = canonical(p, canonical_ordering.IMAGINARY_FIRST, theta_prime)
        w = self.digest.digest(z)

        v = xor_bytes(w, rho)
        w = xor_bytes(hash_bytes(len(m), rho, self.digest), m)

        return ciphertext_tuple(u, v, w)

    def decrypt(self, key, ciphertext):
        """
        Algorithm 5.5.1 (BFdecrypt), returns the plaintext or None if the
        ciphertext does not pass the integrity check
        """
        if key is None or ciphertext is None:
            raise ValueError("Private key and ciphertext are required")

        params = self.public_parameters
        curve = params.curve
        p = curve.p
        hash_len = self.digest.digest_size

        u, v, w = ciphertext

        if len(v) != hash_len or not curve.is_on_curve(u):
            logger.debug("Malformed ciphertext rejected")
            return None

        theta = self.pairing.perform_pairing(u, key.point)

        z = canonical(p, canonical_ordering.IMAGINARY_FIRST, theta)
        rho = xor_bytes(self.digest.digest(z), v)

        m = xor_bytes(hash_bytes(len(w), rho, self.digest), w)

        t = self.digest.digest(m)
        l = hash_to_range(rho + t, params.q, self.digest)

        if u != params.point_p.scalar_mul(l, curve):
            logger.debug("Ciphertext failed the integrity check")
            return None

        # invalid UTF-8 decodes to U+FFFD
        return m.decode('utf-8', errors='replace')

class boneh_franklin_private_key_generator:
    def __init__(self, params, master_secret, digest):
        self.public_parameters = params
        self.master_secret = master_secret
        self.digest = digest

    def extract(self, identity):
        """ Algorithm 5.3.1 (BFextractPriv), S_id = [s]Q_id """
        if identity is None:
            raise ValueError("The identity is required")

        params = self.public_parameters
        q_id = hash_to_point(params.curve, params.curve.p, params.q, identity, self.digest)
        return private_key(q_id.scalar_mul(self.master_secret, params.curve))

class boneh_franklin_component_factory:
    def __init__(self, rng = None):
        self.rng = rng if rng is not None else default_rng()

    def obtain_client(self, params):
        digest = digest_factory.for_algorithm(params.hash_function)
        pairing = type_one_tate_pairing(params.curve, params.q)
        return boneh_franklin_client(params, self.rng, digest, pairing)

    def obtain_private_key_generator(self, params, master_secret):
        digest = digest_factory.for_algorithm(params.hash_function)
        return boneh_franklin_private_key_generator(params, master_secret, digest)

class identity_based_encryption:
    """ A client and a private key generator over the same public parameters """
    def __init__(self, client, generator):
        self.client = client
        self.generator = generator

    @property
    def public_parameters(self):
        return self.client.public_parameters

    def encrypt(self, message, identity):
        return self.client.encrypt(message, identity)

    def decrypt(self, key, ciphertext):
        return self.client.decrypt(key, ciphertext)

    def extract(self, identity):
        return self.generator.extract(identity)

def setup(level, rng = None, **limits):
    return boneh_franklin_initializer(rng, **limits).setup(level)

def obtain_client(params, rng = None):
    return boneh_franklin_component_factory(rng).obtain_client(params)

def obtain_private_key_generator(params, master_secret):
    return boneh_franklin_component_factory().obtain_private_key_generator(params, master_secret)

def setup_boneh_franklin(level, rng = None):
    rng = rng if rng is not None else default_rng()
    try:
        result = setup(level, rng)
        factory = boneh_franklin_component_factory(rng)
        client = factory.obtain_client(result.public_parameters)
        generator = factory.obtain_private_key_generator(result.public_parameters,
                                                         result.master_secret)
    except ComponentConstructionError as e:
        raise SetupError("Could not set up Boneh-Franklin IBE") from e
    return identity_based_encryption(client, generator)
