import hashlib

import pytest

from bfibe.errors import ComponentConstructionError
from bfibe.fp2 import gfp_2
from bfibe.hashing import (canonical, canonical_decode, canonical_ordering,
                           digest_factory, hash_bytes, hash_to_point,
                           hash_to_range)

from conftest import TOY_P, TOY_Q

SHA256 = digest_factory("SHA-256")


def test_digest_factory_names():
    for name, size in [("SHA-1", 20), ("SHA-224", 28), ("SHA-256", 32),
                       ("SHA-384", 48), ("SHA-512", 64), ("sha256", 32)]:
        d = digest_factory.for_algorithm(name)
        assert d.digest_size == size
        assert d.name == name

    assert SHA256.digest(b"abc") == hashlib.sha256(b"abc").digest()
    assert SHA256.new(b"abc").hexdigest() == hashlib.sha256(b"abc").hexdigest()


def test_digest_factory_rejects_unknown_hash():
    with pytest.raises(ComponentConstructionError):
        digest_factory.for_algorithm("NOT-A-HASH")
    with pytest.raises(ComponentConstructionError):
        digest_factory.for_algorithm("")
    with pytest.raises(ValueError):
        digest_factory("NOT-A-HASH")


def test_hash_to_range():
    assert hash_to_range(b"alice@example.com", TOY_P, SHA256) == 25518164
    assert hash_to_range(b"alice@example.com", TOY_Q, SHA256) == 273520


def test_hash_to_range_bounds():
    for i in range(50):
        v = hash_to_range(b"%d" % i, 97, SHA256)
        assert 0 <= v < 97
    assert hash_to_range(b"anything", 1, SHA256) == 0


def test_hash_bytes():
    expected = bytes.fromhex("108cbb11a097a8bdf187d576ad7a5388e2ac3eabeb5d1082"
                             "f71cef3222e92bc3bffd4438a1794049")
    assert hash_bytes(40, b"seed", SHA256) == expected


def test_hash_bytes_lengths():
    assert hash_bytes(0, b"seed", SHA256) == b""
    long = hash_bytes(100, b"seed", SHA256)
    assert len(long) == 100
    # output for a shorter length is a prefix of the longer one
    assert hash_bytes(33, b"seed", SHA256) == long[:33]
    assert hash_bytes(32, b"other", SHA256) != long[:32]


def test_hash_to_point(toy_curve):
    q_id = hash_to_point(toy_curve, TOY_P, TOY_Q, "alice@example.com", SHA256)
    assert toy_curve.is_on_curve(q_id)
    assert not q_id.is_infinite()
    assert q_id.scalar_mul(TOY_Q, toy_curve).is_infinite()

    assert q_id == hash_to_point(toy_curve, TOY_P, TOY_Q, b"alice@example.com", SHA256)
    assert q_id != hash_to_point(toy_curve, TOY_P, TOY_Q, "bob@example.com", SHA256)


def test_canonical():
    v = gfp_2(1, 2)
    # 84000251 fits into 4 bytes
    assert canonical(TOY_P, canonical_ordering.REAL_FIRST, v) == bytes.fromhex("0000000100000002")
    assert canonical(TOY_P, canonical_ordering.IMAGINARY_FIRST, v) == bytes.fromhex("0000000200000001")
    assert len(canonical(TOY_P, canonical_ordering.REAL_FIRST, gfp_2(TOY_P - 1, TOY_P - 1))) == 8


def test_canonical_decode():
    v = gfp_2(TOY_P - 1, 12345)
    for ordering in canonical_ordering:
        assert canonical_decode(TOY_P, ordering, canonical(TOY_P, ordering, v)) == v

    with pytest.raises(ValueError):
        canonical_decode(TOY_P, canonical_ordering.REAL_FIRST, b"\x00" * 7)


def test_canonical_rejects_unreduced():
    with pytest.raises(ValueError):
        canonical(TOY_P, canonical_ordering.REAL_FIRST, gfp_2(-1, 0))
    with pytest.raises(ValueError):
        canonical(TOY_P, canonical_ordering.REAL_FIRST, gfp_2(1 << 40, 0))
