"""
Field helper tests: FR, prime_field, byte serialization, hash-to-field
"""
import hashlib
import random

import pytest

from sumcheck.field import (
    FR, CURVE_ORDER,
    prime_field, byte_length, random_element, element_to_bytes, hash_to_field,
)


class TestFR:
    def test_modular_reduction(self):
        assert FR(CURVE_ORDER) == FR(0)
        assert FR(CURVE_ORDER + 7) == FR(7)

    def test_subtraction_wrap(self):
        assert FR(0) - FR(1) == FR(CURVE_ORDER - 1)

    def test_int_conversion(self):
        assert int(FR(42)) == 42


class TestPrimeField:
    def test_small_field_arithmetic(self):
        F5 = prime_field(5)
        assert F5(3) + F5(4) == F5(2)
        assert F5(2) * F5(3) == F5(1)
        assert F5(0) - F5(1) == F5(4)

    def test_cached_class(self):
        """같은 위수는 같은 클래스."""
        assert prime_field(5) is prime_field(5)
        assert prime_field(7) is not prime_field(5)

    def test_curve_order_returns_fr(self):
        assert prime_field(CURVE_ORDER) is FR

    @pytest.mark.parametrize("modulus", [0, 1, 4, 6, 91])
    def test_rejects_composite_modulus(self, modulus):
        with pytest.raises(ValueError):
            prime_field(modulus)


class TestSerialization:
    def test_byte_length(self):
        assert byte_length(prime_field(5)) == 1
        assert byte_length(prime_field(257)) == 2
        assert byte_length(FR) == 32

    def test_element_to_bytes_fixed_width(self):
        assert element_to_bytes(FR(1)) == b"\x00" * 31 + b"\x01"
        assert element_to_bytes(prime_field(5)(3)) == b"\x03"

    def test_element_to_bytes_canonical(self):
        """정규화된 값이 직렬화된다."""
        assert element_to_bytes(FR(CURVE_ORDER + 2)) == element_to_bytes(FR(2))


class TestHashToField:
    def test_matches_sha256_mod_p(self):
        expected = int.from_bytes(hashlib.sha256(b"sumcheck").digest(), "big") % CURVE_ORDER
        assert hash_to_field(FR, b"sumcheck") == FR(expected)

    def test_deterministic(self):
        F5 = prime_field(5)
        assert hash_to_field(F5, b"abc") == hash_to_field(F5, b"abc")

    def test_different_inputs_differ(self):
        assert hash_to_field(FR, b"a") != hash_to_field(FR, b"b")

    def test_accepts_bytearray(self):
        assert hash_to_field(FR, bytearray(b"xyz")) == hash_to_field(FR, b"xyz")


class TestRandomElement:
    def test_in_range_and_seeded(self):
        F5 = prime_field(5)
        xs = [random_element(F5, random.Random(7)) for _ in range(3)]
        assert xs[0] == xs[1] == xs[2]
        assert 0 <= int(xs[0]) < 5

    def test_covers_small_field(self):
        F5 = prime_field(5)
        rng = random.Random(1)
        seen = {int(random_element(F5, rng)) for _ in range(200)}
        assert seen == {0, 1, 2, 3, 4}
