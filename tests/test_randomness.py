"""
Randomness oracle tests: PrivateCoin, FiatShamir
"""
import random

from sumcheck.field import FR, prime_field, hash_to_field
from sumcheck.randomness import FiatShamir, PrivateCoin, RandomnessOracle

F5 = prime_field(5)


class TestPrivateCoin:
    def test_is_randomness_oracle(self):
        assert isinstance(PrivateCoin(F5), RandomnessOracle)

    def test_ignores_input(self):
        """같은 시드라면 입력과 무관하게 같은 값."""
        a = PrivateCoin(FR, random.Random(3)).next_random([FR(1)])
        b = PrivateCoin(FR, random.Random(3)).next_random([FR(999), FR(2)])
        assert a == b

    def test_returns_field_element(self):
        x = PrivateCoin(F5, random.Random(0)).next_random([])
        assert isinstance(x, F5)

    def test_default_rng_is_system_random(self):
        coin = PrivateCoin(FR)
        xs = [coin.next_random([]) for _ in range(4)]
        assert len({int(x) for x in xs}) == 4


class TestFiatShamir:
    def test_initial_state_zero(self):
        assert FiatShamir(FR).current_state == FR(0)

    def test_first_output_matches_hash_chain(self):
        fs = FiatShamir(FR)
        out = fs.next_random([FR(1), FR(2)])
        data = (b"\x00" * 32) + (b"\x00" * 31 + b"\x01") + (b"\x00" * 31 + b"\x02")
        assert out == hash_to_field(FR, data)
        assert fs.current_state == out

    def test_chained_state(self):
        fs = FiatShamir(F5)
        r1 = fs.next_random([F5(3), F5(2)])
        r2 = fs.next_random([F5(1), F5(4)])
        data = bytes([int(r1), 1, 4])
        assert r2 == hash_to_field(F5, data)

    def test_independent_instances_agree(self):
        """같은 트랜스크립트 → 같은 챌린지 시퀀스 (상태 공유 없음)."""
        prover_side = FiatShamir(FR)
        verifier_side = FiatShamir(FR)
        transcript = [[FR(5), FR(7)], [FR(11), FR(13)], [FR(17), FR(19)]]
        a = [prover_side.next_random(m) for m in transcript]
        b = [verifier_side.next_random(m) for m in transcript]
        assert a == b

    def test_state_advances(self):
        """같은 입력이라도 두 번째 호출은 다른 값."""
        fs = FiatShamir(FR)
        r1 = fs.next_random([FR(1)])
        r2 = fs.next_random([FR(1)])
        assert r1 != r2

    def test_different_transcripts_diverge(self):
        a = FiatShamir(FR).next_random([FR(1), FR(2)])
        b = FiatShamir(FR).next_random([FR(1), FR(3)])
        assert a != b

    def test_int_inputs_lifted(self):
        a = FiatShamir(FR).next_random([1, 2])
        b = FiatShamir(FR).next_random([FR(1), FR(2)])
        assert a == b
