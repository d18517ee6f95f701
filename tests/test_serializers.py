"""
Serializer tests: FR, 다항식, 증명 와이어 포맷, Verifier 상태
"""
import json

import pytest

from sumcheck.errors import ConstructionError, RejectReason, Rejection
from sumcheck.field import FR, CURVE_ORDER, prime_field
from sumcheck.polynomial import MultilinearPolynomial, UnivariatePolynomial
from sumcheck.protocol import SumCheck
from sumcheck.randomness import PrivateCoin
from sumcheck.verifier import Verifier

from sumcheck_serializers import (
    serialize_fr, deserialize_fr,
    serialize_fr_list, deserialize_fr_list,
    serialize_poly, deserialize_poly,
    serialize_multilinear, deserialize_multilinear,
    serialize_proof, deserialize_proof,
    serialize_rejection, deserialize_rejection,
    serialize_verifier,
    fr_short,
)

F5 = prime_field(5)


class TestFieldElements:
    def test_fr_as_decimal_string(self):
        assert serialize_fr(FR(CURVE_ORDER - 1)) == str(CURVE_ORDER - 1)

    def test_deserialize_string_and_int(self):
        assert deserialize_fr("7", F5) == F5(2)
        assert deserialize_fr(7, F5) == F5(2)

    @pytest.mark.parametrize("bad", ["abc", None, [1], True, "1.5", 1.7, 2.0])
    def test_deserialize_rejects_garbage(self, bad):
        with pytest.raises(ConstructionError):
            deserialize_fr(bad)

    def test_list_requires_list(self):
        with pytest.raises(ConstructionError):
            deserialize_fr_list("123")

    def test_list(self):
        assert deserialize_fr_list(serialize_fr_list([F5(1), F5(4)]), F5) == [F5(1), F5(4)]


class TestPolynomials:
    def test_poly_low_degree_first(self):
        g = UnivariatePolynomial([3, 2], field=F5)
        assert serialize_poly(g) == ["3", "2"]
        assert deserialize_poly(["3", "2"], F5) == g

    def test_empty_poly_rejected(self):
        with pytest.raises(ConstructionError):
            deserialize_poly([], F5)

    def test_missing_message_rejected(self):
        assert serialize_poly(None) is None
        with pytest.raises(ConstructionError):
            deserialize_poly(None, F5)

    def test_multilinear(self, ref_poly):
        data = serialize_multilinear(ref_poly)
        assert data == {"l": 2, "f": ["1", "2", "1", "4"]}
        assert deserialize_multilinear(data, F5) == ref_poly

    @pytest.mark.parametrize("bad", [
        {"l": "2", "f": ["1", "2", "1", "4"]},
        {"l": 2, "f": ["1", "2", "1"]},
        {"f": ["1"]},
        ["1", "2"],
    ])
    def test_multilinear_rejects_bad_shape(self, bad):
        with pytest.raises(ConstructionError):
            deserialize_multilinear(bad, F5)


class TestProofWireFormat:
    def test_shape(self, ref_poly):
        proof = SumCheck(2, ref_poly).prove()
        data = serialize_proof(proof)
        assert len(data) == 2
        assert data[0] == ["3", "2"]
        assert all(isinstance(c, str) for gi in data for c in gi)

    def test_json_round_trip_still_verifies(self):
        f = MultilinearPolynomial(3, list(range(8)))
        sum_check = SumCheck(3, f)
        wire = json.dumps(serialize_proof(sum_check.prove()))
        proof = deserialize_proof(json.loads(wire), FR)
        assert sum_check.verify(proof, claimed_sum=FR(28))

    def test_rejects_non_list(self):
        with pytest.raises(ConstructionError):
            deserialize_proof({"g1": ["1"]})

    def test_rejects_null_message(self):
        with pytest.raises(ConstructionError):
            deserialize_proof([None, None], F5)


class TestVerifierState:
    def test_rejection(self):
        r = Rejection(RejectReason.CLAIM_MISMATCH, 2)
        data = serialize_rejection(r)
        assert data == {"reason": "claim_mismatch", "round": 2}
        assert deserialize_rejection(data) == r
        assert serialize_rejection(None) is None
        assert deserialize_rejection(None) is None

    @pytest.mark.parametrize("bad", [
        {"reason": "bogus", "round": 1},
        {"round": 1},
        "claim_mismatch",
    ])
    def test_bad_rejection_record(self, bad):
        with pytest.raises(ConstructionError):
            deserialize_rejection(bad)

    def test_verifier_state(self, ref_poly):
        verifier = Verifier(2, ref_poly, PrivateCoin(F5))
        verifier.verify(1, UnivariatePolynomial([3, 2], field=F5))
        state = serialize_verifier(verifier)
        assert len(state["challenges"]) == 1
        assert state["claims"][0] == "3"
        assert len(state["claims"]) == 2
        assert state["rejection"] is None


class TestDisplay:
    def test_fr_short(self):
        assert fr_short(FR(12345)) == "12345"
        assert fr_short(FR(CURVE_ORDER - 1)).count("...") == 1
        assert fr_short(None) == "None"
