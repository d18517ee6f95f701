"""
Sum-Check 비대화식 오케스트레이터
===================================

Prover와 Verifier를 Fiat-Shamir로 묶어 한 번에 증명을 만들고 검증한다.

  ┌─────────────────────────────────────────────────────┐
  │  prove()                                            │
  │    for i in 1..l:                                   │
  │      g_i = prover.prove(i, r_{i-1})                 │
  │      r_i = FS_prover.next_random(g_i 계수)          │
  │    Proof = [g_1, ..., g_l]                          │
  ├─────────────────────────────────────────────────────┤
  │  verify(proof)                                      │
  │    새 Verifier + 새 FiatShamir (상태 공유 없음)     │
  │    for i in 1..l:                                   │
  │      verifier.verify(i, g_i)  → 실패 시 즉시 거부   │
  └─────────────────────────────────────────────────────┘

Prover 측과 Verifier 측 FiatShamir 인스턴스는 각자 만들어지며,
같은 메시지 바이트를 같은 순서로 소비했기 때문에 같은 챌린지에 도달한다.

**정확성**:
  - 완전성: 올바른 합이면 verify(prove())는 항상 수락
  - 건전성: 틀린 주장은 확률 ≤ l/|F| 로만 수락

사용 예시:
    >>> sc = SumCheck(2, MultilinearPolynomial(2, [1, 2, 1, 4], field=F5))
    >>> proof = sc.prove()
    >>> sc.verify(proof, claimed_sum=sc.sum())   # True
"""

import logging

from sumcheck.errors import ConstructionError, RejectedProof, RejectReason, Rejection
from sumcheck.polynomial import MultilinearPolynomial
from sumcheck.prover import Prover
from sumcheck.randomness import FiatShamir
from sumcheck.verifier import Verifier

logger = logging.getLogger(__name__)


class Proof:
    """Sum-Check 증명: 라운드 순서대로의 메시지 [g_1, ..., g_l].

    각 g_i 는 UnivariatePolynomial (계수는 낮은 차수부터).
    """

    def __init__(self, messages):
        self.messages = tuple(messages)

    def __len__(self):
        return len(self.messages)

    def __iter__(self):
        return iter(self.messages)

    def __getitem__(self, i):
        return self.messages[i]

    def __eq__(self, other):
        if not isinstance(other, Proof):
            return False
        return list(self.messages) == list(other.messages)

    def __repr__(self):
        return f"Proof({list(self.messages)!r})"


class SumCheck:
    """Fiat-Shamir 기반 비대화식 Sum-Check.

    속성:
        l: 변수 개수
        f: MultilinearPolynomial
        rejection: 마지막 verify()가 거부한 원인 (수락 시 None)
    """

    def __init__(self, l, f):
        if not isinstance(f, MultilinearPolynomial):
            f = MultilinearPolynomial(l, f)
        if f.l != l:
            raise ConstructionError(f"l={l} 이 다항식 변수 수 {f.l} 과 다릅니다")
        self.l = l
        self.f = f
        self.rejection = None

    def sum(self):
        """하이퍼큐브 위의 합 (Prover의 주장)."""
        return self.f.sum()

    def prove(self):
        """l 라운드를 모두 실행하여 Proof를 만든다."""
        prover = Prover(self.l, self.f)
        randomness_oracle = FiatShamir(self.f.field)
        messages = []
        r = None
        for i in range(1, self.l + 1):
            gi = prover.prove(i, r)
            r = randomness_oracle.next_random(gi.coeff)
            messages.append(gi)
        logger.debug("generated sum-check proof with %d rounds", len(messages))
        return Proof(messages)

    def verify(self, proof, claimed_sum=None):
        """proof 를 검증한다.

        Args:
            proof: Proof (또는 UnivariatePolynomial 시퀀스)
            claimed_sum: Prover가 주장한 합. 주어지면 g_1(0)+g_1(1)과 비교한다.

        Returns:
            bool: 수락 여부. 거부 원인은 self.rejection
        """
        self.rejection = None
        messages = list(proof)
        if len(messages) != self.l:
            self.rejection = Rejection(RejectReason.PROOF_LENGTH, 0)
            logger.info("proof has %d messages, expected %d", len(messages), self.l)
            return False

        if self.l == 0:
            # 라운드 없음: 오라클 값 자체가 합이다
            if claimed_sum is not None and self.f.evaluate([]) != self.f.field(claimed_sum):
                self.rejection = Rejection(RejectReason.FINAL_CHECK_FAILED, 0)
                return False
            return True

        verifier = Verifier(self.l, self.f, FiatShamir(self.f.field), claimed_sum=claimed_sum)
        for i, gi in enumerate(messages, start=1):
            if not verifier.verify(i, gi):
                self.rejection = verifier.rejection
                return False
        return True

    def check(self, proof, claimed_sum=None):
        """verify()와 같지만 거부 시 RejectedProof를 발생시킨다."""
        if not self.verify(proof, claimed_sum=claimed_sum):
            raise RejectedProof(self.rejection)
