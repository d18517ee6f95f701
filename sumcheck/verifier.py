"""
Sum-Check Verifier
===================

라운드 i 의 메시지 g_i(X)에 대해 다음을 순서대로 검사한다.

  1. 차수 검사:    deg(g_i) == oracle.deg(i)
  2. 일관성 검사:  g_i(0) + g_i(1) == c_{i-1}
                   (라운드 1 에서는 이 값이 초기 주장 c_0 이 된다)
  3. 챌린지:       r_i = randomness_oracle.next_random(g_i 계수)
  4. 주장 갱신:    c_i = g_i(r_i)
  5. 최종 검사:    (i == l 일 때) oracle.evaluate(r_1, ..., r_l) == c_l

Verifier의 라운드당 작업은 O(1) 필드 연산이고, 원본 다항식은 마지막에
오라클 호출 한 번으로만 접근한다.

**거부 원인**:
  verify()는 True/False만 반환하지만, False의 원인은
  verifier.rejection (Rejection: reason + round)에 남는다.

사용 예시:
    >>> verifier = Verifier(2, f, PrivateCoin(F5))
    >>> verifier.verify(1, g1)       # True
    >>> r1 = verifier.challenge(1)
"""

import logging

from sumcheck.errors import RejectReason, Rejection, RoundSequenceError

logger = logging.getLogger(__name__)


class Verifier:
    """Sum-Check Verifier 상태 기계 (라운드 0..l).

    속성:
        l: 변수 개수
        oracle: MultivariateOracle (원본 다항식의 evaluate/deg)
        randomness_oracle: RandomnessOracle (PrivateCoin 또는 FiatShamir)
        claimed_sum: Prover가 주장한 합 H (None이면 g_1(0)+g_1(1)을 그대로 받음)
        r: 챌린지 기록 [r_1, ..., r_i]
        c: 누적 주장 기록 [c_0, ..., c_i]
        rejection: 거부 시 Rejection, 아니면 None
    """

    def __init__(self, l, oracle, randomness_oracle, claimed_sum=None):
        self.l = l
        self.oracle = oracle
        self.randomness_oracle = randomness_oracle
        self.claimed_sum = claimed_sum
        self.r = []
        self.c = []
        self.rejection = None

    @classmethod
    def restore(cls, l, oracle, randomness_oracle, challenges, claims,
                claimed_sum=None, rejection=None):
        """저장된 기록으로부터 진행 중인 Verifier를 복원한다.

        HTTP 세션처럼 요청마다 상태를 다시 만들어야 할 때 쓴다.
        """
        if len(claims) != (len(challenges) + 1 if challenges else 0):
            raise RoundSequenceError(
                f"챌린지 {len(challenges)} 개와 주장 {len(claims)} 개가 맞지 않습니다"
            )
        verifier = cls(l, oracle, randomness_oracle, claimed_sum=claimed_sum)
        verifier.r = list(challenges)
        verifier.c = list(claims)
        verifier.rejection = rejection
        return verifier

    def current_round(self):
        """완료된 라운드 수."""
        return len(self.r)

    def challenges(self):
        return list(self.r)

    def claims(self):
        return list(self.c)

    def _reject(self, reason, round_num):
        self.rejection = Rejection(reason, round_num)
        logger.info("verifier rejected round %d/%d: %s", round_num, self.l, reason.value)
        return False

    def verify(self, round_num, gi):
        """라운드 round_num 의 메시지 gi 를 검사한다.

        Args:
            round_num: 1 ≤ round_num ≤ l, current_round() + 1 과 같아야 함
            gi: UnivariatePolynomial

        Returns:
            bool: 수락 여부 (거부 원인은 self.rejection)

        Raises:
            RoundSequenceError: 순서 위반, 범위 밖, 이미 거부된 세션
        """
        if not 1 <= round_num <= self.l:
            raise RoundSequenceError(f"라운드는 1..{self.l} 범위여야 합니다: {round_num}")
        if self.rejection is not None:
            raise RoundSequenceError(f"이미 거부된 증명입니다: {self.rejection!r}")
        if round_num != self.current_round() + 1:
            raise RoundSequenceError(
                f"라운드 {self.current_round() + 1} 차례에 라운드 {round_num} 요청"
            )

        # 1. 차수 검사
        if gi.deg() != self.oracle.deg(round_num):
            return self._reject(RejectReason.DEGREE_MISMATCH, round_num)

        # 2. 일관성 검사: g_i(0) + g_i(1) == c_{i-1}
        ci = gi.evaluate(0) + gi.evaluate(1)
        if round_num == 1:
            if self.claimed_sum is not None and ci != gi.field(self.claimed_sum):
                return self._reject(RejectReason.CLAIMED_SUM_MISMATCH, round_num)
            self.c.append(ci)
        elif ci != self.c[-1]:
            return self._reject(RejectReason.CLAIM_MISMATCH, round_num)

        # 3. 챌린지 r_i
        ri = self.randomness_oracle.next_random(gi.coeff)
        self.r.append(ri)

        # 4. c_i = g_i(r_i)
        self.c.append(gi.evaluate(ri))
        logger.debug("verifier round %d/%d accepted, r=%r", round_num, self.l, ri)

        # 5. 최종 검사: f(r_1, ..., r_l) == c_l
        if round_num == self.l:
            if self.oracle.evaluate(self.r) != self.c[-1]:
                return self._reject(RejectReason.FINAL_CHECK_FAILED, round_num)

        return True

    def challenge(self, round_num):
        """완료된 라운드의 챌린지 r_round.

        Raises:
            RoundSequenceError: 아직 도달하지 않은 라운드
        """
        if not 1 <= round_num <= len(self.r):
            raise RoundSequenceError(
                f"라운드 {round_num} 의 챌린지는 아직 없습니다 (완료: {len(self.r)})"
            )
        return self.r[round_num - 1]
