"""
Sum-Check Prover
=================

라운드 i 에서 Prover는 다음 일변수 다항식을 보낸다:

    g_i(X) = Σ_{x ∈ {0,1}^(l-i)} f(r_1, ..., r_{i-1}, X, x)

**작업 다항식 접기(folding)**:
  Prover는 f(r_1, ..., r_{i-1}, ·)를 작업 다항식으로 들고 있다가
  챌린지 r_{i-1}이 도착하면 fix_variable로 한 변수를 접는다.
  라운드마다 테이블이 절반으로 줄어 전체 비용은 O(2^l) 이다.

**메시지 생성 (gen_g)**:
  작업 다항식이 다중선형이므로 g_i는 1차 이하이고, 두 점의 값으로 결정된다.
    g0 = Σ f(..., 0, x),  g1 = Σ f(..., 1, x)
    g_i(X) = g0 + (g1 - g0)·X

사용 예시:
    >>> prover = Prover(2, f)
    >>> g1 = prover.prove(1)
    >>> g2 = prover.prove(2, r1)
"""

import logging

from sumcheck.errors import ConstructionError, RoundSequenceError
from sumcheck.polynomial import MultilinearPolynomial, UnivariatePolynomial

logger = logging.getLogger(__name__)


class Prover:
    """Sum-Check Prover 상태 기계 (라운드 0..l).

    속성:
        l: 변수 개수
        polynomial: 원본 다항식 (합 주장용)
        current: 현재 작업 다항식 f(r_1, ..., r_{i-1}, X_i, ..., X_l)
        messages: 지금까지 보낸 g_1, g_2, ... (라운드 카운터 = 길이)
    """

    def __init__(self, l, f):
        """
        Args:
            l: 변수 개수 (f.l 과 같아야 함)
            f: MultilinearPolynomial (또는 길이 2^l 의 평가값 리스트)

        Raises:
            ConstructionError: f 의 변수 수가 l 과 다를 때
        """
        if not isinstance(f, MultilinearPolynomial):
            f = MultilinearPolynomial(l, f)
        if f.l != l:
            raise ConstructionError(f"l={l} 이 다항식 변수 수 {f.l} 과 다릅니다")
        self.l = l
        self.polynomial = f
        self.current = f
        self.messages = []

    def sum(self):
        """라운드 1 이전에 Verifier에게 주장하는 합 H = Σ f(x)."""
        return self.polynomial.sum()

    def current_round(self):
        """완료된 라운드 수."""
        return len(self.messages)

    def prove(self, round_num, r_prev=None):
        """라운드 round_num 의 메시지 g_round(X)를 생성한다.

        Args:
            round_num: 1 ≤ round_num ≤ l, current_round() + 1 과 같아야 함
            r_prev: 이전 라운드의 챌린지 (round_num > 1 일 때 필수)

        Returns:
            UnivariatePolynomial: g_round

        Raises:
            RoundSequenceError: 순서 위반, 범위 밖, r_prev 누락
        """
        if not 1 <= round_num <= self.l:
            raise RoundSequenceError(f"라운드는 1..{self.l} 범위여야 합니다: {round_num}")
        if round_num != self.current_round() + 1:
            raise RoundSequenceError(
                f"라운드 {self.current_round() + 1} 차례에 라운드 {round_num} 요청"
            )

        if round_num > 1:
            if r_prev is None:
                raise RoundSequenceError(f"라운드 {round_num} 에는 이전 챌린지가 필요합니다")
            self.current = self.current.fix_variable(r_prev)

        gi = self.gen_g(self.current)
        self.messages.append(gi)
        logger.debug("prover round %d/%d: g=%r", round_num, self.l, gi)
        return gi

    @staticmethod
    def gen_g(poly):
        """g(X) = Σ_x poly(X, x) 를 계수 [g0, g1 - g0] 로 반환한다."""
        g0 = poly.fix_variable(poly.field(0)).sum()
        g1 = poly.fix_variable(poly.field(1)).sum()
        return UnivariatePolynomial([g0, g1 - g0], field=poly.field)
