"""
Sum-Check 오류 분류
====================

두 종류의 실패를 구분한다.

**치명적 오류 (예외)**:
  - ConstructionError: 구조적으로 잘못된 입력 (테이블 길이 ≠ 2^l, 빈 계수 등)
  - RoundSequenceError: 라운드 순서 위반 (API 오용)

**정상적인 거부 (RejectReason)**:
  Verifier.verify()가 False를 반환하는 경우. 주장한 합이 틀렸거나
  트랜스크립트가 조작된 것으로, 내부 결함이 아니라 예상된 결과다.
  원인은 verifier.rejection에 기록된다.
"""

import enum


class SumCheckError(Exception):
    """Sum-Check 패키지의 모든 오류의 기반 클래스."""


class ConstructionError(SumCheckError, ValueError):
    """잘못된 구조의 다항식/증명 입력."""


class RoundSequenceError(SumCheckError, ValueError):
    """라운드가 순서를 벗어나거나 [1, l] 범위 밖에서 요청됨."""


class RejectReason(enum.Enum):
    """증명이 거부된 원인."""

    DEGREE_MISMATCH = "degree_mismatch"
    CLAIM_MISMATCH = "claim_mismatch"
    FINAL_CHECK_FAILED = "final_check_failed"
    CLAIMED_SUM_MISMATCH = "claimed_sum_mismatch"
    PROOF_LENGTH = "proof_length"


class Rejection:
    """거부 기록: 원인과 거부가 일어난 라운드."""

    def __init__(self, reason, round_num):
        self.reason = reason
        self.round = round_num

    def __eq__(self, other):
        if not isinstance(other, Rejection):
            return False
        return self.reason == other.reason and self.round == other.round

    def __repr__(self):
        return f"Rejection({self.reason.name}, round={self.round})"


class RejectedProof(SumCheckError):
    """SumCheck.check()가 증명을 거부했을 때 발생한다.

    속성:
        rejection: Rejection (원인 + 라운드)
    """

    def __init__(self, rejection):
        self.rejection = rejection
        super().__init__(
            f"증명 거부: {rejection.reason.value} (round {rejection.round})"
        )
