"""
Sum-Check 난수 오라클 (Randomness Oracle)
==========================================

Verifier의 챌린지 r_i 를 만들어 내는 두 가지 방법.

**PrivateCoin (대화식 전용)**:
  진짜 난수를 뽑는다. Prover가 메시지를 보낸 **뒤에야** 챌린지를 알게 되는
  실시간 2자 세션에서만 의미가 있다. 재현할 수 없으므로 비대화식 증명에는
  쓸 수 없다.

**FiatShamir (비대화식)**:
  해시 체인으로 공개 동전(public coin) Verifier를 흉내 낸다.
    state_0 = 0
    state_i = H(bytes(state_{i-1}) || bytes(g_i 계수들))
  Prover와 Verifier가 각자 독립적인 인스턴스를 만들고, 같은 트랜스크립트를
  같은 순서로 넣으면 같은 챌린지를 얻는다. 두 인스턴스는 상태를 공유하지
  않는다.

사용 예시:
    >>> fs = FiatShamir(FR)
    >>> r1 = fs.next_random(g1.coeff)
    >>> r2 = fs.next_random(g2.coeff)
"""

import abc
import secrets

from sumcheck.field import FR, element_to_bytes, hash_to_field, random_element


class RandomnessOracle(abc.ABC):
    """next_random(input) → 필드 원소."""

    @abc.abstractmethod
    def next_random(self, input):
        """input(필드 원소 시퀀스)을 받아 다음 챌린지를 반환한다."""


class PrivateCoin(RandomnessOracle):
    """내부 난수 생성기에서 균일하게 챌린지를 뽑는다. input은 무시한다.

    속성:
        field: 챌린지 원소 타입
        rng: randrange를 제공하는 난수 생성기.
             기본값은 secrets.SystemRandom (암호학적 난수).
             테스트에서는 random.Random(seed)를 넘겨 재현 가능하게 만든다.
    """

    def __init__(self, field=FR, rng=None):
        self.field = field
        self.rng = rng if rng is not None else secrets.SystemRandom()

    def next_random(self, input):
        return random_element(self.field, self.rng)


class FiatShamir(RandomnessOracle):
    """결정론적 해시 체인 오라클.

    속성:
        field: 챌린지 원소 타입
        current_state: 마지막으로 반환한 챌린지 (초기값 0)

    계약:
        - 출력은 (current_state, input)의 순수 함수
        - 상태는 앞으로만 진행하며 되감거나 초기화하지 않는다
    """

    def __init__(self, field=FR):
        self.field = field
        self.current_state = field(0)

    def next_random(self, input):
        """current_state || input 을 직렬화하고 해시하여 새 상태를 만든다.

        Args:
            input: 필드 원소 시퀀스 (보통 라운드 메시지의 계수)

        Returns:
            새 current_state
        """
        data = bytearray(element_to_bytes(self.current_state))
        for x in input:
            if not isinstance(x, self.field):
                x = self.field(x)
            data.extend(element_to_bytes(x))
        self.current_state = hash_to_field(self.field, data)
        return self.current_state
