"""
Sum-Check 기반 모듈: 유한체(Finite Field) 헬퍼
================================================

Sum-Check 프로토콜은 유한체 원소 위에서만 동작하며, 모듈러 산술 자체는
py_ecc의 FQ 클래스에 맡긴다. 이 모듈은 프로토콜이 필요로 하는 나머지
연산만 제공한다.

**유한체 FR**:
  bn128 타원곡선의 스칼라 필드. 기본 필드로 사용된다.
  - 위수 p ≈ 2^254 → 건전성 오류 l/|F|는 사실상 0

**작은 소수체 (prime_field)**:
  GF(5) 같은 작은 필드는 테스트와 손 계산 예제에 쓰인다.
  건전성 오류가 l/5 로 커지므로 실제 증명에는 쓰지 않는다.

**Fiat-Shamir용 연산**:
  - element_to_bytes: 원소 → 고정 길이 빅엔디안 바이트열
  - hash_to_field: 임의 바이트열 → SHA-256 → mod p

사용 예시:
    >>> from sumcheck.field import FR, prime_field, hash_to_field
    >>> F5 = prime_field(5)
    >>> F5(3) + F5(4)          # 2
    >>> hash_to_field(FR, b"sumcheck")
"""

import functools
import hashlib

from py_ecc.fields import bn128_FQ as FQ
from py_ecc import bn128
from sympy import isprime


# ─────────────────────────────────────────────────────────────────────
# 유한체(Finite Field) FR
# ─────────────────────────────────────────────────────────────────────

class FR(FQ):
    """bn128 스칼라 필드 위의 유한체 원소.

    py_ecc의 FQ 클래스를 상속하여 +, -, *, /, ** 등의 필드 연산을 제공한다.

    예시:
        >>> x = FR(3)
        >>> x * x          # FR(9)
        >>> FR(0) - FR(1)  # p - 1
    """
    field_modulus = bn128.curve_order


# 곡선 위수 (필드 크기)
CURVE_ORDER = bn128.curve_order


@functools.lru_cache(maxsize=128)
def prime_field(modulus):
    """위수가 modulus인 소수체 클래스를 반환한다.

    같은 modulus에 대해서는 항상 같은 클래스를 돌려준다 (캐시).
    원소 타입이 같아야 isinstance 기반 변환이 일관되기 때문이다.
    bn128 스칼라 필드 위수를 넘기면 FR 자체를 반환한다.

    Args:
        modulus: 소수 p (2 이상)

    Returns:
        type: FQ의 하위 클래스

    Raises:
        ValueError: modulus가 소수가 아닐 때

    예시:
        >>> F5 = prime_field(5)
        >>> F5(7) == F5(2)  # True
    """
    modulus = int(modulus)
    if modulus == CURVE_ORDER:
        return FR
    if not isprime(modulus):
        raise ValueError(f"필드 위수는 소수여야 합니다: {modulus}")
    return type(f"GF{modulus}", (FQ,), {"field_modulus": modulus})


def byte_length(field):
    """field 원소 하나를 직렬화하는 데 필요한 바이트 수."""
    return max(1, (field.field_modulus.bit_length() + 7) // 8)


def random_element(field, rng):
    """rng로부터 균일하게 뽑은 field 원소.

    Args:
        field: FQ 하위 클래스
        rng: randrange를 제공하는 난수 생성기
             (random.Random 또는 secrets.SystemRandom)
    """
    return field(rng.randrange(field.field_modulus))


def element_to_bytes(x):
    """필드 원소를 고정 길이 빅엔디안 바이트열로 직렬화한다.

    길이는 필드 위수에 의해 결정되므로 같은 필드의 원소는
    항상 같은 길이를 가진다 (트랜스크립트 경계가 모호해지지 않음).
    """
    field = type(x)
    return int(x).to_bytes(byte_length(field), "big")


def hash_to_field(field, data):
    """바이트열을 field 원소로 사상한다.

    SHA-256 다이제스트를 256비트 정수로 읽고 mod p로 축소한다.

    Args:
        field: FQ 하위 클래스
        data: bytes

    Returns:
        field 원소
    """
    h = hashlib.sha256(bytes(data)).digest()
    return field(int.from_bytes(h, "big") % field.field_modulus)
