"""
Sum-Check 데이터 직렬화/역직렬화 헬퍼
======================================

JSON 요청/응답과 TinyDB에 저장 가능한 형태로 Sum-Check 객체를 변환한다.
필드 원소는 10진수 문자열로 표현한다 (2^254 크기 정수의 JSON 정밀도 손실 방지).

증명 와이어 포맷:
    [[g_1 계수...], [g_2 계수...], ..., [g_l 계수...]]
    라운드 순서와 계수 순서(낮은 차수부터)를 그대로 유지한다.
"""

from sumcheck.errors import ConstructionError, RejectReason, Rejection
from sumcheck.field import FR
from sumcheck.polynomial import MultilinearPolynomial, UnivariatePolynomial
from sumcheck.protocol import Proof


# ─── FR ───

def serialize_fr(val):
    """FR → str(int)"""
    return str(int(val))


def deserialize_fr(s, field=FR):
    """str(int) 또는 int → field 원소 (float, bool 은 거부)"""
    if isinstance(s, bool) or not isinstance(s, (int, str)):
        raise ConstructionError(f"필드 원소가 아닙니다: {s!r}")
    try:
        return field(int(s))
    except (TypeError, ValueError) as e:
        raise ConstructionError(f"필드 원소가 아닙니다: {s!r}") from e


# ─── FR list ───

def serialize_fr_list(lst):
    """list[FR] → list[str]"""
    return [serialize_fr(v) for v in lst]


def deserialize_fr_list(data, field=FR):
    """list[str] → list[FR]"""
    if not isinstance(data, list):
        raise ConstructionError(f"리스트가 필요합니다: {type(data).__name__}")
    return [deserialize_fr(s, field) for s in data]


# ─── Polynomial ───

def serialize_poly(poly):
    """UnivariatePolynomial → list of str (계수)"""
    if poly is None:
        return None
    return serialize_fr_list(poly.coeff)


def deserialize_poly(data, field=FR):
    """list of str → UnivariatePolynomial"""
    if data is None:
        raise ConstructionError("라운드 메시지(계수 리스트)가 없습니다")
    return UnivariatePolynomial(deserialize_fr_list(data, field), field=field)


def serialize_multilinear(poly):
    """MultilinearPolynomial → {"l": int, "f": [str, ...]}"""
    return {"l": poly.l, "f": serialize_fr_list(poly.f)}


def deserialize_multilinear(data, field=FR):
    """{"l": int, "f": [str, ...]} → MultilinearPolynomial"""
    if not isinstance(data, dict):
        raise ConstructionError(f"딕셔너리가 필요합니다: {type(data).__name__}")
    l = data.get("l")
    if not isinstance(l, int) or isinstance(l, bool):
        raise ConstructionError(f"변수 개수가 정수가 아닙니다: {l!r}")
    return MultilinearPolynomial(l, deserialize_fr_list(data.get("f"), field), field=field)


# ─── Proof ───

def serialize_proof(proof):
    """Proof → list[list[str]]"""
    return [serialize_poly(gi) for gi in proof]


def deserialize_proof(data, field=FR):
    """list[list[str]] → Proof"""
    if not isinstance(data, list):
        raise ConstructionError(f"증명은 리스트여야 합니다: {type(data).__name__}")
    return Proof([deserialize_poly(gi, field) for gi in data])


# ─── Rejection ───

def serialize_rejection(rejection):
    """Rejection → {"reason": str, "round": int} or None"""
    if rejection is None:
        return None
    return {"reason": rejection.reason.value, "round": rejection.round}


def deserialize_rejection(data):
    """{"reason": str, "round": int} or None → Rejection"""
    if data is None:
        return None
    try:
        return Rejection(RejectReason(data["reason"]), data["round"])
    except (KeyError, TypeError, ValueError) as e:
        raise ConstructionError(f"잘못된 거부 기록: {data!r}") from e


# ─── Verifier state ───

def serialize_verifier(verifier):
    """Verifier → dict (챌린지/주장 기록 + 거부 원인)"""
    return {
        "challenges": serialize_fr_list(verifier.challenges()),
        "claims": serialize_fr_list(verifier.claims()),
        "rejection": serialize_rejection(verifier.rejection),
    }


# ─── display helpers ───

def fr_short(val):
    """FR → 축약 문자열 (로그/표시용)"""
    if val is None:
        return "None"
    s = str(int(val))
    if len(s) <= 10:
        return s
    return s[:4] + "..." + s[-4:]
