"""
Sum-Check 기반 모듈: 다항식(Polynomial) 클래스
================================================

**MultilinearPolynomial**:
  {0,1}^l 위의 함수를 평가 테이블(길이 2^l)로 표현한 다중선형 다항식.
  인덱스 w를 l비트 빅엔디안 할당으로 읽는다:
    f[0] = f(0,0,...,0), f[1] = f(0,...,0,1), f[2] = f(0,...,1,0), ...
  - evaluate: 테이블 배증(table doubling) 알고리즘, O(2^l)
  - evaluate_naive: Lagrange 곱 공식을 직접 계산, O(l·2^l) (교차 검증용)
  - fix_variable: 첫 번째 변수를 고정한 새 다항식, O(2^l)
  - sum: 하이퍼큐브 위의 합, O(2^l)

**UnivariatePolynomial**:
  계수 표현 일변수 다항식. g(X) = c₀ + c₁·X + c₂·X² + ...
  Prover가 라운드마다 보내는 메시지 g_i(X)를 담는다.

**MultivariateOracle**:
  Verifier가 원본 다항식에 접근하는 유일한 통로 (evaluate, deg).
  Verifier는 2^l 크기의 테이블을 절대 직접 보지 않는다.

사용 예시:
    >>> from sumcheck.field import prime_field
    >>> F5 = prime_field(5)
    >>> f = MultilinearPolynomial(2, [1, 2, 1, 4], field=F5)
    >>> f.sum()                        # 3
    >>> f.evaluate([F5(4), F5(3)])     # 3
    >>> f.fix_variable(F5(4)).evaluate([F5(3)])  # 3
"""

import abc

from sumcheck.errors import ConstructionError
from sumcheck.field import FR


def _infer_field(values, field):
    """명시된 field, 또는 첫 번째 FQ 원소의 타입, 또는 FR."""
    if field is not None:
        return field
    for v in values:
        if not isinstance(v, int):
            return type(v)
    return FR


# ─────────────────────────────────────────────────────────────────────
# Oracle 인터페이스
# ─────────────────────────────────────────────────────────────────────

class MultivariateOracle(abc.ABC):
    """Verifier에게 주어지는 원본 다항식에 대한 제한된 접근 권한.

    evaluate(point): l개 좌표에서의 값
    deg(i): i번째 변수(1부터 시작)의 차수 상한
    """

    @abc.abstractmethod
    def evaluate(self, point):
        """point ∈ F^l 에서의 다항식 값을 반환한다."""

    @abc.abstractmethod
    def deg(self, i):
        """x_i 항의 차수 상한을 반환한다 (1 ≤ i ≤ l)."""


# ─────────────────────────────────────────────────────────────────────
# MultilinearPolynomial
# ─────────────────────────────────────────────────────────────────────

class MultilinearPolynomial(MultivariateOracle):
    """평가 테이블로 표현한 l변수 다중선형 다항식.

    속성:
        l: 변수 개수
        f: 길이 2^l 의 필드 원소 튜플
        field: 원소 타입 (FQ 하위 클래스)

    불변식:
        len(f) == 2^l (생성 시 검사). 생성 이후 변경되지 않는다.

    예시:
        >>> f = MultilinearPolynomial(1, [FR(3), FR(5)])  # 3 + 2x
        >>> f.evaluate([FR(2)])   # FR(7)
    """

    def __init__(self, l, f, field=None):
        """다중선형 다항식 생성.

        Args:
            l: 변수 개수 (0 이상)
            f: 하이퍼큐브 위의 평가값 (길이 2^l). 정수는 field로 변환된다.
            field: 원소 타입. None이면 f의 원소 타입, 그것도 없으면 FR.

        Raises:
            ConstructionError: l < 0 이거나 len(f) != 2^l 일 때
        """
        f = list(f)
        if l < 0:
            raise ConstructionError(f"변수 개수는 0 이상이어야 합니다: {l}")
        if len(f) != 1 << l:
            raise ConstructionError(
                f"평가 테이블 길이는 2^l 이어야 합니다: l={l}, len(f)={len(f)}"
            )
        self.l = l
        self.field = _infer_field(f, field)
        self.f = tuple(self._lift(v) for v in f)

    def _lift(self, v):
        return v if isinstance(v, self.field) else self.field(v)

    def _check_point(self, r):
        r = [self._lift(v) for v in r]
        if len(r) != self.l:
            raise ConstructionError(
                f"평가 점의 길이는 l이어야 합니다: l={self.l}, len(r)={len(r)}"
            )
        return r

    def evaluate(self, r):
        """임의의 점 r ∈ F^l 에서 f(r)을 계산한다 (테이블 배증, O(2^l)).

        알고리즘:
            b = [1] 로 시작하여 좌표 r_i 마다 테이블을 두 배로 늘린다.
              b'[2j]   = b[j]·(1 - r_i)   (i번째 비트 = 0)
              b'[2j+1] = b[j]·r_i         (i번째 비트 = 1)
            l번 반복 후 b[w] = eq(w, r) (다중선형 Lagrange 기저값).
            f(r) = Σ_w f[w]·b[w]

        Args:
            r: 길이 l 의 필드 원소 리스트 (하이퍼큐브 점일 필요 없음)

        Returns:
            field 원소

        Raises:
            ConstructionError: len(r) != l
        """
        r = self._check_point(r)
        basis = [self.field(1)]
        for ri in r:
            doubled = [None] * (2 * len(basis))
            for j, bj in enumerate(basis):
                hi = bj * ri
                doubled[2 * j] = bj - hi
                doubled[2 * j + 1] = hi
            basis = doubled

        result = self.field(0)
        for fw, bw in zip(self.f, basis):
            result = result + fw * bw
        return result

    def evaluate_naive(self, r):
        """Lagrange 곱 공식으로 f(r)을 직접 계산한다 (O(l·2^l)).

        f(r) = Σ_w f[w] · ∏_i (w_i·r_i + (1 - w_i)·(1 - r_i))

        evaluate()와 항상 같은 값을 반환해야 한다.
        """
        r = self._check_point(r)
        one = self.field(1)
        result = self.field(0)
        for w, fw in enumerate(self.f):
            term = one
            for i, ri in enumerate(r):
                bit = (w >> (self.l - 1 - i)) & 1
                term = term * (ri if bit else one - ri)
            result = result + fw * term
        return result

    def fix_variable(self, x):
        """첫 번째 변수를 x로 고정한 (l-1)변수 다항식을 반환한다 (O(2^l)).

        첫 비트만 다른 두 항목을 x, 1-x 로 가중 결합한다:
            new_f[w] = (1 - x)·f[w] + x·f[w + 2^(l-1)]

        원래 다항식은 변경되지 않는다.

        Raises:
            ConstructionError: l == 0 일 때
        """
        if self.l == 0:
            raise ConstructionError("고정할 변수가 없습니다 (l == 0)")
        x = self._lift(x)
        half = 1 << (self.l - 1)
        low, high = self.f[:half], self.f[half:]
        folded = [lo + x * (hi - lo) for lo, hi in zip(low, high)]
        return MultilinearPolynomial(self.l - 1, folded, field=self.field)

    def sum(self):
        """하이퍼큐브 {0,1}^l 위의 모든 값의 합."""
        total = self.field(0)
        for v in self.f:
            total = total + v
        return total

    def deg(self, i):
        """x_i 항의 차수. 다중선형이므로 항상 1.

        Raises:
            ConstructionError: i가 [1, l] 범위 밖일 때
        """
        if not 1 <= i <= self.l:
            raise ConstructionError(f"변수 인덱스는 1..{self.l} 범위여야 합니다: {i}")
        return 1

    def __eq__(self, other):
        if not isinstance(other, MultilinearPolynomial):
            return False
        return self.l == other.l and list(self.f) == list(other.f)

    def __len__(self):
        return len(self.f)

    def __repr__(self):
        return f"MLE(l={self.l}, f=[{', '.join(str(int(v)) for v in self.f)}])"


# ─────────────────────────────────────────────────────────────────────
# UnivariatePolynomial
# ─────────────────────────────────────────────────────────────────────

class UnivariatePolynomial:
    """계수 표현 일변수 다항식: coeff = [c₀, c₁, ...] → c₀ + c₁X + ...

    Sum-Check의 라운드 메시지 g_i(X)로 쓰인다.
    최고차 계수가 0이어도 잘라내지 않는다 (deg()는 구조적 차수).

    예시:
        >>> g = UnivariatePolynomial([FR(1), FR(2)])  # 1 + 2X
        >>> g.evaluate(FR(3))   # FR(7)
        >>> g.deg()             # 1
    """

    def __init__(self, coeff, field=None):
        """
        Args:
            coeff: 계수 리스트 (낮은 차수부터). 비어 있으면 안 된다.
            field: 원소 타입. None이면 계수 타입, 그것도 없으면 FR.

        Raises:
            ConstructionError: coeff가 비어 있을 때
        """
        coeff = list(coeff)
        if not coeff:
            raise ConstructionError("계수 리스트가 비어 있습니다")
        self.field = _infer_field(coeff, field)
        self.coeff = tuple(c if isinstance(c, self.field) else self.field(c) for c in coeff)

    def evaluate(self, r):
        """Horner's method: g(r) = c₀ + r(c₁ + r(c₂ + ...))."""
        if not isinstance(r, self.field):
            r = self.field(r)
        result = self.field(0)
        for c in reversed(self.coeff):
            result = result * r + c
        return result

    def deg(self):
        """구조적 차수: len(coeff) - 1."""
        return len(self.coeff) - 1

    def __eq__(self, other):
        if not isinstance(other, UnivariatePolynomial):
            return False
        return list(self.coeff) == list(other.coeff)

    def __len__(self):
        return len(self.coeff)

    def __repr__(self):
        terms = []
        for i, c in enumerate(self.coeff):
            if c == self.field(0):
                continue
            if i == 0:
                terms.append(str(int(c)))
            elif i == 1:
                terms.append(f"{int(c)}*X")
            else:
                terms.append(f"{int(c)}*X^{i}")
        return "Poly(" + " + ".join(terms) + ")" if terms else "Poly(0)"
