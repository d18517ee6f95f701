import sys
import os
import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from sumcheck.field import prime_field
from sumcheck.polynomial import MultilinearPolynomial


# ── 테스트 상수 ──
# f(x1, x2) = 1 + x2 + 2·x1·x2 over GF(5)
REF_MODULUS = 5
REF_NUM_VARS = 2
REF_EVALS = [1, 2, 1, 4]
REF_SUM = 3  # 1 + 2 + 1 + 4 mod 5


@pytest.fixture(scope="session")
def f5():
    """GF(5) 필드 클래스."""
    return prime_field(REF_MODULUS)


@pytest.fixture
def ref_poly(f5):
    """l = 2, f = [1, 2, 1, 4] over GF(5)."""
    return MultilinearPolynomial(REF_NUM_VARS, REF_EVALS, field=f5)


@pytest.fixture
def app():
    """MemoryStorage TinyDB 를 쓰는 테스트용 앱."""
    from app import create_app
    return create_app({
        "TESTING": True,
        "SUMCHECK_DB_IN_MEMORY": True,
        "SUMCHECK_MAX_VARS": 8,
    })


@pytest.fixture
def client(app):
    return app.test_client()
