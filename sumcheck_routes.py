"""
Sum-Check Flask Blueprint: 검증자(Verifier) 서비스
======================================================

서버가 Verifier 역할을 맡는 JSON 엔드포인트.

**비대화식 (Fiat-Shamir)**:
  POST /sumcheck/prove              다항식 → 주장한 합 + 증명
  POST /sumcheck/verify             다항식 + 증명 → 수락/거부 (+ 원인)

**대화식 세션 (Private Coin)**:
  POST   /sumcheck/sessions                 세션 열기 (서버가 오라클 f 를 보관)
  POST   /sumcheck/sessions/<id>/rounds     g_i 제출 → 검사 결과 + 챌린지 r_i
  GET    /sumcheck/sessions/<id>            세션 상태
  DELETE /sumcheck/sessions/<id>            세션 삭제

세션 상태(챌린지/주장 기록)는 TinyDB에 저장하고, 요청마다 Verifier를
복원하여 정확히 한 라운드만 진행시킨다. 챌린지는 Prover가 g_i 를 제출한
뒤에야 새로 뽑히므로 private coin 의 전제가 지켜진다.
"""

import logging
import threading
import uuid

from flask import Blueprint, current_app, jsonify, request
from tinydb import Query

from sumcheck.errors import ConstructionError, SumCheckError
from sumcheck.field import prime_field
from sumcheck.polynomial import MultilinearPolynomial
from sumcheck.protocol import SumCheck
from sumcheck.randomness import PrivateCoin
from sumcheck.verifier import Verifier

from sumcheck_serializers import (
    serialize_fr, deserialize_fr,
    deserialize_fr_list,
    serialize_poly, deserialize_poly,
    serialize_multilinear, deserialize_multilinear,
    serialize_proof, deserialize_proof,
    serialize_rejection, deserialize_rejection,
    serialize_verifier,
    fr_short,
)

logger = logging.getLogger(__name__)

sumcheck_bp = Blueprint('sumcheck', __name__, url_prefix='/sumcheck')

DATA = Query()

# DB는 app.py에서 주입
DB = None

STATUS_OPEN = "open"
STATUS_ACCEPTED = "accepted"
STATUS_REJECTED = "rejected"

# 세션별 라운드 잠금 (읽기-검증-쓰기 구간 직렬화)
_SESSION_LOCKS = {}
_SESSION_LOCKS_GUARD = threading.Lock()


def init_sumcheck_bp(db):
    """app.py에서 DB(TinyDB 테이블)를 주입받는다."""
    global DB
    DB = db


# ─── DB 헬퍼 ───

def db_get(key):
    """DB에서 키로 데이터를 조회한다."""
    result = DB.search(DATA.type == key)
    if not result:
        return None
    return result[0].get("data")


def db_set(key, data):
    """DB에 키로 데이터를 저장한다."""
    DB.upsert({"type": key, "data": data}, DATA.type == key)


def db_remove(key):
    """DB에서 키를 삭제한다."""
    DB.remove(DATA.type == key)


def _session_key(session_id):
    return f"sumcheck.session.{session_id}"


def _session_lock(session_id):
    with _SESSION_LOCKS_GUARD:
        return _SESSION_LOCKS.setdefault(session_id, threading.Lock())


def _drop_session_lock(session_id):
    with _SESSION_LOCKS_GUARD:
        _SESSION_LOCKS.pop(session_id, None)


# ─── 요청 파싱 ───

def _json_body():
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ConstructionError("JSON 객체 본문이 필요합니다")
    return body


def _field_from(body):
    """요청의 modulus (없으면 설정 기본값)에 해당하는 필드 클래스."""
    modulus = body.get("modulus", current_app.config["SUMCHECK_DEFAULT_MODULUS"])
    if isinstance(modulus, bool) or not isinstance(modulus, (int, str)):
        raise ConstructionError(f"잘못된 필드 위수: {modulus!r}")
    try:
        return prime_field(int(modulus))
    except (TypeError, ValueError) as e:
        raise ConstructionError(f"잘못된 필드 위수: {modulus!r}") from e


def _polynomial_from(body, field):
    """요청의 num_vars / evaluations 로 MultilinearPolynomial을 만든다."""
    num_vars = body.get("num_vars")
    if not isinstance(num_vars, int) or isinstance(num_vars, bool):
        raise ConstructionError(f"num_vars는 정수여야 합니다: {num_vars!r}")
    max_vars = current_app.config["SUMCHECK_MAX_VARS"]
    if num_vars > max_vars:
        raise ConstructionError(f"num_vars는 {max_vars} 이하여야 합니다: {num_vars}")
    evaluations = deserialize_fr_list(body.get("evaluations"), field)
    return MultilinearPolynomial(num_vars, evaluations, field=field)


def _claimed_sum_from(body, field):
    claimed = body.get("claimed_sum")
    return None if claimed is None else deserialize_fr(claimed, field)


@sumcheck_bp.errorhandler(SumCheckError)
def handle_sumcheck_error(e):
    """구조/순서 오류는 400으로 응답한다."""
    logger.info("bad sum-check request: %s", e)
    return jsonify({"error": str(e)}), 400


# ──────────────────────────────────────────────────────────────
# 비대화식 증명
# ──────────────────────────────────────────────────────────────

@sumcheck_bp.route("/prove", methods=["POST"])
def prove_route():
    """Fiat-Shamir 증명을 생성한다."""
    body = _json_body()
    field = _field_from(body)
    poly = _polynomial_from(body, field)

    sum_check = SumCheck(poly.l, poly)
    proof = sum_check.prove()
    return jsonify({
        "num_vars": poly.l,
        "claimed_sum": serialize_fr(sum_check.sum()),
        "proof": serialize_proof(proof),
    })


@sumcheck_bp.route("/verify", methods=["POST"])
def verify_route():
    """Fiat-Shamir 증명을 검증한다. 거부도 정상 응답(200)이다."""
    body = _json_body()
    field = _field_from(body)
    poly = _polynomial_from(body, field)
    proof = deserialize_proof(body.get("proof"), field)
    claimed_sum = _claimed_sum_from(body, field)

    sum_check = SumCheck(poly.l, poly)
    accepted = sum_check.verify(proof, claimed_sum=claimed_sum)
    rejection = serialize_rejection(sum_check.rejection)
    return jsonify({
        "accepted": accepted,
        "reason": rejection["reason"] if rejection else None,
        "round": rejection["round"] if rejection else None,
    })


# ──────────────────────────────────────────────────────────────
# 대화식 세션
# ──────────────────────────────────────────────────────────────

def _restore_verifier(doc):
    """DB 문서로부터 (Verifier, field)를 복원한다."""
    field = prime_field(int(doc["modulus"]))
    poly = deserialize_multilinear(doc["polynomial"], field)
    state = doc["verifier"]
    claimed = doc.get("claimed_sum")
    verifier = Verifier.restore(
        poly.l,
        poly,
        PrivateCoin(field),
        deserialize_fr_list(state["challenges"], field),
        deserialize_fr_list(state["claims"], field),
        claimed_sum=None if claimed is None else deserialize_fr(claimed, field),
        rejection=deserialize_rejection(state["rejection"]),
    )
    return verifier, field


def _session_view(session_id, doc):
    state = doc["verifier"]
    return {
        "session": session_id,
        "num_vars": doc["polynomial"]["l"],
        "status": doc["status"],
        "round": len(state["challenges"]),
        "challenges": state["challenges"],
        "rejection": state["rejection"],
    }


@sumcheck_bp.route("/sessions", methods=["POST"])
def open_session():
    """Private-coin Verifier 세션을 연다."""
    body = _json_body()
    field = _field_from(body)
    poly = _polynomial_from(body, field)
    if poly.l < 1:
        raise ConstructionError("대화식 세션에는 변수가 1개 이상 필요합니다")
    claimed_sum = _claimed_sum_from(body, field)

    session_id = uuid.uuid4().hex
    db_set(_session_key(session_id), {
        "modulus": str(field.field_modulus),
        "polynomial": serialize_multilinear(poly),
        "claimed_sum": None if claimed_sum is None else serialize_fr(claimed_sum),
        "verifier": {"challenges": [], "claims": [], "rejection": None},
        "status": STATUS_OPEN,
    })
    logger.info("opened sum-check session %s (l=%d)", session_id, poly.l)
    return jsonify({"session": session_id, "num_vars": poly.l}), 201


@sumcheck_bp.route("/sessions/<session_id>", methods=["GET"])
def get_session(session_id):
    """세션 상태를 조회한다."""
    doc = db_get(_session_key(session_id))
    if doc is None:
        return jsonify({"error": f"세션이 없습니다: {session_id}"}), 404
    return jsonify(_session_view(session_id, doc))


@sumcheck_bp.route("/sessions/<session_id>", methods=["DELETE"])
def delete_session(session_id):
    """세션을 삭제한다."""
    key = _session_key(session_id)
    with _session_lock(session_id):
        if db_get(key) is None:
            _drop_session_lock(session_id)
            return jsonify({"error": f"세션이 없습니다: {session_id}"}), 404
        db_remove(key)
    _drop_session_lock(session_id)
    logger.info("deleted sum-check session %s", session_id)
    return "", 204


@sumcheck_bp.route("/sessions/<session_id>/rounds", methods=["POST"])
def submit_round(session_id):
    """Prover의 라운드 메시지 g_i 를 검사하고 챌린지 r_i 를 돌려준다.

    같은 세션에 대한 요청은 잠금으로 직렬화한다. 같은 라운드를 두 번
    보내면 두 번째 요청은 순서 위반(400)이 되어 새 챌린지를 받지 못한다.
    """
    body = _json_body()
    round_num = body.get("round")
    if not isinstance(round_num, int) or isinstance(round_num, bool):
        raise ConstructionError(f"round는 정수여야 합니다: {round_num!r}")

    key = _session_key(session_id)
    with _session_lock(session_id):
        doc = db_get(key)
        if doc is None:
            _drop_session_lock(session_id)
            return jsonify({"error": f"세션이 없습니다: {session_id}"}), 404
        if doc["status"] != STATUS_OPEN:
            return jsonify({"error": f"이미 종료된 세션입니다 ({doc['status']})"}), 409

        verifier, field = _restore_verifier(doc)
        gi = deserialize_poly(body.get("coeffs"), field)
        accepted = verifier.verify(round_num, gi)

        if not accepted:
            doc["status"] = STATUS_REJECTED
        elif verifier.current_round() == verifier.l:
            doc["status"] = STATUS_ACCEPTED
        doc["verifier"] = serialize_verifier(verifier)
        db_set(key, doc)

    challenge = None
    if verifier.current_round() >= round_num:
        challenge = verifier.challenge(round_num)
        logger.debug("session %s round %d: g=%s r=%s",
                     session_id, round_num, serialize_poly(gi), fr_short(challenge))

    return jsonify({
        "accepted": accepted,
        "round": round_num,
        "challenge": None if challenge is None else serialize_fr(challenge),
        "finished": doc["status"] != STATUS_OPEN,
        "status": doc["status"],
        "reason": None if accepted else verifier.rejection.reason.value,
    })
