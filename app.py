"""
Sum-Check Flask 애플리케이션
=============================

create_app()으로 앱을 만들고 Sum-Check 블루프린트를 등록한다.

**설정 우선순위** (뒤가 앞을 덮어씀):
  1. DEFAULT_CONFIG
  2. FLASK_ 접두사 환경 변수 (예: FLASK_SUMCHECK_DB_PATH=/tmp/db.json)
  3. create_app(config=...)에 넘긴 딕셔너리

실행:
    $ python app.py
"""

import logging

from flask import Flask
from tinydb import TinyDB
from tinydb.storages import MemoryStorage

from sumcheck.field import CURVE_ORDER
from sumcheck_routes import sumcheck_bp, init_sumcheck_bp


DEFAULT_CONFIG = {
    "SECRET_KEY": "key",
    "SUMCHECK_DB_PATH": "db.json",          # Storage DB
    "SUMCHECK_DB_IN_MEMORY": False,         # True면 MemoryStorage
    "SUMCHECK_MAX_VARS": 20,                # 테이블 크기 2^20 제한
    "SUMCHECK_DEFAULT_MODULUS": CURVE_ORDER,
    "SUMCHECK_LOG_LEVEL": "INFO",
}


def create_app(config=None):
    """Flask 앱을 생성한다.

    Args:
        config: 설정 덮어쓰기 딕셔너리 (테스트용 등)

    Returns:
        Flask
    """
    app = Flask(__name__)
    app.config.from_mapping(DEFAULT_CONFIG)
    app.config.from_prefixed_env()
    if config:
        app.config.from_mapping(config)

    logging.basicConfig(level=app.config["SUMCHECK_LOG_LEVEL"])

    if app.config["SUMCHECK_DB_IN_MEMORY"]:
        db = TinyDB(storage=MemoryStorage)  # Memory DB
    else:
        db = TinyDB(app.config["SUMCHECK_DB_PATH"])
    app.extensions["sumcheck_db"] = db

    init_sumcheck_bp(db.table("sumcheck"))
    app.register_blueprint(sumcheck_bp)
    return app


if __name__ == "__main__":
    create_app().run()
