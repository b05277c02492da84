import os

# Settings 는 import 시점에 로드되므로 앱 import 전에 기본값 지정
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app as fastapi_app
from app.core.config import settings
from app.core.deps import get_db
from app.db.base import Base

# 모델 import (Base.metadata에 테이블 등록)
import app.models.user  # noqa: F401
import app.models.club  # noqa: F401
import app.models.player  # noqa: F401
import app.models.staff  # noqa: F401
import app.models.club_log  # noqa: F401


TEST_DB_URL = settings.TEST_DATABASE_URL or "sqlite+pysqlite:///:memory:"

if TEST_DB_URL.startswith("sqlite"):
    # 메모리 DB는 커넥션 하나를 모든 세션이 공유해야 같은 테이블을 봄
    engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False}, poolclass=StaticPool)
else:
    engine = create_engine(TEST_DB_URL, pool_pre_ping=True)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def setup_test_db():
    """각 테스트마다 스키마 생성/삭제"""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    """테스트에서 직접 DB 조작할 때 쓰는 세션"""
    session = TestingSessionLocal()
    try:
        yield session
        session.commit()
    finally:
        session.close()


@pytest.fixture()
def db_session(db):
    return db


@pytest.fixture()
def client():
    fastapi_app.dependency_overrides[get_db] = override_get_db
    with TestClient(fastapi_app) as c:
        yield c
    fastapi_app.dependency_overrides.clear()
