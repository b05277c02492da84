"""
session.py

클럽 계정 백엔드의 데이터베이스 엔진 및 세션 팩토리.

users / clubs / players / club_staff / staff_permissions / club_action_logs
테이블에 접근하는 모든 코드는 여기서 만든 SessionLocal을 사용한다.

사용처:
- API 요청: app.core.deps.get_db 가 요청마다 세션을 열고 닫음
- 계정 생성 / 비밀번호 재설정 서비스: 라우터가 받은 세션으로 flush, 라우터가 commit
- 스크립트: scripts.create_test_accounts / scripts.reset_credentials 가 직접 세션 생성
- 테스트: tests.conftest 가 get_db 를 SQLite(StaticPool) 세션으로 교체

설계 원칙:
- 엔진은 DATABASE_URL 하나로만 생성 (Postgres 운영, SQLite 테스트)
- autoflush=False: 자격 증명 생성과 저장 순서를 서비스에서 flush로 직접 제어
- pool_pre_ping=True로 유휴 연결 오류 방지

관련 파일:
- app.core.config        : DATABASE_URL 설정
- app.core.deps          : get_db 의존성
- app.services.accounts  : 계정 생성 트랜잭션

"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.config import settings


# 끊어진 커넥션은 체크아웃 시점에 재연결
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
)

# API 요청 / 스크립트 공용 세션 팩토리
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)
