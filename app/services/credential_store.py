"""
services/credential_store.py

계정 자격 증명(credential) 저장소 서비스.

원래 원격 프로시저(RPC)로 호출되던 아래 기능들을
SQLAlchemy 세션 위의 함수로 제공한다.

주요 기능:
- generate_player_username  : 이메일 기반 선수 로그인 아이디 생성
- generate_staff_username   : 스태프 표시용 핸들 생성 (클럽 내 고유)
- generate_staff_password   : 무작위 스태프 비밀번호 생성
- reset_player_password     : 선수 계정 비밀번호 재설정 (해시 저장)
- reset_staff_password      : 스태프 계정 비밀번호 재설정 (해시 저장)
- get_player_username       : 선수 로그인 아이디 재조회

설계 원칙:
- HTTP / FastAPI 의존성 없음
- 트랜잭션 제어(commit / rollback)는 호출 측에서 수행
- DB 오류는 사람이 읽을 수 있는 메시지를 가진 타입 있는 예외로 변환
- 평문 비밀번호는 저장하지 않고 bcrypt 해시만 저장

관련 파일:
- app.services.credentials     : CredentialGenerator
- app.models.player / staff    : 대상 테이블

"""

import re
import uuid
import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.security import get_password_hash
from app.models.player import Player
from app.models.staff import ClubStaff
from app.models.user import User
from app.services.passwords import email_local_part, generate_secure_password

logger = logging.getLogger(__name__)

_USERNAME_STRIP_RE = re.compile(r"[^a-z0-9._-]")


class CredentialError(Exception):
    """계정 자격 증명 처리 중 발생한 오류의 공통 부모."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class CredentialGenerationError(CredentialError):
    pass


class CredentialPersistenceError(CredentialError):
    pass


class AccountNotFoundError(CredentialError):
    pass


def _slug(value: str) -> str:
    return _USERNAME_STRIP_RE.sub("", value.strip().lower())


def _next_free(base: str, taken: set[str]) -> str:
    if base not in taken:
        return base
    n = 1
    while f"{base}{n}" in taken:
        n += 1
    return f"{base}{n}"


class CredentialStore:
    def __init__(self, db: Session):
        self.db = db

    """
    선수 로그인 아이디 생성

    - 이메일 앞부분을 소문자로 바꾸고 허용 문자(a-z, 0-9, . _ -)만 남김
    - 이미 사용 중이면 가장 작은 숫자를 뒤에 붙임 (jane.doe -> jane.doe1)
    - 앞부분이 비어 있으면 None 반환 (호출 측에서 대체값 사용)

    """
    def generate_player_username(self, email: str) -> str | None:
        base = _slug(email_local_part(email))
        if not base:
            return None

        try:
            taken = set(
                self.db.scalars(
                    select(User.username).where(User.username.like(f"{base}%"))
                ).all()
            )
        except SQLAlchemyError as e:
            logger.error("generate_player_username failed: %s", e)
            raise CredentialGenerationError("Failed to generate username") from e

        return _next_free(base, taken)

    """
    스태프 표시용 핸들 생성

    - "이름 성" -> "이름.성" 형태
    - 같은 클럽 안에서만 고유하면 됨

    """
    def generate_staff_username(self, staff_name: str, club_id: uuid.UUID) -> str:
        parts = [_slug(p) for p in staff_name.split()]
        base = ".".join(p for p in parts if p)
        if not base:
            raise CredentialGenerationError("Staff name is required to generate a username")

        try:
            taken = set(
                self.db.scalars(
                    select(ClubStaff.staff_username).where(
                        ClubStaff.club_id == club_id,
                        ClubStaff.staff_username.like(f"{base}%"),
                    )
                ).all()
            )
        except SQLAlchemyError as e:
            logger.error("generate_staff_username failed: %s", e)
            raise CredentialGenerationError("Failed to generate staff username") from e

        return _next_free(base, taken)

    def generate_staff_password(self) -> str:
        return generate_secure_password(settings.SECURE_PASSWORD_LENGTH)

    def get_player_username(self, player_id: uuid.UUID) -> str | None:
        try:
            player = self.db.get(Player, player_id)
        except SQLAlchemyError as e:
            raise CredentialPersistenceError("Failed to load player") from e
        if not player:
            return None
        return player.profile.username

    """
    선수 비밀번호 재설정

    - 새 비밀번호의 해시를 계정에 저장
    - password_reset_required=True 로 다음 로그인 시 변경 요구
    - 대상 선수가 없으면 AccountNotFoundError

    """
    def reset_player_password(self, player_id: uuid.UUID, new_password: str) -> None:
        try:
            player = self.db.get(Player, player_id)
            if not player:
                raise AccountNotFoundError("Player not found")
            self._store_password(player.profile, new_password)
        except SQLAlchemyError as e:
            logger.error("reset_player_password failed: %s", e)
            raise CredentialPersistenceError("Failed to reset password") from e

    def reset_staff_password(self, staff_id: uuid.UUID, new_password: str) -> None:
        try:
            staff = self.db.get(ClubStaff, staff_id)
            if not staff:
                raise AccountNotFoundError("Staff member not found")
            self._store_password(staff.profile, new_password)
        except SQLAlchemyError as e:
            logger.error("reset_staff_password failed: %s", e)
            raise CredentialPersistenceError("Failed to reset password") from e

    def _store_password(self, user: User, new_password: str) -> None:
        user.password_hash = get_password_hash(new_password)
        user.password_reset_required = True
        self.db.flush()
