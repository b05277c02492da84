"""
user.py

사용자(User) 및 역할(Role) 모델 정의 파일.

이 파일은 플랫폼에 로그인하는 모든 주체(클럽 소유자, 스카우트,
선수, 스태프)의 인증 정보를 관리한다.

선수 / 스태프 계정은 클럽이 생성하며,
생성 / 재설정 시 발급된 임시 비밀번호는 해시로만 저장하고
password_reset_required 로 첫 로그인 후 변경을 요구한다.

"""

import uuid
import datetime
from enum import Enum

from sqlalchemy import String, Boolean, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base



"""
사용자 역할(Role) 정의

- CLUB    : 클럽 소유자 (모든 권한 보유)
- SCOUT   : 스카우트
- PLAYER  : 클럽이 생성한 선수 계정
- STAFF   : 클럽이 생성한 스태프 계정 (staff_permissions 로 권한 제한)

"""

class Role(str, Enum):
    CLUB = "CLUB"
    SCOUT = "SCOUT"
    PLAYER = "PLAYER"
    STAFF = "STAFF"



"""
사용자(User) 모델

- email 은 고유 식별자 (스태프는 email 이 곧 로그인 아이디)
- username 은 선수 로그인 아이디 (이메일 앞부분 기반으로 생성)
- password_hash 에는 bcrypt 해시만 저장
- password_reset_required 가 True 면 비밀번호 변경 필요

"""

class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    username: Mapped[str | None] = mapped_column(String(255), unique=True, index=True, nullable=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    role: Mapped[Role] = mapped_column(default=Role.CLUB)

    password_reset_required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.datetime.now(datetime.timezone.utc),
        nullable=False,
    )
