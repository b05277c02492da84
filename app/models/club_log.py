"""

club_log.py

클럽 관리 행위 기록(Audit Log) 모델 정의 파일.

이 파일은 클럽 소유자 또는 스태프가 수행한 계정 관련 행위
(선수/스태프 계정 발급, 비밀번호 재설정, 권한 변경, 활성 상태 변경, 삭제)를
DB에 영구적으로 기록하기 위한 로그 테이블을 정의한다.

설계 원칙:
- 실제 데이터 변경과 로그 기록을 분리
- 로그 데이터는 수정/삭제하지 않는 것을 전제로 설계
- 발급된 비밀번호는 어떤 형태로도 기록하지 않음
- actor(행위자)와 target(대상 계정)을 명확히 구분

"""

import uuid
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base



#  클럽 관리 행위 유형 Enum

class ClubAction(str, Enum):
    CREATE_PLAYER = "CREATE_PLAYER"
    RESET_PLAYER_PASSWORD = "RESET_PLAYER_PASSWORD"
    DELETE_PLAYER = "DELETE_PLAYER"
    CREATE_STAFF = "CREATE_STAFF"
    RESET_STAFF_PASSWORD = "RESET_STAFF_PASSWORD"
    UPDATE_STAFF_PERMISSIONS = "UPDATE_STAFF_PERMISSIONS"
    SET_STAFF_STATUS = "SET_STAFF_STATUS"
    DELETE_STAFF = "DELETE_STAFF"


"""
클럽 관리 행위 로그 모델

- actor_id   : 행위를 수행한 사용자 ID (클럽 소유자 또는 스태프)
- club_id    : 행위가 일어난 클럽
- target_id  : 대상 선수 / 스태프 ID (삭제 후에도 남도록 FK 없음)
- action     : 수행된 행위 유형
- detail     : 짧은 부가 정보 (예: 변경된 권한 키 목록)
- ip         : 요청 IP 주소
- user_agent : 요청 User-Agent
- created_at : 행위 발생 시각 (UTC)

"""

class ClubActionLog(Base):
    __tablename__ = "club_action_logs"
    __table_args__ = (
        Index("ix_club_action_logs_club_id", "club_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    actor_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id"), nullable=False)
    club_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("clubs.id"), nullable=False)
    target_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)

    action: Mapped[ClubAction] = mapped_column(SAEnum(ClubAction, name="club_action"), nullable=False)
    detail: Mapped[str | None] = mapped_column(String(500), nullable=True)

    ip: Mapped[str | None] = mapped_column(String(64), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )
