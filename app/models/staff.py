"""
staff.py

클럽 스태프(ClubStaff) 및 스태프 권한(StaffPermissions) 모델 정의 파일.

스태프 한 명당 권한 행은 정확히 하나이며,
스태프를 만든 클럽이 소유한다.
권한 수정은 can_manage_staff 권한을 가진 사용자만 가능하다.

설계 원칙:
- 권한은 이름 있는 boolean 컬럼으로 고정 (app.core.permissions 와 동일한 키)
- 스태프 삭제 시 권한 행도 함께 삭제 (cascade)
- 로그인 정보(아이디 = email, 비밀번호 해시)는 users 테이블에 저장

"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.permissions import PERMISSION_KEYS
from app.db.base import Base
from app.models.user import User


class ClubStaff(Base):
    __tablename__ = "club_staff"
    __table_args__ = (
        Index("ix_club_staff_club_id", "club_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    club_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("clubs.id"), nullable=False)
    profile_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id"), unique=True, nullable=False)

    staff_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_number: Mapped[str | None] = mapped_column(String(40), nullable=True)

    # generate_staff_username 으로 만든 표시용 핸들 (로그인 아이디는 email)
    staff_username: Mapped[str] = mapped_column(String(120), nullable=False)

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_by: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id"), nullable=False)
    create_request_id: Mapped[str | None] = mapped_column(String(64), unique=True, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )

    profile: Mapped[User] = relationship(User, foreign_keys=[profile_id], lazy="joined")
    permissions: Mapped["StaffPermissions"] = relationship(
        back_populates="staff",
        uselist=False,
        cascade="all, delete-orphan",
    )


"""
스태프 권한 모델

- staff_id 당 한 행 (unique)
- 기본값은 모두 False (권한 없음)
- updated_by / updated_at 으로 마지막 수정자 기록

"""

class StaffPermissions(Base):
    __tablename__ = "staff_permissions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    staff_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("club_staff.id", ondelete="CASCADE"), unique=True, nullable=False
    )

    can_view_dashboard: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    can_manage_players: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    can_upload_matches: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    can_edit_club_profile: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    can_manage_staff: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    can_use_ai_scouting: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    can_view_messages: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    can_manage_transfers: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    can_view_club_history: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    can_modify_settings: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    can_explore_talent: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    can_view_analytics: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    can_export_data: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    can_manage_subscriptions: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    updated_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id"), nullable=True)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    staff: Mapped[ClubStaff] = relationship(back_populates="permissions")

    def as_dict(self) -> dict[str, bool]:
        return {key: bool(getattr(self, key)) for key in PERMISSION_KEYS}
