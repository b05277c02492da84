import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, String, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.user import User


class Player(Base):
    """클럽 소속 선수 레코드.

    - profile_id: 로그인 계정(users). username / 비밀번호 해시는 계정 쪽에 있음
    - create_request_id: 클라이언트 요청 ID (중복 생성 방지용, 없으면 NULL)
    """

    __tablename__ = "players"
    __table_args__ = (
        Index("ix_players_club_id", "club_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    club_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("clubs.id"), nullable=False)
    profile_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id"), unique=True, nullable=False)

    first_name: Mapped[str] = mapped_column(String(60), nullable=False)
    last_name: Mapped[str] = mapped_column(String(60), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)

    position: Mapped[str | None] = mapped_column(String(30), nullable=True)
    jersey_number: Mapped[int | None] = mapped_column(Integer, nullable=True)
    status: Mapped[str] = mapped_column(String(20), default="active", nullable=False)  # active/injured/transferred/retired

    create_request_id: Mapped[str | None] = mapped_column(String(64), unique=True, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )

    profile: Mapped[User] = relationship(User, lazy="joined")

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
