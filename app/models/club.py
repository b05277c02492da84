import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Club(Base):
    """클럽(테넌트) 레코드.

    owner_id: 클럽을 만든 CLUB 역할 사용자. 클럽 하나당 소유자 한 명.
    """

    __tablename__ = "clubs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id"), unique=True, nullable=False)
    club_name: Mapped[str] = mapped_column(String(120), nullable=False)
    league: Mapped[str | None] = mapped_column(String(120), nullable=True)
    division: Mapped[str | None] = mapped_column(String(60), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )
