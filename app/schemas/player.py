import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, EmailStr, Field

from app.schemas.credentials import CredentialResponse


PlayerStatus = Literal["active", "injured", "transferred", "retired"]


class PlayerCreateRequest(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=60)
    last_name: str = Field(..., min_length=1, max_length=60)
    email: EmailStr
    position: str | None = Field(default=None, max_length=30)
    jersey_number: int | None = Field(default=None, ge=0, le=99)


class PlayerResponse(BaseModel):
    id: uuid.UUID
    club_id: uuid.UUID
    first_name: str
    last_name: str
    email: str
    username: str | None
    position: str | None
    jersey_number: int | None
    status: PlayerStatus | str
    password_reset_required: bool
    created_at: datetime

    @classmethod
    def from_player(cls, player) -> "PlayerResponse":
        return cls(
            id=player.id,
            club_id=player.club_id,
            first_name=player.first_name,
            last_name=player.last_name,
            email=player.email,
            username=player.profile.username,
            position=player.position,
            jersey_number=player.jersey_number,
            status=player.status,
            password_reset_required=player.profile.password_reset_required,
            created_at=player.created_at,
        )


class PlayerCreatedResponse(BaseModel):
    player: PlayerResponse
    credentials: CredentialResponse
