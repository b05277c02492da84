import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.schemas.credentials import CredentialResponse


class StaffPermissionsPayload(BaseModel):
    """스태프 권한 전체 집합. 빠진 키는 False (권한 없음)."""

    model_config = ConfigDict(extra="forbid", from_attributes=True)

    can_view_dashboard: bool = False
    can_manage_players: bool = False
    can_upload_matches: bool = False
    can_edit_club_profile: bool = False
    can_manage_staff: bool = False
    can_use_ai_scouting: bool = False
    can_view_messages: bool = False
    can_manage_transfers: bool = False
    can_view_club_history: bool = False
    can_modify_settings: bool = False
    can_explore_talent: bool = False
    can_view_analytics: bool = False
    can_export_data: bool = False
    can_manage_subscriptions: bool = False


class StaffCreateRequest(BaseModel):
    staff_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    contact_number: str | None = Field(default=None, max_length=40)
    permissions: StaffPermissionsPayload = Field(default_factory=StaffPermissionsPayload)


class StaffStatusRequest(BaseModel):
    is_active: bool


class StaffResponse(BaseModel):
    id: uuid.UUID
    club_id: uuid.UUID
    staff_name: str
    email: str
    contact_number: str | None
    staff_username: str
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class StaffCreatedResponse(BaseModel):
    staff: StaffResponse
    permissions: StaffPermissionsPayload
    credentials: CredentialResponse
