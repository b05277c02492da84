from pydantic import BaseModel, EmailStr, Field

from app.models.user import Role


class RegisterClubRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=64)
    name: str = Field(min_length=1, max_length=100)
    club_name: str = Field(min_length=1, max_length=120)
    league: str | None = None
    division: str | None = None

class LoginRequest(BaseModel):
    # 클럽 / 스태프는 email, 선수는 username 으로 로그인
    login: str = Field(min_length=1)
    password: str
    role: Role = Role.CLUB

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    password_reset_required: bool = False

class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=64)
    confirm_password: str = Field(..., min_length=8, max_length=64)
