from pydantic import BaseModel, ConfigDict, Field

from app.services.credentials import Credential


class CredentialResponse(BaseModel):
    """한 번만 보여주는 자격 증명. 응답 이후 서버에는 평문이 남지 않음."""

    email: str
    username: str
    password: str
    recipient_name: str
    user_type: str
    club_name: str | None = None

    @classmethod
    def from_credential(cls, creds: Credential) -> "CredentialResponse":
        return cls(**creds.as_dict())


class CredentialsEmailRequest(BaseModel):
    """send-credentials-email 요청 본문 (camelCase).

    필수 항목 검증은 엔드포인트에서 직접 수행해 {"error": ...} 형태로 응답한다.
    """

    model_config = ConfigDict(populate_by_name=True)

    to: str | None = None
    recipient_name: str | None = Field(default=None, alias="recipientName")
    username: str | None = None
    password: str | None = None
    user_type: str | None = Field(default=None, alias="userType")
    club_name: str | None = Field(default=None, alias="clubName")
