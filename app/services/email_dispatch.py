"""
services/email_dispatch.py

자격 증명 이메일 발송 함수 호출 클라이언트.

발급된 Credential 을 이메일 발송 함수(send-credentials-email)에
한 번의 인증된 POST 요청으로 전달한다.

요청:
- Authorization: Bearer <호출자 access token>
- body: {to, recipientName, username, password, userType, clubName?}

응답:
- 2xx     : JSON 확인 응답 반환
- 그 외   : {error: string} 을 읽어 EmailDispatchError 로 전달

관련 파일:
- app.services.credential_presenter : 발송 버튼 동작
- app.routers.functions             : 발송 함수 서버 측 구현

"""

import logging

import httpx

from app.core.config import settings
from app.services.credentials import Credential

logger = logging.getLogger(__name__)


class EmailDispatchError(Exception):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class EmailDispatcher:
    def __init__(
        self,
        url: str | None = None,
        *,
        client: httpx.Client | None = None,
        timeout: float | None = None,
    ):
        self.url = url or settings.CREDENTIALS_EMAIL_URL
        self.timeout = timeout if timeout is not None else settings.CREDENTIALS_EMAIL_TIMEOUT_SECONDS
        self._client = client

    def send(self, credential: Credential, access_token: str | None) -> dict:
        if not access_token:
            raise EmailDispatchError("Not authenticated")

        headers = {
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json",
        }

        try:
            if self._client is not None:
                response = self._client.post(
                    self.url, json=credential.as_email_payload(), headers=headers, timeout=self.timeout
                )
            else:
                with httpx.Client(timeout=self.timeout) as client:
                    response = client.post(self.url, json=credential.as_email_payload(), headers=headers)
        except httpx.HTTPError as e:
            logger.error("Error sending credentials email: %s", e)
            raise EmailDispatchError("Failed to send email") from e

        if not response.is_success:
            raise EmailDispatchError(_error_message(response), status_code=response.status_code)

        try:
            result = response.json()
        except ValueError:
            result = {}
        logger.info("Credentials email sent to %s", credential.email)
        return result


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return "Failed to send email"
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return "Failed to send email"
