"""
services/credential_presenter.py

새로 발급된 Credential 을 "딱 한 번" 보여주는 표시 상태 머신.

화면(모달) 구현과 분리된 순수 객체로,
복사 / 이메일 발송 / 닫기 동작과 그에 따른 상태 전이만 담당한다.

상태 전이:
- CLOSED  -> OPEN     : open(credential)
- OPEN    -> SENDING  : send_email()
- SENDING -> SENT     : 발송 성공 (일정 시간 후 자동으로 CLOSED, 자격 증명 삭제)
- SENDING -> OPEN     : 발송 실패 (error 표시, 자격 증명 유지 -> 재시도 / 수동 복사 가능)
- *       -> CLOSED   : close() (자격 증명 무조건 삭제)

설계 원칙:
- 닫힌 뒤에는 어떤 경로로도 이전 비밀번호를 다시 보여주지 않음
- 복사 실패는 로그만 남기고 흐름을 막지 않음
- 이메일 발송 실패는 presenter 안에서만 처리 (호출 측으로 예외 전달 없음)
- 시간(clock) / 클립보드 / 발송 클라이언트는 주입받아 테스트 가능하게 유지

관련 파일:
- app.services.credentials      : Credential / CredentialGenerator
- app.services.email_dispatch   : EmailDispatcher
- scripts.reset_credentials     : 명령줄에서 재설정 결과 표시

"""

import logging
import time
from enum import Enum
from typing import Callable, Protocol

from app.core.config import settings
from app.services.credentials import Credential
from app.services.email_dispatch import EmailDispatchError

logger = logging.getLogger(__name__)

COPY_FIELDS = ("email", "username", "password")


class PresenterState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    SENDING = "sending"
    SENT = "sent"


class Clipboard(Protocol):
    def write_text(self, text: str) -> None:
        ...


class CredentialPresenter:
    def __init__(
        self,
        dispatcher,
        *,
        clipboard: Clipboard | None = None,
        clock: Callable[[], float] = time.monotonic,
        copy_indicator_seconds: float | None = None,
        sent_close_seconds: float | None = None,
        on_close: Callable[[], None] | None = None,
    ):
        self.dispatcher = dispatcher
        self.clipboard = clipboard
        self.clock = clock
        self.copy_indicator_seconds = (
            copy_indicator_seconds if copy_indicator_seconds is not None else settings.COPY_INDICATOR_SECONDS
        )
        self.sent_close_seconds = (
            sent_close_seconds if sent_close_seconds is not None else settings.EMAIL_SENT_CLOSE_SECONDS
        )
        self.on_close = on_close

        self._state = PresenterState.CLOSED
        self._credentials: Credential | None = None
        self._copied_at: dict[str, float] = {}
        self._sent_at: float | None = None
        self.error: str | None = None

    @property
    def state(self) -> PresenterState:
        self._expire_sent()
        return self._state

    @property
    def credentials(self) -> Credential | None:
        self._expire_sent()
        return self._credentials

    @property
    def is_open(self) -> bool:
        return self.state != PresenterState.CLOSED

    def open(self, credential: Credential) -> None:
        if credential is None:
            raise ValueError("credential is required")
        self._reset()
        self._credentials = credential
        self._state = PresenterState.OPEN

    # 닫기는 항상 자격 증명을 지움 (이미 닫혀 있어도 안전)
    def close(self) -> None:
        self._reset()
        if self.on_close is not None:
            self.on_close()

    """
    필드 복사

    - email / username / password 중 하나를 클립보드로 복사
    - 성공 시 해당 필드의 "복사됨" 표시가 copy_indicator_seconds 동안 유지
    - 실패는 로그만 남기고 False 반환

    """
    def copy(self, field: str) -> bool:
        if field not in COPY_FIELDS:
            raise ValueError(f"unknown field: {field}")

        creds = self.credentials
        if creds is None:
            return False

        if self.clipboard is None:
            logger.warning("Failed to copy %s: no clipboard available", field)
            return False

        try:
            self.clipboard.write_text(getattr(creds, field))
        except Exception as e:
            logger.warning("Failed to copy %s: %s", field, e)
            return False

        self._copied_at[field] = self.clock()
        return True

    def is_copied(self, field: str) -> bool:
        copied_at = self._copied_at.get(field)
        if copied_at is None or self.credentials is None:
            return False
        return self.clock() - copied_at < self.copy_indicator_seconds

    """
    이메일로 자격 증명 공유

    - OPEN 상태에서만 동작 (SENDING 중 중복 클릭 무시)
    - 성공: SENT 로 전환, sent_close_seconds 후 자동으로 닫힘
    - 실패: OPEN 으로 돌아가고 error 에 메시지 보관, 자격 증명은 유지

    """
    def send_email(self, access_token: str | None) -> bool:
        if self.state != PresenterState.OPEN:
            return False

        self._state = PresenterState.SENDING
        self.error = None
        try:
            self.dispatcher.send(self._credentials, access_token)
        except EmailDispatchError as e:
            logger.error("Error sending email: %s", e.message)
            self.error = e.message
            self._state = PresenterState.OPEN
            return False
        except Exception as e:
            logger.error("Error sending email: %s", e)
            self.error = "Failed to send email"
            self._state = PresenterState.OPEN
            return False

        self._state = PresenterState.SENT
        self._sent_at = self.clock()
        return True

    def view(self) -> dict | None:
        """현재 표시 내용. 닫혀 있으면 None."""
        creds = self.credentials
        if creds is None:
            return None
        return {
            "state": self._state.value,
            "email": creds.email,
            "username": creds.username,
            "password": creds.password,
            "user_type": creds.user_type.value,
            "copied": {f: self.is_copied(f) for f in COPY_FIELDS},
            "error": self.error,
        }

    def _expire_sent(self) -> None:
        if self._state != PresenterState.SENT or self._sent_at is None:
            return
        if self.clock() - self._sent_at >= self.sent_close_seconds:
            self.close()

    def _reset(self) -> None:
        self._state = PresenterState.CLOSED
        self._credentials = None
        self._copied_at = {}
        self._sent_at = None
        self.error = None
