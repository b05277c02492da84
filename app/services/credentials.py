"""
services/credentials.py

선수 / 스태프 계정의 로그인 자격 증명(Credential) 생성 서비스.

이 파일은 계정 생성 시점과 비밀번호 재설정 시점에
{username, password} 쌍을 만들어 Credential 로 돌려주는 역할을 담당한다.

주요 기능:
- 선수 자격 증명 생성 (username: 저장소에서 생성, 없으면 이메일 앞부분)
- 스태프 자격 증명 생성 (username = email)
- 선수 / 스태프 비밀번호 재설정
- 마지막으로 생성한 자격 증명 보관 및 초기화(clear_credentials)

설계 원칙:
- Credential 은 메모리에만 존재하며 어디에도 평문으로 저장하지 않음
- 생성기는 요청(흐름) 단위로 만들고, 저장소 / 비밀번호 정책을 주입받음
- 저장소 호출이 실패하면 Credential 을 만들지 않고 타입 있는 예외를 그대로 전달
  (재설정 실패 시 기존 비밀번호가 계속 유효)

관련 파일:
- app.services.credential_store     : username / 비밀번호 저장소
- app.services.passwords            : 비밀번호 정책
- app.services.credential_presenter : 생성된 Credential 1회 표시 / 이메일 발송
- app.services.accounts             : 계정 생성 흐름에서 사용

"""

import uuid
from dataclasses import dataclass, field, asdict
from enum import Enum

from app.services.credential_store import (
    CredentialError,
    CredentialGenerationError,
    CredentialPersistenceError,
)
from app.services.passwords import PasswordPolicy, email_local_part


class UserType(str, Enum):
    PLAYER = "player"
    STAFF = "staff"


@dataclass(frozen=True)
class Credential:
    email: str
    username: str
    password: str = field(repr=False)
    recipient_name: str
    user_type: UserType
    club_name: str | None = None

    def as_email_payload(self) -> dict:
        """이메일 발송 함수가 받는 JSON 형태 (camelCase)."""
        payload = {
            "to": self.email,
            "recipientName": self.recipient_name,
            "username": self.username,
            "password": self.password,
            "userType": self.user_type.value,
        }
        if self.club_name:
            payload["clubName"] = self.club_name
        return payload

    def as_dict(self) -> dict:
        data = asdict(self)
        data["user_type"] = self.user_type.value
        return data


class CredentialGenerator:
    def __init__(self, store, password_policy: PasswordPolicy):
        self.store = store
        self.password_policy = password_policy

        self.credentials: Credential | None = None
        self.loading = False
        self.error: str | None = None

    """
    선수 자격 증명 생성

    - 저장소에서 이메일 기반 username 을 받아옴
    - 저장소가 빈 값을 주면 이메일 앞부분을 username 으로 사용
    - 비밀번호는 주입된 정책으로 생성
    - 계정 레코드 저장은 호출 측(계정 생성 흐름)에서 수행

    """
    def generate_player_credentials(self, email: str, name: str, club_name: str | None = None) -> Credential:
        self.error = None
        try:
            username = self.store.generate_player_username(email)
        except CredentialError as e:
            self.error = e.message
            raise
        except Exception as e:
            self.error = "Failed to generate username"
            raise CredentialGenerationError(self.error) from e

        creds = Credential(
            email=email,
            username=username or email_local_part(email),
            password=self.password_policy.generate(email),
            recipient_name=name,
            user_type=UserType.PLAYER,
            club_name=club_name,
        )
        self.credentials = creds
        return creds

    # 스태프는 email 이 곧 로그인 아이디
    def generate_staff_credentials(self, email: str, name: str, club_name: str | None = None) -> Credential:
        creds = Credential(
            email=email,
            username=email,
            password=self.password_policy.generate(email),
            recipient_name=name,
            user_type=UserType.STAFF,
            club_name=club_name,
        )
        self.credentials = creds
        return creds

    """
    선수 비밀번호 재설정

    - 새 비밀번호 생성 -> 저장소에 해시 저장 -> username 재조회
    - 저장소가 실패하면 Credential 없이 예외 전달, error 에 메시지 보관

    """
    def reset_player_password(
        self,
        player_id: uuid.UUID,
        email: str,
        name: str,
        club_name: str | None = None,
    ) -> Credential:
        self.loading = True
        self.error = None
        try:
            password = self.password_policy.generate(email)
            self._call_store(self.store.reset_player_password, player_id, password)
            username = self._call_store(self.store.get_player_username, player_id)

            creds = Credential(
                email=email,
                username=username or email,
                password=password,
                recipient_name=name,
                user_type=UserType.PLAYER,
                club_name=club_name,
            )
            self.credentials = creds
            return creds
        except CredentialError as e:
            self.error = e.message
            raise
        finally:
            self.loading = False

    def reset_staff_password(
        self,
        staff_id: uuid.UUID,
        email: str,
        name: str,
        club_name: str | None = None,
    ) -> Credential:
        self.loading = True
        self.error = None
        try:
            password = self.password_policy.generate(email)
            self._call_store(self.store.reset_staff_password, staff_id, password)

            creds = Credential(
                email=email,
                username=email,
                password=password,
                recipient_name=name,
                user_type=UserType.STAFF,
                club_name=club_name,
            )
            self.credentials = creds
            return creds
        except CredentialError as e:
            self.error = e.message
            raise
        finally:
            self.loading = False

    def clear_credentials(self) -> None:
        self.credentials = None
        self.error = None

    @staticmethod
    def _call_store(fn, *args):
        try:
            return fn(*args)
        except CredentialError:
            raise
        except Exception as e:
            raise CredentialPersistenceError("Failed to reset password") from e
