"""
services/passwords.py

계정 발급용 비밀번호 생성 / 검증 유틸리티.

주요 기능:
- 이메일 기반 임시 비밀번호 생성 (이메일 앞부분 + 4자리 숫자)
- 무작위 보안 비밀번호 생성
- 비밀번호 강도 검증
- 설정(PASSWORD_POLICY)에 따른 비밀번호 정책 선택

NOTE:
- 이메일 기반 비밀번호는 계정 이메일만 알면 쉽게 추측할 수 있다.
  편의용 기본값일 뿐 보안 장치가 아니므로,
  운영 환경에서는 PASSWORD_POLICY=secure 사용을 권장한다.
- 어떤 정책이든 생성된 평문은 Credential 에만 잠깐 존재하고
  DB에는 bcrypt 해시만 저장된다.

관련 파일:
- app.services.credentials       : CredentialGenerator 가 정책을 주입받아 사용
- app.services.credential_store  : generate_staff_password

"""

import secrets
import string
from typing import Protocol

from app.core.config import settings


_UPPERCASE = "ABCDEFGHJKMNPQRSTUVWXYZ"
_LOWERCASE = "abcdefghjkmnpqrstuvwxyz"
_NUMBERS = "23456789"
_SPECIAL = "!@#$%^&*"

_sysrand = secrets.SystemRandom()


def email_local_part(email: str) -> str:
    return email.split("@", 1)[0]


"""
이메일 기반 임시 비밀번호 생성

- 형식: 이메일 앞부분 + 1000~9999 사이 숫자
- 예: john@example.com -> john4821

"""

def derive_password_from_email(email: str) -> str:
    prefix = email_local_part(email)
    number = 1000 + secrets.randbelow(9000)
    return f"{prefix}{number}"


"""
무작위 보안 비밀번호 생성

- 대문자 / 소문자 / 숫자 / 특수문자를 각각 최소 1자 포함
- 헷갈리기 쉬운 문자(0, O, 1, l, I 등)는 제외
- 마지막에 전체를 섞어서 고정 위치 패턴을 없앰

"""

def generate_secure_password(length: int = 12) -> str:
    if length < 4:
        raise ValueError("length must be at least 4")

    all_chars = _UPPERCASE + _LOWERCASE + _NUMBERS + _SPECIAL
    chars = [
        secrets.choice(_UPPERCASE),
        secrets.choice(_LOWERCASE),
        secrets.choice(_NUMBERS),
        secrets.choice(_SPECIAL),
    ]
    chars += [secrets.choice(all_chars) for _ in range(length - len(chars))]
    _sysrand.shuffle(chars)
    return "".join(chars)


"""
비밀번호 강도 검증

- 문제가 없으면 빈 리스트 반환
- 문제가 있으면 사람이 읽을 수 있는 오류 메시지 목록 반환

"""

def validate_password_strength(password: str) -> list[str]:
    errors = []
    if len(password) < 8:
        errors.append("Password must be at least 8 characters long")
    if not any(c in string.ascii_uppercase for c in password):
        errors.append("Password must contain at least one uppercase letter")
    if not any(c in string.ascii_lowercase for c in password):
        errors.append("Password must contain at least one lowercase letter")
    if not any(c in string.digits for c in password):
        errors.append("Password must contain at least one number")
    return errors


class PasswordPolicy(Protocol):
    name: str

    def generate(self, email: str) -> str:
        ...


class EmailPrefixPasswordPolicy:
    """이메일 앞부분 + 4자리 숫자. 추측 가능하므로 보안용이 아님."""

    name = "email_prefix"

    def generate(self, email: str) -> str:
        return derive_password_from_email(email)


class SecurePasswordPolicy:
    name = "secure"

    def __init__(self, length: int = 12):
        self.length = length

    def generate(self, email: str) -> str:
        return generate_secure_password(self.length)


def password_policy_from_settings() -> PasswordPolicy:
    if settings.PASSWORD_POLICY == "secure":
        return SecurePasswordPolicy(settings.SECURE_PASSWORD_LENGTH)
    return EmailPrefixPasswordPolicy()
