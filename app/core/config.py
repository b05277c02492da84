"""
config.py

애플리케이션 전역 설정(Configuration) 관리 파일.

이 파일은 .env 환경 변수들을 Pydantic BaseSettings를 통해 로드하여
애플리케이션 전반에서 공통으로 사용하는 설정 값을 제공한다.

주요 설정 항목:
- 데이터베이스 연결 정보
- JWT 인증 관련 시크릿 및 만료 정책
- 계정 발급 시 사용할 비밀번호 정책
- 스태프 권한 행(row)이 없을 때의 처리 정책
- 자격 증명(credential) 이메일 발송 엔드포인트 / SMTP 설정
- CORS 허용 도메인 목록

설계 원칙:
- 모든 환경 변수는 이 파일을 통해서만 접근
- 로컬 / 테스트 / 운영 환경을 .env로 분리하여 관리
- 설정 값은 런타임 중 변경되지 않는 불변 객체로 취급

관련 파일:
- app.main                      : CORS / 로깅 초기화 시 설정 사용
- app.core.security             : JWT 시크릿 / 만료 설정 사용
- app.db.session                : DATABASE_URL 사용
- app.services.passwords        : PASSWORD_POLICY 사용
- app.services.permissions      : MISSING_STAFF_ROW_POLICY 사용

"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Literal

# .env 파일에 정의된 환경 변수를 로드하는 설정 클래스
# extra="ignore" 옵션으로 정의되지 않은 환경 변수는 무시
class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    DATABASE_URL: str
    TEST_DATABASE_URL: str | None = None

    SECRET_KEY: str
    ALGORITHM: str = "HS256"

    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    LOG_LEVEL: str = "INFO"

    # 계정 발급 비밀번호 정책
    # - email_prefix : 이메일 앞부분 + 4자리 숫자 (기존 동작, 보안용 아님)
    # - secure       : 대/소문자, 숫자, 특수문자를 섞은 무작위 비밀번호
    PASSWORD_POLICY: Literal["email_prefix", "secure"] = "email_prefix"
    SECURE_PASSWORD_LENGTH: int = 12

    # staff_with_permissions 에 행이 없는 STAFF 이외 사용자 처리 정책
    # - deny_all  : 아무 권한도 주지 않음
    # - grant_all : 모든 권한 부여 (기존 프론트엔드 동작)
    MISSING_STAFF_ROW_POLICY: Literal["deny_all", "grant_all"] = "deny_all"

    # 자격 증명 이메일 발송 함수 주소 (presenter가 호출)
    CREDENTIALS_EMAIL_URL: str = "http://localhost:8000/functions/v1/send-credentials-email"
    CREDENTIALS_EMAIL_TIMEOUT_SECONDS: float = 10.0

    # 복사 표시 / 발송 완료 후 자동 닫힘까지의 시간(초)
    COPY_INDICATOR_SECONDS: float = 2.0
    EMAIL_SENT_CLOSE_SECONDS: float = 2.0

    # SMTP_HOST 가 없으면 메일은 로그로만 남김
    SMTP_HOST: str | None = None
    SMTP_PORT: int = 587
    SMTP_USERNAME: str | None = None
    SMTP_PASSWORD: str | None = None
    MAIL_FROM: str = "noreply@clubhub.local"

    # CORS 허용 도메인 (프론트엔드 주소)
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

# 애플리케이션 전역에서 import하여 사용하는 Settings 인스턴스
# 실행 시 한 번만 생성됨
settings = Settings()
