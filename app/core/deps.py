from typing import Generator
from dataclasses import dataclass
import uuid

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from sqlalchemy import select

from app.core.security import decode_access_token
from app.db.session import SessionLocal
from app.models.club import Club
from app.models.user import User, Role
from app.services.credential_store import CredentialStore
from app.services.credentials import CredentialGenerator
from app.services.passwords import password_policy_from_settings
from app.services.permissions import (
    Actor,
    PermissionResolver,
    SqlStaffPermissionSource,
    missing_row_policy_from_settings,
)

# Swagger Authorize에서 "Bearer 토큰" 입력받는 스키마
bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    cred: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    if cred is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        # User.id가 UUID라서 변환
        user_id = uuid.UUID(decode_access_token(cred.credentials))
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = db.scalar(select(User).where(User.id == user_id))
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


# 요청마다 한 번 권한을 계산 (요청 안에서는 같은 resolver 재사용)
def get_permission_resolver(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> PermissionResolver:
    resolver = PermissionResolver(
        Actor.from_user(current_user),
        SqlStaffPermissionSource(db),
        missing_row_policy_from_settings(),
    )
    return resolver.load()


@dataclass
class ClubContext:
    user: User
    club: Club
    resolver: PermissionResolver


def get_club_context(
    current_user: User = Depends(get_current_user),
    resolver: PermissionResolver = Depends(get_permission_resolver),
    db: Session = Depends(get_db),
) -> ClubContext:
    club = None
    if current_user.role == Role.CLUB:
        club = db.scalar(select(Club).where(Club.owner_id == current_user.id))
    elif resolver.staff_row is not None:
        club = db.get(Club, resolver.staff_row.club_id)

    if not club:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Club access required",
        )
    return ClubContext(user=current_user, club=club, resolver=resolver)


def require_permission(permission: str):
    def _checker(ctx: ClubContext = Depends(get_club_context)) -> ClubContext:
        if not ctx.resolver.has_permission(permission):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Missing permission: {permission}",
            )
        return ctx
    return _checker


def get_credential_generator(db: Session = Depends(get_db)) -> CredentialGenerator:
    return CredentialGenerator(CredentialStore(db), password_policy_from_settings())


@dataclass
class RequestMeta:
    ip: str | None
    user_agent: str | None


# 감사 로그(club_action_logs)에 남길 요청 정보
def get_request_meta(request: Request) -> RequestMeta:
    forwarded = request.headers.get("x-forwarded-for")
    ip = forwarded.split(",")[0].strip() if forwarded else (request.client.host if request.client else None)
    return RequestMeta(ip=ip, user_agent=request.headers.get("user-agent"))
