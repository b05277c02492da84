"""
auth.py

인증(Authentication) 및 계정 관리 API 모음.

이 파일은 클럽 가입, 로그인, 비밀번호 변경과 같이
사용자 인증 흐름 전반을 담당한다.
JWT Access Token 기반 인증 방식을 사용한다.

주요 기능:
- 클럽 소유자 가입 (users + clubs 생성)
- 로그인 (클럽/스태프는 email, 선수는 username) 및 토큰 발급
- 비밀번호 변경 (발급받은 임시 비밀번호 교체)

설계 원칙:
- Access Token은 Authorization Header로 전달
- 로그인 시 선택한 역할과 계정 역할이 다르면 거부
- 임시 비밀번호로 로그인하면 password_reset_required=True 를 함께 응답
- 비밀번호 변경 시 password_reset_required 해제

관련 파일:
- app.core.security        : 비밀번호 해시 / JWT 생성
- app.core.deps            : 인증 의존성(get_current_user)
- app.models.user          : User / Role 모델
- app.schemas.auth         : 인증 관련 요청/응답

"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy import select, or_

from app.core.deps import get_db, get_current_user
from app.core.security import get_password_hash, verify_password, create_access_token
from app.models.club import Club
from app.models.user import User, Role
from app.schemas.auth import RegisterClubRequest, LoginRequest, ChangePasswordRequest, TokenResponse
from app.services.passwords import validate_password_strength

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

"""
클럽 가입 API

- 이메일 기준으로 클럽 소유자(CLUB) 계정과 클럽을 함께 생성
- 같은 이메일 계정이 있으면 가입 불가

"""

@router.post("/register-club")
def register_club(data: RegisterClubRequest, db: Session = Depends(get_db)):
    exists = db.scalar(select(User).where(User.email == data.email))
    if exists:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )

    try:
        user = User(
            email=data.email,
            password_hash=get_password_hash(data.password),
            name=data.name,
            role=Role.CLUB,
        )
        db.add(user)
        db.flush()

        club = Club(
            owner_id=user.id,
            club_name=data.club_name,
            league=data.league,
            division=data.division,
        )
        db.add(club)
        db.commit()
        db.refresh(user)
        db.refresh(club)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Email already registered")
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    logger.info("Club registered: %s", club.id)
    return {
        "data": {
            "id": str(user.id),
            "email": user.email,
            "club_id": str(club.id),
            "club_name": club.club_name,
        }
    }


"""
로그인 API

- email 또는 username 과 비밀번호로 인증
- 요청한 역할(role)과 계정 역할이 다르면 403
- Access Token 과 password_reset_required 를 응답 바디로 반환

"""

@router.post("/login")
def login(data: LoginRequest, db: Session = Depends(get_db)):

    user = db.scalar(select(User).where(or_(User.email == data.login, User.username == data.login)))

    if not user or not verify_password(data.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    if user.role != data.role:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"This account is registered as a {user.role.value}",
        )

    access = create_access_token(subject=str(user.id), role=user.role.value)

    return {
        "data": TokenResponse(
            access_token=access,
            password_reset_required=user.password_reset_required,
        )
    }


"""
비밀번호 변경 API

- 현재 비밀번호 확인 필수
- 새 비밀번호는 강도 규칙(8자 이상, 대/소문자, 숫자)을 만족해야 함
- 새 비밀번호는 기존 비밀번호와 달라야 함
- 변경 시 password_reset_required 해제

"""

@router.patch("/password")
def change_password(
    data: ChangePasswordRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    # 1) 현재 비밀번호 확인
    if not verify_password(data.current_password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid password")

    # 2) 새 비밀번호 확인
    if data.new_password != data.confirm_password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Passwords do not match")

    errors = validate_password_strength(data.new_password)
    if errors:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=errors[0])

    # 3) 새 비밀번호가 기존과 같은지 방지
    if verify_password(data.new_password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="New password must be different")

    try:
        user.password_hash = get_password_hash(data.new_password)
        user.password_reset_required = False
        db.commit()
        db.refresh(user)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    return {
        "data": {
            "status": "password_updated",
        }
    }
