"""
services/accounts.py

클럽 소속 선수 / 스태프 계정 생성 및 관리 비즈니스 로직.

주요 기능:
- 선수 계정 생성 (자격 증명 생성 -> users + players 저장)
- 스태프 계정 생성 (자격 증명 생성 -> users + club_staff + staff_permissions 저장)
- 스태프 권한 수정 / 활성 상태 변경
- 선수 / 스태프 삭제
- 클럽 범위 안에서의 선수 / 스태프 조회

설계 원칙:
- HTTP / FastAPI 의존성 없음
- 트랜잭션 제어(commit)는 라우터에서 수행
- 순서 보장: 자격 증명 생성 -> DB 저장 -> (라우터에서) 자격 증명 응답
  저장이 실패하면 자격 증명은 절대 응답으로 나가지 않음
- 같은 요청 ID(Idempotency-Key)로 두 번 생성하면 DuplicateRequestError
  (중복 요청에는 자격 증명을 다시 보여주지 않음)

관련 파일:
- app.services.credentials       : CredentialGenerator
- app.routers.players / staff    : 계정 관리 API

"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.permissions import PERMISSION_KEYS
from app.core.security import get_password_hash
from app.models.club import Club
from app.models.player import Player
from app.models.staff import ClubStaff, StaffPermissions
from app.models.user import User, Role
from app.services.credential_store import CredentialPersistenceError
from app.services.credentials import Credential, CredentialGenerator


class DuplicateRequestError(Exception):
    pass


def _email_taken(db: Session, email: str) -> bool:
    return db.scalar(select(User.id).where(User.email == email)) is not None


def get_club_player(db: Session, club_id: uuid.UUID, player_id: uuid.UUID) -> Player | None:
    return db.scalar(select(Player).where(Player.id == player_id, Player.club_id == club_id))


def get_club_staff(db: Session, club_id: uuid.UUID, staff_id: uuid.UUID) -> ClubStaff | None:
    return db.scalar(select(ClubStaff).where(ClubStaff.id == staff_id, ClubStaff.club_id == club_id))


"""
선수 계정 생성

- 같은 이메일 계정이 있으면 ValueError
- 자격 증명을 먼저 생성한 뒤 계정 / 선수 레코드 저장
- 비밀번호는 해시로만 저장, password_reset_required=True

"""
def create_player(
    db: Session,
    *,
    club: Club,
    generator: CredentialGenerator,
    first_name: str,
    last_name: str,
    email: str,
    position: str | None = None,
    jersey_number: int | None = None,
    request_id: str | None = None,
) -> tuple[Player, Credential]:
    if request_id and db.scalar(select(Player.id).where(Player.create_request_id == request_id)):
        raise DuplicateRequestError("Duplicate request")

    if _email_taken(db, email):
        raise ValueError("Email already registered")

    name = f"{first_name} {last_name}".strip()
    creds = generator.generate_player_credentials(email, name, club.club_name)

    try:
        user = User(
            email=email,
            username=creds.username,
            password_hash=get_password_hash(creds.password),
            name=name,
            role=Role.PLAYER,
            password_reset_required=True,
        )
        db.add(user)
        db.flush()

        player = Player(
            club_id=club.id,
            profile_id=user.id,
            first_name=first_name,
            last_name=last_name,
            email=email,
            position=position,
            jersey_number=jersey_number,
            create_request_id=request_id,
        )
        db.add(player)
        db.flush()
    # 고유 제약 위반(동시 요청)은 라우터에서 409 로 처리
    except IntegrityError:
        raise
    except SQLAlchemyError as e:
        raise CredentialPersistenceError("Failed to create player") from e

    return player, creds


"""
스태프 계정 생성

- 스태프 로그인 아이디는 email
- 표시용 핸들(staff_username)은 클럽 안에서 고유하게 생성
- 권한 행은 스태프와 함께 한 번에 생성

"""
def create_staff(
    db: Session,
    *,
    club: Club,
    generator: CredentialGenerator,
    staff_name: str,
    email: str,
    created_by: uuid.UUID,
    contact_number: str | None = None,
    permissions: dict[str, bool] | None = None,
    request_id: str | None = None,
) -> tuple[ClubStaff, Credential]:
    if request_id and db.scalar(select(ClubStaff.id).where(ClubStaff.create_request_id == request_id)):
        raise DuplicateRequestError("Duplicate request")

    if _email_taken(db, email):
        raise ValueError("Email already registered")

    staff_username = generator.store.generate_staff_username(staff_name, club.id)
    creds = generator.generate_staff_credentials(email, staff_name, club.club_name)

    try:
        user = User(
            email=email,
            username=email,
            password_hash=get_password_hash(creds.password),
            name=staff_name,
            role=Role.STAFF,
            password_reset_required=True,
        )
        db.add(user)
        db.flush()

        staff = ClubStaff(
            club_id=club.id,
            profile_id=user.id,
            staff_name=staff_name,
            email=email,
            contact_number=contact_number,
            staff_username=staff_username,
            is_active=True,
            created_by=created_by,
            create_request_id=request_id,
        )
        staff.permissions = StaffPermissions(
            **_clean_permissions(permissions or {}),
            updated_by=created_by,
            updated_at=datetime.now(timezone.utc),
        )
        db.add(staff)
        db.flush()
    # 고유 제약 위반(동시 요청)은 라우터에서 409 로 처리
    except IntegrityError:
        raise
    except SQLAlchemyError as e:
        raise CredentialPersistenceError("Failed to create staff member") from e

    return staff, creds


# 전달된 권한으로 전체 교체 (빠진 키는 False)
def update_staff_permissions(
    db: Session,
    staff: ClubStaff,
    permissions: dict[str, bool],
    *,
    updated_by: uuid.UUID,
) -> StaffPermissions:
    cleaned = _clean_permissions(permissions)

    row = staff.permissions
    if row is None:
        row = StaffPermissions(staff_id=staff.id)
        staff.permissions = row

    for key in PERMISSION_KEYS:
        setattr(row, key, cleaned[key])
    row.updated_by = updated_by
    row.updated_at = datetime.now(timezone.utc)
    db.flush()
    return row


def set_staff_active(db: Session, staff: ClubStaff, is_active: bool) -> ClubStaff:
    staff.is_active = is_active
    db.flush()
    return staff


# 로그인 계정(users)은 로그 / 생성자 FK 때문에 남겨 두고 클럽 소속만 제거
# 소속이 없어진 계정은 get_club_context 에서 403
def delete_staff(db: Session, staff: ClubStaff) -> None:
    db.delete(staff)
    db.flush()


def delete_player(db: Session, player: Player) -> None:
    profile = player.profile
    db.delete(player)
    db.flush()
    db.delete(profile)
    db.flush()


def _clean_permissions(permissions: dict[str, bool]) -> dict[str, bool]:
    unknown = set(permissions) - set(PERMISSION_KEYS)
    if unknown:
        raise ValueError(f"Unknown permission: {sorted(unknown)[0]}")
    return {key: bool(permissions.get(key, False)) for key in PERMISSION_KEYS}
