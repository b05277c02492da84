"""
services/permissions.py

현재 로그인한 사용자(Actor)의 실제 권한 집합을 계산하는 서비스.

계산 규칙:
1. Actor 가 없으면 permissions = None, is_staff = False
2. CLUB 역할이면 모든 권한 True, is_staff = False (권한 행 조회 없음)
3. 그 외에는 staff_with_permissions 에서 profile_id 로 조회
   - 행이 있으면 그 행의 권한 그대로, is_staff = True
     (비활성 스태프는 모든 권한 False)
   - 행이 없으면 MissingRowPolicy 에 따라 전체 허용 또는 전체 거부, is_staff = False
4. 조회 중 오류가 나면 permissions = None 으로 두고 로그만 남김 (예외 전달 없음)

has_permission(key) 는 로딩 중이거나 permissions 가 None 이면 항상 False,
알 수 없는 키도 False 를 반환한다.

설계 원칙:
- Actor 와 조회 소스(source)는 생성자로 주입 (전역 인증 상태에 의존하지 않음)
- 한 번 계산한 결과는 resolver 객체에만 보관, 다른 곳에서 권한이 바뀌면
  refresh() 를 명시적으로 호출해야 반영됨

관련 파일:
- app.core.permissions          : 권한 키 카탈로그
- app.core.deps                 : require_permission 의존성
- app.services.permission_gate  : 화면 표시 결정

"""

import uuid
import logging
from dataclasses import dataclass
from enum import Enum

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.permissions import full_permissions, no_permissions, PERMISSION_KEYS
from app.models.staff import ClubStaff, StaffPermissions
from app.models.user import Role, User

logger = logging.getLogger(__name__)


class MissingRowPolicy(str, Enum):
    DENY_ALL = "deny_all"
    GRANT_ALL = "grant_all"


def missing_row_policy_from_settings() -> MissingRowPolicy:
    return MissingRowPolicy(settings.MISSING_STAFF_ROW_POLICY)


@dataclass(frozen=True)
class Actor:
    id: uuid.UUID
    role: Role

    @classmethod
    def from_user(cls, user: User) -> "Actor":
        return cls(id=user.id, role=user.role)


@dataclass(frozen=True)
class StaffPermissionRow:
    staff_id: uuid.UUID
    club_id: uuid.UUID
    profile_id: uuid.UUID
    is_active: bool
    permissions: dict[str, bool]


class SqlStaffPermissionSource:
    """club_staff + staff_permissions 조인 (staff_with_permissions)."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_profile(self, profile_id: uuid.UUID) -> StaffPermissionRow | None:
        row = self.db.execute(
            select(ClubStaff, StaffPermissions)
            .join(StaffPermissions, StaffPermissions.staff_id == ClubStaff.id)
            .where(ClubStaff.profile_id == profile_id)
        ).first()
        if row is None:
            return None

        staff, perms = row
        return StaffPermissionRow(
            staff_id=staff.id,
            club_id=staff.club_id,
            profile_id=staff.profile_id,
            is_active=staff.is_active,
            permissions=perms.as_dict(),
        )


class PermissionResolver:
    def __init__(self, actor: Actor | None, source, on_missing_row: MissingRowPolicy):
        self.actor = actor
        self.source = source
        self.on_missing_row = on_missing_row

        self.permissions: dict[str, bool] | None = None
        self.loading = True
        self.is_staff = False
        self.staff_row: StaffPermissionRow | None = None

    def load(self) -> "PermissionResolver":
        self.loading = True
        try:
            self._resolve()
        except Exception as e:
            logger.error("Error loading permissions: %s", e)
            self.permissions = None
            self.is_staff = False
            self.staff_row = None
        finally:
            self.loading = False
        return self

    def refresh(self) -> "PermissionResolver":
        return self.load()

    def has_permission(self, key: str) -> bool:
        if self.loading or self.permissions is None:
            return False
        return self.permissions.get(key) is True

    def _resolve(self) -> None:
        self.staff_row = None

        if self.actor is None:
            self.permissions = None
            self.is_staff = False
            return

        # 클럽 소유자는 조회 없이 모든 권한
        if self.actor.role == Role.CLUB:
            self.permissions = full_permissions()
            self.is_staff = False
            return

        row = self.source.find_by_profile(self.actor.id)
        if row is not None:
            self.staff_row = row
            self.is_staff = True
            if row.is_active:
                self.permissions = {key: row.permissions.get(key) is True for key in PERMISSION_KEYS}
            else:
                self.permissions = no_permissions()
            return

        self.is_staff = False
        if self.on_missing_row == MissingRowPolicy.GRANT_ALL:
            self.permissions = full_permissions()
        else:
            self.permissions = no_permissions()
