"""
me.py

로그인한 사용자 본인 정보 / 권한 API 모음.

주요 기능:
- 내 프로필 조회
- 내 권한 집합 조회 (클럽 소유자 / 스태프 / 그 외)
- 권한에 따라 표시할 사이드바 메뉴 계산

설계 원칙:
- 권한 계산은 PermissionResolver 에 위임 (요청마다 한 번 계산)
- 메뉴 표시 결정은 permission_gate 로 수행
- 메뉴 노출은 표시용일 뿐이며 실제 접근 제어는 각 API 의 require_permission 이 담당

관련 파일:
- app.services.permissions      : PermissionResolver
- app.services.permission_gate  : permission_gate / DisabledContent

"""

from fastapi import APIRouter, Depends, Query

from app.core.deps import get_current_user, get_permission_resolver
from app.core.permissions import (
    PERM_VIEW_DASHBOARD,
    PERM_MANAGE_PLAYERS,
    PERM_UPLOAD_MATCHES,
    PERM_MANAGE_TRANSFERS,
    PERM_EXPLORE_TALENT,
    PERM_USE_AI_SCOUTING,
    PERM_EDIT_CLUB_PROFILE,
    PERM_VIEW_CLUB_HISTORY,
    PERM_MANAGE_STAFF,
    PERM_VIEW_MESSAGES,
)
from app.models.user import User
from app.services.permissions import PermissionResolver
from app.services.permission_gate import permission_gate, DisabledContent

router = APIRouter(prefix="/me", tags=["me"])


# 사이드바 메뉴 (이름, 경로, 필요 권한)
SIDEBAR_ITEMS = [
    ("Dashboard", "/club/dashboard", PERM_VIEW_DASHBOARD),
    ("Player Management", "/club/players", PERM_MANAGE_PLAYERS),
    ("Matches Upload", "/club/matches", PERM_UPLOAD_MATCHES),
    ("Player Transfers", "/club/transfers", PERM_MANAGE_TRANSFERS),
    ("Explore Talent", "/club/explore", PERM_EXPLORE_TALENT),
    ("AI Scouting", "/club/ai-scouting", PERM_USE_AI_SCOUTING),
    ("Club Profile", "/club/profile", PERM_EDIT_CLUB_PROFILE),
    ("Club History", "/club/history", PERM_VIEW_CLUB_HISTORY),
    ("Staff Management", "/club/staff", PERM_MANAGE_STAFF),
    ("Messages", "/club/messages", PERM_VIEW_MESSAGES),
]


@router.get("")
def me(user: User = Depends(get_current_user)):
    return {
        "data": {
            "id": str(user.id),
            "email": user.email,
            "username": user.username,
            "name": user.name,
            "role": user.role.value,
            "password_reset_required": user.password_reset_required,
        }
    }


"""
내 권한 조회 API

- permissions 가 None 이면 권한 조회 실패 (모든 권한 없음으로 취급)
- is_staff 는 스태프 권한 행이 실제로 있을 때만 True

"""
@router.get("/permissions")
def my_permissions(resolver: PermissionResolver = Depends(get_permission_resolver)):
    return {
        "data": {
            "permissions": resolver.permissions,
            "is_staff": resolver.is_staff,
            "club_id": str(resolver.staff_row.club_id) if resolver.staff_row else None,
        }
    }


"""
사이드바 메뉴 API

- 권한 있는 메뉴만 반환
- show_disabled=true 이면 권한 없는 메뉴도 disabled + "No Permission" 라벨로 포함

"""
@router.get("/navigation")
def my_navigation(
    show_disabled: bool = Query(False),
    resolver: PermissionResolver = Depends(get_permission_resolver),
):
    items = []
    for label, path, permission in SIDEBAR_ITEMS:
        item = {"label": label, "path": path, "permission": permission}
        shown = permission_gate(resolver, permission, item, show_disabled=show_disabled)

        if shown is None:
            continue
        if isinstance(shown, DisabledContent):
            items.append({**shown.content, "disabled": True, "badge": shown.label})
        else:
            items.append({**shown, "disabled": False, "badge": None})

    return {"data": items}
